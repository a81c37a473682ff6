"""Task endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import get_current_user_id, get_task_service
from app.models.task import Task
from app.schemas.task import MessageResponse, TaskCreate, TaskResponse, TaskUpdate
from app.services.exceptions import TaskNotFoundError
from app.services.task_service import TaskService

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Task not found",
    )


@router.get(
    "",
    response_model=list[TaskResponse],
    summary="List tasks",
    description="List all tasks of the current user, newest first.",
)
def list_tasks(
    user_id: UUID = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service),
) -> list[Task]:
    """List the current user's tasks."""
    return task_service.list_tasks(user_id)


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
    description="""
    Create a new task owned by the current user.

    The owner is always the caller; any owner field in the body is ignored.
    """,
)
def create_task(
    data: TaskCreate,
    user_id: UUID = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service),
) -> Task:
    """Create a task."""
    return task_service.create_task(user_id, data)


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Get a task",
    description="Get one of the current user's tasks by ID.",
)
def get_task(
    task_id: str,
    user_id: UUID = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service),
) -> Task:
    """Get a task."""
    try:
        return task_service.get_task(user_id, task_id)
    except TaskNotFoundError:
        raise _not_found()


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Update a task",
    description="""
    Partially update one of the current user's tasks.

    Only fields present in the body are changed; an empty body is a no-op.
    """,
)
def update_task(
    task_id: str,
    data: Optional[TaskUpdate] = None,
    user_id: UUID = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service),
) -> Task:
    """Update a task."""
    try:
        return task_service.update_task(user_id, task_id, data or TaskUpdate())
    except TaskNotFoundError:
        raise _not_found()


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    summary="Delete a task",
    description="Delete one of the current user's tasks.",
)
def delete_task(
    task_id: str,
    user_id: UUID = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service),
) -> MessageResponse:
    """Delete a task."""
    try:
        task_service.delete_task(user_id, task_id)
    except TaskNotFoundError:
        raise _not_found()

    return MessageResponse(message="Task deleted successfully")
