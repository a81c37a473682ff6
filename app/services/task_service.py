"""Task service: owner-scoped CRUD over tasks."""

import logging
from typing import Union
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.task import Task
from app.schemas.task import TaskCreate, TaskUpdate
from app.services.exceptions import TaskNotFoundError

logger = logging.getLogger(__name__)


def parse_task_id(task_id: Union[UUID, str]) -> UUID:
    """
    Parse a task id from the URL.

    A malformed id cannot address any task, so it is reported exactly like
    a missing one.
    """
    if isinstance(task_id, UUID):
        return task_id
    try:
        return UUID(str(task_id))
    except ValueError:
        raise TaskNotFoundError(task_id)


class TaskService:
    """
    Service for managing a user's tasks.

    Every query is filtered by the owning user, so a task that belongs to
    someone else is indistinguishable from one that does not exist.
    """

    def __init__(self, db: Session):
        """
        Initialize the task service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def list_tasks(self, user_id: UUID) -> list[Task]:
        """
        List a user's tasks, newest first.

        Args:
            user_id: Owner user ID

        Returns:
            List of Task instances
        """
        return (
            self.db.query(Task)
            .filter(Task.created_by == user_id)
            .order_by(Task.created_at.desc())
            .all()
        )

    def create_task(self, user_id: UUID, data: TaskCreate) -> Task:
        """
        Create a task owned by ``user_id``.

        Args:
            user_id: Owner user ID; always wins over anything in ``data``
            data: Validated task fields

        Returns:
            Created Task instance
        """
        task = Task(
            created_by=user_id,
            title=data.title,
            description=data.description,
            completed=data.completed,
            due_date=data.due_date,
            priority=data.priority,
            tags=list(data.tags),
        )

        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)

        logger.info(f"Created task {task.id} for user {user_id}")
        return task

    def get_task(self, user_id: UUID, task_id: Union[UUID, str]) -> Task:
        """
        Get a task by ID (with ownership verification).

        Args:
            user_id: Requesting user ID
            task_id: Task ID, possibly unparsed

        Returns:
            Task instance

        Raises:
            TaskNotFoundError: If the task doesn't exist, isn't owned by the
                user, or the ID is malformed
        """
        task = self.db.query(Task).filter(
            Task.id == parse_task_id(task_id),
            Task.created_by == user_id
        ).first()

        if not task:
            raise TaskNotFoundError(task_id)

        return task

    def update_task(
        self,
        user_id: UUID,
        task_id: Union[UUID, str],
        data: TaskUpdate,
    ) -> Task:
        """
        Apply a partial update to a task.

        Only fields present in ``data`` are touched; an empty update returns
        the task unchanged.

        Raises:
            TaskNotFoundError: As for ``get_task``
        """
        task = self.get_task(user_id, task_id)

        changes = data.changes()
        if not changes:
            return task

        for field, value in changes.items():
            if field == "tags":
                value = list(value)
            setattr(task, field, value)

        self.db.commit()
        self.db.refresh(task)

        logger.info(f"Updated task {task.id} fields {sorted(changes)}")
        return task

    def delete_task(self, user_id: UUID, task_id: Union[UUID, str]) -> None:
        """
        Delete a task.

        Raises:
            TaskNotFoundError: As for ``get_task``
        """
        task = self.get_task(user_id, task_id)

        self.db.delete(task)
        self.db.commit()

        logger.info(f"Deleted task {task_id} for user {user_id}")
