"""API router aggregation."""

from fastapi import APIRouter

from app.api import tasks, users

api_router = APIRouter()

# Include all JSON endpoint routers
api_router.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])
api_router.include_router(users.router, tags=["Users"])
