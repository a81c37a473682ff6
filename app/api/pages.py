"""Plain pages outside the JSON API."""

from html import escape

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from app.api.dependencies import get_current_user
from app.models.user import User

router = APIRouter()


@router.get("/", summary="Root")
def read_root() -> dict:
    """Liveness message."""
    return {"message": "API is running..."}


@router.get("/dashboard", response_class=HTMLResponse, summary="Dashboard")
def dashboard(current_user: User = Depends(get_current_user)) -> str:
    """Landing page after a successful sign-in."""
    name = escape(current_user.display_name or "User")
    return f'<h1>Dashboard</h1><p>Welcome, {name}!</p><a href="/logout">Logout</a>'
