"""Custom exceptions for the service layer."""

from typing import Any, Optional
from uuid import UUID


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, code: str = "SERVICE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class NotFoundError(ServiceError):
    """Resource not found error."""

    def __init__(self, resource_type: str, resource_id: Any):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(
            message=f"{resource_type} not found",
            code=f"{resource_type.upper()}_NOT_FOUND"
        )


class TaskNotFoundError(NotFoundError):
    """
    Task not found error.

    Raised alike for a missing task, a task owned by someone else and an id
    that cannot address any task.
    """

    def __init__(self, task_id: Any):
        super().__init__("Task", task_id)


class UserNotFoundError(NotFoundError):
    """User not found error."""

    def __init__(self, user_id: UUID):
        super().__init__("User", user_id)


class AuthenticationError(ServiceError):
    """Authentication failed error."""

    def __init__(self, message: str = "Authentication failed", code: str = "AUTHENTICATION_FAILED"):
        super().__init__(message=message, code=code)


class NoSessionError(AuthenticationError):
    """Session token missing, unknown or expired."""

    def __init__(self, message: str = "No valid session"):
        super().__init__(message=message, code="NO_SESSION")


class AuthProviderError(ServiceError):
    """The identity provider rejected or failed the code exchange."""

    def __init__(self, message: str = "Identity provider error", cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message=message, code="AUTH_PROVIDER_ERROR")


class PersistenceError(ServiceError):
    """The database failed while serving a request."""

    def __init__(self, message: str = "Persistence error", cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message=message, code="PERSISTENCE_ERROR")
