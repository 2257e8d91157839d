"""
Domain errors for Task Manager.

Every error carries the HTTP status it maps to at the request boundary,
so routers never translate them by hand.
"""
from typing import Any, Dict, List, Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    error_type: str = "app_error"

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


class ValidationError(AppError):
    """Malformed input; ``details`` lists the offending fields."""

    error_type = "validation_error"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(f"Invalid value for '{field}': {message}", [{"field": field, "message": message}])


class InvalidReferenceError(AppError):
    """A supplied id does not point at an existing entity."""

    error_type = "reference_error"

    def __init__(self, field: str, value: Any):
        super().__init__(
            f"'{field}' refers to a missing entity: {value}",
            [{"field": field, "message": f"{value} does not exist"}],
        )
        self.field = field
        self.value = value


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error_type = "not_found"

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class DuplicateNameError(AppError):
    status_code = status.HTTP_409_CONFLICT
    error_type = "duplicate_name"


class DuplicateEmailError(AppError):
    status_code = status.HTTP_409_CONFLICT
    error_type = "duplicate_email"


class ConflictError(AppError):
    """Deletion blocked by rows that still reference the entity."""

    status_code = status.HTTP_409_CONFLICT
    error_type = "conflict"


class UnauthenticatedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_type = "unauthenticated"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    error_type = "forbidden"
