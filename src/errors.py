"""Application errors carrying an HTTP status code and an optional payload.

The same exceptions are raised by services and surface either as a JSON
``{message, data}`` body (REST routes) or as a GraphQL error whose
``extensions`` hold ``status`` and ``data``.
"""

from typing import Any


class APIError(Exception):
    """Base error with a status code and optional data payload."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None, data: Any = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.data = data

    @property
    def extensions(self) -> dict[str, Any]:
        """GraphQL error extensions, picked up by graphql-core."""
        return {"status": self.status_code, "data": self.data}


class UnauthenticatedError(APIError):
    status_code = 401

    def __init__(self, message: str = "Not authenticated!"):
        super().__init__(message)


class ForbiddenError(APIError):
    status_code = 403

    def __init__(self, message: str = "Not authorized!"):
        super().__init__(message)


class NotFoundError(APIError):
    status_code = 404


class ConflictError(APIError):
    status_code = 409


class InputValidationError(APIError):
    """Field-level validation failure; ``data`` is a list of ``{"message": ...}``."""

    status_code = 422

    def __init__(self, errors: list[dict[str, str]], message: str = "Invalid input."):
        super().__init__(message, data=errors)
