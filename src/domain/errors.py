"""Error taxonomy shared by the service layer and the HTTP layer.

Every error maps to exactly one HTTP status and serializes to the uniform
body ``{"message": str, "errors"?: [str]}``.
"""

from typing import Any


class AppError(Exception):
    """Base class for errors that translate into an HTTP response."""

    status_code: int = 500
    default_message: str = "An unknown error occurred"

    def __init__(self, message: str | None = None, errors: list[str] | None = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)

    def to_response(self) -> dict[str, Any]:
        """Build the JSON error body."""
        body: dict[str, Any] = {"message": self.message}
        if self.errors is not None:
            body["errors"] = self.errors
        return body


class ValidationError(AppError):
    """Client payload is malformed or breaks a business rule."""

    status_code = 400
    default_message = "Validation error"

    def __init__(self, errors: list[str], message: str | None = None):
        super().__init__(message, errors=errors)


class AuthenticationError(AppError):
    """No valid identity was presented."""

    status_code = 401
    default_message = "Unauthorized access. Authentication required."


class AuthorizationError(AppError):
    """Caller is authenticated but not allowed to act on the resource."""

    status_code = 403
    default_message = "You do not have permission to access this resource"


class NotFoundError(AppError):
    """Requested resource (or a resource it references) does not exist."""

    status_code = 404
    default_message = "Resource not found"


class UnexpectedError(AppError):
    """Any failure the service could not anticipate; details stay in the logs."""

    status_code = 500
