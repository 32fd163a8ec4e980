"""
Client-facing error taxonomy.

Each error carries the HTTP status and the exact message sent back in the
``{"message": ...}`` body; ``api.errors`` renders them.
"""

from __future__ import annotations

from http import HTTPStatus


class ApiError(Exception):
    status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
    message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"message": self.message}


class ValidationError(ApiError):
    status_code = HTTPStatus.BAD_REQUEST
    message = "Invalid request"


class DuplicateAccount(ApiError):
    status_code = HTTPStatus.BAD_REQUEST
    message = "User already exists"


class InvalidCredentials(ApiError):
    # Same status and text for unknown email and wrong password.
    status_code = HTTPStatus.UNAUTHORIZED
    message = "Invalid email or password"


class Unauthorized(ApiError):
    status_code = HTTPStatus.UNAUTHORIZED
    message = "No token provided"


class Forbidden(ApiError):
    status_code = HTTPStatus.FORBIDDEN
    message = "Invalid or expired token"


class NotFound(ApiError):
    status_code = HTTPStatus.NOT_FOUND
    message = "User not found"


class InternalError(ApiError):
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    message = "Server error"
