"""Request-level failures.

Every exception here is terminal for the request that raised it and is turned
into a JSON response ``{"message": ...}`` by the handlers registered in
``taskapi.main``. None of them is retried.
"""

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal Server Error"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_content(self) -> dict:
        return {"message": self.message}


class ValidationError(AppError):
    """Malformed or missing input. ``errors`` maps field name to messages."""

    status_code = 422
    message = "The given data was invalid."

    def __init__(self, errors: dict[str, list[str]], message: str | None = None):
        super().__init__(message)
        self.errors = errors

    def to_content(self) -> dict:
        return {"message": self.message, "errors": self.errors}


class Unauthenticated(AppError):
    """Missing, malformed, expired or revoked bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthenticated."
    headers = {"WWW-Authenticate": "Bearer"}


class Unauthorized(AppError):
    """Bad login credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"
    headers = {"WWW-Authenticate": "Bearer"}


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    message = "Conflict"


class NotFound(AppError):
    """Resource absent, or not owned by the caller. The two are never distinguished."""

    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"
