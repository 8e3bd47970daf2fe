# notehub/core/errors.py
"""
Application error hierarchy.

Services raise these exceptions; the handlers registered in
``register_error_handlers`` turn them into JSON responses of the form
``{"message": ..., "code": ...}`` with the matching HTTP status.
"""
import logging
from contextlib import contextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from tortoise.exceptions import BaseORMException

logger = logging.getLogger("uvicorn.error")


class NoteHubError(Exception):
    """Base class for every failure reported to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"
    message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message, "code": self.code}


# ----- NotFound -----
class UserNotFound(NoteHubError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "USER_NOT_FOUND"
    message = "User not found"


class ChannelNotFound(NoteHubError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "CHANNEL_NOT_FOUND"
    message = "Channel not found"


class MemberNotFound(NoteHubError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "MEMBER_NOT_FOUND"
    message = "User is not a member of this channel"


# ----- Conflict -----
class DuplicateEmail(NoteHubError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "EMAIL_EXISTS"
    message = "Email already registered"


class AlreadyMember(NoteHubError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "ALREADY_MEMBER"
    message = "You are already a member of this channel"


# ----- Validation -----
class InvalidInput(NoteHubError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "BAD_REQUEST"
    message = "Invalid request"


class MissingFile(InvalidInput):
    code = "NO_FILE"
    message = "No file uploaded"


class FileTooLarge(InvalidInput):
    code = "FILE_TOO_LARGE"
    message = "File too large. Maximum 10MB."


class InvalidSecurityPass(InvalidInput):
    code = "INVALID_SECURITY_PASS"
    message = "Invalid security password"


class LastAdmin(InvalidInput):
    code = "LAST_ADMIN_FORBIDDEN"
    message = "Cannot remove the last admin of a channel"


# ----- Auth -----
class InvalidCredentials(NoteHubError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "AUTH_INVALID_CREDENTIALS"
    message = "Incorrect password."


class Forbidden(NoteHubError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
    message = "Only admin can remove users"


# ----- Collaborators -----
class QuotaExceeded(NoteHubError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "QUOTA_EXCEEDED"
    message = "GitHub rate limit exceeded. Try again later."

    def __init__(self, message: str | None = None, retry_after_seconds: int | None = None):
        super().__init__(message)
        self.retry_after_seconds = retry_after_seconds


class StorageError(NoteHubError):
    code = "STORAGE_ERROR"
    message = "Failed to upload file."


class PersistenceError(NoteHubError):
    code = "PERSISTENCE_ERROR"
    message = "Database error"


class CodespaceExhausted(NoteHubError):
    code = "CODESPACE_EXHAUSTED"
    message = "Could not generate a unique channel code"


@contextmanager
def db_errors(message: str):
    """
    Convert Tortoise ORM failures raised inside the block into PersistenceError.

    Usage:
        with db_errors("Failed to create channel"):
            channel = await create_channel(...)
    """
    try:
        yield
    except BaseORMException as e:
        logger.exception("[db] %s", message)
        raise PersistenceError(message) from e


def register_error_handlers(app: FastAPI) -> None:
    """Register JSON renderers for NoteHubError and unexpected exceptions."""

    @app.exception_handler(NoteHubError)
    async def notehub_error_handler(_request: Request, exc: NoteHubError) -> JSONResponse:
        headers = None
        if isinstance(exc, QuotaExceeded) and exc.retry_after_seconds:
            headers = {"Retry-After": str(exc.retry_after_seconds)}
        if exc.status_code >= 500:
            logger.error("[error] %s: %s", exc.code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("[error] unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error", "code": "INTERNAL_ERROR"},
        )
