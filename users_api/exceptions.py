"""
Custom exception classes and FastAPI exception handlers.

Why custom exceptions?
  The user directory raises domain-specific errors (like UserNotFoundError)
  without importing HTTP concepts. The handlers registered here translate
  them into HTTP responses, so:
    - Directory code is testable without HTTP
    - Error responses are consistent across all endpoints
    - Adding new error types is straightforward

Exception hierarchy:
    UsersAPIError (base)
    ├── UserNotFoundError     — requested user id doesn't exist
    └── DuplicateEmailError   — create with an email that's already stored

Response format (every error, expected or not):
    {"statusCode": <int>, "message": <str>}

Status mapping:
    UserNotFoundError        -> 404
    DuplicateEmailError      -> 400 (kept for client compatibility; a 409
                                    would be the conventional choice)
    RequestValidationError   -> 400 (malformed body or malformed user id)
    HTTPException            -> its own status (unknown route, 405, ...)
    anything else            -> 500 with a generic message; details are
                                logged server-side only
"""

import logging
import uuid

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class UsersAPIError(Exception):
    """Base exception for all Users API domain errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(self.detail)


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class UserNotFoundError(UsersAPIError):
    """Raised when a requested user does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, user_id: uuid.UUID):
        self.user_id = user_id
        super().__init__(f"user with id {user_id} not found")


class DuplicateEmailError(UsersAPIError):
    """Raised when creating a user with an email that's already in use."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email {email} is already registered")


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------

def error_response(status_code: int, message: str) -> JSONResponse:
    """Render the single error body shape used by every handler."""
    return JSONResponse(
        status_code=status_code,
        content={"statusCode": status_code, "message": message},
    )


def format_validation_errors(exc: RequestValidationError) -> str:
    """
    Flatten pydantic validation errors into one readable message.

    The leading "body"/"path"/"query" segment of each location is dropped,
    so a bad body field reads "firstName: String should have at least 1
    character" and a bad path parameter reads "user_id: Input should be a
    valid UUID, ...".
    """
    parts = []
    for error in exc.errors():
        location = [str(item) for item in error.get("loc", ())]
        if location and location[0] in ("body", "path", "query"):
            location = location[1:]
        field = ".".join(location)
        parts.append(f"{field}: {error['msg']}" if field else error["msg"])
    return "; ".join(parts) or "Validation failed"


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register custom exception handlers with the FastAPI application.

    This is called once during app startup in main.py.
    """

    @app.exception_handler(UsersAPIError)
    async def users_api_error_handler(
        request: Request, exc: UsersAPIError
    ) -> JSONResponse:
        logger.warning(
            "%s %s -> %s: %s",
            request.method, request.url.path, exc.status_code, exc.detail,
        )
        return error_response(exc.status_code, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = format_validation_errors(exc)
        logger.warning("%s %s -> 400: %s", request.method, request.url.path, message)
        return error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        # Full traceback stays in the server log; the client gets nothing but
        # the generic message.
        logger.error(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc,
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)
