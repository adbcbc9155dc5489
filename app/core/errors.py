"""API error taxonomy and the exception handlers that render it as {"message": ...}."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Server error"


class ApiError(Exception):
    """Base for errors that map to an HTTP status and a client-safe message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers: dict[str, str] | None = None

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(ApiError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(ApiError):
    """Missing, invalid or expired credential."""

    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(ApiError):
    """Authenticated but not allowed."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT


class InternalError(ApiError):
    """Store, hashing or signing failure. The message is always generic."""

    def __init__(self, message: str = GENERIC_SERVER_ERROR) -> None:
        super().__init__(message)


def _message_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as {"message": ...} without leaking internal detail."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        return _message_response(exc.status_code, exc.message, exc.headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning(
            "Rejected request %s %s: %s", request.method, request.url.path, exc.errors()
        )
        return _message_response(status.HTTP_400_BAD_REQUEST, "Invalid request")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _message_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_SERVER_ERROR)
