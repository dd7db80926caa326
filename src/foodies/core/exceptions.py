"""Application exceptions and the FastAPI handlers that render them.

Every error leaves the API as ``{"message": "..."}`` with the matching
HTTP status code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from foodies.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Iterable

    from fastapi import Request


logger = get_logger(__name__)

# Location prefixes FastAPI adds in front of the offending field name.
_LOCATION_ROOTS = frozenset({"body", "query", "path", "header", "cookie", "form"})


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    message: str


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class
    for consistent error handling.
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class BadRequestException(AppException):
    """Malformed or invalid input."""

    def __init__(self, message: str = "Bad request") -> None:
        super().__init__(status.HTTP_400_BAD_REQUEST, message)


class UnauthorizedException(AppException):
    """Missing or rejected credentials."""

    def __init__(self, message: str = "Not authorized") -> None:
        super().__init__(status.HTTP_401_UNAUTHORIZED, message)


class ForbiddenException(AppException):
    """Authenticated but not allowed to act on the resource."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(status.HTTP_403_FORBIDDEN, message)


class NotFoundException(AppException):
    """Resource not found."""

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(status.HTTP_404_NOT_FOUND, message)


class ConflictException(AppException):
    """Uniqueness violated (duplicate email, favorite, follow)."""

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(status.HTTP_409_CONFLICT, message)


def format_validation_errors(errors: Iterable[dict[str, Any]]) -> str:
    """Join pydantic error entries into one ``", "``-separated message."""
    messages = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOCATION_ROOTS:
            loc = loc[1:]
        field = ".".join(loc)
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])
    return ", ".join(messages) or "Validation failed"


def _error(status_code: int, message: str) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> ORJSONResponse:
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        message = str(exc.detail)
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = "Not found"
        return _error(exc.status_code, message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, format_validation_errors(exc.errors()))

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        logger.opt(exception=exc).error(
            "Unhandled exception",
            method=request.method,
            path=request.url.path,
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
