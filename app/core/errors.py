from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Iterator, List, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from structlog import get_logger

logger = get_logger()


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNEXPECTED = "unexpected"


STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTH: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class AppError(Exception):
    """Base for every failure a handler reports to the caller.

    The kind decides the HTTP status; the message is what the client sees.
    """

    kind = ErrorKind.UNEXPECTED

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ValidationError(AppError):
    kind = ErrorKind.VALIDATION


class AuthError(AppError):
    kind = ErrorKind.AUTH


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(AppError):
    kind = ErrorKind.CONFLICT


class UnexpectedError(AppError):
    kind = ErrorKind.UNEXPECTED


_LOCATION_ROOTS = ("body", "query", "path", "header", "form")


def first_error_message(errors: Sequence[Dict[str, Any]]) -> str:
    """Human-readable message for the first rule a payload violated."""
    if not errors:
        return "Invalid request"
    error = errors[0]
    cause = (error.get("ctx") or {}).get("error")
    if isinstance(cause, Exception):
        # Raised from our own validators; the message is already user-facing
        return str(cause)
    loc: List[str] = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_ROOTS]
    if loc:
        return f"{'.'.join(loc)}: {error['msg']}"
    return error["msg"]


@contextmanager
def unexpected_failure(message: str, **context: Any) -> Iterator[None]:
    """Turn anything that is not an AppError into a logged UnexpectedError."""
    try:
        yield
    except AppError:
        raise
    except Exception as e:
        logger.error(message, error=str(e), exc_info=True, **context)
        raise UnexpectedError(message) from e


def error_body(message: str) -> Dict[str, Any]:
    return {"success": False, "error": message}


async def app_error_handler(request: Request, exc: AppError):
    if exc.kind is not ErrorKind.UNEXPECTED:
        logger.info("Request rejected", path=request.url.path, kind=exc.kind.value, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    message = first_error_message(exc.errors())
    logger.info("Request validation failed", path=request.url.path, error=message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(message))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error", path=request.url.path, error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error"),
    )


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
