import logging
from typing import Any
from uuid import uuid4

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base for failures the entity layer reports to the HTTP layer."""

    status_code = 500
    code = "ERROR"
    title = "Error"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"
    title = "Bad Request"


class ForeignKeyError(AppError):
    status_code = 400
    code = "FOREIGN_KEY_ERROR"
    title = "Bad Request"


class InvalidCredentialsError(AppError):
    status_code = 401
    code = "UNAUTHORIZED"
    title = "Unauthorized"

    def __init__(self, message: str = "Invalid credentials", details=None):
        super().__init__(message, details)


class ForbiddenError(AppError):
    status_code = 403
    code = "FORBIDDEN"
    title = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"
    title = "Not Found"


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"
    title = "Conflict"


class InternalError(AppError):
    status_code = 500
    code = "INTERNAL_ERROR"
    title = "Internal Server Error"


def _code_by_status(status: int) -> str:
    return {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        409: "CONFLICT",
        500: "INTERNAL_ERROR",
    }.get(status, "HTTP_ERROR")


def _title_by_status(status: int) -> str:
    return {
        400: "Bad Request",
        401: "Unauthorized",
        403: "Forbidden",
        404: "Not Found",
        405: "Method Not Allowed",
        409: "Conflict",
        500: "Internal Server Error",
    }.get(status, "HTTP Error")


def correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", None) or str(uuid4())


def problem(
    request: Request,
    *,
    status: int,
    detail: str,
    title: str | None = None,
    code: str | None = None,
    details: dict[str, Any] | None = None,
    type_: str = "about:blank",
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = {
        "type": type_,
        "title": title or _title_by_status(status),
        "status": status,
        "detail": detail,
        "instance": str(request.url),
        "correlation_id": correlation_id(request),
        "code": code or _code_by_status(status),
        "message": detail,
        "details": details or {},
        "error": detail,
    }
    return JSONResponse(
        status_code=status,
        content=body,
        media_type="application/problem+json",
        headers=headers,
    )


async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.code, exc.message)
    return problem(
        request,
        status=exc.status_code,
        title=exc.title,
        detail=exc.message,
        code=exc.code,
        details=exc.details,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, dict):
        detail = str(exc.detail.get("message", ""))
        code = exc.detail.get("code")
    else:
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        code = None
    return problem(
        request,
        status=exc.status_code,
        detail=detail,
        code=code,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else None
    if first:
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        detail = f"{field}: {first['msg']}" if field else first["msg"]
    else:
        detail = "Validation failed"
    # bytes/ctx values are not JSON serialisable as-is
    safe = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in errors
    ]
    return problem(
        request,
        status=400,
        title="Bad Request",
        detail=detail,
        code="VALIDATION_ERROR",
        details={"errors": safe},
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Storage failure on %s %s", request.method, request.url.path)
    err = InternalError("Internal server error", details={"detail": str(exc)})
    return problem(
        request,
        status=err.status_code,
        title=err.title,
        detail=err.message,
        code=err.code,
        details=err.details,
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return problem(
        request,
        status=500,
        detail="Something went wrong",
        code="INTERNAL_ERROR",
    )


def make_exception_handlers():
    return {
        AppError: app_error_handler,
        StarletteHTTPException: http_exception_handler,
        RequestValidationError: validation_exception_handler,
        SQLAlchemyError: database_exception_handler,
        Exception: unhandled_exception_handler,
    }
