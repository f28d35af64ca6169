import logging
from contextlib import contextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from fudge.schemas import envelope

logger = logging.getLogger(__name__)


class ApiError(HTTPException):
    """HTTPException с сообщением для конверта и (опционально) списком ошибок."""
    status = 500

    def __init__(self, message: str = "Server Error", errors: Optional[List[str]] = None, headers=None):
        super().__init__(status_code=self.status, detail=message, headers=headers)
        self.errors = errors or []


class BadRequest(ApiError):
    status = 400


class Unauthorized(ApiError):
    status = 401

    def __init__(self, message: str = "Invalid token", errors=None):
        super().__init__(message, errors, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(ApiError):
    status = 403


class NotFound(ApiError):
    status = 404


class Conflict(ApiError):
    # дубликат уникального ключа: исторически отдаём 400
    status = 400


class InsufficientStock(BadRequest):
    pass


@contextmanager
def failure_message(db, message: str):
    """Неожиданная ошибка БД внутри блока -> откат, лог и 500 с фиксированным текстом."""
    try:
        yield
    except IntegrityError:
        db.rollback()
        raise
    except SQLAlchemyError:
        db.rollback()
        logger.exception(message)
        raise ApiError(message) from None


def _format_errors(errors) -> List[str]:
    out = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        out.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return out


# ==== Обработчики ====

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if not isinstance(exc, ApiError) and exc.status_code == 404:
        message = "Route not found"
    return JSONResponse(
        envelope(message, success=False, errors=getattr(exc, "errors", None)),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc):
    return JSONResponse(
        envelope("Validation failed", success=False, errors=_format_errors(exc.errors())),
        status_code=400,
    )


def is_unique_violation(exc: IntegrityError) -> bool:
    # postgres: SQLSTATE 23505; sqlite: "UNIQUE constraint failed"
    if getattr(exc.orig, "pgcode", None) == "23505":
        return True
    text = str(exc.orig).lower()
    return "unique constraint" in text or "duplicate key" in text


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    if is_unique_violation(exc):
        return JSONResponse(envelope("Duplicate field value entered", success=False), status_code=400)
    return JSONResponse(envelope("Validation failed", success=False), status_code=400)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(envelope("Server Error", success=False), status_code=500)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
