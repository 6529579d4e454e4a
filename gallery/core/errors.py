from collections.abc import Mapping, Sequence
from typing import Any,  cast
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_405_METHOD_NOT_ALLOWED,
    HTTP_500_INTERNAL_SERVER_ERROR,
)
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from gallery.core.logging import get_logger


class DatabaseNotConfiguredError(RuntimeError):
    """DATABASE_URL is absent; raised before any store access."""


class ErrorEnvelope(BaseModel):
    """Uniform error body. Clients read `error`."""
    error: str
    details: list[dict[str, object]] | None = None
    meta: dict[str, object]


def _build_meta(request: Request) -> dict[str, object]:
    """Collect metadata for error responses."""
    return {
        "request_id": getattr(request.state, "correlation_id", "-"),
        "path": request.url.path,
        "method": request.method,
    }

def _serialize_validation_errors(errors: Sequence[Mapping[Any, Any]]) -> list[dict[str, object]]:
    """Serialize validation errors, handling non-serializable objects in context."""

    serialized_errors: list[dict[str, object]] = []

    for error in errors:
        serialized_error: dict[str, object] = dict(error)

        if "ctx" in serialized_error and isinstance(serialized_error["ctx"], dict):
            ctx: dict[str, object] = cast(dict[str, object], serialized_error["ctx"]).copy()

            if "error" in ctx:
                error_value = ctx["error"]

                if hasattr(error_value, "__str__"):
                    ctx["error"] = str(error_value)
            serialized_error["ctx"] = ctx
        serialized_errors.append(serialized_error)
    return serialized_errors


def _validation_message(errors: Sequence[Mapping[Any, Any]]) -> str:
    """One line per error: `body.name: Input should be a valid string`."""
    parts: list[str] = []
    for error in errors:
        loc = ".".join(str(p) for p in error.get("loc", ()))
        msg = str(error.get("msg", "Invalid request"))
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request payload"


def _store_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def _error_response(
    request: Request,
    status_code: int,
    message: str,
    details: list[dict[str, object]] | None = None,
) -> JSONResponse:
    body = ErrorEnvelope(error=message, details=details, meta=_build_meta(request))
    return JSONResponse(
        status_code=status_code, content=body.model_dump(exclude_none=True)
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the failure boundary: every failure becomes one envelope."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        logger = get_logger(__name__, request)
        logger.warning("HTTP error", extra={"status_code": exc.status_code})

        if exc.status_code == HTTP_405_METHOD_NOT_ALLOWED:
            return PlainTextResponse(
                "Method Not Allowed", status_code=exc.status_code, headers=exc.headers
            )

        response = _error_response(request, exc.status_code, str(exc.detail or "HTTP error"))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger = get_logger(__name__, request)
        message = _validation_message(exc.errors())
        logger.error("Request parse error: %s", message)
        return _error_response(
            request,
            HTTP_500_INTERNAL_SERVER_ERROR,
            message,
            details=_serialize_validation_errors(exc.errors()),
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.exception("Store error", exc_info=exc)
        return _error_response(request, HTTP_500_INTERNAL_SERVER_ERROR, _store_message(exc))

    @app.exception_handler(DatabaseNotConfiguredError)
    async def not_configured_handler(
        request: Request, exc: DatabaseNotConfiguredError
    ) -> PlainTextResponse:
        logger = get_logger(__name__, request)
        logger.error("DATABASE_URL is not configured")
        return PlainTextResponse(str(exc), status_code=HTTP_500_INTERNAL_SERVER_ERROR)

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.exception("Request failed", exc_info=exc)
        return _error_response(request, HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.exception("Unhandled server error", exc_info=exc)
        return _error_response(
            request, HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "Internal Server Error"
        )
