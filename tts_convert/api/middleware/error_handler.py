"""Exception handlers producing the conversion API error body.

Provides:
- Handler for ConversionBaseException returning its status and body
- Handler for RequestValidationError (FastAPI) mapped to 400
- Handler for Starlette HTTP exceptions
- Handler for generic Exception logging full traceback, returning a safe 500
- Response format: {"error": "...", "message": "...", "code": "...", "details": {...}, "request_id": "..."}
"""

import traceback
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tts_convert.api.exceptions import ConversionBaseException
from tts_convert.utils.logging import get_log_context, get_logger

logger = get_logger("api")


def _get_request_id() -> str | None:
    return get_log_context().get("request_id")


def _build_error_response(
    error: str,
    message: str,
    code: str,
    details: dict[str, Any] | None = None,
    request_id: str | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "error": error,
        "message": message,
        "code": code,
    }
    if details:
        body["details"] = details
    if request_id:
        body["request_id"] = request_id
    return body


def _headers(request_id: str | None) -> dict[str, str]:
    return {"X-Request-ID": request_id} if request_id else {}


async def conversion_exception_handler(
    request: Request,
    exc: ConversionBaseException,
) -> JSONResponse:
    """Handle ConversionBaseException and subclasses."""
    request_id = _get_request_id()

    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        "Conversion API error",
        error_code=exc.error_code,
        error=exc.message,
        http_status=exc.http_status,
        path=request.url.path,
    )

    return JSONResponse(
        status_code=exc.http_status,
        content=_build_error_response(
            error=exc.error,
            message=exc.message,
            code=exc.error_code,
            details=exc.details,
            request_id=request_id,
        ),
        headers=_headers(request_id),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle request validation errors as 400 with per-field messages."""
    request_id = _get_request_id()

    errors: list[dict[str, Any]] = []
    for error in exc.errors():
        loc = error.get("loc", ())
        field_parts = [str(part) for part in loc if part not in ("body", "path", "query")]
        errors.append({
            "field": ".".join(field_parts) if field_parts else "unknown",
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "value_error"),
        })

    logger.warning(
        "Validation error",
        path=request.url.path,
        fields=[e["field"] for e in errors],
    )

    if len(errors) == 1:
        message = f"{errors[0]['message']} (field: {errors[0]['field']})"
    else:
        message = f"Validation failed with {len(errors)} errors"

    return JSONResponse(
        status_code=400,
        content=_build_error_response(
            error="Invalid request",
            message=message,
            code="CONV_E100",
            details={"validation_errors": errors},
            request_id=request_id,
        ),
        headers=_headers(request_id),
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Handle Starlette HTTP exceptions (unknown routes, wrong methods)."""
    request_id = _get_request_id()

    code_map = {
        400: "CONV_E100",
        404: "CONV_E300",
        405: "CONV_E100",
        500: "CONV_E000",
    }

    logger.warning(
        "HTTP exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
    )

    detail = str(exc.detail) if exc.detail else "An error occurred"
    return JSONResponse(
        status_code=exc.status_code,
        content=_build_error_response(
            error=detail,
            message=detail,
            code=code_map.get(exc.status_code, "CONV_E000"),
            request_id=request_id,
        ),
        headers=_headers(request_id),
    )


def build_generic_exception_handler(debug: bool):
    """Create the catch-all handler; debug mode exposes the exception and traceback."""

    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = _get_request_id()

        logger.exception(
            "Unhandled exception",
            error_type=type(exc).__name__,
            error=str(exc),
            path=request.url.path,
            method=request.method,
        )

        if debug:
            content = _build_error_response(
                error="Internal server error",
                message=str(exc),
                code="CONV_E000",
                details={
                    "type": type(exc).__name__,
                    "traceback": traceback.format_exc().split("\n"),
                },
                request_id=request_id,
            )
        else:
            content = _build_error_response(
                error="Internal server error",
                message="An unexpected error occurred. Please try again later.",
                code="CONV_E000",
                request_id=request_id,
            )

        return JSONResponse(status_code=500, content=content, headers=_headers(request_id))

    return generic_exception_handler


def register_exception_handlers(app: FastAPI, debug: bool = False) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(ConversionBaseException, conversion_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, build_generic_exception_handler(debug))
