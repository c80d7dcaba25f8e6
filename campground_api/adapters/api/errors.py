# campground_api/adapters/api/errors.py
"""
Exception -> JSON translation. Every failure leaves the API as

    {"success": false, "message": "..."}

plus `stack` and `request {method, url}` when running in development.
"""
import traceback
from typing import Any, Dict, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from campground_api.core.domain.exceptions import DomainError
from campground_api.shared.config import Settings

from .validation import error_messages

logger = structlog.get_logger()


def error_body(
    request: Request,
    message: str,
    settings: Settings,
    exc: Optional[BaseException] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    if settings.is_development:
        if exc is not None:
            body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        body["request"] = {"method": request.method, "url": str(request.url)}
    return body


def install_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Register the JSON error handlers on `app`."""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("request_failed", path=request.url.path, error=exc.message, exc_info=exc)
        else:
            logger.info(
                "request_rejected",
                path=request.url.path,
                status=exc.status_code,
                error=exc.message,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(request, exc.message, settings, exc),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else "Something went wrong"
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(request, message, settings),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = ", ".join(error_messages(exc.errors())) or "Validation failed"
        return JSONResponse(status_code=400, content=error_body(request, message, settings))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_exception", path=request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=error_body(request, "Something went wrong", settings, exc),
        )
