# backend/mercado/middleware/error_handler.py
"""
Manejadores de errores de la aplicación.

Todas las respuestas de error comparten la forma de ErrorResponse:
{"success": false, "error": "<mensaje>", "details": ...}
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mercado.schemas.common_schema import ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, details=None, headers=None) -> JSONResponse:
    body = ErrorResponse(error=message, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def setup_error_handlers(app: FastAPI) -> None:
    """Registra los manejadores de errores en la aplicación."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        error_details = [
            {
                "field": ".".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        return _error_response(400, "Invalid parameters", details=error_details)

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return _error_response(400, str(exc))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            f"❌ ERROR no controlado en {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )
        return _error_response(500, "Internal server error")
