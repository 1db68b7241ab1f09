"""
Error boundary for the GeoCat HTTP API.

Converts every failure into a `{message, status}` JSON body.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from geocat.core.errors import GeoCatError
from geocat.observability.logging_setup import get_logger
from geocat.observability.metrics import api_errors

log = get_logger("geocat.api")

def _respond(message: str, status: int) -> JSONResponse:
    return JSONResponse({"message": message, "status": status}, status_code=status)

def install_error_handlers(app: FastAPI) -> None:
    """예외 처리기를 등록합니다."""

    @app.exception_handler(GeoCatError)
    async def geocat_error(request: Request, exc: GeoCatError):
        api_errors.labels(type(exc).__name__).inc()
        return _respond(exc.message, exc.status)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        api_errors.labels(f"HTTP{exc.status_code}").inc()
        return _respond(str(exc.detail), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        api_errors.labels("ValidationError").inc()
        details = "; ".join(
            f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in exc.errors()
        )
        return _respond(details or "Invalid request", 400)

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        api_errors.labels("InternalError").inc()
        log.opt(exception=exc).error(f"처리되지 않은 오류: {request.method} {request.url.path}")
        return _respond("Internal server error", 500)
