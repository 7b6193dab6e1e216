"""
Punto único de traducción de errores a respuestas HTTP.

Todo lo que escapa de un endpoint acaba aquí y se devuelve con el sobre
estándar ``{success: false, message, errors?, timestamp}``.
"""
import logging
import traceback
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from ..config import Settings
from ..errors import ErrorKind, ServiceError
from ..schemas.common import ApiResponse

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, errors: Optional[List[str]] = None,
                   headers: Optional[dict] = None) -> JSONResponse:
    body = ApiResponse.fail(message, errors).model_dump(mode="json", by_alias=True, exclude_none=True)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def service_error_response(exc: ServiceError, settings: Settings) -> JSONResponse:
    if exc.kind is ErrorKind.VALIDATION:
        return error_response(exc.status, settings.error_messages.general.validation_failed, exc.errors)
    return error_response(exc.status, exc.message)


def unexpected_error_response(exc: Exception, settings: Settings) -> JSONResponse:
    errors = None
    # Detalles internos solo en desarrollo
    if settings.is_dev:
        errors = [str(exc), "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))]
    return error_response(500, settings.error_messages.general.internal_server_error, errors)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, settings: Settings):
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except ServiceError as exc:
            if exc.kind is ErrorKind.UNAUTHORIZED:
                logger.warning(f"{request.method} {request.url.path}: {exc.message}")
            return service_error_response(exc, self.settings)
        except Exception as exc:
            logger.exception(f"Error inesperado en {request.method} {request.url.path}")
            try:
                return unexpected_error_response(exc, self.settings)
            except Exception:
                # Último recurso: respuesta mínima que no depende de nada más
                return JSONResponse(status_code=500, content={"success": False, "message": "Internal Server Error"})


def _format_validation_error(err: dict) -> str:
    loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "header")]
    field = ".".join(loc)
    return f"{field}: {err.get('msg')}" if field else str(err.get("msg"))


def install_error_handling(app: FastAPI, settings: Settings) -> None:
    """Registra el middleware y los handlers de errores propios del framework."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [_format_validation_error(e) for e in exc.errors()]
        return error_response(400, settings.error_messages.general.validation_failed, errors)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else settings.error_messages.general.validation_failed
        return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))

    app.add_middleware(ErrorHandlingMiddleware, settings=settings)
