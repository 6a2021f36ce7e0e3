"""
Excepciones de dominio de FastMoney.

Cada excepción lleva el código HTTP con el que se responde; el handler
registrado en ``register_exception_handlers`` las convierte en JSON.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class FastMoneyError(Exception):
    """Base de todos los errores de la aplicación."""
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthError(FastMoneyError):
    """Token ausente, inválido o expirado; credenciales incorrectas."""
    status_code = 401
    default_message = "Not authenticated"


class ForbiddenError(AuthError):
    """La política de acceso denegó la operación."""
    status_code = 403
    default_message = "Forbidden"


class ValidationError(FastMoneyError):
    status_code = 400
    default_message = "Invalid input"


class NotFoundError(FastMoneyError):
    status_code = 404
    default_message = "Not found"


class ConflictError(FastMoneyError):
    status_code = 409
    default_message = "Conflict"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(FastMoneyError)
    async def fastmoney_error_handler(request: Request, exc: FastMoneyError):
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0]["msg"] if errors else ValidationError.default_message
        logger.debug("Cuerpo inválido en %s: %s", request.url.path, errors)
        return JSONResponse(
            status_code=ValidationError.status_code,
            content={"message": message, "detail": jsonable_errors(errors)},
        )


def jsonable_errors(errors):
    """Los errores de pydantic pueden traer excepciones en ``ctx``; se dejan solo los campos serializables."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in errors
    ]
