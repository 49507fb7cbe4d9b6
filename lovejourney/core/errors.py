"""
Erreurs métier et leur traduction en réponses HTTP {success, message}
"""

import logging
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid payload"


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Payment verification failed"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Love page not found"


class ProviderError(AppError):
    message = "Order creation failed"


class PersistenceError(AppError):
    message = "Payment verified but save failed"


class MediaStorageError(AppError):
    message = "Media storage failed"


class CleanupError(AppError):
    """Échec d'un passage du reaper. Jamais renvoyé au client."""

    message = "Expired pages cleanup failed"

    def __init__(self, message: Optional[str] = None, reaped: int = 0):
        super().__init__(message)
        self.reaped = reaped


def error_body(message: str) -> dict:
    return {"success": False, "message": message}


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        # champs manquants / mal typés -> 400 au lieu du 422 de FastAPI
        fields = [".".join(str(part) for part in err["loc"][1:]) for err in exc.errors()]
        message = "Invalid payload"
        if fields and any(fields):
            message = f"Invalid payload: {', '.join(f for f in fields if f)}"
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(message))

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(AppError.message),
        )
