"""
Application error types and the centralized error responder.

Every error raised by the clause builders, the authorization chain or the
CRUD layer derives from AppError and carries the HTTP status it maps to.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map directly to an HTTP response."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Client input was missing, malformed or conflicts with stored data."""

    status_code = 400
    default_message = "Bad request"


class UnauthorizedError(AppError):
    """The request lacks the principal or privileges a route requires."""

    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning(
        f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}"
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the AppError responder to the application."""
    app.add_exception_handler(AppError, app_error_handler)
