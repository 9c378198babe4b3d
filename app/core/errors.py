"""
Application error types and their HTTP rendering.

Data-access code raises JoblyError subclasses; the handlers registered here
turn them (and request-validation / routing errors) into

    {"error": {"message": ..., "status": ...}}

responses. Anything else becomes a logged 500.
"""

import logging
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class JoblyError(Exception):
    """Base error carrying the HTTP status it maps to."""
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message=None):
        self.message = message if message is not None else self.default_message
        super().__init__(self.message)


class InvalidRequestError(JoblyError):
    """Empty payloads, empty filters, references to missing parent rows."""
    status_code = 400
    default_message = "Bad Request"


class UnauthorizedError(JoblyError):
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(JoblyError):
    """Raised when get/update/remove target a row that does not exist."""
    status_code = 404
    default_message = "Not Found"


def error_response(message, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"error": {"message": message, "status": status_code}}),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error envelope handlers to the application."""

    @app.exception_handler(JoblyError)
    async def jobly_error_handler(request: Request, exc: JoblyError):
        return error_response(exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        messages = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        ]
        return error_response(messages, 400)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.detail, exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return error_response("Internal Server Error", 500)
