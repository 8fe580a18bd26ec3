import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class TherapistError(Exception):
    """Base error. `public_message` is the only text a client ever sees."""

    status_code = 500
    public_message = "Internal Server Error"

    def __init__(self, message: str | None = None, detail: str | None = None):
        super().__init__(message or self.public_message)
        if message:
            self.public_message = message
        self.detail = detail


class ValidationError(TherapistError):
    status_code = 400
    public_message = "Invalid payload"


class UpstreamError(TherapistError):
    public_message = "Chat provider request failed"


class SynthesisError(TherapistError):
    public_message = "Speech synthesis failed"

    def __init__(self, backend: str, detail: str | None = None):
        super().__init__(detail=detail)
        self.backend = backend

    def __str__(self) -> str:
        return f"{self.backend}: {self.detail}"


async def _therapist_error_handler(request: Request, exc: TherapistError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (detail=%s)", request.method, request.url.path, exc, exc.detail)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.public_message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("%s %s invalid payload: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid payload"})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TherapistError, _therapist_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
