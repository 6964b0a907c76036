"""
Domain exceptions, exception handlers and error response normalization.
"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from schemas.responses import ErrorResponse, ValidationErrorResponse
from utils.logging import get_logger

logger = get_logger(__name__)


class ContentGuardError(Exception):
    """Base class for errors surfaced by the API."""

    error = "content_guard_error"
    message = "Request could not be processed"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = None, detail: str = None):
        self.message = message or self.message
        self.detail = detail
        super().__init__(self.message)


class SentimentAnalysisError(ContentGuardError):
    error = "sentiment_analysis_failed"
    message = "Failed to analyze sentiment"


class RephraseFailedError(ContentGuardError):
    error = "rephrase_failed"
    message = "Failed to rephrase content"


class StorageUnavailableError(ContentGuardError):
    error = "storage_unavailable"
    message = "Analysis result storage is not available"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


def register_exception_handlers(app: FastAPI, debug: bool = False) -> None:
    """Attach standard exception handlers to the app."""

    @app.exception_handler(ContentGuardError)
    async def content_guard_error_handler(request: Request, exc: ContentGuardError):
        if exc.status_code >= 500:
            logger.error("Request failed", error=exc.error, request_url=str(request.url), detail=exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=exc.error,
                message=exc.message,
                detail=exc.detail if debug else None,
                status_code=exc.status_code,
            ).model_dump(),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error="http_error", message=str(exc.detail), status_code=exc.status_code).model_dump(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Malformed bodies are rejected with 400 before reaching the pipeline
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ValidationErrorResponse(
                errors=[{"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]} for e in exc.errors()]
            ).model_dump(),
        )

    @app.exception_handler(OperationalError)
    async def database_error_handler(request: Request, exc: OperationalError):
        logger.error("Database error", error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=ErrorResponse(
                error="database_unavailable",
                message="Database temporarily unavailable",
                detail=str(exc) if debug else None,
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            ).model_dump(),
            headers={"Retry-After": "30"},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            exception_type=type(exc).__name__,
            exception_message=str(exc),
            request_url=str(request.url),
            request_method=request.method,
            exc_info=True,
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="internal_server_error",
                message="An internal server error occurred",
                detail=str(exc) if debug else None,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            ).model_dump(),
        )
