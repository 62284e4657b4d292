"""
API Error Handlers
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from moviepin.core.logging import get_logger

logger = get_logger(__name__)


def describe_validation_error(exc: RequestValidationError) -> str:
    """Summarize the first validation error as ``location: message``"""
    errors = exc.errors()
    if not errors:
        return "invalid request"

    error = errors[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error.get('msg', 'invalid value')}"


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed or invalid request bodies are bad requests"""
    detail = describe_validation_error(exc)
    logger.info("Request validation failed", path=request.url.path, detail=detail)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
