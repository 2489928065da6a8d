"""
Exception handlers for the FastAPI application.

Domain exceptions map to their own status and detail; anything else is
logged with an error id and answered with a 500.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from passx.core.exceptions import PassXException
from passx.core.logging_config import get_logger

logger = get_logger(__name__)


async def passx_exception_handler(request: Request, exc: PassXException) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {type(exc).__name__}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Log an unhandled exception and answer with an error id the client can report.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised
    """
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PassXException, passx_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
