"""
Domain Exception Handler.

Renders ``CityPrefsError`` subclasses with the HTTP status they carry.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from cityprefs.core.errors import CityPrefsError, ValidationError
from cityprefs.core.logging_config import get_logger

logger = get_logger(__name__)


async def domain_exception_handler(request: Request, exc: CityPrefsError) -> JSONResponse:
    """
    Translate a domain error into a JSON response.

    Args:
        request: The HTTP request that caused the exception
        exc: The domain error that was raised

    Returns:
        JSONResponse with ``detail`` and ``error_type``, plus ``field`` for validation errors
    """
    logger.info(f"{request.method} {request.url.path} rejected: {type(exc).__name__}: {exc.message}")
    content = {
        "detail": exc.message,
        "error_type": type(exc).__name__,
    }
    if isinstance(exc, ValidationError) and exc.field is not None:
        content["field"] = exc.field
    return JSONResponse(status_code=exc.status_code, content=content)
