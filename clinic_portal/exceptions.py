"""
Global exception handlers.
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
import logging

from .auth.exceptions import AuthException
from .auth.repository import RepositoryUnavailableError

# Set up logging
logger = logging.getLogger(__name__)


async def auth_exception_handler(request: Request, exc: AuthException):
    """
    Handler for authentication and authorization exceptions.

    Args:
        request: The request that caused the exception
        exc: The exception instance

    Returns:
        JSONResponse: ``{"error": <code>, "detail": <message>}``
    """
    logger.info(f"{request.method} {request.url.path} rejected: {exc.error_code}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error_code, "detail": exc.detail},
        headers=exc.headers,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation exceptions.

    Args:
        request: The request that caused the exception
        exc: The validation exception instance

    Returns:
        JSONResponse: Standardized error response with validation details
    """
    errors = jsonable_encoder(exc.errors(), exclude={"input"})
    logger.warning(f"Validation error on {request.url.path}: {[error.get('loc') for error in errors]}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "detail": "Validation error",
            "errors": errors,
        }
    )


async def repository_unavailable_handler(request: Request, exc: RepositoryUnavailableError):
    """
    Handler for user store outages surfaced outside the async services.
    """
    logger.error(f"Repository unavailable during {request.method} {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"error": "service_unavailable", "detail": "Service temporarily unavailable"},
    )


# Register exception handlers with FastAPI app
def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AuthException, auth_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RepositoryUnavailableError, repository_unavailable_handler)
