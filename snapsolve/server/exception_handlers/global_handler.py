"""
Exception Handlers for the FastAPI Application.

Unhandled exceptions are logged with an error ID and returned as a generic
500. Proxy client failures and use-case failures carry a user-facing message
and are returned with that message as ``detail``.
"""

import traceback

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from snapsolve.clients.errors import ProxyApiError
from snapsolve.core.logging_config import get_logger
from snapsolve.services.solver import EmptyQueryError, NoCreditsError, ServiceError

logger = get_logger(__name__)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


async def proxy_error_handler(request: Request, exc: ProxyApiError) -> JSONResponse:
    """Upstream proxy failure: 502 with the user-facing message."""
    logger.warning(f"Proxy error in {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": exc.user_message, "error_type": type(exc).__name__},
    )


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if isinstance(exc, NoCreditsError):
        code = status.HTTP_402_PAYMENT_REQUIRED
    elif isinstance(exc, EmptyQueryError):
        code = status.HTTP_400_BAD_REQUEST
    else:
        code = status.HTTP_502_BAD_GATEWAY
    logger.info(f"Service error in {request.method} {request.url.path}: {exc.user_message}")
    return JSONResponse(status_code=code, content={"detail": exc.user_message, "error_type": type(exc).__name__})


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(ProxyApiError, proxy_error_handler)
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
