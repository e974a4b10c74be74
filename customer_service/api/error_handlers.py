from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from customer_service.core.exceptions import (
    HTTP_422_UNPROCESSABLE,
    APIException,
    IntegrationException,
    NotFoundError,
    RepositoryError,
)
from customer_service.core.logging import get_correlation_id, get_logger

# Initialize logger
logger = get_logger(__name__)


async def handle_api_exception(request: Request, exc: APIException) -> JSONResponse:
    """
    Handle APIException instances.

    Args:
        request: FastAPI request object
        exc: APIException instance

    Returns:
        JSONResponse: Formatted error response
    """
    logger.error(
        f"API Exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "error_code": exc.code,
            "context": exc.context
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def handle_not_found_exception(request: Request, exc: NotFoundError) -> JSONResponse:
    """Handle resource not found errors."""
    logger.info(
        f"Resource not found: {exc.detail}",
        extra={
            "resource_type": exc.context.get("resource_type"),
            "resource_id": exc.context.get("resource_id")
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def handle_repository_exception(request: Request, exc: RepositoryError) -> JSONResponse:
    """
    Handle persistence failures.

    The original database error is logged but never returned to the client.
    """
    logger.error(
        f"Repository error: {exc.detail}",
        extra={"original_error": str(exc.original_exception) if exc.original_exception else None},
        exc_info=exc.original_exception
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def handle_integration_exception(request: Request, exc: IntegrationException) -> JSONResponse:
    """
    Handle external API integration errors.

    Args:
        request: FastAPI request object
        exc: IntegrationException instance

    Returns:
        JSONResponse: Formatted integration error response
    """
    logger.error(
        f"Integration error: {exc.detail}",
        extra={
            "original_error": exc.context.get("original_error"),
            "context": exc.context
        }
    )

    # Remove sensitive information from the response
    # but keep it in the logs for debugging
    safe_context = exc.context.copy()
    if "authorization" in safe_context:
        safe_context["authorization"] = "[REDACTED]"

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.code,
                "message": exc.detail,
                "status_code": exc.status_code,
                "context": safe_context
            }
        }
    )


async def handle_request_validation_exception(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors."""
    errors = [
        {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]
    logger.warning("Request validation error", extra={"errors": errors})

    return JSONResponse(
        status_code=HTTP_422_UNPROCESSABLE,
        content={
            "error": {
                "code": "validation_error",
                "message": "Request validation error",
                "status_code": HTTP_422_UNPROCESSABLE,
                "context": {
                    "errors": errors
                }
            }
        }
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions.

    This handler runs in the server-error middleware, outside the
    correlation-ID middleware, so it sets the X-Correlation-ID header itself.
    """
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "internal_server_error",
                "message": "An unexpected error occurred",
                "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR
            }
        },
        headers={"X-Correlation-ID": get_correlation_id()}
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Configure global exception handlers for the FastAPI application.

    Handlers are resolved along the exception's MRO, so the most specific one wins.
    """
    app.add_exception_handler(NotFoundError, handle_not_found_exception)
    app.add_exception_handler(RepositoryError, handle_repository_exception)
    app.add_exception_handler(IntegrationException, handle_integration_exception)
    app.add_exception_handler(APIException, handle_api_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)
