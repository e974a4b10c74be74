from fastapi import status
from typing import Any, Dict, Optional, Union

# status.HTTP_422_UNPROCESSABLE_ENTITY is deprecated in current Starlette
HTTP_422_UNPROCESSABLE = 422


class APIException(Exception):
    """
    Base exception for API errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        code: str = "internal_error",
        context: Optional[Dict[str, Any]] = None
    ):
        self.status_code = status_code
        self.detail = detail
        self.code = code
        self.context = context or {}
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for consistent response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.detail,
                "status_code": self.status_code,
                "context": self.context
            }
        }


class ValidationException(APIException):
    """Exception raised when data validation fails."""

    def __init__(
        self,
        detail: str = "Validation error",
        code: str = "validation_error",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        merged_context = {"field": field} if field else {}
        if context:
            merged_context.update(context)

        super().__init__(
            status_code=HTTP_422_UNPROCESSABLE,
            detail=detail,
            code=code,
            context=merged_context
        )


class NotFoundError(APIException):
    """Exception raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Union[str, int],
        detail: Optional[str] = None,
        code: str = "not_found_error",
        context: Optional[Dict[str, Any]] = None
    ):
        if detail is None:
            detail = f"{resource_type} with id '{resource_id}' not found"

        merged_context = {
            "resource_type": resource_type,
            "resource_id": str(resource_id)
        }
        if context:
            merged_context.update(context)

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            code=code,
            context=merged_context
        )


class AuthenticationError(APIException):
    """Exception raised when credentials for an external API are missing."""

    def __init__(
        self,
        detail: str = "Authentication failed",
        code: str = "authentication_error",
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            code=code,
            context=context
        )


class RepositoryError(APIException):
    """Exception raised when the persistence layer fails."""

    def __init__(
        self,
        detail: str = "Persistence error",
        code: str = "repository_error",
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            code=code,
            context=context
        )
        self.original_exception = original_exception


class IntegrationException(APIException):
    """Exception raised when an external API integration fails."""

    def __init__(
        self,
        detail: str = "External API integration error",
        code: str = "integration_error",
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(status_code=status_code, detail=detail, code=code, context=context)
        self.original_exception = original_exception

        # Add original exception info to context if available
        if original_exception and self.context is not None:
            self.context["original_error"] = str(original_exception)


class UpstreamHttpError(IntegrationException):
    """
    Exception raised when the operations API answers with a non-2xx status.

    Carries the upstream status code and raw body for diagnostics.
    """

    def __init__(
        self,
        upstream_status: int,
        body: str,
        url: Optional[str] = None,
        detail: Optional[str] = None
    ):
        self.upstream_status = upstream_status
        self.body = body
        context: Dict[str, Any] = {"upstream_status": upstream_status, "body": body}
        if url:
            context["url"] = url
        super().__init__(
            detail=detail or f"Operations API responded with status {upstream_status}",
            code="upstream_http_error",
            context=context
        )


class MalformedUpstreamPayloadError(IntegrationException):
    """Exception raised when a successful upstream body is not a valid envelope."""

    def __init__(
        self,
        body: str,
        original_exception: Optional[Exception] = None,
        url: Optional[str] = None
    ):
        self.body = body
        context: Dict[str, Any] = {"body": body}
        if url:
            context["url"] = url
        super().__init__(
            detail="Operations API returned a malformed response envelope",
            code="malformed_upstream_payload",
            context=context,
            original_exception=original_exception
        )


class UpstreamConnectionError(IntegrationException):
    """Exception raised when the operations API cannot be reached."""

    def __init__(
        self,
        detail: str = "Could not reach the operations API",
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(
            detail=detail,
            code="upstream_connection_error",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            context=context,
            original_exception=original_exception
        )
