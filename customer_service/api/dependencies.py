from fastapi import Depends, Request

from customer_service.core.config import Settings, get_settings
from customer_service.core.exceptions import AuthenticationError
from customer_service.core.logging import get_logger
from customer_service.domain.interfaces.repository import CustomerRepositoryInterface
from customer_service.infrastructure.clients.operations_api import OperationsApiClient
from customer_service.infrastructure.repositories.customer_repository import SqlAlchemyCustomerRepository
from customer_service.services.customer_handler import CustomerHandler

# Initialize logger
logger = get_logger(__name__)


def get_app_settings(request: Request) -> Settings:
    """
    Dependency for providing the settings the application was built with.

    Returns:
        Settings stored on the application state, or the cached global settings
    """
    return getattr(request.app.state, "settings", None) or get_settings()


async def get_customer_repository(request: Request) -> CustomerRepositoryInterface:
    """
    Dependency for providing the customer repository.

    The repository is bound to the session factory created at startup.
    """
    return SqlAlchemyCustomerRepository(request.app.state.session_factory)


async def get_customer_handler(
    repository: CustomerRepositoryInterface = Depends(get_customer_repository)
) -> CustomerHandler:
    """Dependency for providing the customer handler."""
    return CustomerHandler(repository)


async def get_operations_client(request: Request) -> OperationsApiClient:
    """
    Dependency for providing the shared operations API client.

    Returns:
        The client created in the application lifespan

    Raises:
        AuthenticationError: If the service was started without operations API credentials
    """
    client = getattr(request.app.state, "operations_client", None)
    if client is None:
        logger.warning("Operations API requested but no credentials are configured")
        raise AuthenticationError("Operations API credentials are not configured")
    return client
