"""Clients for external services."""

from customer_service.infrastructure.clients.operations_api import OperationsApiClient

__all__ = ["OperationsApiClient"]
