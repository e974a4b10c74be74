"""Authentication mechanisms for external API integrations."""

from customer_service.infrastructure.auth.basic_auth import BasicAuthHandler

__all__ = ["BasicAuthHandler"]
