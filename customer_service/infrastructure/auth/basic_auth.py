import base64
from typing import Dict

from customer_service.core.config import OperationsApiCredentials
from customer_service.core.exceptions import AuthenticationError
from customer_service.core.logging import get_logger

logger = get_logger(__name__)


class BasicAuthHandler:
    """Builds the Basic authentication header for an external API."""

    SCHEME = "Basic"

    def __init__(self, credentials: OperationsApiCredentials):
        """
        Initialize the basic authentication handler.

        The header value is computed once here; credentials are immutable for
        the lifetime of the handler.

        Args:
            credentials: Username and password, used exactly as configured

        Raises:
            AuthenticationError: If username or password is missing
        """
        if not credentials.username or not credentials.password:
            logger.error("Missing credentials for basic authentication")
            raise AuthenticationError("Username and password are required for basic authentication")

        self._header_value = f"{self.SCHEME} {self.encode_credentials(credentials.username, credentials.password)}"

    @property
    def header_value(self) -> str:
        """Value of the Authorization header."""
        return self._header_value

    def generate_header(self) -> Dict[str, str]:
        """
        Generate an Authorization header for basic authentication.

        Returns:
            Authorization header dict
        """
        return {"Authorization": self._header_value}

    @staticmethod
    def encode_credentials(username: str, password: str) -> str:
        """
        Encode credentials to base64 for basic authentication.

        Args:
            username: Username
            password: Password

        Returns:
            Base64 of "username:password"
        """
        credentials = f"{username}:{password}"
        return base64.b64encode(credentials.encode("utf-8")).decode("ascii")
