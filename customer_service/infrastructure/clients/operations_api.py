"""
Client for the external financial-operations API.

Exposes exchange-rate and legal-holiday lookups. Every request carries the
Basic Authorization header computed at construction. Successful responses are
parsed into ``ResponseEnvelope`` and normalized so ``data`` is never None;
any non-2xx status raises ``UpstreamHttpError`` with the status and body.
No retries are performed.
"""

import time
from datetime import date
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from customer_service.core.config import OperationsApiCredentials, Settings
from customer_service.core.exceptions import (
    MalformedUpstreamPayloadError,
    UpstreamConnectionError,
    UpstreamHttpError,
)
from customer_service.core.logging import get_logger
from customer_service.domain.schemas.envelope import ResponseEnvelope
from customer_service.domain.schemas.operations import ExchangeRateItem, LegalHolidayItem
from customer_service.infrastructure.auth.basic_auth import BasicAuthHandler

logger = get_logger(__name__)

ItemT = TypeVar("ItemT", bound=BaseModel)

QUERY_DATE_FORMAT = "%Y-%m-%d"


class OperationsApiClient:
    """Authenticated, normalizing client for the operations API."""

    def __init__(
        self,
        base_address: str,
        credentials: OperationsApiCredentials,
        timeout: float = 10.0,
        exchange_rate_path: str = "exchange-rate",
        legal_holidays_path: str = "legal-holidays",
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize the operations API client.

        Args:
            base_address: Base URL of the operations API
            credentials: Username and password for Basic authentication
            timeout: Request timeout in seconds for the owned HTTP client
            exchange_rate_path: Path of the exchange-rate endpoint
            legal_holidays_path: Path of the legal-holiday endpoint
            http_client: Optional HTTP client; when omitted one is created and owned

        Raises:
            AuthenticationError: If credentials are missing
        """
        self.base_address = base_address.rstrip("/")
        self.exchange_rate_path = exchange_rate_path
        self.legal_holidays_path = legal_holidays_path
        self._auth = BasicAuthHandler(credentials)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

        logger.info(f"Operations API client initialized for {self.base_address}")

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None
    ) -> "OperationsApiClient":
        """Build a client from application settings."""
        return cls(
            base_address=settings.OPERATIONS_API_BASE_ADDRESS,
            credentials=settings.operations_api_credentials(),
            timeout=settings.OPERATIONS_API_TIMEOUT,
            exchange_rate_path=settings.OPERATIONS_API_EXCHANGE_RATE_PATH,
            legal_holidays_path=settings.OPERATIONS_API_LEGAL_HOLIDAYS_PATH,
            http_client=http_client,
        )

    async def get_exchange_rate(
        self,
        on_date: date,
        currency_code: str
    ) -> ResponseEnvelope[ExchangeRateItem]:
        """
        Look up the exchange rate of a currency on a date.

        Args:
            on_date: Date of the rate
            currency_code: Currency code, sent as given (e.g. "UF", "USD")

        Returns:
            Envelope whose data is a list (possibly empty), never None

        Raises:
            UpstreamHttpError: If the API answers with a non-2xx status
            MalformedUpstreamPayloadError: If the body is not a valid envelope
            UpstreamConnectionError: If the API cannot be reached
        """
        params = {
            "date": on_date.strftime(QUERY_DATE_FORMAT),
            "currencyCode": currency_code,
        }
        return await self._get(self.exchange_rate_path, params, ExchangeRateItem)

    async def get_legal_holidays(
        self,
        from_date: date,
        to_date: date
    ) -> ResponseEnvelope[LegalHolidayItem]:
        """
        Look up legal holidays between two dates.

        Same envelope, normalization and failure contract as get_exchange_rate.
        """
        params = {
            "fromDate": from_date.strftime(QUERY_DATE_FORMAT),
            "toDate": to_date.strftime(QUERY_DATE_FORMAT),
        }
        return await self._get(self.legal_holidays_path, params, LegalHolidayItem)

    def build_url(self, path: str) -> str:
        """Builds a complete URL from the base address and an endpoint path."""
        return f"{self.base_address}/{path.lstrip('/')}"

    async def _get(
        self,
        path: str,
        params: Dict[str, Any],
        item_type: Type[ItemT]
    ) -> ResponseEnvelope[ItemT]:
        url = self.build_url(path)

        # asyncio.CancelledError is not an Exception subclass and propagates as-is
        try:
            start_time = time.time()
            response = await self._client.get(
                url,
                params=params,
                headers=self._auth.generate_header()
            )
        except httpx.RequestError as e:
            raise UpstreamConnectionError(
                detail=f"Could not reach the operations API: {e.__class__.__name__}",
                context={"url": url},
                original_exception=e
            ) from e

        duration = time.time() - start_time
        logger.debug(
            f"Operations API request completed in {duration:.2f}s",
            extra={"url": url, "status_code": response.status_code}
        )

        if not response.is_success:
            raise UpstreamHttpError(
                upstream_status=response.status_code,
                body=response.text,
                url=url
            )

        try:
            envelope = ResponseEnvelope[item_type].model_validate_json(response.content)
        except ValidationError as e:
            raise MalformedUpstreamPayloadError(
                body=response.text,
                original_exception=e,
                url=url
            ) from e

        return self._normalize(envelope)

    @staticmethod
    def _normalize(envelope: ResponseEnvelope[ItemT]) -> ResponseEnvelope[ItemT]:
        """Replace a missing payload with an empty list; everything else is kept."""
        if envelope.data is None:
            return envelope.model_copy(update={"data": []})
        return envelope

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "OperationsApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
