"""
Test suite for OperationsApiClient.

The upstream API is replaced with httpx.MockTransport, so every request the
client makes is observable and every response is scripted.
"""

import asyncio
import json
from datetime import date
from decimal import Decimal
from typing import Callable, List

import httpx
import pytest

from customer_service.core.config import OperationsApiCredentials
from customer_service.core.exceptions import (
    AuthenticationError,
    MalformedUpstreamPayloadError,
    UpstreamConnectionError,
    UpstreamHttpError,
)
from customer_service.domain.schemas.operations import ExchangeRateItem
from customer_service.infrastructure.clients.operations_api import OperationsApiClient

BASE_ADDRESS = "http://tests.com/apioperaciones/"
EXPECTED_AUTH = "Basic dGVzdHVzZXI6dGVzdHBhc3M="


def build_client(
    credentials: OperationsApiCredentials,
    responder: Callable[[httpx.Request], httpx.Response],
    captured: List[httpx.Request],
) -> OperationsApiClient:
    """Build a client whose HTTP traffic goes to ``responder``."""

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return responder(request)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OperationsApiClient(BASE_ADDRESS, credentials, http_client=http_client)


def json_response(status_code: int, payload) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))


class TestGetExchangeRate:
    """Test suite for exchange-rate lookups."""

    @pytest.mark.asyncio
    async def test_should_return_parsed_rate(self, credentials: OperationsApiCredentials) -> None:
        # Arrange
        captured: List[httpx.Request] = []
        payload = {
            "status": "200",
            "comment": "OK",
            "sessionId": "abc",
            "data": [{"rate": 36.5, "date": "06-06-2025", "currencyCode": "UF"}],
        }
        client = build_client(credentials, lambda r: json_response(200, payload), captured)

        # Act
        result = await client.get_exchange_rate(date(2025, 6, 6), "UF")

        # Assert
        assert result.status == "200"
        assert result.session_id == "abc"
        assert len(result.data) == 1
        assert isinstance(result.data[0], ExchangeRateItem)
        assert result.data[0].rate == Decimal("36.5")
        assert result.data[0].date == "06-06-2025"

        request = captured[0]
        assert request.method == "GET"
        assert request.url.path == "/apioperaciones/exchange-rate"
        assert request.url.params["date"] == "2025-06-06"
        assert request.url.params["currencyCode"] == "UF"
        assert request.headers["Authorization"] == EXPECTED_AUTH

    @pytest.mark.asyncio
    async def test_empty_data_should_keep_envelope_fields(self, credentials: OperationsApiCredentials) -> None:
        captured: List[httpx.Request] = []
        payload = {"status": "200", "comment": "Sin datos", "data": []}
        client = build_client(credentials, lambda r: json_response(200, payload), captured)

        result = await client.get_exchange_rate(date(2025, 6, 6), "USD")

        assert result.data == []
        assert result.comment == "Sin datos"

    @pytest.mark.asyncio
    async def test_null_data_should_be_normalized_to_empty_list(
        self, credentials: OperationsApiCredentials
    ) -> None:
        captured: List[httpx.Request] = []
        payload = {"status": "200", "comment": "Sin datos", "data": None}
        client = build_client(credentials, lambda r: json_response(200, payload), captured)

        result = await client.get_exchange_rate(date(2025, 6, 6), "USD")

        assert result.data == []
        assert result.status == "200"
        assert result.comment == "Sin datos"

    @pytest.mark.asyncio
    async def test_missing_data_key_should_be_normalized_to_empty_list(
        self, credentials: OperationsApiCredentials
    ) -> None:
        captured: List[httpx.Request] = []
        client = build_client(credentials, lambda r: json_response(200, {"status": "200"}), captured)

        result = await client.get_exchange_rate(date(2025, 6, 6), "USD")

        assert result.data == []

    @pytest.mark.asyncio
    async def test_server_error_should_raise_upstream_http_error(
        self, credentials: OperationsApiCredentials
    ) -> None:
        # Arrange
        captured: List[httpx.Request] = []
        client = build_client(
            credentials, lambda r: httpx.Response(500, text="Internal Server Error"), captured
        )

        # Act
        with pytest.raises(UpstreamHttpError) as exc_info:
            await client.get_exchange_rate(date(2025, 6, 6), "UF")

        # Assert
        assert exc_info.value.upstream_status == 500
        assert exc_info.value.body == "Internal Server Error"
        assert exc_info.value.status_code == 502
        assert len(captured) == 1

    @pytest.mark.asyncio
    async def test_non_success_with_null_data_should_raise_not_normalize(
        self, credentials: OperationsApiCredentials
    ) -> None:
        captured: List[httpx.Request] = []
        payload = {"status": "404", "comment": "No encontrado", "data": None}
        client = build_client(credentials, lambda r: json_response(404, payload), captured)

        with pytest.raises(UpstreamHttpError) as exc_info:
            await client.get_exchange_rate(date(2025, 6, 6), "UF")

        assert exc_info.value.upstream_status == 404
        assert "No encontrado" in exc_info.value.body

    @pytest.mark.asyncio
    async def test_malformed_body_should_raise_malformed_payload_error(
        self, credentials: OperationsApiCredentials
    ) -> None:
        captured: List[httpx.Request] = []
        client = build_client(credentials, lambda r: httpx.Response(200, text="<html>oops</html>"), captured)

        with pytest.raises(MalformedUpstreamPayloadError) as exc_info:
            await client.get_exchange_rate(date(2025, 6, 6), "UF")

        assert exc_info.value.body == "<html>oops</html>"

    @pytest.mark.asyncio
    async def test_wrong_data_shape_should_raise_malformed_payload_error(
        self, credentials: OperationsApiCredentials
    ) -> None:
        captured: List[httpx.Request] = []
        client = build_client(credentials, lambda r: json_response(200, {"data": "not-a-list"}), captured)

        with pytest.raises(MalformedUpstreamPayloadError):
            await client.get_exchange_rate(date(2025, 6, 6), "UF")

    @pytest.mark.asyncio
    async def test_transport_failure_should_raise_connection_error(
        self, credentials: OperationsApiCredentials
    ) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        captured: List[httpx.Request] = []
        client = build_client(credentials, refuse, captured)

        with pytest.raises(UpstreamConnectionError) as exc_info:
            await client.get_exchange_rate(date(2025, 6, 6), "UF")

        assert exc_info.value.status_code == 503
        assert isinstance(exc_info.value.original_exception, httpx.ConnectError)


class TestGetLegalHolidays:
    """Test suite for legal-holiday lookups."""

    @pytest.mark.asyncio
    async def test_should_send_range_and_parse_items(self, credentials: OperationsApiCredentials) -> None:
        captured: List[httpx.Request] = []
        payload = {
            "status": "200",
            "comment": "OK",
            "data": [
                {"date": "01-01-2025", "description": "Año Nuevo", "type": "Civil"},
                {"date": "18-09-2025", "description": "Independencia Nacional", "type": "Civil"},
            ],
        }
        client = build_client(credentials, lambda r: json_response(200, payload), captured)

        result = await client.get_legal_holidays(date(2025, 1, 1), date(2025, 12, 31))

        assert [h.description for h in result.data] == ["Año Nuevo", "Independencia Nacional"]
        request = captured[0]
        assert request.url.path == "/apioperaciones/legal-holidays"
        assert request.url.params["fromDate"] == "2025-01-01"
        assert request.url.params["toDate"] == "2025-12-31"

    @pytest.mark.asyncio
    async def test_null_data_should_be_normalized_to_empty_list(
        self, credentials: OperationsApiCredentials
    ) -> None:
        captured: List[httpx.Request] = []
        client = build_client(credentials, lambda r: json_response(200, {"status": "200", "data": None}), captured)

        result = await client.get_legal_holidays(date(2025, 1, 1), date(2025, 1, 31))

        assert result.data == []


class TestClientBehaviour:
    """Test suite for cross-cutting client behaviour."""

    @pytest.mark.asyncio
    async def test_every_request_should_carry_the_same_auth_header(
        self, credentials: OperationsApiCredentials
    ) -> None:
        captured: List[httpx.Request] = []
        client = build_client(credentials, lambda r: json_response(200, {"data": []}), captured)

        await client.get_exchange_rate(date(2025, 6, 6), "UF")
        await client.get_legal_holidays(date(2025, 1, 1), date(2025, 1, 31))
        await client.get_exchange_rate(date(2025, 6, 7), "USD")

        assert len(captured) == 3
        assert {r.headers["Authorization"] for r in captured} == {EXPECTED_AUTH}

    def test_missing_credentials_should_fail_at_construction(self) -> None:
        with pytest.raises(AuthenticationError):
            OperationsApiClient(BASE_ADDRESS, OperationsApiCredentials(username="", password=""))

    def test_build_url_should_join_without_duplicate_slashes(self, credentials: OperationsApiCredentials) -> None:
        client = OperationsApiClient(
            BASE_ADDRESS, credentials, http_client=httpx.AsyncClient(transport=httpx.MockTransport(lambda r: None))
        )

        assert client.build_url("/exchange-rate") == "http://tests.com/apioperaciones/exchange-rate"

    @pytest.mark.asyncio
    async def test_aclose_should_not_close_injected_client(self, credentials: OperationsApiCredentials) -> None:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: json_response(200, {"data": []})))

        async with OperationsApiClient(BASE_ADDRESS, credentials, http_client=http_client):
            pass

        assert not http_client.is_closed
        await http_client.aclose()

    @pytest.mark.asyncio
    async def test_aclose_should_close_owned_client(self, credentials: OperationsApiCredentials) -> None:
        client = OperationsApiClient(BASE_ADDRESS, credentials)

        await client.aclose()

        assert client._client.is_closed

    @pytest.mark.asyncio
    async def test_async_with_should_close_owned_client_on_exit(
        self, credentials: OperationsApiCredentials
    ) -> None:
        async with OperationsApiClient(BASE_ADDRESS, credentials) as client:
            assert not client._client.is_closed

        assert client._client.is_closed

    @pytest.mark.asyncio
    async def test_cancellation_should_abort_request_and_propagate(
        self, credentials: OperationsApiCredentials
    ) -> None:
        # Arrange
        request_started = asyncio.Event()

        async def slow_upstream(request: httpx.Request) -> httpx.Response:
            request_started.set()
            await asyncio.sleep(60)
            return json_response(200, {"data": []})

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(slow_upstream))
        client = OperationsApiClient(BASE_ADDRESS, credentials, http_client=http_client)
        task = asyncio.create_task(client.get_exchange_rate(date(2025, 6, 6), "UF"))
        await request_started.wait()

        # Act
        task.cancel()

        # Assert
        with pytest.raises(asyncio.CancelledError):
            await task
        assert task.cancelled()
        await http_client.aclose()
