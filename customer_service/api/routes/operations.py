from datetime import date

from fastapi import APIRouter, Depends, Query

from customer_service.api.dependencies import get_operations_client
from customer_service.core.exceptions import ValidationException
from customer_service.domain.schemas.envelope import ResponseEnvelope
from customer_service.domain.schemas.operations import ExchangeRateItem, LegalHolidayItem
from customer_service.infrastructure.clients.operations_api import OperationsApiClient

router = APIRouter(prefix="/operations", tags=["operations"])


@router.get(
    "/exchange-rate",
    response_model=ResponseEnvelope[ExchangeRateItem],
    summary="Get exchange rate"
)
async def get_exchange_rate(
    on_date: date = Query(..., alias="date"),
    currency_code: str = Query(..., min_length=1, alias="currencyCode"),
    client: OperationsApiClient = Depends(get_operations_client)
):
    """Gets the exchange rate of a currency on a date from the operations API."""
    return await client.get_exchange_rate(on_date, currency_code)


@router.get(
    "/legal-holidays",
    response_model=ResponseEnvelope[LegalHolidayItem],
    summary="Get legal holidays"
)
async def get_legal_holidays(
    from_date: date = Query(..., alias="fromDate"),
    to_date: date = Query(..., alias="toDate"),
    client: OperationsApiClient = Depends(get_operations_client)
):
    """Gets the legal holidays within a date range from the operations API."""
    if from_date > to_date:
        raise ValidationException(detail="fromDate must not be after toDate", field="fromDate")
    return await client.get_legal_holidays(from_date, to_date)
