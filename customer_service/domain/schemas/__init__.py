"""Wire schemas (pydantic) for requests, responses and envelopes."""

from customer_service.domain.schemas.envelope import ResponseEnvelope
from customer_service.domain.schemas.customer import (
    CreateCustomerRequest,
    CreateCustomerRequestV2,
    CustomerResponse,
    CustomerResponseV2,
    UpdateCustomerRequest,
    UpdateCustomerRequestV2,
)
from customer_service.domain.schemas.operations import ExchangeRateItem, LegalHolidayItem

__all__ = [
    "ResponseEnvelope",
    "CreateCustomerRequest",
    "CreateCustomerRequestV2",
    "CustomerResponse",
    "CustomerResponseV2",
    "UpdateCustomerRequest",
    "UpdateCustomerRequestV2",
    "ExchangeRateItem",
    "LegalHolidayItem",
]
