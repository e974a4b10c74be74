from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class OperationsItem(BaseModel):
    """Base schema for items returned by the operations API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ExchangeRateItem(OperationsItem):
    """Exchange rate of a currency for a given date (date as sent upstream, dd-MM-yyyy)."""
    rate: Decimal
    date: str
    currency_code: Optional[str] = None


class LegalHolidayItem(OperationsItem):
    """A legal holiday within the requested range."""
    date: str
    description: Optional[str] = None
    type: Optional[str] = None
