from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CustomerSchema(BaseModel):
    """Base Pydantic schema for customer payloads (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# v1 shapes

class CreateCustomerRequest(CustomerSchema):
    """Schema for creating customers (v1)"""
    first_name: str = Field(..., min_length=1, description="First name")
    last_name: str = Field(..., min_length=1, description="Last name")
    email: str = Field(..., min_length=3, description="Email address")
    phone: str = Field(..., min_length=1, description="Phone number")


class UpdateCustomerRequest(CustomerSchema):
    """Schema for replacing a customer (v1). Every field is required."""
    id: int = Field(..., gt=0, description="Identifier of the customer to replace")
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    phone: str = Field(..., min_length=1)


class CustomerResponse(CustomerSchema):
    """Schema for customer responses (v1)"""
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str


# v2 shapes

class CreateCustomerRequestV2(CustomerSchema):
    """Schema for creating customers (v2). Phone is not part of this contract."""
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)


class UpdateCustomerRequestV2(CustomerSchema):
    """
    Schema for partially updating a customer (v2).

    Fields left as None are not part of the update and keep their stored value.
    """
    id: int = Field(..., gt=0)
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=3)
    phone: Optional[str] = Field(None, min_length=1)


class CustomerResponseV2(CustomerSchema):
    """Schema for customer responses (v2). Phone is intentionally omitted."""
    id: int
    first_name: str
    last_name: str
    email: str
