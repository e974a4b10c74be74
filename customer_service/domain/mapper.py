"""
Mapping between wire shapes and the customer write/read models.

Every conversion is an explicit function over named fields so each version's
contract stays visible in one place.
"""

from typing import Iterable, List, Union

from customer_service.core.exceptions import ValidationException
from customer_service.core.logging import get_logger
from customer_service.domain.models.customer import Customer, CustomerWriteModel
from customer_service.domain.schemas.customer import (
    CreateCustomerRequest,
    CreateCustomerRequestV2,
    CustomerResponse,
    CustomerResponseV2,
    UpdateCustomerRequest,
    UpdateCustomerRequestV2,
)

logger = get_logger(__name__)

# Phone stored for customers created through a contract that has no phone field
DEFAULT_PHONE = "N/A"

WriteSource = Union[Customer, CreateCustomerRequest, CreateCustomerRequestV2, UpdateCustomerRequest]


class CustomerMapper:
    """Converts between request/response shapes and the domain models."""

    def to_write_model(self, source: WriteSource) -> CustomerWriteModel:
        """
        Maps a stored customer or a request to the write model.

        Args:
            source: Customer, v1/v2 create request or v1 update request

        Returns:
            CustomerWriteModel ready for the repository

        Raises:
            ValidationException: If the source type has no write mapping
        """
        if isinstance(source, (Customer, UpdateCustomerRequest)):
            return CustomerWriteModel(
                id=source.id,
                first_name=source.first_name,
                last_name=source.last_name,
                email=source.email,
                phone=source.phone,
            )
        if isinstance(source, CreateCustomerRequest):
            return CustomerWriteModel(
                first_name=source.first_name,
                last_name=source.last_name,
                email=source.email,
                phone=source.phone,
            )
        if isinstance(source, CreateCustomerRequestV2):
            return CustomerWriteModel(
                first_name=source.first_name,
                last_name=source.last_name,
                email=source.email,
                phone=DEFAULT_PHONE,
            )

        logger.error(f"Unsupported source for write mapping: {type(source).__name__}")
        raise ValidationException(
            detail=f"Cannot map {type(source).__name__} to a customer write model",
            code="unsupported_mapping"
        )

    def to_write_models(self, sources: Iterable[WriteSource]) -> List[CustomerWriteModel]:
        """Maps a whole batch in one pass."""
        return [self.to_write_model(source) for source in sources]

    def to_response(self, customer: Customer) -> CustomerResponse:
        """Maps a customer to the v1 response shape."""
        return CustomerResponse(
            id=customer.id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            email=customer.email,
            phone=customer.phone,
        )

    def to_response_v2(self, customer: Customer) -> CustomerResponseV2:
        """Maps a customer to the v2 response shape (no phone)."""
        return CustomerResponseV2(
            id=customer.id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            email=customer.email,
        )

    @staticmethod
    def merge(existing: Customer, partial: UpdateCustomerRequestV2) -> Customer:
        """
        Merges a partial v2 update onto an existing customer.

        Fields present on ``partial`` (not None) overwrite; absent fields keep
        the existing values. The id always comes from ``existing``. Neither
        argument is modified.

        Args:
            existing: Customer as currently stored
            partial: Partial update request

        Returns:
            A new Customer holding the merged values
        """
        return Customer(
            id=existing.id,
            first_name=partial.first_name if partial.first_name is not None else existing.first_name,
            last_name=partial.last_name if partial.last_name is not None else existing.last_name,
            email=partial.email if partial.email is not None else existing.email,
            phone=partial.phone if partial.phone is not None else existing.phone,
        )
