"""
Handler orchestrating the versioned customer resource.

The handler owns no storage. Every call re-reads what it needs from the
repository; mutations are existence-checked and return False instead of
raising when the customer is absent. Repository failures propagate unchanged.
"""

from typing import List, Optional, Sequence, TypeVar

from customer_service.core.logging import get_correlation_id, get_logger
from customer_service.domain.interfaces.repository import CustomerRepositoryInterface
from customer_service.domain.mapper import CustomerMapper
from customer_service.domain.schemas.customer import (
    CreateCustomerRequest,
    CreateCustomerRequestV2,
    CustomerResponse,
    CustomerResponseV2,
    UpdateCustomerRequest,
    UpdateCustomerRequestV2,
)
from customer_service.domain.schemas.envelope import ResponseEnvelope

T = TypeVar("T")

STATUS_OK = "200"
COMMENT_OK = "OK"


class CustomerHandler:
    """Version-aware CRUD protocol over the customer repository and mapper."""

    def __init__(
        self,
        repository: CustomerRepositoryInterface,
        mapper: Optional[CustomerMapper] = None
    ):
        """
        Initialize the handler with its collaborators.

        Args:
            repository: Customer storage
            mapper: Shape converter, a default CustomerMapper when omitted
        """
        self.repository = repository
        self.mapper = mapper or CustomerMapper()
        self.logger = get_logger(__name__)

    @staticmethod
    def _envelope(data: List[T], comment: str = COMMENT_OK) -> ResponseEnvelope[T]:
        return ResponseEnvelope(
            status=STATUS_OK,
            comment=comment,
            session_id=get_correlation_id(),
            data=data,
        )

    # Reads

    async def get_customers_v1(self) -> ResponseEnvelope[CustomerResponse]:
        """
        Get every customer in the v1 response shape.

        Returns:
            Envelope with status "200"; data is empty when there are no customers
        """
        customers = await self.repository.get_all()
        self.logger.debug(f"Retrieved {len(customers)} customers (v1)")
        return self._envelope([self.mapper.to_response(c) for c in customers])

    async def get_customers_v2(self, page: int, page_size: int) -> ResponseEnvelope[CustomerResponseV2]:
        """
        Get one page of customers in the v2 response shape.

        Args:
            page: 1-based page number
            page_size: Number of customers per page

        Returns:
            Envelope with status "200"; data is empty past the last page
        """
        customers = await self.repository.get_all(page, page_size)
        self.logger.debug(f"Retrieved {len(customers)} customers (v2, page={page}, page_size={page_size})")
        return self._envelope([self.mapper.to_response_v2(c) for c in customers])

    async def get_customer_by_id_v1(self, id: int) -> ResponseEnvelope[CustomerResponse]:
        """
        Get one customer in the v1 response shape.

        An absent customer is not an error: the envelope comes back with an
        empty data list, so callers must check its length.
        """
        customer = await self.repository.get_by_id(id)
        if customer is None:
            self.logger.info(f"Customer {id} not found")
            return self._envelope([], comment=f"Customer {id} not found")
        return self._envelope([self.mapper.to_response(customer)])

    async def get_customer_by_id_v2(self, id: int) -> ResponseEnvelope[CustomerResponseV2]:
        """Get one customer in the v2 response shape, same empty-data rule as v1."""
        customer = await self.repository.get_by_id(id)
        if customer is None:
            self.logger.info(f"Customer {id} not found")
            return self._envelope([], comment=f"Customer {id} not found")
        return self._envelope([self.mapper.to_response_v2(customer)])

    # Creates

    async def post_customers_v1(self, requests: Sequence[CreateCustomerRequest]) -> None:
        """
        Create a batch of customers from v1 requests.

        The batch is mapped in one pass and submitted as a single repository
        call, so a persistence failure aborts the whole batch.
        """
        await self._add_batch(requests)

    async def post_customers_v2(self, requests: Sequence[CreateCustomerRequestV2]) -> None:
        """Create a batch of customers from v2 requests (stored phone is "N/A")."""
        await self._add_batch(requests)

    async def _add_batch(self, requests: Sequence) -> None:
        if not requests:
            self.logger.debug("Empty customer batch, nothing to create")
            return
        write_models = self.mapper.to_write_models(requests)
        await self.repository.add_batch(write_models)
        self.logger.info(f"Created {len(write_models)} customers")

    # Mutations

    async def update_customer_v1(self, request: UpdateCustomerRequest) -> bool:
        """
        Replace a customer with the full field set of a v1 request.

        Existence is probed before any mapping or write.

        Args:
            request: Full replacement for the customer identified by request.id

        Returns:
            False if the customer does not exist (nothing written), True otherwise
        """
        if not await self.repository.exists(request.id):
            self.logger.info(f"Update skipped, customer {request.id} not found")
            return False

        write_model = self.mapper.to_write_model(request)
        await self.repository.update(write_model)
        self.logger.info(f"Customer {request.id} replaced (v1)")
        return True

    async def update_customer_v2(self, request: UpdateCustomerRequestV2) -> bool:
        """
        Apply a partial v2 update.

        The current customer is fetched, the request's present fields are
        merged over it, and the merged customer is written back.

        Args:
            request: Partial update for the customer identified by request.id

        Returns:
            False if the customer does not exist (nothing written), True otherwise
        """
        existing = await self.repository.get_by_id(request.id)
        if existing is None:
            self.logger.info(f"Update skipped, customer {request.id} not found")
            return False

        merged = self.mapper.merge(existing, request)
        write_model = self.mapper.to_write_model(merged)
        await self.repository.update(write_model)
        self.logger.info(f"Customer {request.id} updated (v2)")
        return True

    async def delete_customer_v1(self, id: int) -> bool:
        """
        Delete a customer after checking it exists.

        Returns:
            False if the customer does not exist (delete never attempted), True otherwise
        """
        exists = await self.repository.exists(id)
        if exists:
            await self.repository.delete(id)
            self.logger.info(f"Customer {id} deleted")
        else:
            self.logger.info(f"Delete skipped, customer {id} not found")
        return exists
