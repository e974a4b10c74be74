from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from customer_service.domain.models.customer import Customer, CustomerWriteModel


class CustomerRepositoryInterface(ABC):
    """
    Repository interface for customer storage.
    Following the Repository pattern to abstract data access.

    Every operation is a single awaitable call that either returns its result
    or raises; implementations must be safe to call concurrently.
    """

    @abstractmethod
    async def exists(self, id: int) -> bool:
        """
        Checks whether a customer with the given ID is stored.

        Args:
            id: The ID of the customer

        Returns:
            True if the customer exists

        Raises:
            RepositoryError: If data access fails
        """
        pass

    @abstractmethod
    async def get_by_id(self, id: int) -> Optional[Customer]:
        """
        Retrieves a customer by its ID.

        Args:
            id: The ID of the customer to retrieve

        Returns:
            The customer if found, None otherwise

        Raises:
            RepositoryError: If data access fails
        """
        pass

    @abstractmethod
    async def get_all(
        self,
        page: Optional[int] = None,
        page_size: Optional[int] = None
    ) -> List[Customer]:
        """
        Lists customers ordered by ID, optionally paged.

        Args:
            page: 1-based page number, None for every customer
            page_size: Number of customers per page

        Returns:
            List of customers, empty when there are none

        Raises:
            RepositoryError: If listing fails
        """
        pass

    @abstractmethod
    async def add_batch(self, customers: Sequence[CustomerWriteModel]) -> None:
        """
        Stores a batch of new customers in a single all-or-nothing call.

        Raises:
            RepositoryError: If any customer of the batch cannot be stored
        """
        pass

    @abstractmethod
    async def update(self, customer: CustomerWriteModel) -> None:
        """
        Replaces the stored fields of the customer identified by ``customer.id``.

        Raises:
            RepositoryError: If the update fails
        """
        pass

    @abstractmethod
    async def delete(self, id: int) -> None:
        """
        Deletes a customer by its ID.

        Raises:
            RepositoryError: If deletion fails
        """
        pass
