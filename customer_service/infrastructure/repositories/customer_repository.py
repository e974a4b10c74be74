from typing import List, Optional, Sequence

from sqlalchemy import delete, exists, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from customer_service.core.exceptions import RepositoryError
from customer_service.core.logging import get_logger
from customer_service.domain.interfaces.repository import CustomerRepositoryInterface
from customer_service.domain.models.customer import Customer, CustomerWriteModel
from customer_service.infrastructure.database.models import CustomerRecord

logger = get_logger(__name__)


class SqlAlchemyCustomerRepository(CustomerRepositoryInterface):
    """
    Repository for managing customer storage with SQLAlchemy.

    Each call opens its own session from the factory, so one instance can be
    shared across concurrent requests.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """
        Initialize the customer repository.

        Args:
            session_factory: Async session factory bound to the service's engine
        """
        self.session_factory = session_factory

    @staticmethod
    def _map_to_model(record: CustomerRecord) -> Customer:
        return Customer(
            id=record.id,
            first_name=record.first_name,
            last_name=record.last_name,
            email=record.email,
            phone=record.phone,
        )

    @staticmethod
    def _map_to_record(customer: CustomerWriteModel) -> CustomerRecord:
        return CustomerRecord(
            first_name=customer.first_name,
            last_name=customer.last_name,
            email=customer.email,
            phone=customer.phone,
        )

    async def exists(self, id: int) -> bool:
        try:
            async with self.session_factory() as session:
                result = await session.execute(select(exists().where(CustomerRecord.id == id)))
                return bool(result.scalar())
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to check customer {id}", original_exception=e) from e

    async def get_by_id(self, id: int) -> Optional[Customer]:
        try:
            async with self.session_factory() as session:
                record = await session.get(CustomerRecord, id)
                return self._map_to_model(record) if record else None
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to get customer {id}", original_exception=e) from e

    async def get_by_email(self, email: str) -> Optional[Customer]:
        """
        Retrieve the first customer with the given email.

        Args:
            email: Email address, compared exactly

        Returns:
            The customer if found, None otherwise
        """
        try:
            async with self.session_factory() as session:
                stmt = (
                    select(CustomerRecord)
                    .where(CustomerRecord.email == email)
                    .order_by(CustomerRecord.id)
                    .limit(1)
                )
                result = await session.execute(stmt)
                record = result.scalar_one_or_none()
                return self._map_to_model(record) if record else None
        except SQLAlchemyError as e:
            raise RepositoryError("Failed to get customer by email", original_exception=e) from e

    async def get_all(
        self,
        page: Optional[int] = None,
        page_size: Optional[int] = None
    ) -> List[Customer]:
        stmt = select(CustomerRecord).order_by(CustomerRecord.id)
        if page is not None and page_size is not None:
            stmt = stmt.offset((max(page, 1) - 1) * page_size).limit(page_size)

        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                return [self._map_to_model(r) for r in result.scalars().all()]
        except SQLAlchemyError as e:
            raise RepositoryError("Failed to list customers", original_exception=e) from e

    async def add_batch(self, customers: Sequence[CustomerWriteModel]) -> None:
        records = [self._map_to_record(c) for c in customers]
        async with self.session_factory() as session:
            try:
                session.add_all(records)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise RepositoryError(
                    f"Failed to create batch of {len(records)} customers",
                    original_exception=e
                ) from e
        logger.debug(f"Stored {len(records)} customers")

    async def update(self, customer: CustomerWriteModel) -> None:
        if customer.is_new():
            raise RepositoryError("Cannot update a customer without id")

        stmt = (
            update(CustomerRecord)
            .where(CustomerRecord.id == customer.id)
            .values(
                first_name=customer.first_name,
                last_name=customer.last_name,
                email=customer.email,
                phone=customer.phone,
            )
        )
        async with self.session_factory() as session:
            try:
                await session.execute(stmt)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise RepositoryError(f"Failed to update customer {customer.id}", original_exception=e) from e

    async def delete(self, id: int) -> None:
        async with self.session_factory() as session:
            try:
                await session.execute(delete(CustomerRecord).where(CustomerRecord.id == id))
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise RepositoryError(f"Failed to delete customer {id}", original_exception=e) from e
