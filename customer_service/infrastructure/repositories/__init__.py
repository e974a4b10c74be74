from customer_service.infrastructure.repositories.customer_repository import SqlAlchemyCustomerRepository

__all__ = ["SqlAlchemyCustomerRepository"]
