from customer_service.domain.interfaces.repository import CustomerRepositoryInterface

__all__ = ["CustomerRepositoryInterface"]
