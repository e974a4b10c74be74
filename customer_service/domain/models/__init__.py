"""
Domain models package for the Customer Service.

Domain models are persistence-agnostic and focus only on the business domain.
"""

from customer_service.domain.models.customer import Customer, CustomerWriteModel

__all__ = ["Customer", "CustomerWriteModel"]
