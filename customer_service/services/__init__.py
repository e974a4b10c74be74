"""
Services package for the Customer Service.

Services orchestrate application workflows, coordinating between domain
models, repositories and mappers. They depend on abstractions rather than
concrete implementations.
"""

from customer_service.services.customer_handler import CustomerHandler

__all__ = ["CustomerHandler"]
