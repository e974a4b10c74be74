"""
Domain package for the Customer Service.

This package contains domain models, wire schemas, the repository interface
and the mapper between them. The domain layer is independent of the web
framework and of the persistence implementation.
"""
