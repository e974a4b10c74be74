"""
Fixtures for exercising the HTTP API in-process.

The application runs its real lifespan against an in-memory database; requests
go through httpx.ASGITransport.
"""

import httpx
import pytest
from fastapi import FastAPI

from customer_service.core.config import Settings
from customer_service.domain.models.customer import CustomerWriteModel
from customer_service.infrastructure.repositories.customer_repository import SqlAlchemyCustomerRepository
from customer_service.main import create_application


@pytest.fixture
async def app(test_settings: Settings):
    """Create the application and run its startup and shutdown around the test."""
    application = create_application(test_settings)
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def client(app: FastAPI):
    """Provide an HTTP client bound to the application."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def app_repository(app: FastAPI) -> SqlAlchemyCustomerRepository:
    """Repository sharing the application's database."""
    return SqlAlchemyCustomerRepository(app.state.session_factory)


@pytest.fixture
async def seeded_customer(app_repository: SqlAlchemyCustomerRepository):
    """Store one customer and return it as read back from the database."""
    await app_repository.add_batch([
        CustomerWriteModel(first_name="Ana", last_name="Garcia", email="ana.garcia@test.com", phone="87654321")
    ])
    return await app_repository.get_by_email("ana.garcia@test.com")
