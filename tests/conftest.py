"""
Shared test fixtures and configuration for the entire test suite.

Provides: repository mocks, sample customers, in-memory database sessions,
test settings.
"""

from unittest.mock import AsyncMock

import pytest

from customer_service.core.config import OperationsApiCredentials, Settings
from customer_service.domain.interfaces.repository import CustomerRepositoryInterface
from customer_service.domain.models.customer import Customer
from customer_service.infrastructure.database.connection import (
    build_engine,
    build_session_factory,
    init_models,
)
from customer_service.infrastructure.repositories.customer_repository import SqlAlchemyCustomerRepository

MEMORY_DB_URI = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def mock_repository() -> AsyncMock:
    """Provide a repository double whose async methods are AsyncMocks."""
    return AsyncMock(spec=CustomerRepositoryInterface)


@pytest.fixture
def sample_customer() -> Customer:
    """Provide a stored customer."""
    return Customer(
        id=1,
        first_name="Juan",
        last_name="Perez",
        email="juan.perez@test.com",
        phone="12345678",
    )


@pytest.fixture
def credentials() -> OperationsApiCredentials:
    """Provide operations API credentials."""
    return OperationsApiCredentials(username="testuser", password="testpass")


@pytest.fixture
def test_settings() -> Settings:
    """Provide settings pointing at an in-memory database and a fake upstream."""
    return Settings(
        DATABASE_URI=MEMORY_DB_URI,
        ENABLE_STRUCTURED_LOGGING=False,
        OPERATIONS_API_BASE_ADDRESS="http://tests.com/apioperaciones/",
        OPERATIONS_API_USERNAME="testuser",
        OPERATIONS_API_PASSWORD="testpass",
    )


@pytest.fixture
async def session_factory():
    """
    Create an in-memory SQLite database with the service tables.

    Yields:
        async_sessionmaker bound to the test engine
    """
    engine = build_engine(MEMORY_DB_URI)
    await init_models(engine)
    yield build_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def repository(session_factory) -> SqlAlchemyCustomerRepository:
    """Provide a repository over the in-memory database."""
    return SqlAlchemyCustomerRepository(session_factory)
