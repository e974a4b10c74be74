"""
Database connection management.

Provides the async SQLAlchemy engine, the session factory and table creation.
"""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from customer_service.core.logging import get_logger
from customer_service.infrastructure.database.models import Base

logger = get_logger(__name__)


def is_memory_sqlite(url: str) -> bool:
    """Checks if the URL points at an in-memory SQLite database."""
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create the async SQLAlchemy engine.

    In-memory SQLite gets a StaticPool so every session shares one database.

    Args:
        url: Async database URL (e.g. sqlite+aiosqlite:///./customers.db)
        echo: Log emitted SQL

    Returns:
        AsyncEngine: Configured async engine
    """
    if is_memory_sqlite(url):
        return create_async_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(url, echo=echo, pool_pre_ping=True)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create the async session factory.

    Sessions do not expire objects on commit, so mapped rows stay readable
    after the transaction ends.
    """
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


async def init_models(engine: AsyncEngine) -> None:
    """Create every table that does not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready")
