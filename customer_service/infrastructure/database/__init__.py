from customer_service.infrastructure.database.connection import (
    build_engine,
    build_session_factory,
    init_models,
)
from customer_service.infrastructure.database.models import Base, CustomerRecord

__all__ = ["Base", "CustomerRecord", "build_engine", "build_session_factory", "init_models"]
