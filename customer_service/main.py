import time
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from customer_service.api.error_handlers import register_exception_handlers
from customer_service.core.config import Settings, get_settings, load_env_file
from customer_service.core.logging import configure_logging, get_logger, set_correlation_id
from customer_service.infrastructure.clients.operations_api import OperationsApiClient
from customer_service.infrastructure.database.connection import (
    build_engine,
    build_session_factory,
    init_models,
)

logger = get_logger(__name__)


def build_lifespan(settings: Settings) -> Callable[[FastAPI], AsyncContextManager[None]]:
    """
    Build the lifespan handler that owns the engine and the operations client.

    Args:
        settings: Settings the application was created with
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(f"Starting up {settings.PROJECT_NAME}")

        engine = build_engine(settings.DATABASE_URI, echo=settings.DATABASE_ECHO)
        await init_models(engine)
        app.state.engine = engine
        app.state.session_factory = build_session_factory(engine)

        credentials = settings.operations_api_credentials()
        if credentials.username and credentials.password:
            app.state.operations_client = OperationsApiClient.from_settings(settings)
        else:
            logger.warning("Operations API credentials not configured, operations endpoints disabled")
            app.state.operations_client = None

        try:
            yield
        finally:
            logger.info(f"Shutting down {settings.PROJECT_NAME}")
            if app.state.operations_client is not None:
                await app.state.operations_client.aclose()
            await engine.dispose()

    return lifespan


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use; the cached environment settings when omitted

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        debug=settings.DEBUG,
        lifespan=build_lifespan(settings)
    )
    app.state.settings = settings

    configure_middleware(app, settings)
    register_exception_handlers(app)
    register_routers(app, settings)

    return app


def configure_middleware(app: FastAPI, settings: Settings) -> None:
    """
    Configure middleware components for the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request tracking middleware
    @app.middleware("http")
    async def add_correlation_id(request: Request, call_next: Callable):
        correlation_id = set_correlation_id(request.headers.get("X-Correlation-ID"))
        start_time = time.time()

        response = await call_next(request)

        response.headers["X-Correlation-ID"] = correlation_id
        process_time = time.time() - start_time
        logger.info(
            "Request completed",
            extra={
                "request_path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "process_time_ms": round(process_time * 1000, 2)
            }
        )
        return response


def register_routers(app: FastAPI, settings: Settings) -> None:
    """
    Register API routers with the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    # Import routers here to avoid circular imports
    from customer_service.api.routes import customers_v1, customers_v2, operations
    from customer_service.api.routes.health import health_router

    app.include_router(health_router, prefix=f"{settings.API_V1_STR}/health", tags=["Health"])
    app.include_router(customers_v1.router, prefix=settings.API_V1_STR)
    app.include_router(customers_v2.router, prefix=settings.API_V2_STR)
    app.include_router(operations.router, prefix=settings.API_V1_STR)


def main() -> None:
    """Run the service with uvicorn."""
    import uvicorn

    load_env_file()
    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(create_application(settings), host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
