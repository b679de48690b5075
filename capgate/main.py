"""
Main FastAPI application entry point.

Wires the capgate HTTP binding: trace middleware, RFC 9457 exception
handlers, system routes and the versioned API.

Run:
    uvicorn capgate.main:app --host 0.0.0.0 --port 8000
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from capgate.core.config import settings
from capgate.presentation.routers import system_router, v1_router
from capgate.presentation.routers.api.middleware.trace_middleware import (
    TraceMiddleware,
)
from capgate.presentation.routers.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Handles startup and shutdown events:
    - Startup: Build and freeze the resource type registry
    - Shutdown: Close the backend engine and the Redis client

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    from capgate.core.container import (
        get_database,
        get_logger,
        get_redis_client,
        get_resource_type_registry,
    )

    logger = get_logger()
    get_resource_type_registry()
    logger.info(
        "application_started",
        environment=settings.environment.value,
        store_backend=settings.resource_store_backend,
    )

    yield

    await get_database().close()
    if settings.resource_store_backend == "redis":
        await get_redis_client().aclose()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.app_name,
    description="Capability-based authorization proxy for backend data operations",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Request correlation
app.add_middleware(TraceMiddleware)

# RFC 9457 error responses
register_exception_handlers(app)

app.include_router(system_router)
app.include_router(v1_router)
