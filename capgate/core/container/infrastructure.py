"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (structlog console adapter)
- Redis client (resource store backend)
- Database (relational backend queried by handlers)
- Query executor
- Resource store (redis or in-memory)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from capgate.core.config import settings
from capgate.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from redis.asyncio import Redis

    from capgate.domain.protocols.logger_protocol import LoggerProtocol
    from capgate.domain.protocols.query_executor_protocol import (
        QueryExecutorProtocol,
    )
    from capgate.domain.protocols.resource_store_protocol import (
        ResourceStoreProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from capgate.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level="DEBUG" if settings.debug else settings.log_level,
    )


@lru_cache()
def get_redis_client() -> "Redis":
    """Get Redis client singleton (app-scoped).

    Connection pool is shared across the entire application.

    Returns:
        Async Redis client.
    """
    from redis.asyncio import ConnectionPool, Redis

    pool = ConnectionPool.from_url(
        settings.redis_url,
        max_connections=50,
        decode_responses=False,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
    )
    return Redis(connection_pool=pool)


@lru_cache()
def get_database() -> Database:
    """Get backend database manager singleton (app-scoped).

    Returns:
        Database manager instance.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_query_executor() -> "QueryExecutorProtocol":
    """Get backend query executor singleton (app-scoped).

    Returns:
        SqlQueryExecutor over the application database.
    """
    from capgate.infrastructure.persistence.sql_query_executor import (
        SqlQueryExecutor,
    )

    return SqlQueryExecutor(database=get_database())


@lru_cache()
def get_resource_store() -> "ResourceStoreProtocol":
    """Get resource store singleton (app-scoped).

    Returns correct adapter based on settings.resource_store_backend:
        - 'redis': RedisResourceStore (default)
        - 'memory': InMemoryResourceStore (local development)

    Returns:
        Resource store implementing ResourceStoreProtocol.
    """
    if settings.resource_store_backend == "memory":
        from capgate.infrastructure.storage.in_memory_resource_store import (
            InMemoryResourceStore,
        )

        return InMemoryResourceStore()

    from capgate.infrastructure.storage.redis_resource_store import (
        RedisResourceStore,
    )

    return RedisResourceStore(
        redis_client=get_redis_client(),
        key_prefix=settings.store_key_prefix,
        max_update_retries=settings.store_max_update_retries,
    )
