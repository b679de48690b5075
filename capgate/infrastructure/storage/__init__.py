"""Resource store adapters."""

from capgate.infrastructure.storage.in_memory_resource_store import (
    InMemoryResourceStore,
)
from capgate.infrastructure.storage.redis_resource_store import RedisResourceStore

__all__ = ["InMemoryResourceStore", "RedisResourceStore"]
