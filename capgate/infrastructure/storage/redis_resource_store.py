"""Redis implementation of ResourceStoreProtocol.

Each resource is one JSON string under ``{key_prefix}:resource:{id}``.

Operations:
    get: GET + decode
    create_if_absent: SET NX (never overwrites)
    atomic_update: optimistic WATCH / MULTI / EXEC loop, retried on
        WatchError up to ``max_update_retries`` times

Architecture:
- Implements ResourceStoreProtocol without inheritance (structural typing)
- Maps Redis exceptions to CacheError with proper ErrorCode
- Returns Result types for all operations
"""

from redis.asyncio import Redis
from redis.exceptions import RedisError, WatchError

from capgate.core.enums import ErrorCode
from capgate.core.errors import ConflictError, DomainError, NotFoundError
from capgate.core.result import Failure, Result, Success
from capgate.domain.entities.resource import Resource
from capgate.domain.protocols.resource_store_protocol import ResourceMutator
from capgate.infrastructure.enums import InfrastructureErrorCode
from capgate.infrastructure.errors import CacheError
from capgate.infrastructure.storage.resource_codec import (
    decode_resource,
    encode_resource,
)


def _not_found(resource_id: str) -> Failure[NotFoundError]:
    return Failure(
        error=NotFoundError(
            code=ErrorCode.RESOURCE_NOT_FOUND,
            message=f"Resource {resource_id!r} not found",
            resource_type="Resource",
            resource_id=resource_id,
        )
    )


def _store_error(
    operation: str,
    resource_id: str,
    error: RedisError,
    infrastructure_code: InfrastructureErrorCode,
) -> Failure[CacheError]:
    return Failure(
        error=CacheError(
            code=ErrorCode.STORE_UNAVAILABLE,
            infrastructure_code=infrastructure_code,
            message=f"Resource store {operation} failed",
            details={"resource_id": resource_id, "error": str(error)},
        )
    )


class RedisResourceStore:
    """Resource store backed by Redis.

    Note: Does NOT inherit from ResourceStoreProtocol (uses structural typing).

    Attributes:
        _redis: Async Redis client instance.
        _key_prefix: Namespace for resource keys.
        _max_update_retries: Optimistic retry budget for atomic_update.
    """

    def __init__(
        self,
        redis_client: Redis,
        key_prefix: str = "capgate",
        max_update_retries: int = 10,
    ) -> None:
        """Initialize Redis resource store.

        Args:
            redis_client: Async Redis client instance.
            key_prefix: Namespace for resource keys.
            max_update_retries: Attempts before an update fails with
                RESOURCE_UPDATE_CONFLICT.
        """
        self._redis = redis_client
        self._key_prefix = key_prefix
        self._max_update_retries = max_update_retries

    def key_for(self, resource_id: str) -> str:
        """Redis key holding ``resource_id``."""
        return f"{self._key_prefix}:resource:{resource_id}"

    async def get(self, resource_id: str) -> Result[Resource, DomainError]:
        """Load a resource.

        Returns:
            Success(Resource), Failure(NotFoundError) if absent, or
            Failure(CacheError) on store failure or a corrupt record.
        """
        try:
            raw = await self._redis.get(self.key_for(resource_id))
        except RedisError as e:
            return _store_error(
                "get", resource_id, e, InfrastructureErrorCode.STORE_GET_ERROR
            )

        if raw is None:
            return _not_found(resource_id)
        return decode_resource(raw)

    async def create_if_absent(self, resource: Resource) -> Result[bool, DomainError]:
        """Persist a resource unless its id already exists (SET NX).

        Returns:
            Success(True) if created, Success(False) if the id already
            existed, or Failure(CacheError).
        """
        try:
            created = await self._redis.set(
                self.key_for(resource.id),
                encode_resource(resource),
                nx=True,
            )
        except RedisError as e:
            return _store_error(
                "create", resource.id, e, InfrastructureErrorCode.STORE_SET_ERROR
            )
        return Success(value=bool(created))

    async def atomic_update(
        self,
        resource_id: str,
        mutator: ResourceMutator,
    ) -> Result[Resource, DomainError]:
        """Apply ``mutator`` as one optimistic read-modify-write.

        The key is WATCHed, read, mutated, and written in MULTI/EXEC. A
        concurrent write aborts EXEC with WatchError and the whole cycle is
        retried against the new value.

        Returns:
            Success(updated Resource), Failure(NotFoundError) if absent,
            Failure(ConflictError) with RESOURCE_UPDATE_CONFLICT once the
            retry budget is exhausted, or Failure(CacheError).
        """
        key = self.key_for(resource_id)

        try:
            async with self._redis.pipeline(transaction=True) as pipe:
                for _ in range(self._max_update_retries):
                    try:
                        await pipe.watch(key)
                        raw = await pipe.get(key)
                        if raw is None:
                            return _not_found(resource_id)

                        current = decode_resource(raw)
                        if isinstance(current, Failure):
                            return current

                        updated = mutator(current.value)
                        pipe.multi()
                        pipe.set(key, encode_resource(updated))
                        await pipe.execute()
                        return Success(value=updated)
                    except WatchError:
                        continue
        except RedisError as e:
            return _store_error(
                "update", resource_id, e, InfrastructureErrorCode.STORE_SET_ERROR
            )

        return Failure(
            error=ConflictError(
                code=ErrorCode.RESOURCE_UPDATE_CONFLICT,
                message=(
                    f"Resource {resource_id!r} update lost "
                    f"{self._max_update_retries} races"
                ),
                resource_type="Resource",
                details={
                    "resource_id": resource_id,
                    "infrastructure_code": InfrastructureErrorCode.STORE_UPDATE_CONFLICT.value,
                },
            )
        )
