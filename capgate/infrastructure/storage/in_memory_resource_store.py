"""In-memory implementation of ResourceStoreProtocol.

Intended for local development (``resource_store_backend=memory``) and
tests. A single asyncio.Lock serializes create and update; records are
stored and returned as copies so callers cannot mutate stored state.
"""

import asyncio
from copy import deepcopy

from capgate.core.enums import ErrorCode
from capgate.core.errors import DomainError, NotFoundError
from capgate.core.result import Failure, Result, Success
from capgate.domain.entities.resource import Resource
from capgate.domain.protocols.resource_store_protocol import ResourceMutator


class InMemoryResourceStore:
    """Process-local resource store."""

    def __init__(self) -> None:
        self._records: dict[str, Resource] = {}
        self._lock = asyncio.Lock()

    async def get(self, resource_id: str) -> Result[Resource, DomainError]:
        resource = self._records.get(resource_id)
        if resource is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.RESOURCE_NOT_FOUND,
                    message=f"Resource {resource_id!r} not found",
                    resource_type="Resource",
                    resource_id=resource_id,
                )
            )
        return Success(value=deepcopy(resource))

    async def create_if_absent(self, resource: Resource) -> Result[bool, DomainError]:
        async with self._lock:
            if resource.id in self._records:
                return Success(value=False)
            self._records[resource.id] = deepcopy(resource)
            return Success(value=True)

    async def atomic_update(
        self,
        resource_id: str,
        mutator: ResourceMutator,
    ) -> Result[Resource, DomainError]:
        async with self._lock:
            current = await self.get(resource_id)
            if isinstance(current, Failure):
                return current
            updated = mutator(current.value)
            self._records[resource_id] = deepcopy(updated)
            return Success(value=updated)

    def __len__(self) -> int:
        return len(self._records)
