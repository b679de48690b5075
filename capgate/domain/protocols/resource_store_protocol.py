"""Resource store protocol (port).

Narrow get / create-if-absent / atomic-update contract over a key-value
store holding Resource records.

Concurrency:
    A Resource's masks are the only shared mutable state in the system.
    All mutation MUST go through atomic_update(); callers never perform a
    get() followed by a separate write, so concurrent grants/revokes on the
    same id cannot lose updates.

Implementations:
    - RedisResourceStore: Production (WATCH/MULTI optimistic transactions)
    - InMemoryResourceStore: Development and testing
"""

from collections.abc import Callable
from typing import Protocol, TypeAlias

from capgate.core.errors import DomainError
from capgate.core.result import Result
from capgate.domain.entities.resource import Resource

ResourceMutator: TypeAlias = Callable[[Resource], Resource]


class ResourceStoreProtocol(Protocol):
    """Protocol for Resource persistence."""

    async def get(self, resource_id: str) -> Result[Resource, DomainError]:
        """Load a resource.

        Returns:
            Success(Resource), Failure(NotFoundError) if the id is unknown,
            or Failure(CacheError) on store failure.
        """
        ...

    async def create_if_absent(self, resource: Resource) -> Result[bool, DomainError]:
        """Persist a resource unless its id already exists.

        Provisioning is idempotent: an existing record is left untouched.

        Returns:
            Success(True) if created, Success(False) if the id already existed.
        """
        ...

    async def atomic_update(
        self,
        resource_id: str,
        mutator: ResourceMutator,
    ) -> Result[Resource, DomainError]:
        """Apply ``mutator`` to the stored record as one read-modify-write.

        The mutator receives the current record and returns the replacement.
        It may be invoked more than once under contention and must therefore
        be free of side effects.

        Returns:
            Success(updated Resource), Failure(NotFoundError) if absent,
            Failure(ConflictError) if contention exhausted the retry budget.
        """
        ...
