"""``kv-namespace`` resource type.

Exposes one namespace of the backend ``kv_entries`` table.

Resource data:
    namespace: Namespace the resource is scoped to.

Branches:
    entries: [no-access, count, get(key), list]
    history: [no-access, changes(since)]
"""

from collections.abc import Mapping
from typing import Any

from capgate.core.errors import DomainError
from capgate.core.result import Failure, Result, Success
from capgate.domain.value_objects.action_set import (
    Action,
    ActionSet,
    Branch,
    ExecutionContext,
)
from capgate.infrastructure.action_sets.common import no_access_action, run_query

RESOURCE_TYPE = "kv-namespace"

ENTRY_COLUMNS = ("key", "value", "updated_at")


async def count_entries(
    data: Mapping[str, str],
    params: Mapping[str, str],
    context: ExecutionContext,
) -> Result[int, DomainError]:
    """Number of entries in the namespace."""
    result = await context.query_executor.execute(
        "SELECT COUNT(*) FROM kv_entries WHERE namespace = :p1",
        [data["namespace"]],
    )
    if isinstance(result, Failure):
        return result
    return Success(value=int(result.value[0][0]) if result.value else 0)


async def get_entry(
    data: Mapping[str, str],
    params: Mapping[str, str],
    context: ExecutionContext,
) -> Result[dict[str, Any], DomainError]:
    """One entry by key (zero or one row)."""
    return await run_query(
        context,
        ENTRY_COLUMNS,
        "SELECT key, value, updated_at FROM kv_entries "
        "WHERE namespace = :p1 AND key = :p2",
        [data["namespace"], params["key"]],
    )


async def list_entries(
    data: Mapping[str, str],
    params: Mapping[str, str],
    context: ExecutionContext,
) -> Result[dict[str, Any], DomainError]:
    """All entries ordered by key."""
    return await run_query(
        context,
        ENTRY_COLUMNS,
        "SELECT key, value, updated_at FROM kv_entries "
        "WHERE namespace = :p1 ORDER BY key",
        [data["namespace"]],
    )


async def changed_since(
    data: Mapping[str, str],
    params: Mapping[str, str],
    context: ExecutionContext,
) -> Result[dict[str, Any], DomainError]:
    """Entries updated at or after ``since``, oldest first."""
    return await run_query(
        context,
        ENTRY_COLUMNS,
        "SELECT key, value, updated_at FROM kv_entries "
        "WHERE namespace = :p1 AND updated_at >= :p2 "
        "ORDER BY updated_at, key",
        [data["namespace"], params["since"]],
    )


KV_NAMESPACE = ActionSet.of(
    Branch(
        name="entries",
        actions=(
            no_access_action(),
            Action(name="count", handler=count_entries, description="Count entries"),
            Action(
                name="get",
                handler=get_entry,
                required_params=frozenset({"key"}),
                description="Read one entry",
            ),
            Action(name="list", handler=list_entries, description="List entries"),
        ),
    ),
    Branch(
        name="history",
        actions=(
            no_access_action(),
            Action(
                name="changes",
                handler=changed_since,
                required_params=frozenset({"since"}),
                description="Entries changed since a timestamp",
            ),
        ),
    ),
    owner_bypass=True,
    required_data=frozenset({"namespace"}),
)
