"""Backend query executor protocol (port).

The executor runs a parameterized query against the backend and returns its
rows. It owns the backend connection lifecycle; handlers only see this port
through their ExecutionContext.

Binding Contract:
    Placeholders in the template are written ``:p1``, ``:p2``, ... and are
    bound, in order, from ``positional_args``. Values are NEVER formatted into
    the query text. Caller-supplied strings flow into this call, so every
    handler must go through bound parameters.

Row Contract:
    Rows come back in backend order as plain tuples of fixed arity.
    SQL NULL is returned as None.

Usage:
    result = await context.query_executor.execute(
        "SELECT value FROM kv_entries WHERE namespace = :p1 AND key = :p2",
        [namespace, key],
    )
"""

from collections.abc import Sequence
from typing import Any, Protocol, TypeAlias

from capgate.core.result import Result
from capgate.core.errors import DomainError

Row: TypeAlias = tuple[Any, ...]


class QueryExecutorProtocol(Protocol):
    """Protocol for backend query execution."""

    async def execute(
        self,
        query_template: str,
        positional_args: Sequence[Any] = (),
    ) -> Result[list[Row], DomainError]:
        """Execute a parameterized query.

        Args:
            query_template: Query text with ``:pN`` placeholders.
            positional_args: Values bound to ``:p1..:pN`` in order.

        Returns:
            Success(list[Row]): Rows in backend order.
            Failure(DomainError): Bad template or backend failure.
        """
        ...
