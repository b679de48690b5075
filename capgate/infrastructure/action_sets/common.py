"""Building blocks shared by built-in resource types."""

from collections.abc import Mapping, Sequence
from typing import Any

from capgate.core.errors import DomainError
from capgate.core.result import Failure, Result, Success
from capgate.domain.value_objects.action_set import Action, ExecutionContext

NO_ACCESS = "no-access"


async def deny(
    data: Mapping[str, str],
    params: Mapping[str, str],
    context: ExecutionContext,
) -> Result[None, DomainError]:
    """Index-0 handler: does nothing and touches no backend."""
    return Success(value=None)


def no_access_action() -> Action:
    """The conventional index-0 action of every branch."""
    return Action(name=NO_ACCESS, handler=deny, description="No operation")


async def run_query(
    context: ExecutionContext,
    columns: Sequence[str],
    query_template: str,
    positional_args: Sequence[Any] = (),
) -> Result[dict[str, Any], DomainError]:
    """Run a bound query and shape its rows as ``{"columns", "rows"}``.

    Row order is preserved and SQL NULL stays None.
    """
    result = await context.query_executor.execute(query_template, positional_args)
    if isinstance(result, Failure):
        return result
    return Success(
        value={
            "columns": list(columns),
            "rows": [list(row) for row in result.value],
        }
    )
