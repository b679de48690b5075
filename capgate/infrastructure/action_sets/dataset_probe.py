"""``dataset-probe`` resource type.

A read-only view over one probe's samples in the backend.

Resource data:
    probe_id: Probe whose samples are exposed.

Branches:
    data: [no-access, view]
"""

from collections.abc import Mapping
from typing import Any

from capgate.core.errors import DomainError
from capgate.core.result import Result
from capgate.domain.value_objects.action_set import (
    Action,
    ActionSet,
    Branch,
    ExecutionContext,
)
from capgate.infrastructure.action_sets.common import no_access_action, run_query

RESOURCE_TYPE = "dataset-probe"

SAMPLE_COLUMNS = ("seq", "sampled_at", "value")


async def view_samples(
    data: Mapping[str, str],
    params: Mapping[str, str],
    context: ExecutionContext,
) -> Result[dict[str, Any], DomainError]:
    """Return the probe's samples in sequence order."""
    return await run_query(
        context,
        SAMPLE_COLUMNS,
        "SELECT seq, sampled_at, value FROM probe_samples "
        "WHERE probe_id = :p1 ORDER BY seq",
        [data["probe_id"]],
    )


DATASET_PROBE = ActionSet.of(
    Branch(
        name="data",
        actions=(
            no_access_action(),
            Action(name="view", handler=view_samples, description="List samples"),
        ),
    ),
    owner_bypass=True,
    required_data=frozenset({"probe_id"}),
)
