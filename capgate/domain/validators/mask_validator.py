"""Privilege mask validation.

Checks a branch/level pair, or a whole mask, against a resource type's
ActionSet before it is written to a Resource. Stored levels are clamped
again at evaluation time, but provisioning refuses out-of-range values so
the stored record always satisfies 0 <= level < len(branch).
"""

from collections.abc import Mapping

from capgate.core.enums import ErrorCode
from capgate.core.errors import DomainError, ValidationError
from capgate.core.result import Failure, Result, Success
from capgate.domain.services.privilege_evaluator import resolve_branch
from capgate.domain.value_objects.action_set import ActionSet


def validate_level(
    action_set: ActionSet,
    branch_name: str,
    level: int,
) -> Result[int, DomainError]:
    """Validate that ``level`` is a valid index into ``branch_name``.

    Returns:
        Success(level), Failure(NotFoundError) for an unknown branch, or
        Failure(ValidationError) with INVALID_PRIVILEGE_LEVEL.
    """
    branch_result = resolve_branch(action_set, branch_name)
    if isinstance(branch_result, Failure):
        return branch_result
    branch = branch_result.value

    if isinstance(level, bool) or not 0 <= level <= branch.highest_level:
        return Failure(
            error=ValidationError(
                code=ErrorCode.INVALID_PRIVILEGE_LEVEL,
                message=(
                    f"Level {level!r} out of range for branch {branch_name!r} "
                    f"(0..{branch.highest_level})"
                ),
                field="level",
                details={"branch": branch_name},
            )
        )
    return Success(value=level)


def validate_mask(
    action_set: ActionSet,
    mask: Mapping[str, int],
) -> Result[dict[str, int], DomainError]:
    """Validate every entry of a branch -> level mask.

    Returns:
        Success(copy of mask) or the first failure encountered.
    """
    for branch_name, level in mask.items():
        result = validate_level(action_set, branch_name, level)
        if isinstance(result, Failure):
            return result
    return Success(value=dict(mask))
