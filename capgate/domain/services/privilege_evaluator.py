"""Privilege evaluator.

Computes, for a (resource, branch, user) triple, the highest action index
the user may invoke, and the prefix of action names that level unlocks.

Evaluation Order:
    1. Branch must exist in the resource type's ActionSet (BRANCH_NOT_FOUND).
    2. Owner bypass: if the type enables it and the user owns the resource,
       the level is the branch's highest index.
    3. Otherwise the per-user override, else the default mask, else 0.
    4. The level is clamped into [0, len(branch) - 1].

Properties:
    - Universal minimum: the result is never below 0, so the index-0
      action is always available.
    - Monotonicity: a higher level always yields a prefix-superset of
      action names.

These are pure functions over their inputs; they perform no I/O and hold
no state, so concurrent callers need no synchronization.
"""

from capgate.core.enums import ErrorCode
from capgate.core.errors import NotFoundError
from capgate.core.result import Failure, Result, Success
from capgate.domain.entities.resource import Resource
from capgate.domain.value_objects.action_set import ActionSet, Branch


def resolve_branch(
    action_set: ActionSet,
    branch_name: str,
) -> Result[Branch, NotFoundError]:
    """Look up a branch in an ActionSet.

    Returns:
        Success(Branch) or Failure(NotFoundError) with BRANCH_NOT_FOUND.
    """
    branch = action_set.branch(branch_name)
    if branch is None:
        return Failure(
            error=NotFoundError(
                code=ErrorCode.BRANCH_NOT_FOUND,
                message=f"Branch {branch_name!r} not found",
                resource_type="Branch",
                resource_id=branch_name,
            )
        )
    return Success(value=branch)


def level_on_branch(
    resource: Resource,
    action_set: ActionSet,
    branch: Branch,
    user_id: str,
) -> int:
    """Permitted level on an already-resolved branch (steps 2-4)."""
    if action_set.owner_bypass and resource.is_owner(user_id):
        return branch.highest_level
    return branch.clamp(resource.mask_for(user_id, branch.name))


def permitted_level(
    resource: Resource,
    action_set: ActionSet,
    branch_name: str,
    user_id: str,
) -> Result[int, NotFoundError]:
    """Compute the highest action index ``user_id`` may invoke on a branch.

    Args:
        resource: Resource being accessed.
        action_set: ActionSet of the resource's type.
        branch_name: Branch to evaluate.
        user_id: Caller identity.

    Returns:
        Success(level) with 0 <= level < len(branch), or
        Failure(NotFoundError) if the branch does not exist.
    """
    branch_result = resolve_branch(action_set, branch_name)
    if isinstance(branch_result, Failure):
        return branch_result

    branch = branch_result.value
    return Success(value=level_on_branch(resource, action_set, branch, user_id))


def list_available(
    resource: Resource,
    action_set: ActionSet,
    branch_name: str,
    user_id: str,
) -> Result[list[str], NotFoundError]:
    """List the action names ``user_id`` may invoke on a branch.

    The result is the privilege-gated prefix 0..permitted_level inclusive,
    in branch order, never a sparse subset.

    Returns:
        Success(list of action names) or Failure(NotFoundError).
    """
    branch_result = resolve_branch(action_set, branch_name)
    if isinstance(branch_result, Failure):
        return branch_result

    branch = branch_result.value
    level = level_on_branch(resource, action_set, branch, user_id)
    return Success(value=branch.names_through(level))
