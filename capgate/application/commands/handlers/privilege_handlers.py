"""Privilege mask command handlers.

Handlers:
    GrantPrivilegeHandler: set user_masks[user][branch]
    RevokePrivilegeHandler: remove user_masks[user][branch]
    SetDefaultPrivilegeHandler: set default_mask[branch]

Flow (all three):
1. Load the resource to resolve its type (type is immutable, so a
   concurrent writer cannot invalidate this read)
2. Validate branch and level against the type's ActionSet
3. Write through store.atomic_update with a copy-on-write mutator

The read in step 1 is only used for validation. The mask itself is never
written back from it; atomic_update re-reads the current record.
"""

from capgate.application.commands.resource_commands import (
    GrantPrivilege,
    RevokePrivilege,
    SetDefaultPrivilege,
)
from capgate.application.services.resource_type_registry import (
    ResourceTypeRegistry,
)
from capgate.core.errors import DomainError
from capgate.core.result import Failure, Result, Success
from capgate.domain.entities.resource import Resource
from capgate.domain.protocols.logger_protocol import LoggerProtocol
from capgate.domain.protocols.resource_store_protocol import ResourceStoreProtocol
from capgate.domain.services.privilege_evaluator import resolve_branch
from capgate.domain.validators import validate_level
from capgate.domain.value_objects.action_set import ActionSet


class _MaskCommandHandler:
    """Shared dependencies and type resolution for mask handlers."""

    def __init__(
        self,
        store: ResourceStoreProtocol,
        registry: ResourceTypeRegistry,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            store: Resource store.
            registry: Resource type registry.
            logger: Structured logger.
        """
        self._store = store
        self._registry = registry
        self._logger = logger

    async def _action_set_for(
        self,
        resource_id: str,
    ) -> Result[ActionSet, DomainError]:
        stored = await self._store.get(resource_id)
        if isinstance(stored, Failure):
            return stored
        return self._registry.lookup(stored.value.type)


class GrantPrivilegeHandler(_MaskCommandHandler):
    """Handler for GrantPrivilege command."""

    async def handle(self, cmd: GrantPrivilege) -> Result[Resource, DomainError]:
        """Handle GrantPrivilege command.

        Returns:
            Success(updated Resource), or Failure with RESOURCE_NOT_FOUND,
            BRANCH_NOT_FOUND, INVALID_PRIVILEGE_LEVEL or a store error.
        """
        log = self._logger.bind(
            resource_id=cmd.resource_id,
            user_id=cmd.user_id,
            branch=cmd.branch,
        )

        action_set = await self._action_set_for(cmd.resource_id)
        if isinstance(action_set, Failure):
            log.info("privilege_grant_rejected", reason=action_set.error.code.value)
            return action_set

        level = validate_level(action_set.value, cmd.branch, cmd.level)
        if isinstance(level, Failure):
            log.info("privilege_grant_rejected", reason=level.error.code.value)
            return level

        updated = await self._store.atomic_update(
            cmd.resource_id,
            lambda resource: resource.with_grant(cmd.user_id, cmd.branch, level.value),
        )
        if isinstance(updated, Failure):
            log.error("privilege_grant_failed", reason=updated.error.code.value)
            return updated

        log.info("privilege_granted", level=level.value)
        return Success(value=updated.value)


class RevokePrivilegeHandler(_MaskCommandHandler):
    """Handler for RevokePrivilege command."""

    async def handle(self, cmd: RevokePrivilege) -> Result[Resource, DomainError]:
        """Handle RevokePrivilege command.

        Revoking an absent override is a successful no-op.

        Returns:
            Success(updated Resource), or Failure with RESOURCE_NOT_FOUND,
            BRANCH_NOT_FOUND or a store error.
        """
        log = self._logger.bind(
            resource_id=cmd.resource_id,
            user_id=cmd.user_id,
            branch=cmd.branch,
        )

        action_set = await self._action_set_for(cmd.resource_id)
        if isinstance(action_set, Failure):
            log.info("privilege_revoke_rejected", reason=action_set.error.code.value)
            return action_set

        branch = resolve_branch(action_set.value, cmd.branch)
        if isinstance(branch, Failure):
            log.info("privilege_revoke_rejected", reason=branch.error.code.value)
            return branch

        updated = await self._store.atomic_update(
            cmd.resource_id,
            lambda resource: resource.without_grant(cmd.user_id, cmd.branch),
        )
        if isinstance(updated, Failure):
            log.error("privilege_revoke_failed", reason=updated.error.code.value)
            return updated

        log.info("privilege_revoked")
        return Success(value=updated.value)


class SetDefaultPrivilegeHandler(_MaskCommandHandler):
    """Handler for SetDefaultPrivilege command."""

    async def handle(self, cmd: SetDefaultPrivilege) -> Result[Resource, DomainError]:
        """Handle SetDefaultPrivilege command.

        Returns:
            Success(updated Resource), or Failure with RESOURCE_NOT_FOUND,
            BRANCH_NOT_FOUND, INVALID_PRIVILEGE_LEVEL or a store error.
        """
        log = self._logger.bind(resource_id=cmd.resource_id, branch=cmd.branch)

        action_set = await self._action_set_for(cmd.resource_id)
        if isinstance(action_set, Failure):
            log.info("default_privilege_rejected", reason=action_set.error.code.value)
            return action_set

        level = validate_level(action_set.value, cmd.branch, cmd.level)
        if isinstance(level, Failure):
            log.info("default_privilege_rejected", reason=level.error.code.value)
            return level

        updated = await self._store.atomic_update(
            cmd.resource_id,
            lambda resource: resource.with_default(cmd.branch, level.value),
        )
        if isinstance(updated, Failure):
            log.error("default_privilege_failed", reason=updated.error.code.value)
            return updated

        log.info("default_privilege_set", level=level.value)
        return Success(value=updated.value)
