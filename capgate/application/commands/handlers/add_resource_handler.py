"""AddResource command handler.

Flow:
1. Resolve the resource type (RESOURCE_TYPE_NOT_FOUND)
2. Validate the default mask against the type's branches and levels
3. Check the data carries every key the type requires (VALIDATION_FAILED)
4. Build the Resource (empty user overrides)
5. create_if_absent in the store; never overwrite

Architecture:
- Application layer ONLY imports from domain/core (protocols injected)
"""

from dataclasses import dataclass

from capgate.application.commands.resource_commands import AddResource
from capgate.application.services.resource_type_registry import (
    ResourceTypeRegistry,
)
from capgate.core.enums import ErrorCode
from capgate.core.errors import DomainError, ValidationError
from capgate.core.result import Failure, Result, Success
from capgate.domain.entities.resource import Resource
from capgate.domain.protocols.logger_protocol import LoggerProtocol
from capgate.domain.protocols.resource_store_protocol import ResourceStoreProtocol
from capgate.domain.validators import validate_mask


@dataclass(frozen=True, kw_only=True)
class AddResourceResult:
    """Provisioning outcome.

    Attributes:
        resource_id: Provisioned (or pre-existing) resource id.
        created: False if the id already existed.
    """

    resource_id: str
    created: bool


class AddResourceHandler:
    """Handler for AddResource command."""

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

    async def handle(self, cmd: AddResource) -> Result[AddResourceResult, DomainError]:
        """Handle AddResource command.

        Args:
            cmd: AddResource command.

        Returns:
            Success(AddResourceResult) whether created or already present.
            Failure(DomainError) for unknown type, invalid mask or input,
            or store failure.
        """
        log = self._logger.bind(
            resource_id=cmd.resource_id,
            resource_type=cmd.resource_type,
        )

        action_set = self._registry.lookup(cmd.resource_type)
        if isinstance(action_set, Failure):
            log.info("resource_provision_rejected", reason=action_set.error.code.value)
            return action_set

        mask = validate_mask(action_set.value, cmd.default_mask)
        if isinstance(mask, Failure):
            log.info("resource_provision_rejected", reason=mask.error.code.value)
            return mask

        missing = action_set.value.missing_data(cmd.data)
        if missing:
            log.info(
                "resource_provision_rejected",
                reason=ErrorCode.VALIDATION_FAILED.value,
                missing=missing,
            )
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message=f"Missing resource data {missing[0]!r}",
                    field="data",
                    details={"missing": missing},
                )
            )

        try:
            resource = Resource(
                id=cmd.resource_id,
                owner_id=cmd.owner_id,
                type=cmd.resource_type,
                data=dict(cmd.data),
                default_mask=mask.value,
            )
        except ValueError as e:
            log.info("resource_provision_rejected", reason=str(e))
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_RESOURCE_ID,
                    message=str(e),
                )
            )

        created = await self._store.create_if_absent(resource)
        if isinstance(created, Failure):
            log.error("resource_provision_failed", reason=created.error.code.value)
            return created

        if created.value:
            log.info("resource_provisioned", owner_id=cmd.owner_id)
        else:
            log.info("resource_already_exists")

        return Success(
            value=AddResourceResult(resource_id=cmd.resource_id, created=created.value)
        )
