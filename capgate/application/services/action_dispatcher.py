"""Action dispatcher.

Orchestration point of the proxy: resolves resource -> type -> branch ->
action, authorizes through the privilege evaluator, validates parameters,
invokes the handler and returns its result or a typed failure.

Modes:
    list_actions: For every branch of the resource's type, the prefix of
        action names the caller may invoke.
    execute: Authorize and run one action.

Guarantees:
    - A denied call never reaches the handler (no side effect, no partial
      work).
    - Handler failures are wrapped once as HandlerError and never retried.
    - A deadline bounds handler invocation; expiry yields
      HandlerTimeoutError. There is no transactional wrapper, so a mutating
      handler must itself be safe under cancellation.
    - The dispatcher holds no locks and keeps no per-call state; the
      registry is read-only and the store synchronizes itself.
    - There is no atomicity between list_actions and a later execute: the
      caller's level may change in between.

Audit:
    Every refusal is logged with its full reason (which lookup failed, or
    required vs permitted level). The presentation layer may collapse
    these reasons into a single generic answer for the caller.
"""

import asyncio
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from capgate.application.services.resource_type_registry import (
    ResourceTypeRegistry,
)
from capgate.core.enums import ErrorCode
from capgate.core.errors import DomainError, NotFoundError
from capgate.core.result import Failure, Result, Success
from capgate.domain.entities.resource import Resource
from capgate.domain.errors import (
    HandlerError,
    HandlerTimeoutError,
    MissingParameterError,
    PermissionDeniedError,
)
from capgate.domain.protocols.logger_protocol import LoggerProtocol
from capgate.domain.protocols.query_executor_protocol import QueryExecutorProtocol
from capgate.domain.protocols.resource_store_protocol import ResourceStoreProtocol
from capgate.domain.services.privilege_evaluator import (
    list_available,
    permitted_level,
    resolve_branch,
)
from capgate.domain.value_objects.action_set import ActionSet, ExecutionContext


class ActionDispatcher:
    """Authorize and dispatch actions against resources.

    Dependencies (injected via constructor):
        - ResourceStoreProtocol: Resource records
        - ResourceTypeRegistry: Frozen type -> ActionSet mapping
        - QueryExecutorProtocol: Backend access handed to handlers
        - LoggerProtocol: Structured audit logging
    """

    def __init__(
        self,
        store: ResourceStoreProtocol,
        registry: ResourceTypeRegistry,
        query_executor: QueryExecutorProtocol,
        logger: LoggerProtocol,
        default_timeout_seconds: float = 30.0,
    ) -> None:
        """Initialize dispatcher with dependencies.

        Args:
            store: Resource store.
            registry: Resource type registry (frozen at startup).
            query_executor: Backend query executor for handlers.
            logger: Structured logger.
            default_timeout_seconds: Deadline used when the caller gives none.
        """
        self._store = store
        self._registry = registry
        self._query_executor = query_executor
        self._logger = logger
        self._default_timeout_seconds = default_timeout_seconds

    async def list_actions(
        self,
        resource_id: str,
        user_id: str,
    ) -> Result[dict[str, list[str]], DomainError]:
        """List permitted action names on every branch of a resource.

        Args:
            resource_id: Resource to inspect.
            user_id: Caller identity.

        Returns:
            Success(branch -> ordered action names), or Failure with
            RESOURCE_NOT_FOUND / RESOURCE_TYPE_NOT_FOUND / store error.
        """
        log = self._logger.bind(resource_id=resource_id, user_id=user_id)

        loaded = await self._load(resource_id, log)
        if isinstance(loaded, Failure):
            return loaded
        resource, action_set = loaded.value

        available: dict[str, list[str]] = {}
        for branch_name in action_set.branch_names:
            names = list_available(resource, action_set, branch_name, user_id)
            if isinstance(names, Failure):
                return names
            available[branch_name] = names.value

        log.debug("actions_listed", branches=len(available))
        return Success(value=available)

    async def execute(
        self,
        resource_id: str,
        user_id: str,
        branch_name: str,
        action_name: str,
        params: Mapping[str, str],
        *,
        timeout_seconds: float | None = None,
    ) -> Result[Any, DomainError]:
        """Authorize and run one action.

        Args:
            resource_id: Target resource.
            user_id: Caller identity.
            branch_name: Branch holding the action.
            action_name: Action to run.
            params: Caller parameters; undeclared names are ignored.
            timeout_seconds: Deadline for the handler (default from config).

        Returns:
            Success(handler value, unchanged), or Failure with one of
            NotFoundError, PermissionDeniedError, MissingParameterError,
            HandlerError, HandlerTimeoutError.
        """
        log = self._logger.bind(
            resource_id=resource_id,
            user_id=user_id,
            branch=branch_name,
            action=action_name,
        )

        # 1-2. Resource and its ActionSet
        loaded = await self._load(resource_id, log)
        if isinstance(loaded, Failure):
            return loaded
        resource, action_set = loaded.value

        # 3. Branch and action index
        branch_result = resolve_branch(action_set, branch_name)
        if isinstance(branch_result, Failure):
            log.info("action_lookup_failed", reason=branch_result.error.code.value)
            return branch_result
        branch = branch_result.value

        index = branch.index_of(action_name)
        if index is None:
            log.info("action_lookup_failed", reason=ErrorCode.ACTION_NOT_FOUND.value)
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.ACTION_NOT_FOUND,
                    message=f"Action {action_name!r} not found in branch {branch_name!r}",
                    resource_type="Action",
                    resource_id=action_name,
                )
            )
        action = branch.action_at(index)

        # 4-5. Authorization (handler is never reached on denial)
        level = permitted_level(resource, action_set, branch_name, user_id)
        if isinstance(level, Failure):
            return level
        permitted = level.value
        if index > permitted:
            log.warning(
                "action_permission_denied",
                required_level=index,
                permitted_level=permitted,
            )
            return Failure(
                error=PermissionDeniedError(
                    code=ErrorCode.PERMISSION_DENIED,
                    message=f"Action {action_name!r} requires level {index}",
                    resource_id=resource_id,
                    branch=branch_name,
                    action=action_name,
                    required_level=index,
                    permitted_level=permitted,
                )
            )

        # 6. Required parameters
        missing = action.missing_params(params)
        if missing:
            log.info("action_missing_parameter", missing=missing)
            return Failure(
                error=MissingParameterError(
                    code=ErrorCode.MISSING_PARAMETER,
                    message=f"Missing required parameter {missing[0]!r}",
                    action=action_name,
                    parameter=missing[0],
                    missing=tuple(missing),
                )
            )

        # 7-8. Handler invocation under deadline
        deadline = (
            timeout_seconds
            if timeout_seconds is not None
            else self._default_timeout_seconds
        )
        context = ExecutionContext(
            query_executor=self._query_executor,
            logger=log,
            resource_id=resource_id,
            user_id=user_id,
        )
        try:
            async with asyncio.timeout(deadline) as scope:
                outcome = await action.handler(
                    MappingProxyType(dict(resource.data)),
                    MappingProxyType(dict(params)),
                    context,
                )
        except TimeoutError as e:
            if not scope.expired():
                return self._raised(action_name, e, log)
            log.warning("action_handler_timeout", timeout_seconds=deadline)
            return Failure(
                error=HandlerTimeoutError(
                    code=ErrorCode.HANDLER_TIMEOUT,
                    message=f"Action {action_name!r} timed out after {deadline}s",
                    action=action_name,
                    timeout_seconds=deadline,
                )
            )
        except Exception as e:
            return self._raised(action_name, e, log)

        match outcome:
            case Success(value=value):
                log.info("action_executed")
                return Success(value=value)
            case Failure(error=cause):
                log.error("action_handler_failed", cause=str(cause))
                return Failure(
                    error=HandlerError(
                        code=ErrorCode.HANDLER_FAILED,
                        message=f"Action {action_name!r} failed",
                        action=action_name,
                        cause=cause,
                    )
                )
            case _:
                log.error("action_handler_invalid_result", result_type=type(outcome).__name__)
                return Failure(
                    error=HandlerError(
                        code=ErrorCode.HANDLER_FAILED,
                        message=f"Action {action_name!r} returned an invalid result",
                        action=action_name,
                    )
                )

    async def _load(
        self,
        resource_id: str,
        log: LoggerProtocol,
    ) -> Result[tuple[Resource, ActionSet], DomainError]:
        """Load a resource and resolve its type's ActionSet."""
        stored = await self._store.get(resource_id)
        if isinstance(stored, Failure):
            log.info("resource_lookup_failed", reason=stored.error.code.value)
            return stored
        resource = stored.value

        action_set = self._registry.lookup(resource.type)
        if isinstance(action_set, Failure):
            # Provisioning validates the type, so this signals a store record
            # written by something else or a type removed from the deployment.
            log.error(
                "resource_type_unresolved",
                resource_type=resource.type,
            )
            return action_set

        return Success(value=(resource, action_set.value))

    @staticmethod
    def _raised(
        action_name: str,
        error: Exception,
        log: LoggerProtocol,
    ) -> Failure[HandlerError]:
        """Wrap an exception raised by a handler."""
        log.error("action_handler_raised", error=error)
        return Failure(
            error=HandlerError(
                code=ErrorCode.HANDLER_FAILED,
                message=f"Action {action_name!r} failed",
                action=action_name,
                details={"error_type": type(error).__name__},
            )
        )
