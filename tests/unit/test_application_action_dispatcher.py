"""Unit tests for ActionDispatcher.

Tests cover:
- list_actions per branch (default level, owner bypass, overrides)
- execute happy path
- Refusals: denial, unknown branch, unknown action, unknown resource,
  unresolved type
- Owner bypass over a zero default
- No handler side effect on any refusal
- Parameter contract (missing, extra, passthrough)
- Handler failure, exception, invalid result and timeout mapping

Architecture:
- Real in-memory store and registry, recording handlers
- Mock logger to assert on audit events
"""

import asyncio
from types import MappingProxyType
from unittest.mock import patch

import pytest

from capgate.application.services.action_dispatcher import ActionDispatcher
from capgate.application.services.resource_type_registry import (
    ResourceTypeRegistry,
)
from capgate.core.enums import ErrorCode
from capgate.core.errors import DomainError, NotFoundError
from capgate.core.result import Failure, Success
from capgate.domain.entities.resource import Resource
from capgate.domain.errors import (
    HandlerError,
    HandlerTimeoutError,
    MissingParameterError,
    PermissionDeniedError,
)
from capgate.domain.services import privilege_evaluator
from capgate.domain.value_objects.action_set import ExecutionContext
from capgate.infrastructure.storage.in_memory_resource_store import (
    InMemoryResourceStore,
)
from tests.utils.doubles import (
    FakeQueryExecutor,
    RecordingHandler,
    build_ledger_action_set,
    build_probe_action_set,
)


@pytest.fixture
def executor():
    return FakeQueryExecutor()


@pytest.fixture
def dispatcher(store, registry, executor, mock_logger):
    return ActionDispatcher(
        store=store,
        registry=registry,
        query_executor=executor,
        logger=mock_logger,
        default_timeout_seconds=5.0,
    )


async def make_dispatcher(handler, mock_logger, *, resource=None, timeout=5.0):
    """Dispatcher over a single ``probe`` resource whose view is ``handler``."""
    registry = ResourceTypeRegistry()
    registry.register("probe", build_probe_action_set(view=handler))
    registry.freeze()
    store = InMemoryResourceStore()
    await store.create_if_absent(
        resource
        or Resource(
            id="r1", owner_id="alice", type="probe", default_mask={"data": 1}
        )
    )
    return ActionDispatcher(
        store=store,
        registry=registry,
        query_executor=FakeQueryExecutor(),
        logger=mock_logger,
        default_timeout_seconds=timeout,
    )


@pytest.mark.unit
class TestListActions:
    """Test list_actions."""

    async def test_default_level_one_lists_view(self, dispatcher):
        result = await dispatcher.list_actions("r1", "anon")

        assert result == Success(value={"data": ["no-access", "view"]})

    async def test_default_zero_lists_only_no_access(self, dispatcher):
        result = await dispatcher.list_actions("r2", "bob")

        assert result == Success(value={"data": ["no-access"]})

    async def test_owner_bypass_lists_everything(self, dispatcher):
        result = await dispatcher.list_actions("r2", "alice")

        assert result == Success(value={"data": ["no-access", "view"]})

    async def test_every_branch_listed_in_declaration_order(self, store, mock_logger):
        registry = ResourceTypeRegistry()
        registry.register("ledger", build_ledger_action_set())
        registry.freeze()
        await store.create_if_absent(
            Resource(
                id="l1",
                owner_id="alice",
                type="ledger",
                default_mask={"entries": 2},
                user_masks={"bob": {"audit": 1}},
            )
        )
        dispatcher = ActionDispatcher(
            store=store,
            registry=registry,
            query_executor=FakeQueryExecutor(),
            logger=mock_logger,
        )

        result = await dispatcher.list_actions("l1", "bob")

        assert isinstance(result, Success)
        assert list(result.value) == ["entries", "audit"]
        assert result.value == {
            "entries": ["no-access", "count", "get"],
            "audit": ["no-access", "read"],
        }

    async def test_unknown_resource_is_not_found(self, dispatcher):
        result = await dispatcher.list_actions("missing", "anon")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.RESOURCE_NOT_FOUND


@pytest.mark.unit
class TestExecuteAuthorized:
    """Test successful execution."""

    async def test_view_returns_handler_value(
        self, dispatcher, view_handler, executor
    ):
        result = await dispatcher.execute("r1", "anon", "data", "view", {})

        assert result == Success(value={"columns": ["seq"], "rows": [[1], [2]]})
        assert view_handler.call_count == 1
        data, params, context = view_handler.calls[0]
        assert data == {"probe_id": "p-1"}
        assert params == {}
        assert isinstance(context, ExecutionContext)
        assert context.query_executor is executor
        assert context.resource_id == "r1"
        assert context.user_id == "anon"

    async def test_owner_bypass_overrides_zero_default(
        self, dispatcher, view_handler
    ):
        result = await dispatcher.execute("r2", "alice", "data", "view", {})

        assert isinstance(result, Success)
        assert view_handler.call_count == 1

    async def test_no_access_action_always_permitted(self, dispatcher):
        result = await dispatcher.execute("r2", "bob", "data", "no-access", {})

        assert result == Success(value=None)

    async def test_handler_receives_read_only_views(self, mock_logger):
        seen = {}

        async def capture(data, params, context):
            seen["data"] = data
            seen["params"] = params
            return Success(value="ok")

        dispatcher = await make_dispatcher(capture, mock_logger)

        await dispatcher.execute("r1", "anon", "data", "view", {"x": "1"})

        assert isinstance(seen["data"], MappingProxyType)
        assert isinstance(seen["params"], MappingProxyType)

    async def test_undeclared_params_passed_through(self, dispatcher, view_handler):
        await dispatcher.execute("r1", "anon", "data", "view", {"extra": "v"})

        assert view_handler.calls[0][1] == {"extra": "v"}

    async def test_success_logged(self, dispatcher, mock_logger):
        await dispatcher.execute("r1", "anon", "data", "view", {})

        mock_logger.info.assert_any_call("action_executed")


@pytest.mark.unit
class TestExecuteRefused:
    """Test refusals and the no-side-effect guarantee."""

    async def test_denied_without_calling_handler(
        self, dispatcher, view_handler, mock_logger
    ):
        result = await dispatcher.execute("r2", "anon", "data", "view", {})

        assert isinstance(result, Failure)
        assert isinstance(result.error, PermissionDeniedError)
        assert result.error.required_level == 1
        assert result.error.permitted_level == 0
        assert view_handler.call_count == 0
        mock_logger.warning.assert_called_once_with(
            "action_permission_denied",
            required_level=1,
            permitted_level=0,
        )

    @pytest.mark.parametrize("user_id", ["anon", "bob", "alice"])
    async def test_unknown_branch_regardless_of_user(
        self, dispatcher, view_handler, user_id
    ):
        result = await dispatcher.execute("r2", user_id, "metadata", "view", {})

        assert isinstance(result, Failure)
        assert isinstance(result.error, NotFoundError)
        assert result.error.code == ErrorCode.BRANCH_NOT_FOUND
        assert view_handler.call_count == 0

    async def test_unknown_action_is_not_found(self, dispatcher):
        result = await dispatcher.execute("r1", "anon", "data", "delete", {})

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.ACTION_NOT_FOUND

    async def test_unknown_resource_is_not_found(self, dispatcher, view_handler):
        result = await dispatcher.execute("missing", "anon", "data", "view", {})

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.RESOURCE_NOT_FOUND
        assert view_handler.call_count == 0

    async def test_unresolved_type_is_logged_as_error(
        self, store, registry, mock_logger
    ):
        await store.create_if_absent(
            Resource(id="orphan", owner_id="alice", type="retired-type")
        )
        dispatcher = ActionDispatcher(
            store=store,
            registry=registry,
            query_executor=FakeQueryExecutor(),
            logger=mock_logger,
        )

        result = await dispatcher.execute("orphan", "alice", "data", "view", {})

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.RESOURCE_TYPE_NOT_FOUND
        mock_logger.error.assert_called_once_with(
            "resource_type_unresolved", resource_type="retired-type"
        )


@pytest.mark.unit
class TestParameterContract:
    """Test required parameter checks."""

    async def test_missing_required_param(self, store, mock_logger):
        get_handler = RecordingHandler(value="v")
        registry = ResourceTypeRegistry()
        registry.register("ledger", build_ledger_action_set({"get": get_handler}))
        registry.freeze()
        await store.create_if_absent(
            Resource(
                id="l1", owner_id="alice", type="ledger", default_mask={"entries": 3}
            )
        )
        dispatcher = ActionDispatcher(
            store=store,
            registry=registry,
            query_executor=FakeQueryExecutor(),
            logger=mock_logger,
        )

        missing = await dispatcher.execute("l1", "bob", "entries", "get", {"k": "x"})
        present = await dispatcher.execute("l1", "bob", "entries", "get", {"key": "x"})

        assert isinstance(missing, Failure)
        assert isinstance(missing.error, MissingParameterError)
        assert missing.error.parameter == "key"
        assert missing.error.missing == ("key",)
        assert present == Success(value="v")
        assert get_handler.call_count == 1

    async def test_denial_checked_before_parameters(self, store, mock_logger):
        registry = ResourceTypeRegistry()
        registry.register("ledger", build_ledger_action_set())
        registry.freeze()
        await store.create_if_absent(
            Resource(
                id="l1", owner_id="alice", type="ledger", default_mask={"entries": 1}
            )
        )
        dispatcher = ActionDispatcher(
            store=store,
            registry=registry,
            query_executor=FakeQueryExecutor(),
            logger=mock_logger,
        )

        result = await dispatcher.execute("l1", "bob", "entries", "get", {})

        assert isinstance(result, Failure)
        assert isinstance(result.error, PermissionDeniedError)


@pytest.mark.unit
class TestHandlerOutcomes:
    """Test handler failure, exception, invalid result and timeout mapping."""

    async def test_handler_failure_wrapped(self, mock_logger):
        cause = DomainError(code=ErrorCode.DATABASE_ERROR, message="backend down")
        handler = RecordingHandler(error=cause)
        dispatcher = await make_dispatcher(handler, mock_logger)

        result = await dispatcher.execute("r1", "anon", "data", "view", {})

        assert isinstance(result, Failure)
        assert isinstance(result.error, HandlerError)
        assert result.error.code == ErrorCode.HANDLER_FAILED
        assert result.error.cause == cause
        assert handler.call_count == 1

    async def test_handler_exception_wrapped(self, mock_logger):
        handler = RecordingHandler(raises=KeyError("probe_id"))
        dispatcher = await make_dispatcher(handler, mock_logger)

        result = await dispatcher.execute("r1", "anon", "data", "view", {})

        assert isinstance(result, Failure)
        assert isinstance(result.error, HandlerError)
        assert result.error.details == {"error_type": "KeyError"}
        assert mock_logger.error.call_args.args == ("action_handler_raised",)

    async def test_handler_non_result_wrapped(self, mock_logger):
        handler = RecordingHandler(raw_result="not a result")
        dispatcher = await make_dispatcher(handler, mock_logger)

        result = await dispatcher.execute("r1", "anon", "data", "view", {})

        assert isinstance(result, Failure)
        assert isinstance(result.error, HandlerError)
        assert result.error.cause is None

    async def test_handler_timeout(self, mock_logger):
        handler = RecordingHandler(value="late", delay=1.0)
        dispatcher = await make_dispatcher(handler, mock_logger)

        result = await dispatcher.execute(
            "r1", "anon", "data", "view", {}, timeout_seconds=0.01
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, HandlerTimeoutError)
        assert result.error.code == ErrorCode.HANDLER_TIMEOUT
        assert result.error.timeout_seconds == 0.01

    async def test_timeout_error_raised_by_handler_is_handler_failure(
        self, mock_logger
    ):
        handler = RecordingHandler(raises=TimeoutError("backend socket timed out"))
        dispatcher = await make_dispatcher(handler, mock_logger)

        result = await dispatcher.execute(
            "r1", "anon", "data", "view", {}, timeout_seconds=30.0
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, HandlerError)
        assert not isinstance(result.error, HandlerTimeoutError)
        assert result.error.code == ErrorCode.HANDLER_FAILED
        assert result.error.details == {"error_type": "TimeoutError"}

    async def test_default_timeout_applies(self, mock_logger):
        handler = RecordingHandler(value="late", delay=1.0)
        dispatcher = await make_dispatcher(handler, mock_logger, timeout=0.01)

        result = await dispatcher.execute("r1", "anon", "data", "view", {})

        assert isinstance(result, Failure)
        assert isinstance(result.error, HandlerTimeoutError)

    async def test_handler_not_retried(self, mock_logger):
        handler = RecordingHandler(raises=RuntimeError("boom"))
        dispatcher = await make_dispatcher(handler, mock_logger)

        await dispatcher.execute("r1", "anon", "data", "view", {})

        assert handler.call_count == 1

    async def test_concurrent_executions_are_independent(self, mock_logger):
        handler = RecordingHandler(value="ok", delay=0.01)
        dispatcher = await make_dispatcher(handler, mock_logger)

        results = await asyncio.gather(
            *(
                dispatcher.execute("r1", f"user-{i}", "data", "view", {"i": str(i)})
                for i in range(10)
            )
        )

        assert all(result == Success(value="ok") for result in results)
        assert sorted(call[1]["i"] for call in handler.calls) == sorted(
            str(i) for i in range(10)
        )


@pytest.mark.unit
class TestDispatcherUsesEvaluator:
    """Listing and execution resolve levels through the privilege evaluator."""

    async def test_list_actions_goes_through_list_available(self, dispatcher):
        with patch(
            "capgate.application.services.action_dispatcher.list_available",
            wraps=privilege_evaluator.list_available,
        ) as spy:
            result = await dispatcher.list_actions("r1", "anon")

        assert result == Success(value={"data": ["no-access", "view"]})
        assert spy.call_count == 1
        assert spy.call_args.args[2:] == ("data", "anon")

    async def test_execute_goes_through_permitted_level(self, dispatcher):
        with patch(
            "capgate.application.services.action_dispatcher.permitted_level",
            wraps=privilege_evaluator.permitted_level,
        ) as spy:
            result = await dispatcher.execute("r1", "anon", "data", "view", {})

        assert isinstance(result, Success)
        spy.assert_called_once()
        assert spy.call_args.args[2:] == ("data", "anon")
