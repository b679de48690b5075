"""API test fixtures.

The app's container factories are replaced through
``app.dependency_overrides`` with a dispatcher and command handlers built
over an in-memory store and a test registry. The lifespan is not run.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from capgate.application.commands.handlers import (
    AddResourceHandler,
    GrantPrivilegeHandler,
    RevokePrivilegeHandler,
    SetDefaultPrivilegeHandler,
)
from capgate.application.services.action_dispatcher import ActionDispatcher
from capgate.application.services.resource_type_registry import (
    ResourceTypeRegistry,
)
from capgate.core.config import Settings, get_settings
from capgate.core.container import (
    get_action_dispatcher,
    get_add_resource_handler,
    get_grant_privilege_handler,
    get_revoke_privilege_handler,
    get_set_default_privilege_handler,
)
from capgate.core.enums import ErrorCode
from capgate.core.errors import DomainError
from capgate.domain.entities.resource import Resource
from capgate.domain.value_objects.action_set import Action, ActionSet, Branch
from capgate.infrastructure.action_sets.common import no_access_action
from capgate.infrastructure.storage.in_memory_resource_store import (
    InMemoryResourceStore,
)
from capgate.main import app
from tests.utils.doubles import (
    FakeQueryExecutor,
    RecordingHandler,
    build_ledger_action_set,
    build_probe_action_set,
)

ADMIN_TOKEN = "test-admin-token"


@pytest.fixture
def ops_handlers():
    return {
        "fail": RecordingHandler(
            error=DomainError(code=ErrorCode.DATABASE_ERROR, message="backend down")
        ),
        "crash": RecordingHandler(raises=RuntimeError("boom")),
        "slow": RecordingHandler(value="late", delay=1.0),
    }


@pytest.fixture
def api_registry(view_handler, ops_handlers):
    registry = ResourceTypeRegistry()
    registry.register("probe", build_probe_action_set(view=view_handler))
    registry.register("ledger", build_ledger_action_set())
    registry.register(
        "ops",
        ActionSet.of(
            Branch(
                name="ops",
                actions=(
                    no_access_action(),
                    *(
                        Action(name=name, handler=handler)
                        for name, handler in ops_handlers.items()
                    ),
                ),
            ),
        ),
    )
    registry.freeze()
    return registry


@pytest.fixture
def api_store():
    store = InMemoryResourceStore()
    seed = [
        Resource(id="r1", owner_id="alice", type="probe",
                 data={"probe_id": "p-1"}, default_mask={"data": 1}),
        Resource(id="r2", owner_id="alice", type="probe",
                 data={"probe_id": "p-2"}, default_mask={"data": 0}),
        Resource(id="r3", owner_id="alice", type="ledger",
                 default_mask={"entries": 3, "audit": 0}),
        Resource(id="r4", owner_id="alice", type="ops", default_mask={"ops": 3}),
    ]

    async def populate():
        for resource in seed:
            await store.create_if_absent(resource)

    asyncio.run(populate())
    return store


@pytest.fixture
def api_settings():
    return Settings(admin_token=ADMIN_TOKEN, expose_denial_reasons=False)


@pytest.fixture
def client(api_store, api_registry, api_settings, mock_logger):
    deps = {"store": api_store, "registry": api_registry, "logger": mock_logger}
    dispatcher = ActionDispatcher(
        query_executor=FakeQueryExecutor(),
        default_timeout_seconds=5.0,
        **deps,
    )

    app.dependency_overrides[get_settings] = lambda: api_settings
    app.dependency_overrides[get_action_dispatcher] = lambda: dispatcher
    app.dependency_overrides[get_add_resource_handler] = lambda: AddResourceHandler(**deps)
    app.dependency_overrides[get_grant_privilege_handler] = (
        lambda: GrantPrivilegeHandler(**deps)
    )
    app.dependency_overrides[get_revoke_privilege_handler] = (
        lambda: RevokePrivilegeHandler(**deps)
    )
    app.dependency_overrides[get_set_default_privilege_handler] = (
        lambda: SetDefaultPrivilegeHandler(**deps)
    )

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"X-Admin-Token": ADMIN_TOKEN}
