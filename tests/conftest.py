"""Pytest configuration for capgate tests.

Provides:
1. Marker registration (unit, integration, api)
2. Automatic asyncio marking of async test functions
3. Shared fixtures: mock logger, test ActionSets, registry, in-memory store
"""

import inspect
from unittest.mock import MagicMock

import pytest
import pytest_asyncio

from capgate.application.services.resource_type_registry import (
    ResourceTypeRegistry,
)
from capgate.domain.entities.resource import Resource
from capgate.infrastructure.storage.in_memory_resource_store import (
    InMemoryResourceStore,
)
from tests.utils.doubles import (
    RecordingHandler,
    build_ledger_action_set,
    build_probe_action_set,
)


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests against real or emulated backends"
    )
    config.addinivalue_line("markers", "api: HTTP endpoint tests via TestClient")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions.

    This ensures all async tests are properly marked even if
    the developer forgets to add @pytest.mark.asyncio.
    """
    for item in items:
        function = getattr(item, "function", None)
        if function is not None and inspect.iscoroutinefunction(function):
            item.add_marker(pytest.mark.asyncio)


@pytest.fixture
def mock_logger():
    """LoggerProtocol double; bind() returns the same mock."""
    logger = MagicMock()
    logger.bind.return_value = logger
    return logger


@pytest.fixture
def view_handler():
    """Recording handler for the probe ``view`` action."""
    return RecordingHandler(value={"columns": ["seq"], "rows": [[1], [2]]})


@pytest.fixture
def registry(view_handler):
    """Frozen registry with the test ``probe`` and ``ledger`` types."""
    registry = ResourceTypeRegistry()
    registry.register("probe", build_probe_action_set(view=view_handler))
    registry.register("ledger", build_ledger_action_set())
    registry.freeze()
    return registry


@pytest_asyncio.fixture
async def store():
    """In-memory store seeded with two probe resources.

    r1: default data level 1 (anyone may view)
    r2: default data level 0 (only the owner may view)
    """
    store = InMemoryResourceStore()
    await store.create_if_absent(
        Resource(
            id="r1",
            owner_id="alice",
            type="probe",
            data={"probe_id": "p-1"},
            default_mask={"data": 1},
        )
    )
    await store.create_if_absent(
        Resource(
            id="r2",
            owner_id="alice",
            type="probe",
            data={"probe_id": "p-2"},
            default_mask={"data": 0},
        )
    )
    return store
