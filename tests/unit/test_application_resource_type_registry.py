"""Unit tests for ResourceTypeRegistry."""

import pytest

from capgate.application.services.resource_type_registry import (
    ResourceTypeRegistry,
)
from capgate.core.enums import ErrorCode
from capgate.core.errors import ConflictError, NotFoundError
from capgate.core.result import Failure, Success
from tests.utils.doubles import build_ledger_action_set, build_probe_action_set


@pytest.mark.unit
class TestResourceTypeRegistry:
    """Test registration lifecycle and lookup."""

    def test_register_and_lookup(self):
        registry = ResourceTypeRegistry()
        probe = build_probe_action_set()

        assert registry.register("probe", probe) == Success(value=None)
        assert registry.lookup("probe") == Success(value=probe)

    def test_duplicate_registration_is_conflict(self):
        registry = ResourceTypeRegistry()
        registry.register("probe", build_probe_action_set())

        result = registry.register("probe", build_ledger_action_set())

        assert isinstance(result, Failure)
        assert isinstance(result.error, ConflictError)
        assert result.error.code == ErrorCode.RESOURCE_TYPE_ALREADY_REGISTERED

    def test_unknown_type_is_not_found(self):
        result = ResourceTypeRegistry().lookup("missing")

        assert isinstance(result, Failure)
        assert isinstance(result.error, NotFoundError)
        assert result.error.code == ErrorCode.RESOURCE_TYPE_NOT_FOUND

    def test_register_after_freeze_raises(self):
        registry = ResourceTypeRegistry()
        registry.freeze()

        with pytest.raises(RuntimeError, match="registry is frozen"):
            registry.register("probe", build_probe_action_set())

    def test_freeze_keeps_registered_types(self):
        registry = ResourceTypeRegistry()
        registry.register("probe", build_probe_action_set())
        registry.register("ledger", build_ledger_action_set())

        registry.freeze()
        registry.freeze()

        assert registry.is_frozen is True
        assert registry.type_names == ["probe", "ledger"]
        assert isinstance(registry.lookup("ledger"), Success)
