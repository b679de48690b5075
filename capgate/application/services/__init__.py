"""Application services."""

from capgate.application.services.action_dispatcher import ActionDispatcher
from capgate.application.services.resource_type_registry import (
    ResourceTypeRegistry,
)

__all__ = ["ActionDispatcher", "ResourceTypeRegistry"]
