"""Domain entities."""

from capgate.domain.entities.resource import Resource

__all__ = ["Resource"]
