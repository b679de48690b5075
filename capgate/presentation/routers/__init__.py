"""Routers package.

Exports:
    system_router: Non-versioned system endpoints (/, /health)
    v1_router: Versioned API endpoints
"""

from capgate.presentation.routers.api.v1 import v1_router
from capgate.presentation.routers.system import system_router

__all__ = ["system_router", "v1_router"]
