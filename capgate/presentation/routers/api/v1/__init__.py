"""API v1 routers.

Resources:
    /api/v1/resources/{id}/actions                              - Permitted actions
    /api/v1/resources/{id}/branches/{branch}/actions/{action}/runs - Action runs

Admin Resources:
    /api/v1/admin/resources                                     - Provisioning
    /api/v1/admin/resources/{id}/grants/{user_id}/{branch}      - Per-user levels
    /api/v1/admin/resources/{id}/default-mask/{branch}          - Default levels
"""

from fastapi import APIRouter

from capgate.core.config import settings
from capgate.presentation.routers.api.v1.admin_resources import admin_router
from capgate.presentation.routers.api.v1.resources import resources_router

v1_router = APIRouter(prefix=settings.api_v1_prefix)
v1_router.include_router(resources_router)
v1_router.include_router(admin_router)

__all__ = [
    "v1_router",
]
