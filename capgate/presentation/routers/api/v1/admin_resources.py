"""Resource administration endpoints.

Handlers:
    add_resource          - Provision a resource (idempotent)
    grant_privilege       - Set a per-user level on a branch
    revoke_privilege      - Remove a per-user level on a branch
    set_default_privilege - Set the default level on a branch

All routes require the admin token (see caller_dependencies.require_admin).
Administrators get precise error messages; the generic NOT_AVAILABLE
answer is reserved for callers of the action endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, Response, status
from fastapi.responses import JSONResponse

from capgate.application.commands import (
    AddResource,
    GrantPrivilege,
    RevokePrivilege,
    SetDefaultPrivilege,
)
from capgate.application.commands.handlers import (
    AddResourceHandler,
    GrantPrivilegeHandler,
    RevokePrivilegeHandler,
    SetDefaultPrivilegeHandler,
)
from capgate.application.errors import from_domain_error
from capgate.core.container import (
    get_add_resource_handler,
    get_grant_privilege_handler,
    get_revoke_privilege_handler,
    get_set_default_privilege_handler,
)
from capgate.core.errors import DomainError
from capgate.core.result import Failure
from capgate.presentation.routers.api.middleware.caller_dependencies import (
    require_admin,
)
from capgate.presentation.routers.api.middleware.trace_middleware import get_trace_id
from capgate.presentation.routers.api.v1.errors import ErrorResponseBuilder
from capgate.schemas.resource_schemas import (
    CreateResourceRequest,
    CreateResourceResponse,
    PrivilegeLevelRequest,
    ResourceResponse,
)

admin_router = APIRouter(
    prefix="/admin/resources",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)


def _error_response(error: DomainError, request: Request) -> JSONResponse:
    return ErrorResponseBuilder.from_application_error(
        error=from_domain_error(error, expose_denial_reasons=True),
        request=request,
        trace_id=get_trace_id() or "",
    )


@admin_router.post(
    "",
    response_model=CreateResourceResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_resource(
    request: Request,
    response: Response,
    data: CreateResourceRequest,
    handler: AddResourceHandler = Depends(get_add_resource_handler),
) -> CreateResourceResponse | JSONResponse:
    """Provision a resource.

    POST /api/v1/admin/resources -> 201 Created, or 200 OK with
    ``created: false`` if the id already exists (record left untouched).
    """
    result = await handler.handle(
        AddResource(
            resource_type=data.resource_type,
            resource_id=data.resource_id,
            owner_id=data.owner_id,
            data=data.data,
            default_mask=data.default_mask,
        )
    )

    if isinstance(result, Failure):
        return _error_response(result.error, request)

    if not result.value.created:
        response.status_code = status.HTTP_200_OK
    return CreateResourceResponse.from_result(result.value)


@admin_router.put(
    "/{resource_id}/grants/{user_id}/{branch}",
    response_model=ResourceResponse,
)
async def grant_privilege(
    request: Request,
    resource_id: Annotated[str, Path(description="Resource id")],
    user_id: Annotated[str, Path(description="User receiving the level")],
    branch: Annotated[str, Path(description="Branch name")],
    data: PrivilegeLevelRequest,
    handler: GrantPrivilegeHandler = Depends(get_grant_privilege_handler),
) -> ResourceResponse | JSONResponse:
    """Set a per-user level override.

    PUT /api/v1/admin/resources/{id}/grants/{user_id}/{branch} -> 200 OK
    """
    result = await handler.handle(
        GrantPrivilege(
            resource_id=resource_id,
            user_id=user_id,
            branch=branch,
            level=data.level,
        )
    )

    if isinstance(result, Failure):
        return _error_response(result.error, request)

    return ResourceResponse.from_entity(result.value)


@admin_router.delete(
    "/{resource_id}/grants/{user_id}/{branch}",
    response_model=ResourceResponse,
)
async def revoke_privilege(
    request: Request,
    resource_id: Annotated[str, Path(description="Resource id")],
    user_id: Annotated[str, Path(description="User losing the override")],
    branch: Annotated[str, Path(description="Branch name")],
    handler: RevokePrivilegeHandler = Depends(get_revoke_privilege_handler),
) -> ResourceResponse | JSONResponse:
    """Remove a per-user level override.

    DELETE /api/v1/admin/resources/{id}/grants/{user_id}/{branch} -> 200 OK
    """
    result = await handler.handle(
        RevokePrivilege(resource_id=resource_id, user_id=user_id, branch=branch)
    )

    if isinstance(result, Failure):
        return _error_response(result.error, request)

    return ResourceResponse.from_entity(result.value)


@admin_router.put(
    "/{resource_id}/default-mask/{branch}",
    response_model=ResourceResponse,
)
async def set_default_privilege(
    request: Request,
    resource_id: Annotated[str, Path(description="Resource id")],
    branch: Annotated[str, Path(description="Branch name")],
    data: PrivilegeLevelRequest,
    handler: SetDefaultPrivilegeHandler = Depends(get_set_default_privilege_handler),
) -> ResourceResponse | JSONResponse:
    """Set the default level on a branch.

    PUT /api/v1/admin/resources/{id}/default-mask/{branch} -> 200 OK
    """
    result = await handler.handle(
        SetDefaultPrivilege(resource_id=resource_id, branch=branch, level=data.level)
    )

    if isinstance(result, Failure):
        return _error_response(result.error, request)

    return ResourceResponse.from_entity(result.value)
