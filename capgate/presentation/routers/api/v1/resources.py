"""Resource action endpoints.

Handlers:
    list_actions - Permitted action names per branch for the caller
    run_action   - Authorize and execute one action

Unknown resources, branches and actions and permission denials all answer
with the same 404 unless ``expose_denial_reasons`` is configured; the
dispatcher logs the real reason server-side.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request
from fastapi.responses import JSONResponse

from capgate.application.errors import from_domain_error
from capgate.application.services.action_dispatcher import ActionDispatcher
from capgate.core.config import Settings, get_settings
from capgate.core.container import get_action_dispatcher
from capgate.core.errors import DomainError
from capgate.core.result import Failure
from capgate.presentation.routers.api.middleware.caller_dependencies import CallerId
from capgate.presentation.routers.api.middleware.trace_middleware import get_trace_id
from capgate.presentation.routers.api.v1.errors import ErrorResponseBuilder
from capgate.schemas.resource_schemas import (
    ActionListResponse,
    RunActionRequest,
    RunActionResponse,
)

resources_router = APIRouter(prefix="/resources", tags=["Resources"])


def _error_response(
    error: DomainError,
    request: Request,
    settings: Settings,
) -> JSONResponse:
    return ErrorResponseBuilder.from_application_error(
        error=from_domain_error(
            error,
            expose_denial_reasons=settings.expose_denial_reasons,
        ),
        request=request,
        trace_id=get_trace_id() or "",
    )


@resources_router.get(
    "/{resource_id}/actions",
    response_model=ActionListResponse,
)
async def list_actions(
    request: Request,
    resource_id: Annotated[str, Path(description="Resource id")],
    caller_id: CallerId,
    settings: Annotated[Settings, Depends(get_settings)],
    dispatcher: ActionDispatcher = Depends(get_action_dispatcher),
) -> ActionListResponse | JSONResponse:
    """List the actions the caller may invoke on every branch.

    GET /api/v1/resources/{resource_id}/actions -> 200 OK

    Returns:
        ActionListResponse, or an RFC 9457 error response.
    """
    result = await dispatcher.list_actions(resource_id, caller_id)

    if isinstance(result, Failure):
        return _error_response(result.error, request, settings)

    return ActionListResponse(resource_id=resource_id, branches=result.value)


@resources_router.post(
    "/{resource_id}/branches/{branch}/actions/{action}/runs",
    response_model=RunActionResponse,
)
async def run_action(
    request: Request,
    resource_id: Annotated[str, Path(description="Resource id")],
    branch: Annotated[str, Path(description="Branch name")],
    action: Annotated[str, Path(description="Action name")],
    caller_id: CallerId,
    settings: Annotated[Settings, Depends(get_settings)],
    body: RunActionRequest | None = None,
    dispatcher: ActionDispatcher = Depends(get_action_dispatcher),
) -> RunActionResponse | JSONResponse:
    """Authorize and run one action.

    POST /api/v1/resources/{id}/branches/{branch}/actions/{action}/runs -> 200 OK

    Query-string parameters are merged into the action parameters; values
    in the body take precedence.

    Returns:
        RunActionResponse with the handler's value, or an RFC 9457 error
        response (404, 400, 502, 504).
    """
    body = body or RunActionRequest()
    params = dict(request.query_params)
    params.update(body.params)

    result = await dispatcher.execute(
        resource_id,
        caller_id,
        branch,
        action,
        params,
        timeout_seconds=body.timeout_seconds,
    )

    if isinstance(result, Failure):
        return _error_response(result.error, request, settings)

    return RunActionResponse(result=result.value)
