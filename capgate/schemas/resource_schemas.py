"""Resource request and response schemas.

Pydantic schemas for the resource API endpoints. Includes:
- Request schemas (client -> API)
- Response schemas (API -> client)
- Entity-to-schema conversion methods
"""

from typing import Any

from pydantic import BaseModel, Field, StrictInt

from capgate.application.commands.handlers import AddResourceResult
from capgate.domain.entities.resource import Resource


# =============================================================================
# Request Schemas
# =============================================================================


class RunActionRequest(BaseModel):
    """Action invocation body.

    Attributes:
        params: Named string parameters for the action.
        timeout_seconds: Handler deadline; the server default applies if unset.
    """

    params: dict[str, str] = Field(
        default_factory=dict,
        description="Action parameters",
        examples=[{"key": "greeting"}],
    )
    timeout_seconds: float | None = Field(
        None,
        gt=0,
        description="Handler deadline in seconds",
    )


class CreateResourceRequest(BaseModel):
    """Resource provisioning body.

    Attributes:
        resource_type: Registered resource type name.
        resource_id: Unique resource identifier.
        owner_id: Owning user.
        data: Backend parameters consumed by the type's handlers.
        default_mask: Branch -> level for callers without an override.
    """

    resource_type: str = Field(..., min_length=1, examples=["dataset-probe"])
    resource_id: str = Field(..., min_length=1, examples=["r1"])
    owner_id: str = Field(..., min_length=1, examples=["alice"])
    data: dict[str, str] = Field(
        default_factory=dict,
        examples=[{"probe_id": "p-17"}],
    )
    default_mask: dict[str, StrictInt] = Field(
        default_factory=dict,
        examples=[{"data": 1}],
    )


class PrivilegeLevelRequest(BaseModel):
    """Body for setting a privilege level on one branch."""

    level: StrictInt = Field(..., description="Index into the branch", examples=[1])


# =============================================================================
# Response Schemas
# =============================================================================


class ActionListResponse(BaseModel):
    """Permitted actions per branch.

    Attributes:
        resource_id: Inspected resource.
        branches: Branch -> action names the caller may invoke, in
            privilege order.
    """

    resource_id: str
    branches: dict[str, list[str]] = Field(
        ...,
        examples=[{"data": ["no-access", "view"]}],
    )


class RunActionResponse(BaseModel):
    """Action result, passed through unchanged from the handler."""

    result: Any = Field(None, description="Handler return value")


class CreateResourceResponse(BaseModel):
    """Provisioning outcome."""

    resource_id: str
    created: bool

    @classmethod
    def from_result(cls, result: AddResourceResult) -> "CreateResourceResponse":
        """Convert handler result to response schema."""
        return cls(resource_id=result.resource_id, created=result.created)


class ResourceResponse(BaseModel):
    """Full resource record (admin view)."""

    id: str
    owner_id: str
    type: str
    data: dict[str, str]
    default_mask: dict[str, int]
    user_masks: dict[str, dict[str, int]]

    @classmethod
    def from_entity(cls, resource: Resource) -> "ResourceResponse":
        """Convert Resource entity to response schema."""
        return cls(
            id=resource.id,
            owner_id=resource.owner_id,
            type=resource.type,
            data=dict(resource.data),
            default_mask=dict(resource.default_mask),
            user_masks={
                user_id: dict(levels)
                for user_id, levels in resource.user_masks.items()
            },
        )
