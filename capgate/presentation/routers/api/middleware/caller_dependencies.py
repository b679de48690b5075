"""Caller identity and admin access dependencies.

capgate does not authenticate end users itself: the fronting gateway
asserts the caller in ``X-User-Id``. Callers without that header act as
the configured anonymous user.

Provisioning routes require ``X-Admin-Token`` to match
``settings.admin_token``; with no token configured they are closed.

Usage:
    @router.get("/resources/{resource_id}/actions")
    async def list_actions(caller_id: CallerId): ...

    @router.post("/admin/resources", dependencies=[Depends(require_admin)])
    async def add_resource(...): ...
"""

import hmac
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from capgate.core.config import Settings, get_settings


def get_caller_id(
    settings: Annotated[Settings, Depends(get_settings)],
    x_user_id: Annotated[str | None, Header()] = None,
) -> str:
    """Resolve the calling user's id.

    Returns:
        The X-User-Id header value, or the anonymous user id if the header
        is missing or blank.
    """
    if x_user_id is None or not x_user_id.strip():
        return settings.anonymous_user_id
    return x_user_id.strip()


CallerId = Annotated[str, Depends(get_caller_id)]


def require_admin(
    settings: Annotated[Settings, Depends(get_settings)],
    x_admin_token: Annotated[str | None, Header()] = None,
) -> None:
    """Reject requests without a valid admin token.

    Raises:
        HTTPException: 403 if no admin token is configured or the supplied
            token does not match.
    """
    expected = settings.admin_token
    if not expected or x_admin_token is None or not hmac.compare_digest(
        x_admin_token.encode(), expected.encode()
    ):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin token required",
        )
