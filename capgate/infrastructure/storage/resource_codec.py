"""Resource <-> JSON record conversion.

Stored record shape (one JSON object per resource):

    {
        "id": "r1",
        "owner_id": "alice",
        "type": "dataset-probe",
        "data": {"probe_id": "p-17"},
        "default_mask": {"data": 1},
        "user_masks": {"bob": {"data": 0}}
    }
"""

import json
from typing import Any

from capgate.core.enums import ErrorCode
from capgate.core.result import Failure, Result, Success
from capgate.domain.entities.resource import Resource
from capgate.infrastructure.enums import InfrastructureErrorCode
from capgate.infrastructure.errors import CacheError


def resource_to_dict(resource: Resource) -> dict[str, Any]:
    """Convert a Resource to a JSON-compatible dict."""
    return {
        "id": resource.id,
        "owner_id": resource.owner_id,
        "type": resource.type,
        "data": dict(resource.data),
        "default_mask": dict(resource.default_mask),
        "user_masks": {
            user_id: dict(overrides)
            for user_id, overrides in resource.user_masks.items()
        },
    }


def _level_map(raw: Any, field: str) -> dict[str, int]:
    if not isinstance(raw, dict):
        raise ValueError(f"{field} must be an object")
    levels: dict[str, int] = {}
    for branch, level in raw.items():
        if isinstance(level, bool) or not isinstance(level, int):
            raise ValueError(f"{field}[{branch!r}] must be an integer")
        levels[str(branch)] = level
    return levels


def resource_from_dict(raw: Any) -> Resource:
    """Build a Resource from a decoded record.

    Raises:
        ValueError: If the record is malformed.
    """
    if not isinstance(raw, dict):
        raise ValueError("Resource record must be an object")
    for key in ("id", "owner_id", "type"):
        if not isinstance(raw.get(key), str):
            raise ValueError(f"Resource record field {key!r} must be a string")

    data = raw.get("data", {})
    if not isinstance(data, dict) or not all(
        isinstance(value, str) for value in data.values()
    ):
        raise ValueError("data must be an object of strings")

    user_masks_raw = raw.get("user_masks", {})
    if not isinstance(user_masks_raw, dict):
        raise ValueError("user_masks must be an object")

    return Resource(
        id=raw["id"],
        owner_id=raw["owner_id"],
        type=raw["type"],
        data={str(key): value for key, value in data.items()},
        default_mask=_level_map(raw.get("default_mask", {}), "default_mask"),
        user_masks={
            str(user_id): _level_map(overrides, f"user_masks[{user_id!r}]")
            for user_id, overrides in user_masks_raw.items()
        },
    )


def encode_resource(resource: Resource) -> str:
    """Serialize a Resource to its stored JSON string."""
    return json.dumps(resource_to_dict(resource), separators=(",", ":"))


def decode_resource(payload: str | bytes) -> Result[Resource, CacheError]:
    """Deserialize a stored JSON record.

    Returns:
        Success(Resource) or Failure(CacheError) with STORE_CORRUPT_RECORD.
    """
    try:
        return Success(value=resource_from_dict(json.loads(payload)))
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as e:
        return Failure(
            error=CacheError(
                code=ErrorCode.STORE_CORRUPT_RECORD,
                infrastructure_code=InfrastructureErrorCode.STORE_DECODE_ERROR,
                message="Stored resource record is malformed",
                details={"error": str(e)},
            )
        )
