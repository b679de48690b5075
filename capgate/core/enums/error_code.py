"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*, VALIDATION_*, MISSING_*)
- Lookup errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_*, *_CONFLICT)
- Authorization errors (PERMISSION_DENIED)
- Handler errors (HANDLER_*)
- Infrastructure errors (DATABASE_*, STORE_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_PRIVILEGE_LEVEL = "invalid_privilege_level"
    INVALID_RESOURCE_ID = "invalid_resource_id"
    MISSING_PARAMETER = "missing_parameter"

    # Lookup errors
    RESOURCE_NOT_FOUND = "resource_not_found"
    RESOURCE_TYPE_NOT_FOUND = "resource_type_not_found"
    BRANCH_NOT_FOUND = "branch_not_found"
    ACTION_NOT_FOUND = "action_not_found"

    # Conflict errors
    RESOURCE_TYPE_ALREADY_REGISTERED = "resource_type_already_registered"
    RESOURCE_UPDATE_CONFLICT = "resource_update_conflict"

    # Authorization errors
    PERMISSION_DENIED = "permission_denied"

    # Handler errors
    HANDLER_FAILED = "handler_failed"
    HANDLER_TIMEOUT = "handler_timeout"

    # Infrastructure errors
    DATABASE_ERROR = "database_error"
    STORE_UNAVAILABLE = "store_unavailable"
    STORE_CORRUPT_RECORD = "store_corrupt_record"
