"""Infrastructure-specific error codes.

These are internal codes for tracking infrastructure failures.
They are mapped to domain ErrorCode when flowing to domain layer.

Categories:
- Database errors (DATABASE_*)
- Store errors (STORE_*)
"""

from enum import Enum


class InfrastructureErrorCode(Enum):
    """Infrastructure-specific error codes."""

    # Database errors
    DATABASE_CONNECTION_FAILED = "database_connection_failed"
    DATABASE_TIMEOUT = "database_timeout"
    DATABASE_DATA_ERROR = "database_data_error"
    DATABASE_BIND_MISMATCH = "database_bind_mismatch"
    DATABASE_ERROR = "database_error"

    # Resource store errors
    STORE_CONNECTION_ERROR = "store_connection_error"
    STORE_GET_ERROR = "store_get_error"
    STORE_SET_ERROR = "store_set_error"
    STORE_DECODE_ERROR = "store_decode_error"
    STORE_UPDATE_CONFLICT = "store_update_conflict"
