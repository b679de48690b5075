"""Core enums package.

Usage:
    from capgate.core.enums import ErrorCode, Environment
"""

from capgate.core.enums.environment import Environment
from capgate.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
