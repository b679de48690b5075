"""Infrastructure enums package.

Usage:
    from capgate.infrastructure.enums import InfrastructureErrorCode
"""

from capgate.infrastructure.enums.infrastructure_error_code import (
    InfrastructureErrorCode,
)

__all__ = ["InfrastructureErrorCode"]
