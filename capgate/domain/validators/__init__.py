"""Domain validators."""

from capgate.domain.validators.mask_validator import validate_level, validate_mask

__all__ = ["validate_level", "validate_mask"]
