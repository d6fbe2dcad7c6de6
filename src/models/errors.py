"""
Domain errors

Every failure raised by the core carries a stable code, a readable message
and a details dict, so callers can log or surface them uniformly.
"""

from typing import Any, Optional


class RevealError(Exception):
    """Base class for domain-specific errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidColorSpec(RevealError):
    """Color value cannot be resolved to a valid RGB triple"""
    def __init__(self, value: Any, reason: str):
        super().__init__(
            code="INVALID_COLOR_SPEC",
            message=f"Invalid color {value!r}: {reason}",
            details={"value": repr(value), "reason": reason},
        )


class InvalidOpacity(RevealError, ValueError):
    """Opacity outside [0, 1]"""
    def __init__(self, opacity: Any):
        super().__init__(
            code="INVALID_OPACITY",
            message=f"Opacity must be a number in [0, 1], got {opacity!r}",
            details={"opacity": repr(opacity)},
        )


class InvalidThreshold(RevealError, ValueError):
    """Visibility threshold outside [0, 1]"""
    def __init__(self, threshold: Any):
        super().__init__(
            code="INVALID_THRESHOLD",
            message=f"Visibility threshold must be a number in [0, 1], got {threshold!r}",
            details={"threshold": repr(threshold)},
        )


class InvalidStaggerConfig(RevealError, ValueError):
    """Stagger options outside documented ranges"""
    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(
            code="INVALID_STAGGER_CONFIG",
            message=f"Invalid stagger option '{field}'={value!r}: {reason}",
            details={"field": field, "value": repr(value), "reason": reason},
        )


class TargetOwnershipError(RevealError):
    """Target was registered by a different animator"""
    def __init__(self, index: int):
        super().__init__(
            code="TARGET_NOT_OWNED",
            message=f"Target #{index} is not registered with this animator",
            details={"index": index},
        )


class ConfigError(RevealError):
    """Configuration data loaded but does not match the schema"""
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(code="CONFIG_INVALID", message=message, details=details)
