"""
Custom exceptions for logger construction and configuration.

Log calls themselves never raise: rendering degrades to best-effort text.
These errors only surface when something is wired up wrong (an unknown output
format passed to the middleware factory, an unknown level name in settings, a
metadata tag of an unsupported type), i.e. at construction time.
"""

from typing import Any

# canonical package-level exception

class CtxLogError(Exception):
    """
    Base exception for ctxlog configuration errors.

    - message: human-friendly message
    - value: the offending value (for logs / debugging only)
    - error_code: canonical short code (e.g., 'invalid_output_format')
    """

    def __init__(self, message: str, *, value: Any = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.value = value
        self.error_code = error_code

    def __str__(self) -> str:
        parts = []
        if self.value is not None:
            parts.append(f"value: {self.value!r}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{self.message} ({'; '.join(parts)})"
        return self.message


class InvalidOutputFormatError(CtxLogError, ValueError):
    def __init__(self, value: Any):
        super().__init__(
            "Output format must be 'text' or 'json'",
            value=value,
            error_code="invalid_output_format",
        )


class InvalidLevelError(CtxLogError, ValueError):
    def __init__(self, value: Any):
        super().__init__("Unknown log level", value=value, error_code="invalid_level")


class InvalidMetadataError(CtxLogError, TypeError):
    """Raised when a Logger tag is neither a scalar nor a mapping."""

    def __init__(self, value: Any):
        super().__init__(
            "Logger metadata must be a str, number or mapping",
            value=type(value).__name__,
            error_code="invalid_metadata",
        )


__all__ = [
    "CtxLogError",
    "InvalidOutputFormatError",
    "InvalidLevelError",
    "InvalidMetadataError",
]
