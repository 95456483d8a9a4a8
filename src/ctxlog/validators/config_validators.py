from typing import Any


def to_lowercase(value: Any) -> Any:
    """
    Converts a string to lowercase (after trimming whitespace).
    Non-string values pass through untouched so pydantic can reject them.
    """
    if isinstance(value, str):
        return value.strip().lower()
    return value


def to_header_name(value: Any) -> Any:
    """
    Strips whitespace around an HTTP header name.
    """
    if isinstance(value, str):
        return value.strip()
    return value
