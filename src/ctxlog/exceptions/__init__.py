# ctxlog/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   └── base.py                    # Configuration errors (e.g. InvalidOutputFormatError)

from .base import (
    CtxLogError,
    InvalidOutputFormatError,
    InvalidLevelError,
    InvalidMetadataError,
)

__all__ = [
    "CtxLogError",
    "InvalidOutputFormatError",
    "InvalidLevelError",
    "InvalidMetadataError",
]
