# educacenso/core/__init__.py

from ..config import get_settings
from .exceptions import (
    AppError,
    CensusExportError,
    ErrorCategory,
    ErrorSeverity,
    InvalidSnapshotError,
    UnsupportedFormatError,
)


__all__ = [
    "get_settings",  # Export the function, not a settings instance
    "AppError",
    "CensusExportError",
    "ErrorCategory",
    "ErrorSeverity",
    "InvalidSnapshotError",
    "UnsupportedFormatError",
]
