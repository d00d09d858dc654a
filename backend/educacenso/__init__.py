# backend/educacenso/__init__.py

"""Educacenso census export and inconsistency reporting service."""

from .config import (
    DevelopmentSettings,
    ProductionSettings,
    Settings,
    TestingSettings,
    get_settings,
    setup_logging,
    validate_settings,
)
from .core import (
    AppError,
    CensusExportError,
    InvalidSnapshotError,
    UnsupportedFormatError,
)
from .services import (
    download_educacenso_file,
    download_inconsistency_report,
    export_educacenso,
    export_inconsistency_report_to_csv,
    filter_inconsistencies,
    generate_inconsistency_report,
)
from .services import data_validation, export

__version__ = "1.0.0"

__all__ = [
    # Core components
    "AppError",
    "CensusExportError",
    "InvalidSnapshotError",
    "UnsupportedFormatError",
    # Services
    "data_validation",
    "export",
    "export_educacenso",
    "download_educacenso_file",
    "generate_inconsistency_report",
    "filter_inconsistencies",
    "export_inconsistency_report_to_csv",
    "download_inconsistency_report",
    # Configuration
    "Settings",
    "get_settings",
    "validate_settings",
    "setup_logging",
    "DevelopmentSettings",
    "ProductionSettings",
    "TestingSettings",
]
