# backend/educacenso/services/__init__.py
"""
Services package for the application.

``data_validation`` holds the census rules; ``export`` builds the Educacenso
file and the inconsistency report on top of them.
"""

from .export import (
    download_educacenso_file,
    download_inconsistency_report,
    export_educacenso,
    export_inconsistency_report_to_csv,
    filter_inconsistencies,
    generate_inconsistency_report,
)

__all__ = [
    # Educacenso file
    "export_educacenso",
    "download_educacenso_file",
    # Inconsistency report
    "generate_inconsistency_report",
    "filter_inconsistencies",
    "export_inconsistency_report_to_csv",
    "download_inconsistency_report",
]
