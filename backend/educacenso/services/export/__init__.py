# educacenso/services/export/__init__.py
"""Export package public API.

Re-export the Educacenso exporter, the inconsistency reporter and the report
renderers so callers can import from ``educacenso.services.export`` directly.

Example
-------
from educacenso.services.export import export_educacenso, generate_inconsistency_report
"""

from .csv_exporter import CSVExporter
from .downloads import (
    download_educacenso_file,
    download_inconsistency_report,
    inconsistency_report_file_name,
    render_inconsistency_report,
)
from .educacenso_exporter import (
    export_educacenso,
    format_cpf_for_educacenso,
    format_date_for_educacenso,
    format_inep_code,
    generate_classroom_record,
    generate_infrastructure_record,
    generate_school_record,
    generate_student_record,
    generate_teacher_record,
)
from .inconsistency_reporter import (
    export_inconsistency_report_to_csv,
    filter_inconsistencies,
    generate_inconsistency_report,
)
from .pdf_generator import PDFGenerator
from .report_builder import ReportBuilder

__all__ = [
    "CSVExporter",
    "PDFGenerator",
    "ReportBuilder",
    "export_educacenso",
    "download_educacenso_file",
    "format_cpf_for_educacenso",
    "format_date_for_educacenso",
    "format_inep_code",
    "generate_school_record",
    "generate_student_record",
    "generate_teacher_record",
    "generate_classroom_record",
    "generate_infrastructure_record",
    "generate_inconsistency_report",
    "filter_inconsistencies",
    "export_inconsistency_report_to_csv",
    "download_inconsistency_report",
    "inconsistency_report_file_name",
    "render_inconsistency_report",
]
