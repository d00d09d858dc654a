# backend/educacenso/services/export/downloads.py
"""
Downloadable files for the export results.

Both helpers return a FastAPI ``Response`` carrying the file as an attachment,
ready to be returned from a route.
"""

import logging
from datetime import date
from typing import Optional

from fastapi import Response

from ...schemas.export import EducacensoExportResult, InconsistencyReport
from ..data_validation.date_validator import today
from .inconsistency_reporter import (
    CSV_COLUMNS,
    CSV_HEADERS,
    CSV_QUOTED_COLUMNS,
    report_rows,
)
from .report_builder import MEDIA_TYPES, ReportBuilder

logger = logging.getLogger(__name__)

EDUCACENSO_MEDIA_TYPE = "text/plain; charset=utf-8"
INCONSISTENCY_REPORT_TITLE = "Relatório de Inconsistências"


def attachment(content: bytes, file_name: str, media_type: str) -> Response:
    headers = {"Content-Disposition": f'attachment; filename="{file_name}"'}
    return Response(content=content, media_type=media_type, headers=headers)


def download_educacenso_file(result: EducacensoExportResult) -> Optional[Response]:
    """
    The Educacenso file as a text attachment.

    An unsuccessful or empty result produces no file: the errors are logged
    and None is returned.
    """
    if not result.success or not result.content:
        logger.error(f"Erro ao gerar arquivo Educacenso: {result.errors}")
        return None

    return attachment(result.content.encode("utf-8"), result.file_name, EDUCACENSO_MEDIA_TYPE)


def inconsistency_report_file_name(
    output_format: str = "csv", reference_date: Optional[date] = None
) -> str:
    stamp = (reference_date or today()).isoformat()
    return f"inconsistencias_{stamp}.{output_format.lower()}"


def render_inconsistency_report(report: InconsistencyReport, output_format: str = "csv") -> bytes:
    """
    The report rendered as CSV or PDF bytes.

    Raises:
        UnsupportedFormatError: for formats other than csv and pdf.
    """
    return ReportBuilder().build(
        output_format,
        rows=report_rows(report.inconsistencies),
        columns=CSV_COLUMNS,
        title=INCONSISTENCY_REPORT_TITLE,
        headers=CSV_HEADERS,
        quoted_fields=CSV_QUOTED_COLUMNS,
        subtitle=(
            f"{report.total_errors} erro(s), {report.total_warnings} aviso(s), "
            f"{report.total_info} informação(ões)"
        ),
    )


def download_inconsistency_report(
    report: InconsistencyReport,
    output_format: str = "csv",
    reference_date: Optional[date] = None,
) -> Response:
    """The report as ``inconsistencias_<YYYY-MM-DD>.csv`` (or ``.pdf``)."""
    content = render_inconsistency_report(report, output_format)
    file_name = inconsistency_report_file_name(output_format, reference_date)
    logger.info(f"Inconsistency report rendered as '{file_name}' ({len(content)} bytes)")
    return attachment(content, file_name, MEDIA_TYPES[output_format.lower()])
