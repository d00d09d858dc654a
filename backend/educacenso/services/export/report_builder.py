# backend/educacenso/services/export/report_builder.py
from typing import Any, Dict, List, Literal, Optional, Sequence

from ...core.exceptions import UnsupportedFormatError
from .csv_exporter import CSVExporter
from .pdf_generator import PDFGenerator

ReportFormat = Literal["csv", "pdf"]

MEDIA_TYPES: Dict[str, str] = {
    "csv": "text/csv; charset=utf-8",
    "pdf": "application/pdf",
}


class ReportBuilder:
    """
    A factory for generating tabular reports in various formats (CSV, PDF).

    Callers describe the table once (rows, column keys, display headers) and
    pick the output format at the edge.
    """

    def __init__(self):
        self._builders = {
            "csv": self._build_csv_internal,
            "pdf": self._build_pdf_internal,
        }

    @property
    def supported_formats(self) -> List[str]:
        return list(self._builders)

    def build(
        self,
        output_format: ReportFormat,
        rows: List[Dict[str, Any]],
        columns: List[str],
        title: str = "Relatório",
        headers: Optional[Dict[str, str]] = None,
        quoted_fields: Sequence[str] = (),
        subtitle: Optional[str] = None,
    ) -> bytes:
        """
        Builds a report in the specified format.

        Args:
            output_format: 'csv' or 'pdf' (case-insensitive).
            rows: One dict per row, keyed by column.
            columns: Column keys, in output order.
            title: Document title (PDF only).
            headers: Display titles per column key.
            quoted_fields: Columns always quoted in CSV output.
            subtitle: Line under the title (PDF only).

        Raises:
            UnsupportedFormatError: If the format is not csv or pdf.
        """
        builder_func = self._builders.get((output_format or "").lower())
        if not builder_func:
            raise UnsupportedFormatError(output_format, supported=self.supported_formats)

        return builder_func(
            rows=rows,
            columns=columns,
            title=title,
            headers=headers,
            quoted_fields=quoted_fields,
            subtitle=subtitle,
        )

    def _build_csv_internal(
        self,
        rows: List[Dict[str, Any]],
        columns: List[str],
        headers: Optional[Dict[str, str]],
        quoted_fields: Sequence[str],
        **kwargs,
    ) -> bytes:
        exporter = CSVExporter(fieldnames=columns, headers=headers, quoted_fields=quoted_fields)
        return exporter.export(rows)

    def _build_pdf_internal(
        self,
        rows: List[Dict[str, Any]],
        columns: List[str],
        title: str,
        headers: Optional[Dict[str, str]],
        subtitle: Optional[str],
        **kwargs,
    ) -> bytes:
        generator = PDFGenerator(title=title, subtitle=subtitle)
        return generator.generate(rows=rows, columns=columns, headers=headers)
