# backend/educacenso/services/export/csv_exporter.py
import csv
import io
from typing import Any, Dict, Iterable, List, Optional, Sequence


def _render_field(value: str, quoting: int) -> str:
    """One CSV field as the csv module writes it."""
    if not value and quoting == csv.QUOTE_MINIMAL:
        return ""
    output = io.StringIO()
    # "\r\n" makes the writer quote a bare "\r" or "\n" as well
    csv.writer(output, quoting=quoting, lineterminator="\r\n").writerow([value])
    return output.getvalue()[:-2]


class CSVExporter:
    """Exports data to CSV format.

    ``headers`` maps column keys to the titles written in the header row.
    Columns listed in ``quoted_fields`` are always quoted, even when empty;
    the others only when they contain a delimiter, a quote or a line
    break. Rows are separated by ``\\n`` with no trailing newline.
    """

    def __init__(
        self,
        fieldnames: List[str],
        headers: Optional[Dict[str, str]] = None,
        quoted_fields: Sequence[str] = (),
    ):
        self.fieldnames = fieldnames
        self.headers = headers or {}
        self.quoted_fields = set(quoted_fields)

    def _format_field(self, column: str, value: Any) -> str:
        text = "" if value is None else str(value)
        quoting = csv.QUOTE_ALL if column in self.quoted_fields else csv.QUOTE_MINIMAL
        return _render_field(text, quoting)

    def header_row(self) -> str:
        return ",".join(
            _render_field(self.headers.get(column, column), csv.QUOTE_MINIMAL)
            for column in self.fieldnames
        )

    def export_text(self, rows: Iterable[Dict[str, Any]]) -> str:
        """Return the CSV document as text."""
        lines = [self.header_row()]
        for row in rows:
            lines.append(
                ",".join(
                    self._format_field(column, row.get(column)) for column in self.fieldnames
                )
            )
        return "\n".join(lines)

    def export(self, rows: Iterable[Dict[str, Any]]) -> bytes:
        """Return CSV bytes for the given rows."""
        return self.export_text(rows).encode("utf-8")
