# backend/educacenso/services/export/pdf_generator.py
import io
from typing import Any, Dict, List, Optional

from reportlab.lib.pagesizes import A4, landscape
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

MARGIN = 40
ROW_HEIGHT = 14
FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_SIZE = 8


class PDFGenerator:
    """Generates simple tabular PDFs for reports."""

    def __init__(self, title: str = "Relatório", subtitle: Optional[str] = None):
        self.title = title
        self.subtitle = subtitle
        self.pagesize = landscape(A4)

    @staticmethod
    def _fit(text: str, width: float) -> str:
        """Truncate ``text`` with an ellipsis so it fits in ``width`` points."""
        if stringWidth(text, FONT, FONT_SIZE) <= width:
            return text
        while text and stringWidth(text + "...", FONT, FONT_SIZE) > width:
            text = text[:-1]
        return text + "..."

    def _column_widths(self, columns: List[str]) -> List[float]:
        usable = self.pagesize[0] - 2 * MARGIN
        return [usable / len(columns)] * len(columns) if columns else []

    def _draw_header(
        self, p: canvas.Canvas, y: float, columns: List[str], labels: Dict[str, str], widths: List[float]
    ) -> float:
        p.setFont(FONT_BOLD, FONT_SIZE)
        x = MARGIN
        for column, width in zip(columns, widths):
            p.drawString(x, y, self._fit(labels.get(column, column), width - 4))
            x += width
        p.setFont(FONT, FONT_SIZE)
        return y - ROW_HEIGHT - 4

    def generate(
        self,
        rows: List[Dict[str, Any]],
        columns: List[str],
        headers: Optional[Dict[str, str]] = None,
    ) -> bytes:
        """Render ``rows`` as a table, repeating the header on every page."""
        labels = headers or {}
        widths = self._column_widths(columns)
        _, height = self.pagesize

        buffer = io.BytesIO()
        p = canvas.Canvas(buffer, pagesize=self.pagesize)
        p.setTitle(self.title)

        p.setFont(FONT_BOLD, 16)
        p.drawString(MARGIN, height - MARGIN, self.title)
        y = height - MARGIN - 20
        if self.subtitle:
            p.setFont(FONT, 10)
            p.drawString(MARGIN, y, self.subtitle)
            y -= 20

        y = self._draw_header(p, y, columns, labels, widths)
        for row in rows:
            x = MARGIN
            for column, width in zip(columns, widths):
                value = row.get(column)
                p.drawString(x, y, self._fit("" if value is None else str(value), width - 4))
                x += width
            y -= ROW_HEIGHT
            if y < MARGIN:
                p.showPage()
                y = self._draw_header(p, height - MARGIN, columns, labels, widths)

        p.save()
        buffer.seek(0)
        return buffer.getvalue()
