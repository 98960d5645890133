"""PDF encoding of document layouts with ReportLab."""

import logging
import re
from datetime import date, datetime
from io import BytesIO
from typing import Optional, Sequence

from reportlab.pdfgen import canvas

from biztracker.domain.entities import Expense, Invoice
from biztracker.rendering.expense_report import layout_expense_report
from biztracker.rendering.invoice import Issuer, layout_invoice
from biztracker.rendering.layout import (
    BoxOp,
    DocumentLayout,
    PageGeometry,
    RuleOp,
    TextOp,
)

logger = logging.getLogger(__name__)

PDF_EXTENSION = "pdf"
UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def _rgb(color: tuple[int, int, int]) -> tuple[float, float, float]:
    return tuple(channel / 255 for channel in color)


def render_pdf(layout: DocumentLayout) -> bytes:
    """Encode a finished layout as PDF bytes."""
    geometry = layout.geometry
    height = geometry.height
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=(geometry.width, height))
    c.setTitle(layout.title)

    for page in layout.pages:
        for op in page.ops:
            if isinstance(op, BoxOp):
                c.setFillColorRGB(*_rgb(op.fill))
                c.rect(op.x, height - op.y - op.height, op.width, op.height, stroke=0, fill=1)
            elif isinstance(op, RuleOp):
                c.setStrokeColorRGB(*_rgb(op.color))
                c.line(op.x1, height - op.y1, op.x2, height - op.y2)
            elif isinstance(op, TextOp):
                c.setFillColorRGB(*_rgb(op.color))
                c.setFont(op.font, op.size)
                y = height - op.y
                if op.align == "right":
                    c.drawRightString(op.x, y, op.text)
                elif op.align == "center":
                    c.drawCentredString(op.x, y, op.text)
                else:
                    c.drawString(op.x, y, op.text)
        c.showPage()
    c.save()

    pdf_bytes = buffer.getvalue()
    logger.info(
        "Encoded '%s' as PDF: %d page(s), %d bytes", layout.title, layout.page_count, len(pdf_bytes)
    )
    return pdf_bytes


def invoice_filename(invoice_number: str, ext: str = PDF_EXTENSION) -> str:
    """Return the export file name for an invoice.

    Characters other than letters, digits, dot, dash and underscore become
    ``_``, so the name never contains a path separator.
    """
    return f"invoice-{UNSAFE_FILENAME_CHARS.sub('_', invoice_number)}.{ext}"


def expense_report_filename(
    generated_at: Optional[datetime] = None, ext: str = PDF_EXTENSION
) -> str:
    """Return the export file name for an expense report (epoch milliseconds)."""
    generated_at = generated_at or datetime.now()
    return f"expense-report-{int(generated_at.timestamp() * 1000)}.{ext}"


def render_invoice_pdf(
    invoice: Invoice,
    geometry: Optional[PageGeometry] = None,
    issuer: Optional[Issuer] = None,
) -> bytes:
    """Lay out and encode an invoice."""
    return render_pdf(layout_invoice(invoice, geometry=geometry, issuer=issuer))


def render_expense_report_pdf(
    expenses: Sequence[Expense],
    period_label: str,
    generated_on: Optional[date] = None,
    geometry: Optional[PageGeometry] = None,
) -> bytes:
    """Lay out and encode an expense report."""
    return render_pdf(
        layout_expense_report(
            expenses, period_label, generated_on=generated_on, geometry=geometry
        )
    )
