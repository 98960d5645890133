"""Invoice document layout."""

from dataclasses import dataclass
from typing import Optional

from biztracker.domain.entities import Invoice
from biztracker.domain.errors import MalformedRecordError, empty_invoice
from biztracker.domain.money import GST_RATE, format_money
from biztracker.rendering.layout import (
    BLACK,
    GRAY,
    PRIMARY,
    WHITE,
    BoxOp,
    Column,
    DocumentLayout,
    LayoutEngine,
    PageGeometry,
    RuleOp,
    TextOp,
    wrap_text,
)

HEADER_BAND = 85.0
TABLE_MIN_TOP = 370.0
QTY_GAP = 30.0


@dataclass(frozen=True)
class Issuer:
    """Business details printed in the invoice header."""

    name: str = "BizTracker Pro"
    address_lines: tuple[str, ...] = ("123 Business Street", "City, State 12345")


def invoice_columns(geometry: PageGeometry) -> list[Column]:
    right = geometry.width - geometry.margin
    description_x = geometry.margin + 10
    qty_x = right - 170
    return [
        Column("Description", description_x, width=qty_x - QTY_GAP - description_x),
        Column("Qty", qty_x, align="center"),
        Column("Rate", right - 100, align="center"),
        Column("Amount", right - 10, align="right"),
    ]


def _draw_header_band(engine: LayoutEngine, issuer: Issuer) -> None:
    geometry = engine.geometry
    right = geometry.width - geometry.margin
    engine.draw(BoxOp(x=0, y=0, width=geometry.width, height=HEADER_BAND, fill=PRIMARY))
    engine.draw(
        TextOp(x=geometry.margin, y=57, text="INVOICE", font="Helvetica-Bold", size=24, color=WHITE)
    )
    y = 34.0
    for text in (issuer.name, *issuer.address_lines):
        engine.draw(TextOp(x=right, y=y, text=text, size=10, align="right", color=WHITE))
        y += 14
    engine.move_to(HEADER_BAND + 30)


def _draw_metadata(engine: LayoutEngine, invoice: Invoice) -> None:
    engine.line("Invoice Details", font="Helvetica-Bold", size=12, spacing=24)
    engine.line(f"Invoice Number: {invoice.invoice_number}")
    engine.line(f"Date: {invoice.created_on.isoformat()}")
    if invoice.due_date is not None:
        engine.line(f"Due Date: {invoice.due_date.isoformat()}")
    engine.line(f"Status: {invoice.status.value.upper()}")
    engine.advance(20)


def _draw_bill_to(engine: LayoutEngine, invoice: Invoice) -> None:
    engine.line("Bill To:", font="Helvetica-Bold", size=12, spacing=24)
    engine.line(invoice.client_name)
    if invoice.client_email:
        engine.line(invoice.client_email)
    if invoice.client_address:
        for address_line in invoice.client_address.splitlines():
            engine.line(address_line)
    engine.move_to(max(engine.cursor_y + 25, TABLE_MIN_TOP))


def _draw_totals(engine: LayoutEngine, invoice: Invoice) -> None:
    geometry = engine.geometry
    right = geometry.width - geometry.margin
    label_x = right - 120
    # Subtotal, GST, rule and total stay on one page
    engine.ensure_space(100)
    engine.advance(20)

    gst_label = f"GST ({GST_RATE * 100:.0f}%):"
    for label, value in (("Subtotal:", invoice.subtotal), (gst_label, invoice.gst_amount)):
        engine.draw(TextOp(x=label_x, y=engine.cursor_y + 10, text=label, align="right"))
        engine.draw(
            TextOp(x=right - 10, y=engine.cursor_y + 10, text=format_money(value), align="right")
        )
        engine.advance(20)

    engine.draw(RuleOp(x1=right - 180, y1=engine.cursor_y, x2=right, y2=engine.cursor_y, color=BLACK))
    engine.advance(8)
    engine.draw(
        TextOp(x=label_x, y=engine.cursor_y + 12, text="Total:", font="Helvetica-Bold", size=12, align="right")
    )
    engine.draw(
        TextOp(
            x=right - 10,
            y=engine.cursor_y + 12,
            text=format_money(invoice.total_amount),
            font="Helvetica-Bold",
            size=12,
            align="right",
        )
    )
    engine.advance(30)


def _draw_notes(engine: LayoutEngine, notes: str) -> None:
    engine.advance(10)
    engine.line("Notes:", font="Helvetica-Bold", size=10)
    width = engine.geometry.content_width
    for paragraph in notes.splitlines() or [notes]:
        for text in wrap_text(paragraph, width, size=9):
            engine.line(text, size=9, color=GRAY)


def layout_invoice(
    invoice: Invoice,
    geometry: Optional[PageGeometry] = None,
    issuer: Optional[Issuer] = None,
) -> DocumentLayout:
    """Lay out an invoice document.

    Args:
        invoice: Invoice to render
        geometry: Page geometry, defaults to A4
        issuer: Business details for the header band

    Returns:
        DocumentLayout with one or more pages

    Raises:
        MalformedRecordError: If the invoice has no line items
    """
    if not invoice.items:
        raise MalformedRecordError(empty_invoice(invoice.invoice_number))
    geometry = geometry or PageGeometry()
    issuer = issuer or Issuer()
    engine = LayoutEngine(geometry, title=f"Invoice {invoice.invoice_number}")

    _draw_header_band(engine, issuer)
    _draw_metadata(engine, invoice)
    _draw_bill_to(engine, invoice)

    engine.start_table(invoice_columns(geometry))
    last = len(invoice.items) - 1
    for index, item in enumerate(invoice.items):
        engine.add_row(
            [
                item.description,
                str(item.quantity),
                format_money(item.rate),
                format_money(item.amount),
            ],
            separator=index < last,
        )

    _draw_totals(engine, invoice)
    if invoice.notes:
        _draw_notes(engine, invoice.notes)

    return engine.finish(
        footer_lines=("Thank you for your business!", f"Generated by {issuer.name}")
    )
