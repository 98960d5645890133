"""Expense report document layout.

A report includes at most MAX_REPORT_ROWS expense rows. The summary block
always covers every expense passed in; rows beyond the cap are counted in
``DocumentLayout.omitted_rows`` and noted under the table.
"""

import logging
from datetime import date
from typing import Optional, Sequence

from biztracker.domain.entities import Expense, MetricSnapshot
from biztracker.domain.errors import ConfigurationError
from biztracker.domain.metrics import compute_metrics
from biztracker.domain.money import format_money, round2
from biztracker.rendering.layout import (
    GRAY,
    PRIMARY,
    WHITE,
    BoxOp,
    Column,
    DocumentLayout,
    LayoutEngine,
    PageGeometry,
    TextOp,
)

logger = logging.getLogger(__name__)

MAX_REPORT_ROWS = 30
DESCRIPTION_CHARS = 25
HEADER_BAND = 70.0


def report_columns(geometry: PageGeometry) -> list[Column]:
    left = geometry.margin
    amount_x = geometry.width - geometry.margin - 10
    return [
        Column("Date", left + 10),
        Column("Description", left + 95, width=180),
        Column("Category", left + 285, width=amount_x - 80 - (left + 285)),
        Column("Amount", amount_x, align="right"),
    ]


def truncate(text: str, limit: int = DESCRIPTION_CHARS) -> str:
    """Cut ``text`` to at most ``limit`` characters."""
    return text[:limit]


def layout_expense_report(
    expenses: Sequence[Expense],
    period_label: str,
    generated_on: Optional[date] = None,
    geometry: Optional[PageGeometry] = None,
    max_rows: int = MAX_REPORT_ROWS,
    snapshot: Optional[MetricSnapshot] = None,
) -> DocumentLayout:
    """Lay out an expense report.

    Args:
        expenses: Expenses to list, in display order
        period_label: Human-readable period, e.g. "Last Month"
        generated_on: Date printed as the generation date, defaults to today
        geometry: Page geometry, defaults to A4
        max_rows: Upper bound on listed expense rows
        snapshot: Precomputed metrics for the summary block; computed from
            ``expenses`` when omitted

    Returns:
        DocumentLayout whose ``omitted_rows`` counts expenses left off the table

    Raises:
        ConfigurationError: If max_rows is not positive
    """
    if max_rows < 1:
        raise ConfigurationError(f"Expense report row cap must be positive (got {max_rows})")
    expenses = list(expenses)
    geometry = geometry or PageGeometry()
    snapshot = snapshot or compute_metrics(expenses, [])
    generated_on = generated_on or date.today()
    engine = LayoutEngine(geometry, title="Expense Report")

    engine.draw(BoxOp(x=0, y=0, width=geometry.width, height=HEADER_BAND, fill=PRIMARY))
    engine.draw(
        TextOp(x=geometry.margin, y=48, text="Expense Report", font="Helvetica-Bold", size=18, color=WHITE)
    )
    engine.move_to(HEADER_BAND + 25)
    engine.line(f"Period: {period_label}", size=12)
    engine.line(f"Generated: {generated_on.isoformat()}", size=12)
    engine.advance(20)

    engine.line("Summary", font="Helvetica-Bold", size=12)
    engine.line(f"Total Expenses: {format_money(snapshot.total_expenses)}", size=12)
    engine.line(f"Total GST Paid: {format_money(round2(snapshot.gst_paid))}", size=12)
    engine.line(f"Number of Transactions: {len(expenses)}", size=12)
    engine.advance(20)

    listed = expenses[:max_rows]
    omitted = len(expenses) - len(listed)
    if omitted:
        logger.warning(
            "Expense report lists the first %d of %d expenses; %d omitted",
            len(listed),
            len(expenses),
            omitted,
        )

    engine.start_table(report_columns(geometry))
    for expense in listed:
        engine.add_row(
            [
                expense.date.isoformat(),
                truncate(expense.description),
                expense.category,
                format_money(expense.amount),
            ]
        )

    if omitted:
        engine.advance(10)
        engine.line(
            f"Showing the first {len(listed)} of {len(expenses)} expenses.",
            size=9,
            color=GRAY,
        )

    return engine.finish(omitted_rows=omitted)
