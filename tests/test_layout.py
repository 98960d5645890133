"""Tests for the layout engine."""

import pytest
from reportlab.pdfbase.pdfmetrics import stringWidth

from biztracker.domain.errors import ConfigurationError
from biztracker.rendering.layout import (
    ELLIPSIS,
    Column,
    LayoutEngine,
    LayoutPhase,
    PageGeometry,
    TextOp,
    fit_text,
    wrap_text,
)

COLUMNS = [Column("Name", 50), Column("Value", 500, align="right")]


def small_geometry(**kwargs):
    return PageGeometry(width=600, height=300, margin=40, footer_band=50, row_height=20, **kwargs)


class TestPageGeometry:
    """Tests for PageGeometry validation."""

    def test_defaults_are_a4(self):
        geometry = PageGeometry()
        assert round(geometry.width) == 595
        assert round(geometry.height) == 842
        assert geometry.usable_bottom == geometry.height - 50

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"margin": -1},
            {"row_height": 0},
            {"width": 60, "margin": 40},
            {"height": 100},
            {"rows_per_page": 0},
            {"height": float("nan")},
            {"width": float("inf")},
            {"row_height": float("nan")},
            {"footer_band": float("-inf")},
            {"margin": "40"},
            {"rows_per_page": 2.5},
            {"rows_per_page": True},
        ],
    )
    def test_invalid_geometry(self, kwargs):
        with pytest.raises(ConfigurationError):
            PageGeometry(**kwargs)


class TestLayoutEngine:
    """Tests for LayoutEngine phases and pagination."""

    def test_starts_in_header_phase(self):
        engine = LayoutEngine(small_geometry(), "Doc")
        assert engine.phase is LayoutPhase.HEADER
        assert engine.page_index == 0
        assert engine.cursor_y == 40

    def test_add_row_before_table(self):
        engine = LayoutEngine(small_geometry(), "Doc")
        with pytest.raises(RuntimeError):
            engine.add_row(["a", "b"])

    def test_start_table_twice(self):
        engine = LayoutEngine(small_geometry(), "Doc")
        engine.start_table(COLUMNS)
        with pytest.raises(RuntimeError):
            engine.start_table(COLUMNS)

    def test_draw_after_finish(self):
        engine = LayoutEngine(small_geometry(), "Doc")
        engine.finish()
        assert engine.phase is LayoutPhase.FOOTER
        with pytest.raises(RuntimeError):
            engine.draw(TextOp(x=0, y=0, text="late"))

    def test_wrong_cell_count(self):
        engine = LayoutEngine(small_geometry(), "Doc")
        engine.start_table(COLUMNS)
        with pytest.raises(ValueError):
            engine.add_row(["only one"])

    def test_rows_overflow_to_new_page_with_headings(self):
        # Usable extent 40..250: headings plus nine 20pt rows per page
        engine = LayoutEngine(small_geometry(), "Doc")
        engine.start_table(COLUMNS)
        for i in range(12):
            engine.add_row([f"row {i}", str(i)])
        layout = engine.finish()

        assert layout.page_count == 2
        assert [page.table_rows for page in layout.pages] == [9, 3]
        for page in layout.pages:
            assert page.texts().count("Name") == 1
            assert page.texts().count("Value") == 1

    def test_rows_per_page_cap(self):
        engine = LayoutEngine(small_geometry(rows_per_page=4), "Doc")
        engine.start_table(COLUMNS)
        for i in range(10):
            engine.add_row([f"row {i}", str(i)])
        layout = engine.finish()

        assert [page.table_rows for page in layout.pages] == [4, 4, 2]

    def test_rows_never_cross_usable_bottom(self):
        geometry = small_geometry()
        engine = LayoutEngine(geometry, "Doc")
        engine.start_table(COLUMNS)
        for i in range(30):
            engine.add_row([f"row {i}", str(i)])
        layout = engine.finish()

        for page in layout.pages:
            body = [op for op in page.ops if isinstance(op, TextOp) and op.size == 9]
            assert all(op.y <= geometry.usable_bottom for op in body)

    def test_footer_stamped_on_every_page(self):
        engine = LayoutEngine(small_geometry(rows_per_page=2), "Doc")
        engine.start_table(COLUMNS)
        for i in range(5):
            engine.add_row([f"row {i}", str(i)])
        layout = engine.finish(footer_lines=("Thanks",), omitted_rows=3)

        assert layout.omitted_rows == 3
        for number, page in enumerate(layout.pages, start=1):
            assert "Thanks" in page.texts()
            assert page.texts()[-1] == f"Page {number} of 3"

    def test_line_breaks_page_when_full(self):
        engine = LayoutEngine(small_geometry(), "Doc")
        for i in range(20):
            engine.line(f"line {i}")
        assert engine.page_index > 0

    def test_wide_cells_are_shortened_to_column_width(self):
        columns = [Column("Name", 50, width=60), Column("Value", 500, align="right")]
        engine = LayoutEngine(small_geometry(), "Doc")
        engine.start_table(columns)
        engine.add_row(["An exceptionally long item description", "1"])
        layout = engine.finish()

        cell = next(text for text in layout.pages[0].texts() if text.startswith("An "))
        assert cell.endswith(ELLIPSIS)
        assert stringWidth(cell, "Helvetica", 9) <= 60


class TestTextMeasurement:
    """Tests for width-based text helpers."""

    def test_fit_text_keeps_short_text(self):
        assert fit_text("Desk", 100) == "Desk"

    def test_fit_text_shortens_by_rendered_width(self):
        text = "W" * 40
        fitted = fit_text(text, 100)

        assert fitted.endswith(ELLIPSIS)
        assert stringWidth(fitted, "Helvetica", 10) <= 100

    def test_wrap_text_respects_width(self):
        text = "Payment is due within fourteen days of the invoice date. " * 4
        lines = wrap_text(text, 150, size=9)

        assert len(lines) > 1
        assert all(stringWidth(line, "Helvetica", 9) <= 150 for line in lines)
        assert " ".join(lines).split() == text.split()

    def test_wrap_text_empty(self):
        assert wrap_text("", 150) == [""]


def test_nan_geometry_cannot_reach_the_layout_engine():
    with pytest.raises(ConfigurationError, match="height"):
        LayoutEngine(PageGeometry(height=float("nan")), "Doc")
