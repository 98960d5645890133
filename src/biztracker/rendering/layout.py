"""Page layout model and pagination state machine.

Layouts are built as a list of pages, each holding simple draw operations in
points with the origin at the top-left corner and y growing downwards. The
encoder in ``biztracker.rendering.pdf`` turns them into PDF bytes; nothing in
this module knows about the output format.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Union

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth

from biztracker.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

Color = tuple[int, int, int]

BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)
GRAY: Color = (107, 114, 128)
LIGHT_GRAY: Color = (220, 220, 220)
HEADING_FILL: Color = (240, 240, 240)
PRIMARY: Color = (37, 99, 235)

BODY_FONT = "Helvetica"
ELLIPSIS = "..."


def fit_text(text: str, max_width: float, font: str = BODY_FONT, size: float = 10) -> str:
    """Shorten ``text`` with an ellipsis until its rendered width fits."""
    if stringWidth(text, font, size) <= max_width:
        return text
    while text and stringWidth(text + ELLIPSIS, font, size) > max_width:
        text = text[:-1]
    return text.rstrip() + ELLIPSIS


def wrap_text(text: str, max_width: float, font: str = BODY_FONT, size: float = 10) -> list[str]:
    """Split ``text`` into lines no wider than ``max_width``."""
    return simpleSplit(text, font, size, max_width) or [""]


class LayoutPhase(Enum):
    """Phases of a document layout."""

    HEADER = "header"
    BODY = "body"
    FOOTER = "footer"


@dataclass(frozen=True)
class PageGeometry:
    """Fixed page size and the bands reserved on every page, in points.

    Attributes:
        width: Page width
        height: Page height
        margin: Left, right and top margin
        footer_band: Space reserved at the bottom for the footer
        row_height: Height of one table row
        rows_per_page: Optional cap on table rows per page
    """

    width: float = A4[0]
    height: float = A4[1]
    margin: float = 40.0
    footer_band: float = 50.0
    row_height: float = 18.0
    rows_per_page: Optional[int] = None

    def __post_init__(self):
        for name in ("width", "height", "margin", "footer_band", "row_height"):
            value = getattr(self, name)
            if (
                isinstance(value, bool)
                or not isinstance(value, (int, float))
                or not math.isfinite(value)
                or value < 0
            ):
                raise ConfigurationError(f"Page {name} must be a non-negative number (got {value!r})")
        if self.width <= 2 * self.margin:
            raise ConfigurationError("Page width leaves no room between the margins")
        if self.row_height <= 0:
            raise ConfigurationError("Row height must be positive")
        # A continuation page must hold the column headings and one row
        if self.margin + 2 * self.row_height > self.usable_bottom:
            raise ConfigurationError("Page height leaves no room for a table row")
        if self.rows_per_page is not None and (
            isinstance(self.rows_per_page, bool)
            or not isinstance(self.rows_per_page, int)
            or self.rows_per_page < 1
        ):
            raise ConfigurationError(
                f"rows_per_page must be a whole number of at least 1 (got {self.rows_per_page})"
            )

    @property
    def usable_bottom(self) -> float:
        """Lowest y a body element may reach."""
        return self.height - self.footer_band

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin


@dataclass(frozen=True)
class TextOp:
    """A single line of text; ``y`` is the baseline."""

    x: float
    y: float
    text: str
    font: str = "Helvetica"
    size: float = 10
    align: str = "left"
    color: Color = BLACK


@dataclass(frozen=True)
class RuleOp:
    """A straight line."""

    x1: float
    y1: float
    x2: float
    y2: float
    color: Color = BLACK


@dataclass(frozen=True)
class BoxOp:
    """A filled rectangle; ``y`` is its top edge."""

    x: float
    y: float
    width: float
    height: float
    fill: Color = HEADING_FILL


DrawOp = Union[TextOp, RuleOp, BoxOp]


@dataclass(frozen=True)
class Column:
    """A table column; ``x`` is the anchor for ``align``.

    Cells wider than ``width`` are shortened with an ellipsis.
    """

    heading: str
    x: float
    align: str = "left"
    width: Optional[float] = None


@dataclass
class Page:
    """One laid-out page."""

    index: int
    ops: list[DrawOp] = field(default_factory=list)
    table_rows: int = 0

    def texts(self) -> list[str]:
        """Text content of the page in drawing order."""
        return [op.text for op in self.ops if isinstance(op, TextOp)]


@dataclass
class DocumentLayout:
    """A finished layout ready for encoding.

    ``omitted_rows`` counts source rows left out because of a row cap.
    """

    title: str
    geometry: PageGeometry
    pages: list[Page]
    omitted_rows: int = 0

    @property
    def page_count(self) -> int:
        return len(self.pages)


class LayoutEngine:
    """Place blocks and table rows onto pages.

    The engine starts in HEADER phase on the first page. ``start_table``
    moves it to BODY; rows that would cross the usable extent (or exceed
    ``rows_per_page``) open a new page, where only the column headings are
    repeated. ``finish`` enters FOOTER phase and stamps the footer on every
    page.
    """

    def __init__(self, geometry: PageGeometry, title: str):
        self.geometry = geometry
        self.title = title
        self.phase = LayoutPhase.HEADER
        self.pages: list[Page] = []
        self.columns: Optional[Sequence[Column]] = None
        self.cursor_y = 0.0
        self._new_page()

    @property
    def page(self) -> Page:
        return self.pages[-1]

    @property
    def page_index(self) -> int:
        return self.page.index

    def _new_page(self) -> None:
        self.pages.append(Page(index=len(self.pages)))
        self.cursor_y = self.geometry.margin
        if self.pages[-1].index > 0:
            logger.debug("Starting page %d of '%s'", self.pages[-1].index + 1, self.title)

    def _require_phase(self, *phases: LayoutPhase) -> None:
        if self.phase not in phases:
            raise RuntimeError(
                f"Layout is in {self.phase.value} phase; expected "
                f"{' or '.join(p.value for p in phases)}"
            )

    def draw(self, op: DrawOp) -> None:
        """Add a draw operation to the current page."""
        self._require_phase(LayoutPhase.HEADER, LayoutPhase.BODY)
        self.page.ops.append(op)

    def move_to(self, y: float) -> None:
        self.cursor_y = y

    def advance(self, dy: float) -> None:
        self.cursor_y += dy

    def fits(self, height: float) -> bool:
        return self.cursor_y + height <= self.geometry.usable_bottom

    def ensure_space(self, height: float) -> None:
        """Start a new page when a block of ``height`` would not fit."""
        if not self.fits(height):
            self._new_page()

    def line(
        self,
        text: str,
        x: Optional[float] = None,
        font: str = "Helvetica",
        size: float = 10,
        align: str = "left",
        color: Color = BLACK,
        spacing: Optional[float] = None,
    ) -> None:
        """Write one line of text at the cursor and move below it."""
        height = spacing if spacing is not None else size * 1.6
        self.ensure_space(height)
        self.draw(
            TextOp(
                x=self.geometry.margin if x is None else x,
                y=self.cursor_y + size,
                text=text,
                font=font,
                size=size,
                align=align,
                color=color,
            )
        )
        self.advance(height)

    def start_table(self, columns: Sequence[Column]) -> None:
        """Draw column headings and enter BODY phase."""
        self._require_phase(LayoutPhase.HEADER)
        self.columns = tuple(columns)
        self.phase = LayoutPhase.BODY
        # Headings plus at least one row must fit together
        self.ensure_space(2 * self.geometry.row_height)
        self._draw_headings()

    def _draw_headings(self) -> None:
        geometry = self.geometry
        self.draw(
            BoxOp(
                x=geometry.margin,
                y=self.cursor_y,
                width=geometry.content_width,
                height=geometry.row_height,
            )
        )
        for column in self.columns:
            self.draw(
                TextOp(
                    x=column.x,
                    y=self.cursor_y + geometry.row_height * 0.7,
                    text=column.heading,
                    font="Helvetica-Bold",
                    size=9,
                    align=column.align,
                )
            )
        self.advance(geometry.row_height)

    def add_row(self, cells: Sequence[str], separator: bool = False) -> None:
        """Add one table row, breaking the page first if it would not fit."""
        self._require_phase(LayoutPhase.BODY)
        if self.columns is None:
            raise RuntimeError("add_row called before start_table")
        if len(cells) != len(self.columns):
            raise ValueError(f"Expected {len(self.columns)} cells, got {len(cells)}")

        geometry = self.geometry
        cap_reached = (
            geometry.rows_per_page is not None
            and self.page.table_rows >= geometry.rows_per_page
        )
        if cap_reached or not self.fits(geometry.row_height):
            self._new_page()
            self._draw_headings()

        for column, cell in zip(self.columns, cells):
            if column.width is not None:
                cell = fit_text(cell, column.width, size=9)
            self.draw(
                TextOp(
                    x=column.x,
                    y=self.cursor_y + geometry.row_height * 0.7,
                    text=cell,
                    size=9,
                    align=column.align,
                )
            )
        self.page.table_rows += 1
        self.advance(geometry.row_height)
        if separator:
            self.draw(
                RuleOp(
                    x1=geometry.margin,
                    y1=self.cursor_y,
                    x2=geometry.width - geometry.margin,
                    y2=self.cursor_y,
                    color=LIGHT_GRAY,
                )
            )

    def finish(self, footer_lines: Sequence[str] = (), omitted_rows: int = 0) -> DocumentLayout:
        """Stamp the footer on every page and return the finished layout."""
        self.phase = LayoutPhase.FOOTER
        geometry = self.geometry
        total = len(self.pages)
        center = geometry.width / 2
        for page in self.pages:
            y = geometry.usable_bottom + 14
            for text in [*footer_lines, f"Page {page.index + 1} of {total}"]:
                page.ops.append(
                    TextOp(x=center, y=y, text=text, size=8, align="center", color=GRAY)
                )
                y += 10
        return DocumentLayout(
            title=self.title,
            geometry=geometry,
            pages=self.pages,
            omitted_rows=omitted_rows,
        )
