"""Paginated table rendering.

A table is drawn as a filled header band followed by rows of wrapped text.
Each row's height is measured before any ink is committed; a row that
would cross the bottom border closes the current segment (outer border and
column strokes for that page only) and continues on a freshly bordered
page. Rows are never split across pages, and the header band is drawn only
once, on the first page of the table.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple
from reportlab.lib.colors import Color

from .canvas import Canvas
from .exceptions import RowOverflowError, TableSpecError
from .styles import BLACK, WHITE, DocumentStyle
from .table_templates import Column, TableTemplate
from .text_metrics import FontSpec, TextMeasurer

logger = logging.getLogger(__name__)

# Vertical padding added to the tallest header label
HEADER_CELL_PADDING = 5.0
# Gap between the header band and the first row
HEADER_PADDING = 5.0
# Vertical padding added once to each body row
CELL_PADDING = 2.0
# Horizontal inset of cell text from the column edges
CELL_TEXT_INSET = 1.0
# Baseline position inside a line box, as a fraction of the line height
BASELINE_RATIO = 0.8

WIDTH_TOLERANCE = 1e-6

Row = Tuple[str, ...]


@dataclass(frozen=True)
class TableSpec:
    """Everything needed to draw one table. Validated on construction."""
    columns: Tuple[Column, ...]
    rows: Tuple[Row, ...]
    width: float
    header_fill: Color = field(default_factory=lambda: BLACK)
    header_text_color: Color = field(default_factory=lambda: WHITE)
    body_text_color: Color = field(default_factory=lambda: BLACK)
    border_color: Color = field(default_factory=lambda: BLACK)
    border_thickness: float = 0.8
    header_font: FontSpec = FontSpec("Helvetica", "B", 10)
    body_font: FontSpec = FontSpec("Helvetica", "", 9)
    headers: Optional[Tuple[str, ...]] = None  # Defaults to the column names

    def __post_init__(self):
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "rows", tuple(tuple(str(cell) for cell in row) for row in self.rows))
        if self.headers is None:
            object.__setattr__(self, "headers", tuple(c.name for c in self.columns))
        else:
            object.__setattr__(self, "headers", tuple(self.headers))

        if not self.columns:
            raise TableSpecError("Table must have at least one column")
        if len(self.headers) != len(self.columns):
            raise TableSpecError(
                "Header count does not match column count",
                f"{len(self.headers)} headers for {len(self.columns)} columns",
            )
        for index, row in enumerate(self.rows):
            if len(row) != len(self.columns):
                raise TableSpecError(
                    "Row cell count does not match column count",
                    f"row {index} has {len(row)} cells for {len(self.columns)} columns",
                )
        column_sum = sum(c.width for c in self.columns)
        if abs(column_sum - self.width) > WIDTH_TOLERANCE:
            raise TableSpecError(
                "Column widths do not sum to the table width",
                f"sum={column_sum:g}, width={self.width:g}",
            )

    @classmethod
    def from_template(
        cls,
        template: TableTemplate,
        rows: Iterable[Sequence[str]],
        style: DocumentStyle,
    ) -> "TableSpec":
        """Build a spec from a fixed column template, colored by a document style."""
        return cls(
            columns=template.columns,
            rows=tuple(tuple(row) for row in rows),
            width=template.width,
            header_fill=style.accent_color,
            header_text_color=style.header_text_color,
            body_text_color=style.body_text_color,
            border_color=style.accent_color,
            header_font=FontSpec(style.font_family, "B", style.table_header_font_size),
            body_font=FontSpec(style.font_family, "", style.table_body_font_size),
        )


@dataclass(frozen=True)
class TableSegment:
    """The part of one table drawn on one page."""
    page_index: int
    top: float
    height: float
    row_count: int


@dataclass
class RenderState:
    """Mutable bookkeeping for the segment currently being drawn."""
    page_index: int
    segment_top: float
    accumulated: float = 0.0
    row_count: int = 0
    segments: List[TableSegment] = field(default_factory=list)

    def open(self, page_index: int, top: float) -> None:
        self.page_index = page_index
        self.segment_top = top
        self.accumulated = 0.0
        self.row_count = 0


class PageBreakPolicy:
    """Closes a table segment and continues the table on a new page."""

    def __init__(self, canvas: Canvas):
        self.canvas = canvas

    def fits(self, y: float, height: float) -> bool:
        return self.canvas.frame.fits(y, height)

    def close_segment(self, spec: TableSpec, state: RenderState, left: float) -> TableSegment:
        """Stroke the outer border and inner column lines for the open segment."""
        top, height = state.segment_top, state.accumulated
        self.canvas.rectangle(
            left, top, spec.width, height,
            style="D", color=spec.border_color, thickness=spec.border_thickness, tag="table_border",
        )
        x = left
        for column in spec.columns[:-1]:
            x += column.width
            self.canvas.line(
                x, top, x, top + height,
                width=spec.border_thickness, color=spec.border_color, tag="column_border",
            )

        segment = TableSegment(state.page_index, top, height, state.row_count)
        state.segments.append(segment)
        logger.debug(
            "Closed table segment on page %d: top=%.2f height=%.2f rows=%d",
            segment.page_index + 1, top, height, segment.row_count,
        )
        return segment

    def break_page(self, spec: TableSpec, state: RenderState, left: float) -> None:
        """Close the open segment and reopen an empty one at the top of a new page."""
        self.close_segment(spec, state, left)
        self.canvas.add_page()
        self.canvas.move_to(left, self.canvas.frame.content_top)
        state.open(self.canvas.page_index, self.canvas.cursor.y)
        logger.debug("Table continued on page %d", self.canvas.page_count)


class TableLayout:
    """Draws TableSpecs onto a canvas, breaking pages between rows."""

    def __init__(self, canvas: Canvas, measurer: Optional[TextMeasurer] = None):
        self.canvas = canvas
        self.measurer = measurer or canvas.measurer
        self.policy = PageBreakPolicy(canvas)
        self.segments: List[TableSegment] = []

    # Measurement

    def _wrap_cell(self, text: str, font: FontSpec, column: Column) -> List[str]:
        return self.measurer.wrap(text, font, column.width)

    def header_height(self, spec: TableSpec) -> float:
        """Height of the header band: tallest wrapped label plus padding."""
        line_height = self.measurer.measure("", spec.header_font)
        tallest = max(
            len(self._wrap_cell(header, spec.header_font, column)) * line_height
            for header, column in zip(spec.headers, spec.columns)
        )
        return tallest + HEADER_CELL_PADDING

    def row_height(self, spec: TableSpec, row: Row) -> float:
        """Height of a body row: tallest wrapped cell plus padding. Empty rows keep one line."""
        line_height = self.measurer.measure("", spec.body_font)
        line_count = max(
            max(len(self._wrap_cell(cell, spec.body_font, column)) for cell, column in zip(row, spec.columns)),
            1,
        )
        return line_count * line_height + CELL_PADDING

    # Drawing

    def _draw_cell_lines(
        self,
        lines: Sequence[str],
        left: float,
        first_baseline: float,
        column: Column,
        font: FontSpec,
        color: Color,
        tag: str,
    ) -> None:
        line_height = self.measurer.measure("", font)
        for i, line in enumerate(lines):
            x = self.canvas.aligned_x(line, font, left, column.width, column.alignment, CELL_TEXT_INSET)
            self.canvas.text_run(x, first_baseline + i * line_height, line, font, color, tag=tag)

    def _draw_header(self, spec: TableSpec, left: float, top: float, height: float) -> None:
        line_height = self.measurer.measure("", spec.header_font)
        x = left
        for header, column in zip(spec.headers, spec.columns):
            self.canvas.rectangle(
                x, top, column.width, height,
                style="F", fill_color=spec.header_fill, tag="header_cell",
            )
            lines = self._wrap_cell(header, spec.header_font, column)
            block = len(lines) * line_height
            baseline = top + (height - block) / 2 + line_height * BASELINE_RATIO
            self._draw_cell_lines(
                lines, x, baseline, column, spec.header_font, spec.header_text_color, "header_text"
            )
            x += column.width

    def _draw_row(self, spec: TableSpec, row: Row, left: float, top: float) -> None:
        line_height = self.measurer.measure("", spec.body_font)
        baseline = top + CELL_PADDING / 2 + line_height * BASELINE_RATIO
        x = left
        for cell, column in zip(row, spec.columns):
            lines = self._wrap_cell(cell, spec.body_font, column)
            self._draw_cell_lines(lines, x, baseline, column, spec.body_font, spec.body_text_color, "cell_text")
            x += column.width

    def draw_table(self, spec: TableSpec) -> float:
        """
        Draw a table at the cursor and return its total height.

        The total is header_height + HEADER_PADDING plus every row height,
        summed across pages. Afterwards the cursor sits at the table's left
        edge just below the last row, on whichever page the table ended.

        Raises:
            RowOverflowError: If a single row is taller than a fresh page.
        """
        canvas = self.canvas
        frame = canvas.frame
        left = canvas.cursor.x

        header_height = self.header_height(spec)
        heights = [self.row_height(spec, row) for row in spec.rows]
        room = frame.drawable_height
        for index, height in enumerate(heights):
            if height > room:
                raise RowOverflowError(
                    "Table row is taller than a page",
                    f"row {index} needs {height:.2f}mm, page has {room:.2f}mm",
                )

        # Keep the header band together with the first row
        lead = header_height + HEADER_PADDING + (heights[0] if heights else 0.0)
        if not self.policy.fits(canvas.cursor.y, lead) and canvas.cursor.y > frame.content_top:
            canvas.add_page()
            canvas.move_to(left, frame.content_top)

        top = canvas.cursor.y
        self._draw_header(spec, left, top, header_height)
        canvas.move_to(left, top + header_height + HEADER_PADDING)

        state = RenderState(canvas.page_index, top, accumulated=header_height + HEADER_PADDING)
        for row, height in zip(spec.rows, heights):
            if not self.policy.fits(canvas.cursor.y, height):
                self.policy.break_page(spec, state, left)
            self._draw_row(spec, row, left, canvas.cursor.y)
            canvas.inc_y(height)
            state.accumulated += height
            state.row_count += 1

        self.policy.close_segment(spec, state, left)
        canvas.move_to(left, canvas.cursor.y)
        self.segments = state.segments
        return header_height + HEADER_PADDING + sum(heights)
