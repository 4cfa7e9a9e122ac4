"""Landscape summary of cancelled orders, sent to staff as an automated report."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Sequence, Tuple

from .canvas import Canvas
from .document_base import DocumentBuilder
from .exceptions import DocumentError
from .layout_engine import PageFrame
from .models import Order, format_money
from .styles import DocumentType
from .table_templates import TableKind, get_template
from .text_metrics import FontSpec, TextMeasurer, truncate_text

AUTOMATED_FOOTER = "This is an automated document. Please do not reply to this email."
TOTALS_TABLE_OFFSET = 45.0
ITEMS_FONT = FontSpec("Helvetica", "", 9)


def items_column_width() -> float:
    return next(c.width for c in get_template(TableKind.CANCELLATION_ORDERS).columns if c.name == "ITEMS")


@dataclass(frozen=True)
class CancellationSummaryContent:
    order_rows: Tuple[Tuple[str, ...], ...]
    total_rows: Tuple[Tuple[str, ...], ...]
    total: str
    date: str
    time: str

    @classmethod
    def from_orders(
        cls,
        orders: Sequence[Order],
        generated_at: datetime,
        item_font: FontSpec = ITEMS_FONT,
        measurer: Optional[TextMeasurer] = None,
    ) -> "CancellationSummaryContent":
        """Format every order. Item descriptions are cut to one line of the ITEMS column."""
        measurer = measurer or TextMeasurer()
        items_width = items_column_width()
        order_rows = []
        for order in orders:
            # One line per product in each per-item column; ITEMS lines never wrap
            order_rows.append((
                order.id,
                order.customer.display_name,
                order.local_created_at.strftime("%m/%d/%Y"),
                "\n".join(
                    truncate_text(item.short_description(), items_width, item_font, measurer)
                    for item in order.items
                ),
                "\n".join(item.formatted_quantity() for item in order.items),
                "\n".join(item.formatted_unit_price() for item in order.items),
                "\n".join(item.formatted_total_price() for item in order.items),
            ))
        total_rows = tuple(
            (
                order.customer.name,
                order.formatted_tax_rate(),
                order.formatted_tax_amount(),
                order.formatted_subtotal(),
                order.formatted_total(),
            )
            for order in orders
        )
        return cls(
            order_rows=tuple(order_rows),
            total_rows=total_rows,
            total=format_money(sum(order.total for order in orders)),
            date=generated_at.strftime("%m/%d/%Y"),
            time=generated_at.strftime("%I:%M:%S %p"),
        )


class CancellationSummaryBuilder(DocumentBuilder):
    """Renders every cancelled order in a batch plus per-customer totals."""

    doc_type = DocumentType.CANCELLATION_SUMMARY

    def make_frame(self) -> PageFrame:
        return PageFrame.landscape()

    def build(self, orders: Sequence[Order], generated_at: Optional[datetime] = None) -> bytes:
        return self.finish(self.render(orders, generated_at))

    def render(self, orders: Sequence[Order], generated_at: Optional[datetime] = None) -> Canvas:
        orders = [order for order in (orders or ()) if order is not None]
        if not orders:
            raise DocumentError("Cancellation summary requires at least one order")
        if generated_at is None:
            generated_at = datetime.now(timezone.utc)
        content = CancellationSummaryContent.from_orders(
            orders,
            generated_at,
            item_font=FontSpec(self.style.font_family, "", self.style.table_body_font_size),
            measurer=self.measurer,
        )

        canvas = self.new_canvas()
        frame = canvas.frame
        left = frame.content_left

        canvas.move_to(left, 5)
        canvas.draw_logo(self.company, 60)
        canvas.move_to(left, 18)
        canvas.draw_title(self.style.title, align="center")

        canvas.move_to(frame.width - 32, 13)
        self.draw_labels(canvas, [("Date:", content.date), ("Time:", content.time)])

        canvas.move_to(left, 38)
        self.draw_table(canvas, TableKind.CANCELLATION_ORDERS, content.order_rows)

        canvas.move_to(left, canvas.cursor.y + 10)
        canvas.ensure_space(30)
        self.draw_heading_text(canvas, "Summary Section - Totals", size=11)
        canvas.move_to(left + TOTALS_TABLE_OFFSET, canvas.cursor.y + 5)
        self.draw_table(canvas, TableKind.CANCELLATION_TOTALS, content.total_rows)

        canvas.move_to(left + TOTALS_TABLE_OFFSET + 119, canvas.cursor.y + 5)
        canvas.ensure_space(5)
        canvas.draw_label_with_value("TOTAL AMOUNT CANCELLED:", content.total)

        canvas.draw_footer(AUTOMATED_FOOTER)
        return canvas
