"""Purchase order document."""

from dataclasses import dataclass
from typing import Tuple

from .canvas import Canvas
from .document_base import DocumentBuilder, format_date_time
from .exceptions import DocumentError
from .models import Customer, Order
from .styles import DocumentType
from .table_templates import PO_SHIPPING_VALUES, TableKind

COMMENTS_WIDTH = 90.0
TOTALS_X = 147.0


@dataclass(frozen=True)
class PurchaseOrderContent:
    """Every string printed on a purchase order, formatted once."""
    order_id: str
    customer: Customer
    created_at: str
    special_instructions: str
    product_rows: Tuple[Tuple[str, ...], ...]
    tax_rate: str
    tax_amount: str
    subtotal: str
    total: str

    @classmethod
    def from_order(cls, order: Order) -> "PurchaseOrderContent":
        rows = tuple(
            (
                item.sku,
                item.formatted_description(),
                item.formatted_quantity(),
                item.formatted_unit_price(),
                item.formatted_total_price(),
            )
            for item in order.items
        )
        return cls(
            order_id=order.id,
            customer=order.customer,
            created_at=format_date_time(order.local_created_at),
            special_instructions=order.special_instructions,
            product_rows=rows,
            tax_rate=order.formatted_tax_rate(),
            tax_amount=order.formatted_tax_amount(),
            subtotal=order.formatted_subtotal(),
            total=order.formatted_total(),
        )


class PurchaseOrderBuilder(DocumentBuilder):
    """Renders a purchase order: vendor/ship-to blocks, shipping terms, products and totals."""

    doc_type = DocumentType.PURCHASE_ORDER
    footer_subject = "purchase order"

    def build(self, order: Order) -> bytes:
        return self.finish(self.render(order))

    def render(self, order: Order) -> Canvas:
        if order is None:
            raise DocumentError("Purchase order requires an order")
        content = PurchaseOrderContent.from_order(order)

        canvas = self.new_canvas()
        left = canvas.frame.content_left

        canvas.move_to(left, 10)
        canvas.draw_logo(self.company, 65)
        canvas.move_to(left + 100, 35)
        canvas.draw_title(self.style.title)

        canvas.move_to(left, 42)
        canvas.draw_company_details(self.company)
        canvas.move_to(left + 120, 42)
        self.draw_labels(canvas, [("Date:", content.created_at), ("P.O. #:", content.order_id)])

        # Vendor and ship-to blocks side by side
        blocks_top = 72.0
        canvas.move_to(left, blocks_top)
        canvas.draw_bordered_heading("VENDOR", 75)
        canvas.inc_y(11)
        canvas.draw_company_details(self.company)
        vendor_bottom = canvas.cursor.y

        canvas.move_to(left + 105, blocks_top)
        canvas.draw_bordered_heading("SHIP TO", 75)
        canvas.inc_y(11)
        canvas.draw_customer_details(content.customer)
        ship_to_bottom = canvas.cursor.y

        canvas.move_to(left, max(vendor_bottom, ship_to_bottom) + 5)
        self.draw_table(canvas, TableKind.PO_SHIPPING, PO_SHIPPING_VALUES)
        canvas.move_to(left, canvas.cursor.y + 5)
        self.draw_table(canvas, TableKind.PO_PRODUCTS, content.product_rows)

        self.draw_closing(canvas, content)
        canvas.draw_footer(self.footer_text())
        return canvas

    def draw_closing(self, canvas: Canvas, content: PurchaseOrderContent) -> None:
        """Totals on the right, comments on the left, kept together on one page."""
        left = canvas.frame.content_left
        comments_font = self.font("", 9)
        comments_height = self.measurer.wrapped_height(
            content.special_instructions, comments_font, COMMENTS_WIDTH
        )
        canvas.move_to(left, canvas.cursor.y + 5)
        canvas.ensure_space(max(15.0, 5.0 + comments_height))
        top = canvas.cursor.y

        canvas.move_to(TOTALS_X, top)
        canvas.draw_totals(
            ["SUBTOTAL", f"TAX ({content.tax_rate})", "TOTAL"],
            [content.subtotal, content.tax_amount, content.total],
        )

        canvas.move_to(left, top)
        self.draw_heading_text(canvas, "Comments or Special Instructions:")
        canvas.inc_y(5)
        canvas.draw_multiline_block(content.special_instructions, comments_font, COMMENTS_WIDTH)
