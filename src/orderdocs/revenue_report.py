"""Internal revenue report for a single invoiced order."""

from dataclasses import dataclass
from typing import Tuple

from .canvas import Canvas
from .document_base import DocumentBuilder, format_date
from .exceptions import DocumentError
from .models import Customer, Order
from .styles import DocumentType
from .table_templates import TableKind


@dataclass(frozen=True)
class RevenueReportContent:
    invoice_number: str
    order_number: str
    customer: Customer
    rows: Tuple[Tuple[str, ...], ...]
    cash: str
    cost_of_goods: str
    sales: str
    sales_tax: str
    tax_rate: str
    revenue: str
    created_at: str

    @classmethod
    def from_order(cls, order: Order, invoice_number: str) -> "RevenueReportContent":
        rows = tuple(
            (
                item.sku,
                item.formatted_description(),
                item.formatted_quantity(),
                item.formatted_unit_price(),
                item.formatted_purchase_price(),
                item.formatted_total_price(),
                item.formatted_total_purchase_price(),
                item.formatted_total_revenue(),
            )
            for item in order.items
        )
        return cls(
            invoice_number=invoice_number,
            order_number=order.id,
            customer=order.customer,
            rows=rows,
            cash=order.formatted_total(),
            cost_of_goods=order.formatted_cost_of_goods(),
            sales=order.formatted_subtotal(),
            sales_tax=order.formatted_tax_amount(),
            tax_rate=order.formatted_tax_rate(),
            revenue=order.formatted_total_revenue(),
            created_at=format_date(order.local_updated_at),
        )


class RevenueReportBuilder(DocumentBuilder):
    """Renders selling price, purchase price and revenue per line for one order."""

    doc_type = DocumentType.REVENUE_REPORT
    footer_subject = "revenue report"

    def build(self, order: Order, invoice_number: str) -> bytes:
        return self.finish(self.render(order, invoice_number))

    def render(self, order: Order, invoice_number: str) -> Canvas:
        if order is None:
            raise DocumentError("Revenue report requires an order")
        content = RevenueReportContent.from_order(order, invoice_number)

        canvas = self.new_canvas()
        frame = canvas.frame
        left = frame.content_left

        canvas.move_to(left, frame.content_top + 10)
        canvas.draw_title(self.style.title)
        canvas.inc_y(10)
        canvas.draw_company_details(self.company)
        details_bottom = canvas.cursor.y

        canvas.move_to(125, frame.content_top)
        canvas.draw_logo(self.company, 70)

        canvas.move_to(left, details_bottom + 5)
        self.draw_heading_text(canvas, "Customer Details")
        canvas.inc_y(5)
        canvas.draw_customer_details(content.customer)
        customer_bottom = canvas.cursor.y

        canvas.move_to(135, details_bottom + 5)
        self.draw_labels(canvas, [
            ("Invoice No:", content.invoice_number),
            ("Order No:", content.order_number),
            ("Created At:", content.created_at),
        ])

        canvas.move_to(left, max(customer_bottom, canvas.cursor.y) + 10)
        self.draw_table(canvas, TableKind.REVENUE_REPORT, content.rows)

        canvas.move_to(left, canvas.cursor.y + 5)
        canvas.ensure_space(25)
        canvas.move_to(left + 108, canvas.cursor.y)
        canvas.draw_totals(
            ["CASH", "COST OF GOODS", "SALES", f"SALES TAX AMOUNT ({content.tax_rate})", "TOTAL REVENUE"],
            [content.cash, content.cost_of_goods, content.sales, content.sales_tax, content.revenue],
        )
        return canvas
