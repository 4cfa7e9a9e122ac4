"""Invoice document."""

from dataclasses import dataclass
from datetime import timedelta
from typing import Tuple

from .canvas import Canvas
from .document_base import DocumentBuilder, format_date
from .exceptions import DocumentError
from .models import Customer, Order, format_money
from .styles import DocumentType
from .table_templates import TableKind

PAYMENT_TERM_DAYS = 30
LATE_FEE_DAYS = 44  # Due date plus a 14 day grace period
LATE_FEE_RATE = 0.1

TERMS_AND_CONDITIONS = (
    "The payment for this invoice is due within 30 days from the invoice date (Net 30). "
    "By receiving this invoice, you agree to these terms."
)
LATE_FEE_NOTE = (
    "A late fee of {fee} will be charged if the invoice is not paid within the late fee date. "
    "Continued non-payment may result in suspension of services and additional collection actions."
)
NOTES_WIDTH = 100.0


@dataclass(frozen=True)
class InvoiceContent:
    """Every string printed on an invoice, formatted once."""
    number: str
    customer: Customer
    item_rows: Tuple[Tuple[str, ...], ...]
    late_fee: str
    subtotal: str
    tax_rate: str
    tax_amount: str
    total: str
    created_at: str
    payment_due: str
    late_fee_date: str

    @classmethod
    def from_order(cls, order: Order, invoice_number: str) -> "InvoiceContent":
        issued = order.local_updated_at
        rows = tuple(
            (
                item.formatted_description(),
                item.formatted_quantity(),
                item.formatted_unit_price(),
                item.formatted_total_price(),
            )
            for item in order.items
        )
        return cls(
            number=invoice_number,
            customer=order.customer,
            item_rows=rows,
            late_fee=format_money(order.total * LATE_FEE_RATE),
            subtotal=order.formatted_subtotal(),
            tax_rate=order.formatted_tax_rate(),
            tax_amount=order.formatted_tax_amount(),
            total=order.formatted_total(),
            created_at=format_date(issued),
            payment_due=format_date(issued + timedelta(days=PAYMENT_TERM_DAYS)),
            late_fee_date=format_date(issued + timedelta(days=LATE_FEE_DAYS)),
        )


class InvoiceBuilder(DocumentBuilder):
    """Renders a customer invoice with payment dates, line items, totals and terms."""

    doc_type = DocumentType.INVOICE
    footer_subject = "invoice"

    def build(self, order: Order, invoice_number: str) -> bytes:
        return self.finish(self.render(order, invoice_number))

    def render(self, order: Order, invoice_number: str) -> Canvas:
        if order is None:
            raise DocumentError("Invoice requires an order")
        content = InvoiceContent.from_order(order, invoice_number)

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
        self.draw_heading_text(canvas, "Bill To")
        canvas.inc_y(5)
        canvas.draw_customer_details(content.customer)
        bill_to_bottom = canvas.cursor.y

        canvas.move_to(135, details_bottom + 5)
        self.draw_labels(canvas, [
            ("Invoice No:", content.number),
            ("Invoice Date:", content.created_at),
            ("Payment Due:", content.payment_due),
            ("Late Fee Date:", content.late_fee_date),
        ])
        labels_bottom = canvas.cursor.y

        canvas.move_to(left, max(bill_to_bottom, labels_bottom) + 10)
        self.draw_table(canvas, TableKind.INVOICE_ITEMS, content.item_rows)

        canvas.move_to(left, canvas.cursor.y + 5)
        canvas.ensure_space(15)
        canvas.move_to(left + 127, canvas.cursor.y)
        canvas.draw_totals(
            ["SUBTOTAL", f"TAX ({content.tax_rate})", "TOTAL"],
            [content.subtotal, content.tax_amount, content.total],
        )

        canvas.move_to(left, canvas.cursor.y + 5)
        self.draw_notes(canvas, "Notes", LATE_FEE_NOTE.format(fee=content.late_fee))
        canvas.inc_y(5)
        self.draw_notes(canvas, "Terms & Conditions", TERMS_AND_CONDITIONS)

        canvas.draw_footer(self.footer_text())
        return canvas

    def draw_notes(self, canvas: Canvas, heading: str, text: str) -> None:
        """Bold heading over a wrapped paragraph, moved to a new page together if needed."""
        font = self.font()
        height = self.measurer.wrapped_height(text, font, NOTES_WIDTH)
        canvas.ensure_space(5 + height)
        self.draw_heading_text(canvas, heading)
        canvas.inc_y(5)
        canvas.inc_y(canvas.draw_multiline_block(text, font, NOTES_WIDTH))
