"""Tests for the document builders."""

import logging
from dataclasses import replace
from datetime import datetime, timezone

import pytest

from orderdocs.cancellation_summary import (
    AUTOMATED_FOOTER, CancellationSummaryBuilder, CancellationSummaryContent,
)
from orderdocs.document_base import format_date, format_date_time
from orderdocs.exceptions import DocumentError
from orderdocs.invoice import InvoiceBuilder, InvoiceContent
from orderdocs.models import Delivery, Order
from orderdocs.purchase_order import PurchaseOrderBuilder, PurchaseOrderContent
from orderdocs.revenue_report import RevenueReportBuilder, RevenueReportContent
from orderdocs.samples import make_png
from orderdocs.shipping_manifest import ShippingManifestBuilder, ShippingManifestContent

from conftest import make_product

GENERATED_AT = datetime(2025, 6, 9, 14, 5, 7, tzinfo=timezone.utc)


def tagged(canvas, tag):
    return [op for op in canvas.operations if op.tag == tag]


def texts(canvas):
    return [op.text for op in canvas.operations if op.kind == "text"]


@pytest.fixture
def delivery(order):
    return Delivery(
        order=order,
        received_by="Maria Lopez",
        delivered_by="Sam",
        delivered_at=datetime(2025, 3, 4, 15, 45, tzinfo=timezone.utc),
        signature=make_png(300, 100, (255, 255, 255)),
        images=[make_png(640, 480, (10, 90, 160)), make_png(480, 640, (160, 90, 10))],
    )


def big_order(order, n_items):
    return Order(
        id=order.id,
        customer=order.customer,
        items=[make_product(i, quantity=i + 1) for i in range(n_items)],
        tax_rate=order.tax_rate,
        created_at=order.created_at,
        updated_at=order.updated_at,
        special_instructions=order.special_instructions,
    )


class TestFormatting:
    """Test suite for shared date formatting."""

    def test_format_date(self):
        assert format_date(datetime(2006, 1, 2, 15, 4)) == "January 2, 2006"

    def test_format_date_time(self):
        assert format_date_time(datetime(2006, 1, 2, 15, 4)) == "January 2, 2006 at 3:04 PM"
        assert format_date_time(datetime(2006, 1, 2, 0, 30)) == "January 2, 2006 at 12:30 AM"


class TestPurchaseOrder:
    """Test suite for PurchaseOrderBuilder."""

    def test_content(self, order):
        content = PurchaseOrderContent.from_order(order)
        assert content.created_at == "March 1, 2025 at 5:30 PM"
        assert content.product_rows[0] == (
            "ACM-CLN-100", "Acme - Industrial Cleaner 1.00 GAL (Pack of 4)", "2", "$50.00", "$100.00",
        )
        assert content.subtotal == "$321.00"
        assert content.tax_rate == "8.25%"

    def test_build_returns_pdf(self, company, order):
        data = PurchaseOrderBuilder(company).build(order)
        assert data.startswith(b"%PDF-")

    def test_render_layout(self, company, order):
        canvas = PurchaseOrderBuilder(company).render(order)
        strings = texts(canvas)
        assert "PURCHASE ORDER" in strings
        assert "VENDOR" in strings and "SHIP TO" in strings
        assert "REQUISITIONER" in strings
        assert "TAX (8.25%)" in strings
        assert "Deliver to the loading dock." in strings
        footer = tagged(canvas, "footer")[0]
        assert "purchase order" in footer.text and company.email in footer.text
        assert canvas.page_count == 1

    def test_long_order_spans_pages(self, company, order):
        canvas = PurchaseOrderBuilder(company).render(big_order(order, 60))
        assert canvas.page_count >= 2
        assert {op.page_index for op in tagged(canvas, "page_border")} == set(range(canvas.page_count))
        # Totals and footer land on the last page
        assert tagged(canvas, "total_value")[0].page_index == canvas.page_count - 1

    def test_byte_identical_rebuild(self, company, order):
        builder = PurchaseOrderBuilder(company)
        assert builder.build(order) == builder.build(order)

    def test_missing_order(self, company):
        with pytest.raises(DocumentError):
            PurchaseOrderBuilder(company).build(None)

    def test_logo_resolved_through_loader(self, company, order, png_bytes):
        branded = replace(company, logo="logo.png")
        canvas = PurchaseOrderBuilder(branded, image_loader=lambda ref: png_bytes).render(order)
        logo = tagged(canvas, "logo")[0]
        assert logo.kind == "image"
        assert logo.width == 65


class TestInvoice:
    """Test suite for InvoiceBuilder."""

    def test_content_dates_and_late_fee(self, order):
        content = InvoiceContent.from_order(order, "INV-1001")
        assert content.created_at == "March 2, 2025"
        assert content.payment_due == "April 1, 2025"
        assert content.late_fee_date == "April 15, 2025"
        assert content.total == "$347.48"
        assert content.late_fee == "$34.75"

    def test_build(self, company, order, caplog):
        with caplog.at_level(logging.INFO, logger="orderdocs.document_base"):
            data = InvoiceBuilder(company).build(order, "INV-1001")
        assert data.startswith(b"%PDF-")
        assert "invoice" in caplog.text

    def test_render_layout(self, company, order):
        canvas = InvoiceBuilder(company).render(order, "INV-1001")
        strings = texts(canvas)
        for expected in ("INVOICE", "Bill To", "Invoice No:", "INV-1001", "Late Fee Date:", "Notes",
                         "Terms & Conditions", "ITEM", "AMOUNT"):
            assert expected in strings

    def test_failing_logo_loader_still_renders(self, company, order):
        def loader(ref):
            raise ConnectionError("host unreachable")

        builder = InvoiceBuilder(replace(company, logo="https://cdn.example/logo.png"), loader)
        canvas = builder.render(order, "INV-1")

        assert tagged(canvas, "logo")[0].kind == "placeholder"
        assert builder.build(order, "INV-1").startswith(b"%PDF-")

    def test_byte_identical_rebuild(self, company, order):
        builder = InvoiceBuilder(company)
        assert builder.build(order, "INV-1") == builder.build(order, "INV-1")


class TestShippingManifest:
    """Test suite for ShippingManifestBuilder."""

    def test_content(self, delivery):
        content = ShippingManifestContent.from_delivery(delivery)
        assert content.rows[2][:3] == ("1", "Yes", "Carton")
        assert content.rows[0][6:] == ("2.00 gal", "2.00 gal", "N/A")
        assert content.total_units == "7"
        assert content.hazardous_weight == "1.00 GAL"
        assert content.delivered_at == "March 4, 2025 at 3:45 PM"

    def test_one_page_per_delivery_image(self, company, delivery):
        canvas = ShippingManifestBuilder(company).render(delivery)

        assert canvas.page_count == 3
        photos = tagged(canvas, "photo")
        assert [p.page_index for p in photos] == [1, 2]
        assert {b.page_index for b in tagged(canvas, "page_border")} == {0, 1, 2}
        assert len(tagged(canvas, "thumbnail")) == 2
        assert tagged(canvas, "signature")[0].kind == "image"
        assert "24 Hour Contact:" in texts(canvas)

    def test_uses_manifest_frame(self, company, delivery):
        canvas = ShippingManifestBuilder(company).render(delivery)
        border = tagged(canvas, "page_border")[0]
        assert (border.x, border.y, border.width, border.height) == (5, 5, 200, 285)

    def test_bad_images_do_not_abort(self, company, order):
        delivery = Delivery(
            order=order,
            received_by="Maria",
            delivered_by="Sam",
            delivered_at=datetime(2025, 3, 4, tzinfo=timezone.utc),
            signature=b"not a png",
            images=[b"broken"],
        )
        canvas = ShippingManifestBuilder(company).render(delivery)
        assert tagged(canvas, "signature")[0].kind == "placeholder"
        assert canvas.page_count == 2
        assert canvas.to_bytes().startswith(b"%PDF-")

    def test_tall_signature_stays_inside_frame(self, company, order):
        delivery = Delivery(
            order=order,
            received_by="Maria",
            delivered_by="Sam",
            delivered_at=datetime(2025, 3, 4, tzinfo=timezone.utc),
            signature=make_png(50, 400, (255, 255, 255)),
        )
        canvas = ShippingManifestBuilder(company).render(delivery)

        signature = tagged(canvas, "signature")[0]
        assert signature.kind == "image"
        assert signature.height == pytest.approx(60)
        assert signature.width == pytest.approx(7.5)
        assert signature.y + signature.height <= canvas.frame.bottom

    def test_missing_delivery(self, company):
        with pytest.raises(DocumentError):
            ShippingManifestBuilder(company).build(None)


class TestRevenueReport:
    """Test suite for RevenueReportBuilder."""

    def test_content(self, order):
        content = RevenueReportContent.from_order(order, "INV-7")
        assert content.cash == "$347.48"
        assert content.cost_of_goods == "$260.00"
        assert content.sales == "$321.00"
        assert content.revenue == "$61.00"
        assert content.rows[2][4:] == ("$80.00", "$120.00", "$80.00", "$40.00")

    def test_build(self, company, order):
        canvas = RevenueReportBuilder(company).render(order, "INV-7")
        strings = texts(canvas)
        assert "REVENUE REPORT" in strings
        assert "SALES TAX AMOUNT (8.25%)" in strings
        assert "TOTAL REVENUE" in strings
        assert canvas.to_bytes().startswith(b"%PDF-")


class TestCancellationSummary:
    """Test suite for CancellationSummaryBuilder."""

    def test_content_stacks_item_lines(self, order):
        content = CancellationSummaryContent.from_orders([order, order, order], GENERATED_AT)
        row = content.order_rows[0]
        assert row[1] == "Valley Medical Center"
        assert row[2] == "03/01/2025"
        assert row[3].split("\n") == [
            "Industrial Cleaner 1 GAL x4", "Glass Cleaner 32 OZ x4", "Floor Stripper 1 GAL x4",
        ]
        assert row[4] == "2\n4\n1"
        assert content.total == "$1,042.45"
        assert (content.date, content.time) == ("06/09/2025", "02:05:07 PM")

    def test_long_item_descriptions_stay_on_one_line(self, company, order):
        long_name = "Heavy Duty Multi Surface Disinfectant Cleaner Concentrate With An Extra Long Name"
        wordy = replace(order, items=[make_product(0, name=long_name), make_product(1, quantity=3)])

        canvas = CancellationSummaryBuilder(company).render([wordy], generated_at=GENERATED_AT)

        cells = tagged(canvas, "cell_text")
        items = [op for op in cells if op.text.startswith(("Heavy", "Industrial"))]
        quantities = [op for op in cells if op.text in ("2", "3")]
        assert len(items) == 2
        assert items[0].text.endswith("...")
        assert [op.y for op in items] == [op.y for op in quantities]

    def test_landscape_with_totals(self, company, order):
        canvas = CancellationSummaryBuilder(company).render([order], generated_at=GENERATED_AT)
        strings = texts(canvas)
        assert "Summary Section - Totals" in strings
        assert "TOTAL AMOUNT CANCELLED:" in strings
        assert tagged(canvas, "footer")[0].text == AUTOMATED_FOOTER
        assert canvas.frame.page_width > canvas.frame.page_height

    def test_many_orders_span_pages(self, company, order):
        orders = [order] * 20
        canvas = CancellationSummaryBuilder(company).render(orders, generated_at=GENERATED_AT)
        assert canvas.page_count >= 2

    def test_byte_identical_rebuild(self, company, order):
        builder = CancellationSummaryBuilder(company)
        assert builder.build([order], GENERATED_AT) == builder.build([order], GENERATED_AT)

    @pytest.mark.parametrize("orders", [[], None, [None]])
    def test_no_orders(self, company, orders):
        with pytest.raises(DocumentError):
            CancellationSummaryBuilder(company).build(orders)
