"""Shipping manifest document, with proof-of-delivery signature and photos."""

from dataclasses import dataclass
from typing import Optional, Tuple

from .canvas import Canvas
from .document_base import DocumentBuilder, format_date_time
from .exceptions import DocumentError
from .layout_engine import PageFrame
from .models import Customer, Delivery
from .styles import DocumentType
from .table_templates import MANIFEST_CLASS, MANIFEST_CONTAINER_TYPE, TableKind

SIGNATURE_WIDTH = 60.0
SIGNATURE_MAX_HEIGHT = 60.0
THUMBNAIL_SIZE = 30.0
THUMBNAIL_STEP = 33.0
SECOND_COLUMN_OFFSET = 122.0


@dataclass(frozen=True)
class ShippingManifestContent:
    """Every string and image printed on a shipping manifest."""
    po_number: str
    customer: Customer
    rows: Tuple[Tuple[str, ...], ...]
    total_units: str
    non_hazardous_weight: str
    hazardous_weight: str
    total_weight: str
    delivered_by: str
    received_by: str
    delivered_at: str
    signature: Optional[bytes]
    images: Tuple[bytes, ...]

    @classmethod
    def from_delivery(cls, delivery: Delivery) -> "ShippingManifestContent":
        order = delivery.order
        rows = tuple(
            (
                item.formatted_quantity(),
                item.formatted_hazardous(),
                MANIFEST_CONTAINER_TYPE,
                item.formatted_description(),
                MANIFEST_CLASS,
                item.sku,
                item.formatted_net_weight(),
                item.formatted_non_hazardous_weight(),
                item.formatted_hazardous_weight(),
            )
            for item in order.items
        )
        return cls(
            po_number=order.id,
            customer=order.customer,
            rows=rows,
            total_units=order.formatted_total_units(),
            non_hazardous_weight=order.formatted_non_hazardous_weight(),
            hazardous_weight=order.formatted_hazardous_weight(),
            total_weight=order.formatted_net_weight(),
            delivered_by=delivery.delivered_by,
            received_by=delivery.received_by,
            delivered_at=format_date_time(delivery.local_delivered_at),
            signature=delivery.signature,
            images=delivery.images,
        )


class ShippingManifestBuilder(DocumentBuilder):
    """
    Renders a shipping manifest for a completed delivery.

    The manifest uses a wider frame than the other documents to fit its
    nine-column table. After the summary page(s), every delivery photo is
    drawn on its own bordered page, scaled to fit and centred.
    """

    doc_type = DocumentType.SHIPPING_MANIFEST
    footer_subject = "shipping manifest"

    def make_frame(self) -> PageFrame:
        return PageFrame.manifest()

    def build(self, delivery: Delivery) -> bytes:
        return self.finish(self.render(delivery))

    def render(self, delivery: Delivery) -> Canvas:
        if delivery is None:
            raise DocumentError("Shipping manifest requires a delivery")
        content = ShippingManifestContent.from_delivery(delivery)

        canvas = self.new_canvas()
        left = canvas.frame.content_left

        canvas.move_to(left, 10)
        canvas.draw_logo(self.company, 65)
        canvas.move_to(left + 105, 35)
        canvas.draw_title(self.style.title)

        canvas.move_to(left, 42)
        self.draw_heading_text(canvas, "Ship To")
        canvas.inc_y(5)
        canvas.draw_customer_details(content.customer)
        ship_to_bottom = canvas.cursor.y

        canvas.move_to(left + 105, 42)
        canvas.draw_company_details(self.company)
        labels = []
        if self.company.phone_24h:
            labels.append(("24 Hour Contact:", self.company.phone_24h))
        labels.append(("Delivered At:", content.delivered_at))
        labels.append(("P.O.#:", content.po_number))
        self.draw_labels(canvas, labels)

        canvas.move_to(left, max(ship_to_bottom, canvas.cursor.y) + 5)
        self.draw_table(canvas, TableKind.SHIPPING_MANIFEST, content.rows)

        canvas.move_to(left, canvas.cursor.y + 5)
        canvas.ensure_space(15)
        top = canvas.cursor.y
        canvas.draw_label_with_value("Total Units:", content.total_units)
        canvas.move_to(left + SECOND_COLUMN_OFFSET, top)
        canvas.draw_totals(
            ["NON HAZARDOUS WEIGHT:", "HAZARDOUS WEIGHT:", "TOTAL WEIGHT:"],
            [content.non_hazardous_weight, content.hazardous_weight, content.total_weight],
            bold_labels=True,
        )

        canvas.move_to(left, canvas.cursor.y + 5)
        canvas.ensure_space(5)
        top = canvas.cursor.y
        canvas.draw_label_with_value("RECEIVED BY:", content.received_by)
        canvas.move_to(left + SECOND_COLUMN_OFFSET, top)
        canvas.draw_label_with_value("DELIVERED BY:", content.delivered_by)

        canvas.move_to(left, top + 10)
        self.draw_signature(canvas, content.signature)
        self.draw_thumbnails(canvas, content.images)
        canvas.draw_footer(self.footer_text())

        for image in content.images:
            canvas.add_page()
            canvas.draw_fitted_image(image)
        return canvas

    def draw_signature(self, canvas: Canvas, signature: Optional[bytes]) -> None:
        canvas.ensure_space(SIGNATURE_MAX_HEIGHT + 10)
        self.draw_heading_text(canvas, "SIGNATURE:")
        canvas.inc_y(5)
        max_height = min(SIGNATURE_MAX_HEIGHT, canvas.frame.bottom - canvas.cursor.y)
        box = canvas.draw_image_in_box(signature, SIGNATURE_WIDTH, max_height, tag="signature")
        canvas.inc_y(box.height + 10)

    def draw_thumbnails(self, canvas: Canvas, images: Tuple[bytes, ...]) -> None:
        """Row(s) of square photo thumbnails below the signature."""
        if not images:
            return
        frame = canvas.frame
        canvas.ensure_space(5 + THUMBNAIL_SIZE)
        self.draw_heading_text(canvas, "DELIVERY IMAGES:")
        canvas.inc_y(5)
        for image in images:
            if canvas.cursor.x + THUMBNAIL_SIZE > frame.right - frame.margin_left:
                canvas.move_to(frame.content_left, canvas.cursor.y + THUMBNAIL_STEP)
                canvas.ensure_space(THUMBNAIL_SIZE)
            canvas.image(canvas.cursor.x, canvas.cursor.y, THUMBNAIL_SIZE, THUMBNAIL_SIZE, image, tag="thumbnail")
            canvas.inc_x(THUMBNAIL_STEP)
        canvas.move_to(frame.content_left, canvas.cursor.y + THUMBNAIL_STEP)
