"""Shared scaffolding for the document builders."""

import logging
from typing import Iterable, Optional, Sequence

from .canvas import Canvas, ImageLoader
from .config import CompanyDetails, RenderOptions
from .layout_engine import PageFrame
from .styles import DocumentStyle, DocumentType, get_document_style
from .table_layout import TableLayout, TableSpec
from .table_templates import TableKind, get_template
from .text_metrics import FontSpec, TextMeasurer

logger = logging.getLogger(__name__)

FOOTER_TEMPLATE = "If you have any questions or concerns about this {document} please contact us at {email}"


def format_date(moment) -> str:
    """January 2, 2006"""
    return f"{moment:%B} {moment.day}, {moment.year}"


def format_date_time(moment) -> str:
    """January 2, 2006 at 3:04 PM"""
    hour = moment.hour % 12 or 12
    return f"{format_date(moment)} at {hour}:{moment:%M %p}"


class DocumentBuilder:
    """
    Base class for the fixed-script document builders.

    A builder holds only immutable configuration. Every render creates its
    own Canvas, PageFrame and Cursor, so one builder may serve many calls.
    Subclasses implement ``render`` and a ``build`` wrapper with their own
    signature that returns PDF bytes.
    """

    doc_type: DocumentType = DocumentType.PURCHASE_ORDER
    footer_subject = "document"

    def __init__(
        self,
        company: CompanyDetails,
        image_loader: Optional[ImageLoader] = None,
        options: Optional[RenderOptions] = None,
        measurer: Optional[TextMeasurer] = None,
    ):
        self.company = company
        self.image_loader = image_loader
        self.options = options or RenderOptions()
        self.measurer = measurer or TextMeasurer()

    @property
    def style(self) -> DocumentStyle:
        return get_document_style(self.doc_type)

    def make_frame(self) -> PageFrame:
        return PageFrame.standard()

    def new_canvas(self) -> Canvas:
        """Fresh canvas with the first page border already drawn."""
        canvas = Canvas(
            self.make_frame(),
            self.style,
            image_loader=self.image_loader,
            options=self.options,
            measurer=self.measurer,
        )
        canvas.draw_page_border()
        return canvas

    # Shared drawing steps

    def font(self, style: str = "", size: Optional[float] = None) -> FontSpec:
        return FontSpec(self.style.font_family, style, size or self.style.body_font_size)

    def draw_heading_text(self, canvas: Canvas, text: str, size: Optional[float] = None) -> float:
        """Bold single line at the cursor in the body color."""
        canvas.text_run(canvas.cursor.x, canvas.cursor.y, text, self.font("B", size), self.style.body_text_color)
        return self.measurer.measure(text, self.font("B", size))

    def draw_labels(self, canvas: Canvas, pairs: Sequence[tuple], spacing: float = 5.0) -> float:
        """Stack label/value lines downward from the cursor."""
        start_y = canvas.cursor.y
        for label, value in pairs:
            canvas.draw_label_with_value(label, value)
            canvas.inc_y(spacing)
        return canvas.cursor.y - start_y

    def draw_table(self, canvas: Canvas, kind: TableKind, rows: Iterable[Sequence[str]]) -> float:
        spec = TableSpec.from_template(get_template(kind), rows, self.style)
        return TableLayout(canvas, self.measurer).draw_table(spec)

    def footer_text(self) -> str:
        return FOOTER_TEMPLATE.format(document=self.footer_subject, email=self.company.email)

    def finish(self, canvas: Canvas) -> bytes:
        """Serialize the canvas and log the result."""
        data = canvas.to_bytes()
        logger.info("Rendered %s: %d page(s), %d bytes", self.style.name, canvas.page_count, len(data))
        return data
