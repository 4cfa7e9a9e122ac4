"""Drawing surface for one document render, built on ReportLab.

The canvas owns the page frame and cursor for a single render. Primitive
draws paint at absolute coordinates and never move the cursor; composite
helpers are built from primitives and report the vertical extent they used.
Every primitive is also recorded as a DrawOp so layouts can be inspected
without parsing the PDF.
"""

import io
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple, Union
from reportlab.lib.colors import Color
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .config import CompanyDetails, RenderOptions
from .layout_engine import Cursor, PageFrame
from .models import Customer
from .styles import BLACK, WHITE, DocumentStyle
from .text_metrics import FontSpec, TextMeasurer, truncate_text

logger = logging.getLogger(__name__)

ImageSource = Union[bytes, bytearray, str, None]
ImageLoader = Callable[[str], Optional[bytes]]

# Pixel density assumed when an image is drawn without an explicit size
DEFAULT_IMAGE_DPI = 96.0


@dataclass(frozen=True)
class DrawOp:
    """One primitive painted on the page, in top-left mm coordinates."""
    kind: str  # "rect", "line", "text", "image", "placeholder"
    page_index: int
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    text: str = ""
    tag: str = ""  # What the primitive belongs to, e.g. "page_border", "table_border"


@dataclass(frozen=True)
class ImageBox:
    """Region occupied by a drawn image; zero-sized when the image was skipped."""
    x: float
    y: float
    width: float
    height: float

    @property
    def is_placeholder(self) -> bool:
        return self.width == 0 and self.height == 0


def first_color(*colors: Optional[Color]) -> Color:
    """First color that is not None."""
    return next(c for c in colors if c is not None)


def fit_image_dimensions(
    pixel_width: float,
    pixel_height: float,
    max_width: float,
    max_height: float,
) -> Tuple[float, float]:
    """Scale an image to fit inside max_width x max_height, keeping its aspect ratio."""
    if pixel_width <= 0 or pixel_height <= 0:
        return 0.0, 0.0
    scale = min(max_width / pixel_width, max_height / pixel_height)
    return pixel_width * scale, pixel_height * scale


class Canvas:
    """Paints primitives onto A4 pages and tracks the cursor for one document."""

    def __init__(
        self,
        frame: PageFrame,
        style: DocumentStyle,
        image_loader: Optional[ImageLoader] = None,
        options: Optional[RenderOptions] = None,
        measurer: Optional[TextMeasurer] = None,
        title: str = "",
    ):
        self.frame = frame
        self.cursor = Cursor(frame)
        self.style = style
        self.image_loader = image_loader
        self.options = options or RenderOptions()
        self.measurer = measurer or TextMeasurer()
        self.page_index = 0
        self.operations: List[DrawOp] = []

        self._buffer = io.BytesIO()
        self._pdf = canvas.Canvas(
            self._buffer,
            pagesize=(frame.page_width * mm, frame.page_height * mm),
            invariant=1 if self.options.invariant else 0,
        )
        self._pdf.setTitle(title or style.title)
        if self.options.author:
            self._pdf.setAuthor(self.options.author)
        self._finished = False

    # Coordinate conversion (top-left mm -> bottom-left points)

    def _px(self, x: float) -> float:
        return x * mm

    def _py(self, y: float) -> float:
        return (self.frame.page_height - y) * mm

    def _record(self, kind: str, x: float, y: float, width: float = 0.0, height: float = 0.0,
                text: str = "", tag: str = "") -> None:
        self.operations.append(DrawOp(kind, self.page_index, x, y, width, height, text, tag))

    @property
    def page_count(self) -> int:
        return self.page_index + 1

    @property
    def body_font(self) -> FontSpec:
        return FontSpec(self.style.font_family, "", self.style.body_font_size)

    # Cursor helpers

    def move_to(self, x: float, y: float) -> None:
        self.cursor.move_to(x, y)

    def inc_x(self, dx: float) -> None:
        self.cursor.inc_x(dx)

    def inc_y(self, dy: float) -> None:
        self.cursor.inc_y(dy)

    def dec_x(self, dx: float) -> None:
        self.cursor.dec_x(dx)

    def dec_y(self, dy: float) -> None:
        self.cursor.dec_y(dy)

    def reset_x(self) -> None:
        self.cursor.reset_x()

    def reset_y(self) -> None:
        self.cursor.reset_y()

    # Primitives

    def rectangle(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        style: str = "D",
        color: Optional[Color] = None,
        fill_color: Optional[Color] = None,
        thickness: Optional[float] = None,
        tag: str = "",
    ) -> None:
        """Draw a rectangle. style: "D" outline, "F" fill, "DF" both."""
        stroke = "D" in style.upper()
        fill = "F" in style.upper()
        self._pdf.setStrokeColor(first_color(color, BLACK))
        self._pdf.setFillColor(first_color(fill_color, color, BLACK))
        self._pdf.setLineWidth((thickness if thickness is not None else self.options.line_thickness) * mm)
        self._pdf.rect(
            self._px(x), self._py(y + height), width * mm, height * mm,
            stroke=int(stroke), fill=int(fill),
        )
        self._record("rect", x, y, width, height, tag=tag)

    def line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        width: Optional[float] = None,
        color: Optional[Color] = None,
        tag: str = "",
    ) -> None:
        self._pdf.setStrokeColor(first_color(color, BLACK))
        self._pdf.setLineWidth((width if width is not None else self.options.line_thickness) * mm)
        self._pdf.line(self._px(x1), self._py(y1), self._px(x2), self._py(y2))
        self._record("line", x1, y1, x2 - x1, y2 - y1, tag=tag)

    def text_run(
        self,
        x: float,
        y: float,
        content: str,
        font: FontSpec,
        color: Optional[Color] = None,
        tag: str = "",
    ) -> float:
        """Draw one line of text with its baseline at y. Returns the text width."""
        self._pdf.setFont(font.font_name, font.size)
        self._pdf.setFillColor(first_color(color, BLACK))
        self._pdf.drawString(self._px(x), self._py(y), content)
        width = self.measurer.width(content, font)
        self._record("text", x, y, width, self.measurer.measure(content, font), content, tag)
        return width

    def image(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        source: ImageSource,
        tag: str = "",
    ) -> ImageBox:
        """
        Draw an image with its top-left corner at (x, y).

        A zero width or height is derived from the image's aspect ratio.
        Sources that cannot be resolved or decoded leave a zero-size
        placeholder and do not abort the document.
        """
        reader = self._load_image(source, tag)
        if reader is None:
            self._record("placeholder", x, y, tag=tag)
            return ImageBox(x, y, 0.0, 0.0)

        pixel_width, pixel_height = reader.getSize()
        if width <= 0 and height <= 0:
            width = pixel_width * 25.4 / DEFAULT_IMAGE_DPI
            height = pixel_height * 25.4 / DEFAULT_IMAGE_DPI
        elif height <= 0:
            height = width * pixel_height / pixel_width
        elif width <= 0:
            width = height * pixel_width / pixel_height

        self._pdf.drawImage(
            reader, self._px(x), self._py(y + height),
            width=width * mm, height=height * mm, mask="auto",
        )
        self._record("image", x, y, width, height, tag=tag)
        return ImageBox(x, y, width, height)

    def _load_image(self, source: ImageSource, tag: str) -> Optional[ImageReader]:
        """Resolve an image source to a decoded reader, or None on any failure."""
        data: Optional[bytes]
        if isinstance(source, (bytes, bytearray)):
            data = bytes(source)
        elif isinstance(source, str) and source:
            if self.image_loader is None:
                logger.warning("No image loader configured; skipping image %r (%s)", source, tag or "image")
                return None
            try:
                data = self.image_loader(source)
            except Exception as exc:
                logger.warning("Image loader failed for %r (%s): %s", source, tag or "image", exc)
                return None
        else:
            data = None

        if not data:
            logger.warning("Image source for %s could not be resolved; using placeholder", tag or "image")
            return None

        try:
            reader = ImageReader(io.BytesIO(data))
            pixel_width, pixel_height = reader.getSize()
        except Exception as exc:
            logger.warning("Could not decode image for %s (%d bytes): %s", tag or "image", len(data), exc)
            return None

        if pixel_width <= 0 or pixel_height <= 0:
            logger.warning("Image for %s has no pixels; using placeholder", tag or "image")
            return None
        return reader

    def image_size(self, source: ImageSource, tag: str = "") -> Optional[Tuple[int, int]]:
        """Pixel size of an image source, or None if it cannot be decoded."""
        reader = self._load_image(source, tag)
        if reader is None:
            return None
        return reader.getSize()

    # Pages

    def draw_page_border(self) -> None:
        f = self.frame
        self.rectangle(
            f.border_x, f.border_y, f.width, f.height,
            style="D", color=self.style.accent_color, tag="page_border",
        )

    def add_page(self, border: bool = True) -> None:
        """Start a new page, redraw the page border and put the cursor at the content origin."""
        self._pdf.showPage()
        self.page_index += 1
        logger.debug("Started page %d of %s", self.page_count, self.style.name)
        if border:
            self.draw_page_border()
        self.cursor.reset()

    def ensure_space(self, height: float) -> bool:
        """Start a new page if content of the given height would overflow. Returns True on a break."""
        if self.frame.fits(self.cursor.y, height):
            return False
        x = self.cursor.x
        self.add_page()
        self.cursor.x = x
        return True

    def to_bytes(self) -> bytes:
        """Finish the document and return the PDF bytes."""
        if not self._finished:
            self._pdf.save()
            self._finished = True
        return self._buffer.getvalue()

    # Composites

    def draw_title(
        self,
        text: str,
        font: Optional[FontSpec] = None,
        color: Optional[Color] = None,
        align: str = "left",
    ) -> float:
        """Draw a title line at the cursor's baseline, aligned within the frame."""
        font = font or FontSpec(self.style.font_family, "B", self.style.title_font_size)
        width = self.measurer.width(text, font)
        if align == "right":
            x = self.frame.right - self.frame.margin_left - width
        elif align == "center":
            x = self.frame.border_x + (self.frame.width - width) / 2
        else:
            x = self.cursor.x
        self.text_run(x, self.cursor.y, text, font, first_color(color, self.style.accent_color), tag="title")
        return self.measurer.measure(text, font)

    def draw_label_with_value(
        self,
        label: str,
        value: str,
        font_size: Optional[float] = None,
        gap: float = 2.0,
        max_width: Optional[float] = None,
    ) -> float:
        """Bold label followed by a regular value on one line. Does not move the cursor."""
        size = font_size or self.style.body_font_size
        label_font = FontSpec(self.style.font_family, "B", size)
        value_font = FontSpec(self.style.font_family, "", size)

        label_width = self.text_run(self.cursor.x, self.cursor.y, label, label_font, tag="label")
        value_x = self.cursor.x + label_width + gap
        if max_width is not None:
            value = truncate_text(value, max_width - label_width - gap, value_font, self.measurer)
        self.text_run(value_x, self.cursor.y, value, value_font, tag="value")
        return self.measurer.measure(label, label_font)

    def draw_multiline_block(
        self,
        text: str,
        font: Optional[FontSpec] = None,
        max_width: float = 100.0,
        align: str = "left",
        line_height: Optional[float] = None,
        color: Optional[Color] = None,
    ) -> float:
        """Draw wrapped text with the first baseline at the cursor. Returns the block height."""
        font = font or self.body_font
        if line_height is None:
            line_height = self.measurer.measure(text, font)
        lines = self.measurer.wrap(text, font, max_width)
        for i, line in enumerate(lines):
            x = self.aligned_x(line, font, self.cursor.x, max_width, align)
            self.text_run(x, self.cursor.y + i * line_height, line, font, color, tag="block")
        return len(lines) * line_height

    def aligned_x(self, text: str, font: FontSpec, left: float, width: float, align: str,
                  padding: float = 0.0) -> float:
        """X position of text aligned inside [left, left + width]."""
        if align == "center":
            return left + (width - self.measurer.width(text, font)) / 2
        if align == "right":
            return left + width - self.measurer.width(text, font) - padding
        return left + padding

    def draw_bordered_heading(
        self,
        text: str,
        width: float,
        height: float = 6.0,
        fill_color: Optional[Color] = None,
        text_color: Optional[Color] = None,
        align: str = "left",
        font: Optional[FontSpec] = None,
        padding: float = 5.0,
    ) -> float:
        """Filled band at the cursor with a single line of text centred vertically."""
        font = font or FontSpec(self.style.font_family, "B", self.style.body_font_size)
        x, y = self.cursor.position
        self.rectangle(x, y, width, height, style="F", fill_color=first_color(fill_color, self.style.accent_color),
                       tag="heading")
        text_x = self.aligned_x(text, font, x, width, align, padding)
        # y is the text baseline, not its centre
        baseline = y + height / 2 + self.measurer.measure(text, font) * 0.3
        self.text_run(text_x, baseline, text, font, first_color(text_color, WHITE), tag="heading")
        return height

    def _draw_detail_lines(self, lines: Sequence[Tuple[str, str]], font_size: float, spacing: float) -> float:
        start_y = self.cursor.y
        for text, style in lines:
            font = FontSpec(self.style.font_family, style, font_size)
            self.text_run(self.cursor.x, self.cursor.y, text, font, tag="details")
            self.cursor.inc_y(spacing)
        return self.cursor.y - start_y

    def draw_company_details(self, company: CompanyDetails, font_size: float = 10, spacing: float = 5) -> float:
        """Company name and contact lines, advancing the cursor below the block."""
        lines = [
            (company.name, "B"),
            (company.address_line1, ""),
            (company.address_line2, ""),
            (f"Phone: {company.phone}", ""),
            (f"Email: {company.email}", ""),
        ]
        if company.website:
            lines.append((f"Website: {company.website}", ""))
        return self._draw_detail_lines(lines, font_size, spacing)

    def draw_customer_details(self, customer: Customer, font_size: float = 10, spacing: float = 5) -> float:
        """Customer name and address lines, advancing the cursor below the block."""
        lines = [
            (customer.name, "B"),
            (customer.address1, ""),
            (customer.address_line2, ""),
            (f"Phone: {customer.phone}", ""),
            (f"Email: {customer.email}", ""),
        ]
        return self._draw_detail_lines(lines, font_size, spacing)

    def draw_totals(
        self,
        labels: Sequence[str],
        values: Sequence[str],
        bold_labels: bool = False,
        emphasize_last: bool = True,
        spacing: float = 5.0,
        min_value_offset: float = 35.0,
    ) -> float:
        """Label/value pairs stacked at the cursor, values in their own column."""
        if len(labels) != len(values):
            raise ValueError(f"{len(labels)} total labels for {len(values)} values")

        size = self.style.body_font_size
        label_font = FontSpec(self.style.font_family, "B" if bold_labels else "", size)
        value_font = FontSpec(self.style.font_family, "", size)
        offset = max(
            [min_value_offset] + [self.measurer.width(label, label_font) + 3 for label in labels]
        )

        start_y = self.cursor.y
        for i, (label, value) in enumerate(zip(labels, values)):
            y = start_y + i * spacing
            last = i == len(labels) - 1
            self.text_run(self.cursor.x, y, label, label_font, tag="total_label")
            font = value_font.with_style("B") if (emphasize_last and last) else value_font
            self.text_run(self.cursor.x + offset, y, value, font, tag="total_value")
        self.cursor.inc_y(len(labels) * spacing)
        return len(labels) * spacing

    def draw_footer(self, text: str, font_size: float = 8) -> float:
        """Single centred line just above the bottom border."""
        font = FontSpec(self.style.font_family, "", font_size)
        text = truncate_text(text, self.frame.content_width, font, self.measurer)
        width = self.measurer.width(text, font)
        x = self.frame.border_x + (self.frame.width - width) / 2
        self.text_run(x, self.frame.bottom - 5, text, font, tag="footer")
        return self.measurer.measure(text, font)

    def draw_logo(self, company: CompanyDetails, width: float, height: float = 0.0) -> ImageBox:
        """Company logo with its top-left corner at the cursor."""
        return self.image(self.cursor.x, self.cursor.y, width, height, company.logo, tag="logo")

    def draw_image_in_box(
        self,
        source: ImageSource,
        max_width: float,
        max_height: float,
        tag: str = "",
    ) -> ImageBox:
        """Image at the cursor, scaled to fit max_width x max_height with its aspect ratio kept."""
        x, y = self.cursor.position
        size = self.image_size(source, tag)
        if size is None:
            self._record("placeholder", x, y, tag=tag)
            return ImageBox(x, y, 0.0, 0.0)
        width, height = fit_image_dimensions(size[0], size[1], max_width, max_height)
        return self.image(x, y, width, height, source, tag=tag)

    def draw_fitted_image(self, source: ImageSource, padding: float = 5.0, tag: str = "photo") -> ImageBox:
        """Draw an image as large as the frame allows, centred on the page."""
        size = self.image_size(source, tag)
        if size is None:
            self._record("placeholder", self.cursor.x, self.cursor.y, tag=tag)
            return ImageBox(self.cursor.x, self.cursor.y, 0.0, 0.0)
        width, height = fit_image_dimensions(
            size[0], size[1],
            self.frame.width - 2 * padding,
            self.frame.height - 2 * padding,
        )
        x = (self.frame.page_width - width) / 2
        y = (self.frame.page_height - height) / 2
        return self.image(x, y, width, height, source, tag=tag)
