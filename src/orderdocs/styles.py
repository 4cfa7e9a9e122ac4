"""Per-document visual styles: accent colors, fonts and font-name resolution."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict
from reportlab.lib.colors import Color, black, white


# Brand palette (RGB 0-255 in the source system)
PRIMARY_BLUE = Color(65 / 255, 83 / 255, 145 / 255)
PRIMARY_GREEN = Color(165 / 255, 199 / 255, 89 / 255)
WHITE = white
BLACK = black


class DocumentType(Enum):
    """The document kinds the engine can produce."""
    PURCHASE_ORDER = "purchase_order"
    INVOICE = "invoice"
    SHIPPING_MANIFEST = "shipping_manifest"
    REVENUE_REPORT = "revenue_report"
    CANCELLATION_SUMMARY = "cancellation_summary"


@dataclass(frozen=True)
class DocumentStyle:
    """Visual style profile for one document type."""
    name: str
    title: str
    font_family: str
    title_font_size: float
    body_font_size: float
    table_header_font_size: float
    table_body_font_size: float
    accent_color: Color  # Page border, headings, table header fill
    header_text_color: Color
    body_text_color: Color


DOCUMENT_STYLES: Dict[DocumentType, DocumentStyle] = {
    DocumentType.PURCHASE_ORDER: DocumentStyle(
        name="purchase_order",
        title="PURCHASE ORDER",
        font_family="Helvetica",
        title_font_size=24,
        body_font_size=10,
        table_header_font_size=10,
        table_body_font_size=9,
        accent_color=PRIMARY_BLUE,
        header_text_color=WHITE,
        body_text_color=BLACK,
    ),
    DocumentType.INVOICE: DocumentStyle(
        name="invoice",
        title="INVOICE",
        font_family="Helvetica",
        title_font_size=26,
        body_font_size=10,
        table_header_font_size=10,
        table_body_font_size=9,
        accent_color=PRIMARY_GREEN,
        header_text_color=WHITE,
        body_text_color=BLACK,
    ),
    DocumentType.SHIPPING_MANIFEST: DocumentStyle(
        name="shipping_manifest",
        title="SHIPPING MANIFEST",
        font_family="Helvetica",
        title_font_size=24,
        body_font_size=10,
        table_header_font_size=8,
        table_body_font_size=8,
        accent_color=PRIMARY_BLUE,
        header_text_color=WHITE,
        body_text_color=BLACK,
    ),
    DocumentType.REVENUE_REPORT: DocumentStyle(
        name="revenue_report",
        title="REVENUE REPORT",
        font_family="Helvetica",
        title_font_size=24,
        body_font_size=10,
        table_header_font_size=8,
        table_body_font_size=8,
        accent_color=PRIMARY_GREEN,
        header_text_color=WHITE,
        body_text_color=BLACK,
    ),
    DocumentType.CANCELLATION_SUMMARY: DocumentStyle(
        name="cancellation_summary",
        title="Cancellation Summary",
        font_family="Helvetica",
        title_font_size=16,
        body_font_size=10,
        table_header_font_size=10,
        table_body_font_size=9,
        accent_color=PRIMARY_BLUE,
        header_text_color=WHITE,
        body_text_color=BLACK,
    ),
}


# Font family labels accepted from callers, mapped onto the standard PDF fonts
FONT_ALIASES: Dict[str, str] = {
    "helvetica": "Helvetica",
    "arial": "Helvetica",
    "times": "Times",
    "times-roman": "Times",
    "courier": "Courier",
}

_STANDARD_VARIANTS: Dict[str, Dict[str, str]] = {
    "Helvetica": {"": "Helvetica", "B": "Helvetica-Bold", "I": "Helvetica-Oblique", "BI": "Helvetica-BoldOblique"},
    "Times": {"": "Times-Roman", "B": "Times-Bold", "I": "Times-Italic", "BI": "Times-BoldItalic"},
    "Courier": {"": "Courier", "B": "Courier-Bold", "I": "Courier-Oblique", "BI": "Courier-BoldOblique"},
}


def get_document_style(doc_type: DocumentType) -> DocumentStyle:
    """Get the visual style for a document type."""
    return DOCUMENT_STYLES[doc_type]


def normalize_style(style: str) -> str:
    """Normalize a style flag ("b", "IB", "") to one of "", "B", "I", "BI"."""
    flags = style.upper()
    bold = "B" in flags
    italic = "I" in flags
    return ("B" if bold else "") + ("I" if italic else "")


def resolve_font_name(family: str, style: str = "") -> str:
    """Resolve a family label plus style flag to a concrete PDF font name."""
    base = FONT_ALIASES.get(family.lower(), family)
    variants = _STANDARD_VARIANTS.get(base)
    if variants is None:
        # Registered custom font; only the regular face is assumed to exist
        return base
    return variants[normalize_style(style)]


def get_bold_font(font_family: str) -> str:
    """Get the bold variant of a font family."""
    return resolve_font_name(font_family, "B")
