"""Text measurement and greedy word wrapping.

All results are in millimetres. Measurement only reads ReportLab's font
metrics tables; it never touches a drawing surface, so wrapping can be
computed (and tested) without a canvas.
"""

from dataclasses import dataclass
from typing import List, Optional
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics

from .styles import normalize_style, resolve_font_name


@dataclass(frozen=True)
class FontSpec:
    """Font label, style flag ("", "B", "I", "BI") and size in points."""
    family: str = "Helvetica"
    style: str = ""
    size: float = 10.0

    @property
    def font_name(self) -> str:
        return resolve_font_name(self.family, self.style)

    def with_style(self, style: str) -> "FontSpec":
        return FontSpec(self.family, normalize_style(style), self.size)

    def with_size(self, size: float) -> "FontSpec":
        return FontSpec(self.family, self.style, size)


class TextMeasurer:
    """Measures and wraps text for a given font spec."""

    def measure(self, text: str, font: FontSpec) -> float:
        """Height of a single line of text (the font size converted to mm)."""
        return font.size / mm

    def width(self, text: str, font: FontSpec) -> float:
        """Rendered width of text on one line."""
        if not text:
            return 0.0
        return pdfmetrics.stringWidth(text, font.font_name, font.size) / mm

    def wrap(self, text: str, font: FontSpec, max_width: float) -> List[str]:
        """
        Greedy word-boundary wrap.

        Tokens are added to the current line while the line still fits in
        max_width. A token wider than max_width is placed on its own line
        unbroken. Explicit newlines always start a new line; a blank line
        between paragraphs is kept as an empty string.

        Returns an empty list for empty or whitespace-only text.
        """
        if not text or not text.strip():
            return []

        lines: List[str] = []
        for paragraph in text.split("\n"):
            tokens = paragraph.split()
            if not tokens:
                lines.append("")
                continue

            current = tokens[0]
            for token in tokens[1:]:
                candidate = f"{current} {token}"
                if self.width(candidate, font) <= max_width:
                    current = candidate
                else:
                    lines.append(current)
                    current = token
            lines.append(current)

        # Leading/trailing blank paragraphs carry no ink
        while lines and lines[0] == "":
            lines.pop(0)
        while lines and lines[-1] == "":
            lines.pop()
        return lines

    def wrapped_height(
        self,
        text: str,
        font: FontSpec,
        max_width: float,
        line_height: Optional[float] = None,
    ) -> float:
        """Height of text once wrapped to max_width."""
        if line_height is None:
            line_height = self.measure(text, font)
        return len(self.wrap(text, font, max_width)) * line_height


def truncate_text(text: str, max_width: float, font: FontSpec, measurer: Optional[TextMeasurer] = None) -> str:
    """Truncate text to fit within max_width, adding '...' if needed."""
    measurer = measurer or TextMeasurer()
    if not text or measurer.width(text, font) <= max_width:
        return text

    ellipsis = "..."
    available_width = max_width - measurer.width(ellipsis, font)
    if available_width <= 0:
        return ellipsis[:1]

    for i in range(len(text), 0, -1):
        truncated = text[:i]
        if measurer.width(truncated, font) <= available_width:
            return truncated + ellipsis

    return ellipsis
