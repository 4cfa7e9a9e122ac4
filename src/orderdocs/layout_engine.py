"""Page frames and the drawing cursor.

Coordinates are millimetres with the origin at the top-left corner of the
page and y growing downward, matching how the documents are laid out.
"""

from dataclasses import dataclass
from typing import Tuple
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm

from .exceptions import LayoutError


# Page dimensions in mm
PORTRAIT_SIZE: Tuple[float, float] = (A4[0] / mm, A4[1] / mm)  # 210 x 297
LANDSCAPE_SIZE: Tuple[float, float] = (landscape(A4)[0] / mm, landscape(A4)[1] / mm)  # 297 x 210


@dataclass(frozen=True)
class PageFrame:
    """The drawable, bordered rectangle of one page."""
    border_x: float
    border_y: float
    width: float
    height: float
    margin_left: float  # Offset of the content area from the border origin
    margin_top: float
    page_width: float = PORTRAIT_SIZE[0]
    page_height: float = PORTRAIT_SIZE[1]

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise LayoutError(
                "Page frame must have a positive size",
                f"width={self.width}, height={self.height}",
            )

    @classmethod
    def standard(cls) -> "PageFrame":
        """A4 portrait frame used by invoices, purchase orders and reports."""
        return cls(border_x=8, border_y=8, width=193, height=280, margin_left=7, margin_top=7)

    @classmethod
    def manifest(cls) -> "PageFrame":
        """Near full-page A4 portrait frame; manifests carry wider tables."""
        return cls(border_x=5, border_y=5, width=200, height=285, margin_left=5, margin_top=5)

    @classmethod
    def landscape(cls) -> "PageFrame":
        """A4 landscape frame with a 3mm gutter."""
        page_width, page_height = LANDSCAPE_SIZE
        return cls(
            border_x=3,
            border_y=3,
            width=page_width - 6,
            height=page_height - 6,
            margin_left=5,
            margin_top=5,
            page_width=page_width,
            page_height=page_height,
        )

    @property
    def page_size(self) -> Tuple[float, float]:
        return self.page_width, self.page_height

    @property
    def content_left(self) -> float:
        return self.border_x + self.margin_left

    @property
    def content_top(self) -> float:
        return self.border_y + self.margin_top

    @property
    def right(self) -> float:
        return self.border_x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge of the border; nothing may be drawn below it."""
        return self.border_y + self.height

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin_left

    @property
    def drawable_height(self) -> float:
        """Room available below the content origin on a fresh page."""
        return self.bottom - self.content_top

    def fits(self, y: float, height: float) -> bool:
        """Check if content of the given height starting at y stays inside the frame."""
        return y + height <= self.bottom


class Cursor:
    """Mutable drawing position inside a page frame."""

    def __init__(self, frame: PageFrame):
        self.frame = frame
        self.x = frame.content_left
        self.y = frame.content_top

    def __repr__(self) -> str:
        return f"Cursor(x={self.x:.2f}, y={self.y:.2f})"

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    def move_to(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def inc_x(self, dx: float) -> None:
        self.x += dx

    def inc_y(self, dy: float) -> None:
        self.y += dy

    def dec_x(self, dx: float) -> None:
        self.x -= dx

    def dec_y(self, dy: float) -> None:
        self.y -= dy

    def reset_x(self) -> None:
        self.x = self.frame.content_left

    def reset_y(self) -> None:
        self.y = self.frame.content_top

    def reset(self) -> None:
        """Move to the content origin of the frame."""
        self.reset_x()
        self.reset_y()
