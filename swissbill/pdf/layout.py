"""
Swiss QR-bill page geometry (SIX Implementation Guidelines).

All values are millimeters measured from the top-left corner of an A4
page. Nothing here knows about a drawing library; renderers convert with
`unit_convert` (or their own scale) and flip the y axis if their origin is
at the bottom.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class TextRole(str, Enum):
    TITLE = "title"
    LABEL = "label"
    CONTENT = "content"
    CONTENT_SMALL = "content_small"
    PAYMENT_LABEL = "payment_label"
    PAYMENT_CONTENT = "payment_content"


@dataclass(frozen=True)
class FontSpec:
    size: float
    bold: bool = False


@dataclass(frozen=True)
class Box:
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2


@dataclass(frozen=True)
class CrossGeometry:
    square_size: float
    arm_thickness: float
    arm_length: float
    # Arm rectangles relative to the top-left corner of the emblem square
    horizontal_arm: Box
    vertical_arm: Box


_FONTS = MappingProxyType(
    {
        TextRole.TITLE: FontSpec(size=11, bold=True),
        TextRole.LABEL: FontSpec(size=6, bold=True),
        TextRole.CONTENT: FontSpec(size=8),
        TextRole.CONTENT_SMALL: FontSpec(size=7),
        TextRole.PAYMENT_LABEL: FontSpec(size=8, bold=True),
        TextRole.PAYMENT_CONTENT: FontSpec(size=10),
    }
)


@dataclass(frozen=True)
class LayoutGeometry:
    page_width: float = 210.0
    page_height: float = 297.0

    separator_y: float = 192.0

    # text insets; the panels themselves start at 0 and receipt_width
    receipt_text_x: float = 5.0
    receipt_width: float = 62.0

    payment_text_x: float = 67.0
    payment_width: float = 148.0

    qr_x: float = 67.0
    qr_y: float = 209.0
    qr_size: float = 46.0

    emblem_size: float = 7.0

    separator_dash: tuple[float, float] = (2.0, 2.0)
    separator_line_width: float = 0.2

    fonts: Mapping[TextRole, FontSpec] = field(default_factory=lambda: _FONTS)

    @property
    def slip_height(self) -> float:
        return self.page_height - self.separator_y

    @property
    def receipt_box(self) -> Box:
        return Box(0.0, self.separator_y, self.receipt_width, self.slip_height)

    @property
    def payment_box(self) -> Box:
        return Box(self.receipt_width, self.separator_y, self.payment_width, self.slip_height)

    @property
    def qr_box(self) -> Box:
        return Box(self.qr_x, self.qr_y, self.qr_size, self.qr_size)

    @property
    def emblem_box(self) -> Box:
        offset = (self.qr_size - self.emblem_size) / 2
        return Box(self.qr_x + offset, self.qr_y + offset, self.emblem_size, self.emblem_size)

    def font(self, role: TextRole) -> FontSpec:
        return self.fonts[role]


_GEOMETRY = LayoutGeometry()


def geometry() -> LayoutGeometry:
    return _GEOMETRY


def cross_geometry(emblem_size: float) -> CrossGeometry:
    """Plus-shaped cross centered in a square emblem: arms 20% thick, 60% long."""
    thickness = 0.20 * emblem_size
    length = 0.60 * emblem_size
    offset = (emblem_size - length) / 2
    inset = (emblem_size - thickness) / 2
    return CrossGeometry(
        square_size=emblem_size,
        arm_thickness=thickness,
        arm_length=length,
        horizontal_arm=Box(offset, inset, length, thickness),
        vertical_arm=Box(inset, offset, thickness, length),
    )


def unit_convert(value_mm: float, scale: float) -> float:
    """Millimeters to device units, `scale` being device units per millimeter."""
    return value_mm * scale
