"""
Page Geometry

Printed page dimensions and the millimetre-to-pixel conversion used to turn
them into preview pixels (96 DPI).
"""

from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Optional

from cvcraft.contexts.styling.config_resolver import resolve_style_config
from cvcraft.utils.css_units import parse_length

MM_TO_PX = 3.7795275591

# Lengths in other units are converted to mm
UNIT_TO_MM = {
    "mm": 1.0,
    "": 1.0,
    "cm": 10.0,
    "in": 25.4,
    "px": 1 / MM_TO_PX,
    "pt": 25.4 / 72,
}


class PageSize(NamedTuple):
    """Portrait page dimensions in millimetres."""

    width_mm: float
    height_mm: float


PAGE_SIZES = {
    "A4": PageSize(210.0, 297.0),
    "Letter": PageSize(215.9, 279.4),
    "Legal": PageSize(215.9, 355.6),
}

DEFAULT_PAGE_SIZE = "A4"
DEFAULT_MARGIN_MM = 20.0


@dataclass(frozen=True)
class PageGeometry:
    """
    Printed page geometry.

    Attributes:
        page_height_mm: Full page height
        margin_top_mm: Top print margin
        margin_bottom_mm: Bottom print margin
        page_width_mm: Full page width
    """

    page_height_mm: float = 297.0
    margin_top_mm: float = DEFAULT_MARGIN_MM
    margin_bottom_mm: float = DEFAULT_MARGIN_MM
    page_width_mm: float = 210.0

    @property
    def usable_height_mm(self) -> float:
        return self.page_height_mm - self.margin_top_mm - self.margin_bottom_mm

    @property
    def usable_height_px(self) -> float:
        """Height available for content on one page, in preview pixels."""
        return self.usable_height_mm * MM_TO_PX


def mm_to_px(mm: float) -> float:
    return mm * MM_TO_PX


def length_to_mm(value: Any, default: float = DEFAULT_MARGIN_MM) -> float:
    """Convert a CSS length ("20mm", "1in", 15) to millimetres; unparseable -> default."""
    parsed = parse_length(value)
    if parsed is None:
        return default
    number, unit = parsed
    factor = UNIT_TO_MM.get(unit.lower())
    return number * factor if factor is not None else default


def page_size_for(name: Optional[str], orientation: str = "portrait") -> PageSize:
    """Look up a page size by name (case-insensitive); unknown names are A4."""
    lookup = {key.lower(): size for key, size in PAGE_SIZES.items()}
    size = lookup.get((name or DEFAULT_PAGE_SIZE).lower(), PAGE_SIZES[DEFAULT_PAGE_SIZE])
    if orientation == "landscape":
        return PageSize(size.height_mm, size.width_mm)
    return size


def page_size_css(name: Optional[str], orientation: str = "portrait") -> str:
    """Page size as an @page `size` value, e.g. '210mm 297mm'."""
    size = page_size_for(name, orientation)
    return f"{size.width_mm:g}mm {size.height_mm:g}mm"


def geometry_from_config(config: Optional[Dict[str, Any]] = None) -> PageGeometry:
    """
    Build page geometry from the pdf and layout groups of a style config.

    Example:
        >>> geometry_from_config({"pdf": {"pageSize": "Letter"}}).page_height_mm
        279.4
    """
    resolved = resolve_style_config(config)
    pdf = resolved.get("pdf", {})
    margins = resolved.get("layout", {}).get("pageMargin") or {}
    size = page_size_for(pdf.get("pageSize"), pdf.get("orientation") or "portrait")
    return PageGeometry(
        page_height_mm=size.height_mm,
        margin_top_mm=length_to_mm(margins.get("top")),
        margin_bottom_mm=length_to_mm(margins.get("bottom")),
        page_width_mm=size.width_mm,
    )
