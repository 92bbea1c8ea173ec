"""
Pagination Estimator

Predicts where content will break across printed pages, for the preview's
advisory page markers. Two modes:

- simple: break offsets at every multiple of the usable page height
- section-aware: greedy packing of whole sections onto pages

The two can disagree on the same content; neither is authoritative over the
export renderer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from cvcraft.contexts.pagination.height_providers import EstimatedHeightProvider, HeightProvider
from cvcraft.contexts.pagination.logger import _log_debug, log_estimate, log_page_closed
from cvcraft.contexts.pagination.page_geometry import PageGeometry
from cvcraft.contexts.rendering.document_data_structures import Frontmatter, Section

HEADER_WARNING_RATIO = 0.4
UNDERFILLED_PAGE_RATIO = 0.2

# Absolute slack (px) so sums that fill a page exactly still fit
FIT_TOLERANCE = 1e-6


class PaginationMode(str, Enum):
    SIMPLE = "simple"
    SECTION_AWARE = "section-aware"


@dataclass
class Page:
    """
    One predicted printed page.

    Attributes:
        page_number: 1-based page number
        sections: Sections placed on this page, in order (never split)
        has_header: True only for page 1
        height: Sum of the header (if any) and section heights, in px
    """

    page_number: int
    sections: List[Section] = field(default_factory=list)
    has_header: bool = False
    height: float = 0.0


@dataclass
class PaginationEstimate:
    """
    Result of section-aware packing.

    Attributes:
        pages: Predicted pages
        warnings: Advisory messages (oversized header/section, near-empty page)
    """

    pages: List[Page] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)


def estimate_page_breaks(content_height: Optional[float], geometry: Optional[PageGeometry]) -> List[float]:
    """
    Simple mode: page break offsets for a given total content height.

    Args:
        content_height: Rendered content height in px; None if not laid out yet
        geometry: Page geometry; None if unavailable

    Returns:
        Ascending offsets k * usable (k >= 1) strictly before the end of the
        content. Empty when the content fits one page or geometry is missing.

    Example:
        >>> usable = PageGeometry().usable_height_px
        >>> estimate_page_breaks(usable * 2.5, PageGeometry()) == [usable, usable * 2]
        True
    """
    if content_height is None or geometry is None:
        return []

    usable = geometry.usable_height_px
    if usable <= 0:
        return []

    breaks = []
    k = 1
    while k * usable < content_height:
        breaks.append(k * usable)
        k += 1
    return breaks


def _section_label(section: Section) -> str:
    return section.title or section.type


def pack_sections(
    sections: List[Section],
    height_provider: Optional[HeightProvider] = None,
    geometry: Optional[PageGeometry] = None,
    frontmatter: Optional[Frontmatter] = None,
) -> PaginationEstimate:
    """
    Section-aware mode: greedily pack whole sections onto pages.

    Page 1 starts with the header height. A section that would overflow the
    current page starts a new page, unless the current page has no sections
    yet, in which case it stays (and overflows). A forced break closes the
    current page before the next section. Warnings never change placement.

    Args:
        sections: Sections in document order
        height_provider: Source of heights (defaults to the estimate)
        geometry: Page geometry (defaults to A4 with 20mm margins)
        frontmatter: Passed to the provider for the header height

    Returns:
        PaginationEstimate with pages and advisory warnings
    """
    height_provider = height_provider or EstimatedHeightProvider()
    geometry = geometry or PageGeometry()
    usable = geometry.usable_height_px
    warnings: List[str] = []

    header_height = height_provider.header_height(frontmatter)
    if header_height > usable * HEADER_WARNING_RATIO:
        warnings.append(
            f"Header is very large ({round(header_height)}px). Consider shortening your name or title."
        )

    pages: List[Page] = []
    current = Page(page_number=1, has_header=True, height=header_height)

    def close_page(check_fill: bool) -> Page:
        if check_fill and current.height < usable * UNDERFILLED_PAGE_RATIO:
            warnings.append(
                f"Page {current.page_number} has very little content. "
                "Consider adjusting content distribution."
            )
        log_page_closed(current.page_number, len(current.sections), current.height, usable)
        pages.append(current)
        return Page(page_number=len(pages) + 1)

    for index, section in enumerate(sections):
        if section.break_before and current.sections:
            _log_debug(f"Forced break before section {index}")
            current = close_page(check_fill=False)
        if section.is_break_marker:
            continue

        height = height_provider.section_height(index, section)
        if height > usable:
            warnings.append(
                f'Section "{_section_label(section)}" is too large ({round(height)}px) to fit on one page. '
                "Consider breaking it into smaller sections."
            )

        if current.height + height > usable + FIT_TOLERANCE and current.sections:
            current = close_page(check_fill=True)

        current.sections.append(section)
        current.height += height

    if current.sections or not pages:
        pages.append(current)

    log_estimate(len(pages), warnings)
    return PaginationEstimate(pages=pages, warnings=warnings)
