"""
Height Providers

Pluggable sources for the pixel height of the header and of each section.
The packer only asks a provider for numbers, so it runs the same against real
browser measurements and against the character-count estimate.
"""

import math
from typing import Mapping, Optional

from typing_extensions import Protocol

from cvcraft.contexts.pagination.logger import log_height
from cvcraft.contexts.rendering.document_data_structures import (
    ContentKind,
    Frontmatter,
    Section,
)

HEADER_HEIGHT = 150.0
SECTION_BASE_HEIGHT = 80.0
CHARS_PER_LINE = 80
LINE_HEIGHT = 20.0
BLOCK_SPACING = 10.0
ENTRY_HEIGHT = 120.0
TEXT_SECTION_HEIGHT = 60.0

HEADER_KEY = "header"


def section_key(index: int) -> str:
    """Measurement key for the section at `index` in document order."""
    return f"section-{index}"


class HeightProvider(Protocol):
    def header_height(self, frontmatter: Optional[Frontmatter]) -> float: ...

    def section_height(self, index: int, section: Section) -> float: ...


def _text_block_height(text: str) -> float:
    lines = math.ceil(len(text) / CHARS_PER_LINE)
    return lines * LINE_HEIGHT + BLOCK_SPACING


class EstimatedHeightProvider:
    """
    Character-count estimate used before the surface can be measured.

    Each section costs a fixed base for its header, plus per content kind:
    - TEXT: a fixed block
    - LIST: one wrapped block per item (80 chars/line, 20px/line, 10px spacing)
    - SKILLS: one wrapped block per "Category: a, b" line
    - ENTRIES: a fixed height per entry
    Break markers take no space.
    """

    def header_height(self, frontmatter: Optional[Frontmatter] = None) -> float:
        return HEADER_HEIGHT

    def section_height(self, index: int, section: Section) -> float:
        if section.is_break_marker:
            return 0.0

        content = section.content
        height = SECTION_BASE_HEIGHT
        if content.kind is ContentKind.TEXT:
            height += TEXT_SECTION_HEIGHT
        elif content.kind is ContentKind.LIST:
            height += sum(_text_block_height(item) for item in content.items)
        elif content.kind is ContentKind.SKILLS:
            for group in content.groups:
                line = ", ".join(group.skills)
                if group.category:
                    line = f"{group.category}: {line}"
                height += _text_block_height(line)
        elif content.kind is ContentKind.ENTRIES:
            height += ENTRY_HEIGHT * len(content.entries)
        return height


class MeasuredHeightProvider:
    """
    Heights measured on the rendered surface, keyed "header" and "section-{i}".

    Blocks that weren't measured (not laid out yet) fall back to `fallback`.

    Example:
        provider = MeasuredHeightProvider({"header": 180.0, "section-0": 240.5})
    """

    def __init__(self, measured: Mapping[str, float], fallback: Optional[HeightProvider] = None):
        self.measured = dict(measured)
        self.fallback = fallback or EstimatedHeightProvider()

    def header_height(self, frontmatter: Optional[Frontmatter] = None) -> float:
        if HEADER_KEY in self.measured:
            height = float(self.measured[HEADER_KEY])
            log_height(HEADER_KEY, height, "measured")
            return height
        height = self.fallback.header_height(frontmatter)
        log_height(HEADER_KEY, height, "estimated")
        return height

    def section_height(self, index: int, section: Section) -> float:
        key = section_key(index)
        if key in self.measured:
            height = float(self.measured[key])
            log_height(key, height, "measured")
            return height
        height = self.fallback.section_height(index, section)
        log_height(key, height, "estimated")
        return height
