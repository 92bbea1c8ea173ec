"""
Layout Composer

Places rendered sections into the page skeletons: two-column (sidebar + main)
or single-column. Column widths are read from the compiled token map so the
markup and the stylesheet always agree.
"""

from typing import List, Mapping, NamedTuple, Optional

from cvcraft.contexts.rendering.contact_renderer import render_contact_info
from cvcraft.contexts.rendering.document_data_structures import Frontmatter, Section
from cvcraft.contexts.rendering.logger import _log_debug
from cvcraft.contexts.rendering.photo_renderer import render_profile_photo
from cvcraft.contexts.rendering.registries import MarkupTemplateRegistry, get_default_registry
from cvcraft.contexts.rendering.section_renderer import RenderOptions, render_header, render_sections
from cvcraft.utils.css_units import format_number

SIDEBAR_SECTION_TYPES = ("skills", "languages", "interests", "tools")

# Experience stays in the main column whatever its title says
MAIN_SECTION_TYPES = ("experience",)

DEFAULT_SIDEBAR_WIDTH = "84mm"
DEFAULT_MAIN_WIDTH = "126mm"


class SectionSplit(NamedTuple):
    """Sections routed to each column, each list in document order."""

    sidebar: List[Section]
    main: List[Section]


def is_sidebar_section(section: Section) -> bool:
    """
    True if the section belongs in the sidebar column.

    Matches on the type tag, or on a sidebar keyword anywhere in the title
    (case-insensitive). Break markers are never classified on their own.
    """
    if section.is_break_marker:
        return False

    section_type = (section.type or "").lower()
    if section_type in MAIN_SECTION_TYPES:
        return False
    if section_type in SIDEBAR_SECTION_TYPES:
        return True

    title = (section.title or "").lower()
    return any(keyword in title for keyword in SIDEBAR_SECTION_TYPES)


def split_sections(sections: List[Section]) -> SectionSplit:
    """
    Route sections to the sidebar or main column.

    A break marker follows the column of the closest preceding content
    section; a marker with no predecessor goes to main.

    Example:
        >>> split = split_sections(document.sections)
        >>> [s.type for s in split.sidebar]
        ['skills', 'languages']
    """
    sidebar: List[Section] = []
    main: List[Section] = []
    previous_column: Optional[List[Section]] = None

    for section in sections:
        if section.is_break_marker:
            column = previous_column if previous_column is not None else main
        else:
            column = sidebar if is_sidebar_section(section) else main
            previous_column = column
        column.append(section)

    _log_debug(f"Split sections: {len(sidebar)} sidebar, {len(main)} main")
    return SectionSplit(sidebar=sidebar, main=main)


def compose_two_column(
    frontmatter: Frontmatter,
    sidebar_sections: List[Section],
    main_sections: List[Section],
    tokens: Mapping[str, str],
    options: Optional[RenderOptions] = None,
    photo_url: Optional[str] = None,
    show_header: bool = True,
    registry: Optional[MarkupTemplateRegistry] = None,
) -> str:
    """
    Compose the two-column body.

    The sidebar holds the photo (or its placeholder), the contact block and
    the sidebar sections. The main column holds the name/title header, on the
    first page only, followed by the main sections.

    Args:
        frontmatter: Name and contact fields
        sidebar_sections: Sections for the sidebar, in order
        main_sections: Sections for the main column, in order
        tokens: Compiled token map (column widths)
        options: Section render options (class prefix, pagination, ...)
        photo_url: Resolved photo URL or data URI, if any
        show_header: Emit the name/title block at the top of the main column
    """
    options = options or RenderOptions()
    registry = registry or get_default_registry()
    p = options.class_prefix

    return registry.render(
        "two_column.html",
        p=p,
        fm=frontmatter,
        sidebar_width=tokens.get("--sidebar-width", DEFAULT_SIDEBAR_WIDTH),
        main_width=tokens.get("--main-width", DEFAULT_MAIN_WIDTH),
        photo=render_profile_photo(photo_url, frontmatter.photo, class_prefix=p, registry=registry),
        contact=render_contact_info(frontmatter, class_prefix=p, layout="vertical", registry=registry),
        sidebar=render_sections(sidebar_sections, options, registry),
        main=render_sections(main_sections, options, registry),
        show_header=show_header,
    )


def compose_single_column(
    frontmatter: Frontmatter,
    sections: List[Section],
    tokens: Mapping[str, str],
    options: Optional[RenderOptions] = None,
    registry: Optional[MarkupTemplateRegistry] = None,
) -> str:
    """Compose the single-column body: header, then every section in order."""
    options = options or RenderOptions()
    registry = registry or get_default_registry()
    return registry.render(
        "single_column.html",
        p=options.class_prefix,
        header=render_header(frontmatter, options.class_prefix, registry),
        body=render_sections(sections, options, registry),
    )


def render_page_markers(
    break_offsets: List[float],
    class_prefix: str = "",
    zoom: float = 1.0,
    registry: Optional[MarkupTemplateRegistry] = None,
) -> str:
    """
    Render the preview's dashed page-break markers.

    Offsets are unzoomed px from the top of the content; each marker is placed
    at offset * zoom and labelled with the page it starts.
    """
    registry = registry or get_default_registry()
    offsets = [format_number(offset * (zoom or 1.0)) for offset in break_offsets]
    return registry.render("page_markers.html", p=class_prefix, offsets=offsets).strip()
