"""
Section Renderer

Turns parsed sections into HTML fragments. The preview and the export share
this renderer; the only difference between them is the class prefix, so the
two outputs are structurally identical.

Dispatch is on `section.content.kind` only: the content variant was chosen
when the document was loaded.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, NamedTuple, Optional

from cvcraft.contexts.rendering.document_data_structures import (
    ContentKind,
    EntriesContent,
    Entry,
    Frontmatter,
    Section,
    SectionContent,
)
from cvcraft.contexts.rendering.inline_formatter import escape_html
from cvcraft.contexts.rendering.logger import _log_debug
from cvcraft.contexts.rendering.registries import MarkupTemplateRegistry, get_default_registry
from cvcraft.contexts.rendering.url_sanitizer import sanitize_url
from cvcraft.contexts.styling.config_resolver import resolve_style_config

# None means one <p> per meta field
META_SEPARATORS = {
    "pipe": " | ",
    "dot": " · ",
    "newline": None,
}

TAG_STYLES = ("pill", "inline")

META_FIELDS = ("company", "date", "location")

# Paragraphs kept with the entry header when pagination groupings are on
START_PARAGRAPHS = 2


@dataclass
class RenderOptions:
    """
    Options shared by every section rendered in one pass.

    Attributes:
        pagination: Emit the keep-together entry groupings used for print
        class_prefix: Prepended to every class name ("" for preview, "pdf-" for export)
        meta_separator: Entry meta join style: "pipe", "dot" or "newline"
        tag_style: Skill rendering: "pill" tags or an "inline" run
        tag_separator: Separator for inline skills; "none" joins with a space
    """

    pagination: bool = False
    class_prefix: str = ""
    meta_separator: str = "pipe"
    tag_style: str = "pill"
    tag_separator: str = "·"


class EntryGroups(NamedTuple):
    """Description paragraphs of one entry split into keep-together groups."""

    start: List[str]
    middle: List[str]
    last: Optional[str]


def render_options_from_config(
    config: Optional[Dict[str, Any]] = None,
    pagination: bool = False,
    class_prefix: str = "",
) -> RenderOptions:
    """Build RenderOptions from the dateLine and tags components of a style config."""
    resolved = resolve_style_config(config)
    components = resolved.get("components", {})
    date_line = components.get("dateLine") or {}
    tags = components.get("tags") or {}
    return RenderOptions(
        pagination=pagination,
        class_prefix=class_prefix,
        meta_separator=date_line.get("metaSeparator") or "pipe",
        tag_style=tags.get("style") or "pill",
        tag_separator=tags.get("separator") or "·",
    )


def group_entry_paragraphs(entry: Entry) -> EntryGroups:
    """
    Split an entry's paragraphs for pagination.

    With bullets, the last paragraph is held back to bridge into the first
    bullet so a lead-in sentence is never stranded above a page break.
    """
    paragraphs = entry.paragraphs
    if entry.bullets and paragraphs:
        head, last = paragraphs[:-1], paragraphs[-1]
        return EntryGroups(head[:START_PARAGRAPHS], head[START_PARAGRAPHS:], last)
    return EntryGroups(paragraphs[:START_PARAGRAPHS], paragraphs[START_PARAGRAPHS:], None)


def _meta_fields(entry: Entry) -> List[tuple]:
    return [(name, getattr(entry, name)) for name in META_FIELDS if getattr(entry, name)]


def render_entry(entry: Entry, options: RenderOptions, registry: MarkupTemplateRegistry) -> str:
    context = {
        "p": options.class_prefix,
        "entry": entry,
        "meta": _meta_fields(entry),
        "separator": META_SEPARATORS.get(options.meta_separator, META_SEPARATORS["pipe"]),
    }
    if not options.pagination:
        return registry.render("entry.html", **context)

    groups = group_entry_paragraphs(entry)
    return registry.render(
        "entry_paginated.html",
        start=groups.start,
        middle=groups.middle,
        last=groups.last,
        **context,
    )


def _render_entries(content: EntriesContent, options: RenderOptions, registry: MarkupTemplateRegistry) -> str:
    return "\n".join(render_entry(entry, options, registry) for entry in content.entries)


def _render_skills(content, options: RenderOptions, registry: MarkupTemplateRegistry) -> str:
    separator = " " if options.tag_separator == "none" else f" {escape_html(options.tag_separator)} "
    return registry.render(
        "skills.html",
        p=options.class_prefix,
        groups=content.groups,
        tag_style=options.tag_style if options.tag_style in TAG_STYLES else "pill",
        separator=separator,
    )


def _render_text(content, options: RenderOptions, registry: MarkupTemplateRegistry) -> str:
    return registry.render("text.html", p=options.class_prefix, paragraphs=content.paragraphs)


def _render_list(content, options: RenderOptions, registry: MarkupTemplateRegistry) -> str:
    return registry.render("text.html", p=options.class_prefix, paragraphs=content.items)


CONTENT_RENDERERS = {
    ContentKind.ENTRIES: _render_entries,
    ContentKind.SKILLS: _render_skills,
    ContentKind.TEXT: _render_text,
    ContentKind.LIST: _render_list,
}


def render_content(content: SectionContent, options: RenderOptions, registry: MarkupTemplateRegistry) -> str:
    """Render the body of a section according to its content kind."""
    return CONTENT_RENDERERS[content.kind](content, options, registry)


def render_section(
    section: Section,
    options: Optional[RenderOptions] = None,
    registry: Optional[MarkupTemplateRegistry] = None,
) -> str:
    """
    Render one section.

    A break marker renders as the bare forced-break element. A content section
    flagged break_before gets the forced-break element in front of it.
    """
    options = options or RenderOptions()
    registry = registry or get_default_registry()
    p = options.class_prefix

    if section.is_break_marker:
        return registry.render("forced_break.html", p=p)

    html = registry.render(
        "section.html",
        p=p,
        section_type=section.type,
        title=section.title,
        body=render_content(section.content, options, registry),
    )
    if section.break_before:
        html = registry.render("forced_break.html", p=p) + "\n" + html
    return html


def render_sections(
    sections: List[Section],
    options: Optional[RenderOptions] = None,
    registry: Optional[MarkupTemplateRegistry] = None,
) -> str:
    """
    Render sections to one HTML fragment.

    Args:
        sections: Sections in document order
        options: Render options (defaults: no prefix, no pagination groupings)
        registry: Template registry (defaults to the shared registry)

    Returns:
        HTML fragment

    Example:
        >>> html = render_sections(document.sections, RenderOptions(class_prefix="pdf-"))
    """
    options = options or RenderOptions()
    registry = registry or get_default_registry()
    _log_debug(f"Rendering {len(sections)} sections (prefix={options.class_prefix!r}, pagination={options.pagination})")
    return "\n".join(render_section(section, options, registry) for section in sections)


def render_header(
    frontmatter: Frontmatter,
    class_prefix: str = "",
    registry: Optional[MarkupTemplateRegistry] = None,
) -> str:
    """
    Render the name/title/contact header used by the single-column layout.

    Only contact fields that are present are emitted. Link hrefs are sanitized.
    """
    registry = registry or get_default_registry()
    links = {
        "email": sanitize_url(f"mailto:{frontmatter.email}") if frontmatter.email else None,
        "linkedin": sanitize_url(frontmatter.linkedin) if frontmatter.linkedin else None,
        "github": sanitize_url(frontmatter.github) if frontmatter.github else None,
        "website": sanitize_url(frontmatter.website) if frontmatter.website else None,
    }
    return registry.render("header.html", p=class_prefix, fm=frontmatter, links=links)
