"""
Document Loader

Builds ParsedDocument objects from plain mappings or YAML files. This is the
one place where raw section content is classified into a content variant;
everything downstream switches on the resulting tag.

YAML shape:
    frontmatter:
      name: Jane Doe
      email: jane@example.com
    sections:
      - type: experience
        title: Experience
        content:
          - title: Staff Engineer
            company: Acme
            date: 2021 - Present
            bullets: [Led the platform team]
      - type: skills
        content:
          - "Languages: Python, Go"
      - break: true
"""

import re
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from omegaconf import OmegaConf

from cvcraft.contexts.rendering.document_data_structures import (
    ContentKind,
    EntriesContent,
    Entry,
    Frontmatter,
    ListContent,
    ParsedDocument,
    Section,
    SectionContent,
    SkillGroup,
    SkillsContent,
    TextContent,
    break_marker,
)
from cvcraft.contexts.rendering.logger import _log_debug
from cvcraft.exceptions import DocumentStructureError

ENTRY_SECTION_TYPES = {"experience", "education", "projects"}
SKILL_SECTION_TYPES = {"skills"}

# "**Category:** a, b" or "Category: a, b"
SKILL_LINE_PATTERN = re.compile(r"^\*{0,2}([^:*]+)\*{0,2}:\s*(.+)$")

FRONTMATTER_FIELDS = {f.name for f in fields(Frontmatter)} - {"extra"}


def parse_skill_line(text: str) -> Optional[SkillGroup]:
    """
    Parse "Category: skill1, skill2" into a SkillGroup.

    Bold markers around the category or skills are dropped. Returns None when
    the line has no category.
    """
    match = SKILL_LINE_PATTERN.match(text.strip())
    if not match:
        return None
    category = match.group(1).strip()
    skills = [s.replace("**", "").strip() for s in re.split(r",\s*", match.group(2).strip())]
    skills = [s for s in skills if s]
    if not category or not skills:
        return None
    return SkillGroup(category=category, skills=skills)


def split_paragraphs(text: str) -> List[str]:
    """Split text on blank lines, dropping empty blocks."""
    return [block.strip() for block in re.split(r"\n\s*\n", text or "") if block.strip()]


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def frontmatter_from_dict(data: Optional[Dict[str, Any]]) -> Frontmatter:
    """Known contact keys become fields; anything else lands in `extra`."""
    data = data or {}
    known = {key: _text(value) for key, value in data.items() if key in FRONTMATTER_FIELDS}
    extra = {key: value for key, value in data.items() if key not in FRONTMATTER_FIELDS}
    return Frontmatter(**known, extra=extra)


def _entry_from_item(item: Any) -> Entry:
    if not isinstance(item, dict):
        return Entry(description=_text(item))

    bullets = []
    for bullet in item.get("bullets") or []:
        text = bullet.get("text") if isinstance(bullet, dict) else bullet
        if _text(text):
            bullets.append(str(text).strip())

    return Entry(
        title=_text(item.get("title")),
        company=_text(item.get("company")),
        date=_text(item.get("date")),
        location=_text(item.get("location")),
        description=_text(item.get("description")),
        bullets=bullets,
    )


def _skill_groups_from_items(items: List[Any]) -> List[SkillGroup]:
    groups = []
    for item in items:
        if isinstance(item, dict) and item.get("category"):
            skills = [
                str(s.get("name") or s.get("text") or "") if isinstance(s, dict) else str(s)
                for s in item.get("skills") or []
            ]
            groups.append(SkillGroup(category=str(item["category"]), skills=[s for s in skills if s]))
            continue

        # Multi-line strings hold one skill line per line
        for line in str(item).split("\n"):
            if not line.strip():
                continue
            parsed = parse_skill_line(line)
            groups.append(parsed if parsed else SkillGroup(category=None, skills=[line.strip()]))
    return groups


def _classify(section_type: str, raw: Dict[str, Any], content: Any) -> ContentKind:
    explicit = raw.get("kind")
    if explicit:
        try:
            return ContentKind(explicit)
        except ValueError:
            raise DocumentStructureError(f"Unknown content kind '{explicit}'") from None

    if content is None or isinstance(content, str):
        return ContentKind.TEXT
    if not isinstance(content, list):
        raise DocumentStructureError(
            f"Section content must be text or a list, got {type(content).__name__}"
        )
    if section_type in SKILL_SECTION_TYPES or any(
        isinstance(item, dict) and "category" in item for item in content
    ):
        return ContentKind.SKILLS
    if section_type in ENTRY_SECTION_TYPES or any(isinstance(item, dict) for item in content):
        return ContentKind.ENTRIES
    return ContentKind.LIST


def content_from_raw(section_type: str, raw: Dict[str, Any]) -> SectionContent:
    """Pick the content variant for one raw section mapping."""
    content = raw.get("content")
    kind = _classify(section_type, raw, content)

    if kind is ContentKind.TEXT:
        if isinstance(content, list):
            return TextContent(paragraphs=[str(item).strip() for item in content if _text(item)])
        return TextContent(paragraphs=split_paragraphs(content or ""))
    if kind is ContentKind.SKILLS:
        return SkillsContent(groups=_skill_groups_from_items(content or []))
    if kind is ContentKind.ENTRIES:
        return EntriesContent(entries=[_entry_from_item(item) for item in content or []])
    return ListContent(items=[str(item).strip() for item in content or [] if _text(item)])


def section_from_dict(raw: Dict[str, Any]) -> Section:
    """
    Build a Section from a raw mapping.

    `break: true` (or `breakBefore: true`) with no title and no content is a
    break marker.
    """
    if not isinstance(raw, dict):
        raise DocumentStructureError(f"Section must be a mapping, got {type(raw).__name__}")

    break_before = bool(raw.get("break") or raw.get("breakBefore") or raw.get("break_before"))
    title = _text(raw.get("title"))

    if break_before and not title and raw.get("content") in (None, "", []):
        return break_marker()

    section_type = str(raw.get("type") or "paragraph").strip().lower()
    return Section(
        type=section_type,
        title=title,
        content=content_from_raw(section_type, raw),
        break_before=break_before,
    )


def document_from_dict(data: Dict[str, Any]) -> ParsedDocument:
    """
    Build a ParsedDocument from a mapping.

    Raises:
        DocumentStructureError: If data isn't a mapping, has no sections list,
            or contains a malformed section
    """
    if not isinstance(data, dict):
        raise DocumentStructureError(f"Document must be a mapping, got {type(data).__name__}")

    sections = data.get("sections")
    if not isinstance(sections, list):
        raise DocumentStructureError("Document must contain a 'sections' list")

    frontmatter = frontmatter_from_dict(data.get("frontmatter"))
    document = ParsedDocument(
        frontmatter=frontmatter,
        sections=[section_from_dict(raw) for raw in sections],
    )
    _log_debug(f"Loaded document with {len(document.sections)} sections")
    return document


def load_document(document_path: Path) -> ParsedDocument:
    """Load a YAML document file (see module docstring for the shape)."""
    data = OmegaConf.to_container(OmegaConf.load(document_path), resolve=True)
    return document_from_dict(data)
