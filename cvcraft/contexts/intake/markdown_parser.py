"""
Markdown Parser

Parses CV markdown into a ParsedDocument for the live preview and the CLI.

Expected format:
    ---
    name: Jane Doe
    email: jane@example.com
    ---

    ## Experience

    ### Staff Engineer | Acme
    *Jan 2021 - Present*
    Berlin, Germany

    Led the platform team.

    - Cut deploy time in half

    ## Skills

    **Languages:** Python, Go

    <!-- break -->

Without front-matter, the name comes from the first H1 and the contact details
are searched for in the body. Full Markdown compliance is not a goal: only the
constructs above are recognised.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from omegaconf import DictConfig, OmegaConf

from cvcraft.contexts.intake.logger import _log_debug, _log_warning, log_parsed_document
from cvcraft.contexts.intake.markdown_patterns import (
    FALLBACK_SKILL_CATEGORY,
    STRUCTURED_SECTION_TYPES,
    ContactPatterns,
    DocumentPatterns,
    EntryPatterns,
    SkillPatterns,
    has_break_comment,
    infer_section_type,
    is_bullet,
    is_date_line,
    is_location_line,
    strip_break_comments,
    strip_bullet,
)
from cvcraft.contexts.rendering.document_data_structures import (
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
from cvcraft.contexts.rendering.document_loader import frontmatter_from_dict, split_paragraphs


# =============================================================================
# FRONT-MATTER AND CONTACT DETAILS
# =============================================================================


def _parse_frontmatter_lines(yaml_text: str) -> Dict[str, str]:
    """Line-by-line "key: value" reading, for blocks that aren't valid YAML."""
    data = {}
    for line in yaml_text.split("\n"):
        key, sep, value = line.partition(":")
        if sep and key.strip():
            data[key.strip()] = value.strip()
    return data


def parse_frontmatter_block(yaml_text: str) -> Dict[str, Any]:
    """
    Read a front-matter block.

    The block is parsed as YAML; if that fails, or doesn't produce a mapping,
    each "key: value" line is read on its own.
    """
    try:
        parsed = OmegaConf.create(yaml_text)
    except Exception as e:
        _log_warning(f"Front-matter is not valid YAML, reading it line by line: {e}")
        return _parse_frontmatter_lines(yaml_text)

    if not isinstance(parsed, DictConfig):
        return _parse_frontmatter_lines(yaml_text)
    return OmegaConf.to_container(parsed, resolve=False)


def _first_group(pattern: str, text: str, flags: int = 0) -> Optional[str]:
    match = re.search(pattern, text, flags)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def extract_contact_from_body(markdown: str) -> Frontmatter:
    """
    Pull name and contact details out of plain markdown.

    The name is the first H1; email, phone, location and photo are the first
    match of each pattern anywhere in the text.
    """
    email = re.search(ContactPatterns.EMAIL, markdown)
    return Frontmatter(
        name=_first_group(DocumentPatterns.H1, markdown, re.MULTILINE),
        email=email.group(0) if email else None,
        phone=_first_group(ContactPatterns.PHONE, markdown, re.IGNORECASE),
        location=_first_group(ContactPatterns.LOCATION, markdown, re.IGNORECASE),
        photo=_first_group(ContactPatterns.PHOTO, markdown),
    )


def split_frontmatter(text: str) -> Tuple[Optional[Dict[str, Any]], str]:
    """
    Separate the front-matter block from the body.

    Returns:
        (front-matter mapping or None, remaining markdown)
    """
    match = re.match(DocumentPatterns.FRONTMATTER, text)
    if not match:
        return None, text
    return parse_frontmatter_block(match.group(1)), text[match.end():]


# =============================================================================
# STRUCTURED ENTRIES
# =============================================================================


def _split_title_line(title_line: str) -> Tuple[str, Optional[str]]:
    for separator in (EntryPatterns.TITLE_PIPE, EntryPatterns.TITLE_AT):
        if separator in title_line:
            parts = title_line.split(separator)
            return parts[0].strip(), parts[1].strip() or None
    return title_line.strip(), None


def parse_entry_block(block: str) -> Optional[Entry]:
    """
    Parse the text following one "### " heading.

    The first non-empty line is the title (optionally "Title | Company" or
    "Title at Company"). Of the remaining lines: bullets are collected, the
    first short line with a year is the date, the first "City, Region" line is
    the location, and everything else is description. Blank lines separate
    description paragraphs.
    """
    lines = block.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        return None

    title, company = _split_title_line(lines[0])
    entry = Entry(title=title or None, company=company)

    paragraphs: List[List[str]] = [[]]
    for line in lines[1:]:
        trimmed = line.strip()
        if not trimmed:
            if paragraphs[-1]:
                paragraphs.append([])
            continue

        if is_bullet(trimmed):
            entry.bullets.append(strip_bullet(trimmed))
        elif entry.date is None and is_date_line(trimmed):
            entry.date = trimmed.replace("*", "").strip()
        elif entry.location is None and is_location_line(trimmed):
            entry.location = trimmed
        else:
            paragraphs[-1].append(trimmed)

    description = "\n\n".join(" ".join(paragraph) for paragraph in paragraphs if paragraph)
    entry.description = description or None
    return entry


def parse_structured_entries(content: str) -> List[Entry]:
    """Parse every "### " block of a section; text before the first one is ignored."""
    blocks = re.split(DocumentPatterns.ENTRY_SPLIT, content, flags=re.MULTILINE)[1:]
    entries = [parse_entry_block(block) for block in blocks]
    return [entry for entry in entries if entry is not None]


# =============================================================================
# SKILLS
# =============================================================================


def _split_skills(text: str) -> List[str]:
    skills = [s.strip().replace("**", "").strip() for s in text.split(",")]
    return [s for s in skills if s]


def parse_skills(content: str) -> List[SkillGroup]:
    """
    Parse a skills section into categories.

    Recognised lines:
        **Category:** a, b        (skills inline)
        **Category**              (skills on the next line)
        Category: a, b

    If nothing categorised is found, every line becomes a skill of a single
    "Skills" group.
    """
    lines = [strip_bullet(line) for line in content.split("\n") if line.strip()]
    groups: List[SkillGroup] = []

    i = 0
    while i < len(lines):
        line = lines[i]

        bold = re.match(SkillPatterns.BOLD_CATEGORY, line)
        if bold:
            category = bold.group(1).strip().rstrip(":").strip()
            skills_text = bold.group(2).strip()
            if not skills_text and i + 1 < len(lines) and not re.match(SkillPatterns.BOLD_CATEGORY, lines[i + 1]):
                i += 1
                skills_text = lines[i]
            if skills_text:
                groups.append(SkillGroup(category=category, skills=_split_skills(skills_text)))
            i += 1
            continue

        plain = re.match(SkillPatterns.PLAIN_CATEGORY, line)
        if plain:
            category = plain.group(1).strip().replace("**", "").strip()
            skills = _split_skills(plain.group(2))
            if category and skills:
                groups.append(SkillGroup(category=category, skills=skills))
        i += 1

    if groups:
        return groups
    return [SkillGroup(category=FALLBACK_SKILL_CATEGORY, skills=lines)]


# =============================================================================
# SECTIONS
# =============================================================================


def parse_section_content(section_type: str, content: str) -> SectionContent:
    """Choose and build the content variant for one section body."""
    if section_type in STRUCTURED_SECTION_TYPES:
        entries = parse_structured_entries(content)
        if entries:
            return EntriesContent(entries=entries)
        _log_debug(f"No ### entries in {section_type} section, keeping it as text")
        return TextContent(paragraphs=split_paragraphs(content))

    if section_type == "skills":
        return SkillsContent(groups=parse_skills(content))

    lines = [line.strip() for line in content.split("\n") if line.strip()]
    if lines and all(is_bullet(line) for line in lines):
        return ListContent(items=[strip_bullet(line) for line in lines])
    return TextContent(paragraphs=split_paragraphs(content))


def parse_sections(markdown: str) -> List[Section]:
    """
    Split the body on "## " headings and parse each section.

    A section needs both a heading and some content. A break comment anywhere
    in a section appends a break marker after it, even if the section itself
    was dropped.
    """
    sections: List[Section] = []
    for section_text in re.split(DocumentPatterns.SECTION_SPLIT, markdown, flags=re.MULTILINE)[1:]:
        has_break = has_break_comment(section_text)
        lines = strip_break_comments(section_text).split("\n")
        title = lines[0].strip()
        content = "\n".join(lines[1:]).strip()

        if title and content:
            section_type = infer_section_type(title)
            sections.append(
                Section(
                    type=section_type,
                    title=title,
                    content=parse_section_content(section_type, content),
                )
            )

        if has_break:
            sections.append(break_marker())
    return sections


def parse_markdown_content(text: str) -> ParsedDocument:
    """
    Parse CV markdown into front-matter and sections.

    Args:
        text: Full markdown source

    Returns:
        ParsedDocument; never raises for any string input

    Example:
        >>> document = parse_markdown_content(Path("cv.md").read_text())
        >>> [s.type for s in document.sections]
        ['summary', 'experience', 'skills']
    """
    text = (text or "").replace("\r\n", "\n")
    frontmatter_data, body = split_frontmatter(text)

    if frontmatter_data is not None:
        frontmatter = frontmatter_from_dict(frontmatter_data)
    else:
        frontmatter = extract_contact_from_body(body)

    document = ParsedDocument(frontmatter=frontmatter, sections=parse_sections(body))
    log_parsed_document(
        frontmatter.name,
        [section.type for section in document.sections],
        used_frontmatter=frontmatter_data is not None,
    )
    return document


def load_markdown_document(document_path: Path) -> ParsedDocument:
    """Read and parse a CV markdown file."""
    return parse_markdown_content(Path(document_path).read_text(encoding="utf-8"))
