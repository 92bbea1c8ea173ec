"""
Pattern matching for CV markdown intake.

Regex patterns and helper functions used by the markdown parser to find the
front-matter block, split sections and entries, and pick out contact details,
dates, locations, bullets and skill categories.

Pattern classes are frozen dataclasses with class-level constants; the helper
functions below are the only callers that compile them.
"""

import re
from dataclasses import dataclass

# =============================================================================
# DOCUMENT STRUCTURE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class DocumentPatterns:
    """
    Regex patterns for the overall layout of a CV markdown file.

    A file is optional YAML front-matter, then ## sections, each holding
    ### entries (structured sections) or free text and bullets.
    """

    # --- fenced block at the very start of the file
    FRONTMATTER: str = r"^---\n([\s\S]*?)\n---"

    # Top-level name heading (plain markdown without front-matter)
    H1: str = r"^#\s+(.+)$"

    # Section and entry headings; "##" alone never matches "###"
    SECTION_SPLIT: str = r"^##\s+"
    ENTRY_SPLIT: str = r"^###\s+"

    # <!-- break --> forces a page boundary after the section
    BREAK_COMMENT: str = r"<!--\s*break\s*-->"


# =============================================================================
# CONTACT PATTERNS (plain markdown only)
# =============================================================================


@dataclass(frozen=True)
class ContactPatterns:
    """Patterns for contact details written in the body instead of front-matter."""

    EMAIL: str = r"[\w.-]+@[\w.-]+\.\w+"

    # "📱 +1 555 0100", "Phone: +1 555 0100", "**Phone:** +1 555 0100"
    PHONE: str = r"(?:📱|phone)[\s*]*:?[ \t*]*([+\d][+\d \t\-().]*)"

    # "📍 Berlin", "Location: Berlin" (stops at the first comma)
    LOCATION: str = r"(?:📍|location)[\s*]*:?[ \t*]*([^,\n]+)"

    # ![Profile](url) or ![photo of me](url)
    PHOTO: str = r"!\[(?:Profile|Photo|profile|photo)[^\]]*\]\(([^)]+)\)"


# =============================================================================
# ENTRY PATTERNS
# =============================================================================


@dataclass(frozen=True)
class EntryPatterns:
    """Patterns for the lines of one ### entry block."""

    # Any four-digit year, e.g. "*Jan 2020 - Present*"
    YEAR: str = r"\d{4}"

    # "- item" or "* item"; "*italic*" is not a bullet
    BULLET: str = r"^[-*]\s+"

    # "City, State" or "City, Country"
    LOCATION: str = r"^[A-Z][\w\s]+,\s*[A-Z][\w\s]*$"

    # "Title | Company" or "Title at Company"
    TITLE_PIPE: str = "|"
    TITLE_AT: str = " at "


# Date and location lines are short; longer lines are description
MAX_DATE_LINE_LENGTH = 60
MAX_LOCATION_LENGTH = 50


# =============================================================================
# SKILL PATTERNS
# =============================================================================


@dataclass(frozen=True)
class SkillPatterns:
    """Patterns for lines of a skills section."""

    # **Category** skills / **Category:** skills / **Category**: skills
    BOLD_CATEGORY: str = r"^\*\*([^*]+)\*\*:?\s*(.*)$"

    # Category: skills
    PLAIN_CATEGORY: str = r"^([^:]+):\s*(.*)$"


FALLBACK_SKILL_CATEGORY = "Skills"

# =============================================================================
# SECTION TYPE KEYWORDS
# =============================================================================

# Checked in order; the first keyword found anywhere in the lowercased title wins
SECTION_TYPE_KEYWORDS = (
    ("experience", ("experience", "work")),
    ("education", ("education",)),
    ("skills", ("skill",)),
    ("projects", ("project",)),
    ("languages", ("language",)),
    ("certifications", ("certification",)),
    ("interests", ("interest", "hobbies")),
    ("references", ("reference",)),
    ("summary", ("summary", "about")),
)

DEFAULT_SECTION_TYPE = "paragraph"

# Section types whose content is a sequence of ### entries
STRUCTURED_SECTION_TYPES = ("experience", "education", "projects")


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def infer_section_type(title: str) -> str:
    """
    Infer the section type tag from its heading.

    Args:
        title: Section heading text

    Returns:
        Type tag, or "paragraph" if no keyword matches

    Example:
        >>> infer_section_type("Work History")
        'experience'
    """
    lowered = (title or "").lower()
    for section_type, keywords in SECTION_TYPE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return section_type
    return DEFAULT_SECTION_TYPE


def is_bullet(line: str) -> bool:
    return re.match(EntryPatterns.BULLET, line.strip()) is not None


def strip_bullet(line: str) -> str:
    """Remove a leading "- " or "* " marker."""
    return re.sub(EntryPatterns.BULLET, "", line.strip())


def is_date_line(line: str) -> bool:
    """True for a short line containing a four-digit year."""
    return len(line) < MAX_DATE_LINE_LENGTH and re.search(EntryPatterns.YEAR, line) is not None


def is_location_line(line: str) -> bool:
    return len(line) < MAX_LOCATION_LENGTH and re.match(EntryPatterns.LOCATION, line) is not None


def has_break_comment(text: str) -> bool:
    return re.search(DocumentPatterns.BREAK_COMMENT, text, re.IGNORECASE) is not None


def strip_break_comments(text: str) -> str:
    return re.sub(DocumentPatterns.BREAK_COMMENT, "", text, flags=re.IGNORECASE)
