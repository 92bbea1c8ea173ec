"""
Document Data Structures

Defines data classes for parsed CV documents: front-matter, sections, and the
tagged union of section content variants. The content variant is decided once
when a document is loaded; renderers and estimators dispatch on `content.kind`
and never inspect raw values.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union


class ContentKind(str, Enum):
    TEXT = "text"
    LIST = "list"
    SKILLS = "skills"
    ENTRIES = "entries"


@dataclass
class Frontmatter:
    """
    Name and contact block of a CV.

    Attributes:
        name: Full name
        title: Professional title shown under the name
        email, phone, location, website, linkedin, github: Contact fields
        photo: Photo URL given in the source document
        extra: Any other front-matter keys, kept verbatim
    """

    name: Optional[str] = None
    title: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    photo: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class TextContent:
    """Plain text, one entry per blank-line-delimited paragraph."""

    paragraphs: List[str] = field(default_factory=list)
    kind: ClassVar[ContentKind] = ContentKind.TEXT

    @property
    def is_empty(self) -> bool:
        return not any(p.strip() for p in self.paragraphs)


@dataclass
class ListContent:
    """Flat list of strings (languages, interests, ...)."""

    items: List[str] = field(default_factory=list)
    kind: ClassVar[ContentKind] = ContentKind.LIST

    @property
    def is_empty(self) -> bool:
        return not self.items


@dataclass
class SkillGroup:
    """
    Skills under one category label.

    Attributes:
        category: Category label; None for uncategorized skills
        skills: Skill names in display order
    """

    category: Optional[str]
    skills: List[str] = field(default_factory=list)


@dataclass
class SkillsContent:
    groups: List[SkillGroup] = field(default_factory=list)
    kind: ClassVar[ContentKind] = ContentKind.SKILLS

    @property
    def is_empty(self) -> bool:
        return not self.groups


@dataclass
class Entry:
    """
    Structured entry (job, degree, project).

    Attributes:
        title: Role, degree or project name
        company: Organization
        date: Free-form date range
        location: Free-form location
        description: Free text; blank lines separate paragraphs
        bullets: Achievement bullets
    """

    title: Optional[str] = None
    company: Optional[str] = None
    date: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    bullets: List[str] = field(default_factory=list)

    @property
    def paragraphs(self) -> List[str]:
        if not self.description:
            return []
        return [p.strip() for p in self.description.split("\n\n") if p.strip()]


@dataclass
class EntriesContent:
    entries: List[Entry] = field(default_factory=list)
    kind: ClassVar[ContentKind] = ContentKind.ENTRIES

    @property
    def is_empty(self) -> bool:
        return not self.entries


SectionContent = Union[TextContent, ListContent, SkillsContent, EntriesContent]


@dataclass
class Section:
    """
    One titled (or break-only) block of document content.

    Attributes:
        type: Type tag (experience, skills, summary, ...)
        title: Heading text
        content: Content variant
        break_before: Force a page boundary before this section
    """

    type: str
    title: Optional[str] = None
    content: SectionContent = field(default_factory=TextContent)
    break_before: bool = False

    @property
    def is_break_marker(self) -> bool:
        """A content-less section whose only purpose is forcing a page boundary."""
        return self.break_before and not self.title and self.content.is_empty


def break_marker() -> Section:
    """Create a break marker section."""
    return Section(type="break", break_before=True)


@dataclass
class ParsedDocument:
    """
    Front-matter plus ordered sections.

    Attributes:
        frontmatter: Name and contact fields
        sections: Sections in document order
    """

    frontmatter: Frontmatter = field(default_factory=Frontmatter)
    sections: List[Section] = field(default_factory=list)
