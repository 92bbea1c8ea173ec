"""Unit tests for building documents from mappings and YAML files."""

import pytest
from pathlib import Path

from cvcraft.contexts.rendering.document_data_structures import ContentKind, SkillGroup
from cvcraft.contexts.rendering.document_loader import (
    content_from_raw,
    document_from_dict,
    load_document,
    parse_skill_line,
    section_from_dict,
    split_paragraphs,
)
from cvcraft.exceptions import DocumentStructureError

FIXTURES = Path(__file__).parent.parent / "fixtures"


@pytest.mark.unit
@pytest.mark.parametrize(
    "line, expected",
    [
        ("Languages: Python, Go", SkillGroup("Languages", ["Python", "Go"])),
        ("**Languages:** Python, Go", SkillGroup("Languages", ["Python", "Go"])),
        ("**Languages**: Python", SkillGroup("Languages", ["Python"])),
        ("Tools: Docker,, Make", SkillGroup("Tools", ["Docker", "Make"])),
    ],
)
def test_parse_skill_line(line, expected):
    assert parse_skill_line(line) == expected


@pytest.mark.unit
def test_parse_skill_line_without_category():
    assert parse_skill_line("Python") is None
    assert parse_skill_line("Tools:") is None


@pytest.mark.unit
def test_split_paragraphs():
    assert split_paragraphs("One\n\n  \n\nTwo\nstill two") == ["One", "Two\nstill two"]
    assert split_paragraphs(None) == []


@pytest.mark.unit
def test_classification():
    assert content_from_raw("summary", {"content": "Hello"}).kind is ContentKind.TEXT
    assert content_from_raw("summary", {}).kind is ContentKind.TEXT
    assert content_from_raw("skills", {"content": ["Languages: Python"]}).kind is ContentKind.SKILLS
    assert content_from_raw("paragraph", {"content": [{"category": "Tools", "skills": ["Make"]}]}).kind is ContentKind.SKILLS
    assert content_from_raw("experience", {"content": ["Freelance"]}).kind is ContentKind.ENTRIES
    assert content_from_raw("awards", {"content": [{"title": "Best paper"}]}).kind is ContentKind.ENTRIES
    assert content_from_raw("languages", {"content": ["English"]}).kind is ContentKind.LIST


@pytest.mark.unit
def test_explicit_kind_wins():
    content = content_from_raw("skills", {"kind": "list", "content": ["Python", "Go"]})
    assert content.kind is ContentKind.LIST
    assert content.items == ["Python", "Go"]


@pytest.mark.unit
def test_unknown_kind_raises():
    with pytest.raises(DocumentStructureError, match="Unknown content kind"):
        content_from_raw("summary", {"kind": "table", "content": []})


@pytest.mark.unit
def test_mapping_content_raises():
    with pytest.raises(DocumentStructureError):
        content_from_raw("summary", {"content": {"a": 1}})


@pytest.mark.unit
def test_uncategorised_skill_lines():
    content = content_from_raw("skills", {"content": ["Public speaking\nLanguages: Python"]})
    assert content.groups == [
        SkillGroup(None, ["Public speaking"]),
        SkillGroup("Languages", ["Python"]),
    ]


@pytest.mark.unit
def test_entry_bullets_accept_mappings():
    content = content_from_raw("projects", {"content": [{"title": "cvcraft", "bullets": [{"text": "Renderer"}, "CLI", ""]}]})
    assert content.entries[0].bullets == ["Renderer", "CLI"]


@pytest.mark.unit
def test_break_marker_section():
    assert section_from_dict({"break": True}).is_break_marker
    assert section_from_dict({"breakBefore": True, "content": []}).is_break_marker


@pytest.mark.unit
def test_break_before_titled_section():
    section = section_from_dict({"type": "Projects", "title": "Projects", "break": True, "content": ["x"]})
    assert section.break_before
    assert not section.is_break_marker
    assert section.type == "projects"


@pytest.mark.unit
def test_section_defaults_to_paragraph():
    assert section_from_dict({"title": "Notes", "content": "Hi"}).type == "paragraph"


@pytest.mark.unit
def test_invalid_documents():
    with pytest.raises(DocumentStructureError):
        document_from_dict(["not", "a", "mapping"])
    with pytest.raises(DocumentStructureError, match="sections"):
        document_from_dict({"frontmatter": {"name": "Jane"}})
    with pytest.raises(DocumentStructureError, match="Section must be a mapping"):
        document_from_dict({"sections": ["summary"]})


@pytest.mark.unit
def test_load_document_fixture():
    document = load_document(FIXTURES / "sample_cv.yaml")

    assert document.frontmatter.name == "Jane Doe"
    assert document.frontmatter.photo == "https://example.com/jane.jpg"
    assert [s.type for s in document.sections] == ["summary", "experience", "break", "skills", "languages"]

    entry = document.sections[1].content.entries[0]
    assert entry.company == "Acme Corp"
    assert len(entry.paragraphs) == 3
    assert document.sections[3].content.groups == [
        SkillGroup("Languages", ["Python", "Go"]),
        SkillGroup("Tools", ["Docker", "Kubernetes"]),
    ]
    assert document.sections[4].content.items == ["English", "German"]
