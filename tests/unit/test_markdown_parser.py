"""Unit tests for the CV markdown parser."""

import pytest
from pathlib import Path

from cvcraft.contexts.intake.markdown_parser import (
    extract_contact_from_body,
    load_markdown_document,
    parse_entry_block,
    parse_frontmatter_block,
    parse_markdown_content,
    parse_sections,
    parse_skills,
)
from cvcraft.contexts.intake.markdown_patterns import infer_section_type, is_date_line, is_location_line
from cvcraft.contexts.rendering.document_data_structures import (
    ContentKind,
    SkillGroup,
)

FIXTURES = Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def sample_document():
    return load_markdown_document(FIXTURES / "sample_cv.md")


# =============================================================================
# FRONT-MATTER AND CONTACT DETAILS
# =============================================================================


@pytest.mark.unit
def test_frontmatter_fields(sample_document):
    fm = sample_document.frontmatter
    assert fm.name == "Jane Doe"
    assert fm.title == "Staff Engineer"
    assert fm.email == "jane@example.com"
    assert fm.phone == "+1 555 0100"
    assert fm.location == "Berlin, Germany"
    assert fm.github == "https://github.com/janedoe"


@pytest.mark.unit
def test_unknown_frontmatter_keys_kept_as_extra():
    document = parse_markdown_content("---\nname: Jane\npronouns: she/her\n---\n")
    assert document.frontmatter.name == "Jane"
    assert document.frontmatter.extra == {"pronouns": "she/her"}


@pytest.mark.unit
def test_invalid_yaml_frontmatter_read_line_by_line():
    data = parse_frontmatter_block("name: Jane Doe\nemail: jane@example.com\nskills: [unclosed")
    assert data["name"] == "Jane Doe"
    assert data["email"] == "jane@example.com"
    assert data["skills"] == "[unclosed"


@pytest.mark.unit
def test_contact_details_from_plain_body():
    body = (
        "# John Smith\n\n"
        "📧 john@example.com | **Phone:** +44 20 7946 0958\n"
        "📍 London, UK\n\n"
        "![Profile](https://example.com/me.png)\n\n"
        "## Summary\n\nHello.\n"
    )
    document = parse_markdown_content(body)
    fm = document.frontmatter

    assert fm.name == "John Smith"
    assert fm.email == "john@example.com"
    assert fm.phone == "+44 20 7946 0958"
    assert fm.location == "London"
    assert fm.photo == "https://example.com/me.png"
    assert [s.type for s in document.sections] == ["summary"]


@pytest.mark.unit
def test_contact_details_absent():
    fm = extract_contact_from_body("Just some text.")
    assert fm.name is None
    assert fm.email is None
    assert fm.phone is None


# =============================================================================
# SECTIONS
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "title, expected",
    [
        ("Work History", "experience"),
        ("Professional Experience", "experience"),
        ("Education", "education"),
        ("Technical Skills", "skills"),
        ("Side Projects", "projects"),
        ("Languages", "languages"),
        ("Certifications", "certifications"),
        ("Hobbies", "interests"),
        ("References", "references"),
        ("About Me", "summary"),
        ("Publications", "paragraph"),
    ],
)
def test_infer_section_type(title, expected):
    assert infer_section_type(title) == expected


@pytest.mark.unit
def test_sample_section_order(sample_document):
    assert [s.type for s in sample_document.sections] == [
        "summary",
        "experience",
        "break",
        "education",
        "skills",
        "languages",
        "interests",
    ]
    assert sample_document.sections[2].is_break_marker


@pytest.mark.unit
def test_text_section_paragraphs(sample_document):
    summary = sample_document.sections[0]
    assert summary.title == "Summary"
    assert summary.content.kind is ContentKind.TEXT
    assert summary.content.paragraphs == [
        "Platform engineer with **ten years** of experience.",
        "Enjoys building *reliable* systems.",
    ]


@pytest.mark.unit
def test_bullet_only_section_is_list(sample_document):
    languages = sample_document.sections[5]
    assert languages.content.kind is ContentKind.LIST
    assert languages.content.items == ["English", "German"]


@pytest.mark.unit
def test_sections_without_content_are_dropped():
    sections = parse_sections("## Empty\n\n## Summary\nHello\n")
    assert [s.title for s in sections] == ["Summary"]


@pytest.mark.unit
def test_break_in_dropped_section_still_emits_marker():
    sections = parse_sections("## Empty\n<!-- break -->\n## Next\nHello\n")
    assert sections[0].is_break_marker
    assert sections[1].title == "Next"


@pytest.mark.unit
def test_structured_section_without_entries_is_text():
    sections = parse_sections("## Experience\nTen years of building things.\n")
    assert sections[0].type == "experience"
    assert sections[0].content.kind is ContentKind.TEXT


@pytest.mark.unit
def test_crlf_line_endings():
    document = parse_markdown_content("---\r\nname: Jane\r\n---\r\n## Summary\r\nHello\r\n")
    assert document.frontmatter.name == "Jane"
    assert document.sections[0].content.paragraphs == ["Hello"]


@pytest.mark.unit
def test_empty_input():
    document = parse_markdown_content("")
    assert document.sections == []
    assert document.frontmatter.name is None


# =============================================================================
# ENTRIES
# =============================================================================


@pytest.mark.unit
def test_entry_with_pipe_title(sample_document):
    entry = sample_document.sections[1].content.entries[0]
    assert entry.title == "Staff Engineer"
    assert entry.company == "Acme Corp"
    assert entry.date == "Jan 2021 - Present"
    assert entry.location == "Berlin, Germany"
    assert entry.paragraphs == ["Leads the platform team.", "Owns the deploy pipeline."]
    assert entry.bullets == ["Cut deploy time in half", "Mentored 6 engineers"]


@pytest.mark.unit
def test_entry_with_at_title(sample_document):
    entry = sample_document.sections[1].content.entries[1]
    assert entry.title == "Engineer"
    assert entry.company == "Initech"
    assert entry.date == "2017 - 2020"
    assert entry.location is None
    assert entry.description is None
    assert entry.bullets == ["Built the billing service"]


@pytest.mark.unit
def test_entry_title_only():
    entry = parse_entry_block("Freelance\n")
    assert entry.title == "Freelance"
    assert entry.company is None
    assert entry.bullets == []


@pytest.mark.unit
def test_empty_entry_block():
    assert parse_entry_block("\n\n") is None


@pytest.mark.unit
def test_long_line_with_year_is_description():
    entry = parse_entry_block(
        "Engineer\n2019 - 2021\nIn 2020 the team shipped the new billing platform to every region we serve.\n"
    )
    assert entry.date == "2019 - 2021"
    assert entry.description.startswith("In 2020")


@pytest.mark.unit
def test_date_and_location_lines():
    assert is_date_line("*Jan 2020 - Present*")
    assert not is_date_line("Present")
    assert is_location_line("Berlin, Germany")
    assert not is_location_line("led the team, shipped things")


# =============================================================================
# SKILLS
# =============================================================================


@pytest.mark.unit
def test_sample_skills(sample_document):
    skills = sample_document.sections[4]
    assert skills.content.groups == [
        SkillGroup("Languages", ["Python", "Go", "SQL"]),
        SkillGroup("Tools", ["Docker", "Kubernetes"]),
    ]


@pytest.mark.unit
def test_plain_category_skills():
    assert parse_skills("Frameworks: Django, FastAPI") == [SkillGroup("Frameworks", ["Django", "FastAPI"])]


@pytest.mark.unit
def test_bold_category_followed_by_bold_category():
    groups = parse_skills("**Cloud**\n**Languages:** Python")
    assert groups == [SkillGroup("Languages", ["Python"])]


@pytest.mark.unit
def test_uncategorised_skills_fall_back_to_one_group():
    groups = parse_skills("- Python\n- Go\n")
    assert groups == [SkillGroup("Skills", ["Python", "Go"])]
