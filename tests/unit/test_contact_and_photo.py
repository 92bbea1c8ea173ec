"""Unit tests for the contact block and profile photo renderers."""

import pytest

from cvcraft.contexts.rendering.contact_renderer import (
    CONTACT_ICONS,
    contact_items,
    render_contact_info,
    strip_protocol,
)
from cvcraft.contexts.rendering.document_data_structures import Frontmatter
from cvcraft.contexts.rendering.photo_renderer import choose_photo_src, render_profile_photo


@pytest.fixture
def frontmatter():
    return Frontmatter(
        name="Jane Doe",
        email="jane@example.com",
        phone="+1 555 0100",
        location="Berlin",
        website="https://janedoe.dev",
        github="https://github.com/janedoe",
    )


@pytest.mark.unit
def test_contact_items_in_display_order(frontmatter):
    items = contact_items(frontmatter)
    assert [item.display for item in items] == [
        "+1 555 0100",
        "jane@example.com",
        "github.com/janedoe",
        "janedoe.dev",
        "Berlin",
    ]


@pytest.mark.unit
def test_contact_links(frontmatter):
    items = {item.display: item for item in contact_items(frontmatter)}
    assert items["jane@example.com"].href == "mailto:jane@example.com"
    assert items["janedoe.dev"].href == "https://janedoe.dev"
    assert items["+1 555 0100"].href is None
    assert items["Berlin"].href is None


@pytest.mark.unit
def test_unsafe_profile_url_is_neutralized():
    items = contact_items(Frontmatter(linkedin="javascript:alert(1)"))
    assert items[0].href == "#"


@pytest.mark.unit
def test_render_contact_info_vertical_with_icons(frontmatter):
    html = render_contact_info(frontmatter)
    assert html.startswith('<div class="contact-info">')
    assert html.count('<div class="contact-item">') == 5
    assert CONTACT_ICONS["phone"] in html
    assert '<a href="mailto:jane@example.com" class="break-all">jane@example.com</a>' in html
    assert "<span>Berlin</span>" in html


@pytest.mark.unit
def test_render_contact_info_horizontal_without_icons(frontmatter):
    html = render_contact_info(frontmatter, class_prefix="pdf-", layout="horizontal", show_icons=False)
    assert html.startswith('<div class="pdf-contact-info pdf-horizontal">')
    assert "<svg" not in html


@pytest.mark.unit
def test_render_contact_info_not_linkable(frontmatter):
    html = render_contact_info(frontmatter, linkable=False)
    assert "<a " not in html
    assert "<span>https://janedoe.dev</span>" not in html
    assert "<span>janedoe.dev</span>" in html


@pytest.mark.unit
def test_render_contact_info_empty():
    assert render_contact_info(Frontmatter(name="Jane")) == ""


@pytest.mark.unit
def test_strip_protocol():
    assert strip_protocol("https://example.com/a") == "example.com/a"
    assert strip_protocol("http://example.com") == "example.com"
    assert strip_protocol("example.com") == "example.com"


@pytest.mark.unit
def test_choose_photo_src_prefers_resolved_url():
    assert choose_photo_src("https://cdn.example.com/a.jpg", "https://example.com/b.jpg") == "https://cdn.example.com/a.jpg"
    assert choose_photo_src(None, "https://example.com/b.jpg") == "https://example.com/b.jpg"
    assert choose_photo_src("  ", None) is None


@pytest.mark.unit
def test_choose_photo_src_skips_unsafe_sources():
    assert choose_photo_src("javascript:alert(1)", "https://example.com/b.jpg") == "https://example.com/b.jpg"
    assert choose_photo_src("javascript:alert(1)", None) is None


@pytest.mark.unit
def test_render_profile_photo():
    html = render_profile_photo("data:image/png;base64,AAAA", class_prefix="pdf-")
    assert '<img src="data:image/png;base64,AAAA" class="pdf-profile-photo" alt="Profile" />' in html


@pytest.mark.unit
def test_render_profile_photo_placeholder():
    html = render_profile_photo(None, None)
    assert '<div class="profile-photo-placeholder">Photo</div>' in html
    assert "<img" not in html
