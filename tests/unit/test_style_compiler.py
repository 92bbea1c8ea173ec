"""Unit tests for the style compiler."""

import pytest

from cvcraft.contexts.styling.style_compiler import (
    calculate_font_size,
    calculate_main_width,
    compile_style,
    expand_box_shorthand,
    font_families_for,
    generate_google_fonts_url,
    resolve_box,
)
from cvcraft.exceptions import StyleConfigError


@pytest.mark.unit
def test_title_font_size_from_points():
    tokens = compile_style({"typography": {"baseFontSize": "10pt", "fontScale": {"h1": 3.2}}})
    assert tokens["--title-font-size"] == "32.0pt"


@pytest.mark.unit
def test_title_font_size_from_pixels():
    tokens = compile_style({"typography": {"baseFontSize": "12px"}})
    assert tokens["--title-font-size"] == "38.4px"


@pytest.mark.unit
@pytest.mark.parametrize(
    "config",
    [
        None,
        {},
        {"colors": {}},
        {"colors": {"primary": "#000000"}},
        {"typography": {"baseFontSize": ""}},
        {"components": {"name": {"colorKey": "custom3", "shadow": "huge"}}},
        {"components": {"name": {"colorKey": 5}, "tags": {"colorPair": ["primary"]}}},
        {"layout": {"pageMargin": {"top": 0}}},
        {"pdf": {"pageNumbers": {"enabled": True}}},
    ],
)
def test_every_token_is_a_non_empty_string(config):
    """Partial configs still compile to a complete map of non-empty strings."""
    tokens = compile_style(config)
    assert tokens
    for name, value in tokens.items():
        assert isinstance(value, str), name
        assert value.strip(), name
        assert value not in ("None", "undefined"), name


@pytest.mark.unit
def test_token_map_is_read_only():
    tokens = compile_style()
    with pytest.raises(TypeError):
        tokens["--primary-color"] = "#000000"


@pytest.mark.unit
def test_identical_inputs_compile_identically():
    config = {"colors": {"primary": "#0d9488"}, "layout": {"sidebarWidth": "70mm"}}
    assert dict(compile_style(config)) == dict(compile_style(config))


@pytest.mark.unit
def test_main_width_numeric_and_calc():
    assert compile_style()["--main-width"] == "126mm"
    tokens = compile_style({"layout": {"sidebarWidth": "30%"}})
    assert tokens["--main-width"] == "calc(210mm - 30%)"
    assert calculate_main_width("210mm", "84mm") == "126mm"


@pytest.mark.unit
def test_margins_get_units():
    tokens = compile_style({"layout": {"pageMargin": {"top": 15, "bottom": "0"}}})
    assert tokens["--page-margin-top"] == "15mm"
    assert tokens["--page-margin-bottom"] == "0mm"
    assert tokens["--page-margin-left"] == "20mm"


@pytest.mark.unit
def test_calculate_font_size_keeps_unit():
    assert calculate_font_size(1.3, "10pt") == "13.0pt"
    assert calculate_font_size(2.0, "1rem") == "2.0rem"
    # Unparseable base falls back to 10pt
    assert calculate_font_size(2.0, "large") == "20.0pt"


@pytest.mark.unit
def test_tag_colors_blend_pair_with_opacity():
    config = {
        "colors": {"custom1": "#000000", "onCustom1": "#ffffff"},
        "components": {"tags": {"colorPair": "custom1", "backgroundOpacity": 0.5, "textOpacity": 1.0}},
    }
    tokens = compile_style(config)
    assert tokens["--tag-bg-color"] == "rgba(0, 0, 0, 0.5)"
    assert tokens["--tag-text-color"] == "#ffffff"


@pytest.mark.unit
def test_legacy_component_color_is_honoured():
    tokens = compile_style({"components": {"name": {"color": "primary"}}, "colors": {"primary": "#123456"}})
    assert tokens["--name-color"] == "#123456"


@pytest.mark.unit
def test_unknown_shadow_and_divider_map_to_none():
    tokens = compile_style({"components": {"sectionHeader": {"shadow": "huge", "dividerStyle": "zigzag"}}})
    assert tokens["--section-header-shadow"] == "none"
    assert tokens["--section-header-divider-style"] == "none"
    assert tokens["--section-header-divider-display"] == "none"


@pytest.mark.unit
def test_default_section_header_divider_is_displayed():
    tokens = compile_style()
    assert tokens["--section-header-divider-style"] == "underline"
    assert tokens["--section-header-divider-display"] == "block"


@pytest.mark.unit
def test_contact_separator_is_quoted():
    assert compile_style()["--contact-separator"] == '"·"'
    tokens = compile_style({"components": {"contactInfo": {"separator": "none"}}})
    assert tokens["--contact-separator"] == '""'


@pytest.mark.unit
def test_page_numbers_toggle():
    assert compile_style()["--page-number-display"] == "none"
    tokens = compile_style({"pdf": {"pageNumbers": {"enabled": True}}})
    assert tokens["--page-number-display"] == "block"


@pytest.mark.unit
def test_non_mapping_config_is_rejected():
    with pytest.raises(StyleConfigError):
        compile_style(["not", "a", "mapping"])
    with pytest.raises(StyleConfigError):
        compile_style({"colors": "blue"})


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [
        ("4px", ["4px", "4px", "4px", "4px"]),
        ("4px 8px", ["4px", "8px", "4px", "8px"]),
        ("1px 2px 3px", ["1px", "2px", "3px", "2px"]),
        ("1px 2px 3px 4px", ["1px", "2px", "3px", "4px"]),
    ],
)
def test_expand_box_shorthand(value, expected):
    assert expand_box_shorthand(value) == expected


@pytest.mark.unit
def test_box_fields_replace_defaults_as_a_whole():
    """Declaring one margin edge drops the other default edges to 0."""
    default_box = {"marginMode": "individual", "marginTop": "24px", "marginBottom": "12px"}
    box = resolve_box({"marginLeft": "5px"}, default_box, "margin")
    assert (box.top, box.right, box.bottom, box.left) == ("0", "0", "0", "5px")

    untouched = resolve_box({}, default_box, "margin")
    assert untouched.top == "24px"
    assert untouched.bottom == "12px"


@pytest.mark.unit
def test_legacy_padding_acts_as_uniform():
    box = resolve_box({"padding": "2px 4px"}, {}, "padding")
    assert box.shorthand == "2px 4px"
    assert box.right == "4px"


@pytest.mark.unit
def test_google_fonts_url():
    url = generate_google_fonts_url(["Open Sans", "Lora", "Open Sans"])
    assert url.startswith("https://fonts.googleapis.com/css2?family=Open+Sans:ital,wght@0,400;0,500;0,600;0,700;")
    assert "1,700&family=Lora:" in url
    assert url.count("Open+Sans") == 1
    assert url.endswith("&display=swap")
    assert generate_google_fonts_url([]) == ""


@pytest.mark.unit
def test_font_families_skip_system_fonts():
    assert font_families_for() == ["Inter"]
    config = {"typography": {"fontFamily": {"heading": "'Playfair Display', serif", "body": "Lato, sans-serif"}}}
    assert font_families_for(config) == ["Playfair Display", "Lato"]
