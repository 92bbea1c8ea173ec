"""Unit tests for style config merging, legacy aliases and presets."""

import pytest

from cvcraft.contexts.styling.config_resolver import (
    apply_presets,
    load_style_config,
    load_style_presets,
    merge_style_config,
    normalize_style_config,
    resolve_style_config,
)
from cvcraft.contexts.styling.defaults import DEFAULT_STYLE_CONFIG, default_for, get_default_style_config
from cvcraft.exceptions import PresetNotFoundError, StyleConfigError


@pytest.mark.unit
def test_merge_is_shallow_per_group():
    """Omitted keys in a group keep their defaults."""
    merged = merge_style_config({"colors": {"primary": "#000000"}})
    assert merged["colors"]["primary"] == "#000000"
    assert merged["colors"]["secondary"] == DEFAULT_STYLE_CONFIG["colors"]["secondary"]
    assert merged["typography"] == DEFAULT_STYLE_CONFIG["typography"]


@pytest.mark.unit
def test_merge_replaces_nested_values_whole():
    merged = merge_style_config({"layout": {"pageMargin": {"top": "10mm"}}})
    assert merged["layout"]["pageMargin"] == {"top": "10mm"}
    assert merged["layout"]["sidebarWidth"] == "84mm"


@pytest.mark.unit
def test_merge_does_not_mutate_inputs():
    overrides = {"colors": {"primary": "#000000"}}
    merge_style_config(overrides)
    assert overrides == {"colors": {"primary": "#000000"}}
    assert DEFAULT_STYLE_CONFIG["colors"]["primary"] == "#2563eb"


@pytest.mark.unit
def test_merge_onto_custom_base():
    base = merge_style_config({"colors": {"primary": "#111111"}})
    merged = merge_style_config({"colors": {"secondary": "#222222"}}, base=base)
    assert merged["colors"]["primary"] == "#111111"
    assert merged["colors"]["secondary"] == "#222222"


@pytest.mark.unit
def test_merge_rejects_non_mapping_group():
    with pytest.raises(StyleConfigError):
        merge_style_config({"layout": "wide"})


@pytest.mark.unit
def test_normalize_maps_legacy_fields_once():
    config = {"colors": {"accent": "#ca8a04"}, "components": {"dateLine": {"color": "primary"}}}
    normalized = normalize_style_config(config)
    assert normalized["colors"]["tertiary"] == "#ca8a04"
    assert normalized["components"]["dateLine"]["colorKey"] == "primary"
    # Input untouched
    assert "tertiary" not in config["colors"]


@pytest.mark.unit
def test_current_field_wins_over_legacy():
    config = {"colors": {"accent": "#ca8a04", "tertiary": "#000000"}}
    assert normalize_style_config(config)["colors"]["tertiary"] == "#000000"


@pytest.mark.unit
def test_first_listed_legacy_field_wins():
    """dividerColor is listed before borderColor for sectionHeader.dividerColorKey."""
    config = {"components": {"sectionHeader": {"borderColor": "muted", "dividerColor": "secondary"}}}
    normalized = normalize_style_config(config)
    assert normalized["components"]["sectionHeader"]["dividerColorKey"] == "secondary"


@pytest.mark.unit
def test_resolve_normalizes_before_merge():
    """A legacy accent override beats the tertiary default."""
    resolved = resolve_style_config({"colors": {"accent": "#ca8a04"}})
    assert resolved["colors"]["tertiary"] == "#ca8a04"


@pytest.mark.unit
def test_defaults_copy_is_independent():
    config = get_default_style_config()
    config["colors"]["primary"] = "#000000"
    assert default_for("colors.primary") == "#2563eb"
    assert default_for("colors.text.primary") == "#0f172a"
    assert default_for("colors.nope") is None


@pytest.mark.unit
def test_load_style_presets_flattens_categories():
    presets = load_style_presets()
    assert "colors_forest" in presets
    assert "spacing_compact" in presets
    assert presets["colors_forest"]["colors"]["primary"] == "#15803d"


@pytest.mark.unit
def test_apply_presets_later_overrides_earlier():
    result = apply_presets({}, ["colors_ocean", "colors_forest"])
    assert result["colors"]["primary"] == "#15803d"
    # Untouched groups keep defaults
    assert result["typography"]["baseFontSize"] == "10pt"


@pytest.mark.unit
def test_apply_presets_keeps_config_values_outside_preset():
    result = apply_presets({"layout": {"sidebarWidth": "70mm"}}, ["colors_forest"])
    assert result["layout"]["sidebarWidth"] == "70mm"


@pytest.mark.unit
def test_unknown_preset_raises():
    with pytest.raises(PresetNotFoundError) as excinfo:
        apply_presets({}, ["colors_neon"])
    assert "colors_neon" in str(excinfo.value)
    assert "colors_forest" in excinfo.value.available


@pytest.mark.unit
def test_load_style_config_resolves_against_defaults(tmp_path):
    style_file = tmp_path / "style.yaml"
    style_file.write_text('colors:\n  accent: "#ca8a04"\nlayout:\n  sidebarWidth: 70mm\n')
    config = load_style_config(style_file)
    assert config["colors"]["tertiary"] == "#ca8a04"
    assert config["layout"]["sidebarWidth"] == "70mm"
    assert config["layout"]["pageWidth"] == "210mm"
