"""Unit tests for semantic color resolution."""

import pytest

from cvcraft.contexts.styling.color_resolver import (
    ColorPair,
    SemanticRole,
    apply_opacity,
    hex_to_rgba,
    resolve_color_pair,
    resolve_semantic_color,
)
from cvcraft.contexts.styling.defaults import DEFAULT_COLORS


@pytest.mark.unit
def test_full_opacity_returns_hex_unchanged():
    """Opacity 1.0 returns the configured hex as-is."""
    config = {"colors": {"primary": "#1a2b3c"}}
    assert resolve_semantic_color("primary", config, 1.0) == "#1a2b3c"


@pytest.mark.unit
def test_half_opacity_returns_rgba_of_hex_bytes():
    """Opacity 0.5 returns rgba with the parsed bytes and alpha 0.5."""
    config = {"colors": {"primary": "#1a2b3c"}}
    assert resolve_semantic_color("primary", config, 0.5) == "rgba(26, 43, 60, 0.5)"


@pytest.mark.unit
def test_missing_role_falls_back_to_default():
    """A role absent from the config resolves to the built-in default."""
    assert resolve_semantic_color("secondary", {}, 1.0) == DEFAULT_COLORS["secondary"]
    assert resolve_semantic_color("on-primary", None) == DEFAULT_COLORS["onPrimary"]


@pytest.mark.unit
def test_text_roles_read_nested_text_colors():
    config = {"colors": {"text": {"muted": "#999999"}}}
    assert resolve_semantic_color("text-muted", config) == "#999999"
    assert resolve_semantic_color("text-secondary", config) == DEFAULT_COLORS["text"]["secondary"]


@pytest.mark.unit
@pytest.mark.parametrize("role", [None, "", "no-such-role", 5, ["primary"]])
def test_absent_or_unknown_role_is_text_primary(role):
    """Absent or unknown roles resolve to the primary text color."""
    config = {"colors": {"text": {"primary": "#222222"}}}
    assert resolve_semantic_color(role, config) == "#222222"


@pytest.mark.unit
def test_legacy_accent_fills_tertiary():
    """colors.accent stands in for tertiary when tertiary isn't set."""
    assert resolve_semantic_color("tertiary", {"colors": {"accent": "#ca8a04"}}) == "#ca8a04"
    both = {"colors": {"accent": "#ca8a04", "tertiary": "#000000"}}
    assert resolve_semantic_color("tertiary", both) == "#000000"


@pytest.mark.unit
def test_literal_hex_role_passes_through_opacity():
    assert resolve_semantic_color("#ff0000", {}, 1.0) == "#ff0000"
    assert resolve_semantic_color("#ff0000", {}, 0.25) == "rgba(255, 0, 0, 0.25)"


@pytest.mark.unit
def test_enum_role_accepted():
    config = {"colors": {"muted": "#eeeeee"}}
    assert resolve_semantic_color(SemanticRole.MUTED, config) == "#eeeeee"


@pytest.mark.unit
def test_hex_to_rgba_expands_short_hex():
    assert hex_to_rgba("#f00", 0.5) == "rgba(255, 0, 0, 0.5)"
    assert hex_to_rgba("00ff00", 1) == "rgba(0, 255, 0, 1)"


@pytest.mark.unit
def test_non_hex_colors_cannot_be_blended():
    """Named and rgb() colors are returned unchanged."""
    assert hex_to_rgba("rebeccapurple", 0.5) == "rebeccapurple"
    assert apply_opacity("rgb(1, 2, 3)", 0.2) == "rgb(1, 2, 3)"


@pytest.mark.unit
def test_apply_opacity_none_is_full_opacity():
    assert apply_opacity("#123456", None) == "#123456"


@pytest.mark.unit
def test_color_pair_resolves_base_and_on_together():
    config = {"colors": {"custom2": "#111111", "onCustom2": "#eeeeee"}}
    assert resolve_color_pair("custom2", config) == ColorPair(base="#111111", on="#eeeeee")


@pytest.mark.unit
def test_unknown_color_pair_falls_back_to_tertiary():
    pair = resolve_color_pair("rainbow", {})
    assert pair.base == DEFAULT_COLORS["tertiary"]
    assert pair.on == DEFAULT_COLORS["onTertiary"]


@pytest.mark.unit
def test_non_string_pair_key_falls_back_to_tertiary():
    assert resolve_color_pair(7, {}) == resolve_color_pair("tertiary", {})
