"""
Semantic color resolution.

Maps semantic color roles ("primary", "on-primary", "text-muted", ...) to the
concrete colors of a style config, with opacity blending. Every lookup follows
the same chain: explicit config value -> legacy field -> built-in default, so a
role never resolves to an empty value.
"""

import re
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional, Tuple

from cvcraft.contexts.styling.defaults import DEFAULT_COLORS
from cvcraft.utils.css_units import format_number

HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class SemanticRole(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    TERTIARY = "tertiary"
    MUTED = "muted"
    ON_PRIMARY = "on-primary"
    ON_SECONDARY = "on-secondary"
    ON_TERTIARY = "on-tertiary"
    ON_MUTED = "on-muted"
    TEXT_PRIMARY = "text-primary"
    TEXT_SECONDARY = "text-secondary"
    TEXT_MUTED = "text-muted"
    CUSTOM1 = "custom1"
    CUSTOM2 = "custom2"
    CUSTOM3 = "custom3"
    CUSTOM4 = "custom4"
    ON_CUSTOM1 = "on-custom1"
    ON_CUSTOM2 = "on-custom2"
    ON_CUSTOM3 = "on-custom3"
    ON_CUSTOM4 = "on-custom4"


# role -> (config path under colors, legacy paths...)
ROLE_LOOKUP: Dict[str, Tuple[str, ...]] = {
    "primary": ("primary",),
    "secondary": ("secondary",),
    "tertiary": ("tertiary", "accent"),
    "muted": ("muted",),
    "on-primary": ("onPrimary",),
    "on-secondary": ("onSecondary",),
    "on-tertiary": ("onTertiary",),
    "on-muted": ("onMuted",),
    "text-primary": ("text.primary",),
    "text-secondary": ("text.secondary",),
    "text-muted": ("text.muted",),
    "custom1": ("custom1",),
    "custom2": ("custom2",),
    "custom3": ("custom3",),
    "custom4": ("custom4",),
    "on-custom1": ("onCustom1",),
    "on-custom2": ("onCustom2",),
    "on-custom3": ("onCustom3",),
    "on-custom4": ("onCustom4",),
}

# pair -> (base role, on role)
COLOR_PAIRS = {
    "primary": ("primary", "on-primary"),
    "secondary": ("secondary", "on-secondary"),
    "tertiary": ("tertiary", "on-tertiary"),
    "muted": ("muted", "on-muted"),
    "custom1": ("custom1", "on-custom1"),
    "custom2": ("custom2", "on-custom2"),
    "custom3": ("custom3", "on-custom3"),
    "custom4": ("custom4", "on-custom4"),
}

DEFAULT_PAIR = "tertiary"


class ColorPair(NamedTuple):
    """A background color and the text color that stays legible on it."""

    base: str
    on: str


def _colors_of(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not isinstance(config, dict):
        return {}
    colors = config.get("colors")
    return colors if isinstance(colors, dict) else {}


def _lookup(colors: Dict[str, Any], path: str) -> Optional[str]:
    node: Any = colors
    for key in path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    if isinstance(node, str) and node.strip():
        return node.strip()
    return None


def _resolve_role(role: str, colors: Dict[str, Any]) -> Optional[str]:
    paths = ROLE_LOOKUP.get(role)
    if paths is None:
        return None
    for path in paths:
        value = _lookup(colors, path)
        if value:
            return value
    return _lookup(DEFAULT_COLORS, paths[0])


def _text_primary(colors: Dict[str, Any]) -> str:
    return _lookup(colors, "text.primary") or DEFAULT_COLORS["text"]["primary"]


def hex_to_rgba(hex_color: str, opacity: float) -> str:
    """
    Convert a hex color to an rgba() string.

    Args:
        hex_color: '#rrggbb' or '#rgb' (leading '#' optional)
        opacity: Alpha channel, 0-1

    Returns:
        "rgba(r, g, b, a)". Colors that aren't hex (named colors, rgb()) can't
        be blended and are returned unchanged.

    Example:
        >>> hex_to_rgba("#f00", 0.5)
        'rgba(255, 0, 0, 0.5)'
    """
    match = HEX_COLOR.match(hex_color.strip()) if isinstance(hex_color, str) else None
    if not match:
        return hex_color

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(char * 2 for char in digits)

    r = int(digits[0:2], 16)
    g = int(digits[2:4], 16)
    b = int(digits[4:6], 16)
    return f"rgba({r}, {g}, {b}, {format_number(float(opacity))})"


def apply_opacity(color: str, opacity: Optional[float] = 1.0) -> str:
    """Return `color` unchanged at full opacity, otherwise as rgba()."""
    if opacity is None or float(opacity) == 1.0:
        return color
    return hex_to_rgba(color, opacity)


def resolve_semantic_color(
    role_key: Optional[str],
    config: Optional[Dict[str, Any]],
    opacity: Optional[float] = 1.0,
) -> str:
    """
    Resolve a semantic color role to a concrete color.

    Args:
        role_key: One of SemanticRole's values. A literal hex color (legacy
            configs) is accepted and passed through the same opacity handling.
        config: Style config (partial configs are fine)
        opacity: 0-1; 1.0 returns the hex value unchanged

    Returns:
        Hex color, or an rgba() string when opacity != 1.0. Absent or unknown
        roles (non-string keys included) resolve to the configured primary
        text color.
    """
    colors = _colors_of(config)

    if isinstance(role_key, SemanticRole):
        role_key = role_key.value

    if not isinstance(role_key, str) or not role_key:
        color = _text_primary(colors)
    elif role_key.startswith("#"):
        color = role_key
    else:
        color = _resolve_role(role_key, colors) or _text_primary(colors)

    return apply_opacity(color, opacity)


def resolve_color_pair(pair_key: Optional[str], config: Optional[Dict[str, Any]]) -> ColorPair:
    """
    Resolve a base/on-color pair together.

    Used by components that paint a background and need a legible foreground
    (tags, badges). Unknown pair keys fall back to the tertiary pair.
    """
    colors = _colors_of(config)
    if not isinstance(pair_key, str):
        pair_key = DEFAULT_PAIR
    base_role, on_role = COLOR_PAIRS.get(pair_key or DEFAULT_PAIR, COLOR_PAIRS[DEFAULT_PAIR])
    return ColorPair(
        base=_resolve_role(base_role, colors),
        on=_resolve_role(on_role, colors),
    )
