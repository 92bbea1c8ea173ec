"""
Style Compiler

Turns a nested style config into the flat token map (CSS custom properties)
that every markup consumer reads. The same map is produced for the preview and
the export path, so both look identical for identical inputs.

compile_style() is total: any structurally valid config, however partial,
compiles to a complete map in which every value is a non-empty string.
"""

from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional

from cvcraft.contexts.styling.color_resolver import (
    apply_opacity,
    resolve_color_pair,
    resolve_semantic_color,
)
from cvcraft.contexts.styling.config_resolver import resolve_style_config
from cvcraft.contexts.styling.defaults import DEFAULT_BOXES, default_for
from cvcraft.contexts.styling.logger import _log_warning, log_compiled_tokens
from cvcraft.utils.css_units import ensure_units, scale_length, subtract_lengths

ResolvedTokenMap = Mapping[str, str]

DEFAULT_BASE_FONT_SIZE = "10pt"

SHADOW_MAP = {
    "none": "none",
    "sm": "0 1px 2px rgba(0, 0, 0, 0.05)",
    "md": "0 4px 6px rgba(0, 0, 0, 0.1)",
    "lg": "0 10px 15px rgba(0, 0, 0, 0.1)",
    "xl": "0 20px 25px rgba(0, 0, 0, 0.15)",
}

FILTER_MAP = {
    "none": "none",
    "grayscale": "grayscale(100%)",
    "sepia": "sepia(100%)",
}

DIVIDER_STYLES = ("underline", "full-width", "accent-bar")

ADVANCED_SHADOW_DEFAULT = "0 1px 3px rgba(0, 0, 0, 0.1)"
ADVANCED_SHADOW_HOVER = "0 4px 12px rgba(0, 0, 0, 0.15)"

# Families served by Google Fonts; anything else is assumed to be a system font
GOOGLE_FONTS = {
    "Inter", "Roboto", "Open Sans", "Lato", "Montserrat", "Poppins",
    "IBM Plex Sans", "IBM Plex Serif", "Source Sans Pro", "Source Serif Pro",
    "Crimson Text", "Crimson Pro", "Playfair Display", "Merriweather",
    "Libre Baskerville", "EB Garamond", "Cormorant Garamond", "Spectral",
    "Fira Sans", "Fira Code", "Nunito", "Raleway", "Work Sans", "DM Sans", "Mulish",
    "Cardo", "Josefin Sans", "Oswald", "PT Sans", "PT Serif", "Quicksand",
    "Rubik", "Ubuntu", "Cabin", "Barlow", "Manrope", "Space Grotesk", "Lora",
}

GOOGLE_FONTS_WEIGHTS = (400, 500, 600, 700)

BOX_EDGES = ("Top", "Right", "Bottom", "Left")


class BoxModel(NamedTuple):
    """Resolved margin or padding for one component."""

    top: str
    right: str
    bottom: str
    left: str
    shorthand: str


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def calculate_font_size(scale: float, base_font_size: str) -> str:
    """
    Derive a font size from a scale multiplier and the base size.

    Formatted to one decimal place and keeping the base unit:
    calculate_font_size(3.2, "10pt") == "32.0pt". An unparseable base falls
    back to the default base size.
    """
    size = scale_length(scale, base_font_size)
    if size is None:
        size = scale_length(scale, DEFAULT_BASE_FONT_SIZE)
    return size


def calculate_main_width(page_width: str, sidebar_width: str) -> str:
    """Main column width: page width minus sidebar width (numeric or calc())."""
    return subtract_lengths(page_width, sidebar_width)


def expand_box_shorthand(value: str) -> List[str]:
    """Expand a 1-4 value CSS box shorthand to [top, right, bottom, left]."""
    parts = str(value).split()
    if not parts:
        return ["0", "0", "0", "0"]
    if len(parts) == 1:
        return parts * 4
    if len(parts) == 2:
        return [parts[0], parts[1], parts[0], parts[1]]
    if len(parts) == 3:
        return [parts[0], parts[1], parts[2], parts[1]]
    return parts[:4]


def resolve_box(component: Dict[str, Any], default_box: Dict[str, Any], kind: str) -> BoxModel:
    """
    Resolve a component's margin or padding.

    The component's own box fields are used as a whole when it declares any of
    them; otherwise `default_box` applies. Modes:
    - uniform: one value on all sides (legacy `padding` acts as the value)
    - individual: four edges, unset edges default to "0"

    Args:
        component: Raw component config
        default_box: Default box fields for the component
        kind: "margin" or "padding"
    """
    mode_key = f"{kind}Mode"
    uniform_key = f"{kind}Uniform"
    edge_keys = [f"{kind}{edge}" for edge in BOX_EDGES]
    legacy_keys = ["padding"] if kind == "padding" else []

    def declared(source: Dict[str, Any]) -> bool:
        return any(_present(source.get(key)) for key in [mode_key, uniform_key, *edge_keys, *legacy_keys])

    source = component if declared(component) else default_box
    has_edges = any(_present(source.get(key)) for key in edge_keys)
    mode = source.get(mode_key) or ("individual" if has_edges else "uniform")

    if mode == "individual":
        edges = [str(source.get(key)) if _present(source.get(key)) else "0" for key in edge_keys]
        return BoxModel(*edges, shorthand=" ".join(edges))

    value = source.get(uniform_key)
    if not _present(value) and legacy_keys:
        value = source.get("padding")
    value = str(value) if _present(value) else "0"
    return BoxModel(*expand_box_shorthand(value), shorthand=value)


def divider_display(style: Optional[str]) -> str:
    """'block' for a known divider style, 'none' for unset/none/unknown."""
    return "block" if style in DIVIDER_STYLES else "none"


def generate_google_fonts_url(fonts: Iterable[str]) -> str:
    """
    Build a Google Fonts CSS2 URL for the given families.

    Requests regular and italic variants at weights 400-700. Duplicates are
    dropped (first occurrence wins). Returns "" for no fonts.

    Example:
        >>> generate_google_fonts_url(["Open Sans"])
        'https://fonts.googleapis.com/css2?family=Open+Sans:ital,wght@0,400;...;1,700&display=swap'
    """
    unique_fonts = list(dict.fromkeys(font for font in (fonts or []) if font))
    if not unique_fonts:
        return ""

    axis_tuples = [f"0,{w}" for w in GOOGLE_FONTS_WEIGHTS] + [f"1,{w}" for w in GOOGLE_FONTS_WEIGHTS]
    axis = ";".join(axis_tuples)
    families = "&".join(f"family={font.replace(' ', '+')}:ital,wght@{axis}" for font in unique_fonts)
    return f"https://fonts.googleapis.com/css2?{families}&display=swap"


def first_family(font_stack: Optional[str]) -> Optional[str]:
    """First family of a CSS font stack, unquoted."""
    if not font_stack:
        return None
    first = font_stack.split(",")[0].strip().strip("'\"")
    return first or None


def font_families_for(config: Optional[Dict[str, Any]] = None) -> List[str]:
    """
    Web-font families a config actually uses (heading first, then body).

    This is the list handed to the font-loading collaborator; system fonts are
    left out.
    """
    resolved = resolve_style_config(config)
    families = []
    for role in ("heading", "body"):
        family = first_family(_leaf(resolved, f"typography.fontFamily.{role}"))
        if family and family in GOOGLE_FONTS and family not in families:
            families.append(family)
    return families


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------


def _present(value: Any) -> bool:
    return value is not None and value != ""


def _get_path(config: Dict[str, Any], path: str) -> Any:
    node: Any = config
    for key in path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def _leaf(config: Dict[str, Any], path: str, fallback: Any = None) -> Any:
    """Configured value at `path`, else the default table's value, else fallback."""
    value = _get_path(config, path)
    if _present(value):
        return value
    default = default_for(path)
    return default if _present(default) else fallback


def _component(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    component = _get_path(config, f"components.{name}")
    return component if isinstance(component, dict) else {}


def _color(config: Dict[str, Any], component: str, key_field: str, opacity_field: str) -> str:
    return resolve_semantic_color(
        _leaf(config, f"components.{component}.{key_field}"),
        config,
        _leaf(config, f"components.{component}.{opacity_field}", 1.0),
    )


def _optional_color(
    config: Dict[str, Any], component: str, key_field: str, opacity_field: str, fallback: str
) -> str:
    """Resolve a color that is only painted when its key is set."""
    key = _leaf(config, f"components.{component}.{key_field}")
    if not _present(key):
        return fallback
    return resolve_semantic_color(key, config, _leaf(config, f"components.{component}.{opacity_field}", 1.0))


def _enum(value: Any, table: Dict[str, str]) -> str:
    return table.get(value, table["none"]) if isinstance(value, str) else table["none"]


# ---------------------------------------------------------------------------
# Token groups
# ---------------------------------------------------------------------------


def _font_size(config: Dict[str, Any], role: str) -> str:
    base = _leaf(config, "typography.baseFontSize", DEFAULT_BASE_FONT_SIZE)
    scale = _leaf(config, f"typography.fontScale.{role}")
    try:
        scale = float(scale)
    except (TypeError, ValueError):
        scale = float(default_for(f"typography.fontScale.{role}"))
    return calculate_font_size(scale, str(base))


def _color_tokens(config: Dict[str, Any]) -> Dict[str, Any]:
    def role(key: str) -> str:
        return resolve_semantic_color(key, config)

    tokens = {
        "--primary-color": role("primary"),
        "--on-primary-color": role("on-primary"),
        "--secondary-color": role("secondary"),
        "--on-secondary-color": role("on-secondary"),
        "--tertiary-color": role("tertiary"),
        "--on-tertiary-color": role("on-tertiary"),
        "--muted-color": role("muted"),
        "--on-muted-color": role("on-muted"),
        "--background-color": _leaf(config, "colors.background"),
        "--on-background-color": role("text-primary"),
    }
    for slot in range(1, 5):
        tokens[f"--custom{slot}-color"] = role(f"custom{slot}")
        tokens[f"--on-custom{slot}-color"] = role(f"on-custom{slot}")

    tokens.update(
        {
            "--accent-color": role("tertiary"),
            "--surface-color": role("secondary"),
            "--text-color": role("text-primary"),
            "--text-secondary": role("text-secondary"),
            "--text-muted": role("text-muted"),
            "--border-color": _leaf(config, "colors.borders"),
            "--highlight-color": _leaf(config, "colors.highlight"),
            "--error-color": _leaf(config, "colors.error"),
            "--success-color": _leaf(config, "colors.success"),
            "--link-color": _optional_color(
                config, "links", "colorKey", "colorOpacity", _leaf(config, "colors.links.default")
            ),
            "--link-hover-color": _optional_color(
                config, "links", "hoverColorKey", "hoverColorOpacity", _leaf(config, "colors.links.hover")
            ),
            "--link-font-size": _leaf(config, "components.links.fontSize"),
            "--link-font-weight": _leaf(config, "components.links.fontWeight"),
            "--link-letter-spacing": _leaf(config, "components.links.letterSpacing"),
            "--link-text-transform": _leaf(config, "components.links.textTransform"),
            "--link-font-style": _leaf(config, "components.links.fontStyle"),
            "--link-underline-style": _leaf(config, "components.links.underlineStyle"),
        }
    )
    return tokens


def _typography_tokens(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "--font-family": _leaf(config, "typography.fontFamily.body"),
        "--heading-font-family": _leaf(config, "typography.fontFamily.heading"),
        "--monospace-font-family": _leaf(config, "typography.fontFamily.monospace"),
        "--base-font-size": _leaf(config, "typography.baseFontSize", DEFAULT_BASE_FONT_SIZE),
        "--title-font-size": _font_size(config, "h1"),
        "--h2-font-size": _font_size(config, "h2"),
        "--h3-font-size": _font_size(config, "h3"),
        "--body-font-size": _font_size(config, "body"),
        "--small-font-size": _font_size(config, "small"),
        "--tiny-font-size": _font_size(config, "tiny"),
        "--tag-font-size": _font_size(config, "tag"),
        "--date-line-font-size": _font_size(config, "dateLine"),
        "--inline-code-font-size": _font_size(config, "inlineCode"),
        "--heading-weight": _leaf(config, "typography.fontWeight.heading"),
        "--subheading-weight": _leaf(config, "typography.fontWeight.subheading"),
        "--body-weight": _leaf(config, "typography.fontWeight.body"),
        "--bold-weight": _leaf(config, "typography.fontWeight.bold"),
        "--heading-line-height": _leaf(config, "typography.lineHeight.heading"),
        "--body-line-height": _leaf(config, "typography.lineHeight.body"),
        "--compact-line-height": _leaf(config, "typography.lineHeight.compact"),
    }


def _layout_tokens(config: Dict[str, Any]) -> Dict[str, Any]:
    page_width = str(_leaf(config, "layout.pageWidth"))
    sidebar_width = str(_leaf(config, "layout.sidebarWidth"))
    tokens = {
        "--page-width": page_width,
        "--section-spacing": _leaf(config, "layout.sectionSpacing"),
        "--paragraph-spacing": _leaf(config, "layout.paragraphSpacing"),
        "--sidebar-width": sidebar_width,
        "--main-width": calculate_main_width(page_width, sidebar_width),
    }
    for edge in ("top", "right", "bottom", "left"):
        tokens[f"--page-margin-{edge}"] = ensure_units(
            _get_path(config, f"layout.pageMargin.{edge}"),
            default=default_for(f"layout.pageMargin.{edge}"),
        )
    return tokens


def _block_tokens(config: Dict[str, Any], component: str, prefix: str, size_role: str) -> Dict[str, Any]:
    """Typography, box, background, border, divider and shadow tokens for a text block."""
    raw = _component(config, component)

    def field(name: str, fallback: Any = None) -> Any:
        return _leaf(config, f"components.{component}.{name}", fallback)

    margin = resolve_box(raw, DEFAULT_BOXES[component], "margin")
    padding = resolve_box(raw, DEFAULT_BOXES[component], "padding")
    divider_style = field("dividerStyle", "none")

    return {
        f"--{prefix}-font-family": field("fontFamily") or _leaf(config, "typography.fontFamily.heading"),
        f"--{prefix}-font-size": field("fontSize") or _font_size(config, size_role),
        f"--{prefix}-font-weight": field("fontWeight"),
        f"--{prefix}-color": _color(config, component, "colorKey", "colorOpacity"),
        f"--{prefix}-letter-spacing": field("letterSpacing"),
        f"--{prefix}-text-transform": field("textTransform"),
        f"--{prefix}-line-height": field("lineHeight"),
        f"--{prefix}-font-style": field("fontStyle"),
        f"--{prefix}-margin": margin.shorthand,
        f"--{prefix}-margin-top": margin.top,
        f"--{prefix}-margin-right": margin.right,
        f"--{prefix}-margin-bottom": margin.bottom,
        f"--{prefix}-margin-left": margin.left,
        f"--{prefix}-padding": padding.shorthand,
        f"--{prefix}-background-color": _optional_color(
            config, component, "backgroundColorKey", "backgroundColorOpacity", "transparent"
        ),
        f"--{prefix}-border-radius": field("borderRadius"),
        f"--{prefix}-border-style": field("borderStyle"),
        f"--{prefix}-border-width": field("borderWidth"),
        f"--{prefix}-border-color": _optional_color(
            config, component, "borderColorKey", "borderColorOpacity", "transparent"
        ),
        f"--{prefix}-divider-style": divider_style if divider_style in DIVIDER_STYLES else "none",
        f"--{prefix}-divider-display": divider_display(divider_style),
        f"--{prefix}-divider-width": field("dividerWidth"),
        f"--{prefix}-divider-color": _color(config, component, "dividerColorKey", "dividerColorOpacity"),
        f"--{prefix}-shadow": _enum(field("shadow"), SHADOW_MAP),
    }


def _tag_tokens(config: Dict[str, Any]) -> Dict[str, Any]:
    pair = resolve_color_pair(_leaf(config, "components.tags.colorPair"), config)
    return {
        "--tag-bg-color": apply_opacity(pair.base, _leaf(config, "components.tags.backgroundOpacity")),
        "--tag-text-color": apply_opacity(pair.on, _leaf(config, "components.tags.textOpacity")),
        "--tag-border-radius": _leaf(config, "components.tags.borderRadius"),
        "--tag-font-size-custom": _leaf(config, "components.tags.fontSize") or _font_size(config, "tag"),
        "--tag-font-weight": _leaf(config, "components.tags.fontWeight"),
        "--tag-letter-spacing": _leaf(config, "components.tags.letterSpacing"),
        "--tag-text-transform": _leaf(config, "components.tags.textTransform"),
        "--tag-font-style": _leaf(config, "components.tags.fontStyle"),
        "--tag-padding": _leaf(config, "components.tags.padding"),
        "--tag-gap": _leaf(config, "components.tags.gap"),
        "--tag-border": _leaf(config, "components.tags.border", "none"),
    }


def _date_line_tokens(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "--date-line-color": _color(config, "dateLine", "colorKey", "colorOpacity"),
        "--date-line-font-size-custom": _leaf(config, "components.dateLine.fontSize")
        or _font_size(config, "dateLine"),
        "--date-line-font-weight": _leaf(config, "components.dateLine.fontWeight"),
        "--date-line-font-style": _leaf(config, "components.dateLine.fontStyle"),
        "--date-line-alignment": _leaf(config, "components.dateLine.alignment"),
        "--date-line-letter-spacing": _leaf(config, "components.dateLine.letterSpacing"),
        "--date-line-text-transform": _leaf(config, "components.dateLine.textTransform"),
    }


def _contact_tokens(config: Dict[str, Any]) -> Dict[str, Any]:
    separator = _leaf(config, "components.contactInfo.separator")
    return {
        "--header-alignment": _leaf(config, "components.header.alignment"),
        "--contact-layout": _leaf(config, "components.contactInfo.layout"),
        "--contact-icon-size": _leaf(config, "components.contactInfo.iconSize"),
        "--contact-icon-color": _color(config, "contactInfo", "iconColorKey", "iconColorOpacity"),
        "--contact-spacing": _leaf(config, "components.contactInfo.spacing"),
        "--contact-font-size": _leaf(config, "components.contactInfo.fontSize") or _font_size(config, "small"),
        "--contact-font-weight": _leaf(config, "components.contactInfo.fontWeight"),
        "--contact-color": _color(config, "contactInfo", "colorKey", "colorOpacity"),
        "--contact-letter-spacing": _leaf(config, "components.contactInfo.letterSpacing"),
        "--contact-text-transform": _leaf(config, "components.contactInfo.textTransform"),
        "--contact-font-style": _leaf(config, "components.contactInfo.fontStyle"),
        "--contact-separator": '""' if separator == "none" else f'"{separator}"',
    }


def _photo_tokens(config: Dict[str, Any]) -> Dict[str, Any]:
    margin = resolve_box(_component(config, "profilePhoto"), DEFAULT_BOXES["profilePhoto"], "margin")

    def field(name: str) -> Any:
        return _leaf(config, f"components.profilePhoto.{name}")

    return {
        "--profile-photo-size": field("size"),
        "--profile-photo-border-radius": field("borderRadius"),
        "--profile-photo-border-width": field("borderWidth"),
        "--profile-photo-border-style": field("borderStyle"),
        "--profile-photo-border-color": field("borderColor"),
        "--profile-photo-border": f"{field('borderWidth')} {field('borderStyle')} {field('borderColor')}",
        "--profile-photo-position": field("position"),
        "--profile-photo-margin-top": margin.top,
        "--profile-photo-margin-right": margin.right,
        "--profile-photo-margin-bottom": margin.bottom,
        "--profile-photo-margin-left": margin.left,
        "--profile-photo-opacity": field("opacity"),
        "--profile-photo-shadow": _enum(field("shadow"), SHADOW_MAP),
        "--profile-photo-filter": _enum(field("filter"), FILTER_MAP),
    }


def _text_component_tokens(config: Dict[str, Any]) -> Dict[str, Any]:
    tokens = {
        "--org-name-font-size": _leaf(config, "components.organizationName.fontSize")
        or _font_size(config, "body"),
        "--org-name-font-weight": _leaf(config, "components.organizationName.fontWeight"),
        "--org-name-color": _color(config, "organizationName", "colorKey", "colorOpacity"),
        "--org-name-font-style": _leaf(config, "components.organizationName.fontStyle"),
        "--key-value-label-color": resolve_semantic_color(
            _leaf(config, "components.keyValue.labelColorKey"), config
        ),
        "--key-value-label-weight": _leaf(config, "components.keyValue.labelWeight"),
        "--key-value-value-color": resolve_semantic_color(
            _leaf(config, "components.keyValue.valueColorKey"), config
        ),
        "--key-value-value-weight": _leaf(config, "components.keyValue.valueWeight"),
        "--key-value-separator": _leaf(config, "components.keyValue.separator"),
        "--key-value-spacing": _leaf(config, "components.keyValue.spacing"),
        "--emphasis-font-weight": _leaf(config, "components.emphasis.fontWeight"),
        "--emphasis-color": resolve_semantic_color(_leaf(config, "components.emphasis.colorKey"), config),
        "--divider-style": _leaf(config, "components.divider.style"),
        "--divider-color": _leaf(config, "components.divider.color"),
        "--divider-thickness": _leaf(config, "components.divider.thickness"),
        "--divider-spacing": _leaf(config, "components.divider.spacing"),
    }
    for level in (1, 2, 3):
        tokens[f"--bullet-level{level}-color"] = _leaf(config, f"components.list.level{level}.color")
        tokens[f"--bullet-level{level}-indent"] = _leaf(config, f"components.list.level{level}.indent")
        tokens[f"--bullet-level{level}-style"] = _leaf(config, f"components.list.level{level}.bulletStyle")
    return tokens


def _advanced_tokens(config: Dict[str, Any]) -> Dict[str, Any]:
    shadows = bool(_get_path(config, "advanced.shadows"))
    page_numbers_enabled = bool(_get_path(config, "pdf.pageNumbers.enabled"))
    return {
        "--animation-duration": "0.2s" if _get_path(config, "advanced.animations") else "0s",
        "--shadow-default": ADVANCED_SHADOW_DEFAULT if shadows else "none",
        "--shadow-hover": ADVANCED_SHADOW_HOVER if shadows else "none",
        "--page-size": f"{_leaf(config, 'pdf.pageSize')} {_leaf(config, 'pdf.orientation')}",
        "--page-number-display": "block" if page_numbers_enabled else "none",
        "--page-number-font-size": _leaf(config, "pdf.pageNumbers.fontSize"),
        "--page-number-font-weight": _leaf(config, "pdf.pageNumbers.fontWeight"),
        "--page-number-color": resolve_semantic_color(_leaf(config, "pdf.pageNumbers.colorKey"), config),
        "--page-number-margin": _leaf(config, "pdf.pageNumbers.margin"),
        "--page-number-position": _leaf(config, "pdf.pageNumbers.position"),
    }


def _stringify(tokens: Dict[str, Any]) -> Dict[str, str]:
    result = {}
    for name, value in tokens.items():
        text = str(value).strip() if value is not None else ""
        if not text:
            _log_warning(f"Token {name} resolved empty; using 'initial'")
            text = "initial"
        result[name] = text
    return result


def compile_style(config: Optional[Dict[str, Any]] = None) -> ResolvedTokenMap:
    """
    Compile a style config into a read-only token map.

    Args:
        config: Style config, possibly partial; None compiles the defaults

    Returns:
        Read-only mapping of CSS custom property name -> value, e.g.
        {"--primary-color": "#2563eb", "--title-font-size": "32.0pt", ...}

    Raises:
        StyleConfigError: If config (or one of its groups) isn't a mapping

    Example:
        >>> tokens = compile_style({"typography": {"baseFontSize": "12px"}})
        >>> tokens["--title-font-size"]
        '38.4px'
    """
    resolved = resolve_style_config(config)

    tokens: Dict[str, Any] = {}
    tokens.update(_color_tokens(resolved))
    tokens.update(_typography_tokens(resolved))
    tokens.update(_layout_tokens(resolved))
    tokens.update(_tag_tokens(resolved))
    tokens.update(_date_line_tokens(resolved))
    tokens.update(_block_tokens(resolved, "name", "name", "h1"))
    tokens.update(_contact_tokens(resolved))
    tokens.update(_photo_tokens(resolved))
    tokens.update(_block_tokens(resolved, "sectionHeader", "section-header", "h2"))
    tokens.update(_block_tokens(resolved, "jobTitle", "job-title", "h3"))
    tokens.update(_text_component_tokens(resolved))
    tokens.update(_advanced_tokens(resolved))

    compiled = _stringify(tokens)
    log_compiled_tokens(compiled)
    return MappingProxyType(compiled)
