"""
Styling Context

Responsibilities:
- Resolves semantic color roles and color pairs
- Owns the default style table and legacy field aliases
- Merges partial configs and named presets onto the defaults
- Compiles a style config into a flat, read-only token map

Owns: StyleConfig defaults, ResolvedTokenMap
Never: Produces markup
"""

from cvcraft.contexts.styling.color_resolver import hex_to_rgba, resolve_color_pair, resolve_semantic_color
from cvcraft.contexts.styling.config_resolver import (
    apply_presets,
    load_style_config,
    load_style_presets,
    merge_style_config,
    normalize_style_config,
)
from cvcraft.contexts.styling.style_compiler import (
    calculate_font_size,
    calculate_main_width,
    compile_style,
    font_families_for,
    generate_google_fonts_url,
)

__all__ = [
    "apply_presets",
    "calculate_font_size",
    "calculate_main_width",
    "compile_style",
    "font_families_for",
    "generate_google_fonts_url",
    "hex_to_rgba",
    "load_style_config",
    "load_style_presets",
    "merge_style_config",
    "normalize_style_config",
    "resolve_color_pair",
    "resolve_semantic_color",
]
