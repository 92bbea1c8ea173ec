"""
Stylesheet Generator

Builds the document stylesheet: a :root block carrying every compiled token,
followed by the shared semantic rules, pagination rules and (optionally) the
preview page markers and two-column layout. Every selector carries the class
prefix of the markup it styles.
"""

from typing import Any, Dict, Mapping, Optional

from cvcraft.contexts.pagination.page_geometry import page_size_css
from cvcraft.contexts.rendering.registries import MarkupTemplateRegistry, get_default_registry
from cvcraft.contexts.styling.config_resolver import resolve_style_config
from cvcraft.contexts.styling.style_compiler import compile_style

PAGE_NUMBER_BOXES = {
    "top-left": "@top-left",
    "top-center": "@top-center",
    "top-right": "@top-right",
    "bottom-left": "@bottom-left",
    "bottom-center": "@bottom-center",
    "bottom-right": "@bottom-right",
}


def page_number_box(config: Dict[str, Any]) -> Optional[str]:
    """@page margin box for page numbers, or None when they're disabled."""
    page_numbers = config.get("pdf", {}).get("pageNumbers") or {}
    if not page_numbers.get("enabled"):
        return None
    return PAGE_NUMBER_BOXES.get(page_numbers.get("position"), PAGE_NUMBER_BOXES["bottom-center"])


def generate_cv_css(
    config: Optional[Dict[str, Any]] = None,
    class_prefix: str = "",
    include_two_column: bool = True,
    include_page_markers: bool = False,
    sidebar_color: Optional[str] = None,
    main_color: Optional[str] = None,
    tokens: Optional[Mapping[str, str]] = None,
    registry: Optional[MarkupTemplateRegistry] = None,
) -> str:
    """
    Generate the CV stylesheet.

    Args:
        config: Style config, possibly partial
        class_prefix: Prefix used by the markup this stylesheet targets
        include_two_column: Add the two-column layout and background rules
        include_page_markers: Add the preview page-break marker rules
        sidebar_color: Sidebar background (defaults to --surface-color)
        main_color: Main column background (defaults to --background-color)
        tokens: Already compiled tokens for `config`, to avoid recompiling

    Returns:
        CSS text
    """
    registry = registry or get_default_registry()
    resolved = resolve_style_config(config)
    tokens = tokens if tokens is not None else compile_style(resolved)
    pdf = resolved.get("pdf", {})

    return registry.render(
        "stylesheet.css",
        p=class_prefix,
        tokens=list(tokens.items()),
        page_size=page_size_css(pdf.get("pageSize"), pdf.get("orientation") or "portrait"),
        margin_top=tokens.get("--page-margin-top", "20mm"),
        margin_bottom=tokens.get("--page-margin-bottom", "20mm"),
        page_number_box=page_number_box(resolved),
        include_page_markers=include_page_markers,
        include_two_column=include_two_column,
        sidebar_color=sidebar_color or tokens.get("--surface-color", "#f5f0e8"),
        main_color=main_color or tokens.get("--background-color", "#ffffff"),
        custom_css=(resolved.get("advanced", {}).get("customCSS") or "").strip(),
    )
