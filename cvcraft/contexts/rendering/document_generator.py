"""
Document Generator

One entry point for both outputs: the web preview and the PDF export call
generate_cv_document() with the same document and config, and differ only in
options (mode, pagination, class prefix, column handling).
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from cvcraft.contexts.rendering.document_data_structures import ParsedDocument
from cvcraft.contexts.rendering.layout_composer import (
    compose_single_column,
    compose_two_column,
    split_sections,
)
from cvcraft.contexts.rendering.logger import log_document_result, log_document_start
from cvcraft.contexts.rendering.registries import MarkupTemplateRegistry, get_default_registry
from cvcraft.contexts.rendering.section_renderer import render_options_from_config
from cvcraft.contexts.rendering.stylesheet import generate_cv_css
from cvcraft.contexts.styling.config_resolver import resolve_style_config
from cvcraft.contexts.styling.style_compiler import calculate_main_width, compile_style

LAYOUTS = ("two-column", "single-column")


@dataclass
class CVDocumentOptions:
    """
    Options for generate_cv_document().

    Attributes:
        mode: "web" for the preview, "pdf" for export
        pagination: Emit pagination groupings (and page markers in web mode)
        column_breaks: "css" draws column backgrounds with fixed divs;
            "actual" leaves them to the export pipeline
        full_document: Wrap the body in a complete HTML document
        photo_url: Resolved photo URL or data URI; wins over frontmatter.photo
        fonts_url: Google Fonts stylesheet URL to link, if any
        layout: "two-column" or "single-column"; None uses layout.templateType
        class_prefix: Prepended to every class name
    """

    mode: str = "web"
    pagination: bool = False
    column_breaks: str = "css"
    full_document: bool = True
    photo_url: Optional[str] = None
    fonts_url: str = ""
    layout: Optional[str] = None
    class_prefix: str = ""


@dataclass
class CVDocumentResult:
    """
    Generated document.

    Attributes:
        html: Full HTML document, or the body only
        css: Stylesheet (also embedded in html when full_document)
        tokens: Compiled token map used for both
    """

    html: str
    css: str
    tokens: Mapping[str, str]


def _layout_for(config: Dict[str, Any], options: CVDocumentOptions) -> str:
    layout = options.layout or config.get("layout", {}).get("templateType")
    return layout if layout in LAYOUTS else "two-column"


def generate_cv_document(
    document: ParsedDocument,
    config: Optional[Dict[str, Any]] = None,
    options: Optional[CVDocumentOptions] = None,
    registry: Optional[MarkupTemplateRegistry] = None,
) -> CVDocumentResult:
    """
    Generate the HTML and CSS for a CV.

    Args:
        document: Parsed front-matter and sections
        config: Style config, possibly partial
        options: Output options (defaults: web, two-column from config, full document)

    Returns:
        CVDocumentResult with html, css and the token map

    Example:
        >>> result = generate_cv_document(load_document(path), config, CVDocumentOptions(mode="pdf"))
        >>> Path("cv.html").write_text(result.html)
    """
    start_time = time.time()
    options = options or CVDocumentOptions()
    registry = registry or get_default_registry()
    p = options.class_prefix

    resolved = resolve_style_config(config)
    tokens = compile_style(resolved)
    layout = _layout_for(resolved, options)
    two_column = layout == "two-column"
    frontmatter = document.frontmatter

    log_document_start(frontmatter.name, len(document.sections), layout, options.mode)

    css = generate_cv_css(
        resolved,
        class_prefix=p,
        include_two_column=two_column,
        include_page_markers=options.mode == "web" and options.pagination,
        tokens=tokens,
        registry=registry,
    )

    render_options = render_options_from_config(resolved, pagination=options.pagination, class_prefix=p)
    if two_column:
        split = split_sections(document.sections)
        body = compose_two_column(
            frontmatter,
            split.sidebar,
            split.main,
            tokens,
            render_options,
            photo_url=options.photo_url,
            registry=registry,
        )
        if options.column_breaks == "css":
            body = registry.render("column_backgrounds.html", p=p) + body
    else:
        body = compose_single_column(frontmatter, document.sections, tokens, render_options, registry)

    html = body
    if options.full_document:
        html = registry.render(
            "document.html",
            fm=frontmatter,
            fonts_url=options.fonts_url,
            css=css,
            body=body,
        )

    log_document_result(len(html), len(css), time.time() - start_time)
    return CVDocumentResult(html=html, css=css, tokens=tokens)


def generate_background_html(
    sidebar_color: str,
    main_color: str,
    sidebar_width: str = "84mm",
    page_width: str = "210mm",
    page_height: str = "297mm",
    registry: Optional[MarkupTemplateRegistry] = None,
) -> str:
    """
    Standalone one-page HTML painting the two column backgrounds.

    The export pipeline renders this once and overlays the content pages on
    it, so the colors reach the page edges on every printed page.
    """
    registry = registry or get_default_registry()
    return registry.render(
        "background.html",
        sidebar_color=sidebar_color,
        main_color=main_color,
        sidebar_width=sidebar_width,
        main_width=calculate_main_width(page_width, sidebar_width),
        page_width=page_width,
        page_height=page_height,
    )
