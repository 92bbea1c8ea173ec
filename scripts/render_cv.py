#!/usr/bin/env python3
"""
Render CV Documents

Compiles style configs to tokens, renders CV documents to HTML and estimates
page breaks from the command line.

Documents are either YAML (frontmatter + sections) or CV markdown; the file
suffix decides which loader is used.

Examples:
    # Print the compiled tokens for a style config
    python scripts/render_cv.py tokens styles/forest.yaml

    # Render a markdown CV to HTML with a preset on top of the default style
    python scripts/render_cv.py render cv.md --preset colors_forest -o cv.html

    # Render for export (pdf- class prefix, pagination groupings)
    python scripts/render_cv.py render cv.yaml --style styles/forest.yaml --mode pdf

    # Estimate pages and print overflow warnings
    python scripts/render_cv.py paginate cv.md
"""

import os
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from cvcraft.contexts.intake.markdown_parser import load_markdown_document
from cvcraft.contexts.pagination.estimator import pack_sections
from cvcraft.contexts.pagination.height_providers import EstimatedHeightProvider
from cvcraft.contexts.pagination.logger import setup_pagination_logger
from cvcraft.contexts.pagination.page_geometry import geometry_from_config
from cvcraft.contexts.rendering.document_data_structures import ParsedDocument
from cvcraft.contexts.rendering.document_generator import LAYOUTS, CVDocumentOptions, generate_cv_document
from cvcraft.contexts.rendering.document_loader import load_document
from cvcraft.contexts.rendering.logger import setup_rendering_logger
from cvcraft.contexts.styling import (
    apply_presets,
    compile_style,
    font_families_for,
    generate_google_fonts_url,
    load_style_config,
)
from cvcraft.contexts.styling.config_resolver import resolve_style_config
from cvcraft.exceptions import DocumentStructureError, PresetNotFoundError, StyleConfigError

load_dotenv()

MARKDOWN_SUFFIXES = (".md", ".markdown")
MODES = ("web", "pdf")

app = typer.Typer(
    help="Compile CV styles, render CV documents and estimate page breaks",
    add_completion=False,
)


def _logs_path() -> Path:
    return Path(os.getenv("CVCRAFT_LOGS_PATH", "outs/logs"))


def _fail(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _load_any_document(document_path: Path) -> ParsedDocument:
    if not document_path.exists():
        _fail(f"Document not found: {document_path}")
    try:
        if document_path.suffix.lower() in MARKDOWN_SUFFIXES:
            return load_markdown_document(document_path)
        return load_document(document_path)
    except DocumentStructureError as e:
        _fail(f"Invalid document {document_path}: {e}")


def _load_style(style_path: Optional[Path], presets: Optional[List[str]]) -> dict:
    """Load a style config (or the defaults) and layer presets on top."""
    try:
        if style_path is None:
            config = resolve_style_config()
        elif not style_path.exists():
            _fail(f"Style config not found: {style_path}")
        else:
            config = load_style_config(style_path)
        if presets:
            config = apply_presets(config, presets)
    except (StyleConfigError, PresetNotFoundError) as e:
        _fail(f"Error: {e}")
    return config


@app.command("tokens")
def tokens_command(
    style: Annotated[
        Optional[Path],
        typer.Argument(help="Style config YAML (defaults apply when omitted)"),
    ] = None,
    preset: Annotated[
        Optional[List[str]],
        typer.Option("--preset", "-p", help="Preset to apply (repeatable)"),
    ] = None,
):
    """
    Print the compiled token map, one custom property per line.

    Examples:\n
        $ render_cv.py tokens

        $ render_cv.py tokens styles/forest.yaml -p spacing_compact
    """
    tokens = compile_style(_load_style(style, preset))
    for name, value in tokens.items():
        typer.echo(f"{name}: {value};")


@app.command("render")
def render_command(
    document: Annotated[
        Path,
        typer.Argument(help="CV document (.yaml or .md)"),
    ],
    style: Annotated[
        Optional[Path],
        typer.Option("--style", "-s", help="Style config YAML"),
    ] = None,
    preset: Annotated[
        Optional[List[str]],
        typer.Option("--preset", "-p", help="Preset to apply (repeatable)"),
    ] = None,
    mode: Annotated[
        str,
        typer.Option("--mode", "-m", help="'web' (preview) or 'pdf' (export)"),
    ] = "web",
    layout: Annotated[
        Optional[str],
        typer.Option("--layout", help="'two-column' or 'single-column' (defaults to the style)"),
    ] = None,
    pagination: Annotated[
        bool,
        typer.Option("--pagination/--no-pagination", help="Emit keep-together groupings and page markers"),
    ] = False,
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Output HTML path (defaults to stdout)"),
    ] = None,
):
    """
    Render a CV document to a standalone HTML file.

    In pdf mode every class carries the "pdf-" prefix and the pagination
    groupings are always on.

    Examples:\n
        $ render_cv.py render cv.md -o cv.html

        $ render_cv.py render cv.yaml --style styles/forest.yaml --mode pdf -o cv_print.html
    """
    if mode not in MODES:
        _fail(f"Unknown mode '{mode}'. Available: {', '.join(MODES)}")
    if layout is not None and layout not in LAYOUTS:
        _fail(f"Unknown layout '{layout}'. Available: {', '.join(LAYOUTS)}")

    log_dir = _logs_path() / f"render_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    log_file = setup_rendering_logger(log_dir, mode=mode)

    parsed = _load_any_document(document)
    config = _load_style(style, preset)

    options = CVDocumentOptions(
        mode=mode,
        pagination=pagination or mode == "pdf",
        column_breaks="css",
        fonts_url=generate_google_fonts_url(font_families_for(config)),
        layout=layout,
        class_prefix="pdf-" if mode == "pdf" else "",
    )
    result = generate_cv_document(parsed, config, options)

    if out is None:
        typer.echo(result.html)
        return

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(result.html, encoding="utf-8")
    typer.secho(f"Wrote {out}", fg=typer.colors.GREEN)
    typer.echo(f"Log: {log_file}")


@app.command("paginate")
def paginate_command(
    document: Annotated[
        Path,
        typer.Argument(help="CV document (.yaml or .md)"),
    ],
    style: Annotated[
        Optional[Path],
        typer.Option("--style", "-s", help="Style config YAML (page size and margins)"),
    ] = None,
):
    """
    Estimate page breaks from content heuristics and print the page plan.

    Examples:\n
        $ render_cv.py paginate cv.md

        $ render_cv.py paginate cv.yaml --style styles/letter.yaml
    """
    log_dir = _logs_path() / f"paginate_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    setup_pagination_logger(log_dir)

    parsed = _load_any_document(document)
    geometry = geometry_from_config(_load_style(style, None))
    estimate = pack_sections(parsed.sections, EstimatedHeightProvider(), geometry, parsed.frontmatter)

    typer.secho(f"Estimated pages: {estimate.page_count}", bold=True)
    for page in estimate.pages:
        titles = [section.title or section.type for section in page.sections]
        header = " (header)" if page.has_header else ""
        typer.echo(f"  Page {page.page_number}{header}: {page.height:.0f}px - {', '.join(titles) or 'empty'}")

    for warning in estimate.warnings:
        typer.secho(f"Warning: {warning}", fg=typer.colors.YELLOW)


if __name__ == "__main__":
    app()
