"""
Rendering Registries

Centralized registry for loading and caching the Jinja2 markup templates.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateError, TemplateNotFound

from cvcraft.contexts.rendering.inline_formatter import escape_html, render_inline
from cvcraft.exceptions import TemplateRenderError

load_dotenv()
TEMPLATES_PATH = Path(os.getenv("CVCRAFT_TEMPLATES_PATH") or Path(__file__).parent / "templates")


class MarkupTemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for HTML/CSS generation.

    Templates are stored in cvcraft/contexts/rendering/templates/{name}.jinja,
    e.g. "section.html" -> templates/section.html.jinja. Autoescaping is off:
    templates escape text with the `escape_html` filter and format it with the
    `inline` filter, so the output matches render_inline() byte for byte.
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Directory holding *.jinja templates. Defaults to
                            CVCRAFT_TEMPLATES_PATH from environment, else the
                            bundled templates
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["escape_html"] = escape_html
        self.env.filters["inline"] = render_inline

    def get_template(self, name: str) -> Template:
        """
        Get a template by name, loading and caching it if necessary.

        Args:
            name: Template name without the .jinja suffix (e.g., 'section.html')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if name in self._cache:
            return self._cache[name]

        try:
            template = self.env.get_template(f"{name}.jinja")
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template '{name}' not found at {self.get_template_path(name)}"
            ) from e

        self._cache[name] = template
        return template

    def get_template_path(self, name: str) -> Path:
        """Get the file path for a template."""
        return self.templates_path / f"{name}.jinja"

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, name: str) -> bool:
        """
        Check if a template is in the cache.

        Args:
            name: Template name

        Returns:
            True if cached, False otherwise
        """
        return name in self._cache

    def render(self, name: str, **context) -> str:
        """
        Render a template with the given context.

        Raises:
            TemplateRenderError: If the template is missing, malformed, or
                references an undefined variable
        """
        try:
            return self.get_template(name).render(**context)
        except TemplateError as e:
            raise TemplateRenderError(
                f"Failed to render template '{name}': {e}",
                template_name=name,
                template_path=self.get_template_path(name),
                original_error=e,
            ) from e


@lru_cache(maxsize=1)
def get_default_registry() -> MarkupTemplateRegistry:
    """Shared registry over the configured templates directory."""
    return MarkupTemplateRegistry()
