"""Custom exceptions raised at the input boundary (loaders, presets, templates)."""

from pathlib import Path
from typing import Optional


class StyleConfigError(ValueError):
    """
    Raised when a style config is not structurally valid.

    Partial configs are fine; this is only for configs that are not mappings
    or whose top-level groups are not mappings.
    """

    pass


class PresetNotFoundError(KeyError):
    """Raised when a named style preset does not exist."""

    def __init__(self, preset_name: str, available: list):
        self.preset_name = preset_name
        self.available = available
        super().__init__(f"Preset '{preset_name}' not found. Available presets: {available}")


class DocumentStructureError(ValueError):
    """
    Raised when a document mapping can't be turned into a ParsedDocument.

    This is raised when the input doesn't carry a 'sections' list or a section
    entry is not a mapping.
    """

    pass


class TemplateRenderError(Exception):
    """
    Exception raised when markup template rendering fails.

    Attributes:
        message: Error description
        template_name: Name of the template being rendered
        template_path: Path to the template file
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_name = template_name
        self.template_path = template_path
        self.original_error = original_error

        parts = [message]

        if template_name and template_path:
            parts.append(f"\nTemplate: {template_path}")
            parts.append(f"Name: {template_name}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))
