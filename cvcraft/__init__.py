"""
CV-Craft - shared rendering core for CV documents

Turns a declarative style configuration and structured CV content into markup
that is identical for the interactive preview and the print/export path.

Architecture:
- Styling Context: Semantic colors, config defaults/presets, token compilation
- Rendering Context: Inline formatting, section/header/contact markup, layouts
- Intake Context: Markdown-like source to ParsedDocument
- Pagination Context: Page-break estimation for the preview surface
"""

__version__ = "0.1.0"
