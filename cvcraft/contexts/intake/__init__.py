"""
Intake Context

Responsibilities:
- Reads CV markdown (optional YAML front-matter plus ## sections)
- Infers section types from headings
- Produces ParsedDocument objects for the rendering and pagination contexts

Owns: Markdown parsing rules and patterns
Never: Renders markup or reads style configuration
"""
