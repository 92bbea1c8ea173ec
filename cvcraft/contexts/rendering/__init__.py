"""
Rendering Context

Responsibilities:
- Loads documents into the tagged section-content union
- Formats inline text and sanitizes link and image URLs
- Renders sections, header, contact block and photo from Jinja2 templates
- Composes single-column and two-column page bodies
- Generates the stylesheet and the full HTML document

Owns: ParsedDocument, markup templates, HTML/CSS output
Never: Fetches assets or fonts, or decides page breaks
"""
