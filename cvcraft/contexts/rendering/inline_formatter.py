"""
Inline formatting for CV text.

Supports a small Markdown-like subset, applied in a fixed order so overlapping
markers resolve the same way everywhere:

1. escape HTML metacharacters
2. links ([text](url)) set aside, hrefs passed through sanitize_url
3. bold (**x** / __x__)
4. italic (*x* / _x_)
5. inline code (`x`)
6. links put back, their text formatted by steps 3-5
7. newlines to <br/>

Markers inside a link's URL are never formatted.
"""

import re

from cvcraft.contexts.rendering.url_sanitizer import sanitize_url

HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}

HTML_METACHARACTERS = re.compile(r"[&<>\"']")

# Closing ** may not be followed by another *, so **bold *italic*** nests
BOLD_STARS = re.compile(r"\*\*(?=\S)(.+?)\*\*(?!\*)")
BOLD_UNDERSCORES = re.compile(r"(?<![A-Za-z0-9_])__(?=\S)(.+?)__(?![A-Za-z0-9_])")
ITALIC_STAR = re.compile(r"\*(?=\S)([^*]+?)\*")
# Intra-word underscores (snake_case) are left alone
ITALIC_UNDERSCORE = re.compile(r"(?<![A-Za-z0-9_])_(?=\S)([^_]+?)_(?![A-Za-z0-9_])")
INLINE_CODE = re.compile(r"`([^`]+)`")
LINK = re.compile(r"\[([^\]]+)\]\(\s*([^)]*?)\s*\)")

# Stands in for a set-aside link until the emphasis passes are done
LINK_SLOT_MARK = "\x00"
LINK_SLOT = re.compile(r"\x00(\d+)\x00")


def escape_html(text) -> str:
    """Escape & < > " ' as HTML entities. None renders as an empty string."""
    if text is None:
        return ""
    return HTML_METACHARACTERS.sub(lambda m: HTML_ESCAPES[m.group(0)], str(text))


def _emphasis(html: str) -> str:
    html = BOLD_STARS.sub(r"<strong>\1</strong>", html)
    html = BOLD_UNDERSCORES.sub(r"<strong>\1</strong>", html)
    html = ITALIC_STAR.sub(r"<em>\1</em>", html)
    html = ITALIC_UNDERSCORE.sub(r"<em>\1</em>", html)
    return INLINE_CODE.sub(r"<code>\1</code>", html)


def render_inline(text: str) -> str:
    """
    Render inline-formatted text to HTML.

    Args:
        text: Raw text with optional inline markers

    Returns:
        HTML-safe markup

    Example:
        >>> render_inline("**Led** the [team](https://example.com)")
        '<strong>Led</strong> the <a href="https://example.com">team</a>'
    """
    if not text:
        return ""

    html = escape_html(str(text).replace(LINK_SLOT_MARK, ""))

    links = []

    def stash_link(match: re.Match) -> str:
        links.append(f'<a href="{sanitize_url(match.group(2))}">{_emphasis(match.group(1))}</a>')
        return f"{LINK_SLOT_MARK}{len(links) - 1}{LINK_SLOT_MARK}"

    html = LINK.sub(stash_link, html)
    html = _emphasis(html)
    html = LINK_SLOT.sub(lambda m: links[int(m.group(1))], html)
    return html.replace("\r\n", "\n").replace("\n", "<br/>")
