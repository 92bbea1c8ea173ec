"""
URL sanitization for link hrefs.

Allow-list based: http(s), mailto and tel links pass, as do scheme-less
references (/path, ./path, #fragment, bare relative paths). Everything else,
including case-variant or whitespace-obscured javascript:/vbscript:/data:
URLs, becomes "#".
"""

import re

from cvcraft.contexts.rendering.logger import log_blocked_url

SAFE_PLACEHOLDER = "#"

# Control characters and whitespace browsers ignore inside a scheme
OBSCURING_CHARACTERS = re.compile(r"[\x00-\x20\x7f]+")

BLOCKED_SCHEMES = re.compile(r"^(javascript|vbscript|data):", re.IGNORECASE)

ALLOWED_SCHEMES = re.compile(r"^(https?:|mailto:|tel:)", re.IGNORECASE)


def sanitize_url(url: str) -> str:
    """
    Sanitize a link URL.

    Args:
        url: Raw URL from content or front-matter

    Returns:
        The trimmed URL when allowed, otherwise "#"

    Example:
        >>> sanitize_url("  https://example.com ")
        'https://example.com'
        >>> sanitize_url("java script:alert(1)")
        '#'
    """
    if not url or not isinstance(url, str):
        return SAFE_PLACEHOLDER

    trimmed = url.strip()
    if not trimmed:
        return SAFE_PLACEHOLDER

    compact = OBSCURING_CHARACTERS.sub("", trimmed)
    if BLOCKED_SCHEMES.match(compact):
        log_blocked_url(trimmed)
        return SAFE_PLACEHOLDER

    if ALLOWED_SCHEMES.match(trimmed) or trimmed.startswith(("/", "#", ".")):
        return trimmed

    # No scheme at all: relative reference ("page.html", "docs/cv")
    if ":" not in trimmed:
        return trimmed

    log_blocked_url(trimmed)
    return SAFE_PLACEHOLDER


# Inline images from the asset resolver arrive as base64 data URIs
DATA_IMAGE = re.compile(r"^data:image/(png|jpe?g|gif|webp);base64,[A-Za-z0-9+/=\s]+$", re.IGNORECASE)


def sanitize_image_src(src: str) -> str:
    """
    Sanitize an <img> src.

    Base64 raster data URIs are allowed here (and only here); anything else
    goes through sanitize_url().
    """
    if isinstance(src, str) and DATA_IMAGE.match(src.strip()):
        return src.strip()
    return sanitize_url(src)
