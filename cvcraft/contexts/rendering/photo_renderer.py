"""
Photo Renderer

Renders the profile photo container. Sizing, border and filter come from the
--profile-photo-* tokens, so the markup itself carries no style.
"""

from typing import Optional

from cvcraft.contexts.rendering.registries import MarkupTemplateRegistry, get_default_registry
from cvcraft.contexts.rendering.url_sanitizer import SAFE_PLACEHOLDER, sanitize_image_src


def choose_photo_src(photo_url: Optional[str], frontmatter_photo: Optional[str]) -> Optional[str]:
    """
    Pick the photo source: the resolved asset URL first, then the front-matter
    photo. Returns None when neither is usable.
    """
    for candidate in (photo_url, frontmatter_photo):
        if not candidate or not candidate.strip():
            continue
        src = sanitize_image_src(candidate)
        if src != SAFE_PLACEHOLDER:
            return src
    return None


def render_profile_photo(
    photo_url: Optional[str] = None,
    frontmatter_photo: Optional[str] = None,
    class_prefix: str = "",
    alt: str = "Profile",
    placeholder: str = "Photo",
    registry: Optional[MarkupTemplateRegistry] = None,
) -> str:
    """
    Render the photo, or a placeholder box when no usable source exists.

    Args:
        photo_url: URL or data URI from the asset resolver
        frontmatter_photo: Photo URL given in the document
        class_prefix: Prepended to every class name
    """
    registry = registry or get_default_registry()
    return registry.render(
        "photo.html",
        p=class_prefix,
        src=choose_photo_src(photo_url, frontmatter_photo),
        alt=alt,
        placeholder=placeholder,
    ).strip()
