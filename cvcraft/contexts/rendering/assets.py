"""
Asset Collaborators

The rendering core never fetches images or fonts itself. The calling layer
passes in an asset resolver (asset reference -> displayable URL) and a font
loader (family names -> fire-and-forget load). This module defines those
interfaces, a TTL cache the calling layer can own, and the wrappers that turn
collaborator failures into "absent" instead of errors.
"""

import time
from typing import Callable, Dict, List, Optional, Tuple

from typing_extensions import Protocol

from cvcraft.contexts.rendering.logger import _log_debug, _log_warning

DEFAULT_TTL_SECONDS = 300.0


class AssetResolver(Protocol):
    """Maps an opaque asset reference to a displayable URL. May raise."""

    def __call__(self, ref: str) -> str: ...


class FontLoader(Protocol):
    """Requests the given font families. Return value is ignored."""

    def __call__(self, families: List[str]) -> None: ...


class CachingAssetResolver:
    """
    Asset resolver wrapper with populate-on-miss caching and TTL invalidation.

    The cache belongs to whoever constructs this object (one per session,
    one per process, ...). Failures are not cached, so a flaky resolver is
    retried on the next call.

    Example:
        resolver = CachingAssetResolver(storage.url_for, ttl_seconds=60)
        url = resolver("photo-123")
    """

    def __init__(
        self,
        resolver: AssetResolver,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.resolver = resolver
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._cache: Dict[str, Tuple[str, float]] = {}

    def __call__(self, ref: str) -> str:
        cached = self._cache.get(ref)
        now = self._clock()
        if cached and now - cached[1] < self.ttl_seconds:
            return cached[0]

        url = self.resolver(ref)
        self._cache[ref] = (url, now)
        _log_debug(f"Resolved asset {ref!r}")
        return url

    def is_cached(self, ref: str) -> bool:
        """True if ref has a cache entry that hasn't expired."""
        cached = self._cache.get(ref)
        return bool(cached) and self._clock() - cached[1] < self.ttl_seconds

    def invalidate(self, ref: str):
        """Drop one cache entry."""
        self._cache.pop(ref, None)

    def clear_cache(self):
        """Clear the asset cache."""
        self._cache.clear()


def resolve_photo_url(ref: Optional[str], resolver: Optional[AssetResolver]) -> Optional[str]:
    """
    Resolve a photo asset reference, treating any failure as "no photo".

    Returns None when there is no reference, no resolver, or the resolver
    raises or returns nothing.
    """
    if not ref or resolver is None:
        return None
    try:
        return resolver(ref) or None
    except Exception as e:
        _log_warning(f"Asset resolver failed for {ref!r}: {e}")
        return None


def request_fonts(families: List[str], loader: Optional[FontLoader]) -> None:
    """Hand families to the font loader; failures are logged and ignored."""
    if not families or loader is None:
        return
    try:
        loader(list(families))
    except Exception as e:
        _log_warning(f"Font loader failed for {families}: {e}")
