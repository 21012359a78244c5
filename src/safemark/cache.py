"""Content-addressed render cache for Safemark.

Rendering is pure, so output can be memoized on the exact input. The cache
belongs to the caller (see Renderer); the engine itself keeps no state.

Keys are SHA-256 hex digests of the source (hash_content). Only rendered
strings are stored: the "nothing to render" result (None) is never cached,
so ``get`` returning None always means a miss.

Thread Safety:
    DictRenderCache is not thread-safe. Wrap it in LockedRenderCache when a
    cache is shared between threads.

Example:
    >>> from safemark import Renderer, DictRenderCache
    >>> renderer = Renderer(cache=DictRenderCache())
    >>> html1 = renderer("**hi**")
    >>> html2 = renderer("**hi**")  # Cache hit, no re-render
"""

from __future__ import annotations

import threading
from typing import Protocol

from safemark.utils.hashing import hash_str
from safemark.utils.logger import get_logger

logger = get_logger(__name__)


class RenderCache(Protocol):
    """Protocol for render caches keyed on content hash."""

    def get(self, key: str) -> str | None:
        """Return cached markup if present, else None."""
        ...

    def put(self, key: str, html: str) -> None:
        """Store rendered markup."""
        ...


class DictRenderCache:
    """In-memory render cache using a dict.

    With ``max_entries`` set, the least recently used entry is evicted once
    the cache is full. Not thread-safe.
    """

    __slots__ = ("_data", "_max_entries")

    def __init__(self, max_entries: int | None = None) -> None:
        self._data: dict[str, str] = {}
        self._max_entries = max_entries

    def get(self, key: str) -> str | None:
        """Return cached markup if present, else None."""
        html = self._data.pop(key, None)
        if html is not None:
            # Re-insert to mark as most recently used
            self._data[key] = html
        return html

    def put(self, key: str, html: str) -> None:
        """Store markup, evicting the least recently used entry if full."""
        if self._max_entries is not None and self._max_entries <= 0:
            return
        self._data.pop(key, None)
        if self._max_entries is not None and len(self._data) >= self._max_entries:
            evicted = next(iter(self._data))
            del self._data[evicted]
            logger.debug("Evicted render cache entry %s", evicted[:16])
        self._data[key] = html

    def clear(self) -> None:
        """Drop all entries."""
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data


class LockedRenderCache:
    """Thread-safe wrapper serializing access to another cache."""

    __slots__ = ("_inner", "_lock")

    def __init__(self, inner: RenderCache) -> None:
        self._inner = inner
        self._lock = threading.Lock()

    @property
    def inner(self) -> RenderCache:
        """The wrapped cache."""
        return self._inner

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._inner.get(key)

    def put(self, key: str, html: str) -> None:
        with self._lock:
            self._inner.put(key, html)


def hash_content(source: str) -> str:
    """Compute SHA256 hash of source for cache key.

    Args:
        source: Raw text exactly as it will be rendered

    Returns:
        Hex digest of SHA256 hash
    """
    return hash_str(source)


__all__ = [
    "DictRenderCache",
    "LockedRenderCache",
    "RenderCache",
    "hash_content",
]
