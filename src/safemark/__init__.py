"""
Safemark — Safe Markdown Rendering for User-Submitted Text

Renders a deliberately small markdown subset (paragraphs, bullet lists,
blockquotes, indented code, links, bold, italics, strikethrough,
superscript) to HTML that can be injected into a live page as-is. Input is
treated as fully untrusted; output is restricted to a closed set of
elements and never carries event handlers or style attributes.

Quick Start:
    >>> from safemark import render
    >>> render("**Hello** [site](https://example.com)")
    '<p><strong>Hello</strong> <a href="https://example.com" target="_blank" rel="noopener noreferrer">site</a></p>'
    >>> render("") is None
    True

    >>> # Memoizing helper for repeated rendering of the same content
    >>> from safemark import Renderer
    >>> renderer = Renderer()
    >>> html = renderer("> quoted")

Zero runtime dependencies.
"""

from collections.abc import Iterable

from safemark.blocks import BlockAssembler, LineMode, assemble
from safemark.cache import DictRenderCache, LockedRenderCache, RenderCache, hash_content
from safemark.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from safemark.errors import ConfigError, InvalidInputError, SafemarkError
from safemark.escape import escape_html, unescape_html
from safemark.inline import format_inline
from safemark.urls import SAFE_FALLBACK_HREF, sanitize_href
from safemark.utils.logger import get_logger

__version__ = "0.1.0"

logger = get_logger(__name__)

# Every element render() can emit. Only <a> carries attributes
# (href, target, rel).
ALLOWED_TAGS = frozenset(
    ("p", "strong", "em", "del", "sup", "a", "ul", "li", "blockquote", "br", "pre", "code")
)

ALLOWED_ATTRIBUTES = {"a": frozenset(("href", "target", "rel"))}


def split_lines(source: str) -> list[str]:
    """Normalize line endings and split into lines."""
    return source.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def render(source: str | None) -> str | None:
    """Render untrusted markdown text to safe HTML.

    Pure: the same input always yields the same output, and no state is
    kept between calls. Never raises for string input.

    Args:
        source: Raw user text, or None

    Returns:
        HTML string, or None when there is nothing to render (None, empty
        or whitespace-only input)

    Raises:
        InvalidInputError: source is neither str nor None

    Example:
        >>> render("* a\\n* b")
        '<ul><li>a</li><li>b</li></ul>'
    """
    if source is None:
        return None
    if not isinstance(source, str):
        raise InvalidInputError(type(source).__name__)
    if not source:
        return None
    html = assemble(split_lines(source))
    return html or None


class Renderer:
    """Memoizing render helper for callers that show the same text repeatedly.

    Applies RenderConfig source preparation, then calls render(). Results
    are cached by content hash.

    Usage:
        >>> renderer = Renderer()
        >>> renderer("~~old~~ new")
        '<p><del>old</del> new</p>'

        >>> # Pre-encoded content
        >>> renderer = Renderer(config=RenderConfig(decode_entities=True))
        >>> renderer("a &amp;&amp; b")
        '<p>a &amp;&amp; b</p>'

    Thread Safety:
        The default cache is a LockedRenderCache. Safe to share one Renderer
        between threads.

    """

    __slots__ = ("_cache", "_config")

    def __init__(
        self,
        *,
        config: RenderConfig | None = None,
        cache: RenderCache | None = None,
    ) -> None:
        """Initialize Renderer.

        Args:
            config: Render configuration (uses the context's current config
                if None)
            cache: Render cache. If None, a thread-safe in-memory cache bounded
                by ``config.cache_max_entries`` is created; a bound of 0
                disables memoization.
        """
        self._config = config or get_render_config()
        if cache is None and self._config.cache_max_entries != 0:
            cache = LockedRenderCache(DictRenderCache(self._config.cache_max_entries))
        self._cache = cache

    @property
    def config(self) -> RenderConfig:
        return self._config

    @property
    def cache(self) -> RenderCache | None:
        return self._cache

    def __call__(self, source: str | None) -> str | None:
        """Render one source.

        Sets config via ContextVar for the duration of the call and restores
        the caller's config afterwards.
        """
        with render_config_context(self._config):
            return self._render(source)

    def render_many(self, sources: Iterable[str | None]) -> list[str | None]:
        """Render a batch of sources, setting config once.

        Duplicate sources within the batch hit the cache.

        Example:
            >>> Renderer().render_many(["*a*", "", "*a*"])
            ['<p><em>a</em></p>', None, '<p><em>a</em></p>']
        """
        with render_config_context(self._config):
            return [self._render(source) for source in sources]

    def _render(self, source: str | None) -> str | None:
        if source is None:
            return None
        if not isinstance(source, str):
            raise InvalidInputError(type(source).__name__)

        config = get_render_config()
        if config.decode_entities:
            source = unescape_html(source)

        cache = self._cache
        if config.text_transformer is not None:
            source = config.text_transformer(source)
            cache = None
        if cache is None:
            return render(source)

        key = hash_content(source)
        cached = cache.get(key)
        if cached is not None:
            logger.debug("Render cache hit %s", key[:16])
            return cached

        html = render(source)
        if html is not None:
            cache.put(key, html)
        return html


__all__ = [  # noqa: RUF022 — grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "render",
    "split_lines",
    "ALLOWED_TAGS",
    "ALLOWED_ATTRIBUTES",
    # High-level
    "Renderer",
    # Engine components
    "escape_html",
    "unescape_html",
    "sanitize_href",
    "SAFE_FALLBACK_HREF",
    "format_inline",
    "BlockAssembler",
    "LineMode",
    "assemble",
    # Render cache
    "DictRenderCache",
    "LockedRenderCache",
    "RenderCache",
    "hash_content",
    # Configuration (ContextVar-based)
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
    # Errors
    "SafemarkError",
    "InvalidInputError",
    "ConfigError",
]
