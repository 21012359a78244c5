"""ContextVar-based render configuration for Safemark.

The rendering engine (render, format_inline, BlockAssembler) has fixed
behavior and never reads configuration. RenderConfig only governs the
caller-side Renderer: how the source is prepared before it reaches the
engine and how results are memoized.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    renderer = Renderer(config=RenderConfig(decode_entities=True))
    html = renderer("Fish &amp; chips")  # Sets config internally via ContextVar

    # Or scope a config explicitly
    with render_config_context(RenderConfig(decode_entities=True)):
        ...
"""

from collections.abc import Callable
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator

from safemark.errors import ConfigError

DEFAULT_CACHE_MAX_ENTRIES = 1024


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Attributes:
        decode_entities: Decode HTML entities in the source before rendering,
            for content that arrives pre-encoded (e.g. Reddit comment bodies).
            The engine re-escapes everything, so this never weakens output.
        text_transformer: Optional callback applied to the raw source.
            Disables memoization, since its effect is not part of the key.
        cache_max_entries: Size of the cache a Renderer creates for itself.
            None means unbounded, 0 disables memoization.

    """

    decode_entities: bool = False
    text_transformer: Callable[[str], str] | None = None
    cache_max_entries: int | None = DEFAULT_CACHE_MAX_ENTRIES

    def __post_init__(self) -> None:
        if self.cache_max_entries is not None and self.cache_max_entries < 0:
            raise ConfigError("cache_max_entries", "must be >= 0 or None")

    @classmethod
    def from_dict(cls, config_dict: dict) -> "RenderConfig":
        """Create RenderConfig from dictionary.

        Only includes keys that are valid RenderConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = RenderConfig.from_dict({
            ...     "decode_entities": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.decode_entities
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RenderConfig = RenderConfig()

_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
)


def get_render_config() -> RenderConfig:
    """Get current render configuration (thread-local)."""
    return _render_config.get()


def set_render_config(config: RenderConfig) -> None:
    """Set render configuration for current context.

    Only affects the current thread's context.
    """
    _render_config.set(config)


def reset_render_config() -> None:
    """Reset to the module-level default configuration."""
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with render_config_context(RenderConfig(decode_entities=True)):
        ...     get_render_config().decode_entities
        True
    """
    previous = _render_config.get()
    _render_config.set(config)
    try:
        yield
    finally:
        _render_config.set(previous)


__all__ = [
    "DEFAULT_CACHE_MAX_ENTRIES",
    "RenderConfig",
    "get_render_config",
    "render_config_context",
    "reset_render_config",
    "set_render_config",
]
