"""Link target validation for anchor ``href`` attributes.

A candidate target is accepted only if it parses as an absolute ``http`` or
``https`` URL with a real host. Accepted targets are canonicalized and
escaped; anything else is replaced by a fixed no-op target. The check fails
closed and never raises.

Example:
    >>> from safemark.urls import sanitize_href
    >>> sanitize_href("HTTPS://Example.com/café")
    'https://example.com/caf%C3%A9'
    >>> sanitize_href("javascript:alert(1)")
    '#'
"""

from __future__ import annotations

import ipaddress
import re
from urllib.parse import SplitResult, quote, urlsplit, urlunsplit

from safemark.escape import escape_html
from safemark.utils.logger import get_logger

logger = get_logger(__name__)

# No-op anchor target used whenever a candidate is rejected
SAFE_FALLBACK_HREF = "#"

_ALLOWED_SCHEMES = frozenset(("http", "https"))

_DEFAULT_PORTS = {"http": 80, "https": 443}

# Whitespace, C0 controls, DEL and backslash (browsers read "\" as "/")
_FORBIDDEN_CHARS = re.compile(r"[\x00-\x20\x7f\\]")

_HOST_PATTERN = re.compile(r"^[a-z0-9_](?:[a-z0-9_.-]*[a-z0-9_])?\.?$")

# RFC 3986 reserved + unreserved characters, plus "%" to keep existing escapes
_URL_SAFE_CHARS = "/:?#[]@!$&'()*+,;=-_.~%"


def _reject(candidate: str, reason: str) -> str:
    logger.debug("Rejected link target %r: %s", candidate, reason)
    return SAFE_FALLBACK_HREF


def _canonical_host(hostname: str) -> str | None:
    """Return the ASCII, lowercased host, or None if it is not a valid host."""
    if ":" in hostname:
        try:
            return f"[{ipaddress.IPv6Address(hostname).compressed}]"
        except ValueError:
            return None
    try:
        ascii_host = hostname.encode("idna").decode("ascii").lower()
    except UnicodeError:
        return None
    if not _HOST_PATTERN.match(ascii_host):
        return None
    return ascii_host


def _canonical_netloc(parts: SplitResult, scheme: str, host: str) -> str:
    netloc = host
    if parts.username is not None:
        userinfo = quote(parts.username, safe="%")
        if parts.password is not None:
            userinfo += ":" + quote(parts.password, safe="%")
        netloc = f"{userinfo}@{netloc}"
    port = parts.port
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        netloc = f"{netloc}:{port}"
    return netloc


def canonicalize_url(candidate: str) -> str | None:
    """Parse ``candidate`` strictly and return its canonical form.

    Returns None when the candidate is not an absolute http(s) URL with a
    valid host. The returned string is not HTML-escaped.
    """
    if not candidate or _FORBIDDEN_CHARS.search(candidate):
        return None
    try:
        parts = urlsplit(candidate)
        hostname = parts.hostname
        # Accessing .port validates it; out of range or non-numeric raises
        parts.port  # noqa: B018
    except ValueError:
        return None

    scheme = parts.scheme.lower()
    if scheme not in _ALLOWED_SCHEMES or not hostname:
        return None
    host = _canonical_host(hostname)
    if host is None:
        return None

    return urlunsplit(
        (
            scheme,
            _canonical_netloc(parts, scheme, host),
            quote(parts.path, safe=_URL_SAFE_CHARS),
            quote(parts.query, safe=_URL_SAFE_CHARS),
            quote(parts.fragment, safe=_URL_SAFE_CHARS),
        )
    )


def sanitize_href(candidate: str) -> str:
    """Validate a link target for use in an ``href`` attribute.

    Args:
        candidate: Raw (unescaped) link target from user input

    Returns:
        The canonical URL, escaped for attribute context, or
        SAFE_FALLBACK_HREF if the target is not an absolute http(s) URL
    """
    canonical = canonicalize_url(candidate)
    if canonical is None:
        return _reject(candidate, "not an absolute http(s) URL")
    return escape_html(canonical)


__all__ = ["SAFE_FALLBACK_HREF", "canonicalize_url", "sanitize_href"]
