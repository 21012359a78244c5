"""HTML escaping for untrusted text.

Every character that can open markup or terminate an attribute value is
replaced by a character reference, so the result is safe both as element
content and inside a double- or single-quoted attribute.

Example:
    >>> from safemark.escape import escape_html
    >>> escape_html("<script>alert('xss')</script>")
    '&lt;script&gt;alert(&#x27;xss&#x27;)&lt;/script&gt;'
"""

from __future__ import annotations

import html as html_module
import re

_ENTITY_REPLACEMENTS = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
}

_ESCAPE_PATTERN = re.compile("[&<>\"']")


def escape_html(text: str) -> str:
    """Escape HTML special characters in a single pass.

    Converts:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;
    - ' becomes &#x27;

    Replacement text is never rescanned, so an entity produced for ``&`` is
    not escaped a second time. Control characters pass through unchanged.

    Args:
        text: Text to escape

    Returns:
        Escaped text safe for element content and attribute values
    """
    if not text:
        return ""
    return _ESCAPE_PATTERN.sub(lambda m: _ENTITY_REPLACEMENTS[m.group()], text)


def unescape_html(text: str) -> str:
    """Reverse escape_html (and decode any other character references)."""
    if not text:
        return ""
    return html_module.unescape(text)


__all__ = ["escape_html", "unescape_html"]
