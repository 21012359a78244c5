"""Inline formatting for a single line of user text.

The line is escaped first, then an ordered sequence of regex substitutions
turns the remaining markdown markers into a closed set of elements:

1. Links ``[label](target)`` -> ``<a>`` with a sanitized ``href``
2. Bold ``**text**`` -> ``<strong>``
3. Italics ``*text*`` -> ``<em>``
4. Strikethrough ``~~text~~`` -> ``<del>``
5. Superscript ``word^word2`` -> ``word<sup>word2</sup>``

Bold runs before italics so a consumed ``**`` pair is never read as two
italic markers. Every pattern is non-greedy and markers that never close are
left as literal (escaped) text.

Finished anchors are swapped out for ``<N>`` placeholders while the emphasis
passes run. Escaped text cannot contain a raw ``<``, so a placeholder can
neither be forged by input nor matched by an emphasis pattern, and no marker
inside an ``href`` is ever interpreted.

Example:
    >>> from safemark.inline import format_inline
    >>> format_inline("**bold** and <i>")
    '<strong>bold</strong> and &lt;i&gt;'
"""

from __future__ import annotations

import re
from typing import NamedTuple

from safemark.escape import escape_html, unescape_html
from safemark.urls import sanitize_href

# Runs on escaped text. The target stops at the first ")" or
# whitespace, so "javascript:alert(1)" is captured as "javascript:alert(1"
# and still goes through the sanitizer.
_LINK_PATTERN = re.compile(r"\[([^\[\]]+)\]\(([^)\s]+)\)")

_PLACEHOLDER_PATTERN = re.compile(r"<(\d+)>")

# Only starts at a token boundary, keeping long unbroken words linear
_SUPERSCRIPT_PATTERN = re.compile(r"(?<![^\s<>^])([^\s<>^]+)\^([^\s<>^]+)")

_TAG_PATTERN = re.compile(r"<(/?)(strong|em|del|sup)>")

ANCHOR_ATTRIBUTES = 'target="_blank" rel="noopener noreferrer"'


class EmphasisRule(NamedTuple):
    """One delimiter-pair substitution."""

    name: str
    pattern: re.Pattern[str]
    tag: str


# Order matters: bold must consume "**" before italics scans for "*".
EMPHASIS_RULES: tuple[EmphasisRule, ...] = (
    EmphasisRule("bold", re.compile(r"\*\*(.+?)\*\*"), "strong"),
    EmphasisRule("italic", re.compile(r"\*(.+?)\*"), "em"),
    EmphasisRule("strikethrough", re.compile(r"~~(.+?)~~"), "del"),
)


def _is_balanced(fragment: str) -> bool:
    """Check that every emphasis tag in ``fragment`` is closed in order."""
    stack: list[str] = []
    for match in _TAG_PATTERN.finditer(fragment):
        closing, name = match.groups()
        if not closing:
            stack.append(name)
        elif not stack or stack.pop() != name:
            return False
    return not stack


def _apply_rule(text: str, rule: EmphasisRule) -> str:
    parts: list[str] = []
    pos = 0
    search_from = 0
    while (match := rule.pattern.search(text, search_from)) is not None:
        content = match.group(1)
        # Wrapping would cross an element boundary; keep this opening marker
        # literal and retry from the next character so later pairs still match.
        if not _is_balanced(content):
            search_from = match.start() + 1
            continue
        parts.append(text[pos : match.start()])
        parts.append(f"<{rule.tag}>{content}</{rule.tag}>")
        pos = search_from = match.end()
    parts.append(text[pos:])
    return "".join(parts)


def apply_emphasis(escaped: str) -> str:
    """Run the bold, italic, strikethrough and superscript passes.

    Args:
        escaped: Text that has already been through escape_html

    Returns:
        Text with emphasis markers replaced by elements
    """
    for rule in EMPHASIS_RULES:
        escaped = _apply_rule(escaped, rule)
    return _SUPERSCRIPT_PATTERN.sub(r"\1<sup>\2</sup>", escaped)


def render_anchor(label: str, target: str) -> str:
    """Build an anchor from a raw (unescaped) label and target."""
    href = sanitize_href(target)
    label_html = apply_emphasis(escape_html(label))
    return f'<a href="{href}" {ANCHOR_ATTRIBUTES}>{label_html}</a>'


def format_inline(text: str) -> str:
    """Escape one line and apply inline formatting.

    Never raises; unmatched or malformed markers stay as escaped text.

    Args:
        text: Raw line of user text

    Returns:
        Safe markup for the line
    """
    escaped = escape_html(text)
    anchors: list[str] = []

    def stash_link(match: re.Match[str]) -> str:
        # The line is already escaped; decode so the label and target are
        # each escaped exactly once by render_anchor.
        label, target = match.groups()
        anchors.append(render_anchor(unescape_html(label), unescape_html(target)))
        return f"<{len(anchors) - 1}>"

    formatted = apply_emphasis(_LINK_PATTERN.sub(stash_link, escaped))
    if not anchors:
        return formatted
    return _PLACEHOLDER_PATTERN.sub(lambda m: anchors[int(m.group(1))], formatted)


__all__ = [
    "ANCHOR_ATTRIBUTES",
    "EMPHASIS_RULES",
    "EmphasisRule",
    "apply_emphasis",
    "format_inline",
    "render_anchor",
]
