"""Line-oriented block assembly.

A single-pass state machine over newline-split lines. Each line is
classified, the classification drives one transition of the current
LineMode, and the transition decides which container is closed and opened
before the line's own markup is appended.

Line classification (first match wins):
- four spaces      -> code line (escaped only, whitespace kept)
- "* " prefix      -> list item
- ">" prefix       -> blockquote line
- blank            -> separator
- anything else    -> paragraph text

Example:
    >>> from safemark.blocks import assemble
    >>> assemble(["* a", "* b", "", "text"])
    '<ul><li>a</li><li>b</li></ul><p>text</p>'
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from safemark.escape import escape_html
from safemark.inline import format_inline
from safemark.stringbuilder import StringBuilder

if TYPE_CHECKING:
    from collections.abc import Iterable

CODE_INDENT = "    "

_LIST_ITEM_PATTERN = re.compile(r"\*\s+(.*)")
_QUOTE_PATTERN = re.compile(r">\s?(.*)")


class LineMode(Enum):
    """Block the assembler is currently inside.

    Exactly one mode is active at a time:
    - NONE: Between blocks
    - PARAGRAPH: Inside a paragraph (plain text lines)
    - LIST: Inside an unordered list
    - BLOCKQUOTE: Inside a blockquote
    - CODE_BLOCK: Inside a preformatted code block
    """

    NONE = auto()
    PARAGRAPH = auto()
    LIST = auto()
    BLOCKQUOTE = auto()
    CODE_BLOCK = auto()


class LineKind(Enum):
    """Classification of a single input line."""

    CODE = auto()
    LIST_ITEM = auto()
    QUOTE = auto()
    BLANK = auto()
    TEXT = auto()


@dataclass(frozen=True, slots=True)
class ClassifiedLine:
    """A line with its kind and the content left after the block prefix."""

    kind: LineKind
    content: str


_MODE_FOR_KIND: dict[LineKind, LineMode] = {
    LineKind.CODE: LineMode.CODE_BLOCK,
    LineKind.LIST_ITEM: LineMode.LIST,
    LineKind.QUOTE: LineMode.BLOCKQUOTE,
    LineKind.BLANK: LineMode.NONE,
    LineKind.TEXT: LineMode.PARAGRAPH,
}

_OPEN_TAGS: dict[LineMode, str] = {
    LineMode.NONE: "",
    LineMode.PARAGRAPH: "<p>",
    LineMode.LIST: "<ul>",
    LineMode.BLOCKQUOTE: "<blockquote>",
    LineMode.CODE_BLOCK: "<pre><code>",
}

_CLOSE_TAGS: dict[LineMode, str] = {
    LineMode.NONE: "",
    LineMode.PARAGRAPH: "</p>",
    LineMode.LIST: "</ul>",
    LineMode.BLOCKQUOTE: "</blockquote>",
    LineMode.CODE_BLOCK: "</code></pre>",
}


def classify_line(line: str, mode: LineMode) -> ClassifiedLine:
    """Classify one line given the mode it is read in.

    A whitespace-only line continues an open code block (keeping the blank
    line inside the code) but is a plain separator everywhere else.
    """
    is_blank = not line.strip()
    if line.startswith(CODE_INDENT) and (not is_blank or mode is LineMode.CODE_BLOCK):
        return ClassifiedLine(LineKind.CODE, line[len(CODE_INDENT) :])
    if is_blank:
        return ClassifiedLine(LineKind.BLANK, "")
    if match := _LIST_ITEM_PATTERN.match(line):
        return ClassifiedLine(LineKind.LIST_ITEM, match.group(1))
    if match := _QUOTE_PATTERN.match(line):
        return ClassifiedLine(LineKind.QUOTE, match.group(1))
    return ClassifiedLine(LineKind.TEXT, line.strip())


def next_mode(kind: LineKind) -> LineMode:
    """Transition function: the mode a line of ``kind`` leaves us in.

    Total over LineKind; the result does not depend on the previous mode,
    only whether a container must be closed and reopened does.
    """
    return _MODE_FOR_KIND[kind]


class BlockAssembler:
    """Consumes lines in order and accumulates block markup.

    Usage:
        >>> assembler = BlockAssembler()
        >>> for line in ["> one", "> two"]:
        ...     assembler.feed(line)
        >>> assembler.finish()
        '<blockquote>one<br />two<br /></blockquote>'

    Thread Safety:
        Instances hold per-render state. Create one per render; do not share.
    """

    __slots__ = ("_finished", "_mode", "_sb")

    def __init__(self) -> None:
        self._mode = LineMode.NONE
        self._sb = StringBuilder()
        self._finished = False

    @property
    def mode(self) -> LineMode:
        """Currently active mode."""
        return self._mode

    def feed(self, line: str) -> None:
        """Consume one line (without its trailing newline)."""
        classified = classify_line(line, self._mode)
        target = next_mode(classified.kind)

        if target is not self._mode:
            self._sb.append(_CLOSE_TAGS[self._mode])
            self._sb.append(_OPEN_TAGS[target])
        elif target is LineMode.PARAGRAPH:
            self._sb.append("\n")
        self._mode = target

        self._append_body(classified)

    def _append_body(self, classified: ClassifiedLine) -> None:
        match classified.kind:
            case LineKind.CODE:
                self._sb.append(escape_html(classified.content))
                self._sb.append("\n")
            case LineKind.LIST_ITEM:
                self._sb.append(f"<li>{format_inline(classified.content)}</li>")
            case LineKind.QUOTE:
                self._sb.append(f"{format_inline(classified.content)}<br />")
            case LineKind.TEXT:
                self._sb.append(format_inline(classified.content))
            case LineKind.BLANK:
                pass

    def finish(self) -> str:
        """Close any open block and return the assembled markup.

        Calling finish() more than once returns the same markup; the open
        block is closed only the first time.
        """
        if not self._finished:
            self._sb.append(_CLOSE_TAGS[self._mode])
            self._mode = LineMode.NONE
            self._finished = True
        return self._sb.build()


def assemble(lines: Iterable[str]) -> str:
    """Run a fresh BlockAssembler over ``lines`` and return its markup."""
    assembler = BlockAssembler()
    for line in lines:
        assembler.feed(line)
    return assembler.finish()


__all__ = [
    "CODE_INDENT",
    "BlockAssembler",
    "ClassifiedLine",
    "LineKind",
    "LineMode",
    "assemble",
    "classify_line",
    "next_mode",
]
