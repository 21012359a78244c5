"""Tests for line classification and block assembly."""

import pytest

from safemark.blocks import (
    BlockAssembler,
    ClassifiedLine,
    LineKind,
    LineMode,
    assemble,
    classify_line,
    next_mode,
)


class TestClassifyLine:
    """Per-line classification, first match wins."""

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("    code", ClassifiedLine(LineKind.CODE, "code")),
            ("      indented more", ClassifiedLine(LineKind.CODE, "  indented more")),
            ("    * not a list", ClassifiedLine(LineKind.CODE, "* not a list")),
            ("* item", ClassifiedLine(LineKind.LIST_ITEM, "item")),
            ("*   spaced", ClassifiedLine(LineKind.LIST_ITEM, "spaced")),
            ("> quote", ClassifiedLine(LineKind.QUOTE, "quote")),
            (">tight", ClassifiedLine(LineKind.QUOTE, "tight")),
            (">", ClassifiedLine(LineKind.QUOTE, "")),
            ("", ClassifiedLine(LineKind.BLANK, "")),
            ("   ", ClassifiedLine(LineKind.BLANK, "")),
            ("  text  ", ClassifiedLine(LineKind.TEXT, "text")),
            ("**bold**", ClassifiedLine(LineKind.TEXT, "**bold**")),
            ("*italic*", ClassifiedLine(LineKind.TEXT, "*italic*")),
        ],
    )
    def test_outside_code(self, line: str, expected: ClassifiedLine) -> None:
        assert classify_line(line, LineMode.NONE) == expected

    def test_whitespace_line_is_blank_outside_code(self) -> None:
        assert classify_line("      ", LineMode.PARAGRAPH).kind is LineKind.BLANK

    def test_whitespace_line_continues_code(self) -> None:
        assert classify_line("      ", LineMode.CODE_BLOCK) == ClassifiedLine(LineKind.CODE, "  ")


class TestTransitions:
    """The transition function is total."""

    @pytest.mark.parametrize("kind", list(LineKind))
    def test_every_kind_has_a_mode(self, kind: LineKind) -> None:
        assert isinstance(next_mode(kind), LineMode)

    def test_blank_returns_to_none(self) -> None:
        assert next_mode(LineKind.BLANK) is LineMode.NONE

    def test_mode_tracks_last_line(self) -> None:
        assembler = BlockAssembler()
        assert assembler.mode is LineMode.NONE
        assembler.feed("* a")
        assert assembler.mode is LineMode.LIST
        assembler.feed("> q")
        assert assembler.mode is LineMode.BLOCKQUOTE
        assembler.feed("    c")
        assert assembler.mode is LineMode.CODE_BLOCK
        assembler.feed("text")
        assert assembler.mode is LineMode.PARAGRAPH
        assembler.feed("")
        assert assembler.mode is LineMode.NONE


class TestAssemble:
    """Block markup for line sequences."""

    def test_empty(self) -> None:
        assert assemble([]) == ""
        assert assemble(["", "  "]) == ""

    def test_single_list(self) -> None:
        assert assemble(["* a", "* b", "* c"]) == "<ul><li>a</li><li>b</li><li>c</li></ul>"

    def test_single_blockquote(self) -> None:
        assert assemble(["> line one", "> line two"]) == (
            "<blockquote>line one<br />line two<br /></blockquote>"
        )

    def test_code_block_closes_at_unindented_line(self) -> None:
        assert assemble(["    x = 1", "    y = 2", "after"]) == (
            "<pre><code>x = 1\ny = 2\n</code></pre><p>after</p>"
        )

    def test_code_is_escaped_but_not_formatted(self) -> None:
        assert assemble(["    **a**  <b>"]) == "<pre><code>**a**  &lt;b&gt;\n</code></pre>"

    def test_whitespace_line_inside_code(self) -> None:
        assert assemble(["    a", "    ", "    b"]) == "<pre><code>a\n\nb\n</code></pre>"

    def test_empty_line_splits_code(self) -> None:
        assert assemble(["    a", "", "    b"]) == (
            "<pre><code>a\n</code></pre><pre><code>b\n</code></pre>"
        )

    def test_paragraph_continuation(self) -> None:
        assert assemble(["one", "two"]) == "<p>one\ntwo</p>"

    def test_blank_line_splits_paragraphs(self) -> None:
        assert assemble(["one", "", "two"]) == "<p>one</p><p>two</p>"

    def test_list_then_text(self) -> None:
        assert assemble(["* a", "text"]) == "<ul><li>a</li></ul><p>text</p>"

    def test_text_then_list(self) -> None:
        assert assemble(["text", "* a"]) == "<p>text</p><ul><li>a</li></ul>"

    def test_quote_then_list(self) -> None:
        assert assemble(["> q", "* a"]) == "<blockquote>q<br /></blockquote><ul><li>a</li></ul>"

    def test_list_items_formatted(self) -> None:
        assert assemble(["* **a**", "* <b>"]) == (
            "<ul><li><strong>a</strong></li><li>&lt;b&gt;</li></ul>"
        )

    def test_quote_lines_formatted(self) -> None:
        assert assemble(["> *a*"]) == "<blockquote><em>a</em><br /></blockquote>"


class TestUnterminatedBlocks:
    """Whatever is open at end of input is closed exactly once."""

    @pytest.mark.parametrize(
        "lines,closing",
        [
            (["* a"], "</ul>"),
            (["> a"], "</blockquote>"),
            (["    a"], "</code></pre>"),
            (["a"], "</p>"),
        ],
    )
    def test_closed_at_eof(self, lines: list[str], closing: str) -> None:
        html = assemble(lines)
        assert html.endswith(closing)
        assert html.count(closing) == 1

    def test_finish_is_idempotent(self) -> None:
        assembler = BlockAssembler()
        assembler.feed("* a")
        first = assembler.finish()
        assert assembler.finish() == first
        assert first.count("</ul>") == 1
        assert assembler.mode is LineMode.NONE
