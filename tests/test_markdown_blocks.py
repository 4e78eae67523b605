"""Tests for ctxavail.markdown_blocks."""
from __future__ import annotations

from ctxavail.markdown_blocks import Heading, OtherBlock, Table, parse_blocks


class TestParseBlocks:
    def test_top_level_order(self) -> None:
        src = b"# Title\n\nSome prose.\n\n### Sub\n\n| a | b |\n|---|---|\n| 1 | 2 |\n"
        blocks = parse_blocks(src)
        assert blocks == (
            Heading(level=1, text="Title"),
            OtherBlock(kind="paragraph"),
            Heading(level=3, text="Sub"),
            Table(header=("a", "b"), rows=(("1", "2"),)),
        )

    def test_empty_document(self) -> None:
        assert parse_blocks(b"") == ()

    def test_nested_blocks_are_opaque(self) -> None:
        src = b"- item\n\n  ### Not top level\n\n> quoted\n"
        blocks = parse_blocks(src)
        assert blocks == (OtherBlock(kind="bullet_list"), OtherBlock(kind="blockquote"))

    def test_setext_heading(self) -> None:
        blocks = parse_blocks(b"Title\n-----\n")
        assert blocks == (Heading(level=2, text="Title"),)

    def test_invalid_utf8_is_replaced(self) -> None:
        blocks = parse_blocks(b"### Bad \xff byte\n")
        assert blocks == (Heading(level=3, text="Bad \ufffd byte"),)


class TestCellText:
    def _cells(self, row: str) -> tuple[str, ...]:
        src = ("| x | y | z |\n|---|---|---|\n" + row + "\n").encode("utf-8")
        (table,) = parse_blocks(src)
        assert isinstance(table, Table)
        return table.rows[0]

    def test_code_span_content(self) -> None:
        assert self._cells("| `jobs.<job_id>.if` | `github, needs` | |") == (
            "jobs.<job_id>.if",
            "github, needs",
            "",
        )

    def test_entities_keep_source_form(self) -> None:
        cells = self._cells("| a &amp; b | &lt;x&gt; | c |")
        assert cells == ("a &amp; b", "&lt;x&gt;", "c")

    def test_backslash_escape(self) -> None:
        assert self._cells(r"| a\*b | c | d |")[0] == "a*b"

    def test_inline_html_and_emphasis_dropped(self) -> None:
        cells = self._cells("| <code>run-name</code> | **github** | [link](https://x) |")
        assert cells == ("run-name", "github", "link")

    def test_templating_directives_are_plain_text(self) -> None:
        cells = self._cells("| {% ifversion ghes %}`env`{% endif %} | a | b |")
        assert cells[0] == "{% ifversion ghes %}env{% endif %}"

    def test_short_rows_are_padded(self) -> None:
        assert self._cells("| only |") == ("only", "", "")

    def test_header_kept_apart_from_rows(self) -> None:
        src = b"| k | c | f |\n|---|---|---|\n| 1 | 2 | 3 |\n| 4 | 5 | 6 |\n"
        (table,) = parse_blocks(src)
        assert isinstance(table, Table)
        assert table.header == ("k", "c", "f")
        assert table.rows == (("1", "2", "3"), ("4", "5", "6"))
