"""Flat block view of a markdown document.

Wraps markdown-it-py (CommonMark plus the GFM table rule) and exposes only
what the table extraction needs: the ordered sequence of top-level blocks,
with plain text for headings and table cells.

Text extraction mirrors how a rendered cell reads:
- text and code span contents are kept verbatim
- backslash escapes become the escaped character
- HTML entities keep their raw source form (``&lt;``); decoding them is
  left to :func:`ctxavail.sanitize.sanitize_cell`
- soft and hard breaks become a newline
- link/emphasis markup and raw inline HTML are dropped
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import TypeAlias

from markdown_it import MarkdownIt
from markdown_it.token import Token


# ---------------------------------------------------------------------------
# Block types
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Heading:
    """An ATX or setext heading."""

    level: int          # 1..6
    text: str


@dataclass(frozen=True, slots=True)
class Table:
    """A GFM pipe table. Rows exclude the header row."""

    header: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]


@dataclass(frozen=True, slots=True)
class OtherBlock:
    """Any other top-level block (paragraph, list, fence, ...)."""

    kind: str           # markdown-it token type without the "_open" suffix


Block: TypeAlias = Heading | Table | OtherBlock


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def _markdown() -> MarkdownIt:
    md = MarkdownIt("commonmark").enable("table")
    # Keep entity/escape tokens separate so inline_text() can tell them apart.
    md.disable("text_join", ignoreInvalid=True)
    return md


def parse_blocks(src: bytes) -> tuple[Block, ...]:
    """Parse *src* into its top-level blocks, in document order.

    Invalid UTF-8 sequences are replaced rather than rejected.
    """
    tokens = _markdown().parse(src.decode("utf-8", errors="replace"))
    blocks: list[Block] = []
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        end = _block_end(tokens, i)
        if tok.type == "heading_open":
            blocks.append(Heading(level=int(tok.tag[1:]), text=inline_text(tokens[i + 1])))
        elif tok.type == "table_open":
            blocks.append(_build_table(tokens[i:end + 1]))
        else:
            blocks.append(OtherBlock(kind=tok.type.removesuffix("_open")))
        i = end + 1
    return tuple(blocks)


def _block_end(tokens: list[Token], start: int) -> int:
    """Index of the token closing the block opened at *start*."""
    depth = 0
    for j in range(start, len(tokens)):
        depth += tokens[j].nesting
        if depth <= 0:
            return j
    return len(tokens) - 1


def _build_table(tokens: list[Token]) -> Table:
    header: tuple[str, ...] = ()
    rows: list[tuple[str, ...]] = []
    in_head = False
    cells: list[str] = []
    for j, tok in enumerate(tokens):
        if tok.type == "thead_open":
            in_head = True
        elif tok.type == "thead_close":
            in_head = False
        elif tok.type == "tr_open":
            cells = []
        elif tok.type in ("th_open", "td_open"):
            nxt = tokens[j + 1] if j + 1 < len(tokens) else None
            cells.append(inline_text(nxt) if nxt is not None and nxt.type == "inline" else "")
        elif tok.type == "tr_close":
            if in_head:
                header = tuple(cells)
            else:
                rows.append(tuple(cells))
    return Table(header=header, rows=tuple(rows))


def inline_text(token: Token) -> str:
    """Plain text of an inline token (see module docstring for the rules)."""
    parts: list[str] = []
    for child in token.children or []:
        if child.type in ("text", "code_inline"):
            parts.append(child.content)
        elif child.type == "text_special":
            parts.append(child.markup if child.info == "entity" else child.content)
        elif child.type in ("softbreak", "hardbreak"):
            parts.append("\n")
        elif child.type == "image":
            parts.append(inline_text(child))
    return "".join(parts)
