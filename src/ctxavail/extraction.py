"""Locate the context availability table and pull its rows.

Two stages:
    1. ``locate_table`` finds the target heading among the top-level blocks
       and returns the first table before the next heading of that level.
    2. ``extract_rows`` walks the table body, enforcing three cells per row
       and stopping at the ``{% else %}`` fallback row.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ctxavail.diagnostics import resolve_log
from ctxavail.errors import MalformedRowError, SectionNotFoundError
from ctxavail.markdown_blocks import Block, Heading, Table

TARGET_HEADING = "Context availability"
TARGET_HEADING_LEVEL = 3

# A row keyed by this directive starts a fallback branch with no static key.
ELSE_DIRECTIVE = "{% else %}"

ROW_WIDTH = 3


@dataclass(frozen=True, slots=True)
class Row:
    """Raw cell texts of one table row."""

    key: str
    contexts: str
    special_functions: str


def locate_table(
    blocks: Iterable[Block],
    *,
    heading: str = TARGET_HEADING,
    level: int = TARGET_HEADING_LEVEL,
    log: logging.Logger | None = None,
) -> Table:
    """Return the first table in the section titled *heading*.

    The heading must match exactly (case-sensitive) at *level*. The section
    ends at the next heading of the same level; headings of other levels do
    not end it.

    Raises:
        SectionNotFoundError: if the heading is missing or no table precedes
            the end of its section.
    """
    log = resolve_log(log)
    it = iter(blocks)

    for block in it:
        if isinstance(block, Heading) and block.level == level and block.text == heading:
            break
    else:
        raise SectionNotFoundError(f"no {heading!r} heading was found")

    for block in it:
        if isinstance(block, Heading) and block.level == level:
            break
        if isinstance(block, Table):
            log.debug("%r table was found (%d rows)", heading, len(block.rows))
            return block

    raise SectionNotFoundError(f"no {heading!r} table was found")


def extract_rows(table: Table, *, log: logging.Logger | None = None) -> list[Row]:
    """Return the body rows of *table* up to the ``{% else %}`` row.

    Raises:
        MalformedRowError: if any row before the stop row does not have
            exactly three cells.
    """
    log = resolve_log(log)
    rows: list[Row] = []
    for cells in table.rows:
        if len(cells) != ROW_WIDTH:
            raise MalformedRowError(
                f"expected {ROW_WIDTH} cells in table row but got {len(cells)}: {list(cells)!r}"
            )
        if cells[0] == ELSE_DIRECTIVE:
            log.debug("Found %s directive, ignoring the remaining rows", ELSE_DIRECTIVE)
            break
        rows.append(Row(key=cells[0], contexts=cells[1], special_functions=cells[2]))
    return rows
