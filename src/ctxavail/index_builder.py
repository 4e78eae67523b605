"""Build the key and special-function indexes from extracted rows."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from ctxavail.diagnostics import resolve_log
from ctxavail.errors import DuplicateKeyError
from ctxavail.extraction import Row
from ctxavail.sanitize import normalize_key, sanitize_cell, split_list

# Returned for keys the table does not list.
NOT_FOUND: tuple[tuple[str, ...], tuple[str, ...]] = ((), ())


@dataclass(frozen=True, slots=True)
class NormalizedRecord:
    """Contexts and special functions available at one workflow key."""

    key: str
    contexts: tuple[str, ...]            # sorted, lowercase; may be empty
    special_functions: tuple[str, ...]   # sorted, lowercase; may be empty


@dataclass(frozen=True, slots=True)
class ContextIndex:
    """Read-only result of one extraction run.

    ``records`` keeps table order. ``special_functions`` maps each function
    to the keys allowing it, in table order. ``sorted_keys`` lists every
    accepted key lexicographically.
    """

    records: Mapping[str, NormalizedRecord]
    special_functions: Mapping[str, tuple[str, ...]]
    sorted_keys: tuple[str, ...]

    def lookup(self, key: str) -> tuple[tuple[str, ...], tuple[str, ...]]:
        """Return ``(contexts, special_functions)`` for *key*, or NOT_FOUND."""
        record = self.records.get(key)
        if record is None:
            return NOT_FOUND
        return (record.contexts, record.special_functions)


def normalize_row(row: Row) -> NormalizedRecord | None:
    """Sanitize and normalize one row. Returns None for an empty key."""
    key = normalize_key(sanitize_cell(row.key))
    contexts = split_list(sanitize_cell(row.contexts))
    special_functions = split_list(sanitize_cell(row.special_functions))
    if not key:
        return None
    return NormalizedRecord(key=key, contexts=contexts, special_functions=special_functions)


def build_index(rows: Iterable[Row], *, log: logging.Logger | None = None) -> ContextIndex:
    """Accumulate *rows* into a :class:`ContextIndex`.

    Rows with an empty key are skipped.

    Raises:
        UnsupportedDirectiveError: if a cell holds an ``{% else %}`` branch.
        DuplicateKeyError: if two rows share a key.
    """
    log = resolve_log(log)
    records: dict[str, NormalizedRecord] = {}
    funcs: dict[str, list[str]] = {}

    for row in rows:
        record = normalize_row(row)
        if record is None:
            log.debug("Skip empty key at %r", row)
            continue
        if record.key in records:
            raise DuplicateKeyError(f"workflow key {record.key!r} appears in more than one row")
        records[record.key] = record
        for name in record.special_functions:
            funcs.setdefault(name, []).append(record.key)
        log.debug("Parsed table row: %s", record.key)

    log.debug("Parsed %d table rows", len(records))
    return ContextIndex(
        records=MappingProxyType(records),
        special_functions=MappingProxyType({k: tuple(v) for k, v in funcs.items()}),
        sorted_keys=tuple(sorted(records)),
    )
