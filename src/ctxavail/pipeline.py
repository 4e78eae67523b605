"""End-to-end generation: markdown bytes in, artifact text out.

``generate`` performs no I/O, so identical input always yields an identical
artifact.
"""
from __future__ import annotations

import logging

from ctxavail.diagnostics import resolve_log
from ctxavail.emitter import emit_artifact
from ctxavail.extraction import extract_rows, locate_table
from ctxavail.index_builder import ContextIndex, build_index
from ctxavail.markdown_blocks import parse_blocks


def build_context_index(src: bytes, *, log: logging.Logger | None = None) -> ContextIndex:
    """Parse *src* and index its context availability table."""
    log = resolve_log(log)
    table = locate_table(parse_blocks(src), log=log)
    rows = extract_rows(table, log=log)
    return build_index(rows, log=log)


def generate(
    src: bytes,
    *,
    output_format: str = "python",
    log: logging.Logger | None = None,
) -> str:
    """Return the artifact text for the markdown document *src*."""
    log = resolve_log(log)
    index = build_context_index(src, log=log)
    log.info("Indexed %d workflow keys and %d special functions",
             len(index.sorted_keys), len(index.special_functions))
    return emit_artifact(index, output_format=output_format, log=log)
