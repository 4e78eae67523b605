"""Render a ContextIndex as a Python module or a JSON document.

Both renderings expose the same three surfaces:
- a keyed lookup returning ``(contexts, special_functions)``, with two empty
  sequences for unknown keys
- a reverse index from special function to workflow keys, in table order
- the sorted list of every workflow key

The Python rendering is passed through black, which also acts as the final
syntax check.
"""
from __future__ import annotations

import logging

import black
import orjson

from ctxavail.diagnostics import resolve_log
from ctxavail.errors import FormattingError
from ctxavail.index_builder import ContextIndex
from ctxavail.io_utils import dump_json_bytes

OUTPUT_FORMATS: tuple[str, ...] = ("python", "json")

DOC_PAGE_URL = (
    "https://docs.github.com/en/actions/learn-github-actions/contexts#context-availability"
)
GENERATOR = "scripts/generate_context_availability.py"

_PY_HEADER = f'''\
# Code generated by {GENERATOR}. DO NOT EDIT.
"""Contexts and special functions available at each GitHub Actions workflow key.

Generated from {DOC_PAGE_URL}
"""
from __future__ import annotations

from types import MappingProxyType
'''

_PY_LOOKUP = '''
_NOT_FOUND: tuple[tuple[str, ...], tuple[str, ...]] = ((), ())


def context_availability(key: str) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Return the contexts and special functions available at *key*.

    The first value lists the available contexts; empty means any context.
    The second value lists the available special functions; empty means none.
    *key* is a workflow key such as ``"jobs.<job_id>.concurrency"``. Unknown
    keys give two empty tuples.
    """
    return _CONTEXT_AVAILABILITY.get(key, _NOT_FOUND)
'''


def render_python(index: ContextIndex) -> str:
    """Unformatted Python source for *index*."""
    lines = [_PY_HEADER, ""]

    lines.append("_CONTEXT_AVAILABILITY = MappingProxyType({")
    for key, record in index.records.items():
        lines.append(f"    {key!r}: ({record.contexts!r}, {record.special_functions!r}),")
    lines.append("})")
    lines.append(_PY_LOOKUP)

    lines.append("")
    lines.append("# Special function name -> workflow keys where it is available.")
    lines.append("SPECIAL_FUNCTION_NAMES = MappingProxyType({")
    for name in sorted(index.special_functions):
        lines.append(f"    {name!r}: {index.special_functions[name]!r},")
    lines.append("})")

    lines.append("")
    lines.append("# Every workflow key, sorted. Used by verification tooling.")
    lines.append(f"ALL_WORKFLOW_KEYS = {index.sorted_keys!r}")
    return "\n".join(lines) + "\n"


def format_python(source: str) -> str:
    """Run *source* through black."""
    try:
        return black.format_str(source, mode=black.Mode())
    except black.InvalidInput as exc:
        raise FormattingError(f"could not format Python source: {exc}") from exc


def render_json(index: ContextIndex) -> str:
    """JSON document for *index*."""
    payload = {
        "context_availability": {
            key: {
                "contexts": list(record.contexts),
                "special_functions": list(record.special_functions),
            }
            for key, record in index.records.items()
        },
        "special_function_names": {
            name: list(keys) for name, keys in index.special_functions.items()
        },
        "all_workflow_keys": list(index.sorted_keys),
    }
    try:
        return dump_json_bytes(payload).decode("utf-8") + "\n"
    except orjson.JSONEncodeError as exc:
        raise FormattingError(f"could not encode JSON: {exc}") from exc


def emit_artifact(
    index: ContextIndex,
    *,
    output_format: str = "python",
    log: logging.Logger | None = None,
) -> str:
    """Render and format *index* in *output_format*."""
    log = resolve_log(log)
    if output_format == "python":
        text = format_python(render_python(index))
    elif output_format == "json":
        text = render_json(index)
    else:
        raise ValueError(f"unknown output format {output_format!r}; expected one of {OUTPUT_FORMATS}")
    log.debug("Rendered %s artifact (%d bytes)", output_format, len(text.encode("utf-8")))
    return text
