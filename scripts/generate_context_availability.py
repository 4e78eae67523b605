#!/usr/bin/env python3
"""Generate the workflow-key context availability lookup.

Reads the "Context availability" table of the GitHub Actions contexts
documentation and emits a module exposing ``context_availability(key)``,
``SPECIAL_FUNCTION_NAMES`` and ``ALL_WORKFLOW_KEYS``.

Input/output selection:
    - two positionals: ``SRCFILE DSTFILE``
    - one positional: ``DSTFILE``, source fetched from ``--url``
    - none: source fetched from ``--url``, artifact written to stdout
    ``-`` as DSTFILE also means stdout.

Usage::

    python3 scripts/generate_context_availability.py > context_availability.py
    python3 scripts/generate_context_availability.py context_availability.py
    python3 scripts/generate_context_availability.py contexts.md context_availability.py
    python3 scripts/generate_context_availability.py --format json contexts.md -
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from ctxavail.emitter import OUTPUT_FORMATS
from ctxavail.errors import ContextAvailabilityError, UsageError
from ctxavail.io_utils import atomic_write_text, fetch_source, read_source
from ctxavail.pipeline import generate

log = logging.getLogger("generate_context_availability")

DEFAULT_SOURCE_URL = (
    "https://raw.githubusercontent.com/github/docs/main/"
    "content/actions/learn-github-actions/contexts.md"
)
STDOUT_PLACEHOLDER = "-"


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with 2."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(f"{message}\n{self.format_usage().rstrip()}")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="generate-context-availability",
        description="Generate the workflow key context availability lookup.",
        usage="%(prog)s [options] [[srcfile] dstfile]",
    )
    parser.add_argument(
        "paths", nargs="*", metavar="PATH",
        help="[[srcfile] dstfile]; '-' as dstfile writes to stdout",
    )
    parser.add_argument(
        "--url", default=DEFAULT_SOURCE_URL,
        help="Source markdown URL used when srcfile is not given",
    )
    parser.add_argument(
        "--format", dest="output_format", choices=OUTPUT_FORMATS, default="python",
        help="Artifact format (default: python)",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def resolve_paths(paths: list[str]) -> tuple[Path | None, Path | None]:
    """Split positionals into (source, destination).

    None as source means fetch from the URL; None as destination means stdout.
    """
    if len(paths) > 2:
        raise UsageError(f"expected at most 2 positional arguments but got {len(paths)}")
    src = Path(paths[0]) if len(paths) == 2 else None
    dst = None
    if paths and paths[-1] != STDOUT_PLACEHOLDER:
        dst = Path(paths[-1])
    return src, dst


def run(args: argparse.Namespace) -> None:
    src_path, dst_path = resolve_paths(args.paths)

    if src_path is not None:
        src = read_source(src_path, log=log)
    else:
        src = fetch_source(args.url, log=log)

    artifact = generate(src, output_format=args.output_format, log=log)

    if dst_path is None:
        sys.stdout.write(artifact)
        log.debug("Wrote output to <stdout>")
    else:
        atomic_write_text(dst_path, artifact)
        log.info("Wrote output to %s", dst_path)


def main(argv: list[str] | None = None) -> int:
    try:
        args = build_parser().parse_args(argv)
    except UsageError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        run(args)
    except ContextAvailabilityError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: could not write output: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
