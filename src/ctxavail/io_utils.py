"""I/O utilities: source reading, HTTP fetch, JSON encoding and atomic writes.

Every failure to obtain the source document surfaces as FetchError so the
CLI can report it with a single line.
"""
from __future__ import annotations

import http.client
import logging
import os
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any

import orjson

from ctxavail.diagnostics import resolve_log
from ctxavail.errors import FetchError

FETCH_TIMEOUT_SECONDS = 30.0
USER_AGENT = "generate-context-availability"


def read_source(path: Path, *, log: logging.Logger | None = None) -> bytes:
    """Read the markdown source from a local file."""
    log = resolve_log(log)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise FetchError(f"could not read {path}: {exc}") from exc
    log.debug("Read %d bytes from %s", len(data), path)
    return data


def fetch_source(
    url: str,
    *,
    timeout: float = FETCH_TIMEOUT_SECONDS,
    log: logging.Logger | None = None,
) -> bytes:
    """Download the markdown source. One request, no retry."""
    log = resolve_log(log)
    log.debug("Fetching source from URL: %s", url)
    try:
        req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT}, method="GET")
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            status = resp.status
            if not 200 <= status < 300:
                raise FetchError(f"request was not successful for {url}: {status} {resp.reason}")
            body = resp.read()
    except urllib.error.HTTPError as exc:
        raise FetchError(f"request was not successful for {url}: {exc.code} {exc.reason}") from exc
    except (urllib.error.URLError, OSError) as exc:
        raise FetchError(f"could not fetch {url}: {exc}") from exc
    except http.client.HTTPException as exc:
        raise FetchError(f"could not fetch body for {url}: {exc!r}") from exc
    except ValueError as exc:
        raise FetchError(f"could not fetch {url}: {exc}") from exc
    log.debug("Fetched %d bytes from %s", len(body), url)
    return body


def dump_json_bytes(obj: Any) -> bytes:
    """Serialize *obj* as indented JSON with sorted object keys."""
    return orjson.dumps(obj, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS)


def atomic_write_text(path: Path, text: str) -> None:
    """Atomic write: write to temp file then os.replace()."""
    tmp = Path(f"{path}.tmp")
    tmp.parent.mkdir(parents=True, exist_ok=True)
    try:
        tmp.write_text(text, encoding="utf-8")
        os.replace(str(tmp), str(path))
    finally:
        tmp.unlink(missing_ok=True)
