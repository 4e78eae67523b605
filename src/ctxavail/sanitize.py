"""Cell sanitizing and comma-list normalization.

Cells of the documentation table may carry Liquid directives such as
``{% ifversion ghes %}``. They are authoring artifacts, not content, and are
stripped by pattern. A cell holding an ``{% else %}`` branch has two
alternative values and cannot be flattened, so it is rejected.
"""
from __future__ import annotations

import html
import re

from ctxavail.errors import UnsupportedDirectiveError
from ctxavail.extraction import ELSE_DIRECTIVE

# Literal open/close marker pairs only; nesting is not understood.
_DIRECTIVE_RE = re.compile(r"{%[^%]+%}")


def sanitize_cell(text: str) -> str:
    """Strip templating directives from *text* and decode HTML escapes.

    Raises:
        UnsupportedDirectiveError: if *text* contains ``{% else %}``.
    """
    if ELSE_DIRECTIVE in text:
        raise UnsupportedDirectiveError(
            f"cannot strip template directives since it contains {ELSE_DIRECTIVE}: {text!r}"
        )
    return html.unescape(_DIRECTIVE_RE.sub("", text))


def normalize_key(text: str) -> str:
    """Trim a workflow key. Case and inner punctuation are preserved."""
    return text.strip()


def split_list(text: str) -> tuple[str, ...]:
    """Split a comma list into sorted, trimmed, lowercased tokens.

    >>> split_list("github, needs, Strategy")
    ('github', 'needs', 'strategy')
    >>> split_list("   ")
    ()
    """
    text = text.strip()
    if not text:
        return ()
    return tuple(sorted(part.strip().lower() for part in text.split(",")))
