"""Diagnostic sink shared by the pipeline stages.

Stages take an explicit ``log`` argument instead of a module-level logger.
``None`` resolves to :data:`NULL_LOG`, which swallows every record, so the
stages stay pure functions of their input.
"""
from __future__ import annotations

import logging

NULL_LOG = logging.getLogger("ctxavail.null")
NULL_LOG.addHandler(logging.NullHandler())
NULL_LOG.propagate = False


def resolve_log(log: logging.Logger | None) -> logging.Logger:
    """Return *log*, or the no-op sink when it is None."""
    return NULL_LOG if log is None else log
