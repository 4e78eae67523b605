"""Error kinds raised by the context availability generator.

Every error is fatal for the run. The CLI maps all of them to exit status 1
and prints the message as a single diagnostic line.
"""
from __future__ import annotations


class ContextAvailabilityError(RuntimeError):
    """Base class for every failure of a generator run."""


class UsageError(ContextAvailabilityError):
    """Raised when the command line has the wrong shape."""


class FetchError(ContextAvailabilityError):
    """Raised when the source document cannot be read or downloaded."""


class SectionNotFoundError(ContextAvailabilityError):
    """Raised when the target heading or its table is missing."""


class MalformedRowError(ContextAvailabilityError):
    """Raised when a table row does not have exactly three cells."""


class UnsupportedDirectiveError(ContextAvailabilityError):
    """Raised when a cell embeds a conditional branch that cannot be flattened."""


class DuplicateKeyError(ContextAvailabilityError):
    """Raised when the same workflow key is listed by two table rows."""


class FormattingError(ContextAvailabilityError):
    """Raised when the emitted artifact fails final formatting."""
