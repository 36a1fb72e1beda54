"""Exception hierarchy for citation loading, lookup, and resolution."""
from __future__ import annotations

from typing import Iterable, List


class DocmanError(Exception):
    """Base class for every failure that aborts a run."""


class ConfigurationError(DocmanError):
    """The citation file could not be read or holds an invalid record."""


class MetadataLookupError(DocmanError):
    """The metadata service could not produce a complete record."""


class MarkerError(DocmanError):
    """Bracket markers in the document text are malformed."""


class UnresolvedIdError(DocmanError):
    """One or more markers reference an id that is not in the catalog."""

    def __init__(self, missing: Iterable[str]):
        self.missing: List[str] = list(missing)
        joined = ", ".join(repr(item) for item in self.missing)
        super().__init__(f"No citation found for id(s): {joined}")


class DocumentIOError(DocmanError):
    """The document could not be read or the output could not be written."""


class TypeMismatchError(DocmanError, TypeError):
    """A citation was cloned from a citation of a different kind."""


__all__ = [
    "DocmanError",
    "ConfigurationError",
    "MetadataLookupError",
    "MarkerError",
    "UnresolvedIdError",
    "DocumentIOError",
    "TypeMismatchError",
]
