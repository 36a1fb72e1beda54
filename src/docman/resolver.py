"""Locate bracketed reference markers and resolve them against the catalog."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .errors import MarkerError, UnresolvedIdError
from .models import Citation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Marker:
    """A ``[identifier]`` marker; ``end`` is the offset just past ``]``."""

    identifier: str
    start: int
    end: int


def scan_markers(text: str) -> List[Marker]:
    """Pair the i-th ``[`` with the i-th ``]`` and return the markers in order.

    Raises ``MarkerError`` when the bracket counts differ or when pairs
    overlap or nest, e.g. ``a] [b`` or ``[a [b]]``.
    """
    opens = [index for index, char in enumerate(text) if char == "["]
    closes = [index for index, char in enumerate(text) if char == "]"]
    if len(opens) != len(closes):
        raise MarkerError(
            f"Unbalanced brackets: {len(opens)} '[' but {len(closes)} ']'"
        )

    markers: List[Marker] = []
    for position, (start, stop) in enumerate(zip(opens, closes)):
        if stop < start:
            raise MarkerError(f"']' at offset {stop} closes before its '[' at offset {start}")
        if position + 1 < len(opens) and opens[position + 1] < stop:
            raise MarkerError(
                f"'[' at offset {opens[position + 1]} opens inside the marker starting at offset {start}"
            )
        markers.append(Marker(identifier=text[start + 1 : stop], start=start, end=stop + 1))
    return markers


def extract_ids(text: str) -> List[str]:
    """Return the distinct marker identifiers in lexicographic order."""
    ids = sorted({marker.identifier for marker in scan_markers(text)})
    logger.debug("Found %d distinct marker id(s)", len(ids))
    return ids


def resolve(ids: Iterable[str], catalog: Sequence[Citation]) -> List[Citation]:
    """Map each id to the first catalog record carrying it.

    Nothing is returned unless every id resolves.
    """
    resolved: List[Citation] = []
    missing: List[str] = []
    for citation_id in ids:
        match = next((citation for citation in catalog if citation.get_id() == citation_id), None)
        if match is None:
            missing.append(citation_id)
        else:
            resolved.append(match)
    if missing:
        raise UnresolvedIdError(missing)
    return resolved


__all__ = ["Marker", "scan_markers", "extract_ids", "resolve"]
