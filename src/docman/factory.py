"""Build citation records from a parsed JSON tree."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

from .errors import ConfigurationError
from .lookup import MetadataLookupClient
from .models import CITATION_TYPES, Article, Book, Citation, WebPage

logger = logging.getLogger(__name__)


def _has_string(entry: Mapping[str, Any], key: str) -> bool:
    return isinstance(entry.get(key), str)


def _has_int(entry: Mapping[str, Any], key: str) -> bool:
    value = entry.get(key)
    return isinstance(value, int) and not isinstance(value, bool)


def _require_lookup(lookup: Optional[MetadataLookupClient], kind: str, citation_id: str) -> MetadataLookupClient:
    if lookup is None:
        raise ConfigurationError(
            f"Citation {citation_id!r} ({kind}) needs a metadata lookup but none is configured"
        )
    return lookup


def _build_book(entry: Mapping[str, Any], citation_id: str, lookup: Optional[MetadataLookupClient]) -> Optional[Book]:
    if all(_has_string(entry, key) for key in ("author", "title", "publisher", "year")):
        return Book(
            id=citation_id,
            author=entry["author"],
            title=entry["title"],
            publisher=entry["publisher"],
            year=entry["year"],
        )
    if not _has_string(entry, "isbn"):
        return None
    return Book.from_isbn(citation_id, entry["isbn"], _require_lookup(lookup, "book", citation_id))


def _build_webpage(entry: Mapping[str, Any], citation_id: str, lookup: Optional[MetadataLookupClient]) -> Optional[WebPage]:
    if not _has_string(entry, "url"):
        return None
    if _has_string(entry, "title"):
        return WebPage(id=citation_id, title=entry["title"], url=entry["url"])
    return WebPage.from_url(citation_id, entry["url"], _require_lookup(lookup, "webpage", citation_id))


def _build_article(entry: Mapping[str, Any], citation_id: str) -> Optional[Article]:
    if not all(_has_string(entry, key) for key in ("title", "author", "journal")):
        return None
    if not all(_has_int(entry, key) for key in ("year", "volume", "issue")):
        return None
    return Article(
        id=citation_id,
        title=entry["title"],
        author=entry["author"],
        journal=entry["journal"],
        year=entry["year"],
        volume=entry["volume"],
        issue=entry["issue"],
    )


def build_citation(
    entry: Any,
    lookup: Optional[MetadataLookupClient] = None,
    strict: bool = False,
) -> Optional[Citation]:
    """Return a citation for ``entry`` or ``None`` when it is not a citation node.

    A node with a recognized ``type`` but missing or ill-typed fields is
    skipped with a warning; with ``strict`` it raises ``ConfigurationError``.
    Lookup failures always propagate.
    """
    if not isinstance(entry, Mapping):
        return None
    if not _has_string(entry, "type") or not _has_string(entry, "id"):
        return None

    kind = entry["type"]
    if kind not in CITATION_TYPES:
        return None

    citation_id = entry["id"]
    citation: Optional[Citation] = None
    if citation_id and kind == "book":
        citation = _build_book(entry, citation_id, lookup)
    elif citation_id and kind == "webpage":
        citation = _build_webpage(entry, citation_id, lookup)
    elif citation_id:
        citation = _build_article(entry, citation_id)

    if citation is None:
        message = f"Skipping {kind} entry {citation_id!r}: missing or invalid required fields"
        if strict:
            raise ConfigurationError(message)
        logger.warning(message)
    return citation


def discover_citations(
    tree: Any,
    lookup: Optional[MetadataLookupClient] = None,
    strict: bool = False,
) -> List[Citation]:
    """Collect citation nodes at any depth, in document order.

    A node that builds into a citation is not searched further.
    """
    found: List[Citation] = []
    if isinstance(tree, Mapping):
        _visit(tree, found, lookup, strict)
    elif isinstance(tree, list):
        _descend(tree, found, lookup, strict)
    logger.debug("Discovered %d citation(s)", len(found))
    return found


def _visit(node: Mapping[str, Any], found: List[Citation], lookup: Optional[MetadataLookupClient], strict: bool) -> None:
    citation = build_citation(node, lookup, strict)
    if citation is not None:
        found.append(citation)
        return
    _descend(node.values(), found, lookup, strict)


def _descend(values: Iterable[Any], found: List[Citation], lookup: Optional[MetadataLookupClient], strict: bool) -> None:
    for value in values:
        if isinstance(value, list):
            for element in value:
                if isinstance(element, Mapping):
                    _visit(element, found, lookup, strict)
        elif isinstance(value, Mapping):
            _visit(value, found, lookup, strict)


def parse_citations(
    text: str,
    lookup: Optional[MetadataLookupClient] = None,
    strict: bool = False,
) -> List[Citation]:
    try:
        tree = json.loads(text)
    except ValueError as exc:
        raise ConfigurationError(f"Citation data is not valid JSON: {exc}") from exc
    return discover_citations(tree, lookup, strict)


def load_citations(
    path: str | Path,
    lookup: Optional[MetadataLookupClient] = None,
    strict: bool = False,
) -> List[Citation]:
    """Read a JSON citation file and return every citation it contains."""
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot read citation file {config_path}: {exc}") from exc
    return parse_citations(text, lookup, strict)


__all__ = ["build_citation", "discover_citations", "parse_citations", "load_citations"]
