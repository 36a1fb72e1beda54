"""High-level orchestrator: citation catalog, marker resolution, bibliography."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Sequence

from .factory import discover_citations, load_citations, parse_citations
from .lookup import MetadataLookupClient
from .models import Citation
from .renderer import format_bibliography
from .resolver import extract_ids, resolve

logger = logging.getLogger(__name__)


class DocumentManager:
    """Coordinates loading citations and annotating a document with them."""

    def __init__(self, lookup: MetadataLookupClient | None = None, strict: bool = False):
        self.lookup = lookup
        self.strict = strict

    def load_catalog(self, path: str | Path) -> List[Citation]:
        catalog = load_citations(path, lookup=self.lookup, strict=self.strict)
        logger.info("Loaded %d citation(s) from %s", len(catalog), path)
        return catalog

    def load_catalog_text(self, text: str) -> List[Citation]:
        return parse_citations(text, lookup=self.lookup, strict=self.strict)

    def build_catalog(self, tree: Any) -> List[Citation]:
        """Build the catalog from JSON data that is already parsed."""
        return discover_citations(tree, lookup=self.lookup, strict=self.strict)

    def annotate(self, text: str, catalog: Sequence[Citation]) -> str:
        """Return ``text`` with its reference list appended.

        Raises before producing anything if a marker is malformed or unresolved.
        """
        ids = extract_ids(text)
        cited = resolve(ids, catalog)
        return format_bibliography(text, cited)

    def process(self, config_path: str | Path, text: str) -> str:
        return self.annotate(text, self.load_catalog(config_path))


__all__ = ["DocumentManager"]
