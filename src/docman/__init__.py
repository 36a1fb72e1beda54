"""Citation catalog and bibliography builder for documents with [id] markers."""

from .app import DocumentManager
from .errors import (
    ConfigurationError,
    DocmanError,
    DocumentIOError,
    MarkerError,
    MetadataLookupError,
    TypeMismatchError,
    UnresolvedIdError,
)
from .factory import build_citation, discover_citations, load_citations
from .lookup import MetadataLookupClient
from .models import Article, Book, Citation, WebPage
from .renderer import format_bibliography, render_bibliography
from .resolver import extract_ids, resolve

__all__ = [
    "DocumentManager",
    "Citation",
    "Book",
    "WebPage",
    "Article",
    "MetadataLookupClient",
    "build_citation",
    "discover_citations",
    "load_citations",
    "extract_ids",
    "resolve",
    "render_bibliography",
    "format_bibliography",
    "DocmanError",
    "ConfigurationError",
    "MetadataLookupError",
    "MarkerError",
    "UnresolvedIdError",
    "DocumentIOError",
    "TypeMismatchError",
]
