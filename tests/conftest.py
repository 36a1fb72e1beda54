import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

import json

import pytest

from docman.lookup import BookMetadata, PageTitle


class FakeLookup:
    """Offline stand-in for the metadata service."""

    def __init__(self, books=None, pages=None):
        self.books = books or {}
        self.pages = pages or {}
        self.calls: list[tuple[str, str]] = []

    def fetch_book_metadata(self, isbn: str) -> BookMetadata:
        self.calls.append(("isbn", isbn))
        return BookMetadata(**self.books[isbn])

    def fetch_page_title(self, url: str) -> PageTitle:
        self.calls.append(("title", url))
        return PageTitle(title=self.pages[url])


@pytest.fixture()
def fake_lookup() -> FakeLookup:
    return FakeLookup(
        books={
            "9780131103627": {
                "author": "Kernighan and Ritchie",
                "title": "The C Programming Language",
                "publisher": "Prentice Hall",
                "year": "1988",
            }
        },
        pages={"https://www.python.org": "Welcome to Python.org"},
    )


@pytest.fixture()
def citations_path(tmp_path: Path) -> Path:
    """Citation file mixing direct records with nested containers."""

    data = {
        "version": 1,
        "citations": [
            {"type": "webpage", "id": "w1", "title": "Example", "url": "http://example.com"},
            {
                "type": "article",
                "id": "a1",
                "title": "On Computable Numbers",
                "author": "Turing",
                "journal": "Proc. London Math. Soc.",
                "year": 1936,
                "volume": 42,
                "issue": 1,
            },
        ],
        "extra": {
            "group": [
                {
                    "type": "book",
                    "id": "b1",
                    "author": "Knuth",
                    "title": "TAOCP",
                    "publisher": "Addison-Wesley",
                    "year": "1968",
                }
            ]
        },
    }
    path = tmp_path / "citations.json"
    path.write_text(json.dumps(data))
    return path
