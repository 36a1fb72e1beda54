"""Citation records and their single-line bibliography rendering."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, ClassVar, TextIO

from .errors import TypeMismatchError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .lookup import MetadataLookupClient


@dataclass
class Citation(ABC):
    """A referenced source identified by a stable id.

    The id cannot be reassigned once the record exists; ``clone`` is the only
    way to overwrite it, and only from a record of the same concrete kind.
    """

    id: str

    kind: ClassVar[str] = "citation"

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise ValueError("Citation id must be a non-empty string")

    def __setattr__(self, name: str, value: object) -> None:
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("Citation id is read-only")
        super().__setattr__(name, value)

    def get_id(self) -> str:
        return self.id

    def clone(self, other: "Citation") -> "Citation":
        """Copy every field of ``other`` into this record and return it."""
        if type(other) is not type(self):
            raise TypeMismatchError(
                f"Cannot clone {type(other).__name__} into {type(self).__name__}"
            )
        for item in fields(self):
            object.__setattr__(self, item.name, getattr(other, item.name))
        return self

    def render(self, out: TextIO) -> None:
        out.write(self.format())
        out.write("\n")

    @abstractmethod
    def format(self) -> str:
        """Return the bibliography line without a trailing newline."""


@dataclass
class Book(Citation):
    author: str
    title: str
    publisher: str
    year: str

    kind: ClassVar[str] = "book"

    @classmethod
    def from_isbn(cls, id: str, isbn: str, lookup: "MetadataLookupClient") -> "Book":
        """Build a book from the metadata service; lookup failures propagate."""
        metadata = lookup.fetch_book_metadata(isbn)
        return cls(
            id=id,
            author=metadata.author,
            title=metadata.title,
            publisher=metadata.publisher,
            year=metadata.year,
        )

    def format(self) -> str:
        return f"[{self.id}] book: {self.author}, {self.title}, {self.publisher}, {self.year}"


@dataclass
class WebPage(Citation):
    title: str
    url: str

    kind: ClassVar[str] = "webpage"

    @classmethod
    def from_url(cls, id: str, url: str, lookup: "MetadataLookupClient") -> "WebPage":
        page = lookup.fetch_page_title(url)
        return cls(id=id, title=page.title, url=url)

    def format(self) -> str:
        return f"[{self.id}] webpage: {self.title}. Available at {self.url}"


@dataclass
class Article(Citation):
    title: str
    author: str
    journal: str
    year: int
    volume: int
    issue: int

    kind: ClassVar[str] = "article"

    def format(self) -> str:
        return (
            f"[{self.id}] article: {self.author}, {self.title}, {self.journal}, "
            f"{self.year}, {self.volume}, {self.issue}"
        )


CITATION_TYPES = {cls.kind: cls for cls in (Book, WebPage, Article)}


__all__ = ["Citation", "Book", "WebPage", "Article", "CITATION_TYPES"]
