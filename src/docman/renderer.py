"""Write the document text followed by its reference list."""
from __future__ import annotations

from io import StringIO
from typing import Iterable, TextIO

from .models import Citation

SECTION_BREAK = "\n\n"
REFERENCES_HEADER = "References:\n"


def render_bibliography(text: str, citations: Iterable[Citation], out: TextIO) -> None:
    out.write(text)
    out.write(SECTION_BREAK)
    out.write(REFERENCES_HEADER)
    for citation in citations:
        citation.render(out)


def format_bibliography(text: str, citations: Iterable[Citation]) -> str:
    """Return exactly what :func:`render_bibliography` would write."""
    buffer = StringIO()
    render_bibliography(text, citations, buffer)
    return buffer.getvalue()


__all__ = ["render_bibliography", "format_bibliography", "REFERENCES_HEADER"]
