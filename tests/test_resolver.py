import pytest

from docman.errors import MarkerError, UnresolvedIdError
from docman.models import Article, WebPage
from docman.resolver import Marker, extract_ids, resolve, scan_markers


def _page(citation_id: str, title: str = "Example") -> WebPage:
    return WebPage(id=citation_id, title=title, url="http://example.com")


def test_scan_markers_records_offsets():
    text = "See [w1] and [a2]."

    assert scan_markers(text) == [Marker("w1", 4, 8), Marker("a2", 13, 17)]


def test_extract_ids_dedupes_and_sorts():
    assert extract_ids("[y] then [x], again [y] and [b10] [b2]") == ["b10", "b2", "x", "y"]


def test_extract_ids_without_markers_is_empty():
    assert extract_ids("No references here.") == []


@pytest.mark.parametrize(
    "text",
    [
        "[a] and [b",
        "a] and [b]]",
        "] [",
        "[a [b]]",
        "[a] b] [c",
    ],
)
def test_malformed_brackets_are_rejected(text):
    with pytest.raises(MarkerError):
        extract_ids(text)


def test_resolve_returns_records_in_requested_order():
    catalog = [_page("y"), _page("x"), _page("unused")]

    resolved = resolve(["x", "y"], catalog)

    assert [c.get_id() for c in resolved] == ["x", "y"]
    assert resolved[0] is catalog[1]


def test_resolve_prefers_first_duplicate():
    first = _page("x", title="First")
    catalog = [first, _page("x", title="Second")]

    assert resolve(["x"], catalog) == [first]


def test_resolve_fails_on_unknown_ids():
    catalog = [_page("x"), Article(id="extra", title="T", author="A", journal="J", year=1, volume=1, issue=1)]

    with pytest.raises(UnresolvedIdError) as excinfo:
        resolve(["a", "x", "z"], catalog)

    assert excinfo.value.missing == ["a", "z"]
    assert "'a'" in str(excinfo.value)
