import pytest

from docman.app import DocumentManager
from docman.errors import UnresolvedIdError


def test_process_sorts_references_and_ignores_uncited(citations_path):
    manager = DocumentManager()

    output = manager.process(citations_path, "Knuth [b1] builds on [a1].")

    assert output == (
        "Knuth [b1] builds on [a1].\n\n"
        "References:\n"
        "[a1] article: Turing, On Computable Numbers, Proc. London Math. Soc., 1936, 42, 1\n"
        "[b1] book: Knuth, TAOCP, Addison-Wesley, 1968\n"
    )


def test_annotate_raises_before_rendering_anything(citations_path):
    manager = DocumentManager()
    catalog = manager.load_catalog(citations_path)

    with pytest.raises(UnresolvedIdError):
        manager.annotate("[w1] and [missing]", catalog)


def test_catalog_from_text_and_tree_agree(fake_lookup):
    manager = DocumentManager(lookup=fake_lookup)
    data = [{"type": "book", "id": "kr", "isbn": "9780131103627"}]

    from_text = manager.load_catalog_text('[{"type": "book", "id": "kr", "isbn": "9780131103627"}]')
    from_tree = manager.build_catalog(data)

    assert from_text == from_tree
    assert manager.annotate("[kr]", from_tree).endswith("Prentice Hall, 1988\n")
