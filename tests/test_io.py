"""Tests for document and value-object IO."""

import pytest


def test_document_round_trip(tmp_path):
    from html_formbind.io import load_document, dump_document

    path = tmp_path / "page.html"
    path.write_text('<main><input name="a" value="1"></main>', encoding="utf-8")

    soup = load_document(path)
    assert soup.main.input["value"] == "1"

    soup.main.input["value"] = "2"
    out = tmp_path / "out.html"
    markup = dump_document(soup, out)
    assert 'value="2"' in markup
    assert out.read_text(encoding="utf-8") == markup


def test_fragments_get_no_wrappers():
    from html_formbind.io import load_document

    soup = load_document("<tr><td>1</td></tr>")
    assert soup.html is None
    assert soup.tr.td.get_text() == "1"


def test_values_drop_private_keys(tmp_path):
    from html_formbind.io import dump_values, load_values

    values = {"a": "1", "_csrf": "t", "g": [{"x": "y"}]}
    path = tmp_path / "values.json"
    dump_values(values, path)
    assert load_values(path) == {"a": "1", "g": [{"x": "y"}]}
    assert "_csrf" in dump_values(values, drop_private=False)


def test_load_values_requires_object():
    from html_formbind.exceptions import InvalidArgumentError
    from html_formbind.io import load_values

    with pytest.raises(InvalidArgumentError):
        load_values("[1, 2]")
