"""Tests for value extraction."""

import pytest

ROWS = """
<main>
  <input name="title" value="pets">
  <table><tbody id="detail">
    <script type="text/html"><tr><td><input name="detail.no"></td></tr></script>
    <tr><td><input name="detail.no" value="1"></td><td><input name="detail.w" value="8.9"></td>
        <td><button>edit</button></td></tr>
    <tr class="spacer"><td>-</td></tr>
    <tr><td><input name="detail.no" value="2"></td><td><input name="detail.w" value="1,012.1" data-value-format-type="num"></td></tr>
  </tbody></table>
</main>
"""


def test_extract_scalars(page):
    """Every value kind is read and unformatted."""
    from html_formbind.services import ValueCollectionService

    values = ValueCollectionService().extract(page.main)
    assert values == {
        "user_id": "U001",
        "amount": "1234.5",
        "birth": "20250210",
        "agree": "0",
        "plan": "B",
        "pref": "13",
        "memo": "hello",
        "label": "shown",
    }


def test_extract_scope_limits_leaves(page):
    from html_formbind.services import ValueCollectionService

    values = ValueCollectionService().extract(page.body)
    assert values["site"] == "header"
    assert "site" not in ValueCollectionService().extract(page.main)


def test_extract_groups(make_soup):
    """Rows are grouped by index; decorative rows are skipped."""
    from html_formbind.services import ValueCollectionService

    soup = make_soup(ROWS)
    values = ValueCollectionService().extract(soup.main)
    assert values == {
        "title": "pets",
        "detail": [{"no": "1", "w": "8.9"}, {"no": "2", "w": "1012.1"}],
    }


def test_duplicate_visible_key(make_soup):
    from html_formbind.exceptions import DuplicateKeyError
    from html_formbind.services import ValueCollectionService

    soup = make_soup('<main><input name="x" value="a"><input name="x" value="b"></main>')
    with pytest.raises(DuplicateKeyError) as excinfo:
        ValueCollectionService().extract(soup.main)
    assert excinfo.value.key == "x"


@pytest.mark.parametrize("hidden_markup", [
    '<input name="x" value="b" style="display:none">',
    '<div hidden><input name="x" value="b"></div>',
    '<div style="visibility: hidden"><span><input name="x" value="b"></span></div>',
])
def test_hidden_duplicate_is_ignored(make_soup, hidden_markup):
    from html_formbind.services import ValueCollectionService

    soup = make_soup(f'<main><input name="x" value="a">{hidden_markup}</main>')
    assert ValueCollectionService().extract(soup.main) == {"x": "a"}


def test_duplicate_column_in_row(make_soup):
    from html_formbind.exceptions import DuplicateKeyError
    from html_formbind.services import ValueCollectionService

    soup = make_soup('<main><ul id="g"><li><input name="g.a"><input name="g.a"></li></ul></main>')
    with pytest.raises(DuplicateKeyError) as excinfo:
        ValueCollectionService().extract(soup.main)
    assert excinfo.value.group_id == "g"
    assert excinfo.value.row_index == 0


def test_group_id_colliding_with_key(make_soup):
    """A group id that is also a flat key is a duplicate."""
    from html_formbind.exceptions import DuplicateKeyError
    from html_formbind.services import ValueCollectionService

    soup = make_soup(
        '<main><input name="g" value="flat"><ul id="g"><li><input name="g.a" value="1"></li></ul></main>'
    )
    with pytest.raises(DuplicateKeyError):
        ValueCollectionService().extract(soup.main)


def test_rows_with_only_hidden_leaves_are_dropped(make_soup):
    from html_formbind.services import ValueCollectionService

    soup = make_soup(
        '<main><ul id="g">'
        '<li><input name="g.a" value="1"></li>'
        '<li style="display:none"><input name="g.a" value="2"></li>'
        '<li><input name="g.a" value="3"></li>'
        '</ul></main>'
    )
    assert ValueCollectionService().extract(soup.main) == {"g": [{"a": "1"}, {"a": "3"}]}


def test_free_text_is_sanitised_and_written_back(make_soup):
    from html_formbind.services import ValueCollectionService

    soup = make_soup('<main><input name="a"><textarea name="b"></textarea><input type="number" name="c"></main>')
    soup.find("input", attrs={"name": "a"})["value"] = "x\ty  "
    soup.textarea.string = "one\r\ntwo\nthree "
    soup.find("input", attrs={"name": "c"})["value"] = "1\t"

    values = ValueCollectionService().extract(soup.main)
    assert values == {"a": "x y", "b": "one two three", "c": "1\t"}
    assert soup.find("input", attrs={"name": "a"})["value"] == "x y"
    assert soup.textarea.string == "one two three"


def test_preserve_newlines_option(make_soup):
    from html_formbind.protocols import BindingConfig
    from html_formbind.services import ValueCollectionService

    soup = make_soup('<main><textarea name="b"></textarea></main>')
    soup.textarea.string = "one\r\ntwo"
    service = ValueCollectionService(BindingConfig(preserve_newlines=True))
    assert service.extract(soup.main) == {"b": "one\ntwo"}


def test_template_content_never_counts(make_soup):
    """Leaves inside a template holder or <template> are not part of the page."""
    from html_formbind.services import ValueCollectionService

    soup = make_soup(
        '<main><input name="a" value="1">'
        '<template><input name="a" value="2"></template></main>'
    )
    assert ValueCollectionService().extract(soup.main) == {"a": "1"}


def test_extract_row(make_soup):
    """Row extraction strips the group prefix."""
    from html_formbind.services import ValueCollectionService

    soup = make_soup(ROWS)
    rows = soup.find(id="detail").find_all("tr")
    service = ValueCollectionService()
    assert service.extract_row(rows[0]) == {"no": "1", "w": "8.9"}
    assert service.extract_row(rows[2]) == {"no": "2", "w": "1012.1"}


def test_extract_row_by_inner(make_soup):
    from html_formbind.exceptions import InvalidArgumentError
    from html_formbind.services import ValueCollectionService

    soup = make_soup(ROWS)
    service = ValueCollectionService()
    assert service.extract_row_by_inner(soup.button) == {"no": "1", "w": "8.9"}
    with pytest.raises(InvalidArgumentError):
        service.extract_row_by_inner(soup.button, row_tag="li")


def test_invalid_scope():
    from html_formbind.exceptions import InvalidScopeError
    from html_formbind.services import ValueCollectionService

    with pytest.raises(InvalidScopeError):
        ValueCollectionService().extract("main")


def test_dispatch_handlers_discovered():
    """One collect handler per field descriptor type."""
    from html_formbind.forms.field_info_types import TopLevelField
    from html_formbind.services import ValueCollectionService

    service = ValueCollectionService()
    assert set(service.get_supported_types()) == {"TopLevelField", "GroupedField"}
    assert service.has_handler(TopLevelField("a"))
