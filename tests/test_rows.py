"""Tests for row generation and removal."""

import pytest


def _rows(soup):
    return soup.find(id="detail").find_all("tr", class_="row")


def test_group_injection_replaces_rows(page):
    """Exactly one row per record, in order, with nothing left from before."""
    from html_formbind.services import ValueInjectionService

    service = ValueInjectionService()
    records = [{"no": "1", "w": "8.9"}, {"no": "2", "w": "12.1"}]
    service.inject({"detail": [{"no": "9"}, {"no": "8"}, {"no": "7"}]}, page.main)
    service.inject({"detail": records}, page.main)

    rows = _rows(page)
    assert len(rows) == 2
    assert [row.find(attrs={"data-name": "detail.no"}).get_text() for row in rows] == ["1", "2"]
    assert page.find(id="detail").script is not None


def test_group_round_trip(page):
    from html_formbind.services import ValueCollectionService, ValueInjectionService

    records = [
        {"no": "1", "w": "1234.5", "chk": "1", "sex": "F"},
        {"no": "2", "w": "12.1", "chk": "", "sex": "M"},
    ]
    ValueInjectionService().inject({"detail": records}, page.main)
    assert page.find("input", attrs={"name": "detail.w"})["value"] == "1,234.5"

    values = ValueCollectionService().extract(page.main)
    assert values["detail"] == [
        {"no": "1", "w": "1234.5", "chk": "1", "sex": "F"},
        {"no": "2", "w": "12.1", "chk": "", "sex": "M"},
    ]


def test_radios_are_independent_per_row(page):
    """Generated radios get a per-row suffix, so each row keeps its own selection."""
    from html_formbind.services import ValueCollectionService, ValueInjectionService

    selections = [{"sex": "M"}, {"sex": "F"}, {"sex": "M"}]
    ValueInjectionService().inject({"detail": selections}, page.main)

    for index, row in enumerate(_rows(page)):
        radios = row.find_all("input", attrs={"type": "radio"})
        assert {radio["name"] for radio in radios} == {f"detail.sex[{index}]"}
        assert {radio["data-radio-obj-name"] for radio in radios} == {"detail.sex"}

    extracted = ValueCollectionService().extract(page.main)["detail"]
    assert [record["sex"] for record in extracted] == ["M", "F", "M"]


def test_add_rows_appends_and_continues_suffix(page):
    from html_formbind.services import RowService

    service = RowService()
    assert service.set_row_values("detail", [{"no": "1"}, {"no": "2"}], page.main) == 2
    assert service.add_rows("detail", {"no": "3"}, page.main) == 1
    assert service.add_rows("detail", None, page.main) == 1
    assert service.add_rows("detail", [None, {"no": "5"}], page.main) == 2

    rows = _rows(page)
    assert [row.find(attrs={"data-name": "detail.no"}).get_text() for row in rows] == ["1", "2", "3", "", "", "5"]
    suffixes = [row.find("input", attrs={"type": "radio"})["name"] for row in rows]
    assert suffixes == [f"detail.sex[{index}]" for index in range(6)]


def test_clear_rows_keeps_template(page):
    from html_formbind.services import RowService

    service = RowService()
    service.add_rows("detail", [{"no": "1"}, {"no": "2"}], page.main)
    assert service.clear_rows("detail", page.main) == 2
    assert _rows(page) == []
    assert page.find(id="detail").script is not None
    # Template is still usable after clearing
    assert service.add_rows("detail", None, page.main) == 1


def test_container_as_scope(page):
    from html_formbind.services import RowService

    container = page.find(id="detail")
    assert RowService().set_row_values("detail", [{"no": "1"}], container) == 1
    assert len(_rows(page)) == 1


def test_missing_container_or_template_is_soft(make_soup, caplog):
    from html_formbind.services import RowService

    soup = make_soup('<main><ul id="g"><li>static</li></ul><ul id="bad"><script>no markup</script></ul></main>')
    service = RowService()
    assert service.set_row_values("absent", [{"a": "1"}], soup.main) == 0
    assert service.set_row_values("g", [{"a": "1"}], soup.main) == 0
    assert service.set_row_values("bad", [{"a": "1"}], soup.main) == 0
    assert "absent" in caplog.text


def test_remove_row_without_checked_match(page):
    """No checked leaf matches: nothing changes and False comes back."""
    from html_formbind.services import RowService

    service = RowService()
    service.set_row_values("detail", [{"no": "1"}, {"no": "2"}], page.main)
    before = str(page)

    assert service.remove_row("detail.chk", "1", scope=page.main) is False
    assert str(page) == before


def test_remove_row_with_checked_match(page):
    from html_formbind.services import RowService

    service = RowService()
    service.set_row_values("detail", [{"no": "1"}, {"no": "2", "chk": "1"}, {"no": "3"}], page.main)

    assert service.remove_row("detail.chk", "1", scope=page.main) is True
    rows = _rows(page)
    assert [row.find(attrs={"data-name": "detail.no"}).get_text() for row in rows] == ["1", "3"]


def test_remove_row_by_logical_radio_name(page):
    from html_formbind.services import RowService

    service = RowService()
    service.set_row_values("detail", [{"no": "1", "sex": "M"}, {"no": "2", "sex": "F"}], page.main)

    assert service.remove_row("detail.sex", "F", scope=page.main) is True
    assert len(_rows(page)) == 1


@pytest.mark.parametrize("name,value", [("", "1"), ("detail.chk", ""), ("detail.chk", None)])
def test_remove_row_rejects_blank_arguments(page, name, value):
    from html_formbind.exceptions import InvalidArgumentError
    from html_formbind.services import RowService

    with pytest.raises(InvalidArgumentError):
        RowService().remove_row(name, value, scope=page.main)
