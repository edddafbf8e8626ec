"""Tests for the page-level facade."""


def test_default_scope_prefers_main(page, make_soup):
    """main, then body, then the whole document."""
    from html_formbind.page_binder import PageBinder

    assert PageBinder(page).default_scope is page.main

    no_main = make_soup("<html><body><input name='a'></body></html>")
    assert PageBinder(no_main).default_scope is no_main.body

    fragment = make_soup("<input name='a'>")
    assert PageBinder(fragment).default_scope is fragment


def test_get_values_uses_default_scope(page):
    from html_formbind.page_binder import PageBinder

    binder = PageBinder(page)
    values = binder.get_values()
    assert "site" not in values
    assert binder.get_values(page.body)["site"] == "header"


def test_page_round_trip(page):
    from html_formbind.page_binder import PageBinder

    binder = PageBinder(page)
    binder.set_values({
        "user_id": "U900",
        "_session": "ignored",
        "detail": [{"no": "1", "w": "8.9", "sex": "M"}, {"no": "2", "w": "12.1", "sex": "F"}],
    })
    values = binder.get_values()
    assert values["user_id"] == "U900"
    assert [record["no"] for record in values["detail"]] == ["1", "2"]
    assert "_session" not in values

    row = page.find(attrs={"data-name": "detail.no"}).find_parent("tr")
    assert binder.get_row_values(row)["w"] == "8.9"
    assert binder.get_row_values_by_inner(row.td)["no"] == "1"


def test_row_operations(page):
    from html_formbind.page_binder import PageBinder

    binder = PageBinder(page)
    assert binder.add_row("detail") == 1
    assert binder.add_row("detail", [{"no": "2", "chk": "1"}]) == 1
    assert binder.remove_row("detail.chk", "1") is True
    assert binder.clear_rows("detail") == 1
    assert "detail" not in binder.get_values()


def test_render_reflects_changes(page):
    from html_formbind.page_binder import PageBinder

    binder = PageBinder(page)
    binder.set_values({"user_id": "U777"})
    assert 'value="U777"' in binder.render()


def test_row_operations_reach_containers_outside_main(make_soup):
    """Row operations look the group container up across the whole document."""
    from html_formbind.page_binder import PageBinder

    soup = make_soup(
        '<html><body><main><input name="a"></main>'
        '<dialog><ul id="g"><script type="text/html"><li><input name="g.x"></li></script></ul></dialog>'
        '</body></html>'
    )
    binder = PageBinder(soup)
    assert binder.add_row("g", {"x": "1"}) == 1
    assert binder.get_values(soup.body)["g"] == [{"x": "1"}]
    assert binder.remove_row("g.x", "1", "li") is True
    assert binder.add_row("g", [{"x": "2"}, {"x": "3"}]) == 2
    assert binder.clear_rows("g") == 2
    assert "g" not in binder.get_values()
