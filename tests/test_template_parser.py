"""Tests for the row template tokenizer."""


def test_split_isolates_inner_markup():
    """The inner fragment is returned exactly as written."""
    from html_formbind.forms.template_parser import split_template

    parts = split_template('<tr class="row"><td data-name="detail.no"></td></tr>')
    assert parts == ['<tr class="row">', '<td data-name="detail.no"></td>', '</tr>']


def test_parse_open_tag():
    from html_formbind.forms.template_parser import parse_open_tag

    assert parse_open_tag('<tr class="row">') == ("tr", {"class": "row"})


def test_quoted_angle_bracket_does_not_end_tag():
    """A '>' inside a quoted value belongs to the value."""
    from html_formbind.forms.template_parser import split_template, parse_open_tag

    parts = split_template("<tr data-x=\"a>b\" title='c>d'><td></td></tr>")
    assert parts[0] == "<tr data-x=\"a>b\" title='c>d'>"
    assert parts[1] == "<td></td>"
    assert parse_open_tag(parts[0]) == ("tr", {"data-x": "a>b", "title": "c>d"})


def test_quoted_whitespace_and_bare_attributes():
    from html_formbind.forms.template_parser import parse_open_tag

    tag_name, attributes = parse_open_tag("<TR style='color: red' hidden>")
    assert tag_name == "tr"
    assert attributes == {"style": "color: red", "hidden": "hidden"}


def test_self_closing_slash_dropped():
    from html_formbind.forms.template_parser import parse_open_tag

    assert parse_open_tag('<input name="a" />') == ("input", {"name": "a"})


def test_split_failures_return_empty():
    """Blank text, a missing boundary or inverted boundaries give []."""
    from html_formbind.forms.template_parser import split_template

    assert split_template("") == []
    assert split_template("   ") == []
    assert split_template("no markup") == []
    assert split_template("<tr>") == []


def test_empty_inner_markup():
    from html_formbind.forms.template_parser import split_template

    assert split_template("  <tr></tr>\n") == ["<tr>", "", "</tr>"]


def test_parse_open_tag_blank():
    from html_formbind.forms.template_parser import parse_open_tag

    assert parse_open_tag("") is None
    assert parse_open_tag(None) is None


def test_parse_template_value_type():
    from html_formbind.forms.template_parser import parse_template, RowTemplate

    template = parse_template('\n  <li class="item" hidden><span data-name="g.a"></span></li>\n')
    assert template == RowTemplate("li", {"class": "item", "hidden": "hidden"},
                                   '<span data-name="g.a"></span>')
    assert parse_template("plain text") is None
