"""pytest configuration and fixtures for html-formbind tests."""

import pytest
from bs4 import BeautifulSoup


DETAIL_TEMPLATE = (
    '<tr class="row">'
    '<td data-name="detail.no"></td>'
    '<td><input name="detail.w" data-value-format-type="num"></td>'
    '<td><input type="checkbox" name="detail.chk" value="1"></td>'
    '<td><input type="radio" name="detail.sex" value="M">'
    '<input type="radio" name="detail.sex" value="F"></td>'
    '</tr>'
)

PAGE = f"""
<html><body>
<header><input name="site" value="header"></header>
<main>
  <input name="user_id" value="U001">
  <input name="amount" value="1,234.5" data-value-format-type="num">
  <input name="birth" value="2025/02/10" data-value-format-type="ymd">
  <input type="checkbox" name="agree" value="1" data-check-off-value="0">
  <input type="radio" name="plan" value="A">
  <input type="radio" name="plan" value="B" checked>
  <select name="pref"><option value="01">North</option><option value="13" selected>Capital</option></select>
  <textarea name="memo">hello</textarea>
  <span data-name="label">shown</span>
  <table><tbody id="detail">
    <script type="text/html">{DETAIL_TEMPLATE}</script>
  </tbody></table>
</main>
</body></html>
"""


@pytest.fixture
def make_soup():
    """Parse markup the way the library does."""
    def _make(markup):
        return BeautifulSoup(markup, "html.parser")
    return _make


@pytest.fixture
def page(make_soup):
    """A full page with scalars and an empty 'detail' group."""
    return make_soup(PAGE)


@pytest.fixture(autouse=True)
def reset_binding_config():
    """Every test starts from the default BindingConfig."""
    from html_formbind.protocols.binding_config import set_binding_config
    set_binding_config(None)
    yield
    set_binding_config(None)
