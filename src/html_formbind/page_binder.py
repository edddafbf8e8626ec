"""
Page-level binding facade.

Every service takes an explicit scope. PageBinder is the one place that
supplies a default: get_values / set_values use the page's <main>, then
<body>, then the whole document; the row operations use the whole document.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from bs4 import BeautifulSoup, Tag

from html_formbind.core import dom
from html_formbind.protocols.binding_config import BindingConfig, get_binding_config
from html_formbind.services import RowIndexService, RowService, ValueCollectionService, ValueInjectionService
from html_formbind.services.row_service import Records

logger = logging.getLogger(__name__)


class PageBinder:
    """
    Binds one parsed page to value objects.

    Examples:
        binder = PageBinder(load_document(html))
        values = binder.get_values()
        binder.set_values({"user_id": "U001", "detail": [{"no": "1"}]})
        binder.add_row("detail")
    """

    def __init__(self, document: BeautifulSoup, config: Optional[BindingConfig] = None):
        self.document = dom.require_scope(document, "document")
        self.config = config or get_binding_config()
        self.row_indexer = RowIndexService(self.config)
        self.collector = ValueCollectionService(self.config, self.row_indexer)
        self.rows = RowService(self.config)
        self.injector = ValueInjectionService(self.config, self.rows)

    @property
    def default_scope(self) -> Tag:
        for tag_name in self.config.default_scope_tags:
            scope = dom.find_first_tag(tag_name, self.document)
            if scope is not None:
                return scope
        return self.document

    def _scope(self, scope: Optional[Tag]) -> Tag:
        return self.default_scope if scope is None else scope

    def get_values(self, scope: Optional[Tag] = None) -> Dict[str, Any]:
        return self.collector.extract(self._scope(scope))

    def get_row_values(self, row: Tag) -> Dict[str, str]:
        return self.collector.extract_row(row)

    def get_row_values_by_inner(self, node: Tag, row_tag: Optional[str] = None) -> Dict[str, str]:
        return self.collector.extract_row_by_inner(node, row_tag)

    def set_values(self, values: Mapping[str, Any], scope: Optional[Tag] = None) -> Dict[str, int]:
        return self.injector.inject(values, self._scope(scope))

    # Row operations look containers up across the whole document

    def add_row(self, group_id: str, records: Records = None, scope: Optional[Tag] = None) -> int:
        return self.rows.add_rows(group_id, records, self.document if scope is None else scope)

    def clear_rows(self, group_id: str, scope: Optional[Tag] = None) -> int:
        return self.rows.clear_rows(group_id, self.document if scope is None else scope)

    def remove_row(self, name: str, value: str, row_tag: Optional[str] = None,
                   scope: Optional[Tag] = None) -> bool:
        return self.rows.remove_row(name, value, row_tag, self.document if scope is None else scope)

    def render(self) -> str:
        return str(self.document)
