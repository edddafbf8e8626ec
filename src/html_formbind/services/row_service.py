"""
Row Service.

Generates, appends and removes the rows of repeating groups.

A group container holds its row markup as text inside an inert template
holder (<script type="text/html">). Rows are produced by re-parsing that text
for every call, so the template is never mutated by injection.

Radios generated from a template would all share one name and therefore a
single selection across rows. Each generated row gets its radios renamed to
"<name>[n]" with a running n, and the logical name is kept on
data-radio-obj-name.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from bs4 import Tag

from html_formbind.core import dom
from html_formbind.exceptions import InvalidArgumentError
from html_formbind.forms.field_info_types import RadioName, grouped_name
from html_formbind.forms.node_operations import NodeOperations
from html_formbind.forms.template_parser import RowTemplate, parse_template
from html_formbind.protocols.binding_config import BindingConfig, get_binding_config

logger = logging.getLogger(__name__)

Records = Union[None, Mapping[str, Any], Iterable[Optional[Mapping[str, Any]]]]


class RowService:
    """
    Row generation for group containers.

    Examples:
        service = RowService()
        service.set_row_values("detail", [{"no": "1"}, {"no": "2"}], soup.main)
        service.add_rows("detail", None, soup.main)   # one empty row
        service.remove_row("detail.chk", "1", scope=soup.main)
    """

    def __init__(self, config: Optional[BindingConfig] = None):
        self.config = config or get_binding_config()

    # ========== CONTAINER ACCESS ==========

    def find_container(self, group_id: str, scope: Tag) -> Optional[Tag]:
        """The group container with id == group_id: scope itself or a descendant."""
        dom.require_scope(scope)
        if dom.get_attr(scope, "id") == group_id:
            return scope
        return dom.find_by_id(group_id, scope)

    def template_holder(self, container: Tag) -> Optional[Tag]:
        for child in dom.element_children(container):
            if child.name == self.config.template_holder_tag:
                return child
        return None

    def generated_rows(self, container: Tag) -> List[Tag]:
        """Every direct child except the template holder."""
        return [
            child for child in dom.element_children(container)
            if child.name != self.config.template_holder_tag
        ]

    def load_template(self, container: Tag) -> Optional[RowTemplate]:
        """Parse the container's template holder; None (logged) when unusable."""
        holder = self.template_holder(container)
        if holder is None:
            logger.warning(
                f"Template holder not found in group container. id={dom.get_attr(container, 'id')}"
            )
            return None
        return parse_template(dom.inner_markup(holder))

    # ========== ROW OPERATIONS ==========

    def clear_rows(self, group_id: str, scope: Tag) -> int:
        """
        Remove every generated row of a group, keeping the template holder.

        Returns:
            Number of rows removed

        Raises:
            InvalidArgumentError: If group_id is blank
        """
        self._require_group_id(group_id)
        container = self.find_container(group_id, scope)
        if container is None:
            logger.warning(f"Group container not found. id={group_id}")
            return 0
        return self._remove_all_rows(container)

    def set_row_values(self, group_id: str, records: Iterable[Optional[Mapping[str, Any]]],
                       scope: Tag) -> int:
        """
        Replace the rows of a group with one generated row per record.

        Returns:
            Number of rows generated
        """
        self._require_group_id(group_id)
        container = self.find_container(group_id, scope)
        if container is None:
            logger.warning(f"Group container not found, rows skipped. id={group_id}")
            return 0
        self._remove_all_rows(container)
        return self._append_rows(group_id, container, list(records))

    def add_rows(self, group_id: str, records: Records = None, scope: Tag = None) -> int:
        """
        Append rows without clearing the existing ones.

        records may be None (one empty row), a single mapping (one row) or a
        list of mappings where None entries produce empty rows.

        Returns:
            Number of rows generated
        """
        self._require_group_id(group_id)
        container = self.find_container(group_id, scope)
        if container is None:
            logger.warning(f"Group container not found, rows skipped. id={group_id}")
            return 0
        if records is None or isinstance(records, Mapping):
            records = [records]
        return self._append_rows(group_id, container, list(records))

    def remove_row(self, name: str, value: str, row_tag: Optional[str] = None,
                   scope: Tag = None) -> bool:
        """
        Remove the rows holding a leaf with the given name and value.

        Unchecked checkboxes and radios never match. Radios are also matched
        on their logical name, since generated rows rename them.

        Returns:
            True if at least one row was removed

        Raises:
            InvalidArgumentError: If name or value is blank
        """
        if not name or not str(name).strip() or value is None or not str(value).strip():
            raise InvalidArgumentError(f"Argument is invalid. name={name} value={value}")
        dom.require_scope(scope)
        row_tag = row_tag or self.config.default_row_tag
        value = str(value)

        candidates = dom.find_all_by_attr(self.config.name_attr, name, scope)
        # Tag equality is structural, so dedupe by identity
        seen = {id(node) for node in candidates}
        candidates += [
            node for node in dom.find_all_by_attr(self.config.radio_name_attr, name, scope)
            if id(node) not in seen
        ]
        matches = [
            node for node in candidates
            if dom.get_attr(node, "value") == value
            and not (dom.is_check_type(node) and not dom.is_checked(node))
        ]

        removed = 0
        for node in matches:
            row = dom.closest_by_tag(node, row_tag)
            if row is None:
                logger.warning(f"Row element not found. row_tag={row_tag} name={name} value={value}")
                continue
            if row.parent is None:
                continue
            dom.remove_node(row)
            removed += 1

        if not removed:
            logger.warning(
                f"No checked leaf matched, nothing removed. row_tag={row_tag} name={name} value={value}"
            )
            return False
        logger.debug(f"Removed {removed} row(s) matching {name}={value}")
        return True

    # ========== INTERNALS ==========

    @staticmethod
    def _require_group_id(group_id: str) -> None:
        if not group_id or not str(group_id).strip():
            raise InvalidArgumentError(f"Argument group_id is invalid: {group_id!r}")

    def _remove_all_rows(self, container: Tag) -> int:
        rows = self.generated_rows(container)
        for row in rows:
            dom.remove_node(row)
        return len(rows)

    def _next_radio_suffix(self, container: Tag) -> int:
        """One past the highest radio suffix in the container's current rows."""
        highest = -1
        for row in self.generated_rows(container):
            for radio in row.find_all(lambda node: dom.is_radio(node)):
                suffix = RadioName.parse(dom.get_attr(radio, self.config.name_attr) or "").row_suffix
                if suffix is not None and suffix > highest:
                    highest = suffix
        return highest + 1

    def _append_rows(self, group_id: str, container: Tag,
                     records: List[Optional[Mapping[str, Any]]]) -> int:
        template = self.load_template(container)
        if template is None:
            logger.warning(f"Row template unusable, rows skipped. id={group_id}")
            return 0

        row_suffix = self._next_radio_suffix(container)
        for record in records:
            row = dom.create_element(template.tag_name, template.attributes)
            dom.set_inner_markup(row, template.inner_markup)
            self._fill_row(group_id, row, record)
            self._suffix_radios(row, row_suffix)
            row_suffix += 1
            container.append(row)

        logger.debug(f"Generated {len(records)} row(s) in group '{group_id}'")
        return len(records)

    def _fill_row(self, group_id: str, row: Tag, record: Optional[Mapping[str, Any]]) -> None:
        if not record:
            return
        if not isinstance(record, Mapping):
            logger.warning(f"Row record is not a mapping, left empty. group={group_id}")
            return
        for column, value in record.items():
            NodeOperations.write_field(grouped_name(group_id, column), value, row, self.config)

    def _suffix_radios(self, row: Tag, row_suffix: int) -> None:
        for radio in row.find_all(lambda node: dom.is_radio(node)):
            logical_name = dom.get_attr(radio, self.config.name_attr)
            if not logical_name:
                continue
            radio_name = RadioName(logical_name).with_suffix(row_suffix)
            dom.set_attr(radio, self.config.name_attr, radio_name.runtime_name)
            dom.set_attr(radio, self.config.radio_name_attr, radio_name.logical_name)
