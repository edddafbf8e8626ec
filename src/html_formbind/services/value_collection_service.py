"""
Value Collection Service.

Reads a region of the page into a value object.

Key features:
1. Type-safe dispatch on field descriptors (TopLevelField / GroupedField)
2. Row grouping driven by the indexes stamped by RowIndexService
3. Free-text sanitising with immediate write-back
4. Unformatting through the FormatRegistry
"""

import logging
import re
from typing import Any, Dict, Optional

from bs4 import Tag

from html_formbind.core import dom
from html_formbind.exceptions import DuplicateKeyError, InvalidArgumentError
from html_formbind.forms.field_info_types import GroupedField, TopLevelField, parse_field_name
from html_formbind.forms.format_registry import FormatRegistry
from html_formbind.forms.node_operations import NodeOperations
from html_formbind.protocols.binding_config import BindingConfig, get_binding_config
from .field_service_abc import FieldServiceABC
from .row_index_service import RowIndexService

logger = logging.getLogger(__name__)

_LINE_BREAK_PATTERN = re.compile(r"\r?\n")

Record = Dict[str, str]


def sanitize_text(text: str, preserve_newlines: bool = False) -> str:
    """
    Normalise typed free text.

    Tabs become spaces, line breaks become a space (or a single '\\n' when
    preserve_newlines is set), and trailing spaces are dropped.
    """
    if not text:
        return text
    text = text.replace("\t", " ")
    text = _LINE_BREAK_PATTERN.sub("\n" if preserve_newlines else " ", text)
    return text.rstrip(" ")


class ValueCollectionService(FieldServiceABC):
    """
    Service for extracting value objects from the tree.

    Examples:
        service = ValueCollectionService()

        # Whole region, groups included:
        values = service.extract(soup.main)

        # One row, group prefix stripped:
        record = service.extract_row(soup.find("tr"))
    """

    def __init__(self, config: Optional[BindingConfig] = None,
                 row_indexer: Optional[RowIndexService] = None):
        self.config = config or get_binding_config()
        self.row_indexer = row_indexer or RowIndexService(self.config)
        super().__init__()

    def _get_handler_prefix(self) -> str:
        """Return handler method prefix for auto-discovery."""
        return '_collect_'

    # ========== EXTRACTION ==========

    def extract(self, scope: Tag) -> Dict[str, Any]:
        """
        Read every visible leaf under scope into a value object.

        Raises:
            InvalidScopeError: If scope is not a tree node
            ContainerNotFoundError: If a grouped leaf has no container
            DuplicateKeyError: On a repeated key, a repeated column within a
                row, or a group id that is also a top-level key
        """
        dom.require_scope(scope)
        self.row_indexer.assign_row_indexes(scope)

        result: Dict[str, Any] = {}
        groups: Dict[str, Dict[int, Record]] = {}
        for leaf in NodeOperations.collect_leaves(scope, self.config):
            if not self._contributes(leaf):
                continue
            info = parse_field_name(NodeOperations.identifier(leaf, self.config))
            self.dispatch(info, leaf, result, groups)

        for group_id, rows in groups.items():
            if group_id in result:
                raise DuplicateKeyError(group_id)
            # Rows with no contributing leaf leave gaps; they are dropped here
            result[group_id] = [rows[row_index] for row_index in sorted(rows)]

        logger.debug(
            f"Extracted {len(result)} keys ({len(groups)} groups) from <{scope.name}>"
        )
        return result

    def _collect_TopLevelField(self, info: TopLevelField, leaf: Tag,
                               result: Dict[str, Any], groups: Dict[str, Dict[int, Record]]) -> None:
        if info.key in result:
            raise DuplicateKeyError(info.key)
        result[info.key] = self.read_leaf(leaf)

    def _collect_GroupedField(self, info: GroupedField, leaf: Tag,
                              result: Dict[str, Any], groups: Dict[str, Dict[int, Record]]) -> None:
        raw_index = dom.get_attr(leaf, self.config.row_index_attr)
        if raw_index is None:
            logger.warning(
                f"Grouped leaf has no row index, skipped. "
                f"name={NodeOperations.identifier(leaf, self.config)}"
            )
            return
        row_index = int(raw_index)
        record = groups.setdefault(info.group_id, {}).setdefault(row_index, {})
        if info.column in record:
            raise DuplicateKeyError(info.column, info.group_id, row_index)
        record[info.column] = self.read_leaf(leaf)

    # ========== ROW EXTRACTION ==========

    def extract_row(self, row: Tag) -> Record:
        """
        Read the leaves of a single row, keyed by column.

        Row indexes are not consulted; the group prefix is simply dropped.

        Raises:
            DuplicateKeyError: If a column appears twice in the row
        """
        dom.require_scope(row, "row")
        candidates = NodeOperations.collect_leaves(row, self.config)
        if NodeOperations.is_addressable(row, self.config):
            candidates.insert(0, row)

        record: Record = {}
        for leaf in candidates:
            if not self._contributes(leaf):
                continue
            info = parse_field_name(NodeOperations.identifier(leaf, self.config))
            group_id = info.group_id if isinstance(info, GroupedField) else None
            if info.column in record:
                raise DuplicateKeyError(info.column, group_id)
            record[info.column] = self.read_leaf(leaf)
        return record

    def extract_row_by_inner(self, node: Tag, row_tag: Optional[str] = None) -> Record:
        """
        Read the row that contains node (for example a button inside it).

        Raises:
            InvalidArgumentError: If node has no ancestor of row_tag
        """
        dom.require_scope(node, "inner node")
        row_tag = row_tag or self.config.default_row_tag
        row = dom.closest_by_tag(node, row_tag)
        if row is None:
            raise InvalidArgumentError(f"No enclosing <{row_tag}> found for <{node.name}>.")
        return self.extract_row(row)

    # ========== LEAF READING ==========

    def _contributes(self, leaf: Tag) -> bool:
        """Hidden leaves and unchecked radios contribute nothing."""
        if not dom.is_visible(leaf):
            return False
        if dom.is_radio(leaf) and not dom.is_checked(leaf):
            return False
        return True

    def read_leaf(self, leaf: Tag) -> str:
        """Canonical value of one leaf: sanitised, written back, unformatted."""
        value = NodeOperations.get_value(leaf, self.config)
        # Check types are never formatted on write, so never unformatted here
        if dom.is_check_type(leaf):
            return value

        if NodeOperations.is_free_text(leaf):
            cleaned = sanitize_text(value, self.config.preserve_newlines)
            if cleaned != value:
                NodeOperations.set_formatted_value(leaf, cleaned, self.config)
                logger.debug(
                    f"Sanitised leaf written back. "
                    f"name={NodeOperations.identifier(leaf, self.config)}"
                )
                value = cleaned

        format_name = dom.get_attr(leaf, self.config.format_type_attr)
        return FormatRegistry.try_unformat(format_name, value)
