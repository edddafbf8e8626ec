"""
Row indexing for repeating groups.

Before every extraction pass each grouped leaf is stamped with the index of
the row it belongs to (data-obj-row-idx). Indices are contiguous per group
container and start at 0: the template holder and rows without any leaf of
the group are skipped without consuming an index.
"""

from typing import Dict, List, Optional
import logging

from bs4 import Tag

from html_formbind.core import dom
from html_formbind.exceptions import ContainerNotFoundError
from html_formbind.forms.field_info_types import GroupedField, TopLevelField, parse_field_name
from html_formbind.forms.node_operations import NodeOperations
from html_formbind.protocols.binding_config import BindingConfig, get_binding_config
from .field_service_abc import FieldServiceABC

logger = logging.getLogger(__name__)


class RowIndexService(FieldServiceABC):
    """
    Stamps row indexes on grouped leaves.

    Examples:
        >>> service = RowIndexService()
        >>> service.assign_row_indexes(soup.body)
        {'detail': 3}
    """

    def __init__(self, config: Optional[BindingConfig] = None):
        self.config = config or get_binding_config()
        super().__init__()

    def _get_handler_prefix(self) -> str:
        return '_index_'

    def assign_row_indexes(self, scope: Tag) -> Dict[str, int]:
        """
        Index every group container reached from a grouped leaf under scope.

        Returns:
            Number of indexed rows per group id

        Raises:
            ContainerNotFoundError: If a grouped leaf has no enclosing container
        """
        dom.require_scope(scope)
        containers: Dict[int, tuple] = {}
        for leaf in NodeOperations.collect_leaves(scope, self.config):
            identifier = NodeOperations.identifier(leaf, self.config)
            self.dispatch(parse_field_name(identifier), leaf, identifier, containers)

        counts: Dict[str, int] = {}
        for group_id, container in containers.values():
            counts[group_id] = self._index_container(group_id, container)
        return counts

    def _index_TopLevelField(self, info: TopLevelField, leaf: Tag, identifier: str,
                             containers: Dict[int, tuple]) -> None:
        pass

    def _index_GroupedField(self, info: GroupedField, leaf: Tag, identifier: str,
                            containers: Dict[int, tuple]) -> None:
        container = dom.closest_by_id(leaf.parent, info.group_id)
        if container is None:
            raise ContainerNotFoundError(info.group_id, identifier)
        containers.setdefault(id(container), (info.group_id, container))

    def _is_template_holder(self, node: Tag) -> bool:
        return node.name == self.config.template_holder_tag

    def _group_leaves(self, row: Tag, prefix: str) -> List[Tag]:
        candidates = [row] + NodeOperations.collect_leaves(row, self.config)
        leaves = []
        for node in candidates:
            identifier = NodeOperations.identifier(node, self.config)
            if identifier is not None and identifier.startswith(prefix):
                leaves.append(node)
        return leaves

    def _index_container(self, group_id: str, container: Tag) -> int:
        prefix = GroupedField(group_id, "").prefix
        row_index = 0
        for row in dom.element_children(container):
            if self._is_template_holder(row):
                continue
            leaves = self._group_leaves(row, prefix)
            if not leaves:
                continue
            for leaf in leaves:
                dom.set_attr(leaf, self.config.row_index_attr, row_index)
            row_index += 1
        logger.debug(f"Indexed {row_index} rows in group '{group_id}'")
        return row_index
