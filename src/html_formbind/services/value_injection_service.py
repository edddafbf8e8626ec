"""
Value Injection Service.

Writes a value object back into a region of the page. Scalars go to the leaf
addressed by their key; lists regenerate the rows of the group with that id.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from bs4 import Tag

from html_formbind.core import dom
from html_formbind.exceptions import InvalidArgumentError
from html_formbind.forms.node_operations import NodeOperations
from html_formbind.protocols.binding_config import BindingConfig, get_binding_config
from .row_service import RowService

logger = logging.getLogger(__name__)

SCALAR_TYPES = (str, int, float, bool)


class ValueInjectionService:
    """
    Service for injecting value objects into the tree.

    Examples:
        service = ValueInjectionService()
        service.inject({"user_id": "U001", "detail": [{"no": "1"}]}, soup.main)
    """

    def __init__(self, config: Optional[BindingConfig] = None,
                 row_service: Optional[RowService] = None):
        self.config = config or get_binding_config()
        self.row_service = row_service or RowService(self.config)

    def is_private_key(self, key: str) -> bool:
        return key.startswith(self.config.private_key_prefix)

    def inject(self, values: Mapping[str, Any], scope: Tag) -> Dict[str, int]:
        """
        Write every public key of values into the leaves under scope.

        Missing leaves and unusable templates are logged and skipped.

        Returns:
            Counts of scalars written, scalars skipped and groups regenerated

        Raises:
            InvalidArgumentError: If values is not a mapping
            InvalidScopeError: If scope is not a tree node
        """
        if not isinstance(values, Mapping):
            raise InvalidArgumentError(
                f"Value object must be a mapping, got {type(values).__name__}"
            )
        dom.require_scope(scope)

        summary = {"written": 0, "skipped": 0, "groups": 0}
        for key, value in values.items():
            if self.is_private_key(key):
                continue

            if isinstance(value, (list, tuple)):
                self.row_service.set_row_values(key, value, scope)
                summary["groups"] += 1
                continue

            if value is not None and not isinstance(value, SCALAR_TYPES):
                logger.debug(f"Non-scalar value ignored. key={key} type={type(value).__name__}")
                summary["skipped"] += 1
                continue

            if NodeOperations.write_field(key, value, scope, self.config):
                summary["written"] += 1
            else:
                summary["skipped"] += 1

        logger.debug(f"Injected into <{scope.name}>: {summary}")
        return summary
