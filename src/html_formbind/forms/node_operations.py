"""
Centralized node operations using ABC-based dispatch.

Services never look at tag names or value attributes directly; they go
through these operations, which wrap the node in its registered adapter and
check the adapter's capabilities.

Design:
- Single source of truth for reading and writing leaves
- ABC-based dispatch (no hasattr checks)
- Fail-loud on missing implementations
- Leaf lookup by identifier with the radio re-location rule
"""

from typing import Any, List, Optional
import logging

from bs4 import Tag

from html_formbind.core import dom
from html_formbind.protocols import (
    BindingConfig, get_binding_config, adapter_for,
    ValueGettable, ValueSettable, Checkable, FreeTextEditable,
)
from .format_registry import FormatRegistry

logger = logging.getLogger(__name__)


class NodeOperations:
    """
    Centralized node operations using ABC-based dispatch.

    Example:
        ops = NodeOperations()

        # Get value (fails loud if the adapter doesn't implement ValueGettable)
        value = ops.get_value(node)

        # Write a canonical value through the leaf's format type
        ops.set_formatted_value(node, "1234.5")
    """

    # ========== CAPABILITY DISPATCH ==========

    @staticmethod
    def get_value(node: Tag, config: Optional[BindingConfig] = None) -> str:
        """
        Raw displayed value of a leaf.

        Raises:
            TypeError: If the node's adapter doesn't implement ValueGettable
        """
        adapter = adapter_for(node, config)
        if not isinstance(adapter, ValueGettable):
            raise TypeError(
                f"Node {type(adapter).__name__} does not implement ValueGettable ABC. "
                f"Add ValueGettable to the adapter's base classes."
            )
        return adapter.get_value()

    @staticmethod
    def set_value(node: Tag, value: Any, config: Optional[BindingConfig] = None) -> None:
        """
        Write an already formatted value into a leaf.

        Raises:
            TypeError: If the node's adapter doesn't implement ValueSettable
        """
        adapter = adapter_for(node, config)
        if not isinstance(adapter, ValueSettable):
            raise TypeError(
                f"Node {type(adapter).__name__} does not implement ValueSettable ABC. "
                f"Add ValueSettable to the adapter's base classes."
            )
        adapter.set_value(value)

    @staticmethod
    def is_free_text(node: Tag) -> bool:
        return isinstance(adapter_for(node), FreeTextEditable)

    @staticmethod
    def fixed_value(node: Tag) -> str:
        """
        Raises:
            TypeError: If the node is not a checkbox or radio
        """
        adapter = adapter_for(node)
        if not isinstance(adapter, Checkable):
            raise TypeError(f"Node {type(adapter).__name__} does not implement Checkable ABC.")
        return adapter.fixed_value()

    # ========== ADDRESSING ==========

    @staticmethod
    def identifier(node: Tag, config: Optional[BindingConfig] = None) -> Optional[str]:
        """Identifier a leaf is addressed by: name for form controls, else data-name."""
        config = config or get_binding_config()
        if dom.is_form_control(node):
            name = dom.get_attr(node, config.name_attr)
            if name:
                return name
        name = dom.get_attr(node, config.display_name_attr)
        return name or None

    @staticmethod
    def is_addressable(node: Tag, config: Optional[BindingConfig] = None) -> bool:
        return isinstance(node, Tag) and NodeOperations.identifier(node, config) is not None

    @staticmethod
    def is_inert(node: Tag, config: Optional[BindingConfig] = None) -> bool:
        """Whether node sits inside a template holder or a <template> element."""
        config = config or get_binding_config()
        inert_tags = set(dom.INERT_TAGS) | {config.template_holder_tag}
        return dom.closest(node.parent, lambda current: current.name in inert_tags) is not None

    @staticmethod
    def collect_leaves(scope: Tag, config: Optional[BindingConfig] = None) -> List[Tag]:
        """Every addressable leaf under scope, in document order."""
        config = config or get_binding_config()
        return [
            node for node in dom.find_all_matching(
                lambda node: NodeOperations.is_addressable(node, config), scope
            )
            if not NodeOperations.is_inert(node, config)
        ]

    # ========== FORMATTED WRITES ==========

    @staticmethod
    def to_display_text(value: Any) -> str:
        """
        Convert a value-object scalar to the text written into a leaf.

        None -> "", booleans -> "true"/"false", integral floats lose ".0".
        """
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)

    @staticmethod
    def set_formatted_value(node: Tag, value: Any, config: Optional[BindingConfig] = None) -> None:
        """
        Write a canonical value into a leaf, applying its declared format type.

        Check types only change their checked state, so they are never
        formatted.
        """
        config = config or get_binding_config()
        text = NodeOperations.to_display_text(value)
        if not dom.is_check_type(node):
            format_name = dom.get_attr(node, config.format_type_attr)
            text = FormatRegistry.try_format(format_name, text)
        NodeOperations.set_value(node, text, config)

    @staticmethod
    def locate_leaf(identifier: str, scope: Tag, config: Optional[BindingConfig] = None) -> Optional[Tag]:
        """First leaf with name == identifier, falling back to data-name."""
        config = config or get_binding_config()
        leaf = dom.find_by_attr(config.name_attr, identifier, scope)
        if leaf is None:
            leaf = dom.find_by_attr(config.display_name_attr, identifier, scope)
        return leaf

    @staticmethod
    def write_field(identifier: str, value: Any, scope: Tag,
                    config: Optional[BindingConfig] = None) -> bool:
        """
        Write one scalar into the leaf addressed by identifier.

        For a radio whose first instance does not carry the target value, the
        sibling instance with that value is located and checked instead.

        Returns:
            True if a leaf was written, False if none was found
        """
        config = config or get_binding_config()
        leaf = NodeOperations.locate_leaf(identifier, scope, config)
        if leaf is None:
            logger.warning(f"Leaf not found, value skipped. name={identifier}")
            return False

        if dom.is_radio(leaf):
            text = NodeOperations.to_display_text(value)
            target = leaf
            if NodeOperations.fixed_value(leaf) != text:
                target = dom.find_by_attr_and_value(config.name_attr, identifier, text, scope)
                if target is None and text:
                    logger.warning(
                        f"No radio carries the value, selection cleared. "
                        f"name={identifier} value={text}"
                    )
            # Only one radio of a name may stay checked
            for radio in dom.find_all_by_attr(config.name_attr, identifier, scope):
                dom.set_checked(radio, radio is target)
            return True

        NodeOperations.set_formatted_value(leaf, value, config)
        logger.debug(f"Wrote {identifier}={value!r} into <{leaf.name}>")
        return True
