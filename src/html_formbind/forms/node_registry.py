"""
Node adapter registry with metaclass auto-registration.

Adapters register themselves when their class is defined, so resolving the
adapter for a tree node is a lookup over NODE_IMPLEMENTATIONS rather than a
hand-maintained if/elif chain over tag names.

Design:
- NodeMeta metaclass handles auto-registration
- NODE_IMPLEMENTATIONS: Global registry of adapter classes by node id
- NODE_CAPABILITIES: Tracks which ABCs each adapter implements
- Adapters declare matches(tag) and a _priority; lowest priority wins
"""

from abc import ABCMeta
from typing import Dict, Set, Type
import logging

logger = logging.getLogger(__name__)

# Maps node_id -> adapter class
NODE_IMPLEMENTATIONS: Dict[str, Type] = {}

# Maps adapter class -> set of ABC classes
NODE_CAPABILITIES: Dict[Type, Set[Type]] = {}


class NodeMeta(ABCMeta):
    """
    Metaclass for automatic node adapter registration.

    1. Only registers concrete implementations (no abstract methods)
    2. Requires _node_id attribute for identification
    3. Auto-populates NODE_IMPLEMENTATIONS registry
    4. Tracks capabilities (which ABCs implemented)

    Example:
        class DisplayAdapter(NodeAdapter, ValueGettable, ValueSettable):
            _node_id = "display"
            _priority = 100

            @staticmethod
            def matches(tag) -> bool:
                return True
    """

    def __new__(mcs, name, bases, attrs):
        new_class = super().__new__(mcs, name, bases, attrs)

        if getattr(new_class, '__abstractmethods__', None):
            logger.debug(
                f"Skipping registration for {name} - abstract methods remaining: "
                f"{new_class.__abstractmethods__}"
            )
            return new_class

        node_id = attrs.get('_node_id')
        if node_id is None:
            logger.debug(f"Skipping registration for {name} - no _node_id attribute")
            return new_class

        if node_id in NODE_IMPLEMENTATIONS:
            existing = NODE_IMPLEMENTATIONS[node_id]
            logger.warning(
                f"Node ID '{node_id}' already registered to {existing.__name__}. "
                f"Overwriting with {name}."
            )

        NODE_IMPLEMENTATIONS[node_id] = new_class

        from html_formbind.protocols.node_protocols import (
            ValueGettable, ValueSettable, Checkable, FreeTextEditable
        )
        abc_types = {ValueGettable, ValueSettable, Checkable, FreeTextEditable}
        NODE_CAPABILITIES[new_class] = {
            abc_type for abc_type in abc_types if issubclass(new_class, abc_type)
        }

        logger.debug(
            f"Auto-registered {name} as '{node_id}' with capabilities: "
            f"{sorted(c.__name__ for c in NODE_CAPABILITIES[new_class])}"
        )
        return new_class


def get_node_class(node_id: str) -> Type:
    """
    Get adapter class by ID.

    Raises:
        KeyError: If node_id not registered
    """
    if node_id not in NODE_IMPLEMENTATIONS:
        raise KeyError(
            f"No node adapter registered with ID '{node_id}'. "
            f"Available adapters: {list(NODE_IMPLEMENTATIONS.keys())}"
        )
    return NODE_IMPLEMENTATIONS[node_id]


def get_node_capabilities(node_class: Type) -> Set[Type]:
    """Get the ABCs that an adapter class implements."""
    return NODE_CAPABILITIES.get(node_class, set())


def resolve_node_class(tag) -> Type:
    """
    Pick the adapter class for a tree node.

    Raises:
        TypeError: If no registered adapter accepts the node
    """
    for node_class in sorted(NODE_IMPLEMENTATIONS.values(), key=lambda cls: cls._priority):
        if node_class.matches(tag):
            return node_class
    raise TypeError(
        f"No node adapter accepts <{getattr(tag, 'name', tag)}>. "
        f"Available adapters: {list(NODE_IMPLEMENTATIONS.keys())}"
    )
