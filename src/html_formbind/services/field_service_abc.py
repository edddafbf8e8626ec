"""
Abstract base class for field services with auto-discovery dispatch.

Services that treat top-level and grouped fields differently define one
handler per field descriptor type instead of branching on isinstance.

Pattern:
    class MyService(FieldServiceABC):
        def _get_handler_prefix(self) -> str:
            return '_collect_'

        def _collect_TopLevelField(self, info, ...):
            ...

        def _collect_GroupedField(self, info, ...):
            ...

Services using this pattern:
- ValueCollectionService: _collect_TopLevelField, _collect_GroupedField
- RowIndexService: _index_TopLevelField, _index_GroupedField
"""

from typing import Any, Callable, Dict, List
from abc import ABC, abstractmethod
import logging

from html_formbind.forms.field_info_types import FieldInfo

logger = logging.getLogger(__name__)


class FieldServiceABC(ABC):
    """
    Abstract base for field services with auto-discovery dispatch.

    Subclasses must:
    1. Implement _get_handler_prefix() to return method prefix (e.g., '_collect_')
    2. Define handler methods following naming convention: {prefix}{ClassName}
    """

    def __init__(self):
        self._handlers: Dict[str, Callable] = {}
        prefix = self._get_handler_prefix()

        for attr_name in dir(self):
            if attr_name.startswith(prefix):
                # '_collect_GroupedField' -> 'GroupedField'
                class_name = attr_name[len(prefix):]
                handler = getattr(self, attr_name)
                if callable(handler):
                    self._handlers[class_name] = handler

        if self._handlers:
            logger.debug(
                f"{self.__class__.__name__} auto-discovered handlers: "
                f"{list(self._handlers.keys())}"
            )
        else:
            logger.warning(
                f"{self.__class__.__name__} found no handlers with prefix '{prefix}'. "
                f"Did you forget to define handler methods?"
            )

    @abstractmethod
    def _get_handler_prefix(self) -> str:
        """Return the method prefix for this service's handlers."""
        pass

    def dispatch(self, info: FieldInfo, *args, **kwargs) -> Any:
        """
        Auto-dispatch to handler based on the descriptor's class name.

        Raises:
            ValueError: If no handler found for the descriptor type
        """
        class_name = info.__class__.__name__
        handler = self._handlers.get(class_name)

        if handler is None:
            raise ValueError(
                f"No handler for {class_name} in {self.__class__.__name__}. "
                f"Available handlers: {list(self._handlers.keys())}. "
                f"Did you forget to define {self._get_handler_prefix()}{class_name}()?"
            )
        return handler(info, *args, **kwargs)

    def has_handler(self, info: FieldInfo) -> bool:
        return info.__class__.__name__ in self._handlers

    def get_supported_types(self) -> List[str]:
        return list(self._handlers.keys())
