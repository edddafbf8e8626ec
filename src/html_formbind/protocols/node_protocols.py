"""
Node ABC contracts for tree binding.

Every addressable leaf is wrapped in an adapter that declares its
capabilities by inheritance, so services check isinstance against these
ABCs instead of probing tag names and attributes themselves.

Design Philosophy:
- Explicit inheritance over duck typing
- Fail-loud over fail-silent
- Multiple inheritance for composable capabilities
"""

from abc import ABC, abstractmethod
from typing import Any


class ValueGettable(ABC):
    """
    ABC for nodes that can report a value.

    All addressable leaves implement this to take part in extraction.
    """

    @abstractmethod
    def get_value(self) -> str:
        """
        Get the node's current raw value (before unformatting).

        Returns:
            The value as displayed. Empty string when there is none.
        """
        pass


class ValueSettable(ABC):
    """
    ABC for nodes that can accept a value.

    All addressable leaves implement this to take part in injection.
    """

    @abstractmethod
    def set_value(self, value: Any) -> None:
        """
        Write a display value into the node.

        Args:
            value: The already formatted value. None clears the node.
        """
        pass


class Checkable(ABC):
    """
    ABC for checkbox and radio inputs.

    Their value is fixed markup; what changes is the checked state.
    """

    @abstractmethod
    def is_checked(self) -> bool:
        pass

    @abstractmethod
    def fixed_value(self) -> str:
        """The value attribute the control submits when checked."""
        pass

    @abstractmethod
    def is_radio(self) -> bool:
        pass


class FreeTextEditable(ABC):
    """
    Marker ABC for nodes holding typed free text.

    Values read from these nodes are sanitised (tabs, line breaks, trailing
    blanks) before unformatting.
    """
