"""
Node adapters that wrap tree elements to implement the binding ABCs.

Normalizes the inconsistent ways HTML stores a value:
- <input> keeps it in the value attribute
- <textarea> keeps it as text content
- <select> keeps it on the selected <option>
- checkbox/radio submit a fixed value depending on the checked state
- any other element (<span>, <td>) only has text content

All adapters implement a consistent interface via ABCs:
- get_value() / set_value() for all nodes
- is_checked() / fixed_value() / is_radio() for check-type inputs
"""

from typing import Any, Optional

from bs4 import Tag

from html_formbind.core import dom
from html_formbind.forms.node_registry import NodeMeta, resolve_node_class
from .binding_config import BindingConfig, get_binding_config
from .node_protocols import ValueGettable, ValueSettable, Checkable, FreeTextEditable


def _nvl(value: Optional[str]) -> str:
    return "" if value is None else str(value)


class NodeAdapter(metaclass=NodeMeta):
    """Base for all adapters: holds the wrapped node and the active config."""

    _priority = 50

    def __init__(self, node: Tag, config: Optional[BindingConfig] = None):
        self.node = node
        self.config = config or get_binding_config()

    @staticmethod
    def matches(tag: Tag) -> bool:
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(<{self.node.name}>)"


class CheckAdapter(NodeAdapter, ValueGettable, ValueSettable, Checkable):
    """
    Adapter for <input type="checkbox|radio">.

    Reports the value attribute when checked, and the declared off value
    (data-check-off-value) when not. Setting a value checks the control
    exactly when it equals the control's own value.
    """

    _node_id = "check"
    _priority = 10

    @staticmethod
    def matches(tag: Tag) -> bool:
        return dom.is_check_type(tag)

    def fixed_value(self) -> str:
        # Browsers report "on" for a check control without a value attribute
        value = dom.get_attr(self.node, "value")
        return "on" if value is None else value

    def is_checked(self) -> bool:
        return dom.is_checked(self.node)

    def is_radio(self) -> bool:
        return dom.is_radio(self.node)

    def get_value(self) -> str:
        if self.is_checked():
            return self.fixed_value()
        return _nvl(dom.get_attr(self.node, self.config.check_off_value_attr))

    def set_value(self, value: Any) -> None:
        dom.set_checked(self.node, _nvl(value) == self.fixed_value())


class SelectAdapter(NodeAdapter, ValueGettable, ValueSettable):
    """
    Adapter for <select>.

    The value is that of the selected <option>, falling back to the first
    option like a browser does. Options without a value attribute use their
    text.
    """

    _node_id = "select"
    _priority = 20

    @staticmethod
    def matches(tag: Tag) -> bool:
        return tag.name == "select"

    @staticmethod
    def _option_value(option: Tag) -> str:
        value = dom.get_attr(option, "value")
        return option.get_text().strip() if value is None else value

    def get_value(self) -> str:
        options = self.node.find_all("option")
        if not options:
            return ""
        selected = next((option for option in options if option.has_attr("selected")), options[0])
        return self._option_value(selected)

    def set_value(self, value: Any) -> None:
        target = _nvl(value)
        matched = False
        for option in self.node.find_all("option"):
            is_match = not matched and self._option_value(option) == target
            if is_match:
                option["selected"] = "selected"
                matched = True
            elif option.has_attr("selected"):
                del option["selected"]


class TextAreaAdapter(NodeAdapter, ValueGettable, ValueSettable, FreeTextEditable):
    """Adapter for <textarea>; the value is its text content."""

    _node_id = "textarea"
    _priority = 20

    @staticmethod
    def matches(tag: Tag) -> bool:
        return tag.name == "textarea"

    def get_value(self) -> str:
        text = dom.get_text(self.node)
        # The HTML parser drops one newline directly after <textarea>
        return text[1:] if text.startswith("\n") else text

    def set_value(self, value: Any) -> None:
        text = _nvl(value)
        # Serialised like a browser does, so the parser keeps a leading newline
        if text.startswith("\n"):
            text = "\n" + text
        dom.set_text(self.node, text)


class TextInputAdapter(NodeAdapter, ValueGettable, ValueSettable, FreeTextEditable):
    """Adapter for text-like inputs (type text, hidden, or no type at all)."""

    _node_id = "text_input"
    _priority = 30

    @staticmethod
    def matches(tag: Tag) -> bool:
        return tag.name == "input" and dom.input_type(tag) in ("", "text", "hidden")

    def get_value(self) -> str:
        return _nvl(dom.get_attr(self.node, "value"))

    def set_value(self, value: Any) -> None:
        dom.set_attr(self.node, "value", _nvl(value))


class InputAdapter(NodeAdapter, ValueGettable, ValueSettable):
    """Adapter for every other <input> type (number, date, email, ...)."""

    _node_id = "input"
    _priority = 40

    @staticmethod
    def matches(tag: Tag) -> bool:
        return tag.name == "input"

    def get_value(self) -> str:
        return _nvl(dom.get_attr(self.node, "value"))

    def set_value(self, value: Any) -> None:
        dom.set_attr(self.node, "value", _nvl(value))


class DisplayAdapter(NodeAdapter, ValueGettable, ValueSettable):
    """
    Adapter for non-form elements addressed through data-name.

    Catch-all: registered with the highest priority number so it is tried last.
    """

    _node_id = "display"
    _priority = 100

    @staticmethod
    def matches(tag: Tag) -> bool:
        return isinstance(tag, Tag)

    def get_value(self) -> str:
        return dom.get_text(self.node)

    def set_value(self, value: Any) -> None:
        dom.set_text(self.node, _nvl(value))


def adapter_for(node: Tag, config: Optional[BindingConfig] = None) -> NodeAdapter:
    """Wrap node in the adapter registered for its kind."""
    return resolve_node_class(node)(node, config)
