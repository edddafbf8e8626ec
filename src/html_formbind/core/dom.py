"""
Tree primitives over BeautifulSoup.

Thin helpers that stand in for a live DOM: lookup by id/name, attribute and
class handling, text access, visibility, node creation and removal. Nothing
here knows about groups, rows or value objects.

All lookups are scoped: they search the descendants of the given node and
never the node itself, matching querySelector semantics.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional
import logging

from bs4 import BeautifulSoup, NavigableString, Tag

from html_formbind.exceptions import InvalidScopeError

logger = logging.getLogger(__name__)

FORM_CONTROL_TAGS = ("input", "select", "textarea")

# Tags whose content is never rendered
INERT_TAGS = ("template",)

STYLE_DISPLAY_BACKUP_ATTR = "data-style-display-backup"
STYLE_VISIBILITY_BACKUP_ATTR = "data-style-visibility-backup"

FRAGMENT_PARSER = "html.parser"


def require_scope(scope: Any, what: str = "scope root") -> Tag:
    """Return scope unchanged, or raise InvalidScopeError if it is not a Tag."""
    if not isinstance(scope, Tag):
        raise InvalidScopeError(f"Argument {what} is invalid: {type(scope).__name__}")
    return scope


def _is_blank(value: Optional[str]) -> bool:
    return value is None or str(value).strip() == ""


# ========== LOOKUP ==========

def find_by_id(element_id: str, scope: Tag) -> Optional[Tag]:
    """First descendant whose id equals element_id."""
    if _is_blank(element_id):
        return None
    return scope.find(attrs={"id": element_id})


def find_by_attr(attr: str, value: str, scope: Tag) -> Optional[Tag]:
    """First descendant whose attribute equals value."""
    if _is_blank(value):
        return None
    return scope.find(attrs={attr: value})


def find_all_by_attr(attr: str, value: str, scope: Tag) -> List[Tag]:
    """Every descendant whose attribute equals value, in document order."""
    if _is_blank(value):
        return []
    return scope.find_all(attrs={attr: value})


def find_by_attr_and_value(attr: str, name: str, value: str, scope: Tag) -> Optional[Tag]:
    """First descendant with attr == name and value == value (radio lookup)."""
    if _is_blank(name) or _is_blank(value):
        return None
    return scope.find(attrs={attr: name, "value": value})


def find_first_tag(tag_name: str, scope: Tag) -> Optional[Tag]:
    """First descendant with the given tag name."""
    if _is_blank(tag_name):
        return None
    return scope.find(tag_name.lower())


def find_all_matching(predicate: Callable[[Tag], bool], scope: Tag) -> List[Tag]:
    """Every descendant element accepted by predicate."""
    return scope.find_all(lambda node: predicate(node))


def closest(node: Tag, predicate: Callable[[Tag], bool]) -> Optional[Tag]:
    """Nearest element, starting at node itself, accepted by predicate."""
    current = node
    while isinstance(current, Tag) and not isinstance(current, BeautifulSoup):
        if predicate(current):
            return current
        current = current.parent
    return None


def closest_by_id(node: Tag, element_id: str) -> Optional[Tag]:
    """Nearest element (self included) whose id equals element_id."""
    if _is_blank(element_id):
        return None
    return closest(node, lambda current: current.get("id") == element_id)


def closest_by_tag(node: Tag, tag_name: str) -> Optional[Tag]:
    """Nearest element (self included) with the given tag name."""
    if _is_blank(tag_name):
        return None
    tag_name = tag_name.lower()
    return closest(node, lambda current: current.name == tag_name)


def element_children(node: Tag) -> List[Tag]:
    """Direct child elements, text nodes excluded."""
    return [child for child in node.children if isinstance(child, Tag)]


# ========== ATTRIBUTES ==========

def get_attr(node: Tag, attr: str) -> Optional[str]:
    """Attribute value as a string, or None when absent."""
    if _is_blank(attr):
        return None
    value = node.get(attr)
    if isinstance(value, list):
        return " ".join(value)
    return value


def set_attr(node: Tag, attr: str, value: Any) -> bool:
    if _is_blank(attr):
        return False
    node[attr] = "" if value is None else str(value)
    return True


def has_attr(node: Tag, attr: str) -> bool:
    if _is_blank(attr):
        return False
    return node.has_attr(attr)


def remove_attr(node: Tag, attr: str) -> bool:
    if not has_attr(node, attr):
        return False
    del node[attr]
    return True


def _class_list(node: Tag) -> List[str]:
    value = node.get("class")
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return list(value)


def has_class(node: Tag, cls: str) -> bool:
    if _is_blank(cls):
        return False
    return cls in _class_list(node)


def add_class(node: Tag, cls: str) -> bool:
    if _is_blank(cls):
        return False
    classes = _class_list(node)
    if cls not in classes:
        classes.append(cls)
    node["class"] = classes
    return True


def remove_class(node: Tag, cls: str) -> bool:
    if not has_class(node, cls):
        return False
    classes = [name for name in _class_list(node) if name != cls]
    if classes:
        node["class"] = classes
    else:
        del node["class"]
    return True


# ========== TEXT ==========

def get_text(node: Tag) -> str:
    """Concatenated text content of node (textContent)."""
    return node.get_text()


def set_text(node: Tag, text: Optional[str]) -> None:
    """Replace all children of node with a single text node."""
    node.string = "" if text is None else str(text)


def inner_markup(node: Tag) -> str:
    """Markup of node's children.

    Raw-text holders such as <script> keep their content verbatim; anything
    else is serialised from the parsed children.
    """
    if all(isinstance(child, NavigableString) for child in node.contents):
        return "".join(str(child) for child in node.contents)
    return node.decode_contents()


def parse_fragment(markup: str) -> List[Any]:
    """Parse an HTML fragment without adding html/body wrappers."""
    fragment = BeautifulSoup(markup or "", FRAGMENT_PARSER)
    return list(fragment.contents)


def set_inner_markup(node: Tag, markup: str) -> None:
    """Replace node's children with the nodes parsed from markup (innerHTML)."""
    node.clear()
    for child in parse_fragment(markup):
        node.append(child)


# ========== CREATION / REMOVAL ==========

def create_element(tag_name: str, attributes: Optional[Mapping[str, str]] = None) -> Tag:
    """Create a detached element with the given attributes."""
    factory = BeautifulSoup("", FRAGMENT_PARSER)
    return factory.new_tag(tag_name.lower(), attrs=dict(attributes or {}))


def remove_node(node: Tag) -> None:
    """Detach node from its parent. Safe to call on an already detached node."""
    node.extract()


# ========== FORM CONTROLS ==========

def is_form_control(node: Tag) -> bool:
    return isinstance(node, Tag) and node.name in FORM_CONTROL_TAGS


def input_type(node: Tag) -> str:
    """Lower-cased type attribute of an <input>; empty for other tags."""
    if node.name != "input":
        return ""
    return (get_attr(node, "type") or "").strip().lower()


def is_check_type(node: Tag) -> bool:
    return input_type(node) in ("checkbox", "radio")


def is_radio(node: Tag) -> bool:
    return input_type(node) == "radio"


def is_checked(node: Tag) -> bool:
    return node.has_attr("checked")


def set_checked(node: Tag, checked: bool) -> None:
    if checked:
        node["checked"] = "checked"
    elif node.has_attr("checked"):
        del node["checked"]


# ========== VISIBILITY ==========

def _parse_style(node: Tag) -> Dict[str, str]:
    declarations: Dict[str, str] = {}
    for declaration in (get_attr(node, "style") or "").split(";"):
        prop, sep, value = declaration.partition(":")
        if not sep:
            continue
        value = value.replace("!important", "").strip().lower()
        declarations[prop.strip().lower()] = value
    return declarations


def _write_style(node: Tag, declarations: Dict[str, str]) -> None:
    style = "; ".join(f"{prop}: {value}" for prop, value in declarations.items() if value)
    if style:
        node["style"] = style
    elif node.has_attr("style"):
        del node["style"]


def is_visible(node: Tag) -> bool:
    """
    Whether node is rendered, taking ancestors into account.

    A node is hidden when it or any ancestor has inline display:none or
    visibility:hidden, carries the hidden attribute, or sits inside an inert
    <template>. Hidden inputs are never considered hidden themselves.
    """
    if not isinstance(node, Tag):
        return False
    current = node
    while isinstance(current, Tag) and not isinstance(current, BeautifulSoup):
        if current.name in INERT_TAGS:
            return False
        if not (current.name == "input" and input_type(current) == "hidden"):
            if current.has_attr("hidden"):
                return False
            style = _parse_style(current)
            if style.get("display") == "none" or style.get("visibility") == "hidden":
                return False
        current = current.parent
    return True


def set_visible(node: Tag, show: bool, keep_layout: bool = False) -> bool:
    """
    Toggle the inline display (or visibility, when keep_layout) style.

    A non-default value is backed up on a data attribute before hiding and
    restored when showing again.

    Returns:
        True if the style changed
    """
    prop, hidden_value, backup_attr = (
        ("visibility", "hidden", STYLE_VISIBILITY_BACKUP_ATTR) if keep_layout
        else ("display", "none", STYLE_DISPLAY_BACKUP_ATTR)
    )
    declarations = _parse_style(node)
    current = declarations.get(prop, "")
    if show:
        if current != hidden_value:
            return False
        declarations[prop] = get_attr(node, backup_attr) or ""
        remove_attr(node, backup_attr)
    else:
        if current == hidden_value:
            return False
        if current:
            set_attr(node, backup_attr, current)
        declarations[prop] = hidden_value
    _write_style(node, declarations)
    return True


def set_enabled(node: Tag, enabled: bool) -> bool:
    """Toggle the disabled attribute. Returns True if it changed."""
    was_enabled = not node.has_attr("disabled")
    if was_enabled == bool(enabled):
        return False
    if enabled:
        del node["disabled"]
    else:
        node["disabled"] = "disabled"
    return True
