"""
Quote-aware tokenizer for inert row templates.

A row template is markup kept as plain text (typically inside
<script type="text/html">). Rows are generated by splitting that text into
its opening tag, inner markup and closing tag, then parsing the opening tag
into a tag name and attribute map.

Both scans track single and double quote state explicitly, so attribute
values containing '<' or '>' do not end the tag early.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

QUOTES = ('"', "'")


@dataclass(frozen=True)
class RowTemplate:
    """Parsed row template: the row element plus the markup of its content."""
    tag_name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    inner_markup: str = ""


def _find_open_tag_end(text: str) -> int:
    """Index of the first '>' that is not inside a quoted value, or -1."""
    quote = None
    for pos, char in enumerate(text):
        if quote is not None:
            if char == quote:
                quote = None
        elif char in QUOTES:
            quote = char
        elif char == ">":
            return pos
    return -1


def split_template(text: str) -> List[str]:
    """
    Split template markup into [open tag, inner markup, close tag].

    Returns an empty list when the text is blank, when either boundary is
    missing, or when the closing tag starts before the opening tag ends.

    Examples:
        >>> split_template('<tr class="row"><td></td></tr>')
        ['<tr class="row">', '<td></td>', '</tr>']
    """
    if text is None or text.strip() == "":
        return []
    text = text.strip()

    begin = _find_open_tag_end(text)
    end = text.rfind("<")
    if begin < 0 or end < 0 or end <= begin:
        return []
    return [text[:begin + 1], text[begin + 1:end], text[end:]]


def _tokenize(text: str) -> List[str]:
    """Split on whitespace that is not inside a quoted value."""
    tokens: List[str] = []
    current: List[str] = []
    quote = None
    for char in text:
        if quote is not None:
            current.append(char)
            if char == quote:
                quote = None
        elif char in QUOTES:
            quote = char
            current.append(char)
        elif char.isspace():
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)
    if current:
        tokens.append("".join(current))
    return tokens


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] in QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_open_tag(text: str) -> Optional[Tuple[str, Dict[str, str]]]:
    """
    Parse an opening tag into (tag name, attribute map).

    Bare attributes map to their own name (disabled -> disabled="disabled").
    Returns None on blank input.

    Examples:
        >>> parse_open_tag('<tr class="row">')
        ('tr', {'class': 'row'})
    """
    if text is None or text.strip() == "":
        return None
    body = text.strip()
    if body.startswith("<"):
        body = body[1:]
    if body.endswith(">"):
        body = body[:-1]

    tokens = [token for token in _tokenize(body) if token != "/"]
    if not tokens:
        return None

    tag_name = tokens[0].rstrip("/").lower()
    attributes: Dict[str, str] = {}
    for token in tokens[1:]:
        name, sep, value = token.partition("=")
        name = name.lower()
        if not name:
            continue
        attributes[name] = _unquote(value) if sep else name
    return tag_name, attributes


def parse_template(text: str) -> Optional[RowTemplate]:
    """
    Parse template markup into a RowTemplate.

    Returns None (and logs) when the markup has no usable row element.
    """
    parts = split_template(text)
    if not parts:
        logger.warning(f"Template markup could not be split: {text!r}")
        return None

    open_tag = parse_open_tag(parts[0])
    if open_tag is None or not open_tag[0]:
        logger.error(f"Template open tag could not be parsed: {parts[0]!r}")
        return None

    tag_name, attributes = open_tag
    return RowTemplate(tag_name, attributes, parts[1])
