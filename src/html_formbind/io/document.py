"""
Document and value-object IO.

HTML is parsed with BeautifulSoup's html.parser so that the tree keeps the
page's own structure (no html/body wrappers are invented for fragments).
Value objects are plain JSON.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from bs4 import BeautifulSoup, Tag

from html_formbind.core.dom import FRAGMENT_PARSER
from html_formbind.exceptions import InvalidArgumentError
from html_formbind.protocols.binding_config import get_binding_config

logger = logging.getLogger(__name__)

Source = Union[str, bytes, Path]


def _read_source(source: Source) -> Union[str, bytes]:
    if isinstance(source, Path):
        logger.debug(f"Reading {source}")
        return source.read_bytes()
    return source


def load_document(source: Source) -> BeautifulSoup:
    """
    Parse HTML markup into a tree.

    Args:
        source: Markup as str or bytes, or a Path to an HTML file
    """
    return BeautifulSoup(_read_source(source), FRAGMENT_PARSER)


def dump_document(tree: Tag, path: Optional[Path] = None, pretty: bool = False) -> str:
    """Render a tree back to markup, optionally writing it to path."""
    markup = tree.prettify() if pretty else str(tree)
    if path is not None:
        Path(path).write_text(markup, encoding="utf-8")
        logger.debug(f"Wrote document to {path}")
    return markup


def load_values(source: Source) -> Dict[str, Any]:
    """
    Load a value object from JSON text or a JSON file.

    Raises:
        InvalidArgumentError: If the JSON does not hold an object
    """
    data = json.loads(_read_source(source))
    if not isinstance(data, dict):
        raise InvalidArgumentError(f"Value object must be a JSON object, got {type(data).__name__}")
    return data


def _public(values: Mapping[str, Any], prefix: str) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if not key.startswith(prefix)}


def dump_values(values: Mapping[str, Any], path: Optional[Path] = None,
                drop_private: bool = True, indent: Optional[int] = 2) -> str:
    """
    Serialise a value object as JSON.

    Private keys (leading "_") are dropped unless drop_private is False.
    """
    if drop_private:
        values = _public(values, get_binding_config().private_key_prefix)
    text = json.dumps(values, ensure_ascii=False, indent=indent)
    if path is not None:
        Path(path).write_text(text, encoding="utf-8")
        logger.debug(f"Wrote value object to {path}")
    return text
