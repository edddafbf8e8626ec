"""
Format type registry.

Maps the format-type tag declared on a leaf (data-value-format-type) to a
(format, unformat) pair. format() turns a canonical value into what the page
shows; unformat() reverses it. Both are inverses on the type's valid domain
and pass anything else through unchanged.

Follows the same pattern as the adapter registry:
- Class-level table shared across the process
- register() at import time for the built-ins
- Applications register their own types at startup
"""

import datetime
import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

FormatFunction = Callable[[str], str]

_NUM_PATTERN = re.compile(r"-?([1-9]\d*|0)(\.\d+)?")
_GROUPING_PATTERN = re.compile(r"(\d)(?=(\d{3})+$)")
_DIGITS_PATTERN = re.compile(r"\d+")


@dataclass(frozen=True)
class FormatType:
    """A named, symmetric pair of display transforms."""
    name: str
    format: FormatFunction
    unformat: FormatFunction


class FormatRegistry:
    """
    Registry of format types keyed by tag.

    try_format / try_unformat are the only entry points the services use.
    They never raise: an unknown tag or a failing function leaves the value
    untouched.
    """

    _format_types: Dict[str, FormatType] = {}

    @classmethod
    def register(cls, name: str, format: FormatFunction, unformat: FormatFunction) -> FormatType:
        """Register (or replace) a format type under name."""
        if name in cls._format_types:
            logger.debug(f"Replacing format type '{name}'")
        format_type = FormatType(name, format, unformat)
        cls._format_types[name] = format_type
        return format_type

    @classmethod
    def get_format_type(cls, name: Optional[str]) -> Optional[FormatType]:
        if not name:
            return None
        return cls._format_types.get(name)

    @classmethod
    def try_format(cls, name: Optional[str], value: str) -> str:
        """Apply the format function of name, or return value unchanged."""
        return cls._apply(name, value, "format")

    @classmethod
    def try_unformat(cls, name: Optional[str], value: str) -> str:
        """Apply the unformat function of name, or return value unchanged."""
        return cls._apply(name, value, "unformat")

    @classmethod
    def _apply(cls, name: Optional[str], value: str, direction: str) -> str:
        format_type = cls.get_format_type(name)
        if format_type is None:
            if name:
                logger.debug(f"Unknown format type '{name}', value passed through")
            return value
        try:
            return getattr(format_type, direction)(value)
        except Exception:
            logger.warning(
                f"Format type '{name}' failed to {direction} {value!r}, value passed through",
                exc_info=True,
            )
            return value


# ========== BUILT-IN FORMAT TYPES ==========

def _is_blank(value: Optional[str]) -> bool:
    return value is None or str(value).strip() == ""


def _format_upper(value: str) -> str:
    if _is_blank(value):
        return value
    return value.upper()


def _identity(value: str) -> str:
    return value


def _format_num(value: str) -> str:
    """1234567.5 -> 1,234,567.5; the fraction is never grouped."""
    if _is_blank(value):
        return value
    plain = value.replace(",", "")
    if not _NUM_PATTERN.fullmatch(plain):
        return value
    integer, dot, fraction = plain.partition(".")
    sign = ""
    if integer.startswith("-"):
        sign, integer = "-", integer[1:]
    grouped = _GROUPING_PATTERN.sub(r"\1,", integer)
    return f"{sign}{grouped}{dot}{fraction}"


def _unformat_num(value: str) -> str:
    if _is_blank(value):
        return value
    plain = value.replace(",", "")
    if not _NUM_PATTERN.fullmatch(plain):
        return value
    return plain


def _is_calendar_date(year: str, month: str, day: str) -> bool:
    try:
        datetime.date(int(year), int(month), int(day))
    except ValueError:
        return False
    return True


def _format_ymd(value: str) -> str:
    """20250210 -> 2025/02/10, only for real calendar dates."""
    if _is_blank(value) or len(value) != 8 or not _DIGITS_PATTERN.fullmatch(value):
        return value
    year, month, day = value[:4], value[4:6], value[6:]
    if not _is_calendar_date(year, month, day):
        return value
    return f"{year}/{month}/{day}"


def _unformat_ymd(value: str) -> str:
    if _is_blank(value):
        return value
    parts = value.split("/")
    if len(parts) != 3 or [len(part) for part in parts] != [4, 2, 2]:
        return value
    if not all(_DIGITS_PATTERN.fullmatch(part) for part in parts):
        return value
    if not _is_calendar_date(*parts):
        return value
    return "".join(parts)


def _format_hms(value: str) -> str:
    """134501 -> 13:45:01."""
    if _is_blank(value) or len(value) != 6 or not _DIGITS_PATTERN.fullmatch(value):
        return value
    return f"{value[:2]}:{value[2:4]}:{value[4:]}"


def _unformat_hms(value: str) -> str:
    if _is_blank(value):
        return value
    parts = value.split(":")
    if len(parts) != 3 or not all(len(part) == 2 and _DIGITS_PATTERN.fullmatch(part) for part in parts):
        return value
    return "".join(parts)


FormatRegistry.register("upper", _format_upper, _identity)
FormatRegistry.register("num", _format_num, _unformat_num)
FormatRegistry.register("ymd", _format_ymd, _unformat_ymd)
FormatRegistry.register("hms", _format_hms, _unformat_hms)
