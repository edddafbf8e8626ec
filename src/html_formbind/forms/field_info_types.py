"""
Discriminated union types for field identifiers.

Grouping and ordering live entirely in the identifier strings authored in
markup ("user_id", "detail.weight_kg", "detail.sex[2]"). This module is the
only place those strings are taken apart; everything downstream works with
the typed descriptors.

Architecture:
    - TopLevelField: flat key outside any group
    - GroupedField: (group_id, column, radio_index) inside a repeating group
    - RadioName: explicit (logical_name, row_suffix) pair for template radios
    - parse_field_name(): factory that picks the descriptor type

Services dispatch on the descriptor's class name (see FieldServiceABC), so a
handler is written per descriptor type instead of branching on flags.
"""

from typing import Optional, Union
from dataclasses import dataclass
import logging

from html_formbind.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

GROUP_SEPARATOR = "."
SUFFIX_OPEN = "["
SUFFIX_CLOSE = "]"


@dataclass(frozen=True)
class TopLevelField:
    """
    A flat key outside any group.

    Examples:
        "user_id" -> TopLevelField(key="user_id")
    """
    key: str

    @property
    def column(self) -> str:
        return self.key


@dataclass(frozen=True)
class GroupedField:
    """
    A column inside a repeating group.

    Examples:
        "detail.weight_kg" -> GroupedField("detail", "weight_kg", None)
        "detail.sex[2]"    -> GroupedField("detail", "sex", 2)
    """
    group_id: str
    column: str
    radio_index: Optional[int] = None

    @property
    def prefix(self) -> str:
        """Identifier prefix shared by every leaf of the group."""
        return f"{self.group_id}{GROUP_SEPARATOR}"


FieldInfo = Union[TopLevelField, GroupedField]


@dataclass(frozen=True)
class RadioName:
    """
    Runtime name of a radio generated from a row template.

    Radios in different rows would share one name and therefore one
    selection, so each generated row gets its own suffix. The logical name
    is kept apart instead of being recovered by string slicing.
    """
    logical_name: str
    row_suffix: Optional[int] = None

    @property
    def runtime_name(self) -> str:
        if self.row_suffix is None:
            return self.logical_name
        return f"{self.logical_name}{SUFFIX_OPEN}{self.row_suffix}{SUFFIX_CLOSE}"

    def with_suffix(self, row_suffix: int) -> "RadioName":
        return RadioName(self.logical_name, row_suffix)

    @classmethod
    def parse(cls, raw: str) -> "RadioName":
        """Split a trailing numeric [n] suffix off a runtime name."""
        raw = raw or ""
        if raw.endswith(SUFFIX_CLOSE):
            open_pos = raw.rfind(SUFFIX_OPEN)
            digits = raw[open_pos + 1:-1]
            if open_pos > 0 and digits.isdigit():
                return cls(raw[:open_pos], int(digits))
        return cls(raw)


def parse_field_name(raw: str) -> FieldInfo:
    """
    Factory that turns a raw identifier into a field descriptor.

    Everything before the first "." is the group id and everything after it
    the column. A bracketed suffix on the column is stripped, and its numeric
    content becomes radio_index.

    Raises:
        InvalidArgumentError: If raw is blank

    Examples:
        >>> parse_field_name("user_id")
        TopLevelField(key='user_id')
        >>> parse_field_name("detail.sex[2]")
        GroupedField(group_id='detail', column='sex', radio_index=2)
    """
    if raw is None or raw.strip() == "":
        raise InvalidArgumentError("Field identifier is blank.")

    group_id, separator, raw_column = raw.partition(GROUP_SEPARATOR)
    if not separator:
        return TopLevelField(raw)

    column = raw_column
    radio_index = None
    open_pos = raw_column.find(SUFFIX_OPEN)
    if open_pos > 0:
        column = raw_column[:open_pos]
        digits = raw_column[open_pos + 1:].rstrip(SUFFIX_CLOSE)
        radio_index = int(digits) if digits.isdigit() else None
    return GroupedField(group_id, column, radio_index)


def grouped_name(group_id: str, column: str) -> str:
    """Inverse of parse_field_name for grouped fields (without suffix)."""
    return f"{group_id}{GROUP_SEPARATOR}{column}"
