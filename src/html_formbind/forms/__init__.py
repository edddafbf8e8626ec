"""
Field naming, templates, formats and node operations.

Everything the services need to turn identifiers and markup text into typed
values, plus the adapter registry.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .field_info_types import (
        TopLevelField,
        GroupedField,
        FieldInfo,
        RadioName,
        parse_field_name,
    )
    from .template_parser import RowTemplate, split_template, parse_open_tag, parse_template
    from .format_registry import FormatType, FormatRegistry
    from .node_registry import (
        NodeMeta,
        NODE_IMPLEMENTATIONS,
        NODE_CAPABILITIES,
        get_node_class,
        get_node_capabilities,
        resolve_node_class,
    )
    from .node_operations import NodeOperations

_EXPORTS = {
    "TopLevelField": ("html_formbind.forms.field_info_types", "TopLevelField"),
    "GroupedField": ("html_formbind.forms.field_info_types", "GroupedField"),
    "FieldInfo": ("html_formbind.forms.field_info_types", "FieldInfo"),
    "RadioName": ("html_formbind.forms.field_info_types", "RadioName"),
    "parse_field_name": ("html_formbind.forms.field_info_types", "parse_field_name"),
    "RowTemplate": ("html_formbind.forms.template_parser", "RowTemplate"),
    "split_template": ("html_formbind.forms.template_parser", "split_template"),
    "parse_open_tag": ("html_formbind.forms.template_parser", "parse_open_tag"),
    "parse_template": ("html_formbind.forms.template_parser", "parse_template"),
    "FormatType": ("html_formbind.forms.format_registry", "FormatType"),
    "FormatRegistry": ("html_formbind.forms.format_registry", "FormatRegistry"),
    "NodeMeta": ("html_formbind.forms.node_registry", "NodeMeta"),
    "NODE_IMPLEMENTATIONS": ("html_formbind.forms.node_registry", "NODE_IMPLEMENTATIONS"),
    "NODE_CAPABILITIES": ("html_formbind.forms.node_registry", "NODE_CAPABILITIES"),
    "get_node_class": ("html_formbind.forms.node_registry", "get_node_class"),
    "get_node_capabilities": ("html_formbind.forms.node_registry", "get_node_capabilities"),
    "resolve_node_class": ("html_formbind.forms.node_registry", "resolve_node_class"),
    "NodeOperations": ("html_formbind.forms.node_operations", "NodeOperations"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_EXPORTS.keys())
