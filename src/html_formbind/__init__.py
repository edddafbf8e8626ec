"""
html-formbind: bidirectional binding between HTML form trees and value objects.

Reads a region of a parsed page into a JSON-compatible value object and
writes value objects back, regenerating repeating rows from inert row
templates.

Architecture:
- Tier 1 (Core): BeautifulSoup tree primitives and logging helpers
- Tier 2 (Protocols): Node ABCs, adapters and BindingConfig
- Tier 3 (Forms): Field naming, row templates, format types, node operations
- Tier 4 (Services): Row indexing, extraction, injection, row generation
- PageBinder: page-level facade with the default scope

Naming conventions carried by markup:
- "key" for flat fields, "group.column" for fields of a repeating group
- "group.column[n]" for radios renamed per generated row
"""

from __future__ import annotations

import importlib

__version__ = "0.1.0"

_EXPORTS = {
    "PageBinder": ("html_formbind.page_binder", "PageBinder"),
    "BindingConfig": ("html_formbind.protocols.binding_config", "BindingConfig"),
    "set_binding_config": ("html_formbind.protocols.binding_config", "set_binding_config"),
    "get_binding_config": ("html_formbind.protocols.binding_config", "get_binding_config"),
    "FormatRegistry": ("html_formbind.forms.format_registry", "FormatRegistry"),
    "parse_field_name": ("html_formbind.forms.field_info_types", "parse_field_name"),
    "parse_template": ("html_formbind.forms.template_parser", "parse_template"),
    "ValueCollectionService": ("html_formbind.services.value_collection_service", "ValueCollectionService"),
    "ValueInjectionService": ("html_formbind.services.value_injection_service", "ValueInjectionService"),
    "RowService": ("html_formbind.services.row_service", "RowService"),
    "RowIndexService": ("html_formbind.services.row_index_service", "RowIndexService"),
    "load_document": ("html_formbind.io.document", "load_document"),
    "dump_document": ("html_formbind.io.document", "dump_document"),
    "load_values": ("html_formbind.io.document", "load_values"),
    "dump_values": ("html_formbind.io.document", "dump_values"),
    "configure_logging": ("html_formbind.core.log_utils", "configure_logging"),
    "BindingError": ("html_formbind.exceptions", "BindingError"),
    "DuplicateKeyError": ("html_formbind.exceptions", "DuplicateKeyError"),
    "ContainerNotFoundError": ("html_formbind.exceptions", "ContainerNotFoundError"),
    "InvalidScopeError": ("html_formbind.exceptions", "InvalidScopeError"),
    "InvalidArgumentError": ("html_formbind.exceptions", "InvalidArgumentError"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["__version__"] + list(_EXPORTS.keys())
