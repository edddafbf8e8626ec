"""
Service layer for tree binding.

Row indexing, value extraction, value injection and row generation.
"""

from .field_service_abc import FieldServiceABC
from .row_index_service import RowIndexService
from .value_collection_service import ValueCollectionService, sanitize_text
from .row_service import RowService
from .value_injection_service import ValueInjectionService

__all__ = [
    "FieldServiceABC",
    "RowIndexService",
    "ValueCollectionService",
    "sanitize_text",
    "RowService",
    "ValueInjectionService",
]
