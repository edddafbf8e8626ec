"""HTML document and value-object persistence."""

from .document import load_document, dump_document, load_values, dump_values

__all__ = [
    "load_document",
    "dump_document",
    "load_values",
    "dump_values",
]
