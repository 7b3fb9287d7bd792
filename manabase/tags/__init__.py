"""
Tag rule compilation and metadata.

Raw documents are validated (documents), compiled and merged (compiler)
into a TagIndex (index).
"""

from manabase.tags.compiler import TagSource, compile_condition, compile_tags, parse_document
from manabase.tags.documents import TagDocument
from manabase.tags.index import TagIndex, kind_sort_key

__all__ = [
    "TagDocument",
    "TagIndex",
    "TagSource",
    "compile_condition",
    "compile_tags",
    "kind_sort_key",
    "parse_document",
]
