"""
JSON document model and path resolver.

Usage:
    from jsonassured.document import JsonDocument, classify

    doc = JsonDocument.parse(b'{"n": 1}')
    value = doc.read("$.n")
    classify(value)  # JsonKind.INTEGER
"""

from .models import JsonKind, classify, render_list, render_value
from .resolver import JsonDocument, JsonSource, compile_path, is_definite

__all__ = [
    # Models
    "JsonKind",
    "classify",
    "render_value",
    "render_list",
    # Resolver
    "JsonDocument",
    "JsonSource",
    "compile_path",
    "is_definite",
]
