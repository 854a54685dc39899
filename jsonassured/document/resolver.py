"""
JSON document resolver.

This module parses JSON sources into an in-memory document and evaluates
JSONPath expressions against it using jsonpath-ng.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import IO, Any, Union

from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError
from jsonpath_ng.ext import parse as parse_jsonpath
from jsonpath_ng.ext.iterable import Len, SortedThis
from jsonpath_ng.jsonpath import JSONPath, Child, Fields, Index, Root, This

from ..errors import InvalidPathError, PathNotFoundError, UsageError

logger = logging.getLogger(__name__)

JsonSource = Union[str, bytes, bytearray, IO[str], IO[bytes]]


class JsonDocument:
    """
    An immutable, parsed JSON document that can be queried by path.

    Paths are evaluated with the jsonpath-ng extended grammar, so the
    `len` and `sorted` functions and filter expressions are available.

    A *definite* path (root, plain field names, single indexes, functions)
    selects at most one value: read() returns it or raises
    PathNotFoundError. Any other path (wildcards, slices, filters, unions,
    recursive descent) returns the list of all matches, which may be empty.

    Example:
        doc = JsonDocument.parse('{"users": [{"name": "ada"}]}')
        doc.read("$.users[0].name")    # "ada"
        doc.read("$.users[*].name")    # ["ada"]
        doc.read("$.missing")          # raises PathNotFoundError
    """

    def __init__(self, data: Any):
        self._data = data

    @property
    def data(self) -> Any:
        return self._data

    @classmethod
    def parse(cls, source: JsonSource) -> JsonDocument:
        """
        Parse a JSON source.

        Decimals are decoded as decimal.Decimal to keep their exact value.

        Args:
            source: JSON text as str, UTF-8 bytes, or a readable file object
                returning either. File objects are read fully.

        Raises:
            UsageError: If the source is None or of an unsupported type
            json.JSONDecodeError: If the source is not valid JSON
        """
        content = _read_source(source)
        data = json.loads(content, parse_float=Decimal)
        logger.debug("Parsed JSON document (%d chars)", len(content))
        return cls(data)

    @classmethod
    def from_data(cls, data: Any) -> JsonDocument:
        """Wrap an already-decoded Python value."""
        return cls(data)

    def read(self, path: str) -> Any:
        """
        Evaluate a JSONPath expression.

        Args:
            path: JSONPath expression

        Returns:
            The single matched value for a definite path, or the list of
            matched values otherwise

        Raises:
            InvalidPathError: If the expression cannot be parsed
            PathNotFoundError: If a definite path matches nothing
        """
        expr = compile_path(path)
        matches = expr.find(self._data)

        if is_definite(expr):
            if not matches:
                raise PathNotFoundError(f"No results for path \"{path}\"", path=path)
            logger.debug("Read definite path %s", path)
            return matches[0].value

        logger.debug("Read indefinite path %s (%d matches)", path, len(matches))
        return [match.value for match in matches]

    def __repr__(self) -> str:
        return f"JsonDocument({type(self._data).__name__})"


def compile_path(path: str) -> JSONPath:
    """Parse a JSONPath expression, translating jsonpath-ng errors."""
    try:
        return parse_jsonpath(path)
    except (JsonPathParserError, JsonPathLexerError) as e:
        raise InvalidPathError(f"Invalid JSONPath expression \"{path}\": {e}", path=path) from e


def is_definite(expr: JSONPath) -> bool:
    """Return True if the expression can select at most one value."""
    if isinstance(expr, (Root, This, Len, SortedThis)):
        return True
    if isinstance(expr, Fields):
        return len(expr.fields) == 1 and expr.fields[0] != "*"
    if isinstance(expr, Index):
        # jsonpath-ng >= 1.6 supports multi-index selectors like [0,2]
        indices = getattr(expr, "indices", None)
        return indices is None or len(indices) == 1
    if isinstance(expr, Child):
        return is_definite(expr.left) and is_definite(expr.right)
    return False


def _read_source(source: JsonSource) -> str | bytes:
    if source is None:
        raise UsageError("JSON source cannot be null")
    if isinstance(source, (str, bytes)):
        return source
    if isinstance(source, bytearray):
        return bytes(source)
    if hasattr(source, "read"):
        return source.read()
    raise UsageError(f"Unsupported JSON source type: {type(source).__name__}")
