"""
jsonassured - Fluent JSONPath Assertions for JSON Documents

This package provides a lazily evaluated, chainable assertion API over
JSON documents, plus declarative YAML check suites for running the same
checks from the command line.

Subpackages:
    - document: JSON parsing, path resolution and value kinds
    - assertions: PathAssertions and the typed assertions objects
    - schema_parsing: Parse and validate check suite YAML files
    - transport: Document sources (file, HTTP)
    - reporting: Run reports and result tracking

Usage:
    from jsonassured import assert_json

    (assert_json('{"user": {"name": "ada", "age": 36, "tags": ["a", "b"]}}')
        .is_not_null("$.user")
        .string_path("$.user.name", lambda s: s.is_equal_to("ada"))
        .int_path("$.user.age", lambda n: n.is_in_range(18, 99))
        .string_array_path("$.user.tags", lambda a: a.has_size(2)))
"""

__version__ = "0.1.0"

# Errors
from .errors import (
    AssertionFailure,
    InvalidPathError,
    JsonAssuredError,
    PathNotFoundError,
    ResolverError,
    SourceError,
    UsageError,
)

# Lazy evaluation
from .lazy import LazyValue

# Document
from .document import JsonDocument, JsonKind, classify

# Assertions
from .assertions import (
    NumberArrayAssertions,
    NumberAssertions,
    PathAssertions,
    StringArrayAssertions,
    StringAssertions,
    assert_data,
    assert_json,
)

# Re-export transport for convenience
from .transport import assert_response

__all__ = [
    # Package info
    "__version__",
    # Errors
    "JsonAssuredError",
    "UsageError",
    "AssertionFailure",
    "ResolverError",
    "PathNotFoundError",
    "InvalidPathError",
    "SourceError",
    # Lazy evaluation
    "LazyValue",
    # Document
    "JsonDocument",
    "JsonKind",
    "classify",
    # Assertions
    "assert_json",
    "assert_data",
    "PathAssertions",
    "StringAssertions",
    "NumberAssertions",
    "StringArrayAssertions",
    "NumberArrayAssertions",
    # Transport
    "assert_response",
]
