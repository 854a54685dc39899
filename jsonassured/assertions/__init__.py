"""
Fluent Path Assertions for JSON Documents

This package provides the assertion chain: a root bound to one lazily
parsed document, typed entry points that narrow the value at a path, and
the typed assertions objects handed to callbacks.

Typed entry points:
    - string_path / string_array_path
    - int_path / int_array_path: 32-bit integers
    - long_path / long_array_path: 64-bit integers
    - decimal_path / decimal_array_path: decimals (as decimal.Decimal)

Usage:
    from jsonassured.assertions import assert_json

    body = '{"name": "ada", "scores": [90, 75], "admin": false}'

    (assert_json(body)
        .is_equal("$.name", "ada")
        .is_false("$.admin")
        .does_not_exist("$.email")
        .int_array_path("$.scores", lambda a: a.has_size(2).contains_any([90])))

    # Failures raise AssertionFailure (an AssertionError) with a message
    # naming the path and the actual value.
"""

# Models
from .models import DECIMAL, INT, LONG, NumberKind

# Typed assertions
from .scalars import NumberAssertions, StringAssertions
from .arrays import NumberArrayAssertions, StringArrayAssertions

# Root
from .root import PathAssertions, assert_data, assert_json

__all__ = [
    # Models
    "NumberKind",
    "INT",
    "LONG",
    "DECIMAL",
    # Typed assertions
    "StringAssertions",
    "NumberAssertions",
    "StringArrayAssertions",
    "NumberArrayAssertions",
    # Root
    "PathAssertions",
    "assert_json",
    "assert_data",
]
