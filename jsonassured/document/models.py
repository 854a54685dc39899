"""
Value model for resolved JSON values.

This module defines the closed set of JSON kinds a resolved value can
have, the classification of Python values into those kinds, and the
rendering used in assertion messages.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class JsonKind(str, Enum):
    """Kind of a resolved JSON value, as named in diagnostics."""
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"  # fits in 32 bits
    LONG = "long"  # fits in 64 bits
    DECIMAL = "decimal"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"
    UNKNOWN = "unknown"


def classify(value: Any) -> JsonKind:
    """
    Classify a resolved value.

    bool is tested before int since it is an int subclass. Integers wider
    than 64 bits have no JSON kind of their own and classify as UNKNOWN.
    """
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, int):
        if INT32_MIN <= value <= INT32_MAX:
            return JsonKind.INTEGER
        if INT64_MIN <= value <= INT64_MAX:
            return JsonKind.LONG
        return JsonKind.UNKNOWN
    if isinstance(value, (float, Decimal)):
        return JsonKind.DECIMAL
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, Mapping):
        return JsonKind.OBJECT
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    return JsonKind.UNKNOWN


def render_value(value: Any) -> str:
    """
    Render a raw value for an assertion message.

    Strings are shown verbatim, scalars in their JSON spelling, and
    containers as compact JSON.
    """
    if isinstance(value, str):
        return value
    return _render_json(value)


def render_list(values: list[Any]) -> str:
    """Render a list of expected values as ``[a, b, c]``."""
    return "[" + ", ".join(render_value(v) for v in values) + "]"


def _render_json(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, Mapping):
        items = (
            f"{json.dumps(str(k), ensure_ascii=False)}:{_render_json(v)}"
            for k, v in value.items()
        )
        return "{" + ",".join(items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_render_json(v) for v in value) + "]"
    return repr(value)
