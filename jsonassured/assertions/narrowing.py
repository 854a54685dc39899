"""
Type narrowing for typed path entry points.

Each narrower reads a path from the document, checks the JSON kind of the
result and converts it to the Python type the typed assertions expect.
A kind mismatch is an AssertionFailure, not a usage error: the caller
asked a legitimate question and the document answered with the wrong type.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from ..document import JsonDocument, JsonKind, classify, render_value
from ..errors import AssertionFailure
from ..lazy import LazyValue
from .models import to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Narrowing:
    """How to accept and convert one resolved value."""
    label: str
    accepts: frozenset[JsonKind]
    convert: Callable[[Any], Any]


STRING = Narrowing("value of type string", frozenset({JsonKind.STRING}), str)
INT = Narrowing("Int number", frozenset({JsonKind.INTEGER}), int)
LONG = Narrowing("Long number", frozenset({JsonKind.INTEGER, JsonKind.LONG}), int)
DECIMAL = Narrowing("Decimal number", frozenset({JsonKind.DECIMAL}), to_decimal)

STRING_ARRAY = Narrowing("String array", STRING.accepts, STRING.convert)
INT_ARRAY = Narrowing("Int array", INT.accepts, INT.convert)
LONG_ARRAY = Narrowing("Long array", LONG.accepts, LONG.convert)
DECIMAL_ARRAY = Narrowing("Decimal array", DECIMAL.accepts, DECIMAL.convert)


def scalar_producer(
    document: LazyValue[JsonDocument],
    path: str,
    narrowing: Narrowing,
) -> Callable[[], Any]:
    """
    Build a producer that reads a scalar and narrows it.

    Args:
        document: Lazily parsed document
        path: JSONPath expression
        narrowing: Accepted kinds and conversion

    Returns:
        A zero-argument callable suitable for LazyValue
    """
    def produce() -> Any:
        value = document.get().read(path)
        kind = classify(value)
        if kind not in narrowing.accepts:
            raise AssertionFailure(
                _mismatch(f"Expected {narrowing.label} at path \"{path}\", "
                          f"but actual type was \"{kind.value}\"", value)
            )
        return narrowing.convert(value)

    return produce


def array_producer(
    document: LazyValue[JsonDocument],
    path: str,
    narrowing: Narrowing,
) -> Callable[[], list[Any]]:
    """
    Build a producer that reads an array and narrows every element.

    The first offending element aborts narrowing.
    """
    def produce() -> list[Any]:
        value = document.get().read(path)
        kind = classify(value)
        if kind is not JsonKind.ARRAY:
            raise AssertionFailure(
                _mismatch(f"Expected {narrowing.label} at path \"{path}\", "
                          f"but actual type was \"{kind.value}\"", value)
            )

        result = []
        for item in value:
            item_kind = classify(item)
            if item_kind not in narrowing.accepts:
                raise AssertionFailure(
                    _mismatch(f"Expected {narrowing.label} at path \"{path}\", "
                              f"but actual type of value in array was \"{item_kind.value}\"", item)
                )
            result.append(narrowing.convert(item))
        logger.debug("Narrowed %s at %s (%d elements)", narrowing.label, path, len(result))
        return result

    return produce


def _mismatch(message: str, value: Any) -> str:
    if value is None:
        return message
    return f"{message}: <{render_value(value)}>"
