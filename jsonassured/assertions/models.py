"""
Numeric kind descriptors for number assertions.

A NumberKind bundles what NumberAssertions needs to know about the type it
compares: the label used in messages, the zero value, and how caller
supplied expected values are checked and coerced before comparison.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable

from ..errors import UsageError


@dataclass(frozen=True)
class NumberKind:
    """Describes a numeric assertion kind."""
    label: str  # e.g. "Int number"
    array_label: str  # e.g. "Int"
    zero: Any
    coerce: Callable[[Any], Any]


def to_decimal(value: Any) -> Decimal:
    """
    Convert an int, float or Decimal to Decimal.

    Floats go through their shortest round-trip repr so 1.2 becomes
    Decimal("1.2") and not the full binary expansion.

    Raises:
        UsageError: If value is not a number (bool included)
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, int) and not isinstance(value, bool):
        return Decimal(value)
    raise UsageError(f"Expected value must be a number (received {value!r})")


def to_integer(value: Any) -> int:
    """Accept only ints; 1.0 and True are rejected."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise UsageError(f"Expected value must be an integer (received {value!r})")


INT = NumberKind(label="Int number", array_label="Int", zero=0, coerce=to_integer)
LONG = NumberKind(label="Long number", array_label="Long", zero=0, coerce=to_integer)
DECIMAL = NumberKind(
    label="Decimal number",
    array_label="Decimal",
    zero=Decimal(0),
    coerce=to_decimal,
)
