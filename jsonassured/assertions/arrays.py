"""
Assertions over a narrowed array.

Thin facades over the shared kernel; they only contribute the element
label used in messages and the type check (and, for numbers, coercion)
of expected values.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, TypeVar

from ..lazy import LazyValue
from . import kernel
from .models import NumberKind

N = TypeVar("N")


class StringArrayAssertions:
    """Assertions for an array of strings."""

    label = "String"

    def __init__(self, path: str, values: LazyValue[list[str]]):
        self._path = path
        self._values = values

    @property
    def path(self) -> str:
        return self._path

    def has_size(self, size: int) -> StringArrayAssertions:
        kernel.has_size(self._values, size, self._path, self.label)
        return self

    def is_empty(self) -> StringArrayAssertions:
        kernel.is_empty(self._values, self._path, self.label)
        return self

    def is_not_empty(self) -> StringArrayAssertions:
        kernel.is_not_empty(self._values, self._path, self.label)
        return self

    def contains_all(self, expected: Iterable[str]) -> StringArrayAssertions:
        kernel.contains_all(self._values, expected, self._path, self.label, kernel.require_string)
        return self

    def contains_any(self, expected: Iterable[str]) -> StringArrayAssertions:
        kernel.contains_any(self._values, expected, self._path, self.label, kernel.require_string)
        return self

    def all_satisfy(self, callback: Callable[[str], Any]) -> StringArrayAssertions:
        kernel.all_satisfy(self._values, callback, self._path, self.label)
        return self

    def any_satisfy(self, callback: Callable[[str], Any]) -> StringArrayAssertions:
        kernel.any_satisfy(self._values, callback, self._path, self.label)
        return self

    def satisfy(self, callback: Callable[[list[str]], Any]) -> StringArrayAssertions:
        kernel.satisfy(self._values, callback)
        return self

    def __repr__(self) -> str:
        return f"StringArrayAssertions({self._path!r})"


class NumberArrayAssertions(Generic[N]):
    """
    Assertions for an array of Int, Long or Decimal numbers.

    Expected values passed to contains_all/contains_any are coerced the
    same way as for NumberAssertions, so decimal_array_path accepts plain
    ints and floats.
    """

    def __init__(self, path: str, kind: NumberKind, values: LazyValue[list[N]]):
        self._path = path
        self._kind = kind
        self._values = values

    @property
    def path(self) -> str:
        return self._path

    @property
    def label(self) -> str:
        return self._kind.array_label

    def has_size(self, size: int) -> NumberArrayAssertions[N]:
        kernel.has_size(self._values, size, self._path, self.label)
        return self

    def is_empty(self) -> NumberArrayAssertions[N]:
        kernel.is_empty(self._values, self._path, self.label)
        return self

    def is_not_empty(self) -> NumberArrayAssertions[N]:
        kernel.is_not_empty(self._values, self._path, self.label)
        return self

    def contains_all(self, expected: Iterable[N]) -> NumberArrayAssertions[N]:
        kernel.contains_all(self._values, expected, self._path, self.label, self._kind.coerce)
        return self

    def contains_any(self, expected: Iterable[N]) -> NumberArrayAssertions[N]:
        kernel.contains_any(self._values, expected, self._path, self.label, self._kind.coerce)
        return self

    def all_satisfy(self, callback: Callable[[N], Any]) -> NumberArrayAssertions[N]:
        kernel.all_satisfy(self._values, callback, self._path, self.label)
        return self

    def any_satisfy(self, callback: Callable[[N], Any]) -> NumberArrayAssertions[N]:
        kernel.any_satisfy(self._values, callback, self._path, self.label)
        return self

    def satisfy(self, callback: Callable[[list[N]], Any]) -> NumberArrayAssertions[N]:
        kernel.satisfy(self._values, callback)
        return self

    def __repr__(self) -> str:
        return f"NumberArrayAssertions({self.label!r}, {self._path!r})"
