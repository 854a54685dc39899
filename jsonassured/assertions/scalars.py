"""
Assertions over a single narrowed value.

Both classes hold a path and a LazyValue. Every predicate validates its
own arguments first, then resolves the value (once, shared by all
predicates on the same instance) and returns self for chaining.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Generic, Iterable, TypeVar, Union

from ..document import render_list, render_value
from ..errors import AssertionFailure, UsageError
from ..lazy import LazyValue
from . import kernel
from .models import NumberKind

N = TypeVar("N")


class NumberAssertions(Generic[N]):
    """
    Assertions for an Int, Long or Decimal value.

    Example:
        assert_json(body).int_path("$.age", lambda n: n.is_positive().is_lte(150))
    """

    def __init__(self, path: str, kind: NumberKind, value: LazyValue[N]):
        self._path = path
        self._kind = kind
        self._value = value

    @property
    def path(self) -> str:
        return self._path

    def is_positive(self) -> NumberAssertions[N]:
        actual = self._value.get()
        if actual > self._kind.zero:
            return self
        raise AssertionFailure(self._expected("to be positive", actual))

    def is_negative(self) -> NumberAssertions[N]:
        actual = self._value.get()
        if actual < self._kind.zero:
            return self
        raise AssertionFailure(self._expected("to be negative", actual))

    def is_zero(self) -> NumberAssertions[N]:
        actual = self._value.get()
        if actual == self._kind.zero:
            return self
        raise AssertionFailure(self._expected("to be zero", actual))

    def is_equal_to(self, expected: N) -> NumberAssertions[N]:
        expected = self._coerce(expected)
        actual = self._value.get()
        if actual == expected:
            return self
        raise AssertionFailure(
            self._expected(f"to be equal <{render_value(expected)}>", actual)
        )

    def is_not_equal_to(self, expected: N) -> NumberAssertions[N]:
        expected = self._coerce(expected)
        actual = self._value.get()
        if actual != expected:
            return self
        raise AssertionFailure(
            f"Expected {self._kind.label} at path \"{self._path}\" "
            f"to not be equal <{render_value(expected)}>, but were equal"
        )

    def is_gte(self, expected: N) -> NumberAssertions[N]:
        expected = self._coerce(expected)
        actual = self._value.get()
        if actual >= expected:
            return self
        raise AssertionFailure(self._bound("greater than or equal to", expected, actual))

    def is_lte(self, expected: N) -> NumberAssertions[N]:
        expected = self._coerce(expected)
        actual = self._value.get()
        if actual <= expected:
            return self
        raise AssertionFailure(self._bound("less than or equal to", expected, actual))

    def is_in_range(self, min_value: N, max_value: N) -> NumberAssertions[N]:
        """
        Check min_value <= actual <= max_value.

        Raises:
            UsageError: If either bound is None or min_value > max_value.
                Checked before the value is resolved.
        """
        kernel.require_not_null(min_value, "Min")
        kernel.require_not_null(max_value, "Max")
        min_value = self._kind.coerce(min_value)
        max_value = self._kind.coerce(max_value)
        if min_value > max_value:
            raise UsageError(
                "Min value should be less than or equal to max value, but received "
                f"min <{render_value(min_value)}> and max <{render_value(max_value)}>"
            )

        actual = self._value.get()
        if min_value <= actual <= max_value:
            return self
        raise AssertionFailure(
            f"Expected {self._kind.label} at path \"{self._path}\" to be in range "
            f"[{render_value(min_value)} - {render_value(max_value)}], "
            f"but was <{render_value(actual)}>"
        )

    def is_in(self, expected: Iterable[N]) -> NumberAssertions[N]:
        candidates = kernel.expected_values(expected, self._kind.coerce)
        actual = self._value.get()
        if actual in candidates:
            return self
        raise AssertionFailure(
            f"{self._kind.label} at path \"{self._path}\" is not in the list of expected "
            f"values. Actual value: <{render_value(actual)}>, "
            f"list of expected values: <{render_list(candidates)}>"
        )

    def is_not_in(self, expected: Iterable[N]) -> NumberAssertions[N]:
        candidates = kernel.expected_values(expected, self._kind.coerce)
        actual = self._value.get()
        for index, candidate in enumerate(candidates):
            if candidate == actual:
                raise AssertionFailure(
                    f"{self._kind.label} value at path \"{self._path}\" was found in provided "
                    f"list at index [{index}]. Actual value: <{render_value(actual)}>, "
                    f"list of values: <{render_list(candidates)}>"
                )
        return self

    def satisfies(self, callback: Callable[[N], Any]) -> NumberAssertions[N]:
        kernel.satisfies(callback, self._value, self._kind.label, self._path)
        return self

    def _coerce(self, expected: Any) -> Any:
        kernel.require_not_null(expected)
        return self._kind.coerce(expected)

    def _expected(self, what: str, actual: Any) -> str:
        return (
            f"Expected {self._kind.label} at path \"{self._path}\" {what}, "
            f"but actual value was <{render_value(actual)}>"
        )

    def _bound(self, relation: str, expected: Any, actual: Any) -> str:
        return (
            f"Expected {self._kind.label} at path \"{self._path}\" to be {relation} "
            f"<{render_value(expected)}>, but was <{render_value(actual)}>"
        )

    def __repr__(self) -> str:
        return f"NumberAssertions({self._kind.label!r}, {self._path!r})"


class StringAssertions:
    """
    Assertions for a string value.

    Blank means empty or whitespace only. Case-insensitive predicates compare
    lowercased strings. matches() and does_not_match()
    require the pattern to match the entire string.

    Example:
        assert_json(body).string_path(
            "$.email",
            lambda s: s.is_not_blank().matches(r"[^@]+@[^@]+"),
        )
    """

    def __init__(self, path: str, value: LazyValue[str]):
        self._path = path
        self._value = value

    @property
    def path(self) -> str:
        return self._path

    def is_equal_to(self, expected: str) -> StringAssertions:
        kernel.require_string(expected)
        actual = self._value.get()
        if actual == expected:
            return self
        raise AssertionFailure(
            f"String value at path \"{self._path}\" is not equal to expected: "
            + kernel.format_actual_expected(actual, expected)
        )

    def is_not_equal_to(self, expected: str) -> StringAssertions:
        kernel.require_string(expected)
        actual = self._value.get()
        if actual != expected:
            return self
        raise AssertionFailure(
            f"String value at path \"{self._path}\" is equal to <{expected}>, "
            "while expected to be not equal"
        )

    def is_equal_to_ignoring_case(self, expected: str) -> StringAssertions:
        kernel.require_string(expected)
        actual = self._value.get()
        if actual.lower() == expected.lower():
            return self
        raise AssertionFailure(
            f"String value at path \"{self._path}\" is not equal to expected (ignoring case): "
            + kernel.format_actual_expected(actual, expected)
        )

    def is_not_equal_to_ignoring_case(self, expected: str) -> StringAssertions:
        kernel.require_string(expected)
        actual = self._value.get()
        if actual.lower() != expected.lower():
            return self
        raise AssertionFailure(
            f"String value at path \"{self._path}\" is equal to <{expected}> (ignoring case), "
            "while expected to be not equal"
        )

    def is_blank(self) -> StringAssertions:
        actual = self._value.get()
        if not actual.strip():
            return self
        raise AssertionFailure(
            f"Expected string at path \"{self._path}\" to be blank, "
            f"but actual value was \"{actual}\""
        )

    def is_not_blank(self) -> StringAssertions:
        actual = self._value.get()
        if actual.strip():
            return self
        raise AssertionFailure(
            f"Expected string at path \"{self._path}\" to be not blank, "
            f"but actual value was \"{actual}\""
        )

    def is_empty(self) -> StringAssertions:
        actual = self._value.get()
        if actual == "":
            return self
        raise AssertionFailure(
            f"Expected string at path \"{self._path}\" to be empty, "
            f"but actual value was <{actual}>"
        )

    def is_not_empty(self) -> StringAssertions:
        if self._value.get() != "":
            return self
        raise AssertionFailure(
            f"Expected string at path \"{self._path}\" to be not empty, "
            "but actual value was empty"
        )

    def has_length(self, length: int) -> StringAssertions:
        kernel.require_not_null(length, "Length")
        kernel.require_non_negative(length, "Length")
        actual = len(self._value.get())
        if actual == length:
            return self
        raise AssertionFailure(
            f"Expected string at path \"{self._path}\" to have length [{length}], "
            f"but actual length was [{actual}]"
        )

    def has_length_range(self, min_length: int, max_length: int) -> StringAssertions:
        kernel.require_not_null(min_length, "Min length")
        kernel.require_not_null(max_length, "Max length")
        kernel.require_non_negative(min_length, "Min length")
        kernel.require_non_negative(max_length, "Max length")
        if min_length > max_length:
            raise UsageError(
                "Min length cannot be greater than max length "
                f"(received {min_length} > {max_length})"
            )
        actual = len(self._value.get())
        if min_length <= actual <= max_length:
            return self
        raise AssertionFailure(
            f"Expected string at path \"{self._path}\" to be in range "
            f"[{min_length} - {max_length}], but actual length was [{actual}]"
        )

    def has_length_at_least(self, min_length: int) -> StringAssertions:
        kernel.require_not_null(min_length, "Min length")
        kernel.require_non_negative(min_length, "Min length")
        actual = len(self._value.get())
        if actual >= min_length:
            return self
        raise AssertionFailure(
            f"Expected string at path \"{self._path}\" to have min length [{min_length}], "
            f"but actual length was [{actual}]"
        )

    def has_length_at_most(self, max_length: int) -> StringAssertions:
        kernel.require_not_null(max_length, "Max length")
        kernel.require_non_negative(max_length, "Max length")
        actual = len(self._value.get())
        if actual <= max_length:
            return self
        raise AssertionFailure(
            f"Expected string at path \"{self._path}\" to have max length [{max_length}], "
            f"but actual length was [{actual}]"
        )

    def contains(self, expected: str) -> StringAssertions:
        kernel.require_string(expected)
        actual = self._value.get()
        if expected in actual:
            return self
        raise AssertionFailure(
            f"String value at path \"{self._path}\" does not contain expected string: "
            + kernel.format_actual_expected(actual, expected)
        )

    def contains_ignoring_case(self, expected: str) -> StringAssertions:
        kernel.require_string(expected)
        actual = self._value.get()
        if expected.lower() in actual.lower():
            return self
        raise AssertionFailure(
            f"String value at path \"{self._path}\" does not contain expected string "
            "(ignoring case): " + kernel.format_actual_expected(actual, expected)
        )

    def matches(self, pattern: Union[str, re.Pattern[str]]) -> StringAssertions:
        compiled = _compile(pattern)
        actual = self._value.get()
        if compiled.fullmatch(actual):
            return self
        raise AssertionFailure(
            f"String value at path \"{self._path}\" does not match expected pattern. "
            f"Expected pattern: <{compiled.pattern}>, actual value: <{actual}>"
        )

    def does_not_match(self, pattern: Union[str, re.Pattern[str]]) -> StringAssertions:
        compiled = _compile(pattern)
        actual = self._value.get()
        if not compiled.fullmatch(actual):
            return self
        raise AssertionFailure(
            f"String value at path \"{self._path}\" matches expected pattern, while "
            f"expected to not match. Pattern: <{compiled.pattern}>, actual value: <{actual}>"
        )

    def is_in(self, expected: Iterable[Any]) -> StringAssertions:
        candidates = kernel.expected_values(expected, str)
        actual = self._value.get()
        if actual in candidates:
            return self
        raise AssertionFailure(
            f"String value at path \"{self._path}\" is not in the list of expected values. "
            f"Actual value: <{actual}>, list of expected values: <{render_list(candidates)}>"
        )

    def is_not_in(self, expected: Iterable[Any]) -> StringAssertions:
        candidates = kernel.expected_values(expected, str)
        actual = self._value.get()
        for index, candidate in enumerate(candidates):
            if candidate == actual:
                raise AssertionFailure(
                    f"String value at path \"{self._path}\" was found in provided list at "
                    f"index [{index}]. Actual value: <{actual}>, "
                    f"list of values: <{render_list(candidates)}>"
                )
        return self

    def satisfies(self, callback: Callable[[str], Any]) -> StringAssertions:
        kernel.satisfies(callback, self._value, "String", self._path)
        return self

    def __repr__(self) -> str:
        return f"StringAssertions({self._path!r})"


def _compile(pattern: Union[str, re.Pattern[str]]) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    kernel.require_string(pattern, "Pattern")
    try:
        return re.compile(pattern)
    except re.error as e:
        raise UsageError(f"Invalid regular expression <{pattern}>: {e}") from e
