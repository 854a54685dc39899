"""
Entry point for path assertions.

PathAssertions is the root of every assertion chain. It owns a lazily
parsed document; each operation reads one path, checks it and returns the
root so further checks can follow.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from ..document import JsonDocument, JsonSource, classify, render_value
from ..errors import AssertionFailure, PathNotFoundError, UsageError
from ..lazy import LazyValue
from . import kernel, narrowing
from .arrays import NumberArrayAssertions, StringArrayAssertions
from .models import DECIMAL, INT, LONG, NumberKind
from .scalars import NumberAssertions, StringAssertions

logger = logging.getLogger(__name__)


class PathAssertions:
    """
    Fluent assertions over paths in one JSON document.

    The document is parsed on first use and shared by every operation on
    this root. Typed entry points hand the callback an assertions object
    whose value is read on its first predicate, and at most once.

    Example:
        (assert_json(body)
            .is_equal("$.status", "active")
            .does_not_exist("$.deleted_at")
            .int_path("$.age", lambda n: n.is_gte(18))
            .string_array_path("$.tags[*]", lambda a: a.has_size(2)))
    """

    def __init__(self, document: LazyValue[JsonDocument]):
        self._document = document

    # ─────────────────────────────────────────────────────────────────────
    # Raw value checks
    # ─────────────────────────────────────────────────────────────────────

    def is_null(self, path: str) -> PathAssertions:
        value = self._read(path)
        if value is None:
            return self
        raise AssertionFailure(
            f"Expected value at path \"{path}\" to be null, "
            f"but actual value was <{render_value(value)}>"
        )

    def is_not_null(self, path: str) -> PathAssertions:
        if self._read(path) is not None:
            return self
        raise AssertionFailure(
            f"Expected value at path \"{path}\" to be non-null, but actual value was null"
        )

    def does_not_exist(self, path: str) -> PathAssertions:
        """Succeed only when the path resolves to nothing. A present null fails."""
        try:
            value = self._read(path)
        except PathNotFoundError:
            return self
        raise AssertionFailure(
            f"Expected value at path \"{path}\" to be absent, "
            f"but found <{render_value(value)}>"
        )

    def is_true(self, path: str) -> PathAssertions:
        value = self._read(path)
        if value is True:
            return self
        raise AssertionFailure(
            f"Expected value at path \"{path}\" to be true, "
            f"but actual value was {render_value(value)}"
        )

    def is_false(self, path: str) -> PathAssertions:
        value = self._read(path)
        if value is False:
            return self
        raise AssertionFailure(
            f"Expected value at path \"{path}\" to be false, "
            f"but actual value was {render_value(value)}"
        )

    def is_equal(self, path: str, expected: str) -> PathAssertions:
        """
        Check that the value at path is a string equal to expected.

        Raises:
            UsageError: If expected is None; use is_null() for that
            AssertionFailure: If the value is not a string or differs
        """
        if expected is None:
            raise UsageError(
                "\"null\" expected values are not supported. "
                "Consider using `PathAssertions.is_null()` instead"
            )
        value = self._read(path)
        if not isinstance(value, str):
            message = (
                f"Expected value of type string at path \"{path}\", "
                f"but actual type was \"{classify(value).value}\""
            )
            if value is not None:
                message += f": <{render_value(value)}>"
            raise AssertionFailure(message)
        if value != str(expected):
            raise AssertionFailure(
                f"String value at path \"{path}\" are not equal: "
                + kernel.format_actual_expected(value, str(expected))
            )
        return self

    # ─────────────────────────────────────────────────────────────────────
    # Typed entry points
    # ─────────────────────────────────────────────────────────────────────

    def string_path(self, path: str, callback: Callable[[StringAssertions], Any]) -> PathAssertions:
        value = self._scalar(path, callback, narrowing.STRING)
        callback(StringAssertions(path, value))
        return self

    def int_path(self, path: str, callback: Callable[[NumberAssertions[int]], Any]) -> PathAssertions:
        return self._number(path, callback, narrowing.INT, INT)

    def long_path(self, path: str, callback: Callable[[NumberAssertions[int]], Any]) -> PathAssertions:
        return self._number(path, callback, narrowing.LONG, LONG)

    def decimal_path(self, path: str, callback: Callable[[NumberAssertions[Any]], Any]) -> PathAssertions:
        return self._number(path, callback, narrowing.DECIMAL, DECIMAL)

    def string_array_path(
        self, path: str, callback: Callable[[StringArrayAssertions], Any]
    ) -> PathAssertions:
        values = self._array(path, callback, narrowing.STRING_ARRAY)
        callback(StringArrayAssertions(path, values))
        return self

    def int_array_path(
        self, path: str, callback: Callable[[NumberArrayAssertions[int]], Any]
    ) -> PathAssertions:
        return self._number_array(path, callback, narrowing.INT_ARRAY, INT)

    def long_array_path(
        self, path: str, callback: Callable[[NumberArrayAssertions[int]], Any]
    ) -> PathAssertions:
        return self._number_array(path, callback, narrowing.LONG_ARRAY, LONG)

    def decimal_array_path(
        self, path: str, callback: Callable[[NumberArrayAssertions[Any]], Any]
    ) -> PathAssertions:
        return self._number_array(path, callback, narrowing.DECIMAL_ARRAY, DECIMAL)

    # ─────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────

    def _read(self, path: str) -> Any:
        kernel.require_path(path)
        return self._document.get().read(path)

    def _scalar(self, path: str, callback: Callable, rule: narrowing.Narrowing) -> LazyValue:
        kernel.require_path(path)
        kernel.require_not_null(callback, "Callback")
        logger.debug("Dispatching %s check for %s", rule.label, path)
        return LazyValue(narrowing.scalar_producer(self._document, path, rule))

    def _array(self, path: str, callback: Callable, rule: narrowing.Narrowing) -> LazyValue:
        kernel.require_path(path)
        kernel.require_not_null(callback, "Callback")
        logger.debug("Dispatching %s check for %s", rule.label, path)
        return LazyValue(narrowing.array_producer(self._document, path, rule))

    def _number(
        self, path: str, callback: Callable, rule: narrowing.Narrowing, kind: NumberKind
    ) -> PathAssertions:
        value = self._scalar(path, callback, rule)
        callback(NumberAssertions(path, kind, value))
        return self

    def _number_array(
        self, path: str, callback: Callable, rule: narrowing.Narrowing, kind: NumberKind
    ) -> PathAssertions:
        values = self._array(path, callback, rule)
        callback(NumberArrayAssertions(path, kind, values))
        return self

    def __repr__(self) -> str:
        state = "parsed" if self._document.evaluated else "pending"
        return f"PathAssertions(<{state}>)"


def assert_json(source: JsonSource) -> PathAssertions:
    """
    Start an assertion chain over a JSON source.

    Args:
        source: JSON text as str, UTF-8 bytes, or a readable file object.
            Parsing is deferred until the first assertion runs.

    Returns:
        PathAssertions over the document

    Raises:
        UsageError: If source is None
    """
    if source is None:
        raise UsageError("JSON source cannot be null")
    return PathAssertions(LazyValue(lambda: JsonDocument.parse(source)))


def assert_data(data: Any) -> PathAssertions:
    """Start an assertion chain over already-decoded JSON data (dicts, lists, scalars)."""
    document = JsonDocument.from_data(data)
    return PathAssertions(LazyValue(lambda: document))
