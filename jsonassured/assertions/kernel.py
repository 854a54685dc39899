"""
Shared predicate kernel.

Argument validation, collection predicates, callback wrapping and message
helpers used by every typed assertions class. Keeping them here means the
edge-case policy (empty subjects, None arguments, callback failures) is
defined once.

Collection predicates take the LazyValue rather than the resolved list so
that caller arguments are validated before the document is touched.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, TypeVar

from ..document import render_value
from ..errors import AssertionFailure, UsageError
from ..lazy import LazyValue

E = TypeVar("E")


# ─────────────────────────────────────────────────────────────────────────────
# Argument validation
# ─────────────────────────────────────────────────────────────────────────────

def require_path(path: Any) -> str:
    """Reject None and blank paths."""
    if path is None or not isinstance(path, str) or not path.strip():
        raise UsageError("path should be non-null and non-blank")
    return path


def require_not_null(value: Any, field: str | None = None) -> None:
    if value is None:
        if field is None:
            raise UsageError("Expected value cannot be null")
        raise UsageError(f"'{field}' value cannot be null")


def require_string(value: Any, field: str | None = None) -> str:
    require_not_null(value, field)
    if not isinstance(value, str):
        raise UsageError(f"{field or 'Expected value'} must be a string (received {value!r})")
    return value


def require_non_negative(value: int, field: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise UsageError(f"{field} must be an integer (received {value!r})")
    if value < 0:
        raise UsageError(f"{field} cannot be negative (received {value})")


def expected_values(
    expected: Iterable[Any] | None,
    mapper: Callable[[Any], Any] | None = None,
    allow_empty: bool = True,
) -> list[Any]:
    """
    Materialize a caller-supplied collection of expected values.

    Args:
        expected: The caller's iterable
        mapper: Optional conversion applied to each element
        allow_empty: Whether an empty collection is acceptable

    Returns:
        The (mapped) expected values as a list

    Raises:
        UsageError: If the iterable is None, a bare string or not iterable,
            contains None, or is empty while allow_empty is False
    """
    require_not_null(expected)
    if isinstance(expected, (str, bytes)):
        raise UsageError(
            f"Expected values must be a collection, not a single {type(expected).__name__}"
        )
    try:
        values = list(expected)
    except TypeError as e:
        raise UsageError(
            f"Expected values must be iterable, got {type(expected).__name__}"
        ) from e

    null_indexes = [i for i, v in enumerate(values) if v is None]
    if len(null_indexes) == 1:
        raise UsageError(
            "Array of expected values cannot contain null elements, "
            f"but found one null at index [{null_indexes[0]}]"
        )
    if null_indexes:
        raise UsageError(
            "Array of expected values cannot contain null elements, "
            f"but found multiple nulls at indexes {null_indexes}"
        )
    if not allow_empty and not values:
        raise UsageError("Array of expected values cannot be empty")

    if mapper is None:
        return values
    return [mapper(v) for v in values]


# ─────────────────────────────────────────────────────────────────────────────
# Callbacks
# ─────────────────────────────────────────────────────────────────────────────

def invoke_callback(callback: Callable[[E], Any], value: E, message: str) -> None:
    """
    Run a caller callback, converting any failure into an AssertionFailure.

    The callback exception is kept as __cause__. MemoryError and
    BaseExceptions that are not Exceptions (KeyboardInterrupt, SystemExit)
    propagate untouched.
    """
    try:
        callback(value)
    except MemoryError:
        raise
    except Exception as e:
        raise AssertionFailure(message) from e


def satisfies(callback: Callable[[E], Any], value: LazyValue[E], label: str, path: str) -> None:
    require_not_null(callback, "Callback")
    invoke_callback(
        callback,
        value.get(),
        f"{label} value at path \"{path}\" did not satisfy provided condition",
    )


# ─────────────────────────────────────────────────────────────────────────────
# Collection predicates
# ─────────────────────────────────────────────────────────────────────────────

def has_size(values: LazyValue[list[E]], size: int, path: str, label: str) -> None:
    require_not_null(size, "Size")
    require_non_negative(size, "Size")
    subject = values.get()
    if len(subject) != size:
        raise AssertionFailure(
            f"{label} array at path \"{path}\" has size {len(subject)}, "
            f"but expected size is {size}"
        )


def is_empty(values: LazyValue[list[E]], path: str, label: str) -> None:
    subject = values.get()
    if subject:
        raise AssertionFailure(
            f"{label} array at path \"{path}\" has size {len(subject)}, "
            "but expected to be empty"
        )


def is_not_empty(values: LazyValue[list[E]], path: str, label: str) -> None:
    if not values.get():
        raise AssertionFailure(
            f"{label} array at path \"{path}\" is expected to be not empty, but was empty"
        )


def contains_all(
    values: LazyValue[list[E]],
    expected: Iterable[Any],
    path: str,
    label: str,
    mapper: Callable[[Any], Any] | None = None,
) -> None:
    """
    Succeed when any subject element is among the expected values.

    An empty subject succeeds vacuously. Note this is an intersection
    check, not a subset check.
    """
    expected_list = expected_values(expected, mapper, allow_empty=False)
    subject = values.get()
    if not subject:
        return
    if not _intersects(subject, expected_list):
        raise AssertionFailure(
            f"{label} array at path \"{path}\" does not contain some of expected values"
        )


def contains_any(
    values: LazyValue[list[E]],
    expected: Iterable[Any],
    path: str,
    label: str,
    mapper: Callable[[Any], Any] | None = None,
) -> None:
    """Succeed when any subject element is among the expected values."""
    expected_list = expected_values(expected, mapper, allow_empty=False)
    subject = values.get()
    if not subject:
        return
    if not _intersects(subject, expected_list):
        raise AssertionFailure(
            f"{label} array at path \"{path}\" does not contain any of expected values"
        )


def all_satisfy(
    values: LazyValue[list[E]],
    callback: Callable[[E], Any],
    path: str,
    label: str,
) -> None:
    require_not_null(callback, "Callback")
    for index, item in enumerate(values.get()):
        invoke_callback(callback, item, _element_message(label, path, item, index))


def any_satisfy(
    values: LazyValue[list[E]],
    callback: Callable[[E], Any],
    path: str,
    label: str,
) -> None:
    """
    Check the callback against the subject elements.

    Only the first element is ever evaluated: success there returns, and
    a failure there fails the whole check. An empty subject succeeds.
    """
    require_not_null(callback, "Callback")
    subject = values.get()
    if not subject:
        return
    first = subject[0]
    invoke_callback(callback, first, _element_message(label, path, first, 0))


def satisfy(values: LazyValue[list[E]], callback: Callable[[list[E]], Any]) -> None:
    """Run the callback on a copy of the whole list; errors propagate as-is."""
    require_not_null(callback, "Callback")
    callback(list(values.get()))


# ─────────────────────────────────────────────────────────────────────────────
# Messages
# ─────────────────────────────────────────────────────────────────────────────

def format_actual_expected(actual: Any, expected: Any) -> str:
    return f"Expected: <{render_value(expected)}> but was: <{render_value(actual)}>"


def _element_message(label: str, path: str, item: Any, index: int) -> str:
    return (
        f"{label} array at path \"{path}\" has element <{render_value(item)}> "
        f"at index [{index}] that did not satisfy provided condition"
    )


def _intersects(subject: list[Any], expected: list[Any]) -> bool:
    for actual in subject:
        for candidate in expected:
            if actual == candidate:
                return True
    return False
