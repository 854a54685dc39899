"""
Write-once lazy value cell.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")

_UNSET = object()


class LazyValue(Generic[T]):
    """
    Defers a computation until first use and caches its result.

    The producer runs on the first call to get(). A successful result is
    stored and returned on every later call, and the producer is released.
    If the producer raises, the exception propagates as-is and nothing is
    cached, so the next call runs the producer again.

    Not thread-safe.

    Example:
        value = LazyValue(lambda: expensive_read())
        value.get()  # runs expensive_read()
        value.get()  # returns the cached result
    """

    __slots__ = ("_producer", "_value")

    def __init__(self, producer: Callable[[], T]):
        self._producer: Callable[[], T] | None = producer
        self._value: object = _UNSET

    @property
    def evaluated(self) -> bool:
        return self._value is not _UNSET

    def get(self) -> T:
        if self._value is _UNSET:
            # _producer is only released once _value is set
            value = self._producer()
            self._value = value
            self._producer = None
        return self._value  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self.evaluated:
            return f"LazyValue({self._value!r})"
        return "LazyValue(<pending>)"
