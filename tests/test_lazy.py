from __future__ import annotations

import pytest

from jsonassured.lazy import LazyValue


def test_producer_runs_once() -> None:
    calls = []

    def produce() -> str:
        calls.append(1)
        return "value"

    lazy = LazyValue(produce)
    assert not lazy.evaluated
    assert lazy.get() == "value"
    assert lazy.get() == "value"
    assert lazy.evaluated
    assert len(calls) == 1


def test_returns_same_object() -> None:
    lazy = LazyValue(lambda: ["x"])
    assert lazy.get() is lazy.get()


def test_none_result_is_cached() -> None:
    calls = []

    def produce() -> None:
        calls.append(1)
        return None

    lazy = LazyValue(produce)
    assert lazy.get() is None
    assert lazy.get() is None
    assert len(calls) == 1


def test_failure_is_not_cached() -> None:
    attempts = []

    def produce() -> int:
        attempts.append(1)
        if len(attempts) == 1:
            raise KeyError("first")
        return 7

    lazy = LazyValue(produce)
    with pytest.raises(KeyError):
        lazy.get()
    assert not lazy.evaluated
    assert lazy.get() == 7
    assert len(attempts) == 2


def test_repr_shows_state() -> None:
    lazy = LazyValue(lambda: 3)
    assert repr(lazy) == "LazyValue(<pending>)"
    lazy.get()
    assert repr(lazy) == "LazyValue(3)"
