from __future__ import annotations

from decimal import Decimal

import pytest

from jsonassured import AssertionFailure, PathAssertions, assert_data

KIND_PATHS = {
    "null": "$.nullVal",
    "boolean": "$.booleanTrue",
    "integer": "$.positiveIntVal",
    "long": "$.positiveLongVal",
    "decimal": "$.smallDecimalVal",
    "string": "$.stringVal",
    "object": "$.objectVal",
    "array": "$.intArray",
}

SCALAR_ENTRIES = {
    "string_path": ("value of type string", {"string"}),
    "int_path": ("Int number", {"integer"}),
    "long_path": ("Long number", {"integer", "long"}),
    "decimal_path": ("Decimal number", {"decimal"}),
}

ARRAY_ENTRIES = {
    "string_array_path": "String array",
    "int_array_path": "Int array",
    "long_array_path": "Long array",
    "decimal_array_path": "Decimal array",
}


def _touch_scalar(assertions) -> None:
    assertions.satisfies(lambda value: None)


def _touch_array(assertions) -> None:
    assertions.satisfy(lambda values: None)


@pytest.mark.parametrize("entry", sorted(SCALAR_ENTRIES))
@pytest.mark.parametrize("kind", sorted(KIND_PATHS))
def test_scalar_narrowing_matrix(subject: PathAssertions, entry: str, kind: str) -> None:
    label, accepted = SCALAR_ENTRIES[entry]
    path = KIND_PATHS[kind]
    narrow = getattr(subject, entry)

    if kind in accepted:
        narrow(path, _touch_scalar)
        return

    with pytest.raises(AssertionFailure) as info:
        narrow(path, _touch_scalar)
    message = str(info.value)
    assert message.startswith(f'Expected {label} at path "{path}", but actual type was "{kind}"')
    if kind == "null":
        assert message.endswith('"null"')
    else:
        assert ": <" in message


@pytest.mark.parametrize("entry", sorted(ARRAY_ENTRIES))
@pytest.mark.parametrize("kind", sorted(set(KIND_PATHS) - {"array"}))
def test_array_entry_rejects_non_arrays(subject: PathAssertions, entry: str, kind: str) -> None:
    path = KIND_PATHS[kind]
    with pytest.raises(AssertionFailure) as info:
        getattr(subject, entry)(path, _touch_array)
    assert str(info.value).startswith(
        f'Expected {ARRAY_ENTRIES[entry]} at path "{path}", but actual type was "{kind}"'
    )


def test_array_entries_accept_matching_elements(subject: PathAssertions) -> None:
    seen = {}
    subject.string_array_path("$.stringsArray", lambda a: a.satisfy(lambda v: seen.update(s=v)))
    subject.int_array_path("$.intArray", lambda a: a.satisfy(lambda v: seen.update(i=v)))
    subject.long_array_path("$.intArray", lambda a: a.satisfy(lambda v: seen.update(li=v)))
    subject.long_array_path("$.longArray", lambda a: a.satisfy(lambda v: seen.update(l=v)))
    subject.decimal_array_path("$.decimalArray", lambda a: a.satisfy(lambda v: seen.update(d=v)))
    assert seen["s"] == ["a", "b", "c"]
    assert seen["i"] == [1, 2, 3]
    assert seen["li"] == [1, 2, 3]
    assert seen["l"] == [1234567890123456]
    assert seen["d"] == [Decimal("123456789.123456789"), Decimal("123456789.223456789")]


def test_empty_array_narrows_for_every_entry(subject: PathAssertions) -> None:
    for entry in ARRAY_ENTRIES:
        getattr(subject, entry)("$.emptyArray", lambda a: a.is_empty())


def test_first_offending_element_aborts(subject: PathAssertions) -> None:
    with pytest.raises(
        AssertionFailure,
        match='^Expected String array at path "\\$.mixedArray", '
              'but actual type of value in array was "integer": <1>$',
    ):
        subject.string_array_path("$.mixedArray", _touch_array)


def test_null_element_has_no_value_suffix() -> None:
    root = assert_data({"values": [1, None]})
    with pytest.raises(AssertionFailure) as info:
        root.int_array_path("$.values", _touch_array)
    assert str(info.value) == (
        'Expected Int array at path "$.values", but actual type of value in array was "null"'
    )


def test_long_array_rejects_decimal_elements(subject: PathAssertions) -> None:
    with pytest.raises(AssertionFailure, match='value in array was "decimal"'):
        subject.long_array_path("$.decimalArray", _touch_array)


def test_int_rejects_values_beyond_32_bits() -> None:
    root = assert_data({"big": 2**31, "huge": 2**64})
    with pytest.raises(AssertionFailure, match='actual type was "long"'):
        root.int_path("$.big", _touch_scalar)
    with pytest.raises(AssertionFailure, match='actual type was "unknown"'):
        root.long_path("$.huge", _touch_scalar)


def test_decimal_converts_floats_by_value() -> None:
    seen = []
    assert_data({"f": 1.1}).decimal_path("$.f", lambda n: n.satisfies(seen.append))
    assert seen == [Decimal("1.1")]


def test_narrowing_failure_is_raised_on_first_predicate(subject: PathAssertions) -> None:
    calls = []

    def check(assertions) -> None:
        calls.append("before")
        assertions.is_positive()
        calls.append("after")

    with pytest.raises(AssertionFailure):
        subject.int_path("$.stringVal", check)
    assert calls == ["before"]
