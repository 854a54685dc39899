from __future__ import annotations

import io
import json
from decimal import Decimal

import pytest

from jsonassured.document import JsonDocument, JsonKind, classify, render_list, render_value
from jsonassured.errors import InvalidPathError, PathNotFoundError, UsageError


def test_parse_keeps_decimals_exact() -> None:
    doc = JsonDocument.parse('{"d": 123456789.123456789}')
    assert doc.read("$.d") == Decimal("123456789.123456789")


@pytest.mark.parametrize(
    "source",
    [
        '{"a": 1}',
        b'{"a": 1}',
        bytearray(b'{"a": 1}'),
        io.StringIO('{"a": 1}'),
        io.BytesIO(b'{"a": 1}'),
    ],
)
def test_parse_accepts_text_bytes_and_streams(source) -> None:
    assert JsonDocument.parse(source).read("$.a") == 1


def test_parse_rejects_none_and_unknown_types() -> None:
    with pytest.raises(UsageError):
        JsonDocument.parse(None)
    with pytest.raises(UsageError, match="Unsupported JSON source type: int"):
        JsonDocument.parse(42)


def test_parse_malformed_json_raises_decode_error() -> None:
    with pytest.raises(json.JSONDecodeError):
        JsonDocument.parse("{not json")


def test_definite_path_missing_raises_not_found() -> None:
    doc = JsonDocument.from_data({"a": None})
    with pytest.raises(PathNotFoundError, match='No results for path "\\$.b"') as info:
        doc.read("$.b")
    assert info.value.path == "$.b"


def test_definite_path_present_null() -> None:
    doc = JsonDocument.from_data({"a": None})
    assert doc.read("$.a") is None


def test_indefinite_path_returns_list() -> None:
    doc = JsonDocument.from_data({"items": [{"id": 1}, {"id": 2}], "empty": []})
    assert doc.read("$.items[*].id") == [1, 2]
    assert doc.read("$.empty[*]") == []
    assert doc.read("$.items[0].id") == 1


def test_invalid_path_raises_invalid_path_error() -> None:
    doc = JsonDocument.from_data({})
    with pytest.raises(InvalidPathError):
        doc.read("$.a[")


@pytest.mark.parametrize(
    ("value", "kind"),
    [
        (None, JsonKind.NULL),
        (True, JsonKind.BOOLEAN),
        (0, JsonKind.INTEGER),
        (2**31 - 1, JsonKind.INTEGER),
        (2**31, JsonKind.LONG),
        (-(2**63), JsonKind.LONG),
        (2**63, JsonKind.UNKNOWN),
        (1.5, JsonKind.DECIMAL),
        (Decimal("1.5"), JsonKind.DECIMAL),
        ("s", JsonKind.STRING),
        ({"a": 1}, JsonKind.OBJECT),
        ([1], JsonKind.ARRAY),
        (object(), JsonKind.UNKNOWN),
    ],
)
def test_classify(value, kind) -> None:
    assert classify(value) is kind


def test_render_value() -> None:
    assert render_value("plain") == "plain"
    assert render_value(None) == "null"
    assert render_value(False) == "false"
    assert render_value(Decimal("1.20")) == "1.20"
    assert render_value({"k": "v", "n": [1, None]}) == '{"k":"v","n":[1,null]}'
    assert render_list(["a", 1]) == "[a, 1]"
