"""Shared fixtures for the jsonassured test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from jsonassured import PathAssertions, assert_json

ALL_TYPES_JSON = r"""
{
  "blankStringVal": " \n \t ",
  "emptyStringVal": "",
  "stringVal": "sTr",
  "zeroIntVal": 0,
  "zeroDecimalVal": 0.0,
  "smallDecimalVal": 1.2,
  "intAsStringVal": "1234",
  "decimalAsStringVal": "1234.5678",
  "positiveIntVal": 123456789,
  "negativeIntVal": -123456789,
  "positiveLongVal": 1234567890123456,
  "negativeLongVal": -1234567890123456,
  "positiveDecimalVal": 123456789.123456789,
  "negativeDecimalVal": -123456789.123456789,
  "booleanTrue": true,
  "booleanFalse": false,
  "nullVal": null,
  "objectVal": {
    "nestedStringVal": "str",
    "nestedIntVal": 123456789
  },
  "stringsArray": ["a", "b", "c"],
  "intArray": [1, 2, 3],
  "longArray": [1234567890123456],
  "decimalArray": [123456789.123456789, 123456789.223456789],
  "emptyArray": [],
  "mixedArray": ["a", 1, null],
  "objectsArray": [
    {"nestedIntVal": 1234567},
    {"nestedIntVal": 12345678}
  ]
}
"""

SCENARIO_JSON = '{"a":"sTr","n":0,"arr":["a","b","c"],"nil":null}'


@pytest.fixture
def subject() -> PathAssertions:
    return assert_json(ALL_TYPES_JSON)


@pytest.fixture
def scenario() -> PathAssertions:
    return assert_json(SCENARIO_JSON)


@pytest.fixture
def payload_file(tmp_path: Path) -> Path:
    path = tmp_path / "payload.json"
    path.write_text(ALL_TYPES_JSON, encoding="utf-8")
    return path


@pytest.fixture
def scenario_json() -> str:
    return SCENARIO_JSON
