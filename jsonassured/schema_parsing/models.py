"""
Typed data structures for declarative check suites.

This module contains all enums and dataclasses that represent
the internal typed structure of a parsed suite, plus the tables of
predicates each typed check accepts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


# ─────────────────────────────────────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────────────────────────────────────

class CheckOp(str, Enum):
    """Supported check operations, one per PathAssertions method."""
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"
    DOES_NOT_EXIST = "does_not_exist"
    IS_TRUE = "is_true"
    IS_FALSE = "is_false"
    IS_EQUAL = "is_equal"  # requires 'value'
    # Typed entry points, require 'expect'
    STRING_PATH = "string_path"
    INT_PATH = "int_path"
    LONG_PATH = "long_path"
    DECIMAL_PATH = "decimal_path"
    STRING_ARRAY_PATH = "string_array_path"
    INT_ARRAY_PATH = "int_array_path"
    LONG_ARRAY_PATH = "long_array_path"
    DECIMAL_ARRAY_PATH = "decimal_array_path"

    @property
    def is_typed(self) -> bool:
        return self.value.endswith("_path")


class SourceType(str, Enum):
    """Where the JSON document comes from."""
    FILE = "file"
    HTTP = "http"


class AuthType(str, Enum):
    """Supported authentication types for HTTP sources."""
    BEARER = "bearer"
    API_KEY = "api_key"
    BASIC = "basic"


class ArgType(str, Enum):
    """Type a predicate argument (or each list element) must have."""
    LENGTH = "a non-negative integer"
    STRING = "a string"
    INTEGER = "an integer"
    NUMBER = "a number"


# ─────────────────────────────────────────────────────────────────────────────
# Predicate tables (name -> number of arguments)
# ─────────────────────────────────────────────────────────────────────────────

STRING_PREDICATES: dict[str, int] = {
    "is_equal_to": 1,
    "is_not_equal_to": 1,
    "is_equal_to_ignoring_case": 1,
    "is_not_equal_to_ignoring_case": 1,
    "is_blank": 0,
    "is_not_blank": 0,
    "is_empty": 0,
    "is_not_empty": 0,
    "has_length": 1,
    "has_length_range": 2,
    "has_length_at_least": 1,
    "has_length_at_most": 1,
    "contains": 1,
    "contains_ignoring_case": 1,
    "matches": 1,
    "does_not_match": 1,
    "is_in": 1,
    "is_not_in": 1,
}

NUMBER_PREDICATES: dict[str, int] = {
    "is_positive": 0,
    "is_negative": 0,
    "is_zero": 0,
    "is_equal_to": 1,
    "is_not_equal_to": 1,
    "is_gte": 1,
    "is_lte": 1,
    "is_in_range": 2,
    "is_in": 1,
    "is_not_in": 1,
}

ARRAY_PREDICATES: dict[str, int] = {
    "has_size": 1,
    "is_empty": 0,
    "is_not_empty": 0,
    "contains_all": 1,
    "contains_any": 1,
}

# Predicates whose single argument is a collection
LIST_ARGUMENT_PREDICATES = {"is_in", "is_not_in", "contains_all", "contains_any"}

TYPED_OP_PREDICATES: dict[CheckOp, dict[str, int]] = {
    CheckOp.STRING_PATH: STRING_PREDICATES,
    CheckOp.INT_PATH: NUMBER_PREDICATES,
    CheckOp.LONG_PATH: NUMBER_PREDICATES,
    CheckOp.DECIMAL_PATH: NUMBER_PREDICATES,
    CheckOp.STRING_ARRAY_PATH: ARRAY_PREDICATES,
    CheckOp.INT_ARRAY_PATH: ARRAY_PREDICATES,
    CheckOp.LONG_ARRAY_PATH: ARRAY_PREDICATES,
    CheckOp.DECIMAL_ARRAY_PATH: ARRAY_PREDICATES,
}

# Sizes and lengths take non-negative integers whatever the op
LENGTH_PREDICATES = {
    "has_size",
    "has_length",
    "has_length_range",
    "has_length_at_least",
    "has_length_at_most",
}

ELEMENT_ARG_TYPES: dict[CheckOp, ArgType] = {
    CheckOp.STRING_PATH: ArgType.STRING,
    CheckOp.INT_PATH: ArgType.INTEGER,
    CheckOp.LONG_PATH: ArgType.INTEGER,
    CheckOp.DECIMAL_PATH: ArgType.NUMBER,
    CheckOp.STRING_ARRAY_PATH: ArgType.STRING,
    CheckOp.INT_ARRAY_PATH: ArgType.INTEGER,
    CheckOp.LONG_ARRAY_PATH: ArgType.INTEGER,
    CheckOp.DECIMAL_ARRAY_PATH: ArgType.NUMBER,
}


def argument_type(op: CheckOp, predicate: str) -> ArgType:
    if predicate in LENGTH_PREDICATES:
        return ArgType.LENGTH
    return ELEMENT_ARG_TYPES[op]


# ─────────────────────────────────────────────────────────────────────────────
# Source Configuration
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class AuthConfig:
    """
    Authentication configuration for HTTP sources.

    Supports three auth types:
    - bearer: Uses Authorization: Bearer <token> header
    - api_key: Uses a custom header with the API key
    - basic: Uses Authorization: Basic <base64(user:pass)> header
    """
    type: AuthType
    # For bearer auth
    token: str | None = None
    # For api_key auth
    header: str = "X-API-Key"
    key: str | None = None
    # For basic auth
    username: str | None = None
    password: str | None = None


@dataclass
class SourceConfig:
    """Where to load the JSON document from."""
    type: SourceType
    path: str | None = None  # Required for file
    url: str | None = None  # Required for http
    auth: AuthConfig | None = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class Defaults:
    """Default settings for loading sources."""
    timeout_ms: int = 30000


# ─────────────────────────────────────────────────────────────────────────────
# Checks
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class Predicate:
    """One predicate call on a typed assertions object."""
    name: str
    args: list[Any] = field(default_factory=list)

    def describe(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}({', '.join(repr(a) for a in self.args)})"


@dataclass
class Check:
    """A single check against one path."""
    id: str
    op: CheckOp
    path: str
    value: str | None = None  # is_equal only
    expect: list[Predicate] = field(default_factory=list)  # typed ops only


# ─────────────────────────────────────────────────────────────────────────────
# Suite
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class Suite:
    """Fully parsed and validated check suite."""
    version: int
    name: str
    source: SourceConfig
    env: dict[str, Any] = field(default_factory=dict)
    defaults: Defaults = field(default_factory=Defaults)
    checks: list[Check] = field(default_factory=list)
    base_dir: Path | None = None  # Directory relative file sources resolve against
