"""
Schema parser for check suites.

This module converts validated YAML data into typed Suite structures.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .models import (
    AuthConfig,
    AuthType,
    Check,
    CheckOp,
    Defaults,
    Predicate,
    SourceConfig,
    SourceType,
    TYPED_OP_PREDICATES,
    Suite,
)


class SchemaParser:
    """Parses and converts validated YAML to typed Suite structure."""

    def __init__(self, data: dict[str, Any], base_dir: Path | None = None):
        self.data = data
        self.base_dir = base_dir

    def parse(self) -> Suite:
        """Convert validated data to typed Suite."""
        return Suite(
            version=self.data["version"],
            name=self.data["name"],
            source=self._parse_source(),
            env=self.data.get("env") or {},
            defaults=self._parse_defaults(),
            checks=[self._parse_check(c) for c in self.data["checks"]],
            base_dir=self.base_dir,
        )

    def _parse_source(self) -> SourceConfig:
        source = self.data["source"]
        return SourceConfig(
            type=SourceType(source["type"]),
            path=source.get("path"),
            url=source.get("url"),
            auth=self._parse_auth(source.get("auth")),
            headers={str(k): str(v) for k, v in (source.get("headers") or {}).items()},
        )

    def _parse_auth(self, auth_data: dict | None) -> AuthConfig | None:
        """Parse auth configuration if present."""
        if auth_data is None:
            return None

        return AuthConfig(
            type=AuthType(auth_data["type"]),
            token=auth_data.get("token"),
            header=auth_data.get("header", "X-API-Key"),
            key=auth_data.get("key"),
            username=auth_data.get("username"),
            password=auth_data.get("password"),
        )

    def _parse_defaults(self) -> Defaults:
        defaults = self.data.get("defaults") or {}
        return Defaults(timeout_ms=defaults.get("timeout_ms", 30000))

    def _parse_check(self, check: dict) -> Check:
        op = CheckOp(check["op"])
        return Check(
            id=check["id"],
            op=op,
            path=check["path"],
            value=check.get("value"),
            expect=[self._parse_predicate(op, p) for p in check.get("expect") or []],
        )

    def _parse_predicate(self, op: CheckOp, entry: Any) -> Predicate:
        if isinstance(entry, str):
            return Predicate(name=entry)

        name, arg = next(iter(entry.items()))
        arity = TYPED_OP_PREDICATES[op][name]
        if arity == 0:
            return Predicate(name=name)
        if arity == 1:
            return Predicate(name=name, args=[arg])
        return Predicate(name=name, args=list(arg))
