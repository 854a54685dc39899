"""
Schema validation for check suites.

This module contains the validation logic that checks raw parsed YAML
against the suite schema and reports errors with helpful messages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .models import (
    LIST_ARGUMENT_PREDICATES,
    TYPED_OP_PREDICATES,
    ArgType,
    AuthType,
    CheckOp,
    SourceType,
    argument_type,
)


# ─────────────────────────────────────────────────────────────────────────────
# Validation Result Types
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ValidationError:
    """Represents a single validation error with context."""
    path: str  # e.g., "checks[0].expect[1]"
    message: str
    value: Any = None
    suggestion: str | None = None

    def __str__(self) -> str:
        parts = [f"❌ {self.path}: {self.message}"]
        if self.value is not None:
            parts.append(f"   Got: {repr(self.value)}")
        if self.suggestion:
            parts.append(f"   💡 {self.suggestion}")
        return "\n".join(parts)


@dataclass
class ValidationResult:
    """Result of schema validation."""
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(
        self,
        path: str,
        message: str,
        value: Any = None,
        suggestion: str | None = None
    ) -> None:
        self.errors.append(ValidationError(path, message, value, suggestion))

    def __str__(self) -> str:
        if self.is_valid:
            return "✅ Schema validation passed"
        lines = [f"Schema validation failed with {len(self.errors)} error(s):\n"]
        lines.extend(str(e) for e in self.errors)
        return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Schema Validator
# ─────────────────────────────────────────────────────────────────────────────

class SchemaValidator:
    """Validates raw parsed YAML against the suite schema."""

    REQUIRED_TOP_LEVEL = {"version", "name", "source", "checks"}
    OPTIONAL_TOP_LEVEL = {"env", "defaults"}
    VALID_OPS = {op.value for op in CheckOp}
    VALID_SOURCES = {t.value for t in SourceType}
    VALID_AUTH_TYPES = {t.value for t in AuthType}

    def __init__(self, data: dict[str, Any]):
        self.data = data
        self.result = ValidationResult()
        self.check_ids: set[str] = set()

    def validate(self) -> ValidationResult:
        """Run all validation checks and return result."""
        self._validate_top_level()
        if not self.result.is_valid:
            return self.result

        self._validate_version()
        self._validate_name()
        self._validate_source()
        self._validate_env()
        self._validate_defaults()
        self._validate_checks()

        return self.result

    def _validate_top_level(self) -> None:
        """Check required and unknown top-level keys."""
        keys = set(self.data.keys())
        missing = self.REQUIRED_TOP_LEVEL - keys
        unknown = keys - self.REQUIRED_TOP_LEVEL - self.OPTIONAL_TOP_LEVEL

        for key in sorted(missing):
            self.result.add_error(
                key,
                f"Required field '{key}' is missing",
                suggestion=f"Add '{key}:' to your suite file"
            )

        for key in sorted(unknown, key=str):
            self.result.add_error(
                str(key),
                f"Unknown top-level field '{key}'",
                suggestion=f"Valid fields are: {', '.join(sorted(self.REQUIRED_TOP_LEVEL | self.OPTIONAL_TOP_LEVEL))}"
            )

    def _validate_version(self) -> None:
        version = self.data.get("version")
        if not isinstance(version, int) or isinstance(version, bool):
            self.result.add_error(
                "version",
                "Must be an integer",
                value=version,
                suggestion="Use 'version: 1'"
            )
        elif version < 1:
            self.result.add_error(
                "version",
                "Must be >= 1",
                value=version
            )

    def _validate_name(self) -> None:
        name = self.data.get("name")
        if not isinstance(name, str):
            self.result.add_error(
                "name",
                "Must be a string",
                value=name
            )
        elif not name.strip():
            self.result.add_error(
                "name",
                "Cannot be empty",
                suggestion="Provide a descriptive name for your suite"
            )

    def _validate_source(self) -> None:
        source = self.data.get("source")
        if not isinstance(source, dict):
            self.result.add_error(
                "source",
                "Must be an object",
                value=source
            )
            return

        source_type = source.get("type")
        if source_type not in self.VALID_SOURCES:
            self.result.add_error(
                "source.type",
                "Invalid source type",
                value=source_type,
                suggestion=f"Valid sources: {', '.join(sorted(self.VALID_SOURCES))}"
            )
            return

        if source_type == "file":
            path = source.get("path")
            if not path:
                self.result.add_error(
                    "source.path",
                    "Required when type is 'file'",
                    suggestion="Add 'path: \"fixtures/payload.json\"' to source config"
                )
            elif not isinstance(path, str):
                self.result.add_error(
                    "source.path",
                    "Must be a string",
                    value=path
                )

        elif source_type == "http":
            url = source.get("url")
            if not url:
                self.result.add_error(
                    "source.url",
                    "Required when type is 'http'",
                    suggestion="Add 'url: \"http://...\"' to source config"
                )
            elif not isinstance(url, str):
                self.result.add_error(
                    "source.url",
                    "Must be a string",
                    value=url
                )
            elif not (url.startswith("http://") or url.startswith("https://")
                      or url.startswith("{{")):
                self.result.add_error(
                    "source.url",
                    "Must be a valid HTTP(S) URL",
                    value=url,
                    suggestion="URL should start with 'http://' or 'https://'"
                )

            headers = source.get("headers")
            if headers is not None and not isinstance(headers, dict):
                self.result.add_error(
                    "source.headers",
                    "Must be an object (header name to value)",
                    value=headers
                )

            auth = source.get("auth")
            if auth is not None:
                self._validate_auth(auth)

    def _validate_env(self) -> None:
        env = self.data.get("env")
        if env is None:
            return
        if not isinstance(env, dict):
            self.result.add_error(
                "env",
                "Must be an object (key-value pairs)",
                value=env
            )

    def _validate_defaults(self) -> None:
        defaults = self.data.get("defaults")
        if defaults is None:
            return
        if not isinstance(defaults, dict):
            self.result.add_error(
                "defaults",
                "Must be an object",
                value=defaults
            )
            return

        timeout = defaults.get("timeout_ms")
        if timeout is not None:
            if not isinstance(timeout, int) or timeout < 0:
                self.result.add_error(
                    "defaults.timeout_ms",
                    "Must be a non-negative integer (milliseconds)",
                    value=timeout
                )

    def _validate_checks(self) -> None:
        checks = self.data.get("checks")
        if not isinstance(checks, list):
            self.result.add_error(
                "checks",
                "Must be a list",
                value=checks
            )
            return

        if len(checks) == 0:
            self.result.add_error(
                "checks",
                "Must contain at least one check",
                suggestion="Add a check such as 'op: is_not_null'"
            )
            return

        for i, check in enumerate(checks):
            self._validate_check(i, check)

    def _validate_check(self, index: int, check: Any) -> None:
        path = f"checks[{index}]"

        if not isinstance(check, dict):
            self.result.add_error(
                path,
                "Check must be an object",
                value=check
            )
            return

        check_id = check.get("id")
        if not check_id:
            self.result.add_error(
                f"{path}.id",
                "Check must have an 'id' field",
                suggestion="Add a unique identifier like 'id: user_name'"
            )
        elif not isinstance(check_id, str):
            self.result.add_error(
                f"{path}.id",
                "Check id must be a string",
                value=check_id
            )
        elif check_id in self.check_ids:
            self.result.add_error(
                f"{path}.id",
                "Duplicate check id",
                value=check_id,
                suggestion="Each check must have a unique id"
            )
        else:
            self.check_ids.add(check_id)

        check_path = check.get("path")
        if not check_path:
            self.result.add_error(
                f"{path}.path",
                "Check requires a 'path' field (JSONPath expression)"
            )
        elif not isinstance(check_path, str):
            self.result.add_error(
                f"{path}.path",
                "Path must be a string",
                value=check_path
            )

        op = check.get("op")
        if op not in self.VALID_OPS:
            self.result.add_error(
                f"{path}.op",
                "Invalid check operation",
                value=op,
                suggestion=f"Valid operations: {', '.join(sorted(self.VALID_OPS))}"
            )
            return

        check_op = CheckOp(op)
        if check_op is CheckOp.IS_EQUAL:
            if "value" not in check:
                self.result.add_error(
                    f"{path}.value",
                    "Operation 'is_equal' requires a 'value' field"
                )
            elif not isinstance(check["value"], str):
                self.result.add_error(
                    f"{path}.value",
                    "Must be a string",
                    value=check["value"],
                    suggestion="Quote the value, e.g. value: \"42\"; use op: is_null for null"
                )
        elif "value" in check:
            self.result.add_error(
                f"{path}.value",
                f"Operation '{op}' does not take a 'value' field"
            )

        if check_op.is_typed:
            self._validate_expect(path, check_op, check.get("expect"))
        elif "expect" in check:
            self.result.add_error(
                f"{path}.expect",
                f"Operation '{op}' does not take an 'expect' list",
                suggestion="Only the *_path operations take predicates"
            )

    def _validate_expect(self, path: str, op: CheckOp, expect: Any) -> None:
        if not isinstance(expect, list) or len(expect) == 0:
            self.result.add_error(
                f"{path}.expect",
                f"Operation '{op.value}' requires a non-empty 'expect' list",
                value=expect,
                suggestion="Add predicates, e.g. 'expect: [is_not_empty]'"
            )
            return

        table = TYPED_OP_PREDICATES[op]
        for i, entry in enumerate(expect):
            self._validate_predicate(f"{path}.expect[{i}]", op, table, entry)

    def _validate_predicate(
        self,
        path: str,
        op: CheckOp,
        table: dict[str, int],
        entry: Any
    ) -> None:
        if isinstance(entry, str):
            name, arg, has_arg = entry, None, False
        elif isinstance(entry, dict) and len(entry) == 1:
            name, arg = next(iter(entry.items()))
            has_arg = True
        else:
            self.result.add_error(
                path,
                "Predicate must be a name or a single-key mapping",
                value=entry,
                suggestion="Use 'is_positive' or 'is_gte: 10'"
            )
            return

        if name not in table:
            self.result.add_error(
                path,
                f"Unknown predicate for '{op.value}'",
                value=name,
                suggestion=f"Valid predicates: {', '.join(sorted(table))}"
            )
            return

        arity = table[name]
        if arity == 0:
            if has_arg and arg is not None:
                self.result.add_error(
                    path,
                    f"Predicate '{name}' takes no argument",
                    value=arg,
                    suggestion=f"Write it as a bare name: '- {name}'"
                )
        elif arity == 1:
            if not has_arg or arg is None:
                self.result.add_error(
                    path,
                    f"Predicate '{name}' requires an argument",
                    suggestion=f"Write it as '{name}: <value>'"
                )
            elif name in LIST_ARGUMENT_PREDICATES:
                if not isinstance(arg, list):
                    self.result.add_error(
                        path,
                        f"Predicate '{name}' requires a list argument",
                        value=arg
                    )
                    return
                for j, item in enumerate(arg):
                    self._validate_argument(f"{path}[{j}]", op, name, item)
            else:
                self._validate_argument(path, op, name, arg)
        else:
            if not has_arg or not isinstance(arg, list) or len(arg) != arity:
                self.result.add_error(
                    path,
                    f"Predicate '{name}' requires a list of {arity} arguments",
                    value=arg,
                    suggestion=f"Write it as '{name}: [<min>, <max>]'"
                )
                return
            for j, item in enumerate(arg):
                self._validate_argument(f"{path}[{j}]", op, name, item)

    def _validate_argument(self, path: str, op: CheckOp, name: str, value: Any) -> None:
        arg_type = argument_type(op, name)
        is_int = isinstance(value, int) and not isinstance(value, bool)

        if arg_type is ArgType.LENGTH:
            valid = is_int and value >= 0
        elif arg_type is ArgType.INTEGER:
            valid = is_int
        elif arg_type is ArgType.NUMBER:
            valid = is_int or isinstance(value, float)
        else:
            valid = isinstance(value, str)

        if not valid:
            self.result.add_error(
                path,
                f"Predicate '{name}' requires {arg_type.value}",
                value=value,
                suggestion="Quote the value to pass it as a string" if arg_type is ArgType.STRING else None
            )

    def _validate_auth(self, auth: Any) -> None:
        """Validate auth configuration for HTTP sources."""
        if not isinstance(auth, dict):
            self.result.add_error(
                "source.auth",
                "Must be an object",
                value=auth
            )
            return

        auth_type = auth.get("type")
        if auth_type not in self.VALID_AUTH_TYPES:
            self.result.add_error(
                "source.auth.type",
                "Invalid auth type",
                value=auth_type,
                suggestion=f"Valid types: {', '.join(sorted(self.VALID_AUTH_TYPES))}"
            )
            return

        if auth_type == "bearer":
            self._require_auth_string(auth, "token", "bearer", "{{env.TOKEN}}")

        elif auth_type == "api_key":
            self._require_auth_string(auth, "key", "api_key", "{{env.API_KEY}}")
            header = auth.get("header")
            if header is not None and not isinstance(header, str):
                self.result.add_error(
                    "source.auth.header",
                    "Must be a string",
                    value=header,
                    suggestion="Default is 'X-API-Key'"
                )

        elif auth_type == "basic":
            self._require_auth_string(auth, "username", "basic", "{{env.USER}}")
            self._require_auth_string(auth, "password", "basic", "{{env.PASS}}")

    def _require_auth_string(self, auth: dict, key: str, auth_type: str, example: str) -> None:
        value = auth.get(key)
        if not value:
            self.result.add_error(
                f"source.auth.{key}",
                f"Required for {auth_type} auth",
                suggestion=f"Add '{key}: \"...\"' or '{key}: \"{example}\"'"
            )
        elif not isinstance(value, str):
            self.result.add_error(
                f"source.auth.{key}",
                "Must be a string",
                value=value
            )
