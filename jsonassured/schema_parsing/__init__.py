"""
Schema Parsing for Check Suites

This package provides tools for parsing, validating, and working with
declarative YAML check suites: one JSON source plus a list of checks,
each mapped onto a PathAssertions operation.

Usage:
    from jsonassured.schema_parsing import load_suite, validate_suite_yaml

    # Load from file
    suite, result = load_suite("checks/user.yaml")
    if not result.is_valid:
        print(result)

    # Or validate from string
    suite, result = validate_suite_yaml(yaml_string)
"""

# Public API
from .loader import load_suite, validate_suite_yaml

# Models (for type hints and isinstance checks)
from .models import (
    ARRAY_PREDICATES,
    NUMBER_PREDICATES,
    STRING_PREDICATES,
    AuthConfig,
    AuthType,
    Check,
    CheckOp,
    Defaults,
    Predicate,
    SourceConfig,
    SourceType,
    Suite,
)

# Validation (for custom validation if needed)
from .validation import SchemaValidator, ValidationError, ValidationResult

__all__ = [
    # Loader functions
    "load_suite",
    "validate_suite_yaml",
    # Models
    "Suite",
    "SourceConfig",
    "Defaults",
    "Check",
    "Predicate",
    "CheckOp",
    "SourceType",
    "AuthConfig",
    "AuthType",
    "STRING_PREDICATES",
    "NUMBER_PREDICATES",
    "ARRAY_PREDICATES",
    # Validation
    "ValidationResult",
    "ValidationError",
    "SchemaValidator",
]
