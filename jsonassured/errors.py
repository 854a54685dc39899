"""
Error types raised by jsonassured.

Two kinds of failure never mix:

    - UsageError: the assertion call itself is wrong (blank path, None
      argument, inverted range, empty expected collection). Raised
      immediately and never wrapped.
    - AssertionFailure: the JSON value did not satisfy a predicate,
      including type narrowing mismatches. It subclasses AssertionError so
      test runners report it as a failed test.

Resolver errors come from reading the document (unknown path, invalid
JSONPath syntax) and propagate unchanged to any operation that does not
consume them. Source errors come from loading a document over a transport.
"""

from __future__ import annotations


class JsonAssuredError(Exception):
    """Base class for errors that are not assertion failures."""


class UsageError(JsonAssuredError, ValueError):
    """An assertion method was called with invalid arguments."""


class AssertionFailure(AssertionError):
    """A resolved JSON value failed an assertion."""


class ResolverError(JsonAssuredError):
    """The document could not answer a path query."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class PathNotFoundError(ResolverError):
    """A definite path matched nothing in the document."""


class InvalidPathError(ResolverError):
    """The JSONPath expression could not be parsed."""


class SourceError(JsonAssuredError):
    """A JSON document could not be loaded from its source."""

    def __init__(self, message: str, data: dict | None = None):
        super().__init__(message)
        self.data = data or {}
