"""
Document Sources

This package provides sources that fetch raw JSON documents (local files,
HTTP endpoints) for check suites, and assert_response() for asserting on
an aiohttp response body directly.

Usage:
    from jsonassured.transport import create_source, HTTPSource, assert_response
    from jsonassured.schema_parsing import load_suite

    # Create from config
    suite, _ = load_suite("checks/user.yaml")
    source = create_source(suite.source, suite.base_dir)

    # Or create directly
    source = HTTPSource("https://api.example.com/users/1")

    async with source:
        body = await source.load()

    # Assert on a response you already have
    async with session.get(url) as resp:
        (await assert_response(resp)).is_not_null("$.id")
"""

# Factory
from .factory import create_source

# Source implementations
from .base import BaseSource, FileSource
from .http import HTTPSource, assert_response

__all__ = [
    # Factory
    "create_source",
    # Base
    "BaseSource",
    # Implementations
    "FileSource",
    "HTTPSource",
    # Responses
    "assert_response",
]
