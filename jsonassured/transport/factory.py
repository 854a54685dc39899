"""
Source factory for creating sources from configuration.

This module provides a factory function to create the appropriate
source based on SourceConfig.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import UsageError
from .base import BaseSource, FileSource
from .http import HTTPSource

if TYPE_CHECKING:
    from ..schema_parsing import SourceConfig


def create_source(
    config: SourceConfig,
    base_dir: Path | None = None,
    timeout_ms: int = 30000,
) -> BaseSource:
    """
    Create a source instance from SourceConfig.

    Args:
        config: Source configuration from a parsed suite
        base_dir: Directory that relative file paths resolve against
        timeout_ms: Request timeout for HTTP sources

    Returns:
        Appropriate source instance (FileSource or HTTPSource)

    Raises:
        UsageError: If the source type is unsupported or config is incomplete

    Example:
        suite, _ = load_suite("checks/user.yaml")
        source = create_source(suite.source, suite.base_dir)
        body = await source.load()
    """
    from ..schema_parsing import SourceType

    if config.type == SourceType.FILE:
        if not config.path:
            raise UsageError("File source requires a 'path' in source config")
        path = Path(config.path)
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        return FileSource(path)

    elif config.type == SourceType.HTTP:
        if not config.url:
            raise UsageError("HTTP source requires a 'url' in source config")
        return HTTPSource(
            url=config.url,
            auth_config=config.auth,
            headers=config.headers,
            timeout_ms=timeout_ms,
        )

    else:
        raise UsageError(f"Unsupported source type: {config.type}")
