"""
Base source interface for loading JSON documents.

This module defines the abstract base class that all source
implementations must follow, plus the local file source.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from ..errors import SourceError

logger = logging.getLogger(__name__)


class BaseSource(ABC):
    """
    Abstract base class for JSON document sources.

    Sources fetch the raw document bytes, whether from disk, over HTTP,
    or elsewhere. Parsing is left to JsonDocument.
    """

    async def open(self) -> None:
        """Acquire any resources the source needs (sessions, handles)."""

    async def close(self) -> None:
        """Release resources acquired by open()."""

    @abstractmethod
    async def load(self) -> bytes:
        """
        Fetch the raw document.

        Returns:
            The document body as bytes

        Raises:
            SourceError: If the document cannot be fetched
        """

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable description, used in reports."""

    async def __aenter__(self) -> BaseSource:
        """Async context manager entry."""
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()


class FileSource(BaseSource):
    """Reads a JSON document from a local file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    async def load(self) -> bytes:
        try:
            content = await asyncio.to_thread(self.path.read_bytes)
        except OSError as e:
            raise SourceError(
                f"Cannot read {self.path}: {e.strerror or e}",
                data={"path": str(self.path)},
            ) from e
        logger.debug("Read %d bytes from %s", len(content), self.path)
        return content

    def describe(self) -> str:
        return str(self.path)
