r"""Descriptors for the ways a response body can be delivered.

A body is either already in memory, streamed to a separate consumer
(nothing buffered at validation time), or written to a file on disk.
"""

from __future__ import annotations

__all__ = ["BodyDescriptor", "DownloadedBody", "InMemoryBody", "StreamedBody"]

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class InMemoryBody:
    """Response body held in memory.

    Args:
        data: The body bytes, or ``None`` if the response had no body.

    Example:
        ```pycon
        >>> from aresponse.body import InMemoryBody
        >>> InMemoryBody(None).is_empty
        True
        >>> InMemoryBody(b"{}").is_empty
        False

        ```
    """

    data: bytes | None = None

    @property
    def is_empty(self) -> bool:
        """``True`` if there is no data or the data has zero length."""
        return not self.data


@dataclass(frozen=True)
class StreamedBody:
    """Response body delivered incrementally; no bytes are available
    at validation time."""


@dataclass(frozen=True)
class DownloadedBody:
    """Response body written to a file.

    Args:
        path: The location of the file, or ``None`` if the download
            produced no file.
    """

    path: Path | None = None

    def read(self) -> bytes:
        """Read the whole file.

        Returns:
            The file contents.

        Raises:
            ValueError: If there is no file location.
            OSError: If the file cannot be read.
        """
        if self.path is None:
            msg = "downloaded body has no file location"
            raise ValueError(msg)
        return Path(self.path).read_bytes()

    async def aread(self) -> bytes:
        """Read the whole file without blocking the event loop.

        The read runs in a worker thread. Cancelling the awaiting task
        raises ``asyncio.CancelledError`` here.

        Returns:
            The file contents.

        Raises:
            ValueError: If there is no file location.
            OSError: If the file cannot be read.
        """
        return await asyncio.to_thread(self.read)


BodyDescriptor = Union[InMemoryBody, StreamedBody, DownloadedBody]
