r"""Parameter validation utilities for the validating clients.

This module provides validation functions for client parameters to
ensure they meet the required constraints before being used.
"""

from __future__ import annotations

__all__ = ["validate_chunk_size", "validate_download_dir", "validate_timeout"]

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


def validate_timeout(timeout: float | httpx.Timeout) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for server responses.
            Must be > 0 if provided as a numeric value.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from aresponse.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_chunk_size(chunk_size: int) -> None:
    """Validate the chunk size used when downloading a body.

    Args:
        chunk_size: Number of bytes written per chunk. Must be > 0.

    Raises:
        ValueError: If chunk_size is <= 0.

    Example:
        ```pycon
        >>> from aresponse.core.validation import validate_chunk_size
        >>> validate_chunk_size(65536)

        ```
    """
    if chunk_size <= 0:
        msg = f"chunk_size must be > 0, got {chunk_size}"
        raise ValueError(msg)


def validate_download_dir(download_dir: str | Path | None) -> None:
    """Validate the directory temporary download files are written to.

    Args:
        download_dir: The directory, or ``None`` to use the system
            temporary directory. Must be an existing directory if
            provided.

    Raises:
        ValueError: If download_dir is not an existing directory.
    """
    if download_dir is not None and not Path(download_dir).is_dir():
        msg = f"download_dir must be an existing directory, got {download_dir}"
        raise ValueError(msg)
