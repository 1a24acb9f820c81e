r"""Configuration dataclass and defaults for the validating clients.

This module provides configuration constants and a dataclass-based
configuration object for the ValidatingClient and
AsyncValidatingClient context manager classes.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_ACCEPTABLE_CONTENT_TYPES",
    "DEFAULT_ACCEPTABLE_STATUS_CODES",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_TIMEOUT",
    "ClientConfig",
]

from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

from aresponse.core.validation import validate_chunk_size, validate_download_dir

if TYPE_CHECKING:
    from collections.abc import Callable

    from aresponse.callbacks import FailureInfo, ResponseInfo


# Default timeout in seconds for HTTP requests
DEFAULT_TIMEOUT = 10.0

# Number of bytes written per chunk when downloading a body to a file
DEFAULT_CHUNK_SIZE = 64 * 1024

# Status codes accepted by ``validate()``: all 2xx codes
DEFAULT_ACCEPTABLE_STATUS_CODES = range(200, 300)

# Content types accepted when the request has no Accept header
DEFAULT_ACCEPTABLE_CONTENT_TYPES = ("*/*",)


@dataclass
class ClientConfig:
    """Configuration for ValidatingClient behavior.

    Note:
        The timeout parameter is NOT included in this config as it is used
        directly by httpx.Client/AsyncClient.

    Args:
        chunk_size: Number of bytes written per chunk when downloading a
            body to a file. Must be > 0.
        download_dir: Optional directory for temporary download files.
            If ``None``, the system temporary directory is used.
        validate_requests: Whether outgoing requests are checked for
            ``file`` URLs and GET bodies before being sent.
        on_success: Optional callback called when a response passes
            validation.
        on_failure: Optional callback called when a response fails
            validation.

    Example:
        ```pycon
        >>> from aresponse.core.config import ClientConfig
        >>> config = ClientConfig()
        >>> config.chunk_size
        65536
        >>> merged = config.merge(chunk_size=1024)
        >>> merged.chunk_size
        1024
        >>> config.chunk_size
        65536

        ```
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    download_dir: Path | None = None
    validate_requests: bool = True
    on_success: Callable[[ResponseInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_chunk_size(self.chunk_size)
        validate_download_dir(self.download_dir)
        if self.download_dir is not None:
            self.download_dir = Path(self.download_dir)

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ClientConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary with the configuration parameters.
        """
        return {
            "chunk_size": self.chunk_size,
            "download_dir": self.download_dir,
            "validate_requests": self.validate_requests,
            "on_success": self.on_success,
            "on_failure": self.on_failure,
        }
