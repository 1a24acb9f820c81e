r"""Configuration and parameter validation shared by the sync and
async clients."""

from __future__ import annotations

__all__ = [
    "DEFAULT_ACCEPTABLE_CONTENT_TYPES",
    "DEFAULT_ACCEPTABLE_STATUS_CODES",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_TIMEOUT",
    "ClientConfig",
    "validate_chunk_size",
    "validate_download_dir",
    "validate_timeout",
]

from aresponse.core.config import (
    DEFAULT_ACCEPTABLE_CONTENT_TYPES,
    DEFAULT_ACCEPTABLE_STATUS_CODES,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_TIMEOUT,
    ClientConfig,
)
from aresponse.core.validation import (
    validate_chunk_size,
    validate_download_dir,
    validate_timeout,
)
