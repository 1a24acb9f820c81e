r"""aresponse - Response acceptability validation for httpx.

This package decides whether an HTTP response counts as successful for
the request that produced it, and explains precisely why when it does
not. Built on top of the httpx library, it checks status codes and
content types for responses whose body is read into memory, streamed,
or downloaded to a file.

Key Features:
    - Chainable validators registered on a request, run exactly once
    - Status code validation against any set of acceptable codes
    - Content type validation with ``*/*`` and ``type/*`` wildcards
    - Default validation from the ``Accept`` header of the request
    - Structured failure reasons instead of boolean answers
    - Sync and async clients managing the httpx client lifecycle

Example:
    ```pycon
    >>> from aresponse import ValidatingClient
    >>> with ValidatingClient() as client:  # doctest: +SKIP
    ...     request = client.data_request(
    ...         "GET", "https://api.example.com/data", headers={"Accept": "application/json"}
    ...     )
    ...     response = client.send(request.validate())
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncValidatingClient",
    "DataRequest",
    "DataStreamRequest",
    "DownloadRequest",
    "Failure",
    "HttpRequestError",
    "MimeType",
    "ResponseValidationError",
    "Success",
    "ValidatingClient",
    "__version__",
    "validate_content_type",
    "validate_status_code",
]

from importlib.metadata import PackageNotFoundError, version

from aresponse.client import ValidatingClient
from aresponse.client_async import AsyncValidatingClient
from aresponse.exceptions import HttpRequestError, ResponseValidationError
from aresponse.mime import MimeType
from aresponse.request import DataRequest, DataStreamRequest, DownloadRequest
from aresponse.result import Failure, Success
from aresponse.validators import validate_content_type, validate_status_code

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
