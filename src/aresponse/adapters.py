r"""Content type validation for each body delivery strategy.

The adapters differ only in how they decide whether the body is empty
and how they obtain its bytes. All of them end up in
``aresponse.validators.content_type``.
"""

from __future__ import annotations

__all__ = [
    "validate_downloaded_content_type",
    "validate_downloaded_content_type_async",
    "validate_in_memory_content_type",
    "validate_streamed_content_type",
]

import logging
from typing import TYPE_CHECKING

from aresponse.body import DownloadedBody, InMemoryBody
from aresponse.reasons import DataFileNil, DataFileReadFailed
from aresponse.result import Failure
from aresponse.validators.content_type import (
    content_type_header,
    validate_content_type,
    validate_content_type_with_body,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    import httpx

    from aresponse.result import ValidationResult

logger: logging.Logger = logging.getLogger(__name__)


def validate_in_memory_content_type(
    acceptable_content_types: Iterable[str],
    response: httpx.Response,
    body: InMemoryBody,
) -> ValidationResult:
    """Validate the content type of a response whose body is in
    memory.

    Args:
        acceptable_content_types: The acceptable content types.
        response: The response whose ``Content-Type`` header is checked.
        body: The in-memory body. An absent or empty body is always
            acceptable.

    Returns:
        The validation result.

    Example:
        ```pycon
        >>> import httpx
        >>> from aresponse.adapters import validate_in_memory_content_type
        >>> from aresponse.body import InMemoryBody
        >>> response = httpx.Response(200, headers={"Content-Type": "application/json"})
        >>> validate_in_memory_content_type(["application/json"], response, InMemoryBody(b"{}"))
        Success()

        ```
    """
    return validate_content_type_with_body(
        acceptable_content_types,
        content_type_header(response),
        body_is_empty=body.is_empty,
    )


def validate_streamed_content_type(
    acceptable_content_types: Iterable[str],
    response: httpx.Response,
) -> ValidationResult:
    """Validate the content type of a streamed response from its
    headers only.

    There is no buffered body to measure, so the empty body shortcut
    never applies.

    Args:
        acceptable_content_types: The acceptable content types.
        response: The response whose ``Content-Type`` header is checked.

    Returns:
        The validation result.
    """
    return validate_content_type(acceptable_content_types, content_type_header(response))


def validate_downloaded_content_type(
    acceptable_content_types: Iterable[str],
    response: httpx.Response,
    body: DownloadedBody,
) -> ValidationResult:
    """Validate the content type of a response downloaded to a file.

    Args:
        acceptable_content_types: The acceptable content types.
        response: The response whose ``Content-Type`` header is checked.
        body: The downloaded body.

    Returns:
        ``Failure(DataFileNil())`` if the body has no file location,
            ``Failure(DataFileReadFailed(path))`` if the file cannot be
            read, otherwise the result of the in-memory validation on
            the file contents.
    """
    if body.path is None:
        logger.debug("Downloaded body has no file location")
        return Failure(DataFileNil())
    try:
        data = body.read()
    except OSError as exc:
        logger.debug(f"Failed to read downloaded body at {body.path}: {exc}")
        return Failure(DataFileReadFailed(path=body.path))
    return validate_in_memory_content_type(acceptable_content_types, response, InMemoryBody(data))


async def validate_downloaded_content_type_async(
    acceptable_content_types: Iterable[str],
    response: httpx.Response,
    body: DownloadedBody,
) -> ValidationResult:
    """Validate the content type of a response downloaded to a file,
    reading the file without blocking the event loop.

    Cancellation during the read propagates as
    ``asyncio.CancelledError``.

    Args:
        acceptable_content_types: The acceptable content types.
        response: The response whose ``Content-Type`` header is checked.
        body: The downloaded body.

    Returns:
        The validation result, see
            ``validate_downloaded_content_type``.
    """
    if body.path is None:
        logger.debug("Downloaded body has no file location")
        return Failure(DataFileNil())
    try:
        data = await body.aread()
    except OSError as exc:
        logger.debug(f"Failed to read downloaded body at {body.path}: {exc}")
        return Failure(DataFileReadFailed(path=body.path))
    return validate_in_memory_content_type(acceptable_content_types, response, InMemoryBody(data))
