r"""Content type validation.

This module checks the content type declared by a response against the
content types a request accepts, with wildcard support on the
acceptable side (``*/*``, ``text/*``, ``*/json``).
"""

from __future__ import annotations

__all__ = [
    "content_type_header",
    "validate_content_type",
    "validate_content_type_with_body",
]

import logging
from typing import TYPE_CHECKING

from aresponse.mime import MimeType
from aresponse.reasons import MissingContentType, UnacceptableContentType
from aresponse.result import SUCCESS, Failure

if TYPE_CHECKING:
    from collections.abc import Iterable

    import httpx

    from aresponse.result import ValidationResult

logger: logging.Logger = logging.getLogger(__name__)


def content_type_header(response: httpx.Response) -> str | None:
    """Return the raw ``Content-Type`` header of a response.

    Args:
        response: The response to inspect.

    Returns:
        The header value, or ``None`` if the header is absent.
    """
    return response.headers.get("Content-Type")


def validate_content_type(
    acceptable_content_types: Iterable[str],
    response_content_type: str | None,
) -> ValidationResult:
    """Check a response content type against the acceptable ones.

    If the response declares no content type, or one that cannot be
    parsed, the check succeeds only if an acceptable entry is ``*/*``.
    Otherwise the acceptable entries are tried in order and the first
    one matching the response content type wins. Acceptable entries
    that cannot be parsed are skipped.

    Args:
        acceptable_content_types: The acceptable content types, which
            may contain wildcards. A single string is one entry.
        response_content_type: The raw content type declared by the
            response, or ``None``.

    Returns:
        ``Success`` if the response content type is acceptable,
            otherwise a ``Failure`` with a ``MissingContentType`` or
            ``UnacceptableContentType`` reason.

    Example:
        ```pycon
        >>> from aresponse.validators import validate_content_type
        >>> validate_content_type(["application/json", "text/*"], "text/plain")
        Success()
        >>> validate_content_type(["*/*"], None)
        Success()
        >>> validate_content_type(["application/json"], None)
        Failure(reason=MissingContentType(acceptable_content_types=('application/json',)))

        ```
    """
    if isinstance(acceptable_content_types, str):
        acceptable_content_types = (acceptable_content_types,)
    acceptable_content_types = tuple(acceptable_content_types)
    response_mime_type = (
        MimeType.parse(response_content_type) if response_content_type is not None else None
    )

    if response_content_type is None or response_mime_type is None:
        for content_type in acceptable_content_types:
            mime_type = MimeType.parse(content_type)
            if mime_type is not None and mime_type.is_wildcard:
                return SUCCESS
        logger.debug(
            f"Response has no content type and none of {acceptable_content_types} is a wildcard"
        )
        return Failure(MissingContentType(acceptable_content_types=acceptable_content_types))

    for content_type in acceptable_content_types:
        acceptable_mime_type = MimeType.parse(content_type)
        if acceptable_mime_type is not None and acceptable_mime_type.matches(response_mime_type):
            return SUCCESS

    logger.debug(
        f"Response content type {response_content_type!r} does not match "
        f"any of {acceptable_content_types}"
    )
    return Failure(
        UnacceptableContentType(
            acceptable_content_types=acceptable_content_types,
            response_content_type=response_content_type,
        )
    )


def validate_content_type_with_body(
    acceptable_content_types: Iterable[str],
    response_content_type: str | None,
    body_is_empty: bool,
) -> ValidationResult:
    """Check a response content type unless the body is empty.

    An empty body has no content type obligation, so the check
    succeeds without looking at ``response_content_type``.

    Args:
        acceptable_content_types: The acceptable content types.
        response_content_type: The raw content type declared by the
            response, or ``None``.
        body_is_empty: Whether the response body is empty.

    Returns:
        The validation result.

    Example:
        ```pycon
        >>> from aresponse.validators import validate_content_type_with_body
        >>> validate_content_type_with_body(["application/json"], "image/png", body_is_empty=True)
        Success()

        ```
    """
    if body_is_empty:
        return SUCCESS
    return validate_content_type(acceptable_content_types, response_content_type)
