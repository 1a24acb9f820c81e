r"""Sanity checks applied to a request before it is sent."""

from __future__ import annotations

__all__ = ["validate_outgoing_request", "validate_outgoing_url"]

import logging

import httpx

from aresponse.exceptions import BodyDataInGETRequestError, InvalidURLError

logger: logging.Logger = logging.getLogger(__name__)


def validate_outgoing_request(request: httpx.Request) -> None:
    """Reject requests that cannot be sent as built.

    Args:
        request: The request to check.

    Raises:
        InvalidURLError: If the request targets a ``file`` URL.
        BodyDataInGETRequestError: If a GET request carries a body.

    Example:
        ```pycon
        >>> import httpx
        >>> from aresponse.outgoing import validate_outgoing_request
        >>> validate_outgoing_request(httpx.Request("GET", "https://api.example.com"))
        >>> validate_outgoing_request(
        ...     httpx.Request("GET", "https://api.example.com", content=b"data")
        ... )  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        aresponse.exceptions.BodyDataInGETRequestError: ...

        ```
    """
    method = request.method
    url = str(request.url)
    validate_outgoing_url(method, request.url)

    if method != "GET":
        return
    try:
        body: bytes | None = request.content
    except httpx.RequestNotRead:
        body = None
    else:
        if not body:
            return
    logger.debug(f"Rejecting GET request to {url} with body data")
    raise BodyDataInGETRequestError(method=method, url=url, body=body)


def validate_outgoing_url(method: str, url: httpx.URL | str) -> None:
    """Reject a URL that targets the local file system.

    The check applies to the URL as given by the caller. ``httpx``
    clients merge a URL without a host into their base URL, which
    drops the ``file`` scheme from the built request.

    Args:
        method: The HTTP method of the request.
        url: The URL to check.

    Raises:
        InvalidURLError: If the URL uses the ``file`` scheme.
    """
    if httpx.URL(url).scheme == "file":
        logger.debug(f"Rejecting {method} request to file URL {url}")
        raise InvalidURLError(method=method, url=str(url))
