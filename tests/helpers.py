r"""Shared test helpers for building responses and mocked clients.

This module contains common test infrastructure used across multiple
test files to reduce duplication and improve maintainability.
"""

from __future__ import annotations

__all__ = ["TEST_URL", "create_response", "create_transport"]

import httpx

TEST_URL = "https://api.example.com/data"


def create_response(
    status_code: int = 200,
    content_type: str | None = None,
    content: bytes = b"",
    request: httpx.Request | None = None,
) -> httpx.Response:
    """Create an httpx.Response with an optional Content-Type header.

    Args:
        status_code: The response status code.
        content_type: The Content-Type header value, or ``None`` to omit
            the header.
        content: The response body.
        request: The request the response answers. Defaults to a GET
            request to ``TEST_URL``.

    Returns:
        The response, with its body already read.
    """
    headers = {} if content_type is None else {"Content-Type": content_type}
    return httpx.Response(
        status_code,
        headers=headers,
        content=content,
        request=request or httpx.Request("GET", TEST_URL),
    )


def create_transport(
    status_code: int = 200,
    content_type: str | None = None,
    content: bytes = b"",
    calls: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Create a transport answering every request with the same
    response.

    Args:
        status_code: The response status code.
        content_type: The Content-Type header value, or ``None`` to omit
            the header.
        content: The response body.
        calls: Optional list the received requests are appended to.

    Returns:
        The mock transport.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        headers = {} if content_type is None else {"Content-Type": content_type}
        return httpx.Response(status_code, headers=headers, content=content)

    return httpx.MockTransport(handler)
