r"""Exceptions raised when a request or its response is not
acceptable."""

from __future__ import annotations

__all__ = [
    "BodyDataInGETRequestError",
    "HttpRequestError",
    "InvalidURLError",
    "RequestCancelledError",
    "RequestValidationError",
    "ResponseValidationError",
]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from aresponse.reasons import ValidationFailureReason


class HttpRequestError(RuntimeError):
    """Base exception for HTTP request failures.

    Args:
        method: The HTTP method of the request (e.g. ``"GET"``).
        url: The URL of the request.
        message: A human-readable description of the failure.
        status_code: The response status code, if a response was
            received.
        response: The response, if one was received.
        cause: The underlying exception, if any.

    Example:
        ```pycon
        >>> from aresponse.exceptions import HttpRequestError
        >>> error = HttpRequestError(
        ...     method="GET", url="https://api.example.com", message="failed"
        ... )
        >>> error.method
        'GET'
        >>> str(error)
        'failed'

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        status_code: int | None = None,
        response: httpx.Response | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.message = message
        self.status_code = status_code
        self.response = response
        self.__cause__ = cause

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(method={self.method!r}, url={self.url!r}, "
            f"message={self.message!r}, status_code={self.status_code!r})"
        )


class ResponseValidationError(HttpRequestError):
    """Raised when a response fails one of the validators registered on
    its request.

    Args:
        method: The HTTP method of the request.
        url: The URL of the request.
        reason: The first failure reason reported by the validators.
        response: The response that failed validation.
    """

    def __init__(
        self,
        method: str,
        url: str,
        reason: ValidationFailureReason,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(
            method=method,
            url=url,
            message=f"{method} request to {url} failed validation: {reason.message}",
            status_code=response.status_code if response is not None else None,
            response=response,
        )
        self.reason = reason


class RequestValidationError(HttpRequestError):
    """Raised when an outgoing request is rejected before being
    sent."""


class InvalidURLError(RequestValidationError):
    """Raised when an outgoing request targets a ``file`` URL."""

    def __init__(self, method: str, url: str) -> None:
        super().__init__(method=method, url=url, message=f"URL is not valid: {url}")


class BodyDataInGETRequestError(RequestValidationError):
    """Raised when an outgoing GET request carries a body.

    Args:
        method: The HTTP method of the request.
        url: The URL of the request.
        body: The body bytes, or ``None`` if the body is a stream that
            has not been read.
    """

    def __init__(self, method: str, url: str, body: bytes | None) -> None:
        size = "streamed" if body is None else f"{len(body)} bytes"
        super().__init__(
            method=method,
            url=url,
            message=f"Invalid URLRequest: Requests with GET method cannot have body data ({size})",
        )
        self.body = body


class RequestCancelledError(HttpRequestError):
    """Raised when a cancelled request is sent or validated."""

    def __init__(self, method: str, url: str) -> None:
        super().__init__(method=method, url=url, message=f"{method} request to {url} was cancelled")
