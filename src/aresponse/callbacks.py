r"""Callback types and data structures for observability.

This module provides callback support for the validating clients,
enabling users to hook into validation outcomes for logging, metrics,
or alerting.

Two lifecycle hooks are provided:
- on_success: Called when a response passes all its validators
- on_failure: Called when a response fails validation

Example:
    ```pycon
    >>> from aresponse import ValidatingClient
    >>> from aresponse.callbacks import FailureInfo
    >>> from aresponse.core import ClientConfig
    >>> def log_failure(info: FailureInfo):
    ...     print(f"{info.method} {info.url}: {info.reason.message}")
    ...
    >>> with ValidatingClient(config=ClientConfig(on_failure=log_failure)) as client:  # doctest: +SKIP
    ...     client.send(client.data_request("GET", "https://api.example.com/data").validate())
    ...

    ```
"""

from __future__ import annotations

__all__ = ["FailureInfo", "ResponseInfo", "invoke_on_failure", "invoke_on_success"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from aresponse.exceptions import ResponseValidationError
    from aresponse.reasons import ValidationFailureReason


@dataclass
class ResponseInfo:
    """Information passed to on_success callback.

    Attributes:
        url: The URL that was requested.
        method: The HTTP method (e.g., "GET", "POST").
        status_code: The status code of the response.
        response: The response that passed validation.
    """

    url: str
    method: str
    status_code: int
    response: httpx.Response


@dataclass
class FailureInfo:
    """Information passed to on_failure callback.

    Attributes:
        url: The URL that was requested.
        method: The HTTP method (e.g., "GET", "POST").
        status_code: The status code of the response.
        reason: The first failure reason reported by the validators.
        error: The exception about to be raised.
    """

    url: str
    method: str
    status_code: int | None
    reason: ValidationFailureReason
    error: ResponseValidationError


def invoke_on_success(
    on_success: Callable[[ResponseInfo], None] | None,
    *,
    response: httpx.Response,
) -> None:
    """Invoke on_success callback if provided.

    Args:
        on_success: Optional callback to invoke when validation passes.
        response: The validated response.
    """
    if on_success is not None:
        on_success(
            ResponseInfo(
                url=str(response.request.url),
                method=response.request.method,
                status_code=response.status_code,
                response=response,
            )
        )


def invoke_on_failure(
    on_failure: Callable[[FailureInfo], None] | None,
    *,
    error: ResponseValidationError,
) -> None:
    """Invoke on_failure callback if provided.

    Args:
        on_failure: Optional callback to invoke when validation fails.
        error: The validation error about to be raised.
    """
    if on_failure is not None:
        on_failure(
            FailureInfo(
                url=error.url,
                method=error.method,
                status_code=error.status_code,
                reason=error.reason,
                error=error,
            )
        )
