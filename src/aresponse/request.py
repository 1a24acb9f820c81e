r"""Requests carrying response validators.

A request collects validators through a chainable API. When its
response is available, every validator runs exactly once, in
registration order, and the first failure becomes the request's
validation result.

Three request kinds exist, one per body delivery strategy:

- ``DataRequest``: the body is read into memory.
- ``DataStreamRequest``: the body is streamed; only the status code and
  headers are validated.
- ``DownloadRequest``: the body is written to a file.

Example:
    ```pycon
    >>> import httpx
    >>> from aresponse.body import InMemoryBody
    >>> from aresponse.request import DataRequest
    >>> request = DataRequest(
    ...     httpx.Request("GET", "https://api.example.com", headers={"Accept": "application/json"})
    ... ).validate()
    >>> response = httpx.Response(200, headers={"Content-Type": "application/json"})
    >>> request.run_validators(response, InMemoryBody(b"{}"))
    Success()

    ```
"""

from __future__ import annotations

__all__ = [
    "DataRequest",
    "DataStreamRequest",
    "DownloadRequest",
    "ValidatedRequest",
]

import asyncio
import inspect
import logging
import weakref
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from aresponse.adapters import (
    validate_downloaded_content_type,
    validate_downloaded_content_type_async,
    validate_in_memory_content_type,
    validate_streamed_content_type,
)
from aresponse.core.config import (
    DEFAULT_ACCEPTABLE_CONTENT_TYPES,
    DEFAULT_ACCEPTABLE_STATUS_CODES,
)
from aresponse.exceptions import RequestCancelledError
from aresponse.result import SUCCESS
from aresponse.validators.status_code import validate_status_code

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from typing import Self, TypeAlias

    import httpx

    from aresponse.body import BodyDescriptor, DownloadedBody, InMemoryBody
    from aresponse.result import ValidationResult

    Validator: TypeAlias = Callable[[httpx.Request, httpx.Response, Any], ValidationResult]
    ContentTypes: TypeAlias = Iterable[str] | Callable[[], Iterable[str]]

logger: logging.Logger = logging.getLogger(__name__)


def _as_producer(acceptable_content_types: ContentTypes) -> Callable[[], Iterable[str]]:
    if isinstance(acceptable_content_types, str):
        return lambda: (acceptable_content_types,)
    if callable(acceptable_content_types):
        return acceptable_content_types
    return lambda: acceptable_content_types


class ValidatedRequest(ABC):
    r"""Base class of requests carrying response validators.

    Args:
        request: The HTTP request to send.

    Note:
        Validators are invoked at most once. Once validation has run,
        its result is cached and no further validator can be added.
    """

    def __init__(self, request: httpx.Request) -> None:
        self._request = request
        self._validators: list[Validator] = []
        self._result: ValidationResult | None = None
        self._started = False
        self._cancelled = False

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(method={self._request.method!r}, "
            f"url={str(self._request.url)!r}, validators={len(self._validators)})"
        )

    @property
    def request(self) -> httpx.Request:
        """The underlying HTTP request."""
        return self._request

    @property
    def acceptable_status_codes(self) -> range:
        """The status codes accepted by ``validate()``."""
        return DEFAULT_ACCEPTABLE_STATUS_CODES

    @property
    def acceptable_content_types(self) -> list[str]:
        """The content types accepted by ``validate()``.

        They are read from the ``Accept`` header of the request, split
        on ``,``. Without an ``Accept`` header, any content type is
        accepted.
        """
        accept = self._request.headers.get("Accept")
        if accept is not None:
            return accept.split(",")
        return list(DEFAULT_ACCEPTABLE_CONTENT_TYPES)

    @property
    def is_cancelled(self) -> bool:
        """``True`` if the request was cancelled."""
        return self._cancelled

    @property
    def is_validated(self) -> bool:
        """``True`` if the validators have run to completion."""
        return self._result is not None

    @property
    def validation_result(self) -> ValidationResult | None:
        """The aggregated validation result, or ``None`` before
        validation."""
        return self._result

    def cancel(self) -> None:
        """Cancel the request.

        Validators of a request cancelled before its response arrives
        are never invoked.
        """
        self._cancelled = True

    def add_validator(self, validator: Validator) -> Self:
        """Register a validator.

        Args:
            validator: A callable receiving the request, the response
                and the body descriptor, and returning a
                ``ValidationResult``.

        Returns:
            The instance, to chain further validators.

        Raises:
            RuntimeError: If validation has already run.
        """
        if self._started:
            msg = "cannot add a validator after the response has been validated"
            raise RuntimeError(msg)
        self._validators.append(validator)
        return self

    def validate_status_code(self, acceptable_status_codes: Iterable[int]) -> Self:
        """Validate that the response status code is acceptable.

        Args:
            acceptable_status_codes: The acceptable status codes.

        Returns:
            The instance.
        """

        def validator(_request: httpx.Request, response: httpx.Response, _body: Any) -> ValidationResult:
            return validate_status_code(response.status_code, acceptable_status_codes)

        return self.add_validator(validator)

    def validate_content_type(self, acceptable_content_types: ContentTypes) -> Self:
        """Validate that the response content type is acceptable.

        Args:
            acceptable_content_types: The acceptable content types,
                which may contain wildcards. A zero-argument callable
                is evaluated when the response is validated, not when
                this method is called.

        Returns:
            The instance.
        """
        return self.add_validator(self._content_type_validator(_as_producer(acceptable_content_types)))

    def validate(self) -> Self:
        """Validate the status code against ``200..299`` and the content
        type against the ``Accept`` header of the request.

        Returns:
            The instance.
        """
        ref = weakref.ref(self)

        def acceptable_content_types() -> list[str]:
            request = ref()
            if request is None:
                return list(DEFAULT_ACCEPTABLE_CONTENT_TYPES)
            return request.acceptable_content_types

        return self.validate_status_code(self.acceptable_status_codes).validate_content_type(
            acceptable_content_types
        )

    def run_validators(self, response: httpx.Response, body: BodyDescriptor) -> ValidationResult:
        """Run all registered validators against a response.

        Every validator runs, in registration order, even after a
        failure. The first failure is the result.

        Args:
            response: The response to validate.
            body: The body descriptor matching this request kind.

        Returns:
            ``Success`` if every validator passed, otherwise the first
                ``Failure``.

        Raises:
            RequestCancelledError: If the request was cancelled.
        """
        if self._result is not None:
            return self._result
        self._start()
        result: ValidationResult = SUCCESS
        for validator in self._validators:
            outcome = validator(self._request, response, body)
            result = self._record(outcome, result)
        self._result = result
        return result

    async def run_validators_async(
        self, response: httpx.Response, body: BodyDescriptor
    ) -> ValidationResult:
        """Run all registered validators against a response without
        blocking the event loop.

        Validators exposing a ``call_async`` coroutine method use it,
        and validators returning an awaitable are awaited. Cancelling
        the awaiting task cancels the request.

        Args:
            response: The response to validate.
            body: The body descriptor matching this request kind.

        Returns:
            ``Success`` if every validator passed, otherwise the first
                ``Failure``.

        Raises:
            RequestCancelledError: If the request was cancelled.
        """
        if self._result is not None:
            return self._result
        self._start()
        result: ValidationResult = SUCCESS
        try:
            for validator in self._validators:
                call_async = getattr(validator, "call_async", None)
                if inspect.iscoroutinefunction(call_async):
                    outcome = await call_async(self._request, response, body)
                else:
                    outcome = validator(self._request, response, body)
                    if inspect.isawaitable(outcome):
                        outcome = await outcome
                result = self._record(outcome, result)
        except asyncio.CancelledError:
            self._cancelled = True
            raise
        self._result = result
        return result

    def _start(self) -> None:
        if self._cancelled:
            raise RequestCancelledError(method=self._request.method, url=str(self._request.url))
        if self._started:
            msg = "validation of this request was interrupted and cannot run again"
            raise RuntimeError(msg)
        self._started = True

    def _record(self, outcome: ValidationResult, result: ValidationResult) -> ValidationResult:
        if outcome:
            return result
        logger.debug(
            f"{self._request.method} request to {self._request.url} failed validation: "
            f"{outcome.reason.message}"
        )
        if not result:
            return result
        return outcome

    @abstractmethod
    def _content_type_validator(self, producer: Callable[[], Iterable[str]]) -> Validator:
        r"""Build the content type validator for this request kind."""


class DataRequest(ValidatedRequest):
    r"""Request whose response body is read into memory.

    Its validators receive an ``InMemoryBody``. An empty body is
    always acceptable, whatever its declared content type.
    """

    def _content_type_validator(self, producer: Callable[[], Iterable[str]]) -> Validator:
        def validator(
            _request: httpx.Request, response: httpx.Response, body: InMemoryBody
        ) -> ValidationResult:
            return validate_in_memory_content_type(producer(), response, body)

        return validator


class DataStreamRequest(ValidatedRequest):
    r"""Request whose response body is streamed.

    Validation runs on the status code and headers before any body byte
    is consumed. Its validators receive a ``StreamedBody``.
    """

    def _content_type_validator(self, producer: Callable[[], Iterable[str]]) -> Validator:
        def validator(_request: httpx.Request, response: httpx.Response, _body: Any) -> ValidationResult:
            return validate_streamed_content_type(producer(), response)

        return validator


class _DownloadedContentTypeValidator:
    def __init__(self, producer: Callable[[], Iterable[str]]) -> None:
        self._producer = producer

    def __call__(
        self, _request: httpx.Request, response: httpx.Response, body: DownloadedBody
    ) -> ValidationResult:
        return validate_downloaded_content_type(self._producer(), response, body)

    async def call_async(
        self, _request: httpx.Request, response: httpx.Response, body: DownloadedBody
    ) -> ValidationResult:
        return await validate_downloaded_content_type_async(self._producer(), response, body)


class DownloadRequest(ValidatedRequest):
    r"""Request whose response body is written to a file.

    Its validators receive a ``DownloadedBody``. Content type validation
    reads the file back; a missing or unreadable file is a failure.
    """

    def _content_type_validator(self, producer: Callable[[], Iterable[str]]) -> Validator:
        return _DownloadedContentTypeValidator(producer)
