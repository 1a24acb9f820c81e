r"""Synchronous context manager client validating HTTP responses.

This module provides a context manager-based client that sends
``DataRequest``, ``DataStreamRequest`` and ``DownloadRequest`` objects
and raises ``ResponseValidationError`` when a response fails the
validators registered on its request.
"""

from __future__ import annotations

__all__ = ["ValidatingClient"]

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import httpx

from aresponse.body import DownloadedBody, InMemoryBody, StreamedBody
from aresponse.core.client_logic import (
    build_request,
    discard_download_file,
    open_download_file,
    prepare_request,
    raise_for_validation_result,
)
from aresponse.core.config import DEFAULT_TIMEOUT, ClientConfig
from aresponse.request import DataRequest, DataStreamRequest, DownloadRequest

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path
    from types import TracebackType
    from typing import Self


class ValidatingClient:
    r"""Synchronous context manager for sending validated HTTP requests.

    The ``httpx.Client`` lifecycle follows two patterns:

    - If an ``httpx.Client`` is passed (e.g. managed by an outer
      ``with`` block, or configured with headers, auth, proxies),
      ``ValidatingClient`` uses it without closing it on exit.
    - Otherwise ``ValidatingClient`` creates a client with the default
      timeout and closes it on exit.

    Args:
        config: Optional ClientConfig instance. If ``None``, a default
            ClientConfig is used.
        client: Optional httpx.Client instance to use for requests.
            If ``None``, a new client is created with the default timeout.

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

    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._config: ClientConfig = config or ClientConfig()
        self._close_client = client is None
        self._client: httpx.Client = client or httpx.Client(timeout=DEFAULT_TIMEOUT)

    @property
    def config(self) -> ClientConfig:
        """The client configuration."""
        return self._config

    def __enter__(self) -> Self:
        """Enter the context manager.

        Returns:
            The ValidatingClient instance for sending requests.
        """
        if self._close_client:
            self._client.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager and close the underlying httpx
        client if this context manager opened it.

        Args:
            exc_type: Exception type if an exception occurred.
            exc_val: Exception value if an exception occurred.
            exc_tb: Exception traceback if an exception occurred.
        """
        if self._close_client:
            self._client.__exit__(exc_type, exc_val, exc_tb)

    def data_request(self, method: str, url: str, **kwargs: Any) -> DataRequest:
        r"""Build a request whose response body is read into memory.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, PATCH, HEAD, OPTIONS, etc.).
            url: The URL to send the request to.
            **kwargs: Additional keyword arguments passed to
                httpx.Client.build_request().

        Returns:
            A DataRequest without validators.

        Raises:
            InvalidURLError: If the URL uses the ``file`` scheme and
                ``config.validate_requests`` is set.
        """
        http_request = build_request(self._client, method, url, self._config, **kwargs)
        return DataRequest(http_request)

    def stream_request(self, method: str, url: str, **kwargs: Any) -> DataStreamRequest:
        r"""Build a request whose response body is streamed.

        Args:
            method: HTTP method.
            url: The URL to send the request to.
            **kwargs: Additional keyword arguments passed to
                httpx.Client.build_request().

        Returns:
            A DataStreamRequest without validators.

        Raises:
            InvalidURLError: If the URL uses the ``file`` scheme and
                ``config.validate_requests`` is set.
        """
        http_request = build_request(self._client, method, url, self._config, **kwargs)
        return DataStreamRequest(http_request)

    def download_request(self, method: str, url: str, **kwargs: Any) -> DownloadRequest:
        r"""Build a request whose response body is written to a file.

        Args:
            method: HTTP method.
            url: The URL to send the request to.
            **kwargs: Additional keyword arguments passed to
                httpx.Client.build_request().

        Returns:
            A DownloadRequest without validators.

        Raises:
            InvalidURLError: If the URL uses the ``file`` scheme and
                ``config.validate_requests`` is set.
        """
        http_request = build_request(self._client, method, url, self._config, **kwargs)
        return DownloadRequest(http_request)

    def send(self, request: DataRequest) -> httpx.Response:
        r"""Send a request and validate its response.

        Args:
            request: The request to send.

        Returns:
            The response, with its body read.

        Raises:
            RequestCancelledError: If the request was cancelled.
            RequestValidationError: If the request is rejected before
                being sent.
            ResponseValidationError: If the response fails validation.
        """
        http_request = prepare_request(request, self._config)
        response = self._client.send(http_request)
        result = request.run_validators(response, InMemoryBody(response.content))
        raise_for_validation_result(request, response, result, self._config)
        return response

    @contextmanager
    def stream(self, request: DataStreamRequest) -> Iterator[httpx.Response]:
        r"""Send a request and validate its response before streaming
        the body.

        Args:
            request: The request to send.

        Yields:
            The open response. Its body has not been read.

        Raises:
            RequestCancelledError: If the request was cancelled.
            RequestValidationError: If the request is rejected before
                being sent.
            ResponseValidationError: If the response fails validation.

        Example:
            ```pycon
            >>> from aresponse import ValidatingClient
            >>> with ValidatingClient() as client:  # doctest: +SKIP
            ...     request = client.stream_request("GET", "https://api.example.com/events")
            ...     with client.stream(request.validate()) as response:
            ...         for chunk in response.iter_bytes():
            ...             print(len(chunk))
            ...

            ```
        """
        http_request = prepare_request(request, self._config)
        response = self._client.send(http_request, stream=True)
        try:
            result = request.run_validators(response, StreamedBody())
            raise_for_validation_result(request, response, result, self._config)
            yield response
        finally:
            response.close()

    def download(
        self, request: DownloadRequest, destination: str | Path | None = None
    ) -> Path:
        r"""Send a request, write the response body to a file and
        validate the response.

        Args:
            request: The request to send.
            destination: Optional path to write the body to. If ``None``,
                a temporary file is created in ``config.download_dir``
                and removed if validation fails.

        Returns:
            The path of the downloaded file.

        Raises:
            RequestCancelledError: If the request was cancelled.
            RequestValidationError: If the request is rejected before
                being sent.
            ResponseValidationError: If the response fails validation.
        """
        http_request = prepare_request(request, self._config)
        response = self._client.send(http_request, stream=True)
        try:
            file, path, owned = open_download_file(self._config, destination)
            try:
                with file:
                    for chunk in response.iter_bytes(chunk_size=self._config.chunk_size):
                        file.write(chunk)
            except BaseException:
                discard_download_file(path, owned)
                raise
        finally:
            response.close()

        try:
            result = request.run_validators(response, DownloadedBody(path))
            raise_for_validation_result(request, response, result, self._config)
        except BaseException:
            discard_download_file(path, owned)
            raise
        return path
