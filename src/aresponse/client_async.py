r"""Asynchronous context manager client validating HTTP responses.

This module provides the async counterpart of ``ValidatingClient``.
Downloaded bodies are written and read back in worker threads so file
I/O never blocks the event loop.
"""

from __future__ import annotations

__all__ = ["AsyncValidatingClient"]

import asyncio
from contextlib import asynccontextmanager
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
from aresponse.core.validation import validate_timeout
from aresponse.request import DataRequest, DataStreamRequest, DownloadRequest

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from pathlib import Path
    from types import TracebackType
    from typing import Self


class AsyncValidatingClient:
    r"""Asynchronous context manager for sending validated HTTP
    requests.

    A passed ``httpx.AsyncClient`` is used as is and never closed.
    Otherwise a client is created on entry and closed on exit.

    Args:
        config: Optional ClientConfig instance. If ``None``, a default
            ClientConfig is used.
        client: Optional httpx.AsyncClient instance to use for requests.
        timeout: Maximum seconds to wait for server responses when the
            client is created by this class. Must be > 0.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresponse import AsyncValidatingClient
        >>> async def main():  # doctest: +SKIP
        ...     async with AsyncValidatingClient() as client:
        ...         request = client.data_request("GET", "https://api.example.com/data")
        ...         response = await client.send(request.validate())
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
    ) -> None:
        validate_timeout(timeout)
        self._timeout = timeout
        self._config = config if config is not None else ClientConfig()
        self._external_client = client
        self._client: httpx.AsyncClient | None = client
        self._entered = False

    @property
    def config(self) -> ClientConfig:
        """The client configuration."""
        return self._config

    async def __aenter__(self) -> Self:
        """Enter the async context manager and create the underlying
        httpx client if none was passed.

        Returns:
            The AsyncValidatingClient instance for sending requests.
        """
        if self._external_client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        self._entered = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the async context manager and close the underlying httpx
        client if this context manager created it.

        Args:
            exc_type: Exception type if an exception occurred.
            exc_val: Exception value if an exception occurred.
            exc_tb: Exception traceback if an exception occurred.
        """
        if self._external_client is None and self._client is not None:
            await self._client.aclose()
            self._client = None
        self._entered = False

    def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure the client is available for use.

        Returns:
            The httpx.AsyncClient instance.

        Raises:
            RuntimeError: If the client is used outside of a context manager.
        """
        if not self._entered or self._client is None:
            msg = "AsyncValidatingClient must be used within an async context manager (async with statement)"
            raise RuntimeError(msg)
        return self._client

    def data_request(self, method: str, url: str, **kwargs: Any) -> DataRequest:
        r"""Build a request whose response body is read into memory.

        Args:
            method: HTTP method.
            url: The URL to send the request to.
            **kwargs: Additional keyword arguments passed to
                httpx.AsyncClient.build_request().

        Returns:
            A DataRequest without validators.

        Raises:
            InvalidURLError: If the URL uses the ``file`` scheme and
                ``config.validate_requests`` is set.
        """
        client = self._ensure_client()
        http_request = build_request(client, method, url, self._config, **kwargs)
        return DataRequest(http_request)

    def stream_request(self, method: str, url: str, **kwargs: Any) -> DataStreamRequest:
        r"""Build a request whose response body is streamed.

        Args:
            method: HTTP method.
            url: The URL to send the request to.
            **kwargs: Additional keyword arguments passed to
                httpx.AsyncClient.build_request().

        Returns:
            A DataStreamRequest without validators.

        Raises:
            InvalidURLError: If the URL uses the ``file`` scheme and
                ``config.validate_requests`` is set.
        """
        client = self._ensure_client()
        http_request = build_request(client, method, url, self._config, **kwargs)
        return DataStreamRequest(http_request)

    def download_request(self, method: str, url: str, **kwargs: Any) -> DownloadRequest:
        r"""Build a request whose response body is written to a file.

        Args:
            method: HTTP method.
            url: The URL to send the request to.
            **kwargs: Additional keyword arguments passed to
                httpx.AsyncClient.build_request().

        Returns:
            A DownloadRequest without validators.

        Raises:
            InvalidURLError: If the URL uses the ``file`` scheme and
                ``config.validate_requests`` is set.
        """
        client = self._ensure_client()
        http_request = build_request(client, method, url, self._config, **kwargs)
        return DownloadRequest(http_request)

    async def send(self, request: DataRequest) -> httpx.Response:
        r"""Send a request and validate its response.

        Args:
            request: The request to send.

        Returns:
            The response, with its body read.

        Raises:
            RuntimeError: If called outside of a context manager.
            RequestCancelledError: If the request was cancelled.
            RequestValidationError: If the request is rejected before
                being sent.
            ResponseValidationError: If the response fails validation.
        """
        client = self._ensure_client()
        http_request = prepare_request(request, self._config)
        try:
            response = await client.send(http_request)
        except asyncio.CancelledError:
            request.cancel()
            raise
        result = await request.run_validators_async(response, InMemoryBody(response.content))
        raise_for_validation_result(request, response, result, self._config)
        return response

    @asynccontextmanager
    async def stream(self, request: DataStreamRequest) -> AsyncIterator[httpx.Response]:
        r"""Send a request and validate its response before streaming
        the body.

        Args:
            request: The request to send.

        Yields:
            The open response. Its body has not been read.

        Raises:
            RuntimeError: If called outside of a context manager.
            RequestCancelledError: If the request was cancelled.
            RequestValidationError: If the request is rejected before
                being sent.
            ResponseValidationError: If the response fails validation.
        """
        client = self._ensure_client()
        http_request = prepare_request(request, self._config)
        try:
            response = await client.send(http_request, stream=True)
        except asyncio.CancelledError:
            request.cancel()
            raise
        try:
            result = await request.run_validators_async(response, StreamedBody())
            raise_for_validation_result(request, response, result, self._config)
            yield response
        finally:
            await response.aclose()

    async def download(
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
            RuntimeError: If called outside of a context manager.
            RequestCancelledError: If the request was cancelled.
            RequestValidationError: If the request is rejected before
                being sent.
            ResponseValidationError: If the response fails validation.
        """
        client = self._ensure_client()
        http_request = prepare_request(request, self._config)
        try:
            response = await client.send(http_request, stream=True)
        except asyncio.CancelledError:
            request.cancel()
            raise
        try:
            file, path, owned = open_download_file(self._config, destination)
            try:
                try:
                    async for chunk in response.aiter_bytes(chunk_size=self._config.chunk_size):
                        await asyncio.to_thread(file.write, chunk)
                finally:
                    await asyncio.to_thread(file.close)
            except BaseException:
                discard_download_file(path, owned)
                raise
        finally:
            await response.aclose()

        try:
            result = await request.run_validators_async(response, DownloadedBody(path))
            raise_for_validation_result(request, response, result, self._config)
        except BaseException:
            discard_download_file(path, owned)
            raise
        return path
