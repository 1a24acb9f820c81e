r"""Unit tests for AsyncValidatingClient context manager.

This file contains tests for the asynchronous context manager client.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from aresponse import AsyncValidatingClient
from aresponse.callbacks import ResponseInfo
from aresponse.core.config import DEFAULT_TIMEOUT, ClientConfig
from aresponse.exceptions import (
    InvalidURLError,
    RequestCancelledError,
    ResponseValidationError,
)
from aresponse.reasons import (
    MissingContentType,
    UnacceptableContentType,
    UnacceptableStatusCode,
)
from tests.helpers import TEST_URL, create_transport

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from pathlib import Path

JSON_BODY = b'{"key": "value"}'


######################################
#     Tests for client lifecycle     #
######################################


@pytest.mark.asyncio
async def test_async_client_creates_and_closes_default_client() -> None:
    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = AsyncMock()
        mock_client_class.return_value = mock_client

        async with AsyncValidatingClient():
            pass

        mock_client_class.assert_called_once_with(timeout=DEFAULT_TIMEOUT)
        mock_client.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_async_client_custom_timeout() -> None:
    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client_class.return_value = AsyncMock()
        async with AsyncValidatingClient(timeout=30.0):
            pass
        mock_client_class.assert_called_once_with(timeout=30.0)


@pytest.mark.asyncio
async def test_async_client_does_not_close_external_client() -> None:
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    async with AsyncValidatingClient(client=mock_client):
        pass
    mock_client.aclose.assert_not_awaited()


@pytest.mark.parametrize("timeout", [0, -1.0])
def test_async_client_rejects_invalid_timeout(timeout: float) -> None:
    with pytest.raises(ValueError, match=r"timeout must be > 0"):
        AsyncValidatingClient(timeout=timeout)


def test_async_client_outside_context_manager() -> None:
    client = AsyncValidatingClient()
    with pytest.raises(RuntimeError, match=r"must be used within an async context manager"):
        client.data_request("GET", TEST_URL)


@pytest.mark.asyncio
async def test_async_client_after_exit() -> None:
    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client_class.return_value = AsyncMock()
        client = AsyncValidatingClient()
        async with client:
            pass
    with pytest.raises(RuntimeError, match=r"must be used within an async context manager"):
        client.download_request("GET", TEST_URL)


###########################
#     Tests for send      #
###########################


@pytest.mark.asyncio
async def test_async_send_returns_validated_response() -> None:
    transport = create_transport(content_type="application/json", content=JSON_BODY)
    async with httpx.AsyncClient(transport=transport) as http_client, AsyncValidatingClient(
        client=http_client
    ) as client:
        request = client.data_request("GET", TEST_URL, headers={"Accept": "application/json"})
        response = await client.send(request.validate())

    assert response.json() == {"key": "value"}
    assert request.is_validated


@pytest.mark.asyncio
async def test_async_send_raises_on_unacceptable_status_code() -> None:
    transport = create_transport(status_code=401)
    async with httpx.AsyncClient(transport=transport) as http_client, AsyncValidatingClient(
        client=http_client
    ) as client:
        request = client.data_request("GET", TEST_URL).validate_status_code([200])
        with pytest.raises(ResponseValidationError) as exc_info:
            await client.send(request)

    assert exc_info.value.reason == UnacceptableStatusCode(code=401)
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_async_send_raises_on_missing_content_type() -> None:
    transport = create_transport(content=JSON_BODY)
    async with httpx.AsyncClient(transport=transport) as http_client, AsyncValidatingClient(
        client=http_client
    ) as client:
        request = client.data_request("GET", TEST_URL, headers={"Accept": "application/json"})
        with pytest.raises(ResponseValidationError) as exc_info:
            await client.send(request.validate())

    assert exc_info.value.reason == MissingContentType(
        acceptable_content_types=("application/json",)
    )


@pytest.mark.asyncio
async def test_async_send_invokes_on_success(mock_callback: Mock) -> None:
    transport = create_transport(content_type="text/plain", content=b"ok")
    config = ClientConfig(on_success=mock_callback)
    async with httpx.AsyncClient(transport=transport) as http_client, AsyncValidatingClient(
        config=config, client=http_client
    ) as client:
        response = await client.send(client.data_request("GET", TEST_URL).validate())

    mock_callback.assert_called_once_with(
        ResponseInfo(url=TEST_URL, method="GET", status_code=200, response=response)
    )


@pytest.mark.asyncio
async def test_async_send_cancelled_request_is_not_sent() -> None:
    calls: list[httpx.Request] = []
    transport = create_transport(calls=calls)
    async with httpx.AsyncClient(transport=transport) as http_client, AsyncValidatingClient(
        client=http_client
    ) as client:
        request = client.data_request("GET", TEST_URL).validate()
        request.cancel()
        with pytest.raises(RequestCancelledError):
            await client.send(request)

    assert calls == []


@pytest.mark.asyncio
async def test_async_send_task_cancellation_cancels_request() -> None:
    started = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.sleep(10)
        return httpx.Response(200)

    async with httpx.AsyncClient(
        transport=httpx.MockTransport(handler)
    ) as http_client, AsyncValidatingClient(client=http_client) as client:
        request = client.data_request("GET", TEST_URL).validate()
        task = asyncio.create_task(client.send(request))
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    assert request.is_cancelled
    assert not request.is_validated


@pytest.mark.asyncio
async def test_async_request_builders_reject_file_url() -> None:
    async with httpx.AsyncClient(transport=create_transport()) as http_client, AsyncValidatingClient(
        client=http_client
    ) as client:
        for build in (client.data_request, client.stream_request, client.download_request):
            with pytest.raises(InvalidURLError, match=r"URL is not valid: file:"):
                build("GET", "file:///etc/hosts")


###########################
#     Tests for stream    #
###########################


@pytest.mark.asyncio
async def test_async_stream_yields_validated_response() -> None:
    transport = create_transport(content_type="application/octet-stream", content=b"abcdef")
    async with httpx.AsyncClient(transport=transport) as http_client, AsyncValidatingClient(
        client=http_client
    ) as client:
        request = client.stream_request("GET", TEST_URL).validate()
        async with client.stream(request) as response:
            chunks = [chunk async for chunk in response.aiter_bytes()]

    assert b"".join(chunks) == b"abcdef"
    assert response.is_closed


@pytest.mark.asyncio
async def test_async_stream_raises_before_body() -> None:
    transport = create_transport(content_type="text/html", content=b"<html/>")
    async with httpx.AsyncClient(transport=transport) as http_client, AsyncValidatingClient(
        client=http_client
    ) as client:
        request = client.stream_request(
            "GET", TEST_URL, headers={"Accept": "application/json"}
        ).validate()
        with pytest.raises(ResponseValidationError) as exc_info:
            async with client.stream(request):
                pytest.fail("the response body must not be reachable")

    assert exc_info.value.reason == UnacceptableContentType(
        acceptable_content_types=("application/json",), response_content_type="text/html"
    )


#############################
#     Tests for download    #
#############################


@pytest.mark.asyncio
async def test_async_download_to_temporary_file(tmp_path: Path) -> None:
    transport = create_transport(content_type="application/json", content=JSON_BODY)
    config = ClientConfig(download_dir=tmp_path, chunk_size=3)
    async with httpx.AsyncClient(transport=transport) as http_client, AsyncValidatingClient(
        config=config, client=http_client
    ) as client:
        request = client.download_request(
            "GET", TEST_URL, headers={"Accept": "application/*"}
        ).validate()
        path = await client.download(request)

    assert path.parent == tmp_path
    assert path.read_bytes() == JSON_BODY


@pytest.mark.asyncio
async def test_async_download_failure_removes_temporary_file(tmp_path: Path) -> None:
    transport = create_transport(status_code=404, content_type="application/json", content=b"{}")
    config = ClientConfig(download_dir=tmp_path)
    async with httpx.AsyncClient(transport=transport) as http_client, AsyncValidatingClient(
        config=config, client=http_client
    ) as client:
        with pytest.raises(ResponseValidationError):
            await client.download(client.download_request("GET", TEST_URL).validate())

    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_async_download_to_destination(tmp_path: Path) -> None:
    destination = tmp_path.joinpath("out.bin")
    transport = create_transport(content_type="application/octet-stream", content=b"\x00\x01")
    async with httpx.AsyncClient(transport=transport) as http_client, AsyncValidatingClient(
        client=http_client
    ) as client:
        path = await client.download(
            client.download_request("GET", TEST_URL).validate(), str(destination)
        )

    assert path == destination
    assert destination.read_bytes() == b"\x00\x01"


@pytest.mark.asyncio
async def test_async_download_cancelled_removes_temporary_file(tmp_path: Path) -> None:
    started = asyncio.Event()

    async def body() -> AsyncIterator[bytes]:
        yield b"partial"
        started.set()
        await asyncio.sleep(10)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"Content-Type": "text/plain"}, content=body())

    config = ClientConfig(download_dir=tmp_path)
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(handler)
    ) as http_client, AsyncValidatingClient(config=config, client=http_client) as client:
        request = client.download_request("GET", TEST_URL).validate()
        task = asyncio.create_task(client.download(request))
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    assert list(tmp_path.iterdir()) == []
