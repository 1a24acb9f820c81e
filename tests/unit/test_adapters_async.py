from __future__ import annotations

import asyncio
import threading
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from aresponse.adapters import validate_downloaded_content_type_async
from aresponse.body import DownloadedBody
from aresponse.reasons import DataFileNil, DataFileReadFailed
from aresponse.result import Failure, Success
from tests.helpers import create_response

if TYPE_CHECKING:
    from pathlib import Path

############################################################
#     Tests for validate_downloaded_content_type_async     #
############################################################


@pytest.mark.asyncio
async def test_downloaded_async_without_path() -> None:
    response = create_response(content_type="application/json")
    result = await validate_downloaded_content_type_async(["*/*"], response, DownloadedBody())
    assert result == Failure(DataFileNil())


@pytest.mark.asyncio
async def test_downloaded_async_acceptable(json_file: Path) -> None:
    response = create_response(content_type="application/json")
    result = await validate_downloaded_content_type_async(
        ["application/*"], response, DownloadedBody(json_file)
    )
    assert result == Success()


@pytest.mark.asyncio
async def test_downloaded_async_empty_file(empty_file: Path) -> None:
    response = create_response(content_type="image/png")
    result = await validate_downloaded_content_type_async(
        ["application/json"], response, DownloadedBody(empty_file)
    )
    assert result == Success()


@pytest.mark.asyncio
async def test_downloaded_async_read_failure(tmp_path: Path) -> None:
    path = tmp_path.joinpath("missing")
    response = create_response(content_type="application/json")
    result = await validate_downloaded_content_type_async(
        ["application/json"], response, DownloadedBody(path)
    )
    assert result == Failure(DataFileReadFailed(path=path))


@pytest.mark.asyncio
async def test_downloaded_async_reads_in_worker_thread(json_file: Path) -> None:
    threads: list[threading.Thread] = []
    original_read = DownloadedBody.read

    def read(self: DownloadedBody) -> bytes:
        threads.append(threading.current_thread())
        return original_read(self)

    response = create_response(content_type="application/json")
    with patch.object(DownloadedBody, "read", read):
        await validate_downloaded_content_type_async(
            ["application/json"], response, DownloadedBody(json_file)
        )
    assert threads
    assert threads[0] is not threading.main_thread()


@pytest.mark.asyncio
async def test_downloaded_async_cancellation_propagates(json_file: Path) -> None:
    """Test that cancelling the read surfaces as a cancellation, not as
    a read failure."""
    release = threading.Event()

    def slow_read(_self: DownloadedBody) -> bytes:
        release.wait(timeout=5)
        return b"{}"

    response = create_response(content_type="application/json")
    with patch.object(DownloadedBody, "read", slow_read):
        task = asyncio.create_task(
            validate_downloaded_content_type_async(
                ["application/json"], response, DownloadedBody(json_file)
            )
        )
        await asyncio.sleep(0.05)
        task.cancel()
        try:
            with pytest.raises(asyncio.CancelledError):
                await task
        finally:
            release.set()
