from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import httpx
import pytest

from tests.helpers import TEST_URL

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def http_request() -> httpx.Request:
    """Create a GET request accepting JSON."""
    return httpx.Request("GET", TEST_URL, headers={"Accept": "application/json"})


@pytest.fixture
def json_response(http_request: httpx.Request) -> httpx.Response:
    """Create a 200 response with a JSON body."""
    return httpx.Response(
        200,
        headers={"Content-Type": "application/json"},
        content=b'{"key": "value"}',
        request=http_request,
    )


@pytest.fixture
def mock_response() -> httpx.Response:
    """Create a mock httpx.Response for testing."""
    return Mock(spec=httpx.Response, status_code=200, headers=httpx.Headers())


@pytest.fixture
def json_file(tmp_path: Path) -> Path:
    """Create a file holding a JSON body."""
    path = tmp_path.joinpath("body.json")
    path.write_bytes(b'{"key": "value"}')
    return path


@pytest.fixture
def empty_file(tmp_path: Path) -> Path:
    """Create an empty file."""
    path = tmp_path.joinpath("empty")
    path.write_bytes(b"")
    return path


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks."""
    return Mock()
