r"""Unit tests for package initialization and metadata."""

from __future__ import annotations

import aresponse
from aresponse.reasons import UnacceptableStatusCode


def test_package_version_is_string() -> None:
    """Test that __version__ is a string."""
    assert isinstance(aresponse.__version__, str)


def test_package_version_not_empty() -> None:
    """Test that __version__ is not empty."""
    assert len(aresponse.__version__) > 0


def test_all_exports_defined() -> None:
    """Test that all items in __all__ are defined in the module."""
    for name in aresponse.__all__:
        assert hasattr(aresponse, name), f"{name} is in __all__ but not defined in module"


def test_all_exports_count() -> None:
    """Test that __all__ has the expected number of exports."""
    # 2 clients + 3 requests + 2 results + 2 exceptions + 2 validators + MimeType + version
    assert len(aresponse.__all__) == 13


def test_validation_results_truthiness() -> None:
    assert aresponse.Success()
    assert not aresponse.Failure(reason=UnacceptableStatusCode(code=500))
