r"""Shared client logic for both sync and async ValidatingClient
classes.

This module provides the steps both clients perform around sending a
request: the pre-send checks, surfacing the validation result, and
managing the file a download is written to.
"""

from __future__ import annotations

__all__ = [
    "build_request",
    "discard_download_file",
    "open_download_file",
    "prepare_request",
    "raise_for_validation_result",
]

import logging
import tempfile
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

from aresponse.callbacks import invoke_on_failure, invoke_on_success
from aresponse.exceptions import RequestCancelledError, ResponseValidationError
from aresponse.outgoing import validate_outgoing_request, validate_outgoing_url

if TYPE_CHECKING:
    import httpx

    from aresponse.core.config import ClientConfig
    from aresponse.request import ValidatedRequest
    from aresponse.result import ValidationResult

logger: logging.Logger = logging.getLogger(__name__)


def build_request(
    client: httpx.Client | httpx.AsyncClient,
    method: str,
    url: httpx.URL | str,
    config: ClientConfig,
    **kwargs: Any,
) -> httpx.Request:
    """Build a request, checking the URL given by the caller first.

    Args:
        client: The httpx client building the request.
        method: The HTTP method.
        url: The URL to send the request to.
        config: The client configuration.
        **kwargs: Additional keyword arguments passed to
            ``client.build_request()``.

    Returns:
        The built request.

    Raises:
        InvalidURLError: If ``config.validate_requests`` is set and
            the URL uses the ``file`` scheme.
    """
    if config.validate_requests:
        validate_outgoing_url(method, url)
    return client.build_request(method, url, **kwargs)


def prepare_request(request: ValidatedRequest, config: ClientConfig) -> httpx.Request:
    """Run the pre-send checks on a request.

    Args:
        request: The request about to be sent.
        config: The client configuration.

    Returns:
        The underlying HTTP request, ready to be sent.

    Raises:
        RequestCancelledError: If the request was cancelled.
        RequestValidationError: If ``config.validate_requests`` is set
            and the request is rejected.
    """
    http_request = request.request
    if request.is_cancelled:
        raise RequestCancelledError(method=http_request.method, url=str(http_request.url))
    if config.validate_requests:
        validate_outgoing_request(http_request)
    logger.debug(f"Sending {http_request.method} request to {http_request.url}")
    return http_request


def raise_for_validation_result(
    request: ValidatedRequest,
    response: httpx.Response,
    result: ValidationResult,
    config: ClientConfig,
) -> None:
    """Surface a validation result and invoke the matching callback.

    Args:
        request: The validated request.
        response: The validated response.
        result: The aggregated validation result of the request.
        config: The client configuration holding the callbacks.

    Raises:
        ResponseValidationError: If the result is a failure.
    """
    http_request = request.request
    if result:
        invoke_on_success(config.on_success, response=response)
        return
    error = ResponseValidationError(
        method=http_request.method,
        url=str(http_request.url),
        reason=result.reason,
        response=response,
    )
    logger.debug(str(error))
    invoke_on_failure(config.on_failure, error=error)
    raise error


def open_download_file(
    config: ClientConfig, destination: str | Path | None
) -> tuple[IO[bytes], Path, bool]:
    """Open the file a response body is downloaded to.

    Args:
        config: The client configuration.
        destination: The requested destination, or ``None`` for a
            temporary file in ``config.download_dir``.

    Returns:
        A tuple with the open binary file, its path, and whether the
            file is a temporary file owned by the client.
    """
    if destination is not None:
        path = Path(destination)
        return path.open("wb"), path, False
    file = tempfile.NamedTemporaryFile(  # noqa: SIM115
        mode="wb",
        prefix="aresponse-",
        dir=config.download_dir,
        delete=False,
    )
    return file, Path(file.name), True


def discard_download_file(path: Path, owned: bool) -> None:
    """Remove a downloaded file that failed validation.

    Only temporary files created by the client are removed.

    Args:
        path: The path of the downloaded file.
        owned: Whether the file is a temporary file owned by the client.
    """
    if owned:
        logger.debug(f"Removing temporary download file {path}")
        path.unlink(missing_ok=True)
