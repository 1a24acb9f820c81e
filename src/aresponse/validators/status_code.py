r"""Status code validation."""

from __future__ import annotations

__all__ = ["validate_status_code"]

import logging
from collections.abc import Container
from typing import TYPE_CHECKING

from aresponse.reasons import UnacceptableStatusCode
from aresponse.result import SUCCESS, Failure

if TYPE_CHECKING:
    from collections.abc import Iterable

    from aresponse.result import ValidationResult

logger: logging.Logger = logging.getLogger(__name__)


def validate_status_code(
    status_code: int, acceptable_status_codes: Iterable[int]
) -> ValidationResult:
    """Check a response status code against the acceptable ones.

    Args:
        status_code: The status code of the response.
        acceptable_status_codes: The acceptable status codes. Any
            iterable of integers is accepted, e.g. ``range(200, 300)``
            or ``{200, 304}``.

    Returns:
        ``Success`` if ``status_code`` is acceptable, otherwise a
            ``Failure`` with an ``UnacceptableStatusCode`` reason.

    Example:
        ```pycon
        >>> from aresponse.validators import validate_status_code
        >>> validate_status_code(204, range(200, 300))
        Success()
        >>> validate_status_code(404, range(200, 300))
        Failure(reason=UnacceptableStatusCode(code=404))

        ```
    """
    if not isinstance(acceptable_status_codes, Container):
        acceptable_status_codes = tuple(acceptable_status_codes)
    if status_code in acceptable_status_codes:
        return SUCCESS
    logger.debug(f"Status code {status_code} is not acceptable")
    return Failure(UnacceptableStatusCode(code=status_code))
