r"""Outcome of a single response validation.

A validation either succeeds with no payload or fails with exactly one
``ValidationFailureReason``.
"""

from __future__ import annotations

__all__ = ["SUCCESS", "Failure", "Success", "ValidationResult"]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from aresponse.reasons import ValidationFailureReason


@dataclass(frozen=True)
class Success:
    """Successful validation outcome.

    Example:
        ```pycon
        >>> from aresponse.result import Success
        >>> bool(Success())
        True

        ```
    """

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Failed validation outcome.

    Args:
        reason: Why the response was not acceptable.

    Example:
        ```pycon
        >>> from aresponse.reasons import UnacceptableStatusCode
        >>> from aresponse.result import Failure
        >>> result = Failure(UnacceptableStatusCode(code=404))
        >>> bool(result)
        False
        >>> result.reason.code
        404

        ```
    """

    reason: ValidationFailureReason

    def __bool__(self) -> bool:
        return False


ValidationResult = Union[Success, Failure]

SUCCESS = Success()
