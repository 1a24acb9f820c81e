r"""Reasons explaining why a response failed validation.

Each reason is an immutable value describing one failure kind. Reasons
are carried by ``Failure`` results and by ``ResponseValidationError``.
"""

from __future__ import annotations

__all__ = [
    "DataFileNil",
    "DataFileReadFailed",
    "MissingContentType",
    "UnacceptableContentType",
    "UnacceptableStatusCode",
    "ValidationFailureReason",
]

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class ValidationFailureReason:
    """Base class of all response validation failure reasons."""

    @property
    def message(self) -> str:
        """A human-readable description of the failure."""
        return "Response validation failed"


@dataclass(frozen=True)
class UnacceptableStatusCode(ValidationFailureReason):
    """The response status code is not in the acceptable set.

    Args:
        code: The status code of the response.
    """

    code: int

    @property
    def message(self) -> str:
        return f"Response status code was unacceptable: {self.code}"


@dataclass(frozen=True)
class MissingContentType(ValidationFailureReason):
    """The response has no usable content type and no acceptable entry
    is a wildcard.

    Args:
        acceptable_content_types: The acceptable content types, as
            given by the caller.
    """

    acceptable_content_types: tuple[str, ...]

    @property
    def message(self) -> str:
        return (
            "Response Content-Type was missing and acceptable content types "
            f"({', '.join(self.acceptable_content_types)}) do not match \"*/*\""
        )


@dataclass(frozen=True)
class UnacceptableContentType(ValidationFailureReason):
    """The response content type matches none of the acceptable
    entries.

    Args:
        acceptable_content_types: The acceptable content types, as
            given by the caller.
        response_content_type: The raw content type declared by the
            response.
    """

    acceptable_content_types: tuple[str, ...]
    response_content_type: str

    @property
    def message(self) -> str:
        return (
            f'Response Content-Type "{self.response_content_type}" does not match any '
            f"acceptable types: {', '.join(self.acceptable_content_types)}"
        )


@dataclass(frozen=True)
class DataFileNil(ValidationFailureReason):
    """The downloaded response body has no file location."""

    @property
    def message(self) -> str:
        return "Response could not be validated because the downloaded data file was missing"


@dataclass(frozen=True)
class DataFileReadFailed(ValidationFailureReason):
    """The downloaded response body file could not be read.

    Args:
        path: The location of the file that could not be read.
    """

    path: Path

    @property
    def message(self) -> str:
        return f"Response could not be validated because the data file at {self.path} was unreadable"
