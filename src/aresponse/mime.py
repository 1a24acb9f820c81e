r"""Media type parsing and wildcard-aware matching.

This module provides a small value type for the ``type/subtype`` part of
a media type (e.g. ``application/json``). Parameters such as
``charset`` are stripped and never interpreted.
"""

from __future__ import annotations

__all__ = ["MimeType"]

from dataclasses import dataclass

WILDCARD = "*"


@dataclass(frozen=True)
class MimeType:
    """Immutable ``type/subtype`` pair.

    Args:
        type: The top-level type (e.g. ``"text"`` or ``"*"``).
        subtype: The subtype (e.g. ``"html"`` or ``"*"``).

    Example:
        ```pycon
        >>> from aresponse.mime import MimeType
        >>> mime = MimeType.parse("text/html; charset=utf-8")
        >>> mime
        MimeType(type='text', subtype='html')
        >>> MimeType.parse("text/*").matches(mime)
        True
        >>> MimeType.parse("image/*").matches(mime)
        False

        ```
    """

    type: str
    subtype: str

    @classmethod
    def parse(cls, raw: str) -> MimeType | None:
        """Parse a media type string.

        Surrounding whitespace is stripped, everything from the first
        ``;`` on is dropped, and the remainder is split on ``/``. The
        first component is the type and the last is the subtype, so a
        string without ``/`` yields a type equal to its subtype.

        Args:
            raw: The raw media type, typically a ``Content-Type`` or
                ``Accept`` header entry.

        Returns:
            The parsed media type, or ``None`` if nothing is left to
                parse.

        Example:
            ```pycon
            >>> from aresponse.mime import MimeType
            >>> MimeType.parse(" application/json ")
            MimeType(type='application', subtype='json')
            >>> MimeType.parse("json")
            MimeType(type='json', subtype='json')
            >>> MimeType.parse("") is None
            True

            ```
        """
        stripped = raw.strip()
        stripped = stripped.split(";", 1)[0].strip()
        if not stripped:
            return None
        components = stripped.split("/")
        return cls(type=components[0], subtype=components[-1])

    @property
    def is_wildcard(self) -> bool:
        """``True`` if both the type and the subtype are ``*``."""
        return self.type == WILDCARD and self.subtype == WILDCARD

    def matches(self, other: MimeType) -> bool:
        """Indicate whether ``other`` is covered by this media type.

        A ``*`` on this side matches any value in the same position of
        ``other``. Wildcards on the ``other`` side are compared
        literally.

        Args:
            other: The media type to test, usually the one declared by
                a response.

        Returns:
            ``True`` if this media type accepts ``other``.
        """
        if self.type == other.type and self.subtype == other.subtype:
            return True
        if self.type == other.type and self.subtype == WILDCARD:
            return True
        if self.type == WILDCARD and self.subtype == other.subtype:
            return True
        return self.is_wildcard

    def __str__(self) -> str:
        return f"{self.type}/{self.subtype}"
