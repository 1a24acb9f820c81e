r"""Status code and content type validators.

The validators are pure functions returning a ``ValidationResult``.
They never raise for an unacceptable response.
"""

from __future__ import annotations

__all__ = [
    "content_type_header",
    "validate_content_type",
    "validate_content_type_with_body",
    "validate_status_code",
]

from aresponse.validators.content_type import (
    content_type_header,
    validate_content_type,
    validate_content_type_with_body,
)
from aresponse.validators.status_code import validate_status_code
