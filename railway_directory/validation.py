"""Validation for search box input.

Queries are checked before any request is made. On failure
`QueryValidationError` is raised; its `message` is the first error found, in
the order required -> length -> allowed characters.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict

NAME_QUERY_MAX_LENGTH = 100
PHONE_QUERY_MAX_LENGTH = 20

_NAME_QUERY_RE = re.compile(r"^[a-zA-Z0-9\s\-'.,]+$")
_PHONE_QUERY_RE = re.compile(r"^[0-9+\-\s()]+$")


@dataclass
class QueryValidationError(Exception):
    """Exception raised for invalid search input.

    Attributes:
        field_errors: mapping of field name -> human-readable error message.
        message: the first error, shown to the user.
    """

    field_errors: Dict[str, str]
    message: str = "Validation failed"

    def __str__(self) -> str:  # pragma: no cover
        return self.message


def _check(value: str, field: str, *, max_length: int, pattern: "re.Pattern[str]", messages: Dict[str, str]) -> str:
    if not value:
        error = messages["required"]
    elif len(value) > max_length:
        error = messages["too_long"]
    elif not pattern.match(value):
        error = messages["invalid"]
    else:
        return value
    raise QueryValidationError(field_errors={field: error}, message=error)


def validate_name_query(query: str) -> str:
    """Return the trimmed name query or raise QueryValidationError."""
    return _check(
        (query or "").strip(),
        "query",
        max_length=NAME_QUERY_MAX_LENGTH,
        pattern=_NAME_QUERY_RE,
        messages={
            "required": "Search query is required",
            "too_long": "Search query must be less than 100 characters",
            "invalid": "Invalid characters in search query",
        },
    )


def validate_phone_query(phone: str) -> str:
    """Return the trimmed phone query or raise QueryValidationError."""
    return _check(
        (phone or "").strip(),
        "phone",
        max_length=PHONE_QUERY_MAX_LENGTH,
        pattern=_PHONE_QUERY_RE,
        messages={
            "required": "Phone number is required",
            "too_long": "Phone number must be less than 20 characters",
            "invalid": "Invalid phone number format",
        },
    )
