"""Readable formatting for contact phone numbers."""

from __future__ import annotations

import re

_SEPARATORS_RE = re.compile(r"[\s\-\(\)]")


def _group(digits: str) -> str:
    return f"{digits[0:2]} {digits[2:4]} {digits[4:7]} {digits[7:]}"


def format_phone_number(phone: str) -> str:
    """Format a phone number into space-separated groups.

    Examples:
    - 9398263414 -> 93 98 263 414
    - +919398263414 -> +91 93 98 263 414
    - 919398263414 -> 91 93 98 263 414

    Anything that doesn't match a known shape is returned unchanged.
    """
    if not phone:
        return phone

    cleaned = _SEPARATORS_RE.sub("", phone)

    if cleaned.startswith("+91"):
        local = cleaned[3:]
        if len(local) == 10:
            return f"+91 {_group(local)}"
        return f"+91 {local}"

    if cleaned.startswith("91") and len(cleaned) == 12:
        return f"91 {_group(cleaned[2:])}"

    if len(cleaned) == 10 and cleaned.isdigit():
        return _group(cleaned)

    return phone
