"""Small helpers for ids, tags, splitting and time formatting."""

from __future__ import annotations

import re
import secrets
from datetime import datetime

_TAG_RE = re.compile(r"[a-zA-Z0-9_-]+")
_SHORT_FORMAT = "%H:%M %d.%m.%Y"
_FULL_FORMAT = "%H:%M:%S %d.%m.%Y"


def generate_uuid() -> str:
    """Return a random identifier of the form ``at_`` plus eight hex digits."""
    return "at_" + "".join(secrets.choice("0123456789abcdef") for _ in range(8))


def is_valid_tag_name(tag: str) -> bool:
    """Tell whether a tag is 1-50 letters, digits, underscores or hyphens."""
    if not tag or len(tag) > 50:
        return False
    return _TAG_RE.fullmatch(tag) is not None


def split_string(text: str, delimiter: str) -> list[str]:
    """Split on a delimiter, dropping a single trailing empty field."""
    parts = text.split(delimiter)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def string_to_time_point(text: str) -> datetime:
    """Parse local time in the form ``HH:MM dd.mm.YYYY``."""
    try:
        return datetime.strptime(text.strip(), _SHORT_FORMAT)
    except ValueError as exc:
        raise ValueError("Failed to parse time string") from exc


def time_point_to_string(moment: datetime) -> str:
    """Format a time as ``HH:MM dd.mm.YYYY``."""
    return moment.strftime(_SHORT_FORMAT)


def full_time_point_to_string(moment: datetime) -> str:
    """Format a time as ``HH:MM:SS dd.mm.YYYY``."""
    return moment.strftime(_FULL_FORMAT)