"""Notification text formatting.

Keeping formatting here prevents drift between the dispatcher and the
``preview`` command, so what is printed is exactly what would be sent.
"""

from __future__ import annotations

from core.config import DEFAULT_EMOJI
from core.models import MailRecord

UNKNOWN_SENDER = "unknown"
NO_SUBJECT = "(no subject)"
DIVIDER = "----------------"


def format_notification(record: MailRecord, emoji: str = DEFAULT_EMOJI) -> str:
    """Create the plain-text notification for ``record``."""

    lines = [
        f"{emoji} {record.host}",
        f"From: {record.sender or UNKNOWN_SENDER}",
        f"Subject: {record.subject or NO_SUBJECT}",
        DIVIDER,
        record.body,
    ]
    return "\n".join(lines)


def truncate_payload(text: str, max_chars: int) -> str:
    """Clip ``text`` from the tail so it fits within ``max_chars``."""

    if max_chars < 0:
        raise ValueError(f"max_chars must be non-negative, got {max_chars}")
    return text[:max_chars]
