"""Delivery limits and defaults for the mail pipe.

``settings`` and the CLI fill ``DeliveryConfig``; the core only reads it.
"""

from __future__ import annotations

from dataclasses import dataclass

# Telegram rejects texts above 4096 characters; keep a safe margin.
MAX_PAYLOAD_CHARS = 3900
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_API_BASE = "https://api.telegram.org"
DEFAULT_EMOJI = "\U0001F4E8"


@dataclass(frozen=True)
class DeliveryConfig:
    """Delivery settings consumed by the dispatcher and Bot API client."""

    api_base: str = DEFAULT_API_BASE
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    max_chars: int = MAX_PAYLOAD_CHARS
    emoji: str = DEFAULT_EMOJI
    disable_web_page_preview: bool = True
