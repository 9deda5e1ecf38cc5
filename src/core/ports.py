"""Delivery port for the dispatcher.

The dispatcher only needs ``send_message``; tests pass a recording fake and
production wires in the urllib Bot API client.
"""

from __future__ import annotations

from typing import Protocol

from core.models import Credentials


class BotApiPort(Protocol):
    """Delivery operation required by the dispatcher."""

    def send_message(self, credentials: Credentials, text: str) -> None:
        ...
