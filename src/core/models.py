"""Records passed between the extractor, the dispatcher and the Bot API client.

Nothing here outlives a single piped message.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class MailRecord:
    """Minimal summary of one piped mail message."""

    host: str
    sender: Optional[str]
    subject: Optional[str]
    body: str


@dataclass(frozen=True)
class Credentials:
    """Bot token and destination chat read from the credential file."""

    token: str
    chat_id: str

    @property
    def is_complete(self) -> bool:
        return bool(self.token.strip()) and bool(self.chat_id.strip())


class DispatchStatus(Enum):
    """Outcome visible to callers of the dispatcher."""

    SKIPPED = "skipped"
    ATTEMPTED = "attempted"
