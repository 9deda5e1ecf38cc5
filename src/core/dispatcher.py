"""Notification dispatch policy (core domain).

Forwarding must never make the invoking mail pipeline fail or bounce, so the
dispatcher reports only whether it tried: SKIPPED when credentials are not
usable, ATTEMPTED otherwise. Delivery errors are logged and dropped.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.config import DeliveryConfig
from core.errors import TimeoutExceeded, TransportFailure
from core.formatting import format_notification, truncate_payload
from core.models import Credentials, DispatchStatus, MailRecord
from core.ports import BotApiPort

LOGGER = logging.getLogger(__name__)


class NotificationDispatcher:
    """Formats a MailRecord and makes one delivery attempt."""

    def __init__(self, bot_api: BotApiPort, config: DeliveryConfig) -> None:
        self._bot_api = bot_api
        self._config = config

    def build_payload(self, record: MailRecord) -> str:
        """Return the notification text, clipped to the payload ceiling."""

        text = format_notification(record, emoji=self._config.emoji)
        return truncate_payload(text, self._config.max_chars)

    def dispatch(self, record: MailRecord, credentials: Optional[Credentials]) -> DispatchStatus:
        """Attempt delivery of ``record``; never raises."""

        if credentials is None or not credentials.is_complete:
            LOGGER.info("Credentials missing or incomplete, skipping delivery")
            return DispatchStatus.SKIPPED

        try:
            payload = self.build_payload(record)
            self._bot_api.send_message(credentials, payload)
        except TimeoutExceeded as exc:
            LOGGER.warning("Delivery timed out: %s", exc)
        except TransportFailure as exc:
            LOGGER.warning("Delivery failed: %s", exc)
        except Exception:
            LOGGER.exception("Unexpected error during delivery")
        else:
            LOGGER.info("Notification sent for %s (%s chars)", record.host, len(payload))

        return DispatchStatus.ATTEMPTED
