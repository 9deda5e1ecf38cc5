"""Telegram Bot API delivery adapter.

Posts the notification to ``sendMessage`` as a form-encoded body, the same
request ``curl --data-urlencode`` would produce, under a hard deadline.
"""

from __future__ import annotations

import json
import threading
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Callable

from core.config import DeliveryConfig
from core.errors import TimeoutExceeded, TransportFailure
from core.models import Credentials


def _run_with_deadline(func: Callable[[], Any], timeout: float) -> Any:
    """Run ``func`` on a daemon thread and give up after ``timeout`` seconds.

    Socket timeouts bound each read, not the whole exchange; the worker is
    abandoned on expiry so a slow trickle cannot hold the mail pipeline.
    """

    outcome: dict[str, Any] = {}

    def _target() -> None:
        try:
            outcome["value"] = func()
        except BaseException as exc:  # re-raised on the calling thread
            outcome["error"] = exc

    worker = threading.Thread(target=_target, name="bot-api-send", daemon=True)
    worker.start()
    worker.join(timeout)
    if worker.is_alive():
        raise TimeoutExceeded(f"Bot API call exceeded {timeout:g}s")
    if "error" in outcome:
        raise outcome["error"]
    return outcome.get("value")


class TelegramBotClient:
    """BotApiPort implementation backed by ``urllib.request``."""

    def __init__(self, config: DeliveryConfig) -> None:
        self._api_base = config.api_base.rstrip("/")
        self._timeout = config.timeout
        self._disable_preview = config.disable_web_page_preview

    def endpoint(self, token: str) -> str:
        # The Bot API endpoint is deterministic and derived from the token.
        return f"{self._api_base}/bot{token}/sendMessage"

    def encode_form(self, chat_id: str, text: str) -> bytes:
        """Return the urlencoded ``sendMessage`` body."""

        fields = {
            "chat_id": chat_id,
            "text": text,
            "disable_web_page_preview": "true" if self._disable_preview else "false",
        }
        return urllib.parse.urlencode(fields).encode("ascii")

    def send_message(self, credentials: Credentials, text: str) -> None:
        """Deliver ``text`` to the configured chat or raise a TransportFailure."""

        request = urllib.request.Request(
            self.endpoint(credentials.token),
            data=self.encode_form(credentials.chat_id, text),
            method="POST",
        )
        request.add_header("Content-Type", "application/x-www-form-urlencoded")
        _run_with_deadline(lambda: self._post(request), self._timeout)

    def _post(self, request: urllib.request.Request) -> None:
        # Error messages never include the request URL, since it embeds the token.
        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                body = response.read().decode("utf-8", errors="replace")
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", errors="replace")
            raise TransportFailure(f"Bot API error {e.code}: {body}") from e
        except urllib.error.URLError as e:
            if isinstance(e.reason, TimeoutError):
                raise TimeoutExceeded(f"Bot API call timed out: {e.reason}") from e
            raise TransportFailure(f"Bot API unreachable: {e.reason}") from e
        except TimeoutError as e:
            raise TimeoutExceeded(f"Bot API call timed out: {e}") from e
        except OSError as e:
            raise TransportFailure(f"Bot API connection failed: {e}") from e

        _check_reply(body)


def _check_reply(body: str) -> None:
    """Raise if a 2xx reply still reports ``"ok": false``."""

    try:
        reply = json.loads(body)
    except ValueError:
        return
    if isinstance(reply, dict) and reply.get("ok") is False:
        description = reply.get("description", "no description")
        raise TransportFailure(f"Bot API rejected message: {description}")
