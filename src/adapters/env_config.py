"""Credential file adapter.

The installer writes ``/etc/telegram-mail/telegram-mail.env`` as plain
``KEY=VALUE`` lines; python-dotenv parses it without sourcing it in a shell.
"""

from __future__ import annotations

import os
from typing import Optional

from dotenv import dotenv_values

from core.errors import ConfigUnavailable
from core.models import Credentials

TOKEN_KEY = "TG_TOKEN"
CHAT_KEY = "TG_CHAT"


def load_env_file(path: str) -> dict[str, Optional[str]]:
    """Return the raw key/value pairs from ``path``."""

    if not os.path.isfile(path):
        raise ConfigUnavailable(f"Config file not found: {path}")
    if not os.access(path, os.R_OK):
        raise ConfigUnavailable(f"Config not readable: {path}")
    try:
        return dict(dotenv_values(path, encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigUnavailable(f"Config not readable: {path} ({e})") from e


def credentials_from_values(values: dict[str, Optional[str]]) -> Credentials:
    """Build Credentials from parsed values, requiring both keys to be set."""

    token = (values.get(TOKEN_KEY) or "").strip()
    chat_id = (values.get(CHAT_KEY) or "").strip()
    missing = [key for key, value in ((TOKEN_KEY, token), (CHAT_KEY, chat_id)) if not value]
    if missing:
        raise ConfigUnavailable(f"Config is missing {', '.join(missing)}")
    return Credentials(token=token, chat_id=chat_id)


def load_credentials(path: str) -> Credentials:
    """Load and validate the credential file at ``path``."""

    return credentials_from_values(load_env_file(path))
