"""Process-wide defaults for the mail pipe, read from the environment.

Credentials live in the installer-managed env file; everything here is a
process-level default that can be overridden through environment variables
without touching Python.
"""

import os

from dotenv import load_dotenv

from core.config import DEFAULT_API_BASE, DEFAULT_TIMEOUT_SECONDS


def _load_development_env() -> bool:
    """Load the ``.env`` named by TELEGRAM_MAIL_DOTENV, if any.

    The pipe runs as root from the MTA's working directory, so no ``.env`` is
    searched for implicitly.
    """

    path = os.getenv("TELEGRAM_MAIL_DOTENV")
    if not path:
        return False
    return load_dotenv(path)


_load_development_env()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


# Credential file written by the package's post-install step.
CONFIG_PATH = os.getenv("TELEGRAM_MAIL_CONFIG", "/etc/telegram-mail/telegram-mail.env")

# Bot API base URL; only changed for self-hosted Bot API servers or tests.
API_BASE = os.getenv("TELEGRAM_MAIL_API_BASE", DEFAULT_API_BASE)

# Hard wall-clock limit for the single delivery attempt.
TIMEOUT_SECONDS = _env_float("TELEGRAM_MAIL_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)

# Logging (optional). Unset values fall back to LOG_LEVEL / LOG_FILE in the
# credential file, then to warnings on stderr only.
LOG_LEVEL = os.getenv("TELEGRAM_MAIL_LOG_LEVEL")
LOG_FILE = os.getenv("TELEGRAM_MAIL_LOG_FILE")
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 5
