from __future__ import annotations

from pathlib import Path

import pytest

from adapters.env_config import credentials_from_values, load_credentials, load_env_file
from core.errors import ConfigUnavailable
from core.models import Credentials


def _write(tmp_path: Path, content: str) -> str:
    path = tmp_path / "telegram-mail.env"
    path.write_text(content, encoding="utf-8")
    return str(path)


def test_load_credentials_reads_both_keys(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "# Filled during post-install or manually by the admin.\n"
        "TG_TOKEN=123456789:ABCdef\n"
        'TG_CHAT="-1001234567890"\n',
    )
    assert load_credentials(path) == Credentials(token="123456789:ABCdef", chat_id="-1001234567890")


def test_installer_default_file_is_incomplete(tmp_path: Path) -> None:
    path = _write(tmp_path, "# Filled during post-install or manually by the admin.\nTG_TOKEN=\nTG_CHAT=\n")
    with pytest.raises(ConfigUnavailable, match="TG_TOKEN, TG_CHAT"):
        load_credentials(path)


def test_missing_chat_id(tmp_path: Path) -> None:
    path = _write(tmp_path, "TG_TOKEN=123:ABC\n")
    with pytest.raises(ConfigUnavailable, match="TG_CHAT"):
        load_credentials(path)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigUnavailable, match="not found"):
        load_credentials(str(tmp_path / "absent.env"))


def test_load_env_file_exposes_optional_keys(tmp_path: Path) -> None:
    path = _write(tmp_path, "TG_TOKEN=t\nTG_CHAT=c\nLOG_LEVEL=debug\n")
    values = load_env_file(path)
    assert values["LOG_LEVEL"] == "debug"


def test_credentials_from_values_strips_whitespace() -> None:
    creds = credentials_from_values({"TG_TOKEN": " t ", "TG_CHAT": " 42 "})
    assert creds == Credentials(token="t", chat_id="42")
