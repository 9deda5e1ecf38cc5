from __future__ import annotations

import socket

import pytest

from adapters import host_identity
from adapters.host_identity import resolve_host


def test_prefers_fqdn(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(socket, "getfqdn", lambda: "box.example.com")
    monkeypatch.setattr(socket, "gethostname", lambda: "box")
    assert resolve_host() == "box.example.com"


def test_falls_back_to_short_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(socket, "getfqdn", lambda: "localhost")
    monkeypatch.setattr(socket, "gethostname", lambda: "box")
    assert resolve_host() == "box"


def test_never_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail() -> str:
        raise OSError("no resolver")

    monkeypatch.setattr(socket, "getfqdn", _fail)
    monkeypatch.setattr(socket, "gethostname", lambda: "")
    assert resolve_host() == host_identity.FALLBACK_HOST
