"""Raw mail to MailRecord extraction (core domain).

The scanner walks the message once, line by line, with two states:

- HEADERS: until the first empty line; ``From`` and ``Subject`` are captured
  on their first occurrence, matched case-insensitively.
- BODY: everything after that empty line, kept verbatim.

Header-looking lines inside the body are never treated as headers. No RFC
validation happens here; malformed input degrades to missing fields.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, TextIO

from core.models import MailRecord

_HEADER_FIELDS = {"from": "sender", "subject": "subject"}


class _State(Enum):
    HEADERS = "headers"
    BODY = "body"


def _strip_terminator(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n") or line.endswith("\r"):
        return line[:-1]
    return line


def _split_header(line: str) -> Optional[tuple[str, str]]:
    """Return (lowercased name, value) for a ``Name: value`` line."""

    name, sep, rest = line.partition(":")
    if not sep:
        return None
    # Exactly one separating space belongs to the header syntax.
    if rest.startswith(" "):
        rest = rest[1:]
    return name.lower(), rest


def parse_message(lines: Iterable[str], host: str) -> MailRecord:
    """Scan raw message lines into a MailRecord for ``host``."""

    state = _State.HEADERS
    found: dict[str, str] = {}
    body_lines: list[str] = []

    for raw_line in lines:
        if state is _State.BODY:
            body_lines.append(raw_line)
            continue

        line = _strip_terminator(raw_line)
        if line == "":
            state = _State.BODY
            continue

        header = _split_header(line)
        if header is None:
            continue
        name, value = header
        field = _HEADER_FIELDS.get(name)
        if field and field not in found:
            found[field] = value

    # The body is captured like shell command substitution: trailing
    # line breaks are dropped, interior blank lines are kept.
    body = "".join(body_lines).rstrip("\r\n")

    return MailRecord(
        host=host,
        sender=found.get("sender"),
        subject=found.get("subject"),
        body=body,
    )


def read_message(stream: TextIO, host: str) -> MailRecord:
    """Read ``stream`` to end-of-file and extract a MailRecord."""

    return parse_message(stream, host)
