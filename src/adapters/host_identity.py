"""Host identity lookup, equivalent to ``hostname -f || hostname``."""

from __future__ import annotations

import socket

FALLBACK_HOST = "localhost"


def resolve_host() -> str:
    """Return the long-form host name, falling back to the short form."""

    try:
        fqdn = socket.getfqdn()
    except OSError:
        fqdn = ""
    if fqdn and fqdn != FALLBACK_HOST:
        return fqdn

    try:
        short = socket.gethostname()
    except OSError:
        short = ""
    return short or fqdn or FALLBACK_HOST
