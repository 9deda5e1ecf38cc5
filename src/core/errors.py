"""Error taxonomy for the forwarding pipe.

None of these escape the dispatcher or the CLI; they exist so adapters can
report what went wrong and the logs can say so.
"""

from __future__ import annotations


class ForwardingError(Exception):
    """Base class for all forwarding failures."""


class ConfigUnavailable(ForwardingError):
    """Credential file missing, unreadable, or incomplete."""


class TransportFailure(ForwardingError):
    """Network error or unsuccessful Bot API response."""


class TimeoutExceeded(TransportFailure):
    """The Bot API call did not finish before its deadline."""
