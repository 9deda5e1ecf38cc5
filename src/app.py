"""Command-line entry point: one piped mail in, at most one notification out.

Invoked once per message by the mail system (``root: "|/usr/bin/telegram-mail"``).
Whatever happens, the process exits normally so the original mail is never
bounced because a notification could not be sent.
"""

from __future__ import annotations

import argparse
import io
import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import NoReturn, Optional, TextIO

import settings
from adapters.env_config import credentials_from_values, load_env_file
from adapters.host_identity import resolve_host
from adapters.telegram_bot_client import TelegramBotClient
from core.config import DeliveryConfig
from core.dispatcher import NotificationDispatcher
from core.errors import ConfigUnavailable
from core.extractor import parse_message, read_message
from core.models import Credentials, DispatchStatus

TEST_SUBJECT = "telegram-mail-pipe installed"


class _RedactingFormatter(logging.Formatter):
    """Masks the bot token wherever it shows up in a log line."""

    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = sorted({secret for secret in secrets if secret}, key=len, reverse=True)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _configure_logging(values: dict[str, Optional[str]]) -> None:
    level_name = str(settings.LOG_LEVEL or values.get("LOG_LEVEL") or "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = [values.get("TG_TOKEN") or ""]
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    # stdout is reserved for ``preview`` output; diagnostics go to stderr.
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [console_handler]

    path = settings.LOG_FILE or values.get("LOG_FILE")
    if path:
        try:
            directory = os.path.dirname(path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            file_handler = RotatingFileHandler(
                path,
                maxBytes=settings.LOG_MAX_BYTES,
                backupCount=settings.LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError as exc:
            print(f"telegram-mail: cannot open log file {path}: {exc}", file=sys.stderr)
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers)


def _load_config(path: str) -> tuple[dict[str, Optional[str]], Optional[Credentials], Optional[str]]:
    """Return (raw values, credentials or None, problem description or None)."""

    try:
        values = load_env_file(path)
    except ConfigUnavailable as exc:
        return {}, None, str(exc)
    try:
        return values, credentials_from_values(values), None
    except ConfigUnavailable as exc:
        return values, None, str(exc)


def _stdin_text() -> TextIO:
    # Mail is not guaranteed to be UTF-8; undecodable bytes become U+FFFD.
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        return sys.stdin
    return io.TextIOWrapper(buffer, encoding="utf-8", errors="replace", newline="")


def build_dispatcher(config: DeliveryConfig) -> NotificationDispatcher:
    return NotificationDispatcher(TelegramBotClient(config), config)


def forward(
    stream: TextIO,
    host: str,
    credentials: Optional[Credentials],
    dispatcher: NotificationDispatcher,
) -> DispatchStatus:
    """Read one message from ``stream`` and hand it to the dispatcher."""

    record = read_message(stream, host)
    return dispatcher.dispatch(record, credentials)


def build_test_message(host: str, now: Optional[datetime] = None) -> str:
    """Return the raw message sent by ``telegram-mail test``."""

    now = now or datetime.now().astimezone()
    return (
        f"Subject: {TEST_SUBJECT}\n"
        "\n"
        f"Host: {host}\n"
        f"Time: {now.isoformat(timespec='seconds')}\n"
    )


def _send(dispatcher: NotificationDispatcher, credentials: Optional[Credentials]) -> None:
    status = forward(_stdin_text(), resolve_host(), credentials, dispatcher)
    logging.getLogger(__name__).debug("Dispatch finished: %s", status.value)


def _test(dispatcher: NotificationDispatcher, credentials: Optional[Credentials]) -> None:
    host = resolve_host()
    record = parse_message(build_test_message(host).splitlines(keepends=True), host)
    status = dispatcher.dispatch(record, credentials)
    if status is DispatchStatus.SKIPPED:
        print("telegram-mail: credentials not configured, nothing sent", file=sys.stderr)


def _preview(dispatcher: NotificationDispatcher) -> None:
    record = read_message(_stdin_text(), resolve_host())
    print(dispatcher.build_payload(record))


class _ArgumentsRejected(Exception):
    """Raised instead of argparse's exit(2) on unusable arguments."""


class _PipeArgumentParser(argparse.ArgumentParser):
    # A non-zero exit would make the mail system bounce or defer the message.
    def error(self, message: str) -> NoReturn:
        raise _ArgumentsRejected(message)


def _build_parser() -> _PipeArgumentParser:
    parser = _PipeArgumentParser(prog="telegram-mail")
    parser.add_argument(
        "--config",
        default=settings.CONFIG_PATH,
        help=f"Credential file with TG_TOKEN and TG_CHAT (default: {settings.CONFIG_PATH})",
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("send", help="Forward the message on stdin (default)")
    subparsers.add_parser("test", help="Send a test notification")
    subparsers.add_parser("preview", help="Print the notification for stdin without sending")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = _build_parser()

    rejected: Optional[str] = None
    try:
        args, unknown = parser.parse_known_args(argv)
    except _ArgumentsRejected as exc:
        # Fall back to forwarding stdin with the default config.
        args = argparse.Namespace(config=settings.CONFIG_PATH, command=None)
        unknown = []
        rejected = str(exc)

    values, credentials, problem = _load_config(args.config)
    _configure_logging(values)
    logger = logging.getLogger(__name__)

    if rejected:
        logger.warning("Ignoring arguments (%s), forwarding stdin", rejected)
    if unknown:
        logger.warning("Ignoring unknown arguments: %s", " ".join(unknown))

    config = DeliveryConfig(api_base=settings.API_BASE, timeout=settings.TIMEOUT_SECONDS)
    dispatcher = build_dispatcher(config)

    try:
        if args.command == "preview":
            _preview(dispatcher)
            return
        if problem:
            logger.warning("%s", problem)
        if args.command == "test":
            _test(dispatcher, credentials)
            return
        _send(dispatcher, credentials)
    except Exception:
        logger.exception("telegram-mail failed")


if __name__ == "__main__":
    main()
