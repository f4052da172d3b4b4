"""Application entry point for matchdeck."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from dotenv import load_dotenv

import settings
from adapters.notification_formatting import format_notification_line, format_unread_badge
from adapters.toasters import ConsoleToaster
from core.models import NotificationType
from runtime import build_runtime

NAME = "MATCHDECK"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: dict) -> list[str]:
    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", False):
        return []
    values = []
    for name in redact_cfg.get("patterns", []):
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted(set(values), key=len, reverse=True)


def _configure_logging(allow_console: bool = True) -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    load_dotenv()
    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = _collect_redaction_values(config)
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    # The TUI owns the terminal, so console logging is only for CLI commands.
    if allow_console and config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/matchdeck.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _run() -> None:
    _print_banner()
    _configure_logging(allow_console=False)
    logging.getLogger(__name__).info("Starting matchdeck")

    from frontend.app import MatchDeckApp

    MatchDeckApp(
        build_runtime,
        company_id=settings.COMPANY_ID,
        poll_interval=settings.POLLER.interval,
    ).run()


def _inbox(mark_all_read: bool, clear: bool) -> None:
    runtime = build_runtime(ConsoleToaster())
    store = runtime.store
    if clear:
        store.clear_all()
    elif mark_all_read:
        store.mark_all_as_read()

    notifications = store.list_notifications()
    if not notifications:
        print("No notifications.")
    for notification in notifications:
        print(format_notification_line(notification))
    print(format_unread_badge(store.unread_count()))
    runtime.close()


def _notify(notification_type: str, title: str, message: str) -> None:
    runtime = build_runtime(ConsoleToaster())
    notification_id = runtime.store.add(notification_type, title, message)
    print(f"id: {notification_id}")
    runtime.close()


def _read(notification_id: str) -> None:
    runtime = build_runtime(ConsoleToaster())
    if runtime.store.get(notification_id) is None:
        print(f"No notification with id {notification_id}")
        runtime.close()
        return
    runtime.store.mark_as_read(notification_id)
    print(format_unread_badge(runtime.store.unread_count()))
    runtime.close()


def _delete(notification_id: str) -> None:
    runtime = build_runtime(ConsoleToaster())
    if runtime.store.get(notification_id) is None:
        print(f"No notification with id {notification_id}")
        runtime.close()
        return
    runtime.store.delete(notification_id)
    print(format_unread_badge(runtime.store.unread_count()))
    runtime.close()


def _history(initiator_id: Optional[str]) -> None:
    runtime = build_runtime(ConsoleToaster())
    initiator_id = initiator_id or settings.COMPANY_ID
    if not initiator_id:
        raise RuntimeError("company_id is required (config.json or --initiator)")

    records = runtime.audit_log.history(initiator_id)
    if not records:
        print(f"No interactions recorded for {initiator_id}.")
    for index, record in enumerate(records, start=1):
        timestamp = record.timestamp.astimezone().strftime("%Y-%m-%d %H:%M:%S")
        print(f"{index}. {timestamp} | {record.type.value} | {record.target_id}")
    runtime.close()


def _outbox() -> None:
    runtime = build_runtime(ConsoleToaster())
    outbox = runtime.outbox
    if outbox is None:
        print("Outbox is disabled (outbox.enabled=false in config.json).")
        runtime.close()
        return

    pending = outbox.pending()
    print(f"{len(pending)} pending interaction(s)")
    for record in pending:
        print(f"- {record.type.value} {record.initiator_id} -> {record.target_id}")
    if pending:
        delivered = asyncio.run(outbox.drain(runtime.api))
        print(f"Delivered {delivered}, {len(outbox)} still pending")
    runtime.close()


def _reset() -> None:
    runtime = build_runtime(ConsoleToaster())
    for key in sorted(runtime.storage.keys()):
        runtime.storage.delete(key)
        print(f"Deleted {key}")
    runtime.close()


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="matchdeck")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Start the matching TUI")

    inbox_parser = subparsers.add_parser("inbox", help="List notifications")
    inbox_parser.add_argument("--mark-all-read", action="store_true")
    inbox_parser.add_argument("--clear", action="store_true")

    notify_parser = subparsers.add_parser("notify", help="Add a workflow event to the inbox")
    notify_parser.add_argument(
        "--type",
        dest="notification_type",
        choices=[t.value for t in NotificationType],
        default=NotificationType.SYSTEM.value,
    )
    notify_parser.add_argument("--title", required=True)
    notify_parser.add_argument("--message", required=True)

    read_parser = subparsers.add_parser("read", help="Mark one notification as read")
    read_parser.add_argument("notification_id")

    delete_parser = subparsers.add_parser("delete", help="Delete one notification")
    delete_parser.add_argument("notification_id")

    history_parser = subparsers.add_parser("history", help="Show locally mirrored interactions")
    history_parser.add_argument("--initiator", default=None)

    subparsers.add_parser("outbox", help="Show and retry pending interactions")
    subparsers.add_parser("reset", help="Delete all locally persisted data")

    args = parser.parse_args(argv)
    if args.command in {None, "run"}:
        _run()
        return

    _configure_logging()
    if args.command == "inbox":
        _inbox(args.mark_all_read, args.clear)
    elif args.command == "notify":
        _notify(args.notification_type, args.title, args.message)
    elif args.command == "read":
        _read(args.notification_id)
    elif args.command == "delete":
        _delete(args.notification_id)
    elif args.command == "history":
        _history(args.initiator)
    elif args.command == "outbox":
        _outbox()
    elif args.command == "reset":
        _reset()


if __name__ == "__main__":
    main()
