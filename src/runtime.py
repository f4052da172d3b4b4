"""Object graph for one matchdeck process.

Every shell (TUI or CLI command) builds exactly one runtime and injects its
parts; nothing in the core is looked up through globals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import settings
from adapters.sqlite_storage import SQLiteStorage
from client import build_match_api
from core.audit import InteractionAuditLog
from core.interactions import InteractionRecorder
from core.notifications import NotificationStore
from core.outbox import InteractionOutbox
from core.ports import MatchApiPort, ToastPort
from core.session import MatchingSession


@dataclass
class Runtime:
    storage: SQLiteStorage
    api: MatchApiPort
    store: NotificationStore
    audit_log: InteractionAuditLog
    outbox: Optional[InteractionOutbox]
    recorder: InteractionRecorder
    session: MatchingSession

    def close(self) -> None:
        self.store.close()


def build_runtime(toaster: ToastPort) -> Runtime:
    storage = SQLiteStorage(settings.DB_PATH)
    storage.init_db()

    api = build_match_api()
    audit_log = InteractionAuditLog(storage)
    outbox = None
    if settings.OUTBOX.enabled:
        outbox = InteractionOutbox(storage, settings.OUTBOX, toaster, audit_log=audit_log)

    recorder = InteractionRecorder(api, toaster, audit_log=audit_log, outbox=outbox)
    return Runtime(
        storage=storage,
        api=api,
        store=NotificationStore(storage, toaster),
        audit_log=audit_log,
        outbox=outbox,
        recorder=recorder,
        session=MatchingSession(api, recorder, toaster, settings.MATCHING),
    )
