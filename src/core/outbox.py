"""Durable retry queue for interactions that failed to submit.

Records land here only when the outbox is enabled. Each drain round tries
every pending record once; a record that keeps failing is dropped after
``max_attempts`` and the user is told once per round.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Optional

from core.audit import InteractionAuditLog
from core.blobs import dump_list, load_list
from core.config import OutboxConfig
from core.models import InteractionRecord, Toast, ToastSeverity
from core.ports import MatchApiPort, PersistencePort, ToastPort

LOGGER = logging.getLogger(__name__)

OUTBOX_KEY = "interaction_outbox"


class InteractionOutbox:
    """Pending interaction submissions persisted across restarts."""

    def __init__(
        self,
        storage: PersistencePort,
        config: OutboxConfig,
        toaster: ToastPort,
        audit_log: Optional[InteractionAuditLog] = None,
    ) -> None:
        self._storage = storage
        self._config = config
        self._toaster = toaster
        self._audit_log = audit_log
        self._drain_lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._entries())

    def _entries(self) -> list[dict]:
        """Return the persisted entries whose record can be parsed.

        Anything else is logged and left out, so the next write drops it.
        """

        entries = []
        for entry in load_list(self._storage, OUTBOX_KEY):
            try:
                InteractionRecord.from_payload(entry["record"])
                int(entry.get("attempts", 0))
            except (KeyError, TypeError, ValueError):
                LOGGER.warning("Skipping malformed outbox entry: %r", entry)
                continue
            entries.append(entry)
        return entries

    def enqueue(self, record: InteractionRecord) -> None:
        entries = self._entries()
        entries.append({"record": record.to_payload(), "attempts": 1})
        dump_list(self._storage, OUTBOX_KEY, entries)
        LOGGER.info("Queued interaction %s -> %s for retry", record.initiator_id, record.target_id)

    def pending(self) -> list[InteractionRecord]:
        return [InteractionRecord.from_payload(entry["record"]) for entry in self._entries()]

    async def drain(self, api: MatchApiPort) -> int:
        """Try every pending record once and return how many were delivered."""

        async with self._drain_lock:
            return await self._drain_once(api)

    async def _drain_once(self, api: MatchApiPort) -> int:
        entries = self._entries()
        if not entries:
            return 0

        delivered = 0
        dropped = 0
        kept: list[dict] = []
        for entry in entries:
            record = InteractionRecord.from_payload(entry["record"])
            try:
                await api.record_interaction(record)
            except Exception:
                attempts = int(entry.get("attempts", 0)) + 1
                if attempts >= self._config.max_attempts:
                    LOGGER.exception(
                        "Dropping interaction %s -> %s after %s attempts",
                        record.initiator_id,
                        record.target_id,
                        attempts,
                    )
                    dropped += 1
                else:
                    LOGGER.warning(
                        "Retry %s/%s failed for %s -> %s",
                        attempts,
                        self._config.max_attempts,
                        record.initiator_id,
                        record.target_id,
                    )
                    kept.append({"record": entry["record"], "attempts": attempts})
                continue

            delivered += 1
            if self._audit_log is not None:
                try:
                    self._audit_log.append(record)
                except Exception:
                    LOGGER.exception("Failed to mirror delivered interaction for %s", record.target_id)

        # Records enqueued while we were awaiting the API are appended after
        # the snapshot; keep them.
        kept.extend(self._entries()[len(entries):])
        dump_list(self._storage, OUTBOX_KEY, kept)

        if dropped:
            self._toaster.show(
                Toast(
                    title="Action failed",
                    message=f"{dropped} interaction(s) could not be delivered.",
                    severity=ToastSeverity.DESTRUCTIVE,
                )
            )
        if delivered:
            LOGGER.info("Outbox delivered %s interaction(s), %s pending", delivered, len(kept))
        return delivered

    def _next_delay(self, failed_rounds: int) -> float:
        delay = min(
            self._config.base_delay * (self._config.backoff_factor ** failed_rounds),
            self._config.max_delay,
        )
        return delay * (0.5 + random.random() / 2)

    async def run(self, api: MatchApiPort, stop_event: asyncio.Event) -> None:
        """Drain in the background until stop_event is set.

        The wait between rounds grows exponentially while deliveries keep
        failing and resets after any successful delivery.
        """

        failed_rounds = 0
        while not stop_event.is_set():
            had_pending = len(self) > 0
            delivered = await self.drain(api)
            if delivered or not had_pending:
                failed_rounds = 0
            else:
                failed_rounds += 1
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self._next_delay(failed_rounds))
            except asyncio.TimeoutError:
                continue
