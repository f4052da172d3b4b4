"""Local audit mirror of submitted interactions."""

from __future__ import annotations

import logging

from core.blobs import dump_list, load_list
from core.models import InteractionRecord
from core.ports import PersistencePort

LOGGER = logging.getLogger(__name__)

AUDIT_KEY = "match_interactions"


class InteractionAuditLog:
    """Append-only list of interactions the match API accepted.

    The remote service owns the real ledger; this mirror only answers
    "what did I decide" questions offline.
    """

    def __init__(self, storage: PersistencePort) -> None:
        self._storage = storage

    def append(self, record: InteractionRecord) -> None:
        entries = load_list(self._storage, AUDIT_KEY)
        entries.append(record.to_payload())
        dump_list(self._storage, AUDIT_KEY, entries)

    def history(self, initiator_id: str) -> list[InteractionRecord]:
        """Return the records made by initiator_id, oldest first."""

        return [record for record in self.all() if record.initiator_id == initiator_id]

    def all(self) -> list[InteractionRecord]:
        records: list[InteractionRecord] = []
        for entry in load_list(self._storage, AUDIT_KEY):
            try:
                records.append(InteractionRecord.from_payload(entry))
            except (KeyError, TypeError, ValueError):
                LOGGER.warning("Skipping malformed audit entry: %r", entry)
        return records
