"""Interaction recording (core domain).

Recording is fire-and-forget from the caller's point of view: ``record``
never raises, and a failed submission never rolls back anything the caller
already did. Failures become toasts (or outbox entries when enabled).
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Union

from core.audit import InteractionAuditLog
from core.models import InteractionRecord, InteractionType, RecordResult, Toast, ToastSeverity
from core.outbox import InteractionOutbox
from core.ports import MatchApiPort, ToastPort

LOGGER = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _success_toast(interaction_type: InteractionType, display_name: Optional[str]) -> Toast:
    subject = display_name or "The candidate"
    if interaction_type is InteractionType.SAVE:
        return Toast(title="Candidate saved", message=f"{subject} has been saved.")
    if interaction_type is InteractionType.REJECT:
        return Toast(title="Candidate skipped", message=f"{subject} has been skipped.")
    return Toast(title="Interaction recorded", message=f"{interaction_type.value} recorded for {subject}.")


FAILURE_TOAST = Toast(
    title="Action failed",
    message="Could not record the action. Please try again later.",
    severity=ToastSeverity.DESTRUCTIVE,
)


class InteractionRecorder:
    """Builds interaction records and hands them to the match API."""

    def __init__(
        self,
        api: MatchApiPort,
        toaster: ToastPort,
        audit_log: Optional[InteractionAuditLog] = None,
        outbox: Optional[InteractionOutbox] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._api = api
        self._toaster = toaster
        self._audit_log = audit_log
        self._outbox = outbox
        self._clock = clock

    async def record(
        self,
        initiator_id: str,
        target_id: str,
        interaction_type: Union[InteractionType, str],
        display_name: Optional[str] = None,
    ) -> RecordResult:
        """Submit one decision and report how it went.

        There is no de-duplication here: two calls for the same target produce
        two records. Callers guard against double decisions.
        """

        record = InteractionRecord(
            initiator_id=initiator_id,
            target_id=target_id,
            type=InteractionType(interaction_type),
            timestamp=self._clock(),
        )

        try:
            await self._api.record_interaction(record)
        except Exception as exc:
            LOGGER.exception("Failed to record %s for %s", record.type.value, target_id)
            if self._outbox is not None:
                self._outbox.enqueue(record)
                return RecordResult(ok=False, record=record, error=str(exc), queued=True)
            self._toaster.show(FAILURE_TOAST)
            return RecordResult(ok=False, record=record, error=str(exc))

        if self._audit_log is not None:
            try:
                self._audit_log.append(record)
            except Exception:
                # The API already accepted the record; only the local mirror is behind.
                LOGGER.exception("Failed to mirror %s for %s", record.type.value, target_id)
        self._toaster.show(_success_toast(record.type, display_name))
        LOGGER.info("Recorded %s: %s -> %s", record.type.value, initiator_id, target_id)
        return RecordResult(ok=True, record=record)
