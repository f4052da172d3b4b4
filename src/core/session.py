"""Matching session: the decision flow over one candidate batch.

A decision runs in a strict order:
1) Refuse if a transition is already in flight or nothing is shown
2) Start recording the interaction in the background
3) Wait the transition delay
4) Advance the queue, whatever the recording outcome

Queue advancement is never gated on the match API, so a slow or failing
submission cannot stall the user.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Union

from core.config import MatchingConfig
from core.interactions import InteractionRecorder
from core.match_queue import MatchQueue
from core.models import CandidateProfile, InteractionType, RecordResult, Toast, ToastSeverity
from core.ports import MatchApiPort, ToastPort

LOGGER = logging.getLogger(__name__)


class MatchingSession:
    """Orchestrates candidate loading, decisions and queue advancement."""

    def __init__(
        self,
        api: MatchApiPort,
        recorder: InteractionRecorder,
        toaster: ToastPort,
        config: MatchingConfig,
    ) -> None:
        self._api = api
        self._recorder = recorder
        self._toaster = toaster
        self._config = config
        self._company_id: Optional[str] = None
        self._queue = MatchQueue([], on_exhausted=self._on_exhausted)
        self._transitioning = False
        self._saved: list[CandidateProfile] = []
        self._pending: set[asyncio.Task] = set()
        self._listeners: list[Callable[[], None]] = []

    @property
    def queue(self) -> MatchQueue:
        return self._queue

    @property
    def company_id(self) -> Optional[str]:
        return self._company_id

    @property
    def transitioning(self) -> bool:
        return self._transitioning

    @property
    def saved(self) -> list[CandidateProfile]:
        return list(self._saved)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def current_item(self) -> Optional[CandidateProfile]:
        return self._queue.current_item()

    async def start(self, company_id: Optional[str]) -> int:
        """Load a fresh candidate batch for company_id; returns its size."""

        self._company_id = company_id
        self._saved = []
        self._queue = MatchQueue([], on_exhausted=self._on_exhausted)

        if not company_id:
            self._toaster.show(
                Toast(
                    title="Missing company",
                    message="No company id is configured, candidates cannot be loaded.",
                    severity=ToastSeverity.DESTRUCTIVE,
                )
            )
            self._changed()
            return 0

        try:
            candidates = await self._api.fetch_candidates(company_id)
        except Exception:
            LOGGER.exception("Failed to fetch candidates for %s", company_id)
            self._toaster.show(
                Toast(
                    title="Error",
                    message="Could not load candidate matches.",
                    severity=ToastSeverity.DESTRUCTIVE,
                )
            )
            self._changed()
            return 0

        self._queue = MatchQueue(candidates, on_exhausted=self._on_exhausted)
        self._toaster.show(Toast(title="Success", message="Candidate matches loaded."))
        LOGGER.info("Loaded %s candidates for %s", len(self._queue), company_id)
        self._changed()
        return len(self._queue)

    async def decide(self, interaction_type: Union[InteractionType, str]) -> bool:
        """Apply one decision to the current candidate.

        Returns False, with no side effects, while a previous decision is
        still transitioning or when there is no candidate to decide on.
        """

        if self._transitioning:
            return False
        candidate = self._queue.current_item()
        if candidate is None or self._company_id is None:
            return False

        interaction_type = InteractionType(interaction_type)
        self._transitioning = True
        self._changed()
        try:
            self._submit(candidate, interaction_type)
            if interaction_type is InteractionType.SAVE:
                self._saved.append(candidate)
            await asyncio.sleep(self._config.transition_delay)
            self._queue.advance()
        finally:
            self._transitioning = False
            self._changed()
        return True

    def _submit(self, candidate: CandidateProfile, interaction_type: InteractionType) -> None:
        task = asyncio.get_running_loop().create_task(
            self._recorder.record(
                self._company_id,
                candidate.id,
                interaction_type,
                display_name=candidate.name,
            )
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> list[RecordResult]:
        """Wait for every in-flight submission to settle."""

        if not self._pending:
            return []
        return list(await asyncio.gather(*self._pending))

    def _on_exhausted(self) -> None:
        self._toaster.show(Toast(title="All done", message="All candidates have been processed."))

    def add_listener(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Call listener whenever loading, transitioning or the cursor changes."""

        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def _changed(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                LOGGER.exception("Session listener failed")
