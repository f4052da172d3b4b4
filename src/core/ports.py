"""Ports (interfaces) used by the core.

Ports define the minimal contracts for persistence, the match API and user
feedback so that the core can be reused with different backends and shells.
"""

from __future__ import annotations

from typing import Optional, Protocol

from core.models import CandidateProfile, InteractionRecord, Toast


class PersistencePort(Protocol):
    """Synchronous key/value persistence of opaque serialized blobs.

    There are no transactional semantics: the last writer wins.
    """

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MatchApiPort(Protocol):
    """Operations the core needs from the remote match/interaction service."""

    async def fetch_candidates(self, company_id: str) -> list[CandidateProfile]:
        ...

    async def record_interaction(self, record: InteractionRecord) -> None:
        ...


class ToastPort(Protocol):
    """Ephemeral user feedback, no acknowledgment expected."""

    def show(self, toast: Toast) -> None:
        ...
