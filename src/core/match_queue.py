"""Cursor-based browsing over a fixed candidate batch (core domain)."""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from core.models import CandidateProfile


class MatchQueue:
    """Ordered, immutable candidate sequence with a wrap-around cursor.

    The queue is meant to be re-browsable: reaching the end emits the
    exhausted signal and wraps back to the first candidate instead of
    terminating.
    """

    def __init__(
        self,
        candidates: Iterable[CandidateProfile],
        on_exhausted: Optional[Callable[[], None]] = None,
    ) -> None:
        self._candidates = tuple(candidates)
        self._on_exhausted = on_exhausted
        self._cursor = 0
        self._exhausted = False

    def __len__(self) -> int:
        return len(self._candidates)

    @property
    def candidates(self) -> tuple[CandidateProfile, ...]:
        return self._candidates

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def exhausted(self) -> bool:
        """True right after a pass over the whole batch has completed."""

        return self._exhausted

    def current_item(self) -> Optional[CandidateProfile]:
        if not self._candidates:
            return None
        return self._candidates[self._cursor]

    def remaining(self) -> int:
        """Number of candidates after the current one in this pass."""

        if not self._candidates:
            return 0
        return len(self._candidates) - self._cursor - 1

    def advance(self) -> bool:
        """Move to the next candidate and return True if the pass wrapped."""

        if not self._candidates:
            return False

        if self._cursor == len(self._candidates) - 1:
            self._exhausted = True
            # Signal before the wrap so listeners still see the last cursor.
            if self._on_exhausted is not None:
                self._on_exhausted()
            self._cursor = 0
            return True

        self._cursor += 1
        self._exhausted = False
        return False
