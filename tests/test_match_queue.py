from __future__ import annotations

import pytest

from core.match_queue import MatchQueue
from core.models import CandidateProfile


def _candidate(candidate_id: str) -> CandidateProfile:
    return CandidateProfile(
        id=candidate_id,
        name=f"Candidate {candidate_id}",
        email=f"{candidate_id}@example.com",
        location="Taipei",
        education="CS",
        experience="1 year",
    )


@pytest.mark.parametrize("size", [1, 2, 3, 7])
def test_advance_wraps_after_full_pass(size: int) -> None:
    queue = MatchQueue([_candidate(str(i)) for i in range(size)])
    start = queue.current_item()

    for _ in range(size):
        queue.advance()

    assert queue.cursor == 0
    assert queue.current_item() == start


def test_wrap_also_holds_from_a_middle_cursor() -> None:
    queue = MatchQueue([_candidate(c) for c in "ABCD"])
    queue.advance()
    start_cursor = queue.cursor

    for _ in range(len(queue)):
        queue.advance()

    assert queue.cursor == start_cursor


def test_empty_queue_advance_is_noop() -> None:
    signals: list[str] = []
    queue = MatchQueue([], on_exhausted=lambda: signals.append("done"))

    assert queue.current_item() is None
    assert queue.advance() is False
    assert queue.advance() is False
    assert queue.current_item() is None
    assert queue.cursor == 0
    assert queue.remaining() == 0
    assert signals == []


def test_exhausted_signal_fires_before_wrap() -> None:
    seen_cursors: list[int] = []

    def _on_exhausted() -> None:
        seen_cursors.append(queue.cursor)

    queue = MatchQueue([_candidate("A"), _candidate("B")], on_exhausted=_on_exhausted)

    assert queue.advance() is False
    assert seen_cursors == []
    assert not queue.exhausted

    assert queue.advance() is True
    assert seen_cursors == [1]
    assert queue.exhausted
    assert queue.cursor == 0

    queue.advance()
    assert not queue.exhausted


def test_remaining_counts_candidates_after_current() -> None:
    queue = MatchQueue([_candidate(c) for c in "ABC"])
    assert queue.remaining() == 2
    queue.advance()
    assert queue.remaining() == 1
    queue.advance()
    assert queue.remaining() == 0


def test_sequence_is_a_snapshot() -> None:
    source = [_candidate("A"), _candidate("B")]
    queue = MatchQueue(source)
    source.append(_candidate("C"))

    assert len(queue) == 2
    assert [c.id for c in queue.candidates] == ["A", "B"]
    assert queue.cursor == 0
    assert queue.exhausted is False
