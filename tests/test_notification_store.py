from __future__ import annotations

import itertools
import json
import random
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from core.models import InboxSummary, NotificationType, Toast
from core.notifications import NOTIFICATIONS_KEY, NotificationStore


class MemoryStorage:
    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.writes = 0

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value
        self.writes += 1


class FakeToaster:
    def __init__(self) -> None:
        self.shown: list[Toast] = []

    def show(self, toast: Toast) -> None:
        self.shown.append(toast)


def _clock():
    base = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
    counter = itertools.count()
    return lambda: base + timedelta(minutes=next(counter))


def _store(storage: Optional[MemoryStorage] = None, toaster: Optional[FakeToaster] = None) -> NotificationStore:
    return NotificationStore(storage or MemoryStorage(), toaster or FakeToaster(), clock=_clock())


def _persisted(storage: MemoryStorage) -> list[dict]:
    return json.loads(storage.values[NOTIFICATIONS_KEY])


def test_add_then_delete_scenario() -> None:
    store = _store()

    notification_id = store.add("system", "T", "M")
    notifications = store.list_notifications()

    assert len(notifications) == 1
    assert notifications[0].id == notification_id
    assert notifications[0].read is False
    assert notifications[0].type is NotificationType.SYSTEM
    assert store.unread_count() == 1

    store.delete(notification_id)

    assert store.list_notifications() == []
    assert store.unread_count() == 0


def test_add_inserts_newest_first_and_toasts() -> None:
    toaster = FakeToaster()
    store = _store(toaster=toaster)

    first = store.add(NotificationType.APPLICATION, "Application submitted", "Backend role")
    second = store.add(NotificationType.INTERVIEW, "Interview scheduled", "Friday 10:00")

    assert [n.id for n in store.list_notifications()] == [second, first]
    assert [t.title for t in toaster.shown] == ["Application submitted", "Interview scheduled"]
    assert toaster.shown[0].message == "Backend role"


def test_ids_are_unique() -> None:
    store = _store()
    ids = {store.add("system", "T", str(i)) for i in range(200)}
    assert len(ids) == 200


def test_unknown_type_is_rejected() -> None:
    store = _store()
    with pytest.raises(ValueError):
        store.add("newsletter", "T", "M")
    assert store.list_notifications() == []


def test_every_mutation_writes_through() -> None:
    storage = MemoryStorage()
    store = _store(storage)

    notification_id = store.add("system", "T", "M")
    assert _persisted(storage)[0]["read"] is False

    store.mark_as_read(notification_id)
    assert _persisted(storage)[0]["read"] is True

    store.delete(notification_id)
    assert _persisted(storage) == []

    store.add("system", "T2", "M2")
    store.mark_all_as_read()
    assert all(entry["read"] for entry in _persisted(storage))

    store.clear_all()
    assert _persisted(storage) == []
    assert storage.writes == 6


def test_missing_ids_are_noops() -> None:
    store = _store()
    notification_id = store.add("system", "T", "M")

    store.mark_as_read("missing")
    store.delete("missing")

    assert [n.id for n in store.list_notifications()] == [notification_id]
    assert store.unread_count() == 1


def test_mark_all_as_read_zeroes_unread_count() -> None:
    store = _store()
    for i in range(5):
        store.add("system", "T", str(i))

    store.mark_all_as_read()
    assert store.unread_count() == 0

    store.mark_all_as_read()
    assert store.unread_count() == 0
    assert len(store.list_notifications()) == 5


def test_clear_all_is_idempotent() -> None:
    storage = MemoryStorage()
    store = _store(storage)
    store.add("system", "T", "M")

    store.clear_all()
    once = storage.values[NOTIFICATIONS_KEY]
    store.clear_all()

    assert store.list_notifications() == []
    assert storage.values[NOTIFICATIONS_KEY] == once


def test_reload_yields_identical_sequence() -> None:
    storage = MemoryStorage()
    store = _store(storage)
    store.add("application", "A", "first")
    read_id = store.add("interview", "B", "second")
    store.add("system", "C", "third")
    store.mark_as_read(read_id)

    reloaded = NotificationStore(storage)

    assert reloaded.list_notifications() == store.list_notifications()
    assert reloaded.unread_count() == 2


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        json.dumps({"id": "x"}),
        json.dumps([{"id": "x", "type": "system"}]),
        json.dumps([{"id": "x", "type": "promo", "title": "t", "message": "m", "read": False,
                     "createdAt": "2024-01-01T00:00:00+00:00"}]),
    ],
)
def test_unreadable_persisted_data_loads_empty(raw: str) -> None:
    storage = MemoryStorage()
    storage.values[NOTIFICATIONS_KEY] = raw
    toaster = FakeToaster()

    store = NotificationStore(storage, toaster)

    assert store.list_notifications() == []
    assert store.unread_count() == 0
    assert toaster.shown == []

    store.add("system", "T", "M")
    assert len(_persisted(storage)) == 1


def test_list_returns_a_copy() -> None:
    store = _store()
    store.add("system", "T", "M")

    listed = store.list_notifications()
    listed.clear()

    assert len(store.list_notifications()) == 1


@pytest.mark.parametrize("seed", range(10))
def test_unread_count_matches_stored_flags(seed: int) -> None:
    rng = random.Random(seed)
    store = _store()

    for _ in range(60):
        ids = [n.id for n in store.list_notifications()]
        op = rng.choice(["add", "add", "delete", "read", "read_all"])
        if op == "add":
            store.add(rng.choice(list(NotificationType)), "T", "M")
        elif op == "delete":
            store.delete(rng.choice(ids) if ids and rng.random() < 0.8 else "missing")
        elif op == "read":
            store.mark_as_read(rng.choice(ids) if ids and rng.random() < 0.8 else "missing")
        else:
            store.mark_all_as_read()

        stored = store.list_notifications()
        assert store.unread_count() == sum(1 for n in stored if not n.read)


def test_listeners_get_a_summary_after_each_mutation() -> None:
    store = _store()
    summaries: list[InboxSummary] = []
    unsubscribe = store.subscribe(summaries.append)

    notification_id = store.add("system", "T", "M")
    store.mark_as_read(notification_id)

    assert [s.unread_count for s in summaries] == [1, 0]
    assert summaries[-1].notifications[0].read is True

    unsubscribe()
    store.clear_all()
    assert len(summaries) == 2


def test_failing_listener_does_not_break_mutation() -> None:
    store = _store()
    received: list[InboxSummary] = []

    def _broken(summary: InboxSummary) -> None:
        raise RuntimeError("boom")

    store.subscribe(_broken)
    store.subscribe(received.append)

    store.add("system", "T", "M")

    assert len(store.list_notifications()) == 1
    assert len(received) == 1


def test_close_drops_listeners() -> None:
    store = _store()
    received: list[InboxSummary] = []
    store.subscribe(received.append)

    store.close()
    store.add("system", "T", "M")

    assert received == []
