from __future__ import annotations

import asyncio
from typing import Optional

import pytest

from core.models import InboxSummary
from core.notifications import NotificationStore
from core.poller import NotificationPoller


class MemoryStorage:
    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


def test_interval_must_be_positive() -> None:
    store = NotificationStore(MemoryStorage())
    with pytest.raises(ValueError):
        NotificationPoller(store, lambda summary: None, interval=0)


def test_start_publishes_immediately_then_periodically() -> None:
    store = NotificationStore(MemoryStorage())
    store.add("system", "T", "M")
    published: list[InboxSummary] = []
    poller = NotificationPoller(store, published.append, interval=0.01)

    async def _run() -> None:
        poller.start()
        assert len(published) == 1
        await asyncio.sleep(0.05)
        await poller.aclose()

    asyncio.run(_run())

    assert len(published) >= 2
    assert all(summary.unread_count == 1 for summary in published)
    assert not poller.running


def test_start_twice_keeps_one_task() -> None:
    store = NotificationStore(MemoryStorage())
    published: list[InboxSummary] = []
    poller = NotificationPoller(store, published.append, interval=10)

    async def _run() -> None:
        poller.start()
        poller.start()
        assert poller.running
        await poller.aclose()

    asyncio.run(_run())

    assert len(published) == 1


def test_polling_never_mutates_store() -> None:
    storage = MemoryStorage()
    store = NotificationStore(storage)
    store.add("system", "T", "M")
    before = storage.values.copy()
    poller = NotificationPoller(store, lambda summary: None, interval=0.01)

    async def _run() -> None:
        poller.start()
        await asyncio.sleep(0.05)
        await poller.aclose()

    asyncio.run(_run())

    assert storage.values == before


def test_publish_errors_do_not_stop_polling() -> None:
    store = NotificationStore(MemoryStorage())
    calls: list[int] = []

    def _publish(summary: InboxSummary) -> None:
        calls.append(summary.unread_count)
        if len(calls) > 1:
            raise RuntimeError("view gone")

    poller = NotificationPoller(store, _publish, interval=0.01)

    async def _run() -> None:
        poller.start()
        await asyncio.sleep(0.06)
        assert poller.running
        await poller.aclose()

    asyncio.run(_run())

    assert len(calls) >= 3


def test_stop_without_start_is_safe() -> None:
    poller = NotificationPoller(NotificationStore(MemoryStorage()), lambda summary: None)
    poller.stop()
    asyncio.run(poller.aclose())
    assert not poller.running


def test_restart_right_after_stop_keeps_polling() -> None:
    store = NotificationStore(MemoryStorage())
    published: list[InboxSummary] = []
    poller = NotificationPoller(store, published.append, interval=0.01)

    async def _run() -> bool:
        poller.start()
        await asyncio.sleep(0)
        poller.stop()
        poller.start()
        await asyncio.sleep(0.05)
        still_running = poller.running
        await poller.aclose()
        return still_running

    assert asyncio.run(_run()) is True
    assert len(published) >= 3
