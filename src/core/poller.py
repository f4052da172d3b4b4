"""Periodic inbox refresh for views that consume the notification store."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from core.models import InboxSummary
from core.notifications import NotificationStore

LOGGER = logging.getLogger(__name__)


class NotificationPoller:
    """Re-read the store on a fixed interval and publish the summary.

    The poller never mutates the store. Start it when a consuming view
    becomes active and stop it when the view goes away; ``stop`` is safe to
    call at any time.
    """

    def __init__(
        self,
        store: NotificationStore,
        publish: Callable[[InboxSummary], None],
        interval: float = 30.0,
    ) -> None:
        if interval <= 0:
            raise ValueError("poll interval must be positive")
        self._store = store
        self._publish = publish
        self._interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def refresh(self) -> None:
        self._publish(self._store.summary())

    def start(self) -> None:
        """Publish once now, then every interval. Needs a running event loop."""

        if self.running:
            return
        self.refresh()
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self.refresh()
            except Exception:
                LOGGER.exception("Inbox refresh failed")

    def stop(self) -> None:
        self._stop_task()

    def _stop_task(self) -> Optional[asyncio.Task]:
        # The task is forgotten on cancel, so start() right after stop()
        # always schedules a fresh one.
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
        return task

    async def aclose(self) -> None:
        """Stop and wait until the refresh task has actually finished."""

        task = self._stop_task()
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            pass
