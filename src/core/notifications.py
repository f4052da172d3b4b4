"""Notification inbox (core domain).

The store exclusively owns the notification list. Every mutating call:
1) applies the change in memory
2) writes the full list through to persistence
3) notifies subscribed listeners with a fresh summary

There is no write-behind buffering and no delta persistence, so a reload at
any point sees exactly what the last completed call left behind. Writers in
other processes are not coordinated: the last writer wins.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional, Union

from core.blobs import dump_list, load_list
from core.models import InboxSummary, Notification, NotificationType, Toast
from core.ports import PersistencePort, ToastPort

LOGGER = logging.getLogger(__name__)

NOTIFICATIONS_KEY = "notifications"

Listener = Callable[[InboxSummary], None]


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NotificationStore:
    """Persisted read/unread inbox with listener support.

    Build one instance per process and inject it into its consumers. The
    persisted list is loaded once, at construction.
    """

    def __init__(
        self,
        storage: PersistencePort,
        toaster: Optional[ToastPort] = None,
        id_factory: Callable[[], str] = _new_id,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._storage = storage
        self._toaster = toaster
        self._id_factory = id_factory
        self._clock = clock
        self._listeners: list[Listener] = []
        self._notifications: list[Notification] = self._load()

    def _load(self) -> list[Notification]:
        notifications: list[Notification] = []
        for entry in load_list(self._storage, NOTIFICATIONS_KEY):
            try:
                notifications.append(Notification.from_dict(entry))
            except (KeyError, TypeError, ValueError):
                # One bad entry means the blob is not ours to trust; start clean.
                LOGGER.warning("Persisted notifications are malformed, starting empty")
                return []
        LOGGER.debug("Loaded %s notifications", len(notifications))
        return notifications

    def _commit(self) -> None:
        dump_list(self._storage, NOTIFICATIONS_KEY, (n.to_dict() for n in self._notifications))
        self._publish()

    def _publish(self) -> None:
        if not self._listeners:
            return
        summary = self.summary()
        for listener in list(self._listeners):
            try:
                listener(summary)
            except Exception:
                LOGGER.exception("Notification listener failed")

    def add(
        self,
        notification_type: Union[NotificationType, str],
        title: str,
        message: str,
    ) -> str:
        """Insert a new unread notification at the head and return its id."""

        notification = Notification(
            id=self._id_factory(),
            type=NotificationType(notification_type),
            title=title,
            message=message,
            read=False,
            created_at=self._clock(),
        )
        self._notifications.insert(0, notification)
        self._commit()
        if self._toaster is not None:
            self._toaster.show(Toast(title=title, message=message))
        LOGGER.info("Notification added (%s): %s", notification.type.value, title)
        return notification.id

    def list_notifications(self) -> list[Notification]:
        """Return every notification, newest first, read or not."""

        return list(self._notifications)

    def get(self, notification_id: str) -> Optional[Notification]:
        for notification in self._notifications:
            if notification.id == notification_id:
                return notification
        return None

    def mark_as_read(self, notification_id: str) -> None:
        self._notifications = [
            n.with_read() if n.id == notification_id else n for n in self._notifications
        ]
        self._commit()

    def mark_all_as_read(self) -> None:
        self._notifications = [n.with_read() for n in self._notifications]
        self._commit()

    def delete(self, notification_id: str) -> None:
        self._notifications = [n for n in self._notifications if n.id != notification_id]
        self._commit()

    def clear_all(self) -> None:
        self._notifications = []
        self._commit()

    def unread_count(self) -> int:
        # Always derived from the list so it can never drift from it.
        return sum(1 for n in self._notifications if not n.read)

    def summary(self) -> InboxSummary:
        return InboxSummary(
            notifications=tuple(self._notifications),
            unread_count=self.unread_count(),
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener for post-mutation summaries; returns an unsubscriber."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def close(self) -> None:
        self._listeners.clear()
