"""Inbox tab for reading and dismissing workflow notifications."""

from __future__ import annotations

from typing import Any, Callable, Optional

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, DataTable, Static

from adapters.notification_formatting import format_timestamp, format_unread_badge
from core.models import InboxSummary
from core.poller import NotificationPoller
from ..constants import EMPTY_INBOX_TEXT
from ..modals import ClearInboxScreen, DeleteNotificationScreen


class InboxTab(Container):
    """Notification list with read/delete actions.

    The tab refreshes itself two ways: immediately through a store
    subscription, and on the poller's interval while the tab is active.
    """

    def __init__(self, poll_interval: float = 30.0, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._poll_interval = poll_interval
        self._poller: Optional[NotificationPoller] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._selected_id: Optional[str] = None
        self._summary = InboxSummary()
        self._table_ready = False

    def compose(self):
        with Vertical(id="inbox-panel"):
            yield Static("Notifications", id="inbox-title")
            yield DataTable(id="inbox-table", cursor_type="row")
            with Horizontal(id="inbox-actions"):
                yield Button("Mark read", id="mark-read")
                yield Button("Mark all read", id="mark-all-read", variant="primary")
                yield Button("Delete", id="delete-notification", variant="error")
                yield Button("Clear all", id="clear-all", variant="warning")
            yield Static("", id="inbox-output", classes="subtle")

    def on_mount(self) -> None:
        table = self.query_one("#inbox-table", DataTable)
        table.add_column("", key="unread", width=2)
        table.add_column("type", key="type", width=12)
        table.add_column("time", key="time", width=12)
        table.add_column("title", key="title", width=28)
        table.add_column("message", key="message", width=48)
        table.zebra_stripes = True
        table.styles.height = "1fr"
        self.query_one("#inbox-actions").styles.height = 3
        self._table_ready = True

        store = self.app.runtime.store
        self._poller = NotificationPoller(store, self.render_summary, interval=self._poll_interval)
        self._unsubscribe = store.subscribe(self.render_summary)
        self.render_summary(store.summary())

    def on_unmount(self) -> None:
        # Never leave periodic work behind once the view is gone.
        if self._poller is not None:
            self._poller.stop()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def set_active(self, active: bool) -> None:
        if self._poller is None:
            return
        if active:
            self._poller.start()
        else:
            self._poller.stop()

    @property
    def polling(self) -> bool:
        return self._poller is not None and self._poller.running

    def render_summary(self, summary: InboxSummary) -> None:
        self._summary = summary
        if not self._table_ready:
            return
        table = self.query_one("#inbox-table", DataTable)
        table.clear()
        for notification in summary.notifications:
            table.add_row(
                "" if notification.read else "●",
                notification.type.value,
                format_timestamp(notification.created_at),
                notification.title,
                notification.message,
                key=notification.id,
            )

        ids = {n.id for n in summary.notifications}
        if self._selected_id not in ids:
            self._selected_id = None

        output = EMPTY_INBOX_TEXT if not summary.notifications else format_unread_badge(summary.unread_count)
        self.query_one("#inbox-output", Static).update(output)
        self._update_action_state()

    def _update_action_state(self) -> None:
        has_selection = self._selected_id is not None
        self.query_one("#mark-read", Button).disabled = not has_selection
        self.query_one("#delete-notification", Button).disabled = not has_selection
        self.query_one("#mark-all-read", Button).disabled = self._summary.unread_count == 0
        self.query_one("#clear-all", Button).disabled = not self._summary.notifications

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        self._selected_id = event.row_key.value if event.row_key is not None else None
        self._update_action_state()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        # Opening a notification marks it as read.
        if event.row_key is None or event.row_key.value is None:
            return
        self._selected_id = event.row_key.value
        self.app.runtime.store.mark_as_read(self._selected_id)

    @on(Button.Pressed, "#mark-read")
    def _on_mark_read(self) -> None:
        if self._selected_id is not None:
            self.app.runtime.store.mark_as_read(self._selected_id)

    @on(Button.Pressed, "#mark-all-read")
    def _on_mark_all_read(self) -> None:
        self.app.action_mark_all_read()

    @on(Button.Pressed, "#delete-notification")
    def _on_delete(self) -> None:
        if self._selected_id is None:
            return
        notification = self.app.runtime.store.get(self._selected_id)
        if notification is None:
            return
        notification_id = notification.id

        def _handle(confirmed: bool | None) -> None:
            if confirmed:
                self.app.runtime.store.delete(notification_id)

        self.app.push_screen(DeleteNotificationScreen(notification.title), _handle)

    @on(Button.Pressed, "#clear-all")
    def _on_clear_all(self) -> None:
        count = len(self._summary.notifications)
        if not count:
            return

        def _handle(confirmed: bool | None) -> None:
            if confirmed:
                self.app.runtime.store.clear_all()

        self.app.push_screen(ClearInboxScreen(count), _handle)
