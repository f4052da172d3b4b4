"""Modal dialogs for the Textual matching app."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class ClearInboxScreen(ModalScreen[bool]):
    """Confirm removal of every notification."""

    def __init__(self, count: int) -> None:
        super().__init__()
        self._count = count

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Clear inbox?", classes="modal-title"),
            Static(f"{self._count} notification(s) will be removed.", classes="modal-body"),
            Horizontal(
                Button("Clear", id="clear-confirm", variant="error"),
                Button("Cancel", id="clear-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "clear-confirm":
            self.dismiss(True)
        else:
            self.dismiss(False)


class DeleteNotificationScreen(ModalScreen[bool]):
    """Confirm deletion of a notification."""

    def __init__(self, title: str) -> None:
        super().__init__()
        self._notification_title = title or "(untitled notification)"

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Delete notification?", classes="modal-title"),
            Static(self._notification_title, classes="modal-body"),
            Horizontal(
                Button("Delete", id="delete-confirm", variant="error"),
                Button("Cancel", id="delete-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "delete-confirm":
            self.dismiss(True)
        else:
            self.dismiss(False)
