"""Matching tab: one candidate card at a time with save/reject decisions."""

from __future__ import annotations

from typing import Any

from rich.text import Text
from textual import on
from textual.containers import Center, Container, Horizontal, Vertical
from textual.widgets import Button, Static

from adapters.notification_formatting import (
    format_candidate_card,
    format_progress_dots,
    format_remaining,
    format_saved,
)
from ..constants import EMPTY_QUEUE_TEXT, LOADING_TEXT


class MatchingTab(Container):
    """Shows the current candidate and forwards decisions to the app."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._ready = False

    def compose(self):
        with Vertical(id="matching-panel"):
            with Center():
                yield Static(LOADING_TEXT, id="candidate-card")
            with Center():
                yield Static("", id="match-progress")
            with Center():
                yield Static("", id="match-remaining", classes="subtle")
            with Center():
                yield Static("", id="match-saved", classes="subtle")
            with Center():
                yield Horizontal(
                    Button("Reject", id="reject-btn", variant="error"),
                    Button("Save", id="save-btn", variant="success"),
                    id="match-actions",
                )

    def on_mount(self) -> None:
        self._ready = True
        self.refresh_view()

    @on(Button.Pressed, "#reject-btn")
    def _on_reject(self) -> None:
        self.app.action_reject()

    @on(Button.Pressed, "#save-btn")
    def _on_save(self) -> None:
        self.app.action_save()

    def refresh_view(self) -> None:
        if not self._ready:
            return
        session = self.app.runtime.session
        card = self.query_one("#candidate-card", Static)
        progress = self.query_one("#match-progress", Static)
        remaining = self.query_one("#match-remaining", Static)
        saved = self.query_one("#match-saved", Static)

        candidate = session.current_item()
        if self.app.view_state.loading:
            card.update(LOADING_TEXT)
            progress.update("")
            remaining.update("")
        elif candidate is None:
            card.update(Text(EMPTY_QUEUE_TEXT, style="grey70"))
            progress.update("")
            remaining.update("")
        else:
            queue = session.queue
            card.update(format_candidate_card(candidate))
            progress.update(format_progress_dots(len(queue), queue.cursor))
            remaining.update(format_remaining(queue.remaining()))

        saved.update(format_saved([c.name for c in session.saved]))

        # Input stays off while a decision is in flight, so the same candidate
        # cannot be decided twice.
        blocked = self.app.view_state.loading or candidate is None or session.transitioning
        self.query_one("#reject-btn", Button).disabled = blocked
        self.query_one("#save-btn", Button).disabled = blocked
