"""Main Textual app for matchdeck."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Center, Container, Horizontal, Vertical
from textual.css.query import NoMatches
from textual.widgets import ContentSwitcher, Footer, Static, Tab, Tabs

from adapters.notification_formatting import format_unread_badge
from adapters.toasters import TextualToaster
from core.models import InboxSummary, InteractionType
from .constants import ACCENT_BLUE
from .state import ViewState
from .tabs.inbox import InboxTab
from .tabs.matching import MatchingTab

LOGGER = logging.getLogger(__name__)

# Upper bound on how long quitting waits for in-flight submissions.
SHUTDOWN_DRAIN_SECONDS = 5.0


class MatchDeckApp(App):
    """Candidate matching with a notification inbox."""

    def __init__(
        self,
        runtime_factory: Callable[[TextualToaster], Any],
        company_id: Optional[str] = None,
        poll_interval: float = 30.0,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.runtime = runtime_factory(TextualToaster(self))
        self.view_state = ViewState()
        self._company_id = company_id
        self._poll_interval = poll_interval
        self._outbox_stop: Optional[asyncio.Event] = None
        self._unsubscribers: list[Callable[[], None]] = []
        self._closing = False

    BINDINGS = [
        ("s", "save", "Save"),
        ("x", "reject", "Reject"),
        ("ctrl+a", "mark_all_read", "Mark all read"),
        ("q", "request_quit", "Quit"),
        ("ctrl+c", "request_quit", "Quit"),
    ]

    CSS_PATH = "app.tcss"

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            with Horizontal(id="header-row"):
                with Vertical(id="header-left"):
                    yield Static(self._title_text(), id="title")
                    yield Static(f"company: {self._company_id or '-'}", classes="subtle")
                with Vertical(id="header-right"):
                    yield Static("", id="header-unread")
                    yield Static("", id="header-status", classes="subtle")

        with Container(id="tabs-bar"):
            with Center(id="tabs-center"):
                yield Tabs(
                    Tab("Matching", id="matching"),
                    Tab("Inbox", id="inbox"),
                    id="tabs",
                )

        with ContentSwitcher(id="content"):
            yield MatchingTab(id="matching-view")
            yield InboxTab(poll_interval=self._poll_interval, id="inbox-view")
        yield Footer()

    def on_mount(self) -> None:
        runtime = self.runtime
        self._unsubscribers.append(runtime.store.subscribe(self._on_inbox_changed))
        self._unsubscribers.append(runtime.session.add_listener(self._on_session_changed))
        self._on_inbox_changed(runtime.store.summary())
        self._set_active_tab("matching")
        self.run_worker(self._load_candidates(), exclusive=True, group="load")
        if runtime.outbox is not None:
            self._outbox_stop = asyncio.Event()
            self.run_worker(runtime.outbox.run(runtime.api, self._outbox_stop), group="outbox")

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        tab_id = event.tab.id or ""
        if not tab_id:
            label = event.tab.label
            if hasattr(label, "plain"):
                label = label.plain
            tab_id = str(label).strip().lower()
        self._set_active_tab(tab_id)

    def _set_active_tab(self, tab_id: str) -> None:
        switcher = self.query_one("#content", ContentSwitcher)
        switcher.current = f"{tab_id}-view"
        # The inbox only polls while someone is looking at it.
        self.query_one(InboxTab).set_active(tab_id == "inbox")

    async def _load_candidates(self) -> None:
        self.view_state.loading = True
        self._refresh_matching()
        self._set_status("loading candidates")
        count = await self.runtime.session.start(self._company_id)
        self.view_state.loading = False
        self._refresh_matching()
        self._set_status(f"{count} candidate(s)")

    def action_save(self) -> None:
        self._decide(InteractionType.SAVE)

    def action_reject(self) -> None:
        self._decide(InteractionType.REJECT)

    def _decide(self, interaction_type: InteractionType) -> None:
        session = self.runtime.session
        if self.view_state.loading or session.transitioning or session.current_item() is None:
            return
        self.run_worker(session.decide(interaction_type), group="decide")

    def action_mark_all_read(self) -> None:
        self.runtime.store.mark_all_as_read()

    def action_request_quit(self) -> None:
        if self._closing:
            return
        self._closing = True
        self.run_worker(self._shutdown(), group="shutdown")

    async def _shutdown(self) -> None:
        self._set_status("finishing pending decisions")
        if self._outbox_stop is not None:
            self._outbox_stop.set()
        try:
            await asyncio.wait_for(self.runtime.session.drain(), timeout=SHUTDOWN_DRAIN_SECONDS)
        except asyncio.TimeoutError:
            LOGGER.warning("Quitting with %s submission(s) still in flight", self.runtime.session.pending_count)
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self.runtime.close()
        self.exit()

    def _on_session_changed(self) -> None:
        self._refresh_matching()

    def _on_inbox_changed(self, summary: InboxSummary) -> None:
        self.view_state.summary = summary
        badge = self.query_one("#header-unread", Static)
        badge.update(format_unread_badge(summary.unread_count))
        badge.set_class(summary.unread_count > 0, "status-unread")

    def _refresh_matching(self) -> None:
        try:
            matching_tab = self.query_one(MatchingTab)
        except NoMatches:
            return
        matching_tab.refresh_view()

    def _set_status(self, text: str) -> None:
        self.query_one("#header-status", Static).update(text)

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("MATCH", ACCENT_BLUE),
            ("DECK > Talent Matching", "bold"),
        )
