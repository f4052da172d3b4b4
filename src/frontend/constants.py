"""Shared constants for the Textual UI."""

from __future__ import annotations

ACCENT_BLUE = "#32ADE6"
LOADING_TEXT = "Loading candidate matches..."
EMPTY_QUEUE_TEXT = "No candidates available for matching right now."
EMPTY_INBOX_TEXT = "No notifications yet."
