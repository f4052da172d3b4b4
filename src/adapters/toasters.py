"""Toast adapters.

Each adapter satisfies the core ToastPort for one shell: Textual
notifications in the TUI and plain console output for CLI commands.
"""

from __future__ import annotations

import logging

from core.models import Toast, ToastSeverity

LOGGER = logging.getLogger(__name__)

_TEXTUAL_SEVERITY = {
    ToastSeverity.DEFAULT: "information",
    ToastSeverity.DESTRUCTIVE: "error",
}


class TextualToaster:
    """Show toasts with Textual's built-in notifications."""

    def __init__(self, app, timeout: float = 4.0) -> None:
        self._app = app
        self._timeout = timeout

    def show(self, toast: Toast) -> None:
        self._app.notify(
            toast.message,
            title=toast.title,
            severity=_TEXTUAL_SEVERITY[toast.severity],
            timeout=self._timeout,
        )


class ConsoleToaster:
    """Print toasts for one-shot CLI commands and keep a copy in the log."""

    def show(self, toast: Toast) -> None:
        prefix = "!" if toast.severity is ToastSeverity.DESTRUCTIVE else "*"
        print(f"{prefix} {toast.title}: {toast.message}")
        level = logging.WARNING if toast.severity is ToastSeverity.DESTRUCTIVE else logging.INFO
        LOGGER.log(level, "Toast %s: %s", toast.title, toast.message)
