"""State container for the matching view and the inbox badge."""

from __future__ import annotations

from dataclasses import dataclass, field

from core.models import InboxSummary


@dataclass
class ViewState:
    loading: bool = True
    summary: InboxSummary = field(default_factory=InboxSummary)
