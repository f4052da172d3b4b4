"""Shared notification and candidate formatting helpers.

Keeping formatting here prevents drift between the TUI and the CLI and keeps
output consistent regardless of where it is shown.
"""

from __future__ import annotations

from datetime import datetime

from rich.text import Text

from core.models import CandidateProfile, Notification, NotificationType

ACCENT = "#32ADE6"

_TYPE_LABELS = {
    NotificationType.APPLICATION: "application",
    NotificationType.INTERVIEW: "interview",
    NotificationType.SYSTEM: "system",
}


def format_timestamp(value: datetime) -> str:
    """Local month/day hour:minute, the way the inbox lists events."""

    return value.astimezone().strftime("%m/%d %H:%M")


def format_notification_line(notification: Notification) -> str:
    """One plain-text line per notification for console output."""

    marker = " " if notification.read else "*"
    label = _TYPE_LABELS[notification.type]
    timestamp = format_timestamp(notification.created_at)
    return f"{marker} [{timestamp}] ({label}) {notification.title}: {notification.message}  #{notification.id}"


def format_unread_badge(unread_count: int) -> str:
    if unread_count <= 0:
        return "inbox: all read"
    if unread_count > 99:
        return "inbox: 99+ unread"
    return f"inbox: {unread_count} unread"


def format_remaining(remaining: int) -> str:
    if remaining == 1:
        return "1 more candidate"
    return f"{remaining} more candidates"


def format_saved(names: list[str]) -> str:
    if not names:
        return ""
    return f"Saved ({len(names)}): {', '.join(names)}"


def format_progress_dots(total: int, cursor: int) -> Text:
    """Dots for each candidate: processed, current, and still to come."""

    text = Text()
    for index in range(total):
        if index == cursor:
            text.append("●", style=f"bold {ACCENT}")
        elif index < cursor:
            text.append("●", style="green")
        else:
            text.append("○", style="grey50")
        if index < total - 1:
            text.append(" ")
    return text


def format_candidate_card(candidate: CandidateProfile, max_projects: int = 2) -> Text:
    """Render a candidate as a Rich text card."""

    card = Text()
    initial = candidate.name[:1].upper() or "?"
    card.append(f"({initial}) ", style=f"bold {ACCENT}")
    card.append(candidate.name or "(no name)", style="bold")
    card.append("\n")
    if candidate.email:
        card.append(f"{candidate.email}\n", style="grey70")
    card.append("\n")
    card.append("Location:   ", style="bold")
    card.append(f"{candidate.location}\n")
    card.append("Education:  ", style="bold")
    card.append(f"{candidate.education}\n")
    card.append("Experience: ", style="bold")
    card.append(f"{candidate.experience}\n")

    if candidate.bio:
        card.append("\n")
        card.append(f"{candidate.bio}\n", style="italic")

    if candidate.skills:
        card.append("\nSkills\n", style="bold")
        for index, skill in enumerate(candidate.skills):
            if index:
                card.append(" ")
            card.append(f" {skill} ", style=f"black on {ACCENT}")
        card.append("\n")

    if candidate.projects:
        card.append("\nProjects\n", style="bold")
        for project in candidate.projects[:max_projects]:
            card.append(f"- {project.name}\n", style="bold")
            if project.description:
                card.append(f"  {project.description}\n")
            if project.technologies:
                card.append(f"  {', '.join(project.technologies)}\n", style="grey70")

    return card
