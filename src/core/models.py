"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any backend-specific payloads.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class InteractionType(str, Enum):
    """Decision kinds understood by the match API."""

    SAVE = "save"
    REJECT = "reject"
    LIKE = "like"
    DISLIKE = "dislike"
    VIEW = "view"


class NotificationType(str, Enum):
    APPLICATION = "application"
    INTERVIEW = "interview"
    SYSTEM = "system"


class ToastSeverity(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Project:
    name: str
    description: str
    technologies: tuple[str, ...] = ()


@dataclass(frozen=True)
class CandidateProfile:
    """A job-seeker presented for a save/reject decision.

    Profiles are fetched once per matching session and never change while the
    session is open.
    """

    id: str
    name: str
    email: str
    location: str
    education: str
    experience: str
    skills: tuple[str, ...] = ()
    bio: Optional[str] = None
    projects: tuple[Project, ...] = ()
    profile_image: Optional[str] = None


@dataclass(frozen=True)
class InteractionRecord:
    """One decision, handed to the match API as soon as it is made."""

    initiator_id: str
    target_id: str
    type: InteractionType
    timestamp: datetime

    def to_payload(self) -> dict[str, Any]:
        return {
            "initiatorId": self.initiator_id,
            "targetId": self.target_id,
            "type": self.type.value,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "InteractionRecord":
        return cls(
            initiator_id=str(payload["initiatorId"]),
            target_id=str(payload["targetId"]),
            type=InteractionType(payload["type"]),
            timestamp=datetime.fromisoformat(payload["timestamp"]),
        )


@dataclass(frozen=True)
class RecordResult:
    """Outcome of a single submission attempt."""

    ok: bool
    record: InteractionRecord
    error: Optional[str] = None
    queued: bool = False


@dataclass(frozen=True)
class Notification:
    """Persisted, user-dismissible record of a workflow event."""

    id: str
    type: NotificationType
    title: str
    message: str
    read: bool
    created_at: datetime

    def with_read(self) -> "Notification":
        if self.read:
            return self
        return replace(self, read=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "read": self.read,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Notification":
        return cls(
            id=str(data["id"]),
            type=NotificationType(data["type"]),
            title=str(data["title"]),
            message=str(data["message"]),
            read=bool(data["read"]),
            created_at=datetime.fromisoformat(data["createdAt"]),
        )


@dataclass(frozen=True)
class Toast:
    """Ephemeral, fire-and-forget user feedback."""

    title: str
    message: str
    severity: ToastSeverity = ToastSeverity.DEFAULT


@dataclass(frozen=True)
class InboxSummary:
    """What the inbox view renders: every notification plus the unread count."""

    notifications: tuple[Notification, ...] = field(default_factory=tuple)
    unread_count: int = 0
