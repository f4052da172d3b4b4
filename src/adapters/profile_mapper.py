"""Match API payload-to-core mapping adapter.

This keeps the remote service's JSON shape out of the core.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from core.models import CandidateProfile, Project


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _unique_strings(values: Optional[Iterable[Any]]) -> tuple[str, ...]:
    # Skills are a set, but the card shows them in the order the API sent.
    seen: dict[str, None] = {}
    for value in values or []:
        text = str(value).strip()
        if text:
            seen.setdefault(text, None)
    return tuple(seen)


def build_project(payload: dict[str, Any]) -> Project:
    return Project(
        name=str(payload.get("name", "")),
        description=str(payload.get("description", "")),
        technologies=_unique_strings(payload.get("technologies")),
    )


def build_profile(payload: dict[str, Any]) -> CandidateProfile:
    """Build a CandidateProfile from one match API profile object."""

    if not isinstance(payload, dict) or "id" not in payload:
        raise ValueError("candidate payload has no id")

    projects = payload.get("projects") or []
    return CandidateProfile(
        id=str(payload["id"]),
        name=str(payload.get("name", "")),
        email=str(payload.get("email", "")),
        location=str(payload.get("location", "")),
        education=str(payload.get("education", "")),
        experience=str(payload.get("experience", "")),
        skills=_unique_strings(payload.get("skills")),
        bio=_optional_text(payload.get("bio")),
        projects=tuple(build_project(project) for project in projects if isinstance(project, dict)),
        profile_image=_optional_text(payload.get("profileImage")),
    )


def build_profiles(payload: Any) -> list[CandidateProfile]:
    """Accept either a bare array or a {"candidates": [...]} envelope."""

    if isinstance(payload, dict):
        payload = payload.get("candidates")
    if not isinstance(payload, list):
        raise ValueError("candidate payload must be a list")
    return [build_profile(entry) for entry in payload]
