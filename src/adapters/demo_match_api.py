"""Offline match API adapter with a fixed sample batch.

Used when ``api.mode`` is ``demo`` so the app can be explored without a
backend. Latency is simulated so the UI behaves as it would against the real
service.
"""

from __future__ import annotations

import asyncio
import logging

from adapters.profile_mapper import build_profiles
from core.models import CandidateProfile, InteractionRecord

LOGGER = logging.getLogger(__name__)

SAMPLE_CANDIDATES = [
    {
        "id": "1",
        "name": "Ming Wang",
        "email": "wang@example.com",
        "skills": ["React", "Node.js", "TypeScript", "Python"],
        "experience": "2 years of frontend development",
        "education": "National Taiwan University, Computer Science",
        "location": "Taipei",
        "bio": "Loves building software, focused on frontend work and a strong team player.",
        "projects": [
            {
                "name": "E-commerce site",
                "description": "Full-stack shop built with React and Node.js",
                "technologies": ["React", "Node.js", "MongoDB"],
            }
        ],
    },
    {
        "id": "2",
        "name": "Hua Li",
        "email": "li@example.com",
        "skills": ["Vue.js", "Laravel", "MySQL", "Docker"],
        "experience": "3 years of full-stack development",
        "education": "National Tsing Hua University, Computer Science",
        "location": "Hsinchu",
        "bio": "Full-stack developer comfortable with Vue.js and Laravel.",
        "projects": [
            {
                "name": "Back-office system",
                "description": "Internal management system built with Vue.js and Laravel",
                "technologies": ["Vue.js", "Laravel", "MySQL"],
            }
        ],
    },
    {
        "id": "3",
        "name": "Mei Zhang",
        "email": "zhang@example.com",
        "skills": ["Python", "Django", "PostgreSQL", "AWS"],
        "experience": "1 year of backend development",
        "education": "National Cheng Kung University, Computer Science",
        "location": "Tainan",
        "bio": "Backend developer interested in cloud services and database design.",
        "projects": [
            {
                "name": "API service",
                "description": "RESTful API service built with Django",
                "technologies": ["Python", "Django", "PostgreSQL"],
            }
        ],
    },
]


class DemoMatchApi:
    """MatchApiPort implementation that never leaves the process."""

    def __init__(self, latency: float = 1.0) -> None:
        self._latency = latency
        self.recorded: list[InteractionRecord] = []

    async def fetch_candidates(self, company_id: str) -> list[CandidateProfile]:
        await asyncio.sleep(self._latency)
        return build_profiles(SAMPLE_CANDIDATES)

    async def record_interaction(self, record: InteractionRecord) -> None:
        await asyncio.sleep(self._latency / 2)
        self.recorded.append(record)
        LOGGER.info("Demo interaction recorded: %s", record.to_payload())
