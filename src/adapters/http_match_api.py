"""HTTP match API adapter.

Talks to the remote match/interaction service over JSON. The blocking
urllib call runs in a worker thread so the event loop (and the UI on it)
keeps running while a request is in flight.
"""

from __future__ import annotations

import asyncio
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Optional

from adapters.profile_mapper import build_profiles
from core.models import CandidateProfile, InteractionRecord

LOGGER = logging.getLogger(__name__)


class MatchApiError(RuntimeError):
    """Raised when the match API rejects or cannot serve a request."""


class HttpMatchApi:
    """MatchApiPort implementation backed by the REST collaborator."""

    def __init__(self, base_url: str, token: Optional[str] = None, timeout: float = 30.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout

    def _endpoint(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, payload: Optional[dict[str, Any]] = None) -> Any:
        data = json.dumps(payload).encode("utf-8") if payload is not None else None
        request = urllib.request.Request(self._endpoint(path), data=data, method=method)
        request.add_header("Content-Type", "application/json")
        request.add_header("Accept", "application/json")
        if self._token:
            request.add_header("Authorization", f"Bearer {self._token}")
        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                body = response.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", errors="replace")
            raise MatchApiError(f"Match API error {e.code}: {body}") from e
        except (urllib.error.URLError, TimeoutError) as e:
            raise MatchApiError(f"Match API unreachable: {e}") from e
        if not body:
            return None
        try:
            return json.loads(body)
        except ValueError as e:
            raise MatchApiError("Match API returned invalid JSON") from e

    async def fetch_candidates(self, company_id: str) -> list[CandidateProfile]:
        path = f"companies/{urllib.parse.quote(company_id, safe='')}/candidates"
        payload = await asyncio.to_thread(self._request, "GET", path)
        try:
            return build_profiles(payload)
        except ValueError as e:
            raise MatchApiError(f"Unexpected candidate payload: {e}") from e

    async def record_interaction(self, record: InteractionRecord) -> None:
        # The response body is not needed; any 2xx counts as accepted.
        await asyncio.to_thread(self._request, "POST", "interactions", record.to_payload())
        LOGGER.debug("Match API accepted %s for %s", record.type.value, record.target_id)
