from __future__ import annotations

import asyncio
import io
import json
import urllib.error
import urllib.request
from datetime import datetime, timezone

import pytest

from adapters.http_match_api import HttpMatchApi, MatchApiError
from core.models import InteractionRecord, InteractionType


class FakeResponse:
    def __init__(self, body: str) -> None:
        self._body = body.encode("utf-8")

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc) -> None:
        return None


def _install(monkeypatch, body: str = "", error: Exception = None) -> list:
    requests: list = []

    def _urlopen(request, timeout=None):
        requests.append(request)
        if error is not None:
            raise error
        return FakeResponse(body)

    monkeypatch.setattr(urllib.request, "urlopen", _urlopen)
    return requests


def test_fetch_candidates_builds_profiles(monkeypatch) -> None:
    body = json.dumps({"candidates": [{"id": "1", "name": "Ming Wang", "skills": ["React"]}]})
    requests = _install(monkeypatch, body=body)
    api = HttpMatchApi("http://api.test/", token="secret")

    profiles = asyncio.run(api.fetch_candidates("acme co"))

    assert [p.name for p in profiles] == ["Ming Wang"]
    assert requests[0].full_url == "http://api.test/companies/acme%20co/candidates"
    assert requests[0].get_method() == "GET"
    assert requests[0].get_header("Authorization") == "Bearer secret"


def test_record_interaction_posts_payload(monkeypatch) -> None:
    requests = _install(monkeypatch)
    api = HttpMatchApi("http://api.test")
    record = InteractionRecord(
        initiator_id="company-1",
        target_id="7",
        type=InteractionType.REJECT,
        timestamp=datetime(2024, 3, 1, tzinfo=timezone.utc),
    )

    asyncio.run(api.record_interaction(record))

    assert requests[0].full_url == "http://api.test/interactions"
    assert requests[0].get_method() == "POST"
    assert json.loads(requests[0].data) == record.to_payload()
    assert requests[0].get_header("Authorization") is None


def test_http_error_becomes_match_api_error(monkeypatch) -> None:
    error = urllib.error.HTTPError("http://api.test/interactions", 503, "down", {}, io.BytesIO(b"busy"))
    _install(monkeypatch, error=error)

    with pytest.raises(MatchApiError, match="503"):
        asyncio.run(HttpMatchApi("http://api.test").fetch_candidates("c"))


def test_unreachable_host_becomes_match_api_error(monkeypatch) -> None:
    _install(monkeypatch, error=urllib.error.URLError("refused"))

    with pytest.raises(MatchApiError, match="unreachable"):
        asyncio.run(HttpMatchApi("http://api.test").fetch_candidates("c"))


def test_unexpected_payload_shape(monkeypatch) -> None:
    _install(monkeypatch, body=json.dumps({"items": []}))

    with pytest.raises(MatchApiError):
        asyncio.run(HttpMatchApi("http://api.test").fetch_candidates("c"))
