"""Match API client factory for matchdeck.

The adapter is chosen from configuration so the core never knows whether it
is talking to the real service or to the in-process demo backend.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

import settings
from adapters.demo_match_api import DemoMatchApi
from adapters.http_match_api import HttpMatchApi


def build_match_api():
    """Create the match API adapter selected by ``api.mode``.

    We read API_TOKEN via python-dotenv to keep secrets out of the repo. The
    token is optional; when present it is sent as a bearer token.
    """

    load_dotenv()

    logger = logging.getLogger(__name__)
    if settings.API_MODE == "demo":
        logger.info("Using the demo match API")
        return DemoMatchApi(latency=settings.DEMO_LATENCY_SECONDS)

    if settings.API_MODE == "http":
        logger.info("Using the match API at %s", settings.API_BASE_URL)
        return HttpMatchApi(
            base_url=settings.API_BASE_URL,
            token=os.getenv("API_TOKEN"),
            timeout=settings.API_TIMEOUT_SECONDS,
        )

    raise RuntimeError("api.mode must be 'demo' or 'http'")
