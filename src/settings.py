"""Static configuration for matchdeck.

All user-editable settings (company, match API, timings, outbox, logging)
live in a single JSON file for quick edits without touching Python.
"""

import json
import os

from dotenv import load_dotenv

from core.config import MatchingConfig, OutboxConfig, PollerConfig

load_dotenv()

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# config.json sits at the project root unless MATCHDECK_CONFIG points elsewhere.
CONFIG_PATH = os.getenv("MATCHDECK_CONFIG") or os.path.join(PROJECT_ROOT, "config.json")


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        loaded = json.load(handle)
    if not isinstance(loaded, dict):
        raise RuntimeError("config.json root must be an object")
    return loaded


def _resolve_path(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(PROJECT_ROOT, path)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# The company on whose behalf decisions are recorded (the initiator id).
COMPANY_ID = _CONFIG.get("company_id")

# Match API selection:
# - API_MODE: "demo" (in-process sample data) or "http"
# - API_BASE_URL: REST root, overridable with MATCHDECK_API_URL
_api = _CONFIG.get("api", {})
API_MODE = _api.get("mode", "demo")
API_BASE_URL = os.getenv("MATCHDECK_API_URL") or _api.get("base_url", "http://localhost:5000/api")
API_TIMEOUT_SECONDS = float(_api.get("timeout_seconds", 30))
DEMO_LATENCY_SECONDS = float(_api.get("demo_latency_seconds", 1.0))

# Where the key/value SQLite database lives.
_storage = _CONFIG.get("storage", {})
DB_PATH = _resolve_path(_storage.get("path", "matchdeck.db"))

# Delay between a decision and moving on to the next candidate.
_matching = _CONFIG.get("matching", {})
MATCHING = MatchingConfig(
    transition_delay=int(_matching.get("transition_delay_ms", 300)) / 1000,
)

# Inbox refresh cadence for views that show notifications.
_inbox = _CONFIG.get("inbox", {})
POLLER = PollerConfig(interval=float(_inbox.get("poll_interval_seconds", 30)))

# Retry queue for failed interaction submissions (off by default: failures
# are reported and dropped).
_outbox = _CONFIG.get("outbox", {})
OUTBOX = OutboxConfig(
    enabled=bool(_outbox.get("enabled", False)),
    max_attempts=int(_outbox.get("max_attempts", 5)),
    base_delay=float(_outbox.get("base_delay_seconds", 1.0)),
    max_delay=float(_outbox.get("max_delay_seconds", 30.0)),
)

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
