"""JSON list blobs on top of the persistence port."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable

from core.ports import PersistencePort

LOGGER = logging.getLogger(__name__)


def load_list(storage: PersistencePort, key: str) -> list[Any]:
    """Return the JSON array stored under key, or [] if missing or unreadable.

    A corrupt entry is never fatal: it is logged and treated as empty so the
    next write replaces it.
    """

    raw = storage.get(key)
    if raw is None:
        return []
    try:
        loaded = json.loads(raw)
    except (TypeError, ValueError):
        LOGGER.warning("Ignoring unparsable data under %r", key)
        return []
    if not isinstance(loaded, list):
        LOGGER.warning("Ignoring non-list data under %r", key)
        return []
    return loaded


def dump_list(storage: PersistencePort, key: str, items: Iterable[Any]) -> None:
    """Write the full list under key, replacing whatever was there."""

    storage.set(key, json.dumps(list(items), ensure_ascii=False))
