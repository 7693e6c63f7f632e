import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from .config import CACHE_TTL_SECONDS, SECTOR_RANKINGS_FILE

logger = logging.getLogger(__name__)


class TTLCache:
    """In-memory key/value cache with a fixed time-to-live per entry."""

    def __init__(self, ttl_seconds: float = CACHE_TTL_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        age = self._clock() - stored_at
        if age > self.ttl_seconds:
            self._entries.pop(key, None)
            return None
        logger.debug("Cache hit for %s (age: %ds)", key, round(age))
        return value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (self._clock(), value)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def save_sector_rankings(payload: dict, path: Path = SECTOR_RANKINGS_FILE) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    data = dict(payload)
    data["updated_at_utc"] = datetime.now(timezone.utc).isoformat()
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


def load_sector_rankings(path: Path = SECTOR_RANKINGS_FILE) -> dict | None:
    if not path.exists():
        return None
    return json.loads(path.read_text(encoding="utf-8"))
