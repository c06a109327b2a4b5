import json
import threading
import time
from typing import Any


def make_cache_key(request: dict[str, Any]) -> str:
    """Stable key for a search request: JSON with sorted keys, None values dropped."""
    cleaned = {k: v for k, v in (request or {}).items() if v is not None}
    return json.dumps(cleaned, sort_keys=True, default=str)


class SearchResultCache:
    """
    Process-local memo of search results with a fixed time-to-live.
    No size bound and no invalidation other than expiry; not shared between instances.
    """

    def __init__(self, ttl_seconds: int = 300) -> None:
        self.ttl_seconds = ttl_seconds
        self._lock = threading.Lock()
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any | None:
        now = time.time()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, value = entry
            if now - stored_at >= self.ttl_seconds:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = (time.time(), value)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
