import threading
import time
from dataclasses import dataclass

# Paths that hit the LLM or the job boards; everything else is unlimited.
AI_PATHS = frozenset({"/resumes/analyze", "/recommendations/generate"})
SEARCH_PATHS = frozenset({"/jobs/search"})


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    retry_after: int = 0
    remaining: int = 0


def limit_for_path(path: str, ai_per_min: int, search_per_min: int) -> int | None:
    """Per-minute budget for a request path, or None when the path is not limited."""
    if path in AI_PATHS:
        return ai_per_min
    if path in SEARCH_PATHS:
        return search_per_min
    return None


class InMemoryRateLimiter:
    """
    Fixed-window counters keyed by client and path.
    State lives in this process only, so every worker enforces its own budget.
    """

    def __init__(self, clock=time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: dict[str, tuple[float, int]] = {}

    def hit(self, key: str, limit: int, window_seconds: int = 60) -> RateLimitDecision:
        now = self._clock()
        with self._lock:
            started, used = self._windows.get(key, (now, 0))
            elapsed = now - started
            if elapsed >= window_seconds:
                started, used, elapsed = now, 0, 0.0
            if used >= limit:
                return RateLimitDecision(False, retry_after=max(1, int(window_seconds - elapsed)))
            self._windows[key] = (started, used + 1)
            return RateLimitDecision(True, remaining=limit - used - 1)

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


rate_limiter = InMemoryRateLimiter()
