import threading
import time

# Paths whose request volume counts against the auth budget.
AUTH_PATHS = ("/auth/login", "/auth/signup", "/auth/forgot-password")
AUTH_PATH_PREFIXES = ("/auth/reset-password/",)


def is_auth_path(path: str) -> bool:
    return path in AUTH_PATHS or path.startswith(AUTH_PATH_PREFIXES)


def bucket_for(path: str) -> str:
    """Reset links carry the token in the path; count them as one bucket."""
    for prefix in AUTH_PATH_PREFIXES:
        if path.startswith(prefix):
            return prefix
    return path


class InMemoryRateLimiter:
    """
    Fixed-window counter keyed by client and route bucket.
    State lives in this process only; each worker keeps its own windows.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state: dict[str, tuple[int, float]] = {}
        self._last_sweep = time.monotonic()

    def _evict_expired(self, now: float, window_seconds: int) -> None:
        # At most one sweep per window; callers hold the lock.
        if now - self._last_sweep < window_seconds:
            return
        stale = [k for k, (_, start) in self._state.items() if now - start >= window_seconds]
        for k in stale:
            del self._state[k]
        self._last_sweep = now

    def __len__(self) -> int:
        with self._lock:
            return len(self._state)

    def allow(self, key: str, limit: int, window_seconds: int) -> tuple[bool, int]:
        """
        Returns (allowed, retry_after_seconds).
        """
        now = time.monotonic()
        with self._lock:
            self._evict_expired(now, window_seconds)
            count, window_start = self._state.get(key, (0, now))
            if now - window_start >= window_seconds:
                count = 0
                window_start = now
            if count >= limit:
                retry_after = max(1, int(window_seconds - (now - window_start)))
                return False, retry_after
            self._state[key] = (count + 1, window_start)
            return True, 0

    def reset(self) -> None:
        with self._lock:
            self._state.clear()


rate_limiter = InMemoryRateLimiter()
