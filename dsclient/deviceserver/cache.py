"""
Response Cache.

Time-bounded memoization of GET responses keyed by request URL. Entries
expire after a TTL; a background sweeper thread purges expired entries on a
fixed interval so memory stays bounded even for URLs that are never read
again. All access to the entry map is serialized by a lock, so the sweeper,
request handlers, and any other threads can use the cache concurrently.
"""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from dsclient.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TTL_SECONDS = 120.0
DEFAULT_SWEEP_INTERVAL_SECONDS = 30.0


@dataclass
class _Entry:
    value: Any
    expires_at: float


class ResponseCache:
    """
    URL-keyed cache with per-entry expiry and a background sweeper.

    Usage:
        cache = ResponseCache(default_ttl=120, sweep_interval=30)
        cache.set(url, document)
        document = cache.get(url)   # None once expired
        cache.close()               # stops the sweeper

    Args:
        default_ttl: Lifetime in seconds for entries set without a TTL.
        sweep_interval: Seconds between sweeps. 0 disables the sweeper.
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        sweep_interval: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if default_ttl <= 0:
            raise ValueError("default_ttl must be positive")
        if sweep_interval < 0:
            raise ValueError("sweep_interval must not be negative")

        self.default_ttl = default_ttl
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        self._sweeper: threading.Thread | None = None

        if sweep_interval > 0:
            self._sweeper = threading.Thread(
                target=self._run_sweeper,
                name="response-cache-sweeper",
                daemon=True,
            )
            self._sweeper.start()

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store a value, replacing any previous entry for the key."""
        lifetime = self.default_ttl if ttl is None else ttl
        with self._lock:
            self._entries[key] = _Entry(value=value, expires_at=self._clock() + lifetime)

    def lookup(self, key: str) -> tuple[Any, bool]:
        """Return (value, found). Expired entries are reported as absent."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None, False
            if entry.expires_at <= self._clock():
                return None, False
            return entry.value, True

    def get(self, key: str) -> Any:
        """Return the stored value, or None if absent or expired."""
        value, _ = self.lookup(key)
        return value

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def sweep(self) -> int:
        """Remove all expired entries. Returns the number removed."""
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug("Cache sweep", purged=len(expired))
        return len(expired)

    def close(self) -> None:
        """Stop the sweeper thread. Safe to call more than once."""
        self._stopped.set()
        if self._sweeper is not None and self._sweeper is not threading.current_thread():
            self._sweeper.join(timeout=self.sweep_interval + 1)
        self._sweeper = None

    @property
    def closed(self) -> bool:
        return self._stopped.is_set()

    def _run_sweeper(self) -> None:
        while not self._stopped.wait(self.sweep_interval):
            self.sweep()

    def __len__(self) -> int:
        """Number of stored entries, including expired ones not yet swept."""
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        _, found = self.lookup(key)
        return found
