"""Process-local TTL cache and in-flight generation registry.

Both structures live for the lifetime of the process and are NOT shared
between workers; the "one generation at a time" and "serve from cache"
guarantees only hold inside a single process. Call sites go through the
small interfaces below so a distributed cache/lock can replace them later.
"""

import threading
from dataclasses import dataclass
from time import monotonic, time
from typing import Any

from ideavault.core.config import get_settings


class TTLCache:
    """Timestamped map; an entry is served while ``now - timestamp < ttl``.

    Expired entries are ignored on read but never evicted.
    """

    def __init__(self, default_ttl: float):
        self.default_ttl = default_ttl
        self._lock = threading.Lock()
        self._entries: dict[str, tuple[Any, float, float]] = {}

    def get(self, key: str) -> Any | None:
        now = monotonic()
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        value, ts, ttl = entry
        if now - ts < ttl:
            return value
        return None

    def put(self, key: str, value: Any, ttl: float | None = None) -> None:
        with self._lock:
            self._entries[key] = (value, monotonic(), self.default_ttl if ttl is None else ttl)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


@dataclass
class QueueEntry:
    """Marker for one in-flight report generation."""

    start_time: float
    checksum: str


class GenerationQueue:
    """At most one in-flight generation per key; later callers are rejected."""

    def __init__(self):
        self._lock = threading.Lock()
        self._active: dict[str, QueueEntry] = {}

    def try_acquire(self, key: str, checksum: str) -> bool:
        with self._lock:
            if key in self._active:
                return False
            self._active[key] = QueueEntry(start_time=time(), checksum=checksum)
            return True

    def release(self, key: str) -> None:
        with self._lock:
            self._active.pop(key, None)

    def is_active(self, key: str) -> bool:
        with self._lock:
            return key in self._active

    def get(self, key: str) -> QueueEntry | None:
        with self._lock:
            return self._active.get(key)

    def clear(self) -> None:
        with self._lock:
            self._active.clear()


class HourlyQuota:
    """Counters that reset one hour after the last reset."""

    WINDOW_SECONDS = 3600

    def __init__(self, limits: dict[str, int]):
        self.limits = limits
        self._lock = threading.Lock()
        self._counts: dict[str, int] = {}
        self._last_reset = monotonic()

    def _maybe_reset(self) -> None:
        now = monotonic()
        if now - self._last_reset > self.WINDOW_SECONDS:
            self._counts = {}
            self._last_reset = now

    def record(self, kind: str) -> None:
        with self._lock:
            self._maybe_reset()
            self._counts[kind] = self._counts.get(kind, 0) + 1

    def is_exceeded(self, kind: str) -> bool:
        with self._lock:
            self._maybe_reset()
            return self._counts.get(kind, 0) >= self.limits.get(kind, float("inf"))

    def clear(self) -> None:
        with self._lock:
            self._counts = {}
            self._last_reset = monotonic()


_report_cache: TTLCache | None = None
_embedding_cache: TTLCache | None = None
_report_queue: GenerationQueue | None = None
_quota: HourlyQuota | None = None
_init_lock = threading.Lock()


def get_report_cache() -> TTLCache:
    global _report_cache
    with _init_lock:
        if _report_cache is None:
            _report_cache = TTLCache(get_settings().REPORT_CACHE_TTL_SECONDS)
        return _report_cache


def get_embedding_cache() -> TTLCache:
    global _embedding_cache
    with _init_lock:
        if _embedding_cache is None:
            _embedding_cache = TTLCache(get_settings().EMBEDDING_CACHE_TTL_SECONDS)
        return _embedding_cache


def get_report_queue() -> GenerationQueue:
    global _report_queue
    with _init_lock:
        if _report_queue is None:
            _report_queue = GenerationQueue()
        return _report_queue


def get_quota() -> HourlyQuota:
    global _quota
    with _init_lock:
        if _quota is None:
            settings = get_settings()
            _quota = HourlyQuota(
                {
                    "embeddings": settings.EMBEDDING_HOURLY_QUOTA,
                    "reports": settings.REPORT_HOURLY_QUOTA,
                }
            )
        return _quota


def reset_memory_stores() -> None:
    """Drop every process-local cache, queue entry and counter."""
    global _report_cache, _embedding_cache, _report_queue, _quota
    with _init_lock:
        _report_cache = None
        _embedding_cache = None
        _report_queue = None
        _quota = None
