"""In-memory expiring cache for off-chain jetton content."""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import threading
import time
from typing import Callable, Optional

from cachetools import TLRUCache

from ..types import OffchainContent

LOGGER = logging.getLogger(__name__)

DEFAULT_TTL = 5 * 60.0
DEFAULT_CLEANUP_INTERVAL = 10 * 60.0


@dataclass(frozen=True)
class _Entry:
    content: OffchainContent
    ttl: float


def _time_to_use(_key: str, entry: _Entry, now: float) -> float:
    return now + entry.ttl


class ContentCache:
    """URI keyed cache with a per-entry time-to-live.

    Entries written without an explicit ``ttl`` expire after ``default_ttl``
    seconds. Expired entries are never returned; a daemon thread additionally
    drops them every ``cleanup_interval`` seconds (pass ``None`` to disable
    the sweeper). There is no size bound.

    The cache is safe to share between threads. Concurrent writes to the same
    URI are last-write-wins.
    """

    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL,
        cleanup_interval: Optional[float] = DEFAULT_CLEANUP_INTERVAL,
        *,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        if default_ttl <= 0:
            raise ValueError("default_ttl must be positive")
        self.default_ttl = default_ttl
        self._lock = threading.Lock()
        self._data: TLRUCache = TLRUCache(maxsize=math.inf, ttu=_time_to_use, timer=timer)
        self._stop = threading.Event()
        self._sweeper: Optional[threading.Thread] = None
        if cleanup_interval:
            self._sweeper = threading.Thread(
                target=self._sweep_loop,
                args=(cleanup_interval,),
                name="jetton-meta-cache-sweeper",
                daemon=True,
            )
            self._sweeper.start()

    def get(self, uri: str) -> Optional[OffchainContent]:
        with self._lock:
            entry = self._data.get(uri)
        if entry is None:
            return None
        return entry.content

    def set(self, uri: str, content: OffchainContent, ttl: Optional[float] = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        with self._lock:
            self._data[uri] = _Entry(content=content, ttl=ttl)

    def expire(self) -> int:
        """Drop expired entries and return how many were removed."""

        with self._lock:
            removed = self._data.expire()
        return len(removed)

    def __len__(self) -> int:
        with self._lock:
            self._data.expire()
            return len(self._data)

    def __contains__(self, uri: object) -> bool:
        with self._lock:
            return uri in self._data

    def close(self) -> None:
        self._stop.set()
        if self._sweeper is not None and self._sweeper is not threading.current_thread():
            self._sweeper.join(timeout=1.0)
        self._sweeper = None

    def __enter__(self) -> "ContentCache":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _sweep_loop(self, interval: float) -> None:
        while not self._stop.wait(interval):
            removed = self.expire()
            if removed:
                LOGGER.debug("Swept %d expired content cache entries", removed)


_default_cache: Optional[ContentCache] = None
_default_cache_lock = threading.Lock()


def default_cache() -> ContentCache:
    """Return the lazily created process-wide cache."""

    global _default_cache
    with _default_cache_lock:
        if _default_cache is None:
            _default_cache = ContentCache()
        return _default_cache
