"""Thread-safe keyed object cache.

Deduplicates expensive object construction across repeated requests for the
same key, from any number of threads:

- A hit returns the stored value unchanged (no reconstruction).
- A miss runs ``builder()`` exactly once; concurrent callers for the same key
  wait for that single construction and all receive its result.
- Construction runs *outside* the table lock, so builders for different keys
  never block each other.
- A stored value failing the injected ``is_live`` check (e.g. because a
  backing registry discarded it) is treated exactly like a miss.
- A failing builder leaves no entry behind. The exception propagates to the
  caller that triggered construction and to the callers waiting on it; the
  next request retries from scratch.

Caches are plain instances (not module globals), so each application or
test can own an isolated one.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CachedHandle(Generic[T]):
    """Shared immutable object plus the index it is registered under.

    Attributes:
        value: The cached physics object
        index: Identity of *value* in the backing registry

    """

    value: T
    index: int


@dataclass
class CacheStats:
    """Counters describing cache activity."""

    hits: int = 0
    misses: int = 0
    rebuilds: int = 0
    failures: int = 0


class _PendingBuild:
    """In-flight construction that other callers can wait on."""

    def __init__(self) -> None:
        self.done = threading.Event()
        self.value = None
        self.error: Optional[BaseException] = None


_MISSING = object()


def _always_live(value) -> bool:
    return True


class KeyedObjectCache(Generic[T]):
    """Memoizing map from canonical string keys to lazily built objects.

    Args:
        is_live: Predicate re-validating a stored value before it is
            returned. Values failing it are rebuilt. Defaults to always live.
        name: Label used in log messages.

    Example:
        >>> cache = KeyedObjectCache()
        >>> cache.get_or_create("Al2O3", lambda: expensive_build())
    """

    def __init__(
        self,
        is_live: Optional[Callable[[T], bool]] = None,
        name: str = "cache",
    ) -> None:
        self._is_live = is_live or _always_live
        self.name = name
        self._lock = threading.Lock()
        self._entries: Dict[str, T] = {}
        self._pending: Dict[str, _PendingBuild] = {}
        self._stats = CacheStats()

    def get_or_create(self, key: str, builder: Callable[[], T]) -> T:
        """Return the value cached under *key*, building it on a miss.

        Args:
            key: Canonical cache key
            builder: Zero-argument callable constructing the value

        Returns:
            The cached (or freshly constructed) value

        Raises:
            Exception: Whatever ``builder`` raised, for the triggering caller
                and for callers that waited on the same construction.

        """
        with self._lock:
            stale = False
            if key in self._entries:
                value = self._entries[key]
                if self._is_live(value):
                    self._stats.hits += 1
                    logger.debug("%s: hit for %r", self.name, key)
                    return value
                # Entry outlived its object in the backing registry
                del self._entries[key]
                stale = True
                self._stats.rebuilds += 1
                logger.debug("%s: stale entry for %r, rebuilding", self.name, key)

            pending = self._pending.get(key)
            if pending is None:
                pending = _PendingBuild()
                self._pending[key] = pending
                owner = True
                if not stale:
                    self._stats.misses += 1
            else:
                owner = False

        if not owner:
            pending.done.wait()
            if pending.error is not None:
                raise pending.error
            return pending.value

        try:
            value = builder()
        except BaseException as exc:
            with self._lock:
                del self._pending[key]
                self._stats.failures += 1
            pending.error = exc
            pending.done.set()
            logger.debug("%s: construction failed for %r: %s", self.name, key, exc)
            raise

        with self._lock:
            self._entries[key] = value
            del self._pending[key]
        pending.value = value
        pending.done.set()
        logger.debug("%s: constructed %r", self.name, key)
        return value

    def get(self, key: str) -> Optional[T]:
        """Return the live value stored under *key*, or None."""
        with self._lock:
            if key in self._entries and self._is_live(self._entries[key]):
                return self._entries[key]
            return None

    def invalidate(self, key: str) -> bool:
        """Drop the entry for *key*. Returns True if an entry was removed."""
        with self._lock:
            return self._entries.pop(key, _MISSING) is not _MISSING

    def clear(self) -> None:
        """Drop all entries (in-flight constructions still complete)."""
        with self._lock:
            self._entries.clear()

    def keys(self) -> List[str]:
        """Keys of all stored entries, live or not."""
        with self._lock:
            return list(self._entries.keys())

    def stats(self) -> CacheStats:
        """Snapshot of the hit/miss/rebuild/failure counters."""
        with self._lock:
            return CacheStats(**vars(self._stats))

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
