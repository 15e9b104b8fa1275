"""
cloud_inventory/auth/cache/cache.py - Per-driver client cache

- CacheEntry: cached value with creation time
- ClientCache: thread-safe (region-or-global, service) -> client mapping

One ClientCache belongs to one Driver instance and is dropped by
``Driver.destroy()``. There is no module-level cache.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from ...config import GLOBAL_SCOPE

logger = logging.getLogger(__name__)

T = TypeVar("T")

CacheKey = tuple[str, str]


@dataclass
class CacheEntry(Generic[T]):
    """Cached value

    Attributes:
        value: cached value
        created_at: creation time (UTC)
    """

    value: T
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ClientCache:
    """Lazily built backend clients keyed by (region-or-global, service)

    A miss runs the factory under the lock, so a key is constructed at most
    once even when several worker threads ask for it together.

    Example:
        cache = ClientCache("aws")
        ec2 = cache.get_or_create("us-west-2", "ec2", lambda: session.client("ec2"))
        iam = cache.get_or_create(None, "iam", lambda: session.client("iam"))
    """

    def __init__(self, provider: str):
        self.provider = provider
        self._entries: dict[CacheKey, CacheEntry[Any]] = {}
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    @staticmethod
    def make_key(region: str | None, service: str) -> CacheKey:
        return (region or GLOBAL_SCOPE, service)

    def get_or_create(self, region: str | None, service: str, factory: Callable[[], T]) -> T:
        """Cached client for (region, service), built by ``factory`` on first use"""
        key = self.make_key(region, service)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                self._hits += 1
                return entry.value

            self._misses += 1
            value = factory()
            self._entries[key] = CacheEntry(value=value)
            logger.debug(f"[{self.provider}] client created: {key[1]} ({key[0]})")
            return value

    def get(self, region: str | None, service: str) -> Any | None:
        """Cached client or None, without building one"""
        with self._lock:
            entry = self._entries.get(self.make_key(region, service))
            return entry.value if entry else None

    def keys(self) -> list[CacheKey]:
        with self._lock:
            return list(self._entries)

    @property
    def hits(self) -> int:
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        with self._lock:
            return self._misses

    def clear(self) -> None:
        """Drop every cached client and reset the counters"""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
