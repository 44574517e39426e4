"""Versioned per-instance result cache keyed by canonical feature-id sets."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def canonical_ids(feature_ids: Iterable[str]) -> list[str]:
    """Sorted, de-duplicated copy of feature_ids."""
    return sorted(set(feature_ids))


def canonical_key(feature_ids: Iterable[str]) -> str:
    """Order-independent cache key for a feature-id set."""
    return "|".join(canonical_ids(feature_ids))


class ResultCache(Generic[T]):
    """Map canonical key -> result, invalidated by advancing a version token.

    Entries written under an older version are never returned. Writing the
    same key twice with equal values is harmless, so concurrent queries that
    race on a miss need no locking.
    """

    def __init__(self, name: str = "results") -> None:
        self.name = name
        self._version = 0
        self._entries: dict[str, tuple[int, T]] = {}

    @property
    def version(self) -> int:
        return self._version

    def __len__(self) -> int:
        return sum(1 for v, _ in self._entries.values() if v == self._version)

    def get(self, key: str) -> T | None:
        entry = self._entries.get(key)
        if entry is None or entry[0] != self._version:
            return None
        logger.debug("%s cache hit: %s", self.name, key)
        return entry[1]

    def put(self, key: str, value: T) -> T:
        self._entries[key] = (self._version, value)
        return value

    def get_or_compute(self, key: str, compute: Callable[[], T]) -> T:
        cached = self.get(key)
        if cached is not None:
            return cached
        logger.debug("%s cache miss: %s", self.name, key)
        return self.put(key, compute())

    def clear(self) -> None:
        """Drop every entry; the next lookup of any key recomputes."""
        self._version += 1
        self._entries = {}
