"""Bounded top-K candidate cache.

Keeps the ``target_size`` strongest entries seen, strongest first. Every
insert trims back down to ``target_size``, so the retained set only depends
on which strengths were inserted, not on their order (entries of equal
strength keep insertion order).
"""

from __future__ import annotations

import bisect
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ygg_keygen.core.errors import NoCandidatesError


@dataclass(frozen=True, slots=True)
class CacheEntry[T]:
    candidate: T
    strength: int


def _sort_key(entry: CacheEntry[object]) -> int:
    return -entry.strength


class BoundedCache[T]:
    """Strongest-first collection capped at ``target_size`` entries."""

    def __init__(self, kind: str, target_size: int) -> None:
        if target_size < 1:
            raise ValueError(f"target_size must be positive, got {target_size}")
        self.kind = kind
        self.target_size = target_size
        self._entries: list[CacheEntry[T]] = []

    @classmethod
    def from_entries(
        cls, kind: str, target_size: int, entries: Iterable[tuple[T, int]]
    ) -> BoundedCache[T]:
        """Build a cache from loaded entries, restoring order and size."""
        cache = cls(kind, target_size)
        for candidate, strength in entries:
            cache.insert(candidate, strength)
        return cache

    def insert(self, candidate: T, strength: int) -> None:
        """Add an entry, then evict the weakest until within ``target_size``."""
        bisect.insort_right(self._entries, CacheEntry(candidate, strength), key=_sort_key)
        while len(self._entries) > self.target_size:
            self._entries.pop()

    def min_strength(self) -> int:
        """Strength of the weakest retained entry, or 0 when empty."""
        if not self._entries:
            return 0
        return self._entries[-1].strength

    def best(self) -> CacheEntry[T] | None:
        return self._entries[0] if self._entries else None

    def take_best(self) -> CacheEntry[T]:
        """Remove and return the strongest entry.

        Raises:
            NoCandidatesError: If the cache is empty.
        """
        if not self._entries:
            raise NoCandidatesError.for_kind(self.kind)
        return self._entries.pop(0)

    def strengths(self) -> list[int]:
        return [entry.strength for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CacheEntry[T]]:
        return iter(list(self._entries))

    def __repr__(self) -> str:
        return f"BoundedCache(kind={self.kind!r}, target_size={self.target_size}, strengths={self.strengths()})"
