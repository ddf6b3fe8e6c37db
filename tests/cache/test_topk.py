"""Tests for cache/topk.py.

Covers:
- Trimming to target_size on every insert
- Order independence of the retained strengths
- min_strength / best / take_best
- from_entries restoring order and size
"""

from __future__ import annotations

import itertools
import random

import pytest

from ygg_keygen.cache.topk import BoundedCache, CacheEntry
from ygg_keygen.core.errors import ErrorCode, NoCandidatesError


def _filled(strengths: list[int], target_size: int) -> BoundedCache[str]:
    cache: BoundedCache[str] = BoundedCache("signing", target_size)
    for index, strength in enumerate(strengths):
        cache.insert(f"key-{index}", strength)
    return cache


class TestInsert:
    """Tests for insert()."""

    def test_keeps_strongest_two(self) -> None:
        """Inserting 5, 3, 9, 1 with size 2 keeps 9 and 5."""
        cache = _filled([5, 3, 9, 1], target_size=2)

        assert cache.strengths() == [9, 5]
        assert cache.min_strength() == 5

    def test_sorted_descending_after_each_insert(self) -> None:
        """Entries stay strongest-first after every insert."""
        cache: BoundedCache[str] = BoundedCache("signing", 10)
        for strength in [4, 8, 1, 8, 6]:
            cache.insert("k", strength)
            assert cache.strengths() == sorted(cache.strengths(), reverse=True)

    def test_never_exceeds_target_size(self) -> None:
        """Length is bounded after every insert."""
        cache: BoundedCache[str] = BoundedCache("signing", 3)
        for strength in range(50):
            cache.insert("k", strength % 7)
            assert len(cache) <= 3

    def test_weaker_than_full_cache_is_evicted_immediately(self) -> None:
        """A new entry weaker than everything retained doesn't survive."""
        cache = _filled([9, 7, 5], target_size=3)

        cache.insert("weak", 1)

        assert cache.strengths() == [9, 7, 5]
        assert all(entry.candidate != "weak" for entry in cache)

    def test_shrunk_target_trims_fully_on_next_insert(self) -> None:
        """An oversized cache is cut all the way down, not by one entry."""
        cache = _filled([1, 2, 3, 4, 5, 6], target_size=6)
        cache.target_size = 2

        cache.insert("k", 0)

        assert cache.strengths() == [6, 5]

    def test_equal_strengths_keep_insertion_order(self) -> None:
        """Ties are broken by insertion order, earlier first."""
        cache: BoundedCache[str] = BoundedCache("signing", 5)
        cache.insert("first", 3)
        cache.insert("second", 3)
        cache.insert("stronger", 4)

        assert [entry.candidate for entry in cache] == ["stronger", "first", "second"]

    @pytest.mark.parametrize("target_size", [1, 2, 4])
    def test_retained_strengths_independent_of_order(self, target_size: int) -> None:
        """Every insertion order of the same strengths yields the same cache."""
        strengths = [2, 7, 4, 9, 1]
        expected = sorted(strengths, reverse=True)[:target_size]

        for order in itertools.permutations(strengths):
            assert _filled(list(order), target_size).strengths() == expected

    def test_random_sequences_keep_top_k(self) -> None:
        """Retained set equals the K strongest strengths seen."""
        rng = random.Random(1234)
        for _ in range(50):
            strengths = [rng.randrange(0, 40) for _ in range(rng.randrange(0, 60))]
            target_size = rng.randrange(1, 10)

            cache = _filled(strengths, target_size)

            assert cache.strengths() == sorted(strengths, reverse=True)[:target_size]

    def test_rejects_non_positive_size(self) -> None:
        with pytest.raises(ValueError, match="positive"):
            BoundedCache("signing", 0)


class TestMinStrength:
    def test_empty_cache_is_zero(self) -> None:
        assert BoundedCache("signing", 4).min_strength() == 0

    def test_not_full_cache_reports_weakest(self) -> None:
        assert _filled([3, 8], target_size=4).min_strength() == 3


class TestTakeBest:
    """Tests for take_best()."""

    def test_returns_strongest_and_removes_it(self) -> None:
        """On {9, 5}, take_best returns 9 and leaves {5}."""
        cache = _filled([5, 3, 9, 1], target_size=2)

        entry = cache.take_best()

        assert entry.strength == 9
        assert cache.strengths() == [5]

    def test_empty_cache_raises(self) -> None:
        """An empty cache has nothing to hand out."""
        cache: BoundedCache[str] = BoundedCache("encryption", 2)

        with pytest.raises(NoCandidatesError) as exc_info:
            cache.take_best()

        assert exc_info.value.code == ErrorCode.NO_CANDIDATES
        assert exc_info.value.details == {"kind": "encryption"}

    def test_best_does_not_consume(self) -> None:
        cache = _filled([2, 6], target_size=2)

        assert cache.best() == CacheEntry("key-1", 6)
        assert len(cache) == 2

    def test_best_on_empty_is_none(self) -> None:
        assert BoundedCache("signing", 1).best() is None


class TestFromEntries:
    def test_sorts_and_trims(self) -> None:
        """Loaded entries are reordered and cut to target_size."""
        cache = BoundedCache.from_entries("signing", 2, [("a", 1), ("b", 5), ("c", 3)])

        assert [(entry.candidate, entry.strength) for entry in cache] == [("b", 5), ("c", 3)]

    def test_empty_entries(self) -> None:
        cache = BoundedCache.from_entries("signing", 2, [])
        assert len(cache) == 0
