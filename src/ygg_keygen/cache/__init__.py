"""Candidate caches and their on-disk persistence."""

from ygg_keygen.cache.store import CacheStore, StoreState
from ygg_keygen.cache.topk import BoundedCache, CacheEntry

__all__ = [
    "BoundedCache",
    "CacheEntry",
    "CacheStore",
    "StoreState",
]
