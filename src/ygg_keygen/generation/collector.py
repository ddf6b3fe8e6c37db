"""Single consumer folding producer output into a kind's cache."""

from __future__ import annotations

from ygg_keygen.cache.topk import BoundedCache
from ygg_keygen.generation.channel import Channel
from ygg_keygen.keys.base import Candidate


async def collect(
    channel: Channel[tuple[Candidate, int]],
    cache: BoundedCache[Candidate],
) -> BoundedCache[Candidate]:
    """Drain ``channel`` into ``cache`` until the channel closes."""
    async for candidate, strength in channel:
        cache.insert(candidate, strength)
    return cache
