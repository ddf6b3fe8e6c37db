"""One-shot candidate producers."""

from __future__ import annotations

import asyncio
import os
from concurrent.futures import Executor

from ygg_keygen.generation.channel import Channel
from ygg_keygen.keys.base import Candidate, KeyKind, Rng


def generate_scored(kind: KeyKind, rng: Rng = os.urandom) -> tuple[Candidate, int]:
    """Generate and score one candidate. Runs inside the executor."""
    candidate = kind.generate(rng)
    return candidate, kind.strength(candidate)


async def produce(
    kind: KeyKind,
    threshold: int,
    channel: Channel[tuple[Candidate, int]],
    executor: Executor | None = None,
    rng: Rng = os.urandom,
) -> bool:
    """Generate one candidate and forward it if it beats ``threshold``.

    ``threshold`` is the round's fixed admission bar; it isn't re-read while
    the round runs. Returns True if the candidate was forwarded.

    Raises:
        ChannelClosedError: If the collector is gone. Never expected.
    """
    loop = asyncio.get_running_loop()
    candidate, strength = await loop.run_in_executor(executor, generate_scored, kind, rng)
    if strength <= threshold:
        return False
    channel.send((candidate, strength))
    return True
