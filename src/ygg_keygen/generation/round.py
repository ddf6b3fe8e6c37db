"""One generation round: fan producers out, collect into the caches.

For every kind, the admission threshold is read from the cache once, before
any producer starts, and held for the whole round. Each kind gets one
collector task that owns its cache until the channel is drained; producers
only ever see the threshold and the channel.
"""

from __future__ import annotations

import asyncio
import os
import time
from collections.abc import Sequence
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass

import structlog

from ygg_keygen.cache.topk import BoundedCache
from ygg_keygen.config.models import ExecutorKind
from ygg_keygen.generation.channel import Channel
from ygg_keygen.generation.collector import collect
from ygg_keygen.generation.producer import produce
from ygg_keygen.keys.base import Candidate, KeyKind, Rng

logger = structlog.get_logger()


@dataclass
class RoundSpec:
    """What to run for one kind."""

    kind: KeyKind
    cache: BoundedCache[Candidate]
    tries: int


@dataclass
class RoundResult:
    """Outcome of one kind's round."""

    kind: str
    cache: BoundedCache[Candidate]
    tries: int
    threshold: int
    admitted: int


def make_executor(kind: ExecutorKind, max_workers: int | None = None) -> Executor:
    """Executor for key generation. Processes sidestep the GIL; threads are cheap to start."""
    if kind == "process":
        return ProcessPoolExecutor(max_workers=max_workers)
    return ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="ygg-keygen")


async def run_round(
    specs: Sequence[RoundSpec],
    executor: Executor | None = None,
    rng: Rng = os.urandom,
) -> dict[str, RoundResult]:
    """Run ``tries`` producers per kind and return the finalized caches.

    Raises:
        ChannelClosedError: If a producer outlived its collector.
    """
    start = time.perf_counter()
    thresholds = {spec.kind.name: spec.cache.min_strength() for spec in specs}
    channels: dict[str, Channel[tuple[Candidate, int]]] = {
        spec.kind.name: Channel(spec.kind.name) for spec in specs
    }
    collectors = {
        spec.kind.name: asyncio.create_task(collect(channels[spec.kind.name], spec.cache))
        for spec in specs
    }

    for spec in specs:
        logger.info(
            "round_started",
            kind=spec.kind.name,
            tries=spec.tries,
            threshold=thresholds[spec.kind.name],
        )

    producers = [
        asyncio.create_task(
            produce(spec.kind, thresholds[spec.kind.name], channels[spec.kind.name], executor, rng)
        )
        for spec in specs
        for _ in range(spec.tries)
    ]

    try:
        await asyncio.gather(*producers)
    except BaseException:
        for task in producers:
            task.cancel()
        await asyncio.gather(*producers, return_exceptions=True)
        raise
    finally:
        # Every producer is done, so nothing can send any more
        for channel in channels.values():
            channel.close()
        caches = {name: await task for name, task in collectors.items()}

    elapsed = time.perf_counter() - start
    results: dict[str, RoundResult] = {}
    for spec in specs:
        name = spec.kind.name
        best = caches[name].best()
        results[name] = RoundResult(
            kind=name,
            cache=caches[name],
            tries=spec.tries,
            threshold=thresholds[name],
            admitted=channels[name].sent,
        )
        logger.info(
            "round_finished",
            kind=name,
            admitted=channels[name].sent,
            size=len(caches[name]),
            best=best.strength if best else None,
            elapsed_s=round(elapsed, 3),
        )
    return results
