"""Generate keys: load the cache, run a round, hand out the best, persist.

The cache file stays locked from load to store, so concurrent invocations
run one after the other and each one hands out a different key.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Sequence
from concurrent.futures import Executor
from ipaddress import IPv6Address
from pathlib import Path

import structlog
from pydantic import BaseModel

from ygg_keygen.cache.store import CacheStore
from ygg_keygen.cache.topk import BoundedCache, CacheEntry
from ygg_keygen.config.models import KeygenConfig
from ygg_keygen.config.paths import default_cache_path, legacy_cache_path, migrate_legacy_cache
from ygg_keygen.core.errors import NoCandidatesError
from ygg_keygen.core.logging import clear_round_id, set_round_id
from ygg_keygen.core.progress import pluralize, spinner
from ygg_keygen.generation.round import RoundResult, RoundSpec, make_executor, run_round
from ygg_keygen.keys import registry
from ygg_keygen.keys.base import Candidate, KeyKind, Rng

logger = structlog.get_logger()


class KeyOutput(BaseModel):
    """One handed-out key as printed to stdout."""

    public: str
    secret: str
    address: IPv6Address
    strength: int

    @classmethod
    def from_entry(cls, kind: KeyKind, entry: CacheEntry[Candidate]) -> KeyOutput:
        secret, public = kind.encode(entry.candidate)
        return cls(
            public=public,
            secret=secret,
            address=kind.derive_address(entry.candidate),
            strength=entry.strength,
        )


def resolve_cache_path(config: KeygenConfig) -> Path:
    """Configured cache path, or the default one after migrating a legacy cache."""
    if config.cache_path is not None:
        return config.cache_path
    path = default_cache_path()
    migrate_legacy_cache(legacy_cache_path(), path)
    return path


def _kinds_for(config: KeygenConfig) -> list[KeyKind]:
    return [registry.get(name) for name in config.kinds]


def _run_round(
    specs: Sequence[RoundSpec],
    config: KeygenConfig,
    executor: Executor | None,
    rng: Rng,
) -> dict[str, RoundResult]:
    total = sum(spec.tries for spec in specs)
    names = ", ".join(spec.kind.name for spec in specs)
    with spinner(f"Generating {pluralize(total, 'candidate')} ({names})"):
        if executor is not None:
            return asyncio.run(run_round(specs, executor, rng))
        with make_executor(config.executor, config.max_workers) as pool:
            return asyncio.run(run_round(specs, pool, rng))


def _take_outputs(
    kinds: Sequence[KeyKind],
    caches: dict[str, BoundedCache[Candidate]],
) -> dict[str, KeyOutput | None]:
    outputs: dict[str, KeyOutput | None] = {}
    for kind in kinds:
        try:
            entry = caches[kind.name].take_best()
        except NoCandidatesError:
            logger.warning("no_candidates", kind=kind.name)
            outputs[kind.name] = None
            continue
        outputs[kind.name] = KeyOutput.from_entry(kind, entry)
        logger.info("key_emitted", kind=kind.name, strength=entry.strength, remaining=len(caches[kind.name]))
    return outputs


def generate_keys(
    config: KeygenConfig,
    *,
    executor: Executor | None = None,
    rng: Rng = os.urandom,
) -> dict[str, KeyOutput | None]:
    """Run one round and consume the strongest cached key of every kind.

    Args:
        config: Resolved configuration.
        executor: Run generation here instead of a fresh pool from ``config``.
        rng: Randomness source handed to every producer.

    Returns:
        Output per kind, in ``config.kinds`` order. A kind without any
        candidate maps to None (``on_empty="omit"``).

    Raises:
        CacheLockError: If the cache file can't be locked.
        CacheFileError: If the cache file is unreadable. It is not rewritten.
        NoCandidatesError: If a kind is empty and ``on_empty="fail"``. The
            round's candidates are persisted first; nothing is consumed.
    """
    kinds = _kinds_for(config)
    plans = {plan.kind: plan for plan in config.plans()}
    path = resolve_cache_path(config)
    set_round_id()
    try:
        with CacheStore(path) as store:
            caches = store.load([(kind, plans[kind.name].cache_size) for kind in kinds])
            specs = [RoundSpec(kind, caches[kind.name], plans[kind.name].tries) for kind in kinds]
            results = _run_round(specs, config, executor, rng)
            caches = {name: result.cache for name, result in results.items()}

            empty = [kind.name for kind in kinds if not len(caches[kind.name])]
            if empty and config.on_empty == "fail":
                store.store(caches)
                raise NoCandidatesError.for_kind(empty[0])

            outputs = _take_outputs(kinds, caches)
            store.store(caches)
        return outputs
    finally:
        clear_round_id()


def inspect_cache(config: KeygenConfig) -> dict[str, BoundedCache[Candidate]]:
    """Load the caches of the configured kinds without changing the file."""
    kinds = _kinds_for(config)
    plans = {plan.kind: plan for plan in config.plans()}
    with CacheStore(resolve_cache_path(config)) as store:
        return store.load([(kind, plans[kind.name].cache_size) for kind in kinds])


def clear_cache(config: KeygenConfig) -> Path:
    """Empty the cache file (every kind) under the lock. Returns its path."""
    path = resolve_cache_path(config)
    with CacheStore(path) as store:
        store.clear()
    return path
