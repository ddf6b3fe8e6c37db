"""Lock-guarded persistence for the candidate caches.

The cache file is YAML mapping kind name to a strongest-first list of
``[hex_key, strength]`` pairs::

    signing:
    - - 9f3c...e1
      - 14
    - - 02ab...7d
      - 12

One process at a time owns the file: ``CacheStore`` opens it (creating it if
needed) and takes an exclusive lock that is held until the context exits.
A second invocation against the same path blocks until the first is done.

Store rewrites the file in place. A crash mid-write can corrupt it, which at
worst loses the cache; it's regenerable.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from enum import Enum
from pathlib import Path
from types import TracebackType
from typing import IO, Any

import portalocker
import structlog
import yaml

from ygg_keygen.cache.topk import BoundedCache
from ygg_keygen.core.errors import CacheFileError, CacheLockError, InternalError, KeyDecodeError
from ygg_keygen.keys.base import Candidate, KeyKind

logger = structlog.get_logger()

# Top-level key of the single-kind layout written before kinds existed
LEGACY_KEYS_FIELD = "keys"
LEGACY_KIND = "signing"


class StoreState(Enum):
    UNLOCKED = "unlocked"
    LOCKED = "locked"
    LOADED = "loaded"
    STORED = "stored"
    RELEASED = "released"


def _parse_entry(kind: KeyKind, raw: Any) -> tuple[Candidate, int] | None:
    """Decode one ``[hex, strength]`` pair, or None if it's unusable."""
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        return None
    text, strength = raw
    if not isinstance(text, str) or isinstance(strength, bool) or not isinstance(strength, int):
        return None
    if strength < 0:
        return None
    try:
        return kind.decode(text), strength
    except KeyDecodeError:
        return None


class CacheStore:
    """Exclusive owner of one cache file for the duration of a ``with`` block."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.state = StoreState.UNLOCKED
        self._handle: IO[str] | None = None
        self._kinds: dict[str, KeyKind] = {}
        # Sections for kinds not loaded this run, written back untouched
        self._passthrough: dict[str, Any] = {}

    def __enter__(self) -> CacheStore:
        self.acquire()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.release()

    def acquire(self) -> None:
        """Open-or-create the file and block until it is exclusively locked.

        Raises:
            CacheLockError: If the file can't be opened or locked.
        """
        if self._handle is not None:
            raise InternalError.unexpected("cache store already acquired", path=str(self.path))
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_RDWR | os.O_CREAT, 0o600)
            handle = os.fdopen(fd, "r+", encoding="utf-8")
        except OSError as e:
            raise CacheLockError.acquire_failed(str(self.path), str(e)) from e

        try:
            portalocker.lock(handle, portalocker.LockFlags.EXCLUSIVE)
        except (portalocker.exceptions.LockException, OSError) as e:
            handle.close()
            raise CacheLockError.acquire_failed(str(self.path), str(e)) from e

        self._handle = handle
        self.state = StoreState.LOCKED
        logger.debug("cache_locked", path=str(self.path))

    def release(self) -> None:
        """Unlock and close the file. Safe to call more than once."""
        handle, self._handle = self._handle, None
        if handle is None:
            return
        try:
            portalocker.unlock(handle)
        finally:
            handle.close()
            self.state = StoreState.RELEASED
            logger.debug("cache_released", path=str(self.path))

    def _require_handle(self) -> IO[str]:
        if self._handle is None:
            raise InternalError.unexpected("cache store used without holding the lock", path=str(self.path))
        return self._handle

    def _read_document(self) -> dict[str, Any]:
        handle = self._require_handle()
        handle.seek(0)
        try:
            text = handle.read()
            data = yaml.safe_load(text) if text.strip() else None
        except (UnicodeDecodeError, yaml.YAMLError) as e:
            raise CacheFileError.parse_error(str(self.path), str(e)) from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise CacheFileError.parse_error(str(self.path), "top level must be a mapping")

        for name, section in data.items():
            if not isinstance(name, str) or not isinstance(section, list):
                raise CacheFileError.parse_error(str(self.path), f"section {name!r} must be a list")

        legacy = data.pop(LEGACY_KEYS_FIELD, None)
        if legacy is not None:
            # Merged; load() re-sorts and trims
            data[LEGACY_KIND] = data.get(LEGACY_KIND, []) + legacy
            logger.debug("legacy_keys_merged", kind=LEGACY_KIND, count=len(legacy))
        return data

    def load(self, specs: Sequence[tuple[KeyKind, int]]) -> dict[str, BoundedCache[Candidate]]:
        """Read the file into one cache per requested kind.

        Args:
            specs: ``(kind, target_size)`` for every kind of this run.

        Returns:
            Caches keyed by kind name. Kinds missing from the file are empty.

        Raises:
            CacheFileError: If the file isn't a valid cache document. The file
                is left as is and ``store`` is refused afterwards.
        """
        document = self._read_document()

        caches: dict[str, BoundedCache[Candidate]] = {}
        self._kinds = {}
        for kind, target_size in specs:
            raw_entries = document.pop(kind.name, [])
            parsed = [_parse_entry(kind, raw) for raw in raw_entries]
            entries = [entry for entry in parsed if entry is not None]
            dropped = len(parsed) - len(entries)
            if dropped:
                logger.debug("cache_entries_dropped", kind=kind.name, count=dropped)

            cache = BoundedCache.from_entries(kind.name, target_size, entries)
            caches[kind.name] = cache
            self._kinds[kind.name] = kind
            logger.info(
                "cache_loaded",
                kind=kind.name,
                size=len(cache),
                min_strength=cache.min_strength(),
            )

        self._passthrough = document
        self.state = StoreState.LOADED
        return caches

    def store(self, caches: Mapping[str, BoundedCache[Candidate]]) -> None:
        """Rewrite the whole file with ``caches`` plus untouched other kinds.

        Raises:
            InternalError: If called before a successful ``load``.
            CacheFileError: If writing fails.
        """
        handle = self._require_handle()
        if self.state not in (StoreState.LOADED, StoreState.STORED):
            raise InternalError.unexpected("refusing to store a cache file that was never loaded")

        document: dict[str, Any] = dict(self._passthrough)
        for name, cache in caches.items():
            kind = self._kinds[name]
            document[name] = [[kind.encode_joined(entry.candidate), entry.strength] for entry in cache]

        text = yaml.safe_dump(document, sort_keys=True, default_flow_style=False)
        try:
            handle.seek(0)
            handle.write(text)
            handle.truncate()
            handle.flush()
            os.fsync(handle.fileno())
        except OSError as e:
            raise CacheFileError.write_failed(str(self.path), str(e)) from e

        self.state = StoreState.STORED
        logger.info("cache_stored", path=str(self.path), kinds=sorted(caches))

    def clear(self) -> None:
        """Truncate the file to empty while keeping the lock."""
        handle = self._require_handle()
        handle.seek(0)
        handle.truncate()
        handle.flush()
        self._passthrough = {}
        logger.info("cache_cleared", path=str(self.path))
