"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
keeps tests away from the real config/cache directories, and provides a
scripted key kind whose strengths tests control exactly.
"""

import logging
import os
import sys
import threading
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from ipaddress import IPv6Address
from pathlib import Path

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from ygg_keygen.core.errors import KeyDecodeError  # noqa: E402
from ygg_keygen.keys.base import Candidate, KeyKind, Rng  # noqa: E402


class ScriptedKind(KeyKind):
    """Key kind handing out pre-set strengths in call order, then zeros.

    The strength is stored as the single public byte, so candidates survive
    a trip through the cache file unchanged.
    """

    name = "signing"

    def __init__(self, strengths: Iterable[int] = (), name: str = "signing") -> None:
        self.name = name
        self._strengths = list(strengths)
        self._lock = threading.Lock()
        self.calls = 0

    def generate(self, rng: Rng = os.urandom) -> Candidate:
        with self._lock:
            index = self.calls
            self.calls += 1
        strength = self._strengths[index] if index < len(self._strengths) else 0
        return Candidate(secret=index.to_bytes(4, "big"), public=bytes([strength]))

    def strength(self, candidate: Candidate) -> int:
        return candidate.public[0]

    def encode(self, candidate: Candidate) -> tuple[str, str]:
        return candidate.secret.hex(), candidate.public.hex()

    def encode_joined(self, candidate: Candidate) -> str:
        return (candidate.secret + candidate.public).hex()

    def decode(self, text: str) -> Candidate:
        raw = self._fromhex(text)
        if len(raw) != 5:
            raise KeyDecodeError.invalid(self.name, "expected 5 bytes")
        return Candidate(secret=raw[:4], public=raw[4:])

    def derive_address(self, candidate: Candidate) -> IPv6Address:
        return IPv6Address(bytes([0x02, candidate.public[0]]) + bytes(14))


@pytest.fixture
def scripted_kind() -> type[ScriptedKind]:
    """The ScriptedKind class, for tests that build their own instances."""
    return ScriptedKind


@pytest.fixture
def thread_executor() -> Iterator[ThreadPoolExecutor]:
    with ThreadPoolExecutor(max_workers=4) as executor:
        yield executor


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME and XDG roots into tmp_path and drop YGG_KEYGEN__ env vars."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CACHE_HOME", str(home / ".cache"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    for key in list(os.environ):
        if key.upper().startswith("YGG_KEYGEN__"):
            monkeypatch.delenv(key)
    return home


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo configure_logging so handlers never outlive a captured stream."""
    yield
    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    structlog.reset_defaults()
