"""Key kind interface and registry.

A key kind is the opaque generation capability the rest of the package
works against: it creates candidates, scores them, and converts them to and
from the hex forms used in the cache file and in the output document.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from ipaddress import IPv6Address
from typing import ClassVar

from ygg_keygen.core.errors import KeyDecodeError, UnknownKindError

Rng = Callable[[int], bytes]
"""Randomness source: returns the requested number of random bytes."""


@dataclass(frozen=True, slots=True)
class Candidate:
    """Raw key material for one generated identity."""

    secret: bytes
    public: bytes


class KeyKind(ABC):
    """One independently cached category of key."""

    name: ClassVar[str]

    @abstractmethod
    def generate(self, rng: Rng = os.urandom) -> Candidate:
        """Create a fresh candidate from ``rng``."""

    @abstractmethod
    def strength(self, candidate: Candidate) -> int:
        """Score a candidate. Higher is better."""

    @abstractmethod
    def encode(self, candidate: Candidate) -> tuple[str, str]:
        """Return ``(secret_hex, public_hex)`` for the output document."""

    @abstractmethod
    def encode_joined(self, candidate: Candidate) -> str:
        """Return the single hex string stored in the cache file."""

    @abstractmethod
    def decode(self, text: str) -> Candidate:
        """Parse a cache-file hex string.

        Raises:
            KeyDecodeError: If the text is not a valid key of this kind.
        """

    @abstractmethod
    def derive_address(self, candidate: Candidate) -> IPv6Address:
        """Network address the candidate's identity maps to."""

    def _fromhex(self, text: str) -> bytes:
        try:
            return bytes.fromhex(text)
        except (TypeError, ValueError) as e:
            raise KeyDecodeError.invalid(self.name, f"not hex: {e}") from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class KindRegistry:
    """Registry of key kinds by name."""

    def __init__(self) -> None:
        self._kinds: dict[str, KeyKind] = {}

    def register(self, kind: KeyKind) -> KeyKind:
        self._kinds[kind.name] = kind
        return kind

    def get(self, name: str) -> KeyKind:
        """Get a kind by name.

        Raises:
            UnknownKindError: If no kind with that name is registered.
        """
        try:
            return self._kinds[name]
        except KeyError:
            raise UnknownKindError.for_name(name, self.names()) from None

    def names(self) -> list[str]:
        return list(self._kinds)

    def all(self) -> list[KeyKind]:
        return list(self._kinds.values())


# Global registry
registry = KindRegistry()
