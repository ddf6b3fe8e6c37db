"""Curve25519 box keys (pre-0.4 Yggdrasil addressing).

The node ID is SHA-512 of the public box key; strength is its number of
leading one bits. The cache stores ``secret || public`` as one hex string.
"""

from __future__ import annotations

import hashlib
import os
from ipaddress import IPv6Address

from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from ygg_keygen.core.errors import KeyDecodeError
from ygg_keygen.keys.address import address_for_id, leading_ones
from ygg_keygen.keys.base import Candidate, KeyKind, Rng

SECRET_SIZE = 32
PUBLIC_SIZE = 32


def _public_for(secret: bytes) -> bytes:
    key = X25519PrivateKey.from_private_bytes(secret)
    return key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)


def node_id(public: bytes) -> bytes:
    return hashlib.sha512(public).digest()


class EncryptionKind(KeyKind):
    name = "encryption"

    def generate(self, rng: Rng = os.urandom) -> Candidate:
        secret = rng(SECRET_SIZE)
        return Candidate(secret=secret, public=_public_for(secret))

    def strength(self, candidate: Candidate) -> int:
        return leading_ones(node_id(candidate.public))

    def encode(self, candidate: Candidate) -> tuple[str, str]:
        return candidate.secret.hex(), candidate.public.hex()

    def encode_joined(self, candidate: Candidate) -> str:
        return (candidate.secret + candidate.public).hex()

    def decode(self, text: str) -> Candidate:
        raw = self._fromhex(text)
        if len(raw) != SECRET_SIZE + PUBLIC_SIZE:
            raise KeyDecodeError.invalid(
                self.name, f"expected {SECRET_SIZE + PUBLIC_SIZE} bytes, got {len(raw)}"
            )

        secret, stored_public = raw[:SECRET_SIZE], raw[SECRET_SIZE:]
        public = _public_for(secret)
        if stored_public != public:
            raise KeyDecodeError.invalid(self.name, "public key doesn't match secret")
        return Candidate(secret=secret, public=public)

    def derive_address(self, candidate: Candidate) -> IPv6Address:
        return address_for_id(node_id(candidate.public))
