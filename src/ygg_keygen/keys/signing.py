"""Ed25519 node identities.

The secret is stored as the 64-byte ``seed || public`` form Yggdrasil uses for
``PrivateKey`` in its config. The node ID is the bitwise inverse of the
public key, so strength is the number of leading zero bits of the key.
"""

from __future__ import annotations

import os
from ipaddress import IPv6Address

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from ygg_keygen.core.errors import KeyDecodeError
from ygg_keygen.keys.address import address_for_id, invert, leading_zeros
from ygg_keygen.keys.base import Candidate, KeyKind, Rng

SEED_SIZE = 32
PUBLIC_SIZE = 32


def _public_for(seed: bytes) -> bytes:
    key = Ed25519PrivateKey.from_private_bytes(seed)
    return key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)


class SigningKind(KeyKind):
    name = "signing"

    def generate(self, rng: Rng = os.urandom) -> Candidate:
        seed = rng(SEED_SIZE)
        return Candidate(secret=seed, public=_public_for(seed))

    def strength(self, candidate: Candidate) -> int:
        return leading_zeros(candidate.public)

    def encode(self, candidate: Candidate) -> tuple[str, str]:
        return (candidate.secret + candidate.public).hex(), candidate.public.hex()

    def encode_joined(self, candidate: Candidate) -> str:
        return (candidate.secret + candidate.public).hex()

    def decode(self, text: str) -> Candidate:
        raw = self._fromhex(text)
        if len(raw) not in (SEED_SIZE, SEED_SIZE + PUBLIC_SIZE):
            raise KeyDecodeError.invalid(self.name, f"expected 32 or 64 bytes, got {len(raw)}")

        seed = raw[:SEED_SIZE]
        public = _public_for(seed)
        if len(raw) > SEED_SIZE and raw[SEED_SIZE:] != public:
            raise KeyDecodeError.invalid(self.name, "public key doesn't match seed")
        return Candidate(secret=seed, public=public)

    def derive_address(self, candidate: Candidate) -> IPv6Address:
        return address_for_id(invert(candidate.public))
