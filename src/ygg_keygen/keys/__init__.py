"""Key kinds. Importing this package registers the built-in kinds."""

from ygg_keygen.keys.base import Candidate, KeyKind, KindRegistry, Rng, registry
from ygg_keygen.keys.encryption import EncryptionKind
from ygg_keygen.keys.signing import SigningKind

registry.register(SigningKind())
registry.register(EncryptionKind())

__all__ = [
    "Candidate",
    "EncryptionKind",
    "KeyKind",
    "KindRegistry",
    "Rng",
    "SigningKind",
    "registry",
]
