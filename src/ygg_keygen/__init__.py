"""ygg-keygen - Yggdrasil key generation with a persistent cache of strong keys."""

__version__ = "0.1.0"
