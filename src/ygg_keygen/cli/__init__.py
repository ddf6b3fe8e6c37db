"""ygg-keygen command line interface."""
