"""Seed coercion shared by the HTTP API and the CLI."""
import hashlib
import random

SEED_MAX = 2**63 - 1


def coerce_seed(raw_seed):
    """Convert a provided seed (int or str) into a bounded non-negative int.

    Numeric strings are used directly, other strings are hashed (SHA-256) so a
    word like "crypt" always yields the same layout. Missing or blank seeds get
    a fresh random value.
    """
    if raw_seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(raw_seed, bool):
        raise TypeError("seed must be an int or str")
    if isinstance(raw_seed, int):
        return raw_seed % SEED_MAX
    if isinstance(raw_seed, str):
        s = raw_seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        # "-5" must land on the same seed as the int -5
        if (s[1:] if s.startswith("-") else s).isdigit():
            return int(s) % SEED_MAX
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SEED_MAX
    raise TypeError(f"seed must be an int or str, got {type(raw_seed).__name__}")
