"""Cache key generation: stable, filesystem-safe keys derived from URLs."""

from __future__ import annotations

_FNV64_OFFSET_BASIS = 0xCBF29CE484222325
_FNV64_PRIME = 0x100000001B3
_MASK_64 = 0xFFFFFFFFFFFFFFFF


def fnv1a_64(data: bytes) -> int:
    """64-bit FNV-1a hash of a byte string."""
    h = _FNV64_OFFSET_BASIS
    for byte in data:
        h ^= byte
        h = (h * _FNV64_PRIME) & _MASK_64
    return h


def hash_key(identifier: str) -> str:
    """Derive the cache key for a resource identifier (usually a URL).

    The key is 16 lowercase hex digits, so it is a valid filename on every
    platform and stays the same across interpreter runs.
    """
    return f"{fnv1a_64(identifier.encode('utf-8')):016x}"
