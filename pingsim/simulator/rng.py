from __future__ import annotations

"""Seed derivation and the deterministic generator behind every session.

Both pieces are pure: the same (source, destination) pair in stable mode
always produces the same seed, and the same seed always produces the same
stream, so transcripts are stable across runs and platforms.
"""

import time
from typing import Callable, Optional

MASK32 = 0xFFFFFFFF

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619

# Golden-ratio constant mixed into stable seeds.
STABLE_SEED_SALT = 0x9E3779B9

MULBERRY_INCREMENT = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    return (a * b) & MASK32


def fnv1a_32(text: str) -> int:
    h = FNV_OFFSET_BASIS
    for ch in text:
        h ^= ord(ch)
        h = _imul(h, FNV_PRIME)
    return h


def _wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


def derive_seed(
    source: str,
    destination: str,
    stable: bool = True,
    clock: Optional[Callable[[], int]] = None,
) -> int:
    """Return the 32-bit session seed for a source/destination pair.

    Stable mode salts the pair hash with a fixed constant; otherwise the low
    32 bits of the wall clock (milliseconds, or ``clock()`` when given) are
    mixed in so every run differs.
    """
    h = fnv1a_32(f"{source}-{destination}")
    if stable:
        return (h ^ STABLE_SEED_SALT) & MASK32
    now_ms = (clock or _wall_clock_ms)()
    return (h ^ (now_ms & MASK32)) & MASK32


class Mulberry32:
    """Small 32-bit generator with a ``random()`` method like ``random.Random``."""

    def __init__(self, seed: int) -> None:
        self.seed = seed & MASK32
        self._state = self.seed

    def random(self) -> float:
        self._state = (self._state + MULBERRY_INCREMENT) & MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK32
        return ((t ^ (t >> 14)) & MASK32) / 4294967296

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"Mulberry32(seed={self.seed:#010x})"


__all__ = [
    "MASK32",
    "STABLE_SEED_SALT",
    "fnv1a_32",
    "derive_seed",
    "Mulberry32",
]
