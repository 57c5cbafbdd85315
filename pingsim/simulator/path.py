"""Synthetic hop chain between a source and a destination."""

from __future__ import annotations

from typing import Tuple

from .addressing import Address, RandomSource, random_address

MIN_HOPS = 5
MAX_HOPS = 11
TTL_START = 64


def build_path(src: Address, dst: Address, rng: RandomSource) -> Tuple[Address, ...]:
    """Return the hop list; the last element is always ``dst``."""
    hops = int(rng.random() * (MAX_HOPS - MIN_HOPS + 1)) + MIN_HOPS
    path = [random_address(rng) for _ in range(hops - 1)]
    path.append(dst)
    return tuple(path)


def reply_ttl(hop_count: int) -> int:
    return max(1, TTL_START - hop_count)


__all__ = ["MIN_HOPS", "MAX_HOPS", "TTL_START", "build_path", "reply_ttl"]
