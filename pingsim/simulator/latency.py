"""Latency / loss model for simulated probes.

Mirrors the shape of real measurements closely enough for demos:
 * base latency grows with hop count and address distance, plus noise
 * each probe is lost 7% of the time
 * surviving probes get +/-25% jitter, a 0.3 ms floor and a rare 1.8x spike
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .addressing import Address, RandomSource, octet_distance

LOSS_PROBABILITY = 0.07
JITTER_SPAN = 0.5  # total width of the +/- jitter band
SPIKE_PROBABILITY = 0.05
SPIKE_FACTOR = 1.8
RTT_FLOOR_MS = 0.3


@dataclass(frozen=True)
class ProbeResult:
    base_ms: float
    rtt_ms: Optional[float] = None

    @property
    def lost(self) -> bool:
        return self.rtt_ms is None


def base_latency(src: Address, dst: Address, hop_count: int, rng: RandomSource) -> float:
    base = 8 + hop_count * 1.8 + octet_distance(src, dst) * 0.3
    # environment noise
    return base + rng.random() * 6


def hop_base_latency(hop_index: int, rng: RandomSource) -> float:
    """Base for traceroute hop ``hop_index`` (0 = first hop)."""
    return 2 + hop_index * 3 + rng.random() * 3


def generate_rtt(base_ms: float, rng: RandomSource) -> ProbeResult:
    if rng.random() < LOSS_PROBABILITY:
        return ProbeResult(base_ms=base_ms)
    jitter = (rng.random() - 0.5) * JITTER_SPAN
    rtt = max(RTT_FLOOR_MS, base_ms * (1 + jitter))
    if rng.random() < SPIKE_PROBABILITY:
        rtt *= SPIKE_FACTOR
    return ProbeResult(base_ms=base_ms, rtt_ms=rtt)


__all__ = [
    "LOSS_PROBABILITY",
    "SPIKE_PROBABILITY",
    "SPIKE_FACTOR",
    "RTT_FLOOR_MS",
    "ProbeResult",
    "base_latency",
    "hop_base_latency",
    "generate_rtt",
]
