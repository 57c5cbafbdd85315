"""Session statistics: counts, loss and RTT spread."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .formatting import packets_line, round_half_up, rtt_summary_line, stats_header_line


@dataclass(frozen=True)
class RttSummary:
    minimum: float
    average: float
    maximum: float
    mdev: float


@dataclass(frozen=True)
class SessionStatistics:
    transmitted: int
    received: int
    loss_pct: float
    rtt: Optional[RttSummary] = None

    @property
    def displayed_loss(self) -> int:
        return int(round_half_up(self.loss_pct))


def summarize_rtts(rtts: Sequence[float]) -> Optional[RttSummary]:
    """min/avg/max and population standard deviation; None when empty."""
    if not rtts:
        return None
    avg = sum(rtts) / len(rtts)
    mdev = math.sqrt(sum((v - avg) ** 2 for v in rtts) / len(rtts))
    return RttSummary(minimum=min(rtts), average=avg, maximum=max(rtts), mdev=mdev)


def summarize(transmitted: int, received: int, rtts: Sequence[float]) -> SessionStatistics:
    loss = (transmitted - received) / transmitted * 100 if transmitted else 0.0
    return SessionStatistics(
        transmitted=transmitted,
        received=received,
        loss_pct=loss,
        rtt=summarize_rtts(rtts),
    )


def render_statistics(dst: str, stats: SessionStatistics) -> List[str]:
    lines = [
        stats_header_line(dst),
        packets_line(stats.transmitted, stats.received, stats.loss_pct),
    ]
    if stats.rtt is not None:
        r = stats.rtt
        lines.append(rtt_summary_line(r.minimum, r.average, r.maximum, r.mdev))
    return lines


__all__ = ["RttSummary", "SessionStatistics", "summarize", "summarize_rtts", "render_statistics"]
