"""Text renderers for transcript lines (Linux iputils-like)."""

from __future__ import annotations

import math
from typing import Sequence

STAR = "*"


def round_half_up(value: float, digits: int = 0) -> float:
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def fmt_ms(value: float) -> str:
    return f"{round_half_up(value, 1):.1f}"


def fmt_pct(value: float) -> str:
    return f"{round_half_up(value):.0f}"


def header_line(dst: str, size: int) -> str:
    return f"PING {dst} ({dst}) {size}({size + 28}) bytes of data:"


def reply_line(dst: str, size: int, seq: int, ttl: int, rtt_ms: float) -> str:
    return f"{size} bytes from {dst}: icmp_seq={seq} ttl={ttl} time={fmt_ms(rtt_ms)} ms"


def timeout_line(seq: int) -> str:
    return f"Request timeout for icmp_seq {seq}"


def trace_header_line(dst: str, hop_count: int) -> str:
    return f"traceroute to {dst}, {hop_count} hops max"


def hop_line(number: int, address: str, cells: Sequence[str]) -> str:
    """Render one traceroute hop; the address is dropped when every cell is a star."""
    prefix = f"{number:>2}  "
    if all(c == STAR for c in cells):
        return prefix + "  ".join(STAR for _ in cells)
    return prefix + f"{address}  " + "  ".join(f"{c:>6}" for c in cells)


def stats_header_line(dst: str) -> str:
    return f"--- {dst} ping statistics ---"


def packets_line(transmitted: int, received: int, loss_pct: float) -> str:
    return f"{transmitted} packets transmitted, {received} received, {fmt_pct(loss_pct)}% packet loss"


def rtt_summary_line(rtt_min: float, rtt_avg: float, rtt_max: float, mdev: float) -> str:
    return (
        "rtt min/avg/max/mdev = "
        f"{fmt_ms(rtt_min)}/{fmt_ms(rtt_avg)}/{fmt_ms(rtt_max)}/{fmt_ms(mdev)} ms"
    )
