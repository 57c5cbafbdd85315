"""Session orchestration: traceroute (optional) then ping, as a line stream.

The core of a session is ``steps()``: a generator that yields transcript lines
and ``Pause`` markers and never sleeps itself. A host decides how to honour
each pause; ``lines()`` waits on the calling thread, ``alines()`` awaits on
the running event loop. After every pause the session checks its CancelToken
and stops without further output when it was cancelled.

Every pause draws its duration from the session RNG even when pacing is off,
so the transcript for a given seed never depends on pacing settings.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass
from typing import AsyncIterator, Callable, Iterator, List, Optional, Tuple, Union

from .addressing import Address, RandomSource, parse_address
from .config import SessionConfig
from .errors import INVALID_ADDRESS_MESSAGE, InvalidAddressError, SessionStateError
from .formatting import (
    STAR,
    fmt_ms,
    header_line,
    hop_line,
    reply_line,
    timeout_line,
    trace_header_line,
)
from .latency import base_latency, generate_rtt, hop_base_latency
from .logging_setup import log_event
from .path import build_path, reply_ttl
from .rng import Mulberry32, derive_seed
from .stats import SessionStatistics, render_statistics, summarize

logger = logging.getLogger(__name__)

PING_PAUSE_MS = 280
PING_PAUSE_SPREAD_MS = 120
HOP_PAUSE_MS = 120
HOP_PAUSE_SPREAD_MS = 100
PROBES_PER_HOP = 3
TRACE_STAR_PROBABILITY = 0.6

# async pauses re-check the token at this interval
ASYNC_POLL_S = 0.01


@dataclass(frozen=True)
class Pause:
    ms: int


Step = Union[str, Pause]


class CancelToken:
    """Cancellation handle shared between a session and its host."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        """Block up to ``seconds``; True if cancelled meanwhile."""
        return self._event.wait(seconds)


class Pacer:
    """Turns simulated pauses into real waits.

    ``time_scale`` multiplies every pause (0 or ``enabled=False`` means no
    waiting). Both ``pause`` and ``apause`` return False when the token is
    cancelled before or during the wait.
    """

    def __init__(self, enabled: bool = True, time_scale: float = 1.0) -> None:
        self.enabled = enabled
        self.time_scale = max(0.0, time_scale)

    def _seconds(self, ms: int) -> float:
        if not self.enabled:
            return 0.0
        return ms * self.time_scale / 1000.0

    def pause(self, ms: int, token: CancelToken) -> bool:
        if token.cancelled:
            return False
        seconds = self._seconds(ms)
        if seconds == 0:
            return True
        return not token.wait(seconds)

    async def apause(self, ms: int, token: CancelToken) -> bool:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._seconds(ms)
        while not token.cancelled:
            remaining = deadline - loop.time()
            if remaining <= 0:
                return True
            await asyncio.sleep(min(remaining, ASYNC_POLL_S))
        return False


class PingSession:
    """One simulated run. Drive it once via ``steps()``, ``lines()`` or ``alines()``."""

    def __init__(
        self,
        config: SessionConfig,
        *,
        rng: Optional[RandomSource] = None,
        pacer: Optional[Pacer] = None,
        token: Optional[CancelToken] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.config = config
        self.pacer = pacer or Pacer()
        self.token = token or CancelToken()
        self._rng = rng
        self._clock = clock
        self._started = False

        self.seed: Optional[int] = None
        self.path: Tuple[Address, ...] = ()
        self.statistics: Optional[SessionStatistics] = None
        self.cancelled = False
        self.error: Optional[InvalidAddressError] = None

    def cancel(self) -> None:
        self.token.cancel()

    @property
    def finished(self) -> bool:
        return self.statistics is not None

    def parse_endpoints(self) -> Tuple[Address, Address]:
        return parse_address(self.config.source), parse_address(self.config.destination)

    def _make_rng(self) -> RandomSource:
        if self._rng is not None:
            self.seed = getattr(self._rng, "seed", None)
            return self._rng
        self.seed = derive_seed(
            self.config.source,
            self.config.destination,
            stable=self.config.stable,
            clock=self._clock,
        )
        return Mulberry32(self.seed)

    def _pause(self, rng: RandomSource, base_ms: int, spread_ms: int):
        yield Pause(base_ms + int(rng.random() * spread_ms))
        if not self.token.cancelled:
            return True
        self.cancelled = True
        log_event(logger, "session_cancelled", destination=self.config.destination)
        return False

    def lines(self) -> Iterator[str]:
        """Yield lines, waiting out each pause on the calling thread."""
        for step in self.steps():
            if isinstance(step, Pause):
                self.pacer.pause(step.ms, self.token)
            else:
                yield step

    async def alines(self) -> AsyncIterator[str]:
        """Yield lines, awaiting each pause so the event loop keeps running."""
        for step in self.steps():
            if isinstance(step, Pause):
                await self.pacer.apause(step.ms, self.token)
            else:
                yield step

    def steps(self) -> Iterator[Step]:
        if self._started:
            raise SessionStateError("session already run; create a new PingSession")
        self._started = True

        try:
            src, dst = self.parse_endpoints()
        except InvalidAddressError as exc:
            self.error = exc
            log_event(logger, "invalid_address", logging.WARNING, value=exc.value)
            yield INVALID_ADDRESS_MESSAGE
            return

        cfg = self.config
        rng = self._make_rng()
        self.path = build_path(src, dst, rng)
        hop_count = len(self.path)
        log_event(
            logger,
            "session_started",
            seed=self.seed,
            hops=hop_count,
            stable=cfg.stable,
            trace=cfg.trace,
        )

        yield header_line(cfg.destination, cfg.size)
        yield ""

        if cfg.trace:
            yield from self._traceroute(rng)
            if self.cancelled:
                return
            yield ""

        ttl = reply_ttl(hop_count)
        transmitted = received = 0
        rtts: List[float] = []
        for seq in range(1, cfg.count + 1):
            transmitted += 1
            probe = generate_rtt(base_latency(src, dst, hop_count, rng), rng)
            if probe.lost:
                log_event(logger, "probe_lost", logging.DEBUG, seq=seq)
                yield timeout_line(seq)
            else:
                received += 1
                rtts.append(probe.rtt_ms)
                yield reply_line(cfg.destination, cfg.size, seq, ttl, probe.rtt_ms)
            if not (yield from self._pause(rng, PING_PAUSE_MS, PING_PAUSE_SPREAD_MS)):
                return

        self.statistics = summarize(transmitted, received, rtts)
        log_event(
            logger,
            "session_finished",
            transmitted=transmitted,
            received=received,
            loss_pct=self.statistics.displayed_loss,
        )
        yield ""
        yield from render_statistics(cfg.destination, self.statistics)
        yield ""

    def _traceroute(self, rng: RandomSource) -> Iterator[Step]:
        cfg = self.config
        yield trace_header_line(cfg.destination, len(self.path))
        last = len(self.path) - 1
        for index, hop in enumerate(self.path):
            cells = [self._trace_cell(index, rng) for _ in range(PROBES_PER_HOP)]
            label = cfg.destination if index == last else str(hop)
            yield hop_line(index + 1, label, cells)
            if not (yield from self._pause(rng, HOP_PAUSE_MS, HOP_PAUSE_SPREAD_MS)):
                return

    @staticmethod
    def _trace_cell(hop_index: int, rng: RandomSource) -> str:
        probe = generate_rtt(hop_base_latency(hop_index, rng), rng)
        if probe.lost:
            if rng.random() < TRACE_STAR_PROBABILITY:
                return STAR
            # late reply still attributed to the hop; no jitter was drawn for it
            return f"{fmt_ms(probe.base_ms)} ms"
        return f"{fmt_ms(probe.rtt_ms)} ms"


def run_session(
    config: SessionConfig,
    sink: Callable[[str], None],
    **kwargs,
) -> PingSession:
    """Drive a new session, handing each line to ``sink`` as it is produced."""
    session = PingSession(config, **kwargs)
    for line in session.lines():
        sink(line)
    return session


__all__ = [
    "CancelToken",
    "Pacer",
    "Pause",
    "PingSession",
    "run_session",
    "PING_PAUSE_MS",
    "HOP_PAUSE_MS",
    "PROBES_PER_HOP",
    "TRACE_STAR_PROBABILITY",
]
