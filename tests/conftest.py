from __future__ import annotations

from collections import deque
from typing import Iterable

import pytest

from pingsim.simulator.session import CancelToken, Pacer


class ScriptedRandom:
    """Returns scripted draws in order, then ``fallback`` forever."""

    def __init__(self, values: Iterable[float] = (), fallback: float = 0.5):
        self.values = deque(values)
        self.fallback = fallback
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        if self.values:
            return self.values.popleft()
        return self.fallback


class RecordingPacer(Pacer):
    """No real waiting; remembers requested pauses and can cancel after N."""

    def __init__(self, cancel_after: int | None = None):
        super().__init__(enabled=False)
        self.pauses: list[int] = []
        self.cancel_after = cancel_after

    def pause(self, ms: int, token: CancelToken) -> bool:
        self.pauses.append(ms)
        if self.cancel_after is not None and len(self.pauses) >= self.cancel_after:
            token.cancel()
        return super().pause(ms, token)


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def pacer():
    return RecordingPacer()
