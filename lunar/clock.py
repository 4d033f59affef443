"""Elapsed-time source that converts a monotonic clock to simulation units."""

from __future__ import annotations

import time
from typing import Callable

from lunar.config import TIME_UNIT_NS


class FrameClock:
    """Measures time between ticks in simulation units (10 ms by default).

    The first ``tick`` after construction or ``reset`` returns 0.
    """

    def __init__(
        self,
        now_ns: Callable[[], int] = time.monotonic_ns,
        unit_ns: int = TIME_UNIT_NS,
    ):
        self._now_ns = now_ns
        self.unit_ns = unit_ns
        self._last_ns: int | None = None

    def reset(self) -> None:
        self._last_ns = self._now_ns()

    def tick(self) -> float:
        now = self._now_ns()
        last = now if self._last_ns is None else self._last_ns
        self._last_ns = now
        return (now - last) / self.unit_ns
