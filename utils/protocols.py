"""Typing protocols for injected clock and random sources."""

from __future__ import annotations

from typing import Any, Protocol


class RandomSource(Protocol):
    """Subset of numpy.random.Generator used by terrain and ship spawning."""

    def standard_normal(self, size: Any = None) -> Any: ...

    def integers(self, low: int, high: int | None = None, size: Any = None) -> Any: ...

    def uniform(self, low: float = 0.0, high: float = 1.0, size: Any = None) -> Any: ...


class ClockProtocol(Protocol):
    def reset(self) -> None: ...

    def tick(self) -> float: ...
