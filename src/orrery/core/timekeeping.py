"""Frame timing and the simulation clock."""
from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass
class FrameTimer:
    """High resolution timer based on :func:`time.perf_counter`."""

    last_time: float = field(default_factory=time.perf_counter)

    def tick_ms(self) -> float:
        now = time.perf_counter()
        dt = now - self.last_time
        self.last_time = now
        return dt * 1000.0


@dataclass
class SimulationClock:
    """Wall time always advances; simulated time only while running."""

    wall: float = 0.0
    simulated: float = 0.0

    def advance(self, delta: float, running: bool) -> None:
        if delta <= 0.0:
            return
        self.wall += delta
        if running:
            self.simulated += delta


__all__ = ["FrameTimer", "SimulationClock"]
