"""User-adjustable revolution speeds."""
from __future__ import annotations

import math

from .config import SIMULATION_CFG, SimulationCfg
from .model import BodyRegistry


class InvalidSpeedValue(ValueError):
    """Raised when a speed change is rejected; the previous value is kept."""


class SpeedControl:
    """Per-body angular speed overrides read by the kinematics every tick."""

    def __init__(self, registry: BodyRegistry, cfg: SimulationCfg = SIMULATION_CFG) -> None:
        self._registry = registry
        self._cfg = cfg

    @property
    def bounds(self) -> tuple[float, float]:
        return self._cfg.speed_min, self._cfg.speed_max

    def get_speed(self, name: str) -> float:
        return self._registry.get(name).speed

    def set_speed(self, name: str, value: float) -> float:
        body = self._registry.get(name)
        if body.is_central:
            raise InvalidSpeedValue(f"{name!r} is the central body and has no speed control")
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise InvalidSpeedValue(f"Speed {value!r} for {name!r} is not a number") from None
        lo, hi = self.bounds
        if not math.isfinite(value) or not lo <= value <= hi:
            raise InvalidSpeedValue(f"Speed {value!r} for {name!r} is outside [{lo}, {hi}]")
        body.speed = value
        return value

    def reset(self, name: str) -> float:
        body = self._registry.get(name)
        body.speed = body.base_speed
        return body.speed

    def snapshot(self) -> dict[str, float]:
        return {body.name: body.speed for body in self._registry.satellites()}


__all__ = ["InvalidSpeedValue", "SpeedControl"]
