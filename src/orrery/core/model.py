"""Data models for the orrery simulation state."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

import numpy as np

from orrery.data.bodies import CENTRAL, SATELLITE, BodySpec


@dataclass
class Body:
    """A simulated body; ``position`` is derived and rewritten every tick."""

    name: str
    role: str
    size: float
    orbit_radius: float
    base_speed: float
    speed: float
    texture: str = ""
    position: np.ndarray = field(
        default_factory=lambda: np.zeros(3, dtype=float)
    )
    rotation_y: float = 0.0

    @property
    def is_central(self) -> bool:
        return self.role == CENTRAL

    @classmethod
    def from_spec(cls, spec: BodySpec) -> "Body":
        return cls(
            name=spec.key,
            role=spec.role,
            size=spec.size,
            orbit_radius=spec.radius if spec.role == SATELLITE else 0.0,
            base_speed=spec.speed,
            speed=spec.speed,
            texture=spec.texture,
        )


@dataclass
class Label:
    """Screen-space overlay attached to one satellite."""

    body: str
    text: str
    anchor: tuple[float, float] = (0.0, 0.0)
    visible: bool = False
    in_view: bool = False


class BodyRegistry:
    """Ordered collection of bodies with exactly one central body."""

    def __init__(self, bodies: Iterable[Body]) -> None:
        self._bodies: dict[str, Body] = {}
        for body in bodies:
            if body.name in self._bodies:
                raise ValueError(f"Duplicate body name: {body.name!r}")
            if body.size <= 0.0:
                raise ValueError(f"Body {body.name!r} must have a positive size")
            if body.role == SATELLITE and body.orbit_radius <= 0.0:
                raise ValueError(f"Satellite {body.name!r} needs a positive orbit radius")
            if body.role not in (CENTRAL, SATELLITE):
                raise ValueError(f"Unknown role {body.role!r} for body {body.name!r}")
            self._bodies[body.name] = body
        centrals = [body for body in self._bodies.values() if body.is_central]
        if len(centrals) != 1:
            raise ValueError(f"Expected exactly one central body, found {len(centrals)}")
        self._central = centrals[0]

    @classmethod
    def from_specs(cls, specs: Iterable[BodySpec]) -> "BodyRegistry":
        return cls(Body.from_spec(spec) for spec in specs)

    @property
    def central(self) -> Body:
        return self._central

    def satellites(self) -> list[Body]:
        return [body for body in self._bodies.values() if not body.is_central]

    def get(self, name: str) -> Body:
        try:
            return self._bodies[name]
        except KeyError:
            raise KeyError(f"Unknown body: {name!r}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._bodies

    def __iter__(self):
        return iter(self._bodies.values())

    def __len__(self) -> int:
        return len(self._bodies)


__all__ = ["Body", "BodyRegistry", "Label"]
