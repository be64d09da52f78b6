"""Input messages consumed by the scheduler between ticks."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PointerMoved:
    x: float
    y: float


@dataclass(frozen=True)
class PointerClicked:
    x: float
    y: float


@dataclass(frozen=True)
class SpeedChanged:
    body: str
    value: float


@dataclass(frozen=True)
class PauseToggled:
    pass


@dataclass(frozen=True)
class ThemeToggled:
    pass


@dataclass(frozen=True)
class CameraOrbited:
    dx: float
    dy: float


@dataclass(frozen=True)
class CameraZoomed:
    factor: float


@dataclass(frozen=True)
class ViewportResized:
    width: int
    height: int


Event = (
    PointerMoved
    | PointerClicked
    | SpeedChanged
    | PauseToggled
    | ThemeToggled
    | CameraOrbited
    | CameraZoomed
    | ViewportResized
)


__all__ = [
    "CameraOrbited",
    "CameraZoomed",
    "Event",
    "PauseToggled",
    "PointerClicked",
    "PointerMoved",
    "SpeedChanged",
    "ThemeToggled",
    "ViewportResized",
]
