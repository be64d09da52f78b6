"""Minimal scene graph consumed by the renderer."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from orrery.core.model import Label


Color = tuple[int, int, int]


@dataclass
class SphereHandle:
    name: str
    radius: float
    texture: str = ""
    emissive: bool = False
    color: Optional[Color] = None
    position: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=float))
    rotation_y: float = 0.0


@dataclass
class RingHandle:
    radius: float
    color: Color
    center: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=float))


@dataclass
class PointsHandle:
    positions: np.ndarray
    color: Color
    size: int = 1


class SceneGraph:
    """Holds everything the renderer draws for one frame."""

    def __init__(self, background: Color = (0, 0, 0)) -> None:
        self.background = background
        self.spheres: list[SphereHandle] = []
        self.rings: list[RingHandle] = []
        self.points: list[PointsHandle] = []
        self.labels: list[Label] = []
        self._by_name: dict[str, SphereHandle] = {}

    def add_sphere(
        self,
        name: str,
        radius: float,
        *,
        texture: str = "",
        emissive: bool = False,
    ) -> SphereHandle:
        if name in self._by_name:
            raise ValueError(f"Scene already has a sphere named {name!r}")
        handle = SphereHandle(name=name, radius=radius, texture=texture, emissive=emissive)
        self.spheres.append(handle)
        self._by_name[name] = handle
        return handle

    def add_ring(self, radius: float, color: Color, center=(0.0, 0.0, 0.0)) -> RingHandle:
        handle = RingHandle(radius=radius, color=color, center=np.array(center, dtype=float))
        self.rings.append(handle)
        return handle

    def add_points(self, positions: np.ndarray, color: Color, size: int = 1) -> PointsHandle:
        handle = PointsHandle(positions=np.asarray(positions, dtype=float), color=color, size=size)
        self.points.append(handle)
        return handle

    def add_label(self, label: Label) -> Label:
        self.labels.append(label)
        return label

    def sphere(self, name: str) -> SphereHandle:
        return self._by_name[name]


__all__ = ["PointsHandle", "RingHandle", "SceneGraph", "SphereHandle"]
