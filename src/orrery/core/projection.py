"""World-to-viewport mapping for overlay labels."""
from __future__ import annotations

from typing import Iterable

import numpy as np

from .camera import PerspectiveCamera
from .model import BodyRegistry, Label


def ndc_to_screen(ndc_x: float, ndc_y: float, width: float, height: float) -> tuple[float, float]:
    x = (ndc_x * 0.5 + 0.5) * width
    y = (-(ndc_y * 0.5) + 0.5) * height
    return x, y


def screen_to_ndc(x: float, y: float, width: float, height: float) -> tuple[float, float]:
    """Pixel coordinates to NDC; screen Y grows downwards, NDC Y upwards."""

    if width <= 0 or height <= 0:
        raise ValueError("Viewport size must be positive")
    return (x / width) * 2.0 - 1.0, -(y / height) * 2.0 + 1.0


def project(
    world_position,
    camera: PerspectiveCamera,
    width: float,
    height: float,
) -> tuple[float, float]:
    """Viewport pixel coordinates of ``world_position``."""

    ndc = camera.project(world_position)
    return ndc_to_screen(float(ndc[0]), float(ndc[1]), width, height)


def is_in_view(world_position, camera: PerspectiveCamera) -> bool:
    ndc, w = camera.project_many(np.asarray(world_position, dtype=float).reshape(1, 3))
    if w[0] <= 0.0:
        return False
    return bool(np.all(np.abs(ndc[0]) <= 1.0))


def update_labels(
    labels: Iterable[Label],
    registry: BodyRegistry,
    camera: PerspectiveCamera,
    width: float,
    height: float,
) -> None:
    for label in labels:
        body = registry.get(label.body)
        label.anchor = project(body.position, camera, width, height)
        label.in_view = is_in_view(body.position, camera)


__all__ = [
    "is_in_view",
    "ndc_to_screen",
    "project",
    "screen_to_ndc",
    "update_labels",
]
