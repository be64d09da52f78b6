"""Ray picking of bodies under the pointer."""
from __future__ import annotations

import math
from typing import Iterable, Optional

import numpy as np

from .camera import PerspectiveCamera
from .model import Body, Label


def ray_sphere_distance(
    origin: np.ndarray,
    direction: np.ndarray,
    center: np.ndarray,
    radius: float,
) -> Optional[float]:
    """Distance along a normalised ray to the first hit on a sphere, if any."""

    oc = origin - center
    b = float(np.dot(oc, direction))
    c = float(np.dot(oc, oc)) - radius * radius
    discriminant = b * b - c
    if discriminant < 0.0:
        return None
    root = math.sqrt(discriminant)
    distance = -b - root
    if distance < 0.0:
        # Ray starts inside the sphere.
        distance = -b + root
    if distance < 0.0:
        return None
    return distance


def pick(
    pointer_ndc: tuple[float, float],
    camera: PerspectiveCamera,
    bodies: Iterable[Body],
) -> Optional[str]:
    """Name of the nearest body under ``pointer_ndc``.

    Bodies are tested in iteration order and only a strictly nearer hit
    replaces the current best, so equal distances resolve to the body that
    comes first.
    """

    origin, direction = camera.ray_from_ndc(*pointer_ndc)
    best_name: Optional[str] = None
    best_distance = math.inf
    for body in bodies:
        distance = ray_sphere_distance(origin, direction, body.position, body.size)
        if distance is not None and distance < best_distance:
            best_name = body.name
            best_distance = distance
    return best_name


def apply_hover(labels: Iterable[Label], hit: Optional[str]) -> None:
    """Show only the label of the hovered body."""

    for label in labels:
        label.visible = hit is not None and label.body == hit


__all__ = ["apply_hover", "pick", "ray_sphere_distance"]
