"""Circular-orbit kinematics for the orrery bodies."""
from __future__ import annotations

import math

import numpy as np

from .config import SIMULATION_CFG, SimulationCfg
from .model import Body


def orbital_angle(elapsed: float, speed: float, cfg: SimulationCfg = SIMULATION_CFG) -> float:
    """Revolution angle in radians after ``elapsed`` milliseconds at ``speed``."""

    return elapsed * cfg.angular_speed_scale * speed


def orbital_position(
    body: Body,
    elapsed: float,
    center: np.ndarray,
    cfg: SimulationCfg = SIMULATION_CFG,
) -> np.ndarray:
    """Return the world position of ``body`` at simulation time ``elapsed``.

    The angle is derived from the absolute elapsed time rather than integrated
    per frame, so the result does not depend on the frame rate and repeated
    calls with the same inputs give the same position. The central body stays
    where it is.
    """

    if body.is_central:
        return body.position.copy()
    angle = orbital_angle(elapsed, body.speed, cfg)
    return np.array(
        [
            center[0] + body.orbit_radius * math.cos(angle),
            center[1],
            center[2] + body.orbit_radius * math.sin(angle),
        ],
        dtype=float,
    )


def advance_rotation(body: Body, delta: float, cfg: SimulationCfg = SIMULATION_CFG) -> float:
    """Spin ``body`` about its Y axis by ``delta`` milliseconds worth of rotation."""

    if delta > 0.0:
        body.rotation_y += cfg.self_rotation_rate * delta
    return body.rotation_y


def orbit_distance(position: np.ndarray, center: np.ndarray) -> float:
    """Distance from ``center`` in the orbital (XZ) plane."""

    return math.hypot(position[0] - center[0], position[2] - center[2])


__all__ = [
    "advance_rotation",
    "orbit_distance",
    "orbital_angle",
    "orbital_position",
]
