"""Perspective camera with orbit-style controls."""
from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .config import CAMERA_CFG, CameraCfg


_UP = np.array([0.0, 1.0, 0.0])


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def _normalize(vector: np.ndarray) -> np.ndarray:
    norm = float(np.linalg.norm(vector))
    if norm <= 0.0:
        return vector
    return vector / norm


@dataclass
class CameraState:
    position: np.ndarray
    target: np.ndarray


class PerspectiveCamera:
    """Camera looking from ``position`` at ``target``."""

    def __init__(
        self,
        aspect: float,
        *,
        cfg: CameraCfg = CAMERA_CFG,
    ) -> None:
        self._cfg = cfg
        self._aspect = aspect
        self._state = CameraState(
            position=np.array(cfg.initial_position, dtype=float),
            target=np.array(cfg.initial_target, dtype=float),
        )

    @property
    def fov_deg(self) -> float:
        return self._cfg.fov_deg

    @property
    def near(self) -> float:
        return self._cfg.near

    @property
    def far(self) -> float:
        return self._cfg.far

    @property
    def aspect(self) -> float:
        return self._aspect

    def set_aspect(self, aspect: float) -> None:
        if aspect <= 0.0:
            raise ValueError("Camera aspect ratio must be positive")
        self._aspect = aspect

    @property
    def position(self) -> np.ndarray:
        return self._state.position

    @property
    def target(self) -> np.ndarray:
        return self._state.target

    def set_position(self, position) -> None:
        self._state.position[:] = position

    def set_target(self, position) -> None:
        self._state.target[:] = position

    @property
    def distance(self) -> float:
        return float(np.linalg.norm(self._state.position - self._state.target))

    # -- matrices -----------------------------------------------------------

    def view_matrix(self) -> np.ndarray:
        eye = self._state.position
        forward = _normalize(self._state.target - eye)
        side = np.cross(forward, _UP)
        if float(np.linalg.norm(side)) < 1e-9:
            # Looking straight along the up axis.
            side = np.cross(forward, np.array([0.0, 0.0, -1.0]))
        side = _normalize(side)
        up = np.cross(side, forward)
        view = np.identity(4)
        view[0, :3] = side
        view[1, :3] = up
        view[2, :3] = -forward
        view[0, 3] = -float(np.dot(side, eye))
        view[1, 3] = -float(np.dot(up, eye))
        view[2, 3] = float(np.dot(forward, eye))
        return view

    def projection_matrix(self) -> np.ndarray:
        f = 1.0 / math.tan(math.radians(self._cfg.fov_deg) / 2.0)
        near, far = self._cfg.near, self._cfg.far
        projection = np.zeros((4, 4))
        projection[0, 0] = f / self._aspect
        projection[1, 1] = f
        projection[2, 2] = (far + near) / (near - far)
        projection[2, 3] = 2.0 * far * near / (near - far)
        projection[3, 2] = -1.0
        return projection

    def view_projection(self) -> np.ndarray:
        return self.projection_matrix() @ self.view_matrix()

    # -- transforms ---------------------------------------------------------

    def project(self, world) -> np.ndarray:
        """Normalised device coordinates of a world point."""

        ndc, _ = self.project_many(np.asarray(world, dtype=float).reshape(1, 3))
        return ndc[0]

    def project_many(self, points: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Project an ``(N, 3)`` array; returns NDC and the clip-space ``w``."""

        points = np.asarray(points, dtype=float)
        homogeneous = np.hstack([points, np.ones((points.shape[0], 1))])
        clip = homogeneous @ self.view_projection().T
        w = clip[:, 3]
        safe_w = np.where(np.abs(w) < 1e-12, 1e-12, w)
        return clip[:, :3] / safe_w[:, None], w

    def depth_of(self, world) -> float:
        """Distance in front of the camera along the view axis."""

        forward = _normalize(self._state.target - self._state.position)
        return float(np.dot(np.asarray(world, dtype=float) - self._state.position, forward))

    def ray_from_ndc(self, ndc_x: float, ndc_y: float) -> tuple[np.ndarray, np.ndarray]:
        """Ray from the camera through a point given in NDC."""

        inverse = np.linalg.inv(self.view_projection())
        point = inverse @ np.array([ndc_x, ndc_y, 0.5, 1.0])
        point = point[:3] / point[3]
        origin = self._state.position.copy()
        return origin, _normalize(point - origin)

    # -- orbit controls -----------------------------------------------------

    def rotate(self, dx_pixels: float, dy_pixels: float) -> None:
        """Swing the camera around its target, keeping the distance."""

        if dx_pixels == 0 and dy_pixels == 0:
            return
        offset = self._state.position - self._state.target
        radius = float(np.linalg.norm(offset))
        if radius <= 0.0:
            return
        theta = math.atan2(offset[0], offset[2])
        phi = math.acos(_clamp(offset[1] / radius, -1.0, 1.0))
        theta -= dx_pixels * self._cfg.rotate_speed
        eps = self._cfg.min_polar_angle
        phi = _clamp(phi - dy_pixels * self._cfg.rotate_speed, eps, math.pi - eps)
        self._state.position[:] = self._state.target + radius * np.array(
            [
                math.sin(phi) * math.sin(theta),
                math.cos(phi),
                math.sin(phi) * math.cos(theta),
            ]
        )

    def zoom_by_factor(self, factor: float) -> None:
        """Move towards (``factor > 1``) or away from the target."""

        if factor <= 0.0:
            raise ValueError("Zoom factor must be positive")
        offset = self._state.position - self._state.target
        distance = float(np.linalg.norm(offset))
        if distance <= 0.0:
            return
        new_distance = _clamp(distance / factor, self._cfg.min_distance, self._cfg.max_distance)
        self._state.position[:] = self._state.target + offset * (new_distance / distance)


__all__ = ["CameraState", "PerspectiveCamera"]
