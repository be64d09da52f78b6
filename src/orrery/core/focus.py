"""Re-centre the camera on a picked body."""
from __future__ import annotations

import numpy as np

from .camera import PerspectiveCamera


def focus(
    target_position,
    camera_position,
    look_at,
) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(new_look_at, new_camera_position)`` keeping the view offset."""

    target = np.asarray(target_position, dtype=float)
    offset = np.asarray(camera_position, dtype=float) - np.asarray(look_at, dtype=float)
    return target.copy(), target + offset


class CameraFocusController:
    """Applies :func:`focus` to a camera as an instantaneous cut."""

    def __init__(self, camera: PerspectiveCamera) -> None:
        self._camera = camera

    def focus_on(self, target_position) -> tuple[np.ndarray, np.ndarray]:
        new_look_at, new_position = focus(
            target_position, self._camera.position, self._camera.target
        )
        self._camera.set_target(new_look_at)
        self._camera.set_position(new_position)
        return new_look_at, new_position


__all__ = ["CameraFocusController", "focus"]
