from __future__ import annotations

import math
from typing import Sequence, TYPE_CHECKING

import numpy as np
import pygame

from .assets import Color, get_text_surface
from .scene import PointsHandle, RingHandle, SphereHandle

if TYPE_CHECKING:  # pragma: no cover
    from orrery.core.camera import PerspectiveCamera
    from orrery.core.config import RenderCfg
    from orrery.core.model import Label


def _shade(color: tuple[int, int, int], factor: float) -> tuple[int, int, int]:
    return tuple(max(0, min(255, int(channel * factor))) for channel in color)  # type: ignore[return-value]


def _to_pixels(ndc: np.ndarray, size: tuple[int, int]) -> np.ndarray:
    width, height = size
    xs = (ndc[:, 0] * 0.5 + 0.5) * width
    ys = (-(ndc[:, 1] * 0.5) + 0.5) * height
    return np.stack([xs, ys], axis=1)


def draw_starfield(
    surface: pygame.Surface,
    stars: PointsHandle,
    camera: PerspectiveCamera,
) -> None:
    if stars.positions.size == 0:
        return
    ndc, w = camera.project_many(stars.positions)
    visible = (w > 0.0) & np.all(np.abs(ndc[:, :2]) <= 1.0, axis=1)
    pixels = _to_pixels(ndc[visible], surface.get_size()).astype(int)
    size = max(1, stars.size)
    for x, y in pixels:
        surface.fill(stars.color, (x, y, size, size))


def ring_points(ring: RingHandle, segments: int) -> np.ndarray:
    angles = np.linspace(0.0, 2.0 * math.pi, segments + 1)
    return np.stack(
        [
            ring.center[0] + ring.radius * np.cos(angles),
            np.full_like(angles, ring.center[1]),
            ring.center[2] + ring.radius * np.sin(angles),
        ],
        axis=1,
    )


def draw_orbit_ring(
    surface: pygame.Surface,
    ring: RingHandle,
    camera: PerspectiveCamera,
    *,
    render_cfg: RenderCfg,
) -> None:
    ndc, w = camera.project_many(ring_points(ring, render_cfg.ring_segments))
    pixels = _to_pixels(ndc, surface.get_size())
    run: list[tuple[int, int]] = []
    for (x, y), in_front in zip(pixels, w > camera.near):
        if in_front:
            run.append((int(x), int(y)))
            continue
        draw_orbit_line(surface, ring.color, run, 1)
        run = []
    draw_orbit_line(surface, ring.color, run, 1)


def draw_orbit_line(
    surface: pygame.Surface,
    color: Color,
    points: Sequence[tuple[int, int]],
    width: int,
) -> None:
    if len(points) < 2:
        return
    if width <= 1:
        pygame.draw.aalines(surface, color, False, points)
    else:
        pygame.draw.lines(surface, color, False, points, width)
        pygame.draw.aalines(surface, color, False, points)


def sphere_screen_radius(
    sphere: SphereHandle,
    camera: PerspectiveCamera,
    viewport_height: int,
) -> float:
    depth = camera.depth_of(sphere.position)
    if depth <= camera.near:
        return 0.0
    half_fov = math.radians(camera.fov_deg) / 2.0
    return sphere.radius / (depth * math.tan(half_fov)) * (viewport_height / 2.0)


def draw_body(
    surface: pygame.Surface,
    sphere: SphereHandle,
    camera: PerspectiveCamera,
    color: tuple[int, int, int],
    *,
    render_cfg: RenderCfg,
) -> None:
    radius = sphere_screen_radius(sphere, camera, surface.get_height())
    if radius <= 0.0:
        return
    ndc = camera.project(sphere.position)
    center = (
        int((ndc[0] * 0.5 + 0.5) * surface.get_width()),
        int((-(ndc[1] * 0.5) + 0.5) * surface.get_height()),
    )
    radius_px = max(1, int(radius))
    pygame.draw.circle(surface, color, center, radius_px)
    if sphere.emissive or radius_px < 4:
        return
    # Meridian band that sweeps across the disc as the body spins.
    facing = math.cos(sphere.rotation_y)
    if facing <= 0.0:
        return
    offset = int(math.sin(sphere.rotation_y) * radius_px)
    band_width = max(1, int(radius_px * 0.4 * facing))
    band = pygame.Rect(0, 0, band_width, radius_px * 2)
    band.center = (center[0] + offset, center[1])
    pygame.draw.ellipse(surface, _shade(color, render_cfg.meridian_shade), band)


def draw_label(
    surface: pygame.Surface,
    label: Label,
    font: pygame.font.Font,
    *,
    render_cfg: RenderCfg,
) -> None:
    if not (label.visible and label.in_view):
        return
    shadow = get_text_surface(font, label.text, render_cfg.label_shadow_color)
    text = get_text_surface(font, label.text, render_cfg.label_text_color)
    x, y = label.anchor
    rect = text.get_rect(center=(int(x), int(y)))
    for dx, dy in ((-1, 0), (1, 0), (0, -1), (0, 1)):
        surface.blit(shadow, rect.move(dx, dy))
    surface.blit(text, rect)
