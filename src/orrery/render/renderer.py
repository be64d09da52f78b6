from __future__ import annotations

from typing import Protocol

import pygame

from orrery.core.camera import PerspectiveCamera
from orrery.core.config import RENDER_CFG, RenderCfg

from .assets import AssetLibrary
from .draw import draw_body, draw_label, draw_orbit_ring, draw_starfield
from .scene import SceneGraph


class Widget(Protocol):
    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None: ...


class PygameRenderer:
    """Draws a :class:`SceneGraph` onto a pygame surface and flips the display."""

    def __init__(
        self,
        surface: pygame.Surface,
        assets: AssetLibrary,
        *,
        label_font: pygame.font.Font,
        ui_font: pygame.font.Font,
        render_cfg: RenderCfg = RENDER_CFG,
    ) -> None:
        self._surface = surface
        self._assets = assets
        self._label_font = label_font
        self._ui_font = ui_font
        self._cfg = render_cfg
        self.widgets: list[Widget] = []

    def set_surface(self, surface: pygame.Surface) -> None:
        self._surface = surface

    def render(self, scene: SceneGraph, camera: PerspectiveCamera) -> None:
        surface = self._surface
        surface.fill(scene.background)
        for stars in scene.points:
            draw_starfield(surface, stars, camera)
        for ring in scene.rings:
            draw_orbit_ring(surface, ring, camera, render_cfg=self._cfg)
        for sphere in sorted(scene.spheres, key=lambda s: camera.depth_of(s.position), reverse=True):
            if sphere.color is None:
                sphere.color = self._assets.texture_color(
                    sphere.texture, self._cfg.placeholder_color(sphere.name)
                )
            draw_body(surface, sphere, camera, sphere.color, render_cfg=self._cfg)
        for label in scene.labels:
            draw_label(surface, label, self._label_font, render_cfg=self._cfg)
        for widget in self.widgets:
            widget.draw(surface, self._ui_font)
        pygame.display.flip()
