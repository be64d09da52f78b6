from __future__ import annotations

import logging
from collections import OrderedDict
from pathlib import Path
from typing import Iterable

import pygame


logger = logging.getLogger(__name__)

Color = tuple[int, int, int] | tuple[int, int, int, int]


class AssetLibrary:
    """Cache for body textures; missing files resolve to ``None``."""

    def __init__(self, asset_dir: Path | None = None) -> None:
        self._asset_dir = asset_dir or Path(__file__).resolve().parents[3] / "assets"
        self._textures: dict[str, pygame.Surface | None] = {}
        self._texture_colors: dict[str, tuple[int, int, int]] = {}

    @property
    def asset_dir(self) -> Path:
        return self._asset_dir

    def load_texture(self, filename: str) -> pygame.Surface | None:
        if filename in self._textures:
            return self._textures[filename]
        path = self._asset_dir / filename
        texture: pygame.Surface | None
        try:
            texture = pygame.image.load(path.as_posix())
            if pygame.display.get_surface() is not None:
                texture = texture.convert()
        except (pygame.error, FileNotFoundError) as exc:
            logger.warning("Texture %s unavailable, using placeholder: %s", path, exc)
            texture = None
        self._textures[filename] = texture
        return texture

    def texture_color(self, filename: str, fallback: tuple[int, int, int]) -> tuple[int, int, int]:
        cached = self._texture_colors.get(filename)
        if cached is not None:
            return cached
        texture = self.load_texture(filename) if filename else None
        if texture is None:
            color = fallback
        else:
            r, g, b, *_ = pygame.transform.average_color(texture)
            color = (int(r), int(g), int(b))
        self._texture_colors[filename] = color
        return color


_TEXT_SURFACE_CACHE_MAX_SIZE = 256
_TEXT_SURFACE_CACHE: OrderedDict[tuple[int, str, Color], pygame.Surface] = OrderedDict()


def get_text_surface(font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
    """Return a cached rendered surface for the given font, text and color."""

    key = (id(font), text, color)
    cached = _TEXT_SURFACE_CACHE.get(key)
    if cached is not None:
        _TEXT_SURFACE_CACHE.move_to_end(key)
        return cached
    rendered = font.render(text, True, color)
    _TEXT_SURFACE_CACHE[key] = rendered
    if len(_TEXT_SURFACE_CACHE) > _TEXT_SURFACE_CACHE_MAX_SIZE:
        _TEXT_SURFACE_CACHE.popitem(last=False)
    return rendered


def load_font(preferred_names: Iterable[str], size: int, *, bold: bool = False) -> pygame.font.Font:
    names = list(preferred_names)
    for name in names:
        match = pygame.font.match_font(name, bold=bold)
        if match:
            return pygame.font.Font(match, size)
    fallback = names[0] if names else None
    return pygame.font.SysFont(fallback, size, bold=bold)
