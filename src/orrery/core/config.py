"""Configuration dataclasses for the orrery."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationCfg:
    angular_speed_scale: float = 0.001
    self_rotation_rate: float = 0.0003
    speed_min: float = 0.0
    speed_max: float = 5.0
    speed_step: float = 0.1
    log_every_ticks: int = 30
    star_count: int = 2000
    star_spread: float = 2000.0


@dataclass(frozen=True)
class CameraCfg:
    fov_deg: float = 85.0
    near: float = 0.1
    far: float = 1000.0
    initial_position: tuple[float, float, float] = (0.0, 0.0, 100.0)
    initial_target: tuple[float, float, float] = (0.0, 0.0, 0.0)
    min_distance: float = 12.0
    max_distance: float = 1000.0
    rotate_speed: float = 0.005
    zoom_step: float = 1.1
    min_polar_angle: float = 1e-3


@dataclass(frozen=True)
class RenderCfg:
    width: int = 1280
    height: int = 800
    fps: int = 60
    ring_segments: int = 100
    star_pixel_size: int = 1
    label_font_names: tuple[str, ...] = ("arial", "helvetica", "dejavusans")
    label_font_size: int = 14
    label_text_color: tuple[int, int, int] = (255, 255, 255)
    label_shadow_color: tuple[int, int, int] = (0, 0, 0)
    ui_font_size: int = 16
    panel_color: tuple[int, int, int, int] = (0, 0, 0, int(255 * 0.7))
    panel_text_color: tuple[int, int, int] = (255, 255, 255)
    panel_radius: int = 10
    slider_width: int = 150
    slider_track_color: tuple[int, int, int] = (110, 110, 110)
    slider_fill_color: tuple[int, int, int] = (88, 140, 255)
    slider_knob_color: tuple[int, int, int] = (234, 241, 255)
    button_radius: int = 5
    meridian_shade: float = 0.65
    placeholder_colors: tuple[tuple[str, tuple[int, int, int]], ...] = (
        ("sun", (255, 196, 64)),
        ("mercury", (160, 150, 140)),
        ("venus", (222, 184, 120)),
        ("earth", (70, 120, 200)),
        ("mars", (196, 90, 60)),
        ("jupiter", (210, 170, 130)),
        ("saturn", (220, 200, 150)),
        ("uranus", (150, 210, 220)),
        ("neptune", (70, 100, 210)),
    )
    default_placeholder_color: tuple[int, int, int] = (180, 180, 180)

    def placeholder_color(self, key: str) -> tuple[int, int, int]:
        return dict(self.placeholder_colors).get(key, self.default_placeholder_color)


@dataclass(frozen=True)
class ThemePalette:
    background: tuple[int, int, int]
    orbit: tuple[int, int, int]
    stars: tuple[int, int, int]
    button_background: tuple[int, int, int]
    button_text: tuple[int, int, int]


@dataclass(frozen=True)
class ThemeCfg:
    dark: ThemePalette = ThemePalette(
        background=(0, 0, 0),
        orbit=(255, 255, 255),
        stars=(255, 255, 255),
        button_background=(34, 34, 34),
        button_text=(255, 255, 255),
    )
    light: ThemePalette = ThemePalette(
        background=(255, 255, 255),
        orbit=(0, 0, 0),
        stars=(0, 0, 0),
        button_background=(255, 255, 255),
        button_text=(34, 34, 34),
    )
    storage_key: str = "theme"
    default: str = "dark"


SIMULATION_CFG = SimulationCfg()
CAMERA_CFG = CameraCfg()
RENDER_CFG = RenderCfg()
THEME_CFG = ThemeCfg()


__all__ = [
    "CAMERA_CFG",
    "RENDER_CFG",
    "SIMULATION_CFG",
    "THEME_CFG",
    "CameraCfg",
    "RenderCfg",
    "SimulationCfg",
    "ThemeCfg",
    "ThemePalette",
]
