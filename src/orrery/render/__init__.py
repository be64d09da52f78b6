"""Rendering helpers for the orrery."""

from .assets import (
    AssetLibrary,
    get_text_surface,
    load_font,
)
from .draw import (
    draw_body,
    draw_label,
    draw_orbit_line,
    draw_orbit_ring,
    draw_starfield,
    ring_points,
    sphere_screen_radius,
)
from .renderer import PygameRenderer
from .scene import (
    PointsHandle,
    RingHandle,
    SceneGraph,
    SphereHandle,
)
from .ui import (
    Button,
    ButtonVisualStyle,
    Slider,
    SpeedPanel,
)

__all__ = [
    "AssetLibrary",
    "Button",
    "ButtonVisualStyle",
    "PointsHandle",
    "PygameRenderer",
    "RingHandle",
    "SceneGraph",
    "Slider",
    "SpeedPanel",
    "SphereHandle",
    "draw_body",
    "draw_label",
    "draw_orbit_line",
    "draw_orbit_ring",
    "draw_starfield",
    "get_text_surface",
    "load_font",
    "ring_points",
    "sphere_screen_radius",
]
