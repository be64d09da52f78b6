"""Static catalog of the bodies shown in the orrery."""
from __future__ import annotations

from dataclasses import dataclass


CENTRAL = "central"
SATELLITE = "satellite"


@dataclass(frozen=True)
class BodySpec:
    key: str
    role: str
    radius: float
    size: float
    speed: float
    texture: str

    @property
    def name(self) -> str:
        return self.key.capitalize()


BODY_DEFINITIONS: tuple[BodySpec, ...] = (
    BodySpec(key="sun", role=CENTRAL, radius=0.0, size=20.0, speed=0.0, texture="sun_hd.jpg"),
    BodySpec(key="mercury", role=SATELLITE, radius=50.0, size=2.0, speed=2.0, texture="mercury_hd.jpg"),
    BodySpec(key="venus", role=SATELLITE, radius=60.0, size=3.0, speed=1.5, texture="venus_hd.jpg"),
    BodySpec(key="earth", role=SATELLITE, radius=70.0, size=4.0, speed=1.0, texture="earth_hd.jpg"),
    BodySpec(key="mars", role=SATELLITE, radius=80.0, size=3.5, speed=0.8, texture="mars_hd.jpg"),
    BodySpec(key="jupiter", role=SATELLITE, radius=100.0, size=10.0, speed=0.7, texture="jupiter_hd.jpg"),
    BodySpec(key="saturn", role=SATELLITE, radius=120.0, size=8.0, speed=0.6, texture="saturn_hd.jpg"),
    BodySpec(key="uranus", role=SATELLITE, radius=140.0, size=6.0, speed=0.5, texture="uranus_hd.jpg"),
    BodySpec(key="neptune", role=SATELLITE, radius=160.0, size=5.0, speed=0.4, texture="neptune_hd.jpg"),
)

BODIES: dict[str, BodySpec] = {spec.key: spec for spec in BODY_DEFINITIONS}
BODY_DISPLAY_ORDER: list[str] = [spec.key for spec in BODY_DEFINITIONS]
CENTRAL_BODY_KEY = next(spec.key for spec in BODY_DEFINITIONS if spec.role == CENTRAL)


__all__ = [
    "BODIES",
    "BODY_DEFINITIONS",
    "BODY_DISPLAY_ORDER",
    "CENTRAL",
    "CENTRAL_BODY_KEY",
    "SATELLITE",
    "BodySpec",
]
