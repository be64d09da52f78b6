"""Per-frame driver tying kinematics, projection, picking and rendering together."""
from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import asdict, dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Optional, Protocol

import numpy as np

from orrery.data.bodies import BodySpec

from .camera import PerspectiveCamera
from .config import CAMERA_CFG, SIMULATION_CFG, CameraCfg, SimulationCfg
from .events import (
    CameraOrbited,
    CameraZoomed,
    Event,
    PauseToggled,
    PointerClicked,
    PointerMoved,
    SpeedChanged,
    ThemeToggled,
    ViewportResized,
)
from .focus import CameraFocusController
from .kinematics import advance_rotation, orbital_position
from .logging_utils import SessionLogger
from .model import BodyRegistry, Label
from .picking import apply_hover, pick
from .projection import screen_to_ndc, update_labels
from .speed import InvalidSpeedValue, SpeedControl
from .theme import Store, ThemeState
from .timekeeping import SimulationClock


logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class Renderer(Protocol):
    def render(self, scene: Any, camera: PerspectiveCamera) -> None: ...


class FramePacer(Protocol):
    def request_frame(self, callback: FrameCallback) -> None: ...


class SchedulerState(Enum):
    RUNNING = auto()
    PAUSED = auto()


@dataclass
class SimulationContext:
    """All mutable simulation state, owned by one scheduler."""

    registry: BodyRegistry
    speeds: SpeedControl
    theme: ThemeState
    camera: PerspectiveCamera
    viewport: tuple[int, int]
    labels: dict[str, Label]
    clock: SimulationClock = field(default_factory=SimulationClock)
    state: SchedulerState = SchedulerState.RUNNING
    hovered: Optional[str] = None
    focused: Optional[str] = None
    initialized: set[str] = field(default_factory=set)
    tick_count: int = 0

    @classmethod
    def create(
        cls,
        specs: tuple[BodySpec, ...] | list[BodySpec],
        store: Store,
        *,
        viewport: tuple[int, int],
        sim_cfg: SimulationCfg = SIMULATION_CFG,
        camera_cfg: CameraCfg = CAMERA_CFG,
    ) -> "SimulationContext":
        registry = BodyRegistry.from_specs(specs)
        width, height = viewport
        labels = {
            body.name: Label(body=body.name, text=body.name.capitalize())
            for body in registry.satellites()
        }
        return cls(
            registry=registry,
            speeds=SpeedControl(registry, sim_cfg),
            theme=ThemeState(store),
            camera=PerspectiveCamera(width / height, cfg=camera_cfg),
            viewport=viewport,
            labels=labels,
        )

    @property
    def paused(self) -> bool:
        return self.state is SchedulerState.PAUSED


def generate_star_positions(
    count: int,
    spread: float,
    rng: random.Random | None = None,
) -> np.ndarray:
    rng = rng or random.Random()
    return np.array(
        [[(rng.random() - 0.5) * spread for _ in range(3)] for _ in range(count)],
        dtype=float,
    ).reshape(count, 3)


class AnimationScheduler:
    """Single per-frame driver; input events are queued and applied between ticks."""

    def __init__(
        self,
        context: SimulationContext,
        scene: Any,
        renderer: Renderer,
        pacer: Optional[FramePacer] = None,
        *,
        session_logger: Optional[SessionLogger] = None,
        cfg: SimulationCfg = SIMULATION_CFG,
        rng: random.Random | None = None,
    ) -> None:
        self.context = context
        self.scene = scene
        self._renderer = renderer
        self._pacer = pacer
        self._session = session_logger
        self._cfg = cfg
        self._rng = rng
        self._events: deque[Event] = deque()
        self._active = False
        self._focus = CameraFocusController(context.camera)
        self._stars = None
        self._handlers: dict[type, Callable[[Any], None]] = {
            PointerMoved: self._on_pointer_moved,
            PointerClicked: self._on_pointer_clicked,
            SpeedChanged: self._on_speed_changed,
            PauseToggled: self._on_pause_toggled,
            ThemeToggled: self._on_theme_toggled,
            CameraOrbited: self._on_camera_orbited,
            CameraZoomed: self._on_camera_zoomed,
            ViewportResized: self._on_viewport_resized,
        }

        registry = context.registry
        palette = context.theme.palette
        self._meshes = {}
        self._rings = []
        for body in registry:
            self._meshes[body.name] = scene.add_sphere(
                body.name, body.size, texture=body.texture, emissive=body.is_central
            )
        for body in registry.satellites():
            self._rings.append(
                scene.add_ring(body.orbit_radius, palette.orbit, registry.central.position)
            )
            scene.add_label(context.labels[body.name])
        self._place_bodies()
        self._sync_meshes()

        if self._session is not None:
            self._session.write_meta(
                {
                    "bodies": [
                        {
                            "name": body.name,
                            "role": body.role,
                            "size": body.size,
                            "orbit_radius": body.orbit_radius,
                            "speed": body.base_speed,
                        }
                        for body in registry
                    ],
                    "simulation": asdict(cfg),
                    "theme": context.theme.theme.value,
                }
            )

    # -- lifecycle ------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def pending_events(self) -> int:
        return len(self._events)

    def start(self) -> None:
        if self._active:
            return
        if self._pacer is None:
            raise RuntimeError("start() needs a frame pacer")
        self._active = True
        self._pacer.request_frame(self._on_frame)

    def stop(self) -> None:
        self._active = False

    def post(self, event: Event) -> None:
        self._events.append(event)

    def _on_frame(self, delta: float) -> None:
        if not self._active:
            return
        self.tick(delta)
        if self._active and self._pacer is not None:
            self._pacer.request_frame(self._on_frame)

    def tick(self, delta: float) -> None:
        ctx = self.context
        self._ensure_initialized()
        self._drain_events()
        running = ctx.state is SchedulerState.RUNNING
        ctx.clock.advance(delta, running)
        if running:
            self._update_bodies(delta)
        self._sync_meshes()
        update_labels(ctx.labels.values(), ctx.registry, ctx.camera, *ctx.viewport)
        self._renderer.render(self.scene, ctx.camera)
        ctx.tick_count += 1
        if (
            running
            and self._session is not None
            and ctx.tick_count % max(1, self._cfg.log_every_ticks) == 0
        ):
            self._log_positions()

    # -- per-tick work ------------------------------------------------------

    def _ensure_initialized(self) -> None:
        ctx = self.context
        if "starfield" not in ctx.initialized:
            positions = generate_star_positions(
                self._cfg.star_count, self._cfg.star_spread, self._rng
            )
            self._stars = self.scene.add_points(positions, ctx.theme.palette.stars)
            ctx.initialized.add("starfield")
        if "theme" not in ctx.initialized:
            self._apply_theme()
            ctx.initialized.add("theme")

    def _drain_events(self) -> None:
        while self._events:
            event = self._events.popleft()
            handler = self._handlers.get(type(event))
            if handler is None:
                logger.warning("Ignoring unsupported event %r", event)
                continue
            handler(event)

    def _place_bodies(self) -> None:
        registry = self.context.registry
        center = registry.central.position
        for body in registry.satellites():
            body.position = orbital_position(body, self.context.clock.simulated, center, self._cfg)

    def _update_bodies(self, delta: float) -> None:
        ctx = self.context
        center = ctx.registry.central.position
        for body in ctx.registry:
            try:
                position = orbital_position(body, ctx.clock.simulated, center, self._cfg)
                if not np.all(np.isfinite(position)):
                    raise ValueError(f"non-finite position {position!r}")
                body.position = position
                advance_rotation(body, delta, self._cfg)
            except (ArithmeticError, ValueError) as exc:
                logger.warning("Skipping update of %s: %s", body.name, exc)
                self._record("body_update_failed", body.name, details=str(exc))

    def _sync_meshes(self) -> None:
        for body in self.context.registry:
            mesh = self._meshes[body.name]
            mesh.position = body.position.copy()
            mesh.rotation_y = body.rotation_y

    def _apply_theme(self) -> None:
        palette = self.context.theme.palette
        self.scene.background = palette.background
        for ring in self._rings:
            ring.color = palette.orbit
        if self._stars is not None:
            self._stars.color = palette.stars

    def _log_positions(self) -> None:
        if self._session is None:
            return
        t = self.context.clock.simulated
        for body in self.context.registry:
            x, y, z = body.position
            self._session.log_position((t, body.name, x, y, z, body.rotation_y, body.speed))

    def _record(self, event_type: str, body: str = "", value: object = "", details: str = "") -> None:
        if self._session is not None:
            self._session.log_event(self.context.clock.wall, event_type, body, value, details)

    # -- event handlers -----------------------------------------------------

    def _pick(self, x: float, y: float) -> Optional[str]:
        ctx = self.context
        ndc = screen_to_ndc(x, y, *ctx.viewport)
        return pick(ndc, ctx.camera, ctx.registry.satellites())

    def _on_pointer_moved(self, event: PointerMoved) -> None:
        hit = self._pick(event.x, event.y)
        apply_hover(self.context.labels.values(), hit)
        self.context.hovered = hit

    def _on_pointer_clicked(self, event: PointerClicked) -> None:
        hit = self._pick(event.x, event.y)
        if hit is None:
            return
        body = self.context.registry.get(hit)
        self._focus.focus_on(body.position)
        self.context.focused = hit
        logger.debug("Focused camera on %s", hit)
        self._record("focus", hit)

    def _on_speed_changed(self, event: SpeedChanged) -> None:
        try:
            value = self.context.speeds.set_speed(event.body, event.value)
        except (InvalidSpeedValue, KeyError) as exc:
            logger.warning("Rejected speed change: %s", exc)
            self._record("speed_rejected", event.body, event.value, str(exc))
            return
        self._record("speed", event.body, value)

    def _on_pause_toggled(self, event: PauseToggled) -> None:
        ctx = self.context
        if ctx.state is SchedulerState.RUNNING:
            ctx.state = SchedulerState.PAUSED
            self._record("pause")
        else:
            ctx.state = SchedulerState.RUNNING
            self._record("resume")
        logger.info("Simulation %s", "paused" if ctx.paused else "resumed")

    def _on_theme_toggled(self, event: ThemeToggled) -> None:
        theme = self.context.theme.toggle()
        self._apply_theme()
        self._record("theme", value=theme.value)

    def _on_camera_orbited(self, event: CameraOrbited) -> None:
        self.context.camera.rotate(event.dx, event.dy)

    def _on_camera_zoomed(self, event: CameraZoomed) -> None:
        try:
            self.context.camera.zoom_by_factor(event.factor)
        except ValueError as exc:
            logger.warning("Ignoring zoom: %s", exc)

    def _on_viewport_resized(self, event: ViewportResized) -> None:
        if event.width <= 0 or event.height <= 0:
            logger.warning("Ignoring resize to %dx%d", event.width, event.height)
            return
        self.context.viewport = (event.width, event.height)
        self.context.camera.set_aspect(event.width / event.height)


__all__ = [
    "AnimationScheduler",
    "FramePacer",
    "Renderer",
    "SchedulerState",
    "SimulationContext",
    "generate_star_positions",
]
