"""
Orrery - Interactive Solar System
=================================

A central star with eight revolving, spinning planets. Drag to orbit the
camera, scroll to zoom, hover a planet to see its name and click it to
focus the camera on it. Speeds are adjustable from the panel in the lower
left corner.

Keys: SPACE pause/resume, T toggle light/dark mode, ESC quit.
"""
from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path
from typing import Callable, Optional

import pygame
from pygame.locals import DOUBLEBUF, RESIZABLE

from orrery.core.config import CAMERA_CFG, RENDER_CFG, SIMULATION_CFG
from orrery.core.events import (
    CameraOrbited,
    CameraZoomed,
    PauseToggled,
    PointerClicked,
    PointerMoved,
    SpeedChanged,
    ThemeToggled,
    ViewportResized,
)
from orrery.core.logging_utils import SessionLogger
from orrery.core.preferences import DEFAULT_PREFERENCES_PATH, PreferenceStore
from orrery.core.scheduler import AnimationScheduler, FrameCallback, SimulationContext
from orrery.core.timekeeping import FrameTimer
from orrery.data.bodies import BODY_DEFINITIONS
from orrery.render import (
    AssetLibrary,
    Button,
    ButtonVisualStyle,
    PygameRenderer,
    SceneGraph,
    Slider,
    SpeedPanel,
    load_font,
)


logger = logging.getLogger(__name__)

CLICK_TOLERANCE_PX = 4
MARGIN = 20
BUTTON_SIZE = (120, 40)


def _set_display_mode_with_vsync(size: tuple[int, int], flags: int = 0) -> pygame.Surface:
    """Create the display surface with double buffering and vsync when available."""
    flags |= DOUBLEBUF
    try:
        return pygame.display.set_mode(size, flags, vsync=1)
    except pygame.error as err:
        try:
            return pygame.display.set_mode(size, flags)
        except pygame.error:
            raise err


def parse_size(text: str) -> tuple[int, int]:
    try:
        width_text, height_text = text.lower().split("x")
        width, height = int(width_text), int(height_text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}") from None
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError("window size must be positive")
    return width, height


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Interactive orrery with adjustable planet speeds.")
    parser.add_argument(
        "--size",
        type=parse_size,
        default=(RENDER_CFG.width, RENDER_CFG.height),
        help="Window size as WIDTHxHEIGHT",
    )
    parser.add_argument("--fps", type=int, default=RENDER_CFG.fps, help="Frame rate cap")
    parser.add_argument(
        "--prefs",
        type=Path,
        default=DEFAULT_PREFERENCES_PATH,
        help="Preference file holding the light/dark theme",
    )
    parser.add_argument("--log-dir", type=Path, default=Path("data") / "sessions", help="Session log root")
    parser.add_argument("--no-log", action="store_true", help="Do not record a session log")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the starfield")
    parser.add_argument("--assets", type=Path, default=None, help="Directory with planet textures")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


class PygameFramePacer:
    """Runs queued frame callbacks from the pygame event loop."""

    def __init__(self, fps: int) -> None:
        self._fps = fps
        self._clock = pygame.time.Clock()
        self._pending: Optional[FrameCallback] = None
        self._running = False
        self.event_handler: Callable[[pygame.event.Event], None] = lambda event: None

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending = callback

    def stop(self) -> None:
        self._running = False

    def run(self) -> None:
        self._running = True
        timer = FrameTimer()
        while self._running and self._pending is not None:
            self._clock.tick(self._fps)
            for event in pygame.event.get():
                self.event_handler(event)
            if not self._running:
                break
            callback, self._pending = self._pending, None
            callback(timer.tick_ms())


class InputRouter:
    """Turns pygame events into widget callbacks or scheduler events."""

    def __init__(
        self,
        scheduler: AnimationScheduler,
        pacer: PygameFramePacer,
        widgets: list,
        on_resize: Callable[[tuple[int, int]], None],
    ) -> None:
        self._scheduler = scheduler
        self._pacer = pacer
        self._widgets = widgets
        self._on_resize = on_resize
        self._drag_last: tuple[int, int] | None = None
        self._drag_travel = 0.0

    def handle_event(self, event: pygame.event.Event) -> None:
        post = self._scheduler.post
        if event.type == pygame.QUIT:
            self._pacer.stop()
        elif event.type == pygame.VIDEORESIZE:
            self._on_resize(event.size)
            post(ViewportResized(*event.size))
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self._pacer.stop()
            elif event.key == pygame.K_SPACE:
                post(PauseToggled())
            elif event.key == pygame.K_t:
                post(ThemeToggled())
        elif event.type == pygame.MOUSEWHEEL:
            post(CameraZoomed(CAMERA_CFG.zoom_step ** event.y))
        elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEMOTION, pygame.MOUSEBUTTONUP):
            self._handle_mouse(event)

    def _handle_mouse(self, event: pygame.event.Event) -> None:
        post = self._scheduler.post
        if any(widget.handle_event(event) for widget in self._widgets):
            return
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._drag_last = event.pos
            self._drag_travel = 0.0
        elif event.type == pygame.MOUSEMOTION:
            if self._drag_last is not None:
                dx = event.pos[0] - self._drag_last[0]
                dy = event.pos[1] - self._drag_last[1]
                self._drag_last = event.pos
                self._drag_travel += abs(dx) + abs(dy)
                post(CameraOrbited(dx, dy))
            post(PointerMoved(*event.pos))
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            if self._drag_last is not None and self._drag_travel < CLICK_TOLERANCE_PX:
                post(PointerClicked(*event.pos))
            self._drag_last = None


def build_widgets(context: SimulationContext, scheduler: AnimationScheduler) -> tuple[Button, Button, SpeedPanel]:
    pause_style = ButtonVisualStyle(
        base_color=(34, 34, 34),
        text_color=(255, 255, 255),
        radius=RENDER_CFG.button_radius,
    )
    pause_button = Button(
        (MARGIN, MARGIN, *BUTTON_SIZE),
        "Pause",
        lambda: scheduler.post(PauseToggled()),
        lambda: "Resume" if context.paused else "Pause",
        style=pause_style,
    )

    def theme_style() -> ButtonVisualStyle:
        palette = context.theme.palette
        return ButtonVisualStyle(
            base_color=palette.button_background,
            text_color=palette.button_text,
            radius=RENDER_CFG.button_radius,
            border_color=palette.button_text,
            border_width=1,
        )

    theme_button = Button(
        (context.viewport[0] - MARGIN - BUTTON_SIZE[0], MARGIN, *BUTTON_SIZE),
        "Light Mode",
        lambda: scheduler.post(ThemeToggled()),
        context.theme.toggle_label,
        style_getter=theme_style,
    )

    lo, hi = context.speeds.bounds
    rows = []
    for body in context.registry.satellites():
        name = body.name
        slider = Slider(
            (0, 0, RENDER_CFG.slider_width, 16),
            lo,
            hi,
            SIMULATION_CFG.speed_step,
            lambda name=name: context.speeds.get_speed(name),
            lambda value, name=name: scheduler.post(SpeedChanged(name, value)),
            track_color=RENDER_CFG.slider_track_color,
            fill_color=RENDER_CFG.slider_fill_color,
            knob_color=RENDER_CFG.slider_knob_color,
        )
        rows.append((name.capitalize(), slider))
    panel = SpeedPanel(
        (MARGIN, 0),
        rows,
        title="Planet Speed Controls",
        background_color=RENDER_CFG.panel_color,
        text_color=RENDER_CFG.panel_text_color,
        radius=RENDER_CFG.panel_radius,
    )
    panel.move_to((MARGIN, context.viewport[1] - MARGIN - panel.rect.height))
    return pause_button, theme_button, panel


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    pygame.init()
    pygame.display.set_caption("Orrery – Interactive Solar System")
    screen = _set_display_mode_with_vsync(args.size, RESIZABLE)

    context = SimulationContext.create(
        BODY_DEFINITIONS,
        PreferenceStore(args.prefs),
        viewport=screen.get_size(),
    )
    scene = SceneGraph()
    renderer = PygameRenderer(
        screen,
        AssetLibrary(args.assets),
        label_font=load_font(RENDER_CFG.label_font_names, RENDER_CFG.label_font_size, bold=True),
        ui_font=load_font(RENDER_CFG.label_font_names, RENDER_CFG.ui_font_size),
    )
    session_logger = None if args.no_log else SessionLogger(args.log_dir)
    if session_logger is not None:
        logger.info("Recording session to %s", session_logger.session_dir)

    pacer = PygameFramePacer(args.fps)
    scheduler = AnimationScheduler(
        context,
        scene,
        renderer,
        pacer,
        session_logger=session_logger,
        rng=random.Random(args.seed),
    )
    pause_button, theme_button, panel = build_widgets(context, scheduler)
    widgets = [pause_button, theme_button, panel]
    renderer.widgets.extend(widgets)

    def on_resize(size: tuple[int, int]) -> None:
        renderer.set_surface(_set_display_mode_with_vsync(size, RESIZABLE))
        theme_button.rect.topright = (size[0] - MARGIN, MARGIN)
        panel.move_to((MARGIN, size[1] - MARGIN - panel.rect.height))

    pacer.event_handler = InputRouter(scheduler, pacer, widgets, on_resize).handle_event

    try:
        scheduler.start()
        pacer.run()
    finally:
        scheduler.stop()
        if session_logger is not None:
            session_logger.close()
        pygame.quit()


if __name__ == "__main__":
    main()
