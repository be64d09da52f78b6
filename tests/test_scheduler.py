import csv
import random

import numpy as np
import pytest

from orrery.core.config import SimulationCfg
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
from orrery.core.kinematics import orbital_position
from orrery.core.logging_utils import SessionLogger
from orrery.core.projection import project
from orrery.core.scheduler import AnimationScheduler, SchedulerState, generate_star_positions


def positions(context):
    return {body.name: body.position.copy() for body in context.registry}


def screen_position(context, name):
    return project(context.registry.get(name).position, context.camera, *context.viewport)


def test_bodies_are_placed_before_first_tick(context, scheduler, scene):
    assert context.registry.get("earth").position == pytest.approx([70.0, 0.0, 0.0])
    assert scene.sphere("earth").position == pytest.approx([70.0, 0.0, 0.0])
    assert len(scene.spheres) == 9
    assert len(scene.rings) == 8
    assert len(scene.labels) == 8


def test_start_drives_ticks_through_pacer(scheduler, pacer, renderer, context):
    scheduler.start()
    assert pacer.requests == 1
    for _ in range(5):
        pacer.advance(16.0)
    assert len(renderer.frames) == 5
    assert context.clock.simulated == pytest.approx(80.0)
    scheduler.stop()
    pacer.advance(16.0)
    assert len(renderer.frames) == 5
    assert pacer.pending is None


def test_start_twice_requests_one_frame(scheduler, pacer):
    scheduler.start()
    scheduler.start()
    assert pacer.requests == 1


def test_start_without_pacer_fails(context, scene, renderer):
    scheduler = AnimationScheduler(context, scene, renderer)
    with pytest.raises(RuntimeError):
        scheduler.start()


def test_setup_runs_once(scheduler, scene, context):
    for _ in range(25):
        scheduler.tick(16.0)
    assert len(scene.points) == 1
    assert scene.points[0].positions.shape == (2000, 3)
    assert context.initialized == {"starfield", "theme"}


def test_running_tick_moves_and_spins_bodies(scheduler, context):
    scheduler.tick(500.0)
    earth = context.registry.get("earth")
    expected = orbital_position(earth, 500.0, context.registry.central.position)
    assert earth.position == pytest.approx(expected)
    assert earth.rotation_y > 0.0
    assert context.registry.central.rotation_y == pytest.approx(earth.rotation_y)


def test_pause_freezes_revolution_and_rotation(scheduler, context):
    scheduler.tick(100.0)
    scheduler.post(PauseToggled())
    scheduler.tick(100.0)
    assert context.state is SchedulerState.PAUSED
    frozen = positions(context)
    rotations = {body.name: body.rotation_y for body in context.registry}
    simulated = context.clock.simulated
    for _ in range(10):
        scheduler.tick(100.0)
    for name, position in positions(context).items():
        assert np.array_equal(position, frozen[name])
        assert context.registry.get(name).rotation_y == rotations[name]
    assert context.clock.simulated == simulated
    assert context.clock.wall == pytest.approx(1200.0)


def test_resume_continues_without_jump(scheduler, context):
    scheduler.tick(100.0)
    scheduler.post(PauseToggled())
    for _ in range(20):
        scheduler.tick(100.0)
    scheduler.post(PauseToggled())
    scheduler.tick(16.0)
    assert context.state is SchedulerState.RUNNING
    earth = context.registry.get("earth")
    assert context.clock.simulated == pytest.approx(116.0)
    assert earth.position == pytest.approx(
        orbital_position(earth, 116.0, context.registry.central.position)
    )


def test_labels_follow_camera_while_paused(scheduler, context):
    scheduler.post(PauseToggled())
    scheduler.tick(16.0)
    before = context.labels["earth"].anchor
    scheduler.post(CameraOrbited(60, 0))
    scheduler.tick(16.0)
    assert context.labels["earth"].anchor != pytest.approx(before)


def test_speed_change_applies_on_next_tick(scheduler, context):
    scheduler.post(SpeedChanged("earth", 3.0))
    assert context.speeds.get_speed("earth") == 1.0
    scheduler.tick(1000.0)
    assert context.speeds.get_speed("earth") == 3.0
    earth = context.registry.get("earth")
    assert earth.position == pytest.approx(
        orbital_position(earth, 1000.0, context.registry.central.position)
    )


@pytest.mark.parametrize(
    "event",
    [
        SpeedChanged("earth", 7.0),
        SpeedChanged("sun", 1.0),
        SpeedChanged("pluto", 1.0),
        SpeedChanged("earth", "fast"),
    ],
)
def test_rejected_speed_change_keeps_running(scheduler, context, renderer, event):
    scheduler.post(event)
    scheduler.tick(16.0)
    assert context.speeds.get_speed("earth") == 1.0
    assert len(renderer.frames) == 1


def test_hover_shows_only_hovered_label(scheduler, context):
    scheduler.tick(0.0)
    x, y = screen_position(context, "earth")
    scheduler.post(PointerMoved(x, y))
    scheduler.tick(0.0)
    assert context.hovered == "earth"
    visible = [name for name, label in context.labels.items() if label.visible]
    assert visible == ["earth"]

    scheduler.post(PointerMoved(400, 300))
    scheduler.tick(0.0)
    assert context.hovered is None
    assert not any(label.visible for label in context.labels.values())

    scheduler.post(PointerMoved(5, 5))
    scheduler.tick(0.0)
    assert context.hovered is None
    assert not any(label.visible for label in context.labels.values())


def test_click_focuses_camera_on_body(scheduler, context):
    scheduler.tick(0.0)
    x, y = screen_position(context, "earth")
    offset = context.camera.position - context.camera.target
    earth_position = context.registry.get("earth").position.copy()
    scheduler.post(PointerClicked(x, y))
    scheduler.tick(0.0)
    assert context.focused == "earth"
    assert context.camera.target == pytest.approx(earth_position)
    assert context.camera.position - context.camera.target == pytest.approx(offset)


def test_click_on_empty_space_leaves_camera(scheduler, context):
    scheduler.post(PointerClicked(5, 5))
    scheduler.tick(0.0)
    assert context.focused is None
    assert context.camera.target == pytest.approx([0.0, 0.0, 0.0])


def test_central_body_does_not_block_planet_behind_it(scheduler, context):
    scheduler.post(PauseToggled())
    scheduler.tick(0.0)
    context.registry.get("earth").position = np.array([0.0, 0.0, -70.0])
    scheduler.post(PointerMoved(400, 300))
    scheduler.tick(0.0)
    assert context.hovered == "earth"
    assert context.labels["earth"].visible


def test_click_on_central_body_leaves_camera(scheduler, context):
    scheduler.tick(0.0)
    scheduler.post(PointerClicked(400, 300))
    scheduler.tick(0.0)
    assert context.focused is None
    assert context.camera.target == pytest.approx([0.0, 0.0, 0.0])


def test_theme_toggle_recolours_and_persists(scheduler, context, scene, store):
    scheduler.tick(16.0)
    assert scene.background == (0, 0, 0)
    assert store.get("theme") == "dark"
    scheduler.post(ThemeToggled())
    scheduler.tick(16.0)
    assert store.get("theme") == "light"
    assert scene.background == (255, 255, 255)
    assert all(ring.color == (0, 0, 0) for ring in scene.rings)
    assert scene.points[0].color == (0, 0, 0)


def test_theme_toggle_survives_unwritable_preferences(scheduler, context, scene, renderer, tmp_path):
    scheduler.tick(16.0)
    prefs = tmp_path / "prefs.json"
    prefs.unlink()
    prefs.mkdir()
    scheduler.post(ThemeToggled())
    scheduler.post(SpeedChanged("earth", 2.0))
    scheduler.tick(16.0)
    assert len(renderer.frames) == 2
    assert context.theme.theme.value == "light"
    assert scene.background == (255, 255, 255)
    assert context.speeds.get_speed("earth") == 2.0


def test_camera_events(scheduler, context):
    scheduler.post(CameraZoomed(2.0))
    scheduler.post(CameraZoomed(-1.0))
    scheduler.tick(16.0)
    assert context.camera.distance == pytest.approx(50.0)


def test_resize_updates_viewport_and_aspect(scheduler, context):
    scheduler.post(ViewportResized(1000, 500))
    scheduler.post(ViewportResized(0, 500))
    scheduler.tick(16.0)
    assert context.viewport == (1000, 500)
    assert context.camera.aspect == pytest.approx(2.0)


def test_failing_body_does_not_stop_the_others(scheduler, context, renderer):
    mars = context.registry.get("mars")
    mars_before = mars.position.copy()
    mars.orbit_radius = float("nan")
    scheduler.tick(250.0)
    assert np.array_equal(mars.position, mars_before)
    earth = context.registry.get("earth")
    assert earth.position == pytest.approx(
        orbital_position(earth, 250.0, context.registry.central.position)
    )
    assert len(renderer.frames) == 1


def test_session_log_records_positions_and_events(context, scene, renderer, pacer, tmp_path):
    session = SessionLogger(tmp_path / "sessions", "test")
    cfg = SimulationCfg(log_every_ticks=2, star_count=10)
    scheduler = AnimationScheduler(
        context, scene, renderer, pacer, session_logger=session, cfg=cfg, rng=random.Random(1)
    )
    for _ in range(4):
        scheduler.tick(16.0)
    scheduler.post(SpeedChanged("earth", 9.0))
    scheduler.post(PauseToggled())
    scheduler.tick(16.0)
    session.close()

    with session.positions_path.open() as fh:
        rows = list(csv.DictReader(fh))
    assert len(rows) == 2 * len(context.registry)
    assert {row["body"] for row in rows} == {body.name for body in context.registry}

    with session.events_path.open() as fh:
        events = [row["type"] for row in csv.DictReader(fh)]
    assert events == ["speed_rejected", "pause"]
    assert session.meta_path.exists()


def test_generate_star_positions_is_seeded():
    first = generate_star_positions(50, 2000.0, random.Random(3))
    second = generate_star_positions(50, 2000.0, random.Random(3))
    assert first.shape == (50, 3)
    assert np.array_equal(first, second)
    assert np.all(np.abs(first) <= 1000.0)


def test_position_logging_without_session_is_a_no_op(scheduler, context):
    scheduler.tick(16.0)
    assert scheduler._log_positions() is None
    assert context.tick_count == 1
