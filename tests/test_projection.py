import numpy as np
import pytest

from orrery.core.camera import PerspectiveCamera
from orrery.core.model import BodyRegistry, Label
from orrery.core.projection import (
    is_in_view,
    ndc_to_screen,
    project,
    screen_to_ndc,
    update_labels,
)
from orrery.data.bodies import BODY_DEFINITIONS


WIDTH, HEIGHT = 800, 600


@pytest.fixture
def camera():
    return PerspectiveCamera(WIDTH / HEIGHT)


def test_look_at_point_projects_to_viewport_center(camera):
    assert project(camera.target, camera, WIDTH, HEIGHT) == pytest.approx((400.0, 300.0))
    camera.set_target((70.0, 0.0, 0.0))
    camera.set_position((70.0, 30.0, 60.0))
    assert project((70.0, 0.0, 0.0), camera, WIDTH, HEIGHT) == pytest.approx((400.0, 300.0))


def test_screen_y_grows_downwards(camera):
    _, y_up = project((0.0, 10.0, 0.0), camera, WIDTH, HEIGHT)
    x_right, _ = project((10.0, 0.0, 0.0), camera, WIDTH, HEIGHT)
    assert y_up < 300.0
    assert x_right > 400.0


def test_ndc_corners_map_to_viewport_corners():
    assert ndc_to_screen(-1.0, 1.0, WIDTH, HEIGHT) == (0.0, 0.0)
    assert ndc_to_screen(1.0, -1.0, WIDTH, HEIGHT) == (800.0, 600.0)


@pytest.mark.parametrize("x, y", [(0, 0), (400, 300), (123, 456), (800, 600)])
def test_screen_to_ndc_inverts_ndc_to_screen(x, y):
    ndc = screen_to_ndc(x, y, WIDTH, HEIGHT)
    assert ndc_to_screen(*ndc, WIDTH, HEIGHT) == pytest.approx((x, y))


def test_screen_to_ndc_rejects_empty_viewport():
    with pytest.raises(ValueError):
        screen_to_ndc(1, 1, 0, 600)


def test_points_behind_camera_are_not_in_view(camera):
    assert is_in_view((0.0, 0.0, 0.0), camera)
    assert not is_in_view((0.0, 0.0, 150.0), camera)
    assert not is_in_view((5000.0, 0.0, 0.0), camera)


def test_update_labels_writes_anchor_and_visibility_flag(camera):
    registry = BodyRegistry.from_specs(BODY_DEFINITIONS)
    earth = registry.get("earth")
    earth.position = np.array([0.0, 0.0, 0.0])
    mars = registry.get("mars")
    mars.position = np.array([0.0, 0.0, 180.0])
    labels = [Label(body="earth", text="Earth"), Label(body="mars", text="Mars")]
    update_labels(labels, registry, camera, WIDTH, HEIGHT)
    assert labels[0].anchor == pytest.approx((400.0, 300.0))
    assert labels[0].in_view
    assert not labels[1].in_view
    assert not labels[0].visible
