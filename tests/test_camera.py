import math

import numpy as np
import pytest

from orrery.core.camera import PerspectiveCamera
from orrery.core.config import CameraCfg


@pytest.fixture
def camera():
    return PerspectiveCamera(800 / 600)


def test_initial_pose(camera):
    assert camera.position == pytest.approx([0.0, 0.0, 100.0])
    assert camera.target == pytest.approx([0.0, 0.0, 0.0])
    assert camera.distance == pytest.approx(100.0)


def test_view_matrix_puts_target_on_negative_z_axis(camera):
    camera.set_position((30.0, 40.0, 50.0))
    camera.set_target((1.0, 2.0, 3.0))
    view = camera.view_matrix()
    target = view @ np.array([1.0, 2.0, 3.0, 1.0])
    assert target[:3] == pytest.approx([0.0, 0.0, -camera.distance])


def test_view_matrix_when_looking_straight_down(camera):
    camera.set_position((0.0, 100.0, 0.0))
    view = camera.view_matrix()
    assert np.all(np.isfinite(view))
    assert camera.project((0.0, 0.0, 0.0))[:2] == pytest.approx([0.0, 0.0])


def test_project_many_reports_points_behind_camera(camera):
    ndc, w = camera.project_many(np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 200.0]]))
    assert w[0] > 0.0
    assert w[1] < 0.0
    assert ndc[0][:2] == pytest.approx([0.0, 0.0])


def test_depth_of(camera):
    assert camera.depth_of((0.0, 0.0, 0.0)) == pytest.approx(100.0)
    assert camera.depth_of((50.0, 0.0, 40.0)) == pytest.approx(60.0)


def test_center_ray_points_at_target(camera):
    camera.set_position((10.0, 20.0, 30.0))
    origin, direction = camera.ray_from_ndc(0.0, 0.0)
    expected = -camera.position / np.linalg.norm(camera.position)
    assert origin == pytest.approx([10.0, 20.0, 30.0])
    assert direction == pytest.approx(expected)


def test_ray_through_projected_point_passes_through_it(camera):
    point = np.array([35.0, -12.0, 8.0])
    ndc = camera.project(point)
    origin, direction = camera.ray_from_ndc(ndc[0], ndc[1])
    to_point = point - origin
    along = float(np.dot(to_point, direction))
    assert np.linalg.norm(origin + along * direction - point) == pytest.approx(0.0, abs=1e-6)


def test_rotate_keeps_distance_and_target(camera):
    camera.rotate(120, -45)
    assert camera.distance == pytest.approx(100.0)
    assert camera.target == pytest.approx([0.0, 0.0, 0.0])
    assert not np.allclose(camera.position, [0.0, 0.0, 100.0])


def test_rotate_clamps_polar_angle(camera):
    camera.rotate(0, -10_000)
    offset = camera.position - camera.target
    polar = math.acos(offset[1] / np.linalg.norm(offset))
    assert polar >= CameraCfg().min_polar_angle - 1e-9


@pytest.mark.parametrize(
    "factor, expected",
    [(2.0, 50.0), (0.5, 200.0), (1000.0, 12.0), (0.001, 1000.0)],
)
def test_zoom_is_clamped(camera, factor, expected):
    camera.zoom_by_factor(factor)
    assert camera.distance == pytest.approx(expected)


def test_zoom_rejects_non_positive_factor(camera):
    with pytest.raises(ValueError):
        camera.zoom_by_factor(0.0)


def test_set_aspect_validates(camera):
    camera.set_aspect(2.0)
    assert camera.aspect == 2.0
    with pytest.raises(ValueError):
        camera.set_aspect(0.0)
