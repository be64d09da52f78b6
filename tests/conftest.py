from __future__ import annotations

import random

import pytest

from orrery.core.preferences import PreferenceStore
from orrery.core.scheduler import AnimationScheduler, SimulationContext
from orrery.data.bodies import BODY_DEFINITIONS
from orrery.render.scene import SceneGraph

VIEWPORT = (800, 600)


class ManualPacer:
    """Frame pacer that only fires when the test asks for a frame."""

    def __init__(self) -> None:
        self.pending = None
        self.requests = 0

    def request_frame(self, callback) -> None:
        self.pending = callback
        self.requests += 1

    def advance(self, delta: float) -> None:
        callback, self.pending = self.pending, None
        if callback is not None:
            callback(delta)


class RecordingRenderer:
    def __init__(self) -> None:
        self.frames: list[tuple[object, object]] = []

    def render(self, scene, camera) -> None:
        self.frames.append((scene, camera))


@pytest.fixture
def store(tmp_path):
    return PreferenceStore(tmp_path / "prefs.json")


@pytest.fixture
def context(store):
    return SimulationContext.create(BODY_DEFINITIONS, store, viewport=VIEWPORT)


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def pacer():
    return ManualPacer()


@pytest.fixture
def scene():
    return SceneGraph()


@pytest.fixture
def scheduler(context, scene, renderer, pacer):
    return AnimationScheduler(context, scene, renderer, pacer, rng=random.Random(7))
