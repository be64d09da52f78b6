import json
import random

import pytest

from orrery.analyze_session import (
    load_events,
    load_positions,
    main,
    radius_deviation,
    summarize_events,
)
from orrery.core.config import SimulationCfg
from orrery.core.events import PauseToggled, SpeedChanged
from orrery.core.logging_utils import SessionLogger
from orrery.core.scheduler import AnimationScheduler


@pytest.fixture
def recorded_session(context, scene, renderer, tmp_path):
    session = SessionLogger(tmp_path / "sessions", "recorded")
    scheduler = AnimationScheduler(
        context,
        scene,
        renderer,
        session_logger=session,
        cfg=SimulationCfg(log_every_ticks=1, star_count=5),
        rng=random.Random(0),
    )
    for step in range(30):
        if step == 10:
            scheduler.post(SpeedChanged("earth", 2.5))
        if step == 20:
            scheduler.post(PauseToggled())
        scheduler.tick(50.0)
    session.close()
    return session


def test_recorded_orbits_are_circular(recorded_session):
    meta = json.loads(recorded_session.meta_path.read_text(encoding="utf-8"))
    positions = load_positions(recorded_session.positions_path)
    assert set(positions) == {body["name"] for body in meta["bodies"]}
    deviations = radius_deviation(positions, meta)
    assert len(deviations) == 8
    assert max(deviations.values()) < 1e-6


def test_event_summary(recorded_session):
    events = load_events(recorded_session.events_path)
    assert summarize_events(events) == {"speed": 1, "pause": 1}


def test_main_writes_figures_for_last_session(recorded_session, capsys):
    main(["--base-dir", str(recorded_session.root_dir)])
    out = capsys.readouterr().out
    assert "Session: recorded" in out
    assert "earth" in out
    figs = recorded_session.session_dir / "figs"
    assert (figs / "orbits_xz.png").exists()
    assert (figs / "radius.png").exists()


def test_main_reports_missing_session(tmp_path):
    with pytest.raises(SystemExit):
        main(["--base-dir", str(tmp_path)])
