import csv
import json

import numpy as np
import pytest

from conftest import make_catalog, settle
from orrery.core.camera import ViewportRect
from orrery.core.logging_utils import RunLogger
from orrery.core.model import BodyKind
from orrery.core.simulation import Simulation


@pytest.fixture
def sim(catalog, orbit_cfg, camera_cfg):
    return Simulation(
        catalog,
        orbit_cfg=orbit_cfg,
        camera_cfg=camera_cfg,
        rng=np.random.default_rng(3),
    )


def read_events(logger):
    logger.flush()
    with logger.events_path.open(newline="") as fh:
        return list(csv.DictReader(fh))


def test_advance_runs_fixed_physics_ticks(sim):
    sim.advance(0.25)
    assert sim.clock.ticks == 0
    sim.advance(1.0)
    assert sim.clock.ticks == 2
    sim.advance(0.25)
    assert sim.clock.ticks == 3
    assert sim.system.find("earth").orbit.phase_angle == pytest.approx(3 * 0.015 * 0.1)
    assert sim.elapsed == pytest.approx(1.5)


def test_advance_returns_detached_frame(sim):
    frame = sim.advance(0.5)
    assert frame.running
    assert frame.snapshot is sim.snapshot
    frame.camera.center[0] = 999.0
    assert sim.camera.center == (0.0, 0.0)


def test_focus_follows_moving_body(sim):
    sim.body_clicked("earth")
    assert sim.camera.target_center == pytest.approx((95.0, 0.0))
    sim.advance(0.5)
    assert sim.camera.target_center == pytest.approx(sim.snapshot.planets["earth"])
    assert sim.camera.target_center != (95.0, 0.0)


def test_paused_camera_still_animates(sim):
    sim.toggle_play_pause()
    sim.body_clicked("earth")
    phase = sim.system.find("earth").orbit.phase_angle
    sim.advance(0.5)
    assert sim.system.find("earth").orbit.phase_angle == phase
    assert 1.0 < sim.camera.zoom < 4.0
    assert not sim.frame().running


def test_unknown_body_click_is_ignored(sim):
    assert sim.body_clicked("vulcan", 1.0, 2.0) is False
    assert sim.selected_body_id is None


def test_stale_focus_is_dropped_without_moving_camera(orbit_cfg, camera_cfg, tmp_path):
    orphan = make_catalog(planet=make_catalog().seeds_of(BodyKind.PLANET)[1:])
    with RunLogger(tmp_path) as logger:
        sim = Simulation(
            orphan,
            orbit_cfg=orbit_cfg,
            camera_cfg=camera_cfg,
            rng=np.random.default_rng(0),
            logger=logger,
        )
        assert sim.body_clicked("the_moon", 10.0, 20.0)
        assert sim.camera.target_center == (10.0, 20.0)
        sim.physics_tick()
        assert sim.selected_body_id is None
        assert sim.camera.target_center == (10.0, 20.0)
        assert sim.camera.target_zoom == 4.0
        types = [row["type"] for row in read_events(logger)]
    assert types == ["focus", "focus_lost"]


def test_full_reset_scenario(sim):
    sim.body_clicked("earth")
    sim.advance(2.0)
    sim.set_speed_multiplier(3.0)
    sim.toggle_play_pause()
    old_system = sim.system
    sim.full_reset()
    assert sim.system is not old_system
    assert sim.selected_body_id is None
    assert sim.camera.zoom == sim.camera.target_zoom == 1.0
    assert sim.camera.center == sim.camera.target_center == (0.0, 0.0)
    assert sim.running
    assert sim.speed_multiplier == 1.0
    assert sim.clock.ticks == 0
    assert sim.camera.tick() is False


def test_full_reset_draws_fresh_phases(sim):
    before = sim.system.asteroid_belt.phase_angles.copy()
    sim.full_reset()
    assert sim.system.find("earth").orbit.phase_angle != 0.0
    assert not np.array_equal(sim.system.asteroid_belt.phase_angles, before)


def test_pointer_down_focuses_releases_and_pans(sim):
    viewport = sim.camera.default_viewport()
    earth_screen = sim.camera.world_to_screen((95.0, 0.0), viewport)
    assert sim.pointer_down(earth_screen, viewport) == "earth"
    assert sim.selected_body_id == "earth"

    assert sim.pointer_down((5.0, 5.0), viewport) is None
    assert sim.selected_body_id is None
    assert not sim.interaction.panning

    sim.pointer_down((5.0, 5.0), viewport)
    assert sim.interaction.panning
    sim.pointer_move((25.0, 5.0))
    sim.pointer_up()
    assert sim.camera.target_center == pytest.approx((-20.0, 0.0))


def test_hit_padding_is_in_pixels(sim):
    sim.camera.reset(2.0)
    viewport = sim.camera.default_viewport()
    x, y = sim.camera.world_to_screen((95.0, 0.0), viewport)
    # 8 world units below earth is 16 px at zoom 2
    point = (x, y + 16.0)
    assert sim.hit_test(point, viewport) is None
    assert sim.hit_test(point, viewport, padding_pixels=4.0) == "earth"


@pytest.mark.parametrize("size", [(0.0, 0.0), (0.0, 600.0), (800.0, 0.0)])
def test_collapsed_viewport_hits_nothing(sim, size):
    viewport = ViewportRect(0.0, 0.0, *size)
    assert sim.hit_test((0.0, 0.0), viewport) is None
    assert sim.pointer_down((0.0, 0.0), viewport) is None
    assert sim.selected_body_id is None


def test_wheel_and_buttons(sim):
    assert sim.wheel(-1.0, 400.0, 300.0)
    assert sim.camera.target_zoom == pytest.approx(1.25)
    assert sim.zoom_out()
    assert sim.camera.target_zoom == pytest.approx(1.0)
    assert sim.pan_delta(10.0, 0.0)
    sim.reset_zoom()
    assert sim.camera.target_center == (0.0, 0.0)


def test_camera_converges_through_advance(sim):
    sim.body_clicked("asteroid_belt")
    for _ in range(200):
        sim.advance(0.5)
    assert sim.camera.zoom == 0.8
    assert sim.camera.center == (0.0, 0.0)
    assert settle(sim.camera) == 0


def test_logger_records_events_and_samples(catalog, orbit_cfg, camera_cfg, tmp_path):
    logger = RunLogger(tmp_path, run_id="sim")
    sim = Simulation(
        catalog,
        orbit_cfg=orbit_cfg,
        camera_cfg=camera_cfg,
        rng=np.random.default_rng(5),
        logger=logger,
    )
    sim.body_clicked("earth")
    sim.advance(1.0)
    sim.body_clicked("earth")
    sim.set_speed_multiplier(2.5)
    sim.toggle_play_pause()
    sim.toggle_play_pause()
    sim.full_reset()
    logger.close()

    rows = read_events(logger)
    assert [row["type"] for row in rows] == [
        "focus",
        "unfocus",
        "speed",
        "pause",
        "resume",
        "full_reset",
    ]
    assert rows[0]["body"] == "earth"
    assert json.loads(rows[2]["details"]) == {"multiplier": 2.5}

    with logger.timeseries_path.open(newline="") as fh:
        samples = list(csv.DictReader(fh))
    assert len(samples) == 2
    assert samples[0]["selected"] == "earth"
    assert float(samples[1]["zoom"]) > float(samples[0]["zoom"])
