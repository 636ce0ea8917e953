import numpy as np
import pygame
import pytest

from orrery.core.config import RENDER_CFG
from orrery.render.assets import LruCache
from orrery.render.draw import (
    Starfield,
    comet_orbit_points,
    comet_tail_polygon,
    draw_asteroids,
    orbit_ring_points,
    starfield_screen_positions,
)
from orrery.render.ui import body_detail_lines


def test_lru_cache_evicts_oldest_and_reuses_hits():
    cache = LruCache(2)
    calls = []

    def make(value):
        calls.append(value)
        return value

    assert cache.get_or_create("a", lambda: make(1)) == 1
    cache.get_or_create("b", lambda: make(2))
    assert cache.get_or_create("a", lambda: make(99)) == 1
    cache.get_or_create("c", lambda: make(3))
    assert len(cache) == 2
    assert cache.get_or_create("b", lambda: make(4)) == 4
    assert calls == [1, 2, 3, 4]


def test_orbit_ring_is_closed_and_flattened():
    points = orbit_ring_points((0.0, 0.0), 95.0, 0.4, 180)
    assert points.shape == (181, 2)
    assert points[0] == pytest.approx(points[-1])
    assert points[0] == pytest.approx((95.0, 0.0))
    assert np.abs(points[:, 1]).max() == pytest.approx(38.0, rel=1e-3)


def test_comet_orbit_passes_through_current_position(system):
    comet = system.comet
    points = comet_orbit_points(comet, (0.0, 0.0), 64)
    assert points[0] == pytest.approx((280.0, 0.0))


def test_comet_tail_points_away_from_star(system):
    tail = comet_tail_polygon((280.0, 0.0), (0.0, 0.0), system.comet, 1.0, render_cfg=RENDER_CFG)
    assert tail is not None
    outline, intensity = tail
    assert intensity == 1.0
    assert outline[-1] == pytest.approx((280.0 + RENDER_CFG.comet_tail_max_length, 0.0))


def test_comet_tail_shrinks_with_zoom(system):
    near = comet_tail_polygon((280.0, 0.0), (0.0, 0.0), system.comet, 4.0, render_cfg=RENDER_CFG)
    outline, _ = near
    assert outline[-1][0] == pytest.approx(280.0 + RENDER_CFG.comet_tail_max_length / 2.0)


def test_comet_tail_vanishes_near_perihelion(system):
    assert comet_tail_polygon((90.0, 0.0), (0.0, 0.0), system.comet, 1.0, render_cfg=RENDER_CFG) is None
    assert comet_tail_polygon((0.0, 0.0), (0.0, 0.0), system.comet, 1.0, render_cfg=RENDER_CFG) is None


def test_starfield_wraps_around_when_panned():
    field = Starfield(
        positions=np.array([[10.0, 10.0], [790.0, 590.0]]),
        radii=np.array([1, 2]),
        sprites=[],
    )
    still = starfield_screen_positions(field, (0.0, 0.0), 1.0, (800, 600), 0.5)
    assert still.tolist() == [[9, 9], [788, 588]]
    # shift of 40 px to the left wraps the first star to the right edge
    moved = starfield_screen_positions(field, (80.0, 0.0), 1.0, (800, 600), 0.5)
    assert moved.tolist() == [[769, 9], [748, 588]]


def test_planet_details_follow_the_live_angle(system):
    earth = system.find("earth")
    lines = body_detail_lines(earth)
    assert lines == [
        "Visual radius: 7 px",
        "Orbit radius: 95 px",
        "Relative speed factor: 0.0150",
        "Current angle: 0.0°",
    ]
    earth.orbit.phase_angle = np.pi / 2
    assert body_detail_lines(earth)[-1] == "Current angle: 90.0°"


def test_moon_details_name_the_parent(system):
    lines = body_detail_lines(system.find("the_moon"), parent_name="Earth")
    assert "Orbit radius (around Earth): 12 px" in lines
    assert lines[-2] == "Relative speed factor: 0.1000"


def test_comet_details_list_both_axes(system):
    lines = body_detail_lines(system.find("halley"))
    assert lines[:4] == [
        "Visual radius: 4 px",
        "Orbit semi-major axis: 280 px",
        "Orbit semi-minor axis: 100 px",
        "Orbit angle: 0°",
    ]
    assert lines[-1] == "Current angle: 0.0°"


def test_belt_details_report_band_and_count(system):
    assert body_detail_lines(system.asteroid_belt) == [
        "Inner orbit radius: 145 px",
        "Outer orbit radius: 165 px",
        "Number of asteroids: 20",
    ]


def test_asteroids_outside_the_view_are_culled(system, camera):
    belt = system.asteroid_belt
    positions = np.full((len(belt), 2), 5000.0)
    positions[0] = (0.0, 0.0)
    surface = pygame.Surface((800, 600))
    draw_asteroids(surface, camera, belt, positions, palette=[(255, 0, 0)])
    assert tuple(surface.get_at((400, 300)))[:3] == (255, 0, 0)
