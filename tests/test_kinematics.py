import math

import numpy as np
import pytest

from conftest import make_catalog
from orrery.core.kinematics import (
    body_position,
    circular_position,
    compute_snapshot,
    elliptical_position,
)
from orrery.core.model import Body, BodyKind, OrbitalElement
from orrery.data.catalog import build_system


def test_circular_position_is_flattened_by_tilt():
    x, y = circular_position((10.0, 5.0), 100.0, math.pi / 2, 0.4)
    assert x == pytest.approx(10.0)
    assert y == pytest.approx(5.0 + 40.0)


def test_elliptical_position_rotates_whole_ellipse():
    assert elliptical_position((0.0, 0.0), 280.0, 100.0, 0.0, 0.0) == pytest.approx((280.0, 0.0))
    x, y = elliptical_position((0.0, 0.0), 280.0, 100.0, 0.0, 90.0)
    assert x == pytest.approx(0.0, abs=1e-9)
    assert y == pytest.approx(280.0)


def test_body_position_rejects_belt_kind():
    body = Body(
        id="x",
        kind=BodyKind.ASTEROID_BELT,
        name="x",
        orbit=OrbitalElement(phase_angle=0.0, angular_speed=0.0),
        radius=1.0,
        color=(0, 0, 0),
    )
    with pytest.raises(ValueError):
        body_position(body, (0.0, 0.0), 0.4)


def test_snapshot_resolves_planets_comet_and_belt(system):
    snapshot = compute_snapshot(system)
    assert snapshot.planets["earth"] == pytest.approx((95.0, 0.0))
    assert snapshot.comet == pytest.approx((280.0, 0.0))
    assert snapshot.comet_id == "halley"
    assert snapshot.asteroids.shape == (20, 2)
    assert snapshot.position_of("asteroid_belt") == (0.0, 0.0)
    assert "earth" in snapshot
    assert "pluto" not in snapshot


def test_moon_orbits_parent_position_of_same_tick(system):
    earth = system.find("earth")
    earth.orbit.phase_angle = 1.0
    snapshot = compute_snapshot(system)
    ex, ey = snapshot.planets["earth"]
    mx, my = snapshot.moons["the_moon"]
    assert mx == pytest.approx(ex + 12.0)
    assert my == pytest.approx(ey)


def test_moon_with_missing_parent_is_omitted(catalog):
    orphan_catalog = make_catalog(planet=catalog.seeds_of(BodyKind.PLANET)[1:])
    system = build_system(orphan_catalog, np.random.default_rng(0))
    snapshot = compute_snapshot(system)
    assert "the_moon" not in snapshot.moons
    assert snapshot.position_of("the_moon") is None
    assert "mars" in snapshot.planets


def test_asteroid_positions_stay_inside_tilted_band(system):
    snapshot = compute_snapshot(system)
    dx = snapshot.asteroids[:, 0]
    dy = snapshot.asteroids[:, 1] / 0.4
    radial = np.hypot(dx, dy)
    assert np.all(radial >= 145.0 - 1e-9)
    assert np.all(radial <= 165.0 + 1e-9)


def test_snapshot_is_read_only(system):
    snapshot = compute_snapshot(system)
    with pytest.raises(TypeError):
        snapshot.planets["earth"] = (0.0, 0.0)
    with pytest.raises(ValueError):
        snapshot.asteroids[0, 0] = 1.0
    before = snapshot.planets["earth"]
    system.find("earth").orbit.phase_angle = 2.0
    assert snapshot.planets["earth"] == before
