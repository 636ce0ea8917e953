import math

import numpy as np
import pytest

from orrery.core.model import TAU
from orrery.core.physics import (
    ClockState,
    PhysicsClock,
    advance_phase,
    advance_phases,
)
from orrery.data.catalog import build_system


def test_advance_phase_wraps_into_range():
    assert advance_phase(TAU - 0.01, 1.0, 0.02) == pytest.approx(0.01)
    assert advance_phase(0.0, -1.0, 0.5) == pytest.approx(TAU - 0.5)
    tiny = advance_phase(0.0, -1e-20, 1.0)
    assert 0.0 <= tiny < TAU


def test_advance_phases_matches_scalar_version():
    angles = np.array([0.0, 3.0, TAU - 0.001])
    speeds = np.array([0.5, -7.0, 0.02])
    result = advance_phases(angles, speeds, 0.1)
    expected = [advance_phase(a, s, 0.1) for a, s in zip(angles, speeds)]
    assert result.tolist() == pytest.approx(expected)
    assert np.all((result >= 0.0) & (result < TAU))


def test_one_tick_moves_earth_by_speed_times_step(system):
    clock = PhysicsClock(system)
    snapshot = clock.tick()
    angle = 0.015 * 0.1
    assert system.find("earth").orbit.phase_angle == pytest.approx(angle)
    assert snapshot.planets["earth"] == pytest.approx(
        (95.0 * math.cos(angle), 95.0 * math.sin(angle) * 0.4)
    )
    assert snapshot.planets["earth"] != (95.0, 0.0)
    assert snapshot.tick == 1


def test_phase_accumulates_over_many_ticks(system):
    clock = PhysicsClock(system)
    clock.speed_multiplier = 2.0
    for _ in range(50):
        clock.tick()
    assert system.find("earth").orbit.phase_angle == pytest.approx(0.015 * 0.1 * 2.0 * 50)
    assert clock.ticks == 50


def test_every_orbit_wraps_while_accumulating(system):
    clock = PhysicsClock(system)
    clock.speed_multiplier = 400.0
    delta = clock.step_delta()
    moon = system.find("the_moon").orbit
    comet = system.find("halley").orbit
    belt = system.asteroid_belt
    starts = (moon.phase_angle, comet.phase_angle, belt.phase_angles.copy())
    for _ in range(50):
        clock.tick()

    total_moon = starts[0] + moon.angular_speed * delta * 50
    total_comet = starts[1] + comet.angular_speed * delta * 50
    total_belt = starts[2] + belt.angular_speeds * delta * 50
    assert total_comet > TAU
    assert np.all(total_belt > TAU)
    assert moon.phase_angle == pytest.approx(total_moon % TAU)
    assert comet.phase_angle == pytest.approx(total_comet % TAU)
    assert np.allclose(belt.phase_angles, np.mod(total_belt, TAU))
    assert np.all((belt.phase_angles >= 0.0) & (belt.phase_angles < TAU))


def test_paused_ticks_publish_without_moving(system):
    clock = PhysicsClock(system)
    clock.tick()
    assert clock.toggle() is ClockState.PAUSED
    before = system.find("earth").orbit.phase_angle
    belt_before = system.asteroid_belt.phase_angles.copy()
    first = clock.snapshot
    snapshot = clock.tick()
    assert snapshot is not first
    assert system.find("earth").orbit.phase_angle == before
    assert np.array_equal(system.asteroid_belt.phase_angles, belt_before)
    assert clock.ticks == 1
    assert not clock.running


def test_reset_adopts_new_system_and_restarts(system, catalog):
    clock = PhysicsClock(system)
    clock.toggle()
    clock.speed_multiplier = 4.0
    fresh = build_system(catalog, np.random.default_rng(1), randomize=True)
    snapshot = clock.reset(fresh)
    assert clock.system is fresh
    assert clock.state is ClockState.RUNNING
    assert clock.speed_multiplier == 1.0
    assert clock.ticks == 0
    assert snapshot.tick == 0
