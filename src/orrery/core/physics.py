"""Phase integrator advancing every orbit by fixed ticks."""
from __future__ import annotations

from enum import Enum

import numpy as np

from .config import ORBIT_CFG, OrbitCfg
from .kinematics import BodySnapshot, compute_snapshot
from .model import TAU, SolarSystem


class ClockState(Enum):
    RUNNING = "running"
    PAUSED = "paused"


def advance_phase(angle: float, angular_speed: float, delta: float) -> float:
    """Return ``(angle + angular_speed * delta) mod 2π`` in ``[0, 2π)``."""

    wrapped = (angle + angular_speed * delta) % TAU
    # -1e-20 % TAU rounds up to TAU
    return 0.0 if wrapped >= TAU else wrapped


def advance_phases(angles: np.ndarray, angular_speeds: np.ndarray, delta: float) -> np.ndarray:
    """Vectorised :func:`advance_phase`."""

    wrapped = np.mod(angles + angular_speeds * delta, TAU)
    wrapped[wrapped >= TAU] = 0.0
    return wrapped


def advance_system(system: SolarSystem, delta: float) -> None:
    """Advance every body of ``system`` by one tick of size ``delta``."""

    for body in system.bodies():
        orbit = body.orbit
        orbit.phase_angle = advance_phase(orbit.phase_angle, orbit.angular_speed, delta)
    belt = system.asteroid_belt
    belt.phase_angles = advance_phases(belt.phase_angles, belt.angular_speeds, delta)


class PhysicsClock:
    """Running/paused clock that owns the phase angles of ``system``.

    Every :meth:`tick` publishes a fresh :class:`BodySnapshot`; while paused
    the snapshot is recomputed without moving anything.
    """

    def __init__(self, system: SolarSystem, cfg: OrbitCfg = ORBIT_CFG) -> None:
        self._cfg = cfg
        self._system = system
        self._state = ClockState.RUNNING
        self.speed_multiplier = cfg.default_speed_multiplier
        self._ticks = 0
        self._snapshot = compute_snapshot(system, cfg, tick=0)

    @property
    def cfg(self) -> OrbitCfg:
        return self._cfg

    @property
    def system(self) -> SolarSystem:
        return self._system

    @property
    def state(self) -> ClockState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state is ClockState.RUNNING

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def snapshot(self) -> BodySnapshot:
        return self._snapshot

    def toggle(self) -> ClockState:
        if self._state is ClockState.RUNNING:
            self._state = ClockState.PAUSED
        else:
            self._state = ClockState.RUNNING
        return self._state

    def step_delta(self) -> float:
        return self._cfg.base_angular_step * self.speed_multiplier

    def tick(self) -> BodySnapshot:
        if self._state is ClockState.RUNNING:
            advance_system(self._system, self.step_delta())
            self._ticks += 1
        return self.publish()

    def publish(self) -> BodySnapshot:
        self._snapshot = compute_snapshot(self._system, self._cfg, tick=self._ticks)
        return self._snapshot

    def reset(self, system: SolarSystem) -> BodySnapshot:
        """Adopt a freshly built ``system`` and restart at default speed."""

        self._system = system
        self._state = ClockState.RUNNING
        self.speed_multiplier = self._cfg.default_speed_multiplier
        self._ticks = 0
        return self.publish()


__all__ = [
    "ClockState",
    "PhysicsClock",
    "advance_phase",
    "advance_phases",
    "advance_system",
]
