"""Orbital kinematics: positions of every body for a given phase."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

import numpy as np

from .config import ORBIT_CFG, OrbitCfg
from .model import Body, BodyKind, Point, SolarSystem


def circular_position(center: Point, orbit_radius: float, angle: float, tilt: float) -> Point:
    """Point on a circular orbit flattened along y by ``tilt``."""

    return (
        center[0] + orbit_radius * math.cos(angle),
        center[1] + orbit_radius * math.sin(angle) * tilt,
    )


def elliptical_position(
    center: Point,
    semi_major_axis: float,
    semi_minor_axis: float,
    angle: float,
    tilt_degrees: float,
) -> Point:
    """Point on an ellipse rotated by ``tilt_degrees`` about ``center``."""

    ux = semi_major_axis * math.cos(angle)
    uy = semi_minor_axis * math.sin(angle)
    rot = math.radians(tilt_degrees)
    cos_r = math.cos(rot)
    sin_r = math.sin(rot)
    return (
        center[0] + ux * cos_r - uy * sin_r,
        center[1] + ux * sin_r + uy * cos_r,
    )


def belt_positions(
    center: Point, orbit_radii: np.ndarray, angles: np.ndarray, tilt: float
) -> np.ndarray:
    """Vectorised :func:`circular_position` returning an ``(N, 2)`` array."""

    positions = np.empty((orbit_radii.shape[0], 2), dtype=float)
    positions[:, 0] = center[0] + orbit_radii * np.cos(angles)
    positions[:, 1] = center[1] + orbit_radii * np.sin(angles) * tilt
    return positions


def body_position(body: Body, center: Point, tilt: float) -> Point:
    """Position of ``body`` around ``center``.

    For moons ``center`` must be the parent planet's position from the same
    tick.
    """

    orbit = body.orbit
    if body.kind is BodyKind.COMET:
        return elliptical_position(
            center,
            orbit.semi_major_axis,
            orbit.semi_minor_axis,
            orbit.phase_angle,
            orbit.tilt_degrees,
        )
    if body.kind in (BodyKind.PLANET, BodyKind.MOON):
        return circular_position(center, orbit.orbit_radius, orbit.phase_angle, tilt)
    raise ValueError(f"Unsupported body kind: {body.kind}")


@dataclass(frozen=True)
class BodySnapshot:
    """Immutable world positions of every body after one physics tick."""

    tick: int
    star_center: Point
    belt_id: str
    planets: Mapping[str, Point] = field(default_factory=lambda: MappingProxyType({}))
    moons: Mapping[str, Point] = field(default_factory=lambda: MappingProxyType({}))
    comet_id: str | None = None
    comet: Point | None = None
    asteroids: np.ndarray = field(default_factory=lambda: np.zeros((0, 2), dtype=float))

    def position_of(self, body_id: str) -> Point | None:
        if body_id == self.belt_id:
            return self.star_center
        if self.comet_id is not None and body_id == self.comet_id:
            return self.comet
        if body_id in self.moons:
            return self.moons[body_id]
        return self.planets.get(body_id)

    def __contains__(self, body_id: object) -> bool:
        return isinstance(body_id, str) and self.position_of(body_id) is not None


def compute_snapshot(system: SolarSystem, cfg: OrbitCfg = ORBIT_CFG, *, tick: int = 0) -> BodySnapshot:
    """Resolve all bodies to world coordinates, planets before their moons."""

    center = (float(cfg.star_center[0]), float(cfg.star_center[1]))
    tilt = cfg.tilt_factor

    planets: dict[str, Point] = {}
    for planet in system.planets:
        planets[planet.id] = body_position(planet, center, tilt)

    moons: dict[str, Point] = {}
    for moon in system.moons:
        parent = planets.get(moon.parent_id) if moon.parent_id is not None else None
        if parent is None:
            continue
        moons[moon.id] = body_position(moon, parent, tilt)

    comet = system.comet
    comet_pos = body_position(comet, center, tilt) if comet is not None else None

    belt = system.asteroid_belt
    asteroids = belt_positions(center, belt.orbit_radii, belt.phase_angles, tilt)
    asteroids.setflags(write=False)

    return BodySnapshot(
        tick=tick,
        star_center=center,
        belt_id=belt.id,
        planets=MappingProxyType(planets),
        moons=MappingProxyType(moons),
        comet_id=comet.id if comet is not None else None,
        comet=comet_pos,
        asteroids=asteroids,
    )


__all__ = [
    "BodySnapshot",
    "belt_positions",
    "body_position",
    "circular_position",
    "compute_snapshot",
    "elliptical_position",
]
