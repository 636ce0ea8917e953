"""Data models for the orrery state."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterator

import numpy as np

TAU = 2.0 * math.pi

Color = tuple[int, int, int]
Point = tuple[float, float]


class BodyKind(Enum):
    PLANET = "planet"
    MOON = "moon"
    COMET = "comet"
    ASTEROID_BELT = "asteroid_belt"


@dataclass(frozen=True)
class PlanetRing:
    inner_factor: float
    outer_factor: float
    color: Color
    alpha: int


@dataclass
class OrbitalElement:
    """Phase and geometry of a single orbit.

    Circular orbits (planets, moons) use ``orbit_radius``. The comet uses the
    ellipse axes and ``tilt_degrees``, the rotation of the whole ellipse.
    """

    phase_angle: float
    angular_speed: float
    orbit_radius: float = 0.0
    semi_major_axis: float = 0.0
    semi_minor_axis: float = 0.0
    tilt_degrees: float = 0.0


@dataclass
class Body:
    """A planet, moon or comet, discriminated by ``kind``."""

    id: str
    kind: BodyKind
    name: str
    orbit: OrbitalElement
    radius: float
    color: Color
    description: str = ""
    parent_id: str | None = None
    rings: tuple[PlanetRing, ...] = ()


@dataclass
class AsteroidBelt:
    """Torus of independent circular orbits stored as parallel arrays."""

    kind: ClassVar[BodyKind] = BodyKind.ASTEROID_BELT

    id: str
    name: str
    description: str
    inner_radius: float
    outer_radius: float
    orbit_radii: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=float))
    angular_speeds: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=float))
    phase_angles: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=float))
    sizes: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=float))
    color_indices: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=int))
    rotations: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=float))

    def __len__(self) -> int:
        return int(self.orbit_radii.shape[0])


@dataclass(frozen=True)
class Star:
    name: str
    radius: float
    color: Color


@dataclass
class SolarSystem:
    """High level container for every body the clock advances."""

    star: Star
    planets: list[Body]
    moons: list[Body]
    comet: Body | None
    asteroid_belt: AsteroidBelt

    def bodies(self) -> Iterator[Body]:
        yield from self.planets
        if self.comet is not None:
            yield self.comet
        yield from self.moons

    def find(self, body_id: str) -> Body | AsteroidBelt | None:
        if body_id == self.asteroid_belt.id:
            return self.asteroid_belt
        for body in self.bodies():
            if body.id == body_id:
                return body
        return None


__all__ = [
    "AsteroidBelt",
    "Body",
    "BodyKind",
    "Color",
    "OrbitalElement",
    "PlanetRing",
    "Point",
    "SolarSystem",
    "Star",
    "TAU",
]
