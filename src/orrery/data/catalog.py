"""Seed catalog for the bodies of the orrery."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

import numpy as np

from orrery.core.config import ORBIT_CFG
from orrery.core.model import (
    TAU,
    AsteroidBelt,
    Body,
    BodyKind,
    Color,
    OrbitalElement,
    PlanetRing,
    SolarSystem,
    Star,
)


@dataclass(frozen=True)
class BodySeed:
    id: str
    name: str
    radius: float
    color: Color
    speed: float
    description: str
    orbit_radius: float = 0.0
    semi_major_axis: float = 0.0
    semi_minor_axis: float = 0.0
    tilt_degrees: float = 0.0
    parent_id: str | None = None
    rings: tuple[PlanetRing, ...] = ()
    # ``None`` draws a random starting phase.
    phase_angle: float | None = None


@dataclass(frozen=True)
class BeltSeed:
    id: str
    name: str
    description: str
    inner_radius: float
    outer_radius: float
    count: int = ORBIT_CFG.asteroid_count


@dataclass(frozen=True)
class Catalog:
    star: Star
    seeds: Mapping[BodyKind, tuple[BodySeed, ...]]
    belt: BeltSeed
    asteroid_palette_size: int = 4

    def seeds_of(self, kind: BodyKind) -> tuple[BodySeed, ...]:
        return tuple(self.seeds.get(kind, ()))


STAR = Star(name="Sun", radius=20.0, color=(250, 204, 21))

PLANET_SEEDS: tuple[BodySeed, ...] = (
    BodySeed(
        id="mercury",
        name="Mercury",
        radius=3.0,
        color=(156, 163, 175),
        orbit_radius=45.0,
        speed=0.047,
        description="The smallest planet and nearest to the Sun, Mercury is only slightly larger than Earth's Moon.",
    ),
    BodySeed(
        id="venus",
        name="Venus",
        radius=6.0,
        color=(254, 240, 138),
        orbit_radius=70.0,
        speed=0.025,
        description="Venus has a thick, toxic atmosphere that traps heat, making it the hottest planet in our solar system.",
    ),
    BodySeed(
        id="earth",
        name="Earth",
        radius=7.0,
        color=(59, 130, 246),
        orbit_radius=95.0,
        speed=0.015,
        description="Our home, Earth is the only planet known to harbor life, with liquid water on its surface.",
    ),
    BodySeed(
        id="mars",
        name="Mars",
        radius=5.0,
        color=(220, 38, 38),
        orbit_radius=130.0,
        speed=0.009,
        description="Mars is a cold, desert world with a thin atmosphere and evidence of ancient water.",
    ),
    BodySeed(
        id="jupiter",
        name="Jupiter",
        radius=16.0,
        color=(251, 146, 60),
        orbit_radius=180.0,
        speed=0.0055,
        description="Jupiter is the largest planet, a gas giant known for its Great Red Spot, a long-lived storm.",
    ),
    BodySeed(
        id="saturn",
        name="Saturn",
        radius=13.0,
        color=(251, 191, 36),
        orbit_radius=225.0,
        speed=0.0039,
        description="Known for its stunning rings, Saturn is the sixth planet and second largest in the solar system.",
        rings=(
            PlanetRing(1.1, 1.45, (120, 113, 108), int(255 * 0.20)),
            PlanetRing(1.5, 1.85, (214, 211, 209), int(255 * 0.75)),
            PlanetRing(1.9, 2.25, (168, 162, 158), int(255 * 0.60)),
            PlanetRing(2.28, 2.35, (120, 113, 108), int(255 * 0.30)),
        ),
    ),
    BodySeed(
        id="uranus",
        name="Uranus",
        radius=10.0,
        color=(34, 211, 238),
        orbit_radius=260.0,
        speed=0.0028,
        description="An ice giant, Uranus is the seventh planet and has a unique tilt, orbiting the Sun on its side.",
    ),
    BodySeed(
        id="neptune",
        name="Neptune",
        radius=9.0,
        color=(29, 78, 216),
        orbit_radius=290.0,
        speed=0.0022,
        description="The eighth and most distant major planet, Neptune is a dark, cold, and very windy ice giant.",
    ),
)

COMET_SEEDS: tuple[BodySeed, ...] = (
    BodySeed(
        id="halley",
        name="Halley's Comet",
        radius=4.0,
        color=(165, 243, 252),
        semi_major_axis=280.0,
        semi_minor_axis=100.0,
        tilt_degrees=35.0,
        speed=0.004,
        description="A famous short-period comet visible from Earth every 75-79 years. It has a highly elliptical, tilted orbit.",
    ),
)

MOON_SEEDS: tuple[BodySeed, ...] = (
    BodySeed(
        id="the_moon",
        name="The Moon",
        radius=2.0,
        color=(209, 213, 219),
        orbit_radius=12.0,
        speed=0.1,
        parent_id="earth",
        description="Earth's only natural satellite, it is the fifth largest satellite in the Solar System.",
    ),
    BodySeed(
        id="io",
        name="Io",
        radius=2.5,
        color=(253, 224, 71),
        orbit_radius=25.0,
        speed=0.22,
        parent_id="jupiter",
        description="The most volcanically active body in the solar system, Io is caught in a gravitational tug-of-war with Jupiter.",
    ),
    BodySeed(
        id="europa",
        name="Europa",
        radius=2.2,
        color=(231, 229, 228),
        orbit_radius=32.0,
        speed=0.11,
        parent_id="jupiter",
        description="A frozen world with a subsurface ocean that could potentially harbor life. Its surface is crisscrossed by cracks and streaks.",
    ),
    BodySeed(
        id="ganymede",
        name="Ganymede",
        radius=3.5,
        color=(148, 163, 184),
        orbit_radius=40.0,
        speed=0.055,
        parent_id="jupiter",
        description="The largest moon in the solar system, bigger than the planet Mercury. It's the only moon known to have its own magnetic field.",
    ),
    BodySeed(
        id="callisto",
        name="Callisto",
        radius=3.3,
        color=(107, 114, 128),
        orbit_radius=50.0,
        speed=0.027,
        parent_id="jupiter",
        description="One of the most heavily cratered objects in the solar system, indicating a very old and inactive surface.",
    ),
    BodySeed(
        id="titan",
        name="Titan",
        radius=3.5,
        color=(253, 186, 116),
        orbit_radius=30.0,
        speed=0.04,
        parent_id="saturn",
        description="The second-largest moon in the solar system, with a thick nitrogen-rich atmosphere and lakes of liquid methane.",
    ),
)

ASTEROID_BELT_SEED = BeltSeed(
    id="asteroid_belt",
    name="The Asteroid Belt",
    description="A torus-shaped region in the Solar System, located roughly between the orbits of the planets Jupiter and Mars.",
    inner_radius=145.0,
    outer_radius=165.0,
)

DEFAULT_CATALOG = Catalog(
    star=STAR,
    seeds={
        BodyKind.PLANET: PLANET_SEEDS,
        BodyKind.COMET: COMET_SEEDS,
        BodyKind.MOON: MOON_SEEDS,
    },
    belt=ASTEROID_BELT_SEED,
)


def generate_asteroids(
    seed: BeltSeed,
    rng: np.random.Generator,
    *,
    palette_size: int = 4,
    count: int | None = None,
) -> AsteroidBelt:
    """Scatter ``count`` asteroids uniformly across the belt band."""

    if seed.outer_radius < seed.inner_radius or seed.inner_radius <= 0.0:
        raise ValueError(
            f"Invalid asteroid belt band [{seed.inner_radius}, {seed.outer_radius}]"
        )
    n = seed.count if count is None else count
    if n < 0:
        raise ValueError("Asteroid count must not be negative")
    radii = seed.inner_radius + rng.random(n) * (seed.outer_radius - seed.inner_radius)
    return AsteroidBelt(
        id=seed.id,
        name=seed.name,
        description=seed.description,
        inner_radius=seed.inner_radius,
        outer_radius=seed.outer_radius,
        orbit_radii=radii,
        # slower further out
        angular_speeds=0.006 + 0.003 / np.sqrt(radii),
        phase_angles=rng.random(n) * TAU,
        sizes=0.5 + rng.random(n) * 0.8,
        color_indices=rng.integers(0, max(1, palette_size), size=n),
        rotations=rng.random(n) * 360.0,
    )


def _build_body(
    seed: BodySeed, kind: BodyKind, rng: np.random.Generator, randomize: bool
) -> Body:
    if randomize or seed.phase_angle is None:
        phase = float(rng.random() * TAU)
    else:
        phase = float(seed.phase_angle) % TAU
    return Body(
        id=seed.id,
        kind=kind,
        name=seed.name,
        orbit=OrbitalElement(
            phase_angle=phase,
            angular_speed=seed.speed,
            orbit_radius=seed.orbit_radius,
            semi_major_axis=seed.semi_major_axis,
            semi_minor_axis=seed.semi_minor_axis,
            tilt_degrees=seed.tilt_degrees,
        ),
        radius=seed.radius,
        color=seed.color,
        description=seed.description,
        parent_id=seed.parent_id if kind is BodyKind.MOON else None,
        rings=seed.rings,
    )


def build_system(
    catalog: Catalog = DEFAULT_CATALOG,
    rng: np.random.Generator | None = None,
    *,
    randomize: bool = False,
    asteroid_count: int | None = None,
) -> SolarSystem:
    """Create a fresh :class:`SolarSystem` from ``catalog``.

    Seeds with an explicit ``phase_angle`` keep it unless ``randomize`` is set,
    which is how a full reset draws fresh phases for every body.
    """

    rng = rng or np.random.default_rng()
    seen: set[str] = {catalog.belt.id}
    for kind in (BodyKind.PLANET, BodyKind.COMET, BodyKind.MOON):
        for seed in catalog.seeds_of(kind):
            if seed.id in seen:
                raise ValueError(f"Duplicate body id in catalog: {seed.id!r}")
            seen.add(seed.id)

    planets = [_build_body(s, BodyKind.PLANET, rng, randomize) for s in catalog.seeds_of(BodyKind.PLANET)]
    comets = [_build_body(s, BodyKind.COMET, rng, randomize) for s in catalog.seeds_of(BodyKind.COMET)]
    moons = [_build_body(s, BodyKind.MOON, rng, randomize) for s in catalog.seeds_of(BodyKind.MOON)]
    belt = generate_asteroids(
        catalog.belt,
        rng,
        palette_size=catalog.asteroid_palette_size,
        count=asteroid_count,
    )
    return SolarSystem(
        star=catalog.star,
        planets=planets,
        moons=moons,
        comet=comets[0] if comets else None,
        asteroid_belt=belt,
    )


__all__ = [
    "ASTEROID_BELT_SEED",
    "BeltSeed",
    "BodySeed",
    "COMET_SEEDS",
    "Catalog",
    "DEFAULT_CATALOG",
    "MOON_SEEDS",
    "PLANET_SEEDS",
    "STAR",
    "build_system",
    "generate_asteroids",
]
