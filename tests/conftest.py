from __future__ import annotations

from dataclasses import replace

import numpy as np
import pytest

from orrery.core.camera import CameraController
from orrery.core.config import CAMERA_CFG, ORBIT_CFG
from orrery.core.interaction import InteractionMapper
from orrery.core.model import BodyKind
from orrery.data.catalog import STAR, BeltSeed, BodySeed, Catalog, build_system

EARTH = BodySeed(
    id="earth",
    name="Earth",
    radius=7.0,
    color=(59, 130, 246),
    orbit_radius=95.0,
    speed=0.015,
    description="Home.",
    phase_angle=0.0,
)
MARS = BodySeed(
    id="mars",
    name="Mars",
    radius=5.0,
    color=(220, 38, 38),
    orbit_radius=130.0,
    speed=0.009,
    description="Red.",
    phase_angle=np.pi,
)
MOON = BodySeed(
    id="the_moon",
    name="The Moon",
    radius=2.0,
    color=(209, 213, 219),
    orbit_radius=12.0,
    speed=0.1,
    parent_id="earth",
    description="Satellite.",
    phase_angle=0.0,
)
COMET = BodySeed(
    id="halley",
    name="Halley's Comet",
    radius=4.0,
    color=(165, 243, 252),
    semi_major_axis=280.0,
    semi_minor_axis=100.0,
    tilt_degrees=0.0,
    speed=0.004,
    description="Comet.",
    phase_angle=0.0,
)
BELT = BeltSeed(
    id="asteroid_belt",
    name="The Asteroid Belt",
    description="Belt.",
    inner_radius=145.0,
    outer_radius=165.0,
    count=20,
)


def make_catalog(**seeds) -> Catalog:
    kinds = {
        BodyKind.PLANET: (EARTH, MARS),
        BodyKind.COMET: (COMET,),
        BodyKind.MOON: (MOON,),
    }
    for key, value in seeds.items():
        kinds[BodyKind[key.upper()]] = value
    return Catalog(star=STAR, seeds=kinds, belt=BELT)


@pytest.fixture
def catalog() -> Catalog:
    return make_catalog()


@pytest.fixture
def system(catalog):
    return build_system(catalog, np.random.default_rng(7))


@pytest.fixture
def camera() -> CameraController:
    return CameraController()


@pytest.fixture
def mapper(camera) -> InteractionMapper:
    return InteractionMapper(camera, belt_id=BELT.id)


@pytest.fixture
def orbit_cfg():
    # 0.5 s steps keep accumulator arithmetic exact
    return replace(ORBIT_CFG, tick_rate=2.0)


@pytest.fixture
def camera_cfg():
    return replace(CAMERA_CFG, tick_rate=2.0, log_every_ticks=1)


def settle(camera: CameraController, max_ticks: int = 1000) -> int:
    for n in range(max_ticks):
        if not camera.tick():
            return n
    raise AssertionError("camera did not settle")
