from dataclasses import replace

import numpy as np
import pytest

from conftest import BELT, EARTH, make_catalog
from orrery.core.model import BodyKind
from orrery.data.catalog import DEFAULT_CATALOG, build_system, generate_asteroids


def test_default_catalog_builds_full_system():
    system = build_system(DEFAULT_CATALOG, np.random.default_rng(0))
    assert [p.id for p in system.planets] == [
        "mercury",
        "venus",
        "earth",
        "mars",
        "jupiter",
        "saturn",
        "uranus",
        "neptune",
    ]
    assert {m.parent_id for m in system.moons} == {"earth", "jupiter", "saturn"}
    assert system.comet.id == "halley"
    assert len(system.asteroid_belt) == 300
    assert len(system.find("saturn").rings) == 4


def test_duplicate_ids_are_rejected():
    catalog = make_catalog(comet=(replace(EARTH, id="earth"),))
    with pytest.raises(ValueError, match="earth"):
        build_system(catalog)


def test_belt_id_collision_is_rejected():
    catalog = make_catalog(planet=(replace(EARTH, id="asteroid_belt"),))
    with pytest.raises(ValueError):
        build_system(catalog)


def test_explicit_phases_survive_unless_randomized(catalog):
    rng = np.random.default_rng(11)
    assert build_system(catalog, rng).find("earth").orbit.phase_angle == 0.0
    randomized = build_system(catalog, rng, randomize=True)
    assert randomized.find("earth").orbit.phase_angle != 0.0


def test_moon_parent_only_kept_for_moons(catalog):
    system = build_system(catalog, np.random.default_rng(0))
    assert system.find("the_moon").parent_id == "earth"
    assert system.find("earth").parent_id is None
    assert system.find("earth").kind is BodyKind.PLANET


def test_asteroids_fill_the_band():
    belt = generate_asteroids(BELT, np.random.default_rng(2), count=500)
    assert len(belt) == 500
    assert belt.orbit_radii.min() >= 145.0
    assert belt.orbit_radii.max() <= 165.0
    assert np.all(belt.angular_speeds > 0.0)
    assert set(np.unique(belt.color_indices)) <= {0, 1, 2, 3}


@pytest.mark.parametrize("inner, outer", [(165.0, 145.0), (0.0, 10.0)])
def test_invalid_band_is_rejected(inner, outer):
    with pytest.raises(ValueError):
        generate_asteroids(replace(BELT, inner_radius=inner, outer_radius=outer), np.random.default_rng())


def test_negative_asteroid_count_is_rejected():
    with pytest.raises(ValueError):
        generate_asteroids(BELT, np.random.default_rng(), count=-1)


def test_empty_belt_is_allowed():
    belt = generate_asteroids(BELT, np.random.default_rng(), count=0)
    assert len(belt) == 0
