from orrery.core.focus import track_focus
from orrery.core.kinematics import compute_snapshot


def test_no_selection_has_no_target(system):
    assert track_focus(None, compute_snapshot(system)) is None


def test_belt_targets_star_center(system):
    assert track_focus("asteroid_belt", compute_snapshot(system)) == (0.0, 0.0)


def test_bodies_resolve_to_their_snapshot_positions(system):
    snapshot = compute_snapshot(system)
    assert track_focus("earth", snapshot) == snapshot.planets["earth"]
    assert track_focus("the_moon", snapshot) == snapshot.moons["the_moon"]
    assert track_focus("halley", snapshot) == snapshot.comet


def test_unknown_id_has_no_target(system):
    assert track_focus("vulcan", compute_snapshot(system)) is None
