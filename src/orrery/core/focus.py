"""Focus tracking: where the camera should look for the selected body."""
from __future__ import annotations

from .kinematics import BodySnapshot
from .model import Point


def track_focus(selected_body_id: str | None, snapshot: BodySnapshot) -> Point | None:
    """Return the camera target for ``selected_body_id`` in ``snapshot``.

    The belt is centred on the star and is not tracked member by member.
    ``None`` means either nothing is focused or the id no longer resolves
    (unknown id, or a moon whose parent is missing this tick); in the latter
    case the caller is expected to drop the focus.
    """

    if selected_body_id is None:
        return None
    if selected_body_id == snapshot.belt_id:
        return snapshot.star_center
    if snapshot.comet_id is not None and selected_body_id == snapshot.comet_id:
        return snapshot.comet
    moon = snapshot.moons.get(selected_body_id)
    if moon is not None:
        return moon
    return snapshot.planets.get(selected_body_id)


__all__ = ["track_focus"]
