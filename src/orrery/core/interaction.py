"""Pointer, wheel and button intents mapped onto the camera and focus state."""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from .camera import CameraController, ViewportRect
from .config import CAMERA_CFG, ORBIT_CFG, CameraCfg, OrbitCfg
from .kinematics import BodySnapshot
from .model import Point, SolarSystem


class ZoomDirection(Enum):
    IN = "in"
    OUT = "out"


@dataclass
class FocusState:
    selected_body_id: str | None = None
    persisted_zoom: float = 1.0

    @property
    def focused(self) -> bool:
        return self.selected_body_id is not None


class InteractionMapper:
    """Free/Focused state machine in front of a :class:`CameraController`.

    While a body is focused the camera is driven programmatically, so panning
    and manual zooming are ignored until the focus is released.
    """

    def __init__(
        self,
        camera: CameraController,
        *,
        belt_id: str,
        home: Point | None = None,
        cfg: CameraCfg = CAMERA_CFG,
    ) -> None:
        self._camera = camera
        self._cfg = cfg
        self._belt_id = belt_id
        self._home = home if home is not None else camera.home
        self._focus = FocusState(persisted_zoom=camera.target_zoom)
        self._pan_anchor: tuple[float, float] | None = None

    @property
    def focus(self) -> FocusState:
        return FocusState(self._focus.selected_body_id, self._focus.persisted_zoom)

    @property
    def selected_body_id(self) -> str | None:
        return self._focus.selected_body_id

    @property
    def persisted_zoom(self) -> float:
        return self._focus.persisted_zoom

    @property
    def focused(self) -> bool:
        return self._focus.focused

    @property
    def panning(self) -> bool:
        return self._pan_anchor is not None

    def focus_or_toggle(self, body_id: str, position: Point | None = None) -> bool:
        """Focus ``body_id``, or release it if it is already focused.

        Returns ``True`` when the body ends up focused.
        """

        focus = self._focus
        camera = self._camera
        if focus.selected_body_id == body_id:
            self.release_focus()
            return False

        if focus.selected_body_id is None:
            focus.persisted_zoom = camera.zoom
        focus.selected_body_id = body_id
        self._pan_anchor = None

        if body_id == self._belt_id:
            camera.set_target_zoom(self._cfg.belt_overview_zoom)
            camera.set_target_center(self._home)
        else:
            camera.set_target_zoom(self._cfg.focused_zoom)
            if position is not None:
                camera.set_target_center(position)
        return True

    def release_focus(self) -> bool:
        """Return to Free, restoring the zoom saved when focus began."""

        if self._focus.selected_body_id is None:
            return False
        self._focus.selected_body_id = None
        self._camera.set_target_zoom(self._focus.persisted_zoom)
        self._camera.set_target_center(self._home)
        return True

    def clear_focus(self) -> str | None:
        """Forget the selection without touching the camera."""

        previous = self._focus.selected_body_id
        self._focus.selected_body_id = None
        return previous

    def pan_start(self, position: tuple[float, float]) -> bool:
        if self.focused:
            return False
        self._pan_anchor = (float(position[0]), float(position[1]))
        return True

    def pan_move(self, position: tuple[float, float]) -> None:
        if self._pan_anchor is None:
            return
        if self.focused:
            self._pan_anchor = None
            return
        dx = position[0] - self._pan_anchor[0]
        dy = position[1] - self._pan_anchor[1]
        self._pan_anchor = (float(position[0]), float(position[1]))
        self._camera.pan((dx, dy))

    def pan_end(self) -> None:
        self._pan_anchor = None

    def pan_by(self, delta: tuple[float, float]) -> bool:
        if self.focused:
            return False
        self._camera.pan(delta)
        return True

    def wheel_zoom(
        self,
        delta_y: float,
        screen_point: tuple[float, float],
        viewport: ViewportRect | None = None,
    ) -> bool:
        if self.focused or delta_y == 0 or not math.isfinite(delta_y):
            return False
        step = self._cfg.zoom_step_factor
        factor = step if delta_y < 0 else 1.0 / step
        changed = self._camera.zoom_at_point(factor, screen_point, viewport)
        if changed:
            self._focus.persisted_zoom = self._camera.target_zoom
        return changed

    def zoom_step(self, direction: ZoomDirection) -> bool:
        if self.focused:
            return False
        step = self._cfg.zoom_step_factor
        current = self._camera.target_zoom
        wanted = current * step if direction is ZoomDirection.IN else current / step
        new_zoom = self._camera.set_target_zoom(wanted)
        self._focus.persisted_zoom = new_zoom
        return new_zoom != current

    def zoom_in(self) -> bool:
        return self.zoom_step(ZoomDirection.IN)

    def zoom_out(self) -> bool:
        return self.zoom_step(ZoomDirection.OUT)

    def reset_zoom(self) -> None:
        home_zoom = self._cfg.home_zoom
        self._focus.selected_body_id = None
        self._focus.persisted_zoom = home_zoom
        self._camera.set_target_zoom(home_zoom)
        self._camera.set_target_center(self._home)

    def full_reset(self) -> None:
        home_zoom = self._cfg.home_zoom
        self._focus.selected_body_id = None
        self._focus.persisted_zoom = home_zoom
        self._pan_anchor = None
        self._camera.reset(home_zoom, self._home)


def pick_body(
    snapshot: BodySnapshot,
    system: SolarSystem,
    world_point: Point,
    tolerance: float = 0.0,
    cfg: OrbitCfg = ORBIT_CFG,
) -> str | None:
    """Id of the body drawn at ``world_point``, topmost first, or ``None``.

    The comet is drawn over everything, then moons over their planets.

    ``tolerance`` widens every hit radius, in world units.
    """

    wx, wy = world_point

    def hit(position: Point | None, radius: float) -> float | None:
        if position is None:
            return None
        distance = math.hypot(wx - position[0], wy - position[1])
        return distance if distance <= radius + tolerance else None

    for candidates in (
        [(system.comet.id, snapshot.comet, system.comet.radius)] if system.comet else [],
        [(moon.id, snapshot.moons.get(moon.id), moon.radius) for moon in system.moons],
        [(planet.id, snapshot.planets.get(planet.id), planet.radius) for planet in system.planets],
    ):
        best: tuple[float, str] | None = None
        for body_id, position, radius in candidates:
            distance = hit(position, radius)
            if distance is not None and (best is None or distance < best[0]):
                best = (distance, body_id)
        if best is not None:
            return best[1]

    belt = system.asteroid_belt
    cx, cy = snapshot.star_center
    tilt = cfg.tilt_factor
    if tilt > 0.0:
        # distance measured in the un-flattened orbital plane
        radial = math.hypot(wx - cx, (wy - cy) / tilt)
        if belt.inner_radius - tolerance <= radial <= belt.outer_radius + tolerance:
            return belt.id
    return None


__all__ = ["FocusState", "InteractionMapper", "ZoomDirection", "pick_body"]
