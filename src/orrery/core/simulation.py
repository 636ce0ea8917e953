"""Wiring of clock, camera and interaction into one orrery simulation."""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from orrery.data.catalog import DEFAULT_CATALOG, Catalog, build_system

from .camera import CameraController, CameraState, ViewportRect
from .config import CAMERA_CFG, ORBIT_CFG, CameraCfg, OrbitCfg
from .focus import track_focus
from .interaction import InteractionMapper, pick_body
from .kinematics import BodySnapshot
from .logging_utils import RunLogger
from .model import SolarSystem
from .physics import ClockState, PhysicsClock
from .timekeeping import FixedStepAccumulator


@dataclass(frozen=True)
class Frame:
    """Everything a renderer needs for one frame, detached from live state."""

    snapshot: BodySnapshot
    camera: CameraState
    selected_body_id: str | None
    running: bool
    speed_multiplier: float


class Simulation:
    """Owns the model and runs the physics and camera schedules.

    Physics ticks and camera ticks are accumulated separately from wall time,
    so camera smoothing keeps going while physics is paused and neither
    depends on the render frame rate.
    """

    def __init__(
        self,
        catalog: Catalog = DEFAULT_CATALOG,
        *,
        orbit_cfg: OrbitCfg = ORBIT_CFG,
        camera_cfg: CameraCfg = CAMERA_CFG,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        asteroid_count: int | None = None,
        logger: RunLogger | None = None,
    ) -> None:
        self._catalog = catalog
        self._orbit_cfg = orbit_cfg
        self._camera_cfg = camera_cfg
        self._rng = rng or np.random.default_rng(seed)
        self._asteroid_count = asteroid_count
        self.logger = logger

        system = build_system(catalog, self._rng, asteroid_count=asteroid_count)
        self.clock = PhysicsClock(system, orbit_cfg)
        self.camera = CameraController(camera_cfg, home=orbit_cfg.star_center)
        self.interaction = InteractionMapper(
            self.camera,
            belt_id=system.asteroid_belt.id,
            home=orbit_cfg.star_center,
            cfg=camera_cfg,
        )
        self._physics_steps = FixedStepAccumulator(orbit_cfg.tick_seconds, orbit_cfg.max_substeps)
        self._camera_steps = FixedStepAccumulator(camera_cfg.tick_seconds, camera_cfg.max_substeps)
        self._elapsed = 0.0
        self._camera_ticks = 0

    @property
    def system(self) -> SolarSystem:
        return self.clock.system

    @property
    def snapshot(self) -> BodySnapshot:
        return self.clock.snapshot

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def running(self) -> bool:
        return self.clock.running

    @property
    def speed_multiplier(self) -> float:
        return self.clock.speed_multiplier

    @property
    def selected_body_id(self) -> str | None:
        return self.interaction.selected_body_id

    # ------------------------------------------------------------------
    # Schedules
    # ------------------------------------------------------------------
    def physics_tick(self) -> BodySnapshot:
        snapshot = self.clock.tick()
        self._follow_focus(snapshot)
        return snapshot

    def camera_tick(self) -> bool:
        moved = self.camera.tick()
        self._camera_ticks += 1
        stride = self._camera_cfg.log_every_ticks
        if self.logger is not None and stride > 0 and self._camera_ticks % stride == 0:
            self._log_camera_sample()
        return moved

    def advance(self, elapsed: float) -> Frame:
        """Run as many physics and camera ticks as ``elapsed`` seconds allow."""

        if elapsed > 0.0:
            self._elapsed += elapsed
        if self.clock.running:
            self._physics_steps.accrue(elapsed)
            for _ in range(self._physics_steps.consume()):
                self.physics_tick()
        else:
            self._physics_steps.clear()
            self.physics_tick()
        self._camera_steps.accrue(elapsed)
        for _ in range(self._camera_steps.consume()):
            self.camera_tick()
        return self.frame()

    def frame(self) -> Frame:
        return Frame(
            snapshot=self.clock.snapshot,
            camera=self.camera.state,
            selected_body_id=self.interaction.selected_body_id,
            running=self.clock.running,
            speed_multiplier=self.clock.speed_multiplier,
        )

    def _follow_focus(self, snapshot: BodySnapshot) -> None:
        selected = self.interaction.selected_body_id
        if selected is None:
            return
        target = track_focus(selected, snapshot)
        if target is None:
            self.interaction.clear_focus()
            self._log_event("focus_lost", selected)
            return
        self.camera.set_target_center(target)

    # ------------------------------------------------------------------
    # User intents
    # ------------------------------------------------------------------
    def body_clicked(
        self,
        body_id: str,
        world_x: float | None = None,
        world_y: float | None = None,
    ) -> bool:
        """Focus ``body_id`` or toggle it off; ``True`` if it is now focused."""

        if self.system.find(body_id) is None:
            return False
        position = self.snapshot.position_of(body_id)
        if position is None and world_x is not None and world_y is not None:
            position = (world_x, world_y)
        focused = self.interaction.focus_or_toggle(body_id, position)
        self._log_event("focus" if focused else "unfocus", body_id)
        return focused

    def background_clicked(self) -> bool:
        previous = self.interaction.selected_body_id
        released = self.interaction.release_focus()
        if released:
            self._log_event("unfocus", previous)
        return released

    def hit_test(
        self,
        screen_point: tuple[float, float],
        viewport: ViewportRect | None = None,
        *,
        padding_pixels: float = 0.0,
    ) -> str | None:
        viewport = viewport or self.camera.default_viewport()
        if viewport.width <= 0.0 or viewport.height <= 0.0:
            return None
        world = self.camera.screen_to_world(screen_point, viewport)
        ppu = self.camera.pixels_per_unit(viewport)
        tolerance = padding_pixels / ppu if ppu > 0.0 else 0.0
        return pick_body(self.snapshot, self.system, world, tolerance, self._orbit_cfg)

    def pointer_down(
        self,
        screen_point: tuple[float, float],
        viewport: ViewportRect | None = None,
        *,
        padding_pixels: float = 0.0,
    ) -> str | None:
        """Primary button press: focus a body, release focus, or start a pan."""

        body_id = self.hit_test(screen_point, viewport, padding_pixels=padding_pixels)
        if body_id is not None:
            self.body_clicked(body_id)
        elif self.interaction.focused:
            self.background_clicked()
        else:
            self.interaction.pan_start(screen_point)
        return body_id

    def pointer_move(self, screen_point: tuple[float, float]) -> None:
        self.interaction.pan_move(screen_point)

    def pointer_up(self) -> None:
        self.interaction.pan_end()

    def pan_delta(self, dx: float, dy: float) -> bool:
        return self.interaction.pan_by((dx, dy))

    def wheel(
        self,
        delta_y: float,
        screen_x: float,
        screen_y: float,
        viewport: ViewportRect | None = None,
    ) -> bool:
        return self.interaction.wheel_zoom(delta_y, (screen_x, screen_y), viewport)

    def zoom_in(self) -> bool:
        return self.interaction.zoom_in()

    def zoom_out(self) -> bool:
        return self.interaction.zoom_out()

    def reset_zoom(self) -> None:
        self.interaction.reset_zoom()
        self._log_event("reset_zoom")

    def toggle_play_pause(self) -> bool:
        state = self.clock.toggle()
        self._physics_steps.clear()
        self._log_event("resume" if state is ClockState.RUNNING else "pause")
        return state is ClockState.RUNNING

    def set_speed_multiplier(self, multiplier: float) -> None:
        # Non-positive values freeze or reverse motion; callers keep it positive.
        self.clock.speed_multiplier = float(multiplier)
        self._log_event("speed", details={"multiplier": float(multiplier)})

    def full_reset(self) -> BodySnapshot:
        system = build_system(
            self._catalog,
            self._rng,
            randomize=True,
            asteroid_count=self._asteroid_count,
        )
        snapshot = self.clock.reset(system)
        self.interaction.full_reset()
        self._physics_steps.clear()
        self._camera_steps.clear()
        self._log_event("full_reset")
        return snapshot

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    def _log_event(
        self,
        event_type: str,
        body_id: str | None = None,
        details: dict | None = None,
    ) -> None:
        if self.logger is None:
            return
        self.logger.log_event(
            self._elapsed,
            event_type,
            body_id,
            self.camera.target_zoom,
            details,
        )

    def _log_camera_sample(self) -> None:
        zoom = self.camera.zoom
        cx, cy = self.camera.center
        tx, ty = self.camera.target_center
        self.logger.log_ts(
            [
                self._elapsed,
                self._camera_ticks,
                zoom,
                cx,
                cy,
                self.camera.target_zoom,
                tx,
                ty,
                self.interaction.selected_body_id or "",
                self.clock.speed_multiplier,
            ]
        )


__all__ = ["Frame", "Simulation"]
