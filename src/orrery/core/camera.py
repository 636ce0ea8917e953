from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .config import CAMERA_CFG, CameraCfg
from .model import Point


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def _approach(current: float, target: float, smoothing: float, epsilon: float) -> float:
    diff = target - current
    if abs(diff) < epsilon:
        return target
    return current + diff * smoothing


@dataclass
class CameraState:
    zoom: float
    center: np.ndarray
    target_zoom: float
    target_center: np.ndarray

    def copy(self) -> "CameraState":
        return CameraState(
            zoom=self.zoom,
            center=self.center.copy(),
            target_zoom=self.target_zoom,
            target_center=self.target_center.copy(),
        )


@dataclass(frozen=True)
class ViewportRect:
    """On-screen rectangle the logical canvas is displayed in."""

    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class ViewportGeometry:
    """Visible world-space rectangle."""

    min_x: float
    min_y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.min_x + self.width

    @property
    def max_y(self) -> float:
        return self.min_y + self.height

    def contains(self, point: Point, margin: float = 0.0) -> bool:
        return (
            self.min_x - margin <= point[0] <= self.max_x + margin
            and self.min_y - margin <= point[1] <= self.max_y + margin
        )

    def contains_points(self, points: np.ndarray, margin: float = 0.0) -> np.ndarray:
        """Vectorised :meth:`contains` over an ``(N, 2)`` array."""

        return (
            (points[:, 0] >= self.min_x - margin)
            & (points[:, 0] <= self.max_x + margin)
            & (points[:, 1] >= self.min_y - margin)
            & (points[:, 1] <= self.max_y + margin)
        )


class CameraController:
    """Smoothed zoom and view center chasing a target.

    The visible world rectangle is ``canvas_size / zoom`` centred on
    ``center``; screen coordinates grow to the right and downwards.
    """

    def __init__(
        self,
        cfg: CameraCfg = CAMERA_CFG,
        *,
        home: Point = (0.0, 0.0),
        zoom: float | None = None,
    ) -> None:
        self._cfg = cfg
        self._home = (float(home[0]), float(home[1]))
        zoom = _clamp(cfg.home_zoom if zoom is None else zoom, cfg.min_zoom, cfg.max_zoom)
        self._state = CameraState(
            zoom=zoom,
            center=np.array(self._home, dtype=float),
            target_zoom=zoom,
            target_center=np.array(self._home, dtype=float),
        )

    @property
    def cfg(self) -> CameraCfg:
        return self._cfg

    @property
    def home(self) -> Point:
        return self._home

    @property
    def canvas_size(self) -> tuple[int, int]:
        return self._cfg.canvas_size

    @property
    def min_zoom(self) -> float:
        return self._cfg.min_zoom

    @property
    def max_zoom(self) -> float:
        return self._cfg.max_zoom

    @property
    def zoom(self) -> float:
        return self._state.zoom

    @property
    def target_zoom(self) -> float:
        return self._state.target_zoom

    @property
    def center(self) -> Point:
        return float(self._state.center[0]), float(self._state.center[1])

    @property
    def target_center(self) -> Point:
        return float(self._state.target_center[0]), float(self._state.target_center[1])

    @property
    def state(self) -> CameraState:
        return self._state.copy()

    @property
    def settled(self) -> bool:
        state = self._state
        return state.zoom == state.target_zoom and bool(
            np.array_equal(state.center, state.target_center)
        )

    def default_viewport(self) -> ViewportRect:
        width, height = self.canvas_size
        return ViewportRect(0.0, 0.0, float(width), float(height))

    def set_target_zoom(self, zoom: float) -> float:
        if math.isfinite(zoom):
            self._state.target_zoom = _clamp(zoom, self._cfg.min_zoom, self._cfg.max_zoom)
        return self._state.target_zoom

    def set_target_center(self, position: Point) -> None:
        if math.isfinite(position[0]) and math.isfinite(position[1]):
            self._state.target_center[:] = position

    def reset(self, zoom: float | None = None, center: Point | None = None) -> None:
        """Jump current and target to the same values, without animation."""

        zoom = _clamp(
            self._cfg.home_zoom if zoom is None else zoom,
            self._cfg.min_zoom,
            self._cfg.max_zoom,
        )
        center = self._home if center is None else center
        self._state.zoom = zoom
        self._state.target_zoom = zoom
        self._state.center[:] = center
        self._state.target_center[:] = center

    def zoom_at_point(
        self,
        factor: float,
        screen_point: tuple[float, float],
        viewport: ViewportRect | None = None,
    ) -> bool:
        """Scale the target zoom by ``factor`` keeping ``screen_point`` anchored.

        The world point under the cursor is taken from the current, on-screen
        zoom and center, while the result is written to the target. Returns
        ``False`` when nothing changed.
        """

        viewport = viewport or self.default_viewport()
        state = self._state
        if not (math.isfinite(factor) and factor > 0.0):
            return False
        if not (state.zoom > 0.0 and viewport.width > 0.0 and viewport.height > 0.0):
            return False
        if not (math.isfinite(screen_point[0]) and math.isfinite(screen_point[1])):
            return False

        new_zoom = _clamp(state.target_zoom * factor, self._cfg.min_zoom, self._cfg.max_zoom)
        if abs(new_zoom - state.target_zoom) < self._cfg.zoom_epsilon:
            return False

        width, height = self.canvas_size
        world_x, world_y = self.screen_to_world(screen_point, viewport)
        fx = 0.5 - (screen_point[0] - viewport.left) / viewport.width
        fy = 0.5 - (screen_point[1] - viewport.top) / viewport.height
        new_cx = world_x + (width / new_zoom) * fx
        new_cy = world_y + (height / new_zoom) * fy
        if not (math.isfinite(new_cx) and math.isfinite(new_cy)):
            return False

        state.target_zoom = new_zoom
        state.target_center[:] = (new_cx, new_cy)
        return True

    def pan(self, screen_delta: tuple[float, float]) -> None:
        """Move the target so content follows a drag of ``screen_delta`` pixels."""

        zoom = self._state.zoom
        if not zoom > 0.0:
            return
        dx, dy = screen_delta
        if not (math.isfinite(dx) and math.isfinite(dy)):
            return
        if dx == 0 and dy == 0:
            return
        self._state.target_center[0] -= dx / zoom
        self._state.target_center[1] -= dy / zoom

    def tick(self) -> bool:
        """Close a fraction of the distance to the target; ``True`` if moved."""

        cfg = self._cfg
        state = self._state
        before = (state.zoom, float(state.center[0]), float(state.center[1]))
        zoom = _approach(state.zoom, state.target_zoom, cfg.smoothing, cfg.zoom_epsilon)
        state.zoom = _clamp(zoom, cfg.min_zoom, cfg.max_zoom)
        for axis in (0, 1):
            state.center[axis] = _approach(
                float(state.center[axis]),
                float(state.target_center[axis]),
                cfg.smoothing,
                cfg.center_epsilon,
            )
        return before != (state.zoom, float(state.center[0]), float(state.center[1]))

    def pixels_per_unit(self, viewport: ViewportRect | None = None) -> float:
        viewport = viewport or self.default_viewport()
        return self._state.zoom * viewport.width / self.canvas_size[0]

    def view_geometry(self) -> ViewportGeometry:
        width, height = self.canvas_size
        zoom = max(self._state.zoom, 1e-9)
        view_w = width / zoom
        view_h = height / zoom
        cx, cy = self._state.center
        return ViewportGeometry(
            min_x=float(cx) - view_w / 2.0,
            min_y=float(cy) - view_h / 2.0,
            width=view_w,
            height=view_h,
        )

    def screen_to_world(
        self, screen_point: tuple[float, float], viewport: ViewportRect | None = None
    ) -> Point:
        viewport = viewport or self.default_viewport()
        width, height = self.canvas_size
        zoom = max(self._state.zoom, 1e-9)
        cx, cy = self._state.center
        fx = 0.5 - (screen_point[0] - viewport.left) / viewport.width
        fy = 0.5 - (screen_point[1] - viewport.top) / viewport.height
        return (
            float(cx) - (width / zoom) * fx,
            float(cy) - (height / zoom) * fy,
        )

    def world_to_screen(
        self, world_point: Point, viewport: ViewportRect | None = None
    ) -> tuple[float, float]:
        viewport = viewport or self.default_viewport()
        width, height = self.canvas_size
        zoom = self._state.zoom
        cx, cy = self._state.center
        sx = viewport.left + viewport.width * (0.5 + (world_point[0] - cx) * zoom / width)
        sy = viewport.top + viewport.height * (0.5 + (world_point[1] - cy) * zoom / height)
        return float(sx), float(sy)

    def project(self, points: np.ndarray, viewport: ViewportRect | None = None) -> np.ndarray:
        """Vectorised :meth:`world_to_screen` for an ``(N, 2)`` array."""

        viewport = viewport or self.default_viewport()
        width, height = self.canvas_size
        zoom = self._state.zoom
        out = np.empty_like(points, dtype=float)
        out[:, 0] = viewport.left + viewport.width * (
            0.5 + (points[:, 0] - self._state.center[0]) * zoom / width
        )
        out[:, 1] = viewport.top + viewport.height * (
            0.5 + (points[:, 1] - self._state.center[1]) * zoom / height
        )
        return out


__all__ = [
    "CameraController",
    "CameraState",
    "ViewportGeometry",
    "ViewportRect",
]
