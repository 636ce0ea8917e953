"""Configuration dataclasses for the orrery."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OrbitCfg:
    tilt_factor: float = 0.4
    ring_tilt_factor: float = 0.35
    base_angular_step: float = 0.1
    tick_rate: float = 60.0
    max_substeps: int = 8
    star_center: tuple[float, float] = (0.0, 0.0)
    default_speed_multiplier: float = 1.0
    min_speed_multiplier: float = 0.1
    max_speed_multiplier: float = 5.0
    speed_multiplier_step: float = 0.1
    asteroid_count: int = 300

    @property
    def tick_seconds(self) -> float:
        return 1.0 / self.tick_rate


@dataclass(frozen=True)
class CameraCfg:
    canvas_width: int = 800
    canvas_height: int = 600
    min_zoom: float = 0.25
    max_zoom: float = 8.0
    home_zoom: float = 1.0
    focused_zoom: float = 4.0
    belt_overview_zoom: float = 0.8
    zoom_step_factor: float = 1.25
    smoothing: float = 0.1
    center_epsilon: float = 0.01
    zoom_epsilon: float = 0.001
    tick_rate: float = 60.0
    max_substeps: int = 8
    log_every_ticks: int = 10

    @property
    def canvas_size(self) -> tuple[int, int]:
        return self.canvas_width, self.canvas_height

    @property
    def tick_seconds(self) -> float:
        return 1.0 / self.tick_rate


@dataclass(frozen=True)
class RenderCfg:
    width: int = 800
    height: int = 600
    fps_limit: int = 120
    background_color: tuple[int, int, int] = (3, 7, 18)
    orbit_color: tuple[int, int, int, int] = (55, 65, 81, 200)
    selected_orbit_color: tuple[int, int, int, int] = (56, 189, 248, 230)
    comet_orbit_color: tuple[int, int, int, int] = (8, 145, 178, 170)
    selected_comet_orbit_color: tuple[int, int, int, int] = (103, 232, 249, 230)
    moon_orbit_color: tuple[int, int, int, int] = (107, 114, 128, 150)
    selected_moon_orbit_color: tuple[int, int, int, int] = (125, 211, 252, 220)
    belt_band_color: tuple[int, int, int, int] = (161, 98, 7, 40)
    selected_belt_band_color: tuple[int, int, int, int] = (250, 204, 21, 80)
    asteroid_colors: tuple[tuple[int, int, int], ...] = (
        (156, 163, 175),
        (107, 114, 128),
        (75, 85, 99),
        (120, 113, 108),
    )
    orbit_samples: int = 180
    selection_color: tuple[int, int, int] = (255, 255, 255)
    label_color: tuple[int, int, int] = (209, 213, 219)
    label_min_zoom: float = 1.5
    star_glow_color: tuple[int, int, int] = (250, 204, 21)
    star_glow_alpha: int = 70
    star_glow_radius_factor: float = 2.2
    comet_tail_max_length: float = 160.0
    comet_tail_max_alpha: int = int(255 * 0.7)
    comet_tail_curve: float = 15.0
    hit_padding_pixels: float = 6.0
    starfield_count: int = 200
    starfield_parallax: float = 0.12
    hud_text_color: tuple[int, int, int] = (234, 241, 255)
    hud_panel_color: tuple[int, int, int, int] = (12, 18, 30, int(255 * 0.72))
    info_title_color: tuple[int, int, int] = (56, 189, 248)
    button_color: tuple[int, int, int, int] = (8, 32, 64, int(255 * 0.78))
    button_hover_color: tuple[int, int, int, int] = (18, 52, 94, int(255 * 0.88))
    button_text_color: tuple[int, int, int] = (234, 241, 255)
    button_disabled_text_color: tuple[int, int, int] = (120, 130, 150)
    button_border_color: tuple[int, int, int, int] = (88, 140, 255, int(255 * 0.55))
    button_radius: int = 12
    button_width: int = 96
    button_height: int = 30
    button_gap: int = 8


ORBIT_CFG = OrbitCfg()
CAMERA_CFG = CameraCfg()
RENDER_CFG = RenderCfg()


__all__ = [
    "CAMERA_CFG",
    "CameraCfg",
    "ORBIT_CFG",
    "OrbitCfg",
    "RENDER_CFG",
    "RenderCfg",
]
