from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, TYPE_CHECKING

import numpy as np
import pygame

from orrery.core.camera import CameraController, ViewportRect
from orrery.core.kinematics import BodySnapshot, belt_positions
from orrery.core.model import AsteroidBelt, Body, Point, SolarSystem, Star

from .assets import AssetLibrary, Color, get_text_surface

if TYPE_CHECKING:  # pragma: no cover
    from orrery.core.config import OrbitCfg, RenderCfg


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


@dataclass
class Starfield:
    """Background stars in screen space, wrapped around while panning."""

    positions: np.ndarray
    radii: np.ndarray
    sprites: list[pygame.Surface]

    def __len__(self) -> int:
        return int(self.positions.shape[0])


def generate_starfield(
    num_stars: int,
    *,
    size: tuple[int, int],
    rng: np.random.Generator | None = None,
) -> Starfield:
    rng = rng or np.random.default_rng()
    width, height = size
    positions = rng.random((num_stars, 2)) * np.array([width, height], dtype=float)
    # mostly single pixel stars
    radii = np.where(rng.random(num_stars) < 0.75, 1, 2)
    blue = rng.integers(200, 241, size=num_stars)
    red = np.maximum(0, blue - rng.integers(10, 26, size=num_stars))
    green = np.maximum(0, blue - rng.integers(5, 16, size=num_stars))
    alphas = rng.integers(60, 161, size=num_stars)
    sprites: list[pygame.Surface] = []
    for r, red_i, green_i, blue_i, alpha in zip(radii, red, green, blue, alphas):
        radius = int(r)
        sprite = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        pygame.draw.circle(
            sprite, (int(red_i), int(green_i), int(blue_i), int(alpha)), (radius, radius), radius
        )
        sprites.append(sprite)
    return Starfield(positions=positions, radii=radii, sprites=sprites)


def starfield_screen_positions(
    starfield: Starfield,
    camera_center: Point,
    zoom: float,
    size: tuple[int, int],
    parallax: float,
) -> np.ndarray:
    """Top-left blit positions after parallax shift and wrap-around."""

    width, height = size
    shift = np.array(camera_center, dtype=float) * zoom * parallax
    wrapped = np.mod(starfield.positions - shift, np.array([width, height], dtype=float))
    return wrapped.astype(int) - starfield.radii[:, None]


def draw_starfield(
    surface: pygame.Surface,
    starfield: Starfield,
    camera_center: Point,
    zoom: float,
    *,
    render_cfg: RenderCfg,
) -> None:
    width, height = surface.get_size()
    if width <= 0 or height <= 0 or len(starfield) == 0:
        return
    positions = starfield_screen_positions(
        starfield, camera_center, zoom, (width, height), render_cfg.starfield_parallax
    )
    surface.blits(
        [(sprite, (int(x), int(y))) for sprite, (x, y) in zip(starfield.sprites, positions)],
        doreturn=False,
    )


def orbit_ring_points(center: Point, orbit_radius: float, tilt: float, samples: int) -> np.ndarray:
    """World-space polyline of a tilted circular orbit."""

    angles = np.linspace(0.0, 2.0 * math.pi, max(8, samples) + 1)
    radii = np.full_like(angles, orbit_radius)
    return belt_positions(center, radii, angles, tilt)


def comet_orbit_points(comet: Body, center: Point, samples: int) -> np.ndarray:
    orbit = comet.orbit
    angles = np.linspace(0.0, 2.0 * math.pi, max(8, samples) + 1)
    ux = orbit.semi_major_axis * np.cos(angles)
    uy = orbit.semi_minor_axis * np.sin(angles)
    rot = math.radians(orbit.tilt_degrees)
    points = np.empty((angles.shape[0], 2), dtype=float)
    points[:, 0] = center[0] + ux * math.cos(rot) - uy * math.sin(rot)
    points[:, 1] = center[1] + ux * math.sin(rot) + uy * math.cos(rot)
    return points


def draw_orbit_line(
    surface: pygame.Surface,
    color: Color,
    points: Sequence[tuple[float, float]],
    width: int,
) -> None:
    if len(points) < 2:
        return
    if width <= 1:
        pygame.draw.aalines(surface, color, False, points)
    else:
        pygame.draw.lines(surface, color, False, points, width)
        pygame.draw.aalines(surface, color, False, points)


def draw_world_path(
    surface: pygame.Surface,
    camera: CameraController,
    world_points: np.ndarray,
    color: Color,
    *,
    width: int = 1,
    viewport: ViewportRect | None = None,
) -> None:
    screen_points = camera.project(world_points, viewport)
    draw_orbit_line(surface, color, [tuple(p) for p in screen_points.tolist()], width)


def draw_star(
    surface: pygame.Surface,
    position: tuple[int, int],
    radius: int,
    star: Star,
    *,
    assets: AssetLibrary,
    render_cfg: RenderCfg,
) -> None:
    if radius <= 0:
        return
    glow_radius = max(2, int(radius * render_cfg.star_glow_radius_factor))
    glow = assets.get_glow_surface(glow_radius, render_cfg.star_glow_color, render_cfg.star_glow_alpha)
    surface.blit(glow, glow.get_rect(center=position))
    pygame.draw.circle(surface, star.color, position, radius)


def draw_body(
    surface: pygame.Surface,
    position: tuple[int, int],
    radius: int,
    *,
    color: tuple[int, int, int],
    selected: bool = False,
    selection_color: tuple[int, int, int] = (255, 255, 255),
) -> None:
    radius = max(1, radius)
    pygame.draw.circle(surface, color, position, radius)
    if selected:
        pygame.draw.circle(surface, selection_color, position, radius + 2, 1)


def draw_planet_rings(
    surface: pygame.Surface,
    position: tuple[int, int],
    planet: Body,
    radius_px: float,
    ring_tilt: float,
) -> None:
    if radius_px <= 0.0 or not planet.rings:
        return
    outer = max(ring.outer_factor for ring in planet.rings)
    half_w = int(math.ceil(radius_px * outer)) + 2
    half_h = int(math.ceil(radius_px * outer * ring_tilt)) + 2
    layer = pygame.Surface((half_w * 2, half_h * 2), pygame.SRCALPHA)
    for ring in planet.rings:
        mid = (ring.inner_factor + ring.outer_factor) / 2.0
        thickness = max(1, int(radius_px * (ring.outer_factor - ring.inner_factor)))
        rx = radius_px * mid
        ry = rx * ring_tilt
        rect = pygame.Rect(0, 0, max(2, int(rx * 2)), max(2, int(ry * 2)))
        rect.center = (half_w, half_h)
        pygame.draw.ellipse(layer, (*ring.color, ring.alpha), rect, min(thickness, rect.height // 2 or 1))
    surface.blit(layer, layer.get_rect(center=position))


def comet_tail_polygon(
    comet_pos: Point,
    star_pos: Point,
    comet: Body,
    zoom: float,
    *,
    render_cfg: RenderCfg,
    samples: int = 12,
) -> tuple[np.ndarray, float] | None:
    """World-space outline of the comet tail and its opacity in ``[0, 1]``.

    The tail points away from the star and grows with distance from it.
    """

    vec_x = comet_pos[0] - star_pos[0]
    vec_y = comet_pos[1] - star_pos[1]
    dist = math.hypot(vec_x, vec_y)
    if dist < 1.0:
        return None
    max_dist = comet.orbit.semi_major_axis
    min_dist = comet.orbit.semi_minor_axis
    if max_dist <= min_dist:
        return None
    intensity = _clamp((dist - min_dist) / (max_dist - min_dist), 0.0, 1.0)
    scale = 1.0 / math.sqrt(max(zoom, 1e-9))
    tail_length = render_cfg.comet_tail_max_length * scale * intensity * intensity
    if tail_length < 2.0:
        return None

    ux, uy = vec_x / dist, vec_y / dist
    base_width = comet.radius * 1.5
    base1 = np.array([comet_pos[0] - uy * base_width, comet_pos[1] + ux * base_width])
    base2 = np.array([comet_pos[0] + uy * base_width, comet_pos[1] - ux * base_width])
    tip = np.array([comet_pos[0] + ux * tail_length, comet_pos[1] + uy * tail_length])
    curve = render_cfg.comet_tail_curve * scale
    control = np.array(
        [
            comet_pos[0] + ux * tail_length / 2.0 - uy * curve,
            comet_pos[1] + uy * tail_length / 2.0 + ux * curve,
        ]
    )
    t = np.linspace(0.0, 1.0, max(2, samples))[:, None]
    bezier = (1 - t) ** 2 * base2 + 2 * (1 - t) * t * control + t**2 * tip
    outline = np.vstack([base1, bezier])
    return outline, intensity


def draw_comet_tail(
    surface: pygame.Surface,
    camera: CameraController,
    comet: Body,
    comet_pos: Point,
    star_pos: Point,
    *,
    render_cfg: RenderCfg,
    viewport: ViewportRect | None = None,
) -> None:
    tail = comet_tail_polygon(comet_pos, star_pos, comet, camera.zoom, render_cfg=render_cfg)
    if tail is None:
        return
    outline, intensity = tail
    alpha = int(render_cfg.comet_tail_max_alpha * intensity)
    if alpha <= 0:
        return
    points = [tuple(p) for p in camera.project(outline, viewport).tolist()]
    pygame.draw.polygon(surface, (*comet.color, alpha), points)


def draw_belt_band(
    surface: pygame.Surface,
    camera: CameraController,
    belt: AsteroidBelt,
    center: Point,
    tilt: float,
    color: Color,
    *,
    samples: int,
    viewport: ViewportRect | None = None,
) -> None:
    mid = (belt.inner_radius + belt.outer_radius) / 2.0
    points = orbit_ring_points(center, mid, tilt, samples)
    width_px = max(1, int((belt.outer_radius - belt.inner_radius) * camera.pixels_per_unit(viewport)))
    screen_points = [tuple(p) for p in camera.project(points, viewport).tolist()]
    pygame.draw.lines(surface, color, False, screen_points, width_px)


def draw_asteroids(
    surface: pygame.Surface,
    camera: CameraController,
    belt: AsteroidBelt,
    positions: np.ndarray,
    *,
    palette: Sequence[tuple[int, int, int]],
    viewport: ViewportRect | None = None,
) -> None:
    if positions.shape[0] == 0 or not palette:
        return
    ppu = camera.pixels_per_unit(viewport)
    if ppu <= 0.0:
        return
    # 4 px slack at the edges
    visible = np.flatnonzero(camera.view_geometry().contains_points(positions, margin=4.0 / ppu))
    screen = camera.project(positions[visible], viewport)
    for row, idx in enumerate(visible):
        color = palette[int(belt.color_indices[idx]) % len(palette)]
        radius = max(1, int(belt.sizes[idx] * ppu))
        pygame.draw.circle(surface, color, (int(screen[row, 0]), int(screen[row, 1])), radius)


def draw_label(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    anchor: tuple[int, int],
    color: tuple[int, int, int],
) -> None:
    label = get_text_surface(font, text, color)
    rect = label.get_rect()
    rect.midtop = anchor
    surface.blit(label, rect)


def draw_scene(
    surface: pygame.Surface,
    orbit_layer: pygame.Surface,
    system: SolarSystem,
    snapshot: BodySnapshot,
    camera: CameraController,
    selected_body_id: str | None,
    *,
    orbit_cfg: OrbitCfg,
    render_cfg: RenderCfg,
    assets: AssetLibrary,
    label_font: pygame.font.Font,
    viewport: ViewportRect | None = None,
) -> None:
    """Draw orbits, belt, star, planets, moons and comet for one frame."""

    orbit_layer.fill((0, 0, 0, 0))
    center = snapshot.star_center
    tilt = orbit_cfg.tilt_factor
    ppu = camera.pixels_per_unit(viewport)
    samples = render_cfg.orbit_samples

    def to_screen(point: Point) -> tuple[int, int]:
        sx, sy = camera.world_to_screen(point, viewport)
        return int(sx), int(sy)

    belt = system.asteroid_belt
    belt_color = (
        render_cfg.selected_belt_band_color
        if selected_body_id == belt.id
        else render_cfg.belt_band_color
    )
    draw_belt_band(orbit_layer, camera, belt, center, tilt, belt_color, samples=samples, viewport=viewport)

    for planet in system.planets:
        color = (
            render_cfg.selected_orbit_color
            if planet.id == selected_body_id
            else render_cfg.orbit_color
        )
        points = orbit_ring_points(center, planet.orbit.orbit_radius, tilt, samples)
        draw_world_path(orbit_layer, camera, points, color, viewport=viewport)

    comet = system.comet
    if comet is not None:
        color = (
            render_cfg.selected_comet_orbit_color
            if comet.id == selected_body_id
            else render_cfg.comet_orbit_color
        )
        draw_world_path(orbit_layer, camera, comet_orbit_points(comet, center, samples), color, viewport=viewport)

    for moon in system.moons:
        parent = snapshot.planets.get(moon.parent_id or "")
        if parent is None or moon.id not in snapshot.moons:
            continue
        color = (
            render_cfg.selected_moon_orbit_color
            if moon.id == selected_body_id
            else render_cfg.moon_orbit_color
        )
        points = orbit_ring_points(parent, moon.orbit.orbit_radius, tilt, samples // 2)
        draw_world_path(orbit_layer, camera, points, color, viewport=viewport)

    if comet is not None and snapshot.comet is not None:
        draw_comet_tail(orbit_layer, camera, comet, snapshot.comet, center, render_cfg=render_cfg, viewport=viewport)

    surface.blit(orbit_layer, (0, 0))

    draw_asteroids(
        surface,
        camera,
        belt,
        snapshot.asteroids,
        palette=render_cfg.asteroid_colors,
        viewport=viewport,
    )
    draw_star(
        surface,
        to_screen(center),
        int(system.star.radius * ppu),
        system.star,
        assets=assets,
        render_cfg=render_cfg,
    )

    show_labels = camera.zoom >= render_cfg.label_min_zoom
    for planet in system.planets:
        position = snapshot.planets.get(planet.id)
        if position is None:
            continue
        screen_pos = to_screen(position)
        radius_px = planet.radius * ppu
        draw_planet_rings(surface, screen_pos, planet, radius_px, orbit_cfg.ring_tilt_factor)
        draw_body(
            surface,
            screen_pos,
            int(radius_px),
            color=planet.color,
            selected=planet.id == selected_body_id,
            selection_color=render_cfg.selection_color,
        )
        if show_labels or planet.id == selected_body_id:
            draw_label(
                surface,
                label_font,
                planet.name,
                (screen_pos[0], screen_pos[1] + int(radius_px) + 4),
                render_cfg.label_color,
            )

    for moon in system.moons:
        position = snapshot.moons.get(moon.id)
        if position is None:
            continue
        draw_body(
            surface,
            to_screen(position),
            int(moon.radius * ppu),
            color=moon.color,
            selected=moon.id == selected_body_id,
            selection_color=render_cfg.selection_color,
        )

    if comet is not None and snapshot.comet is not None:
        draw_body(
            surface,
            to_screen(snapshot.comet),
            int(comet.radius * ppu),
            color=comet.color,
            selected=comet.id == selected_body_id,
            selection_color=render_cfg.selection_color,
        )
