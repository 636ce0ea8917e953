"""Rendering helpers for the orrery."""

from .assets import (
    AssetLibrary,
    LruCache,
    get_text_surface,
    load_font,
)
from .draw import (
    Starfield,
    comet_orbit_points,
    comet_tail_polygon,
    draw_asteroids,
    draw_belt_band,
    draw_body,
    draw_comet_tail,
    draw_label,
    draw_orbit_line,
    draw_planet_rings,
    draw_scene,
    draw_star,
    draw_starfield,
    draw_world_path,
    generate_starfield,
    orbit_ring_points,
    starfield_screen_positions,
)
from .ui import (
    Button,
    ButtonBar,
    ButtonVisualStyle,
    body_detail_lines,
    build_info_panel,
    build_text_panel,
    wrap_text,
)

__all__ = [
    "AssetLibrary",
    "Button",
    "ButtonBar",
    "ButtonVisualStyle",
    "body_detail_lines",
    "LruCache",
    "Starfield",
    "build_info_panel",
    "build_text_panel",
    "comet_orbit_points",
    "comet_tail_polygon",
    "draw_asteroids",
    "draw_belt_band",
    "draw_body",
    "draw_comet_tail",
    "draw_label",
    "draw_orbit_line",
    "draw_planet_rings",
    "draw_scene",
    "draw_star",
    "draw_starfield",
    "draw_world_path",
    "generate_starfield",
    "get_text_surface",
    "load_font",
    "orbit_ring_points",
    "starfield_screen_positions",
    "wrap_text",
]
