"""
Orrery - Interactive Solar System
=================================

A mini solar system with tilted orbits, moons, a comet and an asteroid belt.
Click a body to follow it, click it again (or the background) to let go.
Drag to pan and scroll to zoom while nothing is focused.

Keys: SPACE pause, R reset, +/- zoom, 0 reset zoom, [ ] speed, ESC quit.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pygame

from orrery.core.camera import ViewportRect
from orrery.core.config import CAMERA_CFG, ORBIT_CFG, RENDER_CFG
from orrery.core.logging_utils import RunLogger
from orrery.core.simulation import Simulation
from orrery.core.timekeeping import FrameTimer
from orrery.render import (
    AssetLibrary,
    ButtonBar,
    ButtonVisualStyle,
    build_info_panel,
    build_text_panel,
    draw_scene,
    draw_starfield,
    generate_starfield,
    load_font,
)

FONT_NAMES = ("consolas", "dejavusansmono", "menlo", "couriernew")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Interactive solar system orrery with click-to-focus camera.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for starting phases and the asteroid belt")
    parser.add_argument(
        "--speed",
        type=float,
        default=ORBIT_CFG.default_speed_multiplier,
        help="Initial speed multiplier (default: %(default)s)",
    )
    parser.add_argument(
        "--asteroids",
        type=int,
        default=ORBIT_CFG.asteroid_count,
        help="Number of asteroids in the belt (default: %(default)s)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=RENDER_CFG.fps_limit,
        help="Frame rate cap, 0 for uncapped (default: %(default)s)",
    )
    parser.add_argument("--paused", action="store_true", help="Start with the orbits paused")
    parser.add_argument("--log", action="store_true", help="Record camera samples and events for this run")
    parser.add_argument(
        "--runs-dir",
        type=Path,
        default=Path("data/runs"),
        help="Where run logs are written (default: data/runs)",
    )
    return parser


def _clamp_speed(value: float) -> float:
    return max(ORBIT_CFG.min_speed_multiplier, min(ORBIT_CFG.max_speed_multiplier, value))


def run(args: argparse.Namespace) -> None:
    pygame.init()
    pygame.display.set_caption("Orrery - Interactive Solar System")

    screen = pygame.display.set_mode((RENDER_CFG.width, RENDER_CFG.height))
    viewport = ViewportRect(0.0, 0.0, float(RENDER_CFG.width), float(RENDER_CFG.height))
    orbit_layer = pygame.Surface(screen.get_size(), pygame.SRCALPHA)

    clock = pygame.time.Clock()
    font = load_font(FONT_NAMES, 16)
    small_font = load_font(FONT_NAMES, 13)
    assets = AssetLibrary()
    starfield = generate_starfield(
        RENDER_CFG.starfield_count,
        size=screen.get_size(),
        rng=np.random.default_rng(args.seed),
    )

    logger: RunLogger | None = None
    if args.log:
        logger = RunLogger(args.runs_dir)
        logger.write_meta(
            {
                "seed": args.seed,
                "asteroids": args.asteroids,
                "speed": args.speed,
                "tilt_factor": ORBIT_CFG.tilt_factor,
                "base_angular_step": ORBIT_CFG.base_angular_step,
                "tick_rate": ORBIT_CFG.tick_rate,
                "camera_tick_rate": CAMERA_CFG.tick_rate,
                "smoothing": CAMERA_CFG.smoothing,
                "min_zoom": CAMERA_CFG.min_zoom,
                "max_zoom": CAMERA_CFG.max_zoom,
            }
        )

    sim = Simulation(seed=args.seed, asteroid_count=args.asteroids, logger=logger)
    sim.set_speed_multiplier(_clamp_speed(args.speed))
    if args.paused:
        sim.toggle_play_pause()

    def slower() -> None:
        sim.set_speed_multiplier(_clamp_speed(sim.speed_multiplier - ORBIT_CFG.speed_multiplier_step))

    def faster() -> None:
        sim.set_speed_multiplier(_clamp_speed(sim.speed_multiplier + ORBIT_CFG.speed_multiplier_step))

    def free_camera() -> bool:
        return not sim.interaction.focused

    style = ButtonVisualStyle(
        base_color=RENDER_CFG.button_color,
        hover_color=RENDER_CFG.button_hover_color,
        text_color=RENDER_CFG.button_text_color,
        disabled_text_color=RENDER_CFG.button_disabled_text_color,
        radius=RENDER_CFG.button_radius,
        border_color=RENDER_CFG.button_border_color,
        border_width=1,
    )
    bar = ButtonBar(
        (12, RENDER_CFG.height - RENDER_CFG.button_height - 12),
        (RENDER_CFG.button_width, RENDER_CFG.button_height),
        RENDER_CFG.button_gap,
        style=style,
    )
    bar.add("Pause", sim.toggle_play_pause, text_getter=lambda: "Pause" if sim.running else "Play")
    bar.add("Reset", sim.full_reset)
    bar.add("Slower", slower)
    bar.add("Faster", faster)
    bar.add("Zoom +", sim.zoom_in, enabled_getter=free_camera)
    bar.add("Zoom -", sim.zoom_out, enabled_getter=free_camera)
    bar.add("1:1", sim.reset_zoom)

    def render_info_panel() -> None:
        selected = sim.selected_body_id
        if selected is None:
            return
        body = sim.system.find(selected)
        if body is None:
            return
        parent_name = None
        parent_id = getattr(body, "parent_id", None)
        if parent_id is not None:
            parent = sim.system.find(parent_id)
            parent_name = parent.name if parent is not None else None
        panel = build_info_panel(
            small_font,
            body,
            max_width=260,
            title_color=RENDER_CFG.info_title_color,
            text_color=RENDER_CFG.hud_text_color,
            background_color=RENDER_CFG.hud_panel_color,
            parent_name=parent_name,
        )
        screen.blit(panel, (RENDER_CFG.width - panel.get_width() - 12, 12))

    def render_hud() -> None:
        camera = sim.camera
        state = "running" if sim.running else "paused"
        zoom_line = f"Zoom {camera.zoom:.2f}x"
        if not camera.settled:
            zoom_line += f" -> {camera.target_zoom:.2f}x"
        lines = [
            (f"Speed x{sim.speed_multiplier:.1f} ({state})", RENDER_CFG.hud_text_color),
            (zoom_line, RENDER_CFG.hud_text_color),
            (f"FPS {clock.get_fps():.0f}", RENDER_CFG.hud_text_color),
        ]
        panel = build_text_panel(font, lines, background_color=RENDER_CFG.hud_panel_color, padding=(10, 8))
        screen.blit(panel, (12, 12))

    frame_timer = FrameTimer(max_delta=0.25)
    running = True
    try:
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        sim.toggle_play_pause()
                    elif event.key == pygame.K_r:
                        sim.full_reset()
                    elif event.key in (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS):
                        sim.zoom_in()
                    elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                        sim.zoom_out()
                    elif event.key in (pygame.K_0, pygame.K_KP0):
                        sim.reset_zoom()
                    elif event.key == pygame.K_LEFTBRACKET:
                        slower()
                    elif event.key == pygame.K_RIGHTBRACKET:
                        faster()
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    if bar.handle_event(event):
                        continue
                    sim.pointer_down(
                        event.pos,
                        viewport,
                        padding_pixels=RENDER_CFG.hit_padding_pixels,
                    )
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                    sim.pointer_up()
                elif event.type == pygame.MOUSEMOTION:
                    sim.pointer_move(event.pos)
                elif event.type == pygame.MOUSEWHEEL:
                    mx, my = pygame.mouse.get_pos()
                    if not bar.contains((mx, my)):
                        # pygame reports wheel-up as positive y
                        sim.wheel(-event.y, mx, my, viewport)
                elif event.type == pygame.WINDOWLEAVE:
                    sim.pointer_up()

            frame = sim.advance(frame_timer.tick())

            screen.fill(RENDER_CFG.background_color)
            draw_starfield(
                screen,
                starfield,
                sim.camera.center,
                sim.camera.zoom,
                render_cfg=RENDER_CFG,
            )
            draw_scene(
                screen,
                orbit_layer,
                sim.system,
                frame.snapshot,
                sim.camera,
                frame.selected_body_id,
                orbit_cfg=ORBIT_CFG,
                render_cfg=RENDER_CFG,
                assets=assets,
                label_font=small_font,
                viewport=viewport,
            )
            render_hud()
            render_info_panel()
            bar.draw(screen, font, pygame.mouse.get_pos())

            pygame.display.flip()
            clock.tick(max(0, args.fps))
    finally:
        if logger is not None:
            logger.close()
        pygame.quit()


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.asteroids < 0:
        parser.error("--asteroids must not be negative")
    if args.speed <= 0:
        parser.error("--speed must be positive")
    if args.fps < 0:
        parser.error("--fps must not be negative")
    run(args)


if __name__ == "__main__":
    main(sys.argv[1:])
