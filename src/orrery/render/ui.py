from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Sequence

import pygame

from orrery.core.model import AsteroidBelt, Body, BodyKind
from .assets import Color, get_text_surface

TextLine = tuple[str, tuple[int, int, int]]


@dataclass(frozen=True)
class ButtonVisualStyle:
    base_color: Color
    hover_color: Color
    text_color: tuple[int, int, int]
    disabled_text_color: tuple[int, int, int]
    radius: int
    border_color: Color | None = None
    border_width: int = 0


class Button:
    """Rounded control button; the label and the enabled flag may be live."""

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        callback: Callable[[], object],
        text_getter: Callable[[], str] | None = None,
        enabled_getter: Callable[[], bool] | None = None,
        *,
        style: ButtonVisualStyle,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self._text = text
        self._callback = callback
        self._text_getter = text_getter
        self._enabled_getter = enabled_getter
        self._style = style
        self._backgrounds: dict[bool, pygame.Surface] = {}

    @property
    def text(self) -> str:
        return self._text_getter() if self._text_getter is not None else self._text

    @property
    def enabled(self) -> bool:
        return self._enabled_getter() if self._enabled_getter is not None else True

    def _background(self, hovered: bool) -> pygame.Surface:
        cached = self._backgrounds.get(hovered)
        if cached is not None:
            return cached
        style = self._style
        shape = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bounds = shape.get_rect()
        fill = style.hover_color if hovered else style.base_color
        pygame.draw.rect(shape, fill, bounds, border_radius=style.radius)
        if style.border_color is not None and style.border_width > 0:
            pygame.draw.rect(
                shape, style.border_color, bounds, style.border_width, border_radius=style.radius
            )
        self._backgrounds[hovered] = shape
        return shape

    def draw(self, surface: pygame.Surface, font: pygame.font.Font, mouse_pos: tuple[int, int]) -> None:
        enabled = self.enabled
        hovered = enabled and self.rect.collidepoint(mouse_pos)
        surface.blit(self._background(bool(hovered)), self.rect.topleft)
        color = self._style.text_color if enabled else self._style.disabled_text_color
        label = get_text_surface(font, self.text, color)
        surface.blit(label, label.get_rect(center=self.rect.center))

    def click(self, pos: tuple[int, int]) -> bool:
        """Fire the callback for a click at ``pos``; ``True`` if the click landed here.

        Clicks on a disabled button are swallowed so they never reach the scene.
        """

        if not self.rect.collidepoint(pos):
            return False
        if self.enabled:
            self._callback()
        return True


class ButtonBar:
    """A row of equally sized buttons anchored to the bottom-left corner."""

    def __init__(
        self,
        origin: tuple[int, int],
        button_size: tuple[int, int],
        gap: int,
        *,
        style: ButtonVisualStyle,
    ) -> None:
        self._origin = origin
        self._size = button_size
        self._gap = gap
        self._style = style
        self.buttons: list[Button] = []

    def add(
        self,
        text: str,
        callback: Callable[[], object],
        *,
        text_getter: Callable[[], str] | None = None,
        enabled_getter: Callable[[], bool] | None = None,
    ) -> Button:
        width, height = self._size
        x = self._origin[0] + len(self.buttons) * (width + self._gap)
        button = Button(
            (x, self._origin[1], width, height),
            text,
            callback,
            text_getter,
            enabled_getter,
            style=self._style,
        )
        self.buttons.append(button)
        return button

    def contains(self, pos: tuple[int, int]) -> bool:
        return any(button.rect.collidepoint(pos) for button in self.buttons)

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type != pygame.MOUSEBUTTONDOWN or event.button != 1:
            return False
        return any(button.click(event.pos) for button in self.buttons)

    def draw(self, surface: pygame.Surface, font: pygame.font.Font, mouse_pos: tuple[int, int]) -> None:
        for button in self.buttons:
            button.draw(surface, font, mouse_pos)


def wrap_text(text: str, font: pygame.font.Font, max_width: int) -> list[str]:
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and font.size(candidate)[0] > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def build_text_panel(
    font: pygame.font.Font,
    lines: Sequence[TextLine],
    *,
    background_color: Color,
    padding: tuple[int, int] = (14, 14),
) -> pygame.Surface:
    if not lines:
        raise ValueError("lines must not be empty")
    pad_x, pad_y = padding
    line_height = font.get_linesize()
    panel = pygame.Surface(
        (
            max(font.size(text)[0] for text, _ in lines) + pad_x * 2,
            line_height * len(lines) + pad_y * 2,
        ),
        pygame.SRCALPHA,
    )
    pygame.draw.rect(panel, background_color, panel.get_rect(), border_radius=12)
    for row, (text, color) in enumerate(lines):
        if text:
            panel.blit(get_text_surface(font, text, color), (pad_x, pad_y + row * line_height))
    return panel


def _format_length(value: float) -> str:
    return f"{value:g} px"


def body_detail_lines(body: Body | AsteroidBelt, parent_name: str | None = None) -> list[str]:
    """Label/value rows for the info panel; angles are read from the live phase."""

    if isinstance(body, AsteroidBelt):
        return [
            f"Inner orbit radius: {_format_length(body.inner_radius)}",
            f"Outer orbit radius: {_format_length(body.outer_radius)}",
            f"Number of asteroids: {len(body)}",
        ]
    orbit = body.orbit
    lines = [f"Visual radius: {_format_length(body.radius)}"]
    if body.kind is BodyKind.COMET:
        lines += [
            f"Orbit semi-major axis: {_format_length(orbit.semi_major_axis)}",
            f"Orbit semi-minor axis: {_format_length(orbit.semi_minor_axis)}",
            f"Orbit angle: {orbit.tilt_degrees:g}°",
        ]
    elif body.kind is BodyKind.MOON:
        around = parent_name or body.parent_id or "parent"
        lines.append(f"Orbit radius (around {around}): {_format_length(orbit.orbit_radius)}")
    else:
        lines.append(f"Orbit radius: {_format_length(orbit.orbit_radius)}")
    lines += [
        f"Relative speed factor: {orbit.angular_speed:.4f}",
        f"Current angle: {math.degrees(orbit.phase_angle):.1f}°",
    ]
    return lines


def build_info_panel(
    font: pygame.font.Font,
    body: Body | AsteroidBelt,
    *,
    max_width: int,
    title_color: tuple[int, int, int],
    text_color: tuple[int, int, int],
    background_color: Color,
    parent_name: str | None = None,
) -> pygame.Surface:
    """Name, word-wrapped description and details of the focused body.

    Rebuilt every frame so the current angle follows the orbit.
    """

    lines: list[TextLine] = [(body.name, title_color), ("", text_color)]
    lines.extend((line, text_color) for line in wrap_text(body.description, font, max_width))
    lines.append(("", text_color))
    lines.extend((line, text_color) for line in body_detail_lines(body, parent_name))
    return build_text_panel(font, lines, background_color=background_color)
