from __future__ import annotations

from collections import OrderedDict
from typing import Callable, Generic, Hashable, Iterable, TypeVar

import pygame


Color = tuple[int, int, int] | tuple[int, int, int, int]

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LruCache(Generic[K, V]):
    """Bounded mapping that evicts the least recently used entry."""

    def __init__(self, max_entries: int) -> None:
        self._entries: OrderedDict[K, V] = OrderedDict()
        self._max_entries = max(1, max_entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_create(self, key: K, factory: Callable[[], V]) -> V:
        if key in self._entries:
            self._entries.move_to_end(key)
            return self._entries[key]
        value = factory()
        self._entries[key] = value
        while len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)
        return value


def _render_glow(radius: int, color: tuple[int, int, int], alpha: int) -> pygame.Surface:
    surface = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
    # concentric discs, brightest in the middle
    steps = max(1, min(radius, 12))
    for i in range(steps, 0, -1):
        ring_radius = max(1, int(radius * i / steps))
        ring_alpha = int(alpha * (1.0 - (i - 1) / steps))
        pygame.draw.circle(surface, (*color, ring_alpha), (radius, radius), ring_radius)
    return surface


class AssetLibrary:
    """Glow halos for the star, keyed by pixel radius so zooming reuses them."""

    def __init__(self, max_entries: int = 64) -> None:
        self._glows: LruCache[tuple[int, Color], pygame.Surface] = LruCache(max_entries)

    def get_glow_surface(self, radius: int, color: tuple[int, int, int], alpha: int) -> pygame.Surface:
        if radius <= 0:
            raise ValueError("Glow radius must be positive")
        return self._glows.get_or_create(
            (radius, (*color, alpha)), lambda: _render_glow(radius, color, alpha)
        )


_TEXT_SURFACES: LruCache[tuple[int, str, Color], pygame.Surface] = LruCache(256)


def get_text_surface(font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
    """Rendered ``text``; labels and HUD lines repeat every frame."""

    return _TEXT_SURFACES.get_or_create(
        (id(font), text, color), lambda: font.render(text, True, color)
    )


def load_font(preferred_names: Iterable[str], size: int, *, bold: bool = False) -> pygame.font.Font:
    names = list(preferred_names)
    for name in names:
        try:
            path = pygame.font.match_font(name, bold=bold)
        except Exception:
            path = None
        if path:
            return pygame.font.Font(path, size)
    return pygame.font.SysFont(names[0] if names else None, size, bold=bold)
