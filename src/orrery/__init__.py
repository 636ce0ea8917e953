"""Interactive solar system orrery with a smoothed, focus-following camera."""

__version__ = "1.0.0"
