"""Terminal color palette and curses color-pair setup."""

from __future__ import annotations

import curses
from typing import Tuple


class WormColors:
    """Palette used when the terminal can redefine colors."""

    CORRECT = "#00FFFF"
    PINK_WORM = "#FF1493"
    DEFAULT_WORM = "#F54927"


class Pair:
    """curses color-pair numbers."""

    CORRECT = 1
    INCORRECT = 2
    PENDING = 3
    PINK_WORM = 4
    DEFAULT_WORM = 5


# Color slots above the 8 standard colors, redefined when supported.
_CUSTOM_SLOTS = {
    Pair.CORRECT: (9, WormColors.CORRECT),
    Pair.PINK_WORM: (10, WormColors.PINK_WORM),
    Pair.DEFAULT_WORM: (11, WormColors.DEFAULT_WORM),
}


def hex_to_curses(color: str) -> Tuple[int, int, int]:
    """Convert #RRGGBB to the 0-1000 channel scale curses expects."""
    color = color.strip()
    if not (color.startswith("#") and len(color) == 7):
        raise ValueError(f"Expected #RRGGBB, got {color!r}")
    r, g, b = (int(color[i:i + 2], 16) for i in (1, 3, 5))
    return (r * 1000 // 255, g * 1000 // 255, b * 1000 // 255)


def init_colors() -> bool:
    """Set up color pairs on a transparent background. False if no color."""
    if not curses.has_colors():
        return False
    curses.start_color()
    curses.use_default_colors()

    if curses.can_change_color() and curses.COLORS > 11:
        for pair, (slot, color) in _CUSTOM_SLOTS.items():
            curses.init_color(slot, *hex_to_curses(color))
            curses.init_pair(pair, slot, -1)
    else:
        curses.init_pair(Pair.CORRECT, curses.COLOR_CYAN, -1)
        curses.init_pair(Pair.PINK_WORM, curses.COLOR_MAGENTA, -1)
        curses.init_pair(Pair.DEFAULT_WORM, curses.COLOR_RED, -1)

    curses.init_pair(Pair.INCORRECT, curses.COLOR_RED, -1)
    curses.init_pair(Pair.PENDING, curses.COLOR_WHITE, -1)
    return True


def worm_pair(cosmetic: str) -> int:
    return Pair.PINK_WORM if cosmetic == "pink" else Pair.DEFAULT_WORM
