"""
Palette Cycle - slow drift through a fixed set of muted palettes

Each palette is a (primary, accent) RGB pair. The cycle advances one
unit per frame and linearly interpolates between neighbouring palettes,
so colours shift imperceptibly from frame to frame but noticeably over
minutes. Switching modes jumps to a random point in the cycle.
"""

import math
from collections import namedtuple

import numpy as np


Palette = namedtuple("Palette", ["name", "primary", "accent"])
Colors = namedtuple("Colors", ["primary", "accent"])


# --- Palette Definitions (subtle blues and greys) ---

PALETTES = (
    Palette("abyss",    (90, 130, 170),  (70, 110, 160)),   # deep ocean blue
    Palette("deep",     (80, 120, 155),  (60, 100, 145)),   # darker blue
    Palette("storm",    (110, 140, 175), (90, 125, 165)),   # steel blue
    Palette("dusk",     (130, 145, 175), (115, 130, 165)),  # blue-grey
    Palette("mist",     (140, 155, 170), (125, 145, 165)),  # fog
    Palette("slate",    (130, 140, 155), (115, 130, 150)),  # cool grey
    Palette("twilight", (120, 135, 165), (100, 120, 155)),  # evening blue
    Palette("ink",      (100, 125, 160), (80, 110, 150)),   # dark ink
)

CYCLE_SPEED = 0.0008
RESEED_RANGE = 1000.0


def _lerp_rgb(a, b, t):
    return tuple(a[i] + (b[i] - a[i]) * t for i in range(3))


def shade(base, alpha, variation=0.0):
    """RGBA from a base colour with a brightness variation.

    Variation is weighted 1.0 / 0.8 / 0.5 across R, G, B; channels are
    clamped to [0, 255] and alpha to [0, 1].
    """
    r = min(255.0, max(0.0, base[0] + variation))
    g = min(255.0, max(0.0, base[1] + variation * 0.8))
    b = min(255.0, max(0.0, base[2] + variation * 0.5))
    return (r, g, b, min(1.0, max(0.0, float(alpha))))


class PaletteCycle:

    def __init__(self, palettes=PALETTES, speed=CYCLE_SPEED, rng=None, time=None):
        """
        Args:
            palettes: Ordered sequence of Palette entries to cycle through
            speed: Palettes advanced per unit of cycle time
            rng: numpy Generator (or seed) used for reseeding
            time: Starting cycle time (random when None)
        """
        self.palettes = tuple(palettes)
        self.speed = speed
        self.rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
        self.time = float(time) if time is not None else 0.0
        if time is None:
            self.reseed()

    def reseed(self):
        """Jump to a random starting offset in the cycle."""
        self.time = float(self.rng.uniform(0.0, RESEED_RANGE))

    def advance(self, steps=1):
        self.time += steps

    @property
    def position(self):
        """(index, next_index, blend) with blend in [0, 1)."""
        count = len(self.palettes)
        t = (self.time * self.speed) % count
        index = int(math.floor(t))
        blend = t - index
        if blend >= 1.0:
            index, blend = index + 1, 0.0
        index %= count
        return index, (index + 1) % count, blend

    @property
    def blend(self):
        return self.position[2]

    def current_colors(self):
        index, next_index, blend = self.position
        current = self.palettes[index]
        upcoming = self.palettes[next_index]
        return Colors(
            _lerp_rgb(current.primary, upcoming.primary, blend),
            _lerp_rgb(current.accent, upcoming.accent, blend),
        )

    def color(self, alpha, accent=False, variation=0.0):
        colors = self.current_colors()
        return shade(colors.accent if accent else colors.primary, alpha, variation)
