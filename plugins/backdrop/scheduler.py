"""
Scheduler - headless core driving the active background mode

Owns the single active mode, the frame counter, the pointer snapshot,
the palette cycle and the visible surface. The host (pygame viewer,
headless snapshot, or anything else with a frame callback) calls
tick() once per frame and forwards pointer, resize and mode-switch
requests in between. No pygame dependency.

Usage:
    from backdrop.scheduler import Scheduler
    sched = Scheduler(1280, 720, mode="flow", seed=7)
    sched.set_pointer(400, 300)
    frame = sched.render(60)  # (H, W, 3) uint8 after 60 ticks
"""

from collections import namedtuple

import numpy as np

from .constellation import Constellation
from .flow import FlowField
from .fractal import JuliaFractal
from .lissajous import LissajousEnsemble
from .lorenz import LorenzEnsemble
from .ocean import OceanLayers
from .palette import PaletteCycle
from .presets import MODE_ORDER
from .surface import Surface
from .voronoi import DelaunayMesh


# Mode class registry
MODE_CLASSES = {
    "ocean": OceanLayers,
    "fractal": JuliaFractal,
    "flow": FlowField,
    "constellation": Constellation,
    "lorenz": LorenzEnsemble,
    "voronoi": DelaunayMesh,
    "lissajous": LissajousEnsemble,
}


# Read-only per-tick snapshot of everything shared with the active mode
FrameContext = namedtuple(
    "FrameContext", ["frame", "width", "height", "pointer_x", "pointer_y", "palette"]
)


class Scheduler:

    def __init__(self, width=1280, height=720, mode=None, seed=None):
        """
        Args:
            width, height: Rendering surface size in pixels
            mode: Initial mode name (random when None or unknown)
            seed: Seed for every random draw (palette offsets, mode entities)
        """
        self.rng = np.random.default_rng(seed)
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self.surface = Surface(self.width, self.height)
        self.palette = PaletteCycle(rng=self.rng)

        self.frame = 0
        self.pointer_x = self.width / 2
        self.pointer_y = self.height / 2

        self.mode = None
        self.mode_name = None
        self.label = ""

        if mode not in MODE_CLASSES:
            mode = MODE_ORDER[int(self.rng.integers(len(MODE_ORDER)))]
        self.switch_mode(mode)

    def context(self):
        return FrameContext(self.frame, self.width, self.height,
                            self.pointer_x, self.pointer_y, self.palette)

    def switch_mode(self, name):
        """Replace the active mode. Unknown names are ignored.

        Returns True if the switch happened.
        """
        if not isinstance(name, str) or name not in MODE_CLASSES:
            return False
        cls = MODE_CLASSES[name]

        self.palette.reseed()
        self.frame = 0
        self.surface.clear()

        mode = cls(rng=self.rng)
        mode.init(self.width, self.height)
        self.mode = mode
        self.mode_name = name
        self.label = mode.description
        return True

    def cycle_mode(self, offset=1):
        """Switch to the mode `offset` places along MODE_ORDER."""
        idx = MODE_ORDER.index(self.mode_name) if self.mode_name in MODE_ORDER else 0
        return self.switch_mode(MODE_ORDER[(idx + offset) % len(MODE_ORDER)])

    def resize(self, width, height):
        """Resize the surface and rebuild the active mode's entities."""
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self.surface.resize(self.width, self.height)
        if self.mode is not None:
            self.mode.init(self.width, self.height)

    def set_pointer(self, x, y):
        self.pointer_x = float(x)
        self.pointer_y = float(y)

    def tick(self):
        """Run one frame: step the mode, composite, advance counters."""
        buffer = self.mode.step(self.context())
        self.surface.blit(buffer)
        self.frame += 1
        self.palette.advance()
        return self.surface

    def render(self, n=1):
        """Run n ticks and return the visible frame as uint8 RGB."""
        for _ in range(n):
            self.tick()
        return self.surface.to_rgb()

    @property
    def stats(self):
        stats = dict(self.mode.stats)
        stats["frame"] = self.frame
        stats["palette"] = self.palette.palettes[self.palette.position[0]].name
        return stats
