"""
Abstract Base Class for Background Modes

All modes (flow field, constellation, Lorenz, etc.) implement this
interface so the scheduler can drive any of them interchangeably.

A mode owns everything it draws: its entities and its accumulation
buffer are created in init() and thrown away wholesale on the next
init() (mode switch or resize). Shared state arrives per tick through
the FrameContext handed to step().
"""

from abc import ABC, abstractmethod
import numpy as np

from .presets import get_preset
from .surface import Surface


class Mode(ABC):
    """Base class for background modes."""

    mode_name = ""   # e.g. "flow", "voronoi"
    mode_label = ""  # e.g. "Curl Flow", "Delaunay Mesh"

    def __init__(self, rng=None, **params):
        """
        Args:
            rng: numpy Generator (or seed) for all of this mode's randomness
            **params: Overrides for the preset's tuning values
        """
        self.rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
        self.params = dict(get_preset(self.mode_name)["params"])
        self.set_params(**params)
        self.width = 0
        self.height = 0
        self.buffer = None
        self.ticks = 0

    def init(self, width, height):
        """(Re)build all entities for a surface of the given size."""
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self.buffer = Surface(self.width, self.height)
        self.ticks = 0
        self.setup()

    def step(self, ctx):
        """Advance one tick and paint. Returns the mode's buffer."""
        self.update(ctx)
        self.render(self.buffer, ctx)
        self.ticks += 1
        return self.buffer

    @abstractmethod
    def setup(self):
        """Create entities sized to self.width x self.height."""

    @abstractmethod
    def update(self, ctx):
        """Advance the simulation by one tick."""

    @abstractmethod
    def render(self, target, ctx):
        """Paint the current state into `target` (a Surface)."""

    def set_params(self, **params):
        """Update tuning values. Unknown keys are ignored."""
        for key, value in params.items():
            if key in self.params:
                self.params[key] = value

    def get_params(self):
        return dict(self.params)

    @property
    def description(self):
        """Fixed prose text shown alongside the animation."""
        return get_preset(self.mode_name)["description"]

    @property
    def stats(self):
        """Return current mode statistics."""
        return {
            "mode": self.mode_name,
            "label": self.mode_label,
            "ticks": self.ticks,
            "size": (self.width, self.height),
        }
