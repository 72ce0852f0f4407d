"""
Lissajous Curve Ensemble

Three to five curves x = sin(a t + phase), y = sin(b t), each with a
frequency ratio a:b drawn from a curated list of low-integer ratios
that close into stable loops. The phase drifts slowly so each figure
morphs over time, and the pointer's horizontal position nudges it.
"""

import math
from collections import deque

from .mode_base import Mode
from .palette import shade


# Frequency ratios that produce closed, well-balanced figures
FREQ_RATIOS = [
    (3, 4), (4, 5), (5, 6), (3, 5), (4, 7), (5, 8), (2, 3), (3, 7), (5, 7), (6, 7),
    (7, 9), (5, 9), (7, 8), (8, 9), (2, 5), (3, 8), (4, 9), (7, 11), (9, 11),
]


class LissajousCurve:

    def __init__(self, freq_a, freq_b, phase, amplitude, variation, use_accent,
                 speed, phase_drift, t=0.0, offset=(0.0, 0.0), capacity=1000):
        self.freq_a = freq_a
        self.freq_b = freq_b
        self.phase = phase
        self.phase_drift = phase_drift
        self.amplitude = amplitude
        self.variation = variation
        self.use_accent = use_accent
        self.speed = speed
        self.t = t
        self.offset_x, self.offset_y = offset
        self.points = deque(maxlen=capacity)

    def sample(self, width, height, pointer_bias=0.0):
        """Screen position at the current t."""
        cx = width / 2 + self.offset_x
        cy = height / 2 + self.offset_y
        scale = min(width, height) * 0.42 * self.amplitude
        x = cx + math.sin(self.freq_a * self.t + self.phase + pointer_bias) * scale
        y = cy + math.sin(self.freq_b * self.t) * scale
        return x, y

    def advance(self, width, height, pointer_bias=0.0):
        self.t += self.speed
        self.phase += self.phase_drift
        self.points.append(self.sample(width, height, pointer_bias))


class LissajousEnsemble(Mode):

    mode_name = "lissajous"
    mode_label = "Lissajous Curves"

    def setup(self):
        p = self.params
        rng = self.rng
        order = rng.permutation(len(FREQ_RATIOS))
        count = int(rng.integers(p["min_curves"], p["max_curves"] + 1))

        self.curves = []
        for k in order[:count]:
            freq_a, freq_b = FREQ_RATIOS[k]
            self.curves.append(LissajousCurve(
                freq_a, freq_b,
                phase=rng.uniform(0.0, 2 * math.pi),
                amplitude=rng.uniform(0.5, 0.95),
                variation=rng.uniform(-15.0, 15.0),
                use_accent=bool(rng.random() > 0.5),
                speed=rng.uniform(0.004, 0.008),
                phase_drift=rng.uniform(-0.00015, 0.00015),
                t=rng.uniform(0.0, 2 * math.pi),
                offset=(rng.uniform(-0.05, 0.05) * self.width,
                        rng.uniform(-0.05, 0.05) * self.height),
                capacity=p["trail_length"],
            ))

    def update(self, ctx):
        bias = (ctx.pointer_x / self.width - 0.5) * self.params["pointer_bias"]
        for curve in self.curves:
            curve.advance(self.width, self.height, bias)

    def render(self, target, ctx):
        target.fade(self.params["fade"])
        colors = ctx.palette.current_colors()
        max_alpha = self.params["max_alpha"]

        with target.strokes() as layer:
            for curve in self.curves:
                base = colors.accent if curve.use_accent else colors.primary
                points = list(curve.points)
                n = len(points)
                for i in range(1, n):
                    layer.line(*points[i - 1], *points[i],
                               shade(base, i / n * max_alpha, curve.variation), 0.8)
