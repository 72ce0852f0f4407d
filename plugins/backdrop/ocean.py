"""
Ocean Layers - stacked wave strokes with perspective

Seven depth layers each draw a stack of horizontal strokes. Every
stroke samples a composite waveform along x:

  - primary sinusoid plus 2.2x and 0.5x overtones
  - slow horizontal drift and a per-stroke "rise" oscillation
  - Gerstner horizontal displacement cos(phase) * steepness, which
    bunches samples at the crests

everything scaled by a perspective factor of the stroke's screen height
(top = far and calm, bottom = near and pronounced).

Layer constants come from hashing the layer index with the golden
ratio, which spreads them evenly without visible repetition.
"""

import math
import numpy as np

from .mode_base import Mode


GOLDEN_RATIO = 1.618033988749


def perspective_ease(t):
    """Piecewise-linear depth easing of a screen fraction t in [0, 1].

    The top 30% rises slowly (0 -> 0.15), the rest ramps steeply to ~1.
    """
    t = min(1.0, max(0.0, t))
    if t < 0.3:
        return t * 0.5
    return 0.15 + (t - 0.3) * 1.21


class OceanLayer:

    def __init__(self, index, total, rng):
        depth = index / (total - 1) if total > 1 else 0.0
        h = (index * GOLDEN_RATIO) % 1

        self.index = index
        self.depth = depth
        self.frequency = 0.0006 + h * 0.001
        self.phase_offset = h * math.pi * 2
        self.speed = 0.035 + (1 - depth) * 0.035
        self.amplitude = 100 + (1 - depth) * 140
        self.y_offset = (index * GOLDEN_RATIO * 500) % 1000
        self.alpha = 0.035 + (1 - depth) * 0.03

        self.rise_phase = ((index * GOLDEN_RATIO * 3) % 1) * math.pi * 2
        self.rise_speed = 0.01 + ((index * GOLDEN_RATIO * 2) % 1) * 0.01
        self.rise_amount = 40 + rng.random() * 30

        # Gerstner steepness for horizontal bunching at crests
        self.steepness = 0.35 + rng.random() * 0.2


class OceanLayers(Mode):

    mode_name = "ocean"
    mode_label = "Ocean Currents"

    def setup(self):
        p = self.params
        self.layers = [OceanLayer(i, p["layers"], self.rng) for i in range(p["layers"])]
        self.ocean_time = float(self.rng.uniform(0.0, 1000.0))
        self.xs = np.arange(-10, self.width + 21, p["sample_step"], dtype=np.float64)

    def update(self, ctx):
        self.ocean_time += self.params["time_step"]

    def stroke(self, layer, i, num_strokes):
        """Sample stroke i of a layer. Returns (xs, ys, screen_t)."""
        T = self.ocean_time
        height = self.height
        base_y = (i / num_strokes) * height + layer.y_offset
        y = (base_y % (height + 100)) - 50

        # screen_t: 0 at top (far), 1 at bottom (near)
        screen_t = min(1.0, max(0.0, y / height))
        eased = perspective_ease(screen_t)
        pers_amp = 0.12 + eased * 0.88
        pers_speed = 0.6 + eased * 0.4

        rise = math.sin(T * layer.rise_speed + layer.rise_phase + i * 0.12) * layer.rise_amount * pers_amp

        x = self.xs
        spatial = 0.75 + 0.25 * np.sin(x * 0.0006 + T * 0.005) * math.sin((y + i * 40) * 0.0006 + T * 0.003)
        amp = layer.amplitude * spatial * pers_amp
        phase = x * layer.frequency + T * layer.speed * pers_speed + layer.phase_offset

        h_disp = np.cos(phase) * amp * layer.steepness * (0.15 + screen_t * 0.25)

        wave1 = np.sin(phase) * amp
        wave2 = np.sin(phase * 2.2 + layer.phase_offset * 0.8) * amp * 0.28
        wave3 = np.sin(phase * 0.5) * amp * 0.4
        drift = np.sin(x * 0.0004 + T * 0.012 + i * 0.3) * 70 * pers_amp

        return x + h_disp, y + wave1 + wave2 + wave3 + drift + rise, screen_t

    def render(self, target, ctx):
        p = self.params
        target.fade(p["fade"])
        colors = ctx.palette.current_colors()
        primary = colors.primary
        num_strokes = max(1, self.height // p["stroke_spacing"])

        with target.strokes() as layer_draw:
            for layer in self.layers:
                for i in range(num_strokes):
                    xs, ys, screen_t = self.stroke(layer, i, num_strokes)
                    pers_alpha = 0.3 + perspective_ease(screen_t) * 0.7

                    # Hazier at top (far), clearer at bottom (near)
                    pers_color = 0.4 + screen_t * 0.6
                    color = (primary[0] * pers_color,
                             primary[1] * pers_color,
                             primary[2] * (pers_color * 0.95 + 0.05),
                             layer.alpha * pers_alpha)
                    layer_draw.polyline(list(zip(xs.tolist(), ys.tolist())), color,
                                        0.4 + screen_t * 1.3)

        # Subtle caustics
        T = self.ocean_time
        for i in range(p["caustics"]):
            cx = (math.sin(T * 0.05 + i * 2.3) * 0.5 + 0.5) * self.width
            cy = (math.cos(T * 0.035 + i * 1.8) * 0.5 + 0.5) * self.height
            radius = 70 + math.sin(T * 0.08 + i) * 30
            target.radial_glow(cx, cy, radius, colors.accent, p["caustic_alpha"])
