"""
Lorenz Attractor Ensemble

Eight independent trails, each integrating the Lorenz system

    dx/dt = sigma * (y - x)
    dy/dt = x * (rho - z) - y
    dz/dt = x * y - beta * z

with its own sigma, rho, beta and step size drawn from a small seeded
LCG, so one base seed fully determines the ensemble. Each tick takes
one explicit Euler step per trail and projects the state to the screen
through a slow rotation about the z axis.

References:
  Lorenz, "Deterministic Nonperiodic Flow" (1963)
"""

import math
from collections import deque

from .mode_base import Mode
from .palette import shade


def lcg(seed):
    """Yield floats in [0, 1) from s -> (9301 s + 49297) mod 233280."""
    s = seed
    while True:
        s = (s * 9301 + 49297) % 233280
        yield s / 233280


class LorenzTrail:

    def __init__(self, seed, capacity=1200):
        r = lcg(seed).__next__

        self.sigma = 9 + r() * 4        # classic 10
        self.rho = 24 + r() * 10        # classic 28
        self.beta = 2 + r() * 1.5       # classic 8/3
        self.dt = 0.002 + r() * 0.002

        start_angle = r() * math.pi * 2
        start_radius = 0.5 + r() * 2
        self.x = math.cos(start_angle) * start_radius + (r() - 0.5) * 5
        self.y = math.sin(start_angle) * start_radius + (r() - 0.5) * 5
        self.z = 15 + r() * 20

        self.points = deque(maxlen=capacity)
        self.variation = (r() - 0.5) * 25

    def integrate(self):
        """One explicit Euler step. Returns the new (x, y, z)."""
        dx = self.sigma * (self.y - self.x)
        dy = self.x * (self.rho - self.z) - self.y
        dz = self.x * self.y - self.beta * self.z
        self.x += dx * self.dt
        self.y += dy * self.dt
        self.z += dz * self.dt
        return self.x, self.y, self.z

    def project(self, angle, scale, width, height):
        """Rotate about z by `angle` and map to screen coordinates."""
        sx = width / 2 + (self.x * math.cos(angle) - self.y * math.sin(angle)) * scale
        sy = height / 2 + (self.z - 25) * scale * 0.85
        return sx, sy

    def advance(self, angle, scale, width, height):
        self.integrate()
        self.points.append(self.project(angle, scale, width, height))


class LorenzEnsemble(Mode):

    mode_name = "lorenz"
    mode_label = "Lorenz Attractor"

    def setup(self):
        p = self.params
        # New base seed each init for variation
        self.base_seed = float(self.rng.uniform(0.0, 1000.0))
        self.trails = [LorenzTrail(self.base_seed + i * 100, p["trail_length"])
                       for i in range(p["trails"])]

    def update(self, ctx):
        angle = ctx.frame * self.params["rotation_speed"]
        scale = min(self.width, self.height) / 40
        for trail in self.trails:
            trail.advance(angle, scale, self.width, self.height)

    def render(self, target, ctx):
        target.fade(self.params["fade"])
        colors = ctx.palette.current_colors()
        max_alpha = self.params["max_alpha"]

        with target.strokes() as layer:
            for trail in self.trails:
                points = list(trail.points)
                n = len(points)
                for i in range(1, n):
                    # Recency-weighted: newest segment is most opaque
                    base = colors.accent if i % 2 == 0 else colors.primary
                    layer.line(*points[i - 1], *points[i],
                               shade(base, i / n * max_alpha, trail.variation), 0.8)
