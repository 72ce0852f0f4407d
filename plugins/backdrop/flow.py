"""
Curl Noise Flow Field

Particles drift through the curl of a 3-octave fbm noise field, which
is divergence-free: streams swirl around each other without sinks or
sources. The pointer adds a gentle pull within a fixed radius.

Segments are drawn into a persistent trail buffer that is faded by a
near-transparent fill each tick, leaving exponentially decaying trails.
Segment opacity follows sin(pi * life_fraction), so particles fade in
at birth and out at death.
"""

import math
import numpy as np

from .mode_base import Mode
from .noise import NoiseField
from .palette import shade


class FlowParticles:
    """Particle pool stored as parallel numpy arrays."""

    def __init__(self, count, width, height, rng, life_range=(300.0, 700.0),
                 speed_range=(0.4, 1.0), variation=10.0, margin=50.0,
                 interior_chance=0.3):
        self.width = width
        self.height = height
        self.rng = rng
        self.life_range = life_range
        self.speed_range = speed_range
        self.variation_range = variation
        self.margin = margin
        self.interior_chance = interior_chance

        self.x = np.zeros(count)
        self.y = np.zeros(count)
        self.prev_x = np.zeros(count)
        self.prev_y = np.zeros(count)
        self.speed = np.zeros(count)
        self.life = np.zeros(count)
        self.max_life = np.ones(count)
        self.variation = np.zeros(count)

        self.reset(np.ones(count, dtype=bool), initial=True)

    def __len__(self):
        return len(self.x)

    def reset(self, mask, initial=False):
        """Respawn the particles selected by `mask`.

        Initial spawns are uniform over the surface. Later respawns land
        uniformly inside 30% of the time, otherwise exactly on a random
        edge so new streams enter from the borders.
        """
        n = int(np.count_nonzero(mask))
        if n == 0:
            return
        rng = self.rng
        w, h = self.width, self.height
        x = rng.uniform(0.0, w, n)
        y = rng.uniform(0.0, h, n)
        if not initial:
            on_edge = rng.random(n) >= self.interior_chance
            edge = rng.integers(0, 4, n)
            x = np.where(on_edge & (edge == 0), 0.0, x)
            x = np.where(on_edge & (edge == 1), float(w), x)
            y = np.where(on_edge & (edge == 2), 0.0, y)
            y = np.where(on_edge & (edge == 3), float(h), y)

        self.x[mask] = x
        self.y[mask] = y
        self.prev_x[mask] = x
        self.prev_y[mask] = y
        self.speed[mask] = rng.uniform(*self.speed_range, n)
        life = rng.uniform(*self.life_range, n)
        self.life[mask] = life
        self.max_life[mask] = life
        self.variation[mask] = rng.uniform(-self.variation_range, self.variation_range, n)

    def advance(self, vx, vy):
        """Move by (vx, vy) * speed, age by one tick and respawn the dead.

        Returns the mask of particles that were respawned.
        """
        self.prev_x[:] = self.x
        self.prev_y[:] = self.y
        self.x += vx * self.speed
        self.y += vy * self.speed
        self.life -= 1.0

        m = self.margin
        expired = ((self.life <= 0)
                   | (self.x < -m) | (self.x > self.width + m)
                   | (self.y < -m) | (self.y > self.height + m))
        self.reset(expired)
        return expired

    @property
    def life_fraction(self):
        return self.life / self.max_life


class FlowField(Mode):

    mode_name = "flow"
    mode_label = "Curl Flow"

    def setup(self):
        p = self.params
        # New noise seed each init for variation
        self.noise = NoiseField(int(self.rng.integers(1, 10000)))
        count = max(1, min(p["max_particles"], (self.width * self.height) // p["area_per_particle"]))
        self.particles = FlowParticles(count, self.width, self.height, self.rng,
                                       margin=p["margin"])

    def velocity(self, ctx):
        """Curl-noise velocity plus pointer attraction for every particle."""
        p = self.params
        parts = self.particles
        t = ctx.frame * p["time_scale"]
        vx, vy = self.noise.curl(parts.x, parts.y, t)

        dx = ctx.pointer_x - parts.x
        dy = ctx.pointer_y - parts.y
        dist = np.hypot(dx, dy)
        influence = np.clip(1.0 - dist / p["pointer_radius"], 0.0, None) * p["pointer_strength"]
        # Zero distance has no direction; skip the pull there
        pull_x = np.divide(dx * influence, dist, out=np.zeros_like(dx), where=dist > 0)
        pull_y = np.divide(dy * influence, dist, out=np.zeros_like(dy), where=dist > 0)
        return vx + pull_x * 0.5, vy + pull_y * 0.5

    def update(self, ctx):
        vx, vy = self.velocity(ctx)
        self.particles.advance(vx, vy)

    def render(self, target, ctx):
        parts = self.particles
        target.fade(self.params["fade"])

        alpha = np.sin(parts.life_fraction * math.pi) * 0.9
        primary = ctx.palette.current_colors().primary
        width = self.params["line_width"]
        with target.strokes() as layer:
            for i in range(len(parts)):
                layer.line(parts.prev_x[i], parts.prev_y[i], parts.x[i], parts.y[i],
                           shade(primary, alpha[i], parts.variation[i]), width)

    @property
    def stats(self):
        stats = super().stats
        stats["particles"] = len(self.particles)
        return stats
