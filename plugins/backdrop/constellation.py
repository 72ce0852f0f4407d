"""
Constellation - force-directed drifting stars

Stars repel linearly when closer than the repel distance (keeps them
from clumping), attract very weakly out to the attract distance, and
shy away from the pointer. Velocities are damped every tick so the
system settles into a slow drift instead of accelerating. Positions
wrap toroidally at the surface edges.

Pairs closer than the connection distance are joined by a line whose
opacity falls off linearly with distance.
"""

import math
import numpy as np

from .mode_base import Mode
from .palette import shade


class Constellation(Mode):

    mode_name = "constellation"
    mode_label = "Constellation"

    def setup(self):
        p = self.params
        n = max(1, min(p["max_stars"], (self.width * self.height) // p["area_per_star"]))
        rng = self.rng
        self.x = rng.uniform(0.0, self.width, n)
        self.y = rng.uniform(0.0, self.height, n)
        self.vx = np.zeros(n)
        self.vy = np.zeros(n)
        self.radius = rng.uniform(1.0, 3.0, n)
        self.twinkle = rng.uniform(0.0, 2 * math.pi, n)
        self.twinkle_speed = rng.uniform(0.015, 0.03, n)
        # Each star has its own very gentle drift pattern
        self.drift_phase = rng.uniform(0.0, 2 * math.pi, n)
        self.drift_speed = rng.uniform(0.0005, 0.001, n)

    def _pair_forces(self):
        """Net pairwise acceleration on every star, shape (2, n)."""
        p = self.params
        repel_d = p["repel_distance"]
        # dx[i, j] points from star i to star j
        dx = self.x[np.newaxis, :] - self.x[:, np.newaxis]
        dy = self.y[np.newaxis, :] - self.y[:, np.newaxis]
        dist_sq = dx * dx + dy * dy
        dist = np.sqrt(dist_sq)

        repel_mask = (dist < repel_d) & (dist > 0)
        attract_mask = ~repel_mask & (dist < p["attract_distance"])

        ux = np.divide(dx, dist, out=np.zeros_like(dx), where=dist > 0)
        uy = np.divide(dy, dist, out=np.zeros_like(dy), where=dist > 0)
        repel = np.where(repel_mask, 0.00015 * (repel_d - dist) / repel_d, 0.0)
        attract = np.where(attract_mask, 0.000002 / (dist_sq / 10000.0 + 1.0), 0.0)

        ax = (dx * attract - ux * repel).sum(axis=1)
        ay = (dy * attract - uy * repel).sum(axis=1)
        return ax, ay

    def update(self, ctx):
        p = self.params

        # Tiny random drift
        self.drift_phase += self.drift_speed
        self.vx += np.sin(self.drift_phase) * 0.003
        self.vy += np.cos(self.drift_phase * 0.7) * 0.003

        ax, ay = self._pair_forces()
        self.vx += ax
        self.vy += ay

        self.x += self.vx
        self.y += self.vy
        self.twinkle += self.twinkle_speed

        # Pointer repulsion - gentle
        radius = p["pointer_radius"]
        dx = self.x - ctx.pointer_x
        dy = self.y - ctx.pointer_y
        dist = np.hypot(dx, dy)
        near = (dist < radius) & (dist > 0)
        if near.any():
            force = (radius - dist[near]) / radius * 0.1
            self.vx[near] += dx[near] / dist[near] * force * 0.01
            self.vy[near] += dy[near] / dist[near] * force * 0.01

        self.vx *= p["damping"]
        self.vy *= p["damping"]

        # Wrap around
        self.x[self.x < 0] = self.width
        self.x[self.x > self.width] = 0.0
        self.y[self.y < 0] = self.height
        self.y[self.y > self.height] = 0.0

    def connections(self):
        """(i, j, dist) arrays for every pair within the connection distance."""
        limit = self.params["connection_distance"]
        i, j = np.triu_indices(len(self.x), k=1)
        dist = np.hypot(self.x[i] - self.x[j], self.y[i] - self.y[j])
        close = dist < limit
        return i[close], j[close], dist[close]

    def speeds(self):
        return np.hypot(self.vx, self.vy)

    def render(self, target, ctx):
        target.clear()
        colors = ctx.palette.current_colors()
        limit = self.params["connection_distance"]
        i_idx, j_idx, dist = self.connections()

        with target.strokes() as layer:
            for i, j, d in zip(i_idx, j_idx, dist):
                alpha = (1.0 - d / limit) * 0.65
                layer.line(self.x[i], self.y[i], self.x[j], self.y[j],
                           shade(colors.primary, alpha), 1.1)

            star_alpha = 0.8 + np.sin(self.twinkle) * 0.2
            for k in range(len(self.x)):
                layer.disc(self.x[k], self.y[k], self.radius[k] * 1.3,
                           shade(colors.accent, star_alpha[k]))

    @property
    def stats(self):
        stats = super().stats
        stats["stars"] = len(self.x)
        return stats
