"""
Delaunay Mesh - wandering points, re-triangulated every tick

Points wander as gently damped oscillators, get nudged away from the
pointer and bounce inelastically off a padded border. The whole mesh is
rebuilt from scratch each tick with Bowyer-Watson (see delaunay.py);
the Voronoi diagram is its dual, hence the mode name.
"""

import math
import numpy as np

from .delaunay import triangulate
from .mode_base import Mode
from .palette import shade


class DelaunayMesh(Mode):

    mode_name = "voronoi"
    mode_label = "Delaunay Mesh"

    def setup(self):
        p = self.params
        n = max(3, min(p["max_points"], (self.width * self.height) // p["area_per_point"]))
        rng = self.rng
        self.x = rng.uniform(0.0, self.width, n)
        self.y = rng.uniform(0.0, self.height, n)
        self.vx = rng.uniform(-0.125, 0.125, n)
        self.vy = rng.uniform(-0.125, 0.125, n)
        self.phase = rng.uniform(0.0, 2 * math.pi, n)
        self.phase_speed = rng.uniform(0.005, 0.011, n)
        self.triangles = []

    def _bounce(self, pos, vel, low, high):
        bounce = self.params["bounce"]
        under = pos < low
        over = pos > high
        pos[under] = low
        pos[over] = high
        vel[under | over] *= bounce

    def update(self, ctx):
        p = self.params
        self.phase += self.phase_speed

        # Very gentle wandering, strongly damped
        self.vx += np.sin(self.phase) * 0.003
        self.vy += np.cos(self.phase * 0.7) * 0.003
        self.vx *= p["damping"]
        self.vy *= p["damping"]
        self.x += self.vx
        self.y += self.vy

        # Pointer pushes points directly, not through velocity
        radius = p["pointer_radius"]
        dx = ctx.pointer_x - self.x
        dy = ctx.pointer_y - self.y
        dist = np.hypot(dx, dy)
        near = (dist < radius) & (dist > 0)
        if near.any():
            force = (radius - dist[near]) / radius
            self.x[near] -= dx[near] / dist[near] * force * 0.5
            self.y[near] -= dy[near] / dist[near] * force * 0.5

        pad = p["padding"]
        self._bounce(self.x, self.vx, pad, max(pad, self.width - pad))
        self._bounce(self.y, self.vy, pad, max(pad, self.height - pad))

        self.triangles = triangulate(np.column_stack((self.x, self.y)))

    def render(self, target, ctx):
        target.clear()
        colors = ctx.palette.current_colors()
        edge_color = shade(colors.primary, 0.55)
        point_color = shade(colors.accent, 0.85)
        xs, ys = self.x, self.y

        with target.strokes() as layer:
            for a, b, c in self.triangles:
                layer.triangle((xs[a], ys[a]), (xs[b], ys[b]), (xs[c], ys[c]), edge_color, 0.7)
            for k in range(len(xs)):
                layer.disc(xs[k], ys[k], 2.5, point_color)

    @property
    def stats(self):
        stats = super().stats
        stats["points"] = len(self.x)
        stats["triangles"] = len(self.triangles)
        return stats
