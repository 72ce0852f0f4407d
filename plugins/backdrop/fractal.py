"""
Julia Set - escape-time fractal with a drifting parameter

For every pixel of a half-resolution raster, iterate z <- z^2 + c from
the pixel's position until |z|^2 >= 4 or the iteration cap is reached.
The constant c wanders around one of a handful of well-known values via
two sinusoids per axis, bounded so the set stays connected and busy.

Escape-time iteration is vectorised over the whole raster with a mask
of still-bounded pixels, so no per-pixel Python loops.
"""

import math
import numpy as np

from .mode_base import Mode
from .surface import BACKGROUND


# c values with rich, connected Julia sets
JULIA_PRESETS = [
    (-0.7, 0.27015),
    (-0.8, 0.156),
    (-0.4, 0.6),
    (0.285, 0.01),
    (-0.835, -0.2321),
    (-0.70176, -0.3842),
    (0.355, 0.355),
    (-0.54, 0.54),
]


def escape_time(z_re, z_im, c_re, c_im, max_iter=60):
    """Iteration counts for z <- z^2 + c, in [0, max_iter].

    A pixel's count stops at the first iteration where |z|^2 >= 4 is
    observed before stepping; pixels still bounded after max_iter steps
    report max_iter (inside the set). Scalars in give an int out.
    """
    z_re, z_im = np.broadcast_arrays(np.asarray(z_re, dtype=np.float64),
                                     np.asarray(z_im, dtype=np.float64))
    shape = z_re.shape
    zr = z_re.reshape(-1).copy()
    zi = z_im.reshape(-1).copy()
    counts = np.zeros(zr.shape, dtype=np.int32)

    alive = zr * zr + zi * zi < 4.0
    for _ in range(max_iter):
        if not alive.any():
            break
        ar = zr[alive]
        ai = zi[alive]
        zr[alive] = ar * ar - ai * ai + c_re
        zi[alive] = 2.0 * ar * ai + c_im
        counts[alive] += 1
        alive &= zr * zr + zi * zi < 4.0

    if shape == ():
        return int(counts[0])
    return counts.reshape(shape)


def drifted_c(base_re, base_im, t, drift=0.045):
    """c(t) = base + two sinusoids per axis; stays within ~1.25 * drift."""
    c_re = base_re + math.sin(t * 0.5) * drift + math.sin(t * 0.19) * drift * 0.25
    c_im = base_im + math.cos(t * 0.4) * drift + math.cos(t * 0.14) * drift * 0.25
    return c_re, c_im


def colorize(counts, max_iter, primary, accent, background=BACKGROUND):
    """Map iteration counts to a uint8 RGB raster.

    Inside pixels get the background; escaped pixels blend from the
    background toward primary or accent (by count mod 5) with a power-law
    intensity of the normalised escape time.
    """
    bg = np.array(background, dtype=np.float64)
    t = counts / float(max_iter)
    intensity = np.power(t, 0.6) * 0.35
    use_accent = (counts % 5) < 2
    col = np.where(use_accent[..., np.newaxis],
                   np.asarray(accent, dtype=np.float64),
                   np.asarray(primary, dtype=np.float64))
    rgb = np.floor(bg + (col - bg) * intensity[..., np.newaxis])
    rgb[counts >= max_iter] = bg
    return np.clip(rgb, 0, 255).astype(np.uint8)


class JuliaFractal(Mode):

    mode_name = "fractal"
    mode_label = "Julia Set"

    def setup(self):
        p = self.params
        rng = self.rng
        base_re, base_im = JULIA_PRESETS[int(rng.integers(len(JULIA_PRESETS)))]
        jitter = p["jitter"]
        self.c_base = (base_re + rng.uniform(-0.5, 0.5) * jitter,
                       base_im + rng.uniform(-0.5, 0.5) * jitter)
        self.c = self.c_base
        self.fractal_time = float(rng.uniform(0.0, 1000.0))

        self.raster_w = max(1, self.width // p["downsample"])
        self.raster_h = max(1, self.height // p["downsample"])
        self._px = np.arange(self.raster_w, dtype=np.float64)[np.newaxis, :]
        self._py = np.arange(self.raster_h, dtype=np.float64)[:, np.newaxis]
        self.counts = np.zeros((self.raster_h, self.raster_w), dtype=np.int32)

    def plane_coords(self, pan_x, pan_y):
        """Complex-plane coordinates of every raster pixel."""
        w, h = self.raster_w, self.raster_h
        zoom = self.params["zoom"]
        z_re = (self._px - w / 2) / (w / 4) / zoom + pan_x
        z_im = (self._py - h / 2) / (h / 4) / zoom + pan_y
        return np.broadcast_arrays(z_re, z_im)

    def update(self, ctx):
        p = self.params
        self.fractal_time += p["time_step"]
        self.c = drifted_c(*self.c_base, self.fractal_time, p["drift"])

        pan_x = (ctx.pointer_x / self.width - 0.5) * p["pan"]
        pan_y = (ctx.pointer_y / self.height - 0.5) * p["pan"]
        z_re, z_im = self.plane_coords(pan_x, pan_y)
        self.counts = escape_time(z_re, z_im, *self.c, max_iter=p["max_iter"])

    def render(self, target, ctx):
        colors = ctx.palette.current_colors()
        rgb = colorize(self.counts, self.params["max_iter"], colors.primary, colors.accent)
        target.draw_raster(rgb, smooth=True)
