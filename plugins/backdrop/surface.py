"""
Render Surface - float RGB accumulation buffer

Every mode paints into its own Surface and the scheduler copies that
buffer onto the visible one each tick. Pixels are float32 in [0, 255]
so slow fades (1-2% per tick) decay all the way to the background
instead of stalling on 8-bit rounding.

Strokes are rasterised one at a time with Pillow's ImageDraw onto small
transparent RGBA tiles and alpha-composited onto the float buffer in
draw order, so overlapping strokes accumulate like canvas strokes do.
"""

import math
from contextlib import contextmanager

import numpy as np
from PIL import Image, ImageDraw
from scipy.ndimage import zoom as _scipy_zoom


BACKGROUND = (8, 13, 18)


def clamp_rgba(color):
    """Clamp an (r, g, b[, a]) colour to uint8 channels and byte alpha.

    Alpha is given as a float in [0, 1] and returned as 0-255.
    """
    r, g, b = (int(min(255.0, max(0.0, c))) for c in color[:3])
    alpha = color[3] if len(color) > 3 else 1.0
    alpha = min(1.0, max(0.0, float(alpha)))
    return (r, g, b, int(round(alpha * 255)))


def _pixel_width(width):
    return max(1, int(round(width)))


class StrokeLayer:
    """Draws strokes onto a Surface, compositing each one in draw order.

    Every stroke is rasterised onto its own transparent RGBA tile covering
    only its bounding box, so overlapping strokes blend source-over instead
    of replacing each other.
    """

    def __init__(self, surface):
        self.surface = surface
        self.count = 0

    def _stamp(self, xs, ys, pad, paint):
        """Rasterise `paint(draw, x0, y0)` on a bbox tile and composite it."""
        x0 = max(0, int(math.floor(min(xs) - pad)))
        y0 = max(0, int(math.floor(min(ys) - pad)))
        x1 = min(self.surface.width, int(math.ceil(max(xs) + pad)) + 1)
        y1 = min(self.surface.height, int(math.ceil(max(ys) + pad)) + 1)
        if x0 >= x1 or y0 >= y1:
            return
        tile = Image.new("RGBA", (x1 - x0, y1 - y0), (0, 0, 0, 0))
        paint(ImageDraw.Draw(tile), x0, y0)
        self.surface.composite(np.asarray(tile, dtype=np.float32), x0, y0)
        self.count += 1

    def line(self, x0, y0, x1, y1, color, width=1.0):
        rgba = clamp_rgba(color)
        if rgba[3] == 0:
            return
        w = _pixel_width(width)
        self._stamp((x0, x1), (y0, y1), w + 1,
                    lambda draw, ox, oy: draw.line([(x0 - ox, y0 - oy), (x1 - ox, y1 - oy)],
                                                   fill=rgba, width=w))

    def polyline(self, points, color, width=1.0):
        """Draw a connected line through a sequence of (x, y) points."""
        rgba = clamp_rgba(color)
        if rgba[3] == 0 or len(points) < 2:
            return
        w = _pixel_width(width)
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        self._stamp(xs, ys, w + 1,
                    lambda draw, ox, oy: draw.line([(x - ox, y - oy) for x, y in points],
                                                   fill=rgba, width=w))

    def disc(self, x, y, radius, color):
        rgba = clamp_rgba(color)
        if rgba[3] == 0 or radius <= 0:
            return
        self._stamp((x,), (y,), radius + 1,
                    lambda draw, ox, oy: draw.ellipse(
                        [x - radius - ox, y - radius - oy, x + radius - ox, y + radius - oy],
                        fill=rgba))

    def triangle(self, a, b, c, color, width=1.0):
        """Outline a triangle given three (x, y) vertices."""
        rgba = clamp_rgba(color)
        if rgba[3] == 0:
            return
        w = _pixel_width(width)
        self._stamp((a[0], b[0], c[0]), (a[1], b[1], c[1]), w + 1,
                    lambda draw, ox, oy: draw.line(
                        [(p[0] - ox, p[1] - oy) for p in (a, b, c, a)], fill=rgba, width=w))


class Surface:
    """Float32 (H, W, 3) pixel buffer with canvas-style compositing."""

    def __init__(self, width, height, background=BACKGROUND):
        self.background = np.array(background, dtype=np.float32)
        self.pixels = None
        self.resize(width, height)

    @property
    def width(self):
        return self.pixels.shape[1]

    @property
    def height(self):
        return self.pixels.shape[0]

    def resize(self, width, height):
        """Reallocate at a new size. Contents are reset to the background."""
        width = max(1, int(width))
        height = max(1, int(height))
        self.pixels = np.empty((height, width, 3), dtype=np.float32)
        self.clear()

    def clear(self):
        self.pixels[:] = self.background

    def fade(self, alpha, color=None):
        """Composite a solid fill at opacity `alpha` over the whole buffer.

        Repeated every tick this gives exponentially decaying trails.
        """
        alpha = min(1.0, max(0.0, float(alpha)))
        target = self.background if color is None else np.asarray(color, dtype=np.float32)
        self.pixels += (target - self.pixels) * alpha

    @contextmanager
    def strokes(self):
        """Yield a StrokeLayer drawing straight onto this surface."""
        yield StrokeLayer(self)

    def composite(self, rgba, x=0, y=0):
        """Source-over composite of a float (h, w, 4) tile with 0-255 alpha.

        The tile's top-left corner lands at (x, y) and must fit inside.
        """
        h, w = rgba.shape[:2]
        region = self.pixels[y:y + h, x:x + w]
        alpha = rgba[..., 3:4] * (1.0 / 255.0)
        region += (rgba[..., :3] - region) * alpha

    def radial_glow(self, cx, cy, radius, color, alpha):
        """Soft round highlight, opacity falling linearly to zero at `radius`."""
        if radius <= 0 or alpha <= 0:
            return
        h, w = self.pixels.shape[:2]
        x0 = max(0, int(cx - radius))
        x1 = min(w, int(cx + radius) + 1)
        y0 = max(0, int(cy - radius))
        y1 = min(h, int(cy + radius) + 1)
        if x0 >= x1 or y0 >= y1:
            return
        Y, X = np.ogrid[y0:y1, x0:x1]
        dist = np.sqrt((X - cx) ** 2 + (Y - cy) ** 2)
        weight = np.clip(1.0 - dist / radius, 0.0, 1.0) * min(1.0, float(alpha))
        color = np.clip(np.asarray(color, dtype=np.float32), 0, 255)
        region = self.pixels[y0:y1, x0:x1]
        region += (color - region) * weight[..., np.newaxis].astype(np.float32)

    def draw_raster(self, rgb, smooth=True):
        """Stretch a (h, w, 3) raster over the whole surface.

        smooth=True upsamples bilinearly, otherwise nearest-neighbour.
        """
        h, w = self.pixels.shape[:2]
        src = np.asarray(rgb, dtype=np.float32)
        rh, rw = src.shape[:2]
        if (rh, rw) == (h, w):
            self.pixels[:] = src
            return
        scaled = _scipy_zoom(src, (h / rh, w / rw, 1), order=1 if smooth else 0)
        pad_h = max(0, h - scaled.shape[0])
        pad_w = max(0, w - scaled.shape[1])
        if pad_h or pad_w:
            scaled = np.pad(scaled, ((0, pad_h), (0, pad_w), (0, 0)), mode="edge")
        self.pixels[:] = scaled[:h, :w]

    def blit(self, other):
        """Copy another surface of the same size onto this one."""
        np.copyto(self.pixels, other.pixels)

    def to_rgb(self):
        """Return a uint8 (H, W, 3) copy for display or export."""
        return np.clip(self.pixels, 0, 255).astype(np.uint8)
