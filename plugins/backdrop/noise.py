"""
Seeded Gradient Noise

Classic 2D Perlin noise over a 512-entry permutation table, plus
fractal (multi-octave) summation and a curl operator for building
divergence-free flow fields.

The permutation is shuffled with a Park-Miller LCG driven by the seed,
so the same seed always reproduces the same noise field. All functions
accept scalars or numpy arrays; scalar in gives a float out.
"""

import numpy as np


_LCG_MODULUS = 2147483647
_LCG_MULTIPLIER = 16807


def build_permutation(seed):
    """Fisher-Yates shuffle of 0..255 driven by the LCG, doubled to 512."""
    p = list(range(256))
    s = int(seed) % _LCG_MODULUS or 1  # LCG is stuck at zero
    for i in range(255, 0, -1):
        s = (s * _LCG_MULTIPLIER) % _LCG_MODULUS
        j = s % (i + 1)
        p[i], p[j] = p[j], p[i]
    perm = np.array(p + p, dtype=np.int64)
    perm.flags.writeable = False
    return perm


class NoiseField:

    def __init__(self, seed=0):
        self.seed = int(seed)
        self.perm = build_permutation(self.seed)

    @staticmethod
    def fade(t):
        """Quintic smoothing curve 6t^5 - 15t^4 + 10t^3."""
        return t * t * t * (t * (t * 6 - 15) + 10)

    @staticmethod
    def lerp(a, b, t):
        return a + t * (b - a)

    @staticmethod
    def grad(hash_value, x, y):
        """Dot with one of 8 diagonal gradients picked by the low 3 bits."""
        h = hash_value & 7
        u = np.where(h < 4, x, y)
        v = np.where(h < 4, y, x)
        return np.where(h & 1, -u, u) + np.where(h & 2, -v, v)

    def noise2d(self, x, y):
        """Perlin noise at (x, y), roughly in [-1, 1]."""
        scalar = np.ndim(x) == 0 and np.ndim(y) == 0
        x, y = np.broadcast_arrays(np.asarray(x, dtype=np.float64),
                                   np.asarray(y, dtype=np.float64))
        fx = np.floor(x)
        fy = np.floor(y)
        X = fx.astype(np.int64) & 255
        Y = fy.astype(np.int64) & 255
        x = x - fx
        y = y - fy
        u = self.fade(x)
        v = self.fade(y)

        perm = self.perm
        A = perm[X] + Y
        B = perm[X + 1] + Y

        value = self.lerp(
            self.lerp(self.grad(perm[A], x, y), self.grad(perm[B], x - 1, y), u),
            self.lerp(self.grad(perm[A + 1], x, y - 1), self.grad(perm[B + 1], x - 1, y - 1), u),
            v,
        )
        return float(value) if scalar else value

    def fbm(self, x, y, octaves=4):
        """Fractal Brownian motion normalised back into [-1, 1].

        Each octave halves the amplitude and doubles the frequency; the
        sum is divided by the total amplitude.
        """
        if octaves < 1:
            raise ValueError(f"octaves must be >= 1, got {octaves}")
        value = 0.0
        amplitude = 1.0
        frequency = 1.0
        total = 0.0
        for _ in range(int(octaves)):
            value = value + amplitude * self.noise2d(x * frequency, y * frequency)
            total += amplitude
            amplitude *= 0.5
            frequency *= 2.0
        return value / total

    def curl(self, x, y, t, scale=0.003, eps=0.0001, octaves=3, strength=0.8):
        """Curl of the fbm field at (x, y), scrolled along y by `t`.

        Central differences on both axes; returning (dn/dy, -dn/dx) makes
        the resulting vector field divergence-free.
        """
        sx = np.asarray(x, dtype=np.float64) * scale
        sy = np.asarray(y, dtype=np.float64) * scale + t

        n_up = self.fbm(sx, sy + eps, octaves)
        n_down = self.fbm(sx, sy - eps, octaves)
        n_right = self.fbm(sx + eps, sy, octaves)
        n_left = self.fbm(sx - eps, sy, octaves)

        dn_dx = (n_right - n_left) / (2 * eps)
        dn_dy = (n_up - n_down) / (2 * eps)
        return dn_dy * strength, -dn_dx * strength
