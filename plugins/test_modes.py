#!/usr/bin/env python3
"""
Test script for the individual background modes.

Verifies:
1. Flow particle lifecycle (ageing, respawn on death or exit)
2. Constellation stays bounded under its own forces
3. Julia escape-time counts at known points
4. Lorenz and Lissajous trails are capped
5. Ocean perspective easing is continuous and monotone
6. Preset parameter overrides
7. Escape counts match a per-pixel loop, last-step escapes included
8. Pointer pull, push and zero-distance guards; mesh border bounce
"""

import numpy as np
from backdrop.constellation import Constellation
from backdrop.flow import FlowField, FlowParticles
from backdrop.fractal import colorize, drifted_c, escape_time
from backdrop.lissajous import LissajousCurve, LissajousEnsemble
from backdrop.lorenz import LorenzEnsemble, LorenzTrail, lcg
from backdrop.ocean import perspective_ease
from backdrop.palette import PaletteCycle
from backdrop.presets import get_preset
from backdrop.scheduler import FrameContext
from backdrop.surface import BACKGROUND
from backdrop.voronoi import DelaunayMesh


def _context(width, height, frame=0, pointer=(-1e6, -1e6), seed=0):
    return FrameContext(frame, width, height, pointer[0], pointer[1],
                        PaletteCycle(rng=seed))


def test_flow_particle_lifecycle():
    """Particles age by one per tick and respawn on death or exit."""
    print("Testing FlowParticles lifecycle...")
    rng = np.random.default_rng(3)
    parts = FlowParticles(40, 400, 300, rng)
    assert np.all((parts.x >= 0) & (parts.x <= 400)), "Initial x should be on the surface"
    assert np.all((parts.life >= 300) & (parts.life <= 700)), "Initial life out of range"

    zero = np.zeros(len(parts))
    life_before = parts.life.copy()
    respawned = parts.advance(zero, zero)
    assert not respawned.any(), "Nothing should respawn on the first tick"
    assert np.allclose(parts.life, life_before - 1), "Life should drop by one per tick"

    # Expire particle 0, push particle 1 past the margin
    parts.life[0] = 1.0
    parts.x[1] = -100.0
    respawned = parts.advance(zero, zero)
    assert respawned[0] and respawned[1], "Dead and escaped particles should respawn"
    assert respawned.sum() == 2, f"Only two particles should respawn: {respawned.sum()}"
    for k in (0, 1):
        assert 0 <= parts.x[k] <= 400 and 0 <= parts.y[k] <= 300, \
            f"Respawn {k} should be on the surface: ({parts.x[k]}, {parts.y[k]})"
        assert 300 <= parts.life[k] <= 700, f"Respawn {k} life out of range: {parts.life[k]}"
        assert parts.life[k] == parts.max_life[k], "Respawn should start at full life"
        assert parts.prev_x[k] == parts.x[k], "Respawn should not draw a jump segment"

    print("  ✓ Particle lifecycle correct")


def test_constellation_stability():
    """Speeds stay small over a long run with the pointer far away."""
    print("Testing Constellation stability...")
    mode = Constellation(rng=5)
    mode.init(800, 600)
    assert len(mode.x) == 40, f"800x600 should hold 40 stars: {len(mode.x)}"

    for frame in range(600):
        mode.update(_context(800, 600, frame))
        assert np.all(np.isfinite(mode.x)) and np.all(np.isfinite(mode.vx)), \
            f"Non-finite state at frame {frame}"

    speeds = mode.speeds()
    assert speeds.max() < 2.0, f"Stars should drift slowly: {speeds.max()}"
    assert np.all((mode.x >= 0) & (mode.x <= 800)), "Stars should wrap horizontally"
    assert np.all((mode.y >= 0) & (mode.y <= 600)), "Stars should wrap vertically"

    i, j, dist = mode.connections()
    assert np.all(dist < mode.params["connection_distance"]), "Connections beyond the limit"
    assert np.all(i < j), "Each pair should appear once"

    print("  ✓ Constellation stable")


def test_escape_time():
    print("Testing escape_time...")
    assert escape_time(0.0, 0.0, 0.0, 0.0, max_iter=60) == 60, "Origin with c=0 never escapes"
    assert escape_time(3.0, 0.0, 0.0, 0.0, max_iter=60) == 0, "|z| >= 2 escapes immediately"
    assert escape_time(2.0, 0.0, 0.0, 0.0, max_iter=60) == 0, "|z|^2 == 4 counts as escaped"
    # 1.5^2 = 2.25 is bounded, 2.25^2 is not
    assert escape_time(1.5, 0.0, 0.0, 0.0, max_iter=60) == 1, "Should escape after one step"

    rng = np.random.default_rng(0)
    z_re = rng.uniform(-2, 2, (30, 40))
    z_im = rng.uniform(-2, 2, (30, 40))
    counts = escape_time(z_re, z_im, -0.7, 0.27015, max_iter=25)
    assert counts.shape == (30, 40), f"Counts should keep the grid shape: {counts.shape}"
    assert counts.min() >= 0 and counts.max() <= 25, "Counts out of [0, max_iter]"

    rgb = colorize(counts, 25, (90, 130, 170), (70, 110, 160))
    assert rgb.dtype == np.uint8 and rgb.shape == (30, 40, 3), "colorize should give uint8 RGB"
    inside = counts >= 25
    if inside.any():
        assert np.all(rgb[inside] == BACKGROUND), "Inside pixels should be background"

    for t in np.linspace(0, 500, 50):
        c_re, c_im = drifted_c(-0.8, 0.156, t, 0.045)
        assert abs(c_re + 0.8) <= 0.045 * 1.25 + 1e-12, "c drifted too far (re)"
        assert abs(c_im - 0.156) <= 0.045 * 1.25 + 1e-12, "c drifted too far (im)"

    print("  ✓ Escape-time counts correct")


def test_trail_caps():
    """Trails never exceed their capacity."""
    print("Testing trail caps...")
    trail = LorenzTrail(17.0, capacity=50)
    for _ in range(200):
        trail.advance(0.0, 10.0, 400, 300)
    assert len(trail.points) == 50, f"Lorenz trail should cap at 50: {len(trail.points)}"
    assert all(np.isfinite(trail.points[-1])), "Lorenz trail diverged"

    curve = LissajousCurve(3, 4, phase=0.0, amplitude=0.8, variation=0.0,
                           use_accent=False, speed=0.006, phase_drift=0.0001, capacity=40)
    for _ in range(100):
        curve.advance(400, 300)
    assert len(curve.points) == 40, f"Lissajous trail should cap at 40: {len(curve.points)}"

    lorenz = LorenzEnsemble(rng=1, trail_length=30)
    lorenz.init(320, 240)
    assert len(lorenz.trails) == 8, "Ensemble should have eight trails"
    lissajous = LissajousEnsemble(rng=1, trail_length=30)
    lissajous.init(320, 240)
    assert 3 <= len(lissajous.curves) <= 5, f"Curve count out of range: {len(lissajous.curves)}"
    for frame in range(60):
        ctx = _context(320, 240, frame)
        lorenz.step(ctx)
        lissajous.step(ctx)
    assert all(len(t.points) == 30 for t in lorenz.trails), "Lorenz trail_length ignored"
    assert all(len(c.points) == 30 for c in lissajous.curves), "Lissajous trail_length ignored"

    # Same seed, same trail constants
    a, b = LorenzTrail(3.5), LorenzTrail(3.5)
    assert (a.sigma, a.rho, a.beta, a.dt) == (b.sigma, b.rho, b.beta, b.dt), "Seeded trail mismatch"
    gen = lcg(0)
    assert next(gen) == 49297 / 233280, "First LCG draw from seed 0"

    print("  ✓ Trails capped")


def test_perspective_ease():
    print("Testing perspective_ease...")
    assert perspective_ease(0.0) == 0.0, "Top of screen should be 0"
    left = perspective_ease(0.3 - 1e-9)
    right = perspective_ease(0.3)
    assert abs(left - right) < 1e-6, f"Discontinuous at 0.3: {left} vs {right}"
    assert abs(perspective_ease(1.0) - 0.997) < 1e-9, "Bottom should be ~1"
    values = [perspective_ease(t) for t in np.linspace(0, 1, 101)]
    assert all(b >= a for a, b in zip(values, values[1:])), "Easing should be monotone"
    assert perspective_ease(-2.0) == 0.0 and perspective_ease(5.0) == perspective_ease(1.0), \
        "Input should be clamped to [0, 1]"
    print("  ✓ Perspective easing continuous")


def test_param_overrides():
    print("Testing parameter overrides...")
    mode = Constellation(rng=0, damping=0.9, not_a_param=1)
    assert mode.params["damping"] == 0.9, "Known override should apply"
    assert "not_a_param" not in mode.get_params(), "Unknown keys should be ignored"
    assert mode.description == get_preset("constellation")["description"], "Description mismatch"
    try:
        get_preset("nope")
    except KeyError:
        pass
    else:
        raise AssertionError("Unknown preset should raise KeyError")
    print("  ✓ Parameter overrides working")


def _reference_escape(z_re, z_im, c_re, c_im, max_iter):
    """Plain while-loop escape count, one pixel at a time."""
    counts = np.zeros(z_re.shape, dtype=int)
    for idx in np.ndindex(z_re.shape):
        zr, zi = float(z_re[idx]), float(z_im[idx])
        n = 0
        while zr * zr + zi * zi < 4.0 and n < max_iter:
            zr, zi = zr * zr - zi * zi + c_re, 2.0 * zr * zi + c_im
            n += 1
        counts[idx] = n
    return counts


def test_escape_time_matches_loop():
    """Vectorised counts equal the per-pixel loop, including last-step escapes."""
    print("Testing escape_time against a per-pixel loop...")
    # z -> z^2 from 2^(1/6): |z|^2 first reaches 4 after the third step
    x = 2.0 ** (1.0 / 6.0)
    row = np.array([[x, 0.0, 3.0]])
    zeros = np.zeros_like(row)
    assert escape_time(row, zeros, 0.0, 0.0, max_iter=3).tolist() == [[3, 3, 0]], \
        "Escape on the last step should report the cap, like bounded pixels"
    assert escape_time(row, zeros, 0.0, 0.0, max_iter=4).tolist() == [[3, 4, 0]], \
        "With one more step the escaping pixel should drop below the cap"

    ys, xs = np.mgrid[-1.5:1.5:24j, -2.0:2.0:32j]
    for c_re, c_im in ((-0.7, 0.27015), (0.285, 0.01), (-0.4, 0.6)):
        counts = escape_time(xs, ys, c_re, c_im, max_iter=20)
        expected = _reference_escape(xs, ys, c_re, c_im, 20)
        assert np.array_equal(counts, expected), \
            f"c=({c_re}, {c_im}): {np.count_nonzero(counts != expected)} pixels differ"
    print("  ✓ escape_time matches the loop")


def test_flow_pointer_pull():
    """Pull points at the pointer, fades with distance, skips zero distance."""
    print("Testing FlowField pointer pull...")
    mode = FlowField(rng=1)
    mode.init(400, 300)
    parts = mode.particles
    assert len(parts) >= 4, f"Need at least four particles: {len(parts)}"
    # On the pointer, 100 left, 150 above, 260 right (outside the radius)
    parts.x[:4] = [200.0, 100.0, 200.0, 460.0]
    parts.y[:4] = [150.0, 150.0, 0.0, 150.0]

    near_vx, near_vy = mode.velocity(_context(400, 300, 10, pointer=(200.0, 150.0)))
    far_vx, far_vy = mode.velocity(_context(400, 300, 10))
    assert np.all(np.isfinite(near_vx)) and np.all(np.isfinite(near_vy)), \
        "Pointer on a particle should not produce NaN"

    pull_x = near_vx - far_vx
    pull_y = near_vy - far_vy
    assert abs(pull_x[0]) < 1e-12 and abs(pull_y[0]) < 1e-12, "Zero distance should get no pull"
    assert abs(pull_x[1] - 0.045) < 1e-9 and abs(pull_y[1]) < 1e-9, \
        f"Pull at 100px should be +0.045 in x: {(pull_x[1], pull_y[1])}"
    assert abs(pull_y[2] - 0.03) < 1e-9 and abs(pull_x[2]) < 1e-9, \
        f"Pull at 150px should be +0.03 in y: {(pull_x[2], pull_y[2])}"
    assert abs(pull_x[3]) < 1e-12 and abs(pull_y[3]) < 1e-12, "Outside the radius there is no pull"
    print("  ✓ Pointer pull correct")


def test_constellation_pointer_on_star():
    """Pointer and a second star exactly on a star keep the state finite."""
    print("Testing Constellation zero distances...")
    mode = Constellation(rng=2)
    mode.init(400, 300)
    mode.x[:2] = 200.0
    mode.y[:2] = 150.0
    for frame in range(5):
        mode.update(_context(400, 300, frame, pointer=(200.0, 150.0)))
    assert np.all(np.isfinite(mode.x)) and np.all(np.isfinite(mode.y)), "Positions became NaN"
    assert np.all(np.isfinite(mode.vx)) and np.all(np.isfinite(mode.vy)), "Velocities became NaN"
    print("  ✓ Zero distances handled")


def _mesh():
    mode = DelaunayMesh(rng=3)
    mode.init(400, 300)
    assert len(mode.x) == 4, f"400x300 should hold four points: {len(mode.x)}"
    mode.x[:] = [200.0, 230.0, 10.0, 395.0]
    mode.y[:] = [150.0, 150.0, 100.0, 200.0]
    mode.vx[:] = [0.0, 0.0, -1.0, 1.0]
    mode.vy[:] = 0.0
    return mode


def test_mesh_pointer_and_bounce():
    """Pointer pushes nearby points directly; borders clamp and reflect."""
    print("Testing DelaunayMesh pointer push and bounce...")
    far = _mesh()
    phase = far.phase + far.phase_speed
    far.update(_context(400, 300))

    # Aim the pointer exactly at point 0's post-move position
    px, py = far.x[0], far.y[0]
    near = _mesh()
    near.update(_context(400, 300, pointer=(px, py)))

    assert np.all(np.isfinite(near.x)) and np.all(np.isfinite(near.y)), \
        "Pointer on a point should not produce NaN"
    assert near.x[0] == far.x[0] and near.y[0] == far.y[0], "Zero distance should not push"

    dx, dy = far.x[1] - px, far.y[1] - py
    dist = np.hypot(dx, dy)
    force = (150.0 - dist) / 150.0 * 0.5
    assert abs((near.x[1] - far.x[1]) - dx / dist * force) < 1e-9, "Push x along the offset"
    assert abs((near.y[1] - far.y[1]) - dy / dist * force) < 1e-9, "Push y along the offset"
    assert abs((near.x[1] - far.x[1]) - 0.4) < 1e-3, "Point 30px right should move ~0.4 right"
    assert near.x[2] == far.x[2] and near.x[3] == far.x[3], "Points beyond 150px are not pushed"

    pad, damping, bounce = 50.0, 0.985, -0.3
    assert far.x[2] == pad, f"Left border should clamp to the padding: {far.x[2]}"
    assert far.x[3] == 400 - pad, f"Right border should clamp to the padding: {far.x[3]}"
    for k, v0 in ((2, -1.0), (3, 1.0)):
        expected = (v0 + np.sin(phase[k]) * 0.003) * damping * bounce
        assert abs(far.vx[k] - expected) < 1e-12, f"Point {k} vx {far.vx[k]} != {expected}"
    assert far.vx[2] > 0 and far.vx[3] < 0, "Bounced points should head back inside"
    print("  ✓ Pointer push and bounce correct")


if __name__ == "__main__":
    print("\n=== Testing Background Modes ===\n")

    test_flow_particle_lifecycle()
    test_constellation_stability()
    test_escape_time()
    test_trail_caps()
    test_perspective_ease()
    test_param_overrides()
    test_escape_time_matches_loop()
    test_flow_pointer_pull()
    test_constellation_pointer_on_star()
    test_mesh_pointer_and_bounce()

    print("\n✓ All tests passed!\n")
