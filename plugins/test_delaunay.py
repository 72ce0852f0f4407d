#!/usr/bin/env python3
"""
Test script for the Bowyer-Watson triangulation.

Verifies:
1. Empty circumcircle property on random point sets
2. Every edge is shared by at most two triangles
3. Degenerate input (too few points, collinear, duplicates)
4. The unit square splits into two triangles covering it
"""

import numpy as np
from backdrop.delaunay import (
    circumcircle, edge_counts, in_circumcircle, orientation, triangulate,
)


def _area(points, tri):
    a, b, c = (points[i] for i in tri)
    return abs(orientation(a, b, c)) / 2


def test_empty_circumcircle():
    """No input point lies strictly inside any triangle's circumcircle."""
    print("Testing empty circumcircle property...")
    for seed in range(5):
        rng = np.random.default_rng(seed)
        points = [tuple(p) for p in rng.uniform(0, [800, 600], size=(60, 2))]
        triangles = triangulate(points)
        assert len(triangles) > 0, f"Seed {seed}: expected a triangulation"

        for tri in triangles:
            cx, cy, r2 = circumcircle(*(points[i] for i in tri))
            for k, p in enumerate(points):
                if k in tri:
                    continue
                d2 = (p[0] - cx) ** 2 + (p[1] - cy) ** 2
                assert d2 >= r2 * (1 - 1e-9), \
                    f"Seed {seed}: point {k} inside circumcircle of {tri}"

    print("  ✓ Empty circumcircle property holds")


def test_edges_shared_at_most_twice():
    print("Testing edge sharing...")
    rng = np.random.default_rng(42)
    points = rng.uniform(0, 1000, size=(80, 2))
    triangles = triangulate(points)
    counts = edge_counts(triangles)
    assert max(counts.values()) <= 2, f"Edge shared by >2 triangles: {counts.most_common(1)}"
    assert all(max(t) < len(points) for t in triangles), "No super-triangle vertex should survive"
    assert all(_area(points, t) > 0 for t in triangles), "Triangles should have positive area"
    print("  ✓ Edges shared by at most two triangles")


def test_degenerate_input():
    print("Testing degenerate input...")
    assert triangulate([]) == [], "No points should give no triangles"
    assert triangulate([(1, 1)]) == [], "One point should give no triangles"
    assert triangulate([(1, 1), (5, 2)]) == [], "Two points should give no triangles"
    assert triangulate([(0, 0), (1, 0), (2, 0), (3, 0)]) == [], \
        "Collinear points should give no triangles"
    assert triangulate([(3, 3), (3, 3), (3, 3), (7, 1)]) == [], \
        "Fewer than three distinct points should give no triangles"
    print("  ✓ Degenerate input handled")


def test_unit_square():
    """Four cocircular corners: two triangles, total area 1."""
    print("Testing unit square...")
    square = [(0, 0), (1, 0), (1, 1), (0, 1)]
    triangles = triangulate(square)
    assert len(triangles) == 2, f"Square should split into 2 triangles: {triangles}"
    total = sum(_area(square, t) for t in triangles)
    assert abs(total - 1.0) < 1e-12, f"Triangles should cover the square: {total}"

    # A duplicate corner is ignored
    triangles = triangulate(square + [(0, 0)])
    assert len(triangles) == 2, f"Duplicate should not change the mesh: {triangles}"
    assert all(4 not in t for t in triangles), "Duplicate index should not appear"
    print("  ✓ Unit square triangulated")


def test_in_circumcircle_winding():
    """Answer is independent of the triangle's vertex order."""
    print("Testing in_circumcircle winding...")
    a, b, c = (1, 0), (0, 1), (-1, 0)
    assert in_circumcircle((0, 0), a, b, c), "Centre should be inside (ccw)"
    assert in_circumcircle((0, 0), c, b, a), "Centre should be inside (cw)"
    assert not in_circumcircle((0, -1), a, b, c), "Point on the circle is not inside"
    assert not in_circumcircle((3, 3), c, b, a), "Far point should be outside"
    assert not in_circumcircle((0, 0), (0, 0), (1, 1), (2, 2)), \
        "Degenerate triangle should not claim points"
    assert circumcircle((0, 0), (1, 1), (2, 2)) is None, "Collinear points have no circumcircle"
    print("  ✓ in_circumcircle orientation-independent")


if __name__ == "__main__":
    print("\n=== Testing Delaunay Triangulation ===\n")

    test_empty_circumcircle()
    test_edges_shared_at_most_twice()
    test_degenerate_input()
    test_unit_square()
    test_in_circumcircle_winding()

    print("\n✓ All tests passed!\n")
