"""
Bowyer-Watson Delaunay Triangulation

Incremental insertion into an auxiliary "super" triangle:

  1. Start from one triangle strictly containing every input point.
  2. For each point, collect the "bad" triangles whose circumcircle
     contains it.
  3. The cavity boundary is every edge used by exactly one bad triangle.
  4. Remove the bad triangles and fan new ones from the boundary edges
     to the inserted point.
  5. Finally drop every triangle that touches a super vertex.

Triangles are returned as index triples into the input sequence.

Degenerate input policy:
  - fewer than 3 distinct points gives an empty triangulation
  - exact duplicates are skipped; only the first occurrence is inserted
  - points exactly on a circumcircle count as outside (strict test)
  - zero-area triangles never claim a point
"""

from collections import Counter, namedtuple


Triangle = namedtuple("Triangle", ["a", "b", "c"])

# Super triangle extent, in multiples of the bounding box size
SUPER_SCALE = 20.0


def orientation(a, b, c):
    """Twice the signed area of (a, b, c); > 0 for counter-clockwise."""
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def in_circumcircle(p, a, b, c):
    """True if p lies strictly inside the circumcircle of (a, b, c).

    The 3x3 incircle determinant flips sign with the winding of the
    triangle, so it is compared against the orientation to give the same
    answer for clockwise and counter-clockwise vertex order.
    """
    ax, ay = a[0] - p[0], a[1] - p[1]
    bx, by = b[0] - p[0], b[1] - p[1]
    cx, cy = c[0] - p[0], c[1] - p[1]

    ap = ax * ax + ay * ay
    bp = bx * bx + by * by
    cp = cx * cx + cy * cy

    det = (ax * (by * cp - bp * cy)
           - ay * (bx * cp - bp * cx)
           + ap * (bx * cy - by * cx))

    orient = orientation(a, b, c)
    if orient > 0:
        return det > 0
    if orient < 0:
        return det < 0
    return False


def circumcircle(a, b, c):
    """(cx, cy, r_squared) of the circle through a, b, c, or None if collinear."""
    d = 2.0 * orientation(a, b, c)
    if d == 0:
        return None
    a2 = a[0] * a[0] + a[1] * a[1]
    b2 = b[0] * b[0] + b[1] * b[1]
    c2 = c[0] * c[0] + c[1] * c[1]
    ux = (a2 * (b[1] - c[1]) + b2 * (c[1] - a[1]) + c2 * (a[1] - b[1])) / d
    uy = (a2 * (c[0] - b[0]) + b2 * (a[0] - c[0]) + c2 * (b[0] - a[0])) / d
    r2 = (a[0] - ux) ** 2 + (a[1] - uy) ** 2
    return ux, uy, r2


def _edge_key(i, j):
    return (i, j) if i < j else (j, i)


def triangle_edges(tri):
    return ((tri[0], tri[1]), (tri[1], tri[2]), (tri[2], tri[0]))


def edge_counts(triangles):
    """Counter of undirected edges over a triangle list."""
    counts = Counter()
    for tri in triangles:
        for i, j in triangle_edges(tri):
            counts[_edge_key(i, j)] += 1
    return counts


def super_triangle(points):
    """Three vertices of a triangle strictly enclosing `points`."""
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    size = max(max_x - min_x, max_y - min_y, 1.0)
    cx = (min_x + max_x) / 2
    cy = (min_y + max_y) / 2
    span = size * SUPER_SCALE
    return (
        (cx - span, cy - size),
        (cx, cy + span),
        (cx + span, cy - size),
    )


def triangulate(points):
    """Delaunay triangulation of a sequence of (x, y) points.

    Returns a list of Triangle index triples into `points`.
    """
    verts = [(float(p[0]), float(p[1])) for p in points]
    n = len(verts)

    order = []
    seen = set()
    for i, v in enumerate(verts):
        if v not in seen:
            seen.add(v)
            order.append(i)
    if len(order) < 3:
        return []

    verts.extend(super_triangle([verts[i] for i in order]))
    triangles = [(n, n + 1, n + 2)]

    for i in order:
        p = verts[i]
        bad = [t for t in triangles
               if in_circumcircle(p, verts[t[0]], verts[t[1]], verts[t[2]])]
        if not bad:
            continue

        shared = edge_counts(bad)
        boundary = [(a, b) for t in bad for a, b in triangle_edges(t)
                    if shared[_edge_key(a, b)] == 1]

        bad_set = set(bad)
        triangles = [t for t in triangles if t not in bad_set]
        triangles.extend((a, b, i) for a, b in boundary)

    return [Triangle(*t) for t in triangles if max(t) < n]
