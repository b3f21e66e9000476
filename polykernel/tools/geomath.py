"""
Geometric primitives on Vectors in the integer space of a Context.

The scalar functions work on the integer coordinates directly so collinearity is an exact
test. The array functions at the end take (N, 2) float arrays and serve the decimation
strategies, which measure many points against the same reference at once.
"""

import numpy as np

from .vector import Vector


def ftoi(f, context):
    """Float space to integer space."""
    return int(round(f * context.p))


def itof(i, context):
    """Integer space to float space."""
    return i / context.p


def signed_area(a, b, c):
    """
    Twice the signed area of the triangle abc, positive for counter-clockwise winding.
    """
    return (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)


def collinear(a, b, c):
    return signed_area(a, b, c) == 0


def normalized_area(a, b, c):
    """
    Squared height of b over the chord ac, that is signed_area**2 / |ac|**2. This is
    comparable to a squared tolerance.
    """
    base_sq = a.distance_to_sq(c)
    if base_sq == 0:
        return a.distance_to_sq(b)
    area = signed_area(a, b, c)
    return area * area / base_sq


def orthogonal_right_vector(v):
    """v rotated 90 degrees clockwise."""
    return Vector(v.context, v.y, -v.x)


def bisector(p1, p2, p3):
    """
    Unit vector at p2 bisecting the angle between the edges p1->p2 and p2->p3.

    For a counter-clockwise polygon the right hand normal of every edge faces away from the
    interior, so the normalized sum of the two normals faces outward at convex and reflex
    vertices alike.
    """
    n1 = orthogonal_right_vector(p1.vector_to(p2).normalize())
    n2 = orthogonal_right_vector(p2.vector_to(p3).normalize())
    return n1.add(n2).normalize()


def distance_to_line_sq(a, b, p):
    """Squared perpendicular distance from p to the infinite line through a and b."""
    base_sq = a.distance_to_sq(b)
    if base_sq == 0:
        return a.distance_to_sq(p)
    area = signed_area(a, b, p)
    return area * area / base_sq


def coincident(a, b):
    return a.distance_to_sq(b) < a.context.epsilon


def as_array(points):
    """(N, 2) float array of the point coordinates."""
    if not points:
        return np.empty((0, 2), dtype=float)
    return np.array([(pt.x, pt.y) for pt in points], dtype=float)


def distances_to_line_sq(arr, a, b):
    """
    Squared perpendicular distances of every row of arr to the line through a and b, where
    a and b are coordinate pairs.
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    line = b - a
    base_sq = np.dot(line, line)
    delta = arr - a
    if base_sq == 0:
        return np.sum(delta * delta, axis=-1)
    cross = line[0] * delta[:, 1] - line[1] * delta[:, 0]
    return cross * cross / base_sq


def normalized_areas(arr):
    """
    normalized_area of every vertex of the closed ring arr with its two neighbours, wrapping
    around the ends.
    """
    prev = np.roll(arr, 1, axis=0)
    nxt = np.roll(arr, -1, axis=0)
    chord = nxt - prev
    base_sq = np.sum(chord * chord, axis=-1)
    delta = arr - prev
    cross = chord[:, 0] * delta[:, 1] - chord[:, 1] * delta[:, 0]
    result = np.sum(delta * delta, axis=-1)
    q = base_sq != 0
    result[q] = cross[q] * cross[q] / base_sq[q]
    return result
