"""
Vertex reduction strategies for polygons.

Each strategy takes the point list and a tolerance in integer-space units and returns the
reduced point list, keeping the surviving points in their original order. The polygon applies
the result in place.

http://geomalgorithms.com/a16-_decimate-1.html
"""

import numpy as np

from .geomath import as_array, distances_to_line_sq, normalized_areas

DECIMATE_VERTEX_REDUCTION = "vertex"
DECIMATE_COLLINEAR = "collinear"
DECIMATE_DOUGLAS_PEUCKER = "douglas-peucker"


def decimate_vertex_reduction(pts, tol):
    """
    Greedy single pass: any point closer than tol to the last kept point is dropped, every kept
    point becomes the new reference.
    """
    if not pts:
        return []
    tolsq = tol * tol

    ref = pts[0]
    rpts = [ref]

    for spt in pts[1:]:
        if ref.distance_to_sq(spt) < tolsq:
            continue
        rpts.append(spt)
        ref = spt

    return rpts


def decimate_collinear(pts, tol):
    """
    Keeps the points whose squared height over the chord of their two neighbours is below
    tol**2. Near-flat vertices are the ones that stay, sharp ones are dropped.
    """
    if not pts:
        return []
    tolsq = tol * tol
    q = normalized_areas(as_array(pts)) < tolsq
    return [pt for pt, keep in zip(pts, q) if keep]


def _mark_douglas_peucker(arr, tolsq):
    """
    Boolean mask of the points kept by Ramer-Douglas-Peucker. The endpoints are always kept.
    https://en.wikipedia.org/wiki/Ramer%E2%80%93Douglas%E2%80%93Peucker_algorithm
    """
    ct = len(arr)
    mk = np.zeros(ct, dtype=bool)
    mk[0] = mk[ct - 1] = True

    stack = [(0, ct - 1)]
    while stack:
        i, j = stack.pop()
        if i >= j - 1:
            continue
        distances = distances_to_line_sq(arr[i + 1 : j], arr[i], arr[j])
        k = int(np.argmax(distances))
        if distances[k] > tolsq:
            idx = i + 1 + k
            mk[idx] = True
            stack.append((i, idx))
            stack.append((idx, j))
    return mk


def decimate_douglas_peucker(pts, tol):
    """
    Recursive max-deviation reduction. A window is split at its farthest interior point while
    that point deviates more than tol from the chord.
    """
    if len(pts) < 3 or tol <= 0:
        return list(pts)
    mk = _mark_douglas_peucker(as_array(pts), tol * tol)
    return [pt for pt, keep in zip(pts, mk) if keep]


DECIMATION_STRATEGIES = {
    DECIMATE_VERTEX_REDUCTION: decimate_vertex_reduction,
    DECIMATE_COLLINEAR: decimate_collinear,
    DECIMATE_DOUGLAS_PEUCKER: decimate_douglas_peucker,
}


def decimate_points(pts, tol, strategy=DECIMATE_VERTEX_REDUCTION):
    try:
        decimator = DECIMATION_STRATEGIES[strategy]
    except KeyError:
        raise ValueError(
            f"Unknown decimation strategy {strategy!r}, expected one of {', '.join(DECIMATION_STRATEGIES)}"
        ) from None
    return decimator(pts, tol)
