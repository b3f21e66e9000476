"""
This module provides routines to create an offset polygon.

Every vertex is pushed along its bisector so that the adjacent edges move by the offset
distance. This is a per-vertex approximation of a straight skeleton offset. Loops are never
split or merged, the area checks at the end only reject results that are obviously wrong.
"""
from math import pi, sin, tan

from .geomath import coincident, orthogonal_right_vector

HALF_PI = pi / 2


class OffsetPolygon:
    def __init__(self, polygon=None, offset=0, tolerance=0):
        # Offset in integer-space units, positive for outward.
        self._offset = offset
        # Minimum spacing of emitted points, the result area must reach its square.
        self._tolerance = tolerance or 0
        self._polygon = polygon
        self._cached_result = None

    @property
    def offset(self):
        return self._offset

    @offset.setter
    def offset(self, value):
        if self._offset != value:
            self._offset = value
            self._cached_result = None

    @property
    def tolerance(self):
        return self._tolerance

    @tolerance.setter
    def tolerance(self, value):
        value = value or 0
        if self._tolerance != value:
            self._tolerance = value
            self._cached_result = None

    @property
    def polygon(self):
        return self._polygon

    @polygon.setter
    def polygon(self, value):
        self._polygon = value
        self._cached_result = None

    def _reject(self, result, reason):
        channel = self._polygon.channel
        if channel:
            channel.warn(f"Offset by {self._offset} rejected: {reason}")
        return result.invalidate()

    def calculate_offset(self):
        polygon = self._polygon
        dist = self._offset
        tol = self._tolerance
        tolsq = tol * tol

        result = polygon.create_new()
        self._cached_result = result

        if not polygon.valid() or not polygon.closed:
            return

        size = polygon.size()
        minsize = min(size.x, size.y)
        minsizesq = minsize * minsize

        if dist <= -minsize / 2:
            self._reject(result, f"inward offset collapses a shape of width {minsize}")
            return

        polygon.compute_bisectors()

        bisectors = polygon.bisectors
        angles = polygon.angles
        points = polygon.points
        rpoints = []
        ct = len(points)

        def add_points(*candidates):
            prevpt = rpoints[-1] if rpoints else None
            for apt in candidates:
                apt.round()
                # Skip anything within the tolerance of the last emitted point.
                if prevpt is None or prevpt.distance_to_sq(apt) > tolsq:
                    rpoints.append(apt)
                    prevpt = apt

        for i in range(ct):
            b = bisectors[i]
            pti = points[i]

            # The stored angle is relative to the outward bisector, which is antiparallel to
            # the offset direction for inward offsets.
            a = angles[i] if dist > 0 else pi - angles[i]
            s = sin(a)
            if s == 0:
                # Edges fold back onto each other, the displacement is unbounded.
                displacement = b.clone().multiply_scalar(dist)
                overflow = True
            else:
                displacement = b.clone().multiply_scalar(dist / s)
                overflow = displacement.length_sq() > minsizesq
            ptnew = pti.clone().add(displacement)

            if not overflow:
                add_points(ptnew)
                continue

            # Displacement larger than the polygon itself: a sharp vertex pointing along the
            # offset gets capped, any other vertex is dropped.
            if a > HALF_PI:
                # half-angle between displacement and the vector orthogonal to the segment
                ha = (a - HALF_PI) / 2
                # half-length of the cap
                hl = dist * tan(ha)
                # unit vector across the spike
                ov = orthogonal_right_vector(pti.vector_to(ptnew)).normalize()
                # midpoint of the cap, one offset distance out along the bisector
                mc = pti.clone().add_scaled_vector(b, dist)

                p0 = mc.clone().add_scaled_vector(ov, -hl).round()
                p1 = mc.clone().add_scaled_vector(ov, hl).round()

                if coincident(p0, p1):
                    add_points(ptnew)
                else:
                    # Lead with the endpoint on the side of the incoming edge.
                    prev = points[(i - 1 + ct) % ct]
                    if prev.distance_to_sq(p1) < prev.distance_to_sq(p0):
                        p0, p1 = p1, p0
                    add_points(p0, p1)

        result.from_points(rpoints)

        area = polygon.area
        if not result.valid():
            self._reject(result, f"only {result.count()} points survived")
        elif dist < 0 and result.area > area:
            self._reject(result, f"area grew from {area} to {result.area}")
        elif dist > 0 and result.area < area:
            self._reject(result, f"area shrank from {area} to {result.area}")
        elif abs(result.area) < tolsq:
            self._reject(result, f"area {result.area} below tolerance {tol}")

    def result(self):
        if self._cached_result is None:
            self.calculate_offset()
        return self._cached_result
