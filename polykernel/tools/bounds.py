from math import inf

from .geomath import signed_area
from .vector import Vector


class Bounds:
    """
    Incremental axis-aligned bounding box. An empty box has min at +inf and max at -inf so
    that the first update sets both corners.
    """

    def __init__(self, context):
        self.context = context
        self.min = Vector(context).set_scalar(inf)
        self.max = Vector(context).set_scalar(-inf)

    def __repr__(self):
        return f"Bounds({self.min}, {self.max})"

    def reset(self):
        self.min = Vector(self.context).set_scalar(inf)
        self.max = Vector(self.context).set_scalar(-inf)
        return self

    def update(self, pt):
        self.min.min(pt)
        self.max.max(pt)
        return self

    def update_from(self, min_pt, max_pt):
        self.min.min(min_pt)
        self.max.max(max_pt)
        return self

    def union(self, other):
        return self.update_from(other.min, other.max)

    def empty(self):
        return self.min.x > self.max.x or self.min.y > self.max.y

    def size(self):
        return self.min.vector_to(self.max)


class AreaAccumulator:
    """
    Fan triangulation from the first point given, summing signed_area of every triangle. The
    sum is twice the geometric area, positive for counter-clockwise rings.
    """

    def __init__(self, anchor=None):
        self.anchor = anchor
        self._area = 0

    def reset(self, anchor=None):
        self.anchor = anchor
        self._area = 0
        return self

    def add(self, p1, p2):
        if self.anchor is None:
            self.anchor = p1
        self._area += signed_area(self.anchor, p1, p2)
        return self

    def add_ring(self, points):
        ct = len(points)
        if ct < 3:
            return self
        if self.anchor is None:
            self.anchor = points[0]
        # Edges touching the anchor add nothing, the full ring works for any anchor.
        for i in range(ct):
            self.add(points[i], points[(i + 1) % ct])
        return self

    @property
    def area(self):
        return self._area
