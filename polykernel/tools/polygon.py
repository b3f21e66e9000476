"""
Polygon entity of the geometry kernel.

A polygon is built once from source points. Collinear runs are absorbed into their last
point while scanning so that only direction changes remain, then area and bounds are
computed. Offsetting creates a new polygon, decimation mutates the polygon in place.

Degenerate results are never raised. They turn the polygon into the invalidated state
(no points, zero area, sentinel bounds), which callers must check with valid() after every
offset or decimate call.
"""

from polykernel.kernel.channel import channel_or_null

from .bounds import AreaAccumulator, Bounds
from .decimate import DECIMATE_VERTEX_REDUCTION, decimate_points
from .geomath import bisector, collinear, ftoi, itof
from .offset import OffsetPolygon
from .vector import Vector


class Polygon:
    def __init__(self, context, source_points=None, closed=True, channel=None):
        self.context = context
        self.closed = closed
        self.channel = channel_or_null(channel)

        self.points = []
        self.bisectors = None
        self.angles = None

        self.area = 0

        self.min = None
        self.max = None

        self.init_bounds()

        if not source_points:
            return
        if self.closed and len(source_points) < 3:
            return

        # Build the points list, eliminating collinear vertices.
        points = self.points
        for spt in source_points:
            ct = len(points)
            # If the last three points are collinear, replace the last point with the new one.
            if ct > 1 and collinear(points[ct - 2], points[ct - 1], spt):
                points[ct - 1] = spt
            else:
                points.append(spt)

        if not self.valid():
            self.invalidate()
            return

        if self.closed:
            # Drop the seam vertices if they are collinear with their neighbours.
            ct = len(points)
            if collinear(points[ct - 2], points[ct - 1], points[0]):
                points.pop()
                ct -= 1
            if ct > 1 and collinear(points[ct - 1], points[0], points[1]):
                points.pop(0)

            self.calculate_area()

        if not self.valid():
            self.invalidate()
            return

        self.calculate_bounds()

    def __repr__(self):
        kind = "closed" if self.closed else "open"
        return f"Polygon({kind}, count={self.count()}, area={self.area})"

    def __len__(self):
        return len(self.points)

    def __iter__(self):
        """
        Yields every point with its bisector, or None if the bisectors are not computed.
        """
        bisectors = self.bisectors
        for i, pt in enumerate(self.points):
            yield pt, bisectors[i] if bisectors is not None else None

    @classmethod
    def from_float_points(cls, context, float_points, closed=True, channel=None):
        """
        Polygon from (x, y) pairs given in floating-point space.
        """
        points = [
            Vector(context, ftoi(x, context), ftoi(y, context)) for x, y in float_points
        ]
        return cls(context, points, closed=closed, channel=channel)

    def as_float_points(self):
        context = self.context
        return [(itof(pt.x, context), itof(pt.y, context)) for pt in self.points]

    def count(self):
        return len(self.points)

    def point_pairs(self):
        """
        Yields every edge as (p1, p2), including the closing edge.
        """
        points = self.points
        ct = len(points)
        for i in range(ct):
            yield points[i], points[(i + 1) % ct]

    def segment_triples(self):
        """
        Yields every sequence of three consecutive points, wrapping around the end.
        """
        points = self.points
        ct = len(points)
        for i in range(ct):
            yield points[i], points[(i + 1) % ct], points[(i + 2) % ct]

    def init_bounds(self):
        bounds = Bounds(self.context)
        self.min = bounds.min
        self.max = bounds.max

    def init_area(self):
        self.area = 0

    def update_bounds(self, pt):
        self.min.min(pt)
        self.max.max(pt)

    def update_bounds_from_this(self, min_pt, max_pt):
        """Grow the given corners to include this polygon."""
        min_pt.min(self.min)
        max_pt.max(self.max)

    def calculate_bounds(self):
        bounds = Bounds(self.context)
        for pt in self.points:
            bounds.update(pt)
        self.min = bounds.min
        self.max = bounds.max

    def calculate_area(self):
        self.area = 0
        if not self.closed:
            return
        self.area = AreaAccumulator().add_ring(self.points).area

    def perimeter(self):
        if not self.closed:
            points = self.points
            return sum(points[i].distance_to(points[i + 1]) for i in range(len(points) - 1))
        return sum(p1.distance_to(p2) for p1, p2 in self.point_pairs())

    def is_sliver(self, tol=None):
        if tol is None:
            tol = self.context.p / 100
        perimeter = self.perimeter()
        if perimeter == 0:
            return True
        return abs(self.area) / perimeter < tol

    def size(self):
        return self.min.vector_to(self.max)

    def valid(self):
        if self.closed:
            return self.count() >= 3
        return self.count() > 1

    def invalidate(self):
        self.points = []
        self.clear_bisectors()
        self.init_area()
        self.init_bounds()
        return self

    def clear_bisectors(self):
        self.bisectors = None
        self.angles = None

    def create_new(self):
        return type(self)(self.context, None, closed=self.closed, channel=self.channel)

    def clone(self, recursive=False):
        clone = self.create_new()
        if recursive:
            clone.points = [pt.clone() for pt in self.points]
        else:
            clone.points = list(self.points)
        clone.area = self.area
        clone.min = self.min.clone()
        clone.max = self.max.clone()
        if self.bisectors is not None:
            clone.bisectors = [b.clone() for b in self.bisectors]
            clone.angles = list(self.angles)
        return clone

    def from_points(self, points):
        """
        Replace the point sequence. Area and bounds are recomputed and the bisector cache is
        dropped. No collinear elimination takes place.
        """
        self.points = points
        self.clear_bisectors()

        self.calculate_area()
        self.calculate_bounds()

        return self

    def rotate(self, angle):
        """
        Rotate the points counter-clockwise about the origin, snapping them back onto the grid.
        The rotated points are new vectors, shallow clones keep their own.
        """
        return self.from_points([pt.clone().rotate(angle).round() for pt in self.points])

    def compute_bisectors(self):
        """
        Compute the bisector of every vertex and the angle between the outgoing edge and that
        bisector. Computed once, open polygons have none.
        """
        if self.bisectors is not None or not self.closed:
            return

        points = self.points
        ct = len(points)
        bisectors = []
        angles = []

        for i in range(ct):
            p1 = points[(i - 1 + ct) % ct]
            p2 = points[i]
            p3 = points[(i + 1) % ct]

            b = bisector(p1, p2, p3)

            bisectors.append(b)
            angles.append(p2.vector_to(p3).angle_to(b))

        self.bisectors = bisectors
        self.angles = angles

    def offset(self, dist, tol=0):
        """
        Offset every point by dist, positive outward, negative inward, in integer-space units.
        Returns a new polygon which is invalid if the offset degenerated.
        """
        return OffsetPolygon(self, dist, tol).result()

    def foffset(self, fdist, ftol=None):
        """Offset, with the arguments given in floating-point space."""
        context = self.context
        dist = ftoi(fdist, context)
        tol = ftoi(ftol, context) if ftol is not None else 0
        return self.offset(dist, tol)

    def decimate(self, tol, strategy=DECIMATE_VERTEX_REDUCTION):
        """
        Reduce the vertex count in place, dropping detail smaller than tol.

        @param tol: tolerance in integer-space units, no-op if not positive
        @param strategy: name of a registered decimation strategy
        @return: self, invalidated if the result degenerated
        """
        if tol <= 0:
            return self

        count = self.count()
        self.from_points(decimate_points(self.points, tol, strategy))

        if not self.valid():
            if self.channel:
                self.channel.warn(
                    f"Decimation ({strategy}, tol={tol}) left {self.count()} of {count} points"
                )
            return self.invalidate()

        if self.closed and abs(self.area) < tol * tol / 4:
            if self.channel:
                self.channel.warn(
                    f"Decimation ({strategy}, tol={tol}) collapsed the polygon to area {self.area}"
                )
            return self.invalidate()

        return self

    def fdecimate(self, ftol, strategy=DECIMATE_VERTEX_REDUCTION):
        return self.decimate(ftoi(ftol, self.context), strategy)
