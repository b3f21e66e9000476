import unittest
from math import inf, pi

from polykernel.kernel.channel import NULL_CHANNEL, Channel
from polykernel.tools.bounds import AreaAccumulator, Bounds
from polykernel.tools.context import Context
from polykernel.tools.polygon import Polygon
from polykernel.tools.vector import Vector


def points(context, *coords):
    return [Vector(context, x, y) for x, y in coords]


class TestBounds(unittest.TestCase):
    """Tests the incremental bounds and area trackers."""

    def setUp(self):
        self.context = Context(precision=3)

    def test_bounds_empty(self):
        bounds = Bounds(self.context)
        self.assertTrue(bounds.empty())
        self.assertEqual(bounds.min, (inf, inf))
        self.assertEqual(bounds.max, (-inf, -inf))

    def test_bounds_update(self):
        bounds = Bounds(self.context)
        for pt in points(self.context, (3, 4), (-2, 8), (5, -1)):
            bounds.update(pt)
        self.assertFalse(bounds.empty())
        self.assertEqual(bounds.min, (-2, -1))
        self.assertEqual(bounds.max, (5, 8))
        self.assertEqual(bounds.size(), (7, 9))

    def test_bounds_union(self):
        a = Bounds(self.context).update(Vector(self.context, 0, 0))
        b = Bounds(self.context).update(Vector(self.context, 10, -5))
        a.union(b)
        self.assertEqual(a.min, (0, -5))
        self.assertEqual(a.max, (10, 0))
        a.reset()
        self.assertTrue(a.empty())

    def test_area_accumulator(self):
        ring = points(self.context, (0, 0), (4, 0), (0, 4))
        self.assertEqual(AreaAccumulator().add_ring(ring).area, 16)
        self.assertEqual(AreaAccumulator().add_ring(ring[::-1]).area, -16)
        # Any anchor gives the same ring area.
        anchor = Vector(self.context, 100, -50)
        self.assertEqual(AreaAccumulator(anchor).add_ring(ring).area, 16)


class TestPolygon(unittest.TestCase):
    """Tests polygon construction and derived quantities."""

    def setUp(self):
        self.context = Context(precision=3)

    def square(self, size=10):
        return Polygon(
            self.context,
            points(self.context, (0, 0), (size, 0), (size, size), (0, size)),
        )

    def test_polygon_triangle_area_sign(self):
        ccw = Polygon(self.context, points(self.context, (0, 0), (4, 0), (0, 4)))
        cw = Polygon(self.context, points(self.context, (0, 4), (4, 0), (0, 0)))
        self.assertTrue(ccw.valid())
        self.assertGreater(ccw.area, 0)
        self.assertEqual(ccw.area, 16)
        self.assertEqual(cw.area, -ccw.area)

    def test_polygon_collinear_runs_absorbed(self):
        poly = Polygon(
            self.context,
            points(self.context, (0, 0), (5, 0), (10, 0), (10, 10), (0, 10), (0, 5)),
        )
        self.assertEqual(poly.points, [(0, 0), (10, 0), (10, 10), (0, 10)])
        self.assertEqual(poly.area, 200)

    def test_polygon_seam_vertex_dropped(self):
        poly = Polygon(
            self.context,
            points(self.context, (5, 0), (10, 0), (10, 10), (0, 10), (0, 0)),
        )
        self.assertEqual(poly.points, [(10, 0), (10, 10), (0, 10), (0, 0)])
        self.assertEqual(poly.area, 200)

    def test_polygon_duplicates_absorbed(self):
        poly = Polygon(
            self.context,
            points(self.context, (0, 0), (0, 0), (10, 0), (10, 0), (10, 10)),
        )
        self.assertEqual(poly.points, [(0, 0), (10, 0), (10, 10)])

    def test_polygon_construction_idempotent(self):
        poly = Polygon(
            self.context,
            points(self.context, (0, 0), (3, 0), (7, 0), (7, 4), (7, 9), (2, 6)),
        )
        again = Polygon(self.context, list(poly.points))
        self.assertEqual(again.points, poly.points)
        self.assertEqual(again.area, poly.area)
        self.assertEqual(again.min, poly.min)
        self.assertEqual(again.max, poly.max)

    def test_polygon_invalid_inputs(self):
        self.assertFalse(Polygon(self.context).valid())
        self.assertFalse(Polygon(self.context, points(self.context, (0, 0), (1, 1))).valid())
        flat = Polygon(self.context, points(self.context, (0, 0), (1, 1), (5, 5)))
        self.assertFalse(flat.valid())
        self.assertEqual(flat.min, (inf, inf))
        self.assertEqual(flat.max, (-inf, -inf))
        self.assertEqual(flat.area, 0)

    def test_polygon_collinear_input_left_empty(self):
        flat = Polygon(self.context, points(self.context, (0, 0), (1, 0), (2, 0)))
        self.assertFalse(flat.valid())
        self.assertEqual(flat.points, [])
        self.assertEqual(flat.min, (inf, inf))
        self.assertEqual(flat.max, (-inf, -inf))
        single = Polygon(self.context, points(self.context, (3, 3)), closed=False)
        self.assertFalse(single.valid())
        self.assertEqual(single.points, [])

    def test_polygon_open(self):
        poly = Polygon(
            self.context, points(self.context, (0, 0), (5, 0), (10, 0)), closed=False
        )
        self.assertTrue(poly.valid())
        self.assertEqual(poly.points, [(0, 0), (10, 0)])
        self.assertEqual(poly.area, 0)
        self.assertEqual(poly.perimeter(), 10)
        poly.compute_bisectors()
        self.assertIsNone(poly.bisectors)

    def test_polygon_bounds(self):
        poly = Polygon(self.context, points(self.context, (-3, 2), (8, -1), (4, 9)))
        self.assertEqual(poly.min, (-3, -1))
        self.assertEqual(poly.max, (8, 9))
        self.assertEqual(poly.size(), (11, 10))

        lo = Vector(self.context, 0, 0)
        hi = Vector(self.context, 0, 0)
        poly.update_bounds_from_this(lo, hi)
        self.assertEqual(lo, (-3, -1))
        self.assertEqual(hi, (8, 9))

    def test_polygon_bisectors_cached(self):
        poly = self.square()
        self.assertIsNone(poly.bisectors)
        self.assertIsNone(poly.angles)
        poly.compute_bisectors()
        self.assertEqual(len(poly.bisectors), 4)
        self.assertEqual(len(poly.angles), 4)
        for a in poly.angles:
            self.assertAlmostEqual(a, 3 * pi / 4)
        bisectors = poly.bisectors
        poly.compute_bisectors()
        self.assertIs(poly.bisectors, bisectors)
        for pt, b in poly:
            self.assertIsNotNone(b)

    def test_polygon_from_points_clears_bisectors(self):
        poly = self.square()
        poly.compute_bisectors()
        poly.from_points(points(self.context, (0, 0), (20, 0), (0, 20)))
        self.assertIsNone(poly.bisectors)
        self.assertIsNone(poly.angles)
        self.assertEqual(poly.area, 400)
        self.assertEqual(poly.max, (20, 20))

    def test_polygon_invalidate(self):
        poly = self.square()
        poly.compute_bisectors()
        poly.invalidate()
        self.assertFalse(poly.valid())
        self.assertEqual(poly.count(), 0)
        self.assertEqual(poly.area, 0)
        self.assertIsNone(poly.bisectors)
        self.assertEqual(poly.min, (inf, inf))

    def test_polygon_iteration(self):
        poly = self.square()
        self.assertEqual(len(poly), 4)
        self.assertEqual([pt for pt, b in poly], poly.points)
        pairs = list(poly.point_pairs())
        self.assertEqual(len(pairs), 4)
        self.assertEqual(pairs[-1], (poly.points[3], poly.points[0]))
        triples = list(poly.segment_triples())
        self.assertEqual(triples[-1], (poly.points[3], poly.points[0], poly.points[1]))
        for pt, b in poly:
            self.assertIsNone(b)

    def test_polygon_perimeter_sliver(self):
        poly = self.square()
        self.assertEqual(poly.perimeter(), 40)
        self.assertFalse(poly.is_sliver(1))
        # Default tolerance is p / 100, which a 10 unit square cannot reach.
        self.assertTrue(poly.is_sliver())
        thin = Polygon(self.context, points(self.context, (0, 0), (1000, 0), (1000, 1), (0, 1)))
        self.assertTrue(thin.is_sliver(1))

    def test_polygon_clone(self):
        poly = self.square()
        poly.compute_bisectors()
        shallow = poly.clone()
        deep = poly.clone(recursive=True)
        self.assertEqual(shallow.points, poly.points)
        self.assertIs(shallow.points[0], poly.points[0])
        self.assertIsNot(deep.points[0], poly.points[0])
        self.assertEqual(deep.area, poly.area)
        self.assertEqual(len(deep.bisectors), 4)
        deep.points[0].set(-5, -5)
        self.assertEqual(poly.points[0], (0, 0))
        shallow.invalidate()
        self.assertTrue(poly.valid())

    def test_polygon_rotate(self):
        poly = self.square()
        poly.compute_bisectors()
        poly.rotate(pi / 2)
        self.assertEqual(poly.points, [(0, 0), (0, 10), (-10, 10), (-10, 0)])
        self.assertEqual(poly.area, 200)
        self.assertEqual(poly.min, (-10, 0))
        self.assertIsNone(poly.bisectors)

    def test_polygon_rotate_shallow_clone(self):
        poly = self.square(1000)
        poly.compute_bisectors()
        rotated = poly.clone()
        rotated.rotate(pi / 2)
        self.assertEqual(rotated.points, [(0, 0), (0, 1000), (-1000, 1000), (-1000, 0)])
        self.assertEqual(rotated.min, (-1000, 0))
        # The source keeps its points, bounds and bisectors.
        self.assertEqual(poly.points, [(0, 0), (1000, 0), (1000, 1000), (0, 1000)])
        self.assertEqual(poly.min, (0, 0))
        self.assertEqual(poly.max, (1000, 1000))
        self.assertEqual(poly.area, 2 * 1000 * 1000)
        self.assertEqual(len(poly.bisectors), 4)

    def test_polygon_float_points(self):
        poly = Polygon.from_float_points(
            self.context, [(0.0, 0.0), (1.5, 0.0), (1.5, 2.0), (0.0, 2.0)]
        )
        self.assertEqual(poly.points, [(0, 0), (1500, 0), (1500, 2000), (0, 2000)])
        self.assertEqual(poly.as_float_points()[2], (1.5, 2.0))

    def test_polygon_channel(self):
        self.assertIs(self.square().channel, NULL_CHANNEL)
        self.assertFalse(self.square().channel)
        channel = Channel("polygon")
        poly = Polygon(self.context, points(self.context, (0, 0), (4, 0), (0, 4)), channel=channel)
        self.assertIs(poly.create_new().channel, channel)
