from math import acos, cos, isfinite, sin, sqrt


class Vector:
    """
    2D point or direction in the integer space of a Context.

    Mutating methods work in place and return self so they can be chained:

        pt.clone().add_scaled_vector(bisector, d).round()
    """

    __slots__ = ("context", "x", "y")

    def __init__(self, context, x=0, y=0):
        self.context = context
        self.x = x
        self.y = y

    def __repr__(self):
        return f"Vector({self.x}, {self.y})"

    def __str__(self):
        return f"({self.x}, {self.y})"

    def __iter__(self):
        yield self.x
        yield self.y

    def __eq__(self, other):
        if isinstance(other, Vector):
            return self.x == other.x and self.y == other.y
        if isinstance(other, (tuple, list)) and len(other) == 2:
            return self.x == other[0] and self.y == other[1]
        return NotImplemented

    def __hash__(self):
        return hash((self.x, self.y))

    def __copy__(self):
        return self.clone()

    def clone(self):
        return Vector(self.context, self.x, self.y)

    def set(self, x, y):
        self.x = x
        self.y = y
        return self

    def set_scalar(self, s):
        self.x = s
        self.y = s
        return self

    def add(self, v):
        self.x += v.x
        self.y += v.y
        return self

    def sub(self, v):
        self.x -= v.x
        self.y -= v.y
        return self

    def add_scaled_vector(self, v, s):
        self.x += v.x * s
        self.y += v.y * s
        return self

    def multiply_scalar(self, s):
        self.x *= s
        self.y *= s
        return self

    def divide_scalar(self, s):
        if s == 0:
            return self.set_scalar(0)
        self.x /= s
        self.y /= s
        return self

    def negate(self):
        self.x = -self.x
        self.y = -self.y
        return self

    def dot(self, v):
        return self.x * v.x + self.y * v.y

    def cross(self, v):
        return self.x * v.y - self.y * v.x

    def length_sq(self):
        return self.x * self.x + self.y * self.y

    def length(self):
        return sqrt(self.length_sq())

    def normalize(self):
        # A zero vector stays zero.
        return self.divide_scalar(self.length() or 1)

    def vector_to(self, v):
        return Vector(self.context, v.x - self.x, v.y - self.y)

    def distance_to_sq(self, v):
        dx = v.x - self.x
        dy = v.y - self.y
        return dx * dx + dy * dy

    def distance_to(self, v):
        return sqrt(self.distance_to_sq(v))

    def rotate(self, angle):
        """Rotate counter-clockwise about the origin."""
        c = cos(angle)
        s = sin(angle)
        x = self.x
        y = self.y
        self.x = x * c - y * s
        self.y = x * s + y * c
        return self

    def angle_to(self, v):
        """Unsigned angle between the two directions, in [0, pi]."""
        denominator = sqrt(self.length_sq() * v.length_sq())
        if denominator == 0:
            return acos(0)
        theta = self.dot(v) / denominator
        return acos(max(-1.0, min(1.0, theta)))

    def min(self, v):
        self.x = min(self.x, v.x)
        self.y = min(self.y, v.y)
        return self

    def max(self, v):
        self.x = max(self.x, v.x)
        self.y = max(self.y, v.y)
        return self

    def round(self):
        """Snap to the nearest point of the integer grid."""
        if isfinite(self.x):
            self.x = int(round(self.x))
        if isfinite(self.y):
            self.y = int(round(self.y))
        return self
