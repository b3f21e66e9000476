"""
Numeric context shared by every Vector and Polygon that must interoperate.

Coordinates are stored as integers on a grid where one floating-point unit equals `p` grid
units. With the default precision of 5 digits a float of 1.0 maps to 100000 grid units. The
grid keeps collinearity and area tests exact while the context converts to and from the
floating-point space at the edges.
"""

from polykernel.kernel.exceptions import ContextError

DEFAULT_PRECISION = 5
DEFAULT_EPSILON = 1.0

CONTEXT_SECTION = "context"


class Context:
    __slots__ = ("_precision", "_p", "_epsilon")

    def __init__(self, precision=DEFAULT_PRECISION, scale=None, epsilon=DEFAULT_EPSILON):
        """
        @param precision: decimal digits kept in the integer space, p = 10 ** precision
        @param scale: explicit scale factor, overrides precision when given
        @param epsilon: squared distance below which two points are coincident
        """
        if scale is None:
            if isinstance(precision, bool) or not isinstance(precision, int):
                raise ContextError(f"Precision must be an integer, got {precision!r}")
            if precision < 0:
                raise ContextError(f"Precision must not be negative, got {precision}")
            scale = 10**precision
        else:
            try:
                scale = float(scale)
            except (TypeError, ValueError) as e:
                raise ContextError(f"Scale must be numeric, got {scale!r}") from e
            if not scale > 0:
                raise ContextError(f"Scale must be positive, got {scale}")
            if scale.is_integer():
                scale = int(scale)
            precision = None
        try:
            epsilon = float(epsilon)
        except (TypeError, ValueError) as e:
            raise ContextError(f"Epsilon must be numeric, got {epsilon!r}") from e
        if not epsilon > 0:
            raise ContextError(f"Epsilon must be positive, got {epsilon}")
        object.__setattr__(self, "_precision", precision)
        object.__setattr__(self, "_p", scale)
        object.__setattr__(self, "_epsilon", epsilon)

    def __setattr__(self, key, value):
        raise AttributeError(f"Context is immutable, cannot set {key}")

    def __delattr__(self, key):
        raise AttributeError(f"Context is immutable, cannot delete {key}")

    def __repr__(self):
        if self._precision is not None:
            return f"Context(precision={self._precision}, epsilon={self._epsilon})"
        return f"Context(scale={self._p}, epsilon={self._epsilon})"

    def __eq__(self, other):
        if not isinstance(other, Context):
            return NotImplemented
        return self._p == other._p and self._epsilon == other._epsilon

    def __hash__(self):
        return hash((self._p, self._epsilon))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    @property
    def precision(self):
        return self._precision

    @property
    def p(self):
        return self._p

    @property
    def epsilon(self):
        return self._epsilon

    @classmethod
    def from_settings(cls, settings, section=CONTEXT_SECTION):
        """
        Build a context from the given section of a Settings object. Missing or unparsable
        keys fall back to the defaults, out of range values raise ContextError.
        """
        epsilon = settings.read_persistent(float, section, "epsilon", DEFAULT_EPSILON)
        scale = settings.read_persistent(float, section, "scale", None)
        if scale is not None:
            return cls(scale=scale, epsilon=epsilon)
        precision = settings.read_persistent(int, section, "precision", DEFAULT_PRECISION)
        return cls(precision=precision, epsilon=epsilon)

    def write_settings(self, settings, section=CONTEXT_SECTION):
        if self._precision is not None:
            settings.write_persistent(section, "precision", self._precision)
        else:
            settings.write_persistent(section, "scale", self._p)
        settings.write_persistent(section, "epsilon", self._epsilon)
