import math
import numpy as np

from dataclasses import dataclass


Number = int | float | np.integer | np.floating


@dataclass(frozen=True)
class Point:
    """
    Equality is tolerance based for float coordinates while the hash is
    the exact one of the fields, so points holding floats do not belong
    in sets or dict keys. Use geometry.points_equal or deduplicate instead.
    """
    x: Number
    y: Number
    eps = 1e-12

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return points_equal(self, other)

    def __lt__(self, other):
        return (self.x, self.y) < (other.x, other.y)

    def __iter__(self):
        yield self.x
        yield self.y


def is_integral(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _widen(*points: Point) -> list:
    """
    Coordinates of all points in a common wide type.
    Integral input stays exact (python int has arbitrary precision),
    anything else goes to numpy.longdouble. On x86-64 Linux this is the
    80-bit extended type with a 64-bit mantissa, so orientation signs of
    float input are reliable roughly while |x|, |y| < 2**31.
    """
    coords = [c for p in points for c in (p.x, p.y)]
    if all(is_integral(c) for c in coords):
        return [int(c) for c in coords]
    return [np.longdouble(c) for c in coords]


def orientation(a: Point, b: Point, c: Point):
    """
    Cross product of vectors ab and ac.
    > 0 - counter-clockwise (left turn), < 0 - right turn, 0 - collinear.
    """
    ax, ay, bx, by, cx, cy = _widen(a, b, c)
    return (bx - ax) * (cy - ay) - (by - ay) * (cx - ax)


def distance_squared(a: Point, b: Point):
    ax, ay, bx, by = _widen(a, b)
    return (bx - ax) ** 2 + (by - ay) ** 2


def _coord_equal(u, v, eps: float) -> bool:
    if is_integral(u) and is_integral(v):
        return u == v
    if math.isfinite(u) and math.isfinite(v):
        return abs(u - v) < eps
    return u == v


def points_equal(a: Point, b: Point, eps: float | None = None) -> bool:
    """
    Exact comparison for integer coordinates, tolerance based otherwise.
    """
    if eps is None:
        eps = Point.eps
    return bool(_coord_equal(a.x, b.x, eps) and _coord_equal(a.y, b.y, eps))
