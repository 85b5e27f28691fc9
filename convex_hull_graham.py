import bisect
import logging
import math

from typing import Iterable

from geometry import Point, is_integral, points_equal
from graham_scan import CollinearityPolicy, graham_scan, prune_collinear
from merge_sort import merge_sort, polar_comparator


logger = logging.getLogger(__name__)


def as_point(p) -> Point:
    if isinstance(p, Point):
        return p
    x, y = p
    return Point(x, y)


def _has_close(unique: list[Point], keys: list[tuple], p: Point) -> bool:
    """
    Whether a kept point equals p within eps. unique is sorted by (x, y),
    so only the x columns closer than eps are visited, and in each column
    only the y range around p.y, found by bisection.
    """
    eps = Point.eps
    j = len(unique) - 1
    while j >= 0 and (p.x - keys[j][0] <= eps or keys[j][0] == p.x):
        x = keys[j][0]
        start = bisect.bisect_left(keys, (x, -math.inf), 0, j + 1)
        i = bisect.bisect_left(keys, (x, p.y - eps), start, j + 1)
        while i <= j and (keys[i][1] - p.y < eps or not math.isfinite(p.y)):
            if points_equal(unique[i], p):
                return True
            i += 1
        j = start - 1
    return False


def deduplicate(points: Iterable[Point]) -> list[Point]:
    """
    Drop repeated points, sort-then-scan. Result is sorted by (x, y).
    When every coordinate is integral duplicates are identical, so comparing
    neighbours is enough. Otherwise points within eps of each other may be
    interleaved in the sorted order (think 0 and -1e-13), and each point
    is looked up among the kept ones near it.
    """
    points = sorted(points)
    exact = all(is_integral(p.x) and is_integral(p.y) for p in points)

    unique: list[Point] = []
    keys: list[tuple] = []
    for p in points:
        if exact:
            if not unique or not points_equal(unique[-1], p):
                unique.append(p)
            continue

        if not _has_close(unique, keys, p):
            unique.append(p)
            keys.append((p.x, p.y))
    return unique


def lowest_point_index(points: list[Point]) -> int:
    """
    Index of the point with the smallest y, ties broken by the smallest x.
    """
    best = 0
    for i, p in enumerate(points):
        q = points[best]
        if p.y < q.y or (p.y == q.y and p.x < q.x):
            best = i
    return best


class GrahamHullBuilder:
    def __init__(
        self,
        policy: CollinearityPolicy = CollinearityPolicy.KEEP_EXTREME_ONLY,
        trace: bool = False
    ):
        self.policy = policy
        self.trace = trace
        self.points: list[Point] = []
        self.hull: list[Point] = []
        self.steps: list[tuple[Point, ...]] = []

    def set_points(self, points: Iterable) -> None:
        self.points = [as_point(p) for p in points]

    def build(self) -> list[Point]:
        self.hull = []
        self.steps = []

        n = len(self.points)
        if n <= 1:
            self.hull = list(self.points)
            return self.data()

        points = deduplicate(self.points)
        logger.debug("Deduplicated %d points to %d", n, len(points))
        if len(points) == 1:
            self.hull = points
            return self.data()

        i = lowest_point_index(points)
        points[0], points[i] = points[i], points[0]
        anchor = points[0]
        logger.debug("Anchor is %s", anchor)

        merge_sort(points, polar_comparator(anchor), lo=1)

        points = prune_collinear(points, self.policy)
        if len(points) == 2:
            logger.debug("All points are collinear, hull is the segment %s - %s", *points)
            self.hull = points
            return self.data()

        on_step = self.steps.append if self.trace else None
        self.hull = graham_scan(points, self.policy, on_step=on_step)
        logger.debug("Hull has %d vertices", len(self.hull))
        return self.data()

    def compute_hull(self, points: Iterable) -> list[Point]:
        self.set_points(points)
        return self.build()

    def data(self) -> list[Point]:
        return list(self.hull)

    def size(self) -> int:
        return len(self.hull)

    def __len__(self):
        return len(self.hull)
