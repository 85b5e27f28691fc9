from typing import Iterable

from geometry import Point, orientation
from graham_scan import CollinearityPolicy
from convex_hull_graham import as_point, deduplicate, lowest_point_index


def monotone_chain(points: list[Point], policy: CollinearityPolicy) -> list[Point]:
    """
    Andrew's monotone chain algorithm for convex hull.
    Assumes input is deduplicated and sorted by (x, y), at least 2 points
    and not all of them collinear. Time complexity: O(n).
    Returns the hull counter-clockwise starting from the leftmost point.
    """
    lower = []  # lower hull
    for p in points:
        while len(lower) >= 2 and policy.pops(orientation(lower[-2], lower[-1], p)):
            lower.pop()
        lower.append(p)

    upper = []  # upper hull
    for p in reversed(points):
        while len(upper) >= 2 and policy.pops(orientation(upper[-2], upper[-1], p)):
            upper.pop()
        upper.append(p)

    # chain ends are shared
    return lower[:-1] + upper[:-1]


class AndrewHullBuilder:
    """
    Reference builder with the same output convention as GrahamHullBuilder:
    counter-clockwise, starting at the lowest (then leftmost) point.
    """
    def __init__(self, policy: CollinearityPolicy = CollinearityPolicy.KEEP_EXTREME_ONLY):
        self.policy = policy

    def compute_hull(self, points: Iterable) -> list[Point]:
        points = deduplicate(as_point(p) for p in points)
        if len(points) <= 1:
            return points

        first, last = points[0], points[-1]
        if all(orientation(first, last, p) == 0 for p in points):
            # segment between the extremes, lowest end first
            return [first, last] if (first.y, first.x) <= (last.y, last.x) else [last, first]

        hull = monotone_chain(points, self.policy)
        start = lowest_point_index(hull)
        return hull[start:] + hull[:start]
