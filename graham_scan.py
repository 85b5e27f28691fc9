import enum
import logging

from typing import Callable

from geometry import Point, orientation


logger = logging.getLogger(__name__)


class CollinearityPolicy(enum.Enum):
    KEEP_EXTREME_ONLY = "keep-extreme-only"
    KEEP_ALL_ON_EDGES = "keep-all-on-edges"

    def pops(self, turn) -> bool:
        """
        Whether the top of the stack has to go, given the turn
        (second from top, top, next point).
        """
        if self is CollinearityPolicy.KEEP_ALL_ON_EDGES:
            return turn < 0
        return turn <= 0


def collinear_runs(points: list[Point]) -> list[list[Point]]:
    """
    Split polar-sorted points (anchor at index 0 excluded) into maximal runs
    lying on one ray from the anchor.
    """
    anchor = points[0]
    runs: list[list[Point]] = []
    for p in points[1:]:
        if runs and orientation(anchor, runs[-1][-1], p) == 0:
            runs[-1].append(p)
        else:
            runs.append([p])
    return runs


def prune_collinear(
    points: list[Point],
    policy: CollinearityPolicy = CollinearityPolicy.KEEP_EXTREME_ONLY
) -> list[Point]:
    """
    Keep one point (the farthest) per ray from the anchor.

    With KEEP_ALL_ON_EDGES the first and the last rays are hull edges
    through the anchor, so their runs are kept whole: the first one
    nearest first, the last one farthest first, which is the order
    they are walked in counter-clockwise. If everything lies on a single ray
    the result is always the anchor and the farthest point.
    """
    runs = collinear_runs(points)
    keep_edges = policy is CollinearityPolicy.KEEP_ALL_ON_EDGES and len(runs) > 1

    pruned = [points[0]]
    for i, run in enumerate(runs):
        if keep_edges and i == 0:
            pruned.extend(run)
        elif keep_edges and i == len(runs) - 1:
            pruned.extend(reversed(run))
        else:
            pruned.append(run[-1])

    logger.debug("Pruned %d sorted points to %d (%d rays)", len(points), len(pruned), len(runs))
    return pruned


def graham_scan(
    points: list[Point],
    policy: CollinearityPolicy = CollinearityPolicy.KEEP_EXTREME_ONLY,
    on_step: Callable[[tuple[Point, ...]], None] | None = None
) -> list[Point]:
    """
    Graham's scan over pruned points sorted by polar angle, anchor first.
    Returns the stack bottom to top, i.e. the hull counter-clockwise
    starting at the anchor. on_step receives a snapshot of the stack
    after every push and pop.
    """
    assert len(points) >= 2, "scan needs the anchor and at least one more point"

    stack = [points[0], points[1]]
    if on_step is not None:
        on_step(tuple(stack))

    for p in points[2:]:
        while len(stack) >= 2 and policy.pops(orientation(stack[-2], stack[-1], p)):
            stack.pop()
            if on_step is not None:
                on_step(tuple(stack))
        stack.append(p)
        if on_step is not None:
            on_step(tuple(stack))

    assert stack[0] is points[0], "anchor must never leave the stack"
    return stack
