from typing import Callable, TypeVar

from geometry import Point, orientation, distance_squared


T = TypeVar("T")
Comparator = Callable[[T, T], int]


def merge_sort(items: list[T], compare: Comparator, lo: int = 0, hi: int | None = None) -> list[T]:
    """
    Stable top-down merge sort of items[lo:hi], in place.
    compare(a, b) < 0 means a goes first, 0 means a tie
    (ties keep their input order). Time O(n log n), extra space O(n).
    """
    if hi is None:
        hi = len(items)
    if hi - lo < 2:
        return items

    buffer = items.copy()
    _sort(items, buffer, lo, hi, compare)
    return items


def _sort(items: list, buffer: list, lo: int, hi: int, compare: Comparator):
    if hi - lo < 2:
        return
    mid = (lo + hi) // 2
    _sort(items, buffer, lo, mid, compare)
    _sort(items, buffer, mid, hi, compare)
    _merge(items, buffer, lo, mid, hi, compare)


def _merge(items: list, buffer: list, lo: int, mid: int, hi: int, compare: Comparator):
    buffer[lo:hi] = items[lo:hi]

    i, j = lo, mid
    for k in range(lo, hi):
        # take from the left half on ties, this keeps the sort stable
        if j >= hi or (i < mid and compare(buffer[i], buffer[j]) <= 0):
            items[k] = buffer[i]
            i += 1
        else:
            items[k] = buffer[j]
            j += 1


def polar_comparator(anchor: Point) -> Comparator:
    """
    Order points counter-clockwise by polar angle around the anchor.
    Points on the same ray from the anchor go nearer first.
    Only valid for points above the anchor or to the right of it
    on the same horizontal line, which holds for the lowest-then-leftmost anchor.
    """
    def compare(a: Point, b: Point) -> int:
        turn = orientation(anchor, a, b)
        if turn > 0:
            return -1
        if turn < 0:
            return 1

        da = distance_squared(anchor, a)
        db = distance_squared(anchor, b)
        if da < db:
            return -1
        if da > db:
            return 1
        return 0

    return compare
