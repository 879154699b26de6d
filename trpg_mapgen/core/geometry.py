"""Plane geometry helpers used for spacing and crossing checks."""

import math
from typing import Sequence

Point = Sequence[float]

EPSILON = 1e-9


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def angle(a: Point, b: Point) -> float:
    """Direction from ``a`` to ``b`` in radians, in ``(-pi, pi]``."""
    return math.atan2(b[1] - a[1], b[0] - a[0])


def orientation(a: Point, b: Point, c: Point) -> float:
    """Signed area of the parallelogram a-b-c.

    Positive when ``c`` lies to the left of the directed line a->b,
    negative to the right, zero when collinear.
    """
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def on_segment(a: Point, b: Point, p: Point, eps: float = EPSILON) -> bool:
    """Check whether ``p`` lies on the closed segment a-b."""
    if abs(orientation(a, b, p)) > eps:
        return False
    return (
        min(a[0], b[0]) - eps <= p[0] <= max(a[0], b[0]) + eps
        and min(a[1], b[1]) - eps <= p[1] <= max(a[1], b[1]) + eps
    )


def same_point(a: Point, b: Point, eps: float = EPSILON) -> bool:
    return abs(a[0] - b[0]) <= eps and abs(a[1] - b[1]) <= eps


def segments_intersect(p1: Point, p2: Point, p3: Point, p4: Point, eps: float = EPSILON) -> bool:
    """
    Test whether segments p1-p2 and p3-p4 meet anywhere except a shared endpoint.

    Proper crossings count, as does an endpoint resting on the interior of
    the other segment and a collinear overlap running past a shared
    endpoint. Two segments with the same pair of endpoints do not count.

    Args:
        p1, p2: Endpoints of the first segment
        p3, p4: Endpoints of the second segment
        eps: Tolerance for the collinearity and coincidence tests

    Returns:
        True if the segments intersect outside of shared endpoints
    """
    # Quick reject on bounding boxes
    if (
        max(p1[0], p2[0]) < min(p3[0], p4[0]) - eps
        or max(p3[0], p4[0]) < min(p1[0], p2[0]) - eps
        or max(p1[1], p2[1]) < min(p3[1], p4[1]) - eps
        or max(p3[1], p4[1]) < min(p1[1], p2[1]) - eps
    ):
        return False

    d1 = orientation(p3, p4, p1)
    d2 = orientation(p3, p4, p2)
    d3 = orientation(p1, p2, p3)
    d4 = orientation(p1, p2, p4)

    if ((d1 > eps and d2 < -eps) or (d1 < -eps and d2 > eps)) and (
        (d3 > eps and d4 < -eps) or (d3 < -eps and d4 > eps)
    ):
        return True

    # Touching or collinear: an endpoint lying on the other segment is a hit
    # unless that endpoint is one the segments share.
    shared = [p for p in (p1, p2) if same_point(p, p3, eps) or same_point(p, p4, eps)]

    def _is_shared(p: Point) -> bool:
        return any(same_point(p, s, eps) for s in shared)

    for p, a, b in ((p1, p3, p4), (p2, p3, p4), (p3, p1, p2), (p4, p1, p2)):
        if on_segment(a, b, p, eps) and not _is_shared(p):
            return True
    return False
