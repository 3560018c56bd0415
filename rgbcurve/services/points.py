"""Control point operations for a single channel.

Every function takes a sequence of points and returns a new sorted tuple, or
``None`` when the requested change is rejected. Inputs are never modified.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from rgbcurve.services.schemas import (
    MAX_VALUE,
    MIN_POINT_DISTANCE,
    MIN_POINTS,
    ChannelPointSet,
    CurvePoint,
    PointLike,
    as_point,
    default_points,
)


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def sort_points(points: Sequence[PointLike]) -> ChannelPointSet:
    """Stable sort by ascending x."""
    return tuple(sorted((as_point(p) for p in points), key=lambda p: p.x))


def find_insert_index(points: Sequence[PointLike], x: float) -> int:
    """Index in sorted order at which a point at ``x`` would land."""
    for i, p in enumerate(sort_points(points)):
        if p.x > x:
            return i
    return len(points)


def is_point_near(p1: PointLike, p2: PointLike, threshold: float) -> bool:
    a, b = as_point(p1), as_point(p2)
    return math.hypot(a.x - b.x, a.y - b.y) <= threshold


def insert_point(points: Sequence[PointLike], point: PointLike) -> ChannelPointSet | None:
    new_point = as_point(point)
    current = sort_points(points)
    for p in current:
        if abs(p.x - new_point.x) < MIN_POINT_DISTANCE:
            logging.debug(
                "Rejected point %s: within %d of existing point %s",
                tuple(new_point), MIN_POINT_DISTANCE, tuple(p),
            )
            return None
    return sort_points(current + (new_point,))


def remove_point(points: Sequence[PointLike], index: int) -> ChannelPointSet | None:
    current = sort_points(points)
    if len(current) <= MIN_POINTS:
        logging.debug("Rejected removal: channel already has %d points", len(current))
        return None
    if index <= 0 or index >= len(current) - 1:
        logging.debug("Rejected removal of point %d: endpoints are permanent", index)
        return None
    return current[:index] + current[index + 1:]


def update_point(
    points: Sequence[PointLike], index: int, point: PointLike
) -> ChannelPointSet | None:
    """Move one point, keeping endpoints on the x borders and interior points
    at least MIN_POINT_DISTANCE away from their current neighbours."""
    current = sort_points(points)
    if not 0 <= index < len(current):
        logging.debug("Rejected update: no point at index %d", index)
        return None

    target = as_point(point)
    if index == 0:
        x = 0
    elif index == len(current) - 1:
        x = MAX_VALUE
    else:
        lo = current[index - 1].x + MIN_POINT_DISTANCE
        hi = current[index + 1].x - MIN_POINT_DISTANCE
        x = int(clamp(target.x, lo, hi))
    y = int(clamp(target.y, 0, MAX_VALUE))

    moved = list(current)
    moved[index] = CurvePoint(x, y)
    return sort_points(moved)


def normalize_points(points: Sequence[PointLike]) -> ChannelPointSet:
    """Re-establish the channel invariants on externally supplied points.

    Coordinates are clamped, the first and last points are anchored to x=0 and
    x=255, and interior points crowding a kept neighbour are dropped. Fewer
    than two points yields the diagonal.
    """
    current = sort_points(points)
    if len(current) < MIN_POINTS:
        logging.warning(
            "Imported channel has %d point(s), using the default diagonal", len(current)
        )
        return default_points()

    first = CurvePoint(0, current[0].y)
    last = CurvePoint(MAX_VALUE, current[-1].y)
    kept = [first]
    for p in current[1:-1]:
        if p.x - kept[-1].x >= MIN_POINT_DISTANCE and last.x - p.x >= MIN_POINT_DISTANCE:
            kept.append(p)
    kept.append(last)

    result = tuple(kept)
    if result != current:
        logging.warning(
            "Imported channel adjusted from %d to %d point(s) to satisfy spacing rules",
            len(current), len(result),
        )
    return result
