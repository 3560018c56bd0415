from __future__ import annotations

import math
from typing import Callable, Literal, Sequence

import numpy as np

from rgbcurve.services.points import clamp, sort_points
from rgbcurve.services.schemas import (
    MAX_VALUE,
    ChannelPointSet,
    InterpolationKind,
    PointLike,
    round_half_up,
)

CatmullRomEnds = Literal["clamp", "mirror"]

Interpolator = Callable[[Sequence[PointLike], float], int]
CurveSampler = Callable[[Sequence[PointLike], np.ndarray], np.ndarray]


def _to_output(value: float) -> int:
    return int(clamp(round_half_up(value), 0, MAX_VALUE))


def _to_output_array(values: np.ndarray) -> np.ndarray:
    return np.clip(np.floor(values + 0.5), 0, MAX_VALUE).astype(np.int64)


def _find_segment(xs: Sequence[int], x: float) -> int:
    i = 0
    while i < len(xs) - 1 and xs[i + 1] < x:
        i += 1
    return i


def _find_segments(xs: np.ndarray, xq: np.ndarray) -> np.ndarray:
    # Same choice as _find_segment: first segment whose upper x is >= the query
    return np.minimum(np.searchsorted(xs[1:], xq, side="left"), len(xs) - 2)


def _hermite_tangents(pts: ChannelPointSet, i: int) -> tuple[float, float]:
    """Limited tangents (m0, m1) at both ends of segment ``i``; dx must be non-zero."""
    n = len(pts)
    x0, y0 = pts[i]
    x1, y1 = pts[i + 1]
    slope = (y1 - y0) / (x1 - x0)

    # Average of neighbouring secants, one-sided at the ends
    if i == 0:
        m0 = slope
    else:
        prev_dx = x0 - pts[i - 1].x
        prev_dy = y0 - pts[i - 1].y
        m0 = 0.0 if prev_dx == 0 else (slope + prev_dy / prev_dx) / 2

    if i == n - 2:
        m1 = slope
    else:
        next_dx = pts[i + 2].x - x1
        next_dy = pts[i + 2].y - y1
        m1 = 0.0 if next_dx == 0 else (slope + next_dy / next_dx) / 2

    if slope == 0:
        return 0.0, 0.0

    alpha = m0 / slope
    beta = m1 / slope
    if alpha < 0:
        m0 = 0.0
    if beta < 0:
        m1 = 0.0
    s = alpha * alpha + beta * beta
    if s > 9:
        tau = 3 / math.sqrt(s)
        m0 = tau * alpha * slope
        m1 = tau * beta * slope
    return m0, m1


def monotone_cubic_interpolation(points: Sequence[PointLike], x: float) -> int:
    """Evaluate a Fritsch-Carlson monotone cubic Hermite spline at ``x``.

    Outside the control points the curve is flat. An empty point set echoes
    ``x`` and a single point yields its own y.
    """
    pts = sort_points(points)
    n = len(pts)
    if n == 0:
        return x
    if n == 1:
        return pts[0].y
    if x <= pts[0].x:
        return pts[0].y
    if x >= pts[-1].x:
        return pts[-1].y

    i = _find_segment([p.x for p in pts], x)
    x0, y0 = pts[i]
    x1, y1 = pts[i + 1]
    dx = x1 - x0
    if dx == 0:
        return y0

    m0, m1 = _hermite_tangents(pts, i)

    t = (x - x0) / dx
    t2 = t * t
    t3 = t2 * t
    h00 = 2 * t3 - 3 * t2 + 1
    h10 = t3 - 2 * t2 + t
    h01 = -2 * t3 + 3 * t2
    h11 = t3 - t2

    return _to_output(h00 * y0 + h10 * dx * m0 + h01 * y1 + h11 * dx * m1)


def _catmull_rom_window(
    pts: ChannelPointSet, i: int, ends: CatmullRomEnds
) -> tuple[int, int, int, int]:
    """y-values p0..p3 around segment ``i``, with phantom neighbours at the ends."""
    n = len(pts)
    y1, y2 = pts[i].y, pts[i + 1].y

    if i > 0:
        y0 = pts[i - 1].y
    elif ends == "mirror":
        y0 = 2 * y1 - y2
    else:
        y0 = y1

    if i + 2 < n:
        y3 = pts[i + 2].y
    elif ends == "mirror":
        y3 = 2 * y2 - y1
    else:
        y3 = y2
    return y0, y1, y2, y3


def catmull_rom_interpolation(
    points: Sequence[PointLike],
    x: float,
    ends: CatmullRomEnds = "mirror",
) -> int:
    """Evaluate a uniform Catmull-Rom spline through the y-values at ``x``.

    No overshoot limiter is applied; only the final value is clamped to
    [0, 255]. ``ends`` selects the phantom neighbour on the outer segments:
    ``"clamp"`` repeats the endpoint, ``"mirror"`` reflects the inner
    neighbour through the endpoint so straight runs stay straight.
    ``"clamp"`` reproduces the JavaScript curve editor's tables bit for bit.
    """
    pts = sort_points(points)
    n = len(pts)
    if n == 0:
        return x
    if n == 1:
        return pts[0].y
    if x <= pts[0].x:
        return pts[0].y
    if x >= pts[-1].x:
        return pts[-1].y

    i = _find_segment([p.x for p in pts], x)
    p1 = pts[i]
    p2 = pts[i + 1]
    dx = p2.x - p1.x
    if dx == 0:
        return p1.y

    y0, y1, y2, y3 = _catmull_rom_window(pts, i, ends)
    t = (x - p1.x) / dx
    t2 = t * t
    t3 = t2 * t

    result = 0.5 * (
        2 * y1
        + (-y0 + y2) * t
        + (2 * y0 - 5 * y1 + 4 * y2 - y3) * t2
        + (-y0 + 3 * y1 - 3 * y2 + y3) * t3
    )
    return _to_output(result)


def _sample_segments(
    pts: ChannelPointSet,
    xq: np.ndarray,
    evaluate: Callable[[np.ndarray, np.ndarray], np.ndarray],
) -> np.ndarray:
    """Shared driver for the vectorised samplers.

    ``evaluate(idx, t)`` returns unrounded curve values for queries lying
    strictly inside non-degenerate segments.
    """
    xq = np.asarray(xq, dtype=np.float64)
    n = len(pts)
    if n == 0:
        return xq.copy()
    ys = np.array([p.y for p in pts], dtype=np.float64)
    if n == 1:
        return np.full_like(xq, ys[0])

    xs = np.array([p.x for p in pts], dtype=np.float64)
    idx = _find_segments(xs, xq)
    dx = xs[idx + 1] - xs[idx]
    degenerate = dx == 0
    t = (xq - xs[idx]) / np.where(degenerate, 1.0, dx)

    result = _to_output_array(evaluate(idx, t)).astype(np.float64)
    result[degenerate] = ys[idx][degenerate]
    result[xq >= xs[-1]] = ys[-1]
    result[xq <= xs[0]] = ys[0]
    return result


def monotone_cubic_curve(points: Sequence[PointLike], xq: np.ndarray) -> np.ndarray:
    """``monotone_cubic_interpolation`` over an array of queries, sorting once."""
    pts = sort_points(points)
    n = len(pts)
    m0 = np.zeros(max(n - 1, 0))
    m1 = np.zeros(max(n - 1, 0))
    for i in range(n - 1):
        if pts[i + 1].x != pts[i].x:
            m0[i], m1[i] = _hermite_tangents(pts, i)
    xs = np.array([p.x for p in pts], dtype=np.float64)
    ys = np.array([p.y for p in pts], dtype=np.float64)

    def evaluate(idx: np.ndarray, t: np.ndarray) -> np.ndarray:
        dx = xs[idx + 1] - xs[idx]
        t2 = t * t
        t3 = t2 * t
        h00 = 2 * t3 - 3 * t2 + 1
        h10 = t3 - 2 * t2 + t
        h01 = -2 * t3 + 3 * t2
        h11 = t3 - t2
        return h00 * ys[idx] + h10 * dx * m0[idx] + h01 * ys[idx + 1] + h11 * dx * m1[idx]

    return _sample_segments(pts, xq, evaluate)


def catmull_rom_curve(
    points: Sequence[PointLike],
    xq: np.ndarray,
    ends: CatmullRomEnds = "mirror",
) -> np.ndarray:
    """``catmull_rom_interpolation`` over an array of queries, sorting once."""
    pts = sort_points(points)
    window = np.array(
        [_catmull_rom_window(pts, i, ends) for i in range(len(pts) - 1)],
        dtype=np.float64,
    ).reshape(-1, 4)

    def evaluate(idx: np.ndarray, t: np.ndarray) -> np.ndarray:
        y0, y1, y2, y3 = window[idx].T
        t2 = t * t
        t3 = t2 * t
        return 0.5 * (
            2 * y1
            + (-y0 + y2) * t
            + (2 * y0 - 5 * y1 + 4 * y2 - y3) * t2
            + (-y0 + 3 * y1 - 3 * y2 + y3) * t3
        )

    return _sample_segments(pts, xq, evaluate)


INTERPOLATION_KINDS: tuple[InterpolationKind, ...] = ("monotone", "catmullRom")


def _check_kind(kind: str) -> None:
    if kind not in INTERPOLATION_KINDS:
        raise ValueError(
            f"unknown interpolation '{kind}', expected one of {INTERPOLATION_KINDS}"
        )


def get_interpolator(kind: str, catmull_rom_ends: CatmullRomEnds = "mirror") -> Interpolator:
    _check_kind(kind)
    if kind == "monotone":
        return monotone_cubic_interpolation
    return lambda points, x: catmull_rom_interpolation(points, x, ends=catmull_rom_ends)


def get_curve_sampler(kind: str, catmull_rom_ends: CatmullRomEnds = "mirror") -> CurveSampler:
    _check_kind(kind)
    if kind == "monotone":
        return monotone_cubic_curve
    return lambda points, xq: catmull_rom_curve(points, xq, ends=catmull_rom_ends)
