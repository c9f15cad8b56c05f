"""
Ray directions and viewport clipping.

Angles are measured from the interface normal. Screen coordinates have
the y axis pointing down, from the upper medium (medium 1) into the
lower medium (medium 2), with every ray anchored at the interface point.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from acoustic_snell.config import CLIP_MARGIN, PARALLEL_EPS, Rect


class Quadrant(str, Enum):
    """Which side of the normal a ray is drawn on."""

    UP_LEFT = "upLeft"        # incident ray (origin → source)
    UP_RIGHT = "upRight"      # reflections
    DOWN_RIGHT = "downRight"  # refractions


def direction_from_angle(angle: float, quadrant: Quadrant | str) -> np.ndarray:
    """Unit vector at ``angle`` degrees from the normal, in ``quadrant``.

    Parameters
    ----------
    angle : float
        Acute angle from the normal in degrees.
    quadrant : Quadrant or str

    Returns
    -------
    direction : np.ndarray, shape (2,)
    """
    t = np.radians(angle)
    quadrant = Quadrant(quadrant)
    if quadrant is Quadrant.UP_LEFT:
        return np.array([-np.sin(t), -np.cos(t)])
    if quadrant is Quadrant.UP_RIGHT:
        return np.array([np.sin(t), -np.cos(t)])
    return np.array([np.sin(t), np.cos(t)])


def clip_to_rect(origin, direction, rect: Rect, margin: float = CLIP_MARGIN) -> float:
    """Longest ray length that keeps ``origin + t·direction`` inside ``rect``.

    ``rect`` is shrunk inward by ``margin`` on all four sides. Each
    non-parallel component contributes the parameter at which the ray
    crosses the boundary it is heading towards; the minimum is taken.

    Returns
    -------
    t : float
        0.0 when the ray never meets a boundary (zero direction), when the
        minimum crossing lies behind the origin, or on non-finite input.
    """
    px, py = float(origin[0]), float(origin[1])
    vx, vy = float(direction[0]), float(direction[1])

    t_max = np.inf
    if vy > PARALLEL_EPS:
        t_max = min(t_max, (rect.bottom - margin - py) / vy)
    if vy < -PARALLEL_EPS:
        t_max = min(t_max, (rect.top + margin - py) / vy)
    if vx > PARALLEL_EPS:
        t_max = min(t_max, (rect.right - margin - px) / vx)
    if vx < -PARALLEL_EPS:
        t_max = min(t_max, (rect.left + margin - px) / vx)

    if not np.isfinite(t_max) or t_max < 0:
        return 0.0
    return float(t_max)


def ray_endpoint(origin, direction, rect: Rect, margin: float = CLIP_MARGIN) -> np.ndarray:
    """Endpoint of the clipped ray (``origin`` itself when nothing fits)."""
    origin = np.asarray(origin, dtype=np.float64)
    length = clip_to_rect(origin, direction, rect, margin)
    if length == 0.0:
        return origin.copy()
    return origin + length * np.asarray(direction, dtype=np.float64)


def distance_point_to_segment(point, seg_start, seg_end) -> float:
    """Euclidean distance from ``point`` to the segment [seg_start, seg_end]."""
    p = np.asarray(point, dtype=np.float64)
    a = np.asarray(seg_start, dtype=np.float64)
    b = np.asarray(seg_end, dtype=np.float64)

    v = b - a
    w = p - a
    c1 = float(np.dot(w, v))
    if c1 <= 0:
        return float(np.hypot(*(p - a)))
    c2 = float(np.dot(v, v))
    if c2 <= c1:
        return float(np.hypot(*(p - b)))
    foot = a + (c1 / c2) * v
    return float(np.hypot(*(p - foot)))


def label_anchor(start, end, back: float, side: float) -> np.ndarray:
    """Label position ``back`` px behind ``end`` along the ray, ``side`` px across it.

    Positive ``side`` moves to the right of the travel direction in
    screen coordinates.
    """
    start = np.asarray(start, dtype=np.float64)
    end = np.asarray(end, dtype=np.float64)
    a = np.arctan2(end[1] - start[1], end[0] - start[0])
    ux, uy = np.cos(a), np.sin(a)
    return np.array([end[0] - ux * back - uy * side,
                     end[1] - uy * back + ux * side])
