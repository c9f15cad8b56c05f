"""
Inverse mapping from pointer positions to incidence angles.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from acoustic_snell.config import HIT_TOLERANCE, MIN_POINTER_RISE
from acoustic_snell.geometry.rays import distance_point_to_segment


def angle_from_pointer(pointer, origin) -> Optional[float]:
    """Incidence angle (degrees) for a pointer dragged above the interface.

    Parameters
    ----------
    pointer : array-like, shape (2,)
        Pointer position in surface coordinates.
    origin : array-like, shape (2,)
        Interface point the incident ray ends at.

    Returns
    -------
    angle : float or None
        None unless the pointer is strictly above the origin (by more than
        one pixel); otherwise atan2(|dx|, -dy) in degrees, clamped to [0, 90].
    """
    dx = float(pointer[0]) - float(origin[0])
    dy = float(pointer[1]) - float(origin[1])
    if not (np.isfinite(dx) and np.isfinite(dy)):
        return None
    if dy >= -MIN_POINTER_RISE:
        return None
    theta = float(np.degrees(np.arctan2(abs(dx), -dy)))
    return max(0.0, min(theta, 90.0))


def hits_segment(pointer, segment, tolerance: float = HIT_TOLERANCE) -> bool:
    """Whether ``pointer`` is within ``tolerance`` px of ``segment`` (start, end)."""
    if segment is None:
        return False
    start, end = segment
    return distance_point_to_segment(pointer, start, end) <= tolerance


def round_to_tenth(angle: float) -> float:
    """Round a dragged angle to 0.1°, with exact halves rounded up."""
    return math.floor(angle * 10 + 0.5) / 10
