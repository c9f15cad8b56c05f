"""
Angle annotation arcs between a ray and the interface normal.

Canvas angle convention: radians measured from +x towards +y (screen
down), so the upward normal sits at -π/2 and the downward one at +π/2.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ArcParameters:
    """Arc from the normal to a ray.

    Attributes
    ----------
    start, end : float
        Canvas angles in radians; ``start`` is always the normal.
    side : str
        'left' or 'right' of the normal, on screen.
    anticlockwise : bool
        Sweep direction for canvas-style arc drawing (decreasing angle).
    """

    start:         float
    end:           float
    side:          str
    anticlockwise: bool

    @property
    def sweep(self) -> float:
        """Acute angle spanned by the arc, radians in [0, π/2]."""
        return abs(self.end - self.start)

    @property
    def mid(self) -> float:
        return (self.start + self.end) / 2.0

    @property
    def sweep_degrees(self) -> float:
        return float(np.degrees(self.sweep))


def arc_parameters(ray_angle: float, half: str) -> ArcParameters:
    """Acute arc between a ray and the normal of its half-plane.

    Parameters
    ----------
    ray_angle : float
        Absolute canvas angle of the ray in radians (atan2(dy, dx)).
    half : str
        'up' for rays in the upper medium, 'down' for the lower one.

    Returns
    -------
    ArcParameters
        Never the reflex angle: rays pointing towards the other half are
        measured against the near side of the normal. A non-finite
        ``ray_angle`` gives a zero-sweep arc on the normal.
    """
    base = -np.pi / 2 if half == "up" else np.pi / 2
    if not math.isfinite(ray_angle):
        return ArcParameters(float(base), float(base), "right", False)

    # wrap into (-π, π]
    d = math.remainder(ray_angle - base, 2 * math.pi)
    if d == -math.pi:
        d = math.pi
    acute = min(abs(d), np.pi - abs(d))

    anticlockwise = bool(d < 0)
    end = base - acute if anticlockwise else base + acute
    # screen side of the normal the arc opens towards
    side = "right" if np.cos(end) > -1e-12 else "left"
    return ArcParameters(float(base), float(end), side, anticlockwise)


def arc_label_position(origin, arc: ArcParameters, radius: float, pad: float = 14.0,
                       dx: float = -8.0, dy: float = 5.0) -> np.ndarray:
    """Text anchor just outside the arc midpoint, nudged by (dx, dy)."""
    r = radius + pad
    return np.array([
        float(origin[0]) + r * np.cos(arc.mid) + dx,
        float(origin[1]) + r * np.sin(arc.mid) + dy,
    ])
