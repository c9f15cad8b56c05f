"""
Drawable scene geometry for one solved interface configuration.

Turns an ``AngleResult`` into clipped ray segments, angle arcs and label
anchors for a given viewport. Branches without a propagating ray
(evanescent, not applicable, invalid) are listed in ``Scene.hidden``
instead of being drawn. The scene is cheap to rebuild every frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from acoustic_snell.config import ARC_RADII, CLIP_MARGIN, Viewport
from acoustic_snell.geometry.arcs import ArcParameters, arc_label_position, arc_parameters
from acoustic_snell.geometry.rays import Quadrant, direction_from_angle, label_anchor, ray_endpoint
from acoustic_snell.physics.solver import AngleResult, Classification, WaveMode

# branch name → (display symbol, label, quadrant, arc-label nudge (pad, dx, dy))
_OUTGOING = {
    "reflected_longitudinal": ("γL", "Reflected L", Quadrant.UP_RIGHT, (14.0, -8.0, 5.0)),
    "reflected_shear":        ("γS", "Reflected S", Quadrant.UP_RIGHT, (16.0, -12.0, 7.0)),
    "refracted_longitudinal": ("βL", "Refracted L", Quadrant.DOWN_RIGHT, (14.0, -8.0, 5.0)),
    "refracted_shear":        ("βS", "Refracted S", Quadrant.DOWN_RIGHT, (16.0, -10.0, 6.0)),
}


def _bounded(value: float, lo: float, hi: float) -> float:
    return float(max(lo, min(hi, round(value))))


@dataclass(frozen=True)
class RaySegment:
    """One ray ready for drawing.

    Attributes
    ----------
    name : str
        'incident' or the branch name.
    symbol : str
        Angle symbol (αL, γS, βL, ...).
    label : str
        Ray caption.
    start, end : np.ndarray, shape (2,)
        Segment in travel direction (the incident ray ends at the origin).
    arc : ArcParameters
    arc_radius : float
    arc_label : np.ndarray, shape (2,)
        Anchor of the angle symbol.
    label_pos : np.ndarray, shape (2,)
        Anchor of the ray caption.
    classification : Classification
    """

    name:           str
    symbol:         str
    label:          str
    start:          np.ndarray
    end:            np.ndarray
    arc:            ArcParameters
    arc_radius:     float
    arc_label:      np.ndarray
    label_pos:      np.ndarray
    classification: Classification = Classification.REAL

    @property
    def length(self) -> float:
        return float(np.hypot(*(self.end - self.start)))


@dataclass
class Scene:
    """Everything a renderer needs for one frame."""

    viewport: Viewport
    origin:   np.ndarray
    incident: RaySegment
    rays:     list[RaySegment] = field(default_factory=list)
    hidden:   dict[str, Classification] = field(default_factory=dict)

    @property
    def incident_segment(self) -> tuple[np.ndarray, np.ndarray]:
        """Hit-test segment of the incident ray (start, origin)."""
        return self.incident.start, self.incident.end

    def ray(self, name: str) -> Optional[RaySegment]:
        for r in self.rays:
            if r.name == name:
                return r
        return None


def _incident_ray(result: AngleResult, viewport: Viewport, origin: np.ndarray,
                  margin: float) -> RaySegment:
    direction = direction_from_angle(result.incidence_angle, Quadrant.UP_LEFT)
    start = ray_endpoint(origin, direction, viewport.upper_rect, margin)

    back = _bounded(viewport.width / 30, 26, 44)
    side = _bounded(viewport.width / 70, 12, 22)
    # caption sits near the tail of the incident ray
    label_pos = label_anchor(origin, start, back, -side)

    symbol = "αS" if result.incident_mode is WaveMode.SHEAR else "αL"
    radius = ARC_RADII[symbol]
    ray_angle = float(np.arctan2(start[1] - origin[1], start[0] - origin[0]))
    arc = arc_parameters(ray_angle, "up")
    return RaySegment(
        name="incident",
        symbol=symbol,
        label=f"Incident {result.incident_mode.value}",
        start=start,
        end=origin.copy(),
        arc=arc,
        arc_radius=radius,
        arc_label=arc_label_position(origin, arc, radius),
        label_pos=label_pos,
    )


def build_scene(result: AngleResult, viewport: Viewport,
                margin: float = CLIP_MARGIN) -> Scene:
    """Project a solved configuration into drawable geometry.

    Parameters
    ----------
    result : AngleResult
        Output of ``acoustic_snell.physics.solve``.
    viewport : Viewport
        Drawing surface; reflections are clipped to its upper half,
        refractions to its lower half.
    margin : float
        Inset from the surface edges where rays must stop.

    Returns
    -------
    Scene
    """
    origin = np.asarray(viewport.origin, dtype=np.float64)
    scene = Scene(viewport, origin, _incident_ray(result, viewport, origin, margin))

    back = _bounded(viewport.width / 26, 28, 54)
    side = _bounded(viewport.width / 90, 10, 20)

    for name, branch in result.branches().items():
        if branch.angle is None or not branch.classification.drawable:
            scene.hidden[name] = branch.classification
            continue

        symbol, label, quadrant, (pad, dx, dy) = _OUTGOING[name]
        upper = quadrant is Quadrant.UP_RIGHT
        rect = viewport.upper_rect if upper else viewport.lower_rect

        direction = direction_from_angle(branch.angle, quadrant)
        end = ray_endpoint(origin, direction, rect, margin)

        ray_angle = float(np.arctan2(end[1] - origin[1], end[0] - origin[0]))
        arc = arc_parameters(ray_angle, "up" if upper else "down")
        radius = ARC_RADII[symbol]

        scene.rays.append(RaySegment(
            name=name,
            symbol=symbol,
            label=label,
            start=origin.copy(),
            end=end,
            arc=arc,
            arc_radius=radius,
            arc_label=arc_label_position(origin, arc, radius, pad, dx, dy),
            label_pos=label_anchor(origin, end, back, side if upper else -side),
            classification=branch.classification,
        ))

    return scene
