"""
2D ray geometry for drawing and dragging the interface diagram.

Provides angle → direction projection, viewport clipping, angle arcs,
pointer → angle inversion with hit testing, and scene construction.
"""

from acoustic_snell.geometry.rays import (
    Quadrant,
    clip_to_rect,
    direction_from_angle,
    distance_point_to_segment,
    label_anchor,
    ray_endpoint,
)
from acoustic_snell.geometry.arcs import ArcParameters, arc_label_position, arc_parameters
from acoustic_snell.geometry.pointer import angle_from_pointer, hits_segment, round_to_tenth
from acoustic_snell.geometry.scene import RaySegment, Scene, build_scene

__all__ = [
    "Quadrant",
    "clip_to_rect",
    "direction_from_angle",
    "distance_point_to_segment",
    "label_anchor",
    "ray_endpoint",
    "ArcParameters",
    "arc_label_position",
    "arc_parameters",
    "angle_from_pointer",
    "hits_segment",
    "round_to_tenth",
    "RaySegment",
    "Scene",
    "build_scene",
]
