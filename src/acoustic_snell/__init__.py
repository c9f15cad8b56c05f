"""
acoustic_snell — reflection, refraction and critical angles of elastic
waves at a planar interface between two media.

Subpackages
-----------
physics     Snell's law with mode conversion, critical angles, angle sweeps.
geometry    Ray projection, viewport clipping, angle arcs, pointer mapping.
utils       Text formatting and matplotlib plotting.
"""

from acoustic_snell.config import MEDIA, Material, Viewport, get_material
from acoustic_snell.interaction import InteractionContext, Selection
from acoustic_snell.physics import (
    AngleResult,
    Classification,
    CriticalAngleSet,
    Position,
    WaveMode,
    solve,
    sweep,
)
from acoustic_snell.geometry import build_scene

__version__ = "0.1.0"

__all__ = [
    "MEDIA",
    "Material",
    "Viewport",
    "get_material",
    "InteractionContext",
    "Selection",
    "AngleResult",
    "Classification",
    "CriticalAngleSet",
    "Position",
    "WaveMode",
    "solve",
    "sweep",
    "build_scene",
]
