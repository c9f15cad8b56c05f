"""
Angle solving for elastic waves at a planar interface.

Provides the scalar solver used by the interactive diagram, a NumPy
angle sweep, and a Taichi-accelerated sweep for dense angle grids.
"""

from acoustic_snell.physics.solver import (
    AngleResult,
    BranchAngle,
    Classification,
    CriticalAngle,
    CriticalAngleSet,
    Position,
    SolverInput,
    SweepResult,
    WaveMode,
    classify_sine,
    critical_angle,
    solve,
    solve_input,
    sweep,
)
from acoustic_snell.physics.kernels import sweep_gpu

__all__ = [
    "AngleResult",
    "BranchAngle",
    "Classification",
    "CriticalAngle",
    "CriticalAngleSet",
    "Position",
    "SolverInput",
    "SweepResult",
    "WaveMode",
    "classify_sine",
    "critical_angle",
    "solve",
    "solve_input",
    "sweep",
    "sweep_gpu",
]
