"""
Text formatting of solved angles for display panels.
"""

from __future__ import annotations

import math
from typing import Optional

from acoustic_snell.physics.solver import AngleResult, CriticalAngleSet, WaveMode

PLACEHOLDER = "—"


def format_angle(angle: Optional[float]) -> str:
    """One decimal place, or a dash when there is no angle."""
    if angle is None or not math.isfinite(angle):
        return PLACEHOLDER
    return f"{angle:.1f}"


def format_result(result: AngleResult, critical: CriticalAngleSet) -> dict[str, str]:
    """Display strings keyed by angle symbol, in panel order."""
    return {
        "γL": format_angle(result.reflected_longitudinal.angle),
        "γS": format_angle(result.reflected_shear.angle),
        "βL": format_angle(result.refracted_longitudinal.angle),
        "βS": format_angle(result.refracted_shear.angle),
        "α1": format_angle(critical.alpha1.angle),
        "α2": format_angle(critical.alpha2.angle),
        "α3": format_angle(critical.alpha3.angle),
    }


def snell_relations(mode: WaveMode | str) -> dict[str, list[tuple[str, str]]]:
    """Snell's law chains sin(angle) / speed for the formula panel.

    Each chain reads  sin a / c_a = sin b / c_b = sin c / c_c.
    """
    mode = WaveMode.parse(mode)
    incident = ("sin αS", "cS1") if mode is WaveMode.SHEAR else ("sin αL", "cL1")
    return {
        "reflection": [incident, ("sin γL", "cL1"), ("sin γS", "cS1")],
        "refraction": [incident, ("sin βL", "cL2"), ("sin βS", "cS2")],
    }
