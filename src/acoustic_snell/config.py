"""
Configuration module for acoustic interface angle computations.

Defines the material dataclass and medium catalog, the drawing viewport,
and the numeric tolerances shared by the solver, the ray geometry and
the interaction layer.

All speeds are in m/s and all public angles are in degrees. Screen
coordinates are in CSS-style pixels with the y axis pointing down
(from the upper medium into the lower medium).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

# — Solver tolerances ————————————————————————————————————————————————————————
MAX_INCIDENCE_DEG   = 89.999  # grazing incidence is excluded
AT_CRITICAL_EPS_DEG = 1e-6
SINE_TOL            = 1e-12   # |sin| within this of 1 counts as critical

# — Geometry / interaction ———————————————————————————————————————————————————
CLIP_MARGIN        = 22.0
PARALLEL_EPS       = 1e-9
HIT_TOLERANCE      = 12.0
MIN_POINTER_RISE   = 1.0
INTERFACE_FRACTION = 0.52
MIN_VIEWPORT_SIZE  = 20

# Arc radii (px) of the angle annotations, keyed by display symbol.
ARC_RADII = {
    "αL": 52.0,
    "αS": 52.0,
    "γL": 58.0,
    "γS": 78.0,
    "βL": 78.0,
    "βS": 104.0,
}


def is_valid_speed(c: Optional[float]) -> bool:
    """Whether ``c`` is a usable wave speed (present, finite and > 0)."""
    return c is not None and math.isfinite(c) and c > 0


@dataclass(frozen=True)
class Material:
    """Acoustic medium on one side of the interface.

    Parameters
    ----------
    name : str
        Human-readable material name.
    c_longitudinal : float, optional
        Longitudinal wave speed in m/s.
    c_transversal : float, optional
        Transversal (shear) wave speed in m/s. None for fluids.
    """

    name: str
    c_longitudinal: Optional[float]
    c_transversal: Optional[float] = None

    @property
    def supports_shear(self) -> bool:
        """Whether a shear wave can propagate (valid shear speed)."""
        return is_valid_speed(self.c_transversal)

    def speed(self, mode) -> Optional[float]:
        """Speed of the given wave mode (``WaveMode`` or ``"L"``/``"S"``)."""
        key = getattr(mode, "value", mode)
        if key == "L":
            return self.c_longitudinal
        if key == "S":
            return self.c_transversal
        raise ValueError(f"Unknown wave mode: {mode!r}")


# — Medium catalog ———————————————————————————————————————————————————————————
STEEL = Material("Steel", 5900.0, 3230.0)
RAIL_STEEL = Material("Rail steel (carbon steel)", 5900.0, 3230.0)
ALUMINUM = Material("Aluminum", 6320.0, 3130.0)
COPPER = Material("Copper", 4760.0, 2320.0)
BRASS = Material("Brass", 4700.0, 2100.0)
TITANIUM_ALLOY = Material("Titanium alloy", 6100.0, 3120.0)
STAINLESS_STEEL = Material("Stainless steel", 5790.0, 3100.0)
CAST_IRON = Material("Cast iron", 4500.0, 2500.0)
NICKEL_ALLOY = Material("Nickel alloy", 5800.0, 3000.0)
GLASS = Material("Glass", 5600.0, 3400.0)
ALUMINA = Material("Ceramic (alumina)", 10000.0, 6000.0)
LUCITE = Material("Lucite (PMMA)", 2730.0, 1340.0)
EPOXY = Material("Epoxy resin", 2500.0, 1200.0)
POLYETHYLENE = Material("Polyethylene", 1950.0, 650.0)
CONCRETE = Material("Concrete", 3200.0, 1800.0)
WATER = Material("Water", 1480.0)
ENGINE_OIL = Material("Engine oil", 1400.0)
AIR = Material("Air", 343.0)

MEDIA: dict[str, Material] = {
    m.name: m
    for m in (
        STEEL, RAIL_STEEL, ALUMINUM, COPPER, BRASS, TITANIUM_ALLOY,
        STAINLESS_STEEL, CAST_IRON, NICKEL_ALLOY, GLASS, ALUMINA, LUCITE,
        EPOXY, POLYETHYLENE, CONCRETE, WATER, ENGINE_OIL, AIR,
    )
}

DEFAULT_MEDIUM_1 = LUCITE.name
DEFAULT_MEDIUM_2 = STEEL.name


def get_material(name: str) -> Material:
    """Look up a catalog material by name (case-insensitive).

    Raises
    ------
    KeyError
        If no material of that name exists.
    """
    if name in MEDIA:
        return MEDIA[name]
    folded = name.casefold()
    for key, material in MEDIA.items():
        if key.casefold() == folded:
            return material
    raise KeyError(f"Unknown medium {name!r}; known media: {', '.join(MEDIA)}")


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in screen coordinates (y down)."""

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def shrink(self, margin: float) -> "Rect":
        """Rectangle moved inward by ``margin`` on all four sides."""
        return Rect(self.left + margin, self.top + margin,
                    self.right - margin, self.bottom - margin)

    def contains(self, point, tol: float = 0.0) -> bool:
        x, y = float(point[0]), float(point[1])
        return (self.left - tol <= x <= self.right + tol
                and self.top - tol <= y <= self.bottom + tol)


@dataclass(frozen=True)
class Viewport:
    """Drawing surface split into two half-planes by the interface.

    Parameters
    ----------
    width, height : int
        Surface size in pixels.
    """

    width: int = 900
    height: int = 675

    @classmethod
    def resized(cls, width: float, height: float) -> Optional["Viewport"]:
        """Viewport for a new surface size, or None while layout is unsettled."""
        if width < MIN_VIEWPORT_SIZE or height < MIN_VIEWPORT_SIZE:
            return None
        return cls(int(round(width)), int(round(height)))

    @property
    def interface_y(self) -> int:
        return int(round(self.height * INTERFACE_FRACTION))

    @property
    def origin(self) -> tuple[float, float]:
        """Point where the incident ray meets the interface."""
        return (float(round(self.width * 0.5)), float(self.interface_y))

    @property
    def upper_rect(self) -> Rect:
        """Medium 1 (incident side)."""
        return Rect(0.0, 0.0, float(self.width), float(self.interface_y))

    @property
    def lower_rect(self) -> Rect:
        """Medium 2 (refraction side)."""
        return Rect(0.0, float(self.interface_y), float(self.width), float(self.height))
