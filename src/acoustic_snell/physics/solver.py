"""
Reflection, refraction and critical angles at a planar elastic interface.

Pure-Python / NumPy reference implementation. The scalar ``solve`` drives
the interactive diagram; ``sweep`` evaluates the same rules for an array
of incidence angles and is the ground truth for the Taichi kernel in
``acoustic_snell.physics.kernels``.

Algorithm
---------
1. Pick the incident speed C_inc = medium-1 speed of the incident mode.
2. Mode-preserving reflection mirrors the incidence angle.
3. Every other branch follows Snell's law for elastic waves:
       sin(θ) = sin(α) · C_target / C_inc
   with C_target the medium-1 speed of the other mode (converted
   reflection) or either medium-2 speed (refraction).
4. The sine is classified: |s| < 1 real, |s| = 1 critical (90°),
   |s| > 1 evanescent.
5. A critical incidence angle α_c = asin(C_inc / C_target) exists for a
   branch only when C_target > C_inc.

Anomalies (missing modes, evanescent branches, bad speeds) are returned
as classifications, never raised.
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

import numpy as np

from acoustic_snell.config import (
    AT_CRITICAL_EPS_DEG,
    MAX_INCIDENCE_DEG,
    SINE_TOL,
    Material,
    is_valid_speed,
)

logger = logging.getLogger(__name__)


class WaveMode(str, Enum):
    """Elastic wave mode."""

    LONGITUDINAL = "L"
    SHEAR = "S"

    @classmethod
    def parse(cls, value: "WaveMode | str") -> "WaveMode":
        """Accept a WaveMode, ``"L"``/``"S"`` or a spelled-out mode name."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key in ("l", "longitudinal", "p"):
            return cls.LONGITUDINAL
        if key in ("s", "shear", "transversal", "t"):
            return cls.SHEAR
        raise ValueError(f"Unknown wave mode: {value!r}")

    @property
    def other(self) -> "WaveMode":
        return WaveMode.SHEAR if self is WaveMode.LONGITUDINAL else WaveMode.LONGITUDINAL


class Classification(str, Enum):
    """Validity of one derived ray."""

    REAL = "real"
    CRITICAL = "critical"
    EVANESCENT = "evanescent"
    NOT_APPLICABLE = "na"
    INVALID = "invalid"

    @property
    def drawable(self) -> bool:
        """Whether a propagating ray exists to be drawn."""
        return self in (Classification.REAL, Classification.CRITICAL)


class Position(str, Enum):
    """Incidence angle relative to a critical angle."""

    BELOW = "below"
    AT = "at"
    ABOVE = "above"
    NOT_APPLICABLE = "na"


# Integer codes used by the array sweeps (CPU and GPU).
CLASS_CODES = {
    Classification.REAL:           0,
    Classification.CRITICAL:       1,
    Classification.EVANESCENT:     2,
    Classification.NOT_APPLICABLE: 3,
    Classification.INVALID:        4,
}
CODE_TO_CLASS = {code: cls for cls, code in CLASS_CODES.items()}

# Per-branch evaluation plan, shared by solve(), sweep() and the GPU kernel.
STATUS_SNELL   = 0
STATUS_MIRROR  = 1
STATUS_NA      = 2
STATUS_INVALID = 3

BRANCHES = (
    "reflected_longitudinal",
    "reflected_shear",
    "refracted_longitudinal",
    "refracted_shear",
)


@dataclass(frozen=True)
class BranchAngle:
    """Angle of one outgoing ray.

    Attributes
    ----------
    angle : float or None
        Angle from the interface normal in degrees, None when no
        propagating ray exists.
    classification : Classification
        Validity tag.
    sin_value : float or None
        Snell sine before classification (None when Snell's law was
        not evaluated).
    """

    angle:          Optional[float]
    classification: Classification
    sin_value:      Optional[float] = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "angle": self.angle,
            "classification": self.classification.value,
            "sin_value": self.sin_value,
        }


_INVALID = BranchAngle(None, Classification.INVALID)
_NOT_APPLICABLE = BranchAngle(None, Classification.NOT_APPLICABLE)


@dataclass(frozen=True)
class AngleResult:
    """All derived angles for one incidence configuration."""

    incident_mode:          WaveMode
    incidence_angle:        float
    reflected_longitudinal: BranchAngle
    reflected_shear:        BranchAngle
    refracted_longitudinal: BranchAngle
    refracted_shear:        BranchAngle

    def branches(self) -> dict[str, BranchAngle]:
        return {name: getattr(self, name) for name in BRANCHES}

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "incident_mode": self.incident_mode.value,
            "incidence_angle": self.incidence_angle,
        }
        for name, branch in self.branches().items():
            out[name] = branch.as_dict()
        return out


@dataclass(frozen=True)
class CriticalAngle:
    """Incidence angle at which ``branch`` reaches 90°."""

    angle:    Optional[float]
    position: Position
    branch:   str

    @property
    def exists(self) -> bool:
        return self.angle is not None


@dataclass(frozen=True)
class CriticalAngleSet:
    """Critical angles for the current incident mode.

    ``alpha1`` and ``alpha2`` belong to the refracted L and S branches;
    ``alpha3`` to the converted reflected L branch under shear incidence.
    """

    alpha1: CriticalAngle
    alpha2: CriticalAngle
    alpha3: CriticalAngle

    def __iter__(self):
        return iter((self.alpha1, self.alpha2, self.alpha3))

    def as_dict(self) -> dict[str, Any]:
        return {
            name: {"angle": c.angle, "position": c.position.value, "branch": c.branch}
            for name, c in zip(("alpha1", "alpha2", "alpha3"), self)
        }


def _check_numeric(incidence_angle: Any, speeds: tuple) -> None:
    assert isinstance(incidence_angle, numbers.Real), (
        f"incidence angle must be a real number, got {incidence_angle!r}"
    )
    for c in speeds:
        assert c is None or isinstance(c, numbers.Real), (
            f"wave speed must be a real number or None, got {c!r}"
        )


def clamp_incidence(angle: float) -> float:
    """Clamp an incidence angle into [0, MAX_INCIDENCE_DEG]; NaN passes through."""
    angle = float(angle)
    if math.isnan(angle):
        return angle
    return max(0.0, min(angle, MAX_INCIDENCE_DEG))


def classify_sine(sin_value: Optional[float]) -> BranchAngle:
    """Turn a Snell sine into an angle and classification.

    Parameters
    ----------
    sin_value : float or None
        sin(θ) of the outgoing ray. None means the branch does not exist.

    Returns
    -------
    BranchAngle
    """
    if sin_value is None:
        return _NOT_APPLICABLE
    if not math.isfinite(sin_value):
        return BranchAngle(None, Classification.INVALID, sin_value)
    a = abs(sin_value)
    if abs(a - 1.0) <= SINE_TOL:
        return BranchAngle(90.0, Classification.CRITICAL, sin_value)
    if a < 1.0:
        return BranchAngle(math.degrees(math.asin(sin_value)), Classification.REAL, sin_value)
    return BranchAngle(None, Classification.EVANESCENT, sin_value)


def critical_angle(c_inc: Optional[float], c_target: Optional[float]) -> Optional[float]:
    """Critical incidence angle in degrees, or None when it does not exist.

    Exists only for C_target > C_inc > 0; a slower target never reaches 90°.
    """
    if not (is_valid_speed(c_inc) and is_valid_speed(c_target)):
        return None
    if c_target <= c_inc:
        return None
    return math.degrees(math.asin(c_inc / c_target))


def relative_position(incidence_angle: float, critical: Optional[float]) -> Position:
    """Where the incidence angle lies relative to a critical angle."""
    if critical is None or not math.isfinite(critical) or not math.isfinite(incidence_angle):
        return Position.NOT_APPLICABLE
    d = incidence_angle - critical
    if abs(d) < AT_CRITICAL_EPS_DEG:
        return Position.AT
    return Position.BELOW if d < 0 else Position.ABOVE


def branch_plan(
    mode:  WaveMode,
    c_l1:  Optional[float],
    c_s1:  Optional[float],
    c_l2:  Optional[float],
    c_s2:  Optional[float],
) -> list[tuple[int, float]]:
    """Decide how each branch is evaluated for the given incident mode.

    Returns
    -------
    list of (status, ratio)
        One entry per name in ``BRANCHES``. ``ratio`` = C_target / C_inc
        for STATUS_SNELL entries, unused otherwise.
    """
    c_inc = c_l1 if mode is WaveMode.LONGITUDINAL else c_s1
    if not is_valid_speed(c_inc):
        return [(STATUS_INVALID, 0.0)] * len(BRANCHES)

    mirror = 0 if mode is WaveMode.LONGITUDINAL else 1
    plan = []
    for i, c_target in enumerate((c_l1, c_s1, c_l2, c_s2)):
        if i == mirror:
            plan.append((STATUS_MIRROR, 1.0))
        elif c_target is None:
            plan.append((STATUS_NA, 0.0))
        elif not is_valid_speed(c_target):
            plan.append((STATUS_INVALID, 0.0))
        else:
            plan.append((STATUS_SNELL, c_target / c_inc))
    return plan


def _evaluate_branch(status: int, ratio: float, alpha: float) -> BranchAngle:
    if status == STATUS_INVALID or math.isnan(alpha):
        return _INVALID
    if status == STATUS_NA:
        return _NOT_APPLICABLE
    sin_alpha = math.sin(math.radians(alpha))
    if status == STATUS_MIRROR:
        return BranchAngle(alpha, Classification.REAL, sin_alpha)
    return classify_sine(sin_alpha * ratio)


def critical_angle_values(
    mode:  WaveMode,
    c_l1:  Optional[float],
    c_s1:  Optional[float],
    c_l2:  Optional[float],
    c_s2:  Optional[float],
) -> tuple[Optional[float], Optional[float], Optional[float]]:
    """(alpha1, alpha2, alpha3) in degrees; alpha3 only for shear incidence."""
    if mode is WaveMode.LONGITUDINAL:
        return critical_angle(c_l1, c_l2), critical_angle(c_l1, c_s2), None
    return (
        critical_angle(c_s1, c_l2),
        critical_angle(c_s1, c_s2),
        critical_angle(c_s1, c_l1),
    )


def solve(
    incident_mode:   WaveMode | str,
    incidence_angle: float,
    c_l1:            Optional[float],
    c_s1:            Optional[float],
    c_l2:            Optional[float],
    c_s2:            Optional[float],
) -> tuple[AngleResult, CriticalAngleSet]:
    """Compute every reflected/refracted angle and the critical angles.

    Parameters
    ----------
    incident_mode : WaveMode or str
        Mode of the incident wave in medium 1.
    incidence_angle : float
        Angle from the normal in degrees; clamped into [0, 89.999].
    c_l1, c_s1 : float or None
        Longitudinal / shear speed of medium 1 (m/s).
    c_l2, c_s2 : float or None
        Longitudinal / shear speed of medium 2 (m/s).

    Returns
    -------
    result : AngleResult
    critical : CriticalAngleSet
    """
    mode = WaveMode.parse(incident_mode)
    _check_numeric(incidence_angle, (c_l1, c_s1, c_l2, c_s2))

    alpha = clamp_incidence(incidence_angle)
    plan = branch_plan(mode, c_l1, c_s1, c_l2, c_s2)
    branches = [_evaluate_branch(status, ratio, alpha) for status, ratio in plan]

    result = AngleResult(mode, alpha, *branches)

    a1, a2, a3 = critical_angle_values(mode, c_l1, c_s1, c_l2, c_s2)
    critical = CriticalAngleSet(
        alpha1=CriticalAngle(a1, relative_position(alpha, a1), "refracted_longitudinal"),
        alpha2=CriticalAngle(a2, relative_position(alpha, a2), "refracted_shear"),
        alpha3=CriticalAngle(a3, relative_position(alpha, a3), "reflected_longitudinal"),
    )

    logger.debug(
        "solve %s α=%.3f° → %s",
        mode.value, alpha,
        ", ".join(f"{name}={b.classification.value}" for name, b in zip(BRANCHES, branches)),
    )
    return result, critical


# — Request object ———————————————————————————————————————————————————————————

_WIRE_KEYS = {
    "incidentMode":          "incident_mode",
    "incidenceAngleDegrees": "incidence_angle",
    "speedLongitudinal1":    "c_l1",
    "speedShear1":           "c_s1",
    "speedLongitudinal2":    "c_l2",
    "speedShear2":           "c_s2",
}


@dataclass(frozen=True)
class SolverInput:
    """One solver request, in the shape exchanged with a host UI."""

    incident_mode:   WaveMode
    incidence_angle: float
    c_l1:            Optional[float]
    c_s1:            Optional[float]
    c_l2:            Optional[float]
    c_s2:            Optional[float]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SolverInput":
        """Build from camelCase wire keys or the equivalent snake_case keys."""
        values = {}
        for wire, attr in _WIRE_KEYS.items():
            if wire in data:
                values[attr] = data[wire]
            elif attr in data:
                values[attr] = data[attr]
            else:
                raise KeyError(f"Missing solver input field {wire!r}")
        values["incident_mode"] = WaveMode.parse(values["incident_mode"])
        return cls(**values)

    @classmethod
    def from_materials(cls, incident_mode: WaveMode | str, incidence_angle: float,
                       medium1: Material, medium2: Material) -> "SolverInput":
        return cls(
            WaveMode.parse(incident_mode), incidence_angle,
            medium1.speed(WaveMode.LONGITUDINAL), medium1.speed(WaveMode.SHEAR),
            medium2.speed(WaveMode.LONGITUDINAL), medium2.speed(WaveMode.SHEAR),
        )

    def speeds(self) -> tuple[Optional[float], ...]:
        return (self.c_l1, self.c_s1, self.c_l2, self.c_s2)


def solve_input(request: SolverInput | Mapping[str, Any]) -> tuple[AngleResult, CriticalAngleSet]:
    """Run ``solve`` on a SolverInput or a wire-format mapping."""
    if not isinstance(request, SolverInput):
        request = SolverInput.from_dict(request)
    return solve(request.incident_mode, request.incidence_angle, *request.speeds())


# — Array sweep ——————————————————————————————————————————————————————————————

@dataclass
class BranchSweep:
    """One branch evaluated over many incidence angles.

    Attributes
    ----------
    angle : np.ndarray, shape (N,)
        Outgoing angle in degrees, NaN where no propagating ray exists.
    code : np.ndarray, shape (N,)
        Classification codes (see ``CLASS_CODES``).
    """

    angle: np.ndarray
    code:  np.ndarray

    def classification(self, i: int) -> Classification:
        return CODE_TO_CLASS[int(self.code[i])]


@dataclass
class SweepResult:
    """Result of evaluating all branches over an array of incidence angles."""

    incident_mode:          WaveMode
    incidence:              np.ndarray
    reflected_longitudinal: BranchSweep
    reflected_shear:        BranchSweep
    refracted_longitudinal: BranchSweep
    refracted_shear:        BranchSweep
    critical_angles:        tuple = field(default=(None, None, None))

    def branches(self) -> dict[str, BranchSweep]:
        return {name: getattr(self, name) for name in BRANCHES}


def _sweep_branch(status: int, ratio: float, alpha: np.ndarray) -> BranchSweep:
    n = alpha.shape[0]
    angle = np.full(n, np.nan, dtype=np.float64)
    code = np.full(n, CLASS_CODES[Classification.INVALID], dtype=np.int32)

    if status == STATUS_INVALID:
        return BranchSweep(angle, code)
    if status == STATUS_NA:
        code[:] = CLASS_CODES[Classification.NOT_APPLICABLE]
        return BranchSweep(angle, code)

    finite = np.isfinite(alpha)
    if status == STATUS_MIRROR:
        angle[finite] = alpha[finite]
        code[finite] = CLASS_CODES[Classification.REAL]
        return BranchSweep(angle, code)

    with np.errstate(invalid="ignore"):
        s = np.sin(np.radians(alpha)) * ratio
    s_abs = np.abs(s)
    finite = np.isfinite(s)
    crit = finite & (np.abs(s_abs - 1.0) <= SINE_TOL)
    real = finite & ~crit & (s_abs < 1.0)
    evan = finite & ~crit & (s_abs > 1.0)

    angle[crit] = 90.0
    angle[real] = np.degrees(np.arcsin(s[real]))
    code[crit] = CLASS_CODES[Classification.CRITICAL]
    code[real] = CLASS_CODES[Classification.REAL]
    code[evan] = CLASS_CODES[Classification.EVANESCENT]
    return BranchSweep(angle, code)


def sweep(
    incident_mode: WaveMode | str,
    angles:        np.ndarray,
    c_l1:          Optional[float],
    c_s1:          Optional[float],
    c_l2:          Optional[float],
    c_s2:          Optional[float],
) -> SweepResult:
    """Evaluate all four branches for an array of incidence angles on CPU.

    Parameters
    ----------
    incident_mode : WaveMode or str
    angles : array-like, shape (N,)
        Incidence angles in degrees (clamped like ``solve``).
    c_l1, c_s1, c_l2, c_s2 : float or None
        Wave speeds as for ``solve``.

    Returns
    -------
    SweepResult
    """
    mode = WaveMode.parse(incident_mode)
    alpha = np.clip(np.atleast_1d(np.asarray(angles, dtype=np.float64)), 0.0, MAX_INCIDENCE_DEG)

    plan = branch_plan(mode, c_l1, c_s1, c_l2, c_s2)
    branches = [_sweep_branch(status, ratio, alpha) for status, ratio in plan]

    return SweepResult(
        mode, alpha, *branches,
        critical_angles=critical_angle_values(mode, c_l1, c_s1, c_l2, c_s2),
    )
