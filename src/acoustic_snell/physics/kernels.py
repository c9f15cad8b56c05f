"""
Taichi kernels for sweeping interface angles over many incidence angles.

Evaluates the same per-branch plan as ``acoustic_snell.physics.solver.sweep``
on GPU (or any Taichi backend), one thread per (angle, branch) pair. Useful
for dense angle grids behind plots and lookup tables.

Architecture
- Python side builds the branch plan (status + speed ratio per branch)
- @ti.kernel sweep_kernel: flat parallel loop over N × 4 outputs
- sweep_gpu(): converts inputs, launches the kernel, packs a SweepResult

All computations use float64.
"""

import numpy as np
from typing import Optional

try:
    import taichi as ti
    _TAICHI_AVAILABLE = True
except ImportError:  # pragma: no cover
    _TAICHI_AVAILABLE = False
    ti = None  # type: ignore[assignment]

from acoustic_snell.config import MAX_INCIDENCE_DEG, SINE_TOL
from acoustic_snell.physics.solver import (
    BRANCHES,
    CLASS_CODES,
    STATUS_MIRROR,
    STATUS_NA,
    STATUS_SNELL,
    BranchSweep,
    Classification,
    SweepResult,
    WaveMode,
    branch_plan,
    critical_angle_values,
)

# — Taichi initialization ————————————————————————————————————————————————————
# Lazily initialized; call ensure_initialized() before any kernel use.
_ti_initialized = False


def ensure_initialized(arch: Optional[str] = None) -> None:
    """Initialize Taichi runtime if not already done.

    Parameters
    ----------
    arch : str, optional
        Architecture: 'gpu', 'cuda', 'vulkan', 'cpu'.
        Default: try GPU, fall back to CPU.

    Raises
    ------
    ImportError
        If Taichi is not installed.
    """
    global _ti_initialized
    if not _TAICHI_AVAILABLE:
        raise ImportError("taichi is required for GPU angle sweeps (pip install taichi)")
    if _ti_initialized:
        return

    if arch is None or arch == "gpu":
        ti.init(arch=ti.gpu, default_fp=ti.f64)
    elif arch == "cuda":
        ti.init(arch=ti.cuda, default_fp=ti.f64)
    elif arch == "vulkan":
        ti.init(arch=ti.vulkan, default_fp=ti.f64)
    elif arch == "cpu":
        ti.init(arch=ti.cpu, default_fp=ti.f64)
    else:
        ti.init(arch=ti.gpu, default_fp=ti.f64)

    _ti_initialized = True


# ——————————————————————————————————————————————————————————————————————————————

N_BRANCHES      = len(BRANCHES)
DEG2RAD         = np.pi / 180.0
RAD2DEG         = 180.0 / np.pi
CODE_REAL       = CLASS_CODES[Classification.REAL]
CODE_CRITICAL   = CLASS_CODES[Classification.CRITICAL]
CODE_EVANESCENT = CLASS_CODES[Classification.EVANESCENT]
CODE_NA         = CLASS_CODES[Classification.NOT_APPLICABLE]
CODE_INVALID    = CLASS_CODES[Classification.INVALID]

# ——————————————————————————————————————————————————————————————————————————————
# Main kernel
# ——————————————————————————————————————————————————————————————————————————————

if _TAICHI_AVAILABLE:

    @ti.kernel
    def sweep_kernel(
        alpha:    ti.types.ndarray(),
        status:   ti.types.ndarray(),
        ratio:    ti.types.ndarray(),
        angles:   ti.types.ndarray(),
        codes:    ti.types.ndarray(),
        n:        int,
        sine_tol: float,
    ):
        """Classify every (incidence angle, branch) pair.

        Parameters (all as flat arrays for GPU compatibility)
        ----------
        alpha : ndarray[n]
            Clamped, finite incidence angles in degrees.
        status, ratio : ndarray[4]
            Branch plan: evaluation status and C_target / C_inc.
        angles : ndarray[n * 4]
            Output: outgoing angles (only meaningful for real/critical).
        codes : ndarray[n * 4]
            Output: classification codes.
        """
        for idx in range(n * N_BRANCHES):
            i = idx // N_BRANCHES
            b = idx % N_BRANCHES

            a     = alpha[i]
            st    = status[b]
            theta = 0.0
            code  = CODE_INVALID

            if st == STATUS_MIRROR:
                theta = a
                code  = CODE_REAL
            elif st == STATUS_NA:
                code = CODE_NA
            elif st == STATUS_SNELL:
                s     = ti.sin(a * DEG2RAD) * ratio[b]
                s_abs = ti.abs(s)
                if ti.abs(s_abs - 1.0) <= sine_tol:
                    theta = 90.0
                    code  = CODE_CRITICAL
                elif s_abs < 1.0:
                    theta = ti.asin(s) * RAD2DEG
                    code  = CODE_REAL
                else:
                    code = CODE_EVANESCENT

            angles[idx] = theta
            codes[idx]  = code


# ——————————————————————————————————————————————————————————————————————————————
# Python wrapper functions
# ——————————————————————————————————————————————————————————————————————————————

def sweep_gpu(
    incident_mode,
    angles:  np.ndarray,
    c_l1:    Optional[float],
    c_s1:    Optional[float],
    c_l2:    Optional[float],
    c_s2:    Optional[float],
    arch:    Optional[str] = None,
) -> SweepResult:
    """Evaluate all four branches for an array of incidence angles with Taichi.

    Same contract as ``acoustic_snell.physics.solver.sweep``.

    Parameters
    ----------
    incident_mode : WaveMode or str
    angles : array-like, shape (N,)
        Incidence angles in degrees.
    c_l1, c_s1, c_l2, c_s2 : float or None
        Wave speeds (m/s).
    arch : str, optional
        Taichi architecture override.

    Returns
    -------
    SweepResult
    """
    ensure_initialized(arch)

    mode  = WaveMode.parse(incident_mode)
    alpha = np.clip(np.atleast_1d(np.asarray(angles, dtype=np.float64)), 0.0, MAX_INCIDENCE_DEG)
    n     = alpha.shape[0]

    plan   = branch_plan(mode, c_l1, c_s1, c_l2, c_s2)
    status = np.array([p[0] for p in plan], dtype=np.int32)
    ratio  = np.array([p[1] for p in plan], dtype=np.float64)

    # NaN angles are classified invalid on the host side
    finite   = np.isfinite(alpha)
    alpha_in = np.ascontiguousarray(np.where(finite, alpha, 0.0))

    out_angle = np.zeros(n * N_BRANCHES, dtype=np.float64)
    out_code  = np.zeros(n * N_BRANCHES, dtype=np.int32)

    sweep_kernel(alpha_in, status, ratio, out_angle, out_code, n, SINE_TOL)

    out_angle = out_angle.reshape(n, N_BRANCHES)
    out_code  = out_code.reshape(n, N_BRANCHES)
    out_code[~finite, :] = CODE_INVALID

    drawable = (out_code == CODE_REAL) | (out_code == CODE_CRITICAL)
    out_angle[~drawable] = np.nan

    branches = [
        BranchSweep(out_angle[:, b].copy(), out_code[:, b].copy())
        for b in range(N_BRANCHES)
    ]
    return SweepResult(
        mode, alpha, *branches,
        critical_angles=critical_angle_values(mode, c_l1, c_s1, c_l2, c_s2),
    )
