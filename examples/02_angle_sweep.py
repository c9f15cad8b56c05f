"""
Example 02: Angle Sweep

Sweeps the incidence angle from normal to grazing for longitudinal and
shear incidence from Lucite onto steel, and plots every outgoing angle
with the critical angles marked. Uses the Taichi kernel when available.
"""

import sys
import pathlib

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1] / "src"))

import numpy as np
import matplotlib.pyplot as plt

from acoustic_snell.config import LUCITE, STEEL
from acoustic_snell.physics.kernels import sweep_gpu
from acoustic_snell.physics.solver import sweep
from acoustic_snell.utils.visualization import plot_angle_sweep


def main():
    speeds = (LUCITE.c_longitudinal, LUCITE.c_transversal,
              STEEL.c_longitudinal, STEEL.c_transversal)
    angles = np.linspace(0.0, 89.999, 4001)

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    for ax, mode in zip(axes, ("L", "S")):
        try:
            result = sweep_gpu(mode, angles, *speeds)
            backend = "Taichi"
        except ImportError:
            result = sweep(mode, angles, *speeds)
            backend = "NumPy"
        print(f"{mode}-incidence ({backend}): critical angles "
              + ", ".join("—" if a is None else f"{a:.2f}°" for a in result.critical_angles))
        plot_angle_sweep(result, title=f"{LUCITE.name} / {STEEL.name}, {mode} incidence", ax=ax)

    plt.tight_layout()
    plt.savefig("angle_sweep_result.png", dpi=150, bbox_inches="tight")
    plt.show()
    print("\nSaved: angle_sweep_result.png")


if __name__ == "__main__":
    main()
