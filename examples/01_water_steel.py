"""
Example 01: Water / Steel Interface

Solves a longitudinal wave incident from water onto steel at a few
incidence angles, prints the outgoing angles and critical angles, and
draws the diagram before and after the first critical angle.
"""

import sys
import pathlib

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1] / "src"))

import matplotlib.pyplot as plt

from acoustic_snell.config import WATER, STEEL, Viewport
from acoustic_snell.geometry.scene import build_scene
from acoustic_snell.physics.solver import SolverInput, solve_input
from acoustic_snell.utils.formatting import format_result
from acoustic_snell.utils.visualization import plot_scene


def main():
    # — Configuration ————————————————————————————————————————————————————————
    viewport = Viewport(900, 675)
    angles   = [0.0, 10.0, 14.5, 20.0, 40.0]

    print(f"Medium 1: {WATER.name}  cL={WATER.c_longitudinal:.0f} m/s")
    print(f"Medium 2: {STEEL.name}  cL={STEEL.c_longitudinal:.0f} m/s, "
          f"cS={STEEL.c_transversal:.0f} m/s")

    # — Solve —————————————————————————————————————————————————————————————————
    print(f"\n{'αL':>6} " + " ".join(f"{k:>6}" for k in ("γL", "γS", "βL", "βS")))
    for alpha in angles:
        result, critical = solve_input(SolverInput.from_materials("L", alpha, WATER, STEEL))
        panel = format_result(result, critical)
        print(f"{alpha:6.1f} " + " ".join(f"{panel[k]:>6}" for k in ("γL", "γS", "βL", "βS")))

    print("\n— Critical angles —")
    for c in critical:
        print(f"{c.branch:24s} {panel_angle(c.angle)}  ({c.position.value})")

    # — Wire format ———————————————————————————————————————————————————————————
    request = {
        "incidentMode": "L",
        "incidenceAngleDegrees": 10.0,
        "speedLongitudinal1": WATER.c_longitudinal,
        "speedShear1": None,
        "speedLongitudinal2": STEEL.c_longitudinal,
        "speedShear2": STEEL.c_transversal,
    }
    result_10, _ = solve_input(request)
    print("\n— Wire request at 10° —")
    for name, branch in result_10.as_dict().items():
        print(f"{name:24s} {branch}")

    # — Visualization —————————————————————————————————————————————————————————
    fig, axes = plt.subplots(1, 2, figsize=(16, 6))
    for ax, alpha in zip(axes, (10.0, 20.0)):
        result, _ = solve_input(SolverInput.from_materials("L", alpha, WATER, STEEL))
        plot_scene(build_scene(result, viewport), title=f"Water / Steel, αL = {alpha:.0f}°", ax=ax)

    plt.tight_layout()
    plt.savefig("water_steel_result.png", dpi=150, bbox_inches="tight")
    plt.show()
    print("\nSaved: water_steel_result.png")


def panel_angle(angle):
    return "     —" if angle is None else f"{angle:6.2f}°"


if __name__ == "__main__":
    main()
