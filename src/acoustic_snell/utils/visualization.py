"""
Plotting utilities for the interface diagram and angle sweeps.

All functions return (Figure, Axes) and accept an optional `ax` argument
for embedding into multi-panel figures.
"""

from __future__ import annotations

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Arc
from typing import Optional

from acoustic_snell.geometry.scene import RaySegment, Scene
from acoustic_snell.physics.solver import SweepResult

RAY_COLORS = {
    "incident":               "#111111",
    "reflected_longitudinal": "#d9480f",
    "reflected_shear":        "#ae3ec9",
    "refracted_longitudinal": "#1971c2",
    "refracted_shear":        "#2f9e44",
}
MEDIUM_COLORS = ("#e7f0ff", "#f1f3f5")


def _draw_ray(ax: Axes, ray: RaySegment, origin: np.ndarray, color: str) -> None:
    ax.annotate(
        "",
        xy=tuple(ray.end), xytext=tuple(ray.start),
        arrowprops=dict(arrowstyle="-|>", color=color, lw=2.5, mutation_scale=18),
    )
    ax.text(ray.label_pos[0], ray.label_pos[1], ray.label,
            color=color, fontsize=9, fontweight="bold")

    # Axes y is inverted, so canvas angles map straight onto theta.
    lo, hi = sorted(np.degrees([ray.arc.start, ray.arc.end]))
    ax.add_patch(Arc(
        (float(origin[0]), float(origin[1])),
        2 * ray.arc_radius, 2 * ray.arc_radius,
        theta1=lo, theta2=hi, color=color, lw=1.5,
    ))
    ax.text(ray.arc_label[0], ray.arc_label[1], ray.symbol, color=color, fontsize=10)


def plot_scene(
    scene: Scene,
    title: str = "Reflection and Refraction",
    figsize: tuple[float, float] = (9, 6.75),
    ax: Optional[Axes] = None,
) -> tuple[Figure, Axes]:
    """Draw both media, the interface, the normal and every ray of a scene.

    Parameters
    ----------
    scene : Scene
        Output of ``build_scene``.
    title : str
        Plot title.
    figsize : tuple
        Figure size.
    ax : Axes, optional

    Returns
    -------
    fig, ax
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=figsize)
    else:
        fig = ax.get_figure()

    vp = scene.viewport
    for rect, color in zip((vp.upper_rect, vp.lower_rect), MEDIUM_COLORS):
        ax.add_patch(plt.Rectangle((rect.left, rect.top), rect.width, rect.height,
                                   color=color, zorder=0))

    ax.axhline(vp.interface_y, color="#1b2b6a", lw=2)
    ox, oy = scene.origin
    ax.plot([ox, ox], [oy - 320, oy + 320], "--", color="#868e96", lw=1.5)

    _draw_ray(ax, scene.incident, scene.origin, RAY_COLORS["incident"])
    for ray in scene.rays:
        _draw_ray(ax, ray, scene.origin, RAY_COLORS.get(ray.name, "k"))

    ax.set_xlim(0, vp.width)
    ax.set_ylim(vp.height, 0)
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_title(title)

    return fig, ax


def plot_angle_sweep(
    result: SweepResult,
    title: str = "Outgoing angles vs incidence",
    figsize: tuple[float, float] = (9, 5),
    ax: Optional[Axes] = None,
) -> tuple[Figure, Axes]:
    """Plot each branch's angle against incidence, marking critical angles.

    Parameters
    ----------
    result : SweepResult
        Output of ``sweep`` or ``sweep_gpu``.
    title : str
    ax : Axes, optional

    Returns
    -------
    fig, ax
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=figsize)
    else:
        fig = ax.get_figure()

    for name, branch in result.branches().items():
        if np.all(np.isnan(branch.angle)):
            continue
        ax.plot(result.incidence, branch.angle, color=RAY_COLORS[name],
                label=name.replace("_", " "))

    for label, alpha_c in zip(("α1", "α2", "α3"), result.critical_angles):
        if alpha_c is None:
            continue
        ax.axvline(alpha_c, color="k", linestyle="--", lw=1)
        ax.text(alpha_c, 92, f"{label} {alpha_c:.1f}°", ha="center", fontsize=8)

    ax.set_xlim(0, 90)
    ax.set_ylim(0, 95)
    ax.set_xlabel(f"Incidence angle α{result.incident_mode.value} (°)")
    ax.set_ylabel("Outgoing angle (°)")
    ax.set_title(title)
    ax.legend(loc="best", fontsize=8)
    ax.grid(True, alpha=0.3)

    return fig, ax
