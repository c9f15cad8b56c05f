"""
Example 03: Drag Session

Drives an InteractionContext the way a host UI would: grab the incident
ray, drag it across the first critical angle, switch media and mode, and
print the panel values after each step.
"""

import sys
import pathlib
import logging

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1] / "src"))

import numpy as np

from acoustic_snell.interaction import InteractionContext
from acoustic_snell.utils.formatting import format_result


def show(ctx, step):
    panel = format_result(ctx.result, ctx.critical)
    sel = ctx.selection
    print(f"{step:28s} {sel.medium1:>14s}/{sel.medium2:<8s} "
          f"{sel.incident_mode.value} α={sel.incidence_angle:5.1f}°  "
          + "  ".join(f"{k}={v}" for k, v in panel.items()))


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    ctx = InteractionContext()
    show(ctx, "initial")

    # Grab the incident ray halfway along
    start, end = ctx.scene.incident_segment
    grab = (start + end) / 2.0
    assert ctx.pointer_down(*grab)

    # Drag on a circle around the origin, from 10° to 40°
    ox, oy = ctx.viewport.origin
    for theta in np.linspace(10.0, 40.0, 7):
        t = np.radians(theta)
        ctx.pointer_move(ox - 200.0 * np.sin(t), oy - 200.0 * np.cos(t))
        show(ctx, f"drag → {theta:.0f}°")
    ctx.pointer_up()

    ctx.set_incident_mode("S")
    show(ctx, "shear incidence")

    ctx.set_media("Water", "Aluminum")
    show(ctx, "water / aluminum")

    ctx.resize(1280, 720)
    print(f"\nResized: origin at {ctx.viewport.origin}, "
          f"{len(ctx.scene.rays)} rays drawn, hidden: {sorted(ctx.scene.hidden)}")


if __name__ == "__main__":
    main()
