"""
Interaction state for the interface diagram.

``InteractionContext`` owns everything the host UI mutates: the medium and
incident-mode selection, the incidence angle, the drag flag and the most
recent solved snapshot. Every change recomputes the snapshot from scratch
and replaces it in one assignment, so readers (the render loop) only ever
see a complete result.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Optional

from acoustic_snell.config import (
    DEFAULT_MEDIUM_1,
    DEFAULT_MEDIUM_2,
    HIT_TOLERANCE,
    Material,
    Viewport,
    get_material,
)
from acoustic_snell.geometry.pointer import angle_from_pointer, hits_segment, round_to_tenth
from acoustic_snell.geometry.scene import Scene, build_scene
from acoustic_snell.physics.solver import (
    AngleResult,
    CriticalAngleSet,
    SolverInput,
    WaveMode,
    solve_input,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    """User-facing inputs of the diagram."""

    medium1:         str = DEFAULT_MEDIUM_1
    medium2:         str = DEFAULT_MEDIUM_2
    incident_mode:   WaveMode = WaveMode.LONGITUDINAL
    incidence_angle: float = 30.0


@dataclass(frozen=True)
class Snapshot:
    """Most recent solver output and the geometry drawn from it."""

    selection: Selection
    result:    AngleResult
    critical:  CriticalAngleSet
    scene:     Scene


class InteractionContext:
    """Owned state of one diagram instance.

    Parameters
    ----------
    viewport : Viewport, optional
        Initial drawing surface.
    selection : Selection, optional
        Initial media, incident mode and angle.
    """

    def __init__(self, viewport: Optional[Viewport] = None,
                 selection: Optional[Selection] = None) -> None:
        self.viewport = viewport or Viewport()
        self.selection = selection or Selection()
        self.dragging = False
        self.hovering = False
        self.snapshot: Optional[Snapshot] = None
        self.recompute()

    # — Selection ———————————————————————————————————————————————————————————

    @property
    def medium1(self) -> Material:
        return get_material(self.selection.medium1)

    @property
    def medium2(self) -> Material:
        return get_material(self.selection.medium2)

    @property
    def shear_available(self) -> bool:
        """Whether medium 1 can carry an incident shear wave."""
        return self.medium1.supports_shear

    def set_media(self, medium1: Optional[str] = None, medium2: Optional[str] = None) -> Snapshot:
        """Select media by catalog name (None keeps the current one)."""
        name1 = get_material(medium1).name if medium1 is not None else self.selection.medium1
        name2 = get_material(medium2).name if medium2 is not None else self.selection.medium2
        logger.debug("media: %s / %s", name1, name2)
        self.selection = replace(self.selection, medium1=name1, medium2=name2)
        return self.recompute()

    def set_incident_mode(self, mode: WaveMode | str) -> Snapshot:
        self.selection = replace(self.selection, incident_mode=WaveMode.parse(mode))
        return self.recompute()

    def set_incidence_angle(self, angle: float) -> Snapshot:
        """Set the incidence angle in degrees, clamped to [0, 90]."""
        value = float(angle)
        if math.isnan(value):
            logger.debug("ignoring NaN incidence angle")
            return self.snapshot
        self.selection = replace(self.selection, incidence_angle=max(0.0, min(value, 90.0)))
        return self.recompute()

    def resize(self, width: float, height: float) -> bool:
        """Adopt a new surface size; returns False while layout is unsettled."""
        viewport = Viewport.resized(width, height)
        if viewport is None:
            return False
        self.viewport = viewport
        self.recompute()
        return True

    # — Recomputation ———————————————————————————————————————————————————————

    def _enforce_mode_availability(self) -> None:
        if self.selection.incident_mode is WaveMode.SHEAR and not self.shear_available:
            logger.info(
                "%s has no shear speed; falling back to longitudinal incidence",
                self.selection.medium1,
            )
            self.selection = replace(self.selection, incident_mode=WaveMode.LONGITUDINAL)

    def recompute(self) -> Snapshot:
        """Solve the current selection and rebuild the scene."""
        self._enforce_mode_availability()
        selection = self.selection
        m1, m2 = self.medium1, self.medium2

        request = SolverInput.from_materials(
            selection.incident_mode, selection.incidence_angle, m1, m2,
        )
        result, critical = solve_input(request)
        scene = build_scene(result, self.viewport)
        self.snapshot = Snapshot(selection, result, critical, scene)
        return self.snapshot

    @property
    def result(self) -> AngleResult:
        return self.snapshot.result

    @property
    def critical(self) -> CriticalAngleSet:
        return self.snapshot.critical

    @property
    def scene(self) -> Scene:
        return self.snapshot.scene

    # — Pointer protocol ————————————————————————————————————————————————————

    def _near_incident(self, x: float, y: float) -> bool:
        return hits_segment((x, y), self.scene.incident_segment, HIT_TOLERANCE)

    def pointer_down(self, x: float, y: float) -> bool:
        """Start dragging if the pointer grabs the incident ray."""
        if self.snapshot is None or not self._near_incident(x, y):
            return False
        self.dragging = True
        logger.debug("drag start at (%.1f, %.1f)", x, y)
        return True

    def pointer_move(self, x: float, y: float) -> Optional[float]:
        """Track hover state, or steer the incidence angle while dragging.

        Returns
        -------
        angle : float or None
            The incidence angle applied by this move, if any.
        """
        if not self.dragging:
            self.hovering = self._near_incident(x, y)
            return None

        angle = angle_from_pointer((x, y), self.viewport.origin)
        if angle is None:
            return None
        angle = round_to_tenth(angle)
        self.set_incidence_angle(angle)
        return angle

    def pointer_up(self) -> None:
        if self.dragging:
            logger.debug("drag end at %.1f°", self.selection.incidence_angle)
        self.dragging = False
        self.hovering = False

    def pointer_cancel(self) -> None:
        self.dragging = False
