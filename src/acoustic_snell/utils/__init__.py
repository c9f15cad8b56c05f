"""
utils — Utility helpers for the acoustic_snell package.

Submodules
----------
formatting      Angle strings and Snell relations for text panels.
visualization   Scene and angle-sweep plotting.
"""

from . import formatting, visualization

__all__ = ["formatting", "visualization"]
