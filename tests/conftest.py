"""Pytest configuration and fixtures."""
import logging
import pathlib
import sys

import pytest

_src = pathlib.Path(__file__).resolve().parents[1] / "src"
if str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

from acoustic_snell.config import STEEL, WATER  # noqa: E402


def pytest_configure(config):
    """Configure logging for test runs."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


@pytest.fixture
def water_steel_speeds():
    """(cL1, cS1, cL2, cS2) for water over steel."""
    return (WATER.c_longitudinal, WATER.c_transversal,
            STEEL.c_longitudinal, STEEL.c_transversal)
