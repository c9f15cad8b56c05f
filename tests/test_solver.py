"""
Tests for the interface angle solver.

Validates mirror reflection, Snell's law mode conversion, evanescent and
missing-mode branches, and the critical angle thresholds.
"""

import math

import numpy as np
import pytest

from acoustic_snell.config import LUCITE, STEEL, WATER
from acoustic_snell.physics.solver import (
    Classification,
    Position,
    SolverInput,
    WaveMode,
    classify_sine,
    clamp_incidence,
    critical_angle,
    relative_position,
    solve,
    solve_input,
)


def _snell_deg(alpha, c_inc, c_target):
    return math.degrees(math.asin(math.sin(math.radians(alpha)) * c_target / c_inc))


class TestWaterSteel:
    """Longitudinal incidence from water onto steel."""

    def test_ten_degrees(self, water_steel_speeds):
        result, critical = solve("L", 10.0, *water_steel_speeds)

        assert result.incident_mode is WaveMode.LONGITUDINAL
        assert result.reflected_longitudinal.angle == 10.0
        assert result.reflected_longitudinal.classification is Classification.REAL

        assert result.reflected_shear.angle is None
        assert result.reflected_shear.classification is Classification.NOT_APPLICABLE

        beta_l = result.refracted_longitudinal
        assert beta_l.classification is Classification.REAL
        np.testing.assert_allclose(beta_l.sin_value, 0.6922, atol=1e-3)
        np.testing.assert_allclose(beta_l.angle, _snell_deg(10.0, 1480.0, 5900.0), rtol=1e-12)
        assert abs(beta_l.angle - 43.9) < 0.2

        beta_s = result.refracted_shear
        assert beta_s.classification is Classification.REAL
        np.testing.assert_allclose(beta_s.sin_value, 0.379, atol=1e-3)
        np.testing.assert_allclose(beta_s.angle, 22.3, atol=0.05)

        np.testing.assert_allclose(critical.alpha1.angle, 14.5, atol=0.05)
        assert critical.alpha1.position is Position.BELOW
        np.testing.assert_allclose(critical.alpha2.angle, math.degrees(math.asin(1480 / 3230)))
        assert critical.alpha2.position is Position.BELOW
        assert critical.alpha3.angle is None
        assert critical.alpha3.position is Position.NOT_APPLICABLE

    def test_twenty_degrees_evanescent(self, water_steel_speeds):
        result, critical = solve("L", 20.0, *water_steel_speeds)

        beta_l = result.refracted_longitudinal
        assert beta_l.classification is Classification.EVANESCENT
        assert beta_l.angle is None
        np.testing.assert_allclose(beta_l.sin_value, math.sin(math.radians(20.0)) * 5900 / 1480)
        assert beta_l.sin_value > 1.36

        assert result.refracted_shear.classification is Classification.REAL
        assert critical.alpha1.position is Position.ABOVE
        assert critical.alpha2.position is Position.BELOW


class TestMirrorReflection:
    """Mode-preserving reflection always mirrors the incidence angle."""

    @pytest.mark.parametrize("alpha", [0.0, 5.5, 30.0, 60.0, 89.0])
    @pytest.mark.parametrize("mode", ["L", "S"])
    def test_mirror(self, alpha, mode):
        m1, m2 = LUCITE, STEEL
        result, _ = solve(mode, alpha, m1.c_longitudinal, m1.c_transversal,
                          m2.c_longitudinal, m2.c_transversal)
        same = result.reflected_longitudinal if mode == "L" else result.reflected_shear
        assert same.angle == alpha
        assert same.classification is Classification.REAL

    def test_mirror_never_evanescent(self):
        """Even when every converted branch is evanescent."""
        result, _ = solve("S", 80.0, 100.0, 50.0, 1000.0, 900.0)
        assert result.reflected_shear.classification is Classification.REAL
        assert result.reflected_longitudinal.classification is Classification.EVANESCENT
        assert result.refracted_longitudinal.classification is Classification.EVANESCENT
        assert result.refracted_shear.classification is Classification.EVANESCENT


class TestShearIncidence:
    """Shear incidence from Lucite onto steel."""

    def setup_method(self):
        self.speeds = (LUCITE.c_longitudinal, LUCITE.c_transversal,
                       STEEL.c_longitudinal, STEEL.c_transversal)

    def test_converted_reflection(self):
        result, _ = solve("S", 20.0, *self.speeds)
        gamma_l = result.reflected_longitudinal
        assert gamma_l.classification is Classification.REAL
        np.testing.assert_allclose(gamma_l.angle, _snell_deg(20.0, 1340.0, 2730.0), rtol=1e-12)
        assert result.reflected_shear.angle == 20.0

    def test_three_critical_angles(self):
        _, critical = solve("S", 20.0, *self.speeds)
        np.testing.assert_allclose(critical.alpha1.angle, math.degrees(math.asin(1340 / 5900)))
        np.testing.assert_allclose(critical.alpha2.angle, math.degrees(math.asin(1340 / 3230)))
        np.testing.assert_allclose(critical.alpha3.angle, math.degrees(math.asin(1340 / 2730)))
        assert critical.alpha1.position is Position.ABOVE
        assert critical.alpha2.position is Position.BELOW
        assert critical.alpha3.position is Position.BELOW
        assert critical.alpha3.branch == "reflected_longitudinal"

    def test_shear_in_fluid_is_invalid(self):
        """A fluid has no incident shear wave: everything is invalid."""
        result, critical = solve("S", 20.0, WATER.c_longitudinal, None,
                                 STEEL.c_longitudinal, STEEL.c_transversal)
        for branch in result.branches().values():
            assert branch.classification is Classification.INVALID
            assert branch.angle is None
        for c in critical:
            assert c.angle is None
            assert c.position is Position.NOT_APPLICABLE


class TestCriticalThreshold:
    """Real below, critical at, evanescent above the critical angle."""

    @pytest.mark.parametrize("c_inc, c_target", [
        (1480.0, 5900.0),
        (1480.0, 3230.0),
        (2730.0, 5900.0),
        (2730.0, 3230.0),
        (343.0, 1480.0),
    ])
    def test_threshold(self, c_inc, c_target):
        theta_c = critical_angle(c_inc, c_target)
        np.testing.assert_allclose(theta_c, math.degrees(math.asin(c_inc / c_target)))

        below, _ = solve("L", theta_c - 1.0, c_inc, None, c_target, None)
        at, critical = solve("L", theta_c, c_inc, None, c_target, None)
        above, _ = solve("L", theta_c + 1.0, c_inc, None, c_target, None)

        assert below.refracted_longitudinal.classification is Classification.REAL
        assert below.refracted_longitudinal.angle < 90.0

        assert at.refracted_longitudinal.classification is Classification.CRITICAL
        assert at.refracted_longitudinal.angle == 90.0
        assert critical.alpha1.position is Position.AT

        assert above.refracted_longitudinal.classification is Classification.EVANESCENT
        assert above.refracted_longitudinal.angle is None

    @pytest.mark.parametrize("branch, which, c_target", [
        ("refracted_longitudinal", "alpha1", STEEL.c_longitudinal),
        ("refracted_shear",        "alpha2", STEEL.c_transversal),
        ("reflected_longitudinal", "alpha3", LUCITE.c_longitudinal),
    ])
    def test_shear_incidence_threshold(self, branch, which, c_target):
        """Lucite onto steel, shear incidence: refraction and converted reflection."""
        speeds = (LUCITE.c_longitudinal, LUCITE.c_transversal,
                  STEEL.c_longitudinal, STEEL.c_transversal)
        theta_c = critical_angle(LUCITE.c_transversal, c_target)

        below, _ = solve("S", theta_c - 1.0, *speeds)
        at, critical = solve("S", theta_c, *speeds)
        above, _ = solve("S", theta_c + 1.0, *speeds)

        assert getattr(critical, which).angle == theta_c
        assert getattr(critical, which).branch == branch
        assert getattr(critical, which).position is Position.AT

        assert getattr(below, branch).classification is Classification.REAL
        assert getattr(at, branch).classification is Classification.CRITICAL
        assert getattr(at, branch).angle == 90.0
        assert getattr(above, branch).classification is Classification.EVANESCENT
        assert getattr(above, branch).angle is None

        # the mirrored shear reflection is unaffected
        assert at.reflected_shear.angle == theta_c
        assert at.reflected_shear.classification is Classification.REAL

    def test_slower_target_has_no_critical_angle(self):
        assert critical_angle(5900.0, 1480.0) is None
        assert critical_angle(1480.0, 1480.0) is None

    def test_invalid_speeds_have_no_critical_angle(self):
        assert critical_angle(None, 1480.0) is None
        assert critical_angle(1480.0, None) is None
        assert critical_angle(0.0, 1480.0) is None
        assert critical_angle(1480.0, float("inf")) is None

    def test_steel_into_water(self):
        """Fast into slow medium: no critical angles, refraction always real."""
        result, critical = solve("L", 80.0, STEEL.c_longitudinal, STEEL.c_transversal,
                                 WATER.c_longitudinal, WATER.c_transversal)
        assert result.refracted_longitudinal.classification is Classification.REAL
        assert result.refracted_shear.classification is Classification.NOT_APPLICABLE
        assert result.reflected_shear.classification is Classification.REAL
        assert all(c.angle is None for c in critical)


class TestMissingAndInvalid:
    """Missing modes and bad speeds are data, not exceptions."""

    def test_null_target_is_not_applicable(self):
        result, _ = solve("L", 15.0, 2730.0, 1340.0, 1480.0, None)
        assert result.refracted_shear.classification is Classification.NOT_APPLICABLE
        assert result.refracted_shear.angle is None
        assert result.refracted_shear.sin_value is None

    @pytest.mark.parametrize("bad", [0.0, -1480.0, float("nan"), float("inf")])
    def test_bad_target_speed_is_invalid(self, bad):
        result, _ = solve("L", 15.0, 1480.0, None, bad, 3230.0)
        assert result.refracted_longitudinal.classification is Classification.INVALID
        assert result.refracted_shear.classification is Classification.REAL

    @pytest.mark.parametrize("bad", [None, 0.0, -5.0, float("nan")])
    def test_bad_incident_speed_is_invalid(self, bad):
        result, _ = solve("L", 15.0, bad, 1340.0, 5900.0, 3230.0)
        for branch in result.branches().values():
            assert branch.classification is Classification.INVALID

    def test_nan_incidence_is_invalid(self, water_steel_speeds):
        result, critical = solve("L", float("nan"), *water_steel_speeds)
        for branch in result.branches().values():
            assert branch.classification is Classification.INVALID
        assert critical.alpha1.angle is not None
        assert critical.alpha1.position is Position.NOT_APPLICABLE

    def test_non_numeric_is_precondition_violation(self, water_steel_speeds):
        with pytest.raises(AssertionError):
            solve("L", "10", *water_steel_speeds)
        with pytest.raises(AssertionError):
            solve("L", 10.0, "1480", None, 5900.0, 3230.0)

    def test_unknown_mode(self, water_steel_speeds):
        with pytest.raises(ValueError):
            solve("X", 10.0, *water_steel_speeds)


class TestHelpers:

    def test_clamp_incidence(self):
        assert clamp_incidence(-5.0) == 0.0
        assert clamp_incidence(95.0) == 89.999
        assert clamp_incidence(90.0) == 89.999
        assert clamp_incidence(45.0) == 45.0
        assert math.isnan(clamp_incidence(float("nan")))

    def test_out_of_range_angle_is_normalized(self, water_steel_speeds):
        result, _ = solve("L", 120.0, *water_steel_speeds)
        assert result.incidence_angle == 89.999
        assert result.reflected_longitudinal.angle == 89.999

    @pytest.mark.parametrize("s, expected_angle, expected_class", [
        (0.0, 0.0, Classification.REAL),
        (0.5, 30.0, Classification.REAL),
        (1.0, 90.0, Classification.CRITICAL),
        (-1.0, 90.0, Classification.CRITICAL),
        (1.0 + 1e-14, 90.0, Classification.CRITICAL),
        (1.5, None, Classification.EVANESCENT),
        (float("nan"), None, Classification.INVALID),
        (float("inf"), None, Classification.INVALID),
        (None, None, Classification.NOT_APPLICABLE),
    ])
    def test_classify_sine(self, s, expected_angle, expected_class):
        branch = classify_sine(s)
        assert branch.classification is expected_class
        if expected_angle is None:
            assert branch.angle is None
        else:
            np.testing.assert_allclose(branch.angle, expected_angle, atol=1e-12)

    def test_relative_position(self):
        assert relative_position(10.0, 14.5) is Position.BELOW
        assert relative_position(14.5 + 1e-7, 14.5) is Position.AT
        assert relative_position(15.0, 14.5) is Position.ABOVE
        assert relative_position(15.0, None) is Position.NOT_APPLICABLE

    def test_wave_mode_parse(self):
        assert WaveMode.parse("l") is WaveMode.LONGITUDINAL
        assert WaveMode.parse("Shear") is WaveMode.SHEAR
        assert WaveMode.parse("transversal") is WaveMode.SHEAR
        assert WaveMode.parse(WaveMode.SHEAR) is WaveMode.SHEAR
        assert WaveMode.LONGITUDINAL.other is WaveMode.SHEAR


class TestSolverInput:

    def test_wire_format(self):
        request = {
            "incidentMode": "L",
            "incidenceAngleDegrees": 10,
            "speedLongitudinal1": 1480,
            "speedShear1": None,
            "speedLongitudinal2": 5900,
            "speedShear2": 3230,
        }
        result, critical = solve_input(request)
        assert result.reflected_shear.classification is Classification.NOT_APPLICABLE
        assert critical.alpha1.position is Position.BELOW

    def test_missing_field(self):
        with pytest.raises(KeyError):
            SolverInput.from_dict({"incidentMode": "L"})

    def test_from_materials_matches_solve(self, water_steel_speeds):
        request = SolverInput.from_materials("L", 10.0, WATER, STEEL)
        assert request.speeds() == water_steel_speeds
        assert request.c_s1 is WATER.speed("S") is None
        with pytest.raises(ValueError):
            WATER.speed("X")
        assert solve_input(request) == solve("L", 10.0, *water_steel_speeds)

    def test_as_dict(self, water_steel_speeds):
        result, critical = solve("L", 10.0, *water_steel_speeds)
        data = result.as_dict()
        assert data["incident_mode"] == "L"
        assert data["reflected_shear"]["classification"] == "na"
        assert critical.as_dict()["alpha1"]["position"] == "below"

    def test_repeated_calls_identical(self, water_steel_speeds):
        first = solve("L", 12.3, *water_steel_speeds)
        for _ in range(5):
            assert solve("L", 12.3, *water_steel_speeds) == first
