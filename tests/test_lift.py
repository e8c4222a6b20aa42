"""
Lift formula tests: regression against a plain-float computation,
uncertain scenarios and the monotonicity of lift in the Cp spread.
"""

import math

import numpy as np
import pytest

from airfoil_lift.coefficients import CP_OVER_10DEG, CP_UNDER_10DEG, REFERENCE_POSITIONS
from airfoil_lift.errors import InvalidParameters, ShapeMismatch
from airfoil_lift.lift import (
    FlightConditions, air_pressure, compute_lift, humid_air_density,
    saturation_vapor_pressure,
)
from airfoil_lift.sample_table import ANGLE_COLUMNS, load_sample_table
from airfoil_lift.scenarios import (
    SCENARIOS, angle_of_attack_conditions, atmosphere_conditions,
    deterministic_conditions, get_scenario,
)
from airfoil_lift.uncertain_value import UncertainValue


def reference_lift(cp_over, cp_under, A=0.23, T=15.0, h=0.0, Rh=0.0, V=30.0):
    """Straight float computation of the same formulas."""
    p_air = math.exp((-9.81 * 0.0289644 * h) / (8.31432 * (T + 273.15))) * 101325.0
    p_sat = 6.1078 * math.pow(10.0, 7.5 * T / (T + 237.3))
    p_v = p_sat * Rh
    p_d = p_air - p_v
    v_over = sum(V * math.sqrt(abs(1 - cp)) for cp in cp_over) / len(cp_over)
    v_under = sum(V * math.sqrt(abs(1 - cp)) for cp in cp_under) / len(cp_under)
    r = p_d / (287.058 * (T + 273.15)) + p_v / (461.495 * (T + 273.15))
    return r * A * (v_over ** 2 - v_under ** 2) / 2.0


class TestReferenceTables:

    def test_lengths(self):
        assert len(CP_OVER_10DEG) == len(CP_UNDER_10DEG) == REFERENCE_POSITIONS == 84

    def test_merged_literal_split(self):
        i = CP_OVER_10DEG.index(-1.4999)
        assert CP_OVER_10DEG[i + 1] == -1.4769


class TestAtmosphere:

    def test_sea_level(self):
        assert air_pressure(0.0, 15.0).mean == 101325.0

    def test_pressure_drops_with_elevation(self):
        assert air_pressure(1000.0, 15.0).mean == pytest.approx(
            101325.0 * math.exp(-9.81 * 0.0289644 * 1000.0 / (8.31432 * 288.15)), rel=1e-12)

    def test_saturation_pressure(self):
        assert saturation_vapor_pressure(0.0).mean == pytest.approx(6.1078, rel=1e-12)
        assert saturation_vapor_pressure(20.0).mean == pytest.approx(
            6.1078 * 10 ** (7.5 * 20 / 257.3), rel=1e-12)

    def test_dry_air_density(self):
        assert humid_air_density(101325.0, 0.0, 15.0).mean == pytest.approx(1.2250, abs=1e-4)


class TestDeterministicLift:

    def test_regression_anchor(self):
        """
        Fixed inputs at sea level, 15 °C, dry air, 30 m/s, 0.23 m², 10° tables.

        The pinned value uses 84 over-surface positions (``-1.4999, -1.4769``
        as two entries) and ``v_over² - v_under²``, so it is positive. The
        first program version read 83 over-surface entries and swapped the
        surfaces, printing a negative lift.
        """
        result = compute_lift(deterministic_conditions())
        expected = reference_lift(CP_OVER_10DEG, CP_UNDER_10DEG)
        assert result.lift.is_degenerate
        assert result.lift.std == 0.0
        assert result.lift.mean == pytest.approx(156.96938960494774, rel=1e-12)
        assert result.lift.mean == pytest.approx(expected, rel=1e-9)

    def test_intermediate_quantities(self):
        result = compute_lift(deterministic_conditions())
        assert result.area.mean == 0.23
        assert result.vapor_pressure.mean == 0.0
        assert result.dry_pressure.mean == result.air_pressure.mean == 101325.0
        assert result.density.mean == pytest.approx(101325.0 / (287.058 * 288.15), rel=1e-12)
        assert result.v_over.mean > result.v_under.mean
        assert result.v_over.mean == pytest.approx(30.0 * result.speed_ratio_over.mean, rel=1e-12)

    def test_humid_warm_air_matches_reference(self):
        conditions = FlightConditions(500.0, 25.0, 0.6, 40.0, 0.5, CP_OVER_10DEG, CP_UNDER_10DEG)
        expected = reference_lift(CP_OVER_10DEG, CP_UNDER_10DEG, A=0.5, T=25.0, h=500.0, Rh=0.6, V=40.0)
        assert compute_lift(conditions).lift.mean == pytest.approx(expected, rel=1e-9)

    def test_coefficients_above_one(self):
        conditions = FlightConditions(0.0, 15.0, 0.0, 30.0, 0.23, [-1.0], [1.5])
        expected = reference_lift([-1.0], [1.5])
        assert compute_lift(conditions).lift.mean == pytest.approx(expected, rel=1e-12)

    def test_monotonic_in_coefficient_spread(self):
        lifts = []
        for cp_over in (-0.5, -1.0, -1.5, -2.5):
            conditions = FlightConditions(0.0, 15.0, 0.0, 30.0, 0.23, [cp_over], [0.5])
            lifts.append(abs(compute_lift(conditions).lift.mean))
        assert lifts == sorted(lifts)
        assert lifts[-1] > lifts[0]

    def test_monotonic_with_uncertain_inputs(self):
        def lift_mean(cp_over):
            conditions = FlightConditions(
                UncertainValue.uniform(0, 1000), UncertainValue.gaussian(15, 5), 0.2, 30.0, 0.23,
                [UncertainValue.uniform(cp_over - 0.1, cp_over + 0.1)], [0.4])
            return abs(compute_lift(conditions).lift.mean)
        assert lift_mean(-2.0) >= lift_mean(-1.0)

    def test_empty_distribution(self):
        with pytest.raises(ShapeMismatch):
            compute_lift(FlightConditions(0.0, 15.0, 0.0, 30.0, 0.23, [], [0.5]))


class TestUncertainScenarios:

    def test_atmosphere(self):
        result = compute_lift(atmosphere_conditions())
        assert not result.lift.is_degenerate
        assert result.lift.std > 0
        assert result.temperature.draws.min() >= -50.0
        assert result.temperature.draws.max() <= 50.0
        assert 0.0 <= result.humidity.draws.min() <= result.humidity.draws.max() <= 1.0
        assert np.all(result.density.draws > 0)
        # same Cp tables and velocity as the fixed case
        fixed = compute_lift(deterministic_conditions())
        assert result.v_over.mean == fixed.v_over.mean

    def test_angle_of_attack(self, cp_table):
        table = load_sample_table(cp_table)
        conditions = angle_of_attack_conditions(table)
        assert len(conditions.cp_over) == len(conditions.cp_under) == 139
        assert conditions.cp_over[0].observations == tuple(table.data[0, c] for c in (1, 2, 3))
        assert conditions.cp_under[0].observations == tuple(table.data[0, c] for c in (6, 5, 4))

        lift = compute_lift(conditions).lift
        assert lift.std > 0

        # 10° curves give the largest lift at every position, 0° the smallest
        bounds = {}
        for angle, (over, under) in ANGLE_COLUMNS.items():
            fixed = FlightConditions(0.0, 15.0, 0.0, 30.0, 0.23,
                                     list(table.column(over)), list(table.column(under)))
            bounds[angle] = compute_lift(fixed).lift.mean
        assert bounds[0] < lift.mean < bounds[10]
        assert lift.draws.min() >= bounds[0] * (1 - 1e-9)
        assert lift.draws.max() <= bounds[10] * (1 + 1e-9)

    def test_registry(self, cp_table):
        assert list(SCENARIOS) == ["angle-of-attack", "atmosphere", "deterministic"]
        assert get_scenario("angle-of-attack").needs_table
        with pytest.raises(InvalidParameters):
            get_scenario("angle-of-attack").conditions()
        with pytest.raises(InvalidParameters):
            get_scenario("viscous")
        table = load_sample_table(cp_table)
        assert len(get_scenario("angle-of-attack").conditions(table).cp_over) == 139
