import pytest

from airfoil_lift.budget import LIFT_FORMULA, LIFT_INPUTS, BudgetRow, LinearBudget, lift_budget
from airfoil_lift.coefficients import CP_OVER_10DEG, CP_UNDER_10DEG
from airfoil_lift.lift import FlightConditions, compute_lift
from airfoil_lift.scenarios import atmosphere_conditions, deterministic_conditions
from airfoil_lift.uncertain_value import UncertainValue


class TestLinearBudget:

    def test_simple_product(self):
        a = UncertainValue.gaussian(2.0, 0.1)
        budget = LinearBudget("a * b", {"a": a, "b": 3.0})
        assert budget.value == pytest.approx(a.mean * 3.0, rel=1e-12)
        assert budget.row("a").sensitivity == pytest.approx(3.0)
        assert budget.row("b").sensitivity == pytest.approx(a.mean, rel=1e-12)
        assert budget.combined_uncertainty == pytest.approx(3.0 * a.std, rel=1e-12)
        assert budget.row("a").contribution == pytest.approx(budget.combined_uncertainty, rel=1e-12)

    def test_rows_follow_input_order(self):
        budget = LinearBudget("x + y", {
            "y": UncertainValue.gaussian(0.0, 1.0),
            "x": UncertainValue.gaussian(0.0, 1.0),
        })
        assert [r.variable for r in budget.rows] == ["y", "x"]
        assert all(isinstance(r, BudgetRow) for r in budget.rows)
        assert sum(r.percent for r in budget.rows) == pytest.approx(100.0)

    def test_unknown_row(self):
        with pytest.raises(KeyError):
            LinearBudget("x", {"x": 1.0}).row("y")

    def test_expanded_uncertainty(self):
        budget = LinearBudget("2 * x", {"x": UncertainValue.gaussian(1.0, 0.5)})
        U, k = budget.expanded_uncertainty(0.95)
        assert k == pytest.approx(1.959964, rel=1e-5)
        assert U == pytest.approx(k * budget.combined_uncertainty)

    def test_expanded_uncertainty_uses_configured_coverage(self, seeded_settings):
        budget = LinearBudget("x", {"x": UncertainValue.gaussian(1.0, 0.5)})
        assert budget.expanded_uncertainty() == budget.expanded_uncertainty(seeded_settings.coverage)

    def test_relative_uncertainty_of_zero(self):
        budget = LinearBudget("x", {"x": 0.0})
        assert budget.relative_uncertainty == float("inf")
        assert budget.rows[0].percent == 0.0


class TestLiftBudget:

    def test_formula_matches_monte_carlo_for_fixed_inputs(self):
        result = compute_lift(deterministic_conditions())
        budget = lift_budget(result)
        assert budget.value == pytest.approx(result.lift.mean, rel=1e-9)
        assert budget.combined_uncertainty == 0.0
        assert all(r.percent == 0.0 for r in budget.rows)

    def test_sensitivity_to_area_and_velocity(self):
        result = compute_lift(deterministic_conditions())
        budget = lift_budget(result)
        lift = result.lift.mean
        assert budget.row("A").sensitivity == pytest.approx(lift / 0.23, rel=1e-9)
        assert budget.row("V").sensitivity == pytest.approx(2 * lift / 30.0, rel=1e-9)

    def test_denser_air_lifts_more(self):
        budget = lift_budget(compute_lift(deterministic_conditions()))
        assert budget.row("h").sensitivity < 0
        assert budget.row("T").sensitivity < 0
        assert budget.row("s_over").sensitivity > 0
        assert budget.row("s_under").sensitivity < 0

    def test_small_velocity_uncertainty(self):
        conditions = FlightConditions(0.0, 15.0, 0.0, UncertainValue.gaussian(30.0, 0.03), 0.23,
                                      CP_OVER_10DEG, CP_UNDER_10DEG)
        result = compute_lift(conditions)
        budget = lift_budget(result)
        assert budget.combined_uncertainty == pytest.approx(result.lift.std, rel=0.1)
        assert budget.row("V").percent == pytest.approx(100.0)

    def test_atmosphere_budget_names_inputs(self):
        budget = lift_budget(compute_lift(atmosphere_conditions()))
        assert tuple(r.variable for r in budget.rows) == LIFT_INPUTS
        assert budget.row("h").std > 0
        assert budget.row("A").std == 0

    def test_formula_uses_all_symbols(self):
        for name in LIFT_INPUTS:
            assert name in LIFT_FORMULA
