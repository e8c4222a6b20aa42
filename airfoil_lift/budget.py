"""
First-order (GUM linear) uncertainty budget of the lift force.

Cross-checks the Monte Carlo result: the lift formula is differentiated
symbolically, the gradient is evaluated at the input means and combined
with each input's standard deviation,

    u_c² = Σᵢ (∂F/∂xᵢ)² · u(xᵢ)²

assuming uncorrelated inputs. The rows show which input dominates the
spread of the lift.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import List, Mapping, Optional

import numpy as np
import sympy as sp
from scipy.stats import norm

from . import config
from .lift import (
    CELSIUS_TO_KELVIN, GAS_CONSTANT, GRAVITY, MAGNUS_A, MAGNUS_B,
    MAGNUS_COEFFICIENT, MOLAR_MASS_AIR, SEA_LEVEL_PRESSURE,
    SPECIFIC_GAS_DRY_AIR, SPECIFIC_GAS_VAPOR, LiftResult,
)
from .uncertain_value import as_uncertain

# Lift as one closed expression in the inputs of compute_lift. The mean
# surface speed ratios s_over, s_under stand in for the Cp distributions.
_KELVIN = f"(T + {CELSIUS_TO_KELVIN})"
_P_AIR = f"{SEA_LEVEL_PRESSURE}*exp(-{GRAVITY}*{MOLAR_MASS_AIR}*h/({GAS_CONSTANT}*{_KELVIN}))"
_P_VAPOR = f"{MAGNUS_COEFFICIENT}*10**({MAGNUS_A}*T/(T + {MAGNUS_B}))*Rh"
_DENSITY = (f"(({_P_AIR} - {_P_VAPOR})/({SPECIFIC_GAS_DRY_AIR}*{_KELVIN})"
            f" + {_P_VAPOR}/({SPECIFIC_GAS_VAPOR}*{_KELVIN}))")

LIFT_FORMULA = f"{_DENSITY}*A*V**2*(s_over**2 - s_under**2)/2"
LIFT_INPUTS = ("h", "T", "Rh", "A", "V", "s_over", "s_under")


@dataclass(frozen=True)
class BudgetRow:
    """One input's line in the budget."""
    variable: str
    mean: float
    std: float
    sensitivity: float      # ∂F/∂x at the means
    percent: float          # share of u_c², 0..100

    @property
    def contribution(self) -> float:
        """|c·u|, the input's standard-uncertainty component of F."""
        return abs(self.sensitivity) * self.std


class LinearBudget:
    """
    Linearised propagation of ``formula`` around the means of ``inputs``.

    ``inputs`` maps each free symbol of the formula to an UncertainValue
    or plain number. Everything is evaluated once, on construction.
    """

    def __init__(self, formula: str, inputs: Mapping):
        self.formula = formula
        self.inputs = OrderedDict((name, as_uncertain(v)) for name, v in inputs.items())

        symbols = [sp.Symbol(name) for name in self.inputs]
        expr = sp.sympify(formula, locals=dict(zip(self.inputs, symbols)))
        gradient = [sp.diff(expr, s) for s in symbols]
        evaluate = sp.lambdify(symbols, [expr] + gradient, modules="math")

        means = [v.mean for v in self.inputs.values()]
        value, *sensitivities = evaluate(*means)
        self.value = float(value)

        components = [(float(c) * v.std) ** 2 for c, v in zip(sensitivities, self.inputs.values())]
        self.variance = float(sum(components))
        self.rows: List[BudgetRow] = [
            BudgetRow(name, v.mean, v.std, float(c),
                      100.0 * part / self.variance if self.variance > 0 else 0.0)
            for (name, v), c, part in zip(self.inputs.items(), sensitivities, components)
        ]

    @property
    def combined_uncertainty(self) -> float:
        return float(np.sqrt(self.variance))

    @property
    def relative_uncertainty(self) -> float:
        if self.value == 0:
            return float("inf")
        return self.combined_uncertainty / abs(self.value)

    def row(self, variable: str) -> BudgetRow:
        for r in self.rows:
            if r.variable == variable:
                return r
        raise KeyError(variable)

    def expanded_uncertainty(self, coverage: Optional[float] = None) -> tuple:
        """``(U, k)`` with U = k·u_c and k the two-sided normal quantile."""
        coverage = config.get_settings().coverage if coverage is None else coverage
        k = float(norm.ppf((1 + coverage) / 2))
        return k * self.combined_uncertainty, k


def lift_budget(result: LiftResult) -> LinearBudget:
    """Linear budget of the lift force over the inputs of ``result``."""
    values = (result.elevation, result.temperature, result.humidity, result.area,
              result.velocity, result.speed_ratio_over, result.speed_ratio_under)
    return LinearBudget(LIFT_FORMULA, OrderedDict(zip(LIFT_INPUTS, values)))
