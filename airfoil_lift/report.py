"""Text reports for lift computations and linear budgets."""

from typing import Optional

import numpy as np

from . import config
from .budget import LinearBudget
from .lift import LiftResult
from .uncertain_value import UncertainValue

# (field, label, unit)
REPORTED_QUANTITIES = [
    ("temperature", "Temperature", "°C"),
    ("elevation", "Elevation", "m"),
    ("humidity", "Humidity", ""),
    ("air_pressure", "Air pressure", "Pa"),
    ("saturation_pressure", "Saturation pressure", "Pa"),
    ("vapor_pressure", "Vapour pressure", "Pa"),
    ("dry_pressure", "Dry-air pressure", "Pa"),
    ("v_over", "Velocity over", "m/s"),
    ("v_under", "Velocity under", "m/s"),
    ("area", "Area", "m²"),
    ("density", "Density", "kg/m³"),
]


def _round_to_uncertainty(value: float, spread: float, sig_figs: int = 2) -> tuple:
    """Round ``spread`` to ``sig_figs`` significant figures and ``value`` to match."""
    if spread <= 0:
        return value, spread
    magnitude = np.floor(np.log10(abs(spread)))
    round_to = int(sig_figs - 1 - magnitude)
    return round(value, round_to), round(spread, round_to)


def format_quantity(value: UncertainValue, unit: str = "",
                    coverage: Optional[float] = None) -> str:
    s = value.summary(coverage)
    unit = f" {unit}" if unit else ""
    if s.std == 0:
        return f"{s.mean:.6g}{unit}"
    return (f"{s.mean:.6g} ± {s.std:.4g}{unit}  "
            f"[{s.low:.6g}, {s.high:.6g}] ({s.coverage*100:.0f}%)")


def lift_line(lift: UncertainValue) -> str:
    """The final result line, ``Lift force = <mean> ± <std> N``."""
    if lift.is_degenerate:
        return f"Lift force = {lift.mean:f} N"
    mean, std = _round_to_uncertainty(lift.mean, lift.std)
    return f"Lift force = {mean} ± {std} N"


class LiftReport:
    """Formats a LiftResult (and optionally its linear budget) as text."""

    @staticmethod
    def _hline(width=72):
        return "─" * width

    @staticmethod
    def _dline(width=72):
        return "═" * width

    @classmethod
    def generate(cls, result: LiftResult, coverage: Optional[float] = None,
                 title: str = "") -> str:
        coverage = config.get_settings().coverage if coverage is None else coverage
        w = 72
        lines = []

        lines.append(cls._dline(w))
        lines.append(f"  {title or 'LIFT FORCE ON A 2D AIRFOIL (BERNOULLI)'}")
        lines.append(cls._dline(w))
        lines.append("")

        lines.append("  INTERMEDIATE QUANTITIES")
        lines.append(cls._hline(w))
        for name, label, unit in REPORTED_QUANTITIES:
            lines.append(f"    {label:<22} {format_quantity(getattr(result, name), unit, coverage)}")
        lines.append("")

        lift = result.lift.summary(coverage)
        lines.append("  RESULT")
        lines.append(cls._dline(w))
        lines.append(f"    Mean:                 {lift.mean:.6g} N")
        lines.append(f"    Standard deviation:   {lift.std:.4g} N")
        lines.append(f"    {coverage*100:.0f}% interval:         [{lift.low:.6g}, {lift.high:.6g}] N")
        lines.append(cls._hline(w))
        lines.append(f"  {lift_line(result.lift)}")
        lines.append(cls._dline(w))
        return "\n".join(lines)

    @classmethod
    def budget_table(cls, budget: LinearBudget, coverage: Optional[float] = None) -> str:
        """Linear (first-order) budget with per-input contributions."""
        coverage = config.get_settings().coverage if coverage is None else coverage
        U, k = budget.expanded_uncertainty(coverage)
        w = 72
        lines = []

        lines.append("  LINEAR UNCERTAINTY BUDGET")
        lines.append(cls._hline(w))
        lines.append(f"  {'Var':<9} {'Mean':<12} {'u(x)':<12} {'|c|':<12} {'Contribution'}")
        lines.append("  " + "-" * 68)
        for row in budget.rows:
            pct_bar = "█" * int(row.percent / 5)
            lines.append(
                f"  {row.variable:<9} "
                f"{row.mean:<12.4g} "
                f"{row.std:<12.4g} "
                f"{abs(row.sensitivity):<12.4g} "
                f"{row.percent:5.1f}%  {pct_bar}"
            )
        lines.append("")
        lines.append(f"    Best estimate:            F_L = {budget.value:.6g} N")
        lines.append(f"    Combined std uncertainty: u(F_L) = {budget.combined_uncertainty:.4g} N")
        lines.append(f"    Coverage factor:          k = {k:.3f}")
        lines.append(f"    Expanded uncertainty:     U = {U:.4g} N")
        lines.append(cls._hline(w))
        return "\n".join(lines)
