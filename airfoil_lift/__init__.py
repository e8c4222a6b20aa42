"""
╔══════════════════════════════════════════════════════════════════════╗
║  airfoil_lift — Bernoulli lift on a 2D airfoil under uncertainty     ║
║                                                                      ║
║    • UncertainValue: Monte Carlo scalars with closed arithmetic      ║
║    • EmpiricalDistributionBuilder: scenario curves → per-position    ║
║      empirical distributions                                         ║
║    • compute_lift: one formula for fixed and uncertain inputs        ║
║    • LinearBudget: first-order cross-check with sympy derivatives    ║
╚══════════════════════════════════════════════════════════════════════╝
"""

from .config import Settings, configure, get_settings
from .errors import (
    LiftError, InvalidParameters, ShapeMismatch, DivisionByZero, DomainError,
    ConfigurationError, MalformedInputRow, TableReadError, TableNotFound,
)
from .uncertain_value import UncertainValue, DistributionSummary, as_uncertain, average
from .empirical import EmpiricalDistributionBuilder
from .sample_table import SampleTable, load_sample_table, normalize_decimal, parse_row
from .lift import FlightConditions, LiftResult, compute_lift
from .scenarios import SCENARIOS, get_scenario
from .budget import LinearBudget, lift_budget
from .report import LiftReport

__version__ = "0.1.0"
