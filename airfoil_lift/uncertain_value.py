"""
╔══════════════════════════════════════════════════════════════════════╗
║  UncertainValue — Monte Carlo scalar with closed arithmetic          ║
║                                                                      ║
║  Supports:                                                           ║
║    • Fixed (degenerate), uniform, gaussian and empirical inputs      ║
║    • +, -, *, /, **, abs, sqrt and exp on any mix of those kinds     ║
║    • Mean, standard deviation and percentile-band summaries          ║
╚══════════════════════════════════════════════════════════════════════╝

Each value carries an array of draws. A fixed value carries exactly one
draw, which numpy broadcasts against full-size operands, so formulas fed
only fixed inputs reduce to ordinary float arithmetic.
"""

import operator
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

import numpy as np
from scipy.stats import truncnorm

from . import config
from .errors import DivisionByZero, DomainError, InvalidParameters, ShapeMismatch

Number = Union[int, float]


# ═══════════════════════════════════════════════════════════════════════
# §1  SUMMARY RECORD
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DistributionSummary:
    """Point estimate and spread of an UncertainValue."""
    mean: float
    std: float
    low: float          # lower edge of the percentile band
    high: float         # upper edge of the percentile band
    coverage: float

    def __str__(self):
        if self.std == 0:
            return f"{self.mean:.6g}"
        return f"{self.mean:.6g} ± {self.std:.4g}"


# ═══════════════════════════════════════════════════════════════════════
# §2  UNCERTAIN VALUE
# ═══════════════════════════════════════════════════════════════════════

def _check_finite(value, name: str) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameters(f"{name} must be a number, got {value!r}") from exc
    if not np.isfinite(value):
        raise InvalidParameters(f"{name} must be finite, got {value}")
    return value


def _freeze(draws: np.ndarray) -> np.ndarray:
    draws.setflags(write=False)
    return draws


class UncertainValue:
    """
    A scalar quantity described by a distribution.

    ``UncertainValue(x)`` is the degenerate value x. Use the classmethods
    ``uniform``, ``gaussian`` and ``empirical`` for uncertain inputs.
    Arithmetic always returns a new UncertainValue; plain numbers mix
    freely with uncertain ones.
    """

    __array_ufunc__ = None   # numpy defers to the reflected operators below

    def __init__(self, value: Number = 0.0):
        self._draws = _freeze(np.array([_check_finite(value, "value")], dtype=float))
        self._kind = "fixed"
        self._observations = None
        self._support = (float(self._draws[0]), float(self._draws[0]))

    @classmethod
    def _from_draws(cls, draws: np.ndarray, kind: str = "derived",
                    observations: Optional[tuple] = None,
                    support: Optional[tuple] = None) -> "UncertainValue":
        obj = cls.__new__(cls)
        draws = np.asarray(draws, dtype=float)
        obj._draws = _freeze(draws.copy() if draws.base is not None else draws)
        obj._kind = "fixed" if draws.size == 1 and kind == "derived" else kind
        obj._observations = observations
        if support is None and draws.size == 1:
            support = (float(draws[0]), float(draws[0]))
        obj._support = support
        return obj

    # ── constructors ──

    @classmethod
    def uniform(cls, low: Number, high: Number) -> "UncertainValue":
        """Value equally likely anywhere in ``[low, high]``."""
        low = _check_finite(low, "low")
        high = _check_finite(high, "high")
        if low > high:
            raise InvalidParameters(f"Uniform requires low <= high, got [{low}, {high}]")
        if low == high:
            return cls(low)
        draws = config.rng().uniform(low, high, size=config.n_samples())
        return cls._from_draws(draws, kind="uniform", support=(low, high))

    @classmethod
    def gaussian(cls, mean: Number, stddev: Number,
                 low: Optional[Number] = None,
                 high: Optional[Number] = None) -> "UncertainValue":
        """
        Normally distributed value.

        Parameters
        ----------
        mean, stddev : float
            Location and scale of the (untruncated) normal distribution.
        low, high : float, optional
            Truncation bounds. When either is given, draws come from the
            normal distribution restricted to ``[low, high]``.
        """
        mean = _check_finite(mean, "mean")
        stddev = _check_finite(stddev, "stddev")
        if stddev < 0:
            raise InvalidParameters(f"Gaussian stddev must be >= 0, got {stddev}")
        lo = -np.inf if low is None else _check_finite(low, "low")
        hi = np.inf if high is None else _check_finite(high, "high")
        if lo >= hi:
            raise InvalidParameters(f"Truncation bounds must satisfy low < high, got [{lo}, {hi}]")

        if stddev == 0:
            if not lo <= mean <= hi:
                raise InvalidParameters(f"Mean {mean} lies outside the truncation bounds [{lo}, {hi}]")
            return cls(mean)

        n = config.n_samples()
        if low is None and high is None:
            draws = config.rng().normal(loc=mean, scale=stddev, size=n)
        else:
            a, b = (lo - mean) / stddev, (hi - mean) / stddev
            draws = truncnorm.rvs(a, b, loc=mean, scale=stddev, size=n,
                                  random_state=config.rng())
        support = None if low is None and high is None else (lo, hi)
        return cls._from_draws(draws, kind="gaussian", support=support)

    @classmethod
    def empirical(cls, samples: Iterable[Number]) -> "UncertainValue":
        """
        Value distributed like a finite set of equally likely observations.

        Draws are taken from the observations with replacement; no
        smoothing or interpolation between observations takes place.
        """
        observed = np.asarray(list(samples), dtype=float).ravel()
        if observed.size == 0:
            raise InvalidParameters("Empirical distribution needs at least one sample")
        if not np.all(np.isfinite(observed)):
            raise InvalidParameters("Empirical samples must be finite")
        observations = tuple(float(x) for x in observed)
        support = (float(observed.min()), float(observed.max()))

        if np.all(observed == observed[0]):
            return cls._from_draws(observed[:1], kind="empirical", observations=observations, support=support)
        draws = config.rng().choice(observed, size=config.n_samples(), replace=True)
        return cls._from_draws(draws, kind="empirical", observations=observations, support=support)

    # ── properties ──

    @property
    def draws(self) -> np.ndarray:
        """Read-only array of Monte Carlo draws (length 1 when degenerate)."""
        return self._draws

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def observations(self) -> Optional[tuple]:
        """The sample set an empirical value was built from, else None."""
        return self._observations

    @property
    def support(self) -> Optional[tuple]:
        """
        Declared ``(low, high)`` range of an input value, endpoints included.

        None for derived values and untruncated gaussians.
        """
        return self._support

    @property
    def is_degenerate(self) -> bool:
        return self._draws.size == 1

    @property
    def mean(self) -> float:
        if self.is_degenerate:
            return float(self._draws[0])
        return float(np.mean(self._draws))

    @property
    def std(self) -> float:
        if self.is_degenerate:
            return 0.0
        return float(np.std(self._draws, ddof=1))

    def interval(self, coverage: Optional[float] = None) -> tuple:
        """Central percentile band holding ``coverage`` of the draws."""
        coverage = config.get_settings().coverage if coverage is None else coverage
        if not 0.0 < coverage < 1.0:
            raise InvalidParameters(f"coverage must lie in (0, 1), got {coverage}")
        if self.is_degenerate:
            return self.mean, self.mean
        tail = (1.0 - coverage) / 2.0 * 100.0
        lo, hi = np.percentile(self._draws, [tail, 100.0 - tail])
        return float(lo), float(hi)

    def summary(self, coverage: Optional[float] = None) -> DistributionSummary:
        coverage = config.get_settings().coverage if coverage is None else coverage
        lo, hi = self.interval(coverage)
        return DistributionSummary(self.mean, self.std, lo, hi, coverage)

    # ── arithmetic core ──

    def _binary(self, other, op, name: str) -> "UncertainValue":
        other = as_uncertain(other)
        a, b = self._draws, other._draws
        if a.size > 1 and b.size > 1 and a.size != b.size:
            raise ShapeMismatch(
                f"Cannot combine values drawn with {a.size} and {b.size} samples in {name}"
            )
        with np.errstate(all="ignore"):
            result = op(a, b)
        return _checked(result, name)

    def _unary(self, op, name: str) -> "UncertainValue":
        with np.errstate(all="ignore"):
            result = op(self._draws)
        return _checked(result, name)

    def plus(self, other) -> "UncertainValue":
        return self._binary(other, operator.add, "addition")

    def minus(self, other) -> "UncertainValue":
        return self._binary(other, operator.sub, "subtraction")

    def times(self, other) -> "UncertainValue":
        return self._binary(other, operator.mul, "multiplication")

    def divided_by(self, other) -> "UncertainValue":
        other = as_uncertain(other)
        _check_denominator(other)
        return self._binary(other, operator.truediv, "division")

    def power(self, exponent) -> "UncertainValue":
        return self._binary(exponent, np.power, "power")

    def absolute(self) -> "UncertainValue":
        return self._unary(np.abs, "abs")

    def sqrt(self) -> "UncertainValue":
        if np.any(self._draws < 0):
            raise DomainError(
                f"sqrt of a value with negative support (min draw {self._draws.min():.6g}); "
                f"take abs() first"
            )
        return self._unary(np.sqrt, "sqrt")

    def exp(self) -> "UncertainValue":
        return self._unary(np.exp, "exp")

    # ── operator overloads ──

    def __add__(self, other):
        return self.plus(other)

    def __radd__(self, other):
        return as_uncertain(other).plus(self)

    def __sub__(self, other):
        return self.minus(other)

    def __rsub__(self, other):
        return as_uncertain(other).minus(self)

    def __mul__(self, other):
        return self.times(other)

    def __rmul__(self, other):
        return as_uncertain(other).times(self)

    def __truediv__(self, other):
        return self.divided_by(other)

    def __rtruediv__(self, other):
        return as_uncertain(other).divided_by(self)

    def __pow__(self, exponent):
        return self.power(exponent)

    def __rpow__(self, base):
        return as_uncertain(base).power(self)

    def __neg__(self):
        return self._unary(np.negative, "negation")

    def __abs__(self):
        return self.absolute()

    def __float__(self):
        if not self.is_degenerate:
            raise TypeError("Only a degenerate UncertainValue converts to float; use .mean or .summary()")
        return self.mean

    def __repr__(self):
        if self.is_degenerate:
            return f"UncertainValue({self.mean!r})"
        return f"UncertainValue({self._kind}, mean={self.mean:.6g}, std={self.std:.4g}, n={self._draws.size})"


def _checked(draws: np.ndarray, name: str) -> UncertainValue:
    if not np.all(np.isfinite(draws)):
        raise DomainError(f"{name} produced undefined or infinite values")
    return UncertainValue._from_draws(draws)


def _check_denominator(value: UncertainValue):
    if value.support is not None:
        lo, hi = value.support
        if lo <= 0 <= hi:
            raise DivisionByZero(f"Denominator support [{lo:.6g}, {hi:.6g}] includes zero")
    d = value.draws
    if np.any(d == 0) or (d.min() < 0 < d.max()):
        raise DivisionByZero(
            f"Denominator support [{d.min():.6g}, {d.max():.6g}] includes zero"
        )


# ═══════════════════════════════════════════════════════════════════════
# §3  FUNCTIONS
# ═══════════════════════════════════════════════════════════════════════

def as_uncertain(value) -> UncertainValue:
    """Promote a plain number to a degenerate UncertainValue."""
    if isinstance(value, UncertainValue):
        return value
    return UncertainValue(value)


def exp(x) -> UncertainValue:
    return as_uncertain(x).exp()


def sqrt(x) -> UncertainValue:
    return as_uncertain(x).sqrt()


def fabs(x) -> UncertainValue:
    return as_uncertain(x).absolute()


def average(values: Sequence) -> UncertainValue:
    """Arithmetic mean of a non-empty sequence of values."""
    if len(values) == 0:
        raise ShapeMismatch("Cannot average an empty sequence")
    total = as_uncertain(values[0])
    for value in values[1:]:
        total = total + value
    return total / len(values)
