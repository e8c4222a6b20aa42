"""
Propagation settings: Monte Carlo sample count, random seed and the
coverage probability used for reported intervals.

Defaults can be overridden through the environment:

    AIRFOIL_LIFT_SAMPLES   number of draws per uncertain value
    AIRFOIL_LIFT_SEED      integer seed for the shared generator
    AIRFOIL_LIFT_COVERAGE  coverage probability, 0 < p < 1
"""

import os
import logging
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_SAMPLES = "AIRFOIL_LIFT_SAMPLES"
ENV_SEED = "AIRFOIL_LIFT_SEED"
ENV_COVERAGE = "AIRFOIL_LIFT_COVERAGE"


@dataclass(frozen=True)
class Settings:
    n_samples: int = 10000
    seed: Optional[int] = None
    coverage: float = 0.95

    def __post_init__(self):
        if isinstance(self.n_samples, bool) or not isinstance(self.n_samples, int):
            raise ConfigurationError(f"n_samples must be an integer, got {self.n_samples!r}")
        if self.n_samples < 2:
            raise ConfigurationError(f"n_samples must be at least 2, got {self.n_samples}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)
                                      or self.seed < 0):
            raise ConfigurationError(f"seed must be a non-negative integer, got {self.seed!r}")
        if not 0.0 < self.coverage < 1.0:
            raise ConfigurationError(f"coverage must lie in (0, 1), got {self.coverage}")

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        environ = os.environ if environ is None else environ
        kwargs = {}
        try:
            if environ.get(ENV_SAMPLES):
                kwargs["n_samples"] = int(environ[ENV_SAMPLES])
            if environ.get(ENV_SEED):
                kwargs["seed"] = int(environ[ENV_SEED])
            if environ.get(ENV_COVERAGE):
                kwargs["coverage"] = float(environ[ENV_COVERAGE])
        except ValueError as exc:
            raise ConfigurationError(f"Bad environment setting: {exc}") from exc
        return cls(**kwargs)


_settings = Settings()
_rng = np.random.default_rng(_settings.seed)


def get_settings() -> Settings:
    return _settings


def configure(settings: Optional[Settings] = None, **overrides) -> Settings:
    """
    Replace the active settings and reseed the shared generator.

    Either pass a complete ``Settings`` object or keyword overrides
    (``n_samples``, ``seed``, ``coverage``) applied to the current one.
    """
    global _settings, _rng
    base = settings if settings is not None else _settings
    try:
        new = replace(base, **overrides) if overrides else base
    except TypeError as exc:
        raise ConfigurationError(str(exc)) from exc
    _settings = new
    _rng = np.random.default_rng(new.seed)
    logger.debug("Propagation settings: %s", new)
    return new


def rng() -> np.random.Generator:
    return _rng


def n_samples() -> int:
    return _settings.n_samples
