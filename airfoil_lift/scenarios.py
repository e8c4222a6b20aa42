"""
Input construction for the three lift computations.

All three feed the same ``compute_lift``; they differ only in which
inputs are uncertain:

    deterministic     every input fixed, Cp curves at 10° angle of attack
    atmosphere        temperature, elevation and humidity uncertain
    angle-of-attack   Cp curves for 0°, 5° and 10° from a sample table,
                      the applicable angle being unknown
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional

from .coefficients import CP_OVER_10DEG, CP_UNDER_10DEG
from .empirical import EmpiricalDistributionBuilder
from .errors import InvalidParameters
from .lift import FlightConditions
from .sample_table import SampleTable
from .uncertain_value import UncertainValue

logger = logging.getLogger(__name__)

# NACA 2412 test case
AREA = 0.23                 # m²
FREE_STREAM_VELOCITY = 30.0 # m/s
TEMPERATURE = 15.0          # °C
ELEVATION = 0.0             # m
HUMIDITY = 0.0              # dry air

# Uncertain ranges (troposphere)
TEMPERATURE_MEAN = 0.0
TEMPERATURE_STDDEV = 50.0
TEMPERATURE_RANGE = (-50.0, 50.0)
ELEVATION_RANGE = (0.0, 11019.2)
HUMIDITY_RANGE = (0.0, 1.0)


def deterministic_conditions() -> FlightConditions:
    return FlightConditions(
        elevation=ELEVATION,
        temperature=TEMPERATURE,
        humidity=HUMIDITY,
        velocity=FREE_STREAM_VELOCITY,
        area=AREA,
        cp_over=CP_OVER_10DEG,
        cp_under=CP_UNDER_10DEG,
    )


def atmosphere_conditions() -> FlightConditions:
    """
    Temperature ~ N(0, 50) °C restricted to -50..50 °C, elevation and
    relative humidity uniform over their ranges.
    """
    return FlightConditions(
        elevation=UncertainValue.uniform(*ELEVATION_RANGE),
        temperature=UncertainValue.gaussian(TEMPERATURE_MEAN, TEMPERATURE_STDDEV,
                                            *TEMPERATURE_RANGE),
        humidity=UncertainValue.uniform(*HUMIDITY_RANGE),
        velocity=FREE_STREAM_VELOCITY,
        area=AREA,
        cp_over=CP_OVER_10DEG,
        cp_under=CP_UNDER_10DEG,
    )


def angle_of_attack_conditions(table: SampleTable) -> FlightConditions:
    """
    One empirical Cp per chordwise position, each drawn from the values
    the 10°, 5° and 0° curves put there.
    """
    curves = table.angle_of_attack_curves()
    logger.info("Angle-of-attack scenarios: %s deg", ", ".join(str(a) for a in curves))
    coefficients = EmpiricalDistributionBuilder.build(list(curves.values()))
    split = table.n_positions
    return FlightConditions(
        elevation=ELEVATION,
        temperature=TEMPERATURE,
        humidity=HUMIDITY,
        velocity=FREE_STREAM_VELOCITY,
        area=AREA,
        cp_over=coefficients[:split],
        cp_under=coefficients[split:],
    )


@dataclass(frozen=True)
class Scenario:
    name: str
    description: str
    build: Callable
    needs_table: bool = False

    def conditions(self, table: Optional[SampleTable] = None) -> FlightConditions:
        if self.needs_table:
            if table is None:
                raise InvalidParameters(f"Scenario '{self.name}' needs a sample table")
            return self.build(table)
        return self.build()


SCENARIOS = OrderedDict((s.name, s) for s in (
    Scenario("angle-of-attack", "Cp curves for 0°, 5°, 10° equally likely",
             angle_of_attack_conditions, needs_table=True),
    Scenario("atmosphere", "temperature, elevation and humidity uncertain",
             atmosphere_conditions),
    Scenario("deterministic", "all inputs fixed (10° angle of attack, 15 °C, sea level, dry air)",
             deterministic_conditions),
))


def get_scenario(name: str) -> Scenario:
    try:
        return SCENARIOS[name]
    except KeyError:
        raise InvalidParameters(
            f"Unknown scenario '{name}'. Choose from: {list(SCENARIOS)}"
        ) from None
