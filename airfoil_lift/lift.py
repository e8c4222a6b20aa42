"""
Lift force on a 2D airfoil from Bernoulli's equation.

Inviscid, incompressible, 2D flow. The hydrostatic term cancels between
the two surfaces, leaving

    P_under - P_over = 1/2 * rho * (v_over^2 - v_under^2)

with surface velocities taken from the pressure-coefficient distributions,
v = V * sqrt(|1 - Cp|), averaged over each surface. Air density is that
of humid air at the given elevation, temperature and relative humidity.
Every input may be a plain number or an UncertainValue.
"""

import logging
from dataclasses import dataclass, field
from typing import Sequence, Union

from .errors import ShapeMismatch
from .uncertain_value import UncertainValue, as_uncertain, average, exp, fabs, sqrt

logger = logging.getLogger(__name__)

Quantity = Union[float, UncertainValue]

# Barometric formula, reference level h0 = 0 m, P0 = 1 atm
SEA_LEVEL_PRESSURE = 101325.0       # Pa
GRAVITY = 9.81                      # m/s²
MOLAR_MASS_AIR = 0.0289644          # kg/mol
GAS_CONSTANT = 8.31432              # N·m/(mol·K)
CELSIUS_TO_KELVIN = 273.15

# Magnus-type saturation vapour pressure, T in °C
MAGNUS_COEFFICIENT = 6.1078
MAGNUS_A = 7.5
MAGNUS_B = 237.3

SPECIFIC_GAS_DRY_AIR = 287.058      # J/(kg·K)
SPECIFIC_GAS_VAPOR = 461.495        # J/(kg·K)


@dataclass(frozen=True)
class FlightConditions:
    """Inputs of the lift computation."""
    elevation: Quantity             # m
    temperature: Quantity           # °C
    humidity: Quantity              # relative humidity, 0..1
    velocity: Quantity              # free stream, m/s
    area: Quantity                  # m²
    cp_over: Sequence[Quantity] = field(repr=False)
    cp_under: Sequence[Quantity] = field(repr=False)


@dataclass(frozen=True)
class LiftResult:
    """Every intermediate quantity of one lift computation."""
    temperature: UncertainValue
    elevation: UncertainValue
    humidity: UncertainValue
    air_pressure: UncertainValue
    saturation_pressure: UncertainValue
    vapor_pressure: UncertainValue
    dry_pressure: UncertainValue
    density: UncertainValue
    area: UncertainValue
    velocity: UncertainValue
    speed_ratio_over: UncertainValue    # mean sqrt(|1 - Cp|) over the upper surface
    speed_ratio_under: UncertainValue
    v_over: UncertainValue
    v_under: UncertainValue
    lift: UncertainValue


# ═══════════════════════════════════════════════════════════════════════
# §1  ATMOSPHERE
# ═══════════════════════════════════════════════════════════════════════

def kelvin(temperature: Quantity) -> UncertainValue:
    return as_uncertain(temperature) + CELSIUS_TO_KELVIN


def air_pressure(elevation: Quantity, temperature: Quantity) -> UncertainValue:
    """P_air = P0 * exp(-g*M*h / (R*T)), Pa."""
    exponent = -GRAVITY * MOLAR_MASS_AIR * as_uncertain(elevation) / (GAS_CONSTANT * kelvin(temperature))
    return SEA_LEVEL_PRESSURE * exp(exponent)


def saturation_vapor_pressure(temperature: Quantity) -> UncertainValue:
    """P_sat = 6.1078 * 10^(7.5*T / (T + 237.3))."""
    t = as_uncertain(temperature)
    return MAGNUS_COEFFICIENT * 10.0 ** (MAGNUS_A * t / (t + MAGNUS_B))


def humid_air_density(dry_pressure: Quantity, vapor_pressure: Quantity,
                      temperature: Quantity) -> UncertainValue:
    """rho = P_d/(R_d*T) + P_v/(R_v*T), kg/m³."""
    t = kelvin(temperature)
    return (as_uncertain(dry_pressure) / (SPECIFIC_GAS_DRY_AIR * t)
            + as_uncertain(vapor_pressure) / (SPECIFIC_GAS_VAPOR * t))


# ═══════════════════════════════════════════════════════════════════════
# §2  SURFACE VELOCITY AND LIFT
# ═══════════════════════════════════════════════════════════════════════

def speed_ratio(cp: Quantity) -> UncertainValue:
    """Local-to-free-stream speed ratio sqrt(|1 - Cp|)."""
    return sqrt(fabs(1.0 - as_uncertain(cp)))


def mean_speed_ratio(coefficients: Sequence[Quantity]) -> UncertainValue:
    if len(coefficients) == 0:
        raise ShapeMismatch("Pressure-coefficient distribution is empty")
    return average([speed_ratio(cp) for cp in coefficients])


def lift_force(density: Quantity, area: Quantity,
               v_over: Quantity, v_under: Quantity) -> UncertainValue:
    """F = rho * A * (v_over² - v_under²) / 2, N."""
    return as_uncertain(density) * area * (as_uncertain(v_over) ** 2 - as_uncertain(v_under) ** 2) / 2.0


def compute_lift(conditions: FlightConditions) -> LiftResult:
    """Run the full formula chain for one set of flight conditions."""
    temperature = as_uncertain(conditions.temperature)
    elevation = as_uncertain(conditions.elevation)
    humidity = as_uncertain(conditions.humidity)
    velocity = as_uncertain(conditions.velocity)
    area = as_uncertain(conditions.area)

    p_air = air_pressure(elevation, temperature)
    p_sat = saturation_vapor_pressure(temperature)
    p_vapor = p_sat * humidity
    p_dry = p_air - p_vapor
    density = humid_air_density(p_dry, p_vapor, temperature)

    ratio_over = mean_speed_ratio(conditions.cp_over)
    ratio_under = mean_speed_ratio(conditions.cp_under)
    v_over = velocity * ratio_over
    v_under = velocity * ratio_under

    logger.debug("Lift over %d upper / %d lower positions",
                 len(conditions.cp_over), len(conditions.cp_under))
    return LiftResult(
        temperature=temperature,
        elevation=elevation,
        humidity=humidity,
        air_pressure=p_air,
        saturation_pressure=p_sat,
        vapor_pressure=p_vapor,
        dry_pressure=p_dry,
        density=density,
        area=area,
        velocity=velocity,
        speed_ratio_over=ratio_over,
        speed_ratio_under=ratio_under,
        v_over=v_over,
        v_under=v_under,
        lift=lift_force(density, area, v_over, v_under),
    )
