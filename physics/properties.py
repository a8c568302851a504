"""
Stellar property relations: mass -> radius, luminosity, temperature, lifetime.

All inputs are in solar units (mass in M_sun, radius in R_sun,
luminosity in L_sun) unless noted. These are closed-form, piecewise
power-law approximations chosen for teaching, not a structure solver:

  R = M^p          p = 0.8 (M < 2), 0.6 (2 <= M < 20), 0.5 (M >= 20)
  L = M^q          q = 2.3 (M < 0.43), 4 (< 2), 3.5 (< 20), 3 (>= 20)
  T = (L / (4 pi sigma R^2))^(1/4)      (SI-scaled L and R)
  t = 1e10 yr * M^-2.5 * (Z / 0.02)^0.1

Every function is total over mass > 0. Non-positive mass (or
metallicity) is undefined for the power laws and raises InvalidInput
rather than returning NaN.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math
from collections import OrderedDict, namedtuple

from physics.constants import (
    M_SUN, R_SUN, L_SUN, G, C_LIGHT, SIGMA_SB, Z_SUN,
    SOLAR_AGE_YR, SOLAR_ROTATION_DAYS, B_BASE_T, MS_LIFETIME_YR,
    REIMERS_ETA, M_GIANT, M_CORE_COLLAPSE, M_BLACK_HOLE,
)

ARROW = "\u2192"

# Evolution path types
LOW_MASS = "Low Mass"
INTERMEDIATE_MASS = "Intermediate Mass"
HIGH_MASS = "High Mass"
VERY_HIGH_MASS = "Very High Mass"

# Final states
WHITE_DWARF = "White Dwarf"
NEUTRON_STAR = "Neutron Star"
BLACK_HOLE = "Black Hole"


class InvalidInput(ValueError):
    """Input outside the domain of the scaling laws (mass or metallicity <= 0)."""


def require_positive(name, value):
    """Coerce value to float; raise InvalidInput unless it is finite and > 0."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidInput("{} must be a number, got {!r}".format(name, value))
    if not math.isfinite(value) or value <= 0:
        raise InvalidInput("{} must be > 0, got {}".format(name, value))
    return value


def power_law(base, exponent):
    """base ** exponent, saturating to inf where the float range overflows."""
    try:
        return base ** exponent
    except OverflowError:
        return math.inf


class EvolutionPath(namedtuple("EvolutionPath",
                               ["type", "final_state", "description",
                                "supernova"])):
    """
    Terminal-fate classification of a star, derived from mass alone.

    Attributes
    ----------
    type : str
        One of LOW_MASS, INTERMEDIATE_MASS, HIGH_MASS, VERY_HIGH_MASS.
    final_state : str
        One of WHITE_DWARF, NEUTRON_STAR, BLACK_HOLE.
    description : str
        Narrative of the stage sequence.
    supernova : bool
        True when the star ends in core collapse (M >= 8).
    """

    __slots__ = ()

    def to_dict(self):
        return {
            "type": self.type,
            "final_state": self.final_state,
            "description": self.description,
            "supernova": self.supernova,
        }


# ----------------------------------------------------------------------
# Structure relations
# ----------------------------------------------------------------------

def _radius_exponent(mass):
    if mass < 0.5:
        return 0.8
    elif mass < 2.0:
        return 0.8
    elif mass < 20.0:
        return 0.6
    return 0.5


def _luminosity_exponent(mass):
    if mass < 0.43:
        return 2.3
    elif mass < 2.0:
        return 4
    elif mass < 20.0:
        return 3.5
    return 3


def radius(mass):
    """
    Main-sequence radius from the mass-radius relation.

    The two bands below 2 M_sun share the exponent 0.8 but are kept
    separate so that either can be recalibrated independently.

    Parameters
    ----------
    mass : float
        Stellar mass in solar masses.

    Returns
    -------
    float
        Radius in solar radii.
    """
    mass = require_positive("mass", mass)
    return power_law(mass, _radius_exponent(mass))


def luminosity(mass):
    """
    Main-sequence luminosity from the mass-luminosity relation.

    Parameters
    ----------
    mass : float
        Stellar mass in solar masses.

    Returns
    -------
    float
        Luminosity in solar luminosities.
    """
    mass = require_positive("mass", mass)
    return power_law(mass, _luminosity_exponent(mass))


def temperature(mass):
    """
    Effective temperature from the Stefan-Boltzmann law.

    T = (L / (4 pi sigma R^2))^(1/4), with L and R converted from solar
    units to W and m before the formula is applied. Evaluated in log10
    space from the band exponents, so masses whose L or R under- or
    overflow a float still give a finite temperature.

    Returns
    -------
    float
        Effective temperature in K.
    """
    mass = require_positive("mass", mass)
    log_m = math.log10(mass)
    log_l = _luminosity_exponent(mass) * log_m + math.log10(L_SUN)
    log_r = _radius_exponent(mass) * log_m + math.log10(R_SUN)
    log_t = 0.25 * (log_l - math.log10(4.0 * math.pi * SIGMA_SB) - 2.0 * log_r)
    return power_law(10.0, log_t)


def metallicity_factor(metallicity=Z_SUN):
    """Lifetime correction (Z / Z_sun)^0.1; exactly 1 at Z = 0.02."""
    metallicity = require_positive("metallicity", metallicity)
    return (metallicity / Z_SUN) ** 0.1


def lifetime(mass, metallicity=Z_SUN):
    """
    Total nuclear-burning lifetime in years.

    t = 1e10 * M^-2.5 * (Z / 0.02)^0.1. Higher metallicity lengthens
    the lifetime slightly.
    """
    mass = require_positive("mass", mass)
    return power_law(mass, -2.5) * MS_LIFETIME_YR * metallicity_factor(metallicity)


def evolution_path(mass):
    """
    Classify the terminal fate by mass thresholds 0.5, 8 and 20 M_sun.

    Returns
    -------
    EvolutionPath
    """
    mass = require_positive("mass", mass)
    if mass < M_GIANT:
        return EvolutionPath(
            LOW_MASS, WHITE_DWARF,
            "Red dwarf {a} White dwarf".format(a=ARROW),
            False)
    elif mass < M_CORE_COLLAPSE:
        return EvolutionPath(
            INTERMEDIATE_MASS, WHITE_DWARF,
            "Main sequence {a} Red giant {a} White dwarf".format(a=ARROW),
            False)
    elif mass < M_BLACK_HOLE:
        return EvolutionPath(
            HIGH_MASS, NEUTRON_STAR,
            "Main sequence {a} Red supergiant {a} Supernova {a} "
            "Neutron star".format(a=ARROW),
            True)
    return EvolutionPath(
        VERY_HIGH_MASS, BLACK_HOLE,
        "Main sequence {a} Blue supergiant {a} Supernova {a} "
        "Black hole".format(a=ARROW),
        True)


# ----------------------------------------------------------------------
# Derived quantities
# ----------------------------------------------------------------------

def mass_loss_rate(mass, luminosity_solar, radius_solar):
    """
    Stellar-wind mass loss from the Reimers formula.

    dM/dt = 4e-13 * L * R / M  (all solar units), floored at zero.

    Returns
    -------
    float
        Mass loss rate in M_sun per year.
    """
    mass = require_positive("mass", mass)
    rate = REIMERS_ETA * luminosity_solar * radius_solar / mass
    return max(0.0, rate)


def rotation_period(mass, age):
    """
    Surface rotation period in days from a Skumanich-like spin-down.

    P = 25 d * M^-0.5 * (age / 4.6e9 yr)^0.5
    """
    mass = require_positive("mass", mass)
    if age < 0:
        raise InvalidInput("age must be >= 0, got {}".format(age))
    return SOLAR_ROTATION_DAYS * mass ** -0.5 * (age / SOLAR_AGE_YR) ** 0.5


def magnetic_field(mass, period_days):
    """
    Surface magnetic field in tesla.

    B = 1e-4 T * M^0.5 * (25 d / P)^0.5. A non-rotating star (P <= 0)
    has no defined field in this scaling.
    """
    mass = require_positive("mass", mass)
    period_days = require_positive("rotation_period", period_days)
    return B_BASE_T * mass ** 0.5 * (SOLAR_ROTATION_DAYS / period_days) ** 0.5


def density(mass, radius_solar):
    """Mean density in kg/m^3 of a sphere of the given mass and radius."""
    mass = require_positive("mass", mass)
    radius_solar = require_positive("radius", radius_solar)
    # divide by R one factor at a time; R^3 alone under- or overflows
    solar_density = M_SUN / ((4.0 / 3.0) * math.pi * R_SUN ** 3)
    return mass / radius_solar / radius_solar / radius_solar * solar_density


def element_production(mass, metallicity=Z_SUN):
    """
    Illustrative surface/ejecta mass fractions by element.

    Starts from a fixed baseline, adds core-collapse products above
    8 and 20 M_sun, then scales the metals by Z / 0.02. The fractions
    are not renormalised and need not sum to one.

    Returns
    -------
    OrderedDict
        element name -> mass fraction, keys in a fixed order.
    """
    mass = require_positive("mass", mass)
    metallicity = require_positive("metallicity", metallicity)
    elements = OrderedDict([
        ("hydrogen", 0.70),
        ("helium", 0.28),
        ("carbon", 0.01),
        ("oxygen", 0.005),
        ("nitrogen", 0.001),
        ("iron", 0.001),
        ("other", 0.003),
    ])

    if mass > M_CORE_COLLAPSE:
        elements["carbon"] += 0.02
        elements["oxygen"] += 0.02
        elements["iron"] += 0.01

    if mass > M_BLACK_HOLE:
        elements["iron"] += 0.05
        elements["other"] += 0.02

    z_scale = metallicity / Z_SUN
    for key in elements:
        if key not in ("hydrogen", "helium"):
            elements[key] *= z_scale
    return elements


def schwarzschild_radius_km(mass):
    """Event-horizon radius 2GM/c^2 in km."""
    mass = require_positive("mass", mass)
    return 2.0 * G * mass * M_SUN / (C_LIGHT * C_LIGHT) / 1000.0


# ----------------------------------------------------------------------
# Display helpers
# ----------------------------------------------------------------------

# (lower temperature bound in K, hex color), checked top-down
_COLOR_BANDS = (
    (30000, "#9bb0ff"),
    (10000, "#aabfff"),
    (7500, "#cad7ff"),
    (6000, "#f8f7ff"),
    (5000, "#fff4ea"),
    (3700, "#ffd700"),
    (3000, "#ff6b6b"),
)


def star_color(temperature_k):
    """Display color for a blackbody of the given temperature."""
    for lower, color in _COLOR_BANDS:
        if temperature_k > lower:
            return color
    return "#ff4500"


def star_class_name(mass):
    """Short human-readable class for a star of the given mass."""
    mass = require_positive("mass", mass)
    if mass < 0.5:
        return "Red Dwarf"
    if mass < 1.5:
        return "Solar-type Star"
    if mass < 8:
        return "Intermediate Mass Star"
    if mass < 20:
        return "High Mass Star"
    return "Very High Mass Star"
