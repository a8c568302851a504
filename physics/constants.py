"""
Physical constants for the stellar evolution engine.

Solar reference values are IAU-style nominal values rounded to the
precision the closed-form scaling laws were calibrated against. Every
formula in physics/properties.py reads its constants from here.

IMPORTANT: No unicode characters allowed in this file (Windows charmap constraint).
"""

import math

# Solar mass
M_SUN = 1.989e30  # kg

# Solar radius
R_SUN = 6.96e8  # m

# Solar luminosity (IAU 2015 nominal)
L_SUN = 3.828e26  # W

# Solar effective temperature
T_SUN = 5778.0  # K

# Gravitational constant
G = 6.674e-11  # m^3 kg^-1 s^-2

# Speed of light (rounded)
C_LIGHT = 3.0e8  # m/s

# Stefan-Boltzmann constant
SIGMA_SB = 5.67e-8  # W m^-2 K^-4

# Julian year
YEAR_S = 365.25 * 24 * 3600  # s

# Reference (solar) metallicity Z
Z_SUN = 0.02

# Solar age and equatorial rotation period, anchors for spin-down
SOLAR_AGE_YR = 4.6e9
SOLAR_ROTATION_DAYS = 25.0

# Surface field normalisation for the dynamo scaling
B_BASE_T = 1e-4  # tesla

# Main-sequence lifetime normalisation: t_MS(1 M_sun) = 1e10 yr
MS_LIFETIME_YR = 1e10

# Reimers mass-loss coefficient (M_sun/yr in solar units)
REIMERS_ETA = 4e-13

# Evolution-path mass thresholds (solar masses)
M_GIANT = 0.5        # below: no giant branch
M_CORE_COLLAPSE = 8.0  # at or above: supernova
M_BLACK_HOLE = 20.0    # at or above: black hole remnant


def verify_solar_temperature(tolerance=0.01):
    """
    Check that the Stefan-Boltzmann law recovers T_SUN from L_SUN and R_SUN.

    Returns (ok, T) where T is the derived effective temperature in K.
    """
    t_eff = (L_SUN / (4.0 * math.pi * SIGMA_SB * R_SUN * R_SUN)) ** 0.25
    return abs(t_eff - T_SUN) / T_SUN < tolerance, t_eff
