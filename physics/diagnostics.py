"""
Per-stage derived quantities for a computed star.

Given a StellarProperties and one of its stages, estimate the star's
age at that point in the timeline and the quantities that follow from
it: Reimers mass loss, spin-down rotation period, dynamo magnetic
field, mean density, and the radiated power / energy of the stage.

The age model places the star at a fixed fractional position through
its total lifetime depending on which stage it is in (mid main
sequence, late giant branch, end of life for remnants).

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math

from physics.constants import L_SUN, YEAR_S
from physics import properties

# Fraction of total lifetime elapsed while in each stage
STAGE_PROGRESS = {
    "Main Sequence": 0.5,
    "Red Giant": 0.95,
    "Red Supergiant": 0.98,
    "Advanced Burning": 0.99,
    "Supernova": 1.0,
    "White Dwarf": 1.0,
    "Neutron Star": 1.0,
    "Black Hole": 1.0,
}
DEFAULT_PROGRESS = 0.5


def stage_progress(stage_name):
    """Fraction (0-1) of the lifetime elapsed in the named stage."""
    return STAGE_PROGRESS.get(stage_name, DEFAULT_PROGRESS)


def stellar_age(mass, metallicity, stage_name):
    """Age in years of a star of given mass while in the named stage."""
    return properties.lifetime(mass, metallicity) * stage_progress(stage_name)


def energy_output(stage):
    """
    Radiated power and total energy of one stage.

    Returns
    -------
    dict
        power : W
        total_energy : J; 0 for a dark or instantaneous stage, inf for
            an infinite one
        duration : years (as stored on the stage)
    """
    power = stage.luminosity * L_SUN
    if power <= 0 or stage.duration == 0:
        total = 0.0
    elif math.isinf(stage.duration):
        total = math.inf
    else:
        total = power * stage.duration * YEAR_S
    return {
        "power": power,
        "total_energy": total,
        "duration": stage.duration,
    }


class StageDiagnostics:
    """
    Derived physical quantities of a star during one stage.

    Parameters
    ----------
    stage_name : str
    age : float
        Years.
    mass_loss_rate : float
        M_sun / yr.
    rotation_period : float
        Days.
    magnetic_field : float or None
        Tesla; None when the rotation period is zero or infinite.
    density : float
        kg / m^3.
    energy : dict
        Output of energy_output().
    """

    def __init__(self, stage_name, age, mass_loss_rate, rotation_period,
                 magnetic_field, density, energy):
        self.stage_name = stage_name
        self.age = age
        self.mass_loss_rate = mass_loss_rate
        self.rotation_period = rotation_period
        self.magnetic_field = magnetic_field
        self.density = density
        self.energy = energy

    def to_dict(self):
        """Serialize for JSON; infinite values become None."""
        def finite(v):
            return v if v is not None and math.isfinite(v) else None

        return {
            "stage": self.stage_name,
            "age": finite(self.age),
            "mass_loss_rate": finite(self.mass_loss_rate),
            "rotation_period": finite(self.rotation_period),
            "magnetic_field": finite(self.magnetic_field),
            "density": finite(self.density),
            "power": finite(self.energy["power"]),
            "total_energy": finite(self.energy["total_energy"]),
            "duration": finite(self.energy["duration"]),
        }


def stage_diagnostics(stellar_properties, stage):
    """
    Compute StageDiagnostics for one stage of a computed star.

    The star's initial mass is used throughout; the stage supplies the
    luminosity and radius.
    """
    mass = stellar_properties.mass
    age = stellar_age(mass, stellar_properties.metallicity, stage.name)
    period = properties.rotation_period(mass, age)
    if 0 < period < math.inf:
        field = properties.magnetic_field(mass, period)
    else:
        field = None
    return StageDiagnostics(
        stage_name=stage.name,
        age=age,
        mass_loss_rate=properties.mass_loss_rate(
            mass, stage.luminosity, stage.radius),
        rotation_period=period,
        magnetic_field=field,
        density=properties.density(mass, stage.radius),
        energy=energy_output(stage),
    )


def element_yields(stellar_properties):
    """Element production for a computed star (see properties.element_production)."""
    return properties.element_production(
        stellar_properties.mass, stellar_properties.metallicity)
