"""Diagnostics namespace."""

from .bodies import (  # noqa: F401
    kinetic_energy,
    potential_energy_central,
    potential_energy_mutual,
    specific_angular_momentum,
    specific_orbital_energy,
    total_energy,
    total_mass,
)
