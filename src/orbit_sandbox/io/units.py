"""Physical reference values and display conversions.

Simulation lengths are arbitrary units with ``au_size`` units per AU; bodies
also carry a real-world radius and mass derived from their display size so the
UI can show them relative to Earth, Jupiter and the Sun.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import pi


EARTH_RADIUS_KM = 6371.0
EARTH_MASS_KG = 5.972e24
JUPITER_RADIUS_KM = 69911.0
SUN_RADIUS_KM = 696340.0
SUN_MASS_KG = 1.989e30
SUN_LUMINOSITY_W = 3.828e26
SUN_TEMPERATURE_K = 5778.0
DENSITY_ROCKY_KGM3 = 5514.0
DENSITY_GAS_KGM3 = 1326.0
STEFAN_BOLTZMANN = 5.67e-8

SECONDS_PER_YEAR = 31_536_000.0

# Display size of the central body and the central mass that maps to 1 M_sun.
STAR_SIZE = 22.0
STAR_REFERENCE_MASS = 1000.0


@dataclass(frozen=True, slots=True)
class PlanetReference:
    """Display size that corresponds to one reference radius."""
    base_size: float
    base_radius_km: float
    density_kgm3: float


PLANET_REFERENCES: dict[str, PlanetReference] = {
    "ROCKY": PlanetReference(8.0, EARTH_RADIUS_KM, DENSITY_ROCKY_KGM3),
    "OCEAN": PlanetReference(8.0, EARTH_RADIUS_KM, DENSITY_ROCKY_KGM3),
    "GAS": PlanetReference(20.0, JUPITER_RADIUS_KM, DENSITY_GAS_KGM3),
}


@dataclass(frozen=True, slots=True)
class PhysicalProperties:
    radius_km: float
    mass_kg: float
    luminosity_w: float = 0.0


def planet_properties(kind: str, size: float) -> PhysicalProperties:
    if kind not in PLANET_REFERENCES:
        raise ValueError(f"unknown body kind: {kind}")
    ref = PLANET_REFERENCES[kind]
    radius_km = size / ref.base_size * ref.base_radius_km
    mass_kg = 4.0 / 3.0 * pi * (radius_km * 1000.0) ** 3 * ref.density_kgm3
    return PhysicalProperties(radius_km=radius_km, mass_kg=mass_kg)


def star_properties(central_mass: float, size: float = STAR_SIZE) -> PhysicalProperties:
    radius_km = size / STAR_SIZE * SUN_RADIUS_KM
    mass_kg = central_mass / STAR_REFERENCE_MASS * SUN_MASS_KG
    luminosity = (
        4.0 * pi * (radius_km * 1000.0) ** 2 * STEFAN_BOLTZMANN * SUN_TEMPERATURE_K**4
    )
    return PhysicalProperties(radius_km=radius_km, mass_kg=mass_kg, luminosity_w=luminosity)


def simulation_mass(real_mass_kg: float) -> float:
    """Real mass in simulation mass units (STAR_REFERENCE_MASS per M_sun)."""
    return real_mass_kg / SUN_MASS_KG * STAR_REFERENCE_MASS


def to_au(distance: float, au_size: float) -> float:
    return distance / au_size


def format_value(value: float, unit: str) -> str:
    if value > 1e10:
        return f"{value:.2e} {unit}"
    return f"{value:.0f} {unit}"


def format_relative(value: float, base_value: float, name: str) -> str:
    if not value or not base_value:
        return "N/A"
    return f"{value / base_value:.3f} {name}"


def format_seconds(seconds: float) -> str:
    return f"{seconds:.0f}s"


_WARP_UNITS: tuple[tuple[float, str], ...] = (
    (SECONDS_PER_YEAR, "YEAR/S"),
    (2_592_000.0, "MON/S"),
    (604_800.0, "WEEK/S"),
    (86_400.0, "DAY/S"),
    (3_600.0, "HR/S"),
)


def format_warp(real_seconds: float) -> str:
    """Human label for real seconds per simulated second, e.g. '1.0 DAY/S'."""
    for size, label in _WARP_UNITS:
        if real_seconds >= size:
            return f"{real_seconds / size:.1f} {label}"
    return f"{real_seconds / 60.0:.1f} MIN/S"
