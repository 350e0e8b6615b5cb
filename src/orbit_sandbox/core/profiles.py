"""Spawn profiles: body kinds, their size ranges and the weighted roll."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class BodyProfile:
    kind: str
    weight: float
    size_min: float
    size_max: float


PROFILES: dict[str, BodyProfile] = {
    "ROCKY": BodyProfile("ROCKY", 0.4, 6.0, 9.0),
    "OCEAN": BodyProfile("OCEAN", 0.3, 7.0, 10.0),
    "GAS": BodyProfile("GAS", 0.3, 16.0, 22.0),
}

NAME_BANK: tuple[str, ...] = (
    "Aether", "Alcor", "Amalthea", "Ananke", "Anthe", "Ariel", "Atlas",
    "Belinda", "Bianca", "Callisto", "Calypso", "Carme", "Ceres", "Charon",
    "Cordelia", "Cressida", "Cybele", "Daphnis", "Deimos", "Despina", "Dione",
    "Eris", "Elara", "Enceladus", "Epimetheus", "Erinome", "Euanthe",
    "Eukelade", "Europa", "Eurydome", "Fenrir", "Fornjot", "Galatea",
    "Ganymede", "Greip", "Harpalyke", "Haumea", "Helene", "Himalia",
    "Hyperion", "Iapetus", "Iocaste", "Io", "Ison", "Janus", "Juliet", "Kale",
    "Kalyke", "Kiviuq", "Larissa", "Leda", "Lysithea", "Makemake", "Metis",
    "Mimas", "Mira", "Miranda", "Naiad", "Narvi", "Nereid", "Oberon",
    "Ophelia", "Orthosie", "Pandora", "Pasiphae", "Pax", "Phobos", "Phoebe",
    "Portia", "Prometheus", "Proteus", "Puck", "Rhea", "Sinope", "Styx",
    "Tarvos", "Telesto", "Tethys", "Thalassa", "Thebe", "Titan",
)


@dataclass(frozen=True, slots=True)
class RolledProfile:
    kind: str
    size: float
    name: str


def kind_names() -> list[str]:
    return list(PROFILES.keys())


def get_profile(kind: str) -> BodyProfile:
    key = kind.upper()
    if key not in PROFILES:
        raise ValueError(f"unknown body kind: {kind}")
    return PROFILES[key]


def roll_kind(rng: np.random.Generator) -> str:
    """Pick a kind by cumulative weight; the last kind absorbs any remainder."""
    roll = rng.random()
    acc = 0.0
    profiles = list(PROFILES.values())
    for profile in profiles:
        acc += profile.weight
        if roll < acc:
            return profile.kind
    return profiles[-1].kind


def roll_profile(rng: np.random.Generator, kind: str | None = None) -> RolledProfile:
    profile = get_profile(kind) if kind is not None else PROFILES[roll_kind(rng)]
    size = profile.size_min + rng.random() * (profile.size_max - profile.size_min)
    name = NAME_BANK[int(rng.integers(len(NAME_BANK)))].upper()
    return RolledProfile(kind=profile.kind, size=float(size), name=name)
