"""Energy and momentum diagnostics for the live bodies."""

from __future__ import annotations

import numpy as np

from ..state.bodies import BodiesState


def total_mass(state: BodiesState) -> float:
    if state.mass.size == 0:
        return 0.0
    return float(np.sum(state.mass))


def kinetic_energy(state: BodiesState) -> float:
    if state.mass.size == 0:
        return 0.0
    v2 = np.sum(state.vel**2, axis=1)
    return float(0.5 * np.sum(state.mass * v2))


def potential_energy_central(state: BodiesState, G: float, central_mass: float) -> float:
    if state.mass.size == 0:
        return 0.0
    r = np.linalg.norm(state.pos, axis=1)
    return float(-G * central_mass * np.sum(state.mass / r))


def potential_energy_mutual(state: BodiesState, G: float, softening: float = 0.0) -> float:
    pos = state.pos
    mass = state.mass
    n = pos.shape[0]
    if n < 2:
        return 0.0

    eps2 = softening * softening
    delta = pos[None, :, :] - pos[:, None, :]
    dist2 = np.sum(delta * delta, axis=-1) + eps2
    iu = np.triu_indices(n, k=1)
    dist = np.sqrt(dist2[iu])
    mprod = mass[iu[0]] * mass[iu[1]]
    return float(-G * np.sum(mprod / dist))


def total_energy(
    state: BodiesState, G: float, central_mass: float, mutual: bool = False
) -> float:
    energy = kinetic_energy(state) + potential_energy_central(state, G, central_mass)
    if mutual:
        energy += potential_energy_mutual(state, G)
    return energy


def specific_orbital_energy(pos: np.ndarray, vel: np.ndarray, mu: float) -> np.ndarray:
    """Two-body energy per unit mass, |v|^2/2 - mu/|r|, for (..., 3) inputs."""
    pos = np.asarray(pos, dtype=np.float64)
    vel = np.asarray(vel, dtype=np.float64)
    return 0.5 * np.sum(vel * vel, axis=-1) - mu / np.linalg.norm(pos, axis=-1)


def specific_angular_momentum(pos: np.ndarray, vel: np.ndarray) -> np.ndarray:
    return np.cross(pos, vel)
