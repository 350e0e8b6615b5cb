"""Gravity of the fixed central body at the origin (two-body model)."""

from __future__ import annotations

import numpy as np

from ..state.bodies import BodiesState


class CentralGravity:
    def __init__(self, G: float, central_mass: float) -> None:
        self.G = float(G)
        self.central_mass = float(central_mass)

    @property
    def mu(self) -> float:
        return self.G * self.central_mass

    def acc_bodies(self, state: BodiesState) -> np.ndarray:
        if state.count == 0:
            return np.zeros((0, 3), dtype=np.float64)
        pos = state.pos
        r2 = np.sum(pos * pos, axis=1)
        # r = 0 gives non-finite values; the next lifecycle scan removes them.
        with np.errstate(divide="ignore", invalid="ignore"):
            factor = -self.mu / (r2 * np.sqrt(r2))
        return pos * factor[:, np.newaxis]
