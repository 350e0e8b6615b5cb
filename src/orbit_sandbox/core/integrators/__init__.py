"""Integrator interfaces and implementations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..forces.base import Model
from ..state.bodies import BodiesState


class Integrator(Protocol):
    def step(self, state: BodiesState, model: Model, dt: float) -> None:
        """Advance state by one fixed step (mutating)."""


@dataclass(slots=True)
class SymplecticEuler:
    """Semi-implicit Euler: kick velocity, then drift with the new velocity."""

    def step(self, state: BodiesState, model: Model, dt: float) -> None:
        if state.count == 0:
            return
        a = model.acc_bodies(state)
        state.vel += a * dt
        state.pos += state.vel * dt
