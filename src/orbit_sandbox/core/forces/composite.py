"""Composite model utilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .base import Model
from .central_gravity import CentralGravity
from .nbody_gravity import NBodyGravity
from ..config import SimulationConfig
from ..state.bodies import BodiesState


@dataclass(slots=True)
class CompositeModel:
    models: Sequence[Model]

    def acc_bodies(self, state: BodiesState) -> np.ndarray:
        n = state.count
        acc = np.zeros((n, 3), dtype=np.float64)
        if n == 0:
            return acc
        for model in self.models:
            acc += model.acc_bodies(state)
        return acc


def model_from_config(cfg: SimulationConfig) -> CompositeModel:
    """Central gravity, plus body-body gravity when mutual gravity is on."""
    models: list[Model] = [CentralGravity(G=cfg.G, central_mass=cfg.central_mass)]
    if cfg.mutual_gravity:
        models.append(NBodyGravity(G=cfg.G))
    return CompositeModel(models=models)
