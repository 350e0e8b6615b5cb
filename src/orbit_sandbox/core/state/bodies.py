"""Body kinematic state containers."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


ArrayF = NDArray[np.float64]


@dataclass(slots=True)
class BodiesState:
    pos: ArrayF
    vel: ArrayF
    mass: ArrayF

    def __post_init__(self) -> None:
        self.pos = np.ascontiguousarray(self.pos, dtype=np.float64)
        self.vel = np.ascontiguousarray(self.vel, dtype=np.float64)
        self.mass = np.ascontiguousarray(self.mass, dtype=np.float64)
        self.validate()

    @classmethod
    def empty(cls) -> "BodiesState":
        return cls(
            pos=np.zeros((0, 3), dtype=np.float64),
            vel=np.zeros((0, 3), dtype=np.float64),
            mass=np.zeros(0, dtype=np.float64),
        )

    @property
    def count(self) -> int:
        return self.pos.shape[0]

    def validate(self) -> None:
        if self.pos.ndim != 2 or self.pos.shape[1] != 3:
            raise ValueError("pos must have shape (N, 3)")
        if self.vel.shape != self.pos.shape:
            raise ValueError("vel must have shape (N, 3)")
        if self.mass.ndim != 1 or self.mass.shape[0] != self.pos.shape[0]:
            raise ValueError("mass must have shape (N,)")

    def append(self, pos: ArrayF, vel: ArrayF, mass: float) -> int:
        """Add one body row and return its index."""
        self.pos = np.concatenate([self.pos, np.reshape(pos, (1, 3))], axis=0)
        self.vel = np.concatenate([self.vel, np.reshape(vel, (1, 3))], axis=0)
        self.mass = np.concatenate([self.mass, [float(mass)]])
        return self.count - 1

    def keep(self, mask: NDArray[np.bool_]) -> None:
        """Drop every row where mask is False, preserving order."""
        self.pos = np.ascontiguousarray(self.pos[mask])
        self.vel = np.ascontiguousarray(self.vel[mask])
        self.mass = np.ascontiguousarray(self.mass[mask])

    def copy(self) -> "BodiesState":
        return BodiesState(
            pos=self.pos.copy(),
            vel=self.vel.copy(),
            mass=self.mass.copy(),
        )
