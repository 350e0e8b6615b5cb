"""Newtonian all-pairs gravity between the simulated bodies."""

from __future__ import annotations

import numpy as np

from ..state.bodies import BodiesState


class NBodyGravity:
    """Pairwise attraction, evaluated in row blocks of ``chunk_size`` bodies."""

    def __init__(
        self,
        G: float,
        softening: float = 0.0,
        chunk_size: int | None = None,
    ) -> None:
        self.G = float(G)
        self.softening = float(softening)
        self.chunk_size = chunk_size

    def acc_bodies(self, state: BodiesState) -> np.ndarray:
        return pairwise_accel(state.pos, state.mass, self.G, self.softening, self.chunk_size)


def pairwise_accel(
    pos: np.ndarray,
    mass: np.ndarray,
    G: float,
    softening: float = 0.0,
    chunk_size: int | None = None,
) -> np.ndarray:
    n = pos.shape[0]
    acc = np.zeros((n, 3), dtype=np.float64)
    if n < 2:
        return acc
    eps2 = softening * softening
    block = n if chunk_size is None else max(1, min(chunk_size, n))
    for start in range(0, n, block):
        stop = min(start + block, n)
        rows = np.arange(stop - start)
        # offset[i, j] points from body start+i to body j
        offset = pos[np.newaxis, :, :] - pos[start:stop, np.newaxis, :]
        r2 = np.einsum("ijk,ijk->ij", offset, offset) + eps2
        r2[rows, rows + start] = np.inf
        with np.errstate(divide="ignore"):
            weight = mass[np.newaxis, :] * r2**-1.5
        acc[start:stop] = np.einsum("ij,ijk->ik", weight, offset)
    return G * acc
