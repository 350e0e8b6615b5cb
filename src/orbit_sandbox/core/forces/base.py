"""Force/model interfaces."""

from __future__ import annotations

from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from ..state.bodies import BodiesState


ArrayF = NDArray[np.float64]


class Model(Protocol):
    def acc_bodies(self, state: BodiesState) -> ArrayF:
        """Return body accelerations as (N, 3)."""
