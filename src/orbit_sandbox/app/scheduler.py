"""Amortized orbit refresh planning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(slots=True)
class OrbitUpdateScheduler:
    """Selected body every frame, plus ``budget`` others in round-robin order.

    The cursor persists across frames, so every live body is revisited within
    ceil(n / budget) frames regardless of which one is selected.
    """
    budget: int = 3
    cursor: int = -1

    def plan(self, ids: Sequence[int], selected_id: int | None = None) -> list[int]:
        n = len(ids)
        if n == 0:
            return []
        picked: list[int] = []
        if selected_id is not None and selected_id in ids:
            picked.append(selected_id)
        others = n - len(picked)
        want = min(self.budget, others)
        visited = 0
        while want > 0 and visited < n:
            self.cursor = (self.cursor + 1) % n
            visited += 1
            candidate = ids[self.cursor]
            if candidate == selected_id:
                continue
            picked.append(candidate)
            want -= 1
        return picked
