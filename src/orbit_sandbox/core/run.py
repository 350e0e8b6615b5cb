"""Per-frame simulation advance with sub-stepping."""

from __future__ import annotations

from dataclasses import dataclass, field

from .config import SimulationConfig
from .forces import model_from_config
from .integrators import Integrator, SymplecticEuler
from .lifecycle import LifecycleManager
from .state.registry import RemovalEvent


@dataclass(slots=True)
class FrameResult:
    delta: float
    sim_time: float
    sub_dt: float
    removed: list[RemovalEvent] = field(default_factory=list)


def clamp_delta(delta: float, cfg: SimulationConfig) -> float:
    """Bound a wall-clock delta to [0, max_frame_delta]; NaN counts as 0."""
    if not delta > 0.0:
        return 0.0
    return min(float(delta), cfg.max_frame_delta)


def advance_frame(
    lifecycle: LifecycleManager,
    delta: float,
    multiplier: float,
    integrator: Integrator | None = None,
) -> FrameResult:
    """Advance every live body by ``delta * multiplier`` simulated seconds.

    Each sub-step runs the crash/despawn scan before any acceleration is
    evaluated, so removed bodies never move or attract within that sub-step.
    """
    cfg = lifecycle.config
    integrator = integrator if integrator is not None else SymplecticEuler()
    delta = clamp_delta(delta, cfg)
    sim_time = delta * float(multiplier)
    if not cfg.sub_steps >= 1:
        # Degenerate config: the scan clears every body and nothing is stepped.
        result = FrameResult(delta=delta, sim_time=0.0, sub_dt=0.0)
        result.removed.extend(lifecycle.scan())
        return result
    sub_dt = sim_time / cfg.sub_steps
    result = FrameResult(delta=delta, sim_time=sim_time, sub_dt=sub_dt)
    if not sub_dt > 0.0:
        return result

    registry = lifecycle.registry
    model = model_from_config(cfg)
    for _ in range(cfg.sub_steps):
        result.removed.extend(lifecycle.scan())
        if len(registry) == 0:
            break
        integrator.step(registry.state, model, sub_dt)
    # Bodies that crossed a threshold on the last sub-step leave before output.
    result.removed.extend(lifecycle.scan())
    return result
