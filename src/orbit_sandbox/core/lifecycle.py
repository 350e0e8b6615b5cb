"""Body lifecycle: spawning, crash/despawn removal and explicit deletion."""

from __future__ import annotations

import logging
from math import sqrt

import numpy as np

from .config import ConfigStore, SimulationConfig
from .math.vector import finite_rows, prograde_direction
from .profiles import roll_profile
from .state.registry import (
    REASON_CRASH,
    REASON_DELETED,
    REASON_DESPAWN,
    Body,
    BodyRegistry,
    RemovalEvent,
)
from ..io.units import planet_properties, simulation_mass


logger = logging.getLogger(__name__)

SPAWN_DIRECTION = np.array([1.0, 0.0, 0.0], dtype=np.float64)


def circular_speed(mu: float, distance: float) -> float:
    return sqrt(mu / distance)


class LifecycleManager:
    def __init__(
        self,
        registry: BodyRegistry,
        store: ConfigStore,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.registry = registry
        self.store = store
        self.rng = rng if rng is not None else np.random.default_rng()

    @property
    def config(self) -> SimulationConfig:
        return self.store.config

    def scan(self) -> list[RemovalEvent]:
        """Remove every body inside the crash radius or beyond the despawn radius.

        The whole collection is classified first (last index to first) and the
        removals are applied afterwards in one pass. Non-finite state counts
        as a crash. A degenerate config removes everything.
        """
        registry = self.registry
        if len(registry) == 0:
            return []
        cfg = self.config
        if cfg.is_degenerate():
            logger.warning("degenerate configuration; removing all %d bodies", len(registry))
            return self._remove([(i, REASON_CRASH) for i in reversed(registry.order)])

        state = registry.state
        dist = registry.distances()
        crashed = ~finite_rows(state.pos, state.vel) | (dist < cfg.crash_distance)
        escaped = ~crashed & (dist > cfg.despawn_distance)

        pending: list[tuple[int, str]] = []
        for idx in range(len(registry.order) - 1, -1, -1):
            if crashed[idx]:
                pending.append((registry.order[idx], REASON_CRASH))
            elif escaped[idx]:
                pending.append((registry.order[idx], REASON_DESPAWN))
        if not pending:
            return []
        return self._remove(pending)

    def spawn(self, kind: str | None = None) -> Body | None:
        """Place a new body on a circular orbit just outside the outermost one.

        Returns None when the registry is already at max_bodies.
        """
        cfg = self.config
        registry = self.registry
        if len(registry) >= cfg.max_bodies:
            logger.debug("spawn rejected: %d bodies at cap", len(registry))
            return None

        distance = cfg.spawn_base_distance
        outermost = self._outermost_index()
        if outermost is not None:
            distance = float(registry.distances()[outermost]) + cfg.spawn_increment

        pos = SPAWN_DIRECTION * distance
        vel = prograde_direction(pos) * circular_speed(cfg.mu, distance)
        profile = roll_profile(self.rng, kind)
        props = planet_properties(profile.kind, profile.size)
        body = registry.add(
            name=profile.name,
            kind=profile.kind,
            mass=simulation_mass(props.mass_kg),
            size=profile.size,
            pos=pos,
            vel=vel,
            real_radius_km=props.radius_km,
            real_mass_kg=props.mass_kg,
        )
        logger.debug("spawned %s (%s) at %.1f", body.name, body.kind, distance)
        return body

    def delete_outermost(self) -> RemovalEvent | None:
        """Remove the body farthest from the center; ties go to the first."""
        idx = self._outermost_index()
        if idx is None:
            return None
        body_id = self.registry.order[idx]
        events = self._remove([(body_id, REASON_DELETED)])
        return events[0] if events else None

    def _outermost_index(self) -> int | None:
        if len(self.registry) == 0:
            return None
        dist = self.registry.distances()
        finite = np.isfinite(dist)
        if not finite.any():
            return None
        return int(np.argmax(np.where(finite, dist, -np.inf)))

    def _remove(self, pending: list[tuple[int, str]]) -> list[RemovalEvent]:
        events = self.registry.remove_many(pending)
        for event in events:
            logger.info(
                "%s: %s at r=%.2f", event.reason.upper(), event.body.name, event.distance
            )
        return events
