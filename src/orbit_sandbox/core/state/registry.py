"""Body registry: identity, metadata and ownership of live bodies.

Kinematics live in a single BodiesState whose rows follow ``order``; each
Body record carries the identity and display-side data for one row. Ids are
handed out once and never reused, so a stale id simply stops resolving.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable

import numpy as np

from .bodies import ArrayF, BodiesState

if TYPE_CHECKING:
    from ...analysis.orbit_predictor import OrbitalElements


CENTRAL_BODY_ID = 0

REASON_CRASH = "crash"
REASON_DESPAWN = "despawn"
REASON_DELETED = "deleted"


@dataclass(slots=True)
class Body:
    id: int
    name: str
    kind: str
    mass: float
    size: float
    real_radius_km: float = 0.0
    real_mass_kg: float = 0.0
    orbit: "OrbitalElements | None" = None
    display_handle: Any = None


@dataclass(frozen=True, slots=True)
class RemovalEvent:
    body: Body
    reason: str
    distance: float


RemovalListener = Callable[[RemovalEvent], None]


@dataclass(slots=True)
class BodyRegistry:
    state: BodiesState = field(default_factory=BodiesState.empty)
    order: list[int] = field(default_factory=list)
    _bodies: dict[int, Body] = field(default_factory=dict)
    _next_id: int = CENTRAL_BODY_ID + 1
    _listeners: list[RemovalListener] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.order)

    def __contains__(self, body_id: object) -> bool:
        return body_id in self._bodies

    def __iter__(self):
        return (self._bodies[i] for i in self.order)

    def add_listener(self, listener: RemovalListener) -> None:
        self._listeners.append(listener)

    def add(
        self,
        name: str,
        kind: str,
        mass: float,
        size: float,
        pos: ArrayF,
        vel: ArrayF,
        real_radius_km: float = 0.0,
        real_mass_kg: float = 0.0,
    ) -> Body:
        if not mass > 0.0:
            raise ValueError("mass must be > 0")
        body = Body(
            id=self._next_id,
            name=name,
            kind=kind,
            mass=float(mass),
            size=float(size),
            real_radius_km=float(real_radius_km),
            real_mass_kg=float(real_mass_kg),
        )
        self._next_id += 1
        self.state.append(
            np.asarray(pos, dtype=np.float64), np.asarray(vel, dtype=np.float64), mass
        )
        self.order.append(body.id)
        self._bodies[body.id] = body
        return body

    def get(self, body_id: int) -> Body:
        try:
            return self._bodies[body_id]
        except KeyError:
            raise KeyError(f"unknown body id: {body_id}") from None

    def index_of(self, body_id: int) -> int:
        self.get(body_id)
        return self.order.index(body_id)

    def position(self, body_id: int) -> ArrayF:
        return self.state.pos[self.index_of(body_id)].copy()

    def velocity(self, body_id: int) -> ArrayF:
        return self.state.vel[self.index_of(body_id)].copy()

    def set_velocity(self, body_id: int, vel: ArrayF) -> None:
        v = np.asarray(vel, dtype=np.float64)
        if v.shape != (3,):
            raise ValueError("vel must have shape (3,)")
        self.state.vel[self.index_of(body_id)] = v

    def distances(self) -> ArrayF:
        """Distance of every live body from the central body, in order."""
        return np.linalg.norm(self.state.pos, axis=1)

    def remove_many(
        self, removals: Iterable[tuple[int, str]]
    ) -> list[RemovalEvent]:
        """Remove bodies by id in one pass.

        The body record, its cached orbit geometry and its display handle are
        released together. Listeners see each event after the arrays shrink
        and before the cached orbit and display handle are dropped.
        """
        pending: dict[int, str] = {}
        for body_id, reason in removals:
            if body_id in self._bodies and body_id not in pending:
                pending[body_id] = reason
        if not pending:
            return []

        dist = self.distances()
        keep = np.ones(len(self.order), dtype=bool)
        events: list[RemovalEvent] = []
        for idx, body_id in enumerate(self.order):
            if body_id not in pending:
                continue
            keep[idx] = False
            body = self._bodies.pop(body_id)
            events.append(RemovalEvent(body, pending[body_id], float(dist[idx])))

        self.state.keep(keep)
        self.order = [i for i, k in zip(self.order, keep) if k]
        for event in events:
            for listener in self._listeners:
                listener(event)
            event.body.orbit = None
            event.body.display_handle = None
        return events

    def remove(self, body_id: int, reason: str = REASON_DELETED) -> RemovalEvent | None:
        events = self.remove_many([(body_id, reason)])
        return events[0] if events else None
