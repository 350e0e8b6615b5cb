from __future__ import annotations

from math import sqrt
from types import SimpleNamespace

import numpy as np
import pytest

from orbit_sandbox.core.config import ConfigStore, SimulationConfig
from orbit_sandbox.core.lifecycle import LifecycleManager, circular_speed
from orbit_sandbox.core.run import advance_frame
from orbit_sandbox.core.state import (
    REASON_CRASH,
    REASON_DELETED,
    REASON_DESPAWN,
    BodyRegistry,
)


def _manager(seed: int = 0, **cfg) -> LifecycleManager:
    store = ConfigStore(SimulationConfig(**cfg))
    return LifecycleManager(BodyRegistry(), store, np.random.default_rng(seed))


def _place(manager: LifecycleManager, pos, vel=(0.0, 0.0, 0.0)) -> int:
    body = manager.registry.add(
        name="PROBE",
        kind="ROCKY",
        mass=0.003,
        size=8.0,
        pos=np.asarray(pos, dtype=np.float64),
        vel=np.asarray(vel, dtype=np.float64),
    )
    return body.id


def test_spawn_distances_and_circular_velocity() -> None:
    manager = _manager()
    bodies = [manager.spawn() for _ in range(3)]
    registry = manager.registry
    assert all(b is not None for b in bodies)
    assert np.allclose(registry.distances(), [180.0, 300.0, 420.0])
    for body, r in zip(bodies, (180.0, 300.0, 420.0)):
        vel = registry.velocity(body.id)
        assert np.allclose(vel, [0.0, 0.0, sqrt(500_000.0 / r)])
        assert body.mass > 0.0
        assert body.name.isupper()


def test_spawn_follows_current_outermost_distance() -> None:
    manager = _manager()
    _place(manager, (0.0, 0.0, -1000.0))
    _place(manager, (250.0, 0.0, 0.0))
    body = manager.spawn()
    assert body is not None
    assert np.isclose(np.linalg.norm(manager.registry.position(body.id)), 1120.0)


def test_spawn_rejected_at_cap() -> None:
    manager = _manager(max_bodies=2)
    assert manager.spawn() is not None
    assert manager.spawn() is not None
    assert manager.spawn() is None
    assert len(manager.registry) == 2


def test_spawn_with_zero_cap_is_noop() -> None:
    manager = _manager(max_bodies=0)
    assert manager.spawn() is None
    assert len(manager.registry) == 0


def test_spawn_explicit_kind() -> None:
    manager = _manager()
    body = manager.spawn("gas")
    assert body is not None
    assert body.kind == "GAS"
    assert 16.0 <= body.size <= 22.0
    with pytest.raises(ValueError, match="unknown body kind"):
        manager.spawn("ICE")


def test_spawn_is_deterministic_for_seed() -> None:
    a = _manager(seed=42)
    b = _manager(seed=42)
    kinds_a = [(x.name, x.kind, x.size) for x in (a.spawn() for _ in range(5))]
    kinds_b = [(x.name, x.kind, x.size) for x in (b.spawn() for _ in range(5))]
    assert kinds_a == kinds_b


def test_scan_removes_crash_and_despawn() -> None:
    manager = _manager()
    keep = _place(manager, (200.0, 0.0, 0.0))
    crash = _place(manager, (10.0, 0.0, 0.0))
    far = _place(manager, (0.0, 0.0, 6000.0))
    events = manager.scan()
    reasons = {e.body.id: e.reason for e in events}
    assert reasons == {crash: REASON_CRASH, far: REASON_DESPAWN}
    assert manager.registry.order == [keep]


def test_non_finite_state_counts_as_crash() -> None:
    manager = _manager()
    bad_pos = _place(manager, (np.nan, 0.0, 0.0))
    bad_vel = _place(manager, (200.0, 0.0, 0.0), (np.inf, 0.0, 0.0))
    events = manager.scan()
    assert {e.body.id for e in events} == {bad_pos, bad_vel}
    assert all(e.reason == REASON_CRASH for e in events)
    assert len(manager.registry) == 0


def test_body_inside_crash_radius_removed_before_integration() -> None:
    manager = _manager()
    inside = _place(manager, (5.0, 0.0, 0.0), (0.0, 0.0, 1.0))
    result = advance_frame(manager, 0.05, 1.0)
    assert [e.body.id for e in result.removed] == [inside]
    assert inside not in manager.registry
    result = advance_frame(manager, 0.05, 1.0)
    assert result.removed == []


def test_escaping_body_despawns_and_stays_gone() -> None:
    manager = _manager(despawn_distance=500.0)
    runaway = _place(manager, (450.0, 0.0, 0.0), (200.0, 0.0, 0.0))
    removed = []
    for _ in range(20):
        removed.extend(advance_frame(manager, 0.05, 10.0).removed)
    assert [(e.body.id, e.reason) for e in removed] == [(runaway, REASON_DESPAWN)]
    assert len(manager.registry) == 0


def test_degenerate_config_removes_everything() -> None:
    registry = BodyRegistry()
    store = SimpleNamespace(config=SimulationConfig(crash_distance=100.0, despawn_distance=50.0))
    manager = LifecycleManager(registry, store, np.random.default_rng(0))
    _place(manager, (75.0, 0.0, 0.0))
    _place(manager, (300.0, 0.0, 0.0))
    result = advance_frame(manager, 0.05, 1.0)
    assert len(result.removed) == 2
    assert len(registry) == 0


def test_zero_sub_steps_clears_bodies_without_stepping() -> None:
    registry = BodyRegistry()
    store = SimpleNamespace(config=SimulationConfig(sub_steps=0))
    manager = LifecycleManager(registry, store, np.random.default_rng(0))
    assert manager.spawn() is not None
    result = advance_frame(manager, 0.05, 1.0)
    assert result.sub_dt == 0.0
    assert [event.reason for event in result.removed] == [REASON_CRASH]
    assert len(registry) == 0


def test_delete_outermost() -> None:
    manager = _manager()
    near = _place(manager, (200.0, 0.0, 0.0))
    far = _place(manager, (0.0, 0.0, 900.0))
    event = manager.delete_outermost()
    assert event is not None
    assert event.body.id == far
    assert event.reason == REASON_DELETED
    assert manager.registry.order == [near]


def test_delete_outermost_tie_goes_to_first() -> None:
    manager = _manager()
    first = _place(manager, (400.0, 0.0, 0.0))
    second = _place(manager, (0.0, 0.0, -400.0))
    event = manager.delete_outermost()
    assert event is not None and event.body.id == first
    assert manager.registry.order == [second]


def test_delete_outermost_empty_is_noop() -> None:
    manager = _manager()
    assert manager.delete_outermost() is None
    assert len(manager.registry) == 0


def test_circular_speed() -> None:
    assert np.isclose(circular_speed(500_000.0, 180.0), 52.7046, atol=1e-4)
