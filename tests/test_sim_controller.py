from __future__ import annotations

import numpy as np
import pytest

from orbit_sandbox.app.sim_controller import (
    CENTRAL_BODY_NAME,
    SimulationController,
    summary_lines,
)
from orbit_sandbox.core.config import SimulationConfig
from orbit_sandbox.core.state import REASON_CRASH


def _controller(seed: int = 0, **cfg) -> SimulationController:
    controller = SimulationController(
        SimulationConfig(**cfg), rng=np.random.default_rng(seed)
    )
    controller.populate()
    return controller


def test_populate_spawns_initial_bodies_with_orbits() -> None:
    controller = _controller()
    assert controller.body_ids() == [1, 2, 3]
    assert controller.labels()[0] == (0, CENTRAL_BODY_NAME)
    assert len(controller.labels()) == 4
    for body_id in controller.body_ids():
        orbit = controller.orbit(body_id)
        assert orbit is not None and orbit.bound
    positions = controller.body_positions()
    assert positions.dtype == np.float64
    assert np.allclose(np.linalg.norm(positions, axis=1), [180.0, 300.0, 420.0])


def test_frames_are_deterministic() -> None:
    a = _controller(seed=7)
    b = _controller(seed=7)
    for _ in range(20):
        a.frame(1.0 / 60.0)
        b.frame(1.0 / 60.0)
    assert [body.name for body in a.registry] == [body.name for body in b.registry]
    assert np.array_equal(a.body_positions(), b.body_positions())
    assert a.frame_count == 20
    assert np.isclose(a.sim_time, b.sim_time)


def test_frame_refreshes_selected_orbit() -> None:
    controller = _controller()
    controller.select(2)
    before = controller.orbit(2)
    controller.frame(0.02)
    assert controller.orbit(2) is not before


def test_delete_outermost_clears_selection() -> None:
    controller = _controller()
    controller.select(3)
    event = controller.delete_outermost()
    assert event is not None and event.body.id == 3
    assert controller.selected_id is None
    assert controller.body_ids() == [1, 2]


def test_select_validates_ids() -> None:
    controller = _controller()
    controller.select(0)
    assert controller.selected_id == 0
    with pytest.raises(KeyError):
        controller.select(99)
    controller.select(None)
    assert controller.selected_summary() is None


def test_set_speed_keeps_heading() -> None:
    controller = _controller()
    controller.set_speed(1, 10.0)
    vel = controller.registry.velocity(1)
    assert np.allclose(vel, [0.0, 0.0, 10.0])
    with pytest.raises(ValueError, match="speed"):
        controller.set_speed(1, -1.0)
    with pytest.raises(ValueError, match="speed"):
        controller.set_speed(1, float("nan"))

    controller.set_speed(1, 0.0)
    controller.set_speed(1, 5.0)
    assert np.allclose(controller.registry.velocity(1), [0.0, 0.0, 5.0])


def test_rename_upper_cases() -> None:
    controller = _controller()
    controller.rename(1, "home")
    assert controller.registry.get(1).name == "HOME"
    assert (1, "HOME") in controller.labels()


def test_body_and_star_summaries() -> None:
    controller = _controller()
    controller.select(1)
    summary = controller.selected_summary()
    assert summary is not None
    assert np.isclose(summary["distance_au"], 0.9)
    assert summary["orbit"] == "elliptical"
    assert summary["time_to_periapsis"] > 0.0
    lines = summary_lines(summary)
    assert lines[0] == f"TYPE: {summary['type']}"
    assert "DIST: 0.90 AU" in lines
    assert any(line.startswith("T-PE: ") for line in lines)

    controller.select(0)
    star = controller.selected_summary()
    assert star is not None
    assert star["type"] == "STAR"
    assert star["mass"] == "1.000 Suns"
    assert summary_lines(star)[0] == "MASS: 1.000 Suns"


def test_time_warp_commands() -> None:
    controller = _controller()
    assert controller.time_warp_label() == "WARP: 1.0 DAY/S"
    assert controller.time_warp_up()
    assert controller.time_warp_label() == "WARP: 3.0 DAY/S"
    assert controller.time_warp_down()
    assert controller.time_warp_down()
    assert controller.config.time_warp_index == 3


def test_invalid_config_update_keeps_previous() -> None:
    controller = _controller()
    with pytest.raises(ValueError, match="G must be > 0"):
        controller.update_config(G=-1.0)
    assert controller.config.G == 500.0
    with pytest.raises(ValueError, match="invalid config update"):
        controller.update_config(gravity=1.0)
    controller.update_config(orbit_refresh_budget=1)
    assert controller.scheduler.budget == 1


def test_crash_removes_body_and_clears_selection() -> None:
    controller = _controller(time_warp_index=11, initial_bodies=1)
    (body_id,) = controller.body_ids()
    controller.set_speed(body_id, 0.0)
    controller.select(body_id)
    removed = []
    for _ in range(10):
        removed.extend(controller.frame(0.05).removed)
    assert controller.body_ids() == []
    assert controller.selected_id is None
    assert [event.reason for event in removed] == [REASON_CRASH]
    assert "energy" not in controller.diagnostics()


def test_diagnostics_report_energy() -> None:
    controller = _controller()
    info = controller.diagnostics()
    assert info["bodies"] == 3
    assert info["energy"] < 0.0


def test_body_positions_keep_full_precision() -> None:
    controller = _controller(initial_bodies=1)
    (body_id,) = controller.body_ids()
    far = np.array([4999.123456789, 0.0, 0.0])
    controller.registry.state.pos[0] = far
    positions = controller.body_positions()
    assert positions[0, 0] == far[0]
    positions[0, 0] = 0.0
    assert np.array_equal(controller.registry.position(body_id), far)
