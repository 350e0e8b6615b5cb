"""Headless simulation controller: the command and output seam for a UI."""

from __future__ import annotations

from math import isfinite
from typing import Any

import numpy as np

from ..analysis.orbit_predictor import OrbitalElements, refresh_body_orbit
from ..analysis.time_warp import TimeWarpController
from ..core.config import ConfigStore, SimulationConfig
from ..core.diagnostics.bodies import total_energy
from ..core.integrators import SymplecticEuler
from ..core.lifecycle import LifecycleManager
from ..core.math.vector import prograde_direction
from ..core.run import FrameResult, advance_frame
from ..core.state.registry import (
    CENTRAL_BODY_ID,
    Body,
    BodyRegistry,
    RemovalEvent,
)
from ..io.units import (
    EARTH_MASS_KG,
    EARTH_RADIUS_KM,
    SUN_LUMINOSITY_W,
    SUN_MASS_KG,
    SUN_RADIUS_KM,
    format_relative,
    format_seconds,
    star_properties,
    to_au,
)
from .scheduler import OrbitUpdateScheduler


CENTRAL_BODY_NAME = "THE_SUN"


class SimulationController:
    def __init__(
        self,
        config: SimulationConfig | None = None,
        rng: np.random.Generator | None = None,
        calibrated: bool = True,
    ) -> None:
        self.store = ConfigStore(config)
        self.registry = BodyRegistry()
        self.lifecycle = LifecycleManager(self.registry, self.store, rng)
        self.time_warp = TimeWarpController(self.store, calibrated=calibrated)
        self.scheduler = OrbitUpdateScheduler(budget=self.store.config.orbit_refresh_budget)
        self.integrator = SymplecticEuler()
        self.selected_id: int | None = None
        self.sim_time = 0.0
        self.frame_count = 0
        self.registry.add_listener(self._on_removed)

    @property
    def config(self) -> SimulationConfig:
        return self.store.config

    def populate(self) -> list[Body]:
        """Spawn the configured number of starting bodies."""
        spawned: list[Body] = []
        for _ in range(self.config.initial_bodies):
            body = self.spawn()
            if body is not None:
                spawned.append(body)
        return spawned

    def spawn(self, kind: str | None = None) -> Body | None:
        body = self.lifecycle.spawn(kind)
        if body is not None:
            refresh_body_orbit(self.registry, body.id, self.config)
        return body

    def delete_outermost(self) -> RemovalEvent | None:
        return self.lifecycle.delete_outermost()

    def select(self, body_id: int | None) -> None:
        if body_id is not None and body_id != CENTRAL_BODY_ID:
            self.registry.get(body_id)
        self.selected_id = body_id

    def rename(self, body_id: int, name: str) -> None:
        self.registry.get(body_id).name = name.upper()

    def set_speed(self, body_id: int, speed: float) -> None:
        """Set |v| while keeping the current heading."""
        speed = float(speed)
        if not isfinite(speed) or speed < 0.0:
            raise ValueError("speed must be finite and >= 0")
        vel = self.registry.velocity(body_id)
        mag = float(np.linalg.norm(vel))
        if mag > 0.0:
            direction = vel / mag
        else:
            direction = prograde_direction(self.registry.position(body_id))
        self.registry.set_velocity(body_id, direction * speed)
        refresh_body_orbit(self.registry, body_id, self.config)

    def time_warp_up(self) -> bool:
        return self.time_warp.step_up()

    def time_warp_down(self) -> bool:
        return self.time_warp.step_down()

    def update_config(self, **changes: Any) -> SimulationConfig:
        cfg = self.store.update(**changes)
        self.scheduler.budget = cfg.orbit_refresh_budget
        return cfg

    def frame(self, delta: float) -> FrameResult:
        """Advance physics by one wall-clock delta, then refresh orbit caches."""
        result = advance_frame(
            self.lifecycle, delta, self.time_warp.multiplier(), self.integrator
        )
        self.sim_time += result.sim_time
        self.frame_count += 1
        cfg = self.config
        for body_id in self.scheduler.plan(self.registry.order, self.selected_id):
            refresh_body_orbit(self.registry, body_id, cfg)
        return result

    def _on_removed(self, event: RemovalEvent) -> None:
        if self.selected_id == event.body.id:
            self.selected_id = None

    def body_ids(self) -> list[int]:
        return list(self.registry.order)

    def body_positions(self) -> np.ndarray:
        return self.registry.state.pos.copy()

    def labels(self) -> list[tuple[int, str]]:
        return [(CENTRAL_BODY_ID, CENTRAL_BODY_NAME)] + [
            (body.id, body.name) for body in self.registry
        ]

    def orbit(self, body_id: int) -> OrbitalElements | None:
        return self.registry.get(body_id).orbit

    def time_warp_label(self) -> str:
        return self.time_warp.label()

    def selected_summary(self) -> dict[str, Any] | None:
        if self.selected_id is None:
            return None
        if self.selected_id == CENTRAL_BODY_ID:
            return self._star_summary()
        return self.body_summary(self.selected_id)

    def body_summary(self, body_id: int) -> dict[str, Any]:
        cfg = self.config
        body = self.registry.get(body_id)
        pos = self.registry.position(body_id)
        vel = self.registry.velocity(body_id)
        info: dict[str, Any] = {
            "id": body.id,
            "name": body.name,
            "type": body.kind,
            "distance_au": to_au(float(np.linalg.norm(pos)), cfg.au_size),
            "speed": float(np.linalg.norm(vel)),
            "mass": format_relative(body.real_mass_kg, EARTH_MASS_KG, "Earths"),
            "radius": format_relative(body.real_radius_km, EARTH_RADIUS_KM, "Earths"),
        }
        orbit = body.orbit
        if orbit is not None:
            info.update(
                orbit=orbit.kind,
                eccentricity=orbit.eccentricity,
                period=orbit.period,
                time_to_periapsis=orbit.time_to_periapsis,
                time_to_apoapsis=orbit.time_to_apoapsis,
            )
        return info

    def _star_summary(self) -> dict[str, Any]:
        props = star_properties(self.config.central_mass)
        return {
            "id": CENTRAL_BODY_ID,
            "name": CENTRAL_BODY_NAME,
            "type": "STAR",
            "mass": format_relative(props.mass_kg, SUN_MASS_KG, "Suns"),
            "radius": format_relative(props.radius_km, SUN_RADIUS_KM, "Suns"),
            "luminosity": format_relative(props.luminosity_w, SUN_LUMINOSITY_W, "Suns"),
        }

    def diagnostics(self) -> dict[str, float | int]:
        cfg = self.config
        info: dict[str, float | int] = {
            "frame": self.frame_count,
            "time": self.sim_time,
            "bodies": len(self.registry),
        }
        if len(self.registry) > 0:
            info["energy"] = total_energy(
                self.registry.state, cfg.G, cfg.central_mass, mutual=cfg.mutual_gravity
            )
        return info


def summary_lines(summary: dict[str, Any]) -> list[str]:
    """Render a selected-body summary the way the info panel shows it."""
    if summary["type"] == "STAR":
        return [
            f"MASS: {summary['mass']}",
            f"RADIUS: {summary['radius']}",
            f"LUMINOSITY: {summary['luminosity']}",
        ]
    lines = [
        f"TYPE: {summary['type']}",
        f"DIST: {summary['distance_au']:.2f} AU",
        f"VELOCITY: {summary['speed']:.2f}",
        f"MASS: {summary['mass']}",
        f"RADIUS: {summary['radius']}",
    ]
    if "orbit" in summary:
        lines.append(f"T-PE: {format_seconds(summary['time_to_periapsis'])}")
        lines.append(f"T-AP: {format_seconds(summary['time_to_apoapsis'])}")
    return lines
