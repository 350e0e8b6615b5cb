"""Simulation configuration and its single validated owner."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from numbers import Integral, Real
from typing import Any, Mapping

import numpy as np


logger = logging.getLogger(__name__)

# Real seconds represented by one second of simulated motion, 32 min/s .. 1 yr/s.
DEFAULT_TIME_WARP_TABLE: tuple[float, ...] = (
    1920.0,
    3600.0,
    14400.0,
    43200.0,
    86400.0,
    259200.0,
    604800.0,
    1209600.0,
    2592000.0,
    7776000.0,
    15552000.0,
    31536000.0,
)


_INT_FIELDS: tuple[str, ...] = (
    "max_bodies",
    "sub_steps",
    "time_warp_index",
    "initial_bodies",
    "orbit_segments",
    "escape_steps",
    "orbit_refresh_budget",
)

_REAL_FIELDS: tuple[str, ...] = (
    "G",
    "central_mass",
    "crash_distance",
    "despawn_distance",
    "max_frame_delta",
    "spawn_base_distance",
    "spawn_increment",
    "au_size",
    "escape_step_size",
    "bound_eccentricity_limit",
)


def _warp_table(values: Any) -> tuple[float, ...]:
    try:
        return tuple(float(v) for v in values)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"time_warp_table must be a sequence of numbers: {exc}") from exc


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    G: float = 500.0
    central_mass: float = 1000.0
    max_bodies: int = 12
    crash_distance: float = 18.0
    despawn_distance: float = 5000.0
    sub_steps: int = 100
    time_warp_table: tuple[float, ...] = DEFAULT_TIME_WARP_TABLE
    time_warp_index: int = 4
    max_frame_delta: float = 0.05
    spawn_base_distance: float = 180.0
    spawn_increment: float = 120.0
    au_size: float = 200.0
    mutual_gravity: bool = False
    initial_bodies: int = 3
    orbit_segments: int = 128
    escape_steps: int = 300
    escape_step_size: float = 1.0
    bound_eccentricity_limit: float = 0.99
    orbit_refresh_budget: int = 3

    @property
    def mu(self) -> float:
        """Standard gravitational parameter of the central body."""
        return self.G * self.central_mass

    @property
    def time_warp_seconds(self) -> float:
        return self.time_warp_table[self.time_warp_index]

    def is_degenerate(self) -> bool:
        """True when the core cannot simulate safely with these constants."""
        return (
            not self.G > 0.0
            or not self.central_mass > 0.0
            or not self.crash_distance < self.despawn_distance
            or not self.sub_steps >= 1
        )

    def validate(self) -> None:
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Integral):
                raise ValueError(f"{name} must be an integer")
        for name in _REAL_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise ValueError(f"{name} must be a number")
            if not np.isfinite(value):
                raise ValueError(f"{name} must be finite")
        if self.G <= 0.0:
            raise ValueError("G must be > 0")
        if self.central_mass <= 0.0:
            raise ValueError("central_mass must be > 0")
        if self.max_bodies < 0:
            raise ValueError("max_bodies must be >= 0")
        if self.crash_distance < 0.0:
            raise ValueError("crash_distance must be >= 0")
        if self.crash_distance >= self.despawn_distance:
            raise ValueError("crash_distance must be < despawn_distance")
        if self.sub_steps < 1:
            raise ValueError("sub_steps must be >= 1")
        if not self.time_warp_table:
            raise ValueError("time_warp_table must not be empty")
        if any(not (np.isfinite(v) and v > 0.0) for v in self.time_warp_table):
            raise ValueError("time_warp_table values must be > 0")
        if not 0 <= self.time_warp_index < len(self.time_warp_table):
            raise ValueError("time_warp_index out of range")
        if self.max_frame_delta <= 0.0:
            raise ValueError("max_frame_delta must be > 0")
        if self.spawn_base_distance <= 0.0 or self.spawn_increment < 0.0:
            raise ValueError("spawn distances must be positive")
        if self.au_size <= 0.0:
            raise ValueError("au_size must be > 0")
        if self.initial_bodies < 0:
            raise ValueError("initial_bodies must be >= 0")
        if self.orbit_segments < 1:
            raise ValueError("orbit_segments must be >= 1")
        if self.escape_steps < 0 or self.escape_step_size <= 0.0:
            raise ValueError("escape propagation needs steps >= 0 and step size > 0")
        if not 0.0 < self.bound_eccentricity_limit <= 1.0:
            raise ValueError("bound_eccentricity_limit must be in (0, 1]")
        if self.orbit_refresh_budget < 0:
            raise ValueError("orbit_refresh_budget must be >= 0")


def config_from_dict(data: Mapping[str, Any]) -> SimulationConfig:
    known = {f.name for f in fields(SimulationConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")
    values = dict(data)
    if "time_warp_table" in values:
        values["time_warp_table"] = _warp_table(values["time_warp_table"])
    cfg = SimulationConfig(**values)
    cfg.validate()
    return cfg


class ConfigStore:
    """Owns the current SimulationConfig; every change is validated first."""

    def __init__(self, config: SimulationConfig | None = None) -> None:
        cfg = config if config is not None else SimulationConfig()
        cfg.validate()
        self._config = cfg

    @property
    def config(self) -> SimulationConfig:
        return self._config

    def update(self, **changes: Any) -> SimulationConfig:
        """Apply changes atomically; on ValueError the previous config is kept."""
        try:
            if "time_warp_table" in changes:
                changes["time_warp_table"] = _warp_table(changes["time_warp_table"])
            cfg = replace(self._config, **changes)
        except TypeError as exc:
            raise ValueError(f"invalid config update: {exc}") from exc
        cfg.validate()
        self._config = cfg
        logger.debug("config updated: %s", ", ".join(sorted(changes)))
        return cfg
