"""Time warp: discrete real-seconds-per-sim-second selection to a multiplier."""

from __future__ import annotations

from math import pi, sqrt

from ..core.config import ConfigStore, SimulationConfig
from ..io.units import SECONDS_PER_YEAR, format_warp


def orbital_period(distance: float, mu: float) -> float:
    """Period of a circular orbit of radius ``distance``."""
    return 2.0 * pi * sqrt(distance**3 / mu)


def sim_to_real_ratio(cfg: SimulationConfig) -> float:
    """Real seconds per simulated second that make one AU orbit last a year."""
    return SECONDS_PER_YEAR / orbital_period(cfg.au_size, cfg.mu)


class TimeWarpController:
    """Steps through ``time_warp_table`` and converts the pick to a multiplier.

    With ``calibrated`` on, the multiplier is rescaled from the current G and
    central mass so an orbit at ``au_size`` takes one real year; otherwise
    the table value is used directly. The index itself lives in the
    ConfigStore.
    """

    def __init__(self, store: ConfigStore, calibrated: bool = True) -> None:
        self.store = store
        self.calibrated = calibrated
        self._key: tuple[float, float, float, float] | None = None
        self._multiplier = 0.0

    @property
    def index(self) -> int:
        return self.store.config.time_warp_index

    @property
    def real_seconds(self) -> float:
        return self.store.config.time_warp_seconds

    def step_up(self) -> bool:
        cfg = self.store.config
        if cfg.time_warp_index >= len(cfg.time_warp_table) - 1:
            return False
        self.store.update(time_warp_index=cfg.time_warp_index + 1)
        return True

    def step_down(self) -> bool:
        cfg = self.store.config
        if cfg.time_warp_index <= 0:
            return False
        self.store.update(time_warp_index=cfg.time_warp_index - 1)
        return True

    def multiplier(self) -> float:
        cfg = self.store.config
        real_sec = cfg.time_warp_seconds
        if not self.calibrated:
            return real_sec
        key = (cfg.G, cfg.central_mass, cfg.au_size, real_sec)
        if key != self._key:
            self._multiplier = real_sec / sim_to_real_ratio(cfg)
            self._key = key
        return self._multiplier

    def label(self) -> str:
        return f"WARP: {format_warp(self.real_seconds)}"
