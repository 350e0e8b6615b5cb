"""Keplerian orbit geometry and apsides timing from instantaneous state."""

from __future__ import annotations

from dataclasses import dataclass
from math import acos, atan2, cos, inf, isfinite, pi, sin, sqrt

import numpy as np

from ..core.config import SimulationConfig
from ..core.state.registry import BodyRegistry


KIND_ELLIPTICAL = "elliptical"
KIND_ESCAPE = "escape"

TWO_PI = 2.0 * pi
# Below this eccentricity the periapsis direction is noise; use the radius.
CIRCULAR_BASIS_LIMIT = 0.01
# Below this eccentricity the true anomaly is reported as zero.
CIRCULAR_ANOMALY_LIMIT = 1e-4


@dataclass(frozen=True, slots=True)
class OrbitalElements:
    kind: str
    eccentricity: float
    eccentricity_vector: np.ndarray
    semi_major_axis: float
    semi_latus_rectum: float
    period: float
    time_to_periapsis: float
    time_to_apoapsis: float
    true_anomaly: float
    periapsis_distance: float
    apoapsis_distance: float
    points: np.ndarray

    @property
    def bound(self) -> bool:
        return self.kind == KIND_ELLIPTICAL


def eccentricity_vector(pos: np.ndarray, vel: np.ndarray, mu: float) -> np.ndarray:
    """e = (v x h) / mu - r_hat, pointing at periapsis."""
    r = np.asarray(pos, dtype=np.float64)
    v = np.asarray(vel, dtype=np.float64)
    h = np.cross(r, v)
    return np.cross(v, h) / mu - r / np.linalg.norm(r)


def predict_orbit(
    pos: np.ndarray,
    vel: np.ndarray,
    mu: float,
    crash_distance: float = 0.0,
    despawn_distance: float = inf,
    segments: int = 128,
    escape_steps: int = 300,
    escape_step_size: float = 1.0,
    bound_limit: float = 0.99,
) -> OrbitalElements:
    """Describe the orbit through (pos, vel) around a central mass at the origin.

    Bound states (e < bound_limit) get the closed-form ellipse sampled at
    ``segments + 1`` true anomalies, with points inside the crash radius
    dropped, plus period and apsides timing. Everything else gets a numerically
    propagated open arc and zeroed timing fields. Never raises.
    """
    r = np.array(pos, dtype=np.float64)
    v = np.array(vel, dtype=np.float64)
    r_mag = float(np.linalg.norm(r))
    if not (mu > 0.0 and r_mag > 0.0 and np.all(np.isfinite(r)) and np.all(np.isfinite(v))):
        return _escape_result(0.0, np.zeros(3), np.zeros((0, 3)))

    e_vec = eccentricity_vector(r, v, mu)
    e = float(np.linalg.norm(e_vec))
    if e < bound_limit:
        elements = _elliptical(r, v, mu, e_vec, e, crash_distance, segments)
        if elements is not None:
            return elements

    points = propagate_escape(
        r, v, mu, crash_distance, despawn_distance, escape_steps, escape_step_size
    )
    return _escape_result(e, e_vec, points)


def predict_from_config(
    pos: np.ndarray, vel: np.ndarray, cfg: SimulationConfig
) -> OrbitalElements:
    return predict_orbit(
        pos,
        vel,
        cfg.mu,
        crash_distance=cfg.crash_distance,
        despawn_distance=cfg.despawn_distance,
        segments=cfg.orbit_segments,
        escape_steps=cfg.escape_steps,
        escape_step_size=cfg.escape_step_size,
        bound_limit=cfg.bound_eccentricity_limit,
    )


def refresh_body_orbit(
    registry: BodyRegistry, body_id: int, cfg: SimulationConfig
) -> OrbitalElements:
    """Recompute and cache the orbit of one live body."""
    idx = registry.index_of(body_id)
    elements = predict_from_config(
        registry.state.pos[idx], registry.state.vel[idx], cfg
    )
    registry.get(body_id).orbit = elements
    return elements


def _elliptical(
    r: np.ndarray,
    v: np.ndarray,
    mu: float,
    e_vec: np.ndarray,
    e: float,
    crash_distance: float,
    segments: int,
) -> OrbitalElements | None:
    r_mag = float(np.linalg.norm(r))
    energy = 0.5 * float(np.dot(v, v)) - mu / r_mag
    if not energy < 0.0:
        return None
    a = -mu / (2.0 * energy)
    p = a * (1.0 - e * e)
    period = TWO_PI * sqrt(a**3 / mu)
    if not (isfinite(a) and isfinite(period) and period > 0.0):
        return None

    nu = _true_anomaly(r, v, e_vec, e)
    t_since = time_since_periapsis(nu, e, a, mu)
    t_pe = period - t_since
    t_ap = (1.5 * period - t_since) % period

    h = np.cross(r, v)
    h_mag = float(np.linalg.norm(h))
    normal = h / h_mag if h_mag > 0.0 else np.zeros(3)
    if e > CIRCULAR_BASIS_LIMIT:
        u = e_vec / e
    else:
        u = r / r_mag
    w = np.cross(normal, u)

    theta = np.linspace(0.0, TWO_PI, segments + 1)
    radius = p / (1.0 + e * np.cos(theta))
    points = (
        (radius * np.cos(theta))[:, np.newaxis] * u
        + (radius * np.sin(theta))[:, np.newaxis] * w
    )
    points = points[radius >= crash_distance]

    return OrbitalElements(
        kind=KIND_ELLIPTICAL,
        eccentricity=e,
        eccentricity_vector=e_vec,
        semi_major_axis=a,
        semi_latus_rectum=p,
        period=period,
        time_to_periapsis=t_pe,
        time_to_apoapsis=t_ap,
        true_anomaly=nu,
        periapsis_distance=a * (1.0 - e),
        apoapsis_distance=a * (1.0 + e),
        points=points,
    )


def _escape_result(e: float, e_vec: np.ndarray, points: np.ndarray) -> OrbitalElements:
    return OrbitalElements(
        kind=KIND_ESCAPE,
        eccentricity=e,
        eccentricity_vector=np.asarray(e_vec, dtype=np.float64),
        semi_major_axis=0.0,
        semi_latus_rectum=0.0,
        period=0.0,
        time_to_periapsis=0.0,
        time_to_apoapsis=0.0,
        true_anomaly=0.0,
        periapsis_distance=0.0,
        apoapsis_distance=0.0,
        points=points,
    )


def propagate_escape(
    pos: np.ndarray,
    vel: np.ndarray,
    mu: float,
    crash_distance: float,
    despawn_distance: float,
    steps: int,
    step_size: float,
) -> np.ndarray:
    """Sample an open trajectory with the integrator's two-body law.

    Stops before stepping from inside the crash radius and right after the
    first sample beyond the despawn radius.
    """
    tmp_pos = np.array(pos, dtype=np.float64)
    tmp_vel = np.array(vel, dtype=np.float64)
    crash2 = crash_distance * crash_distance
    points: list[np.ndarray] = []
    for _ in range(steps):
        r2 = float(np.dot(tmp_pos, tmp_pos))
        if r2 < crash2 or not r2 > 0.0 or not isfinite(r2):
            break
        dist = sqrt(r2)
        acc_factor = -mu / (r2 * dist)
        tmp_vel += tmp_pos * (acc_factor * step_size)
        tmp_pos += tmp_vel * step_size
        points.append(tmp_pos.copy())
        if float(np.linalg.norm(tmp_pos)) > despawn_distance:
            break
    if not points:
        return np.zeros((0, 3), dtype=np.float64)
    return np.asarray(points, dtype=np.float64)


def _true_anomaly(r: np.ndarray, v: np.ndarray, e_vec: np.ndarray, e: float) -> float:
    if e <= CIRCULAR_ANOMALY_LIMIT:
        return 0.0
    r_mag = float(np.linalg.norm(r))
    cos_nu = float(np.dot(e_vec, r)) / (e * r_mag)
    nu = acos(max(-1.0, min(1.0, cos_nu)))
    # Closing on the center means past apoapsis: reflect into (pi, 2pi).
    if float(np.dot(r, v)) < 0.0:
        nu = TWO_PI - nu
    return nu


def true_anomaly(pos: np.ndarray, vel: np.ndarray, mu: float) -> float:
    r = np.asarray(pos, dtype=np.float64)
    v = np.asarray(vel, dtype=np.float64)
    e_vec = eccentricity_vector(r, v, mu)
    return _true_anomaly(r, v, e_vec, float(np.linalg.norm(e_vec)))


def time_since_periapsis(nu: float, e: float, a: float, mu: float) -> float:
    """Elapsed time from periapsis to true anomaly nu, in [0, period)."""
    ecc_anomaly = 2.0 * atan2(sqrt(1.0 - e) * sin(nu / 2.0), sqrt(1.0 + e) * cos(nu / 2.0))
    mean_anomaly = (ecc_anomaly - e * sin(ecc_anomaly)) % TWO_PI
    mean_motion = sqrt(mu / a**3)
    return mean_anomaly / mean_motion


def propagate_kepler(
    pos: np.ndarray,
    vel: np.ndarray,
    mu: float,
    dt: float,
    tol: float = 1e-12,
    max_iter: int = 50,
) -> tuple[np.ndarray, np.ndarray]:
    """Advance a bound two-body state analytically by dt.

    Solves Kepler's equation for the change in eccentric anomaly with Newton
    iteration and applies the Lagrange f and g coefficients.
    """
    if mu <= 0.0:
        raise ValueError("mu must be > 0")
    r0 = np.asarray(pos, dtype=np.float64)
    v0 = np.asarray(vel, dtype=np.float64)
    r0_mag = float(np.linalg.norm(r0))
    if r0_mag == 0.0:
        raise ValueError("position norm is zero")
    energy = 0.5 * float(np.dot(v0, v0)) - mu / r0_mag
    if energy >= 0.0:
        raise ValueError("state is not bound")
    a = -mu / (2.0 * energy)
    mean_motion = sqrt(mu / a**3)

    # Whole revolutions change nothing; keep the residual in [0, 2pi).
    dm = (mean_motion * float(dt)) % TWO_PI
    dt_red = dm / mean_motion
    c1 = 1.0 - r0_mag / a
    c2 = float(np.dot(r0, v0)) / sqrt(mu * a)

    x = dm
    for _ in range(max_iter):
        f_val = x - c1 * sin(x) + c2 * (1.0 - cos(x)) - dm
        f_der = 1.0 - c1 * cos(x) + c2 * sin(x)
        step = f_val / f_der
        x -= step
        if abs(step) < tol:
            break

    r_mag = a * (1.0 - c1 * cos(x) + c2 * sin(x))
    f = 1.0 - a / r0_mag * (1.0 - cos(x))
    g = dt_red - sqrt(a**3 / mu) * (x - sin(x))
    f_dot = -sqrt(mu * a) / (r_mag * r0_mag) * sin(x)
    g_dot = 1.0 - a / r_mag * (1.0 - cos(x))
    return f * r0 + g * v0, f_dot * r0 + g_dot * v0
