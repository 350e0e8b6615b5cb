"""Compare the predicted apsides timing with the integrated trajectory."""

from __future__ import annotations

import numpy as np

from orbit_sandbox.analysis.orbit_predictor import predict_orbit
from orbit_sandbox.core.forces import CentralGravity
from orbit_sandbox.core.integrators import SymplecticEuler
from orbit_sandbox.core.state import BodiesState


if __name__ == "__main__":
    G = 500.0
    M = 1000.0
    mu = G * M
    r0 = 200.0
    pos = np.array([[r0, 0.0, 0.0]], dtype=np.float64)
    vel = np.array([[0.0, 0.0, 1.2 * np.sqrt(mu / r0)]], dtype=np.float64)

    state = BodiesState(pos=pos, vel=vel, mass=np.array([0.003]))
    model = CentralGravity(G=G, central_mass=M)
    integrator = SymplecticEuler()

    elements = predict_orbit(state.pos[0], state.vel[0], mu)
    print(
        f"e={elements.eccentricity:.4f} a={elements.semi_major_axis:.2f} "
        f"T={elements.period:.3f} | r_pe={elements.periapsis_distance:.2f} "
        f"r_ap={elements.apoapsis_distance:.2f}"
    )

    dt = 1e-3
    t_ap = elements.time_to_apoapsis
    steps = int(round(t_ap / dt))
    r_max = 0.0
    for step in range(1, steps + 1):
        integrator.step(state, model, dt)
        r_max = max(r_max, float(np.linalg.norm(state.pos[0])))
        if step % (steps // 5) == 0:
            el = predict_orbit(state.pos[0], state.vel[0], mu)
            print(
                f"t={step * dt:7.3f} | r={np.linalg.norm(state.pos[0]):8.3f} | "
                f"T-AP={el.time_to_apoapsis:7.3f} T-PE={el.time_to_periapsis:7.3f}"
            )
    print(f"integrated r_max={r_max:.3f} predicted r_ap={elements.apoapsis_distance:.3f}")
