"""Drive the headless controller through a few warp changes and deletions."""

from __future__ import annotations

import numpy as np

from orbit_sandbox.app.sim_controller import SimulationController, summary_lines


if __name__ == "__main__":
    controller = SimulationController(rng=np.random.default_rng(3))
    controller.populate()
    for _ in range(3):
        controller.spawn()

    delta = 1.0 / 60.0
    for phase in range(4):
        for _ in range(240):
            controller.frame(delta)
        info = controller.diagnostics()
        print(
            f"{controller.time_warp_label():18s} | t={info['time']:9.2f} | "
            f"bodies={info['bodies']} | E={info.get('energy', 0.0):.4e}"
        )
        controller.time_warp_up()
        if phase == 2:
            event = controller.delete_outermost()
            if event is not None:
                print(f"deleted {event.body.name} at r={event.distance:.1f}")

    controller.select(controller.body_ids()[0])
    summary = controller.selected_summary()
    if summary is not None:
        for line in summary_lines(summary):
            print(line)
