"""CLI entrypoint: run a headless sandbox session and print summaries."""

from __future__ import annotations

import argparse
import logging

import numpy as np

from . import __version__
from .app.sim_controller import SimulationController, summary_lines
from .core.config import SimulationConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="orbit_sandbox", description=__doc__)
    parser.add_argument("--frames", type=int, default=600)
    parser.add_argument("--delta", type=float, default=1.0 / 60.0, help="wall-clock seconds per frame")
    parser.add_argument("--bodies", type=int, default=3, help="bodies spawned at start")
    parser.add_argument("--warp", type=int, default=4, help="time warp table index")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--mutual", action="store_true", help="enable body-body gravity")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    print(f"orbit_sandbox v{__version__}")

    config = SimulationConfig(
        initial_bodies=args.bodies,
        max_bodies=max(args.bodies, SimulationConfig().max_bodies),
        time_warp_index=args.warp,
        mutual_gravity=args.mutual,
    )
    try:
        config.validate()
    except ValueError as exc:
        print(f"error: {exc}")
        return 2

    controller = SimulationController(config, rng=np.random.default_rng(args.seed))
    controller.populate()
    print(controller.time_warp_label())

    for _ in range(args.frames):
        controller.frame(args.delta)

    info = controller.diagnostics()
    print(f"frames={info['frame']} sim_time={info['time']:.2f} bodies={info['bodies']}")
    for body_id in controller.body_ids():
        controller.select(body_id)
        summary = controller.selected_summary()
        if summary is None:
            continue
        print(f"[{summary['name']}]")
        for line in summary_lines(summary):
            print(f"  {line}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
