"""Command line entry point: opens a window and animates the solar system."""
from __future__ import annotations

import argparse
from dataclasses import asdict, replace
from pathlib import Path
from typing import Optional, Sequence

from orrery import __version__
from orrery.core.config import CAMERA_CFG, ORBIT_CFG, RENDER_CFG, CameraCfg, OrbitCfg, RenderCfg
from orrery.core.logging_utils import RunLogger
from orrery.core.model import SimState
from orrery.core.orbit import OrbitModel
from orrery.data.catalog import BODY_DISPLAY_ORDER, build_bodies
from orrery.render.camera import Camera


def build_simulation(
    orbit_cfg: OrbitCfg = ORBIT_CFG,
    camera_cfg: CameraCfg = CAMERA_CFG,
    *,
    body_keys: Optional[list[str]] = None,
    seed: Optional[int] = None,
    run_logger: Optional[RunLogger] = None,
) -> tuple[OrbitModel, Optional[int]]:
    """Create an independent simulation context and its orbit model."""

    state = SimState(bodies=build_bodies(body_keys), camera=Camera(camera_cfg))
    model = OrbitModel(state, orbit_cfg, run_logger=run_logger)
    used_seed = model.initialize(orbit_cfg.randomize_phase, seed)
    return model, used_seed


def build_meta(
    model: OrbitModel,
    render_cfg: RenderCfg,
    camera_cfg: CameraCfg,
    seed: Optional[int],
) -> dict:
    return {
        "version": __version__,
        "seed": seed,
        "orbit_cfg": asdict(model.cfg),
        "camera_cfg": asdict(camera_cfg),
        "render_cfg": asdict(render_cfg),
        "bodies": [
            {
                "name": body.name,
                "semi_major_axis": body.semi_major_axis,
                "eccentricity": body.eccentricity,
                "orbital_period": body.orbital_period,
                "initial_mean_anomaly": body.mean_anomaly,
            }
            for body in model.bodies
        ],
    }


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Animated Kepler orbits of the solar system.")
    parser.add_argument("--width", type=int, default=RENDER_CFG.width)
    parser.add_argument("--height", type=int, default=RENDER_CFG.height)
    parser.add_argument("--time-scale", type=float, default=ORBIT_CFG.time_scale,
                        help="simulated years per wall-clock second")
    parser.add_argument("--no-randomize", action="store_true",
                        help="start every body at mean anomaly 0")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for the starting phases (default: current time)")
    parser.add_argument("--bodies", nargs="+", choices=BODY_DISPLAY_ORDER, default=None)
    parser.add_argument("--no-paths", action="store_true", help="hide the orbit paths")
    parser.add_argument("--fps", type=int, default=RENDER_CFG.fps_limit,
                        help="frame rate cap, 0 for uncapped")
    parser.add_argument("--log", action="store_true", help="record the run to CSV")
    parser.add_argument("--log-dir", type=Path, default=Path("data/runs"))
    parser.add_argument("--max-frames", type=int, default=None)
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    orbit_cfg = replace(ORBIT_CFG, time_scale=args.time_scale, randomize_phase=not args.no_randomize)
    render_cfg = replace(
        RENDER_CFG,
        width=args.width,
        height=args.height,
        show_orbit_paths=not args.no_paths,
        fps_limit=args.fps,
    )

    run_logger = RunLogger(args.log_dir) if args.log else None
    try:
        model, seed = build_simulation(
            orbit_cfg,
            CAMERA_CFG,
            body_keys=args.bodies,
            seed=args.seed,
            run_logger=run_logger,
        )
        if run_logger is not None:
            run_logger.write_meta(build_meta(model, render_cfg, CAMERA_CFG, seed))

        # pygame is only needed once a window is actually opened
        from orrery.core.driver import FrameDriver
        from orrery.render.draw import PygameRenderer
        from orrery.render.host import PygameHost

        host = PygameHost(render_cfg)
        driver = FrameDriver(
            model,
            PygameRenderer(host.surface, render_cfg),
            host,
            render_cfg,
            run_logger=run_logger,
        )
        driver.run(args.max_frames)
    finally:
        if run_logger is not None:
            run_logger.close()

    if model.state.stats.nonconverged:
        print(
            f"Kepler solver hit its iteration cap {model.state.stats.nonconverged} "
            f"times out of {model.state.stats.solves} solves."
        )
    if run_logger is not None:
        print(f"Run recorded to {run_logger.run_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
