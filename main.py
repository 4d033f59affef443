"""Command line entry point: fly one headless lander run with a pilot."""

from __future__ import annotations

import argparse
from dataclasses import dataclass

from bots import create_pilot, list_available_pilots
from game import TARGET_FPS, UNITS_PER_SECOND, LanderGame
from lunar.clock import FrameClock
from lunar.config import DEFAULT_CONFIG
from lunar.session import LanderSession

DEFAULT_MAX_STEPS = 20000

# Result keys shown in the summary, in order, with their labels.
_SUMMARY_FIELDS = (
    ("state", "Outcome"),
    ("failures", "Failed checks"),
    ("time", "Flight time (s)"),
    ("ticks", "Ticks"),
    ("thrust_ticks", "Thrust ticks"),
    ("skipped_steps", "Skipped steps"),
    ("x", "Final x"),
    ("y", "Final y"),
    ("speed", "Final speed"),
    ("angle", "Final angle"),
)


@dataclass
class RunConfig:
    pilot_name: str
    print_freq: int
    max_steps: int | None
    seed: int | None
    width: int | None
    max_height: int | None
    fps: float
    realtime: bool
    plot_mode: str

    @property
    def frame_dt(self) -> float:
        return UNITS_PER_SECOND / self.fps

    @property
    def overrides_terrain(self) -> bool:
        return self.width is not None or self.max_height is not None


def _build_parser() -> argparse.ArgumentParser:
    pilots = list_available_pilots()
    parser = argparse.ArgumentParser(
        prog="pylander",
        description="Headless lunar lander: a pilot flies one ship until it lands or crashes.",
        formatter_class=argparse.RawTextHelpFormatter,
        epilog="Pilots:\n  " + ("\n  ".join(pilots) if pilots else "(none)"),
    )
    parser.add_argument("pilot_name", choices=pilots, metavar="pilot", help="pilot module name")
    parser.add_argument(
        "--freq",
        type=int,
        default=60,
        help="stats line every N ticks (1 = every tick, 0 = quiet)",
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=DEFAULT_MAX_STEPS,
        help=f"give up after N ticks (default: {DEFAULT_MAX_STEPS})",
    )
    parser.add_argument("--seed", type=int, help="seed for terrain and spawn")
    parser.add_argument(
        "--width", type=int, help=f"terrain columns (default: {DEFAULT_CONFIG.sim_width})"
    )
    parser.add_argument(
        "--max-height",
        type=int,
        help=f"terrain peak height (default: {DEFAULT_CONFIG.max_height})",
    )
    parser.add_argument(
        "--fps",
        type=float,
        default=float(TARGET_FPS),
        help=f"fixed tick rate used to derive dt (default: {TARGET_FPS})",
    )
    parser.add_argument(
        "--realtime",
        action="store_true",
        help="sleep between ticks and take dt from a monotonic clock",
    )
    parser.add_argument(
        "--plot",
        choices=("none", "speed", "thrust", "all"),
        default="none",
        help="write a trajectory PNG under outputs/",
    )
    return parser


def _parse_args(args: argparse.Namespace) -> RunConfig:
    return RunConfig(
        pilot_name=args.pilot_name,
        print_freq=args.freq,
        max_steps=args.steps,
        seed=args.seed,
        width=args.width,
        max_height=args.max_height,
        fps=args.fps,
        realtime=args.realtime,
        plot_mode=args.plot,
    )


def _announce_config(config: RunConfig) -> None:
    print(f"Using pilot {config.pilot_name}")
    if config.seed is not None:
        print(f"Using seed: {config.seed}")
    if config.overrides_terrain:
        print(f"Terrain: width={config.width} max_height={config.max_height}")
    if config.print_freq == 0:
        print("Stats output disabled")
    if config.realtime:
        print(f"Real-time pacing at {config.fps:g} fps")
    if config.plot_mode != "none":
        print(f"Plot mode: {config.plot_mode}")


def _print_results(result: dict) -> None:
    rule = "=" * 60
    print(f"\n{rule}\nFINAL RESULTS\n{rule}")
    for key, label in _SUMMARY_FIELDS:
        if key not in result:
            continue
        value = result[key]
        shown = f"{value:.3f}" if isinstance(value, float) else str(value or "-")
        print(f"{label:<18}{shown}")
    print(rule)
    for path in result.get("plot_paths") or [result.get("plot_path")]:
        if path:
            print(f"Plot: {path}")
    if result.get("plot_error"):
        print(f"Plot error: {result['plot_error']}")


def main(argv: list[str] | None = None) -> dict:
    parser = _build_parser()
    config = _parse_args(parser.parse_args(argv))
    if config.fps <= 0:
        parser.error("--fps must be positive")

    _announce_config(config)

    session = LanderSession(seed=config.seed)
    if config.overrides_terrain:
        try:
            session.reset(width=config.width, max_height=config.max_height)
        except ValueError as e:
            parser.error(str(e))

    game = LanderGame(
        create_pilot(config.pilot_name), session=session, plot_mode=config.plot_mode
    )
    result = game.run(
        print_freq=config.print_freq,
        max_steps=config.max_steps,
        frame_dt=config.frame_dt,
        clock=FrameClock() if config.realtime else None,
        realtime=config.realtime,
    )
    _print_results(result)
    return result


if __name__ == "__main__":
    main()
