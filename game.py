"""Game orchestration: drives a session with a pilot and runs the loop."""

from __future__ import annotations

import time
from dataclasses import dataclass

from lunar.components import Controls
from lunar.landing import FlightState
from lunar.pilot import Pilot, read_instruments
from lunar.session import LanderSession
from utils.plot import PlotMode, Plotter
from utils.protocols import ClockProtocol


# Centralized loop defaults
TARGET_FPS = 60
# One simulation time unit is 10 ms
UNITS_PER_SECOND = 100.0
DEFAULT_FRAME_DT = UNITS_PER_SECOND / TARGET_FPS


@dataclass
class RunCounters:
    ticks: int = 0
    thrust_ticks: int = 0
    elapsed: float = 0.0

    def advance(self, dt: float, controls: Controls) -> None:
        self.ticks += 1
        self.elapsed += dt
        if controls.thrust:
            self.thrust_ticks += 1


def _build_headless_stats(session: LanderSession, elapsed: float) -> str:
    snap = session.snapshot()
    return (
        f"t:{elapsed / UNITS_PER_SECOND:6.2f} "
        f"pos:({snap.x:7.2f},{snap.y:7.2f}) "
        f"vel:({snap.vx:6.3f},{snap.vy:6.3f}) "
        f"rot:{snap.angle:6.3f} "
        f"state:{snap.state.value}"
    )


class LanderGame:
    """Headless lander run: one session, one pilot, a fixed or real-time clock."""

    def __init__(
        self,
        pilot: Pilot,
        session: LanderSession | None = None,
        seed: int | None = None,
        plot_mode: PlotMode = "none",
        plot_dir: str = "outputs",
    ):
        if pilot is None:
            raise ValueError("Headless mode requires a pilot")
        self.pilot = pilot
        self.session = LanderSession(seed=seed) if session is None else session
        self.plotter = Plotter(
            self.session,
            enabled=plot_mode != "none",
            mode=plot_mode,
            out_dir=plot_dir,
        )
        self.running = True

    def run(
        self,
        print_freq: int = 60,
        max_steps: int | None = None,
        frame_dt: float = DEFAULT_FRAME_DT,
        clock: ClockProtocol | None = None,
        realtime: bool = False,
    ) -> dict:
        """Step until the ship lands, crashes or the step limit is hit.

        With ``clock`` each tick uses the measured elapsed time instead of
        ``frame_dt``; ``realtime`` sleeps between ticks to pace at the frame
        rate.
        """
        session = self.session
        counters = RunCounters()
        prev_state = session.state

        self.plotter.seed_initial_sample()
        if clock is not None:
            clock.reset()

        while self.running:
            if max_steps is not None and counters.ticks >= max_steps:
                break

            if realtime:
                time.sleep(frame_dt / UNITS_PER_SECOND)
            dt = clock.tick() if clock is not None else frame_dt

            readings = read_instruments(session)
            controls = self.pilot.update(dt, readings)
            state = session.step(dt, controls)
            counters.advance(dt, controls)
            self.plotter.update(controls)

            if print_freq > 0 and counters.ticks % print_freq == 0:
                parts = [_build_headless_stats(session, counters.elapsed)]
                pilot_str = self.pilot.get_headless_stats()
                if pilot_str:
                    parts.append(pilot_str)
                print(" | ".join(parts))

            if state != prev_state:
                if session.report is not None:
                    print(session.report.describe())
                prev_state = state

            if state is not FlightState.FLYING:
                break

        return self._result(counters)

    def _result(self, counters: RunCounters) -> dict:
        session = self.session
        snap = session.snapshot()
        result = {
            "state": snap.state.value,
            "ticks": counters.ticks,
            "time": counters.elapsed / UNITS_PER_SECOND,
            "thrust_ticks": counters.thrust_ticks,
            "skipped_steps": session.skipped_steps,
            "x": snap.x,
            "y": snap.y,
            "speed": snap.speed,
            "angle": snap.angle,
            "failures": ",".join(snap.report.failures) if snap.report else "",
        }
        plot_extras = self.plotter.finalize()
        if plot_extras:
            result.update(plot_extras)
        return result
