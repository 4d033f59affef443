"""Trajectory plots for headless runs.

The terrain is drawn as its column polyline with every flat run shaded, the
flight path is a line collection coloured by speed or by thrust, and the last
sample is marked with the run's outcome. Rendering uses the Agg backend so no
display is needed.
"""

from __future__ import annotations

import datetime as _dt
from pathlib import Path
from typing import Literal, NamedTuple, Sequence

from lunar.components import Controls
from lunar.landing import FlightState
from lunar.session import LanderSession
from lunar.terrain import Terrain

PlotMode = Literal["none", "speed", "thrust", "all"]

_OUTCOME_MARKERS = {
    FlightState.FLYING: ("#1f77b4", "o"),
    FlightState.LANDED: ("#2ca02c", "v"),
    FlightState.CRASHED: ("#d62728", "X"),
}


class TrajectorySample(NamedTuple):
    x: float
    y: float
    speed: float
    thrust: bool


def _colour_values(samples: Sequence[TrajectorySample], mode: str):
    """Per-segment values, colour map, value range and colour bar label."""
    import numpy as np

    if mode == "thrust":
        held = np.array([1.0 if s.thrust else 0.0 for s in samples])
        # A segment counts as thrusting when the burn was held at its end.
        return held[1:], "Blues", (0.0, 1.0), "thrust held"

    speeds = np.array([s.speed for s in samples])
    values = (speeds[:-1] + speeds[1:]) / 2.0
    top = float(values.max()) if values.size else 0.0
    return values, "RdYlGn_r", (0.0, top if top > 0 else 1.0), "speed (units / tick)"


def save_trajectory_plot(
    terrain: Terrain,
    samples: Sequence[TrajectorySample],
    mode: Literal["speed", "thrust"] = "speed",
    out_path: str | Path = Path("outputs") / "trajectory.png",
    outcome: FlightState = FlightState.FLYING,
) -> str:
    """Render one PNG and return its path.

    At least two samples are needed for a line; a single sample is drawn as a
    zero-length segment.
    """
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    import numpy as np
    from matplotlib.collections import LineCollection

    if not samples:
        raise ValueError("no trajectory samples to plot")
    if len(samples) == 1:
        samples = [samples[0], samples[0]]

    columns = np.array(terrain.points())
    path = np.array([(s.x, s.y) for s in samples])

    fig, ax = plt.subplots(figsize=(10, 5), dpi=150)
    ax.plot(columns[:, 0], columns[:, 1], color="#555555", linewidth=1.0, label="terrain")
    for n, (start, end) in enumerate(terrain.flat_runs()):
        ax.axvspan(
            terrain.column_x(start),
            terrain.column_x(end),
            color="#2ca02c",
            alpha=0.15,
            label="flat run" if n == 0 else None,
        )
    ax.axhline(0.0, color="#999999", linewidth=0.5, linestyle="--")

    values, cmap, (low, high), label = _colour_values(samples, mode)
    line = LineCollection(
        np.stack([path[:-1], path[1:]], axis=1),
        cmap=cmap,
        norm=plt.Normalize(vmin=low, vmax=high),
        linewidths=2.0,
    )
    line.set_array(values)
    ax.add_collection(line)
    fig.colorbar(line, ax=ax, pad=0.01).set_label(label)

    colour, marker = _OUTCOME_MARKERS[outcome]
    ax.scatter(
        [path[-1, 0]], [path[-1, 1]], color=colour, marker=marker, s=60, zorder=3,
        label=outcome.value,
    )

    xs = np.concatenate([columns[:, 0], path[:, 0]])
    ys = np.concatenate([columns[:, 1], path[:, 1], [0.0]])
    pad_x = 0.05 * max(1.0, float(xs.max() - xs.min()))
    pad_y = 0.05 * max(1.0, float(ys.max() - ys.min()))
    ax.set_xlim(xs.min() - pad_x, xs.max() + pad_x)
    ax.set_ylim(ys.min() - pad_y, ys.max() + pad_y)

    ax.set_title(f"Lander trajectory, {mode} ({outcome.value})")
    ax.set_xlabel("x")
    ax.set_ylabel("altitude")
    ax.grid(True, linestyle=":", alpha=0.3)
    ax.legend(loc="upper right")
    fig.tight_layout()

    target = Path(out_path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(target)
    plt.close(fig)
    return str(target)


class Plotter:
    """Records the ship's path during a run and renders it at the end.

    Disabled plotters record nothing and ``finalize`` returns ``{}``.
    """

    def __init__(
        self,
        session: LanderSession,
        *,
        enabled: bool = False,
        mode: PlotMode = "none",
        sample_every: int = 1,
        out_dir: str | Path = "outputs",
    ) -> None:
        self.session = session
        self.enabled = enabled and mode != "none"
        self.mode: PlotMode = mode
        self.sample_every = max(1, int(sample_every))
        self.out_dir = Path(out_dir)
        self._samples: list[TrajectorySample] = []
        self._frames = 0

    def seed_initial_sample(self) -> None:
        self._samples = []
        self._frames = 0
        if self.enabled:
            self._record(thrust=False)

    def update(self, controls: Controls) -> None:
        if not self.enabled:
            return
        self._frames += 1
        # The final sample of a finished run is always kept.
        if self._frames % self.sample_every == 0 or self.session.state.is_terminal:
            self._record(thrust=controls.thrust)

    def _record(self, *, thrust: bool) -> None:
        ship = self.session.ship
        self._samples.append(
            TrajectorySample(ship.position.x, ship.position.y, ship.speed, thrust)
        )

    def get_samples(self) -> list[TrajectorySample]:
        return list(self._samples)

    def finalize(self) -> dict:
        """Render the recorded path; the dict is merged into the run result.

        One mode gives ``plot_path``, ``"all"`` gives ``plot_paths`` and a
        failed render gives ``plot_error``.
        """
        if not self.enabled:
            return {}
        stamp = _dt.datetime.now().strftime("%Y%m%d_%H%M%S")
        modes = ("speed", "thrust") if self.mode == "all" else (self.mode,)
        try:
            paths = [
                save_trajectory_plot(
                    self.session.terrain,
                    self._samples,
                    mode=mode,
                    out_path=self.out_dir / f"trajectory_{stamp}_{mode}.png",
                    outcome=self.session.state,
                )
                for mode in modes
            ]
        except (OSError, ValueError) as e:
            return {"plot_error": str(e)}
        if len(paths) == 1:
            return {"plot_path": paths[0]}
        return {"plot_paths": paths}
