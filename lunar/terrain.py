"""Procedural terrain generation and column sampling helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from lunar.config import DEFAULT_CONFIG, SimulationConfig
from lunar.maths import clamp
from utils.protocols import RandomSource


@dataclass(frozen=True)
class Terrain:
    """Fixed-resolution height profile centred on x = 0.

    Column ``i`` sits at world x ``column_spacing * (i - width / 2)``.
    ``slope_map[i]`` is the height step from column ``i`` to ``i + 1``.
    """

    height_map: tuple[int, ...]
    slope_map: tuple[int, ...]
    column_spacing: float = DEFAULT_CONFIG.column_spacing

    @classmethod
    def from_heights(
        cls, heights: Sequence[int], column_spacing: float = DEFAULT_CONFIG.column_spacing
    ) -> "Terrain":
        height_map = tuple(int(h) for h in heights)
        slope_map = tuple(b - a for a, b in zip(height_map, height_map[1:]))
        return cls(height_map, slope_map, float(column_spacing))

    @property
    def width(self) -> int:
        return len(self.height_map)

    def column_x(self, index: int) -> float:
        return self.column_spacing * (index - self.width / 2)

    def index_at(self, x: float) -> int:
        """Nearest column index for world x (ties round up)."""
        return math.floor(x / self.column_spacing + self.width / 2 + 0.5)

    def slope_at(self, x: float) -> int | None:
        i = self.index_at(x)
        if 0 <= i < len(self.slope_map):
            return self.slope_map[i]
        return None

    def is_landable(self, x: float, max_slope: float = DEFAULT_CONFIG.max_landing_slope) -> bool:
        slope = self.slope_at(x)
        # Columns without data are never landable.
        return slope is not None and abs(slope) < max_slope

    def height_at(self, x: float) -> float | None:
        """Terrain surface height at world x, interpolated along the polyline."""
        u = x / self.column_spacing + self.width / 2
        if self.width < 2 or u < 0.0 or u > self.width - 1:
            return None
        i = min(int(u), self.width - 2)
        t = u - i
        return self.height_map[i] * (1.0 - t) + self.height_map[i + 1] * t

    def points(self) -> list[tuple[float, float]]:
        return [(self.column_x(i), float(h)) for i, h in enumerate(self.height_map)]

    def flat_runs(self, min_length: int = 3) -> list[tuple[int, int]]:
        """Inclusive (start, end) index runs of equal heights, at least min_length long."""
        runs: list[tuple[int, int]] = []
        start = 0
        for i in range(1, self.width + 1):
            if i < self.width and self.height_map[i] == self.height_map[start]:
                continue
            if i - start >= min_length:
                runs.append((start, i - 1))
            start = i
        return runs

    def landing_zone_centers(self, min_length: int = 3) -> list[float]:
        """World x of the middle of each run's landable stretch.

        A run ``start..end`` has zero slope in ``slope_map[start:end]``; the
        last column's slope points outside the run, so the centre is taken
        over columns ``start..end - 1``.
        """
        return [
            (self.column_x(start) + self.column_x(end - 1)) / 2.0
            for start, end in self.flat_runs(min_length)
        ]


class TerrainGenerator:
    """Parabolic crater-rim profile with Gaussian roughness and one forced flat run."""

    def __init__(self, config: SimulationConfig = DEFAULT_CONFIG):
        self.config = config

    def generate(
        self, width: int, max_height: int, rng: RandomSource
    ) -> Terrain:
        if width < 3:
            raise ValueError(f"Terrain width must be at least 3, got {width}")

        half = width // 2
        columns = np.arange(-half, width - half)
        noise = np.floor(
            (np.asarray(rng.standard_normal(width), dtype=float) - self.config.noise_offset)
            * self.config.noise_scale
        )
        heights = [
            clamp(int(max_height - (i * i) // 2 + n), 0, max_height)
            for i, n in zip(columns.tolist(), noise.tolist())
        ]

        # Guarantee one landable run regardless of the noise.
        landable = int(rng.integers(1, width - 1))
        heights[landable - 1] = heights[landable]
        heights[landable + 1] = heights[landable]

        return Terrain.from_heights(heights, self.config.column_spacing)


def generate_terrain(
    config: SimulationConfig = DEFAULT_CONFIG, rng: RandomSource | None = None
) -> Terrain:
    rng = np.random.default_rng() if rng is None else rng
    return TerrainGenerator(config).generate(config.sim_width, config.max_height, rng)
