"""Centralized configuration constants and the immutable simulation config."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import math

# Terrain
SIM_WIDTH = 50
MAX_HEIGHT = 250
COLUMN_SPACING = 8.0
NOISE_SCALE = 10.0
NOISE_OFFSET = 0.5

# Physics (time unit is 10 ms, see TIME_UNIT_NS)
GRAVITY = (0.0, -0.001)
FRICTION = 0.999
ROTATION_ACCEL = 0.0001
THRUST_ACCEL = 0.002
# Longer frames (a stall of a second or more) are skipped, not integrated
MAX_TIME_STEP = 100.0
TIME_UNIT_NS = 10_000_000

# Collision: half-length of the ground baseline under the whole map
FAR_AWAY = 100000000.0

# Landing tolerances
MAX_LANDING_SPEED = 0.05
MAX_LANDING_ANGLE = 0.1
MAX_LANDING_SLOPE = 2

# Ship spawn
SHIP_SIZE = (10.0, 10.0)
SPAWN_SPREAD_X = 50.0
SPAWN_VELOCITY_SPREAD = 0.5
SPAWN_ANGLE = 0.5


@dataclass(frozen=True)
class SimulationConfig:
    """Tuning values shared by every simulation component.

    Instances are immutable; build a variant with ``with_overrides``.
    """

    sim_width: int = SIM_WIDTH
    max_height: int = MAX_HEIGHT
    column_spacing: float = COLUMN_SPACING
    noise_scale: float = NOISE_SCALE
    noise_offset: float = NOISE_OFFSET

    gravity: tuple[float, float] = GRAVITY
    friction: float = FRICTION
    rotation_accel: float = ROTATION_ACCEL
    thrust_accel: float = THRUST_ACCEL
    max_time_step: float = MAX_TIME_STEP
    time_unit_ns: int = TIME_UNIT_NS

    far_away: float = FAR_AWAY

    max_landing_speed: float = MAX_LANDING_SPEED
    max_landing_angle: float = MAX_LANDING_ANGLE
    max_landing_slope: float = MAX_LANDING_SLOPE

    ship_size: tuple[float, float] = field(default=SHIP_SIZE)
    spawn_spread_x: float = SPAWN_SPREAD_X
    spawn_velocity_spread: float = SPAWN_VELOCITY_SPREAD
    spawn_angle: float = SPAWN_ANGLE

    def __post_init__(self) -> None:
        if self.sim_width < 3:
            raise ValueError(
                f"sim_width must be at least 3 to fit a landing zone, got {self.sim_width}"
            )
        if self.max_height < 0:
            raise ValueError(f"max_height must be non-negative, got {self.max_height}")
        if not 0.0 < self.friction <= 1.0:
            raise ValueError(f"friction must be in (0, 1], got {self.friction}")
        if self.column_spacing <= 0.0:
            raise ValueError(
                f"column_spacing must be positive, got {self.column_spacing}"
            )
        if not self.max_time_step > 0.0 or math.isinf(self.max_time_step):
            raise ValueError(
                f"max_time_step must be a positive finite bound, got {self.max_time_step}"
            )
        if self.time_unit_ns <= 0:
            raise ValueError(f"time_unit_ns must be positive, got {self.time_unit_ns}")

    def with_overrides(self, **overrides) -> "SimulationConfig":
        """Return a copy with the given fields replaced (validated again)."""
        return replace(self, **overrides)


DEFAULT_CONFIG = SimulationConfig()
