"""Landing predicates and the flying/landed/crashed state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from lunar.config import DEFAULT_CONFIG, SimulationConfig
from lunar.maths import Range1D, wrap_angle
from lunar.ship import Ship
from lunar.terrain import Terrain


class FlightState(str, Enum):
    FLYING = "flying"
    LANDED = "landed"
    CRASHED = "crashed"

    @property
    def is_terminal(self) -> bool:
        return self is not FlightState.FLYING


@dataclass(frozen=True)
class LandingReport:
    """Outcome of the three landing checks at the moment of contact."""

    velocity_ok: bool
    rotation_ok: bool
    terrain_ok: bool
    speed: float
    angle: float
    footprint: Range1D

    @property
    def landed(self) -> bool:
        return self.velocity_ok and self.rotation_ok and self.terrain_ok

    @property
    def failures(self) -> tuple[str, ...]:
        checks = (
            ("velocity", self.velocity_ok),
            ("rotation", self.rotation_ok),
            ("terrain", self.terrain_ok),
        )
        return tuple(name for name, ok in checks if not ok)

    @property
    def outcome(self) -> FlightState:
        return FlightState.LANDED if self.landed else FlightState.CRASHED

    def describe(self) -> str:
        if self.landed:
            return "Landed!"
        return (
            f"Crashed because velocity_ok: {self.velocity_ok}, "
            f"rotation_ok: {self.rotation_ok}, terrain_ok: {self.terrain_ok}"
        )


def ship_footprint(ship: Ship) -> Range1D:
    return Range1D.from_center(ship.position.x, ship.size.x / 2.0)


def is_velocity_ok(ship: Ship, config: SimulationConfig = DEFAULT_CONFIG) -> bool:
    return ship.speed < config.max_landing_speed


def is_rotation_ok(ship: Ship, config: SimulationConfig = DEFAULT_CONFIG) -> bool:
    # Wrapped to [-pi, pi], so 2*pi - 0.05 is upright; a sign-keeping
    # modulo would reject it.
    return abs(wrap_angle(ship.angle)) <= config.max_landing_angle


def is_terrain_ok(
    ship: Ship, terrain: Terrain, config: SimulationConfig = DEFAULT_CONFIG
) -> bool:
    return all(
        terrain.is_landable(float(x), config.max_landing_slope)
        for x in ship_footprint(ship).integer_steps()
    )


def evaluate_landing(
    ship: Ship, terrain: Terrain, config: SimulationConfig = DEFAULT_CONFIG
) -> LandingReport:
    return LandingReport(
        velocity_ok=is_velocity_ok(ship, config),
        rotation_ok=is_rotation_ok(ship, config),
        terrain_ok=is_terrain_ok(ship, terrain, config),
        speed=ship.speed,
        angle=ship.angle,
        footprint=ship_footprint(ship),
    )


class FlightStateMachine:
    """One-shot transition out of FLYING on the first terrain contact.

    LANDED and CRASHED are absorbing: further contacts are ignored until
    ``reset``.
    """

    def __init__(self, config: SimulationConfig = DEFAULT_CONFIG):
        self.config = config
        self.state = FlightState.FLYING
        self.report: LandingReport | None = None

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal

    def on_contact(self, ship: Ship, terrain: Terrain) -> FlightState:
        if self.state is not FlightState.FLYING:
            return self.state
        self.report = evaluate_landing(ship, terrain, self.config)
        self.state = self.report.outcome
        return self.state

    def reset(self) -> None:
        self.state = FlightState.FLYING
        self.report = None
