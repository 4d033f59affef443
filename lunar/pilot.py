"""Pilot interface for headless ship control."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from lunar.components import Controls
from lunar.landing import FlightState
from lunar.session import LanderSession


@dataclass(frozen=True)
class PilotReadings:
    """Instrument snapshot handed to a pilot each tick."""

    # Ship position (world units, y-up)
    x: float
    y: float

    # Ship kinematics
    vx: float
    vy: float
    angle: float  # radians, CCW, 0 = upright
    angular_velocity: float

    # Clearance between the ship centre and the ground directly below
    altitude: float
    half_height: float

    state: FlightState

    # World x of the nearest guaranteed-flat landing zone, if any
    target_x: float | None = None


def read_instruments(session: LanderSession) -> PilotReadings:
    ship = session.ship
    terrain = session.terrain
    x, y = ship.position.x, ship.position.y

    ground = terrain.height_at(x)
    altitude = y - (0.0 if ground is None else ground)

    zones = terrain.landing_zone_centers()
    target_x = min(zones, key=lambda zx: abs(zx - x)) if zones else None

    return PilotReadings(
        x=x,
        y=y,
        vx=ship.velocity.x,
        vy=ship.velocity.y,
        angle=ship.angle,
        angular_velocity=ship.angular_velocity,
        altitude=altitude,
        half_height=ship.size.y / 2.0,
        state=session.state,
        target_x=target_x,
    )


class Pilot(ABC):
    """Base class for autonomous pilots."""

    def __init__(self):
        self.status: str = ""

    @abstractmethod
    def update(self, dt: float, readings: PilotReadings) -> Controls:
        """Return the controls to hold for this tick."""
        raise NotImplementedError

    def get_headless_stats(self) -> str:
        return f"pilot:{self.status}" if self.status else ""
