"""Simulation session: owns the ship, the terrain and the flight state."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from lunar.collision import Contact, find_contact
from lunar.components import NO_CONTROLS, Controls
from lunar.config import DEFAULT_CONFIG, SimulationConfig
from lunar.landing import FlightState, FlightStateMachine, LandingReport
from lunar.maths import Vector2
from lunar.ship import Ship, spawn_ship
from lunar.terrain import Terrain, TerrainGenerator
from utils.protocols import RandomSource


@dataclass(frozen=True)
class SessionSnapshot:
    """Read model of the session for a UI or a pilot."""

    x: float
    y: float
    vx: float
    vy: float
    angle: float
    angular_velocity: float
    state: FlightState
    report: LandingReport | None
    ticks: int
    elapsed: float

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)


class LanderSession:
    """Single-writer simulation of one ship over one terrain.

    Each ``step`` first checks contact using the kinematics left by the
    previous tick, then, if the ship is still flying, applies controls and
    integrates. ``reset`` replaces ship, terrain and state together.
    """

    def __init__(
        self,
        config: SimulationConfig | None = None,
        rng: RandomSource | None = None,
        seed: int | None = None,
    ):
        self.config = DEFAULT_CONFIG if config is None else config
        self.rng = np.random.default_rng(seed) if rng is None else rng
        self.generator = TerrainGenerator(self.config)
        self.flight = FlightStateMachine(self.config)

        self._ship: Ship
        self._terrain: Terrain
        self.contact: Contact | None = None
        self.ticks = 0
        self.elapsed = 0.0
        self.skipped_steps = 0
        self.reset()

    # Queries

    @property
    def ship(self) -> Ship:
        return self._ship

    @property
    def terrain(self) -> Terrain:
        return self._terrain

    @property
    def state(self) -> FlightState:
        return self.flight.state

    @property
    def report(self) -> LandingReport | None:
        return self.flight.report

    def snapshot(self) -> SessionSnapshot:
        ship = self._ship
        return SessionSnapshot(
            x=ship.position.x,
            y=ship.position.y,
            vx=ship.velocity.x,
            vy=ship.velocity.y,
            angle=ship.angle,
            angular_velocity=ship.angular_velocity,
            state=self.state,
            report=self.report,
            ticks=self.ticks,
            elapsed=self.elapsed,
        )

    # Commands

    def reset(
        self, width: int | None = None, max_height: int | None = None
    ) -> tuple[Ship, Terrain]:
        """Start over with a new ship, new terrain and state FLYING."""
        if width is not None or max_height is not None:
            config = self.config.with_overrides(
                sim_width=self.config.sim_width if width is None else int(width),
                max_height=self.config.max_height if max_height is None else int(max_height),
            )
            self.config = config
            self.generator = TerrainGenerator(config)
            self.flight.config = config

        terrain = self.generator.generate(
            self.config.sim_width, self.config.max_height, self.rng
        )
        ship = spawn_ship(self.config, self.rng)

        self._terrain = terrain
        self._ship = ship
        self.flight.reset()
        self.contact = None
        self.ticks = 0
        self.elapsed = 0.0
        self.skipped_steps = 0
        return ship, terrain

    def place_ship(
        self,
        position: Vector2,
        *,
        velocity: Vector2 | None = None,
        angle: float = 0.0,
    ) -> Ship:
        """Replace the ship with one at a chosen pose, keeping the terrain."""
        self._ship = Ship.at_rest(
            position, angle=angle, velocity=velocity, config=self.config
        )
        self.flight.reset()
        self.contact = None
        return self._ship

    def load_terrain(self, terrain: Terrain) -> None:
        """Swap in a prepared terrain (scenario staging), back to FLYING."""
        self._terrain = terrain
        self.flight.reset()
        self.contact = None

    def check_contact(self) -> FlightState:
        """Collision test and, on contact while flying, landing evaluation."""
        if self.flight.is_terminal:
            return self.state
        contact = find_contact(self._ship, self._terrain, self.config.far_away)
        if contact is not None:
            self.contact = contact
            self.flight.on_contact(self._ship, self._terrain)
        return self.state

    def step(self, dt: float, controls: Controls = NO_CONTROLS) -> FlightState:
        self.ticks += 1
        state = self.check_contact()
        if state is not FlightState.FLYING:
            return state

        if not self._is_sane_time_step(dt):
            self.skipped_steps += 1
            return state

        self._ship.apply_controls(controls, dt)
        self._ship.time_step(dt)
        self.elapsed += dt
        return state

    def _is_sane_time_step(self, dt: float) -> bool:
        # NaN fails both comparisons.
        return 0.0 <= dt <= self.config.max_time_step
