"""Ship kinematics and control actions."""

from __future__ import annotations

from lunar.components import Controls
from lunar.config import DEFAULT_CONFIG, SimulationConfig
from lunar.maths import Vector2
from lunar.physics import PhysicsBody
from utils.protocols import RandomSource


class Ship:
    """Rectangular ship: a vector body for position and a scalar one for angle.

    Angles are radians, counter-clockwise, 0 = upright.
    """

    def __init__(
        self,
        body: PhysicsBody[Vector2],
        rotation: PhysicsBody[float],
        size: Vector2,
        config: SimulationConfig = DEFAULT_CONFIG,
    ):
        self.body = body
        self.rotation = rotation
        self.size = Vector2(size)
        self.config = config

    @classmethod
    def at_rest(
        cls,
        position: Vector2,
        *,
        angle: float = 0.0,
        velocity: Vector2 | None = None,
        config: SimulationConfig = DEFAULT_CONFIG,
    ) -> "Ship":
        return cls(
            PhysicsBody.vector(position, velocity),
            PhysicsBody.scalar(angle),
            Vector2(config.ship_size),
            config,
        )

    # Kinematics

    @property
    def position(self) -> Vector2:
        return self.body.position

    @property
    def velocity(self) -> Vector2:
        return self.body.velocity

    @property
    def angle(self) -> float:
        return self.rotation.position

    @property
    def angular_velocity(self) -> float:
        return self.rotation.velocity

    @property
    def speed(self) -> float:
        return self.body.velocity.length()

    # Integration and controls

    def time_step(self, dt: float) -> None:
        # Gravity must be in before the integrator runs so it shares this tick.
        self.body.accelerate(Vector2(self.config.gravity))
        self.body.time_step(dt, self.config.friction)
        self.rotation.time_step(dt, self.config.friction)

    def rotate_left(self, dt: float) -> None:
        self.rotation.acceleration = self.config.rotation_accel * dt

    def rotate_right(self, dt: float) -> None:
        self.rotation.acceleration = -self.config.rotation_accel * dt

    def thrust_up(self, dt: float) -> None:
        thrust = Vector2(0.0, self.config.thrust_accel).rotate_rad(self.angle)
        self.body.accelerate(thrust * dt)

    def apply_controls(self, controls: Controls, dt: float) -> None:
        """Apply held controls; right overrides left when both are held."""
        if controls.left:
            self.rotate_left(dt)
        if controls.right:
            self.rotate_right(dt)
        if controls.thrust:
            self.thrust_up(dt)

    def __repr__(self) -> str:
        return (
            f"Ship(pos=({self.position.x:.2f}, {self.position.y:.2f}), "
            f"vel=({self.velocity.x:.3f}, {self.velocity.y:.3f}), angle={self.angle:.3f})"
        )


def spawn_ship(config: SimulationConfig, rng: RandomSource) -> Ship:
    """Create a fresh ship high above the terrain with a random drift."""
    spread = config.spawn_velocity_spread
    x = float(rng.uniform(-config.spawn_spread_x, config.spawn_spread_x))
    y = float(config.max_height) * 2.0
    vx, vy = (float(v) for v in rng.uniform(-spread, spread, size=2))
    return Ship(
        PhysicsBody.vector(Vector2(x, y), Vector2(vx, vy)),
        PhysicsBody.scalar(config.spawn_angle),
        Vector2(config.ship_size),
        config,
    )
