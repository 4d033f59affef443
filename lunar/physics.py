"""Explicit integrator shared by vector and scalar kinematic state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from .maths import Vector2


class Linear(Protocol):
    """Anything that adds to itself and scales by a float (float, Vector2)."""

    def __add__(self, other, /): ...

    def __mul__(self, scalar: float, /): ...


T = TypeVar("T", bound=Linear)


@dataclass
class PhysicsBody(Generic[T]):
    """Position/velocity/acceleration triple integrated with friction.

    Acceleration is cleared after every step, so owners must re-apply their
    forces each tick. Values are rebound, never mutated in place, which keeps
    vectors handed out by accessors stable.
    """

    position: T
    velocity: T
    acceleration: T

    @classmethod
    def scalar(
        cls, position: float = 0.0, velocity: float = 0.0, acceleration: float = 0.0
    ) -> "PhysicsBody[float]":
        return cls(float(position), float(velocity), float(acceleration))

    @classmethod
    def vector(
        cls,
        position: Vector2 | None = None,
        velocity: Vector2 | None = None,
        acceleration: Vector2 | None = None,
    ) -> "PhysicsBody[Vector2]":
        return cls(
            Vector2(position) if position is not None else Vector2(0.0, 0.0),
            Vector2(velocity) if velocity is not None else Vector2(0.0, 0.0),
            Vector2(acceleration) if acceleration is not None else Vector2(0.0, 0.0),
        )

    def accelerate(self, delta: T) -> None:
        self.acceleration = self.acceleration + delta

    def time_step(self, dt: float, friction: float) -> None:
        """Advance one tick of ``dt`` time units.

        velocity += acceleration; position += velocity * dt;
        velocity *= friction ** dt; acceleration = 0.
        """
        self.velocity = self.velocity + self.acceleration
        self.position = self.position + self.velocity * dt
        self.velocity = self.velocity * (friction**dt)
        self.acceleration = self.acceleration * 0.0

