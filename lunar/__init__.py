"""Lunar lander physics, terrain and landing engine."""

from lunar.components import NO_CONTROLS, Controls
from lunar.config import DEFAULT_CONFIG, SimulationConfig
from lunar.landing import FlightState, LandingReport
from lunar.session import LanderSession

__all__ = [
    "Controls",
    "NO_CONTROLS",
    "DEFAULT_CONFIG",
    "SimulationConfig",
    "FlightState",
    "LandingReport",
    "LanderSession",
]
