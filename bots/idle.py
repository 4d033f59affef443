"""Idle pilot: never touches the controls."""

from __future__ import annotations

from lunar.components import NO_CONTROLS, Controls
from lunar.landing import FlightState
from lunar.pilot import Pilot, PilotReadings


class IdlePilot(Pilot):
    def update(self, dt: float, readings: PilotReadings) -> Controls:
        if readings.state is FlightState.FLYING:
            self.status = "COAST"
        else:
            self.status = readings.state.value.upper()
        return NO_CONTROLS


def create_pilot() -> Pilot:
    return IdlePilot()


__all__ = ["IdlePilot", "create_pilot"]
