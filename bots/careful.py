"""Careful pilot: attitude hold plus descent-rate throttling over a landing zone."""

from __future__ import annotations

from dataclasses import dataclass

from lunar.components import NO_CONTROLS, Controls
from lunar.landing import FlightState
from lunar.maths import clamp, wrap_angle
from lunar.pilot import Pilot, PilotReadings


@dataclass(frozen=True)
class CarefulConfig:
    # Horizontal guidance
    vx_gain: float = 0.003
    vx_cap: float = 0.15
    tilt_gain: float = 4.0
    max_tilt: float = 0.35
    upright_below: float = 25.0  # clearance under which the ship flies level
    align_band: float = 2.0  # a 3-column zone is landable within about 3 of its centre
    drift_limit: float = 0.02

    # Attitude
    omega_gain: float = 0.02
    omega_cap: float = 0.01
    omega_band: float = 0.0005
    thrust_tilt_limit: float = 0.6

    # Vertical
    descent_gain: float = 0.002
    descent_min: float = 0.02
    descent_max: float = 0.4
    hold_below: float = 40.0  # hover at this clearance until aligned


class CarefulPilot(Pilot):
    """Flies to the nearest flat run, levels out, then sinks slowly onto it."""

    def __init__(self, config: CarefulConfig | None = None):
        super().__init__()
        self.config = CarefulConfig() if config is None else config

    def update(self, dt: float, readings: PilotReadings) -> Controls:
        if readings.state is not FlightState.FLYING:
            self.status = readings.state.value.upper()
            return NO_CONTROLS

        cfg = self.config
        clearance = readings.altitude - readings.half_height
        offset = 0.0 if readings.target_x is None else readings.target_x - readings.x
        aligned = abs(offset) <= cfg.align_band and abs(readings.vx) <= cfg.drift_limit

        desired_vx = clamp(offset * cfg.vx_gain, -cfg.vx_cap, cfg.vx_cap)
        # Thrust rotated by a negative angle pushes towards +x.
        target_angle = clamp(
            -(desired_vx - readings.vx) * cfg.tilt_gain, -cfg.max_tilt, cfg.max_tilt
        )
        if aligned and clearance < cfg.upright_below:
            target_angle = 0.0

        error = wrap_angle(target_angle - readings.angle)
        desired_omega = clamp(error * cfg.omega_gain, -cfg.omega_cap, cfg.omega_cap)
        left = readings.angular_velocity < desired_omega - cfg.omega_band
        right = readings.angular_velocity > desired_omega + cfg.omega_band

        if not aligned and clearance < cfg.hold_below:
            desired_vy = 0.0
            self.status = "ALIGN"
        else:
            desired_vy = -clamp(
                clearance * cfg.descent_gain, cfg.descent_min, cfg.descent_max
            )
            self.status = "TOUCHDOWN" if clearance < cfg.upright_below else "DESCEND"

        upright_enough = abs(wrap_angle(readings.angle)) < cfg.thrust_tilt_limit
        thrust = readings.vy < desired_vy and upright_enough

        return Controls(left=left, right=right, thrust=thrust)


def create_pilot() -> Pilot:
    return CarefulPilot()


__all__ = ["CarefulConfig", "CarefulPilot", "create_pilot"]
