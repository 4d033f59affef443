from __future__ import annotations

import pytest

from bots import create_pilot, list_available_pilots
from bots.careful import CarefulPilot
from bots.idle import IdlePilot
from lunar.components import NO_CONTROLS
from lunar.landing import FlightState
from lunar.maths import Vector2
from lunar.pilot import PilotReadings, read_instruments
from lunar.session import LanderSession
from lunar.terrain import Terrain


def test_pilot_registry_lists_bundled_pilots() -> None:
    assert list_available_pilots() == ["careful", "idle"]
    assert create_pilot("careful").__class__.__name__ == "CarefulPilot"
    # Names are trimmed and case-insensitive.
    assert type(create_pilot(" Idle ")) is IdlePilot


@pytest.mark.parametrize("name", ["nope", "", "_private", ".careful"])
def test_unknown_or_invalid_pilot_names_raise(name: str) -> None:
    with pytest.raises(ValueError):
        create_pilot(name)


def _readings(**overrides) -> PilotReadings:
    values = dict(
        x=0.0,
        y=300.0,
        vx=0.0,
        vy=0.0,
        angle=0.0,
        angular_velocity=0.0,
        altitude=200.0,
        half_height=5.0,
        state=FlightState.FLYING,
        target_x=0.0,
    )
    values.update(overrides)
    return PilotReadings(**values)


def test_read_instruments_reports_altitude_and_nearest_zone() -> None:
    heights = [3 * i for i in range(50)]
    heights[19] = heights[20] = heights[21] = 60
    session = LanderSession(seed=4)
    session.load_terrain(Terrain.from_heights(heights))
    session.place_ship(Vector2(-42.0, 100.0), velocity=Vector2(0.1, -0.2))

    readings = read_instruments(session)

    assert readings.altitude == pytest.approx(40.0)
    assert readings.target_x == pytest.approx(-44.0)
    assert readings.vx == pytest.approx(0.1)
    assert readings.vy == pytest.approx(-0.2)
    assert readings.half_height == pytest.approx(5.0)
    assert readings.state is FlightState.FLYING


def test_read_instruments_uses_baseline_off_the_map() -> None:
    session = LanderSession(seed=4)
    session.place_ship(Vector2(5000.0, 80.0))
    assert read_instruments(session).altitude == pytest.approx(80.0)


def test_idle_pilot_never_touches_controls() -> None:
    pilot = IdlePilot()
    assert pilot.update(1.0, _readings(vy=-5.0)) is NO_CONTROLS
    assert pilot.get_headless_stats() == "pilot:COAST"

    pilot.update(1.0, _readings(state=FlightState.CRASHED))
    assert pilot.status == "CRASHED"


def test_careful_pilot_brakes_a_fast_descent() -> None:
    controls = CarefulPilot().update(1.0, _readings(vy=-1.0))
    assert controls.thrust
    assert not controls.left
    assert not controls.right


def test_careful_pilot_coasts_when_descent_is_slow_enough() -> None:
    controls = CarefulPilot().update(1.0, _readings(vy=-0.1))
    assert not controls.thrust


def test_careful_pilot_levels_a_tilted_ship() -> None:
    tilted_left = CarefulPilot().update(1.0, _readings(angle=0.3))
    assert tilted_left.right and not tilted_left.left

    tilted_right = CarefulPilot().update(1.0, _readings(angle=-0.3))
    assert tilted_right.left and not tilted_right.right


def test_careful_pilot_holds_altitude_until_aligned() -> None:
    pilot = CarefulPilot()
    controls = pilot.update(1.0, _readings(target_x=100.0, altitude=30.0, vy=-0.1))

    assert controls.thrust
    assert pilot.status == "ALIGN"


def test_careful_pilot_does_nothing_after_touchdown() -> None:
    pilot = CarefulPilot()
    assert pilot.update(1.0, _readings(state=FlightState.LANDED, vy=-1.0)) is NO_CONTROLS
    assert pilot.status == "LANDED"


def test_careful_pilot_waits_for_drift_to_settle_before_touchdown() -> None:
    pilot = CarefulPilot()
    pilot.update(1.0, _readings(target_x=1.0, vx=0.05, altitude=30.0, vy=-0.1))
    assert pilot.status == "ALIGN"

    pilot.update(1.0, _readings(target_x=1.0, vx=0.0, altitude=20.0, vy=-0.01))
    assert pilot.status == "TOUCHDOWN"
