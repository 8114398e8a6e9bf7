"""Shared test fixtures."""

import numpy as np
import pytest

from fleet_telemetry.config.schema import GeoBounds, SimulationProfile
from fleet_telemetry.fleet.fleet_factory import create_fleet
from fleet_telemetry.fleet.vehicle import Attributes, Vehicle
from fleet_telemetry.simulation.path_generator import generate_path


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def bounds():
    return GeoBounds.default()


@pytest.fixture
def base_profile():
    return SimulationProfile.base_default()


@pytest.fixture
def tuned_profile():
    return SimulationProfile.tuned_default()


@pytest.fixture
def path(bounds, rng):
    return generate_path(bounds, rng, steps=20)


@pytest.fixture
def healthy_attributes():
    return Attributes(
        speed=50.0,
        battery_level=80.0,
        temperature=30.0,
        tire_pressure=32.0,
        motor_efficiency=90.0,
        regenerative_braking=True,
        oil_level=80.0,
        brake_fluid=80.0,
        coolant_level=80.0,
        fuel_level=50.0,
        engine_load=60.0,
        gps_accuracy=7.0,
    )


@pytest.fixture
def vehicle(healthy_attributes, path):
    return Vehicle(
        vehicle_id=1,
        name="Vehicle #1",
        attributes=healthy_attributes,
        position=path[0],
        path_index=0,
        path_direction=1,
    )


@pytest.fixture
def fleet(base_profile):
    return create_fleet(base_profile, np.random.default_rng(7), size=10)
