"""Invariant checks for vehicle records: attribute bounds, path position, fault status."""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from fleet_telemetry.config.constants import ATTRIBUTE_NAMES
from fleet_telemetry.config.schema import LatLng, SimulationProfile
from fleet_telemetry.faults.issue_state import Faulted, Healthy
from fleet_telemetry.fleet.fleet_factory import Fleet
from fleet_telemetry.fleet.vehicle import Vehicle, status_for_speed

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    vehicle_id: int
    check: str
    passed: bool
    message: str = ""


@dataclass
class ValidationReport:
    results: List[ValidationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def n_passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def n_failed(self) -> int:
        return sum(1 for r in self.results if not r.passed)

    @property
    def failures(self) -> List[ValidationResult]:
        return [r for r in self.results if not r.passed]

    def extend(self, other: "ValidationReport") -> None:
        self.results.extend(other.results)

    def summary(self) -> str:
        lines = [f"Validation: {self.n_passed} passed, {self.n_failed} failed"]
        for r in self.failures:
            lines.append(f"  [FAIL] vehicle {r.vehicle_id}/{r.check}: {r.message}")
        return "\n".join(lines)


def check_vehicle(
    vehicle: Vehicle,
    path: Sequence[LatLng],
    profile: SimulationProfile,
) -> ValidationReport:
    report = ValidationReport()

    def record(check: str, passed: bool, message: str = "") -> None:
        report.results.append(ValidationResult(
            vehicle_id=vehicle.vehicle_id,
            check=check,
            passed=passed,
            message="" if passed else message,
        ))

    for name in ATTRIBUTE_NAMES:
        dyn = profile.attributes[name]
        value = getattr(vehicle.attributes, name)
        record(
            f"range/{name}",
            dyn.lower <= value <= dyn.upper,
            f"{value:.3f} outside [{dyn.lower}, {dyn.upper}]",
        )

    n = len(path)
    index_ok = 0 <= vehicle.path_index < n
    record("path/index", index_ok, f"{vehicle.path_index} outside [0, {n - 1}]")
    record(
        "path/position",
        index_ok and vehicle.position == path[vehicle.path_index],
        f"position {vehicle.position} != path[{vehicle.path_index}]",
    )
    record(
        "path/direction",
        vehicle.path_direction in (1, -1),
        f"direction {vehicle.path_direction} not +/-1",
    )

    if isinstance(vehicle.issue, Healthy):
        record(
            "issue/healthy",
            vehicle.error_message == "" and vehicle.issue_timer == 0,
            f"healthy with message {vehicle.error_message!r}, timer {vehicle.issue_timer}",
        )
    else:
        record(
            "issue/faulted",
            isinstance(vehicle.issue, Faulted)
            and vehicle.error_message != ""
            and vehicle.issue_timer > 0,
            f"faulted with message {vehicle.error_message!r}, timer {vehicle.issue_timer}",
        )

    expected_status = status_for_speed(vehicle.attributes.speed)
    record(
        "status",
        vehicle.status == expected_status,
        f"status {vehicle.status!r}, expected {expected_status!r}",
    )
    return report


def check_fleet(fleet: Fleet, profile: SimulationProfile) -> ValidationReport:
    """Run check_vehicle over every vehicle and its path."""
    report = ValidationReport()
    for vehicle, path in zip(fleet.vehicles, fleet.paths):
        report.extend(check_vehicle(vehicle, path, profile))
    if not report.passed:
        logger.warning(report.summary())
    return report
