"""Vehicle telemetry record and its dashboard payload."""

from dataclasses import dataclass, fields
from typing import Any, Dict

from fleet_telemetry.config.constants import STATUS_MOVING, STATUS_STOPPED
from fleet_telemetry.config.schema import LatLng
from fleet_telemetry.faults.issue_state import HEALTHY, IssueState

# Attribute field -> payload key
_PAYLOAD_KEYS = {
    "speed": "speed",
    "battery_level": "batteryLevel",
    "temperature": "temperature",
    "tire_pressure": "tirePressure",
    "motor_efficiency": "motorEfficiency",
    "regenerative_braking": "regenerativeBraking",
    "oil_level": "oilLevel",
    "brake_fluid": "brakeFluid",
    "coolant_level": "coolantLevel",
    "fuel_level": "fuelLevel",
    "engine_load": "engineLoad",
    "gps_accuracy": "gpsAccuracy",
}


@dataclass(frozen=True)
class Attributes:
    speed: float                 # km/h
    battery_level: float         # %
    temperature: float           # °C
    tire_pressure: float         # PSI
    motor_efficiency: float      # %
    regenerative_braking: bool
    oil_level: float             # %
    brake_fluid: float           # %
    coolant_level: float         # %
    fuel_level: float            # %
    engine_load: float           # %
    gps_accuracy: float          # m

    def to_dict(self) -> Dict[str, Any]:
        payload = {}
        for f in fields(self):
            value = getattr(self, f.name)
            payload[_PAYLOAD_KEYS[f.name]] = bool(value) if isinstance(value, bool) else float(value)
        return payload


def status_for_speed(speed: float) -> str:
    return STATUS_MOVING if speed > 0 else STATUS_STOPPED


@dataclass(frozen=True)
class Vehicle:
    """One simulated vehicle. Immutable; each tick produces a new record."""

    vehicle_id: int
    name: str
    attributes: Attributes
    position: LatLng
    path_index: int
    path_direction: int          # +1 forward, -1 reverse
    issue: IssueState = HEALTHY
    status: str = STATUS_MOVING

    @property
    def has_issue(self) -> bool:
        return self.issue.has_issue

    @property
    def error_message(self) -> str:
        return self.issue.error_message

    @property
    def issue_timer(self) -> int:
        return self.issue.issue_timer

    def to_payload(self) -> Dict[str, Any]:
        """Full record as sent to dashboard subscribers (JSON-safe types only)."""
        return {
            "id": int(self.vehicle_id),
            "name": self.name,
            "attributes": self.attributes.to_dict(),
            "position": self.position.to_dict(),
            "pathIndex": int(self.path_index),
            "pathDirection": int(self.path_direction),
            "hasIssue": bool(self.has_issue),
            "errorMessage": self.error_message,
            "issueTimer": int(self.issue_timer),
            "status": self.status,
        }
