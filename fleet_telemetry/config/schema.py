"""Dataclass models for geography, attribute profiles, and server configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np

from fleet_telemetry.config.constants import (
    BASE_ATTRIBUTES,
    DEFAULT_HOST,
    DEFAULT_PORT,
    FAULT_RULES,
    FLEET_SIZE,
    GEO_BOUNDS,
    PATH_STEPS,
    PROFILE_NAMES,
    RECOVERY_RULES,
    REGEN_KEEP_PROBABILITY,
    TICK_INTERVAL_S,
    TUNED_ATTRIBUTES,
    UPDATE_PROBABILITY,
)


def _check_probability(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value}")


@dataclass(frozen=True)
class LatLng:
    lat: float
    lng: float

    def to_dict(self) -> Dict[str, float]:
        return {"lat": float(self.lat), "lng": float(self.lng)}


@dataclass(frozen=True)
class GeoBounds:
    """Rectangular lat/lng envelope. Southwest must be strictly below northeast."""

    southwest: LatLng
    northeast: LatLng

    def __post_init__(self):
        if not self.southwest.lat < self.northeast.lat:
            raise ValueError(
                f"southwest.lat {self.southwest.lat} must be < northeast.lat {self.northeast.lat}"
            )
        if not self.southwest.lng < self.northeast.lng:
            raise ValueError(
                f"southwest.lng {self.southwest.lng} must be < northeast.lng {self.northeast.lng}"
            )

    @classmethod
    def from_dict(cls, bounds: Dict[str, Dict[str, float]]) -> GeoBounds:
        return cls(
            southwest=LatLng(**bounds["southwest"]),
            northeast=LatLng(**bounds["northeast"]),
        )

    @classmethod
    def default(cls) -> GeoBounds:
        return cls.from_dict(GEO_BOUNDS)

    def contains(self, point: LatLng) -> bool:
        return (
            self.southwest.lat <= point.lat <= self.northeast.lat
            and self.southwest.lng <= point.lng <= self.northeast.lng
        )

    def clamp(self, lat: float, lng: float) -> LatLng:
        """Clamp each axis independently back into the envelope."""
        return LatLng(
            lat=float(min(max(lat, self.southwest.lat), self.northeast.lat)),
            lng=float(min(max(lng, self.southwest.lng), self.northeast.lng)),
        )

    def random_position(self, rng: np.random.Generator) -> LatLng:
        return LatLng(
            lat=float(rng.uniform(self.southwest.lat, self.northeast.lat)),
            lng=float(rng.uniform(self.southwest.lng, self.northeast.lng)),
        )


@dataclass(frozen=True)
class AttributeDynamics:
    """Per-attribute envelope and per-tick step.

    A random-walk attribute moves by U(-delta, +delta) and is clamped to
    [lower, upper]. A drain attribute (drain > 0) only loses U(0, drain) per
    tick and is floored at lower.
    """

    lower: float
    upper: float
    initial: Tuple[float, float]
    delta: float = 0.0
    drain: float = 0.0

    def __post_init__(self):
        if not self.lower < self.upper:
            raise ValueError(f"lower {self.lower} must be < upper {self.upper}")
        lo, hi = self.initial
        if not (self.lower <= lo <= hi <= self.upper):
            raise ValueError(f"initial range {self.initial} outside [{self.lower}, {self.upper}]")
        if self.delta < 0 or self.drain < 0:
            raise ValueError("delta and drain must be non-negative")

    @property
    def drain_only(self) -> bool:
        return self.drain > 0

    def clamp(self, value: float) -> float:
        return float(min(max(value, self.lower), self.upper))


@dataclass(frozen=True)
class FaultRules:
    """Fault onset probability, duration, and threshold rules."""

    fault_probability: float
    issue_ticks: Tuple[int, int]          # Uniform integer draw from [lo, hi)
    battery_low: float
    tire_pressure_band: Tuple[float, float]
    temperature_high: float
    regen_fault_gate: float = 1.0         # Extra coin flip on the regen rule when < 1

    def __post_init__(self):
        _check_probability("fault_probability", self.fault_probability)
        _check_probability("regen_fault_gate", self.regen_fault_gate)
        lo, hi = self.issue_ticks
        if not 0 < lo < hi:
            raise ValueError(f"issue_ticks must satisfy 0 < lo < hi, got {self.issue_ticks}")


@dataclass(frozen=True)
class RecoveryRule:
    """Partial self-correction of healthy vehicles."""

    probability: float
    battery_boost: Tuple[float, float]
    coolant_boost: Tuple[float, float]
    tire_pressure_target: float
    tire_pressure_pull: float             # Fraction of the gap closed per recovery

    def __post_init__(self):
        _check_probability("probability", self.probability)
        _check_probability("tire_pressure_pull", self.tire_pressure_pull)


@dataclass(frozen=True)
class SimulationProfile:
    """Swappable set of tunable constants governing dynamics and faults."""

    name: str
    attributes: Dict[str, AttributeDynamics]
    regen_keep_probability: float
    faults: FaultRules
    recovery: Optional[RecoveryRule] = None

    def __post_init__(self):
        _check_probability("regen_keep_probability", self.regen_keep_probability)

    @classmethod
    def _from_tables(cls, name: str, attributes: Dict[str, dict]) -> SimulationProfile:
        recovery = RECOVERY_RULES.get(name)
        return cls(
            name=name,
            attributes={k: AttributeDynamics(**v) for k, v in attributes.items()},
            regen_keep_probability=REGEN_KEEP_PROBABILITY[name],
            faults=FaultRules(**FAULT_RULES[name]),
            recovery=RecoveryRule(**recovery) if recovery is not None else None,
        )

    @classmethod
    def base_default(cls) -> SimulationProfile:
        return cls._from_tables("base", BASE_ATTRIBUTES)

    @classmethod
    def tuned_default(cls) -> SimulationProfile:
        return cls._from_tables("tuned", TUNED_ATTRIBUTES)

    @classmethod
    def from_name(cls, name: str) -> SimulationProfile:
        if name == "base":
            return cls.base_default()
        if name == "tuned":
            return cls.tuned_default()
        raise ValueError(f"Unknown profile {name!r}, expected one of {PROFILE_NAMES}")


@dataclass(frozen=True)
class ServerConfig:
    """Process-level settings for the push server."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    tick_interval_s: float = TICK_INTERVAL_S
    update_probability: float = UPDATE_PROBABILITY
    fleet_size: int = FLEET_SIZE
    path_steps: int = PATH_STEPS
    profile: str = "base"
    seed: Optional[int] = None
    validate: bool = False

    def __post_init__(self):
        _check_probability("update_probability", self.update_probability)
        if not 0 <= self.port <= 65535:
            raise ValueError(f"port must be within [0, 65535], got {self.port}")
        if self.tick_interval_s <= 0:
            raise ValueError(f"tick_interval_s must be positive, got {self.tick_interval_s}")
        if self.fleet_size < 1:
            raise ValueError(f"fleet_size must be >= 1, got {self.fleet_size}")
        if self.path_steps < 1:
            raise ValueError(f"path_steps must be >= 1, got {self.path_steps}")
        if self.profile not in PROFILE_NAMES:
            raise ValueError(f"Unknown profile {self.profile!r}, expected one of {PROFILE_NAMES}")
