"""Per-tick fault onset, countdown, and clearance."""

import logging
from dataclasses import replace
from typing import List

import numpy as np

from fleet_telemetry.config.constants import FAULT_MESSAGES
from fleet_telemetry.config.schema import FaultRules, SimulationProfile
from fleet_telemetry.faults.issue_state import Faulted, Healthy
from fleet_telemetry.fleet.vehicle import Attributes, Vehicle

logger = logging.getLogger(__name__)


def evaluate_rules(
    attributes: Attributes,
    rules: FaultRules,
    rng: np.random.Generator,
) -> List[str]:
    """Return the fault reasons that fire for these attributes, in rule order.

    Rule order: battery, tire pressure, temperature, regenerative braking.
    The regen rule consumes an extra draw only when its gate is below 1.
    """
    reasons = []
    if attributes.battery_level < rules.battery_low:
        reasons.append(FAULT_MESSAGES["battery"])

    tire_lo, tire_hi = rules.tire_pressure_band
    if attributes.tire_pressure < tire_lo or attributes.tire_pressure > tire_hi:
        reasons.append(FAULT_MESSAGES["tire_pressure"])

    if attributes.temperature > rules.temperature_high:
        reasons.append(FAULT_MESSAGES["temperature"])

    if not attributes.regenerative_braking:
        if rules.regen_fault_gate >= 1.0 or rng.random() < rules.regen_fault_gate:
            reasons.append(FAULT_MESSAGES["regen"])

    return reasons


class IssueStateMachine:
    """Moves a vehicle between Healthy and Faulted once per selected tick."""

    def __init__(self, profile: SimulationProfile):
        self.rules = profile.faults

    def step(self, vehicle: Vehicle, rng: np.random.Generator) -> Vehicle:
        issue = vehicle.issue

        if isinstance(issue, Faulted):
            # Counting down is the whole tick; no new evaluation while faulted.
            next_issue = issue.countdown()
            if isinstance(next_issue, Healthy):
                logger.info(f"Vehicle {vehicle.vehicle_id} cleared: {issue.error_message}")
            return replace(vehicle, issue=next_issue)

        if rng.random() >= self.rules.fault_probability:
            return vehicle

        reasons = evaluate_rules(vehicle.attributes, self.rules, rng)
        if not reasons:
            return vehicle

        lo, hi = self.rules.issue_ticks
        faulted = Faulted(ticks_remaining=int(rng.integers(lo, hi)), reasons=tuple(reasons))
        logger.info(
            f"Vehicle {vehicle.vehicle_id} faulted for {faulted.ticks_remaining} ticks: "
            f"{faulted.error_message}"
        )
        return replace(vehicle, issue=faulted)
