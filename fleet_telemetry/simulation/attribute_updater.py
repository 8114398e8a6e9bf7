"""One-tick advance of a vehicle's attributes and path position."""

from dataclasses import replace
from typing import Dict, Sequence, Tuple

import numpy as np

from fleet_telemetry.config.constants import ATTRIBUTE_NAMES
from fleet_telemetry.config.schema import LatLng, RecoveryRule, SimulationProfile
from fleet_telemetry.faults.issue_state import Healthy
from fleet_telemetry.fleet.vehicle import Attributes, Vehicle, status_for_speed


def advance_path_index(index: int, direction: int, n_points: int) -> Tuple[int, int]:
    """Step along a path of n_points, bouncing at either end.

    If index + direction leaves [0, n_points - 1], the direction flips and the
    index steps back the other way instead of wrapping.

    Returns:
        (new_index, new_direction)
    """
    if n_points <= 1:
        return 0, direction

    next_index = index + direction
    if next_index >= n_points or next_index < 0:
        return index - direction, -direction
    return next_index, direction


class AttributeUpdater:
    """Advances attributes with clamped random deltas and moves along the path.

    Random-walk attributes: clamp(lower, upper, old + U(-delta, +delta)).
    Drain attributes: max(lower, old - U(0, drain)); they only go up through
    the profile's recovery rule, which runs for healthy vehicles only.
    """

    def __init__(self, profile: SimulationProfile):
        self.profile = profile

    def _step_attributes(self, attributes: Attributes, rng: np.random.Generator) -> Dict[str, object]:
        values = {}
        for name in ATTRIBUTE_NAMES:
            dyn = self.profile.attributes[name]
            old = getattr(attributes, name)
            if dyn.drain_only:
                values[name] = float(max(dyn.lower, old - rng.uniform(0.0, dyn.drain)))
            else:
                values[name] = dyn.clamp(old + rng.uniform(-dyn.delta, dyn.delta))
        values["regenerative_braking"] = bool(rng.random() < self.profile.regen_keep_probability)
        return values

    def _recover(
        self,
        values: Dict[str, object],
        recovery: RecoveryRule,
        rng: np.random.Generator,
    ) -> None:
        dyn = self.profile.attributes
        values["battery_level"] = dyn["battery_level"].clamp(
            values["battery_level"] + rng.uniform(*recovery.battery_boost)
        )
        values["coolant_level"] = dyn["coolant_level"].clamp(
            values["coolant_level"] + rng.uniform(*recovery.coolant_boost)
        )
        tire = values["tire_pressure"]
        values["tire_pressure"] = dyn["tire_pressure"].clamp(
            tire + recovery.tire_pressure_pull * (recovery.tire_pressure_target - tire)
        )

    def advance(self, vehicle: Vehicle, path: Sequence[LatLng], rng: np.random.Generator) -> Vehicle:
        """Return the vehicle one tick later. The input record is not modified."""
        values = self._step_attributes(vehicle.attributes, rng)

        recovery = self.profile.recovery
        if recovery is not None and isinstance(vehicle.issue, Healthy):
            if rng.random() < recovery.probability:
                self._recover(values, recovery, rng)

        attributes = Attributes(**values)
        path_index, path_direction = advance_path_index(
            vehicle.path_index, vehicle.path_direction, len(path)
        )

        return replace(
            vehicle,
            attributes=attributes,
            position=path[path_index],
            path_index=path_index,
            path_direction=path_direction,
            status=status_for_speed(attributes.speed),
        )
