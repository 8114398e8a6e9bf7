"""Fleet aggregate and factory: K vehicles, each with a fixed path."""

import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from fleet_telemetry.config.constants import ATTRIBUTE_NAMES, FLEET_SIZE, PATH_STEPS
from fleet_telemetry.config.schema import GeoBounds, SimulationProfile
from fleet_telemetry.fleet.vehicle import Attributes, Vehicle, status_for_speed
from fleet_telemetry.simulation.path_generator import Path, generate_path

logger = logging.getLogger(__name__)


class Fleet:
    """All vehicle records and their paths for the life of the process.

    Readers (the broadcast gateway, range checks) use `vehicles`, `paths`
    and `snapshot()`. Only the simulation ticker calls `replace()`.
    """

    def __init__(self, vehicles: Sequence[Vehicle], paths: Sequence[Path]):
        if len(vehicles) != len(paths):
            raise ValueError(f"{len(vehicles)} vehicles but {len(paths)} paths")
        self._vehicles: List[Vehicle] = list(vehicles)
        self._paths: Tuple[Path, ...] = tuple(paths)

    def __len__(self) -> int:
        return len(self._vehicles)

    def __iter__(self) -> Iterator[Vehicle]:
        return iter(tuple(self._vehicles))

    @property
    def vehicles(self) -> Tuple[Vehicle, ...]:
        return tuple(self._vehicles)

    @property
    def paths(self) -> Tuple[Path, ...]:
        return self._paths

    def path_for(self, index: int) -> Path:
        return self._paths[index]

    def replace(self, index: int, vehicle: Vehicle) -> None:
        current = self._vehicles[index]
        if vehicle.vehicle_id != current.vehicle_id:
            raise ValueError(
                f"Cannot replace vehicle {current.vehicle_id} with vehicle {vehicle.vehicle_id}"
            )
        self._vehicles[index] = vehicle

    def snapshot(self) -> List[Dict[str, Any]]:
        """Payload for every vehicle, in id order."""
        return [v.to_payload() for v in self._vehicles]


def _initial_attributes(profile: SimulationProfile, rng: np.random.Generator) -> Attributes:
    values = {}
    for name in ATTRIBUTE_NAMES:
        values[name] = float(rng.uniform(*profile.attributes[name].initial))
    values["regenerative_braking"] = bool(rng.random() < 0.5)
    return Attributes(**values)


def create_fleet(
    profile: SimulationProfile,
    rng: np.random.Generator,
    size: int = FLEET_SIZE,
    bounds: Optional[GeoBounds] = None,
    path_steps: int = PATH_STEPS,
) -> Fleet:
    """Create `size` healthy vehicles with ids 1..size, each parked at the start of its own path.

    Args:
        profile: Supplies the initial attribute ranges.
        rng: Random number generator.
        size: Number of vehicles.
        bounds: Path envelope (defaults to the configured service area).
        path_steps: Points per path.

    Returns:
        The fleet aggregate.
    """
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")
    bounds = bounds if bounds is not None else GeoBounds.default()

    vehicles = []
    paths = []
    for vehicle_id in range(1, size + 1):
        path = generate_path(bounds, rng, steps=path_steps)
        attributes = _initial_attributes(profile, rng)
        vehicles.append(Vehicle(
            vehicle_id=vehicle_id,
            name=f"Vehicle #{vehicle_id}",
            attributes=attributes,
            position=path[0],
            path_index=0,
            path_direction=1,
            status=status_for_speed(attributes.speed),
        ))
        paths.append(path)

    logger.info(f"Created fleet of {size} vehicles (profile={profile.name}, path_steps={path_steps})")
    return Fleet(vehicles, paths)
