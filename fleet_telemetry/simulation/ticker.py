"""Fixed-period driver that advances the fleet and publishes updated vehicles.

Each tick, every vehicle independently has `update_probability` chance of
being advanced. Unselected vehicles are left exactly as they were, so a
vehicle may sit out many ticks in a row. One ticker owns one fleet and is
its only writer.
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

import numpy as np

from fleet_telemetry.config.constants import TICK_INTERVAL_S, UPDATE_PROBABILITY
from fleet_telemetry.config.schema import SimulationProfile
from fleet_telemetry.faults.issue_state_machine import IssueStateMachine
from fleet_telemetry.fleet.fleet_factory import Fleet
from fleet_telemetry.fleet.vehicle import Vehicle
from fleet_telemetry.simulation.attribute_updater import AttributeUpdater
from fleet_telemetry.validation.range_checks import check_vehicle

logger = logging.getLogger(__name__)

Publisher = Callable[[Vehicle], Awaitable[None]]


class SimulationTicker:
    def __init__(
        self,
        fleet: Fleet,
        profile: SimulationProfile,
        rng: np.random.Generator,
        update_probability: float = UPDATE_PROBABILITY,
        interval_s: float = TICK_INTERVAL_S,
        validate: bool = False,
    ):
        self.fleet = fleet
        self.profile = profile
        self.rng = rng
        self.update_probability = update_probability
        self.interval_s = interval_s
        self.validate = validate
        self.updater = AttributeUpdater(profile)
        self.issue_machine = IssueStateMachine(profile)
        self.tick_count = 0
        self._running = False

    def step_vehicle(self, index: int) -> Vehicle:
        """Advance one vehicle unconditionally and store the result."""
        vehicle = self.fleet.vehicles[index]
        path = self.fleet.path_for(index)
        updated = self.updater.advance(vehicle, path, self.rng)
        updated = self.issue_machine.step(updated, self.rng)
        self.fleet.replace(index, updated)

        if self.validate:
            report = check_vehicle(updated, path, self.profile)
            if not report.passed:
                logger.warning(report.summary())
        return updated

    def tick(self) -> List[Vehicle]:
        """Run one tick. Returns the vehicles that were updated, in fleet order."""
        updated = []
        for index in range(len(self.fleet)):
            if self.rng.random() < self.update_probability:
                updated.append(self.step_vehicle(index))
        self.tick_count += 1
        logger.debug(f"Tick {self.tick_count}: {len(updated)}/{len(self.fleet)} vehicles updated")
        return updated

    async def run(self, publish: Publisher, stop: Optional[asyncio.Event] = None) -> None:
        """Tick every interval until cancelled or `stop` is set.

        Each updated vehicle is handed to `publish` before the next tick starts.
        """
        if self._running:
            raise RuntimeError("SimulationTicker is already running")
        self._running = True
        logger.info(f"Ticker started (interval={self.interval_s}s, p={self.update_probability})")
        try:
            while stop is None or not stop.is_set():
                await asyncio.sleep(self.interval_s)
                if stop is not None and stop.is_set():
                    break
                for vehicle in self.tick():
                    await publish(vehicle)
        finally:
            self._running = False
            logger.info(f"Ticker stopped after {self.tick_count} ticks")
