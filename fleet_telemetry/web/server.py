"""Process entry point: one simulation, one ticker, many viewers."""

from __future__ import annotations

import asyncio
import logging
from http import HTTPStatus
from typing import Callable, Optional

import numpy as np
from websockets.asyncio.server import serve

from fleet_telemetry.config.constants import HEALTH_PATH
from fleet_telemetry.config.schema import ServerConfig, SimulationProfile
from fleet_telemetry.fleet.fleet_factory import create_fleet
from fleet_telemetry.simulation.ticker import SimulationTicker
from fleet_telemetry.web.gateway import BroadcastGateway

logger = logging.getLogger(__name__)


def _health_check(connection, request):
    if request.path == HEALTH_PATH:
        return connection.respond(HTTPStatus.OK, "OK\n")
    return None


async def serve_fleet(
    config: ServerConfig,
    stop: Optional[asyncio.Event] = None,
    on_ready: Optional[Callable[[int], None]] = None,
) -> None:
    """Run the simulation and push server until `stop` is set or the task is cancelled.

    Args:
        config: Server and simulation settings.
        stop: Event that ends the run when set.
        on_ready: Called with the bound port once the server is listening.
    """
    rng = np.random.default_rng(config.seed)
    profile = SimulationProfile.from_name(config.profile)
    fleet = create_fleet(profile, rng, size=config.fleet_size, path_steps=config.path_steps)
    ticker = SimulationTicker(
        fleet,
        profile,
        rng,
        update_probability=config.update_probability,
        interval_s=config.tick_interval_s,
        validate=config.validate,
    )
    gateway = BroadcastGateway(fleet)
    stop = stop if stop is not None else asyncio.Event()

    async with serve(gateway.handler, config.host, config.port, process_request=_health_check) as server:
        port = next(iter(server.sockets)).getsockname()[1]
        logger.info(f"Server is running on ws://{config.host}:{port}/")
        if on_ready is not None:
            on_ready(port)

        ticker_task = asyncio.create_task(ticker.run(gateway.broadcast, stop))
        stop_task = asyncio.create_task(stop.wait())
        try:
            await asyncio.wait({ticker_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (ticker_task, stop_task):
                task.cancel()
            await asyncio.gather(ticker_task, stop_task, return_exceptions=True)

        # Surface a crashed ticker instead of exiting quietly.
        if not ticker_task.cancelled() and ticker_task.exception() is not None:
            raise ticker_task.exception()

    logger.info("Server stopped")


def run_server(config: ServerConfig) -> None:
    asyncio.run(serve_fleet(config))
