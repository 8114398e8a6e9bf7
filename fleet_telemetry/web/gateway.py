"""Push-channel fan-out: full snapshot on connect, per-vehicle updates after.

Frames are JSON text messages of the form {"event": <name>, "data": <payload>}.
"""

import json
import logging
from typing import Any, Set

from websockets.asyncio.server import broadcast
from websockets.exceptions import ConnectionClosed

from fleet_telemetry.config.constants import EVENT_SNAPSHOT, EVENT_UPDATE
from fleet_telemetry.fleet.fleet_factory import Fleet
from fleet_telemetry.fleet.vehicle import Vehicle

logger = logging.getLogger(__name__)


def encode_event(event: str, data: Any) -> str:
    return json.dumps({"event": event, "data": data})


class BroadcastGateway:
    """Read-only view of one fleet shared by every connected subscriber."""

    def __init__(self, fleet: Fleet):
        self.fleet = fleet
        self._subscribers: Set[Any] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    async def handler(self, connection) -> None:
        """Serve one subscriber until it disconnects."""
        self._subscribers.add(connection)
        logger.info(f"Client connected ({self.subscriber_count} subscribers)")
        try:
            await connection.send(encode_event(EVENT_SNAPSHOT, self.fleet.snapshot()))
            await connection.wait_closed()
        except ConnectionClosed:
            logger.debug("Client closed during snapshot send")
        finally:
            self._subscribers.discard(connection)
            logger.info(f"Client disconnected ({self.subscriber_count} subscribers)")

    async def broadcast(self, vehicle: Vehicle) -> None:
        """Queue one vehicle update on every open subscriber without waiting on any of them.

        Connections that are closing are skipped; `handler` removes them.
        """
        if not self._subscribers:
            return
        broadcast(self._subscribers, encode_event(EVENT_UPDATE, vehicle.to_payload()))
