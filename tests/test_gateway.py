"""Tests for snapshot and update fan-out."""

import asyncio
import json

from websockets.asyncio.client import connect
from websockets.asyncio.server import serve
from websockets.exceptions import ConnectionClosed

from fleet_telemetry.web.gateway import BroadcastGateway, encode_event


class FakeConnection:
    """Records sent frames; stays open until `close()` is called."""

    def __init__(self, fail_send=False):
        self.sent = []
        self.fail_send = fail_send
        self._closed = None

    async def send(self, message):
        if self.fail_send:
            raise ConnectionClosed(None, None)
        self.sent.append(json.loads(message))

    async def wait_closed(self):
        if self._closed is None:
            self._closed = asyncio.Event()
        await self._closed.wait()

    def close(self):
        self._closed.set()


def _with_gateway(fleet, client):
    """Serve a gateway on a free port and run `client(gateway, uri)` against it."""
    gateway = BroadcastGateway(fleet)

    async def scenario():
        async with serve(gateway.handler, "127.0.0.1", 0) as server:
            port = next(iter(server.sockets)).getsockname()[1]
            return await asyncio.wait_for(client(gateway, f"ws://127.0.0.1:{port}/"), timeout=20)

    return asyncio.run(scenario())


def test_encode_event():
    assert json.loads(encode_event("vehicles", [1, 2])) == {"event": "vehicles", "data": [1, 2]}


class TestHandler:
    def test_snapshot_on_connect(self, fleet):
        gateway = BroadcastGateway(fleet)
        conn = FakeConnection()

        async def scenario():
            task = asyncio.create_task(gateway.handler(conn))
            await asyncio.sleep(0)
            assert gateway.subscriber_count == 1
            conn.close()
            await task

        asyncio.run(scenario())
        assert len(conn.sent) == 1
        assert conn.sent[0]["event"] == "vehicles"
        assert conn.sent[0]["data"] == fleet.snapshot()
        assert len(conn.sent[0]["data"]) == 10
        assert gateway.subscriber_count == 0

    def test_disconnect_during_snapshot(self, fleet):
        gateway = BroadcastGateway(fleet)
        asyncio.run(gateway.handler(FakeConnection(fail_send=True)))
        assert gateway.subscriber_count == 0


class TestBroadcast:
    def test_reaches_every_subscriber(self, fleet):
        vehicle = fleet.vehicles[3]

        async def client(gateway, uri):
            async with connect(uri) as first, connect(uri) as second:
                await first.recv()
                await second.recv()
                await gateway.broadcast(vehicle)
                return json.loads(await first.recv()), json.loads(await second.recv())

        for message in _with_gateway(fleet, client):
            assert message["event"] == "vehicleUpdate"
            assert message["data"] == vehicle.to_payload()

    def test_idle_subscriber_does_not_hold_up_others(self, fleet):
        """A viewer that never reads must not delay updates to the rest."""
        vehicle = fleet.vehicles[0]
        n_updates = 500

        async def client(gateway, uri):
            async with connect(uri, close_timeout=1) as idle, connect(uri) as reader:
                await idle.recv()
                await reader.recv()
                for _ in range(n_updates):
                    await asyncio.wait_for(gateway.broadcast(vehicle), timeout=1)
                received = [json.loads(await reader.recv()) for _ in range(n_updates)]
            return received

        received = _with_gateway(fleet, client)
        assert len(received) == n_updates
        assert all(m["event"] == "vehicleUpdate" for m in received)

    def test_without_subscribers(self, fleet):
        gateway = BroadcastGateway(fleet)
        asyncio.run(gateway.broadcast(fleet.vehicles[0]))
        assert gateway.subscriber_count == 0
