"""End-to-end test: one server, real websocket clients."""

import asyncio
import json
import urllib.request

from websockets.asyncio.client import connect

from fleet_telemetry.config.schema import ServerConfig
from fleet_telemetry.web.server import serve_fleet


def _config(**kwargs):
    defaults = dict(host="127.0.0.1", port=0, tick_interval_s=0.05, update_probability=1.0, seed=1)
    defaults.update(kwargs)
    return ServerConfig(**defaults)


def _run_with_server(config, client):
    """Start serve_fleet, run `client(port)`, then stop the server."""

    async def scenario():
        stop = asyncio.Event()
        ready = asyncio.get_running_loop().create_future()
        server_task = asyncio.create_task(serve_fleet(config, stop=stop, on_ready=ready.set_result))
        port = await asyncio.wait_for(ready, timeout=5)
        try:
            return await asyncio.wait_for(client(port), timeout=10)
        finally:
            stop.set()
            await asyncio.wait_for(server_task, timeout=5)

    return asyncio.run(scenario())


class TestServer:
    def test_snapshot_then_updates(self):
        async def client(port):
            async with connect(f"ws://127.0.0.1:{port}/") as ws:
                snapshot = json.loads(await ws.recv())
                update = json.loads(await ws.recv())
            return snapshot, update

        snapshot, update = _run_with_server(_config(), client)

        assert snapshot["event"] == "vehicles"
        assert len(snapshot["data"]) == 10
        assert [v["id"] for v in snapshot["data"]] == list(range(1, 11))
        assert update["event"] == "vehicleUpdate"
        assert set(update["data"]) == set(snapshot["data"][0])

    def test_viewers_share_one_simulation(self):
        async def client(port):
            async with connect(f"ws://127.0.0.1:{port}/") as first:
                await first.recv()
                await first.recv()  # simulation has advanced
                async with connect(f"ws://127.0.0.1:{port}/") as second:
                    late_snapshot = json.loads(await second.recv())
            return late_snapshot

        late_snapshot = _run_with_server(_config(), client)
        # A late joiner sees the advanced shared state, not a fresh fleet
        assert any(v["pathIndex"] > 0 for v in late_snapshot["data"])

    def test_health_check(self):
        async def client(port):
            def fetch():
                with urllib.request.urlopen(f"http://127.0.0.1:{port}/healthz", timeout=5) as resp:
                    return resp.status, resp.read()

            return await asyncio.get_running_loop().run_in_executor(None, fetch)

        status, body = _run_with_server(_config(), client)
        assert status == 200
        assert body.strip() == b"OK"
