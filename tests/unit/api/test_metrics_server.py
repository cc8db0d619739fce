"""Unit tests for the aiohttp metrics listener."""

import aiohttp
import pytest
from aiohttp.test_utils import make_mocked_request

from dovecot_exporter.adapters.prometheus import FakeMetricsRenderer
from dovecot_exporter.api.metrics_server import MetricsServer


def _bound_port(server: MetricsServer) -> int:
    """Extract the OS-assigned port from the runner's sites."""
    site = list(server._runner.sites)[0]
    return site._server.sockets[0].getsockname()[1]


class TestMetricsServer:
    """Tests for MetricsServer handlers and lifecycle."""

    @pytest.mark.asyncio
    async def test_handle_metrics_returns_renderer_body(self):
        """The handler serves the renderer's body and content type."""
        fake = FakeMetricsRenderer()
        server = MetricsServer(fake, port=0)

        response = await server._handle_metrics(make_mocked_request("GET", "/metrics"))

        assert response.body == b"# fake metrics\n"
        assert response.content_type == "text/plain"
        assert fake.generate_calls == 1

    @pytest.mark.asyncio
    async def test_landing_page_links_to_metrics(self):
        """The index page links to the telemetry path."""
        server = MetricsServer(FakeMetricsRenderer(), port=0, telemetry_path="/stats")

        response = await server._handle_index(make_mocked_request("GET", "/"))

        assert response.content_type == "text/html"
        assert "<a href='/stats'>Metrics</a>" in response.text
        assert "Dovecot Exporter" in response.text

    @pytest.mark.asyncio
    async def test_start_and_stop_serves_metrics(self):
        """A started server answers over real HTTP."""
        fake = FakeMetricsRenderer(b"dovecot_up 1.0\n")
        server = MetricsServer(fake, port=0, host="127.0.0.1")
        await server.start()

        try:
            port = _bound_port(server)
            async with aiohttp.ClientSession() as session:
                async with session.get(f"http://127.0.0.1:{port}/metrics") as resp:
                    assert resp.status == 200
                    assert await resp.read() == b"dovecot_up 1.0\n"
                async with session.get(f"http://127.0.0.1:{port}/") as resp:
                    assert resp.status == 200
                    assert "/metrics" in await resp.text()
        finally:
            await server.stop()

    @pytest.mark.asyncio
    async def test_custom_telemetry_path(self):
        """Metrics are served under a configured path."""
        fake = FakeMetricsRenderer()
        server = MetricsServer(fake, port=0, host="127.0.0.1", telemetry_path="/stats")
        await server.start()

        try:
            port = _bound_port(server)
            async with aiohttp.ClientSession() as session:
                async with session.get(f"http://127.0.0.1:{port}/stats") as resp:
                    assert resp.status == 200
                async with session.get(f"http://127.0.0.1:{port}/metrics") as resp:
                    assert resp.status == 404
        finally:
            await server.stop()

        assert fake.generate_calls == 1

    @pytest.mark.asyncio
    async def test_stop_is_safe_when_not_started(self):
        """stop() before start() does nothing."""
        server = MetricsServer(FakeMetricsRenderer(), port=0)
        await server.stop()
