"""HTTP listener serving the exporter's metrics.

A small aiohttp application with two routes: the telemetry path, which
triggers a scrape of Dovecot's stats socket, and ``/``, a landing page that
links to it.
"""

import asyncio
from typing import Optional

from aiohttp import web

from dovecot_exporter.core.logging import logger
from dovecot_exporter.core.protocols.metrics_renderer import MetricsRenderer

_LANDING_PAGE = """<html>
<head><title>Dovecot Exporter</title></head>
<body>
<h1>Dovecot Exporter</h1>
<p><a href='{path}'>Metrics</a></p>
</body>
</html>
"""


class MetricsServer:
    """aiohttp server exposing a MetricsRenderer."""

    def __init__(
        self,
        renderer: MetricsRenderer,
        port: int,
        host: str = "",
        telemetry_path: str = "/metrics",
    ) -> None:
        self._renderer = renderer
        self._port = port
        self._host = host
        self._telemetry_path = telemetry_path
        self._runner: Optional[web.AppRunner] = None
        self._site: Optional[web.TCPSite] = None
        self._logger = logger.with_context(operation="metrics_server")

    @property
    def telemetry_path(self) -> str:
        return self._telemetry_path

    def build_app(self) -> web.Application:
        app = web.Application()
        app.add_routes(
            [
                web.get(self._telemetry_path, self._handle_metrics),
                web.get("/", self._handle_index),
            ]
        )
        return app

    async def _handle_metrics(self, request: web.Request) -> web.Response:
        """Run a scrape off the event loop so concurrent requests do not block each other."""
        body = await asyncio.to_thread(self._renderer.generate)
        # content_type may carry parameters (version, charset), so set the raw header.
        return web.Response(body=body, headers={"Content-Type": self._renderer.content_type})

    async def _handle_index(self, request: web.Request) -> web.Response:
        return web.Response(
            text=_LANDING_PAGE.format(path=self._telemetry_path),
            content_type="text/html",
        )

    async def start(self) -> None:
        """Bind and start serving. Port 0 picks a free port."""
        self._runner = web.AppRunner(self.build_app())
        await self._runner.setup()
        self._site = web.TCPSite(self._runner, host=self._host or None, port=self._port)
        await self._site.start()
        self._logger.info(
            f"Listening on {self._host or '*'}:{self._port}, metrics at {self._telemetry_path}"
        )

    async def stop(self) -> None:
        """Stop serving. Safe to call when the server was never started."""
        if self._site:
            await self._site.stop()
            self._site = None
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
