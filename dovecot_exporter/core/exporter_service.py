"""Exporter facade.

Wires the stats transport, decoder, scope collector, Prometheus registry and
HTTP listener together behind one start/stop lifecycle, so ``main`` and the
tests only deal with one object.
"""

from __future__ import annotations

from collections.abc import Sequence

from prometheus_client import CollectorRegistry

from dovecot_exporter.adapters.prometheus import DovecotCollector, PrometheusMetricsRenderer
from dovecot_exporter.adapters.stats_transport import FileStatsTransport, UnixSocketStatsTransport
from dovecot_exporter.api.metrics_server import MetricsServer
from dovecot_exporter.core.config import Settings
from dovecot_exporter.core.logging import logger
from dovecot_exporter.core.protocols.stats_transport import StatsTransport
from dovecot_exporter.domains.stats import ProtocolDecoder, ScopeCollector, StaticScopeClassifier


def build_transport(settings: Settings) -> StatsTransport:
    """Replay ``EXPORT_FILE`` when set, otherwise talk to the stats socket."""
    if settings.EXPORT_FILE:
        return FileStatsTransport(settings.EXPORT_FILE)
    return UnixSocketStatsTransport(settings.SOCKET_PATH, timeout=settings.SOCKET_TIMEOUT)


class DovecotExporterService:
    """Owns the registry and the HTTP listener for one exporter process.

    ``registry`` is private to the exporter rather than prometheus-client's
    global default, so nothing else in the process leaks into the output.
    """

    def __init__(
        self,
        transport: StatsTransport,
        decoder: ProtocolDecoder,
        scopes: Sequence[str],
        *,
        host: str,
        port: int,
        telemetry_path: str = "/metrics",
    ) -> None:
        self.scope_collector = ScopeCollector(transport, decoder)
        self.registry = CollectorRegistry()
        self.collector = DovecotCollector(self.scope_collector, scopes)
        self.registry.register(self.collector)
        self.renderer = PrometheusMetricsRenderer(self.registry)
        self.server = MetricsServer(self.renderer, port, host, telemetry_path)
        self._logger = logger.with_context(endpoint=transport.endpoint)

    @classmethod
    def from_settings(cls, settings: Settings) -> DovecotExporterService:
        classifier = StaticScopeClassifier(settings.global_scope_set)
        return cls(
            build_transport(settings),
            ProtocolDecoder(classifier),
            settings.scope_list,
            host=settings.LISTEN_HOST,
            port=settings.LISTEN_PORT,
            telemetry_path=settings.TELEMETRY_PATH,
        )

    async def start(self) -> None:
        self._logger.info(f"Starting exporter for scopes {list(self.collector.scopes)}")
        await self.server.start()

    async def stop(self) -> None:
        self._logger.info("Stopping exporter")
        await self.server.stop()
