"""Per-scope collection cycle.

For each scope: connect, send ``EXPORT\\t<scope>\\n``, stream the decoded
records into a sink, then report whether the scope was collected cleanly.
Scopes are independent; a failing scope is reported unhealthy and the next
one is tried.
"""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from dovecot_exporter.core.logging import logger
from dovecot_exporter.core.protocols.stats_transport import StatsTransport
from dovecot_exporter.domains.stats.decoder import ProtocolDecoder
from dovecot_exporter.domains.stats.exceptions import StatsExportError
from dovecot_exporter.domains.stats.types import MeasurementRecord, ScopeHealth

EXPORT_COMMAND = "EXPORT"


def build_export_request(scope: str) -> bytes:
    """Return the request line asking the stats endpoint to export ``scope``."""
    return f"{EXPORT_COMMAND}\t{scope}\n".encode()


@runtime_checkable
class MeasurementSink(Protocol):
    """Receiver for the output of a collection cycle."""

    def emit(self, record: MeasurementRecord) -> None:
        """Accept one decoded record. Called as soon as the record is decoded."""
        ...

    def report_health(self, health: ScopeHealth) -> None:
        """Accept the outcome of one scope. Called exactly once per scope."""
        ...


class ScopeCollector:
    """Drives the transport and decoder for a sequence of scopes."""

    def __init__(self, transport: StatsTransport, decoder: ProtocolDecoder) -> None:
        self._transport = transport
        self._decoder = decoder

    def collect(self, scopes: Iterable[str], sink: MeasurementSink) -> None:
        """Collect every scope in order, reporting health for each one."""
        for scope in scopes:
            self.collect_scope(scope, sink)

    def collect_scope(self, scope: str, sink: MeasurementSink) -> ScopeHealth:
        """Collect a single scope.

        Records decoded before a failure stay emitted; the scope is then
        reported unhealthy.
        """
        log = logger.with_context(scope=scope, endpoint=self._transport.endpoint)
        emitted = 0
        try:
            with self._transport.connect() as connection:
                connection.send(build_export_request(scope))
                for record in self._decoder.decode(connection.lines(), scope):
                    sink.emit(record)
                    emitted += 1
        except StatsExportError as e:
            log.warning(f"Failed to scrape stats socket after {emitted} records: {e}")
            health = ScopeHealth(scope, healthy=False)
        else:
            log.debug(f"Collected {emitted} records")
            health = ScopeHealth(scope, healthy=True)

        sink.report_health(health)
        return health
