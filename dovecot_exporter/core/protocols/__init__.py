"""Cross-cutting protocols the exporter's components depend on."""

from dovecot_exporter.core.protocols.metrics_renderer import MetricsRenderer
from dovecot_exporter.core.protocols.stats_transport import StatsConnection, StatsTransport

__all__ = [
    "MetricsRenderer",
    "StatsConnection",
    "StatsTransport",
]
