"""Prometheus implementation of the MetricsRenderer protocol.

Serializes everything registered on the exporter's CollectorRegistry. Since
``DovecotCollector`` queries Dovecot on collection, every ``generate()``
call is a full scrape of the stats socket.
"""

import time

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from dovecot_exporter.core.logging import logger
from dovecot_exporter.core.protocols.metrics_renderer import MetricsRenderer


class PrometheusMetricsRenderer(MetricsRenderer):
    """Render all collectors in a dedicated CollectorRegistry."""

    def __init__(self, registry: CollectorRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    @property
    def content_type(self) -> str:
        return CONTENT_TYPE_LATEST

    def generate(self) -> bytes:
        started = time.monotonic()
        body = generate_latest(self._registry)
        logger.debug(
            f"Rendered {len(body)} bytes of metrics in {time.monotonic() - started:.3f}s"
        )
        return body
