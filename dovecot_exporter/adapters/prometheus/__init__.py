"""Prometheus adapters."""

from dovecot_exporter.adapters.prometheus.collector import DovecotCollector, MetricFamilySink
from dovecot_exporter.adapters.prometheus.fake import FakeMetricsRenderer
from dovecot_exporter.adapters.prometheus.renderer import PrometheusMetricsRenderer

__all__ = [
    "DovecotCollector",
    "FakeMetricsRenderer",
    "MetricFamilySink",
    "PrometheusMetricsRenderer",
]
