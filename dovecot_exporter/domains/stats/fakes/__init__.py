"""Fakes for the stats domain."""

from dovecot_exporter.domains.stats.fakes.sink import FakeMeasurementSink

__all__ = ["FakeMeasurementSink"]
