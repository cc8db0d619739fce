"""Fake MeasurementSink for testing."""

from dovecot_exporter.domains.stats.types import MeasurementRecord, ScopeHealth


class FakeMeasurementSink:
    """In-memory spy implementing the MeasurementSink protocol.

    ``events`` keeps records and health reports interleaved in arrival order.
    """

    def __init__(self) -> None:
        self.records: list[MeasurementRecord] = []
        self.health: list[ScopeHealth] = []
        self.events: list[MeasurementRecord | ScopeHealth] = []

    def emit(self, record: MeasurementRecord) -> None:
        self.records.append(record)
        self.events.append(record)

    def report_health(self, health: ScopeHealth) -> None:
        self.health.append(health)
        self.events.append(health)

    # -- test helpers --

    def health_by_scope(self) -> dict[str, bool]:
        return {h.scope: h.healthy for h in self.health}

    def clear(self) -> None:
        """Reset all recorded state."""
        self.records.clear()
        self.health.clear()
        self.events.clear()
