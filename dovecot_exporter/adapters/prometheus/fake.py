"""Fake MetricsRenderer for testing.

Counts generate() calls and returns a fixed body, so listener tests do not
need a stats socket or prometheus-client.
"""

from dovecot_exporter.core.protocols.metrics_renderer import MetricsRenderer


class FakeMetricsRenderer(MetricsRenderer):
    """In-memory spy implementing the MetricsRenderer protocol."""

    def __init__(self, body: bytes = b"# fake metrics\n") -> None:
        self.body = body
        self.generate_calls: int = 0

    @property
    def content_type(self) -> str:
        return "text/plain"

    def generate(self) -> bytes:
        self.generate_calls += 1
        return self.body

    # -- test helpers --

    def clear(self) -> None:
        """Reset the call counter."""
        self.generate_calls = 0
