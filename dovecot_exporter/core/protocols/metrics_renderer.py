"""MetricsRenderer protocol for serializing collected metrics.

Keeps the HTTP listener independent of prometheus-client: the server only
needs a body and a content type for each scrape.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsRenderer(Protocol):
    """Protocol for rendering the exporter's metrics into a scrapeable format."""

    @property
    def content_type(self) -> str:
        """MIME type of the rendered body."""
        ...

    def generate(self) -> bytes:
        """Run a collection cycle and serialize the result.

        Blocks on I/O against the stats endpoint; callers on an event loop
        should run it in a worker thread.
        """
        ...
