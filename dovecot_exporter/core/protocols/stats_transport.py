"""StatsTransport protocol for reaching Dovecot's stats endpoint.

Separates *how* an export is fetched (Unix socket, captured file, in-memory
fake) from *what* is done with it, so ``ScopeCollector`` never touches
sockets directly.
"""

from collections.abc import Iterator
from contextlib import AbstractContextManager
from typing import Protocol, runtime_checkable


@runtime_checkable
class StatsConnection(Protocol):
    """One open request/response exchange with the stats endpoint."""

    def send(self, request: bytes) -> None:
        """Write the full request.

        Raises:
            TransportUnavailable: if the write fails or times out.
        """
        ...

    def lines(self) -> Iterator[bytes]:
        """Iterate over the raw response, one newline terminated line at a time.

        Raises:
            TransportUnavailable: if reading fails or times out.
        """
        ...


@runtime_checkable
class StatsTransport(Protocol):
    """Factory for connections to the stats endpoint."""

    @property
    def endpoint(self) -> str:
        """Human-readable address of the endpoint, used in logs and errors."""
        ...

    def connect(self) -> AbstractContextManager[StatsConnection]:
        """Open a connection that is closed when the context exits.

        Raises:
            TransportUnavailable: if the endpoint cannot be reached.
        """
        ...
