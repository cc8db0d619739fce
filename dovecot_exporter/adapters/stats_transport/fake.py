"""Fake StatsTransport for testing.

Serves canned responses per scope and records every request, so collector
tests can run without a socket.
"""

import io
from collections.abc import Iterator
from contextlib import contextmanager

from dovecot_exporter.domains.stats.exceptions import TransportUnavailable


class FakeStatsConnection:
    """In-memory connection answering from the owning transport's responses."""

    def __init__(self, transport: "FakeStatsTransport") -> None:
        self._transport = transport
        self._scope: str | None = None
        self.closed = False

    def send(self, request: bytes) -> None:
        self._transport.requests.append(request)
        scope = request.decode().rstrip("\n").split("\t", 1)[-1]
        if scope in self._transport.write_failures:
            raise TransportUnavailable(self._transport.endpoint, "write failed: broken pipe")
        self._scope = scope

    def lines(self) -> Iterator[bytes]:
        body = self._transport.responses.get(self._scope or "", b"")
        yield from io.BytesIO(body)


class FakeStatsTransport:
    """In-memory spy implementing the StatsTransport protocol.

    Usage:
        fake = FakeStatsTransport({"global": b"a b\\n1 2\\n"})
        fake.refuse_next()
        # ... collect ["user", "global"]: "user" is refused ...
        assert fake.requests == [b"EXPORT\\tglobal\\n"]
    """

    def __init__(self, responses: dict[str, bytes] | None = None) -> None:
        self.responses: dict[str, bytes] = dict(responses or {})
        self.requests: list[bytes] = []
        self.connections: list[FakeStatsConnection] = []
        self.write_failures: set[str] = set()
        self._refuse_next = 0

    @property
    def endpoint(self) -> str:
        return "fake://stats"

    @contextmanager
    def connect(self) -> Iterator[FakeStatsConnection]:
        if self._refuse_next:
            self._refuse_next -= 1
            raise TransportUnavailable(self.endpoint, "connect failed: connection refused")
        connection = FakeStatsConnection(self)
        self.connections.append(connection)
        try:
            yield connection
        finally:
            connection.closed = True

    # -- test helpers --

    def refuse_next(self, count: int = 1) -> None:
        """Make the next ``count`` connect attempts fail."""
        self._refuse_next = count

    def fail_write(self, scope: str) -> None:
        """Make sending the request for ``scope`` fail."""
        self.write_failures.add(scope)

    def clear(self) -> None:
        """Reset recorded requests and connections."""
        self.requests.clear()
        self.connections.clear()
