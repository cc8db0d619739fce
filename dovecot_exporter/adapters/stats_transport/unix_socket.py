"""Unix socket implementation of the StatsTransport protocol.

Every connect, write and read is bounded by ``timeout`` so an unresponsive
Dovecot cannot hold a scrape open indefinitely.
"""

import socket
from collections.abc import Iterator
from contextlib import contextmanager
from typing import BinaryIO, Optional

from dovecot_exporter.domains.stats.exceptions import TransportUnavailable


class UnixSocketConnection:
    """A connected stats socket."""

    def __init__(self, sock: socket.socket, path: str) -> None:
        self._sock = sock
        self._path = path
        self._reader: Optional[BinaryIO] = None

    def send(self, request: bytes) -> None:
        try:
            self._sock.sendall(request)
        except OSError as e:
            raise TransportUnavailable(self._path, f"write failed: {e}") from e

    def lines(self) -> Iterator[bytes]:
        if self._reader is None:
            self._reader = self._sock.makefile("rb")
        try:
            yield from self._reader
        except OSError as e:
            raise TransportUnavailable(self._path, f"read failed: {e}") from e

    def close(self) -> None:
        # The reader holds its own reference to the socket's file descriptor.
        if self._reader is not None:
            self._reader.close()
        self._sock.close()


class UnixSocketStatsTransport:
    """Connects to Dovecot's stats socket at ``path``."""

    def __init__(self, path: str, timeout: float = 5.0) -> None:
        self._path = path
        self._timeout = timeout

    @property
    def endpoint(self) -> str:
        return self._path

    @property
    def timeout(self) -> float:
        return self._timeout

    @contextmanager
    def connect(self) -> Iterator[UnixSocketConnection]:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        connection = UnixSocketConnection(sock, self._path)
        try:
            sock.settimeout(self._timeout)
            try:
                sock.connect(self._path)
            except OSError as e:
                raise TransportUnavailable(self._path, f"connect failed: {e}") from e
            yield connection
        finally:
            connection.close()
