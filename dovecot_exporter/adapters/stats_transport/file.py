"""StatsTransport that replays a captured EXPORT response from disk.

Useful for checking how a given dump decodes without a running Dovecot.
The request is not sent anywhere; every scope reads the same file.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import BinaryIO

from dovecot_exporter.core.logging import logger
from dovecot_exporter.domains.stats.exceptions import TransportUnavailable


class FileConnection:
    """An open export dump."""

    def __init__(self, handle: BinaryIO, path: str) -> None:
        self._handle = handle
        self._path = path

    def send(self, request: bytes) -> None:
        logger.debug(f"Not sending {request!r}: replaying {self._path}")

    def lines(self) -> Iterator[bytes]:
        try:
            yield from self._handle
        except OSError as e:
            raise TransportUnavailable(self._path, f"read failed: {e}") from e


class FileStatsTransport:
    """Reads the response for every request from the file at ``path``."""

    def __init__(self, path: str) -> None:
        self._path = path

    @property
    def endpoint(self) -> str:
        return self._path

    @contextmanager
    def connect(self) -> Iterator[FileConnection]:
        try:
            handle = open(self._path, "rb")
        except OSError as e:
            raise TransportUnavailable(self._path, f"open failed: {e}") from e
        with handle:
            yield FileConnection(handle, self._path)
