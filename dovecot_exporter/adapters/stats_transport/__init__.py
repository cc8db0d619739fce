"""Stats transport adapters."""

from dovecot_exporter.adapters.stats_transport.fake import FakeStatsTransport
from dovecot_exporter.adapters.stats_transport.file import FileStatsTransport
from dovecot_exporter.adapters.stats_transport.unix_socket import UnixSocketStatsTransport

__all__ = ["UnixSocketStatsTransport", "FileStatsTransport", "FakeStatsTransport"]
